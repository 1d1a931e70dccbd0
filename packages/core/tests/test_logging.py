"""Tests for operation failure logging."""

import logging

import pytest

from medmap_core.errors import InvalidRequest, ParseError
from medmap_core.utils.logging import get_logger, log_exceptions

logger = get_logger("medmap_core.tests.logging")


@log_exceptions(logger)
async def failing_operation(error: Exception) -> None:
    raise error


class TestLogExceptions:
    """Tests for the async failure logging decorator."""

    @pytest.mark.asyncio
    async def test_caller_error_logged_as_warning(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test that a 4xx error is a warning tagged with its status class."""
        with caplog.at_level(logging.WARNING, logger=logger.name):
            with pytest.raises(InvalidRequest):
                await failing_operation(InvalidRequest("Node payload missing."))

        [record] = caplog.records
        assert record.levelno == logging.WARNING
        assert "[invalid_request]" in record.getMessage()
        assert record.exc_info is None

    @pytest.mark.asyncio
    async def test_upstream_error_logged_with_traceback(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test that a 5xx error is logged with its traceback."""
        with caplog.at_level(logging.WARNING, logger=logger.name):
            with pytest.raises(ParseError):
                await failing_operation(ParseError("bad json"))

        [record] = caplog.records
        assert record.levelno == logging.ERROR
        assert "[parse_error]" in record.getMessage()
        assert record.exc_info is not None

    @pytest.mark.asyncio
    async def test_unexpected_error_reraised_unchanged(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test that non-pipeline exceptions propagate as they are."""
        with caplog.at_level(logging.WARNING, logger=logger.name):
            with pytest.raises(RuntimeError, match="boom"):
                await failing_operation(RuntimeError("boom"))

        assert "[unexpected]" in caplog.records[0].getMessage()
