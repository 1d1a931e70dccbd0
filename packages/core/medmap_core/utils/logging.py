"""Logging utilities."""

import logging
import os
import sys
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any

from medmap_core.errors import MindMapError

_LOG_LEVEL = os.environ.get("MEDMAP_LOG_LEVEL", "INFO").upper()
_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

Operation = Callable[..., Awaitable[Any]]


def get_logger(name: str) -> logging.Logger:
    """Get a logger writing to stdout at the ``MEDMAP_LOG_LEVEL`` level."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(getattr(logging, _LOG_LEVEL, logging.INFO))
    return logger


def log_exceptions(logger: logging.Logger) -> Callable[[Operation], Operation]:
    """Log failures of an async pipeline operation, then re-raise them.

    Caller errors (``MindMapError`` with a 4xx status) are logged as a single
    warning tagged with their status class. Server-side failures and
    unexpected exceptions are logged with their traceback.

    Args:
        logger: Logger of the module defining the operation

    Returns:
        Decorator for async callables
    """

    def decorator(func: Operation) -> Operation:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)
            except MindMapError as e:
                message = f"{func.__qualname__} failed [{e.status_class}]: {e}"
                if e.status_code < 500:
                    logger.warning(message)
                else:
                    logger.exception(message)
                raise
            except Exception as e:
                logger.exception(f"{func.__qualname__} failed [unexpected]: {e}")
                raise

        return wrapper

    return decorator
