"""Tolerant JSON parsing for model output.

Models often wrap the requested JSON object in prose or markdown fences.
Parsing happens in two stages: the whole string strictly, then the span
from the first ``{`` to the last ``}``. Anything else is a ``ParseError``;
there is no best-effort partial result.
"""

import json
from typing import Any

from medmap_core.errors import ParseError
from medmap_core.utils.logging import get_logger

logger = get_logger(__name__)


def parse_json_leniently(content: str) -> Any:
    """Parse model output as JSON, recovering an object embedded in text.

    Args:
        content: Raw text returned by the model

    Returns:
        The decoded JSON value

    Raises:
        ParseError: If neither the whole string nor the brace span decodes
    """
    try:
        return json.loads(content)
    except json.JSONDecodeError:
        pass

    start = content.find("{")
    end = content.rfind("}")
    if start == -1 or end <= start:
        raise ParseError("Failed to parse JSON from AI response: no JSON object found")

    try:
        parsed = json.loads(content[start : end + 1])
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse JSON response: {e}. Content: {content[:200]}...")
        raise ParseError(f"Failed to parse JSON from AI response: {e}") from e

    logger.debug("Recovered JSON object from surrounding text")
    return parsed


def parse_json_object(content: str) -> dict[str, Any]:
    """Parse model output that must decode to a JSON object."""
    parsed = parse_json_leniently(content)
    if not isinstance(parsed, dict):
        raise ParseError(
            f"Expected a JSON object from AI response, got {type(parsed).__name__}"
        )
    return parsed
