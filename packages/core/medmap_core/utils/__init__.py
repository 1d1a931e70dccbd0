"""Utility functions."""

from medmap_core.utils.json_parsing import parse_json_leniently, parse_json_object
from medmap_core.utils.logging import get_logger, log_exceptions
from medmap_core.utils.pdf import extract_pdf_text, extract_text, validate_pdf
from medmap_core.utils.responses import collect_response_text, require_response_text

__all__ = [
    "collect_response_text",
    "extract_pdf_text",
    "extract_text",
    "get_logger",
    "log_exceptions",
    "parse_json_leniently",
    "parse_json_object",
    "require_response_text",
    "validate_pdf",
]
