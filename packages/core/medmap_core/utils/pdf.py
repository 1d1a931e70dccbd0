"""PDF validation and text extraction."""

import asyncio
from io import BytesIO
from typing import Any

import pdfplumber

from medmap_core.errors import ExtractionError
from medmap_core.utils.logging import get_logger

logger = get_logger(__name__)

# PDF magic bytes
PDF_MAGIC = b"%PDF"


def validate_pdf(data: bytes) -> bool:
    """Check that data looks like a PDF file before handing it to the parser.

    Args:
        data: Raw file bytes

    Returns:
        True if the header is valid

    Raises:
        ExtractionError: If the data cannot be a PDF
    """
    if not data:
        raise ExtractionError("Empty file data")

    if len(data) < 4:
        raise ExtractionError("File too small to be a valid PDF")

    if not data[:4].startswith(PDF_MAGIC):
        raise ExtractionError(
            f"Invalid PDF: file does not start with PDF magic bytes. Got: {data[:4]!r}"
        )

    # Truncated uploads usually lose the trailer; pdfminer can still recover them
    if b"%%EOF" not in data[-1024:]:
        logger.warning("PDF does not contain %%EOF marker near end of file")

    return True


def _page_text(page: Any) -> str:
    """Join a page's text items with single spaces."""
    words = page.extract_words()
    return " ".join(word["text"] for word in words if word.get("text"))


def extract_pdf_text(data: bytes) -> str:
    """Extract the text of every page, one line per page.

    The parser handle is released when the last page has been read, even if
    a page fails halfway through.

    Args:
        data: Raw PDF bytes

    Returns:
        Trimmed document text; empty when the PDF has no extractable text

    Raises:
        ExtractionError: If the bytes cannot be parsed as a PDF
    """
    validate_pdf(data)

    try:
        with pdfplumber.open(BytesIO(data)) as pdf:
            page_texts = [_page_text(page) for page in pdf.pages]
    except Exception as e:
        raise ExtractionError(f"Unable to parse PDF: {e}") from e

    text = "\n".join(page_texts).strip()
    logger.info(f"Extracted {len(text)} characters from {len(page_texts)} pages")
    return text


async def extract_text(data: bytes) -> str:
    """Extract PDF text without blocking the event loop."""
    return await asyncio.to_thread(extract_pdf_text, data)
