"""Extract node: Turn uploaded PDF bytes into plain text."""

from typing import Any

from medmap_core.errors import EmptyExtraction, InvalidRequest
from medmap_core.utils.logging import get_logger
from medmap_core.utils.pdf import extract_text

logger = get_logger(__name__)


async def extract_text_node(state: dict[str, Any]) -> dict[str, Any]:
    """Extract the document text, failing before any model call if there is none.

    Args:
        state: Pipeline state with pdf_data

    Returns:
        Updated state with text

    Raises:
        InvalidRequest: If no document bytes were provided
        ExtractionError: If the bytes are not a parsable PDF
        EmptyExtraction: If the PDF contains no extractable text
    """
    pdf_data: bytes | None = state.get("pdf_data")
    if not pdf_data:
        raise InvalidRequest("A PDF file is required.")

    logger.info(f"Extracting text from PDF ({len(pdf_data)} bytes)")
    text = await extract_text(pdf_data)
    if not text:
        raise EmptyExtraction("Unable to extract text from PDF.")

    return {
        **state,
        "text": text,
        "current_step": "extract_text",
    }
