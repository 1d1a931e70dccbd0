"""Text extraction from generative service responses."""

from medmap_core.errors import UpstreamEmptyResponse
from medmap_core.schemas.responses import ResponseEnvelope


def collect_response_text(envelope: ResponseEnvelope) -> str:
    """Pull the model's text out of a response envelope.

    Priority order:
        1. ``output_text`` verbatim when present and non-empty
        2. every fragment ``text`` across every output item, in order,
           joined by newlines
        3. the empty string

    Args:
        envelope: Response envelope from a model adapter

    Returns:
        Extracted text, possibly empty
    """
    if envelope.output_text:
        return envelope.output_text

    segments = [
        fragment.text
        for item in envelope.output
        for fragment in item.content or []
        if isinstance(fragment.text, str)
    ]
    if segments:
        return "\n".join(segments)
    return ""


def require_response_text(envelope: ResponseEnvelope) -> str:
    """Like ``collect_response_text`` but empty text is an error.

    Raises:
        UpstreamEmptyResponse: If the envelope carries no text
    """
    text = collect_response_text(envelope)
    if not text:
        raise UpstreamEmptyResponse("Empty AI response")
    return text
