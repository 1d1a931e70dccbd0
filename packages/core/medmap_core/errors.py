"""Error taxonomy for the mind map pipeline.

Every failure an operation can report is a ``MindMapError`` subclass. The
``status_class`` label and ``status_code`` travel with the exception so the
transport layer can render it without a lookup table of its own.
"""


class MindMapError(Exception):
    """Base class for pipeline failures surfaced to callers."""

    status_class = "unknown_failure"
    status_code = 500


class InvalidRequest(MindMapError):
    """Required input to an operation is missing or malformed."""

    status_class = "invalid_request"
    status_code = 400


class MissingConfiguration(MindMapError):
    """The generative service credential is not configured."""

    status_class = "missing_configuration"
    status_code = 500


class ExtractionError(MindMapError):
    """Document bytes could not be parsed."""

    status_class = "extraction_failure"
    status_code = 422


ExtractionFailure = ExtractionError


class EmptyExtraction(MindMapError):
    """The document parsed but contained no extractable text."""

    status_class = "empty_extraction"
    status_code = 422


class UpstreamEmptyResponse(MindMapError):
    """The generative service returned no usable text."""

    status_class = "upstream_empty_response"
    status_code = 502


class ParseError(MindMapError):
    """Generative output could not be coerced into the expected JSON shape."""

    status_class = "parse_error"
    status_code = 502


class UnknownFailure(MindMapError):
    """Anything not covered by a more specific category."""

    pass
