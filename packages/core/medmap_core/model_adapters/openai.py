"""OpenAI model adapter."""

from typing import Any

from medmap_core.model_adapters.base import BaseModelAdapter
from medmap_core.schemas.responses import ResponseEnvelope
from medmap_core.utils.logging import get_logger

logger = get_logger(__name__)


def to_envelope(response: Any) -> ResponseEnvelope:
    """Convert an SDK ``Response`` object into a ``ResponseEnvelope``.

    ``output_text`` is a computed property on the SDK object, so it does not
    appear in ``model_dump`` and has to be read separately.
    """
    dumped = response.model_dump() if hasattr(response, "model_dump") else {}
    return ResponseEnvelope.model_validate(
        {
            "output_text": getattr(response, "output_text", None),
            "output": dumped.get("output") or [],
        }
    )


class OpenAIAdapter(BaseModelAdapter):
    """Adapter for the OpenAI Responses API."""

    def __init__(
        self,
        api_key: str,
        base_url: str | None = None,
        max_retries: int = 0,
    ):
        """Initialize the OpenAI adapter.

        Args:
            api_key: OpenAI API key
            base_url: Optional custom base URL
            max_retries: SDK-level retries for transient failures
        """
        self.api_key = api_key
        self.base_url = base_url
        self.max_retries = max_retries

        self._client: Any = None
        logger.info(f"Initialized OpenAI adapter (base_url={base_url or 'default'})")

    @property
    def client(self) -> Any:
        """Lazy-load the OpenAI client."""
        if self._client is None:
            from openai import AsyncOpenAI

            self._client = AsyncOpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                max_retries=self.max_retries,
            )
        return self._client

    async def create_response(
        self,
        prompt: str,
        *,
        model: str,
        temperature: float | None = None,
        reasoning_effort: str | None = None,
        metadata: dict[str, str] | None = None,
    ) -> ResponseEnvelope:
        """Call ``responses.create`` with a single text input."""
        request: dict[str, Any] = {"model": model, "input": prompt}
        if temperature is not None:
            request["temperature"] = temperature
        if reasoning_effort:
            request["reasoning"] = {"effort": reasoning_effort}
        if metadata:
            request["metadata"] = metadata

        logger.debug(f"Requesting response from {model} ({len(prompt)} prompt chars)")
        response = await self.client.responses.create(**request)
        envelope = to_envelope(response)
        logger.debug(f"Received response from {model} ({len(envelope.output)} items)")
        return envelope
