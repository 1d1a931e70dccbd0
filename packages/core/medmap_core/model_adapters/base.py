"""Base model adapter interface."""

from abc import ABC, abstractmethod

from medmap_core.schemas.responses import ResponseEnvelope


class BaseModelAdapter(ABC):
    """Abstract base class for generative text service adapters."""

    @abstractmethod
    async def create_response(
        self,
        prompt: str,
        *,
        model: str,
        temperature: float | None = None,
        reasoning_effort: str | None = None,
        metadata: dict[str, str] | None = None,
    ) -> ResponseEnvelope:
        """Send a single free-text prompt and return the raw response envelope.

        Args:
            prompt: Complete prompt text
            model: Model identifier
            temperature: Optional sampling temperature
            reasoning_effort: Optional reasoning effort selector
            metadata: Optional request tags for the provider's dashboards

        Returns:
            Response envelope; text extraction is left to the caller
        """
        pass
