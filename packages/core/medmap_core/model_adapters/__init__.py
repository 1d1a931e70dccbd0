"""Model adapters for generative text services.

Supported providers:
- OpenAI: Responses API models (gpt-4o-mini by default)
"""

from medmap_core.model_adapters.base import BaseModelAdapter
from medmap_core.model_adapters.openai import OpenAIAdapter

__all__ = ["BaseModelAdapter", "OpenAIAdapter"]
