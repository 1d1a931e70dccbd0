"""Generative service response envelope.

The service answers in one of two shapes, sometimes both at once: a single
flattened ``output_text`` string, or a list of output items whose ``content``
fragments each carry a ``text`` field. Unknown keys are ignored so SDK dumps
validate directly.
"""

from pydantic import BaseModel, ConfigDict, Field


class ContentFragment(BaseModel):
    """One content fragment of an output item."""

    model_config = ConfigDict(extra="ignore")

    type: str | None = None
    text: str | None = None


class OutputItem(BaseModel):
    """One output item with its ordered content fragments."""

    model_config = ConfigDict(extra="ignore")

    type: str | None = None
    content: list[ContentFragment] | None = None


class ResponseEnvelope(BaseModel):
    """Text-bearing parts of a generative service response."""

    model_config = ConfigDict(extra="ignore")

    output_text: str | None = None
    output: list[OutputItem] = Field(default_factory=list)
