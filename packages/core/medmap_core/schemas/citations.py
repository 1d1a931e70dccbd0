"""Citation schemas for externally sourced node evidence."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class CitationSource(str, Enum):
    """Reference sources a citation can originate from."""

    MEDLINEPLUS = "MedlinePlus"
    WIKIPEDIA = "Wikipedia"


class Citation(BaseModel):
    """A supporting reference attached to a mind map node.

    Citations are value objects. Two citations are the same reference when
    their ``url`` matches, regardless of title or source.
    """

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., description="Title of the referenced page")
    url: str = Field(..., description="Outbound link, the citation identity key")
    snippet: str | None = Field(None, description="Descriptive excerpt")
    source: str = Field(..., description="Label of the originating source")
