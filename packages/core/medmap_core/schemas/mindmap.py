"""Mind map graph schemas.

These models are the data contract exchanged with external collaborators
(layout, editing, export). On the wire every multi-word field is camelCase
(``parentIds``, ``autoCorrected``, ``generatedAt``, ``sourceSummary``);
snake_case names are accepted on input as well.
"""

import math
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from medmap_core.schemas.citations import Citation

MIN_IMPORTANCE = 1
MAX_IMPORTANCE = 5
DEFAULT_IMPORTANCE = 3

_WIRE_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def clamp_importance(value: float | None) -> int:
    """Clamp an importance rank into [1, 5], defaulting to 3 when absent.

    Infinities clamp to the nearest bound; NaN counts as absent.
    """
    if value is None:
        return DEFAULT_IMPORTANCE
    if isinstance(value, float) and not math.isfinite(value):
        if math.isnan(value):
            return DEFAULT_IMPORTANCE
        return MAX_IMPORTANCE if value > 0 else MIN_IMPORTANCE
    return min(MAX_IMPORTANCE, max(MIN_IMPORTANCE, int(value)))


class RefineResult(BaseModel):
    """Revised summary and tags for a single node."""

    summary: str
    tags: list[str] = Field(default_factory=list)


class GraphNode(BaseModel):
    """One concept in the mind map."""

    model_config = _WIRE_CONFIG

    id: str = Field(..., description="Node id, unique within a graph")
    title: str = Field(..., description="Concept title")
    summary: str = Field("", description="Short clinical summary")
    parent_ids: list[str] = Field(
        default_factory=list, description="Parent node ids, empty for a root"
    )
    importance: int = Field(DEFAULT_IMPORTANCE, description="Rank from 1 to 5")
    tags: list[str] = Field(default_factory=list, description="Concept tags")
    citations: list[Citation] = Field(
        default_factory=list, description="Supporting references"
    )
    verified: bool = Field(False, description="True when citations is non-empty")
    auto_corrected: bool = Field(
        False, description="True once the summary was refined from citations"
    )

    @field_validator("importance", mode="before")
    @classmethod
    def _clamp_importance(cls, value: Any) -> int:
        return clamp_importance(value)

    @property
    def is_root(self) -> bool:
        return not self.parent_ids

    def with_citations(self, citations: list[Citation]) -> "GraphNode":
        """Return a copy carrying ``citations`` with ``verified`` derived from them."""
        return self.model_copy(
            update={"citations": list(citations), "verified": bool(citations)}
        )

    def apply_refinement(self, result: RefineResult) -> "GraphNode":
        """Return a copy with the refined summary and tags, marked auto-corrected."""
        return self.model_copy(
            update={
                "summary": result.summary,
                "tags": list(result.tags),
                "auto_corrected": True,
            }
        )


class GraphEdge(BaseModel):
    """A labelled or unlabelled link between two nodes."""

    model_config = _WIRE_CONFIG

    id: str
    source: str
    target: str
    label: str | None = None


class MindMapPayload(BaseModel):
    """The complete result of a Generate operation."""

    model_config = _WIRE_CONFIG

    nodes: list[GraphNode] = Field(default_factory=list)
    edges: list[GraphEdge] = Field(default_factory=list)
    generated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the payload was assembled (UTC)",
    )
    source_summary: str = Field("", description="Summary of the source document")
