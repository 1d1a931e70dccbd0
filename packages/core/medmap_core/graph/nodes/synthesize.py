"""Synthesize node: Turn extracted notes into a mind map graph.

One generation request is made per document. The model's answer goes
through envelope text extraction, tolerant JSON parsing, and normalization
into ``GraphNode``/``GraphEdge`` models. Citations and ``verified`` are
always reset here; the verify node is the only place that sets them.

Edge endpoints are not checked against node ids and ``parentIds`` are not
cross-checked against edges. See the ``check_consistency`` node for the
optional clean-up pass.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from medmap_core.config import PipelineConfig
from medmap_core.errors import InvalidRequest, ParseError
from medmap_core.model_adapters.base import BaseModelAdapter
from medmap_core.schemas.mindmap import GraphEdge, GraphNode, clamp_importance
from medmap_core.utils.json_parsing import parse_json_object
from medmap_core.utils.logging import get_logger
from medmap_core.utils.responses import require_response_text

logger = get_logger(__name__)

SYSTEM_PROMPT = """You transform sets of medical study notes into structured mind map graphs.
Return STRICT JSON that matches this schema:
{
  "sourceSummary": string,
  "nodes": [
    {
      "id": string,
      "title": string,
      "summary": string,
      "parentIds": [string],
      "importance": 1 | 2 | 3 | 4 | 5,
      "tags": [string]
    }
  ],
  "edges": [
    {
      "source": string,
      "target": string,
      "label": string (optional)
    }
  ]
}
Rules:
- Use concise but clinically accurate language.
- Parent-child relationships should reflect conceptual hierarchy or causality.
- Include at least one root node (with empty parentIds).
- Ensure IDs are unique slugs.
- Use parentIds to describe connections; you may also add optional edge labels for clarity."""

TASK_PROMPT = """SOURCE NOTES:
\"\"\"
{text}
\"\"\"

1. Produce a clinically accurate mind map covering the major concepts, pathophysiology, diagnostics, and management strategies present in these notes.
2. Summaries should be short (<= {max_summary_words} words) but precise.
3. Use importance 5 for critical core ideas and 1 for peripheral details.
4. Include meaningful tags such as {tag_examples}."""

MAX_SUMMARY_WORDS = 35
SUGGESTED_TAGS = ("symptom", "diagnostic", "treatment", "risk-factor")


class _RawNode(BaseModel):
    model_config = ConfigDict(
        extra="ignore", populate_by_name=True, coerce_numbers_to_str=True
    )

    id: str
    title: str
    summary: str = ""
    parent_ids: list[str] | None = Field(None, alias="parentIds")
    importance: float | None = None
    tags: list[str] | None = None


class _RawEdge(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    source: str
    target: str
    label: str | None = None


class _RawMindMap(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    source_summary: str | None = Field(None, alias="sourceSummary")
    nodes: list[_RawNode]
    edges: list[_RawEdge] | None = None


@dataclass
class SynthesizedMindMap:
    """Normalized synthesis output, before verification."""

    nodes: list[GraphNode] = field(default_factory=list)
    edges: list[GraphEdge] = field(default_factory=list)
    source_summary: str = ""


def build_synthesis_prompt(text: str) -> str:
    """Combine the fixed system instructions with the notes to map."""
    task = TASK_PROMPT.format(
        text=text,
        max_summary_words=MAX_SUMMARY_WORDS,
        tag_examples=", ".join(f'"{tag}"' for tag in SUGGESTED_TAGS),
    )
    return f"{SYSTEM_PROMPT}\n\n{task}"


def derive_edge_id(index: int, source: str, target: str, label: str | None) -> str:
    """Edge id: ``source-target-label`` when labelled, else ``edge-<index>``."""
    if label:
        return f"{source}-{target}-{label}"
    return f"edge-{index}"


def normalize_mind_map(parsed: dict[str, Any]) -> SynthesizedMindMap:
    """Convert a parsed model answer into domain nodes and edges.

    Args:
        parsed: Decoded JSON object from the model

    Returns:
        Normalized mind map with unverified nodes

    Raises:
        ParseError: If the object does not have the mind map shape
    """
    try:
        raw = _RawMindMap.model_validate(parsed)
    except ValidationError as e:
        raise ParseError(f"AI response does not match the mind map schema: {e}") from e

    nodes = [
        GraphNode(
            id=node.id,
            title=node.title,
            summary=node.summary,
            parent_ids=node.parent_ids or [],
            importance=clamp_importance(node.importance),
            tags=node.tags or [],
            citations=[],
            verified=False,
        )
        for node in raw.nodes
    ]
    edges = [
        GraphEdge(
            id=derive_edge_id(index, edge.source, edge.target, edge.label),
            source=edge.source,
            target=edge.target,
            label=edge.label,
        )
        for index, edge in enumerate(raw.edges or [])
    ]
    return SynthesizedMindMap(
        nodes=nodes,
        edges=edges,
        source_summary=raw.source_summary or "",
    )


async def synthesize_mind_map(
    adapter: BaseModelAdapter,
    text: str,
    config: PipelineConfig | None = None,
) -> SynthesizedMindMap:
    """Ask the model for a mind map of ``text`` and normalize its answer.

    Raises:
        InvalidRequest: If ``text`` is empty
        UpstreamEmptyResponse: If the model returned no text
        ParseError: If the answer is not a mind map JSON object
    """
    if not text.strip():
        raise InvalidRequest("Cannot synthesize a mind map from empty text")

    resolved_config = config or PipelineConfig()
    envelope = await adapter.create_response(
        build_synthesis_prompt(text),
        model=resolved_config.synthesis_model,
        temperature=resolved_config.synthesis_temperature,
        reasoning_effort=resolved_config.synthesis_reasoning_effort,
        metadata={
            "application": resolved_config.application_name,
            "feature": "mind-map-generation",
        },
    )
    mind_map = normalize_mind_map(parse_json_object(require_response_text(envelope)))

    if mind_map.nodes and not any(node.is_root for node in mind_map.nodes):
        logger.warning("Synthesized mind map has no root node")
    logger.info(
        f"Synthesized {len(mind_map.nodes)} nodes and {len(mind_map.edges)} edges"
    )
    return mind_map


def create_synthesize_node(
    adapter: BaseModelAdapter,
    config: PipelineConfig | None = None,
) -> Callable[[dict[str, Any]], Any]:
    """Create the synthesis node.

    Args:
        adapter: Model adapter for the generation call
        config: Optional pipeline configuration

    Returns:
        Node function
    """

    async def synthesize_node(state: dict[str, Any]) -> dict[str, Any]:
        """Synthesize nodes and edges from the extracted text."""
        mind_map = await synthesize_mind_map(adapter, state.get("text", ""), config)
        return {
            **state,
            "nodes": mind_map.nodes,
            "edges": mind_map.edges,
            "source_summary": mind_map.source_summary,
            "current_step": "synthesize",
        }

    return synthesize_node
