"""Refine a single node's summary and tags from its citations.

The model's answer goes through the same envelope extraction and tolerant
JSON parsing as mind map synthesis. Fields the model leaves out keep the
node's current value. The node itself is not modified; callers mark it
with ``GraphNode.apply_refinement``.
"""

from typing import Any

from medmap_core.config import PipelineConfig
from medmap_core.model_adapters.base import BaseModelAdapter
from medmap_core.schemas.citations import Citation
from medmap_core.schemas.mindmap import GraphNode, RefineResult
from medmap_core.utils.json_parsing import parse_json_object
from medmap_core.utils.logging import get_logger
from medmap_core.utils.responses import require_response_text

logger = get_logger(__name__)

NO_CITATIONS = "No citations available."

REFINE_PROMPT = """You are an expert medical editor. Update the provided mind map node summary so it is factually aligned with the citations. Keep the summary <= {max_summary_words} words, clinically precise, and suitable for a study mind map.

Current Node:
Title: {title}
Summary: {summary}

Citations:
{citations}

Respond with JSON:
{{
  "summary": string,
  "tags": string[]
}}"""

MAX_SUMMARY_WORDS = 35


def format_citations(citations: list[Citation]) -> str:
    """Render citations as a numbered list, or the no-citations marker."""
    if not citations:
        return NO_CITATIONS
    return "\n\n".join(
        f"{index}. {citation.title}\n"
        f"Source: {citation.source}\n"
        f"URL: {citation.url}\n"
        f"Snippet: {citation.snippet or 'N/A'}"
        for index, citation in enumerate(citations, start=1)
    )


def build_refine_prompt(node: GraphNode) -> str:
    return REFINE_PROMPT.format(
        max_summary_words=MAX_SUMMARY_WORDS,
        title=node.title,
        summary=node.summary,
        citations=format_citations(node.citations),
    )


def _merge_revision(node: GraphNode, parsed: dict[str, Any]) -> RefineResult:
    summary = parsed.get("summary")
    tags = parsed.get("tags")
    if not isinstance(summary, str):
        summary = node.summary
    if isinstance(tags, list):
        tags = [tag for tag in tags if isinstance(tag, str)]
    else:
        tags = node.tags
    return RefineResult(summary=summary, tags=tags)


async def refine_node(
    adapter: BaseModelAdapter,
    node: GraphNode,
    config: PipelineConfig | None = None,
) -> RefineResult:
    """Ask the model to align a node's summary and tags with its citations.

    Args:
        adapter: Model adapter for the revision call
        node: Node to revise, with its citations
        config: Optional pipeline configuration

    Returns:
        Revised summary and tags

    Raises:
        UpstreamEmptyResponse: If the model returned no text
        ParseError: If the answer is not a JSON object
    """
    resolved_config = config or PipelineConfig()
    logger.info(f"Refining node {node.id!r} with {len(node.citations)} citations")

    envelope = await adapter.create_response(
        build_refine_prompt(node),
        model=resolved_config.refine_model,
        temperature=resolved_config.refine_temperature,
        metadata={
            "application": resolved_config.application_name,
            "feature": "node-autocorrect",
        },
    )
    parsed = parse_json_object(require_response_text(envelope))
    return _merge_revision(node, parsed)
