"""Build the mind map generation graph.

Pipeline Flow:
    extract_text -> synthesize -> verify_nodes -> [check_consistency] -> assemble

Every stage raises on failure, so a failed run never yields a partial
payload. ``check_consistency`` is only wired in when
``PipelineConfig.drop_dangling_edges`` is set.
"""

from typing import TypedDict

from langgraph.graph import END, StateGraph

from medmap_core.config import PipelineConfig
from medmap_core.model_adapters.base import BaseModelAdapter
from medmap_core.references.verifier import ReferenceVerifier
from medmap_core.schemas.mindmap import GraphEdge, GraphNode, MindMapPayload
from medmap_core.utils.logging import get_logger

logger = get_logger(__name__)


class MindMapState(TypedDict, total=False):
    """State passed through the generation pipeline."""

    # Input
    pdf_data: bytes

    # Processing state
    text: str
    nodes: list[GraphNode]
    edges: list[GraphEdge]
    source_summary: str

    # Output
    payload: MindMapPayload

    # Metadata
    current_step: str


def build_mindmap_graph(
    adapter: BaseModelAdapter,
    verifier: ReferenceVerifier,
    config: PipelineConfig | None = None,
):
    """Build the generation pipeline graph.

    Args:
        adapter: Model adapter for the synthesis call
        verifier: Reference verifier bound to the request's HTTP client
        config: Optional pipeline configuration

    Returns:
        Compiled graph; invoke with ``{"pdf_data": bytes}``
    """
    from medmap_core.graph.nodes import (
        assemble,
        check_consistency,
        extract_text,
        synthesize,
        verify_nodes,
    )

    resolved_config = config or PipelineConfig()
    logger.debug(
        f"Building mind map graph (verify_concurrency={resolved_config.verify_concurrency}, "
        f"drop_dangling_edges={resolved_config.drop_dangling_edges})"
    )

    graph = StateGraph(MindMapState)

    graph.add_node("extract_text", extract_text.extract_text_node)
    graph.add_node(
        "synthesize", synthesize.create_synthesize_node(adapter, resolved_config)
    )
    graph.add_node(
        "verify_nodes",
        verify_nodes.create_verify_nodes_node(verifier, resolved_config),
    )
    graph.add_node("assemble", assemble.assemble_node)

    graph.set_entry_point("extract_text")
    graph.add_edge("extract_text", "synthesize")
    graph.add_edge("synthesize", "verify_nodes")

    if resolved_config.drop_dangling_edges:
        graph.add_node("check_consistency", check_consistency.check_consistency_node)
        graph.add_edge("verify_nodes", "check_consistency")
        graph.add_edge("check_consistency", "assemble")
    else:
        graph.add_edge("verify_nodes", "assemble")

    graph.add_edge("assemble", END)

    return graph.compile()
