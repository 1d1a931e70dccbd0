"""Consistency node: Drop edges whose endpoints are not nodes of the graph.

Only added to the graph when ``PipelineConfig.drop_dangling_edges`` is set.
Without it, edges are passed through exactly as the model produced them.
"""

from typing import Any

from medmap_core.schemas.mindmap import GraphEdge, GraphNode
from medmap_core.utils.logging import get_logger

logger = get_logger(__name__)


def find_dangling_edges(
    nodes: list[GraphNode], edges: list[GraphEdge]
) -> list[GraphEdge]:
    """Return edges with a source or target outside the node id set."""
    node_ids = {node.id for node in nodes}
    return [
        edge
        for edge in edges
        if edge.source not in node_ids or edge.target not in node_ids
    ]


def check_consistency_node(state: dict[str, Any]) -> dict[str, Any]:
    """Remove dangling edges from the synthesized graph."""
    nodes: list[GraphNode] = state.get("nodes", [])
    edges: list[GraphEdge] = state.get("edges", [])

    dangling = find_dangling_edges(nodes, edges)
    if dangling:
        logger.warning(
            f"Dropping {len(dangling)} edges with unknown endpoints: "
            f"{[edge.id for edge in dangling]}"
        )
        edges = [edge for edge in edges if not any(edge is d for d in dangling)]

    return {
        **state,
        "edges": edges,
        "current_step": "check_consistency",
    }
