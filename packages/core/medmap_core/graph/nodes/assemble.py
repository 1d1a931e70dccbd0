"""Assemble node: Package verified nodes and edges into the output payload."""

from datetime import datetime, timezone
from typing import Any

from medmap_core.schemas.mindmap import GraphEdge, GraphNode, MindMapPayload


def assemble_node(state: dict[str, Any]) -> dict[str, Any]:
    """Build the ``MindMapPayload`` with a fresh generation timestamp."""
    nodes: list[GraphNode] = state.get("nodes", [])
    edges: list[GraphEdge] = state.get("edges", [])

    payload = MindMapPayload(
        nodes=nodes,
        edges=edges,
        generated_at=datetime.now(timezone.utc),
        source_summary=state.get("source_summary", ""),
    )

    return {
        **state,
        "payload": payload,
        "current_step": "assemble",
    }
