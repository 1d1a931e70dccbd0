"""LangGraph pipeline for mind map generation."""

from medmap_core.graph.build_mindmap_graph import MindMapState, build_mindmap_graph

__all__ = [
    "MindMapState",
    "build_mindmap_graph",
]
