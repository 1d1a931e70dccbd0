"""Data schemas for the pipeline.

This module exports the mind map data contract (nodes, edges, payload),
citations, and the generative service response envelope.
"""

from medmap_core.schemas.citations import Citation, CitationSource
from medmap_core.schemas.mindmap import (
    GraphEdge,
    GraphNode,
    MindMapPayload,
    RefineResult,
    clamp_importance,
)
from medmap_core.schemas.responses import (
    ContentFragment,
    OutputItem,
    ResponseEnvelope,
)

__all__ = [
    # Mind map
    "GraphEdge",
    "GraphNode",
    "MindMapPayload",
    "RefineResult",
    "clamp_importance",
    # Citations
    "Citation",
    "CitationSource",
    # Generative service envelope
    "ContentFragment",
    "OutputItem",
    "ResponseEnvelope",
]
