"""medmap-core: Verified mind maps from medical study notes.

This package turns a PDF of study notes into a concept graph whose nodes
carry citations from medical reference sources, and revises single nodes so
their summaries agree with those citations.

    >>> from medmap_core import MindMapPipeline, OpenAIAdapter
    >>> pipeline = MindMapPipeline(OpenAIAdapter(api_key))
    >>> payload = await pipeline.generate(pdf_bytes)
    >>> revision = await pipeline.refine({"node": payload.nodes[0].model_dump()})

For the individual stages, see the `graph`, `references` and `refiner`
modules.
"""

from medmap_core.config import PipelineConfig
from medmap_core.errors import (
    EmptyExtraction,
    ExtractionError,
    InvalidRequest,
    MindMapError,
    MissingConfiguration,
    ParseError,
    UnknownFailure,
    UpstreamEmptyResponse,
)
from medmap_core.model_adapters import BaseModelAdapter, OpenAIAdapter
from medmap_core.pipeline import MindMapPipeline
from medmap_core.schemas import (
    Citation,
    CitationSource,
    GraphEdge,
    GraphNode,
    MindMapPayload,
    RefineResult,
)

__version__ = "0.1.0"

__all__ = [
    # Pipeline
    "MindMapPipeline",
    "PipelineConfig",
    # Adapters
    "BaseModelAdapter",
    "OpenAIAdapter",
    # Schemas
    "Citation",
    "CitationSource",
    "GraphEdge",
    "GraphNode",
    "MindMapPayload",
    "RefineResult",
    # Errors
    "EmptyExtraction",
    "ExtractionError",
    "InvalidRequest",
    "MindMapError",
    "MissingConfiguration",
    "ParseError",
    "UnknownFailure",
    "UpstreamEmptyResponse",
]
