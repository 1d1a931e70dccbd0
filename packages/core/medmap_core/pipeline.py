"""Entry points for the two supported operations.

``MindMapPipeline.generate`` turns PDF bytes into a verified
``MindMapPayload``; ``MindMapPipeline.refine`` revises one node from its
citations. Both are stateless across calls: each Generate run opens its own
HTTP client for the reference sources and closes it before returning.

Failures are always ``MindMapError`` subclasses. Anything unexpected is
wrapped in ``UnknownFailure`` so callers only have one hierarchy to handle.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import httpx
from pydantic import ValidationError

from medmap_core.config import PipelineConfig
from medmap_core.errors import (
    InvalidRequest,
    MindMapError,
    MissingConfiguration,
    UnknownFailure,
)
from medmap_core.graph.build_mindmap_graph import build_mindmap_graph
from medmap_core.model_adapters.base import BaseModelAdapter
from medmap_core.references.verifier import ReferenceVerifier
from medmap_core.refiner import refine_node
from medmap_core.schemas.mindmap import GraphNode, MindMapPayload, RefineResult
from medmap_core.utils.logging import get_logger, log_exceptions

logger = get_logger(__name__)


class MindMapPipeline:
    """Orchestrates extraction, synthesis, verification and refinement."""

    def __init__(
        self,
        adapter: BaseModelAdapter | None,
        config: PipelineConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the pipeline.

        Args:
            adapter: Generative service adapter, None when no credential is set
            config: Optional pipeline configuration
            transport: Optional HTTP transport for the reference sources
        """
        self.adapter = adapter
        self.config = config or PipelineConfig()
        self.transport = transport

    def _require_adapter(self) -> BaseModelAdapter:
        if self.adapter is None:
            raise MissingConfiguration("Missing OPENAI_API_KEY")
        return self.adapter

    @asynccontextmanager
    async def _http_client(self) -> AsyncIterator[httpx.AsyncClient]:
        async with httpx.AsyncClient(
            transport=self.transport,
            headers={"User-Agent": self.config.user_agent},
            follow_redirects=True,
        ) as client:
            yield client

    @log_exceptions(logger)
    async def generate(self, pdf_data: bytes | None) -> MindMapPayload:
        """Build a verified mind map from a PDF.

        Args:
            pdf_data: Raw PDF bytes

        Returns:
            Mind map payload with citations attached to each node

        Raises:
            InvalidRequest: If no bytes were given
            MissingConfiguration: If no model adapter is configured
            ExtractionError: If the PDF cannot be parsed
            EmptyExtraction: If the PDF has no text
            UpstreamEmptyResponse: If the model returned nothing
            ParseError: If the model answer is not a mind map
            UnknownFailure: For anything else
        """
        if not pdf_data:
            raise InvalidRequest("A PDF file is required.")
        adapter = self._require_adapter()

        try:
            async with self._http_client() as client:
                verifier = ReferenceVerifier(client, self.config)
                graph = build_mindmap_graph(adapter, verifier, self.config)
                result = await graph.ainvoke({"pdf_data": pdf_data})
        except MindMapError:
            raise
        except Exception as e:
            raise UnknownFailure(str(e) or "Unknown error processing PDF.") from e

        payload: MindMapPayload = result["payload"]
        logger.info(
            f"Generated mind map with {len(payload.nodes)} nodes "
            f"({sum(1 for node in payload.nodes if node.verified)} verified)"
        )
        return payload

    @log_exceptions(logger)
    async def refine(self, request: Any) -> RefineResult:
        """Revise one node's summary and tags from its citations.

        Args:
            request: Request body of the form ``{"node": {...}}``

        Returns:
            Revised summary and tags

        Raises:
            MissingConfiguration: If no model adapter is configured
            InvalidRequest: If the node payload is missing or malformed
            UpstreamEmptyResponse: If the model returned nothing
            ParseError: If the model answer is not a JSON object
            UnknownFailure: For anything else
        """
        adapter = self._require_adapter()
        node = parse_node_request(request)

        try:
            return await refine_node(adapter, node, self.config)
        except MindMapError:
            raise
        except Exception as e:
            raise UnknownFailure(str(e) or "Failed to auto-correct node.") from e


def parse_node_request(request: Any) -> GraphNode:
    """Validate a refine request body and return its node.

    Raises:
        InvalidRequest: If the body has no well-formed ``node``
    """
    if not isinstance(request, dict) or not request.get("node"):
        raise InvalidRequest("Node payload missing.")
    try:
        return GraphNode.model_validate(request["node"])
    except ValidationError as e:
        raise InvalidRequest(f"Node payload is malformed: {e}") from e
