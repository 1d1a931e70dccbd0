"""Verify node: Attach reference citations to every synthesized node."""

import asyncio
from collections.abc import Callable
from typing import Any

from medmap_core.config import PipelineConfig
from medmap_core.references.verifier import ReferenceVerifier, dedupe_citations
from medmap_core.schemas.mindmap import GraphNode
from medmap_core.utils.logging import get_logger

logger = get_logger(__name__)


async def verify_node(verifier: ReferenceVerifier, node: GraphNode) -> GraphNode:
    """Look up citations for one node and return its verified copy."""
    citations = dedupe_citations(await verifier.verify(node.title))
    logger.debug(f"Node {node.id!r}: {len(citations)} citations")
    return node.with_citations(citations)


async def verify_all(
    verifier: ReferenceVerifier,
    nodes: list[GraphNode],
    concurrency: int = 1,
) -> list[GraphNode]:
    """Verify nodes, returning them in their original order.

    With ``concurrency`` of 1 each node is fully resolved (primary lookup and
    any fallback) before the next starts. Higher values run up to that many
    nodes at once; results are still placed by input position.
    """
    if concurrency <= 1:
        return [await verify_node(verifier, node) for node in nodes]

    semaphore = asyncio.Semaphore(concurrency)

    async def _bounded(node: GraphNode) -> GraphNode:
        async with semaphore:
            return await verify_node(verifier, node)

    return list(await asyncio.gather(*(_bounded(node) for node in nodes)))


def create_verify_nodes_node(
    verifier: ReferenceVerifier,
    config: PipelineConfig | None = None,
) -> Callable[[dict[str, Any]], Any]:
    """Create the verification node.

    Args:
        verifier: Reference verifier bound to this request's HTTP client
        config: Optional pipeline configuration

    Returns:
        Node function
    """
    resolved_config = config or PipelineConfig()

    async def verify_nodes_node(state: dict[str, Any]) -> dict[str, Any]:
        """Verify every synthesized node against the reference sources."""
        nodes: list[GraphNode] = state.get("nodes", [])
        verified_nodes = await verify_all(
            verifier, nodes, concurrency=resolved_config.verify_concurrency
        )
        verified_count = sum(1 for node in verified_nodes if node.verified)
        logger.info(f"Verified {verified_count}/{len(verified_nodes)} nodes")

        return {
            **state,
            "nodes": verified_nodes,
            "current_step": "verify_nodes",
        }

    return verify_nodes_node
