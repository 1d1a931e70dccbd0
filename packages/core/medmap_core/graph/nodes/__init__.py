"""Pipeline nodes for the Generate operation.

    - extract_text: PDF bytes to plain text
    - synthesize: Model call, tolerant parsing and normalization
    - verify_nodes: Reference citations per node
    - check_consistency: Optional removal of dangling edges
    - assemble: Final payload
"""

from medmap_core.graph.nodes import (
    assemble,
    check_consistency,
    extract_text,
    synthesize,
    verify_nodes,
)

__all__ = [
    "assemble",
    "check_consistency",
    "extract_text",
    "synthesize",
    "verify_nodes",
]
