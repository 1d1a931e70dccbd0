"""Reference sources used to verify mind map nodes.

- MedlinePlus health topics (primary, structured XML documents)
- Wikipedia page summaries (secondary, used only when the primary is empty)
"""

from medmap_core.references.base import ReferenceSource, ReferenceSourceError
from medmap_core.references.medlineplus import MedlinePlusSource
from medmap_core.references.verifier import ReferenceVerifier, dedupe_citations
from medmap_core.references.wikipedia import WikipediaSource

__all__ = [
    "MedlinePlusSource",
    "ReferenceSource",
    "ReferenceSourceError",
    "ReferenceVerifier",
    "WikipediaSource",
    "dedupe_citations",
]
