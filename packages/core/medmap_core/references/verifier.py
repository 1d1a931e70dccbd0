"""Reference verification for mind map nodes."""

from collections.abc import Iterable

import httpx

from medmap_core.config import PipelineConfig
from medmap_core.references.base import ReferenceSource, ReferenceSourceError
from medmap_core.references.medlineplus import MedlinePlusSource
from medmap_core.references.wikipedia import WikipediaSource
from medmap_core.schemas.citations import Citation
from medmap_core.utils.logging import get_logger

logger = get_logger(__name__)


def dedupe_citations(citations: Iterable[Citation]) -> list[Citation]:
    """Keep the first citation for each url, preserving order."""
    seen_urls: set[str] = set()
    unique: list[Citation] = []
    for citation in citations:
        if citation.url in seen_urls:
            continue
        seen_urls.add(citation.url)
        unique.append(citation)
    return unique


class ReferenceVerifier:
    """Finds supporting citations for a concept title.

    The primary source is asked first. The secondary source is asked only
    when the primary answered with zero documents (or, with
    ``fallback_on_primary_failure``, when the primary call failed). Lookup
    failures never propagate: an unverifiable node simply gets no citations.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        config: PipelineConfig | None = None,
        primary: ReferenceSource | None = None,
        secondary: ReferenceSource | None = None,
    ):
        self.config = config or PipelineConfig()
        self.primary = primary or MedlinePlusSource(
            client,
            search_url=self.config.medline_search_url,
            default_page_url=self.config.medline_default_page_url,
            max_results=self.config.max_citations_per_node,
        )
        self.secondary = secondary or WikipediaSource(
            client, summary_url=self.config.wikipedia_summary_url
        )

    async def verify(self, query: str) -> list[Citation]:
        """Return 0-3 citations for ``query``; never raises for lookup failures."""
        try:
            citations = await self.primary.lookup(query)
        except ReferenceSourceError as e:
            logger.warning(f"{self.primary.label} lookup failed for {query!r}: {e}")
            if not self.config.fallback_on_primary_failure:
                return []
            citations = []

        if citations:
            return citations

        try:
            return await self.secondary.lookup(query)
        except ReferenceSourceError as e:
            logger.warning(f"{self.secondary.label} lookup failed for {query!r}: {e}")
            return []
