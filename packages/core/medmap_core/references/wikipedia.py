"""Wikipedia page summary source (secondary)."""

from typing import Any
from urllib.parse import quote

import httpx

from medmap_core.config import WIKIPEDIA_SUMMARY_URL
from medmap_core.references.base import ReferenceSource, ReferenceSourceError
from medmap_core.schemas.citations import Citation, CitationSource
from medmap_core.utils.logging import get_logger

logger = get_logger(__name__)


def _page_url(data: dict[str, Any]) -> str | None:
    content_urls = data.get("content_urls")
    if not isinstance(content_urls, dict):
        return None
    desktop = content_urls.get("desktop")
    if not isinstance(desktop, dict):
        return None
    page = desktop.get("page")
    return page if isinstance(page, str) and page else None


class WikipediaSource(ReferenceSource):
    """Secondary encyclopedic source, queried only when the primary has nothing."""

    label = CitationSource.WIKIPEDIA.value

    def __init__(
        self,
        client: httpx.AsyncClient,
        summary_url: str = WIKIPEDIA_SUMMARY_URL,
    ):
        super().__init__(client)
        self.summary_url = summary_url

    async def lookup(self, query: str) -> list[Citation]:
        """Fetch the page summary for ``query``; at most one citation."""
        title = quote(query.strip().replace(" ", "_"), safe="")
        try:
            response = await self.client.get(
                self.summary_url.format(title=title),
                headers={"Accept": "application/json"},
            )
        except httpx.HTTPError as e:
            raise ReferenceSourceError(f"Wikipedia request failed: {e}") from e

        if response.status_code == 404:
            logger.debug(f"No Wikipedia page for {query!r}")
            return []
        if not response.is_success:
            raise ReferenceSourceError(
                f"Wikipedia request failed: HTTP {response.status_code}"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise ReferenceSourceError(f"Wikipedia returned invalid JSON: {e}") from e

        if not isinstance(data, dict):
            return []
        page = _page_url(data)
        if not page:
            return []

        extract = data.get("extract")
        return [
            Citation(
                title=str(data.get("title") or query),
                url=page,
                snippet=extract if isinstance(extract, str) and extract else None,
                source=self.label,
            )
        ]
