"""MedlinePlus health topics source (primary).

The web service answers with XML shaped roughly like::

    <nlmSearchResult>
      <list>
        <document url="https://medlineplus.gov/asthma.html">
          <content name="title">Asthma</content>
          <content name="FullSummary"><link url="https://..."/>...</content>
          <content name="snippet">... <span class="qt0">asthma</span> ...</content>
        </document>
      </list>
    </nlmSearchResult>

Content entry names are compared case-insensitively with spaces, dashes and
underscores removed, so ``FullSummary`` and ``full summary`` are the same tag.
"""

import re
import xml.etree.ElementTree as ET
from urllib.parse import quote

import httpx

from medmap_core.config import MEDLINE_DEFAULT_PAGE_URL, MEDLINE_SEARCH_URL
from medmap_core.references.base import ReferenceSource, ReferenceSourceError
from medmap_core.schemas.citations import Citation, CitationSource
from medmap_core.utils.logging import get_logger

logger = get_logger(__name__)

FULL_SUMMARY = "fullsummary"
SNIPPET = "snippet"
TITLE = "title"


def _normalize_name(name: str | None) -> str:
    return re.sub(r"[\s_\-]+", "", name or "").lower()


def _element_text(element: ET.Element) -> str:
    """Flatten an element's text, including nested highlight markup."""
    return " ".join("".join(element.itertext()).split())


def _find_content(document: ET.Element, name: str) -> ET.Element | None:
    for entry in document.findall("content"):
        if _normalize_name(entry.get("name")) == name:
            return entry
    return None


def slugify_topic(query: str) -> str:
    """Turn a topic title into a MedlinePlus page slug ("Heart Failure" -> "heartfailure")."""
    slug = re.sub(r"[^a-z0-9]+", "", query.lower())
    return slug or quote(query.strip().lower(), safe="")


def _document_title(document: ET.Element, query: str) -> str:
    name = document.get("name") or document.findtext("name")
    if name and name.strip():
        return name.strip()
    title_entry = _find_content(document, TITLE)
    if title_entry is not None:
        title = _element_text(title_entry)
        if title:
            return title
    return query


def _summary_link(entry: ET.Element | None) -> str | None:
    if entry is None:
        return None
    link = entry.find(".//link")
    if link is None:
        return None
    url = (link.get("url") or "").strip()
    return url or None


def parse_documents(xml_text: str) -> list[ET.Element]:
    """Parse a search response into its document elements.

    Raises:
        ReferenceSourceError: If the body is not well-formed XML
    """
    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as e:
        raise ReferenceSourceError(f"MedlinePlus returned malformed XML: {e}") from e
    return root.findall(".//list/document")


class MedlinePlusSource(ReferenceSource):
    """Primary structured reference source."""

    label = CitationSource.MEDLINEPLUS.value

    def __init__(
        self,
        client: httpx.AsyncClient,
        search_url: str = MEDLINE_SEARCH_URL,
        default_page_url: str = MEDLINE_DEFAULT_PAGE_URL,
        max_results: int = 3,
    ):
        super().__init__(client)
        self.search_url = search_url
        self.default_page_url = default_page_url
        self.max_results = max_results

    def default_url(self, query: str) -> str:
        return self.default_page_url.format(slug=slugify_topic(query))

    def to_citation(self, document: ET.Element, query: str) -> Citation:
        """Build a citation from one search result document.

        Link priority: the full-summary link, then the document's own url,
        then a page url derived from the query.
        """
        summary_entry = _find_content(document, FULL_SUMMARY)
        snippet_entry = _find_content(document, SNIPPET)

        url = (
            _summary_link(summary_entry)
            or (document.get("url") or "").strip()
            or self.default_url(query)
        )
        snippet = _element_text(snippet_entry) if snippet_entry is not None else ""

        return Citation(
            title=_document_title(document, query),
            url=url,
            snippet=snippet or None,
            source=self.label,
        )

    async def lookup(self, query: str) -> list[Citation]:
        """Search health topics and cite the first few matching documents."""
        try:
            response = await self.client.get(
                self.search_url,
                params={"db": "healthTopics", "term": query},
                headers={"Accept": "application/xml"},
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise ReferenceSourceError(f"MedlinePlus request failed: {e}") from e

        documents = parse_documents(response.text)
        citations = [
            self.to_citation(document, query)
            for document in documents[: self.max_results]
        ]
        logger.debug(
            f"MedlinePlus returned {len(documents)} documents for {query!r}, "
            f"kept {len(citations)}"
        )
        return citations
