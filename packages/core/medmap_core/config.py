"""Configuration for the mind map pipeline.

One frozen dataclass covers both model calls and reference verification so a
single object can be built from service settings and passed everywhere.
"""

from dataclasses import dataclass

MEDLINE_SEARCH_URL = "https://wsearch.nlm.nih.gov/ws/query"
MEDLINE_DEFAULT_PAGE_URL = "https://medlineplus.gov/{slug}.html"
WIKIPEDIA_SUMMARY_URL = "https://en.wikipedia.org/api/rest_v1/page/summary/{title}"
DEFAULT_USER_AGENT = "medmap/0.1 (mindmap medical verifier)"


@dataclass(frozen=True)
class PipelineConfig:
    """Configuration values for generation, refinement and verification."""

    # Mind map synthesis
    synthesis_model: str = "gpt-4o-mini"
    synthesis_temperature: float | None = 0.2
    synthesis_reasoning_effort: str | None = None

    # Node refinement
    refine_model: str = "gpt-4o-mini"
    refine_temperature: float | None = 0.1

    # Request metadata tag sent with every model call
    application_name: str = "medmap"

    # Reference verification
    max_citations_per_node: int = 3
    verify_concurrency: int = 1  # 1 = one node fully resolved before the next
    fallback_on_primary_failure: bool = False

    # Graph consistency: remove edges pointing at unknown node ids
    drop_dangling_edges: bool = False

    # Reference endpoints
    medline_search_url: str = MEDLINE_SEARCH_URL
    medline_default_page_url: str = MEDLINE_DEFAULT_PAGE_URL
    wikipedia_summary_url: str = WIKIPEDIA_SUMMARY_URL
    user_agent: str = DEFAULT_USER_AGENT
