"""Base reference source interface."""

from abc import ABC, abstractmethod

import httpx

from medmap_core.schemas.citations import Citation


class ReferenceSourceError(Exception):
    """A reference lookup failed in transport or decoding.

    Never reaches callers of the pipeline: the verifier turns it into an
    empty citation list.
    """

    pass


class ReferenceSource(ABC):
    """A lookup service that turns a concept title into citations."""

    label: str = ""

    def __init__(self, client: httpx.AsyncClient):
        """Initialize the source.

        Args:
            client: Shared HTTP client, owned and closed by the caller
        """
        self.client = client

    @abstractmethod
    async def lookup(self, query: str) -> list[Citation]:
        """Look up citations for a concept title.

        Args:
            query: Concept title

        Returns:
            Citations found, empty when the source knows nothing about it

        Raises:
            ReferenceSourceError: If the request or its decoding failed
        """
        pass
