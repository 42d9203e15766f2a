"""Catalog provider interface used by the resolver and aggregator."""

from __future__ import annotations

from typing import Any, Dict, List, Protocol

from core.models.record import CandidateResult


class CatalogProvider(Protocol):
    """Read-only access to a movie catalog.

    Every method makes at most one remote attempt and raises
    ``TransportError`` when it cannot complete.
    """

    name: str

    def search_movie(self, title: str) -> List[CandidateResult]:
        """Return search candidates in relevance order."""

    def movie_details(self, movie_id: int) -> Dict[str, Any]:
        """Return the detail payload for a movie."""

    def movie_credits(self, movie_id: int) -> Dict[str, Any]:
        """Return ``{"cast": [...], "crew": [...]}`` for a movie."""
