"""Dummy catalog provider for tests and offline runs."""

from __future__ import annotations

from typing import Any, Dict, List, Tuple

from core.errors import TransportError
from core.models.record import CandidateResult
from core.providers.adapter import CatalogProvider


class DummyCatalogProvider(CatalogProvider):
    """In-memory provider serving canned payloads.

    Any payload given as an exception instance is raised instead of returned,
    which lets callers simulate transport failures per endpoint. Every call is
    recorded in ``calls`` as ``(method, argument)``.
    """

    name = "dummy"

    def __init__(
        self,
        searches: Dict[str, Any] | None = None,
        details: Dict[int, Any] | None = None,
        credits: Dict[int, Any] | None = None,
    ) -> None:
        self.searches = dict(searches or {})
        self.details = dict(details or {})
        self.credits = dict(credits or {})
        self.calls: List[Tuple[str, Any]] = []

    @staticmethod
    def _unwrap(value: Any) -> Any:
        if isinstance(value, BaseException):
            raise value
        return value

    def search_movie(self, title: str) -> List[CandidateResult]:
        self.calls.append(("search_movie", title))
        rows = self._unwrap(self.searches.get(title, []))
        return [row if isinstance(row, CandidateResult) else CandidateResult.from_tmdb(row) for row in rows]

    def movie_details(self, movie_id: int) -> Dict[str, Any]:
        self.calls.append(("movie_details", movie_id))
        if movie_id not in self.details:
            raise TransportError(f"No details for movie/{movie_id}")
        return dict(self._unwrap(self.details[movie_id]))

    def movie_credits(self, movie_id: int) -> Dict[str, Any]:
        self.calls.append(("movie_credits", movie_id))
        if movie_id not in self.credits:
            raise TransportError(f"No credits for movie/{movie_id}")
        return dict(self._unwrap(self.credits[movie_id]))
