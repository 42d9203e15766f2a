"""TMDb catalog provider adapter."""

from __future__ import annotations

from typing import Any, Dict, List

import requests

from core.models.record import CandidateResult
from core.providers.adapter import CatalogProvider
from logger import get_logger
from tmdb.client import (
    DEFAULT_TIMEOUT,
    tmdb_movie_credits,
    tmdb_movie_details,
    tmdb_search_movie,
)

log = get_logger()


class TmdbCatalogProvider(CatalogProvider):
    """Catalog provider backed by the TMDb v3 API."""

    name = "tmdb"

    def __init__(
        self,
        session: requests.Session,
        api_key: str,
        language: str = "en-US",
        include_adult: bool = False,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.session = session
        self.api_key = api_key
        self.language = language
        self.include_adult = include_adult
        self.timeout = timeout

    def search_movie(self, title: str) -> List[CandidateResult]:
        log.debug(f"  TMDb: searching for '{title}'")
        return tmdb_search_movie(
            self.session,
            self.api_key,
            title,
            self.language,
            include_adult=self.include_adult,
            timeout=self.timeout,
        )

    def movie_details(self, movie_id: int) -> Dict[str, Any]:
        log.debug(f"  TMDb: fetching details for movie/{movie_id}")
        return tmdb_movie_details(self.session, self.api_key, movie_id, self.language, timeout=self.timeout)

    def movie_credits(self, movie_id: int) -> Dict[str, Any]:
        log.debug(f"  TMDb: fetching credits for movie/{movie_id}")
        return tmdb_movie_credits(self.session, self.api_key, movie_id, self.language, timeout=self.timeout)
