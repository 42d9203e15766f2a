"""TMDb API client and title similarity helpers."""

from __future__ import annotations

import re
import unicodedata
from typing import Any, Dict, List

import requests
from rapidfuzz import fuzz

from core.errors import TransportError
from core.models.record import CandidateResult
from logger import get_logger

log = get_logger()

TMDB_BASE = "https://api.themoviedb.org/3"
DEFAULT_TIMEOUT = 20.0


def tmdb_request(
    session: requests.Session,
    api_key: str,
    endpoint: str,
    params: Dict[str, Any],
    timeout: float = DEFAULT_TIMEOUT,
) -> Dict[str, Any]:
    """Make a single TMDb API request.

    Args:
        session: Requests session.
        api_key: TMDb API key.
        endpoint: API endpoint path.
        params: Query parameters.
        timeout: Request timeout in seconds.

    Returns:
        Parsed JSON response.

    Raises:
        TransportError: On connection errors, non-2xx statuses or a body that
            is not a JSON object.
    """
    url = f"{TMDB_BASE}{endpoint}"
    params = dict(params)
    params["api_key"] = api_key
    try:
        resp = session.get(url, params=params, timeout=timeout)
        resp.raise_for_status()
        data = resp.json()
    except requests.HTTPError as exc:
        status = getattr(exc.response, "status_code", None)
        raise TransportError(f"TMDb request {endpoint} failed with status {status}") from exc
    except requests.RequestException as exc:
        raise TransportError(f"TMDb request {endpoint} failed: {exc}") from exc
    except ValueError as exc:
        raise TransportError(f"TMDb request {endpoint} returned malformed JSON") from exc
    if not isinstance(data, dict):
        raise TransportError(f"TMDb request {endpoint} returned an unexpected payload")
    return data


def normalize_title(title: str) -> str:
    """Normalize a title for fuzzy matching.

    Args:
        title: Title to normalize.

    Returns:
        Normalized title string.
    """
    lowered = title.lower()
    lowered = unicodedata.normalize("NFKD", lowered)
    lowered = "".join(ch for ch in lowered if not unicodedata.combining(ch))
    lowered = lowered.replace("&", "and")
    lowered = re.sub(r"[^a-z0-9]+", " ", lowered)
    return re.sub(r"\s+", " ", lowered).strip()


def title_similarity(left: str, right: str) -> float:
    """Compute a fuzzy similarity score between two titles.

    Args:
        left: First title.
        right: Second title.

    Returns:
        Similarity score in [0, 1].
    """
    if not left or not right:
        return 0.0
    return fuzz.QRatio(normalize_title(left), normalize_title(right)) / 100.0


def tmdb_search_movie(
    session: requests.Session,
    api_key: str,
    title: str,
    language: str,
    include_adult: bool = False,
    timeout: float = DEFAULT_TIMEOUT,
) -> List[CandidateResult]:
    """Search TMDb movies by title, preserving relevance order.

    Rows without a usable id are skipped.
    """
    params: Dict[str, Any] = {"query": title, "include_adult": include_adult}
    if language:
        params["language"] = language
    data = tmdb_request(session, api_key, "/search/movie", params, timeout=timeout)
    results = data.get("results") or []
    if not isinstance(results, list):
        raise TransportError("TMDb search returned an unexpected results payload")
    candidates: List[CandidateResult] = []
    for row in results:
        if not isinstance(row, dict):
            continue
        try:
            candidates.append(CandidateResult.from_tmdb(row))
        except (TypeError, ValueError):
            log.debug(f"  Skipping malformed search row: {row!r}")
    return candidates


def tmdb_movie_details(
    session: requests.Session,
    api_key: str,
    movie_id: int,
    language: str,
    timeout: float = DEFAULT_TIMEOUT,
) -> Dict[str, Any]:
    """Fetch full TMDb details for a movie.

    Args:
        session: Requests session.
        api_key: TMDb API key.
        movie_id: TMDb movie ID.
        language: Language code.
        timeout: Request timeout in seconds.

    Returns:
        Movie details payload.
    """
    params = {"language": language} if language else {}
    return tmdb_request(session, api_key, f"/movie/{movie_id}", params, timeout=timeout)


def tmdb_movie_credits(
    session: requests.Session,
    api_key: str,
    movie_id: int,
    language: str,
    timeout: float = DEFAULT_TIMEOUT,
) -> Dict[str, Any]:
    """Fetch cast and crew for a movie.

    ``cast`` and ``crew`` are always lists in the returned payload.
    """
    params = {"language": language} if language else {}
    data = tmdb_request(session, api_key, f"/movie/{movie_id}/credits", params, timeout=timeout)
    cast = data.get("cast")
    crew = data.get("crew")
    data["cast"] = cast if isinstance(cast, list) else []
    data["crew"] = crew if isinstance(crew, list) else []
    return data
