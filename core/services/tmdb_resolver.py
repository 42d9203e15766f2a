"""Resolve a search query to a single TMDb movie id."""

from __future__ import annotations

from typing import List

from core.errors import NotFoundError, TransportError
from core.models.record import CandidateResult, ResolvedIdentity, SearchQuery
from core.providers.adapter import CatalogProvider
from logger import get_logger
from tmdb.client import title_similarity

log = get_logger()

LOW_SIMILARITY = 0.5


def select_candidate(candidates: List[CandidateResult], year: int | None) -> tuple[CandidateResult, str | None]:
    """Pick one candidate from a non-empty search result.

    A single candidate always wins. With several candidates the first one
    whose release date starts with ``year`` is chosen, falling back to the
    first candidate overall when none match. Without a year the first
    candidate is chosen and an advisory is returned.

    Returns:
        Tuple of (candidate, advisory message or None).
    """
    if len(candidates) == 1:
        return candidates[0], None

    if year is not None:
        prefix = str(year)
        for candidate in candidates:
            if str(candidate.release_date or "").startswith(prefix):
                return candidate, None
        log.info(f"  No candidate released in {year}; using the top search result.")
        return candidates[0], None

    advisory = (
        f"{len(candidates)} TMDb results and no release year given; "
        "the top result was used and may be imprecise. Pass --year to disambiguate."
    )
    return candidates[0], advisory


def _probe(provider: CatalogProvider, probe_query: str) -> bool:
    try:
        return bool(provider.search_movie(probe_query))
    except TransportError as exc:
        log.debug(f"  TMDb probe failed: {exc}")
        return False


def resolve_identity(
    provider: CatalogProvider,
    query: SearchQuery,
    probe_query: str | None = None,
) -> ResolvedIdentity:
    """Resolve a search query to one TMDb movie.

    Args:
        provider: Catalog provider used for the search.
        query: Title and optional year.
        probe_query: Known-good title searched when the real search fails or
            comes back empty, to tell a bad key or network from a bad title.

    Returns:
        ResolvedIdentity for the chosen candidate.

    Raises:
        NotFoundError: The search returned no candidates.
        TransportError: The search could not be performed.
    """
    search_error: TransportError | None = None
    try:
        candidates = provider.search_movie(query.title)
    except TransportError as exc:
        search_error = exc
        candidates = []

    if not candidates:
        if probe_query and not _probe(provider, probe_query):
            raise TransportError(
                "TMDb is unreachable or the API key is invalid (probe search also failed)."
            ) from search_error
        if search_error is not None:
            raise search_error
        raise NotFoundError(f"No TMDb results for {query.describe()}; check the title or pass --title.")

    chosen, advisory = select_candidate(candidates, query.year)
    advisories = [advisory] if advisory else []
    similarity = title_similarity(query.title, chosen.title)
    if chosen.title and similarity < LOW_SIMILARITY:
        advisories.append(
            f"TMDb match '{chosen.title}' differs from the searched title '{query.title}' "
            f"(similarity {similarity:.2f}); pass --title if it is wrong."
        )
    for note in advisories:
        log.warn(f"  ⚠️ {note}")
    log.info(
        f"TMDb: matched '{chosen.title or query.title}' "
        f"({(chosen.release_date or '????')[:4]}) as movie/{chosen.id} "
        f"[{len(candidates)} result(s), similarity {similarity:.2f}]"
    )
    return ResolvedIdentity(
        tmdb_id=chosen.id,
        title=chosen.title,
        release_date=chosen.release_date,
        candidate_count=len(candidates),
        advisories=tuple(advisories),
        similarity=similarity,
    )
