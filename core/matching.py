"""Filename normalization helpers for building TMDb search queries."""

from __future__ import annotations

import re
from typing import Tuple

from core.models.record import SearchQuery
from logger import get_logger

log = get_logger()

# A release year: not part of a longer digit run and not a resolution like 2160p.
_YEAR_RE = re.compile(r"(?<!\d)((?:18|19|20)\d{2})(?!\d|p)")
_MARKER_RE = re.compile(r"[\(\[]|\d+")
_SEPARATORS_RE = re.compile(r"[._,()\[\]]")


def _clean_title(raw: str) -> str:
    s = _SEPARATORS_RE.sub(" ", raw)
    s = re.sub(r"\s+", " ", s)
    return s.strip(" -")


def minimal_clean(leaf: str) -> str:
    """Strip separator characters from a leaf name without any parsing."""
    return _clean_title(leaf) or leaf.strip()


def normalize(raw_leaf: str) -> Tuple[str | None, int | None]:
    """Extract a search title and release year from a filename stem.

    Args:
        raw_leaf: File name without its extension.

    Returns:
        Tuple of (title, year). Both are None when nothing usable was found.
    """
    for match in reversed(list(_YEAR_RE.finditer(raw_leaf))):
        title = _clean_title(raw_leaf[: match.start()])
        if title:
            return title, int(match.group(1))

    marker = _MARKER_RE.search(raw_leaf)
    if marker:
        title = _clean_title(raw_leaf[: marker.start()])
        return (title, None) if title else (None, None)

    title = _clean_title(raw_leaf)
    return (title, None) if title else (None, None)


def build_search_query(leaf: str, title: str | None = None, year: int | None = None) -> SearchQuery:
    """Build the search query for a run, honoring explicit overrides.

    Args:
        leaf: File name without its extension.
        title: Explicit title; skips filename parsing when set.
        year: Explicit year; overrides any parsed year.

    Returns:
        SearchQuery for the resolver.
    """
    if title and title.strip():
        return SearchQuery(title=title.strip(), year=year)

    parsed_title, parsed_year = normalize(leaf)
    if parsed_title is None:
        fallback = minimal_clean(leaf)
        log.warn(f"  ⚠️ Could not parse a title from '{leaf}'; searching for '{fallback}'.")
        return SearchQuery(title=fallback, year=year)
    return SearchQuery(title=parsed_title, year=year if year is not None else parsed_year)
