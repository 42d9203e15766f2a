"""Data model shared by the resolution and serialization stages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Mapping, Tuple, Union

from logger import get_logger

log = get_logger()

RecordValue = Union[str, List[str]]


@dataclass(frozen=True)
class SearchQuery:
    """Title and optional release year used to search TMDb."""

    title: str
    year: int | None = None

    def describe(self) -> str:
        """Return a short human readable form, e.g. ``'Ex Machina' (2014)``."""
        if self.year:
            return f"'{self.title}' ({self.year})"
        return f"'{self.title}'"


@dataclass(frozen=True)
class CandidateResult:
    """One row of a TMDb title search."""

    id: int
    release_date: str | None
    title: str = ""

    @classmethod
    def from_tmdb(cls, row: Mapping[str, Any]) -> "CandidateResult":
        """Build a candidate from a raw ``/search/movie`` result row.

        Raises:
            ValueError: If the row carries no usable integer id.
        """
        raw_id = row.get("id")
        if isinstance(raw_id, (list, tuple)):
            raw_id = raw_id[0] if raw_id else None
        if raw_id is None or isinstance(raw_id, bool):
            raise ValueError("search result without id")
        release_date = row.get("release_date")
        title = str(row.get("title") or row.get("original_title") or "").strip()
        return cls(
            id=int(raw_id),
            release_date=str(release_date) if release_date else None,
            title=title,
        )


@dataclass(frozen=True)
class ResolvedIdentity:
    """The TMDb movie chosen for a search query."""

    tmdb_id: int
    title: str
    release_date: str | None
    candidate_count: int
    advisories: tuple[str, ...] = ()
    similarity: float = 0.0


@dataclass(frozen=True)
class FieldSpec:
    """How to extract and format one metadata field from a TMDb payload."""

    name: str
    source_endpoint: str
    source_path: str
    display_name: str
    value_shape: str = "scalar"
    sub_property: str | None = None
    join_separator: str = ", "


class MetadataRecord:
    """Ordered mapping of display name to tag value.

    Insertion order is output order. A name can only be added once; later
    additions under the same name are dropped with a warning.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, RecordValue] = {}

    def add(self, name: str, value: RecordValue) -> bool:
        """Insert a value, returning False when the name is already taken."""
        if name in self._entries:
            log.warn(f"  ⚠️ Duplicate field '{name}' ignored; keeping the first value.")
            return False
        if isinstance(value, list):
            self._entries[name] = [str(item) for item in value]
        else:
            self._entries[name] = str(value)
        return True

    def get(self, name: str, default: RecordValue | None = None) -> RecordValue | None:
        return self._entries.get(name, default)

    def keys(self) -> List[str]:
        return list(self._entries)

    def items(self) -> List[Tuple[str, RecordValue]]:
        return [(key, list(value) if isinstance(value, list) else value) for key, value in self._entries.items()]

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"MetadataRecord({self._entries!r})"
