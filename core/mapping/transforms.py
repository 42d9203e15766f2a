"""
transforms.py

Value transforms turning TMDb payload fragments into Matroska tag values.

These are small and pure so they can be unit tested in isolation. Helpers
that can fail on a malformed value raise ``PartialFieldError``; the
aggregator decides what to do with it.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Any, Iterable, Optional

from core.errors import PartialFieldError


# --- Small utility helpers ---

def _norm_space(s: str) -> str:
    return re.sub(r"\s+", " ", s).strip()


def _is_truthy_text(s: Optional[str]) -> bool:
    return bool(s and s.strip())


def _dedupe_preserve_order(items: Iterable[Any]) -> list[Any]:
    seen: set[Any] = set()
    out: list[Any] = []
    for x in items:
        if x not in seen:
            out.append(x)
            seen.add(x)
    return out


def _limit(items: list[Any], max_items: int) -> list[Any]:
    if max_items and max_items > 0:
        return items[:max_items]
    return items


def is_empty_value(value: Any) -> bool:
    """Return True for values TMDb uses to mean "unknown"."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict)):
        return len(value) == 0
    return False


# --- People ---

def pick_cast_names(cast: Any, max_items: int = 5) -> list[str]:
    """Pick unique cast names in billing order as returned by TMDb."""
    if not isinstance(cast, list):
        return []
    names = [
        _norm_space(str(person["name"]))
        for person in cast
        if isinstance(person, dict) and _is_truthy_text(str(person.get("name") or ""))
    ]
    return _limit(_dedupe_preserve_order(names), max_items)


def pick_writers(crew: Any, max_items: int = 3) -> list[str]:
    """Pick writing credits formatted as ``"<name> (<job>)"``.

    Entries are unique by (name, job), so one person can appear once per job.
    """
    if not isinstance(crew, list):
        return []
    pairs: list[tuple[str, str]] = []
    for person in crew:
        if not isinstance(person, dict) or person.get("department") != "Writing":
            continue
        name = _norm_space(str(person.get("name") or ""))
        job = _norm_space(str(person.get("job") or ""))
        if name:
            pairs.append((name, job))
    pairs = _limit(_dedupe_preserve_order(pairs), max_items)
    return [f"{name} ({job})" if job else name for name, job in pairs]


def pick_directors(crew: Any, max_items: int = 2) -> list[str]:
    """Pick unique names credited as Director in the Directing department."""
    if not isinstance(crew, list):
        return []
    names = [
        _norm_space(str(person.get("name") or ""))
        for person in crew
        if isinstance(person, dict)
        and person.get("department") == "Directing"
        and person.get("job") == "Director"
    ]
    return _limit(_dedupe_preserve_order([n for n in names if n]), max_items)


# --- Shapes ---

def format_currency(value: Any, symbol: str = "$") -> str:
    """Format an amount like ``63000000`` as ``$63,000,000``."""
    if isinstance(value, bool):
        raise PartialFieldError("currency", f"not an amount: {value!r}")
    try:
        amount = int(float(value))
    except (TypeError, ValueError, OverflowError) as exc:
        raise PartialFieldError("currency", f"not an amount: {value!r}") from exc
    return f"{symbol}{amount:,}"


def format_date(value: Any) -> str:
    """Validate a TMDb ``YYYY-MM-DD`` date and return it in ISO form."""
    text = str(value or "").strip()
    try:
        return datetime.strptime(text[:10], "%Y-%m-%d").date().isoformat()
    except ValueError as exc:
        raise PartialFieldError("date", f"not a date: {value!r}") from exc


def flatten_named_list(value: Any, sub_property: str | None = "name") -> list[str]:
    """Flatten a list of objects (or scalars) to a list of display strings."""
    if isinstance(value, dict):
        value = [value]
    if not isinstance(value, list):
        raise PartialFieldError("list", f"expected a list, got {type(value).__name__}")
    out: list[str] = []
    for item in value:
        if isinstance(item, dict):
            text = item.get(sub_property or "name")
            if text is None and sub_property != "name":
                text = item.get("name")
        else:
            text = item
        if text is not None and _is_truthy_text(str(text)):
            out.append(_norm_space(str(text)))
    return _dedupe_preserve_order(out)


def format_scalar(value: Any) -> str:
    """Render a scalar payload value as tag text."""
    if isinstance(value, (list, dict)):
        raise PartialFieldError("scalar", f"expected a scalar, got {type(value).__name__}")
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return _norm_space(str(value))


def infer_value(value: Any) -> str | list[str]:
    """Format a payload value whose shape is only known at runtime."""
    if isinstance(value, (list, dict)):
        return flatten_named_list(value, "name")
    return format_scalar(value)


def display_name_for(name: str) -> str:
    """Turn a payload key into a tag name, e.g. ``production_companies`` → ``Production Companies``."""
    return _norm_space(name.replace("_", " ")).title()


def extract_path(payload: Any, path: str) -> Any:
    """Follow a dotted path (``belongs_to_collection.name``) through dicts."""
    value = payload
    for part in path.split("."):
        if not isinstance(value, dict):
            return None
        value = value.get(part)
    return value
