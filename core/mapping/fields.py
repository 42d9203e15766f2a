"""Built-in field categories and the extra-field lookup table."""

from __future__ import annotations

from typing import Dict, Iterable, List

from core.mapping.transforms import display_name_for
from core.models.record import FieldSpec

# Skippable built-in categories and the tag names they produce, in output order.
BUILTIN_CATEGORIES: Dict[str, str] = {
    "TMDbID": "TMDB",
    "IMDbID": "IMDb",
    "Cast": "Cast",
    "Writers": "Written By",
    "Directors": "Directed By",
}

_CATEGORY_LOOKUP = {name.lower(): name for name in BUILTIN_CATEGORIES}


def _spec(name: str, shape: str, sub_property: str | None = None, path: str | None = None) -> FieldSpec:
    return FieldSpec(
        name=name,
        source_endpoint="detail",
        source_path=path or name,
        display_name=display_name_for(name),
        value_shape=shape,
        sub_property=sub_property,
    )


# Detail payload keys with a known shape. Anything else falls back to
# generic_field_spec and is shaped at formatting time.
KNOWN_FIELDS: Dict[str, FieldSpec] = {
    spec.name: spec
    for spec in [
        _spec("budget", "currency"),
        _spec("revenue", "currency"),
        _spec("release_date", "date"),
        _spec("genres", "list", "name"),
        _spec("production_companies", "list", "name"),
        _spec("production_countries", "list", "name"),
        _spec("spoken_languages", "list", "english_name"),
        _spec("origin_country", "list"),
        _spec("belongs_to_collection", "scalar", path="belongs_to_collection.name"),
        _spec("title", "scalar"),
        _spec("original_title", "scalar"),
        _spec("original_language", "scalar"),
        _spec("overview", "scalar"),
        _spec("tagline", "scalar"),
        _spec("runtime", "scalar"),
        _spec("status", "scalar"),
        _spec("homepage", "scalar"),
        _spec("popularity", "scalar"),
        _spec("vote_average", "scalar"),
        _spec("vote_count", "scalar"),
    ]
}


def canonical_category(value: str) -> str | None:
    """Map user input such as ``cast`` or ``IMDBID`` to a category name."""
    return _CATEGORY_LOOKUP.get(value.strip().lower())


def canonical_categories(values: Iterable[str]) -> List[str]:
    """Canonicalize category names, raising ValueError on unknown ones."""
    out: List[str] = []
    for value in values:
        category = canonical_category(value)
        if category is None:
            allowed = ", ".join(BUILTIN_CATEGORIES)
            raise ValueError(f"Unknown field category '{value}' (expected one of: {allowed})")
        if category not in out:
            out.append(category)
    return out


def generic_field_spec(name: str) -> FieldSpec:
    """Spec for an arbitrary detail key whose shape is inferred later."""
    return FieldSpec(
        name=name,
        source_endpoint="detail",
        source_path=name,
        display_name=display_name_for(name),
        value_shape="auto",
    )


def field_spec_for(name: str) -> FieldSpec:
    """Return the spec used to extract an extra field by its payload key."""
    key = name.strip()
    return KNOWN_FIELDS.get(key) or KNOWN_FIELDS.get(key.lower()) or generic_field_spec(key)
