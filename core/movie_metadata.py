"""Aggregate TMDb detail and credits payloads into a metadata record."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List

from core.errors import PartialFieldError, TransportError
from core.mapping import transforms
from core.mapping.fields import BUILTIN_CATEGORIES, canonical_categories, field_spec_for
from core.models.record import FieldSpec, MetadataRecord, RecordValue
from core.providers.adapter import CatalogProvider
from logger import get_logger

log = get_logger()

_CREDIT_CATEGORIES = ("Cast", "Writers", "Directors")


@dataclass(frozen=True)
class FieldLimits:
    """How many people each credit category keeps."""

    cast: int = 5
    writers: int = 3
    directors: int = 2
    currency_symbol: str = "$"


def _fetch(label: str, fetch: Callable[[int], Dict[str, Any]], tmdb_id: int) -> Dict[str, Any] | None:
    try:
        return fetch(tmdb_id)
    except TransportError as exc:
        log.warn(f"  ⚠️ TMDb {label} unavailable for movie/{tmdb_id}: {exc}")
        return None


def format_field(spec: FieldSpec, value: Any, currency_symbol: str = "$") -> RecordValue:
    """Format a raw payload value according to its spec shape.

    Raises:
        PartialFieldError: The value does not fit the expected shape.
    """
    try:
        if spec.value_shape == "currency":
            return transforms.format_currency(value, currency_symbol)
        if spec.value_shape == "date":
            return transforms.format_date(value)
        if spec.value_shape == "list":
            return transforms.flatten_named_list(value, spec.sub_property)
        if spec.value_shape == "scalar":
            return transforms.format_scalar(value)
        return transforms.infer_value(value)
    except PartialFieldError as exc:
        raise PartialFieldError(spec.display_name, exc.reason) from exc


def _builtin_value(
    category: str,
    tmdb_id: int,
    detail: Dict[str, Any] | None,
    credits: Dict[str, Any] | None,
    limits: FieldLimits,
) -> RecordValue:
    name = BUILTIN_CATEGORIES[category]
    if category == "TMDbID":
        return f"movie/{tmdb_id}"
    if category == "IMDbID":
        if detail is None:
            raise PartialFieldError(name, "movie details unavailable")
        imdb_id = str(detail.get("imdb_id") or "").strip()
        if not imdb_id:
            raise PartialFieldError(name, "no IMDb id on TMDb")
        return imdb_id

    if credits is None:
        raise PartialFieldError(name, "credits unavailable")
    if category == "Cast":
        values = transforms.pick_cast_names(credits.get("cast"), limits.cast)
    elif category == "Writers":
        values = transforms.pick_writers(credits.get("crew"), limits.writers)
    else:
        values = transforms.pick_directors(credits.get("crew"), limits.directors)
    if not values:
        raise PartialFieldError(name, "no matching credits")
    return values


def _extra_value(
    spec: FieldSpec,
    payloads: Dict[str, Dict[str, Any] | None],
    limits: FieldLimits,
) -> RecordValue | None:
    payload = payloads.get(spec.source_endpoint)
    if payload is None:
        raise PartialFieldError(spec.display_name, f"{spec.source_endpoint} payload unavailable")
    raw = transforms.extract_path(payload, spec.source_path)
    if transforms.is_empty_value(raw) or (spec.value_shape == "currency" and raw in (0, 0.0, "0")):
        return None
    value = format_field(spec, raw, limits.currency_symbol)
    if transforms.is_empty_value(value):
        return None
    return value


def aggregate_metadata(
    provider: CatalogProvider,
    tmdb_id: int,
    skip: Iterable[str] = (),
    extra_fields: Iterable[str] = (),
    limits: FieldLimits | None = None,
) -> MetadataRecord:
    """Build the ordered metadata record for a TMDb movie.

    Built-in categories come first (TMDB, IMDb, Cast, Written By, Directed
    By), followed by extra fields in the order given. A missing or malformed
    field is logged and left out; it never aborts the aggregation.

    Args:
        provider: Catalog provider for detail and credits payloads.
        tmdb_id: Resolved TMDb movie id.
        skip: Built-in categories to leave out.
        extra_fields: Detail payload keys to add as extra tags.
        limits: Credit limits and currency symbol.

    Returns:
        MetadataRecord ready for serialization.

    Raises:
        TransportError: Both the details and the credits fetch were needed
            and both failed.
    """
    limits = limits or FieldLimits()
    skipped = set(canonical_categories(skip))
    extras = [name.strip() for name in extra_fields if name and name.strip()]
    categories = [category for category in BUILTIN_CATEGORIES if category not in skipped]

    need_detail = "IMDbID" in categories or bool(extras)
    need_credits = any(category in categories for category in _CREDIT_CATEGORIES)

    detail = credits = None
    if need_detail:
        detail = _fetch("details", provider.movie_details, tmdb_id)
    if need_credits:
        credits = _fetch("credits", provider.movie_credits, tmdb_id)
    if need_detail and need_credits and detail is None and credits is None:
        raise TransportError(f"Could not fetch details or credits for movie/{tmdb_id}.")

    record = MetadataRecord()
    for category in categories:
        try:
            record.add(BUILTIN_CATEGORIES[category], _builtin_value(category, tmdb_id, detail, credits, limits))
        except PartialFieldError as exc:
            log.warn(f"  ⚠️ Skipping {exc.field}: {exc.reason}")

    payloads = {"detail": detail, "credits": credits}
    for name in extras:
        spec = field_spec_for(name)
        if spec.display_name in record:
            log.warn(f"  ⚠️ Extra field '{name}' duplicates '{spec.display_name}'; keeping the first value.")
            continue
        try:
            value = _extra_value(spec, payloads, limits)
        except PartialFieldError as exc:
            log.warn(f"  ⚠️ Skipping {exc.field}: {exc.reason}")
            continue
        if value is None:
            log.info(f"  Field '{name}' is empty or missing on TMDb; skipped.")
            continue
        record.add(spec.display_name, value)
    return record


def skipped_display_names(skip: Iterable[str]) -> List[str]:
    """Return the tag names that a skip list removes from the record."""
    return [BUILTIN_CATEGORIES[category] for category in canonical_categories(skip)]
