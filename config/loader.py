"""Configuration loading and normalization."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

from config.merge import drop_unset, merge_sections
from config.models import (
    Config,
    MetadataConfig,
    OutputConfig,
    TmdbConfig,
)


BASE_DIR = Path(__file__).resolve().parent.parent
MODULE_CONFIG_PATHS = {
    "tmdb": BASE_DIR / "tmdb" / "config.json",
    "metadata": BASE_DIR / "core" / "metadata_config.json",
    "output": BASE_DIR / "mkvtoolnix" / "config.json",
}


def _as_list(value: Any) -> List[str]:
    if not value:
        return []
    if isinstance(value, list):
        return [str(v) for v in value]
    return [part.strip() for part in str(value).split(",") if part.strip()]


def _as_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    return default


def _as_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _as_float(value: Any, default: float) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _load_json(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a JSON object: {path}")
    return data


def _load_default_sections() -> Dict[str, Any]:
    raw: Dict[str, Any] = {}
    for section, file_path in MODULE_CONFIG_PATHS.items():
        if file_path.exists():
            raw[section] = _load_json(file_path)
    return raw


def config_from_dict(raw: Dict[str, Any]) -> Config:
    """Build a Config instance from a raw dictionary."""
    tmdb_raw = raw.get("tmdb", {}) or {}
    metadata_raw = raw.get("metadata", {}) or {}
    output_raw = raw.get("output", {}) or {}

    tmdb = TmdbConfig(
        api_key_env=str(tmdb_raw.get("api_key_env", "TMDB_API_KEY")),
        api_key=str(tmdb_raw.get("api_key", "") or ""),
        language=str(tmdb_raw.get("language", "en-US")),
        include_adult=_as_bool(tmdb_raw.get("include_adult"), False),
        timeout_seconds=_as_float(tmdb_raw.get("timeout_seconds", 20.0), 20.0),
        probe_query=str(tmdb_raw.get("probe_query", "Star Wars") or ""),
    )
    metadata = MetadataConfig(
        skip=_as_list(metadata_raw.get("skip")),
        properties=_as_list(metadata_raw.get("properties")),
        cast_limit=_as_int(metadata_raw.get("cast_limit", 5), 5),
        writer_limit=_as_int(metadata_raw.get("writer_limit", 3), 3),
        director_limit=_as_int(metadata_raw.get("director_limit", 2), 2),
        currency_symbol=str(metadata_raw.get("currency_symbol", "$")),
    )
    output = OutputConfig(
        overwrite=_as_bool(output_raw.get("overwrite"), False),
        keep_xml=_as_bool(output_raw.get("keep_xml"), False),
        attach=_as_bool(output_raw.get("attach"), True),
        mkvpropedit_path=str(output_raw.get("mkvpropedit_path", "mkvpropedit") or "mkvpropedit"),
    )
    return Config(tmdb=tmdb, metadata=metadata, output=output)


def load_config(path: Path | None, overrides: Dict[str, Any] | None = None) -> Config:
    """Load config data into a Config instance.

    Args:
        path: Optional JSON config file layered over the module defaults.
        overrides: Optional section overrides (e.g. from CLI flags); None
            values are ignored.

    Returns:
        Parsed Config instance.
    """
    raw = _load_default_sections()
    if path is not None:
        raw = merge_sections(raw, _load_json(path))
    if overrides:
        raw = merge_sections(raw, drop_unset(overrides))
    return config_from_dict(raw)
