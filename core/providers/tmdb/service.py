"""TMDb session initialization."""

from __future__ import annotations

import os
from dataclasses import dataclass

import requests

from config import Config
from core.providers.adapter import CatalogProvider
from core.providers.tmdb.adapter import TmdbCatalogProvider
from logger import get_logger

log = get_logger()


@dataclass
class TmdbContext:
    """Catalog provider built for a run; None when TMDb is unavailable."""

    provider: CatalogProvider | None


def resolve_api_key(cfg: Config) -> str:
    """Return the configured API key, falling back to the environment."""
    return cfg.tmdb.api_key or os.environ.get(cfg.tmdb.api_key_env, "")


def init_tmdb(cfg: Config) -> tuple[TmdbContext, str | None]:
    """Initialize the TMDb session and provider.

    Returns:
        Tuple of (context, error message). The error is set when no API key
        is available; no request is made in either case.
    """
    api_key = resolve_api_key(cfg)
    if not api_key:
        return (
            TmdbContext(provider=None),
            f"TMDb API key missing. Set env var {cfg.tmdb.api_key_env} or add tmdb.api_key to config.",
        )

    session = requests.Session()
    provider = TmdbCatalogProvider(
        session=session,
        api_key=api_key,
        language=cfg.tmdb.language,
        include_adult=bool(cfg.tmdb.include_adult),
        timeout=float(cfg.tmdb.timeout_seconds),
    )
    log.debug(f"TMDb: language={cfg.tmdb.language} timeout={cfg.tmdb.timeout_seconds}s")
    return (
        TmdbContext(provider=provider),
        None,
    )
