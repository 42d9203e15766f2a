"""Configuration dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass
class TmdbConfig:
    """TMDb configuration settings."""

    api_key_env: str = "TMDB_API_KEY"
    api_key: str = ""
    language: str = "en-US"
    include_adult: bool = False
    timeout_seconds: float = 20.0
    probe_query: str = "Star Wars"


@dataclass
class MetadataConfig:
    """Which fields end up in the tag document."""

    skip: List[str] = field(default_factory=list)
    properties: List[str] = field(default_factory=list)
    cast_limit: int = 5
    writer_limit: int = 3
    director_limit: int = 2
    currency_symbol: str = "$"


@dataclass
class OutputConfig:
    """Tag document output and mkvpropedit settings."""

    overwrite: bool = False
    keep_xml: bool = False
    attach: bool = True
    mkvpropedit_path: str = "mkvpropedit"


@dataclass
class Config:
    """Top-level configuration container."""

    tmdb: TmdbConfig
    metadata: MetadataConfig
    output: OutputConfig
