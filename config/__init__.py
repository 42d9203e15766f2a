"""Config package facade."""

from config.loader import config_from_dict, load_config
from config.models import (
    Config,
    MetadataConfig,
    OutputConfig,
    TmdbConfig,
)

__all__ = [
    "Config",
    "MetadataConfig",
    "OutputConfig",
    "TmdbConfig",
    "config_from_dict",
    "load_config",
]
