from __future__ import annotations

"""Public configuration API for NoteFilter."""

from NoteFilter.config.app import (
    DEFAULT_CONFIG,
    AppConfig,
    load_config,
    merge_config_dicts,
    parse_config_dict,
)
from NoteFilter.config.output import OutputConfig
from NoteFilter.config.runtime import RuntimeConfig
from NoteFilter.config.search import SearchConfig
from NoteFilter.config.vault import VaultConfig

__all__ = [
    "RuntimeConfig",
    "SearchConfig",
    "VaultConfig",
    "OutputConfig",
    "AppConfig",
    "DEFAULT_CONFIG",
    "load_config",
    "merge_config_dicts",
    "parse_config_dict",
]
