from __future__ import annotations

"""Application config orchestration and YAML loading entrypoints."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from NoteFilter.config.output import OutputConfig, check_output, load_output
from NoteFilter.config.runtime import RuntimeConfig, check_runtime, load_runtime
from NoteFilter.config.search import SearchConfig, check_search, load_search
from NoteFilter.config.vault import VaultConfig, check_vault, load_vault

DEFAULT_CONFIG: Mapping[str, Any] = {
    "log": {"level": "INFO", "to_file": False, "dir": "log"},
    "search": {"default_key": "default", "max_clauses": 1024},
    "vault": {"root": ".", "extensions": [".md"]},
    "output": {"base_dir": "output", "formats": ["console"]},
}


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application root configuration."""

    runtime: RuntimeConfig
    search: SearchConfig
    vault: VaultConfig
    output: OutputConfig


def parse_config_dict(raw: Mapping[str, Any]) -> AppConfig:
    """Parse normalized mapping into AppConfig."""
    runtime = load_runtime(raw)
    search = load_search(raw)
    vault = load_vault(raw)
    output = load_output(raw)

    check_runtime(runtime)
    check_search(search)
    check_vault(vault)
    check_output(output)

    return AppConfig(runtime=runtime, search=search, vault=vault, output=output)


def load_config(path: Path | None = None) -> AppConfig:
    """Load config by merging an optional YAML file over built-in defaults."""
    if path is None:
        return parse_config_dict(DEFAULT_CONFIG)
    override = parse_yaml(path.read_text(encoding="utf-8"))
    return parse_config_dict(merge_config_dicts(DEFAULT_CONFIG, override))


def parse_yaml(text: str) -> dict[str, Any]:
    """Parse raw YAML text into a mapping."""
    data = yaml.safe_load(text) or {}
    if not isinstance(data, Mapping):
        raise ValueError("Config root must be a mapping/object")
    return dict(data)


def merge_config_dicts(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Deep-merge two config mappings."""
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], Mapping) and isinstance(value, Mapping):
            merged[key] = merge_config_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged
