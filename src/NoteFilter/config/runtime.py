"""Logging configuration (the ``log`` section)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Final, Mapping

from NoteFilter.config.common import expect_bool, expect_str, get_required_value, get_section

LOG_LEVELS: Final = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """Console log level and optional per-action log files.

    Attributes:
        level: Console level name, uppercased.
        to_file: Also write DEBUG logs under ``dir/<action>/``.
        dir: Base directory for log files.
    """

    level: str
    to_file: bool
    dir: str


def load_runtime(raw: Mapping[str, Any]) -> RuntimeConfig:
    """Read the ``log`` section.

    Raises:
        TypeError: If a value has the wrong type.
        ValueError: If the section or one of its keys is missing.
    """
    section = get_section(raw, "log", required=True)
    level, to_file, log_dir = (
        get_required_value(section, field, f"log.{field}") for field in ("level", "to_file", "dir")
    )
    return RuntimeConfig(
        level=expect_str(level, "log.level").strip().upper(),
        to_file=expect_bool(to_file, "log.to_file"),
        dir=expect_str(log_dir, "log.dir"),
    )


def check_runtime(config: RuntimeConfig) -> None:
    if config.level not in LOG_LEVELS:
        raise ValueError(f"log.level must be one of {', '.join(LOG_LEVELS)}, got {config.level!r}")
    if config.to_file and not config.dir.strip():
        raise ValueError("log.dir must not be empty when log.to_file is enabled")
