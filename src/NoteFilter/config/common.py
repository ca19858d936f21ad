"""Typed accessors for raw YAML config mappings.

Every error names the dotted key it refers to (``vault.extensions[1]``), so a
bad config file can be fixed from the message alone.
"""

from __future__ import annotations

from typing import Any, Mapping


def get_section(raw: Mapping[str, Any], key: str, *, required: bool) -> Mapping[str, Any]:
    """Return one top-level section of the config.

    Args:
        raw: Root configuration mapping.
        key: Section name.
        required: Whether a missing section is an error.

    Returns:
        The section, or an empty mapping for a missing optional section.

    Raises:
        ValueError: If a required section is missing.
        TypeError: If the section is not a mapping.
    """
    section = raw.get(key)
    if section is None:
        if required:
            raise ValueError(f"Missing required config: {key}")
        return {}
    if not isinstance(section, Mapping):
        raise TypeError(f"{key} must be a mapping, got {type(section).__name__}")
    return section


def get_required_value(section: Mapping[str, Any], field: str, config_key: str) -> Any:
    try:
        return section[field]
    except KeyError:
        raise ValueError(f"Missing required config: {config_key}") from None


def _expect(value: Any, kind: type, config_key: str, label: str) -> Any:
    # bool is an int subclass; only accept it where a bool is asked for.
    if isinstance(value, bool) and kind is not bool:
        raise TypeError(f"{config_key} must be {label}")
    if not isinstance(value, kind):
        raise TypeError(f"{config_key} must be {label}")
    return value


def expect_str(value: Any, config_key: str) -> str:
    return _expect(value, str, config_key, "a string")


def expect_bool(value: Any, config_key: str) -> bool:
    return _expect(value, bool, config_key, "a boolean")


def expect_int(value: Any, config_key: str) -> int:
    return _expect(value, int, config_key, "an integer")


def expect_str_list(value: Any, config_key: str) -> list[str]:
    """Validate a list of strings; item errors name ``key[index]``."""
    _expect(value, list, config_key, "a list")
    return [expect_str(item, f"{config_key}[{idx}]") for idx, item in enumerate(value)]
