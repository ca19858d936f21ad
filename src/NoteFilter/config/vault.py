"""Vault domain configuration (where notes are read from)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from NoteFilter.config.common import expect_str, expect_str_list, get_required_value, get_section


@dataclass(frozen=True, slots=True)
class VaultConfig:
    """Store validated vault location settings."""

    root: str
    extensions: tuple[str, ...]


def load_vault(raw: Mapping[str, Any]) -> VaultConfig:
    """Load vault domain config from raw mapping.

    Raises:
        TypeError: If config types are invalid.
        ValueError: If required keys are missing.
    """
    section = get_section(raw, "vault", required=True)
    extensions = expect_str_list(
        get_required_value(section, "extensions", "vault.extensions"),
        "vault.extensions",
    )
    return VaultConfig(
        root=expect_str(get_required_value(section, "root", "vault.root"), "vault.root"),
        extensions=tuple(ext.strip().lower() for ext in extensions if ext.strip()),
    )


def check_vault(config: VaultConfig) -> None:
    """Validate vault domain constraints.

    Raises:
        ValueError: If values violate vault constraints.
    """
    if not config.root.strip():
        raise ValueError("vault.root must not be empty")
    if not config.extensions:
        raise ValueError("vault.extensions must include at least one suffix")
    for ext in config.extensions:
        if not ext.startswith("."):
            raise ValueError(f"vault.extensions entries must start with '.': {ext}")
