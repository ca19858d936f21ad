"""Search domain configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from NoteFilter.config.common import expect_int, expect_str, get_required_value, get_section

_ALLOWED_DEFAULT_KEYS = {
    "default",
    "content",
    "title",
    "file",
    "path",
    "tag",
    "references",
    "reference",
    "refs",
    "ref",
}


@dataclass(frozen=True, slots=True)
class SearchConfig:
    """Store validated query evaluation settings.

    Attributes:
        default_key: Field bare words are tested against; ``default`` means
            content OR title.
        max_clauses: DNF clause cap; 0 disables the cap.
    """

    default_key: str
    max_clauses: int


def load_search(raw: Mapping[str, Any]) -> SearchConfig:
    """Load search domain config from raw mapping.

    Raises:
        TypeError: If config types are invalid.
        ValueError: If required keys are missing.
    """
    section = get_section(raw, "search", required=True)
    return SearchConfig(
        default_key=expect_str(
            get_required_value(section, "default_key", "search.default_key"),
            "search.default_key",
        )
        .strip()
        .lower(),
        max_clauses=expect_int(
            get_required_value(section, "max_clauses", "search.max_clauses"),
            "search.max_clauses",
        ),
    )


def check_search(config: SearchConfig) -> None:
    """Validate search domain constraints.

    Raises:
        ValueError: If values violate search constraints.
    """
    if config.default_key not in _ALLOWED_DEFAULT_KEYS:
        raise ValueError(f"search.default_key must be one of {sorted(_ALLOWED_DEFAULT_KEYS)}")
    if config.max_clauses < 0:
        raise ValueError("search.max_clauses must be 0 (unlimited) or positive")
