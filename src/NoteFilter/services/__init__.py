"""Service layer for NoteFilter.

Provides the record filter service and a factory building it from config.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from NoteFilter.services.filter import FilterResult, RecordFilterService

if TYPE_CHECKING:
    from NoteFilter.config import AppConfig


def create_filter_service(config: AppConfig, *, default_key: str | None = None) -> RecordFilterService:
    """Create a filter service from configuration.

    Args:
        config: Application configuration.
        default_key: Optional override for ``search.default_key``.

    Returns:
        Configured RecordFilterService instance.
    """
    return RecordFilterService(
        default_key=(default_key or config.search.default_key).lower(),
        max_clauses=config.search.max_clauses or None,
    )


__all__ = [
    "FilterResult",
    "RecordFilterService",
    "create_filter_service",
]
