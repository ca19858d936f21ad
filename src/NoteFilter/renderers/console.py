"""Console text output renderers.

Renders a list of `Record` into human-friendly text.
Provides ConsoleOutputWriter implementation for command output.
"""

from __future__ import annotations

from typing import Iterable

from NoteFilter.core.models import Record
from NoteFilter.renderers.base import OutputWriter
from NoteFilter.utils.log import log


def render_text(records: Iterable[Record]) -> str:
    """Render records into a human-readable text block.

    Args:
        records: Iterable of records.

    Returns:
        A formatted string ready to be printed.
    """
    lines: list[str] = []
    for idx, record in enumerate(records, start=1):
        lines.append(f"{idx}. {record.display_title}")
        lines.append(f"   Path: {record.path}")
        if record.tags:
            lines.append(f"   Tags: {', '.join('#' + tag for tag in record.tags)}")
        if record.references:
            lines.append(f"   Refs: {', '.join(record.references)}")
        lines.append("")
    if not lines:
        return "No matching notes.\n"
    return "\n".join(lines).rstrip() + "\n"


class ConsoleOutputWriter(OutputWriter):
    """Write results to console via logging."""

    def write_query_result(self, records: list[Record], query: str) -> None:
        log.info("query=%s matches=%d", query, len(records))
        for line in render_text(records).splitlines():
            log.info(line)

    def finalize(self, action: str) -> None:
        """No-op for console output."""
