"""JSON output renderers.

Renders a list of `Record` into JSON-serializable objects.
Provides JsonFileWriter implementation for command output.
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Iterable

from NoteFilter.core.models import Record
from NoteFilter.renderers.base import OutputWriter
from NoteFilter.utils.log import log


def render_json(records: Iterable[Record]) -> list[dict]:
    """Render records into JSON-serializable Python objects.

    Frontmatter values that JSON cannot represent (dates, for instance) are
    stringified.
    """
    out: list[dict] = []
    for record in records:
        out.append(
            {
                "path": record.path,
                "title": record.display_title,
                "tags": list(record.tags),
                "references": list(record.references),
                "frontmatter": json.loads(json.dumps(dict(record.frontmatter), ensure_ascii=False, default=str)),
            }
        )
    return out


class JsonFileWriter(OutputWriter):
    """Accumulate results and write to JSON file on finalize."""

    def __init__(self, base_dir: str) -> None:
        """Initialize JSON writer.

        Args:
            base_dir: Base output directory.
        """
        self.output_dir = Path(base_dir) / "json"
        self.all_results: list[dict] = []

    def write_query_result(self, records: list[Record], query: str) -> None:
        self.all_results.append({"query": query, "records": render_json(records)})

    def finalize(self, action: str) -> None:
        """Write accumulated results to ``<base_dir>/json/<action>_<timestamp>.json``."""
        if not self.all_results:
            return
        self.output_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        output_path = self.output_dir / f"{action}_{timestamp}.json"
        output_path.write_text(json.dumps(self.all_results, ensure_ascii=False, indent=2), encoding="utf-8")
        log.info("JSON saved to %s", output_path)
