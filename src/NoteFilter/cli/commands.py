"""Command implementations for NoteFilter CLI.

Encapsulates business logic for the search and parse commands, separated
from CLI parameter handling and output formatting.
"""

from __future__ import annotations

import json
from dataclasses import dataclass

import click

from NoteFilter.renderers import OutputWriter
from NoteFilter.services.filter import RecordFilterService
from NoteFilter.sources.vault import VaultSource, build_tree
from NoteFilter.utils.log import log


@dataclass(slots=True)
class SearchCommand:
    """Filter vault notes with one query.

    Loads records from the vault source, applies the query, and delegates
    matches to the output writer. In tree mode the folder hierarchy is
    filtered as well and visible folders are logged.
    """

    filter_service: RecordFilterService
    source: VaultSource
    output_writer: OutputWriter
    tree: bool = False

    def execute(self, query: str) -> None:
        records = self.source.load_records()
        log.debug("Running query=%r default_key=%s", query, self.filter_service.default_key)

        matched = self.filter_service.filter(records, query)
        self.output_writer.write_query_result(matched, query)

        if self.tree:
            result = self.filter_service.filter_tree(build_tree(records), query)
            for path in sorted(result.visible_paths):
                log.info("visible: %s", path)


@dataclass(slots=True)
class ParseCommand:
    """Print the DNF form of a query as JSON."""

    filter_service: RecordFilterService

    def execute(self, query: str) -> None:
        parsed = self.filter_service.parse(query)
        click.echo(json.dumps(parsed.to_payload(), ensure_ascii=False, indent=2))
