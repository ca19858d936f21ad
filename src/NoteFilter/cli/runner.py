"""Command runner for coordinating CLI execution.

Manages component creation, logging configuration, and error handling for
command execution.
"""

from __future__ import annotations

from pathlib import Path

import click

from NoteFilter.cli.commands import ParseCommand, SearchCommand
from NoteFilter.config import AppConfig
from NoteFilter.renderers import create_output_writer
from NoteFilter.search.errors import QuerySyntaxError
from NoteFilter.services import create_filter_service
from NoteFilter.sources.vault import VaultSource
from NoteFilter.utils.log import configure_logging, log


class CommandRunner:
    """Orchestrates command execution.

    Handles logging configuration, component creation, and error handling
    for CLI commands.
    """

    def __init__(self, config: AppConfig) -> None:
        self.config = config

    def _configure_logging(self, action: str) -> None:
        log_path = configure_logging(
            level=self.config.runtime.level,
            action=action,
            log_to_file=self.config.runtime.to_file,
            log_dir=self.config.runtime.dir,
        )
        if log_path is not None:
            log.debug("Logging %s to %s", action, log_path)

    def run_search(
        self,
        action: str,
        query: str,
        *,
        vault: Path | None = None,
        default_key: str | None = None,
        tree: bool = False,
    ) -> None:
        """Execute the search command.

        Args:
            action: The CLI command name (e.g., 'search').
            query: Raw query text.
            vault: Optional override for ``vault.root``.
            default_key: Optional override for ``search.default_key``.
            tree: Also filter the folder hierarchy.

        Raises:
            click.Abort: When the query is invalid or the search fails.
        """
        self._configure_logging(action)
        try:
            output_writer = create_output_writer(self.config)
            command = SearchCommand(
                filter_service=create_filter_service(self.config, default_key=default_key),
                source=VaultSource(
                    root=vault or Path(self.config.vault.root).expanduser(),
                    extensions=self.config.vault.extensions,
                ),
                output_writer=output_writer,
                tree=tree,
            )
            command.execute(query)
            output_writer.finalize(action)
        except QuerySyntaxError as e:
            log.error("Invalid query: %s", e)
            raise click.Abort from e
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("Search failed: %s", e)
            raise click.Abort from e

    def run_parse(self, action: str, query: str) -> None:
        """Execute the parse command.

        Raises:
            click.Abort: When the query is invalid or parsing fails.
        """
        self._configure_logging(action)
        try:
            ParseCommand(filter_service=create_filter_service(self.config)).execute(query)
        except QuerySyntaxError as e:
            log.error("Invalid query: %s", e)
            raise click.Abort from e
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("Parse failed: %s", e)
            raise click.Abort from e
