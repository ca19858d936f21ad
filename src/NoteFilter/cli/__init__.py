"""CLI package for NoteFilter command orchestration.

This package contains the modular CLI components for the search and parse
commands, factored into separate modules for maintainability and
testability.
"""

from __future__ import annotations

__all__ = ["CommandRunner", "cli", "main"]

from dotenv import load_dotenv

from NoteFilter.cli.runner import CommandRunner
from NoteFilter.cli.ui import cli


def main() -> None:
    """Run NoteFilter CLI.

    Entry point referenced by console script in pyproject.toml. Loads a
    ``.env`` file first so ``NOTEFILTER_CONFIG`` / ``NOTEFILTER_VAULT`` can
    be set there.
    """
    load_dotenv()
    cli()
