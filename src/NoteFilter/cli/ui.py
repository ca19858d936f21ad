"""Click CLI interface definitions.

Defines the command-line interface structure and routes commands
to their respective runners.
"""

from __future__ import annotations

from pathlib import Path

import click

from NoteFilter.cli.runner import CommandRunner
from NoteFilter.config import load_config


@click.group(help="NoteFilter: filter Markdown notes with a boolean query language.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False, exists=True),
    default=None,
    envvar="NOTEFILTER_CONFIG",
    help="Path to YAML config file (merged over built-in defaults).",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None) -> None:
    """CLI entry group.

    Args:
        ctx: Click context.
        config_path: Optional path to YAML config file.
    """
    ctx.obj = load_config(config_path)


@cli.command("search")
@click.argument("query", nargs=-1)
@click.option(
    "--vault",
    type=click.Path(path_type=Path, file_okay=False, exists=True),
    default=None,
    envvar="NOTEFILTER_VAULT",
    help="Vault directory; overrides vault.root.",
)
@click.option("--default-key", default=None, help="Field bare words match; overrides search.default_key.")
@click.option("--tree", is_flag=True, help="Also report visible folders of the note hierarchy.")
@click.pass_context
def search_cmd(
    ctx: click.Context,
    query: tuple[str, ...],
    vault: Path | None,
    default_key: str | None,
    tree: bool,
) -> None:
    """Print notes matching QUERY.

    Words of QUERY are joined with spaces; quote the whole query to keep
    phrases and brackets intact.
    """
    runner = CommandRunner(ctx.obj)
    runner.run_search(ctx.command.name, " ".join(query), vault=vault, default_key=default_key, tree=tree)


@cli.command("parse")
@click.argument("query", nargs=-1)
@click.pass_context
def parse_cmd(ctx: click.Context, query: tuple[str, ...]) -> None:
    """Print the normalized (OR of AND-clauses) form of QUERY as JSON."""
    runner = CommandRunner(ctx.obj)
    runner.run_parse(ctx.command.name, " ".join(query))
