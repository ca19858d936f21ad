"""Smoke test for NoteFilter CLI.

Run:
  python test/smoke_test.py

This script builds a throwaway vault and validates that the CLI can execute a
basic query and render at least one result.
"""

from __future__ import annotations

import sys
import tempfile
from pathlib import Path

from click.testing import CliRunner


REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = REPO_ROOT / "src"
sys.path.insert(0, str(SRC_DIR))


SMOKE_NOTE = """---
title: Smoke Test Note
status: active
tags: [smoke]
---
Just a test linking to [[Another Note]].
"""


def main() -> int:
    from NoteFilter.cli import cli

    with tempfile.TemporaryDirectory() as tmp:
        vault = Path(tmp)
        (vault / "inbox").mkdir()
        (vault / "inbox" / "smoke.md").write_text(SMOKE_NOTE, encoding="utf-8")
        (vault / "other.md").write_text("unrelated", encoding="utf-8")

        result = CliRunner().invoke(
            cli,
            ["search", "--vault", str(vault), "tag:smoke", "[status: active]", "ref:another"],
            catch_exceptions=False,
        )

    output = result.output
    assert result.exit_code == 0, output
    assert "Matched 1/2 records" in output, output
    assert "Smoke Test Note" in output, output
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
