"""Package logger for NoteFilter.

Every module logs through ``log``. ``configure_logging`` runs once per CLI
action and replaces whatever handlers a previous call installed.

Line format: ``mm-dd HH:MM:SS [LVL] message`` where LVL is one of
DEBG/INFO/WARN/ERRO.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Final

log = logging.getLogger("NoteFilter")

_LEVEL_TAGS: Final[dict[int, str]] = {
    logging.DEBUG: "DEBG",
    logging.INFO: "INFO",
    logging.WARNING: "WARN",
    logging.ERROR: "ERRO",
    logging.CRITICAL: "ERRO",
}
_LINE_FORMAT: Final = "%(asctime)s [%(levelabbr)s] %(message)s"
_DATE_FORMAT: Final = "%m-%d %H:%M:%S"


class _TaggedFormatter(logging.Formatter):
    def __init__(self) -> None:
        super().__init__(fmt=_LINE_FORMAT, datefmt=_DATE_FORMAT)

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 - stdlib method name
        record.levelabbr = _LEVEL_TAGS.get(record.levelno, record.levelname[:4])
        return super().format(record)


def log_file_path(log_dir: str, action: str) -> Path:
    """Return ``<log_dir>/<action>/<action>_<mmddHHMMSS>.log``."""
    stamp = datetime.now().strftime("%m%d%H%M%S")
    return Path(log_dir or "log") / action / f"{action}_{stamp}.log"


def configure_logging(
    *,
    level: str = "INFO",
    action: str | None = None,
    log_to_file: bool = False,
    log_dir: str = "log",
) -> Path | None:
    """Install console and optional file handlers on the package logger.

    The console handler honours ``level``. The file handler, when enabled,
    always records DEBUG so evaluation traces survive a quiet console.

    Args:
        level: Console level name (e.g. INFO, DEBUG).
        action: CLI action name; required for file logging.
        log_to_file: Whether to mirror logs to a per-action file.
        log_dir: Base directory for log files.

    Returns:
        Path of the log file when file logging is active, else None.
    """
    console_level = logging.getLevelName((level or "INFO").upper())
    if not isinstance(console_level, int):
        console_level = logging.INFO
    formatter = _TaggedFormatter()

    for handler in list(log.handlers):
        log.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setLevel(console_level)
    console.setFormatter(formatter)
    log.addHandler(console)

    path: Path | None = None
    if log_to_file and action:
        path = log_file_path(log_dir, action)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        log.addHandler(file_handler)

    log.setLevel(logging.DEBUG if path else console_level)
    log.propagate = False
    return path
