"""Output writers for matched notes.

``create_output_writer`` picks console and/or JSON writers from
``output.formats``.
"""

from __future__ import annotations

from NoteFilter.config import AppConfig
from NoteFilter.renderers.base import MultiOutputWriter, OutputWriter
from NoteFilter.renderers.console import ConsoleOutputWriter, render_text
from NoteFilter.renderers.json import JsonFileWriter, render_json


def create_output_writer(config: AppConfig) -> OutputWriter:
    """Build the writer for the configured formats.

    Raises:
        ValueError: If ``output.formats`` names no known writer.
    """
    writers: list[OutputWriter] = []
    for fmt in config.output.formats:
        if fmt == "console":
            writers.append(ConsoleOutputWriter())
        elif fmt == "json":
            writers.append(JsonFileWriter(config.output.base_dir))

    if not writers:
        raise ValueError("No output writers configured")
    return writers[0] if len(writers) == 1 else MultiOutputWriter(writers)


__all__ = [
    "ConsoleOutputWriter",
    "JsonFileWriter",
    "MultiOutputWriter",
    "OutputWriter",
    "create_output_writer",
    "render_json",
    "render_text",
]
