"""Writer interface shared by every output format.

Commands hand matched records to an ``OutputWriter`` and call ``finalize``
once the action is done; file-backed writers flush there.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence

from NoteFilter.core.models import Record


class OutputWriter(ABC):
    """Sink for the records matched by a query."""

    @abstractmethod
    def write_query_result(self, records: list[Record], query: str) -> None:
        """Accept the matches of one query.

        Args:
            records: Matching records in vault order.
            query: Raw query text that produced them.
        """

    @abstractmethod
    def finalize(self, action: str) -> None:
        """Flush anything buffered for the CLI action ``action``."""


@dataclass(slots=True)
class MultiOutputWriter(OutputWriter):
    """Fan results out to several writers, in configuration order."""

    writers: Sequence[OutputWriter]

    def write_query_result(self, records: list[Record], query: str) -> None:
        for writer in self.writers:
            writer.write_query_result(records, query)

    def finalize(self, action: str) -> None:
        for writer in self.writers:
            writer.finalize(action)
