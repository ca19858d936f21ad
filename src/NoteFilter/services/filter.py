"""Filter service applying a query to flat record lists and record trees."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from NoteFilter.core.models import Record, RecordNode
from NoteFilter.core.query import ParseResult
from NoteFilter.search.evaluator import Predicate, make_predicate
from NoteFilter.search.parser import parse_search_query
from NoteFilter.utils.log import log


@dataclass(frozen=True, slots=True)
class FilterResult:
    """Visibility of a record tree after filtering.

    Attributes:
        visible_paths: Paths of every visible node, leaves and folders.
        total: Number of nodes in the tree.
        visible: Number of visible nodes.
        visible_leaves: Visible leaf (note) nodes.
        visible_folders: Visible folder nodes.
    """

    visible_paths: frozenset[str]
    total: int
    visible: int
    visible_leaves: int
    visible_folders: int

    def is_visible(self, path: str) -> bool:
        return path in self.visible_paths


@dataclass(slots=True)
class RecordFilterService:
    """Parse queries and apply them to records.

    Attributes:
        default_key: Field that bare words and phrases are tested against.
        max_clauses: Optional cap on DNF expansion; None or 0 disables it.
    """

    default_key: str = "default"
    max_clauses: int | None = None

    def parse(self, query: str) -> ParseResult:
        """Parse query text.

        Raises:
            QuerySyntaxError: If the text cannot be tokenized or is too complex.
        """
        return parse_search_query(query, "default", max_clauses=self.max_clauses or None)

    def compile(self, query: str) -> Predicate:
        return make_predicate(self.parse(query).clauses, default_key=self.default_key)

    def filter(self, records: Iterable[Record], query: str) -> list[Record]:
        """Return records matching ``query`` in input order.

        Args:
            records: Records to scan.
            query: Raw query text.

        Returns:
            Matching records.
        """
        predicate = self.compile(query)
        items = list(records)
        matched = [record for record in items if predicate(record)]
        log.info("Matched %d/%d records", len(matched), len(items))
        return matched

    def filter_tree(self, roots: Sequence[RecordNode], query: str) -> FilterResult:
        """Compute node visibility for a record hierarchy.

        A leaf is visible iff it matches; a folder is visible iff any
        descendant is visible. A query that matches everything (blank, or
        only empty groups) shows every node.

        Args:
            roots: Top-level nodes.
            query: Raw query text.

        Returns:
            Visibility summary; the tree itself is left untouched.
        """
        parsed = self.parse(query)
        if parsed.is_match_all:
            predicate = None
        else:
            predicate = make_predicate(parsed.clauses, default_key=self.default_key)

        visible: set[str] = set()
        counts = {"total": 0, "leaves": 0, "folders": 0}

        def walk(node: RecordNode) -> bool:
            counts["total"] += 1
            is_match = predicate is None or (node.is_leaf and predicate(node.record))
            children_match = False
            for child in node.children:
                children_match = walk(child) or children_match
            shown = is_match or children_match
            if shown:
                visible.add(node.path)
                counts["leaves" if node.is_leaf else "folders"] += 1
            return shown

        for root in roots:
            walk(root)

        result = FilterResult(
            visible_paths=frozenset(visible),
            total=counts["total"],
            visible=counts["leaves"] + counts["folders"],
            visible_leaves=counts["leaves"],
            visible_folders=counts["folders"],
        )
        log.info(
            "Tree filter: total=%d visible=%d (leaves=%d, folders=%d)",
            result.total,
            result.visible,
            result.visible_leaves,
            result.visible_folders,
        )
        return result
