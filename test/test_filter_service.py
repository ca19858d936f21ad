"""Tests for RecordFilterService on flat record lists and folder trees."""

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from NoteFilter.config import DEFAULT_CONFIG, merge_config_dicts, parse_config_dict
from NoteFilter.core.models import Record
from NoteFilter.search.errors import QuerySyntaxError, QueryTooComplexError, UnterminatedQuoteError
from NoteFilter.services import create_filter_service
from NoteFilter.services.filter import RecordFilterService
from NoteFilter.sources.vault import build_tree


def _records() -> list[Record]:
    return [
        Record(path="projects/alpha.md", content="alpha kickoff", tags=("work/project",)),
        Record(path="projects/beta.md", content="beta retro", tags=("work",)),
        Record(path="daily/2024-01-01.md", content="new year", frontmatter={"mood": "calm"}),
        Record(path="readme.md", content="vault overview"),
    ]


class TestFlatFilter(unittest.TestCase):
    def setUp(self) -> None:
        self.service = RecordFilterService()

    def test_keeps_input_order(self) -> None:
        matched = self.service.filter(_records(), "tag:work")
        self.assertEqual([r.path for r in matched], ["projects/alpha.md", "projects/beta.md"])

    def test_blank_query_matches_all(self) -> None:
        self.assertEqual(len(self.service.filter(_records(), "  ")), 4)

    def test_or_and_negation(self) -> None:
        matched = self.service.filter(_records(), "(kickoff OR year) -[mood]")
        self.assertEqual([r.path for r in matched], ["projects/alpha.md"])

    def test_bare_words_search_titles(self) -> None:
        matched = self.service.filter(_records(), "readme")
        self.assertEqual([r.path for r in matched], ["readme.md"])

    def test_default_key_restricts_bare_words(self) -> None:
        service = RecordFilterService(default_key="content")
        self.assertEqual(service.filter(_records(), "readme"), [])

    def test_syntax_errors_propagate(self) -> None:
        with self.assertRaises(UnterminatedQuoteError):
            self.service.filter(_records(), '"open')

    def test_clause_cap(self) -> None:
        service = RecordFilterService(max_clauses=2)
        with self.assertRaises(QueryTooComplexError):
            service.filter(_records(), "(a OR b) (c OR d)")
        self.assertTrue(issubclass(QueryTooComplexError, QuerySyntaxError))

    def test_zero_cap_is_unbounded(self) -> None:
        service = RecordFilterService(max_clauses=0)
        self.assertEqual(len(service.parse("(a OR b) (c OR d)").clauses), 4)


class TestTreeFilter(unittest.TestCase):
    def setUp(self) -> None:
        self.service = RecordFilterService()
        self.tree = build_tree(_records())

    def test_blank_query_shows_everything(self) -> None:
        result = self.service.filter_tree(self.tree, "")
        self.assertEqual(result.total, 6)
        self.assertEqual(result.visible, 6)
        self.assertEqual(result.visible_folders, 2)
        self.assertEqual(result.visible_leaves, 4)

    def test_empty_groups_show_everything(self) -> None:
        result = self.service.filter_tree(self.tree, "( )")
        self.assertEqual(result.visible, 6)
        self.assertEqual(result.visible_folders, 2)

    def test_tree_syntax_errors_propagate(self) -> None:
        with self.assertRaises(UnterminatedQuoteError):
            self.service.filter_tree(self.tree, '"open')

    def test_folder_visible_through_descendant(self) -> None:
        result = self.service.filter_tree(self.tree, "kickoff")
        self.assertEqual(result.visible_paths, frozenset({"projects", "projects/alpha.md"}))
        self.assertEqual(result.visible_leaves, 1)
        self.assertEqual(result.visible_folders, 1)
        self.assertTrue(result.is_visible("projects"))
        self.assertFalse(result.is_visible("daily"))

    def test_folders_are_not_matched_directly(self) -> None:
        result = self.service.filter_tree(self.tree, "path:projects -kickoff")
        self.assertEqual(result.visible_paths, frozenset({"projects", "projects/beta.md"}))

    def test_no_match_hides_everything(self) -> None:
        result = self.service.filter_tree(self.tree, "nothing-like-this")
        self.assertEqual(result.visible, 0)
        self.assertEqual(result.total, 6)

    def test_tree_is_left_untouched(self) -> None:
        before = [node.path for node in self.tree]
        self.service.filter_tree(self.tree, "kickoff")
        self.assertEqual([node.path for node in self.tree], before)
        self.assertEqual(len(self.tree[0].children), 2)


class TestServiceFactory(unittest.TestCase):
    def setUp(self) -> None:
        self.config = parse_config_dict(
            merge_config_dicts(DEFAULT_CONFIG, {"search": {"default_key": "Title", "max_clauses": 16}})
        )

    def test_uses_search_config(self) -> None:
        service = create_filter_service(self.config)
        self.assertEqual(service.default_key, "title")
        self.assertEqual(service.max_clauses, 16)

    def test_default_key_override(self) -> None:
        service = create_filter_service(self.config, default_key="Content")
        self.assertEqual(service.default_key, "content")

    def test_zero_max_clauses_disables_cap(self) -> None:
        config = parse_config_dict(merge_config_dicts(DEFAULT_CONFIG, {"search": {"max_clauses": 0}}))
        self.assertIsNone(create_filter_service(config).max_clauses)


if __name__ == "__main__":
    unittest.main()
