"""Tests for query parsing into disjunctive normal form."""

import json
import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from NoteFilter.core.models import Term
from NoteFilter.search.errors import QueryTooComplexError
from NoteFilter.search.parser import BinaryNode, TermNode, build_ast, parse_search_query, to_dnf
from NoteFilter.search.tokenizer import tokenize


def _parse(text: str) -> list[list[Term]]:
    return [list(clause) for clause in parse_search_query(text, "default").clauses]


def _t(value: str, neg: bool = False, key: str = "default") -> Term:
    return Term(key, value, neg)


class TestParseSearchQuery(unittest.TestCase):
    def test_whitespace_is_implicit_and(self) -> None:
        self.assertEqual(_parse("alpha beta"), [[_t("alpha"), _t("beta")]])

    def test_and_distributes_over_grouped_or(self) -> None:
        self.assertEqual(
            _parse("alpha (beta OR gamma)"),
            [[_t("alpha"), _t("beta")], [_t("alpha"), _t("gamma")]],
        )

    def test_negated_terms(self) -> None:
        self.assertEqual(_parse("alpha -beta"), [[_t("alpha"), _t("beta", True)]])

    def test_quoted_phrase(self) -> None:
        self.assertEqual(_parse('"exact phrase"'), [[_t("exact phrase")]])

    def test_property_bracket(self) -> None:
        clauses = _parse("[status: active]")
        self.assertEqual(len(clauses), 1)
        self.assertEqual(len(clauses[0]), 1)
        term = clauses[0][0]
        self.assertEqual(term.key, "prop")
        self.assertFalse(term.neg)
        self.assertEqual(json.loads(term.value), {"name": "status", "expr": "active"})

    def test_field_with_quoted_value(self) -> None:
        self.assertEqual(_parse('title:"daily note"'), [[_t("daily note", key="title")]])

    def test_regex_literal_term(self) -> None:
        self.assertEqual(_parse("/foo.*/i"), [[_t("/foo.*/i")]])

    def test_empty_query_is_single_empty_clause(self) -> None:
        self.assertEqual(_parse(""), [[]])
        self.assertEqual(_parse("   "), [[]])
        self.assertTrue(parse_search_query("").is_match_all)

    def test_and_binds_tighter_than_or(self) -> None:
        self.assertEqual(_parse("a OR b c"), [[_t("a")], [_t("b"), _t("c")]])
        self.assertEqual(_parse("a b OR c"), [[_t("a"), _t("b")], [_t("c")]])

    def test_or_is_left_associative_and_ordered(self) -> None:
        self.assertEqual(_parse("a OR b OR c"), [[_t("a")], [_t("b")], [_t("c")]])

    def test_product_of_two_groups(self) -> None:
        self.assertEqual(
            _parse("(a OR b) (c OR d)"),
            [
                [_t("a"), _t("c")],
                [_t("a"), _t("d")],
                [_t("b"), _t("c")],
                [_t("b"), _t("d")],
            ],
        )

    def test_lowercase_or(self) -> None:
        self.assertEqual(_parse("a or b"), [[_t("a")], [_t("b")]])

    def test_dangling_or_is_dropped(self) -> None:
        self.assertEqual(_parse("a OR"), [[_t("a")]])
        self.assertEqual(_parse("OR a"), [[_t("a")]])
        self.assertEqual(_parse("a OR OR b"), [[_t("a")], [_t("b")]])

    def test_unbalanced_parentheses_are_tolerated(self) -> None:
        self.assertEqual(_parse("(a b"), [[_t("a"), _t("b")]])
        self.assertEqual(_parse("a (b"), [[_t("a"), _t("b")]])
        self.assertEqual(_parse("a b)"), [[_t("a"), _t("b")]])
        self.assertEqual(_parse("()"), [[]])

    def test_negated_group_keeps_inner_terms_positive(self) -> None:
        self.assertEqual(_parse("-(a OR b)"), [[_t("a")], [_t("b")]])

    def test_mixed_fields_keep_keys(self) -> None:
        self.assertEqual(
            _parse("tag:work -path:archive"),
            [[_t("work", key="tag"), _t("archive", True, key="path")]],
        )

    def test_default_key_argument(self) -> None:
        self.assertEqual(
            [list(c) for c in parse_search_query("alpha", "content").clauses],
            [[_t("alpha", key="content")]],
        )

    def test_payload_is_serializable(self) -> None:
        payload = parse_search_query("alpha -beta").to_payload()
        self.assertEqual(
            payload,
            [
                [
                    {"key": "default", "value": "alpha", "neg": False},
                    {"key": "default", "value": "beta", "neg": True},
                ]
            ],
        )
        self.assertEqual(json.loads(json.dumps(payload)), payload)

    def test_keys_lowercase_and_values_unquoted(self) -> None:
        for text in ['Title:"A b"', 'PATH:x "y z"', '"q" TAG:"w"']:
            for clause in parse_search_query(text).clauses:
                for term in clause:
                    self.assertEqual(term.key, term.key.lower())
                    self.assertFalse(term.value.startswith('"') and term.value.endswith('"'))


class TestClauseCap(unittest.TestCase):
    QUERY = "(a OR b) (c OR d) (e OR f)"

    def test_unbounded_by_default(self) -> None:
        self.assertEqual(len(parse_search_query(self.QUERY).clauses), 8)

    def test_cap_allows_exact_fit(self) -> None:
        self.assertEqual(len(parse_search_query(self.QUERY, max_clauses=8).clauses), 8)

    def test_cap_exceeded_raises(self) -> None:
        with self.assertRaises(QueryTooComplexError) as ctx:
            parse_search_query(self.QUERY, max_clauses=4)
        self.assertEqual(ctx.exception.limit, 4)


class TestTreeBuilding(unittest.TestCase):
    def test_ast_shape(self) -> None:
        tree = build_ast(tokenize("a b OR c"))
        self.assertIsInstance(tree, BinaryNode)
        self.assertEqual(tree.op, "OR")
        self.assertEqual(tree.left.op, "AND")
        self.assertEqual(tree.right, TermNode(_t("c")))

    def test_no_terms_gives_no_tree(self) -> None:
        self.assertIsNone(build_ast(tokenize("( )")))
        self.assertEqual(to_dnf(None), [()])

    def test_long_flat_and_query(self) -> None:
        words = [f"w{i}" for i in range(1200)]
        clauses = parse_search_query(" ".join(words)).clauses
        self.assertEqual(len(clauses), 1)
        self.assertEqual([term.value for term in clauses[0]], words)

    def test_long_flat_or_query(self) -> None:
        words = [f"w{i}" for i in range(1200)]
        clauses = parse_search_query(" OR ".join(words)).clauses
        self.assertEqual([[term.value for term in clause] for clause in clauses], [[w] for w in words])

    def test_long_or_query_respects_cap(self) -> None:
        with self.assertRaises(QueryTooComplexError):
            parse_search_query(" OR ".join(f"w{i}" for i in range(1200)), max_clauses=1024)


if __name__ == "__main__":
    unittest.main()
