"""Query language for filtering note records.

Query text is tokenized, parsed into a boolean tree, normalized into
disjunctive normal form, and compiled into a record predicate.
"""

from __future__ import annotations

from NoteFilter.search.errors import (
    QuerySyntaxError,
    QueryTooComplexError,
    UnterminatedBracketError,
    UnterminatedQuoteError,
)
from NoteFilter.search.evaluator import make_predicate
from NoteFilter.search.parser import parse_search_query
from NoteFilter.search.regex import RegexLiteral, parse_regex_literal
from NoteFilter.search.tokenizer import tokenize

__all__ = [
    "QuerySyntaxError",
    "QueryTooComplexError",
    "RegexLiteral",
    "UnterminatedBracketError",
    "UnterminatedQuoteError",
    "make_predicate",
    "parse_regex_literal",
    "parse_search_query",
    "tokenize",
]
