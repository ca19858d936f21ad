"""Predicate compiler for parsed queries.

Turns DNF clauses into ``predicate(record) -> bool``. A record matches when
every term of at least one clause holds. Terms are dispatched by field key:

- ``content``: body text
- ``title`` / ``file``: display title (explicit title, else file basename)
- ``path``: record path
- ``tag``: hierarchical tag match (``tag:work`` matches ``work/project``)
- ``references`` / ``reference`` / ``refs`` / ``ref``: outgoing references
- ``prop``: frontmatter lookup with an optional nested query expression
- ``default``: content OR display title
- any other key: the same-named record attribute, stringified

Evaluation never raises: invalid regexes and malformed property payloads
simply do not match.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from typing import Any, Final, Sequence

from NoteFilter.core.models import Term, display_title
from NoteFilter.core.query import Clause
from NoteFilter.search.errors import QuerySyntaxError
from NoteFilter.search.parser import parse_search_query
from NoteFilter.search.regex import matches_text, parse_regex_literal
from NoteFilter.utils.log import log

Predicate = Callable[[Any], bool]

_REFERENCE_KEYS: Final = frozenset({"references", "reference", "refs", "ref"})


def make_predicate(clauses: Sequence[Clause], *, default_key: str = "content") -> Predicate:
    """Compile DNF clauses into a record predicate.

    Args:
        clauses: OR over clauses, AND within each clause.
        default_key: Field that terms keyed ``"default"`` are tested against.

    Returns:
        Pure function from a record to a match result.
    """
    resolved_default = (default_key or "content").lower()
    frozen = tuple(tuple(clause) for clause in clauses)
    log.debug("Compiled predicate: clauses=%d default_key=%s", len(frozen), resolved_default)

    def predicate(record: Any) -> bool:
        if not frozen:
            return True
        return any(all(evaluate_term(record, term, resolved_default) for term in clause) for clause in frozen)

    return predicate


def evaluate_term(record: Any, term: Term, default_key: str = "content") -> bool:
    """Evaluate one term against a record, applying negation."""
    key = default_key if term.key == "default" else term.key
    value = term.value

    # A key typed without a value yet (e.g. "title:") must not hide everything.
    if key != "prop" and not (value or "").strip():
        return True

    ok = _test_field(record, key, value)
    return not ok if term.neg else ok


def _test_field(record: Any, key: str, value: str) -> bool:
    if key == "content":
        return matches_text(_attr_text(record, "content"), value)
    if key in ("title", "file"):
        return matches_text(display_title(record), value)
    if key == "path":
        return matches_text(_attr_text(record, "path"), value)
    if key == "tag":
        return _test_tag(getattr(record, "tags", None) or (), value)
    if key in _REFERENCE_KEYS:
        refs = value_to_strings(getattr(record, "references", None) or [])
        return any(matches_text(ref, value) for ref in refs)
    if key == "prop":
        return _test_prop(getattr(record, "frontmatter", None), value)
    if key == "default":
        return matches_text(_attr_text(record, "content"), value) or matches_text(display_title(record), value)
    return matches_text(stringify(getattr(record, key, None)), value)


def _test_tag(tags: Sequence[str], value: str) -> bool:
    normalized = [str(tag).lower() for tag in tags]
    literal = parse_regex_literal(value)
    if literal is not None:
        return any(literal.test(tag) or literal.test(f"#{tag}") for tag in normalized)

    query = value.removeprefix("#").strip().lower()
    if not query:
        return True
    return any(tag == query or tag.startswith(f"{query}/") for tag in normalized)


def _test_prop(frontmatter: Mapping[str, Any] | None, payload: str) -> bool:
    try:
        spec = json.loads(payload)
        name = str(spec.get("name") or "").strip().lower()
        expr = str(spec.get("expr") or "").strip()
    except (ValueError, AttributeError, TypeError) as error:
        log.debug("Malformed property payload %r: %s", payload, error)
        return False

    # "[]" while the name is still being typed.
    if not name:
        return True

    fm = frontmatter or {}
    fm_key = next((k for k in fm if str(k).lower() == name), None)
    if fm_key is None:
        return False
    if not expr:
        return True
    return eval_prop_expr(fm[fm_key], expr)


def eval_prop_expr(fm_value: Any, expr: str) -> bool:
    """Evaluate a nested property expression against one frontmatter value.

    The expression is parsed with the same query grammar. Every term is tested
    as substring or regex against a single flattened string of the value,
    regardless of its key, and the expression holds if any flattened string
    satisfies any clause in full.
    """
    try:
        clauses = parse_search_query(expr, "default").clauses
    except QuerySyntaxError as error:
        log.debug("Property expression %r not parseable: %s", expr, error)
        return False

    values = value_to_strings(fm_value)
    if not values:
        return False

    def holds(term: Term, text: str) -> bool:
        ok = matches_text(text, term.value)
        return not ok if term.neg else ok

    return any(
        all(holds(term, text) for term in clause)
        for clause in clauses
        for text in values
    )


def value_to_strings(value: Any) -> list[str]:
    """Flatten a metadata value into string representations.

    Lists flatten recursively, mappings serialize to one JSON string, None
    yields nothing, and everything else is stringified.
    """
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [text for item in value for text in value_to_strings(item)]
    if isinstance(value, Mapping):
        return [json.dumps(dict(value), ensure_ascii=False, separators=(",", ":"), default=str)]
    return [stringify(value)]


def stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    # YAML reads "5.0" as a float; whole numbers render without ".0".
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join(stringify(item) for item in value)
    if isinstance(value, Mapping):
        return json.dumps(dict(value), ensure_ascii=False, separators=(",", ":"), default=str)
    return str(value)


def _attr_text(record: Any, name: str) -> str:
    return stringify(getattr(record, name, None))
