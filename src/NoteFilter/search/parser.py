"""Query parser and DNF normalizer.

Builds a boolean expression tree from the token stream with a shunting-yard
pass (implicit AND between adjacent operands, explicit OR, parentheses; AND
binds tighter than OR), then flattens the tree into disjunctive normal form.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Union

from NoteFilter.core.models import Term
from NoteFilter.core.query import Clause, ParseResult
from NoteFilter.search.errors import QueryTooComplexError
from NoteFilter.search.tokenizer import LPAREN, OR, RPAREN, TERM, Token, tokenize
from NoteFilter.utils.log import log

AND = "AND"


@dataclass(frozen=True, slots=True)
class TermNode:
    term: Term


@dataclass(frozen=True, slots=True)
class BinaryNode:
    op: str
    left: Node
    right: Node


Node = Union[TermNode, BinaryNode]


def parse_search_query(
    text: str,
    default_key: str = "default",
    *,
    max_clauses: int | None = None,
) -> ParseResult:
    """Parse query text into DNF clauses.

    Args:
        text: Raw query text.
        default_key: Key assigned to bare words and phrases.
        max_clauses: Optional cap on the number of DNF clauses.

    Returns:
        Parsed query. Empty input yields one empty (match-all) clause.

    Raises:
        UnterminatedQuoteError: If a quote never closes.
        UnterminatedBracketError: If a property bracket never closes.
        QueryTooComplexError: If ``max_clauses`` is set and exceeded.
    """
    tree = build_ast(tokenize(text, default_key))
    clauses = to_dnf(tree, max_clauses=max_clauses)
    log.debug("Parsed query %r into %d clause(s)", text, len(clauses))
    return ParseResult(clauses=tuple(clauses))


def build_ast(tokens: Sequence[Token]) -> Node | None:
    """Build an expression tree from tokens.

    Unbalanced parentheses and operators missing an operand are tolerated:
    a stray ``)`` reduces what it can, an unclosed ``(`` is discarded at the
    end, and a dangling ``OR`` is dropped.

    Returns:
        Root node, or None if the token stream holds no terms.
    """
    out: list[Node] = []
    ops: list[str] = []
    prev_operand = False

    def reduce_top() -> None:
        op = ops.pop()
        if len(out) < 2:
            return
        right = out.pop()
        left = out.pop()
        out.append(BinaryNode(op, left, right))

    def push_implicit_and() -> None:
        while ops and ops[-1] == AND:
            reduce_top()
        ops.append(AND)

    for token in tokens:
        if token.kind == TERM:
            if prev_operand:
                push_implicit_and()
            out.append(TermNode(token.term))
            prev_operand = True
        elif token.kind == OR:
            while ops and ops[-1] in (AND, OR):
                reduce_top()
            ops.append(OR)
            prev_operand = False
        elif token.kind == LPAREN:
            if prev_operand:
                push_implicit_and()
            ops.append(LPAREN)
            prev_operand = False
        elif token.kind == RPAREN:
            while ops and ops[-1] != LPAREN:
                reduce_top()
            if ops:
                ops.pop()
            prev_operand = True

    while ops:
        if ops[-1] == LPAREN:
            ops.pop()
            continue
        reduce_top()

    # Operands left over after a discarded "(" are implicitly ANDed.
    while len(out) > 1:
        right = out.pop()
        out[-1] = BinaryNode(AND, out[-1], right)
    return out[0] if out else None


def to_dnf(node: Node | None, *, max_clauses: int | None = None) -> list[Clause]:
    """Flatten a tree into an OR of AND-clauses.

    AND distributes as the cartesian product of its sides' clauses (left
    clause terms first); OR concatenates them. The walk is post-order over an
    explicit stack, so flat queries of any length stay within the
    interpreter's recursion limit.

    Raises:
        QueryTooComplexError: If ``max_clauses`` is set and any intermediate
            clause list exceeds it.
    """
    if node is None:
        return [()]

    done: list[list[Clause]] = []
    stack: list[tuple[Node, bool]] = [(node, False)]
    while stack:
        current, children_done = stack.pop()
        if isinstance(current, TermNode):
            done.append([(current.term,)])
        elif not children_done:
            stack.append((current, True))
            stack.append((current.right, False))
            stack.append((current.left, False))
        else:
            right = done.pop()
            left = done.pop()
            done.append(_combine(current.op, left, right, max_clauses))
    return done[0]


def _combine(op: str, left: list[Clause], right: list[Clause], max_clauses: int | None) -> list[Clause]:
    size = len(left) + len(right) if op == OR else len(left) * len(right)
    if max_clauses and size > max_clauses:
        raise QueryTooComplexError(max_clauses)
    if op == OR:
        left.extend(right)
        return left
    return [lc + rc for lc in left for rc in right]
