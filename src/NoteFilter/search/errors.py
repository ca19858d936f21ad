"""Query syntax errors raised while tokenizing or normalizing a query."""

from __future__ import annotations


class QuerySyntaxError(ValueError):
    """Base class for query text that cannot be turned into clauses.

    Attributes:
        position: Index in the query text the error refers to, if known.
    """

    def __init__(self, message: str, position: int | None = None) -> None:
        super().__init__(message)
        self.position = position


class UnterminatedQuoteError(QuerySyntaxError):
    """A ``"`` has no matching closing quote in the remaining input."""

    def __init__(self, position: int) -> None:
        super().__init__(f"Unterminated quote starting at index {position}", position)


class UnterminatedBracketError(QuerySyntaxError):
    """A ``[`` whose bracket depth never returns to zero."""

    def __init__(self, position: int) -> None:
        super().__init__(f"Unterminated '[' starting at index {position}", position)


class QueryTooComplexError(QuerySyntaxError):
    """DNF expansion produced more clauses than the configured cap."""

    def __init__(self, limit: int) -> None:
        super().__init__(f"Query expands to more than {limit} clauses")
        self.limit = limit
