from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from NoteFilter.core.models import Term

Clause = tuple[Term, ...]


@dataclass(frozen=True, slots=True)
class ParseResult:
    """Query in disjunctive normal form.

    A record matches when every term of at least one clause holds. The empty
    query is a single clause with no terms, which matches everything.

    Attributes:
        clauses: OR over clauses; each clause is an AND over its terms.
    """

    clauses: Sequence[Clause]

    @property
    def is_match_all(self) -> bool:
        return not self.clauses or any(len(clause) == 0 for clause in self.clauses)

    def to_payload(self) -> list[list[dict[str, Any]]]:
        """Return the JSON-serializable ``[[{key, value, neg}]]`` form."""
        return [[term.to_payload() for term in clause] for clause in self.clauses]
