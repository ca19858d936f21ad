from __future__ import annotations

import re
from dataclasses import dataclass
from dataclasses import field
from types import MappingProxyType
from typing import Any, Mapping, Optional, Sequence

_EXTENSION_RE = re.compile(r"\.[^./]+$")


@dataclass(frozen=True, slots=True)
class Term:
    """One atomic comparison produced by the query parser.

    Attributes:
        key: Lowercase field name, or the sentinel ``"default"``.
        value: Operand text, already unquoted and unescaped. May encode a
            regex literal (``/pattern/flags``) or, for ``prop`` terms, a
            JSON ``{"name": ..., "expr": ...}`` payload.
        neg: Whether the term result is complemented.
    """

    key: str
    value: str
    neg: bool = False

    def to_payload(self) -> dict[str, Any]:
        return {"key": self.key, "value": self.value, "neg": self.neg}


@dataclass(frozen=True, slots=True)
class Record:
    """Read-only note record evaluated by compiled predicates.

    Attributes:
        path: Vault-relative path, ``/`` separated.
        content: Body text.
        title: Explicit title (e.g. from frontmatter) if any.
        frontmatter: Metadata mapping; values may be scalars, lists or mappings.
        tags: Normalized tags, lowercase and without a leading ``#``.
        references: Outgoing reference identifiers.
    """

    path: str
    content: str = ""
    title: Optional[str] = None
    frontmatter: Mapping[str, Any] = field(default_factory=dict)
    tags: Sequence[str] = ()
    references: Sequence[str] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "frontmatter", MappingProxyType(dict(self.frontmatter or {})))
        object.__setattr__(self, "tags", tuple(self.tags or ()))
        object.__setattr__(self, "references", tuple(self.references or ()))

    @property
    def display_title(self) -> str:
        return display_title(self)


@dataclass(frozen=True, slots=True)
class RecordNode:
    """Node of the record hierarchy.

    Leaves wrap a note record; folder nodes wrap an empty record carrying the
    folder path so that every node can be evaluated uniformly.
    """

    record: Record
    children: Sequence[RecordNode] = ()
    is_leaf: bool = True

    @property
    def path(self) -> str:
        return self.record.path


def display_title(record: Any) -> str:
    """Return the explicit title, or the last path segment without its extension."""
    title = getattr(record, "title", None)
    if title:
        return str(title)
    base = str(getattr(record, "path", "") or "").split("/")[-1]
    return _EXTENSION_RE.sub("", base)
