"""Query tokenizer.

Scans raw query text once, left to right, into a flat token stream:

- ``key:value`` field terms (value may be quoted and span words)
- ``"exact phrase"`` with ``\\"`` escapes
- bare words
- negation via a leading ``-``
- ``OR`` (case-insensitive)
- ``(`` and ``)`` for grouping
- property filters ``[prop]`` and ``[prop: expression]``, where the expression
  is itself a query and is carried through as text
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Final

from NoteFilter.core.models import Term
from NoteFilter.search.errors import UnterminatedBracketError, UnterminatedQuoteError

TERM: Final = "TERM"
OR: Final = "OR"
LPAREN: Final = "LP"
RPAREN: Final = "RP"

_WORD_STOPS: Final = frozenset("()[]")


@dataclass(frozen=True, slots=True)
class Token:
    kind: str
    term: Term | None = None


def tokenize(text: str, default_key: str = "default") -> list[Token]:
    """Split query text into tokens.

    Args:
        text: Raw query text.
        default_key: Key assigned to bare words and phrases.

    Returns:
        Token list in input order.

    Raises:
        UnterminatedQuoteError: If a quoted phrase or quoted field value never closes.
        UnterminatedBracketError: If a property bracket never closes.
    """
    return _Scanner(text, default_key.lower()).scan()


def encode_prop(name: str, expr: str | None = None) -> str:
    """Serialize a property filter payload as carried in ``prop`` term values."""
    payload = {"name": name}
    if expr is not None:
        payload["expr"] = expr
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))


def split_top_level_colon(inner: str) -> tuple[str, str | None]:
    """Split on the first ``:`` outside quotes and parentheses.

    Returns:
        ``(left, right)``; ``right`` is None when there is no such colon.
    """
    depth = 0
    in_quote = False
    for idx, ch in enumerate(inner):
        if ch == '"':
            in_quote = not in_quote
        elif in_quote:
            continue
        elif ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
        elif ch == ":" and depth == 0:
            return inner[:idx], inner[idx + 1:]
    return inner, None


def strip_outer_quotes(value: str) -> str:
    value = value.strip()
    if value.startswith('"') and value.endswith('"'):
        value = value[1:-1].replace('\\"', '"')
    return value


def _is_escaped(text: str, idx: int) -> bool:
    """Return True if ``text[idx]`` is preceded by an odd run of backslashes."""
    backslashes = 0
    j = idx - 1
    while j >= 0 and text[j] == "\\":
        backslashes += 1
        j -= 1
    return backslashes % 2 == 1


class _Scanner:
    def __init__(self, text: str, default_key: str) -> None:
        self.text = text
        self.default_key = default_key
        self.pos = 0
        self.tokens: list[Token] = []

    def peek(self) -> str | None:
        return self.text[self.pos] if self.pos < len(self.text) else None

    def consume(self) -> str:
        ch = self.text[self.pos]
        self.pos += 1
        return ch

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def skip_whitespace(self) -> None:
        while not self.at_end() and self.text[self.pos].isspace():
            self.pos += 1

    def scan(self) -> list[Token]:
        while True:
            self.skip_whitespace()
            if self.at_end():
                break

            neg = False
            if self.peek() == "-":
                neg = True
                self.pos += 1
                self.skip_whitespace()
                if self.at_end():
                    break

            ch = self.peek()
            # Negation before a group is dropped; it only binds to single terms.
            if ch == "(":
                self.pos += 1
                self.tokens.append(Token(LPAREN))
            elif ch == ")":
                self.pos += 1
                self.tokens.append(Token(RPAREN))
            elif ch == "[":
                self._scan_property(neg)
            elif ch == '"':
                self._push_term(self.default_key, self.read_quoted(), neg)
            else:
                self._scan_word(neg)
        return self.tokens

    def _push_term(self, key: str, value: str, neg: bool) -> None:
        self.tokens.append(Token(TERM, Term(key=key, value=value, neg=neg)))

    def read_quoted(self) -> str:
        """Read a ``"..."`` span starting at the current position, unescaping ``\\x``."""
        start = self.pos
        self.pos += 1
        out: list[str] = []
        while not self.at_end():
            ch = self.consume()
            if ch == "\\":
                if not self.at_end():
                    out.append(self.consume())
            elif ch == '"':
                return "".join(out)
            else:
                out.append(ch)
        raise UnterminatedQuoteError(start)

    def read_word(self) -> str:
        start = self.pos
        while not self.at_end():
            ch = self.text[self.pos]
            if ch.isspace() or ch in _WORD_STOPS:
                break
            self.pos += 1
        return self.text[start:self.pos]

    def read_bracket(self) -> str:
        """Read a ``[...]`` span, honoring nesting and quoted sections."""
        start = self.pos
        self.pos += 1
        depth = 1
        out: list[str] = []
        while not self.at_end():
            ch = self.peek()
            if ch == '"':
                out.append('"' + self.read_quoted() + '"')
                continue
            self.pos += 1
            if ch == "[":
                depth += 1
            elif ch == "]":
                depth -= 1
                if depth == 0:
                    return "".join(out).strip()
            out.append(ch)
        raise UnterminatedBracketError(start)

    def _scan_property(self, neg: bool) -> None:
        name, expr = split_top_level_colon(self.read_bracket())
        if not expr:
            self._push_term("prop", encode_prop(name.strip()), neg)
        else:
            self._push_term("prop", encode_prop(name.strip(), expr.strip()), neg)

    def _scan_word(self, neg: bool) -> None:
        word = self.read_word()
        if not word:
            # Stray closing bracket.
            self.pos += 1
            return

        if not neg and word.lower() == "or":
            self.tokens.append(Token(OR))
            return

        colon = word.find(":")
        if colon <= 0:
            self._push_term(self.default_key, strip_outer_quotes(word), neg)
            return

        key = word[:colon].lower()
        value = word[colon + 1:]
        if not value and self.peek() == '"':
            value = self.read_quoted()
        elif value.startswith('"'):
            value = self._read_spanning_value(value, self.pos - len(value))
        else:
            value = strip_outer_quotes(value)
        self._push_term(key, value, neg)

    def _read_spanning_value(self, value: str, quote_pos: int) -> str:
        """Finish a ``key:"multi word"`` value that began inside the current word."""
        body = value[1:]
        while not (body.endswith('"') and not _is_escaped(body, len(body) - 1)):
            if self.at_end():
                raise UnterminatedQuoteError(quote_pos)
            body += self.consume()
        return body[:-1].replace('\\"', '"')
