"""Regex literal support for query values.

A value of the exact shape ``/body/flags`` is a regex literal: ``flags`` is
the maximal trailing run of ``g i m s u y`` and the ``/`` before it must not
be escaped. Anything else is an ordinary literal.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Final

from NoteFilter.utils.log import log

_FLAG_CHARS: Final = frozenset("gimsuy")
_FLAG_MAP: Final[dict[str, int]] = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
}
_NAMED_GROUP_RE = re.compile(r"\(\?<(?![=!])")


@dataclass(frozen=True, slots=True)
class RegexLiteral:
    """A ``/pattern/flags`` query value.

    ``g`` and ``u`` have no effect on a single test; ``y`` (sticky) anchors
    the test at the start of the text.
    """

    pattern: str
    flags: str = ""

    def compile(self) -> re.Pattern[str] | None:
        """Return the compiled pattern, or None if it is invalid."""
        return _compile(self.pattern, self.flags)

    def test(self, text: str) -> bool:
        compiled = self.compile()
        if compiled is None:
            return False
        if "y" in self.flags:
            return compiled.match(text) is not None
        return compiled.search(text) is not None


def parse_regex_literal(raw: str | None) -> RegexLiteral | None:
    """Detect a regex literal.

    Args:
        raw: Query value.

    Returns:
        The literal if ``raw`` has the ``/body/flags`` shape, else None. A
        literal may still fail to compile; see ``RegexLiteral.compile``.
    """
    if not raw or len(raw) < 2 or raw[0] != "/":
        return None

    flag_start = len(raw)
    while flag_start > 1 and raw[flag_start - 1] in _FLAG_CHARS:
        flag_start -= 1

    closing = flag_start - 1
    if closing <= 0 or raw[closing] != "/":
        return None

    backslashes = 0
    idx = closing - 1
    while idx >= 1 and raw[idx] == "\\":
        backslashes += 1
        idx -= 1
    if backslashes % 2 == 1:
        return None

    return RegexLiteral(pattern=raw[1:closing], flags=raw[closing + 1:])


def matches_text(text: str | None, needle: str | None) -> bool:
    """Test ``needle`` against ``text``.

    Regex literals are searched directly; anything else is a
    case-insensitive substring test.
    """
    haystack = text or ""
    literal = parse_regex_literal(needle)
    if literal is not None:
        return literal.test(haystack)
    return (needle or "").lower() in haystack.lower()


@lru_cache(maxsize=256)
def _compile(pattern: str, flags: str) -> re.Pattern[str] | None:
    if len(set(flags)) != len(flags):
        log.debug("Rejecting regex /%s/%s: repeated flags", pattern, flags)
        return None

    re_flags = 0
    for flag in flags:
        re_flags |= _FLAG_MAP.get(flag, 0)
    try:
        return re.compile(_NAMED_GROUP_RE.sub("(?P<", pattern), re_flags)
    except re.error as error:
        log.debug("Rejecting regex /%s/%s: %s", pattern, flags, error)
        return None
