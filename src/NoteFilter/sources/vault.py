"""Markdown vault source.

Loads note files under a root directory into ``Record`` objects and arranges
them into a ``RecordNode`` hierarchy mirroring their folder structure.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Mapping, Sequence

import yaml

from NoteFilter.core.models import Record, RecordNode
from NoteFilter.utils.log import log

_FRONTMATTER_RE = re.compile(r"\A---[ \t]*\r?\n(?:(.*?)\r?\n)?---[ \t]*(?:\r?\n|\Z)", re.DOTALL)
_INLINE_TAG_RE = re.compile(r"(?<![\w#&/])#([^\s#\[\](){},;:!?\"'`]+)")
_WIKILINK_RE = re.compile(r"!?\[\[([^\]|#^]*)(?:[#^][^\]|]*)?(?:\|[^\]]*)?\]\]")
_TAG_SPLIT_RE = re.compile(r"[\s,]+")
_CODE_FENCE_RE = re.compile(r"^(```|~~~).*?^\1", re.DOTALL | re.MULTILINE)


@dataclass(slots=True)
class VaultSource:
    """Read Markdown notes from a directory.

    Attributes:
        root: Vault root directory.
        extensions: File suffixes treated as notes (e.g. ``.md``).
    """

    root: Path
    extensions: tuple[str, ...] = (".md",)

    def load_records(self) -> list[Record]:
        """Load every note under ``root``, sorted by relative path.

        Files that cannot be decoded or whose frontmatter is not valid YAML
        are still loaded; bad frontmatter is treated as absent.

        Raises:
            FileNotFoundError: If ``root`` is not a directory.
        """
        if not self.root.is_dir():
            raise FileNotFoundError(f"Vault root is not a directory: {self.root}")

        suffixes = {ext.lower() for ext in self.extensions}
        records: list[Record] = []
        for path in sorted(self.root.rglob("*")):
            if not path.is_file() or path.suffix.lower() not in suffixes:
                continue
            rel = path.relative_to(self.root).as_posix()
            if any(part.startswith(".") for part in rel.split("/")):
                continue
            text = path.read_text(encoding="utf-8", errors="replace")
            records.append(parse_note(rel, text))
        log.info("Loaded %d notes from %s", len(records), self.root)
        return records

    def load_tree(self) -> list[RecordNode]:
        return build_tree(self.load_records())


def parse_note(path: str, text: str) -> Record:
    """Build a record from a note's path and raw text."""
    frontmatter, body = split_frontmatter(text)
    title = frontmatter.get("title")
    return Record(
        path=path,
        content=body,
        title=title.strip() if isinstance(title, str) and title.strip() else None,
        frontmatter=frontmatter,
        tags=extract_tags(body, frontmatter),
        references=extract_references(body),
    )


def split_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Separate a leading ``---`` YAML block from the note body.

    Returns:
        ``(frontmatter, body)``. Frontmatter is empty when missing, not a
        mapping, or not valid YAML.
    """
    match = _FRONTMATTER_RE.match(text)
    if not match:
        return {}, text
    body = text[match.end():]
    try:
        data = yaml.safe_load(match.group(1) or "")
    except yaml.YAMLError as error:
        log.warning("Ignoring invalid frontmatter: %s", error)
        return {}, body
    if not isinstance(data, Mapping):
        return {}, body
    return {str(k): v for k, v in data.items()}, body


def extract_tags(body: str, frontmatter: Mapping[str, Any]) -> tuple[str, ...]:
    """Collect normalized tags from inline ``#tags`` and frontmatter ``tags``.

    Tags are lowercased, stripped of a leading ``#`` and de-duplicated in
    first-seen order.
    """
    out: dict[str, None] = {}

    def add(value: Any) -> None:
        if value is None:
            return
        if isinstance(value, (list, tuple)):
            for item in value:
                add(item)
            return
        tag = str(value).strip().removeprefix("#")
        if tag:
            out.setdefault(tag.lower(), None)

    for match in _INLINE_TAG_RE.finditer(_CODE_FENCE_RE.sub("", body)):
        add(match.group(1).rstrip("."))

    fm_tags = next((v for k, v in frontmatter.items() if k.lower() == "tags"), None)
    if isinstance(fm_tags, str):
        add([part for part in _TAG_SPLIT_RE.split(fm_tags) if part])
    else:
        add(fm_tags)
    return tuple(out)


def extract_references(body: str) -> tuple[str, ...]:
    """Return outgoing ``[[wikilink]]`` targets without alias or heading parts."""
    out: dict[str, None] = {}
    for match in _WIKILINK_RE.finditer(body):
        target = match.group(1).strip()
        if target:
            out.setdefault(target, None)
    return tuple(out)


def build_tree(records: Iterable[Record]) -> list[RecordNode]:
    """Arrange records into a folder hierarchy by path segments.

    Intermediate segments become folder nodes (``is_leaf=False``) carrying
    the folder path. Sibling order follows first appearance.
    """
    root: dict[str, Any] = {"children": {}}
    for record in records:
        parts = [part for part in record.path.split("/") if part]
        level = root
        for idx in range(len(parts)):
            is_last = idx == len(parts) - 1
            entry = level["children"].setdefault(parts[idx], {"children": {}, "record": None})
            if is_last:
                entry["record"] = record
            level = entry
    return _freeze(root["children"], prefix="")


def _freeze(children: Mapping[str, Any], prefix: str) -> list[RecordNode]:
    nodes: list[RecordNode] = []
    for name, entry in children.items():
        path = f"{prefix}/{name}" if prefix else name
        kids: Sequence[RecordNode] = tuple(_freeze(entry["children"], path))
        record = entry["record"]
        if record is not None and not kids:
            nodes.append(RecordNode(record=record, children=(), is_leaf=True))
        else:
            nodes.append(RecordNode(record=record or Record(path=path), children=kids, is_leaf=False))
    return nodes
