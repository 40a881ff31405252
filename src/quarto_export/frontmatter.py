"""Quarto frontmatter: computed title/date/tags merged with the source block.

``title`` and ``tags`` are always recomputed, and ``date`` is recomputed when a
date option is set. Every other top-level key of the source block survives
verbatim, including the indented or ``-`` list lines that belong to it, so
nested values and lists keep their shape.
"""

from __future__ import annotations

import json
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

from quarto_export.dates import note_date
from quarto_export.parser import split_frontmatter
from quarto_export.tags import collect_tags

if TYPE_CHECKING:
    from quarto_export.note import Note
    from quarto_export.settings import ConversionSettings

# Keys always owned by the exporter; ``tag`` is Obsidian's alias for ``tags``
COMPUTED_KEYS = frozenset({"title", "tags", "tag"})

# Top-level ``key: value`` line
_KEY_LINE_RE = re.compile(r"^([^\s#:-][^:]*?)\s*:(?:\s|$)")
_PLAIN_TAG_RE = re.compile(r"^[\w/-]+$")
_YAML_RESERVED = frozenset({"true", "false", "yes", "no", "on", "off", "null", "~"})


@dataclass(frozen=True)
class FrontmatterBlock:
    metadata: str
    body: str
    #: source lines kept in ``metadata`` after the computed keys
    carried: list[str] = field(default_factory=list)


def _quote(value: str) -> str:
    # JSON strings are valid double-quoted YAML scalars
    return json.dumps(value, ensure_ascii=False)


def _tag_item(tag: str) -> str:
    if _PLAIN_TAG_RE.match(tag) and not tag.isdigit() and tag.lower() not in _YAML_RESERVED:
        return tag
    return _quote(tag)


def computed_keys(settings: "ConversionSettings") -> frozenset[str]:
    """Keys the rendered block sets, so same-named source lines are dropped."""
    if settings.date_option != "none":
        return COMPUTED_KEYS | {"date"}
    return COMPUTED_KEYS


def carried_lines(block: str, computed: frozenset[str] = COMPUTED_KEYS) -> list[str]:
    """Lines of the source *block* whose keys are not in *computed*."""
    kept: list[str] = []
    keep = False
    for line in block.splitlines():
        if not line.strip():
            continue
        if line[0] in " \t" or line.startswith("-"):
            if keep:
                kept.append(line)
            continue
        m = _KEY_LINE_RE.match(line)
        if m is None:
            keep = False
            continue
        key = m.group(1).strip().strip("'\"")
        keep = key not in computed
        if keep:
            kept.append(line)
    return kept


def build_frontmatter(
    note: "Note",
    settings: "ConversionSettings",
    carried: Iterable[str] = (),
    now: datetime | None = None,
) -> str:
    """Render the ``---`` block, followed by one blank line."""
    lines = ["---", f"title: {_quote(note.basename)}"]

    if settings.date_option != "none":
        lines.append(f"date: {_quote(note_date(note, settings, now=now))}")

    if settings.import_tags:
        tags = collect_tags(note)
        if tags:
            lines.append("tags:")
            lines.extend(f"  - {_tag_item(tag)}" for tag in tags)

    lines.extend(carried)
    lines.append("---")
    return "\n".join(lines) + "\n\n"


def merge_frontmatter(
    text: str,
    note: "Note",
    settings: "ConversionSettings",
    now: datetime | None = None,
) -> FrontmatterBlock:
    """Replace the leading block of *text* (if any) with the Quarto block."""
    block, body = split_frontmatter(text)
    carried = carried_lines(block, computed_keys(settings)) if block else []
    return FrontmatterBlock(
        metadata=build_frontmatter(note, settings, carried, now=now),
        body=body,
        carried=carried,
    )
