"""Tag collection from a note's body and frontmatter."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from quarto_export.note import Note

# Obsidian reads both keys
_FRONTMATTER_TAG_KEYS = ("tags", "tag")


def _frontmatter_tags(frontmatter: dict[str, Any]) -> list[str]:
    values: list[Any] = []
    for key in _FRONTMATTER_TAG_KEYS:
        raw = frontmatter.get(key)
        if raw is None:
            continue
        if isinstance(raw, (list, tuple, set)):
            values.extend(raw)
        else:
            values.append(raw)
    return [str(v) for v in values if v is not None]


def collect_tags(note: "Note") -> list[str]:
    """Union of inline and frontmatter tags, ``#`` stripped, duplicates removed.

    First-seen order is kept (inline tags first) so repeated exports of the
    same note produce identical output.
    """
    seen: dict[str, None] = {}
    for raw in [*note.inline_tags, *_frontmatter_tags(note.frontmatter)]:
        tag = raw.strip().lstrip("#").strip()
        if tag:
            seen.setdefault(tag, None)
    return list(seen)
