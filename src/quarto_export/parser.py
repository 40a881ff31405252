"""Frontmatter and inline-tag parser."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

if TYPE_CHECKING:
    from quarto_export.note import Note

logger = logging.getLogger(__name__)

# Leading ``---`` block; the closing fence must sit on a line of its own
_FRONTMATTER_RE = re.compile(
    r"\A---[ \t]*\r?\n(?:(.*?)\r?\n)?---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL,
)
# Inline #tags (not inside words, URLs or heading markers)
_TAG_RE = re.compile(r"(?<![`\w/#&])#([\w/-]+)")
_CODE_SPAN_RE = re.compile(r"`[^`\n]*`")
_FENCE_RE = re.compile(r"^\s*(```|~~~)")


def split_frontmatter(content: str) -> tuple[str | None, str]:
    """Split a leading ``---`` block from the body.

    Returns ``(block_text, body)``. ``block_text`` is ``None`` when the text
    has no complete block; an unterminated block counts as body text.
    """
    match = _FRONTMATTER_RE.match(content)
    if not match:
        return None, content
    return match.group(1) or "", content[match.end() :]


def parse_frontmatter(content: str) -> tuple[dict[str, Any], str]:
    """Split YAML front-matter from body text.

    Returns ``(metadata_dict, body)``; ``metadata_dict`` is empty when there
    is no front-matter block or it does not hold a YAML mapping.
    """
    block, body = split_frontmatter(content)
    if block is None:
        return {}, body
    try:
        meta = yaml.safe_load(block) or {}
    except yaml.YAMLError as exc:
        logger.debug("Ignoring malformed frontmatter: %s", exc)
        meta = {}
    if not isinstance(meta, dict):
        meta = {}
    return meta, body


def parse_tags(text: str) -> list[str]:
    """Return all ``#tag`` values found in *text* (de-duped, ordered).

    Fenced code blocks and inline code spans are skipped, as are purely
    numeric markers such as issue numbers.
    """
    seen: set[str] = set()
    result: list[str] = []
    in_fence = False
    for line in text.splitlines():
        if _FENCE_RE.match(line):
            in_fence = not in_fence
            continue
        if in_fence:
            continue
        for m in _TAG_RE.finditer(_CODE_SPAN_RE.sub("", line)):
            tag = m.group(1)
            if tag.isdigit() or tag in seen:
                continue
            seen.add(tag)
            result.append(tag)
    return result


def parse_note(path: Path) -> "Note":
    """Read a ``.md`` file and return a :class:`Note` snapshot.

    Raises :class:`OSError` when the file cannot be read. A failing ``stat``
    only leaves the timestamps unset.
    """
    from quarto_export.note import Note

    path = Path(path)
    content = path.read_text(encoding="utf-8")
    frontmatter, body = parse_frontmatter(content)

    created: float | None = None
    modified: float | None = None
    try:
        st = path.stat()
    except OSError as exc:
        logger.warning("Could not stat %s, dates fall back to now: %s", path, exc)
    else:
        created = getattr(st, "st_birthtime", st.st_ctime)
        modified = st.st_mtime

    return Note(
        path=path,
        content=content,
        frontmatter=frontmatter,
        inline_tags=parse_tags(body),
        created=created,
        modified=modified,
    )
