"""Embed resolution: ``![[Note]]``, ``![[Note#Heading]]`` and ``![[Note#^block]]``.

Each embed token is replaced by the referenced content, trimmed and padded
with blank lines:

- whole note   -- the note body (its frontmatter is dropped)
- ``#Heading`` -- from that heading up to the next heading of the same or a
  shallower level
- ``^block``   -- the paragraph carrying the ``^block`` marker

Failures never abort the conversion. They become an inline warning callout
and are reported in :attr:`EmbedExpansion.failures`.

Expansion is single-level: embed tokens inside substituted content are left
as written. Tokens naming an attachment (``![[diagram.png]]``) that does not
resolve to a note are also left alone for the image rewrite.
"""

from __future__ import annotations

import logging
import re
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Literal

from quarto_export.parser import split_frontmatter

if TYPE_CHECKING:
    from quarto_export.index import NoteSource

logger = logging.getLogger(__name__)

ScopeKind = Literal["whole", "header", "block"]
FailureKind = Literal["EmbedNotFound", "HeaderNotFound", "BlockNotFound"]

# ---------------------------------------------------------------------------
# Regex patterns
# ---------------------------------------------------------------------------

# ![[target]] or ![[target|alias]]
_EMBED_RE = re.compile(r"!\[\[([^\]]+)\]\]")
# ATX heading, optional closing hashes
_HEADING_RE = re.compile(r"^(#{1,6})[ \t]+(.*?)(?:[ \t]+#+)?[ \t]*$")
_FENCE_RE = re.compile(r"^\s*(```|~~~)")
# A file extension other than .md marks an attachment
_ATTACHMENT_RE = re.compile(r"\.(?!md$)[A-Za-z][A-Za-z0-9]{0,7}$", re.IGNORECASE)
# ``^block-id`` on a line of its own, or trailing a line
_BLOCK_ID_LINE_RE = re.compile(r"^[ \t]*\^[A-Za-z0-9-]+[ \t]*(?:\r?\n|\Z)", re.MULTILINE)
_BLOCK_ID_TAIL_RE = re.compile(r"[ \t]+\^[A-Za-z0-9-]+[ \t]*$", re.MULTILINE)


# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EmbedReference:
    note_name: str
    scope: ScopeKind = "whole"
    scope_id: str = ""
    #: scope part as written in the token: ``""``, ``#Heading``, ``#^id`` or ``^id``
    suffix: str = ""
    #: the whole ``![[...]]`` text when found by :func:`parse_embeds`
    token: str = field(default="", compare=False)

    @classmethod
    def parse(cls, target: str) -> "EmbedReference":
        """Parse the inside of ``![[...]]``; any ``|alias`` is dropped."""
        target = target.split("|", 1)[0].strip()
        if "#" in target:
            name, rest = target.split("#", 1)
            suffix = "#" + rest
            if rest.startswith("^"):
                return cls(name.strip(), "block", rest[1:].strip(), suffix)
            # Note#Parent#Child addresses the innermost heading
            return cls(name.strip(), "header", rest.split("#")[-1].strip(), suffix)
        if "^" in target:
            name, block_id = target.split("^", 1)
            return cls(name.strip(), "block", block_id.strip(), "^" + block_id)
        return cls(target)


def parse_embeds(text: str) -> list[EmbedReference]:
    """All embed tokens of *text* in scan order."""
    return [replace(EmbedReference.parse(m.group(1)), token=m.group(0)) for m in _EMBED_RE.finditer(text)]


@dataclass(frozen=True)
class EmbedFailure:
    kind: FailureKind
    reference: EmbedReference
    message: str


@dataclass(frozen=True)
class EmbedExpansion:
    text: str
    failures: list[EmbedFailure] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Region extraction
# ---------------------------------------------------------------------------


def _headings(lines: list[str]) -> list[tuple[int, int, str]]:
    """``(line_index, level, text)`` for every heading outside code fences."""
    result: list[tuple[int, int, str]] = []
    in_fence = False
    for i, line in enumerate(lines):
        if _FENCE_RE.match(line):
            in_fence = not in_fence
            continue
        if in_fence:
            continue
        m = _HEADING_RE.match(line)
        if m:
            result.append((i, len(m.group(1)), m.group(2).strip()))
    return result


def extract_heading_section(content: str, heading: str) -> str | None:
    """Return the section under *heading*, heading line included.

    Matching is case-insensitive on the trimmed heading text. ``None`` when
    no heading matches.
    """
    lines = content.splitlines()
    heads = _headings(lines)
    wanted = heading.strip().lower()
    for pos, (start, level, text) in enumerate(heads):
        if text.lower() != wanted:
            continue
        end = next((i for i, lvl, _ in heads[pos + 1 :] if lvl <= level), len(lines))
        return "\n".join(lines[start:end])
    return None


def _in_paragraph(line: str) -> bool:
    return bool(line.strip()) and not _HEADING_RE.match(line)


def extract_block(content: str, block_id: str) -> str | None:
    """Return the paragraph marked with ``^block_id``, or ``None``.

    Paragraphs end at blank lines and headings. A marker standing alone after
    a blank line refers to the paragraph above it.
    """
    marker = re.compile(rf"(?:^|\s)\^{re.escape(block_id)}[ \t]*$")
    lines = content.splitlines()
    for i, line in enumerate(lines):
        if not marker.search(line):
            continue
        if _HEADING_RE.match(line):
            return line
        start = i
        while start > 0 and _in_paragraph(lines[start - 1]):
            start -= 1
        end = i + 1
        while end < len(lines) and _in_paragraph(lines[end]):
            end += 1
        if start == i and end == i + 1 and line.strip().startswith("^"):
            above = i
            while above > 0 and not lines[above - 1].strip():
                above -= 1
            end = start = above
            while start > 0 and _in_paragraph(lines[start - 1]):
                start -= 1
            if start == end:
                return None
        return "\n".join(lines[start:end])
    return None


def strip_block_ids(text: str) -> str:
    """Remove ``^block-id`` markers (lines made only of a marker are dropped)."""
    return _BLOCK_ID_TAIL_RE.sub("", _BLOCK_ID_LINE_RE.sub("", text))


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


def _pad(content: str) -> str:
    return f"\n\n{content}\n\n"


def _warning(kind: FailureKind, ref: EmbedReference, message: str) -> tuple[str, EmbedFailure]:
    logger.warning(message)
    return _pad(f"> [!warning] {message}"), EmbedFailure(kind, ref, message)


def resolve_embed(
    ref: EmbedReference,
    source: "NoteSource",
) -> tuple[str, EmbedFailure | None]:
    """Resolve one embed to its replacement text.

    Attachment embeds found by :func:`parse_embeds` come back as their
    original token. :class:`~quarto_export.errors.ReadFailure` from
    *source* propagates.
    """
    note = source.resolve(ref.note_name)
    if note is None:
        if ref.token and _ATTACHMENT_RE.search(ref.note_name):
            return ref.token, None
        return _warning("EmbedNotFound", ref, f"Embedded note not found: {ref.note_name}{ref.suffix}")

    _, content = split_frontmatter(source.read(note))

    if ref.scope == "header":
        region = extract_heading_section(content, ref.scope_id)
        if region is None:
            return _warning("HeaderNotFound", ref, f"Header not found: {ref.scope_id} in {ref.note_name}")
    elif ref.scope == "block":
        region = extract_block(content, ref.scope_id)
        if region is None:
            return _warning("BlockNotFound", ref, f"Block not found: {ref.scope_id} in {ref.note_name}")
    else:
        region = content

    logger.debug("Embedded %s%s", ref.note_name, ref.suffix)
    return _pad(strip_block_ids(region).strip()), None


def resolve_embeds(text: str, source: "NoteSource", max_workers: int = 4) -> EmbedExpansion:
    """Replace every embed token in *text*, in scan order.

    Lookups run on a thread pool when there is more than one token; the
    N-th token always receives the N-th result.
    """
    refs = parse_embeds(text)
    if not refs:
        return EmbedExpansion(text)

    if max_workers > 1 and len(refs) > 1:
        with ThreadPoolExecutor(max_workers=min(max_workers, len(refs))) as pool:
            results = list(pool.map(lambda ref: resolve_embed(ref, source), refs))
    else:
        results = [resolve_embed(ref, source) for ref in refs]

    replacements = iter(results)
    expanded = _EMBED_RE.sub(lambda _m: next(replacements)[0], text)
    return EmbedExpansion(expanded, [failure for _, failure in results if failure is not None])
