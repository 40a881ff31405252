"""Text rewrites from Obsidian syntax to Quarto syntax.

Each rewrite is a plain ``str -> str`` function. :func:`rewrite_syntax`
chains them in the order the exporter relies on; it must run after embeds
are resolved, because any ``![[...]]`` still present is taken to be an image.
"""

from __future__ import annotations

import re

from quarto_export.callouts import map_callout_type

# ![[path]] or ![[path|300]]
_IMAGE_EMBED_RE = re.compile(r"!\[\[([^\]|]+)(?:\|[^\]]*)?\]\]")
_HEADER_RE = re.compile(r"^(#+[ \t])", re.MULTILINE)
# > [!type]± title, then any number of quoted lines
_CALLOUT_RE = re.compile(
    r"^>[ \t]?\[!([\w-]+)\][+-]?([^\n]*)(?:\n|\Z)((?:>[^\n]*(?:\n|\Z))*)",
    re.MULTILINE,
)
_QUOTE_MARKER_RE = re.compile(r"^>[ \t]?", re.MULTILINE)


def rewrite_images(text: str) -> str:
    """``![[path]]`` -> ``![](path)``; size/alias suffixes are dropped."""
    return _IMAGE_EMBED_RE.sub(lambda m: f"![]({m.group(1).strip()})", text)


def space_headers(text: str) -> str:
    """Insert a blank line before every ATX heading line.

    Existing blank lines are not collapsed, so running this twice adds a
    second blank line.
    """
    return _HEADER_RE.sub(r"\n\1", text)


def _callout_block(m: re.Match[str]) -> str:
    callout_type = map_callout_type(m.group(1))
    title = m.group(2).strip()
    body = _QUOTE_MARKER_RE.sub("", m.group(3)).strip()

    parts = [f"::: {{.callout-{callout_type}}}"]
    if title:
        parts.append(f"## {title}")
    if body:
        parts.append(body)
    parts.append(":::")
    return "\n".join(parts) + "\n\n"


def rewrite_callouts(text: str) -> str:
    """Turn ``> [!type] title`` quote blocks into Quarto ``:::`` callouts."""
    return _CALLOUT_RE.sub(_callout_block, text)


def rewrite_syntax(text: str) -> str:
    """Images, then heading spacing, then callouts."""
    return rewrite_callouts(space_headers(rewrite_images(text)))
