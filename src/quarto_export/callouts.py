"""Obsidian callout type -> Quarto callout type."""

from __future__ import annotations

DEFAULT_CALLOUT_TYPE = "note"

CALLOUT_TYPES: dict[str, str] = {
    "note": "note",
    "info": "info",
    "tip": "tip",
    "success": "success",
    "question": "question",
    "warning": "warning",
    "failure": "error",
    "danger": "warning",
    "bug": "bug",
    "example": "example",
    "quote": "quote",
}


def map_callout_type(callout_type: str) -> str:
    """Case-insensitive lookup; unknown types become ``note``."""
    return CALLOUT_TYPES.get(callout_type.strip().lower(), DEFAULT_CALLOUT_TYPE)
