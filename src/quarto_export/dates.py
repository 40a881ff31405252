"""Date formatting with ``YYYY``/``MM``/``DD``/``HH``/``mm``/``ss`` tokens."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from quarto_export.note import Note
    from quarto_export.settings import ConversionSettings

logger = logging.getLogger(__name__)


def format_date(moment: datetime | float, pattern: str) -> str:
    """Substitute the date tokens in *pattern* with fields of *moment*.

    Timestamps are converted to the local calendar. Anything that is not one
    of the six tokens is copied through unchanged.
    """
    if not isinstance(moment, datetime):
        moment = datetime.fromtimestamp(moment)
    return (
        pattern.replace("YYYY", f"{moment.year:04d}")
        .replace("MM", f"{moment.month:02d}")
        .replace("DD", f"{moment.day:02d}")
        .replace("HH", f"{moment.hour:02d}")
        .replace("mm", f"{moment.minute:02d}")
        .replace("ss", f"{moment.second:02d}")
    )


def note_date(
    note: "Note",
    settings: "ConversionSettings",
    now: datetime | None = None,
) -> str:
    """Format the created or modified time of *note* as *settings* ask.

    Falls back to *now* (the current local time by default) when the note
    has no timestamp.
    """
    stamp = note.created if settings.date_option == "created" else note.modified
    if stamp is None:
        logger.warning("No %s time for %s; using the current time", settings.date_option, note.path)
        return format_date(now or datetime.now(), settings.date_format)
    return format_date(stamp, settings.date_format)
