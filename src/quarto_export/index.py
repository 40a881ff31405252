"""VaultIndex: note lookup over a vault directory."""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath
from typing import Protocol, runtime_checkable

from quarto_export.errors import ReadFailure
from quarto_export.note import Note
from quarto_export.parser import parse_note

logger = logging.getLogger(__name__)


@runtime_checkable
class NoteSource(Protocol):
    """Resolves note names for embeds and reads their current text.

    Implementations must tolerate concurrent calls from worker threads.
    """

    def resolve(self, name: str) -> Note | None:
        """Return the note a link name points at, or ``None`` when not found."""
        ...

    def read(self, note: Note) -> str:
        """Return the text of *note*; raise :class:`ReadFailure` on error."""
        ...


class VaultIndex:
    """Scans a vault directory and resolves link names to notes."""

    def __init__(self, vault_dir: Path) -> None:
        self.vault_dir = Path(vault_dir)
        #: vault-relative posix path -> note
        self.notes: dict[str, Note] = {}

    # ------------------------------------------------------------------
    # Build / refresh
    # ------------------------------------------------------------------

    def build(self) -> None:
        """(Re-)scan the vault and rebuild the index."""
        self.notes = {}
        for path in sorted(self.vault_dir.glob("**/*.md")):
            rel = path.relative_to(self.vault_dir).as_posix()
            if any(part.startswith(".") for part in PurePosixPath(rel).parts):
                continue
            try:
                self.notes[rel] = parse_note(path)
            except (OSError, UnicodeDecodeError) as exc:
                logger.warning("Skipping unreadable note %s: %s", rel, exc)
        logger.info("Vault index built: %d notes.", len(self.notes))

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    @staticmethod
    def _normalise_link(name: str) -> str:
        """Lower-case, forward-slash form of a link target without ``.md``."""
        link = name.strip().replace("\\", "/").lstrip("/")
        if link.lower().endswith(".md"):
            link = link[:-3]
        return link.lower()

    def resolve(self, name: str) -> Note | None:
        """Find the note *name* links to.

        Names containing ``/`` match the vault-relative path; bare names match
        the file stem, preferring the shortest path when several notes share it.
        """
        link = self._normalise_link(name)
        if not link:
            return None

        if "/" in link:
            for rel, note in self.notes.items():
                if rel[:-3].lower() == link:
                    return note
            return None

        candidates = [rel for rel, note in self.notes.items() if note.basename.lower() == link]
        if not candidates:
            return None
        best = min(candidates, key=lambda rel: (rel.count("/"), len(rel), rel))
        return self.notes[best]

    def read(self, note: Note) -> str:
        try:
            return note.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ReadFailure(note.path) from exc
