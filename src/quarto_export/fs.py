"""File-system collaborator used by the exporter."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class FileSystem(Protocol):
    """Minimal file operations the exporter needs.

    Implementations raise :class:`OSError` on failure; the exporter maps it to
    the matching :mod:`quarto_export.errors` kind.
    """

    def exists(self, path: Path) -> bool:
        """Return whether *path* exists."""
        ...

    def mkdir(self, path: Path) -> None:
        """Create *path* and its parents; an existing directory is fine."""
        ...

    def remove(self, path: Path) -> None:
        """Delete the file at *path*."""
        ...

    def create(self, path: Path, text: str) -> None:
        """Write *text* to a new file at *path*."""
        ...


class LocalFileSystem:
    """:class:`FileSystem` backed by the local disk (UTF-8 text)."""

    def exists(self, path: Path) -> bool:
        return Path(path).exists()

    def mkdir(self, path: Path) -> None:
        Path(path).mkdir(parents=True, exist_ok=True)

    def remove(self, path: Path) -> None:
        Path(path).unlink()

    def create(self, path: Path, text: str) -> None:
        # exclusive create: fails when the file already exists
        with open(path, "x", encoding="utf-8") as fh:
            fh.write(text)
