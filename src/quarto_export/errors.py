"""Export error kinds.

Every unrecovered failure aborts the export and surfaces as one
:class:`ExportError`; ``str(exc)`` is the message shown to the user while the
chained ``__cause__`` keeps the diagnostic detail for the log.
"""

from __future__ import annotations

from pathlib import Path


class ExportError(Exception):
    """Base class for failures that abort an export."""


class NoActiveDocument(ExportError):
    def __init__(self) -> None:
        super().__init__("Please open a Markdown file before exporting")


class WrongExtension(ExportError):
    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Only Markdown (.md) notes can be exported, got {path.name}")


class ReadFailure(ExportError):
    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Failed to read {path}")


class DirectoryCreateFailure(ExportError):
    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Failed to create output folder {path}")


class WriteFailure(ExportError):
    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Failed to write {path}")
