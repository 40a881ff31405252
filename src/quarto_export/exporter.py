"""Export of a single Obsidian note to a Quarto ``.qmd`` file.

Conversion pipeline::

    source text
      -> merge_frontmatter   title/date/tags block, other keys carried over
      -> resolve_embeds      ![[Note]], ![[Note#Heading]], ![[Note#^block]]
      -> rewrite_syntax      images, heading spacing, callouts
      -> metadata block + body

The file steps run strictly in order (mkdir, existence check, collision
handling, create) and any failure aborts the export with one
:class:`~quarto_export.errors.ExportError`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from quarto_export.embeds import EmbedFailure, resolve_embeds
from quarto_export.errors import (
    DirectoryCreateFailure,
    NoActiveDocument,
    ReadFailure,
    WriteFailure,
    WrongExtension,
)
from quarto_export.frontmatter import merge_frontmatter
from quarto_export.fs import FileSystem, LocalFileSystem
from quarto_export.index import NoteSource
from quarto_export.note import Note
from quarto_export.parser import parse_note
from quarto_export.rewrite import rewrite_syntax
from quarto_export.settings import ConversionSettings

logger = logging.getLogger(__name__)

QMD_SUFFIX = ".qmd"


@dataclass(frozen=True)
class ConversionResult:
    text: str
    path: Path
    #: inline warnings left by failed embeds
    warnings: list[str] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Conversion
# ---------------------------------------------------------------------------


def convert_note(
    note: Note,
    content: str,
    source: NoteSource,
    settings: ConversionSettings,
    now: datetime | None = None,
    max_workers: int = 4,
) -> tuple[str, list[EmbedFailure]]:
    """Convert *content* of *note* to Quarto markdown.

    Returns the output text and the embeds that could not be resolved. The
    text always starts with the metadata block, followed by one blank line.
    """
    block = merge_frontmatter(content, note, settings, now=now)
    expansion = resolve_embeds(block.body, source, max_workers=max_workers)
    body = rewrite_syntax(expansion.text)
    return block.metadata + body.lstrip("\n"), expansion.failures


# ---------------------------------------------------------------------------
# Output path policy
# ---------------------------------------------------------------------------


def output_path_for(note: Note, settings: ConversionSettings, vault_dir: Path | None = None) -> Path:
    """``<folder>/<basename>.qmd``; a relative output folder is vault-relative."""
    folder = settings.output_folder.strip()
    if not folder:
        return note.path.parent / f"{note.basename}{QMD_SUFFIX}"
    out_dir = Path(folder).expanduser()
    if not out_dir.is_absolute() and vault_dir is not None:
        out_dir = Path(vault_dir) / out_dir
    return out_dir / f"{note.basename}{QMD_SUFFIX}"


def claim_output_path(fs: FileSystem, path: Path, overwrite: bool) -> Path:
    """Make *path* writable, or pick the first free ``<stem>_<n>`` sibling."""
    if not fs.exists(path):
        return path
    if overwrite:
        fs.remove(path)
        return path
    counter = 1
    candidate = path
    while fs.exists(candidate):
        candidate = path.with_name(f"{path.stem}_{counter}{path.suffix}")
        counter += 1
    return candidate


# ---------------------------------------------------------------------------
# Exporter
# ---------------------------------------------------------------------------


class QuartoExporter:
    """Runs the "export current note" action against a vault."""

    def __init__(
        self,
        source: NoteSource,
        settings: ConversionSettings,
        fs: FileSystem | None = None,
        vault_dir: Path | None = None,
        max_workers: int = 4,
    ) -> None:
        self.source = source
        self.settings = settings
        self.fs = fs or LocalFileSystem()
        self.vault_dir = vault_dir
        self.max_workers = max_workers

    def convert(self, note: Note, now: datetime | None = None) -> tuple[str, list[EmbedFailure]]:
        return convert_note(
            note, note.content, self.source, self.settings, now=now, max_workers=self.max_workers
        )

    def export(self, path: Path | None, now: datetime | None = None) -> ConversionResult:
        """Convert the note at *path* and write it next to it or to the output folder."""
        if path is None:
            raise NoActiveDocument()
        path = Path(path)
        if path.suffix.lower() != ".md":
            raise WrongExtension(path)

        try:
            note = parse_note(path)
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug("Reading %s failed: %s", path, exc)
            raise ReadFailure(path) from exc

        text, failures = self.convert(note, now=now)
        dest = output_path_for(note, self.settings, self.vault_dir)

        try:
            self.fs.mkdir(dest.parent)
        except OSError as exc:
            logger.debug("Creating %s failed: %s", dest.parent, exc)
            raise DirectoryCreateFailure(dest.parent) from exc

        try:
            dest = claim_output_path(self.fs, dest, self.settings.overwrite_existing)
            self.fs.create(dest, text)
        except OSError as exc:
            logger.debug("Writing %s failed: %s", dest, exc)
            raise WriteFailure(dest) from exc

        logger.info("Exported %s -> %s", path, dest)
        return ConversionResult(text=text, path=dest, warnings=[f.message for f in failures])
