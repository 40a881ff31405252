"""Obsidian -> Quarto note exporter."""

from quarto_export.callouts import map_callout_type
from quarto_export.dates import format_date
from quarto_export.embeds import EmbedReference, resolve_embeds
from quarto_export.errors import ExportError
from quarto_export.exporter import ConversionResult, QuartoExporter, convert_note
from quarto_export.frontmatter import merge_frontmatter
from quarto_export.index import NoteSource, VaultIndex
from quarto_export.note import Note
from quarto_export.parser import parse_note
from quarto_export.rewrite import rewrite_syntax
from quarto_export.settings import ConversionSettings, SettingsStore
from quarto_export.tags import collect_tags

__all__ = [
    "Note",
    "VaultIndex",
    "NoteSource",
    "parse_note",
    "ConversionSettings",
    "SettingsStore",
    "format_date",
    "map_callout_type",
    "collect_tags",
    "merge_frontmatter",
    "EmbedReference",
    "resolve_embeds",
    "rewrite_syntax",
    "convert_note",
    "ConversionResult",
    "QuartoExporter",
    "ExportError",
]
