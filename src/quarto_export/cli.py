"""
CLI entry point for the Obsidian -> Quarto exporter.

Usage:
  qmd-export --vault ~/Vault export "Projects/Plan.md"   # Export one note
  qmd-export --vault ~/Vault config show                 # Print settings
  qmd-export --vault ~/Vault config set date_option modified
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path
from typing import Any

from quarto_export.errors import ExportError
from quarto_export.exporter import QuartoExporter
from quarto_export.index import VaultIndex
from quarto_export.settings import CONFIG_FILENAME, ConversionSettings, SettingsError, SettingsStore

logger = logging.getLogger(__name__)

_TRUE = {"true", "yes", "on", "1"}
_FALSE = {"false", "no", "off", "0"}


def _parse_setting(key: str, raw: str) -> Any:
    """Coerce a command-line string to the type of settings field *key*."""
    fields = {f.name: f for f in dataclasses.fields(ConversionSettings)}
    if key not in fields:
        raise SettingsError(f"Unknown setting {key!r}; expected one of {', '.join(fields)}")
    if isinstance(getattr(ConversionSettings(), key), bool):
        low = raw.strip().lower()
        if low in _TRUE:
            return True
        if low in _FALSE:
            return False
        raise SettingsError(f"{key} expects true or false, got {raw!r}")
    return raw


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="qmd-export",
        description="Export Obsidian notes to Quarto (.qmd) documents.",
    )
    parser.add_argument(
        "--vault",
        type=Path,
        default=Path("."),
        help="Path to the Obsidian vault used to resolve embeds (default: current directory).",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"Settings file (default: <vault>/{CONFIG_FILENAME}).",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0, help="More log output (-vv for debug).")

    sub = parser.add_subparsers(dest="command", required=True)

    export = sub.add_parser("export", help="Export a single note to .qmd.")
    export.add_argument("note", type=Path, help="Markdown note to export (absolute or vault-relative).")

    config = sub.add_parser("config", help="Show or change the persisted settings.")
    config_sub = config.add_subparsers(dest="config_command", required=True)
    config_sub.add_parser("show", help="Print the effective settings as JSON.")
    set_cmd = config_sub.add_parser("set", help="Change one setting and save it.")
    set_cmd.add_argument("key", help="Setting name, e.g. date_option.")
    set_cmd.add_argument("value", help="New value.")

    return parser


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    vault_dir: Path = args.vault.expanduser()
    store = SettingsStore(args.config or vault_dir / CONFIG_FILENAME)

    try:
        settings = store.load()

        if args.command == "config":
            if args.config_command == "set":
                settings = store.update(**{args.key: _parse_setting(args.key, args.value)})
            print(json.dumps(settings.to_dict(), indent=2))
            return 0

        note_path: Path = args.note.expanduser()
        if not note_path.is_absolute() and not note_path.exists():
            note_path = vault_dir / note_path

        index = VaultIndex(vault_dir)
        index.build()
        result = QuartoExporter(index, settings, vault_dir=vault_dir).export(note_path)
    except (ExportError, SettingsError) as exc:
        logger.debug("Export aborted", exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(f"Successfully exported to {result.path.name}")
    for warning in result.warnings:
        print(f"  warning: {warning}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
