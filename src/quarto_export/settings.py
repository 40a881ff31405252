"""Conversion settings and their on-disk record.

Settings are a flat JSON object stored next to the vault::

    {
      "date_option": "modified",
      "date_format": "YYYY-MM-DD",
      "output_folder": "quarto",
      "overwrite_existing": false,
      "import_tags": true
    }

Missing keys take the defaults of :class:`ConversionSettings`; unknown keys
are ignored. A :class:`ConversionSettings` value is immutable and is passed
explicitly to every conversion step.
"""

from __future__ import annotations

import dataclasses
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, get_args

logger = logging.getLogger(__name__)

DateOption = Literal["none", "created", "modified"]
DATE_OPTIONS: tuple[str, ...] = get_args(DateOption)

CONFIG_FILENAME = ".obsidian-to-quarto.json"


class SettingsError(ValueError):
    """Raised for an unreadable settings file or an invalid field value."""


@dataclass(frozen=True)
class ConversionSettings:
    date_option: DateOption = "none"
    date_format: str = "YYYY-MM-DD"
    #: Folder for ``.qmd`` output; blank means next to the source note
    output_folder: str = ""
    overwrite_existing: bool = False
    import_tags: bool = True

    def __post_init__(self) -> None:
        for f in dataclasses.fields(self):
            value = getattr(self, f.name)
            expected = type(f.default)
            if not isinstance(value, expected):
                raise SettingsError(f"{f.name} must be a {expected.__name__}, got {value!r}")
        if self.date_option not in DATE_OPTIONS:
            raise SettingsError(
                f"date_option must be one of {', '.join(DATE_OPTIONS)}, got {self.date_option!r}"
            )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ConversionSettings":
        known = {f.name for f in dataclasses.fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    def to_dict(self) -> dict[str, Any]:
        return dataclasses.asdict(self)


# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------


def load_settings(path: Path) -> ConversionSettings:
    """Load settings from *path*, merged over the defaults."""
    path = Path(path)
    if not path.exists():
        logger.debug("No settings file at %s; using defaults", path)
        return ConversionSettings()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise SettingsError(f"Failed to read settings {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise SettingsError(f"Settings file {path} must hold a JSON object")
    return ConversionSettings.from_dict(data)


def save_settings(settings: ConversionSettings, path: Path) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(settings.to_dict(), indent=2) + "\n", encoding="utf-8")


class SettingsStore:
    """Keeps the current settings in sync with their file."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._settings = ConversionSettings()

    @property
    def settings(self) -> ConversionSettings:
        return self._settings

    def load(self) -> ConversionSettings:
        self._settings = load_settings(self.path)
        return self._settings

    def update(self, **changes: Any) -> ConversionSettings:
        """Apply *changes* and save them, unless nothing actually changed."""
        updated = dataclasses.replace(self._settings, **changes)
        if updated != self._settings:
            save_settings(updated, self.path)
            logger.info("Settings saved to %s", self.path)
            self._settings = updated
        return self._settings
