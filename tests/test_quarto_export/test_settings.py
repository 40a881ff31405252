"""Unit tests for quarto_export.settings."""

import json
from pathlib import Path

import pytest

from quarto_export.settings import (
    ConversionSettings,
    SettingsError,
    SettingsStore,
    load_settings,
    save_settings,
)


class TestConversionSettings:
    def test_defaults(self):
        s = ConversionSettings()
        assert s.date_option == "none"
        assert s.date_format == "YYYY-MM-DD"
        assert s.output_folder == ""
        assert s.overwrite_existing is False
        assert s.import_tags is True

    def test_invalid_date_option(self):
        with pytest.raises(SettingsError, match="date_option"):
            ConversionSettings(date_option="yesterday")

    def test_immutable(self):
        with pytest.raises(AttributeError):
            ConversionSettings().import_tags = False  # type: ignore[misc]

    def test_from_dict_ignores_unknown_keys(self):
        s = ConversionSettings.from_dict({"import_tags": False, "theme": "dark"})
        assert s == ConversionSettings(import_tags=False)


# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------


class TestLoadSave:
    def test_missing_file_gives_defaults(self, tmp_path: Path):
        assert load_settings(tmp_path / "none.json") == ConversionSettings()

    def test_partial_record_merged_with_defaults(self, tmp_path: Path):
        path = tmp_path / "s.json"
        path.write_text(json.dumps({"date_option": "created"}), encoding="utf-8")
        assert load_settings(path) == ConversionSettings(date_option="created")

    def test_round_trip(self, tmp_path: Path):
        path = tmp_path / "nested" / "s.json"
        settings = ConversionSettings(date_option="modified", output_folder="out", overwrite_existing=True)
        save_settings(settings, path)
        assert load_settings(path) == settings

    def test_malformed_json(self, tmp_path: Path):
        path = tmp_path / "s.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(SettingsError):
            load_settings(path)

    def test_non_object_json(self, tmp_path: Path):
        path = tmp_path / "s.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(SettingsError):
            load_settings(path)

    @pytest.mark.parametrize(
        "record",
        [{"overwrite_existing": "false"}, {"date_format": None}, {"import_tags": 1}, {"output_folder": 3}],
    )
    def test_wrongly_typed_value(self, tmp_path: Path, record):
        path = tmp_path / "s.json"
        path.write_text(json.dumps(record), encoding="utf-8")
        with pytest.raises(SettingsError):
            load_settings(path)


class TestSettingsStore:
    def test_update_saves(self, tmp_path: Path):
        path = tmp_path / "s.json"
        store = SettingsStore(path)
        store.load()
        updated = store.update(import_tags=False)
        assert updated.import_tags is False
        assert json.loads(path.read_text(encoding="utf-8"))["import_tags"] is False

    def test_unchanged_update_does_not_write(self, tmp_path: Path):
        path = tmp_path / "s.json"
        store = SettingsStore(path)
        store.load()
        store.update(import_tags=True)
        assert not path.exists()

    def test_load_reads_existing(self, tmp_path: Path):
        path = tmp_path / "s.json"
        save_settings(ConversionSettings(date_format="DD.MM.YYYY"), path)
        store = SettingsStore(path)
        assert store.load().date_format == "DD.MM.YYYY"
        assert store.settings.date_format == "DD.MM.YYYY"
