"""Unit tests for quarto_export.callouts."""

import pytest

from quarto_export.callouts import CALLOUT_TYPES, map_callout_type


class TestMapCalloutType:
    @pytest.mark.parametrize(
        "obsidian, quarto",
        [
            ("note", "note"),
            ("tip", "tip"),
            ("failure", "error"),
            ("danger", "warning"),
            ("warning", "warning"),
            ("quote", "quote"),
        ],
    )
    def test_table(self, obsidian, quarto):
        assert map_callout_type(obsidian) == quarto

    def test_case_insensitive(self):
        assert map_callout_type("DANGER") == "warning"
        assert map_callout_type("Tip") == "tip"

    def test_unknown_type_defaults_to_note(self):
        assert map_callout_type("abstract") == "note"
        assert map_callout_type("") == "note"

    def test_table_is_many_to_one(self):
        assert len(set(CALLOUT_TYPES.values())) < len(CALLOUT_TYPES)
