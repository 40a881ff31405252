"""Unit tests for quarto_export.dates."""

from datetime import datetime

import pytest

from quarto_export.dates import format_date, note_date
from quarto_export.settings import ConversionSettings

MOMENT = datetime(2024, 3, 7, 9, 5, 2)


# ---------------------------------------------------------------------------
# format_date
# ---------------------------------------------------------------------------


class TestFormatDate:
    @pytest.mark.parametrize(
        "pattern, expected",
        [
            ("YYYY-MM-DD", "2024-03-07"),
            ("DD/MM/YYYY HH:mm:ss", "07/03/2024 09:05:02"),
            ("YYYYMMDD", "20240307"),
            ("HH:mm", "09:05"),
        ],
    )
    def test_tokens(self, pattern, expected):
        assert format_date(MOMENT, pattern) == expected

    def test_zero_padding_widths(self):
        out = format_date(datetime(5, 1, 2, 3, 4, 5), "YYYY|MM|DD|HH|mm|ss")
        assert [len(part) for part in out.split("|")] == [4, 2, 2, 2, 2, 2]
        assert out == "0005|01|02|03|04|05"

    def test_unknown_tokens_pass_through(self):
        assert format_date(MOMENT, "Q1 of YYYY, week W") == "Q1 of 2024, week W"

    def test_pattern_without_tokens(self):
        assert format_date(MOMENT, "today") == "today"

    def test_repeated_token(self):
        assert format_date(MOMENT, "YYYY/YYYY") == "2024/2024"

    def test_timestamp_uses_local_time(self):
        stamp = MOMENT.timestamp()  # naive datetime -> local time
        assert format_date(stamp, "YYYY-MM-DD HH:mm:ss") == "2024-03-07 09:05:02"


# ---------------------------------------------------------------------------
# note_date
# ---------------------------------------------------------------------------


class TestNoteDate:
    def test_created(self, note_factory):
        note = note_factory("n", created=datetime(2020, 1, 2).timestamp(), modified=MOMENT.timestamp())
        settings = ConversionSettings(date_option="created")
        assert note_date(note, settings) == "2020-01-02"

    def test_modified(self, note_factory):
        note = note_factory("n", created=datetime(2020, 1, 2).timestamp(), modified=MOMENT.timestamp())
        settings = ConversionSettings(date_option="modified", date_format="YYYY-MM-DD HH:mm")
        assert note_date(note, settings) == "2024-03-07 09:05"

    def test_missing_timestamp_falls_back_to_now(self, note_factory):
        note = note_factory("n")
        settings = ConversionSettings(date_option="modified")
        assert note_date(note, settings, now=datetime(1999, 12, 31)) == "1999-12-31"
