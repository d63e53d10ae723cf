"""
Unit tests for locale-aware date labels.
"""

import pytest
from datetime import date
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from domain.locale_format import (
    DEFAULT_LOCALE, format_date_for_display, format_short_date, get_locale,
    gregorian_to_jalali, localize_digits, weekday_label
)


class TestJalaliConversion:
    """Tests for the Solar Hijri calendar conversion."""

    @pytest.mark.parametrize("gregorian, jalali", [
        (date(2024, 3, 20), (1403, 1, 1)),
        (date(2024, 3, 19), (1402, 12, 29)),
        (date(2024, 3, 25), (1403, 1, 6)),
        (date(2024, 10, 1), (1403, 7, 10)),
        (date(2023, 3, 21), (1402, 1, 1)),
    ])
    def test_known_dates(self, gregorian, jalali):
        assert gregorian_to_jalali(gregorian) == jalali


class TestLocaleProfiles:
    """Tests for locale lookup."""

    def test_default_is_persian(self):
        assert DEFAULT_LOCALE == "fa-IR"
        assert get_locale("fa-IR").right_to_left is True

    def test_unknown_locale_falls_back(self):
        assert get_locale("xx-XX").code == DEFAULT_LOCALE

    def test_persian_weekday_labels(self):
        labels = get_locale("fa-IR").weekday_labels
        assert labels[6] == "شنبه"
        assert labels[0] == "یکشنبه"
        assert labels[5] == "جمعه"
        assert len(labels) == 7


class TestFormatting:
    """Tests for display labels."""

    def test_persian_display(self):
        assert format_date_for_display("2024-03-25", "fa-IR") == "دوشنبه ۶ فروردین"
        assert format_date_for_display("2024-03-23", "fa-IR") == "شنبه ۴ فروردین"

    def test_english_display(self):
        assert format_date_for_display("2024-03-25", "en-US") == "Mon, March 25"

    def test_weekday_label(self):
        assert weekday_label("2024-03-25") == "دوشنبه"
        assert weekday_label("2024-03-25", "en-US") == "Monday"

    def test_short_date(self):
        assert format_short_date("2024-03-25", "fa-IR") == "۱/۶"
        assert format_short_date("2024-03-25", "en-US") == "3/25"

    def test_invalid_dates_render_empty(self):
        assert format_date_for_display("nope") == ""
        assert format_short_date("nope") == ""
        assert weekday_label("nope") == ""

    def test_localize_digits(self):
        assert localize_digits("12", "fa-IR") == "۱۲"
        assert localize_digits("12", "en-US") == "12"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
