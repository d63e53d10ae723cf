"""
Unit tests for the date/week calculator.
"""

import pytest
from datetime import date, datetime, timedelta
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from domain.date_week import (
    build_day_keys, from_iso_date, is_day_in_week, is_valid_iso_date,
    start_of_week, start_of_week_saturday, to_iso_date, weekday_index
)
from domain.entities import Weekday


class TestIsoConversion:
    """Tests for to_iso_date / from_iso_date."""

    def test_date_to_iso(self):
        assert to_iso_date(date(2024, 3, 5)) == "2024-03-05"

    def test_datetime_drops_time_of_day(self):
        """Late-evening and early-morning times stay on the same calendar day."""
        assert to_iso_date(datetime(2024, 3, 25, 23, 59)) == "2024-03-25"
        assert to_iso_date(datetime(2024, 3, 25, 0, 1)) == "2024-03-25"

    def test_parse_valid(self):
        assert from_iso_date("2024-03-25") == date(2024, 3, 25)

    def test_parse_unpadded_components(self):
        assert from_iso_date("2024-3-5") == date(2024, 3, 5)

    @pytest.mark.parametrize("value", [
        "", "not-a-date", "2024-03", "2024-xx-01", "2024-00-10",
        "2024-13-01", "2023-02-29", "2024-03-25T10:00", None, 20240325,
    ])
    def test_parse_invalid_returns_none(self, value):
        """Malformed input gives the not-a-date value instead of raising."""
        assert from_iso_date(value) is None
        assert not is_valid_iso_date(value)

    def test_round_trip_over_a_year(self):
        """Converting to ISO and back denotes the same calendar day."""
        day = date(2024, 1, 1)
        for _ in range(366):
            assert from_iso_date(to_iso_date(day)) == day
            day += timedelta(days=1)


class TestWeekdayIndex:
    """Tests for Sunday-first weekday numbering."""

    def test_known_days(self):
        assert weekday_index(date(2024, 3, 24)) == Weekday.SUNDAY
        assert weekday_index(date(2024, 3, 25)) == Weekday.MONDAY
        assert weekday_index(date(2024, 3, 23)) == Weekday.SATURDAY


class TestStartOfWeek:
    """Tests for week-start normalization."""

    def test_wednesday_maps_to_previous_saturday(self):
        assert start_of_week_saturday("2024-03-27") == "2024-03-23"

    def test_saturday_is_its_own_week_start(self):
        assert start_of_week_saturday("2024-03-23") == "2024-03-23"

    def test_friday_is_last_day_of_week(self):
        assert start_of_week_saturday("2024-03-29") == "2024-03-23"
        assert start_of_week_saturday("2024-03-30") == "2024-03-30"

    def test_accepts_date_and_datetime(self):
        assert start_of_week_saturday(date(2024, 3, 27)) == "2024-03-23"
        assert start_of_week_saturday(datetime(2024, 3, 27, 18, 30)) == "2024-03-23"

    def test_crosses_month_and_year_boundaries(self):
        assert start_of_week_saturday("2024-03-01") == "2024-02-24"
        assert start_of_week_saturday("2025-01-02") == "2024-12-28"

    def test_invalid_input_falls_back_to_today(self):
        today = date(2024, 3, 27)
        assert start_of_week("garbage", today=today) == "2024-03-23"
        assert start_of_week(None, today=today) == "2024-03-23"

    def test_invalid_input_without_override_is_valid_week(self):
        result = start_of_week("garbage")
        assert is_valid_iso_date(result)
        assert weekday_index(from_iso_date(result)) == Weekday.SATURDAY

    def test_week_before_first_calendar_day_falls_back_to_today(self):
        today = date(2024, 3, 27)
        assert start_of_week("0001-01-01", today=today) == "2024-03-23"
        assert start_of_week(date.min, today=today) == "2024-03-23"

    def test_last_calendar_week(self):
        today = date(2024, 3, 27)
        assert start_of_week("9999-12-31", today=today) == "9999-12-25"
        # A Sunday-based week would run into year 10000
        assert start_of_week("9999-12-31", Weekday.SUNDAY, today) == "2024-03-24"

    def test_other_week_start(self):
        assert start_of_week("2024-03-27", Weekday.MONDAY) == "2024-03-25"
        assert start_of_week("2024-03-24", Weekday.MONDAY) == "2024-03-18"

    def test_idempotent(self):
        """Normalizing a week start again changes nothing."""
        day = date(2024, 1, 1)
        for _ in range(60):
            week = start_of_week_saturday(day)
            assert start_of_week_saturday(week) == week
            day += timedelta(days=1)


class TestBuildDayKeys:
    """Tests for day-key enumeration."""

    def test_seven_consecutive_days(self):
        assert build_day_keys("2024-03-23") == [
            "2024-03-23", "2024-03-24", "2024-03-25", "2024-03-26",
            "2024-03-27", "2024-03-28", "2024-03-29",
        ]

    def test_first_key_equals_input_even_if_not_normalized(self):
        keys = build_day_keys("2024-03-27")
        assert keys[0] == "2024-03-27"
        assert len(keys) == 7

    def test_strictly_ascending_across_year_end(self):
        keys = build_day_keys("2024-12-28")
        assert keys == sorted(keys)
        assert len(set(keys)) == 7
        assert keys[-1] == "2025-01-03"

    def test_invalid_week_gives_current_week(self):
        keys = build_day_keys("garbage")
        assert len(keys) == 7
        assert keys[0] == start_of_week_saturday(date.today())

    def test_last_calendar_week_keys(self):
        keys = build_day_keys("9999-12-25")
        assert keys[0] == "9999-12-25"
        assert keys[-1] == "9999-12-31"

    def test_week_past_calendar_end_gives_current_week(self):
        keys = build_day_keys("9999-12-31")
        assert len(keys) == 7
        assert keys[0] == start_of_week_saturday(date.today())

    def test_first_calendar_day(self):
        assert build_day_keys("0001-01-01")[-1] == "0001-01-07"

    def test_day_membership(self):
        assert is_day_in_week("2024-03-23", "2024-03-29")
        assert not is_day_in_week("2024-03-23", "2024-03-30")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
