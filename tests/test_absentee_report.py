"""
Unit tests for the weekly absentee report.
"""

import pytest
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from domain.absentee_report import build_report, count_absences
from domain.entities import Student

WEEK = "2024-03-23"


class TestBuildReport:
    """Tests for build_report."""

    def test_empty_matrix(self):
        assert build_report({}, WEEK) == {}

    def test_omits_students_without_absences(self):
        matrix = {WEEK: {
            "a": {"2024-03-25": False},
            "b": {"2024-03-25": True, "2024-03-26": True},
            "c": {},
        }}
        assert build_report(matrix, WEEK) == {"a": ["2024-03-25"]}

    def test_days_sorted_ascending(self):
        """Insertion order of the matrix does not leak into the report."""
        matrix = {WEEK: {"a": {
            "2024-03-29": False,
            "2024-03-23": False,
            "2024-03-26": True,
            "2024-03-25": False,
        }}}
        assert build_report(matrix, WEEK) == {
            "a": ["2024-03-23", "2024-03-25", "2024-03-29"]
        }

    def test_only_target_week(self):
        matrix = {
            WEEK: {"a": {"2024-03-25": False}},
            "2024-03-30": {"b": {"2024-04-01": False}},
        }
        assert build_report(matrix, "2024-03-30") == {"b": ["2024-04-01"]}

    def test_days_outside_week_are_ignored(self):
        matrix = {WEEK: {"a": {"2024-04-01": False}}}
        assert build_report(matrix, WEEK) == {}

    def test_only_explicit_false_counts(self):
        matrix = {WEEK: {"a": {"2024-03-25": 0, "2024-03-26": None}}}
        assert build_report(matrix, WEEK) == {}

    def test_roster_order_and_filter(self):
        matrix = {WEEK: {
            "b": {"2024-03-25": False},
            "ghost": {"2024-03-25": False},
            "a": {"2024-03-24": False},
        }}
        roster = [Student("a", "Ali"), Student("b", "Sara")]

        report = build_report(matrix, WEEK, roster)

        assert list(report.keys()) == ["a", "b"]

    def test_tolerates_corrupt_inner_shapes(self):
        matrix = {WEEK: {"a": "broken", "b": {"2024-03-25": False}}}
        assert build_report(matrix, WEEK) == {"b": ["2024-03-25"]}
        assert build_report({WEEK: ["junk"]}, WEEK) == {}

    def test_count_absences(self):
        assert count_absences({"a": ["2024-03-25", "2024-03-26"]}) == {"a": 2}


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
