"""
Unit tests for the persistence gateway and key-value stores.
"""

import json
import pytest
from datetime import date
from unittest.mock import MagicMock
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from domain.entities import Student, Weekday
from infrastructure.persistence import (
    STORAGE_KEYS, JsonFileStore, MemoryStore, PersistenceGateway
)

TODAY = date(2024, 3, 27)


def gateway_with(**records) -> PersistenceGateway:
    initial = {STORAGE_KEYS[name]: value for name, value in records.items()}
    return PersistenceGateway(MemoryStore(initial))


class TestLoadStudents:
    """Tests for roster loading."""

    def test_missing_record(self):
        assert gateway_with().load_students() == []

    def test_not_json(self):
        assert gateway_with(students="not json").load_students() == []

    def test_wrong_shape(self):
        assert gateway_with(students='{"id": "a"}').load_students() == []

    def test_valid_roster_keeps_order(self):
        raw = json.dumps([{"id": "b", "name": "Sara"}, {"id": "a", "name": "Ali"}])
        assert gateway_with(students=raw).load_students() == [
            Student("b", "Sara"), Student("a", "Ali")
        ]

    def test_malformed_entries_are_dropped(self):
        raw = json.dumps([
            {"id": "a", "name": "Ali"}, {"id": 3, "name": "Bad"}, "junk", {"name": "NoId"}
        ])
        assert gateway_with(students=raw).load_students() == [Student("a", "Ali")]


class TestLoadAttendance:
    """Tests for matrix loading."""

    def test_missing_or_invalid(self):
        assert gateway_with().load_attendance() == {}
        assert gateway_with(attendance="{oops").load_attendance() == {}
        assert gateway_with(attendance="[1, 2]").load_attendance() == {}

    def test_inner_corruption_is_kept(self):
        """Only the outer shape is validated."""
        raw = json.dumps({"2024-03-23": {"a": "broken"}})
        assert gateway_with(attendance=raw).load_attendance() == {"2024-03-23": {"a": "broken"}}


class TestLoadSelectedWeek:
    """Tests for selected-week loading."""

    def test_missing_uses_current_week(self):
        assert gateway_with().load_selected_week(TODAY) == "2024-03-23"

    def test_stored_value_is_renormalized(self):
        assert gateway_with(selected_week="2024-03-27").load_selected_week(TODAY) == "2024-03-23"
        assert gateway_with(selected_week="2024-04-02").load_selected_week(TODAY) == "2024-03-30"

    def test_garbage_uses_current_week(self):
        assert gateway_with(selected_week="garbage").load_selected_week(TODAY) == "2024-03-23"

    def test_unrepresentable_week_uses_current_week(self):
        gateway = gateway_with(selected_week="0001-01-01")
        assert gateway.load_selected_week(TODAY) == "2024-03-23"

    def test_last_calendar_week(self):
        gateway = gateway_with(selected_week="9999-12-31")
        assert gateway.load_selected_week(TODAY) == "9999-12-25"

    def test_configured_week_start(self):
        gateway = PersistenceGateway(
            MemoryStore({STORAGE_KEYS["selected_week"]: "2024-03-27"}), week_start=Weekday.MONDAY
        )
        assert gateway.load_selected_week(TODAY) == "2024-03-25"


class TestSave:
    """Tests for saving records."""

    def test_save_and_reload(self):
        gateway = PersistenceGateway(MemoryStore())
        students = [Student("a", "علی")]
        matrix = {"2024-03-23": {"a": {"2024-03-25": False}}}

        assert gateway.save_students(students) is True
        assert gateway.save_attendance(matrix) is True
        assert gateway.save_selected_week("2024-03-23") is True

        assert gateway.load_students() == students
        assert gateway.load_attendance() == matrix
        assert gateway.store.get(STORAGE_KEYS["selected_week"]) == "2024-03-23"

    def test_write_failure_returns_false(self):
        store = MagicMock()
        store.set.side_effect = PermissionError("read-only")
        gateway = PersistenceGateway(store)

        assert gateway.save_students([Student("a", "Ali")]) is False
        assert gateway.save_selected_week("2024-03-23") is False


class TestJsonFileStore:
    """Tests for the file-backed store."""

    def test_missing_file_reads_empty(self, tmp_path):
        assert JsonFileStore(tmp_path / "data.json").get("anything") is None

    def test_set_then_get(self, tmp_path):
        store = JsonFileStore(tmp_path / "nested" / "data.json")
        store.set("k1", "v1")
        store.set("k2", "v2")

        reopened = JsonFileStore(tmp_path / "nested" / "data.json")
        assert reopened.get("k1") == "v1"
        assert reopened.get("k2") == "v2"

    def test_corrupt_file_reads_empty(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text("{not json", encoding="utf-8")
        store = JsonFileStore(path)

        assert store.get("k") is None
        store.set("k", "v")
        assert store.get("k") == "v"

    def test_invalid_utf8_file_reads_empty(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_bytes(b'{"attendance-students": "\xff\xfe"}')

        gateway = PersistenceGateway(JsonFileStore(path))

        assert gateway.load_students() == []
        assert gateway.load_attendance() == {}
        assert gateway.load_selected_week(TODAY) == "2024-03-23"

    def test_gateway_over_file(self, tmp_path):
        gateway = PersistenceGateway(JsonFileStore(tmp_path / "data.json"))
        gateway.save_students([Student("a", "Ali")])

        again = PersistenceGateway(JsonFileStore(tmp_path / "data.json"))
        assert again.load_students() == [Student("a", "Ali")]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
