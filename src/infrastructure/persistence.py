"""
Persistence Module

Durable storage for the roster, the attendance matrix and the selected
week. Records live under fixed keys of a key-value store whose values are
text; the roster and matrix are JSON documents, the selected week is a bare
ISO date.

Loading never fails: missing, unparseable or wrongly shaped records are
logged and replaced by their empty/default value.
"""

import json
from abc import ABC, abstractmethod
from datetime import date
from pathlib import Path
from typing import Dict, List, Optional

from domain.date_week import is_valid_iso_date, start_of_week
from domain.entities import AttendanceMatrix, DEFAULT_WEEK_START, Student
from infrastructure.logger import get_logger

logger = get_logger("Persistence")

STORAGE_KEYS = {
    "students": "attendance-students",
    "attendance": "attendance-records",
    "selected_week": "attendance-selected-week",
}


class KeyValueStore(ABC):
    """Text values addressed by string keys."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored text, or None when the key is absent."""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store text under a key. May raise OSError."""
        pass


class MemoryStore(KeyValueStore):
    """In-process store, used for tests and headless sessions."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStore(KeyValueStore):
    """
    Key-value store backed by one JSON object on disk.

    The whole file is rewritten on every ``set``. A missing or corrupt file
    reads as an empty store.
    """

    def __init__(self, file_path: Path):
        self.file_path = Path(file_path)

    def _read_all(self) -> Dict[str, str]:
        if not self.file_path.exists():
            return {}
        try:
            with open(self.file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Cannot read data file {self.file_path}, starting empty: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Data file {self.file_path} is not a JSON object, starting empty")
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def get(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self.file_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.file_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)


class PersistenceGateway:
    """
    Loads and saves the three dashboard records.

    Save methods return False (after logging the traceback) when the store
    cannot be written; the caller's in-memory state stays authoritative.
    """

    def __init__(self, store: KeyValueStore, week_start: int = DEFAULT_WEEK_START):
        self.store = store
        self.week_start = week_start

    def _load_json(self, key: str):
        raw = self.store.get(key)
        if not raw:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Discarding malformed record '{key}': {e}")
            return None

    def _save(self, key: str, value: str) -> bool:
        try:
            self.store.set(key, value)
        except OSError:
            logger.exception(f"Failed to persist record '{key}'")
            return False
        return True

    def load_students(self) -> List[Student]:
        """Roster in stored order; entries without string id/name are dropped."""
        parsed = self._load_json(STORAGE_KEYS["students"])
        if parsed is None:
            return []
        if not isinstance(parsed, list):
            logger.warning("Stored roster is not a list, using an empty roster")
            return []

        students = [
            Student(id=item["id"], name=item["name"])
            for item in parsed
            if isinstance(item, dict)
            and isinstance(item.get("id"), str)
            and isinstance(item.get("name"), str)
        ]
        if len(students) != len(parsed):
            logger.warning(f"Dropped {len(parsed) - len(students)} malformed roster entries")
        return students

    def load_attendance(self) -> AttendanceMatrix:
        """
        Attendance matrix as stored.

        Only the outer document is shape-checked; corrupt inner entries are
        left for the store's default-present reads to absorb.
        """
        parsed = self._load_json(STORAGE_KEYS["attendance"])
        if parsed is None:
            return {}
        if not isinstance(parsed, dict):
            logger.warning("Stored attendance is not an object, using an empty matrix")
            return {}
        return parsed

    def load_selected_week(self, today: Optional[date] = None) -> str:
        """Stored week re-normalized to a week start, or the current week."""
        raw = self.store.get(STORAGE_KEYS["selected_week"])
        if not raw:
            return start_of_week(today or date.today(), self.week_start)
        if not is_valid_iso_date(raw):
            logger.warning(f"Discarding malformed selected week {raw!r}")
        return start_of_week(raw.strip(), self.week_start, today)

    def save_students(self, students: List[Student]) -> bool:
        payload = json.dumps([s.to_dict() for s in students], ensure_ascii=False)
        return self._save(STORAGE_KEYS["students"], payload)

    def save_attendance(self, matrix: AttendanceMatrix) -> bool:
        payload = json.dumps(matrix, ensure_ascii=False)
        return self._save(STORAGE_KEYS["attendance"], payload)

    def save_selected_week(self, week_key: str) -> bool:
        return self._save(STORAGE_KEYS["selected_week"], week_key)
