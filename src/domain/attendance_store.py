"""
Attendance Store Module

Owns the class roster and the sparse attendance matrix, and notifies
subscribers after every committed mutation.
"""

import copy
import uuid
from typing import Callable, Dict, List, Optional

from .date_week import is_day_in_week, start_of_week
from .entities import (
    AttendanceMatrix, DEFAULT_PRESENCE, DEFAULT_WEEK_START, Student, StoreChange
)
from infrastructure.logger import get_logger

logger = get_logger("AttendanceStore")

Listener = Callable[[StoreChange], None]


def _new_student_id() -> str:
    return str(uuid.uuid4())


class AttendanceStore:
    """
    Roster and attendance matrix for a single class.

    Presence is the implicit default: only toggled entries are stored, and
    a missing (week, student, day) entry reads as present. Every WeekKey is
    normalized to the configured week start before it touches the matrix.

    Each mutation that changes state calls every subscriber exactly once,
    in subscription order, after the change is applied. No-op calls
    (duplicate names, unknown ids, days outside the week) notify nobody.
    """

    def __init__(
        self,
        students: Optional[List[Student]] = None,
        matrix: Optional[AttendanceMatrix] = None,
        week_start: int = DEFAULT_WEEK_START,
        id_factory: Optional[Callable[[], str]] = None
    ):
        self._students: List[Student] = list(students or [])
        self._matrix: AttendanceMatrix = matrix if matrix is not None else {}
        self.week_start = week_start
        self._id_factory = id_factory or _new_student_id
        self._listeners: List[Listener] = []

    @property
    def students(self) -> List[Student]:
        """Roster in insertion order (a copy)."""
        return list(self._students)

    @property
    def matrix(self) -> AttendanceMatrix:
        """Deep copy of the attendance matrix."""
        return copy.deepcopy(self._matrix)

    def students_by_id(self) -> Dict[str, Student]:
        return {student.id: student for student in self._students}

    def find_student(self, student_id: str) -> Optional[Student]:
        for student in self._students:
            if student.id == student_id:
                return student
        return None

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a callback invoked after each committed mutation.

        Returns:
            A function that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, change: StoreChange) -> None:
        for listener in list(self._listeners):
            listener(change)

    def normalize_week(self, week_key: str) -> str:
        return start_of_week(week_key, self.week_start)

    # ------------------------------------------------------------------
    # Roster
    # ------------------------------------------------------------------

    def add_student(self, name: str) -> Optional[Student]:
        """
        Add a student by name.

        The name is trimmed. Empty names and names matching an existing
        student case-insensitively are ignored.

        Returns:
            The new Student, or None when nothing was added
        """
        trimmed = (name or "").strip()
        if not trimmed:
            return None

        folded = trimmed.casefold()
        if any(student.name.casefold() == folded for student in self._students):
            logger.debug(f"Ignoring duplicate student name: {trimmed}")
            return None

        student = Student(id=self._id_factory(), name=trimmed)
        self._students.append(student)
        logger.debug(f"Added student {student.id} ({student.name})")
        self._notify(StoreChange.ROSTER)
        return student

    def remove_student(self, student_id: str) -> bool:
        """
        Remove a student and purge their entries from every week.

        Returns:
            True if a student or any of their records was removed
        """
        remaining = [s for s in self._students if s.id != student_id]
        roster_changed = len(remaining) != len(self._students)
        self._students = remaining

        matrix_changed = False
        for week_records in self._matrix.values():
            if isinstance(week_records, dict) and student_id in week_records:
                del week_records[student_id]
                matrix_changed = True

        if roster_changed:
            logger.debug(f"Removed student {student_id}")
            self._notify(StoreChange.ROSTER)
        if matrix_changed:
            self._notify(StoreChange.ATTENDANCE)
        return roster_changed or matrix_changed

    # ------------------------------------------------------------------
    # Attendance
    # ------------------------------------------------------------------

    def get_presence(self, week_key: str, student_id: str, day_key: str) -> bool:
        """
        Presence flag of a student on a day.

        Anything other than an explicitly stored ``False`` reads as present,
        including missing weeks, students, days and corrupt inner values.
        """
        week_records = self._matrix.get(self.normalize_week(week_key))
        if not isinstance(week_records, dict):
            return DEFAULT_PRESENCE

        day_records = week_records.get(student_id)
        if not isinstance(day_records, dict):
            return DEFAULT_PRESENCE

        return day_records.get(day_key, DEFAULT_PRESENCE) is not False

    def toggle_attendance(self, week_key: str, student_id: str, day_key: str) -> bool:
        """
        Flip a student's presence on one day of a week.

        Only the (week, student, day) entry is written. Unknown students and
        days outside the week's span are ignored.

        Returns:
            The presence flag after the call
        """
        week = self.normalize_week(week_key)
        current = self.get_presence(week, student_id, day_key)

        if self.find_student(student_id) is None:
            return current
        if not is_day_in_week(week, day_key):
            return current

        week_records = self._matrix.get(week)
        if not isinstance(week_records, dict):
            week_records = {}
            self._matrix[week] = week_records

        day_records = week_records.get(student_id)
        if not isinstance(day_records, dict):
            day_records = {}
            week_records[student_id] = day_records

        day_records[day_key] = not current
        logger.debug(f"Set {student_id} on {day_key} (week {week}) to {not current}")
        self._notify(StoreChange.ATTENDANCE)
        return not current
