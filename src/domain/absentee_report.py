"""
Absentee Report Module

Derives the weekly absentee report from the attendance matrix.
"""

from typing import Dict, Iterable, Optional

from .date_week import build_day_keys
from .entities import AbsenteeReport, AttendanceMatrix, Student


def build_report(
    matrix: AttendanceMatrix,
    week_key: str,
    roster: Optional[Iterable[Student]] = None
) -> AbsenteeReport:
    """
    Collect every student's missed days in one week.

    Args:
        matrix: Attendance matrix (WeekKey -> StudentId -> DayKey -> flag)
        week_key: Normalized week-start date
        roster: When given, the report follows roster order and skips ids
            that are not on the roster. Otherwise matrix order is kept.

    Returns:
        StudentId -> DayKeys recorded as absent, ascending. Students without
        an absence that week are omitted.
    """
    week_records = matrix.get(week_key)
    if not isinstance(week_records, dict):
        return {}

    valid_days = set(build_day_keys(week_key))

    if roster is None:
        student_ids = list(week_records.keys())
    else:
        student_ids = [student.id for student in roster]

    report: AbsenteeReport = {}
    for student_id in student_ids:
        days = week_records.get(student_id)
        if not isinstance(days, dict):
            continue

        # ISO strings sort chronologically
        missed = sorted(
            day for day, present in days.items()
            if present is False and day in valid_days
        )
        if missed:
            report[student_id] = missed

    return report


def count_absences(report: AbsenteeReport) -> Dict[str, int]:
    """Number of missed days per student in a report."""
    return {student_id: len(days) for student_id, days in report.items()}
