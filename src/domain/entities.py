"""
Domain Entities Module

Core types of the attendance dashboard: the student roster entry, the
sparse attendance matrix and the weekly absentee report.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum, auto
from typing import Dict, List


class Weekday(IntEnum):
    """Weekday indices in Sunday-first numbering."""
    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6


# Weeks start on Saturday unless configured otherwise
DEFAULT_WEEK_START = Weekday.SATURDAY

DAYS_PER_WEEK = 7


class StoreChange(Enum):
    """Which part of the attendance store a committed mutation touched."""
    ROSTER = auto()      # students added or removed
    ATTENDANCE = auto()  # matrix entries toggled or purged


@dataclass(frozen=True)
class Student:
    """
    A student on the class roster.

    Attributes:
        id: Opaque unique identifier, the student's identity
        name: Display name, trimmed and non-empty
    """
    id: str
    name: str

    def to_dict(self) -> Dict[str, str]:
        return {"id": self.id, "name": self.name}


# WeekKey -> StudentId -> DayKey -> PresenceFlag.
# A missing entry means "present"; only explicit absences need to be stored.
AttendanceMatrix = Dict[str, Dict[str, Dict[str, bool]]]

# StudentId -> missed DayKeys in ascending order
AbsenteeReport = Dict[str, List[str]]

DEFAULT_PRESENCE = True
