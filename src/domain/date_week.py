"""
Date/Week Calculator Module

Pure, locale-independent date arithmetic for the weekly attendance grid.

ISO strings (``YYYY-MM-DD``) are the canonical key format. A WeekKey is the
ISO date of the first day of a week, and the first day always falls on the
configured week-start weekday (Saturday by default). A DayKey is any ISO
date inside that 7-day span.

Weekday indices use Sunday-first numbering (0=Sunday ... 6=Saturday),
unlike ``date.weekday()`` which counts from Monday.
"""

from datetime import date, datetime, timedelta
from typing import List, Optional, Union

from .entities import DAYS_PER_WEEK, DEFAULT_WEEK_START

DateInput = Union[str, date, datetime, None]


def to_iso_date(value: Union[date, datetime]) -> str:
    """
    Normalize a date or datetime to its calendar date as ``YYYY-MM-DD``.

    The time of day (and any tzinfo) is discarded; only the local calendar
    date is kept, so repeated calls on the same day always agree.
    """
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


def from_iso_date(iso: str) -> Optional[date]:
    """
    Parse ``YYYY-MM-DD`` into a date.

    Returns None (the "not-a-date" value) when the input is not a string,
    lacks a component, has a non-numeric or zero component, or names a day
    that does not exist. Never raises.
    """
    if not isinstance(iso, str):
        return None

    parts = iso.strip().split("-")
    if len(parts) != 3:
        return None

    try:
        year, month, day = (int(part) for part in parts)
    except ValueError:
        return None

    if not year or not month or not day:
        return None

    try:
        return date(year, month, day)
    except ValueError:
        return None


def is_valid_iso_date(iso: str) -> bool:
    """Check whether a string parses as a calendar date."""
    return from_iso_date(iso) is not None


def weekday_index(value: date) -> int:
    """Sunday-first weekday index of a date (0=Sunday, 6=Saturday)."""
    return (value.weekday() + 1) % 7


def _coerce_date(value: DateInput) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return from_iso_date(value)
    return None


def _week_span_start(base: date, week_start: int) -> Optional[date]:
    """First day of the week containing ``base``, or None when the week runs
    past either end of the calendar."""
    offset = (weekday_index(base) - week_start) % DAYS_PER_WEEK
    if (base - date.min).days < offset:
        return None
    if (date.max - base).days < DAYS_PER_WEEK - 1 - offset:
        return None
    return base - timedelta(days=offset)


def start_of_week(
    value: DateInput,
    week_start: int = DEFAULT_WEEK_START,
    today: Optional[date] = None
) -> str:
    """
    Compute the WeekKey of the week containing ``value``.

    Args:
        value: ISO string, date or datetime
        week_start: Sunday-first index of the first weekday (6 = Saturday)
        today: Override for the current date, used when ``value`` is invalid

    Returns:
        ISO date of the week's first day. Invalid input, or a date whose
        week does not fit inside the calendar (year 1 or 9999), falls back
        to the week containing today, so the result is always a valid WeekKey.
    """
    base = _coerce_date(value)
    first = _week_span_start(base, week_start) if base is not None else None
    if first is None:
        first = (
            _week_span_start(today or date.today(), week_start)
            or _week_span_start(date.today(), week_start)
        )
    return to_iso_date(first)


def start_of_week_saturday(value: DateInput, today: Optional[date] = None) -> str:
    """WeekKey for weeks starting on Saturday."""
    return start_of_week(value, DEFAULT_WEEK_START, today)


def build_day_keys(week_start_iso: str) -> List[str]:
    """
    Enumerate the 7 DayKeys of the week beginning at ``week_start_iso``.

    The first key equals the input date; the rest are the 6 following
    calendar days in ascending order. An unparseable input, or one too
    close to the end of the calendar to hold 7 days, yields the days of
    the current Saturday-based week.
    """
    start = from_iso_date(week_start_iso)
    if start is None or (date.max - start).days < DAYS_PER_WEEK - 1:
        start = from_iso_date(start_of_week(None))

    return [to_iso_date(start + timedelta(days=offset)) for offset in range(DAYS_PER_WEEK)]


def is_day_in_week(week_key: str, day_key: str) -> bool:
    """Check whether ``day_key`` belongs to the 7-day span of ``week_key``."""
    return day_key in build_day_keys(week_key)
