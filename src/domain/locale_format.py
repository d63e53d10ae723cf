"""
Locale Formatting Module

Presentation-side date rendering, kept apart from the pure week arithmetic
in ``date_week``. Every function takes the locale code explicitly so the
core stays testable without locale fixtures.

Two profiles ship with the application:
- ``fa-IR``: Solar Hijri (Jalali) calendar, Persian digits and labels
- ``en-US``: Gregorian calendar, ASCII digits, English labels
"""

from dataclasses import dataclass
from datetime import date
from typing import Dict, Tuple

from .date_week import from_iso_date, weekday_index

DEFAULT_LOCALE = "fa-IR"

PERSIAN_MONTHS = (
    "فروردین", "اردیبهشت", "خرداد", "تیر", "مرداد", "شهریور",
    "مهر", "آبان", "آذر", "دی", "بهمن", "اسفند",
)

GREGORIAN_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

_PERSIAN_DIGITS = str.maketrans("0123456789", "۰۱۲۳۴۵۶۷۸۹")


@dataclass(frozen=True)
class LocaleProfile:
    """
    Display conventions of one locale.

    Attributes:
        code: Locale code, e.g. "fa-IR"
        calendar: "persian" or "gregorian"
        weekday_labels: Full weekday names keyed by Sunday-first index
        weekday_short: Abbreviated weekday names keyed by Sunday-first index
        month_names: Month names of the locale's calendar, January/Farvardin first
        display_pattern: Template for the weekday+day+month label
        native_digits: Whether digits are rendered in the locale's script
        right_to_left: Text direction of the locale
        absentees_label: Word used in the export filename
        export_headers: Column headers of the absentee export
    """
    code: str
    calendar: str
    weekday_labels: Dict[int, str]
    weekday_short: Dict[int, str]
    month_names: Tuple[str, ...]
    display_pattern: str
    native_digits: bool
    right_to_left: bool
    absentees_label: str
    export_headers: Tuple[str, str, str, str]


_PERSIAN_WEEKDAYS = {
    6: "شنبه",
    0: "یکشنبه",
    1: "دوشنبه",
    2: "سه‌شنبه",
    3: "چهارشنبه",
    4: "پنجشنبه",
    5: "جمعه",
}

_LOCALES: Dict[str, LocaleProfile] = {
    "fa-IR": LocaleProfile(
        code="fa-IR",
        calendar="persian",
        weekday_labels=_PERSIAN_WEEKDAYS,
        weekday_short=_PERSIAN_WEEKDAYS,
        month_names=PERSIAN_MONTHS,
        display_pattern="{weekday} {day} {month}",
        native_digits=True,
        right_to_left=True,
        absentees_label="غایبین",
        export_headers=("نام دانش‌آموز", "روز غیبت", "تاریخ شمسی", "هفته آغازین"),
    ),
    "en-US": LocaleProfile(
        code="en-US",
        calendar="gregorian",
        weekday_labels={
            0: "Sunday", 1: "Monday", 2: "Tuesday", 3: "Wednesday",
            4: "Thursday", 5: "Friday", 6: "Saturday",
        },
        weekday_short={
            0: "Sun", 1: "Mon", 2: "Tue", 3: "Wed",
            4: "Thu", 5: "Fri", 6: "Sat",
        },
        month_names=GREGORIAN_MONTHS,
        display_pattern="{weekday}, {month} {day}",
        native_digits=False,
        right_to_left=False,
        absentees_label="absentees",
        export_headers=("Student name", "Weekday", "Date", "Week start"),
    ),
}


def available_locales() -> list[str]:
    return list(_LOCALES.keys())


def get_locale(code: str) -> LocaleProfile:
    """Look up a locale profile, falling back to the default locale."""
    return _LOCALES.get(code) or _LOCALES[DEFAULT_LOCALE]


def gregorian_to_jalali(value: date) -> Tuple[int, int, int]:
    """
    Convert a Gregorian date to the Solar Hijri (Jalali) calendar.

    Uses the arithmetic 33-year-cycle approximation, exact for the years a
    school calendar cares about.

    Returns:
        Tuple of (year, month, day); month 1 is Farvardin
    """
    cumulative_days = (0, 31, 59, 90, 120, 151, 181, 212, 243, 273, 304, 334)
    gy, gm, gd = value.year, value.month, value.day

    gy2 = gy + 1 if gm > 2 else gy
    days = (
        355666 + 365 * gy + (gy2 + 3) // 4 - (gy2 + 99) // 100
        + (gy2 + 399) // 400 + gd + cumulative_days[gm - 1]
    )

    jy = -1595 + 33 * (days // 12053)
    days %= 12053
    jy += 4 * (days // 1461)
    days %= 1461
    if days > 365:
        jy += (days - 1) // 365
        days = (days - 1) % 365

    if days < 186:
        jm = 1 + days // 31
        jd = 1 + days % 31
    else:
        jm = 7 + (days - 186) // 30
        jd = 1 + (days - 186) % 30
    return jy, jm, jd


def localize_digits(text: str, locale: str = DEFAULT_LOCALE) -> str:
    """Render ASCII digits in the locale's native script."""
    if get_locale(locale).native_digits:
        return text.translate(_PERSIAN_DIGITS)
    return text


def _calendar_parts(value: date, profile: LocaleProfile) -> Tuple[int, int, int]:
    if profile.calendar == "persian":
        return gregorian_to_jalali(value)
    return value.year, value.month, value.day


def weekday_label(iso: str, locale: str = DEFAULT_LOCALE) -> str:
    """Full weekday name of an ISO date; empty for an invalid date."""
    parsed = from_iso_date(iso)
    if parsed is None:
        return ""
    return get_locale(locale).weekday_labels.get(weekday_index(parsed), "")


def format_date_for_display(iso: str, locale: str = DEFAULT_LOCALE) -> str:
    """
    Weekday, day and month label of an ISO date in the given locale.

    ``format_date_for_display("2024-03-25", "fa-IR")`` gives
    ``"دوشنبه ۶ فروردین"``; with ``"en-US"`` it gives ``"Mon, March 25"``.
    Invalid dates render as an empty string.
    """
    parsed = from_iso_date(iso)
    if parsed is None:
        return ""

    profile = get_locale(locale)
    _, month, day = _calendar_parts(parsed, profile)
    label = profile.display_pattern.format(
        weekday=profile.weekday_short[weekday_index(parsed)],
        day=day,
        month=profile.month_names[month - 1],
    )
    return localize_digits(label, profile.code)


def format_short_date(iso: str, locale: str = DEFAULT_LOCALE) -> str:
    """Numeric month/day label used under grid column headers."""
    parsed = from_iso_date(iso)
    if parsed is None:
        return ""

    profile = get_locale(locale)
    _, month, day = _calendar_parts(parsed, profile)
    return localize_digits(f"{month}/{day}", profile.code)
