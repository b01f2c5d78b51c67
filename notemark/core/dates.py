"""Calendar helpers for date markers."""

from __future__ import annotations

import datetime as _dt
import re
from dataclasses import dataclass

_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

_PARTIAL_DATE_RE = re.compile(r"^(\d{4})-(\d{1,2})(?:-(\d?))?$")


def is_leap_year(year: int) -> bool:
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def days_in_month(month: int, year: int) -> int:
    """Day count of ``month`` (1-12) in ``year``; 0 for an out-of-range month."""
    if month < 1 or month > 12:
        return 0
    if month == 2 and is_leap_year(year):
        return 29
    return _DAYS_IN_MONTH[month - 1]


def month_name(month: int) -> str:
    if 1 <= month <= 12:
        return MONTH_NAMES[month - 1]
    return "Unknown"


def following_month(month: int, year: int) -> tuple[int, int]:
    if month >= 12:
        return 1, year + 1
    return month + 1, year


def format_iso(year: int, month: int, day: int) -> str:
    return f"{year}-{month:02d}-{day:02d}"


def iso_today(today: _dt.date | None = None) -> str:
    return (today or _dt.date.today()).isoformat()


def iso_tomorrow(today: _dt.date | None = None) -> str:
    return ((today or _dt.date.today()) + _dt.timedelta(days=1)).isoformat()


@dataclass(frozen=True, slots=True)
class PartialDate:
    year: str
    month: str
    partial_day: str
    is_valid: bool
    days_in_month: int


def parse_partial_date(query: str) -> PartialDate | None:
    """Parse a date still being typed: ``2025-10``, ``2025-10-`` or ``2025-10-2``."""
    m = _PARTIAL_DATE_RE.match(str(query or ""))
    if not m:
        return None
    year = int(m.group(1))
    month = int(m.group(2))
    valid = 1000 <= year <= 9999 and 1 <= month <= 12
    return PartialDate(
        year=m.group(1),
        month=m.group(2),
        partial_day=m.group(3) or "",
        is_valid=valid,
        days_in_month=days_in_month(month, year) if valid else 0,
    )
