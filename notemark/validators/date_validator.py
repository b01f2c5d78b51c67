"""Date marker validation (``@today``, ``@2025-02-15``)."""

from __future__ import annotations

import datetime as _dt
import re

from notemark.core import diagnostics as codes
from notemark.core.dates import (
    days_in_month,
    following_month,
    format_iso,
    is_leap_year,
    iso_today,
    iso_tomorrow,
    month_name,
)
from notemark.core.diagnostics import Diagnostic, make_diagnostic
from notemark.core.grammar import is_date_keyword
from notemark.settings_schema import resolve_config
from notemark.validators.common import as_offset, as_text, guarded

ISO_HINT = "Use @YYYY-MM-DD format (e.g., @2025-02-15)"
FIX_FORMAT_DESCRIPTION = "Convert to @YYYY-MM-DD format"

# Values that look like a date still being typed.
_PARTIAL_PATTERNS = tuple(
    re.compile(p)
    for p in (
        r"^\d{1,2}$",
        r"^\d{3}$",
        r"^\d{4}$",
        r"^\d{4}-$",
        r"^\d{4}-\d{1,2}$",
        r"^\d{4}-\d{1,2}-$",
    )
)

_SLASH_RE = re.compile(r"^(\d{4})/(\d{1,2})/(\d{1,2})$")
_US_SLASH_RE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")
_US_HYPHEN_RE = re.compile(r"^(\d{1,2})-(\d{1,2})-(\d{4})$")
_ISO_RE = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$")


def is_partial_date(value: str) -> bool:
    return any(p.match(value) for p in _PARTIAL_PATTERNS)


def _format_fix(value: str, start: int, year: int, month: int, day: int, message: str, code: str) -> Diagnostic:
    fixed = format_iso(year, month, day)
    return make_diagnostic(
        "error",
        message,
        start,
        value,
        suggestion=fixed,
        code=code,
        hint=ISO_HINT,
        fixes=[("Fix format", fixed, FIX_FORMAT_DESCRIPTION)],
    )


def _check_iso(value: str, start: int, year: int, month: int, day: int, cfg, today: _dt.date) -> Diagnostic | None:
    if year < cfg.year_min or year > cfg.year_max:
        current_year = today.year
        fixed = format_iso(current_year, month, day)
        return make_diagnostic(
            "error",
            f"Year {year} seems unusual. Expected {cfg.year_min}-{cfg.year_max}.",
            start,
            value,
            suggestion=fixed,
            code=codes.DATE_YEAR_RANGE,
            hint=f"Year should be between {cfg.year_min} and {cfg.year_max}",
            fixes=[("Use current year", fixed, f"Change year to {current_year}")],
        )

    if month < 1 or month > 12:
        fixed_month = 12 if month > 12 else 1
        fixed = format_iso(year, fixed_month, day)
        return make_diagnostic(
            "error",
            f"Invalid month {month:02d} - must be 01-12.",
            start,
            value,
            suggestion=fixed,
            code=codes.DATE_MONTH_RANGE,
            hint="Month must be 01-12 (e.g., 02 for February)",
            fixes=[
                (
                    "Fix to December" if month > 12 else "Fix month",
                    fixed,
                    f"Change month to {fixed_month:02d}",
                )
            ],
        )

    max_day = days_in_month(month, year)

    if day < 1 or day > 31:
        fixed_day = max_day if day > 31 else 1
        fixed = format_iso(year, month, fixed_day)
        return make_diagnostic(
            "error",
            f"Day must be 01-31, but got {day:02d}.",
            start,
            value,
            suggestion=fixed,
            code=codes.DATE_DAY_RANGE,
            hint="Day must be 01-31 depending on the month",
            fixes=[("Fix day", fixed, f"Change day to {fixed_day:02d}")],
        )

    if day <= max_day:
        return None

    name = month_name(month)
    clamped = format_iso(year, month, max_day)
    leap = month == 2 and is_leap_year(year)
    if month == 2:
        if leap:
            message = f"{name} has 29 days in {year} (leap year), but got day {day}."
            fixes = [("Use Feb 29", clamped, "Change to last day of February (leap year)")]
        else:
            message = f"{name} has 28 days in {year}, but got day {day}."
            fixes = [("Use Feb 28", clamped, "Change to last day of February")]
    else:
        message = f"{name} only has {max_day} days, but got day {day}."
        fixes = [(f"Use {name} {max_day}", clamped, f"Change to last day of {name}")]
        next_month, next_year = following_month(month, year)
        if day <= days_in_month(next_month, next_year):
            next_name = month_name(next_month)
            fixes.append(
                (
                    f"Use {next_name} {day}",
                    format_iso(next_year, next_month, day),
                    f"Change to {next_name} {day}, {next_year}",
                )
            )

    return make_diagnostic(
        "error",
        message,
        start,
        value,
        suggestion=clamped,
        code=codes.DATE_CALENDAR_INVALID,
        hint=f"{name} {year} has {max_day} days{' (leap year)' if leap else ''}",
        fixes=fixes,
    )


@guarded()
def validate_date(value, start, *, config=None, today: _dt.date | None = None) -> Diagnostic | None:
    value = as_text(value)
    start = as_offset(start)
    if not value:
        return None
    cfg = resolve_config(config)
    today = today or _dt.date.today()

    if is_partial_date(value):
        return None
    if is_date_keyword(value):
        return None

    m = _SLASH_RE.match(value)
    if m:
        year, month, day = (int(g) for g in m.groups())
        return _format_fix(
            value, start, year, month, day,
            "Invalid date format - use hyphens instead of slashes.",
            codes.DATE_FORMAT_SLASH,
        )

    m = _US_SLASH_RE.match(value)
    if m:
        month, day, year = (int(g) for g in m.groups())
        return _format_fix(
            value, start, year, month, day,
            "Invalid MM/DD/YYYY format - use @YYYY-MM-DD instead.",
            codes.DATE_FORMAT_US,
        )

    m = _US_HYPHEN_RE.match(value)
    if m:
        month, day, year = (int(g) for g in m.groups())
        return _format_fix(
            value, start, year, month, day,
            "Invalid MM-DD-YYYY format - use @YYYY-MM-DD instead.",
            codes.DATE_FORMAT_US_HYPHEN,
        )

    m = _ISO_RE.match(value)
    if m:
        year, month, day = (int(g) for g in m.groups())
        return _check_iso(value, start, year, month, day, cfg, today)

    current = iso_today(today)
    tomorrow = iso_tomorrow(today)
    return make_diagnostic(
        "error",
        'Invalid date format. Use keywords like "today", "tomorrow" or YYYY-MM-DD format.',
        start,
        value,
        suggestion="today",
        code=codes.DATE_FORMAT_INVALID,
        hint="Valid formats: @today, @tomorrow, @2025-02-15",
        fixes=[
            ('Use "today"', "today", "Set to today's date"),
            ('Use "tomorrow"', "tomorrow", "Set to tomorrow's date"),
            ("Use current date", current, f"Set to today ({current})"),
            ("Use tomorrow date", tomorrow, f"Set to tomorrow ({tomorrow})"),
        ],
    )
