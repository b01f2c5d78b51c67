"""Marker grammar shared by the scanner, validators and completion source.

Pure data: marker families, their prefixes, and the fixed vocabularies the
validators check against.
"""

from __future__ import annotations

from typing import Literal

MarkerType = Literal["tag", "color", "priority", "date", "assignee"]

# Scan order; earlier families win when grammars overlap at the same offset.
MARKER_TYPES: tuple[MarkerType, ...] = ("tag", "color", "priority", "date", "assignee")

MARKER_PREFIXES: dict[str, str] = {
    "tag": "[",
    "color": "color:",
    "priority": "#",
    "date": "@",
    "assignee": "+",
}

DATE_KEYWORDS: frozenset[str] = frozenset(
    {
        "today",
        "tomorrow",
        "yesterday",
        "monday",
        "tuesday",
        "wednesday",
        "thursday",
        "friday",
        "saturday",
        "sunday",
        "week",
        "month",
        "next",
        "last",
    }
)

# Ordered; the order is used in messages and for first-letter suggestions.
PRIORITY_VOCABULARY: tuple[str, ...] = (
    "critical",
    "high",
    "medium",
    "low",
    "urgent",
    "asap",
    "blocked",
    "waiting",
    "review",
    "done",
    "todo",
    "next",
    "later",
)

PRIORITY_ALIASES: dict[str, str] = {
    "normal": "medium",
    "regular": "medium",
    "important": "high",
    "immediate": "urgent",
    "someday": "later",
}

PRIORITY_FALLBACK = "medium"
PRIORITY_COMMON_FIXES: tuple[str, ...] = ("high", "medium", "urgent")

TAG_FORBIDDEN_CHARS = "<>'\""


def is_date_keyword(value: str) -> bool:
    return str(value or "").strip().lower() in DATE_KEYWORDS
