"""Diagnostic value types produced by a validation pass."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

Severity = Literal["error", "warning", "suggestion"]

SEVERITY_ORDER = {"error": 3, "warning": 2, "suggestion": 1}

COLOR_FORMAT_INVALID = "COLOR_FORMAT_INVALID"
DATE_FORMAT_SLASH = "DATE_FORMAT_SLASH"
DATE_FORMAT_US = "DATE_FORMAT_US"
DATE_FORMAT_US_HYPHEN = "DATE_FORMAT_US_HYPHEN"
DATE_YEAR_RANGE = "DATE_YEAR_RANGE"
DATE_MONTH_RANGE = "DATE_MONTH_RANGE"
DATE_DAY_RANGE = "DATE_DAY_RANGE"
DATE_CALENDAR_INVALID = "DATE_CALENDAR_INVALID"
DATE_FORMAT_INVALID = "DATE_FORMAT_INVALID"
PRIORITY_INVALID = "PRIORITY_INVALID"
TAG_EMPTY = "TAG_EMPTY"
TAG_INVALID_CHARS = "TAG_INVALID_CHARS"
TAG_TOO_LONG = "TAG_TOO_LONG"
ASSIGNEE_INVALID_FORMAT = "ASSIGNEE_INVALID_FORMAT"
ASSIGNEE_TOO_LONG = "ASSIGNEE_TOO_LONG"
TAG_INCOMPLETE = "TAG_INCOMPLETE"
COLOR_INCOMPLETE = "COLOR_INCOMPLETE"
DATE_INCOMPLETE = "DATE_INCOMPLETE"
ASSIGNEE_INCOMPLETE = "ASSIGNEE_INCOMPLETE"
PRIORITY_INCOMPLETE = "PRIORITY_INCOMPLETE"
TAG_SUGGESTION = "TAG_SUGGESTION"
DATE_PATTERN_SUGGESTION = "DATE_PATTERN_SUGGESTION"


@dataclass(frozen=True, slots=True)
class QuickFix:
    label: str
    replacement_text: str
    description: str | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"label": self.label, "replacement_text": self.replacement_text}
        if self.description:
            out["description"] = self.description
        return out


@dataclass(frozen=True, slots=True)
class Diagnostic:
    severity: Severity
    message: str
    start: int
    end: int
    suggested_replacement: str | None = None
    code: str | None = None
    hint: str | None = None
    quick_fixes: tuple[QuickFix, ...] = field(default_factory=tuple)

    @property
    def range(self) -> tuple[int, int]:
        return (self.start, self.end)

    @property
    def length(self) -> int:
        return self.end - self.start

    def fits(self, text_length: int) -> bool:
        """True when the range satisfies ``0 <= start < end <= text_length``."""
        return 0 <= self.start < self.end <= int(text_length)

    def primary_replacement(self) -> str | None:
        if self.quick_fixes:
            return self.quick_fixes[0].replacement_text
        return self.suggested_replacement

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "severity": self.severity,
            "message": self.message,
            "start": self.start,
            "end": self.end,
        }
        if self.suggested_replacement is not None:
            out["suggested_replacement"] = self.suggested_replacement
        if self.code:
            out["code"] = self.code
        if self.hint:
            out["hint"] = self.hint
        if self.quick_fixes:
            out["quick_fixes"] = [fix.to_dict() for fix in self.quick_fixes]
        return out


def make_diagnostic(
    severity: Severity,
    message: str,
    start: int,
    value: str,
    *,
    suggestion: str | None = None,
    code: str | None = None,
    hint: str | None = None,
    fixes: list[tuple[str, str, str | None]] | None = None,
) -> Diagnostic:
    """Build a diagnostic spanning ``value`` at ``start``.

    ``fixes`` is a list of ``(label, replacement, description)`` triples;
    duplicate replacements keep their first label.
    """
    quick_fixes: list[QuickFix] = []
    seen: set[str] = set()
    for label, replacement, description in fixes or []:
        if replacement in seen:
            continue
        seen.add(replacement)
        quick_fixes.append(QuickFix(label=label, replacement_text=replacement, description=description))
    return Diagnostic(
        severity=severity,
        message=message,
        start=int(start),
        end=int(start) + len(value),
        suggested_replacement=suggestion,
        code=code,
        hint=hint,
        quick_fixes=tuple(quick_fixes),
    )


def severity_rank(severity: str) -> int:
    return SEVERITY_ORDER.get(str(severity or "").lower(), 0)


def highest_severity(diagnostics) -> str | None:
    best: str | None = None
    for diag in diagnostics or ():
        sev = getattr(diag, "severity", None)
        if sev is None and isinstance(diag, dict):
            sev = diag.get("severity")
        if sev is None:
            continue
        if best is None or severity_rank(sev) > severity_rank(best):
            best = str(sev)
    return best


def diagnostics_at(diagnostics, index: int) -> list[Diagnostic]:
    """Diagnostics whose range contains ``index`` (or ends right at it), worst first."""
    hits = [
        d for d in diagnostics or ()
        if isinstance(d, Diagnostic) and d.start <= index <= d.end
    ]
    hits.sort(key=lambda d: (-severity_rank(d.severity), d.start))
    return hits
