"""Advisory pass proposing markers for plain words."""

from __future__ import annotations

import logging
import re

from notemark.core import diagnostics as codes
from notemark.core.diagnostics import Diagnostic, make_diagnostic
from notemark.core.scanner import inside_any_span, marker_spans, scan_markers
from notemark.settings_schema import resolve_config
from notemark.validators.common import as_text

logger = logging.getLogger(__name__)

TAG_WORDS: tuple[str, ...] = ("urgent", "important")
DATE_WORDS: tuple[str, ...] = (
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
)

_TAG_WORD_RE = re.compile(r"\b(" + "|".join(TAG_WORDS) + r")\b", re.IGNORECASE)
_DATE_WORD_RE = re.compile(r"\b(" + "|".join(DATE_WORDS) + r")\b", re.IGNORECASE)


def _tag_suggestions(text: str, matches, spans) -> list[Diagnostic]:
    marked = {
        m.raw_value.strip().lower()
        for m in matches
        if m.marker_type in ("tag", "priority")
    }
    out: list[Diagnostic] = []
    seen: set[str] = set()
    for m in _TAG_WORD_RE.finditer(text):
        word = m.group(1)
        key = word.lower()
        if key in seen or key in marked:
            continue
        if inside_any_span(m.start(), m.end(), spans):
            continue
        seen.add(key)
        replacement = f"[{key}]"
        out.append(
            make_diagnostic(
                "suggestion",
                "Consider using a tag format for better organization.",
                m.start(),
                word,
                suggestion=replacement,
                code=codes.TAG_SUGGESTION,
                fixes=[(f"Use {replacement}", replacement, "Turn the word into a tag")],
            )
        )
    return out


def _date_suggestion(text: str, matches, spans) -> list[Diagnostic]:
    if any(m.marker_type == "date" for m in matches):
        return []
    for m in _DATE_WORD_RE.finditer(text):
        if inside_any_span(m.start(), m.end(), spans):
            continue
        word = m.group(1)
        replacement = f"@{word.lower()}"
        return [
            make_diagnostic(
                "suggestion",
                f'Consider using "{replacement}" to set a due date.',
                m.start(),
                word,
                suggestion=replacement,
                code=codes.DATE_PATTERN_SUGGESTION,
                hint="Dates look like @today or @2025-02-15",
                fixes=[(f"Use {replacement}", replacement, "Turn the word into a date marker")],
            )
        ]
    return []


def find_suggestions(text, *, config=None, matches=None) -> list[Diagnostic]:
    """``matches`` may carry an earlier scan of ``text`` to avoid rescanning."""
    text = as_text(text)
    if not text:
        return []
    cfg = resolve_config(config)
    if not cfg.suggestions_enabled:
        return []
    if matches is None:
        matches = scan_markers(text, tag_max_chars=cfg.tag_scan_max_chars)
    spans = marker_spans(matches)

    out: list[Diagnostic] = []
    for finder in (_tag_suggestions, _date_suggestion):
        try:
            out.extend(finder(text, matches, spans))
        except Exception:
            logger.debug("%s failed", finder.__name__, exc_info=True)
    return out
