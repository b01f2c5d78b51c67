"""Validators for priority, tag and assignee markers."""

from __future__ import annotations

import re

from notemark.core import diagnostics as codes
from notemark.core.diagnostics import Diagnostic, make_diagnostic
from notemark.core.grammar import (
    PRIORITY_ALIASES,
    PRIORITY_COMMON_FIXES,
    PRIORITY_FALLBACK,
    PRIORITY_VOCABULARY,
    TAG_FORBIDDEN_CHARS,
)
from notemark.settings_schema import resolve_config
from notemark.validators.common import as_offset, as_text, guarded

CHECKBOX_RE = re.compile(r"^\s*[xX]?\s*$")
ASSIGNEE_RE = re.compile(r"^[A-Za-z][A-Za-z0-9._-]*$")
_ASSIGNEE_INVALID_CHARS_RE = re.compile(r"[^A-Za-z0-9._-]")
_LEADING_NON_LETTERS_RE = re.compile(r"^[^A-Za-z]+")
_TAG_FORBIDDEN_RE = re.compile("[" + re.escape(TAG_FORBIDDEN_CHARS) + "]")

_PRIORITY_FIX_DESCRIPTIONS = {
    "high": "Set to high priority",
    "medium": "Set to medium priority",
    "urgent": "Set to urgent status",
}


def closest_priority(value: str) -> str:
    lowered = str(value or "").lower()
    if lowered in PRIORITY_ALIASES:
        return PRIORITY_ALIASES[lowered]
    if lowered:
        for word in PRIORITY_VOCABULARY:
            if word.startswith(lowered[0]):
                return word
    return PRIORITY_FALLBACK


@guarded()
def validate_priority(value, start, *, config=None) -> Diagnostic | None:
    value = as_text(value)
    if not value:
        return None
    cfg = resolve_config(config)
    lowered = value.lower()

    if lowered in PRIORITY_VOCABULARY:
        return None
    if len(value) <= cfg.priority_partial_max_len and any(w.startswith(lowered) for w in PRIORITY_VOCABULARY):
        return None

    closest = closest_priority(value)
    fixes = [(f'Use "{closest}"', closest, f"Change to {closest}")]
    for word in PRIORITY_COMMON_FIXES:
        fixes.append((f'Use "{word}"', word, _PRIORITY_FIX_DESCRIPTIONS.get(word, f"Set to {word}")))

    return make_diagnostic(
        "error",
        f'Invalid priority "{value}". Use one of: {", ".join(PRIORITY_VOCABULARY)}.',
        as_offset(start),
        value,
        suggestion=closest,
        code=codes.PRIORITY_INVALID,
        hint="Valid priorities include: critical, high, medium, low, urgent, asap, blocked, waiting, etc.",
        fixes=fixes,
    )


def is_checkbox(content: str) -> bool:
    return bool(CHECKBOX_RE.match(str(content or "")))


def sanitize_tag(content: str) -> str:
    cleaned = _TAG_FORBIDDEN_RE.sub("", str(content or "")).strip()
    return cleaned or "new-tag"


@guarded()
def validate_tag(content, start, *, config=None) -> Diagnostic | None:
    """Validate the content between ``[`` and ``]``; ``start`` is just past ``[``."""
    content = as_text(content)
    start = as_offset(start)
    cfg = resolve_config(config)

    if cfg.tag_checkboxes and is_checkbox(content):
        return None

    if not content.strip():
        if not content:
            # Nothing to underline inside ``[]``; report on the brackets.
            if start < 1:
                return None
            return make_diagnostic(
                "error",
                "Tags cannot be empty.",
                start - 1,
                "[]",
                suggestion="[new-tag]",
                code=codes.TAG_EMPTY,
                hint="Tags look like [urgent] or [meeting]",
                fixes=[("Add tag name", "[new-tag]", "Insert a placeholder tag")],
            )
        return make_diagnostic(
            "error",
            "Tags cannot be empty.",
            start,
            content,
            suggestion="new-tag",
            code=codes.TAG_EMPTY,
            hint="Tags look like [urgent] or [meeting]",
            fixes=[("Add tag name", "new-tag", "Insert a placeholder tag")],
        )

    if _TAG_FORBIDDEN_RE.search(content):
        cleaned = sanitize_tag(content)
        return make_diagnostic(
            "warning",
            "Tags contain special characters that may cause issues.",
            start,
            content,
            suggestion=cleaned,
            code=codes.TAG_INVALID_CHARS,
            hint="Avoid < > and quote characters in tags",
            fixes=[("Remove special characters", cleaned, "Strip < > ' \" from the tag")],
        )

    if len(content) > cfg.tag_max_length:
        cut = max(1, cfg.tag_max_length - 3)
        truncated = content[:cut].rstrip() + "..."
        return make_diagnostic(
            "warning",
            f"Tag is longer than {cfg.tag_max_length} characters.",
            start,
            content,
            suggestion=truncated,
            code=codes.TAG_TOO_LONG,
            hint=f"Keep tags under {cfg.tag_max_length} characters",
            fixes=[("Shorten tag", truncated, f"Truncate to {len(truncated)} characters")],
        )

    return None


def sanitize_assignee(value: str) -> str:
    cleaned = _ASSIGNEE_INVALID_CHARS_RE.sub("", str(value or ""))
    cleaned = _LEADING_NON_LETTERS_RE.sub("", cleaned).lower()
    return cleaned or "user"


@guarded()
def validate_assignee(value, start, *, config=None) -> Diagnostic | None:
    value = as_text(value)
    if not value:
        return None
    cfg = resolve_config(config)
    start = as_offset(start)

    if len(value) <= cfg.assignee_partial_max_len and value.isascii() and value.isalpha():
        return None

    if not ASSIGNEE_RE.match(value):
        fixed = sanitize_assignee(value)
        return make_diagnostic(
            "error",
            "Invalid assignee format. Must start with letter and contain only letters, numbers, dots, underscores, or hyphens.",
            start,
            value,
            suggestion=fixed,
            code=codes.ASSIGNEE_INVALID_FORMAT,
            hint="Use +username (e.g., +alice, +dev.ops)",
            fixes=[(f"Use +{fixed}", fixed, "Remove characters that are not allowed")],
        )

    if len(value) > cfg.assignee_max_length:
        truncated = value[: cfg.assignee_max_length]
        return make_diagnostic(
            "warning",
            f"Assignee name is longer than {cfg.assignee_max_length} characters.",
            start,
            value,
            suggestion=truncated,
            code=codes.ASSIGNEE_TOO_LONG,
            hint=f"Usernames are at most {cfg.assignee_max_length} characters",
            fixes=[("Shorten name", truncated, f"Truncate to {cfg.assignee_max_length} characters")],
        )

    return None
