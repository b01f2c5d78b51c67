"""Warnings for markers left open at the end of the buffer."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable

from notemark.core import diagnostics as codes
from notemark.core.diagnostics import Diagnostic, make_diagnostic
from notemark.settings_schema import NormalizedMarkerConfig, resolve_config
from notemark.validators.common import as_text

logger = logging.getLogger(__name__)

_HEX_DIGITS_RE = re.compile(r"[0-9a-fA-F]*$")


def _close_tag(fragment: str) -> str:
    return fragment.rstrip() + "]"


def _pad_color(fragment: str) -> str:
    digits = _HEX_DIGITS_RE.search(fragment).group(0)
    return "color:#" + digits.ljust(6, "0")


@dataclass(frozen=True, slots=True)
class _IncompleteRule:
    marker_type: str
    pattern: re.Pattern[str]
    message: str
    code: str
    fix_label: str
    fix: Callable[[str], str]
    color_rule: bool = False
    search_from: Callable[[str], int] | None = None


_RULES: tuple[_IncompleteRule, ...] = (
    _IncompleteRule(
        marker_type="tag",
        pattern=re.compile(r"\[[^\]]*$"),
        message="Incomplete tag - missing closing bracket",
        code=codes.TAG_INCOMPLETE,
        fix_label="Close tag",
        fix=_close_tag,
        # Only text after the last ``]`` can hold an open bracket.
        search_from=lambda text: text.rfind("]") + 1,
    ),
    _IncompleteRule(
        marker_type="color",
        pattern=re.compile(r"color:\s*#?[0-9a-fA-F]{0,2}$", re.IGNORECASE),
        message="Incomplete color - provide a hex color value",
        code=codes.COLOR_INCOMPLETE,
        fix_label="Complete color",
        fix=_pad_color,
        color_rule=True,
    ),
    _IncompleteRule(
        marker_type="date",
        pattern=re.compile(r"@\s*$"),
        message="Incomplete date - provide a date value",
        code=codes.DATE_INCOMPLETE,
        fix_label="Use @today",
        fix=lambda _fragment: "@today",
    ),
    _IncompleteRule(
        marker_type="assignee",
        pattern=re.compile(r"\+\s*$"),
        message="Incomplete assignee - provide a username",
        code=codes.ASSIGNEE_INCOMPLETE,
        fix_label="Assign to me",
        fix=lambda _fragment: "+me",
    ),
    _IncompleteRule(
        marker_type="priority",
        pattern=re.compile(r"(?<!color:)#\s*$", re.IGNORECASE),
        message="Incomplete priority - use low, medium, or high",
        code=codes.PRIORITY_INCOMPLETE,
        fix_label="Use #medium",
        fix=lambda _fragment: "#medium",
    ),
)


def _min_length(rule: _IncompleteRule, cfg: NormalizedMarkerConfig) -> int:
    if rule.color_rule:
        return cfg.incomplete_color_min_length
    return cfg.incomplete_min_length


def find_incomplete_patterns(text, *, config=None) -> list[Diagnostic]:
    text = as_text(text)
    if not text:
        return []
    cfg = resolve_config(config)

    warnings: list[Diagnostic] = []
    for rule in _RULES:
        try:
            if len(text) < _min_length(rule, cfg):
                continue
            pos = rule.search_from(text) if rule.search_from else 0
            m = rule.pattern.search(text, pos)
            if m is None or m.end() <= m.start():
                continue
            fragment = m.group(0)
            replacement = rule.fix(fragment)
            warnings.append(
                make_diagnostic(
                    "warning",
                    rule.message,
                    m.start(),
                    fragment,
                    suggestion=replacement,
                    code=rule.code,
                    fixes=[(rule.fix_label, replacement, None)],
                )
            )
        except Exception:
            logger.debug("incomplete %s rule failed", rule.marker_type, exc_info=True)
    return warnings
