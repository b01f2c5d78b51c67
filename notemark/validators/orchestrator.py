"""Whole-buffer validation: scanner, per-type validators, then the
incomplete-marker and suggestion passes.

``validate`` never raises. Any failure inside a single validator drops that
marker's diagnostic; a failure of the pass itself yields an empty tuple.
"""

from __future__ import annotations

import datetime as _dt
import logging
from typing import Callable

from notemark.core.diagnostics import Diagnostic
from notemark.core.scanner import MarkerMatch, scan_markers
from notemark.settings_schema import NormalizedMarkerConfig, resolve_config
from notemark.validators.color_validator import validate_color
from notemark.validators.common import as_text
from notemark.validators.date_validator import validate_date
from notemark.validators.incomplete import find_incomplete_patterns
from notemark.validators.pattern_validators import validate_assignee, validate_priority, validate_tag
from notemark.validators.suggestions import find_suggestions

logger = logging.getLogger(__name__)

Validator = Callable[..., "Diagnostic | None"]

VALIDATORS: dict[str, Validator] = {
    "tag": validate_tag,
    "color": validate_color,
    "priority": validate_priority,
    "date": validate_date,
    "assignee": validate_assignee,
}


def validate_marker(
    match: MarkerMatch,
    *,
    config: NormalizedMarkerConfig | None = None,
    today: _dt.date | None = None,
) -> Diagnostic | None:
    validator = VALIDATORS.get(match.marker_type)
    if validator is None:
        return None
    try:
        if match.marker_type == "date":
            return validator(match.raw_value, match.start, config=config, today=today)
        return validator(match.raw_value, match.start, config=config)
    except Exception:
        logger.debug("validator for %s failed", match.marker_type, exc_info=True)
        return None


def validate_markers(text: str, *, config=None, today: _dt.date | None = None, matches=None) -> list[Diagnostic]:
    text = as_text(text)
    cfg = resolve_config(config)
    if len(text) <= 1:
        return []
    if matches is None:
        matches = scan_markers(text, tag_max_chars=cfg.tag_scan_max_chars)
    out: list[Diagnostic] = []
    for match in matches:
        diag = validate_marker(match, config=cfg, today=today)
        if diag is not None:
            out.append(diag)
    return out


def _collect(text: str, cfg: NormalizedMarkerConfig, today: _dt.date | None) -> list[Diagnostic]:
    matches = scan_markers(text, tag_max_chars=cfg.tag_scan_max_chars)
    results: list[Diagnostic] = []
    passes = (
        ("markers", lambda: validate_markers(text, config=cfg, today=today, matches=matches)),
        ("incomplete", lambda: find_incomplete_patterns(text, config=cfg)),
        ("suggestions", lambda: find_suggestions(text, config=cfg, matches=matches)),
    )
    for name, run in passes:
        try:
            results.extend(run())
        except Exception:
            logger.debug("%s pass failed", name, exc_info=True)
    return results


def validate(text, *, config=None, today: _dt.date | None = None) -> tuple[Diagnostic, ...]:
    """Diagnostics for ``text`` in buffer order per pass: marker errors and
    warnings, then incomplete-marker warnings, then suggestions."""
    try:
        if not isinstance(text, str) or not text:
            return ()
        cfg = resolve_config(config)
        if not cfg.enabled:
            return ()
        if len(text) > cfg.max_buffer_chars:
            logger.debug("skipping validation of %d chars (limit %d)", len(text), cfg.max_buffer_chars)
            return ()
        length = len(text)
        return tuple(d for d in _collect(text, cfg, today) if d.fits(length))
    except Exception:
        logger.debug("validation failed", exc_info=True)
        return ()


def has_errors(diagnostics) -> bool:
    return any(getattr(d, "severity", None) == "error" for d in diagnostics or ())
