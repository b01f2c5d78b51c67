from __future__ import annotations

import re

from notemark.core import diagnostics as codes
from notemark.core.diagnostics import Diagnostic, make_diagnostic
from notemark.validators.common import as_offset, as_text, guarded

HEX_COLOR_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
_NON_HEX_RE = re.compile(r"[^0-9a-fA-F]")

PALETTE_FIXES = (
    ("Use red", "#ff0000", "Set to red color"),
    ("Use blue", "#0000ff", "Set to blue color"),
    ("Use black", "#000000", "Set to black color"),
)


def is_hex_color(value: str) -> bool:
    return bool(HEX_COLOR_RE.match(str(value or "")))


def fallback_color(value: str) -> str:
    """Closest ``#rrggbb`` to ``value``: non-hex chars dropped, zero padded."""
    digits = _NON_HEX_RE.sub("", str(value or ""))
    return "#" + digits.ljust(6, "0")[:6]


@guarded()
def validate_color(value, start, *, config=None) -> Diagnostic | None:
    value = as_text(value)
    if not value:
        return None
    if is_hex_color(value):
        return None
    fixed = fallback_color(value)
    return make_diagnostic(
        "error",
        "Invalid hex color format. Use #RGB or #RRGGBB format.",
        as_offset(start),
        value,
        suggestion=fixed,
        code=codes.COLOR_FORMAT_INVALID,
        hint="Use #RGB or #RRGGBB format (e.g., #ff0000 for red)",
        fixes=[("Fix format", fixed, "Convert to valid hex color"), *PALETTE_FIXES],
    )
