from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, TypedDict


COMPLETION_UI_MODES = (
    "popup",
    "panel",
)

_HEX_COLOR_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


class MarkerSettings(TypedDict, total=False):
    enabled: bool
    tooltip_delay_ms: int
    max_buffer_chars: int
    tag_scan_max_chars: int
    priority_partial_max_len: int
    assignee_partial_max_len: int
    tag_max_length: int
    assignee_max_length: int
    tag_checkboxes: bool
    suggestions_enabled: bool
    incomplete_min_length: int
    incomplete_color_min_length: int
    year_min: int
    year_max: int
    completion_cache_capacity: int
    completion_popup_limit: int
    completion_panel_limit: int
    completion_ui: str
    error_color: str
    warning_color: str
    suggestion_color: str


def default_marker_settings() -> MarkerSettings:
    return {
        "enabled": True,
        "tooltip_delay_ms": 600,
        "max_buffer_chars": 20000,
        "tag_scan_max_chars": 500,
        "priority_partial_max_len": 2,
        "assignee_partial_max_len": 1,
        "tag_max_length": 50,
        "assignee_max_length": 30,
        "tag_checkboxes": True,
        "suggestions_enabled": True,
        "incomplete_min_length": 2,
        "incomplete_color_min_length": 6,
        "year_min": 1900,
        "year_max": 2100,
        "completion_cache_capacity": 50,
        "completion_popup_limit": 10,
        "completion_panel_limit": 8,
        "completion_ui": "popup",
        "error_color": "#E35D6A",
        "warning_color": "#D6A54A",
        "suggestion_color": "#6AA1FF",
    }


def normalize_marker_settings(raw: Any) -> MarkerSettings:
    defaults = default_marker_settings()
    data = dict(defaults)
    if isinstance(raw, dict):
        for key, value in raw.items():
            data[str(key)] = value

    completion_ui = str(data.get("completion_ui", defaults["completion_ui"]) or defaults["completion_ui"]).strip().lower()
    if completion_ui not in COMPLETION_UI_MODES:
        completion_ui = defaults["completion_ui"]

    def _clamp_int(value: Any, low: int, high: int, fallback: int) -> int:
        try:
            return max(low, min(high, int(value)))
        except Exception:
            return fallback

    def _color(key: str) -> str:
        value = str(data.get(key) or "").strip()
        if _HEX_COLOR_RE.match(value):
            return value
        return str(defaults[key])

    year_min = _clamp_int(data.get("year_min"), 1, 9999, int(defaults["year_min"]))
    year_max = _clamp_int(data.get("year_max"), 1, 9999, int(defaults["year_max"]))
    if year_max < year_min:
        year_min, year_max = int(defaults["year_min"]), int(defaults["year_max"])

    return {
        "enabled": bool(data.get("enabled", defaults["enabled"])),
        "tooltip_delay_ms": _clamp_int(data.get("tooltip_delay_ms"), 100, 2000, int(defaults["tooltip_delay_ms"])),
        "max_buffer_chars": _clamp_int(data.get("max_buffer_chars"), 256, 2_000_000, int(defaults["max_buffer_chars"])),
        "tag_scan_max_chars": _clamp_int(data.get("tag_scan_max_chars"), 16, 10000, int(defaults["tag_scan_max_chars"])),
        "priority_partial_max_len": _clamp_int(data.get("priority_partial_max_len"), 0, 8, int(defaults["priority_partial_max_len"])),
        "assignee_partial_max_len": _clamp_int(data.get("assignee_partial_max_len"), 0, 8, int(defaults["assignee_partial_max_len"])),
        "tag_max_length": _clamp_int(data.get("tag_max_length"), 4, 1000, int(defaults["tag_max_length"])),
        "assignee_max_length": _clamp_int(data.get("assignee_max_length"), 4, 1000, int(defaults["assignee_max_length"])),
        "tag_checkboxes": bool(data.get("tag_checkboxes", defaults["tag_checkboxes"])),
        "suggestions_enabled": bool(data.get("suggestions_enabled", defaults["suggestions_enabled"])),
        "incomplete_min_length": _clamp_int(data.get("incomplete_min_length"), 1, 100, int(defaults["incomplete_min_length"])),
        "incomplete_color_min_length": _clamp_int(data.get("incomplete_color_min_length"), 1, 100, int(defaults["incomplete_color_min_length"])),
        "year_min": year_min,
        "year_max": year_max,
        "completion_cache_capacity": _clamp_int(data.get("completion_cache_capacity"), 1, 5000, int(defaults["completion_cache_capacity"])),
        "completion_popup_limit": _clamp_int(data.get("completion_popup_limit"), 1, 100, int(defaults["completion_popup_limit"])),
        "completion_panel_limit": _clamp_int(data.get("completion_panel_limit"), 1, 100, int(defaults["completion_panel_limit"])),
        "completion_ui": completion_ui,
        "error_color": _color("error_color"),
        "warning_color": _color("warning_color"),
        "suggestion_color": _color("suggestion_color"),
    }


@dataclass(frozen=True, slots=True)
class NormalizedMarkerConfig:
    enabled: bool
    tooltip_delay_ms: int
    max_buffer_chars: int
    tag_scan_max_chars: int
    priority_partial_max_len: int
    assignee_partial_max_len: int
    tag_max_length: int
    assignee_max_length: int
    tag_checkboxes: bool
    suggestions_enabled: bool
    incomplete_min_length: int
    incomplete_color_min_length: int
    year_min: int
    year_max: int
    completion_cache_capacity: int
    completion_popup_limit: int
    completion_panel_limit: int
    completion_ui: str
    error_color: str
    warning_color: str
    suggestion_color: str

    @classmethod
    def from_mapping(cls, data: Any) -> "NormalizedMarkerConfig":
        n = normalize_marker_settings(data)
        return cls(
            enabled=bool(n["enabled"]),
            tooltip_delay_ms=int(n["tooltip_delay_ms"]),
            max_buffer_chars=int(n["max_buffer_chars"]),
            tag_scan_max_chars=int(n["tag_scan_max_chars"]),
            priority_partial_max_len=int(n["priority_partial_max_len"]),
            assignee_partial_max_len=int(n["assignee_partial_max_len"]),
            tag_max_length=int(n["tag_max_length"]),
            assignee_max_length=int(n["assignee_max_length"]),
            tag_checkboxes=bool(n["tag_checkboxes"]),
            suggestions_enabled=bool(n["suggestions_enabled"]),
            incomplete_min_length=int(n["incomplete_min_length"]),
            incomplete_color_min_length=int(n["incomplete_color_min_length"]),
            year_min=int(n["year_min"]),
            year_max=int(n["year_max"]),
            completion_cache_capacity=int(n["completion_cache_capacity"]),
            completion_popup_limit=int(n["completion_popup_limit"]),
            completion_panel_limit=int(n["completion_panel_limit"]),
            completion_ui=str(n["completion_ui"]),
            error_color=str(n["error_color"]),
            warning_color=str(n["warning_color"]),
            suggestion_color=str(n["suggestion_color"]),
        )

    def color_for_severity(self, severity: str) -> str:
        sev = str(severity or "").lower()
        if sev == "error":
            return self.error_color
        if sev == "warning":
            return self.warning_color
        return self.suggestion_color


_DEFAULT_CONFIG: NormalizedMarkerConfig | None = None


def default_config() -> NormalizedMarkerConfig:
    global _DEFAULT_CONFIG
    if _DEFAULT_CONFIG is None:
        _DEFAULT_CONFIG = NormalizedMarkerConfig.from_mapping(default_marker_settings())
    return _DEFAULT_CONFIG


def resolve_config(config: Any) -> NormalizedMarkerConfig:
    """Accept a normalized config, a raw settings mapping, or ``None``."""
    if isinstance(config, NormalizedMarkerConfig):
        return config
    if config is None:
        return default_config()
    return NormalizedMarkerConfig.from_mapping(config)
