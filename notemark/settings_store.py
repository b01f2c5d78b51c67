from __future__ import annotations

import json
import logging
import os
from copy import deepcopy
from pathlib import Path
from typing import Any, Mapping

from notemark.settings_schema import NormalizedMarkerConfig, default_marker_settings

logger = logging.getLogger(__name__)

SETTINGS_DIRNAME = ".notemark"
SETTINGS_FILENAME = "settings.json"
SETTINGS_DIR_ENV = "NOTEMARK_SETTINGS_DIR"
MARKERS_KEY = "markers"


class SettingsStoreError(RuntimeError):
    """Raised when a settings file cannot be loaded or saved."""


def deep_merge_defaults(data: Mapping[str, Any], defaults: Mapping[str, Any]) -> dict[str, Any]:
    """Merge defaults into data without overwriting explicitly provided values."""
    merged = deepcopy(dict(data))
    for key, default_value in defaults.items():
        if key not in merged:
            merged[key] = deepcopy(default_value)
            continue
        current = merged[key]
        if isinstance(current, dict) and isinstance(default_value, dict):
            merged[key] = deep_merge_defaults(current, default_value)
    return merged


def dot_get(data: Mapping[str, Any], key: str, default: Any = None) -> Any:
    if not key:
        return data
    current: Any = data
    for part in key.split("."):
        if not isinstance(current, Mapping) or part not in current:
            return default
        current = current[part]
    return current


def default_settings_path() -> Path:
    override = os.environ.get(SETTINGS_DIR_ENV, "").strip()
    if override:
        return Path(override).expanduser() / SETTINGS_FILENAME
    return Path.home() / SETTINGS_DIRNAME / SETTINGS_FILENAME


def default_settings() -> dict[str, Any]:
    return {MARKERS_KEY: dict(default_marker_settings())}


class JsonSettingsStore:
    """JSON-backed settings file with defaults and dot-key helpers."""

    def __init__(self, path: Path | str | None = None, defaults: Mapping[str, Any] | None = None) -> None:
        self.path = Path(path) if path is not None else default_settings_path()
        self.defaults: dict[str, Any] = deepcopy(dict(defaults if defaults is not None else default_settings()))
        self.data: dict[str, Any] = deep_merge_defaults({}, self.defaults)
        self.dirty: bool = False
        self.last_error: str | None = None

    def read(self) -> dict[str, Any]:
        """Parse the file; raises ``SettingsStoreError`` on unreadable or non-object JSON."""
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except Exception as exc:
            raise SettingsStoreError(f"Could not read settings file '{self.path}': {exc}") from exc
        if not isinstance(raw, dict):
            raise SettingsStoreError(
                f"Settings root in '{self.path}' must be a JSON object, found {type(raw).__name__}."
            )
        return raw

    def load(self) -> dict[str, Any]:
        """Load the file, keeping defaults when it is missing or invalid."""
        self.last_error = None
        missing = not self.path.exists()
        try:
            loaded = self.read()
        except SettingsStoreError as exc:
            self.last_error = str(exc)
            logger.warning("%s; using defaults", exc)
            self.data = deep_merge_defaults({}, self.defaults)
            self.dirty = False
            return self.data
        self.data = deep_merge_defaults(loaded, self.defaults)
        self.dirty = missing
        return self.data

    def save(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(self.data, indent=2, sort_keys=True), encoding="utf-8")
            self.dirty = False
            self.last_error = None
        except Exception as exc:
            raise SettingsStoreError(
                f"Could not write settings file '{self.path}': {exc}"
            ) from exc

    def get(self, key: str, default: Any = None) -> Any:
        return dot_get(self.data, key, default)

    def marker_config(self) -> NormalizedMarkerConfig:
        return NormalizedMarkerConfig.from_mapping(self.get(MARKERS_KEY, {}))
