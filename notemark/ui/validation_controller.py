from __future__ import annotations

import logging
from typing import Callable

from PySide6.QtCore import QObject, QTimer, Signal

from notemark.core.diagnostics import Diagnostic
from notemark.settings_schema import NormalizedMarkerConfig, resolve_config
from notemark.validators.orchestrator import validate

logger = logging.getLogger(__name__)


class ValidationController(QObject):
    """Validates every buffer change at once and debounces tooltip display.

    The single-shot timer is restarted on each change; only its timeout asks
    for the tooltip.
    """

    diagnosticsChanged = Signal(object)   # tuple[Diagnostic, ...]
    tooltipRequested = Signal(object)     # tuple[Diagnostic, ...]

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        config=None,
        validator: Callable[..., tuple[Diagnostic, ...]] | None = None,
    ):
        super().__init__(parent)
        self._cfg: NormalizedMarkerConfig = resolve_config(config)
        self._validator = validator or validate
        self._text = ""
        self._diagnostics: tuple[Diagnostic, ...] = ()

        self._tooltip_timer = QTimer(self)
        self._tooltip_timer.setSingleShot(True)
        self._tooltip_timer.setInterval(self._cfg.tooltip_delay_ms)
        self._tooltip_timer.timeout.connect(self._on_tooltip_timer)

    # ---------- Public API ----------

    def update_settings(self, config) -> None:
        self._cfg = resolve_config(config)
        self._tooltip_timer.setInterval(self._cfg.tooltip_delay_ms)
        if not self._cfg.enabled:
            self.cancel_pending()
        self.request_validation(self._text)

    def config(self) -> NormalizedMarkerConfig:
        return self._cfg

    def diagnostics(self) -> tuple[Diagnostic, ...]:
        return self._diagnostics

    def text(self) -> str:
        return self._text

    def request_validation(self, text: str) -> tuple[Diagnostic, ...]:
        self._text = text if isinstance(text, str) else ""
        try:
            diagnostics = tuple(self._validator(self._text, config=self._cfg))
        except Exception:
            logger.debug("validator raised", exc_info=True)
            diagnostics = ()
        self._diagnostics = diagnostics
        self.diagnosticsChanged.emit(diagnostics)

        if diagnostics and self._cfg.enabled:
            self._tooltip_timer.start()
        else:
            self._tooltip_timer.stop()
        return diagnostics

    def cancel_pending(self) -> None:
        self._tooltip_timer.stop()

    def is_pending(self) -> bool:
        return self._tooltip_timer.isActive()

    def tooltip_delay_ms(self) -> int:
        return int(self._tooltip_timer.interval())

    # ---------- Internals ----------

    def _on_tooltip_timer(self) -> None:
        if self._diagnostics:
            self.tooltipRequested.emit(self._diagnostics)
