from __future__ import annotations

import logging

from PySide6.QtCore import QPoint, Qt, Signal
from PySide6.QtWidgets import QPlainTextEdit, QWidget

from notemark.core.diagnostics import diagnostics_at
from notemark.services.completion_data import CompletionCandidate
from notemark.services.completion_source import CompletionResult, CompletionSource
from notemark.settings_schema import NormalizedMarkerConfig, resolve_config
from notemark.ui.completion_popup import CompletionPopup, FloatingCompletionPanel
from notemark.ui.decorations import build_extra_selections
from notemark.ui.surface import QtTextSurface, apply_quick_fix
from notemark.ui.validation_controller import ValidationController
from notemark.ui.validation_tooltip import ValidationTooltip

logger = logging.getLogger(__name__)


class NoteInput(QPlainTextEdit):
    """Note/task input with live marker diagnostics and completions."""

    diagnosticsChanged = Signal(object)
    completionAccepted = Signal(str)

    def __init__(
        self,
        parent: QWidget | None = None,
        *,
        config=None,
        completion_source: CompletionSource | None = None,
    ):
        super().__init__(parent)
        self._cfg: NormalizedMarkerConfig = resolve_config(config)
        self._surface = QtTextSurface(self)
        self._completion_source = completion_source or CompletionSource(config=self._cfg)
        self._completion_result: CompletionResult | None = None
        self._applying_completion = False

        self.setPlaceholderText("Add a task... e.g. Review PR [work] #high @tomorrow +alice")

        self.controller = ValidationController(self, config=self._cfg)
        self.controller.diagnosticsChanged.connect(self._on_diagnostics_changed)
        self.controller.tooltipRequested.connect(self._on_tooltip_requested)

        self.tooltip = ValidationTooltip(self, config=self._cfg)
        self.tooltip.quickFixRequested.connect(self._on_quick_fix_requested)

        self.completion_popup = CompletionPopup(self)
        self.completion_popup.limit = self._cfg.completion_popup_limit
        self.completion_popup.candidateChosen.connect(self.apply_completion)

        self.completion_panel = FloatingCompletionPanel(self)
        self.completion_panel.list.limit = self._cfg.completion_panel_limit
        self.completion_panel.candidateChosen.connect(self.apply_completion)

        self.textChanged.connect(self._on_text_changed)

    # ---------- Public API ----------

    def update_settings(self, config) -> None:
        self._cfg = resolve_config(config)
        self.tooltip.update_settings(self._cfg)
        self._completion_source.update_settings(self._cfg)
        self.completion_popup.limit = self._cfg.completion_popup_limit
        self.completion_panel.list.limit = self._cfg.completion_panel_limit
        self.controller.update_settings(self._cfg)

    def surface(self) -> QtTextSurface:
        return self._surface

    def diagnostics(self):
        return self.controller.diagnostics()

    def completion_source(self) -> CompletionSource:
        return self._completion_source

    def active_completion_widget(self):
        if self._cfg.completion_ui == "panel":
            return self.completion_panel
        return self.completion_popup

    def apply_quick_fix(self, diagnostic, replacement: str | None = None) -> bool:
        applied = apply_quick_fix(self._surface, diagnostic, replacement)
        if applied:
            self.tooltip.hide()
        return applied

    def apply_completion(self, candidate: CompletionCandidate) -> bool:
        result = self._completion_result
        if result is None or not isinstance(candidate, CompletionCandidate):
            return False
        value = result.apply_text(candidate)
        text = self._surface.text()
        if not (0 <= result.anchor_start <= result.anchor_end <= len(text)):
            return False
        self._applying_completion = True
        try:
            self._surface.replace(result.anchor_start, result.anchor_end, value)
        finally:
            self._applying_completion = False
        self._hide_completions()
        self.completionAccepted.emit(value)
        self.controller.request_validation(self.toPlainText())
        return True

    def refresh_completions(self) -> CompletionResult | None:
        widget = self.active_completion_widget()
        limit = widget.limit
        result = self._completion_source.complete(self.toPlainText(), self._surface.cursor_position(), limit=limit)
        self._completion_result = result
        if result is None:
            self._hide_completions()
            return None
        widget.show_result(result)
        if widget.isVisible():
            widget.move(self._completion_anchor_point())
        return result

    # ---------- Qt events ----------

    def keyPressEvent(self, event):
        widget = self.active_completion_widget()
        if widget.isVisible():
            key = event.key()
            if key == Qt.Key_Down:
                widget.move_selection(1)
                return
            if key == Qt.Key_Up:
                widget.move_selection(-1)
                return
            if key in (Qt.Key_Return, Qt.Key_Enter, Qt.Key_Tab):
                if widget.accept_current():
                    return
            if key == Qt.Key_Escape:
                self._hide_completions()
                return
        elif event.key() == Qt.Key_Escape and self.tooltip.isVisible():
            self.tooltip.dismiss()
            return
        super().keyPressEvent(event)

    def focusOutEvent(self, event):
        self.controller.cancel_pending()
        super().focusOutEvent(event)

    # ---------- Internals ----------

    def _hide_completions(self) -> None:
        self.completion_popup.dismiss()
        self.completion_panel.dismiss()

    def _completion_anchor_point(self) -> QPoint:
        rect = self.cursorRect()
        return self.viewport().mapTo(self, rect.bottomLeft() + QPoint(0, 2))

    def _on_text_changed(self) -> None:
        if self._applying_completion:
            return
        self.tooltip.hide()
        self.controller.request_validation(self.toPlainText())
        self.refresh_completions()

    def _on_diagnostics_changed(self, diagnostics) -> None:
        self.setExtraSelections(build_extra_selections(self, diagnostics, self._cfg))
        self.diagnosticsChanged.emit(diagnostics)

    def _on_tooltip_requested(self, diagnostics) -> None:
        if not self.isVisible():
            return
        cursor_index = self._surface.cursor_position()
        near = diagnostics_at(diagnostics, cursor_index) or list(diagnostics)
        rect = self.cursorRect()
        global_pos = self.viewport().mapToGlobal(rect.bottomLeft() + QPoint(0, 6))
        self.tooltip.show_diagnostics(near, global_pos)

    def _on_quick_fix_requested(self, diagnostic, replacement: str) -> None:
        if not self.apply_quick_fix(diagnostic, replacement):
            logger.debug("quick fix skipped; buffer changed since the diagnostic was computed")
