from __future__ import annotations

from PySide6.QtCore import QPoint, Qt, Signal
from PySide6.QtWidgets import QFrame, QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget

from notemark.settings_schema import resolve_config
from notemark.ui.surface import diagnostic_field

MAX_VISIBLE_DIAGNOSTICS = 3
MAX_FIX_BUTTONS = 3

_SEVERITY_ICONS = {
    "error": "✖",
    "warning": "⚠",
    "suggestion": "ℹ",
}


class ValidationTooltip(QFrame):
    quickFixRequested = Signal(object, str)   # diagnostic, replacement text
    dismissed = Signal()

    def __init__(self, parent: QWidget | None = None, *, config=None):
        super().__init__(parent, Qt.ToolTip | Qt.FramelessWindowHint)
        self.setAttribute(Qt.WA_ShowWithoutActivating, True)
        self.setObjectName("validationTooltip")
        self.setFrameShape(QFrame.StyledPanel)
        self._cfg = resolve_config(config)
        self._diagnostics: tuple = ()
        self._rows: list[QWidget] = []
        self.setStyleSheet(
            """
            QFrame#validationTooltip {
                background: #252526;
                border: 1px solid #3a3a3a;
                border-radius: 4px;
            }
            QLabel {
                color: #d4d4d4;
                font-size: 10pt;
            }
            QLabel#validationHint, QLabel#validationMore {
                color: #8f9aa5;
            }
            QPushButton {
                min-height: 20px;
                padding: 0 6px;
                font-size: 9pt;
            }
            """
        )

        self._body = QVBoxLayout()
        self._body.setContentsMargins(0, 0, 0, 0)
        self._body.setSpacing(6)

        self.more_lbl = QLabel("", self)
        self.more_lbl.setObjectName("validationMore")
        self.more_lbl.hide()

        self.close_btn = QPushButton("X", self)
        self.close_btn.setFixedWidth(22)
        self.close_btn.clicked.connect(self.dismiss)

        footer = QHBoxLayout()
        footer.setContentsMargins(0, 0, 0, 0)
        footer.addWidget(self.more_lbl, 1)
        footer.addWidget(self.close_btn)

        lay = QVBoxLayout(self)
        lay.setContentsMargins(8, 6, 8, 6)
        lay.setSpacing(6)
        lay.addLayout(self._body)
        lay.addLayout(footer)

    def update_settings(self, config) -> None:
        self._cfg = resolve_config(config)

    def diagnostics(self) -> tuple:
        return self._diagnostics

    def set_diagnostics(self, diagnostics) -> None:
        self._clear_rows()
        self._diagnostics = tuple(diagnostics or ())
        for diag in self._diagnostics[:MAX_VISIBLE_DIAGNOSTICS]:
            row = self._build_row(diag)
            self._rows.append(row)
            self._body.addWidget(row)
        extra = len(self._diagnostics) - MAX_VISIBLE_DIAGNOSTICS
        if extra > 0:
            noun = "issue" if extra == 1 else "issues"
            self.more_lbl.setText(f"+{extra} more {noun}")
            self.more_lbl.show()
        else:
            self.more_lbl.setText("")
            self.more_lbl.hide()
        self.adjustSize()

    def show_diagnostics(self, diagnostics, global_pos: QPoint) -> None:
        self.set_diagnostics(diagnostics)
        if not self._diagnostics:
            self.hide()
            return
        self.move(global_pos)
        self.show()
        self.raise_()

    def dismiss(self) -> None:
        was_visible = self.isVisible()
        self.hide()
        if was_visible:
            self.dismissed.emit()

    def _clear_rows(self) -> None:
        for row in self._rows:
            self._body.removeWidget(row)
            row.deleteLater()
        self._rows = []

    def _build_row(self, diag) -> QWidget:
        severity = str(diagnostic_field(diag, "severity") or "warning").lower()
        message = str(diagnostic_field(diag, "message") or "")
        hint = diagnostic_field(diag, "hint")
        suggestion = diagnostic_field(diag, "suggested_replacement")
        fixes = tuple(diagnostic_field(diag, "quick_fixes") or ())

        row = QWidget(self)
        lay = QVBoxLayout(row)
        lay.setContentsMargins(0, 0, 0, 0)
        lay.setSpacing(2)

        icon = _SEVERITY_ICONS.get(severity, _SEVERITY_ICONS["warning"])
        head = QLabel(f"{icon}  {message}", row)
        head.setWordWrap(True)
        head.setStyleSheet(f"color: {self._cfg.color_for_severity(severity)};")
        lay.addWidget(head)

        detail = str(hint) if hint else (f"Try: {suggestion}" if suggestion else "")
        if detail:
            hint_lbl = QLabel(detail, row)
            hint_lbl.setObjectName("validationHint")
            hint_lbl.setWordWrap(True)
            lay.addWidget(hint_lbl)

        if not fixes and suggestion:
            fixes = ({"label": f"Use {suggestion}", "replacement_text": suggestion},)
        if fixes:
            buttons = QHBoxLayout()
            buttons.setContentsMargins(0, 0, 0, 0)
            buttons.setSpacing(4)
            for fix in fixes[:MAX_FIX_BUTTONS]:
                replacement = diagnostic_field(fix, "replacement_text")
                if replacement is None:
                    continue
                btn = QPushButton(str(diagnostic_field(fix, "label") or replacement), row)
                description = diagnostic_field(fix, "description")
                if description:
                    btn.setToolTip(str(description))
                btn.clicked.connect(
                    lambda _checked=False, d=diag, r=str(replacement): self.quickFixRequested.emit(d, r)
                )
                buttons.addWidget(btn)
            buttons.addStretch(1)
            lay.addLayout(buttons)
        return row

    def fix_buttons(self) -> list[QPushButton]:
        out: list[QPushButton] = []
        for row in self._rows:
            out.extend(row.findChildren(QPushButton))
        return out
