from __future__ import annotations

from PySide6.QtGui import QColor, QTextCharFormat, QTextCursor
from PySide6.QtWidgets import QPlainTextEdit, QTextEdit

from notemark.core.diagnostics import severity_rank
from notemark.settings_schema import resolve_config
from notemark.ui.surface import diagnostic_field, to_qt_offset

_BACKGROUND_ALPHA = 28


def build_extra_selections(editor: QPlainTextEdit, diagnostics, visual_cfg=None) -> list[QTextEdit.ExtraSelection]:
    """Wavy underlines for ``diagnostics``; errors are drawn last so they stay on top."""
    cfg = resolve_config(visual_cfg)
    text = editor.toPlainText()
    doc = editor.document()

    ordered = []
    for diag in diagnostics or ():
        try:
            start = int(diagnostic_field(diag, "start", -1))
            end = int(diagnostic_field(diag, "end", -1))
        except Exception:
            continue
        if not (0 <= start < end <= len(text)):
            continue
        severity = str(diagnostic_field(diag, "severity") or "warning").lower()
        ordered.append((severity_rank(severity), start, end, severity))
    ordered.sort(key=lambda t: (t[0], t[1]))

    selections: list[QTextEdit.ExtraSelection] = []
    for _rank, start, end, severity in ordered:
        color = QColor(cfg.color_for_severity(severity))
        fmt = QTextCharFormat()
        if severity == "suggestion":
            fmt.setUnderlineStyle(QTextCharFormat.UnderlineStyle.DotLine)
        else:
            fmt.setUnderlineStyle(QTextCharFormat.UnderlineStyle.WaveUnderline)
            background = QColor(color)
            background.setAlpha(_BACKGROUND_ALPHA)
            fmt.setBackground(background)
        fmt.setUnderlineColor(color)

        cursor = QTextCursor(doc)
        cursor.setPosition(to_qt_offset(text, start))
        cursor.setPosition(to_qt_offset(text, end), QTextCursor.KeepAnchor)

        sel = QTextEdit.ExtraSelection()
        sel.cursor = cursor
        sel.format = fmt
        selections.append(sel)
    return selections
