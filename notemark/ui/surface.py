"""Editable-surface contract and quick-fix application."""

from __future__ import annotations

import logging
from typing import Any, Protocol, runtime_checkable

from PySide6.QtGui import QTextCursor
from PySide6.QtWidgets import QPlainTextEdit
from shiboken6 import isValid as _is_qobject_valid

logger = logging.getLogger(__name__)


@runtime_checkable
class EditableSurface(Protocol):
    def is_attached(self) -> bool: ...

    def text(self) -> str: ...

    def cursor_position(self) -> int: ...

    def replace(self, start: int, end: int, text: str) -> None: ...

    def focus(self) -> None: ...


def to_qt_offset(text: str, index: int) -> int:
    """Python string index to a QTextDocument position (UTF-16 units)."""
    index = max(0, min(int(index), len(text)))
    if text.isascii():
        return index
    return len(text[:index].encode("utf-16-le")) // 2


def from_qt_offset(text: str, position: int) -> int:
    position = max(0, int(position))
    if text.isascii():
        return min(position, len(text))
    units = 0
    for i, ch in enumerate(text):
        if units >= position:
            return i
        units += 2 if ord(ch) > 0xFFFF else 1
    return len(text)


def diagnostic_field(diagnostic: Any, name: str, default: Any = None) -> Any:
    if isinstance(diagnostic, dict):
        return diagnostic.get(name, default)
    return getattr(diagnostic, name, default)


def replacement_for(diagnostic: Any) -> str | None:
    value = diagnostic_field(diagnostic, "suggested_replacement")
    if value is not None:
        return str(value)
    fixes = diagnostic_field(diagnostic, "quick_fixes") or ()
    for fix in fixes:
        text = diagnostic_field(fix, "replacement_text")
        if text is not None:
            return str(text)
    return None


def apply_quick_fix(surface: EditableSurface | None, diagnostic: Any, replacement: str | None = None) -> bool:
    """Replace the diagnostic's range on ``surface`` and focus it.

    Returns False, changing nothing, when the surface is detached, there is
    no replacement, or the range does not fit the current text.
    """
    try:
        if surface is None or not surface.is_attached():
            return False
        if replacement is None:
            replacement = replacement_for(diagnostic)
        if replacement is None:
            return False
        start = int(diagnostic_field(diagnostic, "start", -1))
        end = int(diagnostic_field(diagnostic, "end", -1))
        text = surface.text()
        if not (0 <= start < end <= len(text)):
            return False
        surface.replace(start, end, str(replacement))
        surface.focus()
        return True
    except Exception:
        logger.debug("quick fix failed", exc_info=True)
        return False


class QtTextSurface:
    """``EditableSurface`` over a ``QPlainTextEdit``; offsets are Python indices."""

    def __init__(self, editor: QPlainTextEdit):
        self._editor = editor

    @property
    def editor(self) -> QPlainTextEdit:
        return self._editor

    def is_attached(self) -> bool:
        editor = self._editor
        if editor is None:
            return False
        try:
            return bool(_is_qobject_valid(editor))
        except Exception:
            return False

    def text(self) -> str:
        return self._editor.toPlainText()

    def cursor_position(self) -> int:
        return from_qt_offset(self.text(), self._editor.textCursor().position())

    def replace(self, start: int, end: int, text: str) -> None:
        current = self.text()
        q_start = to_qt_offset(current, start)
        q_end = to_qt_offset(current, end)
        cursor = QTextCursor(self._editor.document())
        cursor.beginEditBlock()
        cursor.setPosition(q_start)
        cursor.setPosition(q_end, QTextCursor.KeepAnchor)
        cursor.insertText(text)
        cursor.endEditBlock()
        self._editor.setTextCursor(cursor)

    def focus(self) -> None:
        self._editor.setFocus()

    def detach(self) -> None:
        self._editor = None
