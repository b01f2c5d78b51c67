"""
Shared pytest fixtures for notemark tests.

Widgets run on Qt's offscreen platform so the suite works without a display.
"""

import datetime
import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest


@pytest.fixture(scope="session")
def qapp():
    """One QApplication for every widget test."""
    from PySide6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def today():
    """Fixed 'today' so ISO fixes are deterministic."""
    return datetime.date(2025, 6, 15)


class FakeSurface:
    """In-memory editable surface."""

    def __init__(self, text: str = "", attached: bool = True):
        self._text = text
        self.attached = attached
        self.focused = False
        self.replacements: list[tuple[int, int, str]] = []

    def is_attached(self) -> bool:
        return self.attached

    def text(self) -> str:
        return self._text

    def cursor_position(self) -> int:
        return len(self._text)

    def replace(self, start: int, end: int, text: str) -> None:
        self.replacements.append((start, end, text))
        self._text = self._text[:start] + text + self._text[end:]

    def focus(self) -> None:
        self.focused = True


@pytest.fixture
def fake_surface():
    return FakeSurface
