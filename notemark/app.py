from __future__ import annotations

import logging
import sys

from PySide6.QtWidgets import QApplication, QLabel, QMainWindow, QVBoxLayout, QWidget

from notemark.logging_config import configure_logging
from notemark.settings_store import JsonSettingsStore
from notemark.ui.note_input import NoteInput

logger = logging.getLogger(__name__)

APP_NAME = "Notemark"


SETTINGS_ARG = "--settings"
VERBOSE_ARG = "--verbose"


def _split_startup_args(argv: list[str]) -> tuple[list[str], str | None, bool]:
    """Pull notemark's own flags out of ``argv``; the rest goes to Qt."""
    filtered: list[str] = []
    settings_path: str | None = None
    verbose = False
    args = iter(argv)
    for arg in args:
        if arg == VERBOSE_ARG:
            verbose = True
            continue
        if arg == SETTINGS_ARG:
            settings_path = next(args, None)
            continue
        if arg.startswith(SETTINGS_ARG + "="):
            settings_path = arg.split("=", 1)[1]
            continue
        filtered.append(arg)
    return filtered, (settings_path or None), verbose


class NoteWindow(QMainWindow):
    def __init__(self, store: JsonSettingsStore):
        super().__init__()
        self.store = store
        self.setWindowTitle(APP_NAME)
        self.resize(720, 260)

        central = QWidget(self)
        lay = QVBoxLayout(central)
        lay.setContentsMargins(10, 10, 10, 10)
        lay.setSpacing(6)

        self.editor = NoteInput(central, config=store.marker_config())
        self.status_lbl = QLabel("", central)
        self.status_lbl.setStyleSheet("color: #8f9aa5;")
        self.editor.diagnosticsChanged.connect(self._on_diagnostics_changed)

        lay.addWidget(self.editor, 1)
        lay.addWidget(self.status_lbl)
        self.setCentralWidget(central)

    def _on_diagnostics_changed(self, diagnostics) -> None:
        counts: dict[str, int] = {}
        for diag in diagnostics:
            counts[diag.severity] = counts.get(diag.severity, 0) + 1
        if not counts:
            self.status_lbl.setText("")
            return
        parts = [f"{n} {sev}{'' if n == 1 else 's'}" for sev, n in sorted(counts.items())]
        self.status_lbl.setText(", ".join(parts))


def main(argv: list[str] | None = None) -> int:
    qt_args, settings_path, verbose = _split_startup_args(list(sys.argv[1:] if argv is None else argv))
    configure_logging(verbose=verbose)

    store = JsonSettingsStore(settings_path)
    store.load()
    if store.dirty and not store.path.exists():
        try:
            store.save()
        except Exception as exc:
            logger.warning("%s", exc)

    app = QApplication.instance() or QApplication([sys.argv[0], *qt_args])
    app.setStyle("Fusion")
    app.setApplicationName(APP_NAME)
    window = NoteWindow(store)
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
