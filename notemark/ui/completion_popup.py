from __future__ import annotations

from PySide6.QtCore import QRect, QSize, Qt, Signal
from PySide6.QtGui import QPalette
from PySide6.QtWidgets import (
    QApplication,
    QFrame,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QStyle,
    QStyleOptionViewItem,
    QStyledItemDelegate,
    QVBoxLayout,
    QWidget,
)

from notemark.services.completion_data import CompletionCandidate
from notemark.services.completion_source import CompletionResult

_CANDIDATE_ROLE = int(Qt.UserRole) + 1

POPUP_LIMIT = 10
PANEL_LIMIT = 8


class _CandidateDelegate(QStyledItemDelegate):
    """Label on the left, description right-aligned and dimmed."""

    def sizeHint(self, option, index):
        base = super().sizeHint(option, index)
        return QSize(base.width(), max(base.height(), option.fontMetrics.height() + 8))

    def paint(self, painter, option, index):
        candidate = index.data(_CANDIDATE_ROLE)
        if not isinstance(candidate, CompletionCandidate):
            super().paint(painter, option, index)
            return

        style = option.widget.style() if option.widget is not None else QApplication.style()
        style_opt = QStyleOptionViewItem(option)
        style_opt.text = ""
        style.drawControl(QStyle.CE_ItemViewItem, style_opt, painter, option.widget)

        rect = option.rect.adjusted(8, 0, -8, 0)
        if rect.width() <= 0:
            return

        fm = option.fontMetrics
        selected = bool(option.state & QStyle.State_Selected)
        right = str(candidate.description or "")
        right_width = 0
        if right:
            right_width = min(max(36, fm.horizontalAdvance(right) + 8), int(rect.width() * 0.55))
        right_rect = QRect(rect.right() - right_width + 1, rect.top(), right_width, rect.height())
        main_rect = QRect(rect.left(), rect.top(), max(0, rect.width() - right_width - 10), rect.height())

        painter.save()
        if right and right_rect.width() > 0:
            painter.setPen(
                option.palette.color(QPalette.HighlightedText)
                if selected
                else option.palette.color(QPalette.PlaceholderText)
            )
            painter.drawText(
                right_rect.adjusted(0, 0, -2, 0),
                Qt.AlignRight | Qt.AlignVCenter,
                fm.elidedText(right, Qt.ElideRight, right_rect.width()),
            )
        painter.setPen(option.palette.color(QPalette.HighlightedText if selected else QPalette.Text))
        painter.drawText(
            main_rect,
            Qt.AlignLeft | Qt.AlignVCenter,
            fm.elidedText(candidate.label, Qt.ElideRight, main_rect.width()),
        )
        painter.restore()


class CompletionPopup(QListWidget):
    """List popup shown under the caret while a marker value is being typed."""

    candidateChosen = Signal(object)   # CompletionCandidate
    limit = POPUP_LIMIT

    def __init__(self, parent: QWidget | None = None):
        super().__init__(parent)
        self._result: CompletionResult | None = None
        self.hide()
        self.setFocusPolicy(Qt.NoFocus)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self.setUniformItemSizes(True)
        self.setSelectionMode(QListWidget.SingleSelection)
        self.setItemDelegate(_CandidateDelegate(self))
        self.itemClicked.connect(self._on_item_clicked)
        self.setStyleSheet(
            """
            QListWidget {
                background: #1f1f1f;
                border: 1px solid #3a3a3a;
                padding: 2px;
            }
            QListWidget::item {
                padding: 3px 4px;
            }
            QListWidget::item:selected {
                background: #264f78;
            }
            """
        )

    def result(self) -> CompletionResult | None:
        return self._result

    def set_result(self, result: CompletionResult | None) -> None:
        self.clear()
        self._result = result
        if result is None:
            return
        for candidate in result.items[: self.limit]:
            item = QListWidgetItem(candidate.label)
            item.setData(_CANDIDATE_ROLE, candidate)
            if candidate.description:
                item.setToolTip(candidate.description)
            self.addItem(item)
        if self.count() > 0:
            self.setCurrentRow(0)

    def show_result(self, result: CompletionResult | None) -> None:
        self.set_result(result)
        if self.count() <= 0:
            self.dismiss()
            return
        rows = min(self.count(), self.limit)
        row_h = self.sizeHintForRow(0) if self.count() else 20
        self.resize(max(260, self.sizeHintForColumn(0) + 160), rows * row_h + 8)
        self.show()
        self.raise_()

    def dismiss(self) -> None:
        self.hide()
        self.clear()
        self._result = None

    def move_selection(self, delta: int) -> None:
        count = self.count()
        if count <= 0:
            return
        row = self.currentRow()
        if row < 0:
            row = 0
        self.setCurrentRow((row + delta) % count)

    def current_candidate(self) -> CompletionCandidate | None:
        item = self.currentItem()
        if item is None:
            return None
        candidate = item.data(_CANDIDATE_ROLE)
        return candidate if isinstance(candidate, CompletionCandidate) else None

    def accept_current(self) -> bool:
        candidate = self.current_candidate()
        if candidate is None:
            return False
        self.candidateChosen.emit(candidate)
        return True

    def _on_item_clicked(self, _item: QListWidgetItem) -> None:
        self.accept_current()


class FloatingCompletionPanel(QFrame):
    """Panel variant with a header naming the marker type; shows fewer rows."""

    candidateChosen = Signal(object)

    def __init__(self, parent: QWidget | None = None):
        super().__init__(parent)
        self.setObjectName("floatingCompletionPanel")
        self.setFrameShape(QFrame.StyledPanel)
        self.setStyleSheet(
            """
            QFrame#floatingCompletionPanel {
                background: #252526;
                border: 1px solid #3a3a3a;
                border-radius: 4px;
            }
            QLabel {
                color: #8f9aa5;
                font-size: 9pt;
            }
            """
        )
        self.header_lbl = QLabel("", self)
        self.list = CompletionPopup(self)
        self.list.limit = PANEL_LIMIT
        self.list.candidateChosen.connect(self.candidateChosen.emit)

        lay = QVBoxLayout(self)
        lay.setContentsMargins(6, 4, 6, 4)
        lay.setSpacing(4)
        lay.addWidget(self.header_lbl)
        lay.addWidget(self.list)
        self.hide()

    @property
    def limit(self) -> int:
        return self.list.limit

    def result(self) -> CompletionResult | None:
        return self.list.result()

    def show_result(self, result: CompletionResult | None) -> None:
        if result is None or not result.items:
            self.dismiss()
            return
        query = f' "{result.query}"' if result.query else ""
        self.header_lbl.setText(f"{result.marker_type.capitalize()} suggestions{query}")
        self.list.show_result(result)
        self.adjustSize()
        self.show()
        self.raise_()

    def dismiss(self) -> None:
        self.list.dismiss()
        self.hide()

    def move_selection(self, delta: int) -> None:
        self.list.move_selection(delta)

    def current_candidate(self) -> CompletionCandidate | None:
        return self.list.current_candidate()

    def accept_current(self) -> bool:
        return self.list.accept_current()

    def count(self) -> int:
        return self.list.count()
