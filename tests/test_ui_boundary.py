"""Tests for the Qt boundary: quick fixes, debounce, tooltip, popups and the note input."""

import pytest

from notemark import validate
from notemark.core import diagnostics as codes
from notemark.ui.surface import apply_quick_fix, from_qt_offset, to_qt_offset
from notemark.validators.pattern_validators import validate_priority


class TestOffsets:

    def test_ascii_is_identity(self):
        assert to_qt_offset("abc", 2) == 2
        assert from_qt_offset("abc", 2) == 2

    def test_astral_characters_take_two_units(self):
        text = "😀a"
        assert to_qt_offset(text, 1) == 2
        assert to_qt_offset(text, 2) == 3
        assert from_qt_offset(text, 2) == 1
        assert from_qt_offset(text, 3) == 2

    def test_clamped(self):
        assert to_qt_offset("😀", 10) == 2
        assert from_qt_offset("ab", 99) == 2


class TestApplyQuickFix:

    def test_replaces_range_and_focuses(self, fake_surface):
        surface = fake_surface("#bogus")
        (diag,) = validate(surface.text())
        assert apply_quick_fix(surface, diag) is True
        assert surface.text() == "#blocked"
        assert surface.focused is True

    def test_explicit_replacement(self, fake_surface):
        surface = fake_surface("#bogus")
        (diag,) = validate(surface.text())
        assert apply_quick_fix(surface, diag, "urgent") is True
        assert surface.text() == "#urgent"

    def test_detached_surface_is_a_no_op(self, fake_surface):
        surface = fake_surface("#bogus", attached=False)
        (diag,) = validate(surface.text())
        assert apply_quick_fix(surface, diag) is False
        assert surface.text() == "#bogus"
        assert surface.focused is False

    def test_no_surface(self):
        (diag,) = validate("#bogus")
        assert apply_quick_fix(None, diag) is False

    def test_stale_range_is_a_no_op(self, fake_surface):
        (diag,) = validate("some text #bogus")
        surface = fake_surface("#bo")
        assert apply_quick_fix(surface, diag) is False
        assert surface.replacements == []

    def test_dict_diagnostics_with_missing_fields(self, fake_surface):
        surface = fake_surface("#hgh")
        assert apply_quick_fix(surface, {"start": 1, "end": 4, "suggested_replacement": "high"}) is True
        assert surface.text() == "#high"
        assert apply_quick_fix(surface, {"start": 1, "end": 4}) is False

    def test_failing_surface_is_swallowed(self, fake_surface):
        class Broken(fake_surface):
            def replace(self, start, end, text):
                raise RuntimeError("gone")

        (diag,) = validate("#bogus")
        assert apply_quick_fix(Broken("#bogus"), diag) is False


class TestQtTextSurface:

    def test_replace_with_astral_text(self, qapp):
        from PySide6.QtWidgets import QPlainTextEdit

        from notemark.ui.surface import QtTextSurface

        editor = QPlainTextEdit()
        editor.setPlainText("😀 #bogus")
        surface = QtTextSurface(editor)
        (diag,) = validate(surface.text())
        assert diag.start == 3
        assert apply_quick_fix(surface, diag) is True
        assert editor.toPlainText() == "😀 #blocked"
        assert surface.cursor_position() == len("😀 #blocked")

    def test_detach(self, qapp):
        from PySide6.QtWidgets import QPlainTextEdit

        from notemark.ui.surface import EditableSurface, QtTextSurface

        surface = QtTextSurface(QPlainTextEdit())
        assert isinstance(surface, EditableSurface)
        assert surface.is_attached()
        surface.detach()
        assert not surface.is_attached()
        assert apply_quick_fix(surface, {"start": 0, "end": 1, "suggested_replacement": "x"}) is False

    def test_deleted_editor_is_detached(self, qapp):
        import shiboken6
        from PySide6.QtWidgets import QPlainTextEdit

        from notemark.ui.surface import QtTextSurface

        editor = QPlainTextEdit()
        surface = QtTextSurface(editor)
        shiboken6.delete(editor)
        assert not surface.is_attached()


class TestDecorations:

    def test_errors_drawn_last_and_stale_ranges_skipped(self, qapp):
        from PySide6.QtWidgets import QPlainTextEdit

        from notemark.ui.decorations import build_extra_selections

        editor = QPlainTextEdit()
        editor.setPlainText("#bogus urgent")
        diags = list(validate(editor.toPlainText()))
        diags.append({"severity": "error", "start": 40, "end": 50})
        selections = build_extra_selections(editor, diags)
        assert len(selections) == 2
        assert selections[-1].cursor.selectionStart() == 1
        assert selections[-1].cursor.selectionEnd() == 6


class TestValidationController:

    def test_validates_at_once_and_debounces_tooltip(self, qapp):
        from PySide6.QtTest import QTest

        from notemark.ui.validation_controller import ValidationController

        ctrl = ValidationController(config={"tooltip_delay_ms": 100})
        changed, requested = [], []
        ctrl.diagnosticsChanged.connect(changed.append)
        ctrl.tooltipRequested.connect(requested.append)

        ctrl.request_validation("#bogus")
        assert len(changed) == 1
        assert changed[0][0].code == codes.PRIORITY_INVALID
        assert ctrl.is_pending()
        assert requested == []

        QTest.qWait(400)
        assert len(requested) == 1
        assert not ctrl.is_pending()

    def test_clean_text_cancels_pending_tooltip(self, qapp):
        from notemark.ui.validation_controller import ValidationController

        ctrl = ValidationController()
        ctrl.request_validation("#bogus")
        assert ctrl.is_pending()
        ctrl.request_validation("#high")
        assert not ctrl.is_pending()
        assert ctrl.diagnostics() == ()

    def test_failing_validator_yields_no_diagnostics(self, qapp):
        from notemark.ui.validation_controller import ValidationController

        def boom(text, config=None):
            raise RuntimeError("boom")

        ctrl = ValidationController(validator=boom)
        assert ctrl.request_validation("#bogus") == ()
        assert not ctrl.is_pending()

    def test_update_settings(self, qapp):
        from notemark.ui.validation_controller import ValidationController

        ctrl = ValidationController()
        ctrl.request_validation("#bogus")
        ctrl.update_settings({"enabled": False, "tooltip_delay_ms": 900})
        assert ctrl.tooltip_delay_ms() == 900
        assert ctrl.diagnostics() == ()
        assert not ctrl.is_pending()
        ctrl.cancel_pending()


class TestValidationTooltip:

    def test_rows_buttons_and_overflow(self, qapp):
        from notemark.ui.validation_tooltip import ValidationTooltip

        tooltip = ValidationTooltip()
        diag = validate_priority("xyz", 1)
        tooltip.set_diagnostics([diag])
        buttons = tooltip.fix_buttons()
        assert [b.text() for b in buttons] == ['Use "medium"', 'Use "high"', 'Use "urgent"']

        emitted = []
        tooltip.quickFixRequested.connect(lambda d, r: emitted.append((d, r)))
        buttons[1].click()
        assert emitted == [(diag, "high")]

        tooltip.set_diagnostics([diag] * 5)
        assert tooltip.more_lbl.text() == "+2 more issues"
        assert len(tooltip.diagnostics()) == 5

    def test_dict_diagnostic_without_fixes(self, qapp):
        from notemark.ui.validation_tooltip import ValidationTooltip

        tooltip = ValidationTooltip()
        tooltip.set_diagnostics([{"severity": "warning", "message": "odd"}])
        assert tooltip.fix_buttons() == []

    def test_dismiss_only_signals_when_visible(self, qapp):
        from notemark.ui.validation_tooltip import ValidationTooltip

        tooltip = ValidationTooltip()
        dismissed = []
        tooltip.dismissed.connect(lambda: dismissed.append(True))
        tooltip.dismiss()
        assert dismissed == []


class TestCompletionPopups:

    def test_popup_selection(self, qapp):
        from notemark.services.completion_source import CompletionSource
        from notemark.ui.completion_popup import CompletionPopup

        result = CompletionSource().complete("#")
        popup = CompletionPopup()
        popup.show_result(result)
        assert popup.count() == 10
        assert popup.current_candidate() == result.items[0]

        popup.move_selection(-1)
        assert popup.current_candidate() == result.items[-1]

        chosen = []
        popup.candidateChosen.connect(chosen.append)
        assert popup.accept_current() is True
        assert chosen == [result.items[-1]]

        popup.dismiss()
        assert popup.count() == 0
        assert popup.accept_current() is False

    def test_panel_shows_fewer_rows(self, qapp):
        from notemark.services.completion_source import CompletionSource
        from notemark.ui.completion_popup import FloatingCompletionPanel

        result = CompletionSource().complete("[")
        panel = FloatingCompletionPanel()
        panel.show_result(result)
        assert panel.limit == 8
        assert panel.count() == 8
        assert panel.header_lbl.text() == "Tag suggestions"


class TestNoteInput:

    def test_completion_replaces_query(self, qapp):
        from notemark.ui.note_input import NoteInput

        editor = NoteInput()
        editor.insertPlainText("Buy [mee")
        result = editor.refresh_completions()
        assert result is not None
        accepted = []
        editor.completionAccepted.connect(accepted.append)
        assert editor.apply_completion(result.items[0]) is True
        assert editor.toPlainText() == "Buy [meeting"
        assert accepted == ["meeting"]

    def test_quick_fix_through_editor(self, qapp):
        from notemark.ui.note_input import NoteInput

        editor = NoteInput()
        editor.insertPlainText("#bogus")
        (diag,) = editor.diagnostics()
        assert editor.apply_quick_fix(diag) is True
        assert editor.toPlainText() == "#blocked"
        assert editor.diagnostics() == ()

    def test_panel_mode(self, qapp):
        from notemark.ui.note_input import NoteInput

        editor = NoteInput(config={"completion_ui": "panel"})
        assert editor.active_completion_widget() is editor.completion_panel
        editor.update_settings({"completion_ui": "popup", "completion_popup_limit": 5})
        assert editor.active_completion_widget() is editor.completion_popup
        assert editor.completion_popup.limit == 5

    @pytest.mark.parametrize("text", ["", "😀 @2023-02-29 [a<b] +1x"])
    def test_diagnostics_follow_the_buffer(self, qapp, text):
        from notemark.ui.note_input import NoteInput

        editor = NoteInput()
        editor.setPlainText(text)
        assert editor.diagnostics() == validate(text)
