"""End-to-end tests for ``validate``."""

import pytest

from notemark import validate
from notemark.core import diagnostics as codes
from notemark.core.grammar import PRIORITY_VOCABULARY
from notemark.validators import orchestrator
from notemark.validators.orchestrator import has_errors


def _errors(diags):
    return [d for d in diags if d.severity == "error"]


class TestPartialTyping:

    @pytest.mark.parametrize(
        "text",
        ["@", "@2", "@20", "@202", "@2024", "@2024-", "@2024-0", "@2024-01", "@2024-01-"],
    )
    def test_progressive_date_has_no_errors(self, text):
        assert _errors(validate(text)) == []


class TestCalendar:

    def test_leap_day(self):
        assert validate("@2024-02-29") == ()

    def test_feb_29_non_leap(self):
        diags = validate("@2023-02-29")
        assert len(diags) == 1
        assert diags[0].severity == "error"
        assert "28 days" in diags[0].message
        assert diags[0].range == (1, 11)

    def test_day_32_clamps(self):
        diags = validate("@2024-01-32")
        assert len(diags) == 1
        assert diags[0].quick_fixes[0].replacement_text == "2024-01-31"


class TestVocabulary:

    @pytest.mark.parametrize("word", PRIORITY_VOCABULARY)
    def test_every_priority_is_clean(self, word):
        assert validate("#" + word) == ()

    def test_unknown_priority(self):
        diags = validate("#notarealpriority")
        assert len(diags) == 1
        assert diags[0].severity == "error"
        assert ", ".join(PRIORITY_VOCABULARY) in diags[0].message


class TestCheckbox:

    @pytest.mark.parametrize("text", ["[x]", "[X]", "[ ]", "[]"])
    def test_checkboxes_are_clean(self, text):
        assert validate(text) == ()

    def test_empty_brackets_without_checkbox_syntax(self):
        diags = validate("[]", config={"tag_checkboxes": False})
        assert [d.code for d in diags] == [codes.TAG_EMPTY]


class TestDisambiguation:

    def test_color_is_not_a_priority(self):
        assert validate("color:#ff0000") == ()

    def test_assignee_email_suffix_is_not_a_date(self):
        assert validate("+alice@example") == ()

    def test_word_after_assignee_is_prose(self):
        assert validate("+alice review the draft") == ()
        assert validate("ping +john doe") == ()

    def test_mixed_line(self):
        assert validate("Review PR [work] color:#abc #high @tomorrow +alice") == ()

    def test_tag_over_scan_limit_is_too_long(self):
        diags = validate("[" + "word " * 120 + "]")
        assert [d.code for d in diags] == [codes.TAG_TOO_LONG]

    def test_markers_inside_long_tag_are_not_validated(self):
        text = "[" + "x" * 520 + " #bogus]"
        diags = validate(text)
        assert [d.code for d in diags] == [codes.TAG_TOO_LONG]
        assert diags[0].range == (1, len(text) - 1)

    def test_hex_word_that_is_not_a_color_is_checked(self):
        assert [d.code for d in validate("#cafe")] == [codes.PRIORITY_INVALID]
        assert validate("#abc #facade") == ()


class TestPassOrder:

    def test_markers_then_incomplete_then_suggestions(self):
        diags = validate("Meet friday #bogus @")
        assert [d.code for d in diags] == [
            codes.PRIORITY_INVALID,
            codes.DATE_INCOMPLETE,
            codes.DATE_PATTERN_SUGGESTION,
        ]

    def test_returns_tuple(self):
        assert isinstance(validate("#bogus"), tuple)

    def test_has_errors(self):
        assert has_errors(validate("#bogus"))
        assert not has_errors(validate("urgent"))


class TestRoundTrip:

    @pytest.mark.parametrize(
        "text",
        [
            "@2024/01/15",
            "@01/15/2024",
            "@2023-02-29",
            "@2024-04-31",
            "@2024-13-01",
            "@2024-00-10",
            "@2024-01-32",
            "@1800-01-01",
            "@someday",
            "color:#zz",
            "color:red",
            "#xyz",
            "#hgh",
            "[a<b]",
            "[" + "a" * 60 + "]",
            "+1abc",
            "+" + "a" * 40,
            "Buy [groc",
            "Meet @",
            "Do it +",
            "Fix #",
            "note color:#a",
            "this is urgent",
            "call mom tomorrow",
        ],
    )
    def test_first_fix_clears_the_diagnostic(self, text, today):
        diags = [d for d in validate(text, today=today) if d.quick_fixes]
        assert diags
        for diag in diags:
            fixed = text[:diag.start] + diag.quick_fixes[0].replacement_text + text[diag.end:]
            again = validate(fixed, today=today)
            assert not any(d.code == diag.code and d.start == diag.start for d in again), (text, fixed)

    def test_empty_tag_round_trip(self):
        cfg = {"tag_checkboxes": False}
        (diag,) = validate("[]", config=cfg)
        fixed = diag.quick_fixes[0].replacement_text
        assert validate(fixed, config=cfg) == ()


class TestNoThrow:

    @pytest.mark.parametrize(
        "value",
        [None, "", 0, b"#high", ["#high"], "😀", "😀 [😀] #😀 @😀 +😀 color:😀"],
    )
    def test_odd_input(self, value):
        diags = validate(value)
        assert isinstance(diags, tuple)

    def test_multi_megabyte_buffer(self):
        big = "@2024-02-30 #bogus [a<b] " * 200_000
        assert validate(big) == ()

    def test_multi_megabyte_buffer_with_raised_cap(self):
        text = "x" * 1_500_000 + " #bogus"
        diags = validate(text, config={"max_buffer_chars": 2_000_000})
        assert [d.code for d in diags] == [codes.PRIORITY_INVALID]

    def test_ranges_fit_the_buffer(self):
        text = "😀 [] [a<b] #hgh @2023-02-29 +1x color:#12 urgent friday ["
        for diag in validate(text, config={"tag_checkboxes": False}):
            assert 0 <= diag.start < diag.end <= len(text)

    def test_failing_validator_does_not_hide_others(self, monkeypatch):
        def boom(*args, **kwargs):
            raise RuntimeError("boom")

        monkeypatch.setitem(orchestrator.VALIDATORS, "priority", boom)
        diags = validate("#bogus @2023-02-29")
        assert [d.code for d in diags] == [codes.DATE_CALENDAR_INVALID]

    def test_failing_pass_degrades_to_empty(self, monkeypatch):
        def boom(*args, **kwargs):
            raise RuntimeError("boom")

        monkeypatch.setattr(orchestrator, "_collect", boom)
        assert validate("#bogus") == ()


class TestConfig:

    def test_disabled(self):
        assert validate("#bogus", config={"enabled": False}) == ()

    def test_buffer_cap(self):
        text = "a" * 300 + " #bogus"
        assert validate(text, config={"max_buffer_chars": 256}) == ()
