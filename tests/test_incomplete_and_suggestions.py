"""Tests for the incomplete-marker detector and the suggestion pass."""

from notemark.core import diagnostics as codes
from notemark.validators.incomplete import find_incomplete_patterns
from notemark.validators.suggestions import find_suggestions


def _codes(diags):
    return [d.code for d in diags]


class TestIncomplete:

    def test_open_tag(self):
        (diag,) = find_incomplete_patterns("Buy [groc")
        assert diag.code == codes.TAG_INCOMPLETE
        assert diag.severity == "warning"
        assert diag.range == (4, 9)
        assert diag.suggested_replacement == "[groc]"

    def test_only_last_bracket_counts(self):
        (diag,) = find_incomplete_patterns("Done [x] and [y")
        assert diag.start == 13
        assert diag.suggested_replacement == "[y]"

    def test_closed_tags_are_complete(self):
        assert find_incomplete_patterns("[a] [b]") == []

    def test_short_buffer_is_ignored(self):
        assert find_incomplete_patterns("[") == []
        assert find_incomplete_patterns("@") == []

    def test_minimum_length_is_configurable(self):
        assert _codes(find_incomplete_patterns("[", config={"incomplete_min_length": 1})) == [codes.TAG_INCOMPLETE]

    def test_dangling_color(self):
        (diag,) = find_incomplete_patterns("note color:#a")
        assert diag.code == codes.COLOR_INCOMPLETE
        assert diag.suggested_replacement == "color:#a00000"

    def test_color_hash_is_not_a_priority(self):
        assert _codes(find_incomplete_patterns("color:#")) == [codes.COLOR_INCOMPLETE]

    def test_full_color_is_complete(self):
        assert find_incomplete_patterns("color:#ff0000") == []

    def test_dangling_date_assignee_priority(self):
        (date,) = find_incomplete_patterns("Meet @")
        assert (date.code, date.start, date.suggested_replacement) == (codes.DATE_INCOMPLETE, 5, "@today")
        (assignee,) = find_incomplete_patterns("Ask +")
        assert assignee.suggested_replacement == "+me"
        (priority,) = find_incomplete_patterns("Fix #")
        assert priority.suggested_replacement == "#medium"


class TestSuggestions:

    def test_urgent_word(self):
        (diag,) = find_suggestions("this is urgent")
        assert diag.severity == "suggestion"
        assert diag.code == codes.TAG_SUGGESTION
        assert diag.range == (8, 14)
        assert diag.suggested_replacement == "[urgent]"

    def test_one_suggestion_per_word(self):
        diags = find_suggestions("URGENT and Important, urgent")
        assert [d.suggested_replacement for d in diags] == ["[urgent]", "[important]"]

    def test_existing_marker_suppresses_tag_suggestion(self):
        assert find_suggestions("urgent [urgent]") == []
        assert find_suggestions("#urgent") == []

    def test_word_inside_marker_is_skipped(self):
        assert find_suggestions("[urgent-ish]") == []

    def test_date_word(self):
        (diag,) = find_suggestions("call mom tomorrow")
        assert diag.code == codes.DATE_PATTERN_SUGGESTION
        assert diag.suggested_replacement == "@tomorrow"

    def test_date_marker_suppresses_date_suggestion(self):
        assert find_suggestions("call tomorrow @friday") == []

    def test_disabled(self):
        assert find_suggestions("urgent tomorrow", config={"suggestions_enabled": False}) == []
