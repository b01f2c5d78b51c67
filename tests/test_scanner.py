"""Tests for the single-pass marker scanner."""

from notemark.core.scanner import inside_any_span, iter_markers, marker_spans, scan_markers


def _types(text, **kwargs):
    return [m.marker_type for m in scan_markers(text, **kwargs)]


class TestScanMarkers:

    def test_all_families_in_buffer_order(self):
        text = "Task [work] color:#ff0000 #high @today +alice"
        assert _types(text) == ["tag", "color", "priority", "date", "assignee"]

    def test_value_and_marker_offsets(self):
        (m,) = scan_markers("go [work] now")
        assert m.raw_value == "work"
        assert m.range == (4, 8)
        assert m.marker_range == (3, 9)

    def test_color_digits_are_not_a_priority(self):
        assert _types("color:#ff0000") == ["color"]
        assert _types("COLOR:#abc") == ["color"]

    def test_bare_hex_word_is_not_a_priority(self):
        assert _types("#abc and #fed") == []
        assert _types("#bad1") == []

    def test_hex_word_of_other_length_is_a_priority(self):
        assert _types("#facade") == []
        assert _types("#cafe") == ["priority"]
        assert _types("#ab #abcde") == ["priority", "priority"]

    def test_assignee_absorbs_at_suffix(self):
        matches = scan_markers("+alice@example")
        assert [m.marker_type for m in matches] == ["assignee"]
        assert matches[0].raw_value == "alice"
        assert matches[0].marker_end == len("+alice@example")

    def test_date_values(self):
        values = [m.raw_value for m in scan_markers("@today @2024/01/15 @2024-02-29")]
        assert values == ["today", "2024/01/15", "2024-02-29"]

    def test_checkbox_and_empty_tag(self):
        matches = scan_markers("[] [ ] [x]")
        assert [m.raw_value for m in matches] == ["", " ", "x"]

    def test_tag_longer_than_scan_limit_is_one_tag(self):
        content = "a" * 60 + " #bogus @x"
        for limit in (50, 100):
            matches = scan_markers("[" + content + "] +bob", tag_max_chars=limit)
            assert [m.marker_type for m in matches] == ["tag", "assignee"]
            assert matches[0].raw_value == content
            assert matches[0].marker_range == (0, len(content) + 2)

    def test_unclosed_bracket_before_long_text(self):
        assert _types("[" + "a" * 80 + " #high", tag_max_chars=50) == ["priority"]

    def test_lone_prefixes_produce_nothing(self):
        assert _types("@ + # [") == []

    def test_non_string_and_empty(self):
        assert scan_markers(None) == ()
        assert scan_markers("") == ()
        assert list(iter_markers(42)) == []

    def test_unicode_offsets_are_python_indices(self):
        text = "😀 #high"
        (m,) = scan_markers(text)
        assert text[m.start:m.end] == "high"


class TestSpans:

    def test_inside_any_span(self):
        spans = marker_spans(scan_markers("x [urgent] y"))
        assert spans == [(2, 10)]
        assert inside_any_span(3, 9, spans)
        assert not inside_any_span(11, 12, spans)
        assert not inside_any_span(0, 2, spans)
