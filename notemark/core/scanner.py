"""Single-pass marker tokenizer.

The buffer is read left to right with one compiled alternation whose branches
are ordered tag, color, priority, date, assignee. A character span is
classified at most once, which keeps the hex digits of ``color:#ff0000`` out
of the priority grammar and keeps the ``@suffix`` of ``+alice@example`` out
of the date grammar.

The tag branch is bounded by ``tag_max_chars``. A ``[`` it cannot match is
closed with a plain ``str.find`` for the next ``]`` so that over-long tags are
still reported as one tag and their content is not rescanned.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterator

from notemark.core.grammar import MARKER_TYPES

logger = logging.getLogger(__name__)

DEFAULT_TAG_SCAN_MAX_CHARS = 500

_HEX_COLOR_WORD_RE = re.compile(r"^(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


@dataclass(frozen=True, slots=True)
class MarkerMatch:
    marker_type: str
    raw_value: str
    start: int
    end: int
    marker_start: int
    marker_end: int

    @property
    def range(self) -> tuple[int, int]:
        return (self.start, self.end)

    @property
    def marker_range(self) -> tuple[int, int]:
        return (self.marker_start, self.marker_end)


@lru_cache(maxsize=8)
def _marker_pattern(tag_max_chars: int) -> re.Pattern[str]:
    return re.compile(
        r"(?P<tag>\[(?P<tag_value>[^\]]{0,%d})\])"
        r"|(?P<color>(?i:color:)(?P<color_value>[^,\s\]]*))"
        r"|(?P<priority>#(?P<priority_value>[A-Za-z]+))"
        r"|(?P<date>@(?P<date_value>[A-Za-z][A-Za-z0-9_]*|[0-9][0-9/\-]*))"
        r"|(?P<assignee>\+(?P<assignee_value>[^\s@#\[\]+,]+)(?P<assignee_suffix>@\S*)?)"
        % max(0, int(tag_max_chars))
    )


def _classify(m: re.Match[str]) -> MarkerMatch | None:
    # lastgroup can name a nested value group, so look up the branch instead.
    kind = next((name for name in MARKER_TYPES if m.group(name) is not None), None)
    if kind is None:
        return None

    value_group = f"{kind}_value"
    raw_value = m.group(value_group) or ""
    if kind == "priority" and _HEX_COLOR_WORD_RE.match(raw_value):
        # ``#abc`` / ``#facade`` read as bare hex colours, not priorities.
        return None

    return MarkerMatch(
        marker_type=kind,
        raw_value=raw_value,
        start=m.start(value_group),
        end=m.end(value_group),
        marker_start=m.start(kind),
        marker_end=m.end(kind),
    )


def iter_markers(text: str, *, tag_max_chars: int = DEFAULT_TAG_SCAN_MAX_CHARS) -> Iterator[MarkerMatch]:
    """Yield marker occurrences of ``text`` in buffer order."""
    if not isinstance(text, str) or not text:
        return
    pattern = _marker_pattern(int(tag_max_chars))
    pos = 0
    length = len(text)
    bracket = text.find("[")
    closable = True
    while pos < length:
        m = pattern.search(text, pos)
        if bracket != -1 and bracket < pos:
            bracket = text.find("[", pos)
        if closable and bracket != -1 and (m is None or m.start() > bracket):
            # Only the tag branch starts with "[", so it failed here.
            close = text.find("]", bracket + 1)
            if close == -1:
                closable = False
            else:
                yield MarkerMatch(
                    marker_type="tag",
                    raw_value=text[bracket + 1:close],
                    start=bracket + 1,
                    end=close,
                    marker_start=bracket,
                    marker_end=close + 1,
                )
                pos = close + 1
                continue
        if m is None:
            return
        pos = m.end() if m.end() > m.start() else m.start() + 1
        try:
            match = _classify(m)
        except Exception:
            logger.debug("marker classification failed at %d", m.start(), exc_info=True)
            continue
        if match is not None:
            yield match


def scan_markers(text: str, *, tag_max_chars: int = DEFAULT_TAG_SCAN_MAX_CHARS) -> tuple[MarkerMatch, ...]:
    try:
        return tuple(iter_markers(text, tag_max_chars=tag_max_chars))
    except Exception:
        logger.debug("marker scan failed", exc_info=True)
        return ()


def marker_spans(matches) -> list[tuple[int, int]]:
    return [(m.marker_start, m.marker_end) for m in matches or ()]


def inside_any_span(start: int, end: int, spans: list[tuple[int, int]]) -> bool:
    for span_start, span_end in spans:
        if start < span_end and end > span_start:
            return True
    return False
