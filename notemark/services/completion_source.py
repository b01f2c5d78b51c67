"""Context-aware completion for the marker under the cursor.

``CompletionSource.complete`` looks at the text just before the cursor,
decides which marker the user is typing, and returns ranked candidates from
that marker's table. Ranked lists are memoized in a ``CompletionCache``.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from notemark.core.dates import parse_partial_date
from notemark.services.completion_cache import CompletionCache, CompletionCacheEntry
from notemark.services.completion_data import (
    CompletionCandidate,
    candidates_for,
    category_rank,
    day_candidates,
)
from notemark.settings_schema import resolve_config

logger = logging.getLogger(__name__)

CONTEXT_WINDOW_CHARS = 256

_CONTEXT_PATTERNS: dict[str, re.Pattern[str]] = {
    "date": re.compile(r"@([^@\s]*)$"),
    "priority": re.compile(r"#([^#\s]*)$"),
    "color": re.compile(r"color:([^:\s]*)$", re.IGNORECASE),
    "tag": re.compile(r"\[([^\[\]]*)$"),
    "assignee": re.compile(r"\+([^+\s]*)$"),
}

_PARTIAL_DAY_RE = re.compile(r"\d{4}-\d{1,2}-(\d*)$")

EXACT_SCORE = 1000
PREFIX_SCORE = 100
SUBSTRING_SCORE = 50
SUBSEQUENCE_SCORE = 10


@dataclass(frozen=True, slots=True)
class MarkerContext:
    marker_type: str
    query: str
    trigger_start: int
    anchor_start: int
    anchor_end: int


@dataclass(frozen=True, slots=True)
class CompletionResult:
    marker_type: str
    query: str
    anchor_start: int
    anchor_end: int
    items: tuple[CompletionCandidate, ...]

    def apply_text(self, candidate: CompletionCandidate) -> str:
        return apply_value(candidate.value, self.marker_type)


def apply_value(value: str, marker_type: str) -> str:
    if marker_type == "tag" and value.endswith("]"):
        return value[:-1]
    return value


def detect_context(text: str, cursor: int | None = None) -> MarkerContext | None:
    """The marker being typed right before ``cursor``, if any."""
    if not isinstance(text, str):
        return None
    if cursor is None:
        cursor = len(text)
    cursor = max(0, min(int(cursor), len(text)))
    base = max(0, cursor - CONTEXT_WINDOW_CHARS)
    before = text[base:cursor]
    if not before:
        return None

    found: dict[str, re.Match[str]] = {}
    for marker_type, pattern in _CONTEXT_PATTERNS.items():
        m = pattern.search(before)
        if m is not None:
            found[marker_type] = m

    color = found.get("color")
    if color is not None:
        # ``#`` inside an open colour value belongs to the colour.
        priority = found.get("priority")
        if priority is not None and priority.start() >= color.start():
            del found["priority"]
    assignee = found.get("assignee")
    if assignee is not None:
        # ``+alice@...`` is one assignee token.
        date = found.get("date")
        if date is not None and date.start() > assignee.start():
            del found["date"]

    if not found:
        return None
    marker_type, m = max(found.items(), key=lambda kv: kv[1].start())

    query = m.group(1)
    anchor_start = base + m.start(1)
    if marker_type == "tag" and "," in query:
        segment = query.rsplit(",", 1)[1]
        stripped = segment.lstrip()
        anchor_start = base + m.end(1) - len(stripped)
        query = stripped.rstrip()

    return MarkerContext(
        marker_type=marker_type,
        query=query,
        trigger_start=base + m.start(),
        anchor_start=anchor_start,
        anchor_end=cursor,
    )


def _is_subsequence(query: str, target: str) -> bool:
    pos = 0
    for ch in query:
        found = target.find(ch, pos)
        if found < 0:
            return False
        pos = found + 1
    return True


def match_score(query: str, candidate: CompletionCandidate) -> int:
    q = query.lower()
    value = candidate.value.lower()
    label = candidate.label.lower()
    if q in (value, label):
        return EXACT_SCORE
    if value.startswith(q) or label.startswith(q):
        return PREFIX_SCORE
    if q in value or q in label:
        return SUBSTRING_SCORE
    if _is_subsequence(q, value):
        return SUBSEQUENCE_SCORE
    return 0


def type_boost(marker_type: str, candidate: CompletionCandidate) -> int:
    value = candidate.value.lower()
    if marker_type == "date":
        return 50 if value in ("today", "tomorrow", "yesterday") else 0
    if marker_type == "priority":
        return 30 if value in ("high", "medium", "low", "critical") else 0
    if marker_type == "color":
        return 20 if candidate.category == "Basic" else 0
    if marker_type == "tag":
        return 15 if candidate.category == "Status" else 0
    if marker_type == "assignee":
        return 25 if candidate.category == "Roles" else 0
    return 0


def _day_score(partial_day: str, candidate: CompletionCandidate) -> int:
    label = candidate.label
    if label == partial_day:
        score = EXACT_SCORE
    elif label.startswith(partial_day):
        score = PREFIX_SCORE + (20 if int(label) <= 9 else 0)
    else:
        return 0
    if label in ("1", "15", "30", "31"):
        score += 15
    return score


def rank_candidates(
    marker_type: str,
    query: str,
    candidates: tuple[CompletionCandidate, ...],
) -> tuple[CompletionCandidate, ...]:
    """Candidates with a positive score, best first; ties keep table order."""
    if not query.strip():
        return tuple(candidates)

    is_days = bool(candidates) and candidates[0].category == "Days"
    if is_days:
        m = _PARTIAL_DAY_RE.search(query)
        partial_day = m.group(1) if m else ""
        if not partial_day:
            return tuple(candidates)
        scored = [(_day_score(partial_day, c), i, c) for i, c in enumerate(candidates)]
    else:
        scored = []
        for i, c in enumerate(candidates):
            score = match_score(query, c)
            if score > 0:
                score += type_boost(marker_type, c)
            scored.append((score, i, c))

    scored = [t for t in scored if t[0] > 0]
    scored.sort(key=lambda t: (-t[0], t[1]))
    return tuple(c for _, _, c in scored)


def group_by_category(marker_type: str, items) -> tuple[CompletionCandidate, ...]:
    return tuple(sorted(items, key=lambda c: category_rank(c.category, marker_type)))


def candidate_table(context: MarkerContext) -> tuple[CompletionCandidate, ...]:
    if context.marker_type == "date" and context.query.count("-") == 2:
        partial = parse_partial_date(context.query)
        if partial is not None:
            return day_candidates(partial)
    return candidates_for(context.marker_type)


class CompletionSource:
    def __init__(self, cache: CompletionCache | None = None, *, config=None):
        self._config = resolve_config(config)
        self._cache = cache if cache is not None else CompletionCache(self._config.completion_cache_capacity)

    @property
    def cache(self) -> CompletionCache:
        return self._cache

    def update_settings(self, config) -> None:
        self._config = resolve_config(config)

    def clear_cache(self) -> None:
        self._cache.clear()

    def cache_size(self) -> int:
        return self._cache.size()

    def complete(self, text, cursor: int | None = None, *, limit: int | None = None) -> CompletionResult | None:
        try:
            return self._complete(text, cursor, limit)
        except Exception:
            logger.debug("completion failed", exc_info=True)
            return None

    def _complete(self, text, cursor, limit) -> CompletionResult | None:
        if not isinstance(text, str):
            return None
        context = detect_context(text, cursor)
        if context is None:
            return None
        if limit is None:
            limit = self._config.completion_popup_limit
        limit = max(1, int(limit))

        entry = self._cache.get(context.marker_type, context.query, context.anchor_start)
        if entry is None:
            ranked = rank_candidates(context.marker_type, context.query, candidate_table(context))
            entry = CompletionCacheEntry(
                marker_type=context.marker_type,
                query=context.query,
                items=ranked,
                anchor_start=context.anchor_start,
                anchor_end=context.anchor_end,
            )
            self._cache.put(entry)

        if not entry.items:
            return None
        return CompletionResult(
            marker_type=context.marker_type,
            query=context.query,
            anchor_start=context.anchor_start,
            anchor_end=context.anchor_end,
            items=group_by_category(context.marker_type, entry.items[:limit]),
        )
