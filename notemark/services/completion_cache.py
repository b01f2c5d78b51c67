from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass

from notemark.services.completion_data import CompletionCandidate

DEFAULT_CACHE_CAPACITY = 50


@dataclass(frozen=True, slots=True)
class CompletionCacheEntry:
    marker_type: str
    query: str
    items: tuple[CompletionCandidate, ...]
    anchor_start: int
    anchor_end: int

    def covers(self, anchor_start: int) -> bool:
        return self.anchor_start <= anchor_start <= self.anchor_end


class CompletionCache:
    """Insertion-ordered cache keyed by ``(marker_type, query)``.

    Reads do not refresh an entry's position; once ``capacity`` is exceeded
    the oldest inserted entry is evicted.
    """

    def __init__(self, capacity: int = DEFAULT_CACHE_CAPACITY):
        self._capacity = max(1, int(capacity))
        self._entries: OrderedDict[tuple[str, str], CompletionCacheEntry] = OrderedDict()
        self.hits = 0
        self.misses = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    def get(self, marker_type: str, query: str, anchor_start: int) -> CompletionCacheEntry | None:
        entry = self._entries.get((marker_type, query))
        if entry is None or not entry.covers(anchor_start):
            self.misses += 1
            return None
        self.hits += 1
        return entry

    def put(self, entry: CompletionCacheEntry) -> None:
        key = (entry.marker_type, entry.query)
        self._entries.pop(key, None)
        self._entries[key] = entry
        while len(self._entries) > self._capacity:
            self._entries.popitem(last=False)

    def __contains__(self, key) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def size(self) -> int:
        return len(self._entries)

    def keys(self) -> list[tuple[str, str]]:
        return list(self._entries.keys())

    def clear(self) -> None:
        self._entries.clear()
        self.hits = 0
        self.misses = 0

    def stats(self) -> dict[str, int]:
        return {
            "size": len(self._entries),
            "capacity": self._capacity,
            "hits": self.hits,
            "misses": self.misses,
        }
