from .completion_cache import CompletionCache, CompletionCacheEntry
from .completion_data import CompletionCandidate, candidates_for, category_rank
from .completion_source import CompletionResult, CompletionSource, MarkerContext, detect_context

__all__ = [
    "CompletionCache",
    "CompletionCacheEntry",
    "CompletionCandidate",
    "CompletionResult",
    "CompletionSource",
    "MarkerContext",
    "candidates_for",
    "category_rank",
    "detect_context",
]
