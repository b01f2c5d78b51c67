from __future__ import annotations

import functools
import logging
from typing import Any, Callable, TypeVar

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def guarded(default: Any = None) -> Callable[[F], F]:
    """Turn any exception raised by the wrapped validator into ``default``."""

    def _decorate(fn: F) -> F:
        @functools.wraps(fn)
        def _wrapper(*args, **kwargs):
            try:
                return fn(*args, **kwargs)
            except Exception:
                logger.debug("%s failed", fn.__name__, exc_info=True)
                return default() if callable(default) else default

        return _wrapper  # type: ignore[return-value]

    return _decorate


def as_text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def as_offset(start: Any) -> int:
    try:
        return max(0, int(start))
    except Exception:
        return 0
