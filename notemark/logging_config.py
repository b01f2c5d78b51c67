"""
Logging configuration for notemark.

Quiet by default; set NOTEMARK_VERBOSE=1 (or pass --verbose) for debug output.
"""

import logging
import os
import sys

VERBOSE_ENV = "NOTEMARK_VERBOSE"

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _stderr_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%H:%M:%S"))
    return handler


def _has_stderr_handler(logger: logging.Logger) -> bool:
    return any(
        isinstance(h, logging.StreamHandler) and getattr(h, "stream", None) is sys.stderr
        for h in logger.handlers
    )


def configure_logging(verbose: bool = False):
    """
    Configure the ``notemark`` logger.

    Warnings and errors always reach stderr. Debug output, including the
    tracebacks of markers that failed to validate, only shows when verbose.

    Args:
        verbose: If True, or if NOTEMARK_VERBOSE is set, enable debug mode.
    """
    if verbose or os.environ.get(VERBOSE_ENV, "").strip() not in ("", "0"):
        enable_debug_mode()
        return

    logger = logging.getLogger("notemark")
    logger.setLevel(logging.WARNING)
    if not _has_stderr_handler(logger):
        logger.addHandler(_stderr_handler(logging.WARNING))


def enable_debug_mode():
    """Enable debug-level logging to stderr."""
    logger = logging.getLogger("notemark")
    logger.setLevel(logging.DEBUG)
    for handler in logger.handlers:
        handler.setLevel(logging.DEBUG)
    if not _has_stderr_handler(logger):
        logger.addHandler(_stderr_handler(logging.DEBUG))
