"""Inline marker validation and completion for note/task input."""

from notemark.core.diagnostics import Diagnostic, QuickFix
from notemark.services.completion_source import CompletionResult, CompletionSource
from notemark.settings_schema import NormalizedMarkerConfig
from notemark.validators.orchestrator import has_errors, validate

__version__ = "0.1.0"

__all__ = [
    "CompletionResult",
    "CompletionSource",
    "Diagnostic",
    "NormalizedMarkerConfig",
    "QuickFix",
    "has_errors",
    "validate",
]
