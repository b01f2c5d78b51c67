from .diagnostics import Diagnostic, QuickFix, highest_severity, make_diagnostic, severity_rank
from .grammar import MARKER_PREFIXES, MARKER_TYPES, PRIORITY_VOCABULARY, MarkerType
from .scanner import MarkerMatch, iter_markers, scan_markers

__all__ = [
    "Diagnostic",
    "MARKER_PREFIXES",
    "MARKER_TYPES",
    "MarkerMatch",
    "MarkerType",
    "PRIORITY_VOCABULARY",
    "QuickFix",
    "highest_severity",
    "iter_markers",
    "make_diagnostic",
    "scan_markers",
    "severity_rank",
]
