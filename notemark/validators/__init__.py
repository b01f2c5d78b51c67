from .color_validator import validate_color
from .date_validator import validate_date
from .incomplete import find_incomplete_patterns
from .orchestrator import has_errors, validate, validate_marker
from .pattern_validators import validate_assignee, validate_priority, validate_tag
from .suggestions import find_suggestions

__all__ = [
    "find_incomplete_patterns",
    "find_suggestions",
    "has_errors",
    "validate",
    "validate_assignee",
    "validate_color",
    "validate_date",
    "validate_marker",
    "validate_priority",
    "validate_tag",
]
