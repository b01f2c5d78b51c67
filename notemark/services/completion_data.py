"""Static completion candidates and category ranks per marker type."""

from __future__ import annotations

from dataclasses import dataclass

from notemark.core.dates import PartialDate, month_name


@dataclass(frozen=True, slots=True)
class CompletionCandidate:
    value: str
    label: str
    description: str | None = None
    category: str | None = None


def _table(rows) -> tuple[CompletionCandidate, ...]:
    return tuple(CompletionCandidate(value, label, description, category) for value, label, description, category in rows)


COLOR_CANDIDATES = _table(
    [
        ("#10b981", "Emerald", "Primary green", "Brand"),
        ("#0891b2", "Cyan", "Primary blue", "Brand"),
        ("#7c3aed", "Violet", "Primary purple", "Brand"),
        ("#dc2626", "Red", "Danger/High priority", "Brand"),
        ("#ea580c", "Orange", "Warning/Medium priority", "Brand"),
        ("#ffffff", "White", "Pure white", "Basic"),
        ("#000000", "Black", "Pure black", "Basic"),
        ("#ef4444", "Red", "Bright red", "Basic"),
        ("#22c55e", "Green", "Bright green", "Basic"),
        ("#3b82f6", "Blue", "Bright blue", "Basic"),
        ("#f59e0b", "Yellow", "Bright yellow", "Basic"),
        ("#8b5cf6", "Purple", "Bright purple", "Basic"),
        ("#06b6d4", "Cyan", "Bright cyan", "Basic"),
        ("#f8fafc", "Gray 50", "Very light gray", "Grays"),
        ("#e2e8f0", "Gray 200", "Light gray", "Grays"),
        ("#94a3b8", "Gray 400", "Medium gray", "Grays"),
        ("#475569", "Gray 600", "Dark gray", "Grays"),
        ("#1e293b", "Gray 800", "Very dark gray", "Grays"),
    ]
)

DATE_CANDIDATES = _table(
    [
        ("today", "Today", "Current date", "Quick"),
        ("tomorrow", "Tomorrow", "Next day", "Quick"),
        ("yesterday", "Yesterday", "Previous day", "Quick"),
        ("monday", "Monday", "Next Monday", "Weekdays"),
        ("tuesday", "Tuesday", "Next Tuesday", "Weekdays"),
        ("wednesday", "Wednesday", "Next Wednesday", "Weekdays"),
        ("thursday", "Thursday", "Next Thursday", "Weekdays"),
        ("friday", "Friday", "Next Friday", "Weekdays"),
        ("saturday", "Saturday", "Next Saturday", "Weekdays"),
        ("sunday", "Sunday", "Next Sunday", "Weekdays"),
        ("week", "Next Week", "One week from now", "Relative"),
        ("month", "Next Month", "One month from now", "Relative"),
        ("next", "Next", "Next occurrence", "Relative"),
        ("last", "Last", "Previous occurrence", "Relative"),
    ]
)

PRIORITY_CANDIDATES = _table(
    [
        ("critical", "Critical", "Drop everything priority", "Priority"),
        ("high", "High Priority", "Urgent task", "Priority"),
        ("medium", "Medium Priority", "Moderate importance", "Priority"),
        ("low", "Low Priority", "Non-urgent task", "Priority"),
        ("urgent", "Urgent", "Needs immediate attention", "Status"),
        ("asap", "ASAP", "As soon as possible", "Status"),
        ("blocked", "Blocked", "Cannot proceed", "Status"),
        ("waiting", "Waiting", "Waiting for something", "Status"),
        ("review", "Review", "Needs review", "Status"),
        ("done", "Done", "Completed", "Status"),
        ("todo", "Todo", "Not started", "Status"),
        ("next", "Next", "Up next", "Status"),
        ("later", "Later", "Future consideration", "Status"),
    ]
)

TAG_CANDIDATES = _table(
    [
        ("meeting", "Meeting", "Meeting-related item", "Work"),
        ("project", "Project", "Project-related", "Work"),
        ("task", "Task", "Specific work task", "Work"),
        ("deadline", "Deadline", "Has a specific deadline", "Work"),
        ("milestone", "Milestone", "Project milestone", "Work"),
        ("review", "Review", "Needs review or approval", "Work"),
        ("research", "Research", "Research required", "Work"),
        ("planning", "Planning", "Planning activity", "Work"),
        ("presentation", "Presentation", "Presentation-related", "Work"),
        ("client", "Client", "Client-related", "Work"),
        ("budget", "Budget", "Budget consideration", "Work"),
        ("training", "Training", "Learning or training", "Work"),
        ("todo", "Todo", "Action item to complete", "Status"),
        ("done", "Done", "Completed item", "Status"),
        ("urgent", "Urgent", "Requires immediate attention", "Status"),
        ("important", "Important", "High importance", "Status"),
        ("blocked", "Blocked", "Waiting on something", "Status"),
        ("waiting", "Waiting", "Waiting for response", "Status"),
        ("progress", "In Progress", "Currently working on", "Status"),
        ("followup", "Follow-up", "Needs follow-up action", "Status"),
        ("on-hold", "On Hold", "Temporarily paused", "Status"),
        ("cancelled", "Cancelled", "No longer needed", "Status"),
        ("idea", "Idea", "Creative or strategic idea", "Content"),
        ("note", "Note", "General note", "Content"),
        ("question", "Question", "Requires clarification", "Content"),
        ("decision", "Decision", "Decision to be made", "Content"),
        ("reference", "Reference", "Reference material", "Content"),
        ("draft", "Draft", "Draft content", "Content"),
        ("personal", "Personal", "Personal item", "Personal"),
        ("health", "Health", "Health-related", "Personal"),
        ("family", "Family", "Family-related", "Personal"),
        ("finance", "Finance", "Financial matter", "Personal"),
        ("travel", "Travel", "Travel-related", "Personal"),
        ("shopping", "Shopping", "Shopping list item", "Personal"),
        ("home", "Home", "Home-related task", "Personal"),
        ("learning", "Learning", "Learning activity", "Development"),
        ("course", "Course", "Course or education", "Development"),
        ("book", "Book", "Book or reading", "Development"),
        ("article", "Article", "Article to read", "Development"),
        ("bug", "Bug", "Bug or issue", "Tech"),
        ("feature", "Feature", "New feature", "Tech"),
        ("improvement", "Improvement", "Enhancement", "Tech"),
        ("documentation", "Documentation", "Documentation work", "Tech"),
        ("testing", "Testing", "Testing activity", "Tech"),
        ("deployment", "Deployment", "Deployment task", "Tech"),
        ("refactor", "Refactor", "Code refactoring", "Tech"),
    ]
)

ASSIGNEE_CANDIDATES = _table(
    [
        ("john", "John", "Assign to John", "Team"),
        ("sarah", "Sarah", "Assign to Sarah", "Team"),
        ("mike", "Mike", "Assign to Mike", "Team"),
        ("jane", "Jane", "Assign to Jane", "Team"),
        ("alex", "Alex", "Assign to Alex", "Team"),
        ("john.doe", "John Doe", "Assign to John Doe", "Team"),
        ("sarah.smith", "Sarah Smith", "Assign to Sarah Smith", "Team"),
        ("manager", "Manager", "Assign to manager", "Roles"),
        ("team-lead", "Team Lead", "Assign to team lead", "Roles"),
        ("developer", "Developer", "Assign to developer", "Roles"),
        ("designer", "Designer", "Assign to designer", "Roles"),
        ("qa", "QA", "Assign to QA team", "Roles"),
        ("product-owner", "Product Owner", "Assign to product owner", "Roles"),
        ("architect", "Architect", "Assign to architect", "Roles"),
        ("support", "Support", "Assign to support team", "Roles"),
        ("frontend", "Frontend Team", "Assign to frontend team", "Teams"),
        ("backend", "Backend Team", "Assign to backend team", "Teams"),
        ("devops", "DevOps Team", "Assign to DevOps team", "Teams"),
        ("design", "Design Team", "Assign to design team", "Teams"),
        ("me", "Me", "Assign to myself", "Special"),
        ("unassigned", "Unassigned", "Remove assignment", "Special"),
        ("anyone", "Anyone", "Anyone can take this", "Special"),
        ("team", "Team", "Assign to entire team", "Special"),
    ]
)

CANDIDATES_BY_TYPE: dict[str, tuple[CompletionCandidate, ...]] = {
    "color": COLOR_CANDIDATES,
    "date": DATE_CANDIDATES,
    "priority": PRIORITY_CANDIDATES,
    "tag": TAG_CANDIDATES,
    "assignee": ASSIGNEE_CANDIDATES,
}

BASE_CATEGORY_RANKS = {
    "Quick": 1,
    "Basic": 2,
    "Common": 3,
    "Advanced": 4,
}

CATEGORY_RANKS: dict[str, dict[str, int]] = {
    "date": {"Days": 0, "Quick": 1, "Weekdays": 2, "Relative": 3, "Months": 4, "Periods": 5},
    "priority": {"Priority": 1, "Status": 2},
    "color": {"Brand": 1, "Basic": 2, "Grays": 3},
    "tag": {"Status": 1, "Work": 2, "Content": 3, "Personal": 4, "Development": 5, "Tech": 6},
    "assignee": {"Special": 1, "Roles": 2, "Teams": 3, "Team": 4},
}

UNRANKED_CATEGORY = 10


def category_rank(category: str | None, marker_type: str) -> int:
    if not category:
        return UNRANKED_CATEGORY
    ranks = CATEGORY_RANKS.get(marker_type, {})
    if category in ranks:
        return ranks[category]
    return BASE_CATEGORY_RANKS.get(category, UNRANKED_CATEGORY)


def candidates_for(marker_type: str) -> tuple[CompletionCandidate, ...]:
    return CANDIDATES_BY_TYPE.get(marker_type, ())


def day_candidates(partial: PartialDate) -> tuple[CompletionCandidate, ...]:
    """Every valid day of a partially typed ``YYYY-MM-`` date."""
    if not partial.is_valid or not partial.days_in_month:
        return ()
    month = partial.month.zfill(2)
    name = month_name(int(partial.month))
    return tuple(
        CompletionCandidate(
            value=f"{partial.year}-{month}-{day:02d}",
            label=str(day),
            description=f"{name} {day}, {partial.year}",
            category="Days",
        )
        for day in range(1, partial.days_in_month + 1)
    )
