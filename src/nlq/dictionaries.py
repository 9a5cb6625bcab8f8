"""English vocabularies for the issue and content compilers.

These tables are the whole behavioral surface of the matchers and should remain small and
deterministic. Order matters only for reproducible fragment order, never for semantics.
"""

from __future__ import annotations

ACTOR_TRIGGERS: tuple[tuple[str, str], ...] = (
    (r"\bassigned to me\b", "assignee = currentUser()"),
    (r"\breported by me\b", "reporter = currentUser()"),
    (r"\bunassigned\b", "assignee is EMPTY"),
)

STATUS_TRIGGERS: tuple[tuple[str, str], ...] = (
    (r"\b(?:open|unresolved|not done|to ?do)\b", "resolution = Unresolved"),
    (r"\b(?:done|closed|resolved)\b", "statusCategory = Done"),
    (r"\bin progress\b", 'statusCategory = "In Progress"'),
)

ISSUE_TYPES: tuple[str, ...] = ("bug", "story", "task")

# Fixed precedence; a prompt can trigger several entries (no mutual exclusion).
PRIORITY_TRIGGERS: tuple[tuple[str, str], ...] = (
    (r"\bcritical\b", "Critical"),
    (r"\bblocker\b", "Blocker"),
    (r"\bhighest\b|\bp1\b", "Highest"),
    (r"\bhigh\b|\bp2\b", "High"),
)

RECENCY_TRIGGERS: tuple[tuple[str, str], ...] = (
    (r"\btoday\b", "updated >= startOfDay()"),
    (r"\byesterday\b", "updated >= startOfDay(-1d) AND updated < startOfDay()"),
    (r"\b(?:last|past)\s+week\b", "updated >= -1w"),
)

THIS_MONTH_TRIGGER: tuple[str, str] = (r"\bthis month\b", "updated >= startOfMonth()")

SOLUTION_TITLE_KEYWORDS: tuple[str, ...] = (
    "troubleshoot",
    "solution",
    "resolve",
    "error",
    "fix",
    "how to",
    "how-to",
    "setup",
    "install",
    "configure",
    "guide",
)

SOLUTION_DEFAULT_LABELS: tuple[str, ...] = (
    "troubleshooting",
    "how-to",
    "kb-how-to-article",
    "resolution",
    "fix",
    "setup",
    "install",
    "configure",
)


def issue_type_label(word: str) -> str:
    """Title-case an issue type word (`bug` -> `Bug`)."""

    return word.strip().title()
