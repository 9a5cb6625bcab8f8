"""Rules-based natural-language to JQL compiler.

The compiler is a fixed table of matchers evaluated in order. Each matcher inspects the prompt
and contributes zero or more condition fragments; all fragments are AND-ed. The table is the
whole behavior: there is no scoring, no mutual exclusion and no model in the loop.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from src.nlq.dates import extract_date_bounds
from src.nlq.dictionaries import (
    ACTOR_TRIGGERS,
    ISSUE_TYPES,
    PRIORITY_TRIGGERS,
    RECENCY_TRIGGERS,
    STATUS_TRIGGERS,
    THIS_MONTH_TRIGGER,
    issue_type_label,
)
from src.nlq.normalize import PromptView, extract_quoted_phrases, prompt_view
from src.nlq.schema import FallbackRule
from src.query.builder import (
    CompiledQuery,
    clamp_limit,
    comparison,
    compose,
    dedupe,
    or_group,
    text_clause,
)
from src.query.fields import (
    DEFAULT_ISSUE_FIELDS,
    ISSUE_LABEL_FIELD,
    ISSUE_LIMIT_DEFAULT,
    ISSUE_LIMIT_MAX,
    ISSUE_LIMIT_MIN,
    ISSUE_ORDER_BY,
    ISSUE_UPDATED_FIELD,
)

Extractor = Callable[[PromptView], list[str]]


@dataclass(frozen=True)
class Matcher:
    """One row of the extraction table."""

    name: str
    extract: Extractor


_EXPLICIT_PROJECT_RE = re.compile(
    r"\b(?:in\s+)?project\s*[:=]?\s*([A-Z][A-Z0-9_]+)", flags=re.IGNORECASE
)
# Case-sensitive on purpose: "in ENG" names a project key, "in progress" does not.
_PROJECT_KEY_HINT_RE = re.compile(r"\bin\s+([A-Z][A-Z0-9_]{1,9})\b")
_LAST_N_DAYS_RE = re.compile(r"\blast\s+(\d{1,2})\s+days?\b")
_LABEL_BLOCK_RE = re.compile(r"\blabels?\s*[:=]\s*([\w, -]+)", flags=re.IGNORECASE)
_LABEL_SPLIT_RE = re.compile(r"[,\s]+")


def _flag(name: str, pattern: str, fragment: str) -> Matcher:
    """Matcher that emits a constant fragment when `pattern` occurs in the lowercase prompt."""

    regex = re.compile(pattern)

    def extract(view: PromptView) -> list[str]:
        return [fragment] if regex.search(view.lower) else []

    return Matcher(name=name, extract=extract)


def _project(view: PromptView) -> list[str]:
    match = _EXPLICIT_PROJECT_RE.search(view.original)
    if match is None:
        match = _PROJECT_KEY_HINT_RE.search(view.original)
    if match is None:
        return []
    return [f"project = {match.group(1).upper()}"]


def _last_n_days(view: PromptView) -> list[str]:
    # Counts are passed through verbatim; no upper bound is enforced here.
    match = _LAST_N_DAYS_RE.search(view.lower)
    if match is None:
        return []
    return [f"{ISSUE_UPDATED_FIELD} >= -{match.group(1)}d"]


def _explicit_dates(view: PromptView) -> list[str]:
    return [
        comparison(ISSUE_UPDATED_FIELD, bound.op, bound.day.isoformat())
        for bound in extract_date_bounds(view.lower)
    ]


def _labels(view: PromptView) -> list[str]:
    match = _LABEL_BLOCK_RE.search(view.original)
    if match is None:
        return []
    labels = dedupe(_LABEL_SPLIT_RE.split(match.group(1)))
    group = or_group(ISSUE_LABEL_FIELD, "=", labels)
    return [group] if group else []


def _quoted_phrases(view: PromptView) -> list[str]:
    return [text_clause(phrase) for phrase in extract_quoted_phrases(view.original)]


ISSUE_MATCHERS: tuple[Matcher, ...] = (
    *(_flag(f"actor:{fragment}", pattern, fragment) for pattern, fragment in ACTOR_TRIGGERS),
    *(_flag(f"status:{fragment}", pattern, fragment) for pattern, fragment in STATUS_TRIGGERS),
    Matcher(name="project", extract=_project),
    *(
        _flag(f"type:{word}", rf"\b{word}\b", f'issuetype = "{issue_type_label(word)}"')
        for word in ISSUE_TYPES
    ),
    *(
        _flag(f"priority:{label}", pattern, f'priority = "{label}"')
        for pattern, label in PRIORITY_TRIGGERS
    ),
    *(_flag(f"recency:{fragment}", pattern, fragment) for pattern, fragment in RECENCY_TRIGGERS),
    Matcher(name="recency:last_n_days", extract=_last_n_days),
    _flag("recency:this_month", *THIS_MONTH_TRIGGER),
    Matcher(name="dates:explicit", extract=_explicit_dates),
    Matcher(name="labels", extract=_labels),
    Matcher(name="text:quoted", extract=_quoted_phrases),
)


def extract_conditions(prompt: str, matchers: Sequence[Matcher] = ISSUE_MATCHERS) -> list[str]:
    """Run every matcher over the prompt and collect fragments in table order."""

    view = prompt_view(prompt)
    conditions: list[str] = []
    for matcher in matchers:
        conditions.extend(matcher.extract(view))
    return conditions


def augment_with_fallback(
        conditions: list[str],
        prompt: str,
        *,
        rule: FallbackRule = FallbackRule.no_conditions,
) -> list[str]:
    """Append the whole-prompt full-text fragment if the selected rule calls for it.

    Returns a new list; `conditions` is left untouched.
    """

    has_quoted = bool(extract_quoted_phrases(prompt))
    if rule == FallbackRule.no_conditions:
        needed = not conditions
    else:
        needed = not has_quoted

    fallback = text_clause((prompt or "").strip())
    if not needed or fallback in conditions:
        return list(conditions)
    return [*conditions, fallback]


def _issue_limit(max_results: int | None) -> int:
    return clamp_limit(
        max_results,
        default=ISSUE_LIMIT_DEFAULT,
        minimum=ISSUE_LIMIT_MIN,
        maximum=ISSUE_LIMIT_MAX,
    )


def _issue_fields(fields: Sequence[str] | None) -> tuple[str, ...]:
    selected = dedupe(fields or [])
    return tuple(selected) if selected else DEFAULT_ISSUE_FIELDS


def compile_issue_query(
        prompt: str,
        max_results: int | None = None,
        fields: Sequence[str] | None = None,
        *,
        fallback: FallbackRule = FallbackRule.no_conditions,
) -> CompiledQuery:
    """Compile a natural-language prompt into JQL.

    Example:
        "show issues assigned to me last week in ENG" ->
        `assignee = currentUser() AND project = ENG AND updated >= -1w ORDER BY updated DESC`
    """

    conditions = augment_with_fallback(extract_conditions(prompt), prompt, rule=fallback)
    return CompiledQuery(
        query=compose(conditions, ISSUE_ORDER_BY),
        limit=_issue_limit(max_results),
        fields=_issue_fields(fields),
    )


def compile_issue_status_query(
        prompt: str,
        max_results: int | None = None,
        fields: Sequence[str] | None = None,
) -> CompiledQuery:
    """Compile a completion-status question ("is the X task done?").

    Status/type conditions are kept and the whole question is always added as full text unless it
    quotes a phrase, so the query stays anchored to the item being asked about.
    """

    return compile_issue_query(
        prompt,
        max_results,
        fields,
        fallback=FallbackRule.no_quoted_phrase,
    )


def compile_issue_text_query(
        query: str,
        max_results: int | None = None,
        fields: Sequence[str] | None = None,
) -> CompiledQuery:
    """Free-text issue search across all projects."""

    return CompiledQuery(
        query=compose([text_clause(query.strip())], ISSUE_ORDER_BY),
        limit=_issue_limit(max_results),
        fields=_issue_fields(fields),
    )


def passthrough_issue_query(
        jql: str,
        max_results: int | None = None,
        fields: Sequence[str] | None = None,
) -> CompiledQuery:
    """Wrap caller-authored JQL without modification (limit and fields still validated)."""

    return CompiledQuery(query=jql, limit=_issue_limit(max_results), fields=_issue_fields(fields))
