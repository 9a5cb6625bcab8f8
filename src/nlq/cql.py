"""Problem-description to CQL compiler for troubleshooting and how-to pages.

Unlike the issue compiler, every vocabulary group here is unconditional: the description is
always searched as literal text, and the title/label groups bias the ranking pool toward
solution-style pages. Only the space restriction depends on caller input.
"""

from __future__ import annotations

from collections.abc import Sequence

from src.nlq.dictionaries import SOLUTION_DEFAULT_LABELS, SOLUTION_TITLE_KEYWORDS
from src.query.builder import CompiledQuery, clamp_limit, compose, dedupe, or_group, text_clause
from src.query.fields import (
    CONTENT_LABEL_FIELD,
    CONTENT_LIMIT_DEFAULT,
    CONTENT_LIMIT_MAX,
    CONTENT_LIMIT_MIN,
    CONTENT_ORDER_BY,
    CONTENT_SPACE_FIELD,
    CONTENT_TITLE_FIELD,
    CONTENT_TYPE_PAGE,
)


def _content_limit(limit: int | None) -> int:
    return clamp_limit(
        limit,
        default=CONTENT_LIMIT_DEFAULT,
        minimum=CONTENT_LIMIT_MIN,
        maximum=CONTENT_LIMIT_MAX,
    )


def solution_conditions(
        issue_description: str,
        spaces: Sequence[str] | None = None,
        labels: Sequence[str] | None = None,
) -> list[str]:
    """Build the ordered CQL fragments for a solution search."""

    conditions = [CONTENT_TYPE_PAGE, text_clause(issue_description.strip())]

    title_group = or_group(CONTENT_TITLE_FIELD, "~", SOLUTION_TITLE_KEYWORDS)
    if title_group:
        conditions.append(title_group)

    # Caller labels first, then the default vocabulary.
    label_group = or_group(
        CONTENT_LABEL_FIELD,
        "=",
        dedupe([*(labels or []), *SOLUTION_DEFAULT_LABELS]),
    )
    if label_group:
        conditions.append(label_group)

    space_group = or_group(CONTENT_SPACE_FIELD, "=", dedupe(spaces or []))
    if space_group:
        conditions.append(space_group)

    return conditions


def compile_content_solution_query(
        issue_description: str,
        spaces: Sequence[str] | None = None,
        labels: Sequence[str] | None = None,
        limit: int | None = None,
) -> CompiledQuery:
    """Compile a described problem into a troubleshooting-biased CQL query.

    Empty `spaces`/`labels` produce the same query as omitting them.
    """

    return CompiledQuery(
        query=compose(solution_conditions(issue_description, spaces, labels), CONTENT_ORDER_BY),
        limit=_content_limit(limit),
    )


def compile_content_search_query(query: str, limit: int | None = None) -> CompiledQuery:
    """Plain keyword search over all content."""

    return CompiledQuery(query=text_clause(query.strip()), limit=_content_limit(limit))
