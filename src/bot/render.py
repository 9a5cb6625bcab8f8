"""Plain-text rendering of search outcomes for chat replies."""

from __future__ import annotations

from src.search.outcomes import SearchOutcome
from src.search.results import IssueDetail, PageDetail, ResultItem

# Telegram rejects messages longer than 4096 characters.
MAX_REPLY_CHARS = 4000
_TRUNCATION_MARK = "\n…"
EXCERPT_CHARS = 200


def _format_item(item: ResultItem) -> str:
    lines = [
        f"• {item.identifier} [{item.category}] | {item.status} | {item.actor}",
        f"  {item.title}",
    ]
    if item.excerpt:
        excerpt = item.excerpt
        if len(excerpt) > EXCERPT_CHARS:
            excerpt = excerpt[:EXCERPT_CHARS].rstrip() + "…"
        lines.append(f"  {excerpt}")
    lines.append(f"  {item.url}")
    return "\n".join(lines)


def _format_issue(detail: IssueDetail) -> str:
    return "\n".join(
        [
            f"{detail.key} [{detail.issue_type}] {detail.status}",
            f"Assignee: {detail.assignee} | Reporter: {detail.reporter}",
            f"Summary: {detail.summary}",
            f"URL: {detail.url}",
        ]
    )


def _format_page(detail: PageDetail) -> str:
    return "\n".join(
        [
            f"Page: {detail.title}",
            f"URL: {detail.url}",
            f"Space: {detail.space}",
            f"Last Modified: {detail.last_modified}",
            f"Labels: {', '.join(detail.labels) or 'None'}",
        ]
    )


def format_outcome(outcome: SearchOutcome) -> str:
    """Render any outcome kind; the summary line always comes first."""

    if isinstance(outcome.record, IssueDetail):
        return _format_issue(outcome.record)
    if isinstance(outcome.record, PageDetail):
        return _format_page(outcome.record)

    if not outcome.items:
        return outcome.summary
    return outcome.summary + "\n\n" + "\n\n".join(_format_item(i) for i in outcome.items)


def truncate_reply(text: str) -> str:
    value = (text or "").strip()
    if len(value) <= MAX_REPLY_CHARS:
        return value
    return value[: MAX_REPLY_CHARS - len(_TRUNCATION_MARK)] + _TRUNCATION_MARK
