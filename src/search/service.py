"""Search services: validate -> compile -> execute -> shape.

Each function is one independent request/response unit. Input, backend and reference errors
are converted into `SearchOutcome` values here; nothing below this boundary is allowed to raise
past it for expected failure classes.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from time import monotonic

from pydantic import ValidationError

from src.atlassian.client import AtlassianError
from src.atlassian.confluence import ConfluenceClient, PageReferenceError, resolve_page_id
from src.atlassian.jira import JiraClient
from src.nlq.cql import compile_content_search_query, compile_content_solution_query
from src.nlq.jql import (
    compile_issue_query,
    compile_issue_status_query,
    compile_issue_text_query,
    passthrough_issue_query,
)
from src.nlq.schema import (
    ContentSearchRequest,
    IssueKeyRequest,
    IssuePromptRequest,
    IssueQueryRequest,
    PageRequest,
    SolutionSearchRequest,
)
from src.query.builder import CompiledQuery
from src.search import outcomes
from src.search.outcomes import SearchOutcome
from src.search.results import map_issue, map_issue_detail, map_page, map_page_detail, shape_results

logger = logging.getLogger(__name__)


def _validation_summary(exc: ValidationError) -> str:
    messages = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        msg = str(err.get("msg", "invalid value")).removeprefix("Value error, ")
        messages.append(f"{loc}: {msg}" if loc else msg)
    return "Invalid request: " + "; ".join(messages)


def _elapsed_ms(started: float) -> int:
    return int((monotonic() - started) * 1000)


def _run_issue_search(jira: JiraClient, compiled: CompiledQuery, *, action: str) -> SearchOutcome:
    started = monotonic()
    try:
        records = jira.search(compiled.query, compiled.limit, compiled.fields)
    except AtlassianError as exc:
        logger.info("issue search failed action=%s latency_ms=%d", action, _elapsed_ms(started))
        return outcomes.failed(action, exc, query=compiled.query)

    items = shape_results(records, map_issue, jira.base_url, compiled.limit)
    logger.info(
        "issue search action=%s results=%d limit=%d latency_ms=%d",
        action,
        len(items),
        compiled.limit,
        _elapsed_ms(started),
    )
    if not items:
        return outcomes.nothing_found("No Jira issues found.", query=compiled.query)
    return outcomes.found(items, summary=f"Found {len(items)} Jira issues.", query=compiled.query)


def _run_content_search(
        confluence: ConfluenceClient,
        compiled: CompiledQuery,
        *,
        action: str,
        subject: str,
) -> SearchOutcome:
    started = monotonic()
    try:
        records = confluence.search(compiled.query, compiled.limit)
    except AtlassianError as exc:
        logger.info("content search failed action=%s latency_ms=%d", action, _elapsed_ms(started))
        return outcomes.failed(action, exc, query=compiled.query)

    items = shape_results(records, map_page, confluence.base_url, compiled.limit)
    logger.info(
        "content search action=%s results=%d limit=%d latency_ms=%d",
        action,
        len(items),
        compiled.limit,
        _elapsed_ms(started),
    )
    if not items:
        return outcomes.nothing_found(
            f'No results found for "{subject}". Try different keywords.',
            query=compiled.query,
        )
    return outcomes.found(
        items,
        summary=f'Found {len(items)} results for "{subject}".',
        query=compiled.query,
    )


def search_issues_nl(
        jira: JiraClient,
        prompt: str,
        max_results: int | None = None,
        fields: Sequence[str] | None = None,
) -> SearchOutcome:
    """Natural-language issue search ("show issues assigned to me last week in ENG")."""

    try:
        req = IssuePromptRequest(prompt=prompt, max_results=max_results, fields=list(fields or []))
    except ValidationError as exc:
        return outcomes.rejected(_validation_summary(exc))

    compiled = compile_issue_query(req.prompt, req.max_results, req.fields)
    return _run_issue_search(jira, compiled, action="search Jira (NL)")


def search_issue_status(
        jira: JiraClient,
        question: str,
        max_results: int | None = None,
        fields: Sequence[str] | None = None,
) -> SearchOutcome:
    """Completion-status question ("is the X task done?")."""

    try:
        req = IssuePromptRequest(
            prompt=question,
            max_results=max_results,
            fields=list(fields or []),
        )
    except ValidationError as exc:
        return outcomes.rejected(_validation_summary(exc))

    compiled = compile_issue_status_query(req.prompt, req.max_results, req.fields)
    return _run_issue_search(jira, compiled, action="search Jira (status)")


def search_issues(
        jira: JiraClient,
        jql: str | None = None,
        query: str | None = None,
        max_results: int | None = None,
        fields: Sequence[str] | None = None,
) -> SearchOutcome:
    """Issue search by raw JQL, or by free text when no JQL is given."""

    try:
        req = IssueQueryRequest(
            jql=jql,
            query=query,
            max_results=max_results,
            fields=list(fields or []),
        )
    except ValidationError as exc:
        return outcomes.rejected(_validation_summary(exc))

    if req.jql:
        compiled = passthrough_issue_query(req.jql, req.max_results, req.fields)
    else:
        compiled = compile_issue_text_query(req.query or "", req.max_results, req.fields)
    return _run_issue_search(jira, compiled, action="search Jira")


def get_issue(jira: JiraClient, key: str) -> SearchOutcome:
    try:
        req = IssueKeyRequest(key=key)
    except ValidationError as exc:
        return outcomes.rejected(_validation_summary(exc))

    issue_key = req.key.upper()
    try:
        record = jira.get_issue(issue_key)
    except AtlassianError as exc:
        return outcomes.failed(f"fetch issue {issue_key}", exc)

    detail = map_issue_detail(record, jira.base_url)
    return outcomes.fetched(detail, summary=f"{detail.key} [{detail.issue_type}] {detail.status}")


def search_content(
        confluence: ConfluenceClient,
        query: str,
        limit: int | None = None,
) -> SearchOutcome:
    """Keyword search over Confluence content."""

    try:
        req = ContentSearchRequest(query=query, limit=limit)
    except ValidationError as exc:
        return outcomes.rejected(_validation_summary(exc))

    compiled = compile_content_search_query(req.query, req.limit)
    return _run_content_search(confluence, compiled, action="search Confluence", subject=req.query)


def search_solutions(
        confluence: ConfluenceClient,
        issue: str,
        spaces: Sequence[str] | None = None,
        labels: Sequence[str] | None = None,
        limit: int | None = None,
) -> SearchOutcome:
    """Find troubleshooting/how-to pages for a described problem."""

    try:
        req = SolutionSearchRequest(
            issue=issue,
            spaces=list(spaces or []),
            labels=list(labels or []),
            limit=limit,
        )
    except ValidationError as exc:
        return outcomes.rejected(_validation_summary(exc))

    compiled = compile_content_solution_query(req.issue, req.spaces, req.labels, req.limit)
    return _run_content_search(
        confluence,
        compiled,
        action="search Confluence solutions",
        subject=req.issue,
    )


def get_page(confluence: ConfluenceClient, url: str) -> SearchOutcome:
    """Fetch a page (body and labels) by its web URL."""

    try:
        req = PageRequest(url=url)
        content_id = resolve_page_id(req.url, confluence.base_url)
    except ValidationError as exc:
        return outcomes.rejected(_validation_summary(exc))
    except PageReferenceError as exc:
        return outcomes.unresolved(str(exc))

    try:
        record = confluence.get_page(content_id)
    except AtlassianError as exc:
        return outcomes.failed(f"fetch page {content_id}", exc)

    detail = map_page_detail(record, confluence.base_url)
    return outcomes.fetched(detail, summary=f"Page: {detail.title}")
