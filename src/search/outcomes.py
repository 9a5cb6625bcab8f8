"""Search outcome values.

Every search path returns exactly one `SearchOutcome`; success, empty results and each error
class are distinguished by `kind`, and all of them carry a display-ready `summary`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from src.atlassian.client import AtlassianAPIError, AtlassianError
from src.search.results import IssueDetail, PageDetail, ResultItem


class OutcomeKind(StrEnum):
    """Outcome families returned to integration surfaces."""

    results = "results"
    record = "record"
    no_results = "no_results"
    failure = "failure"
    rejected = "rejected"
    unresolved = "unresolved"


@dataclass(frozen=True)
class SearchOutcome:
    """Result of one search or fetch call."""

    kind: OutcomeKind
    summary: str
    items: tuple[ResultItem, ...] = ()
    record: IssueDetail | PageDetail | None = None
    query: str | None = None
    status_code: int | None = None
    error_body: str = ""

    @property
    def ok(self) -> bool:
        return self.kind in {OutcomeKind.results, OutcomeKind.record, OutcomeKind.no_results}


def found(items: list[ResultItem], *, summary: str, query: str | None = None) -> SearchOutcome:
    return SearchOutcome(kind=OutcomeKind.results, summary=summary, items=tuple(items), query=query)


def fetched(record: IssueDetail | PageDetail, *, summary: str) -> SearchOutcome:
    return SearchOutcome(kind=OutcomeKind.record, summary=summary, record=record)


def nothing_found(summary: str, *, query: str | None = None) -> SearchOutcome:
    return SearchOutcome(kind=OutcomeKind.no_results, summary=summary, query=query)


def rejected(summary: str) -> SearchOutcome:
    return SearchOutcome(kind=OutcomeKind.rejected, summary=summary)


def unresolved(summary: str) -> SearchOutcome:
    return SearchOutcome(kind=OutcomeKind.unresolved, summary=summary)


def failed(action: str, exc: AtlassianError, *, query: str | None = None) -> SearchOutcome:
    """Failure outcome from a transport/backend exception.

    HTTP failures keep the status and the (already truncated) response body.
    """

    if isinstance(exc, AtlassianAPIError):
        summary = f"Failed to {action}: {exc.status} {exc.reason}".rstrip()
        if exc.body:
            summary += f"\n{exc.body}"
        return SearchOutcome(
            kind=OutcomeKind.failure,
            summary=summary,
            query=query,
            status_code=exc.status,
            error_body=exc.body,
        )

    return SearchOutcome(
        kind=OutcomeKind.failure,
        summary=f"Failed to {action}: {exc}",
        query=query,
    )
