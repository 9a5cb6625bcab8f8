"""Raw backend record -> normalized result mapping.

Every optional field gets an explicit fallback value, so callers never see `None` for a
display field. Mapping is pure; base URLs are passed in by the caller.
"""

from __future__ import annotations

import html
import re
from collections.abc import Callable, Iterable
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field

UNASSIGNED = "Unassigned"
UNTITLED = "Untitled"
UNKNOWN_SPACE = "Unknown space"
UNKNOWN = "Unknown"

_TAG_RE = re.compile(r"<[^>]+>")
_HIGHLIGHT_RE = re.compile(r"@@@(?:end)?hl@@@")
_MULTISPACE_RE = re.compile(r"\s+")


class ResultItem(BaseModel):
    """Backend-agnostic search hit."""

    model_config = ConfigDict(frozen=True)

    identifier: str
    title: str
    category: str
    status: str
    actor: str
    url: str
    excerpt: str = ""
    updated: str = ""


class IssueDetail(BaseModel):
    """A single issue fetched by key."""

    model_config = ConfigDict(frozen=True)

    key: str
    summary: str
    issue_type: str
    status: str
    assignee: str
    reporter: str
    url: str
    description_html: str = ""


class PageDetail(BaseModel):
    """A single page fetched by content ID."""

    model_config = ConfigDict(frozen=True)

    content_id: str
    title: str
    url: str
    space: str
    last_modified: str
    labels: list[str] = Field(default_factory=list)
    body_html: str = ""


def _dig(record: Any, *path: str) -> Any:
    value = record
    for key in path:
        if not isinstance(value, dict):
            return None
        value = value.get(key)
    return value


def _text(value: Any, fallback: str) -> str:
    if value is None:
        return fallback
    text = str(value).strip()
    return text or fallback


def issue_url(base_url: str, key: str) -> str:
    """Browser URL of an issue."""

    return f"{base_url.rstrip('/')}/browse/{key}"


def page_url(base_url: str, webui: str) -> str:
    """Browser URL of a page from its `_links.webui` path."""

    return f"{base_url.rstrip('/')}/wiki{webui}"


def plain_excerpt(value: Any) -> str:
    """Strip markup and search highlight markers from an HTML-bearing excerpt."""

    if not value:
        return ""
    text = _HIGHLIGHT_RE.sub("", str(value))
    text = html.unescape(_TAG_RE.sub(" ", text))
    return _MULTISPACE_RE.sub(" ", text).strip()


def map_issue(record: dict[str, Any], base_url: str) -> ResultItem:
    key = _text(record.get("key"), UNKNOWN)
    return ResultItem(
        identifier=key,
        title=_text(_dig(record, "fields", "summary"), UNTITLED),
        category=_text(_dig(record, "fields", "issuetype", "name"), UNKNOWN),
        status=_text(_dig(record, "fields", "status", "name"), UNKNOWN),
        actor=_text(_dig(record, "fields", "assignee", "displayName"), UNASSIGNED),
        url=issue_url(base_url, key),
        excerpt="",
        updated=_text(_dig(record, "fields", "updated"), ""),
    )


def map_page(record: dict[str, Any], base_url: str) -> ResultItem:
    webui = _text(_dig(record, "_links", "webui"), "")
    return ResultItem(
        identifier=_text(record.get("id"), UNKNOWN),
        title=_text(record.get("title"), UNTITLED),
        category=_text(_dig(record, "space", "name"), UNKNOWN_SPACE),
        status=_text(record.get("type"), "page"),
        actor=_text(_dig(record, "version", "by", "displayName"), UNKNOWN),
        url=page_url(base_url, webui),
        excerpt=plain_excerpt(record.get("excerpt")),
        updated=_text(_dig(record, "version", "when"), ""),
    )


def map_issue_detail(record: dict[str, Any], base_url: str) -> IssueDetail:
    key = _text(record.get("key"), UNKNOWN)
    return IssueDetail(
        key=key,
        summary=_text(_dig(record, "fields", "summary"), UNTITLED),
        issue_type=_text(_dig(record, "fields", "issuetype", "name"), UNKNOWN),
        status=_text(_dig(record, "fields", "status", "name"), UNKNOWN),
        assignee=_text(_dig(record, "fields", "assignee", "displayName"), UNASSIGNED),
        reporter=_text(_dig(record, "fields", "reporter", "displayName"), UNKNOWN),
        url=issue_url(base_url, key),
        description_html=_text(_dig(record, "renderedFields", "description"), ""),
    )


def map_page_detail(record: dict[str, Any], base_url: str) -> PageDetail:
    label_results = _dig(record, "metadata", "labels", "results") or []
    labels = [
        str(label["name"])
        for label in label_results
        if isinstance(label, dict) and label.get("name")
    ]
    webui = _text(_dig(record, "_links", "webui"), "")
    return PageDetail(
        content_id=_text(record.get("id"), UNKNOWN),
        title=_text(record.get("title"), UNTITLED),
        url=page_url(base_url, webui),
        space=_text(_dig(record, "space", "name"), UNKNOWN_SPACE),
        last_modified=_text(_dig(record, "version", "when"), UNKNOWN),
        labels=labels,
        body_html=_text(_dig(record, "body", "storage", "value"), ""),
    )


T = TypeVar("T")


def shape_results(
        records: Iterable[Any],
        mapper: Callable[[dict[str, Any], str], T],
        base_url: str,
        limit: int,
) -> list[T]:
    """Map raw records (skipping non-objects) and truncate to `limit`."""

    shaped: list[T] = []
    for record in records:
        if len(shaped) >= limit:
            break
        if not isinstance(record, dict):
            continue
        shaped.append(mapper(record, base_url))
    return shaped
