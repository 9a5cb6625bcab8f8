"""Allowlisted JQL/CQL identifiers.

Every field name, function call and ordering clause referenced by the compilers comes from here;
no user-provided identifier is interpolated except the upper-cased project key.
"""

from __future__ import annotations

ISSUE_ORDER_BY = "ORDER BY updated DESC"
CONTENT_ORDER_BY = "ORDER BY lastmodified DESC"

TEXT_FIELD = "text"
ISSUE_LABEL_FIELD = "labels"
ISSUE_UPDATED_FIELD = "updated"

CONTENT_TYPE_PAGE = "type = page"
CONTENT_TITLE_FIELD = "title"
CONTENT_LABEL_FIELD = "label"
CONTENT_SPACE_FIELD = "space"

DEFAULT_ISSUE_FIELDS: tuple[str, ...] = (
    "summary",
    "status",
    "assignee",
    "issuetype",
    "priority",
    "updated",
)

ISSUE_LIMIT_DEFAULT = 10
ISSUE_LIMIT_MIN = 1
ISSUE_LIMIT_MAX = 50

CONTENT_LIMIT_DEFAULT = 5
CONTENT_LIMIT_MIN = 1
CONTENT_LIMIT_MAX = 20
