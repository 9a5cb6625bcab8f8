"""Jira Cloud REST client (issue search and issue fetch)."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any
from urllib.parse import quote

from src.atlassian.client import AtlassianClient, AtlassianResponseError

SEARCH_PATH = "/rest/api/3/search/jql"
ISSUE_PATH = "/rest/api/3/issue/{key}"
ISSUE_EXPAND = "renderedFields,changelog"


class JiraClient(AtlassianClient):
    """Issue-query backend: accepts JQL plus a result cap and a field selection."""

    def search(self, jql: str, max_results: int, fields: Sequence[str]) -> list[dict[str, Any]]:
        """Run a JQL search and return the raw issue records."""

        data = self.post_json(
            SEARCH_PATH,
            {"jql": jql, "maxResults": max_results, "fields": list(fields)},
        )
        if not isinstance(data, dict):
            raise AtlassianResponseError("Unexpected Jira search response format")

        issues = data.get("issues")
        return issues if isinstance(issues, list) else []

    def get_issue(self, key: str) -> dict[str, Any]:
        data = self.get_json(ISSUE_PATH.format(key=quote(key, safe="")), {"expand": ISSUE_EXPAND})
        if not isinstance(data, dict):
            raise AtlassianResponseError("Unexpected Jira issue response format")
        return data
