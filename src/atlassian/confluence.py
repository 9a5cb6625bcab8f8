"""Confluence Cloud REST client (CQL search and page fetch)."""

from __future__ import annotations

from typing import Any
from urllib.parse import parse_qs, quote, urljoin, urlparse

from src.atlassian.client import AtlassianClient, AtlassianResponseError

SEARCH_PATH = "/wiki/rest/api/content/search"
SEARCH_EXPAND = "space,version"
PAGE_PATH = "/wiki/rest/api/content/{content_id}"
PAGE_EXPAND = "body.storage,version,history,space,metadata.labels"

PAGE_REFERENCE_HINT = (
    "Unable to extract a Confluence page ID from the provided URL. Please provide a URL "
    "containing either '?pageId=...' or '/pages/{id}/...'."
)


class PageReferenceError(ValueError):
    """Raised when a page URL carries no recognizable content identifier."""


def _is_content_id(value: str) -> bool:
    return value.isascii() and value.isdigit()


def resolve_page_id(url: str, base_url: str = "") -> str:
    """Extract the numeric content ID from a Confluence page URL.

    Supported forms:
        - `.../viewpage.action?pageId=12345`
        - `.../spaces/ENG/pages/12345/Some+Title`

    Raises:
        PageReferenceError: If neither form is present.
    """

    value = (url or "").strip()
    if not value:
        raise PageReferenceError(PAGE_REFERENCE_HINT)

    parsed = urlparse(urljoin(base_url.rstrip("/") + "/", value) if base_url else value)

    page_ids = parse_qs(parsed.query).get("pageId") or []
    if page_ids:
        page_id = page_ids[0].strip()
        if not _is_content_id(page_id):
            raise PageReferenceError(PAGE_REFERENCE_HINT)
        return page_id

    parts = [p for p in parsed.path.split("/") if p]
    for idx, part in enumerate(parts[:-1]):
        if part == "pages" and _is_content_id(parts[idx + 1]):
            return parts[idx + 1]

    raise PageReferenceError(PAGE_REFERENCE_HINT)


class ConfluenceClient(AtlassianClient):
    """Content-query backend: accepts CQL plus a result cap."""

    def search(self, cql: str, limit: int) -> list[dict[str, Any]]:
        data = self.get_json(SEARCH_PATH, {"cql": cql, "limit": limit, "expand": SEARCH_EXPAND})
        if not isinstance(data, dict):
            raise AtlassianResponseError("Unexpected Confluence search response format")

        results = data.get("results")
        return results if isinstance(results, list) else []

    def get_page(self, content_id: str) -> dict[str, Any]:
        path = PAGE_PATH.format(content_id=quote(content_id, safe=""))
        data = self.get_json(path, {"expand": PAGE_EXPAND})
        if not isinstance(data, dict):
            raise AtlassianResponseError("Unexpected Confluence page response format")
        return data
