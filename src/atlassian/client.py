"""Shared Atlassian REST transport.

Requests go through `urllib.request` with a per-client configuration object; there is no
process-wide client or credential state. Non-success responses are raised as
`AtlassianAPIError` with the status and a truncated body so callers can surface them verbatim.
"""

from __future__ import annotations

import base64
import http.client
import json
import logging
from dataclasses import dataclass
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.parse import urlencode
from urllib.request import Request, urlopen

logger = logging.getLogger(__name__)

ERROR_BODY_LIMIT = 500


class AtlassianError(RuntimeError):
    """Base class for transport/backend failures."""


class AtlassianAPIError(AtlassianError):
    """Raised on a non-success HTTP status from the backing service."""

    def __init__(self, status: int, reason: str, body: str) -> None:
        self.status = status
        self.reason = reason
        self.body = (body or "")[:ERROR_BODY_LIMIT]
        super().__init__(f"{status} {reason}".strip())


class AtlassianConnectionError(AtlassianError):
    """Raised when the service cannot be reached (DNS, refused connection, timeout)."""


class AtlassianResponseError(AtlassianError):
    """Raised when a success response is not the expected JSON document."""


@dataclass(frozen=True)
class AtlassianConfig:
    """Connection settings for one Atlassian product.

    With `email` set, requests use Basic auth (`email:api_token`, Atlassian Cloud style);
    otherwise `api_token` is sent as a Bearer token (personal access token style).
    """

    base_url: str
    api_token: str
    email: str | None = None
    timeout_s: float = 30.0

    def auth_header(self) -> str:
        if self.email:
            raw = f"{self.email}:{self.api_token}".encode()
            return "Basic " + base64.b64encode(raw).decode("ascii")
        return f"Bearer {self.api_token}"


def _decode(raw: bytes) -> str:
    return raw.decode("utf-8", errors="replace")


class AtlassianClient:
    """Minimal JSON-over-HTTP client bound to one base URL."""

    def __init__(self, config: AtlassianConfig) -> None:
        self.config = config

    @property
    def base_url(self) -> str:
        return self.config.base_url.rstrip("/")

    def url(self, path: str, params: dict[str, Any] | None = None) -> str:
        url = self.base_url + "/" + path.lstrip("/")
        if params:
            url += "?" + urlencode(params)
        return url

    def get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return self._request("GET", self.url(path, params))

    def post_json(self, path: str, payload: dict[str, Any]) -> Any:
        return self._request("POST", self.url(path), payload)

    def _request(self, method: str, url: str, payload: dict[str, Any] | None = None) -> Any:
        headers = {
            "Authorization": self.config.auth_header(),
            "Accept": "application/json",
        }
        data = None
        if payload is not None:
            headers["Content-Type"] = "application/json"
            data = json.dumps(payload).encode()

        req = Request(url, method=method, headers=headers, data=data)

        try:
            with urlopen(req, timeout=self.config.timeout_s) as resp:  # noqa: S310 (configured https base)
                body = resp.read()
        except HTTPError as exc:
            error_body = _decode(exc.read() or b"")
            logger.info("backend error method=%s status=%d", method, exc.code)
            raise AtlassianAPIError(exc.code, str(exc.reason or ""), error_body) from exc
        except (URLError, http.client.HTTPException, OSError) as exc:
            # Covers refused/reset connections, timeouts and early disconnects.
            logger.info("backend unreachable method=%s reason=%s", method, exc)
            raise AtlassianConnectionError(f"Connection error: {exc}") from exc

        try:
            return json.loads(body)
        except json.JSONDecodeError as exc:
            raise AtlassianResponseError("Backend did not return valid JSON") from exc
