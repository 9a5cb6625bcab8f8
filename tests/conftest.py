"""Pytest configuration.

The repository uses a flat `src/` layout; this conftest makes `import src...` work when running
pytest without installing the package, and provides a fake `urlopen` so client tests never touch
the network.
"""

from __future__ import annotations

import io
import json
import sys
from pathlib import Path
from typing import Any
from urllib.error import HTTPError
from urllib.request import Request

import pytest

# Ensure `import src...` works when running pytest without installing the package.
REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))


class FakeResponse:
    """Context-manager stand-in for the object returned by `urlopen`."""

    def __init__(self, body: bytes) -> None:
        self._body = body

    def read(self) -> bytes:
        return self._body

    def __enter__(self) -> FakeResponse:
        return self

    def __exit__(self, *exc: object) -> bool:
        return False


class FakeTransport:
    """Records outgoing requests and replays queued responses or errors in order."""

    def __init__(self) -> None:
        self.requests: list[Request] = []
        self.timeouts: list[float | None] = []
        self._replies: list[Any] = []

    def reply_json(self, payload: Any) -> None:
        self._replies.append(FakeResponse(json.dumps(payload).encode()))

    def reply_raw(self, body: bytes) -> None:
        self._replies.append(FakeResponse(body))

    def reply_http_error(self, status: int, reason: str, body: str = "") -> None:
        self._replies.append(
            HTTPError("https://example.invalid", status, reason, None, io.BytesIO(body.encode()))
        )

    def reply_error(self, exc: BaseException) -> None:
        self._replies.append(exc)

    def __call__(self, req: Request, timeout: float | None = None) -> FakeResponse:
        self.requests.append(req)
        self.timeouts.append(timeout)
        reply = self._replies.pop(0)
        if isinstance(reply, BaseException):
            raise reply
        return reply

    def last_json(self) -> Any:
        return json.loads(self.requests[-1].data or b"null")


@pytest.fixture
def transport(monkeypatch: pytest.MonkeyPatch) -> FakeTransport:
    fake = FakeTransport()
    monkeypatch.setattr("src.atlassian.client.urlopen", fake)
    return fake
