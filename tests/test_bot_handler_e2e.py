"""Tests for the aiogram message handler reply contract.

Every incoming message must produce exactly one text reply: help text, a rendered search outcome,
or a generic failure line. Internal errors never leak into the reply.
"""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any

import pytest

from src.bot.handlers import (
    FAILURE_REPLY,
    HELP_TEXT,
    handle_message,
    parse_command,
    split_solution_options,
)
from src.bot.render import MAX_REPLY_CHARS
from src.search import outcomes
from src.search.results import ResultItem


class _FakeMessage:
    def __init__(self, text: str | None) -> None:
        self.text = text
        self.caption = None
        self.answers: list[str] = []

    async def answer(self, text: str) -> None:
        """Record the outgoing bot reply (aiogram's `Message.answer` substitute)."""
        self.answers.append(text)


def _make_app() -> Any:
    return SimpleNamespace(settings=SimpleNamespace(), jira=object(), confluence=object())


def _item(key: str) -> ResultItem:
    return ResultItem(
        identifier=key,
        title="Login fails",
        category="Bug",
        status="Open",
        actor="Unassigned",
        url=f"https://example.atlassian.net/browse/{key}",
    )


@pytest.mark.asyncio
async def test_handler_replies_help_for_empty_text() -> None:
    message = _FakeMessage(text=None)

    await handle_message(message, _make_app())  # type: ignore[arg-type]

    assert message.answers == [HELP_TEXT]


@pytest.mark.asyncio
async def test_handler_replies_help_for_start_command() -> None:
    message = _FakeMessage(text="/start")

    await handle_message(message, _make_app())  # type: ignore[arg-type]

    assert message.answers == [HELP_TEXT]


@pytest.mark.asyncio
async def test_handler_reports_unknown_command() -> None:
    message = _FakeMessage(text="/deploy prod")

    await handle_message(message, _make_app())  # type: ignore[arg-type]

    assert len(message.answers) == 1
    assert message.answers[0].startswith("Unknown command /deploy.")


@pytest.mark.asyncio
async def test_plain_text_runs_issue_search(monkeypatch: pytest.MonkeyPatch) -> None:
    app = _make_app()
    message = _FakeMessage(text="open bugs in ENG")
    seen: list[tuple[Any, str]] = []

    def _fake_search(jira: Any, prompt: str) -> outcomes.SearchOutcome:
        seen.append((jira, prompt))
        return outcomes.found([_item("ENG-1")], summary="Found 1 Jira issues.")

    monkeypatch.setattr("src.search.service.search_issues_nl", _fake_search)

    await handle_message(message, app)  # type: ignore[arg-type]

    assert seen == [(app.jira, "open bugs in ENG")]
    assert len(message.answers) == 1
    reply = message.answers[0]
    assert reply.startswith("Found 1 Jira issues.")
    assert "• ENG-1 [Bug] | Open | Unassigned" in reply
    assert "https://example.atlassian.net/browse/ENG-1" in reply


@pytest.mark.asyncio
async def test_failure_outcome_is_rendered_verbatim(monkeypatch: pytest.MonkeyPatch) -> None:
    message = _FakeMessage(text="/wiki vpn")

    monkeypatch.setattr(
        "src.search.service.search_content",
        lambda _c, _q: outcomes.SearchOutcome(
            kind=outcomes.OutcomeKind.failure,
            summary="Failed to search Confluence: 401 Unauthorized",
        ),
    )

    await handle_message(message, _make_app())  # type: ignore[arg-type]

    assert message.answers == ["Failed to search Confluence: 401 Unauthorized"]


@pytest.mark.asyncio
async def test_solutions_command_passes_options(monkeypatch: pytest.MonkeyPatch) -> None:
    message = _FakeMessage(text="/solutions survey fails spaces:ENG,DOCS labels:forms")
    seen: dict[str, Any] = {}

    def _fake_solutions(_c: Any, issue: str, spaces: Any, labels: Any) -> outcomes.SearchOutcome:
        seen.update(issue=issue, spaces=spaces, labels=labels)
        return outcomes.nothing_found("nothing")

    monkeypatch.setattr("src.search.service.search_solutions", _fake_solutions)

    await handle_message(message, _make_app())  # type: ignore[arg-type]

    assert seen == {"issue": "survey fails", "spaces": ["ENG", "DOCS"], "labels": ["forms"]}
    assert message.answers == ["nothing"]


@pytest.mark.asyncio
async def test_internal_error_gives_generic_reply(monkeypatch: pytest.MonkeyPatch) -> None:
    message = _FakeMessage(text="/jql project = ENG")

    def _boom(*_args: Any, **_kwargs: Any) -> Any:
        raise KeyError("secret detail")

    monkeypatch.setattr("src.search.service.search_issues", _boom)

    await handle_message(message, _make_app())  # type: ignore[arg-type]

    assert message.answers == [FAILURE_REPLY]


@pytest.mark.asyncio
async def test_long_reply_is_truncated(monkeypatch: pytest.MonkeyPatch) -> None:
    message = _FakeMessage(text="anything")

    monkeypatch.setattr(
        "src.search.service.search_issues_nl",
        lambda _j, _p: outcomes.nothing_found("x" * 10_000),
    )

    await handle_message(message, _make_app())  # type: ignore[arg-type]

    assert len(message.answers) == 1
    assert len(message.answers[0]) == MAX_REPLY_CHARS


def test_parse_command() -> None:
    assert parse_command("/jql project = ENG") == ("jql", "project = ENG")
    assert parse_command("/Issue@my_bot ENG-1") == ("issue", "ENG-1")
    assert parse_command("/help") == ("help", "")
    assert parse_command("  what is open  ") == ("jira", "what is open")


def test_split_solution_options() -> None:
    issue, spaces, labels = split_solution_options("vpn drops space:ENG label:net,vpn daily")
    assert issue == "vpn drops daily"
    assert spaces == ["ENG"]
    assert labels == ["net", "vpn"]
