"""aiogram message handlers.

Hard contract: every incoming message produces exactly one text reply. Search outcomes (including
backend failures) are rendered as-is; any unexpected internal error is logged and answered with a
generic failure text, never with a stack trace.
"""

from __future__ import annotations

import asyncio
import logging
import re
from collections.abc import Callable
from time import monotonic

from aiogram.types import Message

from src.app import App
from src.bot.render import format_outcome, truncate_reply
from src.search import service
from src.search.outcomes import SearchOutcome

logger = logging.getLogger(__name__)

FAILURE_REPLY = "Search failed due to an internal error. Please try again later."

HELP_TEXT = (
    "Ask in plain English, or use a command:\n"
    "/jira <request> - issues, e.g. /jira open bug assigned to me last week in ENG\n"
    "/status <question> - e.g. /status is the \"login timeout\" task done?\n"
    "/jql <jql> - run JQL as written\n"
    "/issue <KEY-123> - issue details\n"
    "/wiki <keywords> - Confluence keyword search\n"
    "/solutions <problem> [spaces:ENG,DOCS] [labels:a,b] - troubleshooting pages\n"
    "/page <url> - Confluence page details"
)

_COMMAND_RE = re.compile(r"^/(?P<cmd>[A-Za-z_]+)(?:@\S+)?(?:\s+(?P<arg>.*))?$", flags=re.DOTALL)
_OPTION_RE = re.compile(r"^(?P<name>spaces?|labels?)[:=](?P<values>\S+)$", flags=re.IGNORECASE)

Action = Callable[[App, str], SearchOutcome]


def parse_command(text: str) -> tuple[str, str]:
    """Split `/cmd[@bot] args` into `(cmd, args)`; plain text is an NL issue search."""

    value = (text or "").strip()
    match = _COMMAND_RE.match(value)
    if not match:
        return "jira", value
    return match.group("cmd").lower(), (match.group("arg") or "").strip()


def split_solution_options(argument: str) -> tuple[str, list[str], list[str]]:
    """Pull `spaces:`/`labels:` tokens out of a /solutions argument."""

    words: list[str] = []
    spaces: list[str] = []
    labels: list[str] = []
    for token in argument.split():
        match = _OPTION_RE.match(token)
        if not match:
            words.append(token)
            continue
        values = [v for v in match.group("values").split(",") if v]
        if match.group("name").lower().startswith("space"):
            spaces.extend(values)
        else:
            labels.extend(values)
    return " ".join(words), spaces, labels


def _solutions(app: App, argument: str) -> SearchOutcome:
    issue, spaces, labels = split_solution_options(argument)
    return service.search_solutions(app.confluence, issue, spaces=spaces, labels=labels)


COMMANDS: dict[str, Action] = {
    "jira": lambda app, arg: service.search_issues_nl(app.jira, arg),
    "status": lambda app, arg: service.search_issue_status(app.jira, arg),
    "jql": lambda app, arg: service.search_issues(app.jira, jql=arg),
    "issue": lambda app, arg: service.get_issue(app.jira, arg),
    "wiki": lambda app, arg: service.search_content(app.confluence, arg),
    "solutions": _solutions,
    "page": lambda app, arg: service.get_page(app.confluence, arg),
}


async def handle_message(message: Message, app: App) -> None:
    """Handle any incoming Telegram message and reply exactly once."""

    started = monotonic()
    reply = FAILURE_REPLY

    # noinspection PyBroadException
    try:
        raw_text = message.text or message.caption or ""
        command, argument = parse_command(raw_text)

        if not raw_text.strip() or command in {"help", "start"}:
            reply = HELP_TEXT
        elif command not in COMMANDS:
            reply = f"Unknown command /{command}.\n\n{HELP_TEXT}"
        else:
            # HTTP clients are blocking; keep the event loop free while they run.
            outcome = await asyncio.to_thread(COMMANDS[command], app, argument)
            reply = format_outcome(outcome)

            latency_ms = int((monotonic() - started) * 1000)
            logger.info(
                "handled command=%s kind=%s results=%d latency_ms=%d",
                command,
                outcome.kind,
                len(outcome.items),
                latency_ms,
            )
    except Exception:
        # Handler boundary: internal errors become a generic reply without leaking details.
        logger.exception("handler failed")

    await message.answer(truncate_reply(reply))
