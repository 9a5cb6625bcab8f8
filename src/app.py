"""Application composition root.

This module wires configuration into the Jira and Confluence clients for the bot runtime.
"""

from __future__ import annotations

from dataclasses import dataclass

from src.atlassian.confluence import ConfluenceClient
from src.atlassian.jira import JiraClient
from src.config.settings import Settings


@dataclass(frozen=True)
class App:
    """Shared application dependencies for handlers."""

    settings: Settings
    jira: JiraClient
    confluence: ConfluenceClient


def create_app(settings: Settings) -> App:
    """Create the application container.

    The clients hold no connections; each call opens and closes its own HTTP request.
    """

    return App(
        settings=settings,
        jira=JiraClient(settings.jira_config()),
        confluence=ConfluenceClient(settings.confluence_config()),
    )
