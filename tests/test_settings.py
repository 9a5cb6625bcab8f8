"""Tests for environment configuration."""

from __future__ import annotations

import base64
from pathlib import Path

import pytest

from src.config.settings import Settings, load_settings

_ENV = {
    "TELEGRAM_BOT_TOKEN": "123:abc",
    "ATLASSIAN_BASE_URL": "https://example.atlassian.net/",
    "ATLASSIAN_EMAIL": "me@example.com",
    "ATLASSIAN_API_TOKEN": "tok",
}
_OPTIONAL = ("CONFLUENCE_BASE_URL", "ATLASSIAN_TIMEOUT_S")


@pytest.fixture
def env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for key, value in _ENV.items():
        monkeypatch.setenv(key, value)
    for key in _OPTIONAL:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


def test_settings_from_env(env: pytest.MonkeyPatch) -> None:
    settings = Settings(_env_file=None)

    assert settings.atlassian_base_url == "https://example.atlassian.net"
    assert settings.atlassian_timeout_s == 30.0

    jira = settings.jira_config()
    assert jira.base_url == "https://example.atlassian.net"
    expected = "Basic " + base64.b64encode(b"me@example.com:tok").decode("ascii")
    assert jira.auth_header() == expected


def test_confluence_base_defaults_to_atlassian_base(env: pytest.MonkeyPatch) -> None:
    settings = Settings(_env_file=None)
    assert settings.confluence_config().base_url == "https://example.atlassian.net"

    env.setenv("CONFLUENCE_BASE_URL", "https://wiki.example.net/")
    settings = Settings(_env_file=None)
    assert settings.confluence_config().base_url == "https://wiki.example.net"


def test_blank_email_uses_bearer_token(env: pytest.MonkeyPatch) -> None:
    env.setenv("ATLASSIAN_EMAIL", "")
    settings = Settings(_env_file=None)

    assert settings.jira_config().auth_header() == "Bearer tok"


def test_invalid_base_url_is_rejected(env: pytest.MonkeyPatch) -> None:
    env.setenv("ATLASSIAN_BASE_URL", "example.atlassian.net")

    with pytest.raises(ValueError):
        Settings(_env_file=None)


def test_load_settings_wraps_validation_errors(
        monkeypatch: pytest.MonkeyPatch,
        tmp_path: Path,
) -> None:
    monkeypatch.chdir(tmp_path)
    for key in (*_ENV, *_OPTIONAL):
        monkeypatch.delenv(key, raising=False)

    with pytest.raises(RuntimeError, match="Invalid environment configuration"):
        load_settings()
