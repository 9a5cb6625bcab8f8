"""Environment configuration and validation.

This module defines strongly-typed application settings loaded from environment variables
(optionally via a local `.env` file). Clients never read the environment themselves; they receive
an explicit `AtlassianConfig` built from these settings.
"""

from __future__ import annotations

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.atlassian.client import AtlassianConfig


def _normalize_base_url(value: str) -> str:
    url = (value or "").strip().rstrip("/")
    if not url.startswith(("https://", "http://")):
        raise ValueError("base URL must start with http:// or https://")
    return url


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    telegram_bot_token: str = Field(alias="TELEGRAM_BOT_TOKEN")

    atlassian_base_url: str = Field(alias="ATLASSIAN_BASE_URL")
    confluence_base_url: str | None = Field(default=None, alias="CONFLUENCE_BASE_URL")
    atlassian_email: str | None = Field(default=None, alias="ATLASSIAN_EMAIL")
    atlassian_api_token: str = Field(alias="ATLASSIAN_API_TOKEN", min_length=1)
    atlassian_timeout_s: float = Field(default=30.0, alias="ATLASSIAN_TIMEOUT_S", gt=0)

    @field_validator("atlassian_base_url")
    @classmethod
    def validate_atlassian_base_url(cls, value: str) -> str:
        """Require an absolute http(s) URL and drop any trailing slash."""

        return _normalize_base_url(value)

    @field_validator("confluence_base_url")
    @classmethod
    def validate_confluence_base_url(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return _normalize_base_url(value)

    def jira_config(self) -> AtlassianConfig:
        return AtlassianConfig(
            base_url=self.atlassian_base_url,
            api_token=self.atlassian_api_token,
            email=self.atlassian_email or None,
            timeout_s=self.atlassian_timeout_s,
        )

    def confluence_config(self) -> AtlassianConfig:
        """Confluence may live on its own host; it defaults to the Atlassian base URL."""

        return AtlassianConfig(
            base_url=self.confluence_base_url or self.atlassian_base_url,
            api_token=self.atlassian_api_token,
            email=self.atlassian_email or None,
            timeout_s=self.atlassian_timeout_s,
        )


def load_settings() -> Settings:
    """Load and validate settings from environment variables.

    Raises:
        RuntimeError: If the environment configuration is missing or invalid.
    """

    try:
        return Settings()
    except ValidationError as exc:
        # Raising here is fine: caller can decide how to handle startup errors.
        raise RuntimeError(f"Invalid environment configuration: {exc}") from exc
