"""Search request schema (Pydantic models).

These models are the contract between the integration surfaces (bot, CLI) and the search
services. Every request is validated here first; a failed validation is an input error and is
reported to the caller as a rejected request, never sent downstream.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from src.query.fields import (
    CONTENT_LIMIT_MAX,
    CONTENT_LIMIT_MIN,
    ISSUE_LIMIT_MAX,
    ISSUE_LIMIT_MIN,
)


class FallbackRule(StrEnum):
    """When the whole-prompt full-text fragment is added to an issue query.

    `no_conditions`: only when extraction produced no condition at all (natural-language search).
    `no_quoted_phrase`: whenever no quoted phrase was found, next to any other conditions
    (completion-status questions such as "is the X task done?").
    """

    no_conditions = "no_conditions"
    no_quoted_phrase = "no_quoted_phrase"


class _Request(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)


def _clean_list(values: list[str] | None) -> list[str]:
    return [v.strip() for v in values or [] if v and v.strip()]


class IssuePromptRequest(_Request):
    """Natural-language issue search."""

    prompt: str = Field(min_length=1)
    max_results: int | None = Field(default=None, ge=ISSUE_LIMIT_MIN, le=ISSUE_LIMIT_MAX)
    fields: list[str] = Field(default_factory=list)

    @field_validator("fields", mode="before")
    @classmethod
    def drop_blank_fields(cls, value: list[str] | None) -> list[str]:
        return _clean_list(value)


class IssueQueryRequest(_Request):
    """Structured (raw JQL) or free-text issue search."""

    jql: str | None = None
    query: str | None = None
    max_results: int | None = Field(default=None, ge=ISSUE_LIMIT_MIN, le=ISSUE_LIMIT_MAX)
    fields: list[str] = Field(default_factory=list)

    @field_validator("fields", mode="before")
    @classmethod
    def drop_blank_fields(cls, value: list[str] | None) -> list[str]:
        return _clean_list(value)

    @model_validator(mode="after")
    def validate_has_query(self) -> IssueQueryRequest:
        """Either `jql` or a non-empty free-text `query` is required."""

        if not self.jql and not self.query:
            raise ValueError("Provide either 'jql' or a non-empty 'query' string.")
        return self


class IssueKeyRequest(_Request):
    key: str = Field(min_length=1, pattern=r"^[A-Za-z][A-Za-z0-9_]*-\d+$")


class ContentSearchRequest(_Request):
    """Keyword content search."""

    query: str = Field(min_length=1)
    limit: int | None = Field(default=None, ge=CONTENT_LIMIT_MIN, le=CONTENT_LIMIT_MAX)


class SolutionSearchRequest(_Request):
    """Troubleshooting/how-to content search for a described problem."""

    issue: str = Field(min_length=1)
    spaces: list[str] = Field(default_factory=list)
    labels: list[str] = Field(default_factory=list)
    limit: int | None = Field(default=None, ge=CONTENT_LIMIT_MIN, le=CONTENT_LIMIT_MAX)

    @field_validator("spaces", "labels", mode="before")
    @classmethod
    def drop_blank_entries(cls, value: list[str] | None) -> list[str]:
        return _clean_list(value)


class PageRequest(_Request):
    url: str = Field(min_length=1)
