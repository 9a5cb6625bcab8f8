"""Tests for request validation at the search boundary."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from src.nlq.schema import (
    ContentSearchRequest,
    IssueKeyRequest,
    IssuePromptRequest,
    IssueQueryRequest,
    PageRequest,
    SolutionSearchRequest,
)


def test_issue_prompt_limit_bounds() -> None:
    assert IssuePromptRequest(prompt="x", max_results=1).max_results == 1
    assert IssuePromptRequest(prompt="x", max_results=50).max_results == 50
    assert IssuePromptRequest(prompt="x").max_results is None

    with pytest.raises(ValidationError):
        IssuePromptRequest(prompt="x", max_results=0)
    with pytest.raises(ValidationError):
        IssuePromptRequest(prompt="x", max_results=51)


def test_issue_prompt_requires_text() -> None:
    with pytest.raises(ValidationError):
        IssuePromptRequest(prompt="   ")


def test_issue_prompt_drops_blank_fields() -> None:
    req = IssuePromptRequest(prompt="x", fields=["summary", " ", ""])
    assert req.fields == ["summary"]


def test_issue_query_requires_jql_or_query() -> None:
    with pytest.raises(ValidationError):
        IssueQueryRequest()
    with pytest.raises(ValidationError):
        IssueQueryRequest(jql="  ", query="")

    assert IssueQueryRequest(jql="project = ENG").jql == "project = ENG"
    assert IssueQueryRequest(query="lambda opt out").query == "lambda opt out"


def test_issue_key_format() -> None:
    assert IssueKeyRequest(key=" ENG-123 ").key == "ENG-123"
    with pytest.raises(ValidationError):
        IssueKeyRequest(key="ENG")
    with pytest.raises(ValidationError):
        IssueKeyRequest(key="123-ENG")


def test_content_limit_bounds() -> None:
    assert SolutionSearchRequest(issue="x", limit=20).limit == 20
    with pytest.raises(ValidationError):
        SolutionSearchRequest(issue="x", limit=21)
    with pytest.raises(ValidationError):
        SolutionSearchRequest(issue="x", limit=0)
    with pytest.raises(ValidationError):
        ContentSearchRequest(query="x", limit=21)


def test_solution_request_cleans_lists() -> None:
    req = SolutionSearchRequest(issue="x", spaces=[" ENG ", ""], labels=None)
    assert req.spaces == ["ENG"]
    assert req.labels == []


def test_extra_fields_are_forbidden() -> None:
    with pytest.raises(ValidationError):
        PageRequest(url="https://example.net/wiki/x", page_id="1")
