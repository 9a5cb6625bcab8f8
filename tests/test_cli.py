"""Tests for the query compiler CLI."""

from __future__ import annotations

import pytest

from src.cli import compile_from_args, main


def test_compile_nl_issue_prompt() -> None:
    compiled = compile_from_args(["jql", "show issues assigned to me last week in ENG"])

    assert compiled.query == (
        "assignee = currentUser() AND project = ENG AND updated >= -1w ORDER BY updated DESC"
    )
    assert compiled.limit == 10


def test_compile_solutions_with_options() -> None:
    compiled = compile_from_args(
        ["solutions", "vpn drops", "--space", "ENG", "--label", "net", "--limit", "50"]
    )

    assert compiled.query.endswith('AND (space = "ENG") ORDER BY lastmodified DESC')
    assert '(label = "net" OR ' in compiled.query
    assert compiled.limit == 20


def test_main_prints_query_and_limit(capsys: pytest.CaptureFixture[str]) -> None:
    main(["wiki", "release checklist", "--limit", "3"])

    out = capsys.readouterr().out.splitlines()
    assert out == ['text ~ "release checklist"', "# limit=3"]


def test_subcommand_is_required() -> None:
    with pytest.raises(SystemExit):
        compile_from_args([])


def test_documented_examples_compile_issue_type() -> None:
    compiled = compile_from_args(["jql", "critical bug assigned to me last week in ENG"])
    assert compiled.query == (
        'assignee = currentUser() AND project = ENG AND issuetype = "Bug" '
        'AND priority = "Critical" AND updated >= -1w ORDER BY updated DESC'
    )

    compiled = compile_from_args(["jql", "open bug assigned to me last week in ENG"])
    assert compiled.query == (
        "assignee = currentUser() AND resolution = Unresolved AND project = ENG "
        'AND issuetype = "Bug" AND updated >= -1w ORDER BY updated DESC'
    )


def test_issue_type_words_match_singular_only() -> None:
    assert "issuetype" not in compile_from_args(["jql", "bugs in ENG"]).query
