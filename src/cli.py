"""Compile natural-language requests to JQL/CQL without calling any backend.

Useful for checking what a prompt turns into before wiring it to a live site:

    python -m src.cli jql "critical bug assigned to me last week in ENG"
    python -m src.cli status 'is the "login timeout" task done?'
    python -m src.cli solutions "survey submission failing" --space ENG --label forms
    python -m src.cli wiki "release checklist"
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence

from src.nlq.cql import compile_content_search_query, compile_content_solution_query
from src.nlq.jql import compile_issue_query, compile_issue_status_query
from src.query.builder import CompiledQuery


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Compile natural-language search requests.")
    sub = parser.add_subparsers(dest="command", required=True)

    jql = sub.add_parser("jql", help="Natural-language issue search -> JQL.")
    jql.add_argument("prompt")
    jql.add_argument("--max-results", type=int, default=None)

    status = sub.add_parser("status", help="Completion-status question -> JQL.")
    status.add_argument("prompt")
    status.add_argument("--max-results", type=int, default=None)

    solutions = sub.add_parser("solutions", help="Problem description -> troubleshooting CQL.")
    solutions.add_argument("issue")
    solutions.add_argument("--space", action="append", default=[], dest="spaces")
    solutions.add_argument("--label", action="append", default=[], dest="labels")
    solutions.add_argument("--limit", type=int, default=None)

    wiki = sub.add_parser("wiki", help="Keyword content search -> CQL.")
    wiki.add_argument("query")
    wiki.add_argument("--limit", type=int, default=None)

    return parser


def compile_from_args(argv: Sequence[str] | None = None) -> CompiledQuery:
    args = _build_parser().parse_args(argv)

    if args.command == "jql":
        return compile_issue_query(args.prompt, args.max_results)
    if args.command == "status":
        return compile_issue_status_query(args.prompt, args.max_results)
    if args.command == "solutions":
        return compile_content_solution_query(args.issue, args.spaces, args.labels, args.limit)
    return compile_content_search_query(args.query, args.limit)


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point: print the compiled query and its effective limit."""

    compiled = compile_from_args(argv)
    print(compiled.query)
    print(f"# limit={compiled.limit}")


if __name__ == "__main__":
    main()
