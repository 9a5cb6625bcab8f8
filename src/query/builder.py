"""Deterministic JQL/CQL composition.

The builder turns an ordered list of condition fragments into one query string. Field names and
ordering clauses come from allowlists in `src.query.fields`; only user literals are interpolated,
and always through `quote_literal`.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from src.query.fields import TEXT_FIELD

_CONTROL_CHARS_RE = re.compile(r"[\x00-\x1f\x7f]+")


@dataclass(frozen=True)
class CompiledQuery:
    """A composed query ready to send to the backing service."""

    query: str
    limit: int
    fields: tuple[str, ...] = ()

    def __str__(self) -> str:
        return self.query


def escape_literal(value: str) -> str:
    """Escape a user literal for a double-quoted JQL/CQL string.

    Backslashes are doubled before quotes are escaped so that a trailing backslash can never
    swallow the closing quote. Control characters collapse to a single space.
    """

    text = _CONTROL_CHARS_RE.sub(" ", value or "")
    return text.replace("\\", "\\\\").replace('"', '\\"')


def quote_literal(value: str) -> str:
    return f'"{escape_literal(value)}"'


def text_clause(value: str) -> str:
    """Full-text condition `text ~ "<value>"`."""

    return f"{TEXT_FIELD} ~ {quote_literal(value)}"


def comparison(field: str, op: str, value: str) -> str:
    return f"{field} {op} {quote_literal(value)}"


def or_group(field: str, op: str, values: Iterable[str]) -> str | None:
    """Build a parenthesised disjunction, or `None` when there are no values.

    An empty OR-group is never emitted; callers skip the fragment instead.
    """

    parts = [comparison(field, op, v) for v in values]
    if not parts:
        return None
    return "(" + " OR ".join(parts) + ")"


def join_and(fragments: Sequence[str]) -> str:
    return " AND ".join(f for f in fragments if f)


def compose(fragments: Sequence[str], order_by: str) -> str:
    """Join fragments with AND and append exactly one ordering clause."""

    where = join_and(fragments)
    if not where:
        return order_by
    return f"{where} {order_by}"


def clamp_limit(value: int | None, *, default: int, minimum: int, maximum: int) -> int:
    """Clamp a caller limit into `[minimum, maximum]` (defaulting when absent)."""

    if value is None:
        return default
    return max(minimum, min(maximum, int(value)))


def dedupe(values: Iterable[str]) -> list[str]:
    """Strip, drop blanks, and de-duplicate while preserving first-seen order."""

    seen: set[str] = set()
    uniq: list[str] = []
    for raw in values:
        value = (raw or "").strip()
        if not value or value in seen:
            continue
        seen.add(value)
        uniq.append(value)
    return uniq
