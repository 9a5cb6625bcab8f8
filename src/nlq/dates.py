"""English date parsing for explicit `since/before <date>` bounds.

Relative phrases ("last week", "last 7 days") map to JQL date functions in the compiler and never
reach this module; here only absolute calendar dates with a year are accepted, so the result does
not depend on the current day.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date

import dateparser
from dateparser.conf import Settings as DateparserSettings

_DATEPARSER_SETTINGS = DateparserSettings().replace(
    STRICT_PARSING=True,
    DATE_ORDER="MDY",
    TIMEZONE="UTC",
    TO_TIMEZONE="UTC",
    RETURN_AS_TIMEZONE_AWARE=True,
)

_ISO_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")

_LOWER_BOUND_WORDS = ("since", "after")

_BOUND_RE = re.compile(
    r"\b(?P<word>since|after|before|until)\s+"
    r"(?P<frag>\d{4}-\d{2}-\d{2}|(?:[a-z0-9,.]+\s+){1,3}\d{4})\b"
)


@dataclass(frozen=True)
class DateBound:
    """One explicit bound on the last-modified field (`op` is `>=` or `<`)."""

    op: str
    day: date


def parse_english_date(fragment: str) -> date | None:
    """Parse a single date fragment such as `2025-11-01` or `1 november 2025`."""

    value = (fragment or "").strip().rstrip(",.")
    if not value:
        return None

    # ISO dates are year-first regardless of DATE_ORDER.
    if _ISO_DATE_RE.fullmatch(value):
        try:
            return date.fromisoformat(value)
        except ValueError:
            return None

    dt = dateparser.parse(value, languages=["en"], settings=_DATEPARSER_SETTINGS)
    if not dt:
        return None
    return dt.date()


def extract_date_bounds(text: str) -> list[DateBound]:
    """Find `since|after|before|until <date>` phrases in normalized (lowercase) text.

    Fragments that do not parse to a full calendar date are ignored.
    """

    bounds: list[DateBound] = []
    for match in _BOUND_RE.finditer(text or ""):
        day = parse_english_date(match.group("frag"))
        if day is None:
            continue

        word = match.group("word")
        op = ">=" if word in _LOWER_BOUND_WORDS else "<"
        bound = DateBound(op=op, day=day)
        if bound not in bounds:
            bounds.append(bound)
    return bounds
