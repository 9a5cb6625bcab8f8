"""Text normalization for deterministic condition extraction."""

from __future__ import annotations

import re
from dataclasses import dataclass

_MULTISPACE_RE = re.compile(r"\s+")
_QUOTED_PHRASE_RE = re.compile(r'"([^"]+)"')


@dataclass(frozen=True)
class PromptView:
    """Both casings of one prompt.

    Matchers test triggers against `lower`; literals (project keys, labels, quoted phrases) are
    read from `original` so user casing survives into the query.
    """

    original: str
    lower: str


def canonical_quotes(text: str) -> str:
    """Map typographic double quotes to ASCII `"` so quoted phrases are detected."""

    return (
        (text or "")
        .replace("“", '"')
        .replace("”", '"')
        .replace("„", '"')
        .replace("«", '"')
        .replace("»", '"')
    )


def normalize_text(text: str) -> str:
    """Lowercase and collapse whitespace; punctuation is kept for date and label patterns."""

    value = canonical_quotes(text).strip().lower()
    value = value.replace("—", "-").replace("–", "-")
    return _MULTISPACE_RE.sub(" ", value)


def prompt_view(text: str) -> PromptView:
    original = _MULTISPACE_RE.sub(" ", canonical_quotes(text).strip())
    return PromptView(original=original, lower=normalize_text(text))


def extract_quoted_phrases(text: str) -> list[str]:
    """Return every non-empty `"..."` phrase in order of appearance."""

    return [m.group(1) for m in _QUOTED_PHRASE_RE.finditer(canonical_quotes(text))]
