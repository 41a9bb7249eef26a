"""Text normalization for deterministic query interpretation."""

from __future__ import annotations

import re
import string
from functools import lru_cache

_MULTISPACE_RE = re.compile(r"\s+")
_TOKEN_EDGE_CHARS = string.punctuation + "“”‘’"


def normalize_text(text: str | None) -> str:
    """Normalize user text for rules-based parsing.

    Normalization is intentionally conservative:
        - Lowercase.
        - Trim.
        - Collapse whitespace.

    Punctuation is kept: commas delimit "locality, state" place references. Normalizing an already
    normalized string returns it unchanged.
    """

    value = (text or "").strip().lower()

    # Normalize common unicode dashes to ASCII hyphen ("5–star" -> "5-star").
    value = value.replace("—", "-").replace("–", "-")

    return _MULTISPACE_RE.sub(" ", value).strip()


def clean_token(token: str) -> str:
    """Strip surrounding punctuation from a whitespace-delimited token."""

    return token.strip(_TOKEN_EDGE_CHARS)


def tokenize(text: str) -> list[str]:
    """Split normalized text on whitespace into cleaned, non-empty tokens (order preserved)."""

    tokens = (clean_token(t) for t in text.split())
    return [t for t in tokens if t]


@lru_cache(maxsize=2048)
def _phrase_re(phrase: str) -> re.Pattern[str]:
    return re.compile(rf"(?<![0-9a-z]){re.escape(phrase)}(?![0-9a-z])")


def contains_phrase(text: str, phrase: str) -> bool:
    """Whether `phrase` occurs in `text` as whole words (not inside a longer word).

    Both arguments are expected to be normalized. "or" is found in "florence, or" but not in
    "florence".
    """

    if not phrase:
        return False
    return _phrase_re(phrase).search(text) is not None
