"""Keyword tables and the location classification matcher.

Tables are ordered tuples, never sets or dicts built from sets: the first entry found in the query
wins, so table order is part of the observable behavior.
"""

from __future__ import annotations

from collections.abc import Sequence

from src.search.normalize import contains_phrase
from src.search.schema import Classification, SortKey, SortOrder

KeywordTable = Sequence[tuple[str, Classification]]

CLASSIFICATION_KEYWORDS: tuple[tuple[str, Classification], ...] = (
    ("bash", Classification.bash),
    ("bashing", Classification.bash),
    ("basher", Classification.bash),
    ("race", Classification.race),
    ("racing", Classification.race),
    ("track", Classification.race),
    ("tracks", Classification.race),
    ("raceway", Classification.race),
    ("crawl", Classification.crawl),
    ("crawling", Classification.crawl),
    ("crawler", Classification.crawl),
    ("rock", Classification.crawl),
    ("rocks", Classification.crawl),
    ("trail", Classification.crawl),
    ("hobby", Classification.hobby),
    ("shop", Classification.hobby),
    ("shops", Classification.hobby),
    ("store", Classification.hobby),
    ("stores", Classification.hobby),
    ("airfield", Classification.airfield),
    ("airfields", Classification.airfield),
    ("field", Classification.airfield),
    ("flying", Classification.airfield),
    ("fly", Classification.airfield),
    ("plane", Classification.airfield),
    ("planes", Classification.airfield),
    ("aircraft", Classification.airfield),
    ("boat", Classification.boat),
    ("boats", Classification.boat),
    ("boating", Classification.boat),
    ("pond", Classification.boat),
)

_CLASSIFICATION_KEYWORD_SET: frozenset[str] = frozenset(k for k, _ in CLASSIFICATION_KEYWORDS)

# Minimum-rating qualifiers. Matched as whole phrases so "top" does not fire inside "stop".
QUALITY_QUALIFIERS: tuple[tuple[str, int], ...] = (
    ("5 star", 5),
    ("5-star", 5),
    ("5 stars", 5),
    ("five star", 5),
    ("4 star", 4),
    ("4-star", 4),
    ("4 stars", 4),
    ("four star", 4),
    ("3 star", 3),
    ("3-star", 3),
    ("three star", 3),
    ("best", 5),
    ("top rated", 5),
    ("top", 5),
    ("excellent", 5),
    ("highly rated", 4),
    ("great", 4),
    ("good", 3),
)

SORT_QUALIFIERS: tuple[tuple[str, SortKey, SortOrder], ...] = (
    ("top voted", SortKey.rating, SortOrder.desc),
    ("most voted", SortKey.rating, SortOrder.desc),
    ("most votes", SortKey.rating, SortOrder.desc),
    ("community votes", SortKey.rating, SortOrder.desc),
    ("highest rated", SortKey.rating, SortOrder.desc),
    ("most popular", SortKey.rating, SortOrder.desc),
    ("lowest rated", SortKey.rating, SortOrder.asc),
    ("least voted", SortKey.rating, SortOrder.asc),
    ("date added", SortKey.created_at, SortOrder.desc),
    ("recently added", SortKey.created_at, SortOrder.desc),
    ("newest", SortKey.created_at, SortOrder.desc),
    ("latest", SortKey.created_at, SortOrder.desc),
    ("oldest", SortKey.created_at, SortOrder.asc),
    ("alphabetical", SortKey.location_name, SortOrder.asc),
    ("a-z", SortKey.location_name, SortOrder.asc),
    ("z-a", SortKey.location_name, SortOrder.desc),
    ("by name", SortKey.location_name, SortOrder.asc),
)

OWNERSHIP_QUALIFIERS: tuple[str, ...] = (
    "my spots",
    "my locations",
    "my tracks",
    "my places",
    "i added",
    "i created",
    "i posted",
)

STOP_WORDS: frozenset[str] = frozenset(
    {
        "show", "me", "all", "the", "find", "search", "for", "get",
        "list", "display", "where", "are", "is", "in", "at", "near",
        "around", "locations", "location", "spots", "spot", "places",
        "place", "areas", "area", "sites", "site", "a", "an", "and",
        "with", "that", "have", "has", "please", "can", "you", "i",
        "want", "to", "see", "looking", "look", "give", "any",
        # Qualifier vocabulary (consumed by the quality/sort/ownership scans).
        "star", "stars", "best", "top", "rated", "highly", "voted", "votes",
        "newest", "latest", "oldest", "added", "alphabetical", "my",
    }
)


def classify(normalized: str, table: KeywordTable = CLASSIFICATION_KEYWORDS) -> Classification | None:
    """Return the classification of the first table keyword contained in the text.

    Table order wins: if keywords of two classifications are present, the one listed first in
    `table` is returned, regardless of where the keywords appear in the text.
    """

    for keyword, classification in table:
        if keyword in normalized:
            return classification
    return None


def is_classification_keyword(token: str) -> bool:
    return token in _CLASSIFICATION_KEYWORD_SET


def detect_quality_floor(normalized: str) -> int | None:
    """Detect a minimum-rating qualifier ("5 star", "best", ...)."""

    for phrase, rating in QUALITY_QUALIFIERS:
        if contains_phrase(normalized, phrase):
            return rating
    return None


def detect_sort(normalized: str) -> tuple[SortKey, SortOrder] | None:
    """Detect an explicit sort qualifier; `None` means the caller's sort is left as-is."""

    for phrase, key, order in SORT_QUALIFIERS:
        if contains_phrase(normalized, phrase):
            return key, order
    return None


def detect_mine_only(normalized: str) -> bool:
    return any(contains_phrase(normalized, phrase) for phrase in OWNERSHIP_QUALIFIERS)
