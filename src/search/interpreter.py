"""Rules-based search query interpreter.

The interpreter is total and deterministic:
    - every string (including empty or whitespace-only) has exactly one interpretation,
    - every table scan is first-match, table-order-wins,
    - it never raises for string input.
"""

from __future__ import annotations

import logging

from src.search.keywords import (
    STOP_WORDS,
    classify,
    detect_mine_only,
    detect_quality_floor,
    detect_sort,
    is_classification_keyword,
)
from src.search.normalize import normalize_text, tokenize
from src.search.places import extract_place_span
from src.search.regions import is_region_alias, resolve_from_query_text
from src.search.schema import Classification, FilterSet, ParsedQuery, Region

logger = logging.getLogger(__name__)

_MIN_TERM_LENGTH = 3


def suppress_terms_on_structural_match(
        classification: Classification | None,
        region: Region | None,
) -> bool:
    """Whether residual search terms are dropped because a structural filter was detected.

    Once a classification or region is detected, the remaining words are treated as filter
    vocabulary rather than content to fuzzy-match, so the two never narrow the result twice.
    """

    return classification is not None or region is not None


def _is_search_term(token: str) -> bool:
    return (
            len(token) >= _MIN_TERM_LENGTH
            and token not in STOP_WORDS
            and not is_classification_keyword(token)
            and not is_region_alias(token)
    )


def extract_search_terms(text: str) -> tuple[str, ...]:
    """Residual content words, in original order with duplicates preserved."""

    return tuple(t for t in tokenize(text) if _is_search_term(t))


def parse(raw_query: str | None, *, extract_places: bool = True) -> ParsedQuery:
    """Interpret a free-text search query.

    With `extract_places=False` the query is interpreted as if it named no place; callers use this
    when the place reference could not be geocoded.

    An empty query is an explicit reset: the result carries `reset=True` and the default filter
    state. A non-empty query without a sort qualifier leaves `sort_by`/`sort_order` unset so the
    caller keeps its current sort.
    """

    normalized = normalize_text(raw_query)
    if not normalized:
        return ParsedQuery(normalized="", filters=FilterSet.defaults(), reset=True)

    place = extract_place_span(normalized) if extract_places else None

    # Words consumed by the place reference are not classifier or search-term input.
    residual = normalized
    if place is not None:
        residual = normalize_text(f"{normalized[:place.start]} {normalized[place.end:]}")

    classification = classify(residual)
    text_region = resolve_from_query_text(normalized)
    min_rating = detect_quality_floor(normalized)
    sort = detect_sort(normalized)
    mine_only = detect_mine_only(normalized) or None

    filters = FilterSet(
        classification=classification,
        region=None if place is not None else text_region,
        sort_by=sort[0] if sort else None,
        sort_order=sort[1] if sort else None,
        min_rating=min_rating,
        mine_only=mine_only,
    )

    search_terms: tuple[str, ...] = ()
    if not suppress_terms_on_structural_match(classification, text_region):
        search_terms = extract_search_terms(residual)

    parsed = ParsedQuery(
        normalized=normalized,
        filters=filters,
        search_terms=search_terms,
        place_reference=place.reference if place else None,
        text_region=text_region,
    )
    logger.debug(
        "parsed classification=%s region=%s place=%s terms=%d",
        filters.classification,
        filters.region,
        parsed.place_reference,
        len(search_terms),
    )
    return parsed
