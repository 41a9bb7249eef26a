"""Applying a parsed query on the caller's side.

`merge_filters` folds a `ParsedQuery` into the caller's current filter state, and `matches_search`
is the client-side name/description match used for residual search terms.
"""

from __future__ import annotations

from collections.abc import Sequence

from src.search.schema import FilterSet, LocationSummary, ParsedQuery


def merge_filters(current: FilterSet, parsed: ParsedQuery) -> FilterSet:
    """Merge parsed filters into the current state.

    Rules:
        - an empty query (`parsed.reset`) resets everything to `FilterSet.defaults()`;
        - classification, region, quality floor and ownership are replaced by what the query says
          (absent clears them);
        - sort is only replaced when the query named one explicitly.
    """

    if parsed.reset:
        return FilterSet.defaults()

    found = parsed.filters
    return FilterSet(
        classification=found.classification,
        region=found.region,
        min_rating=found.min_rating,
        mine_only=found.mine_only,
        sort_by=found.sort_by if found.sort_by is not None else current.sort_by,
        sort_order=found.sort_order if found.sort_order is not None else current.sort_order,
    )


def matches_search(
        location: LocationSummary,
        search_terms: Sequence[str],
        min_rating: int | None = None,
) -> bool:
    """Whether a location passes the quality floor and matches any residual term.

    No terms matches everything.
    """

    if min_rating and location.rating < min_rating:
        return False

    if not search_terms:
        return True

    searchable = f"{location.name} {location.description or ''}".lower()
    return any(term in searchable for term in search_terms)
