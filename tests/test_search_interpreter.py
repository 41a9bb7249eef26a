"""Tests for the deterministic search query interpreter."""

from __future__ import annotations

import pytest

from src.search.interpreter import extract_search_terms, parse, suppress_terms_on_structural_match
from src.search.schema import Classification, FilterSet, Region, SortKey, SortOrder


@pytest.mark.parametrize("query", ["", "   ", " \t\n "])
def test_empty_query_resets_everything(query: str) -> None:
    parsed = parse(query)
    assert parsed.reset is True
    assert parsed.filters == FilterSet.defaults()
    assert parsed.search_terms == ()
    assert parsed.place_reference is None


def test_none_query_is_treated_as_empty() -> None:
    assert parse(None).reset is True


def test_five_star_race_tracks_in_texas() -> None:
    parsed = parse("5 star race tracks in texas")
    assert parsed.filters.classification == Classification.race
    assert parsed.filters.region == Region.texas
    assert parsed.filters.min_rating == 5
    assert parsed.filters.sort_by is None
    assert parsed.search_terms == ()
    assert parsed.reset is False


def test_quiet_spot_near_the_river() -> None:
    parsed = parse("quiet spot near the river")
    assert parsed.filters == FilterSet()
    assert parsed.search_terms == ("quiet", "river")
    assert parsed.place_reference is None


@pytest.mark.parametrize(
    ("keyword", "expected"),
    [
        ("bashing", Classification.bash),
        ("raceway", Classification.race),
        ("crawler", Classification.crawl),
        ("flying", Classification.airfield),
    ],
)
def test_single_classification_keyword_suppresses_terms(
        keyword: str, expected: Classification
) -> None:
    parsed = parse(f"{keyword} spots with jumps")
    assert parsed.filters.classification == expected
    assert parsed.filters.region is None
    assert parsed.search_terms == ()


def test_place_reference_overrides_region() -> None:
    parsed = parse("spots in florence, or")
    assert parsed.place_reference == "florence, or"
    assert parsed.filters.region is None


def test_text_region_is_kept_when_place_overrides_it() -> None:
    parsed = parse("bash spots near portland, or")
    assert parsed.place_reference == "portland, or"
    assert parsed.filters.classification == Classification.bash
    assert parsed.filters.region is None
    assert parsed.text_region == Region.pacific_northwest
    assert parsed.search_terms == ()


def test_place_words_are_not_classified() -> None:
    # "rockford" would otherwise contain the crawl keyword "rock".
    parsed = parse("spots near rockford, il")
    assert parsed.place_reference == "rockford, il"
    assert parsed.filters.classification is None


def test_place_words_are_not_search_terms() -> None:
    parsed = parse("spots in eugene, or with vintage buggies")
    assert parsed.place_reference == "eugene, or"
    assert parsed.search_terms == ("vintage", "buggies")


def test_search_terms_keep_order_and_duplicates() -> None:
    parsed = parse("Vintage buggy   VINTAGE")
    assert parsed.search_terms == ("vintage", "buggy", "vintage")


def test_search_terms_drop_short_stop_and_filter_words() -> None:
    assert extract_search_terms("show me an old quarry with tracks in ohio!") == ("old", "quarry")


def test_sort_qualifier_is_detected() -> None:
    parsed = parse("newest dirt jumps")
    assert parsed.filters.sort_by == SortKey.created_at
    assert parsed.filters.sort_order == SortOrder.desc
    assert parsed.search_terms == ("dirt", "jumps")


def test_no_sort_qualifier_means_no_opinion() -> None:
    parsed = parse("dirt jumps")
    assert parsed.filters.sort_by is None
    assert parsed.filters.sort_order is None
    assert parsed.reset is False


def test_mine_only() -> None:
    parsed = parse("my spots")
    assert parsed.filters.mine_only is True
    assert parsed.search_terms == ()
    assert parse("dirt jumps").filters.mine_only is None


@pytest.mark.parametrize(
    "query",
    [
        "",
        "  Bash   SPOTS in Texas ",
        "Spots in Florence, OR",
        "quiet spot near the river",
        "top voted  tracks near Seattle Washington",
        "5–star hobby shops",
    ],
)
def test_parse_is_idempotent_on_normalized_form(query: str) -> None:
    first = parse(query)
    assert parse(first.normalized) == first


def test_long_input_is_not_truncated() -> None:
    parsed = parse("quiet " * 5000)
    assert len(parsed.search_terms) == 5000


def test_long_input_with_comma_is_not_truncated() -> None:
    parsed = parse("quiet " * 20000 + "river, x")

    assert parsed.place_reference is None
    assert len(parsed.search_terms) == 20001


def test_classifier_words_before_place_are_kept() -> None:
    parsed = parse("quiet trails with jumps near florence, or")

    assert parsed.place_reference == "florence, or"
    assert parsed.filters.classification == Classification.crawl
    assert parsed.search_terms == ()


def test_without_place_extraction_locality_is_a_search_term() -> None:
    parsed = parse("vintage buggies near florence, or", extract_places=False)

    assert parsed.place_reference is None
    assert parsed.filters.region is None
    assert parsed.search_terms == ("vintage", "buggies", "florence")


def test_mine_is_only_an_ownership_qualifier_in_a_phrase() -> None:
    parsed = parse("old gold mine")

    assert parsed.filters.mine_only is None
    assert parsed.search_terms == ("old", "gold", "mine")


def test_suppression_policy() -> None:
    assert suppress_terms_on_structural_match(Classification.race, None)
    assert suppress_terms_on_structural_match(None, Region.texas)
    assert not suppress_terms_on_structural_match(None, None)
