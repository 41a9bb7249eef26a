"""US state and region tables plus the two region resolvers.

`STATE_REGIONS` is the single canonical state -> region mapping. Both resolution directions derive
from it:

    - free text (`resolve_from_query_text`): whole-phrase containment over an ordered alias table,
      first match in table order wins;
    - reverse-geocoder output (`resolve_from_administrative_name`): case-insensitive exact lookup,
      because the geocoder returns an isolated, well-formed state name.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from src.search.normalize import contains_phrase, normalize_text
from src.search.schema import Region, RegionViewport, ReverseGeocodeResult

AliasTable = Sequence[tuple[str, Region]]


@dataclass(frozen=True)
class UsState:
    """A US state (or state-like area) with its postal abbreviation and region."""

    name: str
    abbreviation: str
    region: Region


STATE_REGIONS: tuple[UsState, ...] = (
    UsState("california", "ca", Region.california),
    UsState("texas", "tx", Region.texas),
    UsState("florida", "fl", Region.florida),
    UsState("washington", "wa", Region.pacific_northwest),
    UsState("oregon", "or", Region.pacific_northwest),
    UsState("idaho", "id", Region.pacific_northwest),
    UsState("montana", "mt", Region.pacific_northwest),
    UsState("hawaii", "hi", Region.west_coast),
    UsState("alaska", "ak", Region.west_coast),
    UsState("maine", "me", Region.northeast),
    UsState("new hampshire", "nh", Region.northeast),
    UsState("vermont", "vt", Region.northeast),
    UsState("massachusetts", "ma", Region.northeast),
    UsState("rhode island", "ri", Region.northeast),
    UsState("connecticut", "ct", Region.northeast),
    UsState("new york", "ny", Region.northeast),
    UsState("new jersey", "nj", Region.northeast),
    UsState("pennsylvania", "pa", Region.northeast),
    UsState("delaware", "de", Region.southeast),
    UsState("maryland", "md", Region.southeast),
    UsState("west virginia", "wv", Region.southeast),
    UsState("virginia", "va", Region.southeast),
    UsState("north carolina", "nc", Region.southeast),
    UsState("south carolina", "sc", Region.southeast),
    UsState("georgia", "ga", Region.southeast),
    UsState("kentucky", "ky", Region.southeast),
    UsState("tennessee", "tn", Region.southeast),
    UsState("alabama", "al", Region.southeast),
    UsState("mississippi", "ms", Region.southeast),
    UsState("louisiana", "la", Region.southeast),
    UsState("arkansas", "ar", Region.southeast),
    UsState("ohio", "oh", Region.midwest),
    UsState("indiana", "in", Region.midwest),
    UsState("illinois", "il", Region.midwest),
    UsState("michigan", "mi", Region.midwest),
    UsState("wisconsin", "wi", Region.midwest),
    UsState("minnesota", "mn", Region.midwest),
    UsState("iowa", "ia", Region.midwest),
    UsState("missouri", "mo", Region.midwest),
    UsState("north dakota", "nd", Region.midwest),
    UsState("south dakota", "sd", Region.midwest),
    UsState("nebraska", "ne", Region.midwest),
    UsState("kansas", "ks", Region.midwest),
    UsState("oklahoma", "ok", Region.southwest),
    UsState("new mexico", "nm", Region.southwest),
    UsState("arizona", "az", Region.southwest),
    UsState("nevada", "nv", Region.southwest),
    UsState("utah", "ut", Region.southwest),
    UsState("colorado", "co", Region.southwest),
    UsState("wyoming", "wy", Region.southwest),
)

# Recognized US areas with no finer-grained region (structured geocoder output only).
US_UNMAPPED_AREAS: tuple[UsState, ...] = (
    UsState("district of columbia", "dc", Region.other),
    UsState("washington dc", "dc", Region.other),
    UsState("puerto rico", "pr", Region.other),
    UsState("guam", "gu", Region.other),
    UsState("us virgin islands", "vi", Region.other),
    UsState("american samoa", "as", Region.other),
    UsState("northern mariana islands", "mp", Region.other),
)

# Postal codes that are also everyday English words ("show me", "in texas", "or"). They are only
# trusted in structured input (geocoder output, "locality, st" place references).
AMBIGUOUS_ABBREVIATIONS: frozenset[str] = frozenset(
    {"al", "as", "co", "de", "hi", "id", "in", "la", "ma", "me", "mi", "mo", "ne", "oh", "ok", "or", "pa"}
)

REGION_PHRASES: tuple[tuple[str, Region], ...] = (
    ("pacific northwest", Region.pacific_northwest),
    ("pnw", Region.pacific_northwest),
    ("northeast", Region.northeast),
    ("north east", Region.northeast),
    ("new england", Region.northeast),
    ("southeast", Region.southeast),
    ("south east", Region.southeast),
    ("midwest", Region.midwest),
    ("mid west", Region.midwest),
    ("southwest", Region.southwest),
    ("south west", Region.southwest),
    ("west coast", Region.west_coast),
    ("westcoast", Region.west_coast),
    ("socal", Region.california),
    ("norcal", Region.california),
    ("cali", Region.california),
)

CITY_ALIASES: tuple[tuple[str, Region], ...] = (
    ("seattle", Region.pacific_northwest),
    ("portland", Region.pacific_northwest),
    ("boise", Region.pacific_northwest),
    ("boston", Region.northeast),
    ("new york city", Region.northeast),
    ("nyc", Region.northeast),
    ("philadelphia", Region.northeast),
    ("washington dc", Region.northeast),
    ("district of columbia", Region.northeast),
    ("dc", Region.northeast),
    ("atlanta", Region.southeast),
    ("nashville", Region.southeast),
    ("charlotte", Region.southeast),
    ("detroit", Region.midwest),
    ("chicago", Region.midwest),
    ("minneapolis", Region.midwest),
    ("phoenix", Region.southwest),
    ("las vegas", Region.southwest),
    ("vegas", Region.southwest),
    ("denver", Region.southwest),
    ("albuquerque", Region.southwest),
    ("los angeles", Region.california),
    ("san diego", Region.california),
    ("san francisco", Region.california),
    ("sacramento", Region.california),
    ("houston", Region.texas),
    ("dallas", Region.texas),
    ("austin", Region.texas),
    ("san antonio", Region.texas),
    ("miami", Region.florida),
    ("orlando", Region.florida),
    ("tampa", Region.florida),
    ("jacksonville", Region.florida),
)


def _build_region_aliases() -> tuple[tuple[str, Region], ...]:
    # Multi-word names go first so "west virginia" is tried before "virginia". Unmapped areas are
    # not free-text aliases; their region, Other, is never a search filter.
    states = sorted(STATE_REGIONS, key=lambda s: -len(s.name.split()))
    names = tuple((s.name, s.region) for s in states)
    abbreviations = tuple(
        (s.abbreviation, s.region)
        for s in STATE_REGIONS
        if s.abbreviation not in AMBIGUOUS_ABBREVIATIONS
    )

    aliases: list[tuple[str, Region]] = []
    seen: set[str] = set()
    for alias, region in (*REGION_PHRASES, *CITY_ALIASES, *names, *abbreviations):
        if alias in seen:
            continue
        seen.add(alias)
        aliases.append((alias, region))
    return tuple(aliases)


REGION_ALIASES: tuple[tuple[str, Region], ...] = _build_region_aliases()

_REGION_ALIAS_SET: frozenset[str] = frozenset(
    {alias for alias, _ in REGION_ALIASES}
    | {s.abbreviation for s in STATE_REGIONS}
)

# Canonical display names, tried after the alias table. "Other" is a classification sentinel, not
# something users search for.
_REGION_DISPLAY_NAMES: tuple[tuple[str, Region], ...] = tuple(
    (region.value.lower(), region) for region in Region if region is not Region.other
)

_ADMINISTRATIVE_LOOKUP: dict[str, Region] = {
    key: state.region
    for state in STATE_REGIONS
    for key in (state.name, state.abbreviation)
}
_US_UNMAPPED_LOOKUP: frozenset[str] = frozenset(
    key for area in US_UNMAPPED_AREAS for key in (area.name, area.abbreviation)
)


def resolve_from_query_text(normalized: str, aliases: AliasTable = REGION_ALIASES) -> Region | None:
    """Resolve a region mentioned anywhere in normalized free text.

    The alias table is scanned first (table order wins), then the canonical region display names.
    """

    for alias, region in aliases:
        if contains_phrase(normalized, alias):
            return region

    for display_name, region in _REGION_DISPLAY_NAMES:
        if contains_phrase(normalized, display_name):
            return region

    return None


def resolve_from_administrative_name(name: str | None) -> Region | None:
    """Map a state name or postal abbreviation (e.g. geocoder output) to a region.

    Returns:
        The mapped region; `Region.other` for a recognized US area without a finer region; `None`
        for anything that is not a recognized US state/area (the caller should not set a region).
    """

    key = normalize_text(name)
    if not key:
        return None

    region = _ADMINISTRATIVE_LOOKUP.get(key)
    if region is not None:
        return region
    if key in _US_UNMAPPED_LOOKUP:
        return Region.other
    return None


def resolve_from_reverse_geocode(result: ReverseGeocodeResult | None) -> Region | None:
    """Map a reverse geocode result to a region.

    An unrecognized administrative area inside the US still yields `Region.other`.
    """

    if result is None:
        return None

    region = resolve_from_administrative_name(result.administrative_area_name)
    if region is not None:
        return region

    if (result.country_code or "").strip().lower() == "us":
        return Region.other
    return None


def is_region_alias(token: str) -> bool:
    return token in _REGION_ALIAS_SET


def region_viewport(region: Region) -> RegionViewport:
    return region.viewport
