"""Search schema (Pydantic models).

This schema is the contract between the query interpreter and its callers (the map UI, the API layer
and the geocoding service). Every model is immutable; absent fields mean "no constraint", never a
sentinel value.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class Classification(StrEnum):
    """Supported location kinds."""

    bash = "bash"
    race = "race"
    crawl = "crawl"
    hobby = "hobby"
    airfield = "airfield"
    boat = "boat"

    @property
    def label(self) -> str:
        return CLASSIFICATION_LABELS[self]


CLASSIFICATION_LABELS: dict[Classification, str] = {
    Classification.bash: "Bash Spot",
    Classification.race: "Race Track",
    Classification.crawl: "Crawl Area",
    Classification.hobby: "Hobby Shop",
    Classification.airfield: "Air Field",
    Classification.boat: "Boat Pond",
}


class Region(StrEnum):
    """Named geographic groupings (values are the display names)."""

    northeast = "Northeast"
    southeast = "Southeast"
    midwest = "Midwest"
    southwest = "Southwest"
    west_coast = "West Coast"
    pacific_northwest = "Pacific Northwest"
    california = "California"
    texas = "Texas"
    florida = "Florida"
    other = "Other"

    @property
    def viewport(self) -> RegionViewport:
        """Map center and zoom level used when the UI navigates to this region."""

        return REGION_VIEWPORTS[self]


class SortKey(StrEnum):
    """Sortable location fields."""

    location_name = "name"
    rating = "rating"
    created_at = "created_at"


class SortOrder(StrEnum):
    asc = "asc"
    desc = "desc"


class RegionViewport(BaseModel):
    """Display center-point and zoom level for a region."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    lat: float
    lng: float
    zoom: int


REGION_VIEWPORTS: dict[Region, RegionViewport] = {
    Region.northeast: RegionViewport(lat=42.5, lng=-73.5, zoom=6),
    Region.southeast: RegionViewport(lat=33.5, lng=-84.0, zoom=5),
    Region.midwest: RegionViewport(lat=41.5, lng=-89.0, zoom=5),
    Region.southwest: RegionViewport(lat=34.0, lng=-111.0, zoom=5),
    Region.west_coast: RegionViewport(lat=37.5, lng=-122.0, zoom=5),
    Region.pacific_northwest: RegionViewport(lat=46.5, lng=-122.5, zoom=6),
    Region.california: RegionViewport(lat=36.5, lng=-119.5, zoom=6),
    Region.texas: RegionViewport(lat=31.0, lng=-99.5, zoom=6),
    Region.florida: RegionViewport(lat=28.0, lng=-82.5, zoom=6),
    Region.other: RegionViewport(lat=39.8, lng=-98.6, zoom=4),
}


class FilterSet(BaseModel):
    """Structured filters detected in (or applied to) a search.

    Every field is independently optional. `None` means "no constraint" for filters and "no opinion"
    for sorting, so a caller merging a parsed `FilterSet` keeps its current sort when none was given.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    classification: Classification | None = None
    region: Region | None = None
    sort_by: SortKey | None = None
    sort_order: SortOrder | None = None
    min_rating: int | None = Field(default=None, ge=1, le=5)
    mine_only: bool | None = None

    @classmethod
    def defaults(cls) -> FilterSet:
        """The explicit default filter state (newest first, nothing else constrained)."""

        return cls(sort_by=SortKey.created_at, sort_order=SortOrder.desc)


class ParsedQuery(BaseModel):
    """The single interpretation of a free-text search query."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    normalized: str = ""
    filters: FilterSet = Field(default_factory=FilterSet)
    search_terms: tuple[str, ...] = ()
    place_reference: str | None = None
    # Region found in the text before a place reference overrode it.
    text_region: Region | None = None
    reset: bool = False


class GeoPoint(BaseModel):
    """A WGS84 coordinate pair."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)


class ForwardGeocodeResult(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    point: GeoPoint
    display_name: str = ""


class ReverseGeocodeResult(BaseModel):
    """The parts of a reverse geocode used for region classification."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    administrative_area_name: str | None = None
    country_code: str | None = None


class LocationSummary(BaseModel):
    """Minimal location shape needed for client-side text matching."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str
    description: str | None = None
    rating: int = Field(default=0, ge=0, le=5)
