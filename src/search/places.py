"""Place-reference extraction ("bend, oregon", "florence, or", "seattle washington").

This is a best-effort heuristic for handing a "locality, state" string to a forward geocoder. It does
not validate that the locality exists.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from src.search.regions import STATE_REGIONS

# Leading words that are captured by the locality patterns but are never part of a town name.
PLACE_FILLER_WORDS: tuple[str, ...] = (
    "bash", "race", "crawl", "hobby", "airfield", "boat",
    "spot", "spots", "track", "tracks", "shop", "shops", "area", "areas",
    "find", "show", "near", "me", "in", "at", "around", "the", "by", "all", "any",
    "rc", "places", "place", "locations", "location",
    "best", "top", "good", "great", "star", "stars", "rated", "highly",
)


def _state_alternation() -> str:
    # Longest first so "west virginia" is preferred over "virginia" and names over abbreviations.
    tokens = {s.name for s in STATE_REGIONS} | {s.abbreviation for s in STATE_REGIONS}
    parts = sorted(tokens, key=lambda t: (-len(t), t))
    return "|".join(re.escape(p).replace(r"\ ", r"\s+") for p in parts)


_STATE = rf"(?P<state>{_state_alternation()})(?![a-z])"

# Longest locality captured before a comma ("rancho santa margarita"). Bounding it keeps the search
# linear in the query length.
_MAX_LOCALITY_WORDS = 3

# Words after which the locality starts: "trails with jumps near florence" -> "florence".
_LOCALITY_PREFIX_RE = re.compile(r"^.*\b(?:near|in|at|around|outside)\s+", flags=re.IGNORECASE)

_PLACE_PATTERNS: tuple[re.Pattern[str], ...] = (
    # Multi-word locality, comma, state: "los angeles, ca", "spots in florence, or".
    re.compile(
        rf"\b(?P<locality>[a-z]+(?:\s+[a-z]+){{0,{_MAX_LOCALITY_WORDS - 1}}}),\s*{_STATE}",
        flags=re.IGNORECASE,
    ),
    # Single-word locality, comma, state.
    re.compile(rf"\b(?P<locality>[a-z]+),\s*{_STATE}", flags=re.IGNORECASE),
    # Locality directly followed by a state at the end of the query: "seattle washington".
    re.compile(rf"\b(?P<locality>[a-z]+)\s+{_STATE}\s*$", flags=re.IGNORECASE),
)

_FILLER_RE = re.compile(
    rf"^(?:{'|'.join(re.escape(w) for w in PLACE_FILLER_WORDS)})(?:\s+|$)",
    flags=re.IGNORECASE,
)


@dataclass(frozen=True)
class PlaceMatch:
    """An extracted place reference and the character span of the text it consumed."""

    locality: str
    state: str
    start: int
    end: int

    @property
    def reference(self) -> str:
        return f"{self.locality}, {self.state}"


def _strip_filler(locality: str) -> str:
    value = _LOCALITY_PREFIX_RE.sub("", locality.strip(), count=1)
    while True:
        stripped = _FILLER_RE.sub("", value, count=1).strip()
        if stripped == value:
            return value
        value = stripped


def extract_place_span(text: str) -> PlaceMatch | None:
    """Find the first place reference and the span (locality start to state end) it consumed."""

    text = text or ""
    for pattern in _PLACE_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue

        locality = _strip_filler(match.group("locality"))
        if not locality:
            continue

        state = re.sub(r"\s+", " ", match.group("state"))
        return PlaceMatch(
            locality=locality,
            state=state,
            start=match.end("locality") - len(locality),
            end=match.end("state"),
        )
    return None


def extract_place(text: str) -> str | None:
    """Return a "locality, state" reference for the geocoder, or `None`."""

    place = extract_place_span(text)
    return place.reference if place else None
