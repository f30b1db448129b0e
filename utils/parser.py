"""
Parsing helpers for match hints and provider identifiers.

Exports:
    - parse_year_from_title(): Split a trailing release year off a title
    - parse_external_guid(): Split ``scheme://value`` external ids
    - parse_rating_key(): Decode the provider's own rating keys
    - RatingKey: Dataclass with decoded rating key components
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from db.enums import MetadataType

# =============================================================================
# Constants
# =============================================================================

MIN_TITLE_YEAR = 1900
MAX_TITLE_YEAR = 2100

# Tried in order; the year has to be the trailing token
TITLE_YEAR_PATTERNS: list[re.Pattern] = [
    re.compile(r"^(.+?)\s*\((\d{4})\)\s*$"),  # Cowboy Bebop (1998)
    re.compile(r"^(.+?)\s*\[(\d{4})\]\s*$"),  # Cowboy Bebop [1998]
    re.compile(r"^(.+?)\s*-\s*(\d{4})\s*$"),  # Cowboy Bebop - 1998
]

EXTERNAL_GUID_PATTERN = re.compile(r"^([^:]+)://(.+)$")

RATING_KEY_PATTERNS: dict[MetadataType, re.Pattern] = {
    MetadataType.SHOW: re.compile(r"^tvdb-show-(\d+)$"),
    MetadataType.SEASON: re.compile(r"^tvdb-season-(\d+)-(\d+)$"),
    MetadataType.EPISODE: re.compile(r"^tvdb-episode-(\d+)-(\d+)-(\d+)$"),
}


# =============================================================================
# Titles and external ids
# =============================================================================


def parse_year_from_title(title: str) -> tuple[str, int | None]:
    """Extract a trailing year from a title.

    Matches "Title (1998)", "Title [1998]" and "Title - 1998". Years outside
    1900-2100 are not treated as years and the next pattern is tried.

    Args:
        title: Free-text title

    Returns:
        Tuple of (clean title, year) or (original title, None)
    """
    for pattern in TITLE_YEAR_PATTERNS:
        match = pattern.match(title)
        if not match:
            continue
        year = int(match.group(2))
        if MIN_TITLE_YEAR <= year <= MAX_TITLE_YEAR:
            return match.group(1).strip(), year

    return title, None


def parse_external_guid(guid: str) -> tuple[str, str] | None:
    """Split an external id like ``imdb://tt0213338`` into (scheme, value)."""
    match = EXTERNAL_GUID_PATTERN.match(guid)
    if not match:
        return None
    return match.group(1), match.group(2)


# =============================================================================
# Rating keys
# =============================================================================


@dataclass(frozen=True)
class RatingKey:
    """Decoded provider rating key."""

    type: MetadataType
    series_id: int
    season_number: int | None = None
    episode_number: int | None = None


def parse_rating_key(rating_key: str) -> RatingKey | None:
    """Decode ``tvdb-show-{id}``, ``tvdb-season-{id}-{n}`` or ``tvdb-episode-{id}-{s}-{e}``."""
    for metadata_type, pattern in RATING_KEY_PATTERNS.items():
        match = pattern.match(rating_key)
        if match:
            numbers = [int(group) for group in match.groups()]
            return RatingKey(metadata_type, *numbers)
    return None


def show_rating_key(series_id: int | str) -> str:
    return f"tvdb-show-{series_id}"


def season_rating_key(series_id: int | str, season_number: int) -> str:
    return f"tvdb-season-{series_id}-{season_number}"


def episode_rating_key(series_id: int | str, season_number: int, episode_number: int) -> str:
    return f"tvdb-episode-{series_id}-{season_number}-{episode_number}"


def build_guid(identifier: str, kind: str, rating_key: str) -> str:
    """Provider guid, e.g. ``{identifier}://show/tvdb-show-76885``."""
    return f"{identifier}://{kind}/{rating_key}"
