"""
Reshape TVDB records into media-server metadata items.

Field renaming only; the one choice made here is which artwork and which
country content rating to expose.
"""

from typing import Any

from db.enums import ArtworkType
from db.schemas import (
    EpisodeMetadata,
    GuidTag,
    MediaContainer,
    SeasonMetadata,
    ShowMetadata,
    Tag,
)
from scrapers.tvdb_data import TVDB_IMAGE_BASE, filter_seasons_by_type
from utils import const
from utils.parser import (
    build_guid,
    episode_rating_key,
    season_rating_key,
    show_rating_key,
)


def image_url(path: str | None) -> str | None:
    if not path:
        return None
    if path.startswith("http"):
        return path
    return f"{TVDB_IMAGE_BASE}/{path.lstrip('/')}"


def metadata_key(rating_key: str, children: bool = False) -> str:
    key = f"{const.LIBRARY_METADATA_PATH}/{rating_key}"
    return f"{key}/children" if children else key


def _find_artwork(
    artworks: list[dict] | None,
    artwork_type: int,
    language: str = "eng",
) -> str | None:
    """
    Find artwork by type and language with fallback.

    Preferred language first, then English, then any language.
    """
    if not artworks:
        return None

    typed = [artwork for artwork in artworks if artwork and artwork.get("type") == artwork_type]
    for wanted in (language, "eng"):
        for artwork in typed:
            if artwork.get("language") == wanted:
                return image_url(artwork.get("image"))

    return image_url(typed[0].get("image")) if typed else None


def _extract_year(date_str: str | None) -> int | None:
    if not date_str:
        return None
    try:
        return int(date_str[:4])
    except (ValueError, TypeError):
        return None


def _external_guids(tvdb_id: Any, remote_ids_data: list[dict] | None) -> list[GuidTag]:
    guids = [GuidTag(id=f"tvdb://{tvdb_id}")] if tvdb_id is not None else []
    for remote in remote_ids_data or []:
        if not remote or not remote.get("id"):
            continue
        source = (remote.get("sourceName") or "").lower()
        if "imdb" in source:
            guids.append(GuidTag(id=f"imdb://{remote['id']}"))
        elif "tmdb" in source or "themoviedb" in source:
            guids.append(GuidTag(id=f"tmdb://{remote['id']}"))
    return guids


def _content_rating(content_ratings: list[dict] | None, country: str | None) -> str | None:
    if not content_ratings or not country:
        return None
    wanted = const.CONTENT_RATING_COUNTRIES.get(country.upper(), country.lower())
    for rating in content_ratings:
        if rating and (rating.get("country") or "").lower() == wanted:
            return rating.get("name")
    return None


def _studio(series: dict[str, Any]) -> str | None:
    network = series.get("originalNetwork") or series.get("latestNetwork") or {}
    return network.get("name")


def _runtime_ms(minutes: int | None) -> int | None:
    return minutes * const.MS_PER_MINUTE if minutes else None


def season_title(season_number: int, name: str | None = None) -> str:
    if name:
        return name
    return f"Season {season_number}" if season_number else "Specials"


def map_series(
    series: dict[str, Any],
    identifier: str,
    country: str | None = None,
    include_children: bool = False,
    season_type: str = "default",
) -> ShowMetadata:
    """Map an extended TVDB series record to a show item."""
    series_id = series.get("id")
    rating_key = show_rating_key(series_id)
    artworks = series.get("artworks")
    genres = [Tag(tag=genre["name"]) for genre in series.get("genres") or [] if genre and genre.get("name")]

    show = ShowMetadata(
        ratingKey=rating_key,
        key=metadata_key(rating_key, children=True),
        guid=build_guid(identifier, "show", rating_key),
        title=series.get("name"),
        originalTitle=series.get("name"),
        year=_extract_year(series.get("firstAired")) or _extract_year(series.get("year")),
        summary=series.get("overview"),
        originallyAvailableAt=series.get("firstAired"),
        thumb=image_url(series.get("image")) or _find_artwork(artworks, ArtworkType.SERIES_POSTER),
        art=_find_artwork(artworks, ArtworkType.SERIES_BACKGROUND),
        contentRating=_content_rating(series.get("contentRatings"), country),
        studio=_studio(series),
        duration=_runtime_ms(series.get("averageRuntime")),
        Genre=genres or None,
        Guid=_external_guids(series_id, series.get("remoteIds")),
    )

    if include_children:
        seasons = [
            map_season(season, series, identifier)
            for season in filter_seasons_by_type(series.get("seasons"), season_type)
        ]
        show.Children = MediaContainer.from_items(identifier, seasons)

    return show


def map_season(
    season: dict[str, Any],
    series: dict[str, Any],
    identifier: str,
    episodes: list[dict[str, Any]] | None = None,
    country: str | None = None,
) -> SeasonMetadata:
    """Map a TVDB season to a season item with its parent-show back-reference."""
    series_id = series.get("id")
    season_number = season.get("number") or 0
    rating_key = season_rating_key(series_id, season_number)
    parent_rating_key = show_rating_key(series_id)

    item = SeasonMetadata(
        ratingKey=rating_key,
        key=metadata_key(rating_key, children=True),
        guid=build_guid(identifier, "season", rating_key),
        title=season_title(season_number, season.get("name")),
        summary=season.get("overview"),
        index=season_number,
        year=_extract_year(season.get("year")),
        thumb=image_url(season.get("image")),
        parentRatingKey=parent_rating_key,
        parentKey=metadata_key(parent_rating_key),
        parentGuid=build_guid(identifier, "show", parent_rating_key),
        parentTitle=series.get("name"),
        parentThumb=image_url(series.get("image")),
        Guid=[GuidTag(id=f"tvdb://{season['id']}")] if season.get("id") else [],
    )

    if episodes is not None:
        items = [map_episode(episode, series, identifier, season_number, country) for episode in episodes]
        item.Children = MediaContainer.from_items(identifier, items)

    return item


def map_episode(
    episode: dict[str, Any],
    series: dict[str, Any],
    identifier: str,
    season_number: int | None = None,
    country: str | None = None,
    season_thumb: str | None = None,
) -> EpisodeMetadata:
    """Map a TVDB episode to an episode item with season and show back-references."""
    series_id = series.get("id")
    if season_number is None:
        season_number = episode.get("seasonNumber") or 0
    episode_number = episode.get("number") or 0

    rating_key = episode_rating_key(series_id, season_number, episode_number)
    parent_rating_key = season_rating_key(series_id, season_number)
    grandparent_rating_key = show_rating_key(series_id)

    return EpisodeMetadata(
        ratingKey=rating_key,
        key=metadata_key(rating_key),
        guid=build_guid(identifier, "episode", rating_key),
        title=episode.get("name"),
        summary=episode.get("overview"),
        index=episode_number,
        parentIndex=season_number,
        year=_extract_year(episode.get("aired")),
        originallyAvailableAt=episode.get("aired"),
        duration=_runtime_ms(episode.get("runtime")),
        thumb=image_url(episode.get("image")),
        contentRating=_content_rating(series.get("contentRatings"), country),
        parentRatingKey=parent_rating_key,
        parentKey=metadata_key(parent_rating_key),
        parentGuid=build_guid(identifier, "season", parent_rating_key),
        parentTitle=season_title(season_number),
        parentThumb=season_thumb,
        grandparentRatingKey=grandparent_rating_key,
        grandparentKey=metadata_key(grandparent_rating_key),
        grandparentGuid=build_guid(identifier, "show", grandparent_rating_key),
        grandparentTitle=series.get("name"),
        grandparentThumb=image_url(series.get("image")),
        Guid=_external_guids(episode.get("id"), episode.get("remoteIds")),
    )
