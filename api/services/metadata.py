"""Metadata service for rating-key lookups, children paging and images."""

import logging
from typing import Any

from api.exceptions import InvalidRatingKey
from db.enums import ArtworkType, ImageType, MetadataType, SeasonType
from db.schemas import ImageAsset, ImageContainer, MediaContainer
from scrapers.tvdb_data import TVDBClient, filter_seasons_by_type, find_season
from scrapers.tvdb_mapper import image_url, map_episode, map_season, map_series
from utils.lookup import Lookup, attempt
from utils.network import Paging, RequestLocale
from utils.parser import RatingKey, parse_rating_key

from .base import BaseService

SERIES_IMAGE_TYPES = {
    ArtworkType.SERIES_POSTER: ImageType.POSTER,
    ArtworkType.SERIES_BACKGROUND: ImageType.BACKGROUND,
    ArtworkType.SERIES_BANNER: ImageType.BANNER,
    ArtworkType.SERIES_CLEARLOGO: ImageType.CLEAR_LOGO,
}

SEASON_IMAGE_TYPES = {
    ArtworkType.SEASON_POSTER: ImageType.POSTER,
    ArtworkType.SEASON_BACKGROUND: ImageType.BACKGROUND,
    ArtworkType.SEASON_BANNER: ImageType.BANNER,
}


class MetadataService(BaseService):
    """Service for metadata operations keyed by the provider's rating keys.

    Rating keys encode the TVDB series id plus season/episode numbers, so
    every lookup starts from the extended series record.
    """

    def __init__(
        self,
        client: TVDBClient,
        identifier: str,
        logger: logging.Logger | None = None,
    ):
        super().__init__(client=client, identifier=identifier, logger=logger)

    @staticmethod
    def _parse(rating_key: str) -> RatingKey:
        key = parse_rating_key(rating_key)
        if key is None:
            raise InvalidRatingKey(rating_key)
        return key

    async def _load_series(self, series_id: int) -> Lookup[dict]:
        return await attempt(self.client.get_series_details(series_id), f"TVDB series {series_id}")

    def _paged(self, items: list, paging: Paging) -> MediaContainer:
        return MediaContainer.from_items(
            self.identifier,
            paging.slice(items),
            offset=paging.offset,
            total_size=len(items),
        )

    async def _season_episodes(self, series_id: int, season_number: int, season_type: str) -> list[dict[str, Any]]:
        lookup = await attempt(
            self.client.get_series_episodes(series_id, season_type, season=season_number),
            f"Episodes of season {season_number}",
        )
        return lookup.value["episodes"] if lookup.is_found else []

    async def get_metadata(
        self,
        rating_key: str,
        locale: RequestLocale,
        include_children: bool = False,
        episode_order: str | None = None,
    ) -> MediaContainer:
        """Get a single show, season or episode by rating key.

        Args:
            rating_key: Provider rating key
            locale: Request language and country
            include_children: Nest seasons (show) or episodes (season)
            episode_order: TVDB season type, "default" when not given

        Returns:
            Container with zero or one item
        """
        key = self._parse(rating_key)
        season_type = episode_order or SeasonType.DEFAULT

        series_lookup = await self._load_series(key.series_id)
        if not series_lookup.is_found:
            return self.empty_container()
        series = series_lookup.value

        match key.type:
            case MetadataType.SHOW:
                item = map_series(
                    series,
                    self.identifier,
                    country=locale.country,
                    include_children=include_children,
                    season_type=season_type,
                )
            case MetadataType.SEASON:
                season = find_season(series.get("seasons"), key.season_number, season_type)
                if not season:
                    return self.empty_container()
                episodes = None
                if include_children:
                    episodes = await self._season_episodes(key.series_id, key.season_number, season_type)
                item = map_season(season, series, self.identifier, episodes=episodes, country=locale.country)
            case _:
                lookup = await attempt(
                    self.client.get_episode_by_number(
                        key.series_id, key.season_number, key.episode_number, season_type
                    ),
                    f"Episode {rating_key}",
                )
                if not lookup.is_found:
                    return self.empty_container()
                season = find_season(series.get("seasons"), key.season_number, season_type)
                item = map_episode(
                    lookup.value,
                    series,
                    self.identifier,
                    season_number=key.season_number,
                    country=locale.country,
                    season_thumb=image_url(season.get("image")) if season else None,
                )

        return MediaContainer.from_items(self.identifier, [item])

    async def get_children(
        self,
        rating_key: str,
        locale: RequestLocale,
        paging: Paging,
        episode_order: str | None = None,
    ) -> MediaContainer:
        """Seasons of a show or episodes of a season, paged."""
        key = self._parse(rating_key)
        season_type = episode_order or SeasonType.DEFAULT

        if key.type == MetadataType.EPISODE:
            return self.empty_container()

        series_lookup = await self._load_series(key.series_id)
        if not series_lookup.is_found:
            return self.empty_container()
        series = series_lookup.value

        if key.type == MetadataType.SHOW:
            items = [
                map_season(season, series, self.identifier)
                for season in filter_seasons_by_type(series.get("seasons"), season_type)
            ]
            return self._paged(items, paging)

        season = find_season(series.get("seasons"), key.season_number, season_type)
        if not season:
            return self.empty_container()

        season_thumb = image_url(season.get("image"))
        episodes = await self._season_episodes(key.series_id, key.season_number, season_type)
        items = [
            map_episode(
                episode,
                series,
                self.identifier,
                season_number=key.season_number,
                country=locale.country,
                season_thumb=season_thumb,
            )
            for episode in episodes
        ]
        return self._paged(items, paging)

    async def get_grandchildren(
        self,
        rating_key: str,
        locale: RequestLocale,
        paging: Paging,
    ) -> MediaContainer:
        """Every episode of a show across seasons, paged.

        Translations are only fetched for the episodes on the requested page.
        """
        key = self._parse(rating_key)
        if key.type != MetadataType.SHOW:
            return self.empty_container()

        series_lookup = await self._load_series(key.series_id)
        if not series_lookup.is_found:
            return self.empty_container()
        series = series_lookup.value

        episodes = await self.client.get_all_series_episodes(key.series_id, apply_translations=False)
        page = await self.client.translate_episodes(paging.slice(episodes))
        items = [map_episode(episode, series, self.identifier, country=locale.country) for episode in page]
        return MediaContainer.from_items(
            self.identifier,
            items,
            offset=paging.offset,
            total_size=len(episodes),
        )

    def _artwork_images(
        self,
        artworks: list[dict[str, Any]] | None,
        type_map: dict[ArtworkType, ImageType],
        alt: str | None,
    ) -> list[ImageAsset]:
        """Known artwork types in type order, client-language artwork first within a type."""
        images = []
        for artwork_type, image_type in type_map.items():
            typed = [a for a in artworks or [] if a and a.get("type") == artwork_type and a.get("image")]
            typed.sort(key=lambda artwork: artwork.get("language") != self.client.language)
            images.extend(ImageAsset(type=image_type, url=image_url(a["image"]), alt=alt) for a in typed)
        return images

    async def get_images(self, rating_key: str, locale: RequestLocale) -> ImageContainer:
        """All image assets of a show, season or episode."""
        key = self._parse(rating_key)
        images: list[ImageAsset] = []

        series_lookup = await self._load_series(key.series_id)
        if series_lookup.is_found:
            series = series_lookup.value
            title = series.get("name")

            match key.type:
                case MetadataType.SHOW:
                    artworks = await self.client.get_series_artworks(key.series_id)
                    images = self._artwork_images(artworks, SERIES_IMAGE_TYPES, title)
                case MetadataType.SEASON:
                    season = find_season(series.get("seasons"), key.season_number)
                    if season:
                        details = await self.client.get_season_details(season["id"], apply_translations=False)
                        alt = f"{title} - Season {key.season_number}"
                        images = self._artwork_images(details.get("artwork"), SEASON_IMAGE_TYPES, alt)
                        if not images and season.get("image"):
                            images = [ImageAsset(type=ImageType.POSTER, url=image_url(season["image"]), alt=alt)]
                case _:
                    episode = await self.client.get_episode_by_number(
                        key.series_id, key.season_number, key.episode_number
                    )
                    if episode and episode.get("image"):
                        images = [
                            ImageAsset(
                                type=ImageType.SNAPSHOT,
                                url=image_url(episode["image"]),
                                alt=episode.get("name"),
                            )
                        ]

        return ImageContainer(
            identifier=self.identifier,
            offset=0,
            totalSize=len(images),
            size=len(images),
            Image=images,
        )
