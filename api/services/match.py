"""Match service resolving loose show, season and episode hints to TVDB entities."""

import logging
from typing import Any

from api.exceptions import InvalidMatchRequest, UnsupportedMetadataType
from db.enums import MetadataType, SeasonType
from db.schemas import MatchRequest, MediaContainer
from scrapers.tvdb_data import TVDBClient, find_season, get_series_id
from scrapers.tvdb_mapper import image_url, map_episode, map_season, map_series
from utils.lookup import Lookup, attempt
from utils.network import RequestLocale
from utils.parser import parse_external_guid, parse_year_from_title

from .base import BaseService


class MatchService(BaseService):
    """Service for match operations.

    Show matches try the external id first and fall back to a title search.
    Season and episode matches always go through a title search for the
    show, then narrow down to the requested season or episode.
    """

    def __init__(
        self,
        client: TVDBClient,
        identifier: str,
        manual_limit: int = 5,
        logger: logging.Logger | None = None,
    ):
        super().__init__(client=client, identifier=identifier, logger=logger)
        self.manual_limit = manual_limit

    async def match(self, request: MatchRequest, locale: RequestLocale) -> MediaContainer:
        """Dispatch a match request on its metadata type.

        Raises:
            UnsupportedMetadataType: For anything but show, season or episode.
            InvalidMatchRequest: For episode requests without indices or date.
        """
        match request.type:
            case MetadataType.SHOW:
                return await self.match_show(request, locale)
            case MetadataType.SEASON:
                return await self.match_season(request, locale)
            case MetadataType.EPISODE:
                return await self.match_episode(request, locale)
            case _:
                raise UnsupportedMetadataType(request.type)

    @staticmethod
    def resolve_title_year(title: str, explicit_year: int | None) -> tuple[str, int | None]:
        """Clean the title; an explicit year wins over one found in the title."""
        clean_title, extracted_year = parse_year_from_title(title)
        return clean_title, explicit_year or extracted_year

    @staticmethod
    def season_type(request: MatchRequest) -> str:
        return request.episodeOrder or SeasonType.DEFAULT

    async def _fetch_series(self, result: dict[str, Any]) -> Lookup[dict]:
        """Fetch full series details for a search or remote-id result."""
        try:
            series_id = get_series_id(result)
        except ValueError as e:
            return Lookup.failed(str(e))
        return await attempt(self.client.get_series_details(series_id), f"TVDB series {series_id}")

    async def _find_series_by_guid(self, guid: str) -> Lookup[dict]:
        parsed = parse_external_guid(guid)
        if not parsed:
            return Lookup.not_found(f"Unparseable guid {guid!r}")

        scheme, value = parsed
        match scheme:
            case "tvdb":
                return await self._fetch_series({"tvdb_id": value})
            case "imdb" | "tmdb":
                remote = await attempt(
                    self.client.find_series_by_remote_id(value),
                    f"{scheme} remote id {value}",
                )
                if not remote.is_found:
                    return remote
                return await self._fetch_series(remote.value[0])
            case _:
                return Lookup.not_found(f"Unsupported guid scheme {scheme!r}")

    async def _find_show(self, title: str, explicit_year: int | None) -> Lookup[dict]:
        """Search by title and fetch the first result's details."""
        clean_title, year = self.resolve_title_year(title, explicit_year)
        results = await self.client.search_series(clean_title, year)
        if not results:
            return Lookup.not_found(f"No series found for {clean_title!r} ({year})")
        return await self._fetch_series(results[0])

    async def match_show(self, request: MatchRequest, locale: RequestLocale) -> MediaContainer:
        shows = []

        def add(series: dict) -> None:
            shows.append(
                map_series(
                    series,
                    self.identifier,
                    country=locale.country,
                    include_children=request.include_children,
                    season_type=self.season_type(request),
                )
            )

        if request.guid:
            lookup = await self._find_series_by_guid(request.guid)
            if lookup.is_found:
                add(lookup.value)
            else:
                self.logger.info(f"Guid {request.guid} not matched ({lookup.reason}), trying title")

        if not shows and request.title:
            clean_title, year = self.resolve_title_year(request.title, request.year)
            results = await self.client.search_series(clean_title, year)
            limit = self.manual_limit if request.is_manual else 1

            for result in results[:limit]:
                lookup = await self._fetch_series(result)
                if lookup.is_found:
                    add(lookup.value)

        return MediaContainer.from_items(self.identifier, shows)

    async def match_season(self, request: MatchRequest, locale: RequestLocale) -> MediaContainer:
        if not request.parentTitle or request.index is None:
            return self.empty_container()

        show = await self._find_show(request.parentTitle, request.year)
        if not show.is_found:
            return self.empty_container()

        series = show.value
        season = find_season(series.get("seasons"), request.index, self.season_type(request))
        if not season:
            self.logger.info(f"Season {request.index} not found for series {series.get('id')}")
            return self.empty_container()

        episodes = None
        if request.include_children:
            lookup = await attempt(
                self.client.get_series_episodes(series["id"], self.season_type(request), season=request.index),
                f"Episodes of season {request.index}",
            )
            episodes = lookup.value["episodes"] if lookup.is_found else []

        item = map_season(season, series, self.identifier, episodes=episodes, country=locale.country)
        return MediaContainer.from_items(self.identifier, [item])

    async def match_episode(self, request: MatchRequest, locale: RequestLocale) -> MediaContainer:
        has_indexes = request.index is not None and request.parentIndex is not None
        has_date = request.date is not None

        if not request.grandparentTitle or not (has_indexes or has_date):
            raise InvalidMatchRequest("Episode matching requires either (index + parentIndex) or date parameter")

        show = await self._find_show(request.grandparentTitle, request.year)
        if not show.is_found:
            return self.empty_container()

        series = show.value
        series_id = series["id"]
        season_type = self.season_type(request)

        if has_indexes:
            lookup = await attempt(
                self.client.get_episode_by_number(series_id, request.parentIndex, request.index, season_type),
                f"Episode S{request.parentIndex}E{request.index} of series {series_id}",
            )
        else:
            lookup = await attempt(
                self.client.get_episode_by_air_date(series_id, request.date, season_type),
                f"Episode aired {request.date} of series {series_id}",
            )

        if not lookup.is_found:
            return self.empty_container()

        episode = lookup.value
        season_number = request.parentIndex if has_indexes else episode.get("seasonNumber") or 0
        season = find_season(series.get("seasons"), season_number, season_type)

        item = map_episode(
            episode,
            series,
            self.identifier,
            season_number=season_number,
            country=locale.country,
            season_thumb=image_url(season.get("image")) if season else None,
        )
        return MediaContainer.from_items(self.identifier, [item])
