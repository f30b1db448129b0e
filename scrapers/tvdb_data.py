"""
TVDB API v4 client used to fulfil provider requests.
Uses token-based authentication; the token is cached on the client instance.
"""

import asyncio
import logging
from datetime import datetime, timedelta
from typing import Any

import httpx

from db.enums import SeasonType
from utils.const import UA_HEADER

logger = logging.getLogger(__name__)

# TVDB API Configuration
TVDB_API_URL = "https://api4.thetvdb.com/v4"
TVDB_IMAGE_BASE = "https://artworks.thetvdb.com"

DEFAULT_AIR_DATE_MAX_PAGES = 20


class TVDBError(Exception):
    """Raised when TVDB answers with something the client cannot use."""

    pass


def get_series_id(result: dict[str, Any]) -> int:
    """Read the numeric series id from a search or remote-id result.

    Search results carry ``tvdb_id`` ("76885") and a prefixed ``id``
    ("series-76885"); extended records carry a plain integer ``id``.
    """
    raw_id = result.get("tvdb_id") or result.get("id")
    if raw_id is None:
        raise ValueError("TVDB result has no series id")
    return int(str(raw_id).removeprefix("series-"))


def find_season(
    seasons: list[dict[str, Any]] | None,
    season_number: int,
    season_type: str = SeasonType.DEFAULT,
) -> dict[str, Any] | None:
    """Pick a season by number, falling back across season types.

    Exact type first, then TVDB's "official" type when "default" was asked
    for, then any season carrying the number.
    """
    seasons = [season for season in seasons or [] if season and season.get("number") == season_number]

    def _of_type(wanted: str) -> dict[str, Any] | None:
        for season in seasons:
            if (season.get("type") or {}).get("type") == wanted:
                return season
        return None

    season = _of_type(season_type)
    if not season and season_type == SeasonType.DEFAULT:
        season = _of_type(SeasonType.OFFICIAL)
    if not season and seasons:
        season = seasons[0]
    return season


def filter_seasons_by_type(
    seasons: list[dict[str, Any]] | None,
    season_type: str = SeasonType.DEFAULT,
) -> list[dict[str, Any]]:
    """All seasons of one ordering, using the same fallback as ``find_season``."""
    seasons = [season for season in seasons or [] if season]
    candidates = [season_type]
    if season_type == SeasonType.DEFAULT:
        candidates.append(SeasonType.OFFICIAL)

    for wanted in candidates:
        selected = [s for s in seasons if (s.get("type") or {}).get("type") == wanted]
        if selected:
            return sorted(selected, key=lambda s: s.get("number") or 0)

    # No ordering matched: keep one season per number
    by_number: dict[int, dict[str, Any]] = {}
    for season in seasons:
        by_number.setdefault(season.get("number") or 0, season)
    return [by_number[number] for number in sorted(by_number)]


class TVDBClient:
    """Async TVDB v4 client.

    One instance is shared by all requests of the process; it owns the
    underlying ``httpx.AsyncClient`` and the bearer token.
    """

    def __init__(
        self,
        api_key: str | None,
        *,
        base_url: str = TVDB_API_URL,
        language: str = "eng",
        token_ttl: timedelta = timedelta(hours=24),
        timeout: float = 30,
        proxy: str | None = None,
        air_date_max_pages: int = DEFAULT_AIR_DATE_MAX_PAGES,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.language = language.lower()
        self.air_date_max_pages = air_date_max_pages
        self._token: str | None = None
        self._token_expires_at: datetime | None = None
        self._token_ttl = token_ttl
        self._token_lock = asyncio.Lock()
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            proxy=proxy,
            transport=transport,
            headers={"Accept": "application/json", **UA_HEADER},
            event_hooks={"request": [self._log_request], "response": [self._log_response]},
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        await self._client.aclose()

    @staticmethod
    async def _log_request(request: httpx.Request):
        logger.info(f"TVDB API Request: {request.method} {request.url}")

    @staticmethod
    async def _log_response(response: httpx.Response):
        request = response.request
        logger.info(f"TVDB API Response: {response.status_code} {request.method} {request.url.path}")

    # -------------------------------------------------------------------------
    # Authentication
    # -------------------------------------------------------------------------

    @property
    def has_valid_token(self) -> bool:
        return bool(self._token and self._token_expires_at and datetime.now() < self._token_expires_at)

    async def login(self) -> str:
        """Authenticate with TVDB and cache the token."""
        if not self.api_key:
            raise TVDBError("TVDB API key is not configured")

        response = await self._client.post("/login", json={"apikey": self.api_key})
        response.raise_for_status()
        token = (response.json().get("data") or {}).get("token")
        if not token:
            raise TVDBError("No token in TVDB login response")

        # Tokens last about a month; refresh well before that
        self._token = token
        self._token_expires_at = datetime.now() + self._token_ttl
        logger.info("TVDB API: Successfully authenticated")
        return token

    async def _ensure_token(self) -> str:
        if self.has_valid_token:
            return self._token
        async with self._token_lock:
            if self.has_valid_token:
                return self._token
            return await self.login()

    async def _request(
        self,
        endpoint: str,
        method: str = "GET",
        params: dict | None = None,
    ) -> dict[str, Any]:
        """Make an authenticated request and return the decoded payload."""
        token = await self._ensure_token()
        headers = {
            "Authorization": f"Bearer {token}",
            "Accept-Language": self.language,
        }

        try:
            response = await self._client.request(method, endpoint, headers=headers, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            # Missing translations and records are routine 404s
            log = logger.debug if e.response.status_code == 404 else logger.error
            log(f"TVDB API Error: {e.response.status_code} {method} {endpoint}")
            raise
        except httpx.RequestError as e:
            logger.error(f"TVDB API Network Error: {e}")
            raise

        try:
            return response.json()
        except ValueError as e:
            raise TVDBError(f"Invalid JSON from TVDB for {endpoint}: {e}") from e

    async def _request_data(self, endpoint: str, params: dict | None = None) -> Any:
        payload = await self._request(endpoint, params=params)
        return payload.get("data")

    # -------------------------------------------------------------------------
    # Search
    # -------------------------------------------------------------------------

    def _has_language(self, result: dict[str, Any]) -> bool:
        return bool(
            result.get("primary_language") == self.language
            or (result.get("translations") or {}).get(self.language)
            or (result.get("overviews") or {}).get(self.language)
        )

    async def search_series(
        self,
        query: str,
        year: int | None = None,
        search_type: str = "series",
    ) -> list[dict[str, Any]]:
        """
        Search TVDB for series.

        Results offering a name or overview in the client language come
        first; the upstream order is kept otherwise.

        Args:
            query: Search query
            year: Optional first-aired year filter
            search_type: TVDB search type

        Returns:
            List of search results
        """
        params = {"query": query, "type": search_type}
        if year:
            params["year"] = str(year)

        results = await self._request_data("/search", params=params) or []
        return sorted(results, key=lambda result: not self._has_language(result))

    async def find_series_by_remote_id(self, remote_id: str) -> list[dict[str, Any]]:
        """
        Find series by an external id (IMDb, TMDB).

        Args:
            remote_id: External id such as ``tt0213338``

        Returns:
            Series records attached to the remote id
        """
        results = await self._request_data(f"/search/remoteid/{remote_id}") or []
        return [result["series"] for result in results if isinstance(result.get("series"), dict)]

    # -------------------------------------------------------------------------
    # Series
    # -------------------------------------------------------------------------

    async def get_series_details(self, series_id: int, meta: str | None = None) -> dict[str, Any]:
        """Get the extended series record with the client-language name and overview applied."""
        params = {"meta": meta} if meta else None
        series = await self._request_data(f"/series/{series_id}/extended", params=params)
        if not series:
            raise TVDBError(f"Series {series_id} returned no data")

        translation = await self.get_series_translation(series_id)
        if translation.get("name"):
            series["name"] = translation["name"]
        if translation.get("overview"):
            series["overview"] = translation["overview"]
        return series

    async def get_series_translation(self, series_id: int, language: str | None = None) -> dict[str, Any]:
        language = language or self.language
        try:
            return await self._request_data(f"/series/{series_id}/translations/{language}") or {}
        except (httpx.HTTPError, TVDBError) as e:
            logger.debug(f"No {language} translation for series {series_id}: {e}")
            return {"name": "", "overview": "", "language": language}

    async def get_series_artworks(
        self,
        series_id: int,
        artwork_type: int | None = None,
        lang: str | None = None,
    ) -> list[dict[str, Any]]:
        params = {}
        if artwork_type:
            params["type"] = str(artwork_type)
        if lang:
            params["lang"] = lang

        data = await self._request_data(f"/series/{series_id}/artworks", params=params or None)
        return (data or {}).get("artworks") or []

    async def get_season_by_number(
        self,
        series_id: int,
        season_number: int,
        season_type: str = SeasonType.DEFAULT,
    ) -> dict[str, Any] | None:
        series = await self.get_series_details(series_id)
        return find_season(series.get("seasons"), season_number, season_type)

    # -------------------------------------------------------------------------
    # Seasons and episodes
    # -------------------------------------------------------------------------

    async def translate_episodes(self, episodes: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """Apply client-language names and overviews to episodes concurrently."""
        translations = await asyncio.gather(
            *(self.get_episode_translation(episode["id"]) for episode in episodes)
        )
        for episode, translation in zip(episodes, translations):
            if translation.get("name"):
                episode["name"] = translation["name"]
            if translation.get("overview"):
                episode["overview"] = translation["overview"]
        return episodes

    async def get_season_details(self, season_id: int, apply_translations: bool = True) -> dict[str, Any]:
        season = await self._request_data(f"/seasons/{season_id}/extended")
        if not season:
            raise TVDBError(f"Season {season_id} returned no data")
        if apply_translations and season.get("episodes"):
            season["episodes"] = await self.translate_episodes(season["episodes"])
        return season

    async def get_series_episodes(
        self,
        series_id: int,
        season_type: str = SeasonType.DEFAULT,
        season: int | None = None,
        page: int | None = None,
        apply_translations: bool = True,
    ) -> dict[str, Any]:
        """
        Get one page of episodes for a series.

        Args:
            series_id: TVDB series ID
            season_type: Episode ordering (default, official, dvd, absolute, ...)
            season: Optional season number filter
            page: Optional page number (0-based)
            apply_translations: Whether to fetch client-language translations

        Returns:
            Dict with ``episodes`` and ``series`` keys
        """
        params = {}
        if season is not None:
            params["season"] = str(season)
        if page:
            params["page"] = str(page)

        data = await self._request_data(f"/series/{series_id}/episodes/{season_type}", params=params or None)
        data = data or {}
        episodes = data.get("episodes") or []
        if apply_translations and episodes:
            episodes = await self.translate_episodes(episodes)
        return {"episodes": episodes, "series": data.get("series") or {}}

    async def get_all_series_episodes(
        self,
        series_id: int,
        season_type: str = SeasonType.DEFAULT,
        apply_translations: bool = True,
    ) -> list[dict[str, Any]]:
        """Collect episode pages until an empty page, bounded by ``air_date_max_pages``."""
        all_episodes = []
        for page in range(self.air_date_max_pages):
            result = await self.get_series_episodes(
                series_id, season_type, page=page, apply_translations=apply_translations
            )
            if not result["episodes"]:
                break
            all_episodes.extend(result["episodes"])
        return all_episodes

    async def get_episode_details(self, episode_id: int) -> dict[str, Any]:
        episode = await self._request_data(f"/episodes/{episode_id}/extended")
        if not episode:
            raise TVDBError(f"Episode {episode_id} returned no data")
        await self.translate_episodes([episode])
        return episode

    async def get_episode_translation(self, episode_id: int, language: str | None = None) -> dict[str, Any]:
        language = language or self.language
        try:
            return await self._request_data(f"/episodes/{episode_id}/translations/{language}") or {}
        except (httpx.HTTPError, TVDBError) as e:
            logger.debug(f"No {language} translation for episode {episode_id}: {e}")
            return {"name": "", "overview": "", "language": language}

    async def get_episode_by_number(
        self,
        series_id: int,
        season_number: int,
        episode_number: int,
        season_type: str = SeasonType.DEFAULT,
    ) -> dict[str, Any] | None:
        result = await self.get_series_episodes(series_id, season_type, season=season_number)
        for episode in result["episodes"]:
            if episode.get("number") == episode_number:
                return episode
        return None

    async def get_episode_by_air_date(
        self,
        series_id: int,
        air_date: str,
        season_type: str = SeasonType.DEFAULT,
    ) -> dict[str, Any] | None:
        """Scan episode pages in order for the first episode aired on ``air_date``."""
        for page in range(self.air_date_max_pages):
            result = await self.get_series_episodes(series_id, season_type, page=page, apply_translations=False)
            episodes = result["episodes"]
            if not episodes:
                break

            for episode in episodes:
                if episode.get("aired") == air_date:
                    # Only the match needs a translation
                    await self.translate_episodes([episode])
                    return episode

        return None
