"""
Pytest configuration and shared fixtures for the TVDB provider tests.
"""

import copy

import httpx
import pytest

from scrapers.tvdb_data import TVDBClient, TVDBError
from utils.network import RequestLocale

IDENTIFIER = "tv.plex.agents.custom.example.thetvdb.tv"
TVDB_TEST_URL = "https://tvdb.test"


def make_series():
    """Extended TVDB series record for Cowboy Bebop."""
    return {
        "id": 76885,
        "name": "Cowboy Bebop",
        "overview": "The futuristic misadventures of a bounty hunter crew.",
        "firstAired": "1998-04-03",
        "year": "1998",
        "image": "/banners/posters/76885-1.jpg",
        "averageRuntime": 25,
        "originalNetwork": {"name": "TV Tokyo"},
        "genres": [{"name": "Animation"}, {"name": "Action"}],
        "contentRatings": [
            {"country": "usa", "name": "TV-14"},
            {"country": "gbr", "name": "15"},
        ],
        "remoteIds": [
            {"id": "tt0213338", "sourceName": "IMDB"},
            {"id": "30991", "sourceName": "TheMovieDB.com"},
        ],
        "artworks": [
            {"type": 2, "image": "https://artworks.thetvdb.com/banners/posters/76885-2.jpg", "language": "eng"},
            {"type": 3, "image": "/banners/fanart/original/76885-1.jpg", "language": None},
        ],
        "seasons": [
            {"id": 1001, "number": 0, "type": {"type": "official"}, "image": "/banners/seasons/76885-0.jpg"},
            {"id": 1002, "number": 1, "type": {"type": "official"}, "image": "/banners/seasons/76885-1.jpg"},
            {"id": 2002, "number": 1, "type": {"type": "dvd"}, "image": "/banners/seasons/76885-dvd-1.jpg"},
        ],
    }


def make_episodes():
    return [
        {
            "id": 5001,
            "name": "Asteroid Blues",
            "overview": "Spike and Jet chase Asimov Solensan.",
            "aired": "1998-10-23",
            "runtime": 24,
            "seasonNumber": 1,
            "number": 1,
            "image": "/banners/episodes/76885/5001.jpg",
        },
        {
            "id": 5002,
            "name": "Stray Dog Strut",
            "overview": "Ein joins the crew.",
            "aired": "1998-10-30",
            "runtime": 24,
            "seasonNumber": 1,
            "number": 2,
            "image": None,
        },
        {
            "id": 5003,
            "name": "Session XX: Mish-Mash Blues",
            "overview": "A recap special.",
            "aired": "1999-06-01",
            "runtime": 24,
            "seasonNumber": 0,
            "number": 1,
            "image": "/banners/episodes/76885/5003.jpg",
        },
    ]


class FakeTVDBClient:
    """In-memory stand-in for TVDBClient that records every call."""

    language = "eng"

    def __init__(
        self,
        series: list[dict] | None = None,
        search_results: list[dict] | None = None,
        remote_results: dict[str, list[dict]] | None = None,
        episodes: dict[int, list[dict]] | None = None,
        artworks: dict[int, list[dict]] | None = None,
        season_details: dict[int, dict] | None = None,
    ):
        self.series = {record["id"]: record for record in series or []}
        self.search_results = search_results or []
        self.remote_results = remote_results or {}
        self.episodes = episodes or {}
        self.artworks = artworks or {}
        self.season_details = season_details or {}
        self.failing_series: set[int] = set()
        self.calls: list[tuple] = []

    def called(self, name: str) -> list[tuple]:
        return [call for call in self.calls if call[0] == name]

    async def search_series(self, query, year=None, search_type="series"):
        self.calls.append(("search_series", query, year))
        return copy.deepcopy(self.search_results)

    async def find_series_by_remote_id(self, remote_id):
        self.calls.append(("find_series_by_remote_id", remote_id))
        return copy.deepcopy(self.remote_results.get(remote_id, []))

    async def get_series_details(self, series_id, meta=None):
        self.calls.append(("get_series_details", series_id))
        if series_id in self.failing_series or series_id not in self.series:
            raise TVDBError(f"Series {series_id} returned no data")
        return copy.deepcopy(self.series[series_id])

    async def get_series_episodes(self, series_id, season_type="default", season=None, page=None, apply_translations=True):
        self.calls.append(("get_series_episodes", series_id, season_type, season))
        episodes = [
            episode
            for episode in self.episodes.get(series_id, [])
            if season is None or episode["seasonNumber"] == season
        ]
        return {"episodes": copy.deepcopy(episodes), "series": {}}

    async def get_all_series_episodes(self, series_id, season_type="default", apply_translations=True):
        self.calls.append(("get_all_series_episodes", series_id, apply_translations))
        return copy.deepcopy(self.episodes.get(series_id, []))

    async def translate_episodes(self, episodes):
        self.calls.append(("translate_episodes", [episode["id"] for episode in episodes]))
        return episodes

    async def get_episode_by_number(self, series_id, season_number, episode_number, season_type="default"):
        self.calls.append(("get_episode_by_number", series_id, season_number, episode_number))
        for episode in self.episodes.get(series_id, []):
            if episode["seasonNumber"] == season_number and episode["number"] == episode_number:
                return copy.deepcopy(episode)
        return None

    async def get_episode_by_air_date(self, series_id, air_date, season_type="default"):
        self.calls.append(("get_episode_by_air_date", series_id, air_date))
        for episode in self.episodes.get(series_id, []):
            if episode["aired"] == air_date:
                return copy.deepcopy(episode)
        return None

    async def get_series_artworks(self, series_id, artwork_type=None, lang=None):
        self.calls.append(("get_series_artworks", series_id))
        return copy.deepcopy(self.artworks.get(series_id, []))

    async def get_season_details(self, season_id, apply_translations=True):
        self.calls.append(("get_season_details", season_id, apply_translations))
        return copy.deepcopy(self.season_details.get(season_id, {"id": season_id}))


class FakeTVDBAPI:
    """httpx.MockTransport handler serving canned TVDB v4 payloads by path."""

    def __init__(self):
        self.routes: dict[str, object] = {}
        self.requests: list[httpx.Request] = []

    def add(self, path: str, data=None, handler=None):
        self.routes[path] = handler or data

    def paths(self) -> list[str]:
        return [request.url.path for request in self.requests]

    def client(self, api_key: str | None = "test-key", **kwargs) -> TVDBClient:
        return TVDBClient(
            api_key,
            base_url=TVDB_TEST_URL,
            transport=httpx.MockTransport(self),
            **kwargs,
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path == "/login" and path not in self.routes:
            return httpx.Response(200, json={"status": "success", "data": {"token": "token-123"}})

        route = self.routes.get(path)
        if route is None:
            return httpx.Response(404, json={"status": "failure", "message": "NotFoundException"})
        if callable(route):
            return route(request)
        return httpx.Response(200, json={"status": "success", "data": route})


@pytest.fixture
def identifier():
    return IDENTIFIER


@pytest.fixture
def locale():
    return RequestLocale(language="en-US", country="US")


@pytest.fixture
def series_record():
    return make_series()


@pytest.fixture
def episode_records():
    return make_episodes()


@pytest.fixture
def fake_client():
    """Fake client knowing Cowboy Bebop and answering every title search with it."""
    return FakeTVDBClient(
        series=[make_series()],
        search_results=[{"id": "series-76885", "tvdb_id": "76885", "name": "Cowboy Bebop"}],
        remote_results={"tt0213338": [{"id": 76885, "name": "Cowboy Bebop"}]},
        episodes={76885: make_episodes()},
    )


@pytest.fixture
def tvdb_api():
    return FakeTVDBAPI()


@pytest.fixture
def make_fake_client():
    """Factory for fake clients with custom series and search results."""
    return FakeTVDBClient
