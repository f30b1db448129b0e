"""
Tests for api/services/metadata.py
"""

import asyncio

import pytest

from api.exceptions import InvalidRatingKey
from api.services import MetadataService
from utils.network import Paging

SERIES_ARTWORKS = [
    {"type": 1, "image": "/banners/graphical/76885-g.jpg", "language": "eng"},
    {"type": 2, "image": "/banners/posters/76885-jpn.jpg", "language": "jpn"},
    {"type": 2, "image": "/banners/posters/76885-eng.jpg", "language": "eng"},
    {"type": 3, "image": "/banners/fanart/76885-1.jpg", "language": None},
    {"type": 5, "image": "/banners/icons/76885.jpg", "language": "eng"},
    {"type": 23, "image": "/banners/clearlogo/76885.png", "language": "eng"},
    {"type": 2, "image": None, "language": "eng"},
]


@pytest.fixture
def service(fake_client, identifier):
    return MetadataService(fake_client, identifier)


class TestRatingKeys:
    @pytest.mark.parametrize("rating_key", ["", "tvdb-movie-1", "tvdb-show-abc", "76885"])
    def test_invalid_rating_key(self, service, fake_client, locale, rating_key):
        with pytest.raises(InvalidRatingKey) as exc_info:
            asyncio.run(service.get_metadata(rating_key, locale))

        assert exc_info.value.message == f"Invalid ratingKey: {rating_key}"
        assert fake_client.calls == []

    @pytest.mark.parametrize("call", ["get_children", "get_grandchildren"])
    def test_invalid_rating_key_for_listings(self, service, locale, call):
        with pytest.raises(InvalidRatingKey):
            asyncio.run(getattr(service, call)("tvdb-show-", locale, Paging()))

    def test_invalid_rating_key_for_images(self, service, locale):
        with pytest.raises(InvalidRatingKey):
            asyncio.run(service.get_images("bogus", locale))


class TestGetMetadata:
    def test_show(self, service, locale):
        container = asyncio.run(service.get_metadata("tvdb-show-76885", locale))

        assert container.size == 1
        show = container.Metadata[0]
        assert show.type == "show"
        assert show.title == "Cowboy Bebop"
        assert show.contentRating == "TV-14"
        assert show.Children is None

    def test_show_with_children(self, service, locale):
        container = asyncio.run(service.get_metadata("tvdb-show-76885", locale, include_children=True))
        assert [season.ratingKey for season in container.Metadata[0].Children.Metadata] == [
            "tvdb-season-76885-0",
            "tvdb-season-76885-1",
        ]

    def test_season_with_children(self, service, locale):
        container = asyncio.run(service.get_metadata("tvdb-season-76885-1", locale, include_children=True))

        season = container.Metadata[0]
        assert season.type == "season"
        assert season.title == "Season 1"
        assert [episode.title for episode in season.Children.Metadata] == ["Asteroid Blues", "Stray Dog Strut"]

    def test_season_with_episode_order(self, service, locale):
        container = asyncio.run(service.get_metadata("tvdb-season-76885-1", locale, episode_order="dvd"))
        assert container.Metadata[0].Guid[0].id == "tvdb://2002"

    def test_episode(self, service, locale):
        container = asyncio.run(service.get_metadata("tvdb-episode-76885-1-1", locale))

        episode = container.Metadata[0]
        assert episode.type == "episode"
        assert episode.title == "Asteroid Blues"
        assert episode.parentThumb == "https://artworks.thetvdb.com/banners/seasons/76885-1.jpg"

    @pytest.mark.parametrize("rating_key", [
        "tvdb-show-999",
        "tvdb-season-76885-7",
        "tvdb-episode-76885-1-99",
    ])
    def test_not_found_is_empty(self, service, locale, identifier, rating_key):
        container = asyncio.run(service.get_metadata(rating_key, locale))

        assert container.size == 0
        assert container.totalSize == 0
        assert container.identifier == identifier


class TestGetChildren:
    def test_show_children_are_seasons(self, service, locale):
        container = asyncio.run(service.get_children("tvdb-show-76885", locale, Paging()))

        assert container.totalSize == 2
        assert container.size == 2
        assert container.offset == 0
        assert [season.index for season in container.Metadata] == [0, 1]

    def test_show_children_paged(self, service, locale):
        container = asyncio.run(service.get_children("tvdb-show-76885", locale, Paging(start=2, size=1)))

        assert container.offset == 1
        assert container.size == 1
        assert container.totalSize == 2
        assert container.Metadata[0].index == 1

    def test_season_children_are_episodes(self, service, locale):
        container = asyncio.run(service.get_children("tvdb-season-76885-1", locale, Paging()))

        assert [episode.ratingKey for episode in container.Metadata] == [
            "tvdb-episode-76885-1-1",
            "tvdb-episode-76885-1-2",
        ]
        assert all(
            episode.parentThumb == "https://artworks.thetvdb.com/banners/seasons/76885-1.jpg"
            for episode in container.Metadata
        )

    def test_page_past_the_end(self, service, locale):
        container = asyncio.run(service.get_children("tvdb-season-76885-1", locale, Paging(start=10, size=5)))

        assert container.size == 0
        assert container.totalSize == 2
        assert container.offset == 9

    def test_episode_has_no_children(self, service, fake_client, locale):
        container = asyncio.run(service.get_children("tvdb-episode-76885-1-1", locale, Paging()))

        assert container.size == 0
        assert fake_client.calls == []

    def test_unknown_season(self, service, locale):
        assert asyncio.run(service.get_children("tvdb-season-76885-9", locale, Paging())).size == 0


class TestGetGrandchildren:
    def test_all_episodes_paged(self, service, fake_client, locale):
        container = asyncio.run(service.get_grandchildren("tvdb-show-76885", locale, Paging(start=1, size=2)))

        assert container.totalSize == 3
        assert container.size == 2
        assert [episode.ratingKey for episode in container.Metadata] == [
            "tvdb-episode-76885-1-1",
            "tvdb-episode-76885-1-2",
        ]
        assert fake_client.called("get_all_series_episodes") == [("get_all_series_episodes", 76885, False)]
        assert fake_client.called("translate_episodes") == [("translate_episodes", [5001, 5002])]

    def test_second_page(self, service, locale):
        container = asyncio.run(service.get_grandchildren("tvdb-show-76885", locale, Paging(start=3, size=2)))

        assert container.offset == 2
        assert [episode.ratingKey for episode in container.Metadata] == ["tvdb-episode-76885-0-1"]

    @pytest.mark.parametrize("rating_key", ["tvdb-season-76885-1", "tvdb-episode-76885-1-1"])
    def test_only_shows_have_grandchildren(self, service, fake_client, locale, rating_key):
        assert asyncio.run(service.get_grandchildren(rating_key, locale, Paging())).size == 0
        assert fake_client.calls == []


class TestGetImages:
    def test_show_images_in_type_order(self, service, fake_client, locale):
        fake_client.artworks = {76885: SERIES_ARTWORKS}
        container = asyncio.run(service.get_images("tvdb-show-76885", locale))

        assert [(image.type, image.url) for image in container.Image] == [
            ("coverPoster", "https://artworks.thetvdb.com/banners/posters/76885-eng.jpg"),
            ("coverPoster", "https://artworks.thetvdb.com/banners/posters/76885-jpn.jpg"),
            ("background", "https://artworks.thetvdb.com/banners/fanart/76885-1.jpg"),
            ("banner", "https://artworks.thetvdb.com/banners/graphical/76885-g.jpg"),
            ("clearLogo", "https://artworks.thetvdb.com/banners/clearlogo/76885.png"),
        ]
        assert container.size == container.totalSize == 5
        assert all(image.alt == "Cowboy Bebop" for image in container.Image)

    def test_season_artwork(self, service, fake_client, locale):
        fake_client.season_details = {
            1002: {"id": 1002, "artwork": [{"type": 7, "image": "/banners/seasons/76885-1-2.jpg", "language": "eng"}]}
        }
        container = asyncio.run(service.get_images("tvdb-season-76885-1", locale))

        assert [(image.type, image.url, image.alt) for image in container.Image] == [
            ("coverPoster", "https://artworks.thetvdb.com/banners/seasons/76885-1-2.jpg", "Cowboy Bebop - Season 1"),
        ]
        assert fake_client.called("get_season_details") == [("get_season_details", 1002, False)]

    def test_season_falls_back_to_season_image(self, service, locale):
        container = asyncio.run(service.get_images("tvdb-season-76885-1", locale))

        assert [(image.type, image.url) for image in container.Image] == [
            ("coverPoster", "https://artworks.thetvdb.com/banners/seasons/76885-1.jpg"),
        ]

    def test_episode_snapshot(self, service, locale):
        container = asyncio.run(service.get_images("tvdb-episode-76885-1-1", locale))

        assert [(image.type, image.url, image.alt) for image in container.Image] == [
            ("snapshot", "https://artworks.thetvdb.com/banners/episodes/76885/5001.jpg", "Asteroid Blues"),
        ]

    def test_episode_without_image(self, service, locale):
        assert asyncio.run(service.get_images("tvdb-episode-76885-1-2", locale)).Image == []

    def test_unknown_show_has_no_images(self, service, identifier, locale):
        container = asyncio.run(service.get_images("tvdb-show-999", locale))

        assert container.Image == []
        assert container.identifier == identifier

    def test_season_images_skip_episode_translations(self, tvdb_api, identifier, locale, series_record):
        episodes = [{"id": 6000 + number, "name": f"Episode {number}"} for number in range(50)]
        artwork = [{"type": 7, "image": "/banners/seasons/76885-1-2.jpg", "language": "eng"}]
        tvdb_api.add("/series/76885/extended", series_record)
        tvdb_api.add("/seasons/1002/extended", {"id": 1002, "episodes": episodes, "artwork": artwork})

        async def scenario():
            async with tvdb_api.client() as client:
                return await MetadataService(client, identifier).get_images("tvdb-season-76885-1", locale)

        container = asyncio.run(scenario())

        assert [image.url for image in container.Image] == ["https://artworks.thetvdb.com/banners/seasons/76885-1-2.jpg"]
        assert not any(path.startswith("/episodes/") for path in tvdb_api.paths())
