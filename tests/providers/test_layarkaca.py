"""Tests for the LayarKaca provider."""

import pytest

from nontonplux.core.http import Document
from nontonplux.core.models import TvType
from nontonplux.providers.layarkaca import LayarKacaProvider
from nontonplux.providers.layarkaca.parser import LayarKacaParser
from tests.fakes import FakeHttpClient, RecordingResolver
from tests.fixtures import layarkaca_pages as pages


def make_provider(page_map, resolver=None, config=None):
    http = FakeHttpClient(pages=page_map)
    provider = LayarKacaProvider(config=config, http=http, resolver=resolver or RecordingResolver())
    return provider, http


class TestProperLink:
    """Links to series are moved to the series host."""

    def setup_method(self):
        self.parser = LayarKacaParser(pages.MAIN_URL, pages.SERIES_URL)

    def test_series_category_moves_link(self):
        link = f"{pages.MAIN_URL}/the-glory-2022/"
        moved = self.parser.get_proper_link(link, f"{pages.MAIN_URL}/series/korea/")
        assert moved == f"{pages.SERIES_URL}/the-glory-2022/"

    def test_season_title_moves_link(self):
        link = f"{pages.MAIN_URL}/vincenzo-season-1-2021/"
        assert self.parser.get_proper_link(link, "Vincenzo SEASON 1").startswith(pages.SERIES_URL)

    def test_movie_link_is_kept(self):
        link = f"{pages.MAIN_URL}/oppenheimer-2023/"
        assert self.parser.get_proper_link(link, "Oppenheimer") == link


class TestMainPage:
    """Home page sections."""

    def test_sections(self):
        provider, _ = make_provider({})

        names = [request.name for request in provider.main_page]

        assert len(names) == 6
        assert "Series Terbaru" in names
        series = provider.get_main_page_request("series terbaru")
        assert series.data == f"{pages.SERIES_URL}/latest/page/"

    def test_unknown_section(self):
        provider, _ = make_provider({})

        with pytest.raises(KeyError):
            provider.get_main_page_request("Film Bajakan")

    @pytest.mark.asyncio
    async def test_listing(self):
        url = f"{pages.MAIN_URL}/populer/page/1"
        provider, http = make_provider({url: pages.LISTING_HTML})

        response = await provider.get_main_page(1, provider.main_page[0])
        items = response.items[0].items

        assert http.urls() == [url]
        assert response.items[0].name == "Film Terplopuler"
        assert [item.title for item in items] == ["Oppenheimer", "Moving", "Vincenzo Season 1"]

    @pytest.mark.asyncio
    async def test_movie_item(self):
        url = f"{pages.MAIN_URL}/populer/page/1"
        provider, _ = make_provider({url: pages.LISTING_HTML})

        response = await provider.get_main_page(1, provider.main_page[0])
        movie = response.items[0].items[0]

        assert movie.type == TvType.MOVIE
        assert movie.url == f"{pages.MAIN_URL}/oppenheimer-2023/"
        assert movie.quality == "HD"
        assert movie.poster_url == "https://poster.example/oppenheimer.jpg"

    @pytest.mark.asyncio
    async def test_series_items(self):
        url = f"{pages.MAIN_URL}/populer/page/1"
        provider, _ = make_provider({url: pages.LISTING_HTML})

        response = await provider.get_main_page(1, provider.main_page[0])
        moving, vincenzo = response.items[0].items[1:]

        assert moving.type == TvType.TV_SERIES
        assert moving.episode_count == 12
        assert moving.url == f"{pages.MAIN_URL}/moving-2023/"
        assert moving.poster_url == f"{pages.MAIN_URL}/posters/moving.jpg"
        assert vincenzo.episode_count == 20
        assert vincenzo.url == f"{pages.SERIES_URL}/vincenzo-season-1-2021/"


class TestSearch:
    """Search results."""

    @pytest.mark.asyncio
    async def test_search(self):
        url = f"{pages.MAIN_URL}/?s=glory"
        provider, _ = make_provider({url: pages.SEARCH_HTML})

        results = await provider.search("glory")

        assert [result.title for result in results] == ["The Glory (2022)", "Glory Road (2006)"]
        assert results[0].url == f"{pages.SERIES_URL}/the-glory-2022/"
        assert results[0].poster_url == f"{pages.MAIN_URL}/posters/the-glory.jpg"
        assert results[1].url == f"{pages.MAIN_URL}/glory-road-2006/"
        assert all(result.type == TvType.TV_SERIES for result in results)

    @pytest.mark.asyncio
    async def test_search_query_is_sent_as_parameter(self):
        provider, http = make_provider({f"{pages.MAIN_URL}/": pages.SEARCH_HTML})

        await provider.search("tom & jerry #2")

        call = http.calls[0]
        assert call["url"] == f"{pages.MAIN_URL}/"
        assert call["params"] == {"s": "tom & jerry #2"}


class TestLoad:
    """Movie and series detail pages."""

    @pytest.mark.asyncio
    async def test_movie(self):
        provider, _ = make_provider({pages.MOVIE_URL: pages.MOVIE_HTML})

        result = await provider.load(pages.MOVIE_URL)

        assert result.title == "Oppenheimer (2023)"
        assert result.type == TvType.MOVIE
        assert result.is_movie
        assert result.data_url == pages.MOVIE_URL
        assert result.episodes == []
        assert result.poster_url == f"{pages.MAIN_URL}/posters/oppenheimer-large.jpg"
        assert result.year == 2023
        assert result.rating == 8.4
        assert result.tags == ["Drama", "History"]
        assert result.actors == ["Cillian Murphy", "Emily Blunt"]
        assert result.plot == "The story of J. Robert Oppenheimer and the atomic bomb."
        assert result.trailer_url == "https://www.youtube.com/watch?v=uYPbbksJxIg"

    @pytest.mark.asyncio
    async def test_recommendations(self):
        provider, _ = make_provider({pages.MOVIE_URL: pages.MOVIE_HTML})

        result = await provider.load(pages.MOVIE_URL)

        assert len(result.recommendations) == 1
        recommendation = result.recommendations[0]
        assert recommendation.title == "Tenet (2020)"
        assert recommendation.url == f"{pages.MAIN_URL}/tenet-2020/"
        assert recommendation.poster_url == f"{pages.MAIN_URL}/posters/tenet.jpg"

    @pytest.mark.asyncio
    async def test_series(self):
        provider, _ = make_provider({pages.SERIES_URL_DETAIL: pages.SERIES_HTML})

        result = await provider.load(pages.SERIES_URL_DETAIL)

        assert result.type == TvType.TV_SERIES
        assert result.data_url is None
        assert result.year is None
        assert result.rating is None
        assert result.tags == ["Crime"]
        assert result.actors == ["Song Joong-ki"]

    @pytest.mark.asyncio
    async def test_series_episodes(self):
        provider, _ = make_provider({pages.SERIES_URL_DETAIL: pages.SERIES_HTML})

        result = await provider.load(pages.SERIES_URL_DETAIL)

        assert [episode.episode for episode in result.episodes] == [1, 2]
        assert [episode.season for episode in result.episodes] == [2, 2]
        assert [episode.name for episode in result.episodes] == ["Episode 1", "Episode 2"]
        assert result.episodes[0].data == f"{pages.MAIN_URL}/vincenzo-season-2-episode-1-2021/"


class TestLoadLinks:
    """Player links are handed to the resolver."""

    @pytest.mark.asyncio
    async def test_player_links(self, resolver):
        provider, _ = make_provider({pages.PLAYBACK_URL: pages.PLAYBACK_HTML}, resolver=resolver)

        links, _ = await provider.collect_links(pages.PLAYBACK_URL)

        assert sorted(resolver.urls()) == sorted(pages.PLAYBACK_LINKS)
        assert all(call["referer"] == pages.PLAYBACK_URL for call in resolver.calls)
        assert len(links) == 3

    @pytest.mark.asyncio
    async def test_failing_player_is_isolated(self):
        resolver = RecordingResolver(failing={pages.PLAYBACK_LINKS[0]})
        provider, _ = make_provider({pages.PLAYBACK_URL: pages.PLAYBACK_HTML}, resolver=resolver)

        found = await provider.load_links(pages.PLAYBACK_URL, False, lambda subtitle: None, lambda link: None)
        links, _ = await provider.collect_links(pages.PLAYBACK_URL)

        assert found is True
        assert sorted(link.url for link in links) == sorted(pages.PLAYBACK_LINKS[1:])

    def test_trimmed_host_parsing(self):
        parser = LayarKacaParser(pages.MAIN_URL, pages.SERIES_URL)

        links = parser.parse_player_links(Document(pages.PLAYBACK_HTML), "https://layarkacaxxi.icu")

        assert links == pages.PLAYBACK_LINKS
