"""Tests for the AnimeSail provider."""

import pytest
from bs4 import BeautifulSoup

from nontonplux.core.exceptions import ExtractionError
from nontonplux.core.http import HTML_ACCEPT
from nontonplux.core.models import ShowStatus, TvType
from nontonplux.providers.animesail import AnimeSailProvider
from nontonplux.providers.animesail.mirrors import (
    MirrorKind,
    classify_iframe,
    decode_mirror_iframe,
    rewrite_redirect_url,
)
from nontonplux.providers.animesail.parser import AnimeSailParser, get_status, get_type
from tests.fakes import FakeHttpClient, RecordingResolver
from tests.fixtures import animesail_pages as pages


def make_provider(page_map, json_responses=None, resolver=None, config=None):
    http = FakeHttpClient(pages=page_map, json_responses=json_responses)
    provider = AnimeSailProvider(config=config, http=http, resolver=resolver or RecordingResolver())
    return provider, http


def option_tag(fragment: str, label: str = "Mirror"):
    soup = BeautifulSoup(pages.mirror_option(fragment, label), "html.parser")
    return soup.select_one("option")


class TestTypeAndStatus:
    """Mapping of the detail page labels."""

    def test_get_type(self):
        assert get_type("TV") == TvType.ANIME
        assert get_type("Movie") == TvType.ANIME_MOVIE
        assert get_type("OVA") == TvType.OVA
        assert get_type("Special") == TvType.OVA
        assert get_type("") == TvType.ANIME

    def test_get_status(self):
        assert get_status("Ongoing") == ShowStatus.ONGOING
        assert get_status("Completed") == ShowStatus.COMPLETED
        assert get_status("Finished Airing") == ShowStatus.COMPLETED
        assert get_status("") == ShowStatus.COMPLETED


class TestProperAnimeLink:
    """Episode and movie links are rewritten to the series page."""

    def setup_method(self):
        self.parser = AnimeSailParser(pages.MAIN_URL)

    def test_episode_link(self):
        link = f"{pages.MAIN_URL}/one-piece-episode-1100-subtitle-indonesia/"
        assert self.parser.get_proper_anime_link(link) == f"{pages.MAIN_URL}/anime/one-piece"

    def test_movie_link(self):
        link = f"{pages.MAIN_URL}/jujutsu-kaisen-0-movie-subtitle-indonesia/"
        assert self.parser.get_proper_anime_link(link) == f"{pages.MAIN_URL}/anime/jujutsu-kaisen-0"

    def test_series_link_is_kept(self):
        link = f"{pages.MAIN_URL}/anime/sousou-no-frieren/"
        assert self.parser.get_proper_anime_link(link) == link


class TestMirrors:
    """Mirror option decoding and classification."""

    def test_classify_iframe(self):
        main = pages.MAIN_URL
        assert classify_iframe(pages.ARCH_PLAYER_URL, main) is MirrorKind.ARCH
        assert classify_iframe(pages.RACE_PLAYER_URL, main) is MirrorKind.RACE
        assert classify_iframe("https://aghanim.xyz/tools/redirect/?id=1&token=2", main) is MirrorKind.REDIRECT
        assert classify_iframe(pages.FRAMEZILLA_PLAYER_URL, main) is MirrorKind.FRAMEZILLA
        assert classify_iframe("https://uservideo.xyz/file/abc", main) is MirrorKind.FRAMEZILLA
        assert classify_iframe(pages.EXTERNAL_EMBED_URL, main) is MirrorKind.EXTERNAL

    def test_rewrite_redirect_url(self):
        rewritten = rewrite_redirect_url("https://aghanim.xyz/tools/redirect/?id=abc123&token=xyz")
        assert rewritten == pages.REDIRECTED_EMBED_URL

    def test_decode_relative_iframe(self):
        option = option_tag('<iframe src="/utils/player/arch/?id=op1100"></iframe>')
        assert decode_mirror_iframe(option, pages.MAIN_URL) == pages.ARCH_PLAYER_URL

    def test_decode_protocol_relative_iframe(self):
        option = option_tag('<iframe src="//cdn.example/embed/1"></iframe>')
        assert decode_mirror_iframe(option, pages.MAIN_URL) == "https://cdn.example/embed/1"

    def test_decode_without_iframe_raises(self):
        option = option_tag("<p>nothing</p>")
        with pytest.raises(ExtractionError):
            decode_mirror_iframe(option, pages.MAIN_URL)


class TestMainPageAndSearch:
    """Home page sections and search."""

    @pytest.mark.asyncio
    async def test_main_page_appends_page_number(self):
        url = f"{pages.MAIN_URL}/page/2"
        provider, http = make_provider({url: pages.LISTING_HTML})

        response = await provider.get_main_page(2, provider.main_page[0])

        assert http.urls() == [url]
        assert len(response.items) == 1
        assert response.items[0].name == "Episode Terbaru"

    @pytest.mark.asyncio
    async def test_requests_send_accept_header_and_region_cookie(self):
        url = f"{pages.MAIN_URL}/page/1"
        provider, http = make_provider({url: pages.LISTING_HTML})

        await provider.get_main_page(1, provider.main_page[0])

        call = http.call_for(url)
        assert call["headers"] == {"Accept": HTML_ACCEPT}
        assert call["cookies"] == {"_as_ipin_ct": "ID"}

    @pytest.mark.asyncio
    async def test_listing_items_point_at_series_pages(self):
        url = f"{pages.MAIN_URL}/movie-terbaru/page/1"
        provider, _ = make_provider({url: pages.LISTING_HTML})

        response = await provider.get_main_page(1, provider.get_main_page_request("Movie Terbaru"))
        items = response.items[0].items

        assert [item.url for item in items] == [
            f"{pages.MAIN_URL}/anime/one-piece",
            f"{pages.MAIN_URL}/anime/jujutsu-kaisen-0",
            f"{pages.MAIN_URL}/anime/sousou-no-frieren/",
        ]
        assert [item.episode_count for item in items] == [1100, None, None]
        assert items[1].poster_url == f"{pages.MAIN_URL}/wp-content/uploads/jjk0.jpg"
        assert items[2].poster_url is None
        assert all(item.type == TvType.ANIME for item in items)
        assert all(item.source == "AnimeSail" for item in items)

    @pytest.mark.asyncio
    async def test_search_ignores_items_outside_results(self):
        url = f"{pages.MAIN_URL}/?s=naruto"
        provider, _ = make_provider({url: pages.SEARCH_HTML})

        results = await provider.search("naruto")

        assert [result.title for result in results] == ["Naruto Shippuden Episode 500", "Boruto"]
        assert results[0].url == f"{pages.MAIN_URL}/anime/naruto-shippuden"

    @pytest.mark.asyncio
    async def test_search_query_is_sent_as_parameter(self):
        provider, http = make_provider({f"{pages.MAIN_URL}/": pages.SEARCH_HTML})

        results = await provider.search("tom & jerry #2")

        call = http.calls[0]
        assert call["url"] == f"{pages.MAIN_URL}/"
        assert call["params"] == {"s": "tom & jerry #2"}
        assert len(results) == 2

    @pytest.mark.asyncio
    async def test_listing_item_without_link_is_skipped(self):
        url = f"{pages.MAIN_URL}/page/1"
        html = f"""
        <html><body>
          <article class="bs"><div class="tt"><h2>Placeholder</h2></div></article>
          <article class="bs">
            <a href="{pages.MAIN_URL}/anime/boruto/"><div class="tt"><h2>Boruto</h2></div></a>
          </article>
        </body></html>
        """
        provider, _ = make_provider({url: html})

        response = await provider.get_main_page(1, provider.main_page[0])

        assert [item.title for item in response.items[0].items] == ["Boruto"]
        assert all("None" not in item.url for item in response.items[0].items)

    @pytest.mark.asyncio
    async def test_search_without_results(self):
        url = f"{pages.MAIN_URL}/?s=zzz"
        provider, _ = make_provider({url: "<html><body><div class='listupd'></div></body></html>"})

        assert await provider.search("zzz") == []


class TestLoad:
    """Detail pages and tracker lookups."""

    @pytest.mark.asyncio
    async def test_load_series(self):
        provider, http = make_provider(
            {pages.DETAIL_URL: pages.DETAIL_HTML},
            json_responses={
                pages.JIKAN_URL: pages.JIKAN_RESPONSE,
                pages.ANILIST_URL: pages.ANILIST_RESPONSE,
            },
        )

        result = await provider.load(pages.DETAIL_URL)

        assert result.title == "One Piece"
        assert result.type == TvType.ANIME
        assert result.year == 1999
        assert result.status == ShowStatus.ONGOING
        assert result.tags == ["Action", "Adventure"]
        assert result.poster_url == f"{pages.MAIN_URL}/wp-content/uploads/one-piece-poster.jpg"
        assert result.plot == "Monkey D. Luffy sets off to find the One Piece."
        assert result.mal_id == 21
        assert result.anilist_id == 21

    @pytest.mark.asyncio
    async def test_episodes_are_oldest_first(self):
        provider, _ = make_provider({pages.DETAIL_URL: pages.DETAIL_HTML}, config={"lookup_trackers": False})

        result = await provider.load(pages.DETAIL_URL)

        assert [episode.episode for episode in result.episodes] == [1098, 1099, 1100]
        assert result.episodes[0].name == "One Piece Episode 1098"
        assert result.episodes[1].data == f"{pages.MAIN_URL}/one-piece-episode-1099-subtitle-indonesia/"

    @pytest.mark.asyncio
    async def test_tracker_queries(self):
        provider, http = make_provider(
            {pages.DETAIL_URL: pages.DETAIL_HTML},
            json_responses={
                pages.JIKAN_URL: pages.JIKAN_RESPONSE,
                pages.ANILIST_URL: pages.ANILIST_RESPONSE,
            },
        )

        await provider.load(pages.DETAIL_URL)

        jikan = http.call_for(pages.JIKAN_URL)
        assert jikan["method"] == "GET"
        assert jikan["params"] == {"q": "One Piece", "start_date": 1999, "type": "tv", "limit": 1}

        anilist = http.call_for(pages.ANILIST_URL)
        assert anilist["method"] == "POST"
        assert anilist["json"] == {"query": "{Media(idMal:21,type:ANIME){id}}"}

    @pytest.mark.asyncio
    async def test_movie_without_numeric_year(self):
        provider, http = make_provider(
            {pages.MOVIE_DETAIL_URL: pages.MOVIE_DETAIL_HTML},
            json_responses={pages.JIKAN_URL: {"data": []}},
        )

        result = await provider.load(pages.MOVIE_DETAIL_URL)

        assert result.type == TvType.ANIME_MOVIE
        assert result.year is None
        assert result.status == ShowStatus.COMPLETED
        assert result.mal_id is None
        assert result.anilist_id is None
        assert http.call_for(pages.JIKAN_URL)["params"] == {"q": "Jujutsu Kaisen 0", "type": "movie", "limit": 1}
        assert pages.ANILIST_URL not in http.urls()

    @pytest.mark.asyncio
    async def test_tracker_failures_leave_ids_unset(self):
        provider, _ = make_provider({pages.DETAIL_URL: pages.DETAIL_HTML})

        result = await provider.load(pages.DETAIL_URL)

        assert result.title == "One Piece"
        assert result.mal_id is None
        assert result.anilist_id is None

    @pytest.mark.asyncio
    async def test_anilist_failure_keeps_mal_id(self):
        provider, _ = make_provider(
            {pages.DETAIL_URL: pages.DETAIL_HTML},
            json_responses={pages.JIKAN_URL: pages.JIKAN_RESPONSE},
        )

        result = await provider.load(pages.DETAIL_URL)

        assert result.mal_id == 21
        assert result.anilist_id is None

    @pytest.mark.asyncio
    async def test_tracker_lookup_can_be_disabled(self):
        provider, http = make_provider({pages.DETAIL_URL: pages.DETAIL_HTML}, config={"lookup_trackers": False})

        await provider.load(pages.DETAIL_URL)

        assert http.urls() == [pages.DETAIL_URL]


class TestLoadLinks:
    """Mirror fan-out on episode pages."""

    def episode_pages(self):
        return {
            pages.EPISODE_URL: pages.EPISODE_HTML,
            pages.ARCH_PLAYER_URL: pages.ARCH_PLAYER_HTML,
            pages.RACE_PLAYER_URL: pages.RACE_PLAYER_HTML,
            pages.FRAMEZILLA_PLAYER_URL: pages.FRAMEZILLA_PLAYER_HTML,
        }

    @pytest.mark.asyncio
    async def test_direct_players(self, resolver):
        provider, _ = make_provider(self.episode_pages(), resolver=resolver)

        links, subtitles = await provider.collect_links(pages.EPISODE_URL)

        direct = {link.source: link for link in links if link.source in ("Arch", "Race")}
        assert direct["Arch"].url == pages.ARCH_STREAM_URL
        assert direct["Arch"].quality == 1080
        assert direct["Arch"].referer == pages.MAIN_URL
        assert direct["Race"].url == pages.RACE_STREAM_URL
        assert direct["Race"].quality is None
        assert direct["Race"].quality_label == "unknown"
        assert subtitles == []

    @pytest.mark.asyncio
    async def test_player_pages_are_fetched_with_episode_referer(self, resolver):
        provider, http = make_provider(self.episode_pages(), resolver=resolver)

        await provider.collect_links(pages.EPISODE_URL)

        assert http.call_for(pages.ARCH_PLAYER_URL)["referer"] == pages.EPISODE_URL
        assert http.call_for(pages.RACE_PLAYER_URL)["referer"] == pages.EPISODE_URL
        assert http.call_for(pages.FRAMEZILLA_PLAYER_URL)["referer"] == pages.EPISODE_URL

    @pytest.mark.asyncio
    async def test_embeds_go_to_the_resolver(self, resolver):
        provider, _ = make_provider(self.episode_pages(), resolver=resolver)

        links, _ = await provider.collect_links(pages.EPISODE_URL)

        assert sorted(resolver.urls()) == sorted([
            pages.REDIRECTED_EMBED_URL,
            pages.FRAMEZILLA_EMBED_URL,
            pages.EXTERNAL_EMBED_URL,
        ])
        assert all(call["referer"] == pages.MAIN_URL for call in resolver.calls)
        assert len(links) == 5

    @pytest.mark.asyncio
    async def test_player_without_nested_iframe_is_skipped(self, resolver):
        page_map = self.episode_pages()
        page_map[pages.FRAMEZILLA_PLAYER_URL] = "<html><body>gone</body></html>"
        provider, _ = make_provider(page_map, resolver=resolver)

        links, _ = await provider.collect_links(pages.EPISODE_URL)

        assert "" not in resolver.urls()
        assert pages.FRAMEZILLA_EMBED_URL not in resolver.urls()
        assert len(links) == 4

    @pytest.mark.asyncio
    async def test_broken_mirrors_are_skipped(self, resolver):
        provider, _ = make_provider({pages.EPISODE_URL: pages.BROKEN_EPISODE_HTML}, resolver=resolver)

        found = await provider.load_links(pages.EPISODE_URL, False, lambda subtitle: None, lambda link: None)
        links, _ = await provider.collect_links(pages.EPISODE_URL)

        assert found is True
        assert [link.url for link in links] == [pages.EXTERNAL_EMBED_URL]

    @pytest.mark.asyncio
    async def test_resolver_failure_does_not_stop_other_mirrors(self):
        resolver = RecordingResolver(failing={pages.EXTERNAL_EMBED_URL})
        provider, _ = make_provider(self.episode_pages(), resolver=resolver)

        links, _ = await provider.collect_links(pages.EPISODE_URL)

        assert pages.EXTERNAL_EMBED_URL not in [link.url for link in links]
        assert len(links) == 4

    @pytest.mark.asyncio
    async def test_bounded_mirror_concurrency(self, resolver):
        provider, _ = make_provider(
            self.episode_pages(),
            resolver=resolver,
            config={"max_concurrent_mirrors": 1},
        )

        links, _ = await provider.collect_links(pages.EPISODE_URL)

        assert provider.max_concurrent_mirrors == 1
        assert len(links) == 5
