"""Tests for provider discovery and coordinated operations."""

import pytest

from nontonplux.core.config_manager import ConfigManager
from nontonplux.core.exceptions import ProviderError
from nontonplux.core.provider_manager import ProviderManager
from nontonplux.providers.animesail import AnimeSailProvider
from nontonplux.providers.layarkaca import LayarKacaProvider
from tests.fakes import FakeHttpClient, RecordingResolver
from tests.fixtures import animesail_pages, layarkaca_pages

ANIMESAIL_SEARCH = f"{animesail_pages.MAIN_URL}/?s=glory"
LAYARKACA_SEARCH = f"{layarkaca_pages.MAIN_URL}/?s=glory"


@pytest.fixture
def config_manager(tmp_path):
    return ConfigManager(tmp_path)


def make_manager(config_manager, page_map=None):
    http = FakeHttpClient(pages=page_map)
    manager = ProviderManager(config_manager, http_factory=lambda: http, resolver=RecordingResolver())
    return manager, http


class TestDiscovery:
    """Provider modules are found and instantiated."""

    def test_discovers_bundled_providers(self, config_manager):
        manager, _ = make_manager(config_manager)

        assert manager.available_providers == ["animesail", "layarkaca"]

    def test_loads_provider_classes(self, config_manager):
        manager, _ = make_manager(config_manager)

        assert isinstance(manager.get_provider("animesail"), AnimeSailProvider)
        assert isinstance(manager.get_provider("layarkaca"), LayarKacaProvider)
        assert manager.load_provider("animesail") is manager.load_provider("animesail")

    def test_unknown_provider(self, config_manager):
        manager, _ = make_manager(config_manager)

        with pytest.raises(ProviderError):
            manager.get_provider("idlix")

    def test_disabled_provider_is_not_active(self, config_manager):
        config_manager.disable_source("animesail")
        manager, _ = make_manager(config_manager)

        assert list(manager.get_active_providers()) == ["layarkaca"]

    def test_source_config_reaches_provider(self, config_manager):
        config_manager.update_source_config("layarkaca", {"config": {"main_url": "https://lk21.example"}})
        config_manager.update_setting("links.max_concurrent_mirrors", 3)
        manager, _ = make_manager(config_manager)

        provider = manager.get_provider("layarkaca")

        assert provider.main_url == "https://lk21.example"
        assert provider.max_concurrent_mirrors == 3


class TestManifest:
    """Manifest entries for the provider index."""

    def test_manifest_entries(self, config_manager):
        manager, _ = make_manager(config_manager)

        manifest = manager.build_manifest()

        assert [entry["name"] for entry in manifest] == ["AnimeSail", "LayarKaca"]
        animesail = manifest[0]
        assert animesail["internalName"] == "AnimeSailProvider"
        assert animesail["language"] == "id"
        assert animesail["status"] == 1
        assert animesail["version"] == 1
        assert animesail["authors"] == ["Hexated"]
        assert animesail["tvTypes"] == ["Anime", "AnimeMovie", "OVA"]
        assert animesail["url"] == animesail_pages.MAIN_URL
        assert manifest[1]["tvTypes"] == ["Movie", "TvSeries", "AsianDrama"]


class TestOperations:
    """Search fan-out and single-provider operations."""

    @pytest.mark.asyncio
    async def test_search_all_isolates_failing_provider(self, config_manager):
        manager, _ = make_manager(config_manager, {LAYARKACA_SEARCH: layarkaca_pages.SEARCH_HTML})

        results = await manager.search_all("glory")

        assert results["animesail"] == []
        assert len(results["layarkaca"]) == 2
        assert manager.get_provider_status()["providers"]["animesail"]["error"] is not None

    @pytest.mark.asyncio
    async def test_search_all_limits_results(self, config_manager):
        config_manager.update_setting("search.max_results_per_source", 1)
        manager, _ = make_manager(config_manager, {
            ANIMESAIL_SEARCH: animesail_pages.SEARCH_HTML,
            LAYARKACA_SEARCH: layarkaca_pages.SEARCH_HTML,
        })

        results = await manager.search_all("glory")

        assert [len(items) for items in results.values()] == [1, 1]

    @pytest.mark.asyncio
    async def test_search_all_restricted_to_sources(self, config_manager):
        manager, http = make_manager(config_manager, {LAYARKACA_SEARCH: layarkaca_pages.SEARCH_HTML})

        results = await manager.search_all("glory", sources=["layarkaca"])

        assert list(results) == ["layarkaca"]
        assert http.urls() == [LAYARKACA_SEARCH]

    @pytest.mark.asyncio
    async def test_search_all_without_enabled_providers(self, config_manager):
        config_manager.disable_source("animesail")
        config_manager.disable_source("layarkaca")
        manager, _ = make_manager(config_manager)

        assert await manager.search_all("glory") == {}

    @pytest.mark.asyncio
    async def test_get_main_page_section(self, config_manager):
        url = f"{layarkaca_pages.SERIES_URL}/latest/page/2"
        manager, _ = make_manager(config_manager, {url: layarkaca_pages.LISTING_HTML})

        response = await manager.get_main_page("layarkaca", 2, "Series Terbaru")

        assert response.items[0].name == "Series Terbaru"
        assert len(response.items[0].items) == 3

    @pytest.mark.asyncio
    async def test_get_main_page_unknown_section(self, config_manager):
        manager, _ = make_manager(config_manager)

        with pytest.raises(ProviderError):
            await manager.get_main_page("animesail", 1, "Trending")

    @pytest.mark.asyncio
    async def test_collect_links(self, config_manager):
        manager, _ = make_manager(config_manager, {layarkaca_pages.PLAYBACK_URL: layarkaca_pages.PLAYBACK_HTML})

        links, subtitles = await manager.collect_links("layarkaca", layarkaca_pages.PLAYBACK_URL)

        assert sorted(link.url for link in links) == sorted(layarkaca_pages.PLAYBACK_LINKS)
        assert subtitles == []

    @pytest.mark.asyncio
    async def test_cleanup_keeps_injected_client_open(self, config_manager):
        manager, http = make_manager(config_manager)
        manager.get_provider("animesail")

        await manager.cleanup()

        assert http.closed is False
        assert manager.get_provider_status()["loaded"] == 0
