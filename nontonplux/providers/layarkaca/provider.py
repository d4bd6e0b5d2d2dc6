"""
LayarKaca Provider - Main provider implementation for LayarKaca

This module implements the LayarKaca provider for movies and Asian
drama series. Series pages live on a second host; player links are
handed to the generic resolver.
"""

import logging
from typing import Any, Dict, List, Optional

from nontonplux.core.fanout import concurrent_map
from nontonplux.core.http import HttpClient
from nontonplux.core.models import (
    HomePageList,
    HomePageResponse,
    LoadResult,
    MainPageRequest,
    ProviderStatus,
    SearchResult,
    TvType,
)
from nontonplux.providers.base import BaseProvider, ProviderMetadata
from nontonplux.providers.common import GenericResolver, LinkCallback, SubtitleCallback

from .config import LayarKacaConfig, merge_with_defaults
from .parser import LayarKacaParser


logger = logging.getLogger(__name__)


class LayarKacaProvider(BaseProvider):
    """LayarKaca provider for movies, TV series and Asian dramas."""

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        http: Optional[HttpClient] = None,
        resolver: Optional[GenericResolver] = None,
    ):
        merged_config = merge_with_defaults(config)
        super().__init__(merged_config, http=http, resolver=resolver)

        try:
            self.provider_config = LayarKacaConfig(**merged_config)
        except Exception as e:
            self.logger.warning(f"Invalid configuration, using defaults: {e}")
            self.provider_config = LayarKacaConfig()

        if self.max_concurrent_mirrors is None:
            self.max_concurrent_mirrors = self.provider_config.max_concurrent_mirrors

        self.parser = LayarKacaParser(
            self.provider_config.main_url,
            self.provider_config.series_url,
            source="LayarKaca",
        )

        self._metadata = ProviderMetadata(
            name="LayarKaca",
            main_url=self.provider_config.main_url,
            lang="id",
            supported_types=[TvType.MOVIE, TvType.TV_SERIES, TvType.ASIAN_DRAMA],
            has_main_page=True,
            has_download_support=True,
            version=1,
            status=ProviderStatus.OK,
            authors=["Hexated"],
            icon_url="https://www.google.com/s2/favicons?domain=lk21official.info&sz=%size%",
            description="Indonesian movie and Asian drama catalog",
        )

    @property
    def metadata(self) -> ProviderMetadata:
        return self._metadata

    @property
    def series_url(self) -> str:
        return self.provider_config.series_url

    @property
    def main_page(self) -> List[MainPageRequest]:
        return [
            MainPageRequest(name="Film Terplopuler", data=f"{self.main_url}/populer/page/"),
            MainPageRequest(name="Film Berdasarkan IMDb Rating", data=f"{self.main_url}/rating/page/"),
            MainPageRequest(name="Film Dengan Komentar Terbanyak", data=f"{self.main_url}/most-commented/page/"),
            MainPageRequest(name="Series Terbaru", data=f"{self.series_url}/latest/page/"),
            MainPageRequest(name="Film Asian Terbaru", data=f"{self.series_url}/series/asian/page/"),
            MainPageRequest(name="Film Upload Terbaru", data=f"{self.main_url}/latest/page/"),
        ]

    async def get_main_page(self, page: int, request: MainPageRequest) -> HomePageResponse:
        document = await self.http.get_document(f"{request.data}{page}")
        items = self.parser.parse_listing(document)
        return HomePageResponse(items=[HomePageList(name=request.name, items=items)])

    async def search(self, query: str) -> List[SearchResult]:
        """
        Search LayarKaca.

        Args:
            query: Search query string

        Returns:
            List of search results
        """
        document = await self.http.get_document(f"{self.main_url}/", params={"s": query})
        results = self.parser.parse_search(document)
        self.logger.info(f"Found {len(results)} results for query: '{query}'")
        return results

    async def load(self, url: str) -> LoadResult:
        document = await self.http.get_document(url)
        return self.parser.parse_detail(document, url)

    async def load_links(
        self,
        data: str,
        is_casting: bool,
        subtitle_callback: SubtitleCallback,
        callback: LinkCallback,
    ) -> bool:
        """
        Hand every player link of the page to the generic resolver.

        The playback page is sent as referer. Resolver failures are
        isolated per link.
        """
        document = await self.http.get_document(data)
        links = self.parser.parse_player_links(document, self.provider_config.trimmed_player_host)
        self.logger.debug(f"Resolving {len(links)} player links for {data}")

        async def resolve(link: str) -> bool:
            return await self.load_extractor(link, data, subtitle_callback, callback)

        await concurrent_map(resolve, links, max_concurrency=self.max_concurrent_mirrors)
        return True


__all__ = ["LayarKacaProvider"]
