"""
AnimeSail Provider - Main provider implementation for AnimeSail

This module implements the AnimeSail provider: home page sections,
search, series detail pages with tracker ids, and link resolution over
the per-episode mirror list.
"""

import logging
from typing import Any, Dict, List, Optional

from bs4 import Tag

from nontonplux.core.exceptions import ExtractionError
from nontonplux.core.fanout import concurrent_map, safe_call
from nontonplux.core.http import HTML_ACCEPT, Document, HttpClient
from nontonplux.core.models import (
    ExtractorLink,
    HomePageList,
    HomePageResponse,
    LoadResult,
    MainPageRequest,
    ProviderStatus,
    SearchResult,
    TvType,
)
from nontonplux.providers.base import BaseProvider, ProviderMetadata
from nontonplux.providers.common import GenericResolver, LinkCallback, SubtitleCallback, TextCleaner

from .config import AnimeSailConfig, merge_with_defaults
from .mirrors import MIRROR_SELECTOR, MirrorKind, classify_iframe, decode_mirror_iframe, rewrite_redirect_url
from .parser import AnimeSailParser
from .tracker import TrackerClient


logger = logging.getLogger(__name__)


class AnimeSailProvider(BaseProvider):
    """
    AnimeSail provider for subtitled anime, donghua and anime movies.

    Listing pages link to single episodes; results are rewritten to the
    series page so that load() always receives a detail page.
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        http: Optional[HttpClient] = None,
        resolver: Optional[GenericResolver] = None,
    ):
        merged_config = merge_with_defaults(config)
        super().__init__(merged_config, http=http, resolver=resolver)

        try:
            self.provider_config = AnimeSailConfig(**merged_config)
        except Exception as e:
            self.logger.warning(f"Invalid configuration, using defaults: {e}")
            self.provider_config = AnimeSailConfig()

        if self.max_concurrent_mirrors is None:
            self.max_concurrent_mirrors = self.provider_config.max_concurrent_mirrors

        self.parser = AnimeSailParser(self.provider_config.main_url, source="AnimeSail")
        self.tracker = TrackerClient(
            self.http,
            jikan_api_url=self.provider_config.jikan_api_url,
            anilist_api_url=self.provider_config.anilist_api_url,
        )

        self._metadata = ProviderMetadata(
            name="AnimeSail",
            main_url=self.provider_config.main_url,
            lang="id",
            supported_types=[TvType.ANIME, TvType.ANIME_MOVIE, TvType.OVA],
            has_main_page=True,
            has_download_support=True,
            version=1,
            status=ProviderStatus.OK,
            authors=["Hexated"],
            icon_url="https://www.google.com/s2/favicons?domain=111.90.143.42&sz=%size%",
            description="Indonesian anime catalog with subtitled episodes and movies",
        )

    @property
    def metadata(self) -> ProviderMetadata:
        return self._metadata

    @property
    def main_page(self) -> List[MainPageRequest]:
        return [
            MainPageRequest(name="Episode Terbaru", data=f"{self.main_url}/page/"),
            MainPageRequest(name="Movie Terbaru", data=f"{self.main_url}/movie-terbaru/page/"),
            MainPageRequest(name="Donghua", data=f"{self.main_url}/genres/donghua/page/"),
        ]

    async def request(
        self,
        url: str,
        referer: Optional[str] = None,
        params: Optional[Dict[str, str]] = None,
    ) -> Document:
        """Fetch a page with the headers and region cookie the site expects."""
        return await self.http.get_document(
            url,
            params=params,
            headers={'Accept': HTML_ACCEPT},
            cookies={'_as_ipin_ct': self.provider_config.region_cookie},
            referer=referer,
        )

    async def get_main_page(self, page: int, request: MainPageRequest) -> HomePageResponse:
        document = await self.request(f"{request.data}{page}")
        items = self.parser.parse_listing(document, "article")
        return HomePageResponse(items=[HomePageList(name=request.name, items=items)])

    async def search(self, query: str) -> List[SearchResult]:
        """
        Search AnimeSail.

        Args:
            query: Search query string

        Returns:
            List of search results
        """
        document = await self.request(f"{self.main_url}/", params={"s": query})
        results = self.parser.parse_listing(document, "div.listupd article")
        self.logger.info(f"Found {len(results)} results for query: '{query}'")
        return results

    async def load(self, url: str) -> LoadResult:
        """
        Load a series or movie page.

        Tracker ids are looked up after parsing; a failed lookup leaves
        them unset.
        """
        document = await self.request(url)
        result = self.parser.parse_detail(document, url)

        if self.provider_config.lookup_trackers and result.title:
            type_label = document.row_text("Tipe").lower()
            ids = await safe_call(
                self.tracker.lookup,
                result.title,
                result.year,
                type_label,
                description=f"{self.name}: tracker lookup for '{result.title}'",
            )
            if ids:
                result.mal_id, result.anilist_id = ids

        return result

    async def load_links(
        self,
        data: str,
        is_casting: bool,
        subtitle_callback: SubtitleCallback,
        callback: LinkCallback,
    ) -> bool:
        document = await self.request(data)
        options = document.select(MIRROR_SELECTOR)
        self.logger.debug(f"Resolving {len(options)} mirrors for {data}")

        async def resolve(option: Tag) -> None:
            await self._resolve_mirror(option, data, subtitle_callback, callback)

        await concurrent_map(resolve, options, max_concurrency=self.max_concurrent_mirrors)
        return True

    async def _resolve_mirror(
        self,
        option: Tag,
        data: str,
        subtitle_callback: SubtitleCallback,
        callback: LinkCallback,
    ) -> None:
        """Resolve one mirror option; errors propagate to the fan-out."""
        iframe = decode_mirror_iframe(option, self.main_url)
        kind = classify_iframe(iframe, self.main_url)

        if kind in (MirrorKind.ARCH, MirrorKind.RACE):
            player = await self.request(iframe, referer=data)
            link = player.attr("source", "src")
            if not link:
                raise ExtractionError("No source found in player", url=iframe)

            callback(ExtractorLink(
                source=kind.value,
                name=kind.value,
                url=link,
                referer=self.main_url,
                quality=TextCleaner.extract_quality(link),
            ))

        elif kind is MirrorKind.REDIRECT:
            await self.load_extractor(rewrite_redirect_url(iframe), self.main_url, subtitle_callback, callback)

        elif kind is MirrorKind.FRAMEZILLA:
            player = await self.request(iframe, referer=data)
            nested = player.attr("iframe", "src")
            if not nested:
                raise ExtractionError("No nested iframe found in player", url=iframe)

            await self.load_extractor(self.fix_url(nested), self.main_url, subtitle_callback, callback)

        else:
            await self.load_extractor(iframe, self.main_url, subtitle_callback, callback)


__all__ = ["AnimeSailProvider"]
