"""
Base Provider Interface - Abstract base class for site providers.

This module defines the interface every provider implements: listing the
home page, searching, loading a detail page and resolving playable links.
HTTP access and generic embed resolution are injected collaborators, so
providers stay thin and testable.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field

from nontonplux.core.fanout import safe_call
from nontonplux.core.http import DEFAULT_USER_AGENT, HttpClient
from nontonplux.core.models import (
    ExtractorLink,
    HomePageResponse,
    LoadResult,
    MainPageRequest,
    ProviderStatus,
    SearchResult,
    SubtitleFile,
    TvType,
)
from nontonplux.providers.common import (
    GenericResolver,
    LinkCallback,
    PassthroughResolver,
    SubtitleCallback,
    URLHelper,
)


logger = logging.getLogger(__name__)


class ProviderMetadata(BaseModel):
    """Metadata a provider publishes to the registry."""

    name: str = Field(..., description="Provider display name")
    main_url: str = Field(..., description="Site root")
    lang: str = Field(default="en", description="Content language code")
    supported_types: List[TvType] = Field(default_factory=list, description="Content types listed")
    has_main_page: bool = Field(default=True, description="Whether get_main_page is supported")
    has_download_support: bool = Field(default=True, description="Whether links may be downloaded")
    version: int = Field(default=1, ge=1, description="Provider version")
    status: ProviderStatus = Field(default=ProviderStatus.OK, description="Provider health")
    authors: List[str] = Field(default_factory=list, description="Provider authors")
    icon_url: Optional[str] = Field(None, description="Favicon URL template")
    description: str = Field(default="", description="Provider description")


class BaseProvider(ABC):
    """
    Abstract base class for site providers.

    Subclasses implement metadata, main_page and the four content
    operations. Everything else (URL fixing, link collection, session
    cleanup) is shared.
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        http: Optional[HttpClient] = None,
        resolver: Optional[GenericResolver] = None,
    ):
        """
        Initialize the provider.

        Args:
            config: Provider-specific configuration dictionary
            http: HTTP client to use (one is created from config if omitted)
            resolver: Generic embed resolver (pass-through if omitted)
        """
        self.config = config or {}
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

        self._owns_http = http is None
        self.http = http or HttpClient(
            timeout=self.config.get('timeout', 30),
            user_agent=self.config.get('user_agent') or DEFAULT_USER_AGENT,
            max_retries=self.config.get('max_retries', 0),
            retry_delay=self.config.get('retry_delay', 1.0),
        )
        self.resolver = resolver or PassthroughResolver()
        self.max_concurrent_mirrors: Optional[int] = self.config.get('max_concurrent_mirrors')

    @property
    @abstractmethod
    def metadata(self) -> ProviderMetadata:
        """Get provider metadata."""

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def main_url(self) -> str:
        return self.metadata.main_url

    @property
    @abstractmethod
    def main_page(self) -> List[MainPageRequest]:
        """Home page sections, in display order."""

    def fix_url(self, url: Optional[str]) -> str:
        return URLHelper.fix_url(url, self.main_url)

    def fix_url_null(self, url: Optional[str]) -> Optional[str]:
        return URLHelper.fix_url_null(url, self.main_url)

    def get_main_page_request(self, name: Optional[str] = None) -> MainPageRequest:
        """
        Look up a home page section by name (the first one by default).

        Raises:
            KeyError: If no section has that name
        """
        if name is None:
            return self.main_page[0]
        for request in self.main_page:
            if request.name.lower() == name.lower():
                return request
        raise KeyError(name)

    @abstractmethod
    async def get_main_page(self, page: int, request: MainPageRequest) -> HomePageResponse:
        """
        Fetch one page of a home page section.

        Args:
            page: 1-based page number
            request: Section to fetch

        Returns:
            Home page response with one titled list
        """

    @abstractmethod
    async def search(self, query: str) -> List[SearchResult]:
        """
        Search the site.

        Args:
            query: Free-text query

        Returns:
            Search results, possibly empty
        """

    @abstractmethod
    async def load(self, url: str) -> LoadResult:
        """
        Load a detail page.

        Args:
            url: Detail-page URL

        Returns:
            Title metadata with its episodes
        """

    @abstractmethod
    async def load_links(
        self,
        data: str,
        is_casting: bool,
        subtitle_callback: SubtitleCallback,
        callback: LinkCallback,
    ) -> bool:
        """
        Resolve playable links for an episode or movie page.

        Links are reported through `callback` as they are found.

        Args:
            data: Episode or movie page URL
            is_casting: Whether the links are meant for a cast device
            subtitle_callback: Receives subtitle tracks
            callback: Receives resolved links

        Returns:
            True once resolution has finished
        """

    async def load_extractor(
        self,
        url: str,
        referer: Optional[str],
        subtitle_callback: SubtitleCallback,
        callback: LinkCallback,
    ) -> bool:
        """Hand an embed URL to the generic resolver, isolating its failures."""
        result = await safe_call(
            self.resolver.resolve,
            url,
            referer,
            subtitle_callback,
            callback,
            description=f"{self.name}: resolving {url}",
        )
        return bool(result)

    async def collect_links(
        self,
        data: str,
        is_casting: bool = False,
    ) -> Tuple[List[ExtractorLink], List[SubtitleFile]]:
        """
        Run load_links and gather everything it reports.

        Args:
            data: Episode or movie page URL
            is_casting: Whether the links are meant for a cast device

        Returns:
            Collected links and subtitles
        """
        links: List[ExtractorLink] = []
        subtitles: List[SubtitleFile] = []

        await self.load_links(data, is_casting, subtitles.append, links.append)

        self.logger.info(f"Collected {len(links)} links for {data}")
        return links, subtitles

    async def validate_connection(self) -> bool:
        """
        Validate that the provider can reach its site.

        Returns:
            True if the site root answers, False otherwise
        """
        try:
            await self.http.get_text(self.main_url)
            return True
        except Exception as e:
            self.logger.error(f"Connection validation failed: {e}")
            return False

    async def cleanup(self) -> None:
        """Release the HTTP session if this provider created it."""
        if self._owns_http:
            await self.http.close()

    def __str__(self) -> str:
        return f"{self.metadata.name} v{self.metadata.version}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.metadata.name}')"


__all__ = ["BaseProvider", "ProviderMetadata"]
