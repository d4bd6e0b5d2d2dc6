"""
Provider Manager - Provider discovery, loading and coordinated operations.

This module discovers the bundled site providers, instantiates the
enabled ones with their configuration, and offers a unified interface
for searching across providers and for driving a single provider.
"""

import asyncio
import importlib
import inspect
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple, Type

from nontonplux.core.config_manager import ConfigManager
from nontonplux.core.exceptions import ProviderError
from nontonplux.core.http import HttpClient
from nontonplux.core.models import (
    ExtractorLink,
    HomePageResponse,
    LoadResult,
    MainPageRequest,
    SearchResult,
    SubtitleFile,
)
from nontonplux.providers.base import BaseProvider
from nontonplux.providers.common import GenericResolver


logger = logging.getLogger(__name__)


PROVIDER_MODULE_SUFFIX = "_provider"


class ProviderManager:
    """
    Manages site providers with discovery and lazy loading.

    Provider names are the entry module stems without the `_provider`
    suffix, which are also the keys of sources.json.
    """

    def __init__(
        self,
        config_manager: ConfigManager,
        providers_dir: Optional[Path] = None,
        http_factory: Optional[Callable[[], HttpClient]] = None,
        resolver: Optional[GenericResolver] = None,
    ):
        """
        Initialize provider manager.

        Args:
            config_manager: Configuration manager instance
            providers_dir: Directory holding the provider entry modules
            http_factory: Builds the HTTP client handed to each provider
            resolver: Generic embed resolver shared by all providers
        """
        self.config_manager = config_manager
        self.providers_dir = providers_dir or Path(__file__).parent.parent / "providers"
        self.http_factory = http_factory
        self.resolver = resolver

        self._available_providers: Dict[str, Type[BaseProvider]] = {}
        self._loaded_providers: Dict[str, BaseProvider] = {}
        self._provider_errors: Dict[str, Exception] = {}

        self._discovery_complete = False

    def discover_providers(self) -> None:
        """
        Discover available providers.

        Imports every `*_provider.py` module of the providers package and
        registers the first concrete BaseProvider subclass it exports.
        """
        if not self.providers_dir.exists():
            logger.warning(f"Providers directory does not exist: {self.providers_dir}")
            return

        logger.info(f"Discovering providers in {self.providers_dir}")

        self._available_providers.clear()
        self._provider_errors.clear()

        for module_file in sorted(self.providers_dir.glob(f"*{PROVIDER_MODULE_SUFFIX}.py")):
            provider_name = module_file.stem[:-len(PROVIDER_MODULE_SUFFIX)]
            try:
                self._discover_provider_module(provider_name, module_file.stem)
            except Exception as e:
                self._provider_errors[provider_name] = e
                logger.error(f"Failed to discover provider {provider_name}: {e}")

        self._discovery_complete = True
        logger.info(f"Provider discovery complete: {len(self._available_providers)} providers found")

    def _discover_provider_module(self, provider_name: str, module_stem: str) -> None:
        module_name = f"nontonplux.providers.{module_stem}"

        try:
            module = importlib.import_module(module_name)
        except Exception as e:
            raise ProviderError(f"Failed to import provider module {module_name}: {e}", provider_name)

        for _, obj in inspect.getmembers(module, inspect.isclass):
            if issubclass(obj, BaseProvider) and obj is not BaseProvider and not inspect.isabstract(obj):
                self._available_providers[provider_name] = obj
                logger.debug(f"Discovered provider: {provider_name} ({obj.__name__})")
                return

        logger.warning(f"No valid provider class found in {module_name}")

    @property
    def available_providers(self) -> List[str]:
        if not self._discovery_complete:
            self.discover_providers()
        return list(self._available_providers)

    def _provider_config(self, provider_name: str) -> Dict[str, Any]:
        """Shared HTTP and link settings overlaid with the provider's own config."""
        settings = self.config_manager.settings
        config: Dict[str, Any] = settings.http.model_dump()
        if settings.links.max_concurrent_mirrors is not None:
            config['max_concurrent_mirrors'] = settings.links.max_concurrent_mirrors

        source_config = self.config_manager.sources.get_source(provider_name)
        if source_config is None:
            logger.warning(f"No configuration found for provider {provider_name}")
        else:
            config.update(source_config.config)
        return config

    def load_provider(self, provider_name: str) -> Optional[BaseProvider]:
        """
        Load a provider by name.

        Args:
            provider_name: Name of the provider to load

        Returns:
            Loaded provider instance or None if loading failed
        """
        if provider_name in self._loaded_providers:
            return self._loaded_providers[provider_name]

        if provider_name not in self._available_providers:
            if not self._discovery_complete:
                self.discover_providers()

            if provider_name not in self._available_providers:
                logger.error(f"Provider not found: {provider_name}")
                return None

        try:
            provider_class = self._available_providers[provider_name]
            provider = provider_class(
                config=self._provider_config(provider_name),
                http=self.http_factory() if self.http_factory else None,
                resolver=self.resolver,
            )
        except Exception as e:
            self._provider_errors[provider_name] = e
            logger.error(f"Failed to load provider {provider_name}: {e}")
            return None

        self._loaded_providers[provider_name] = provider
        logger.info(f"Successfully loaded provider: {provider_name}")
        return provider

    def get_provider(self, provider_name: str) -> BaseProvider:
        """
        Load a provider or fail.

        Raises:
            ProviderError: If the provider does not exist or cannot be loaded
        """
        provider = self.load_provider(provider_name)
        if provider is None:
            error = self._provider_errors.get(provider_name)
            message = f"Provider {provider_name} is not available"
            if error is not None:
                message = f"{message}: {error}"
            raise ProviderError(message, provider_name)
        return provider

    def get_active_providers(self) -> Dict[str, BaseProvider]:
        """
        Get all enabled providers that loaded successfully.

        Returns:
            Provider name to instance, in priority order
        """
        if not self._discovery_complete:
            self.discover_providers()

        active = {}
        for provider_name in self.config_manager.get_enabled_sources():
            provider = self.load_provider(provider_name)
            if provider is not None:
                active[provider_name] = provider
        return active

    async def search_all(
        self,
        query: str,
        max_concurrent: Optional[int] = None,
        sources: Optional[List[str]] = None,
    ) -> Dict[str, List[SearchResult]]:
        """
        Search across all active providers concurrently.

        A failing provider contributes an empty list; its error is kept
        for get_provider_status.

        Args:
            query: Search query string
            max_concurrent: Maximum number of concurrent provider searches
            sources: Restrict the search to these providers

        Returns:
            Dictionary mapping provider names to their search results
        """
        active_providers = self.get_active_providers()
        if sources:
            active_providers = {name: p for name, p in active_providers.items() if name in sources}

        if not active_providers:
            logger.warning("No active providers available for search")
            return {}

        if max_concurrent is None:
            max_concurrent = self.config_manager.sources.global_config.max_concurrent_providers

        limit = self.config_manager.settings.search.max_results_per_source
        semaphore = asyncio.Semaphore(max_concurrent)

        async def search_provider(name: str, provider: BaseProvider) -> Tuple[str, List[SearchResult]]:
            async with semaphore:
                try:
                    logger.debug(f"Searching provider {name} for: {query}")
                    results = await provider.search(query)
                    logger.debug(f"Provider {name} returned {len(results)} results")
                    return name, results[:limit]
                except Exception as e:
                    logger.error(f"Search failed for provider {name}: {e}")
                    self._provider_errors[name] = e
                    return name, []

        results = await asyncio.gather(*(
            search_provider(name, provider) for name, provider in active_providers.items()
        ))

        search_results = dict(results)
        total_results = sum(len(items) for items in search_results.values())
        logger.info(f"Search complete: {total_results} total results from {len(search_results)} providers")
        return search_results

    async def get_main_page(
        self,
        provider_name: str,
        page: int = 1,
        section: Optional[str] = None,
    ) -> HomePageResponse:
        """
        Fetch one home page section of a provider.

        Raises:
            ProviderError: If the provider or section is unknown
        """
        provider = self.get_provider(provider_name)
        try:
            request: MainPageRequest = provider.get_main_page_request(section)
        except KeyError:
            names = ", ".join(r.name for r in provider.main_page)
            raise ProviderError(f"Unknown section '{section}' (available: {names})", provider_name)

        return await provider.get_main_page(page, request)

    async def load(self, provider_name: str, url: str) -> LoadResult:
        provider = self.get_provider(provider_name)
        return await provider.load(url)

    async def collect_links(
        self,
        provider_name: str,
        data: str,
    ) -> Tuple[List[ExtractorLink], List[SubtitleFile]]:
        """Resolve and collect all links of an episode or movie page."""
        provider = self.get_provider(provider_name)
        return await provider.collect_links(data)

    def get_provider_status(self) -> Dict[str, Any]:
        """
        Get status information for all providers.

        Returns:
            Dictionary containing provider status information
        """
        if not self._discovery_complete:
            self.discover_providers()

        status: Dict[str, Any] = {
            "discovered": len(self._available_providers),
            "loaded": len(self._loaded_providers),
            "errors": len(self._provider_errors),
            "providers": {},
        }

        for name, provider_class in self._available_providers.items():
            source_config = self.config_manager.sources.get_source(name)
            info: Dict[str, Any] = {
                "class": provider_class.__name__,
                "loaded": name in self._loaded_providers,
                "enabled": source_config.enabled if source_config else False,
                "error": str(self._provider_errors[name]) if name in self._provider_errors else None,
            }
            if name in self._loaded_providers:
                info["metadata"] = self._loaded_providers[name].metadata.model_dump(mode='json')
            status["providers"][name] = info

        return status

    def build_manifest(self) -> List[Dict[str, Any]]:
        """
        Build the provider manifest.

        One entry per discovered provider with the fields a provider
        repository index publishes.
        """
        manifest = []
        for name in self.available_providers:
            provider = self.load_provider(name)
            if provider is None:
                continue
            meta = provider.metadata
            manifest.append({
                "internalName": provider.__class__.__name__,
                "name": meta.name,
                "version": meta.version,
                "status": int(meta.status),
                "authors": meta.authors,
                "language": meta.lang,
                "tvTypes": [t.value for t in meta.supported_types],
                "iconUrl": meta.icon_url,
                "url": meta.main_url,
                "description": meta.description,
            })
        return manifest

    async def cleanup(self) -> None:
        """Clean up all loaded providers."""
        logger.debug("Cleaning up provider manager")

        if self._loaded_providers:
            await asyncio.gather(
                *(provider.cleanup() for provider in self._loaded_providers.values()),
                return_exceptions=True,
            )

        self._loaded_providers.clear()
        logger.debug("Provider manager cleanup complete")


# Export provider manager
__all__ = ["ProviderManager"]
