"""
Core Layer - Data models, configuration and shared runtime services.

This module contains the result models, the configuration layer, the
HTTP collaborators and the fan-out helpers that the providers and the
command-line front end build on. The provider registry lives in
`nontonplux.core.provider_manager`.
"""

from nontonplux.core.config_manager import ConfigManager
from nontonplux.core.config_schemas import AppSettings, SourcesConfig, SourceConfig
from nontonplux.core.config_defaults import (
    create_default_config_files,
    get_default_settings,
    get_default_sources,
)
from nontonplux.core.exceptions import (
    NontonPluxError,
    ConfigurationError,
    ExtractionError,
    NetworkError,
    ProviderError,
    SearchError,
)
from nontonplux.core.fanout import concurrent_map, safe_call
from nontonplux.core.http import Document, HttpClient
from nontonplux.core.models import (
    Episode,
    ExtractorLink,
    HomePageResponse,
    LoadResult,
    MainPageRequest,
    Quality,
    SearchResult,
    TvType,
)

__all__ = [
    # Data Models
    "SearchResult",
    "LoadResult",
    "Episode",
    "ExtractorLink",
    "MainPageRequest",
    "HomePageResponse",
    "Quality",
    "TvType",
    # Configuration Management
    "ConfigManager",
    "AppSettings",
    "SourcesConfig",
    "SourceConfig",
    # Configuration Utilities
    "create_default_config_files",
    "get_default_settings",
    "get_default_sources",
    # HTTP and fan-out
    "HttpClient",
    "Document",
    "safe_call",
    "concurrent_map",
    # Exceptions
    "NontonPluxError",
    "ConfigurationError",
    "ExtractionError",
    "NetworkError",
    "ProviderError",
    "SearchError",
]
