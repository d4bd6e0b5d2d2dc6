"""
Provider Layer - Site-specific content providers.

This module contains the provider interface, the shared scraping helpers
and the individual site implementations. Entry modules named
`<name>_provider.py` are picked up by the provider registry.
"""

from nontonplux.providers.base import BaseProvider, ProviderMetadata
from nontonplux.providers.common import (
    GenericResolver,
    PassthroughResolver,
    URLHelper,
    TextCleaner,
)

__all__ = [
    # Base Provider Architecture
    "BaseProvider",
    "ProviderMetadata",
    # Provider Development Utilities
    "GenericResolver",
    "PassthroughResolver",
    "URLHelper",
    "TextCleaner",
]
