"""
LayarKaca Provider - Movie and drama source for LayarKaca

This package provides home page listings, search, movie and series
detail pages, and player link resolution for the LayarKaca websites.
"""

from .provider import LayarKacaProvider
from .config import LayarKacaConfig, get_default_config, merge_with_defaults
from .parser import LayarKacaParser

__all__ = [
    "LayarKacaProvider",
    "LayarKacaConfig",
    "get_default_config",
    "merge_with_defaults",
    "LayarKacaParser",
]
