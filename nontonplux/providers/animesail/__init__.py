"""
AnimeSail Provider - Anime source for AnimeSail

This package provides home page listings, search, series detail pages
and mirror-based link resolution for the AnimeSail website.
"""

from .provider import AnimeSailProvider
from .config import AnimeSailConfig, get_default_config, merge_with_defaults
from .parser import AnimeSailParser, get_type, get_status

__all__ = [
    "AnimeSailProvider",
    "AnimeSailConfig",
    "get_default_config",
    "merge_with_defaults",
    "AnimeSailParser",
    "get_type",
    "get_status",
]
