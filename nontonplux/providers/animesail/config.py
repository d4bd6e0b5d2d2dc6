"""
AnimeSail Provider Configuration

This module handles configuration validation and defaults for the AnimeSail provider.
"""

import logging
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator


logger = logging.getLogger(__name__)


class AnimeSailConfig(BaseModel):
    """Configuration model for the AnimeSail provider."""

    timeout: int = Field(default=30, description="Request timeout in seconds")

    # The site is served from a bare IP and moves from time to time
    main_url: str = Field(default="https://111.90.143.42", description="Site root")
    region_cookie: str = Field(default="ID", description="Value of the _as_ipin_ct cookie")

    # Tracker cross-reference
    lookup_trackers: bool = Field(default=True, description="Look up MyAnimeList/AniList ids on load")
    jikan_api_url: str = Field(default="https://api.jikan.moe/v4", description="Jikan REST API root")
    anilist_api_url: str = Field(default="https://graphql.anilist.co/", description="AniList GraphQL endpoint")

    max_concurrent_mirrors: Optional[int] = Field(
        default=None,
        description="Bound on mirrors resolved at once (unbounded if None)"
    )

    @field_validator('main_url', 'jikan_api_url', 'anilist_api_url')
    @classmethod
    def validate_url(cls, v: str) -> str:
        if not v.startswith(('http://', 'https://')):
            raise ValueError("URL must start with http:// or https://")
        return v

    @field_validator('main_url', 'jikan_api_url')
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip('/')

    @field_validator('timeout')
    @classmethod
    def validate_timeout(cls, v: int) -> int:
        if v < 5:
            raise ValueError("Timeout must be at least 5 seconds")
        return v


def get_default_config() -> Dict[str, Any]:
    """Get default configuration for the AnimeSail provider."""
    return AnimeSailConfig().model_dump()


def merge_with_defaults(config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Merge provided config with defaults.

    Args:
        config: User configuration dictionary

    Returns:
        Merged configuration dictionary
    """
    merged = get_default_config()
    if config:
        merged.update({key: value for key, value in config.items() if value is not None})
    return merged


__all__ = ["AnimeSailConfig", "get_default_config", "merge_with_defaults"]
