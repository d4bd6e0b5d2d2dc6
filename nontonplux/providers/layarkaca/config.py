"""
LayarKaca Provider Configuration

This module handles configuration validation and defaults for the LayarKaca provider.
"""

import logging
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator


logger = logging.getLogger(__name__)


class LayarKacaConfig(BaseModel):
    """Configuration model for the LayarKaca provider."""

    timeout: int = Field(default=30, description="Request timeout in seconds")

    # Movies and series live on separate hosts
    main_url: str = Field(default="https://lk21official.info", description="Movie site root")
    series_url: str = Field(default="https://drama.nontondrama.lol", description="Series site root")

    # Player links on this host point one path segment too deep
    trimmed_player_host: str = Field(
        default="https://layarkacaxxi.icu",
        description="Player host whose links are cut back to their parent path"
    )

    max_concurrent_mirrors: Optional[int] = Field(
        default=None,
        description="Bound on player links resolved at once (unbounded if None)"
    )

    @field_validator('main_url', 'series_url', 'trimmed_player_host')
    @classmethod
    def validate_url(cls, v: str) -> str:
        if not v.startswith(('http://', 'https://')):
            raise ValueError("URL must start with http:// or https://")
        return v.rstrip('/')

    @field_validator('timeout')
    @classmethod
    def validate_timeout(cls, v: int) -> int:
        if v < 5:
            raise ValueError("Timeout must be at least 5 seconds")
        return v


def get_default_config() -> Dict[str, Any]:
    """Get default configuration for the LayarKaca provider."""
    return LayarKacaConfig().model_dump()


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


__all__ = ["LayarKacaConfig", "get_default_config", "merge_with_defaults"]
