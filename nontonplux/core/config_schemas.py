"""
Configuration Schemas - Pydantic models for configuration validation.

This module defines the data structures and validation rules for
application settings and provider configurations.
"""

from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from nontonplux.core.http import DEFAULT_USER_AGENT


class HttpSettings(BaseModel):
    """Settings shared by every provider's HTTP client."""

    timeout: int = Field(
        default=30,
        ge=5,
        le=300,
        description="Network timeout in seconds"
    )
    user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        description="User agent string for requests"
    )
    max_retries: int = Field(
        default=0,
        ge=0,
        le=10,
        description="Extra attempts after a transport failure"
    )
    retry_delay: float = Field(
        default=1.0,
        ge=0.0,
        le=30.0,
        description="Base delay between attempts in seconds"
    )

    @field_validator('user_agent')
    @classmethod
    def validate_user_agent(cls, v: str) -> str:
        """Validate user agent string."""
        if not v or len(v.strip()) < 10:
            raise ValueError("User agent must be a valid browser string")
        return v.strip()


class LinkSettings(BaseModel):
    """Link resolution settings."""

    max_concurrent_mirrors: Optional[int] = Field(
        default=None,
        ge=1,
        le=64,
        description="Bound on mirrors resolved at once (unbounded if None)"
    )


class UISettings(BaseModel):
    """User interface configuration settings."""

    show_banner: bool = Field(
        default=True,
        description="Whether to show the banner on startup"
    )
    color_theme: Literal["default", "dark", "light", "colorful"] = Field(
        default="default",
        description="Color theme for the CLI interface"
    )
    table_style: Literal["rounded", "simple", "grid", "minimal"] = Field(
        default="rounded",
        description="Style for data tables"
    )


class SearchSettings(BaseModel):
    """Search-related configuration settings."""

    max_results_per_source: int = Field(
        default=50,
        ge=1,
        le=200,
        description="Maximum results to keep per provider"
    )
    min_query_length: int = Field(
        default=2,
        ge=1,
        le=10,
        description="Minimum search query length"
    )


class LoggingSettings(BaseModel):
    """Logging configuration settings."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Logging level"
    )


class AppSettings(BaseModel):
    """Main application settings container."""

    http: HttpSettings = Field(default_factory=HttpSettings)
    links: LinkSettings = Field(default_factory=LinkSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    ui: UISettings = Field(default_factory=UISettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


class SourceConfig(BaseModel):
    """Configuration for an individual provider."""

    enabled: bool = Field(
        default=False,
        description="Whether the provider is enabled"
    )
    priority: int = Field(
        default=1,
        ge=1,
        le=100,
        description="Provider priority (lower numbers = higher priority)"
    )
    name: Optional[str] = Field(
        default=None,
        description="Display name for the provider"
    )
    description: Optional[str] = Field(
        default=None,
        description="Description of the provider"
    )
    config: Dict[str, Any] = Field(
        default_factory=dict,
        description="Provider-specific configuration"
    )

    @field_validator('config')
    @classmethod
    def validate_config(cls, v: Dict[str, Any]) -> Dict[str, Any]:
        """Validate common provider configuration keys."""
        if 'timeout' in v and (not isinstance(v['timeout'], int) or v['timeout'] < 1):
            raise ValueError("timeout must be a positive integer")

        for key in ('main_url', 'series_url'):
            if key in v and not str(v[key]).startswith(('http://', 'https://')):
                raise ValueError(f"{key} must start with http:// or https://")

        return v


class GlobalSourceConfig(BaseModel):
    """Global configuration for provider management."""

    max_concurrent_providers: int = Field(
        default=5,
        ge=1,
        le=20,
        description="Maximum number of providers to query concurrently"
    )


class SourcesConfig(BaseModel):
    """Sources configuration container."""

    sources: Dict[str, SourceConfig] = Field(
        default_factory=dict,
        description="Individual provider configurations"
    )
    global_config: GlobalSourceConfig = Field(
        default_factory=GlobalSourceConfig,
        description="Global provider management settings"
    )

    @model_validator(mode='after')
    def validate_source_priorities(self) -> 'SourcesConfig':
        """Warn about duplicate priorities."""
        priorities = {}
        for name, config in self.sources.items():
            if config.priority in priorities:
                import logging
                logger = logging.getLogger(__name__)
                logger.warning(
                    f"Duplicate priority {config.priority} for sources "
                    f"{name} and {priorities[config.priority]}"
                )
            priorities[config.priority] = name

        return self

    def get_enabled_sources(self) -> Dict[str, SourceConfig]:
        """Get all enabled sources sorted by priority."""
        enabled = {
            name: config for name, config in self.sources.items()
            if config.enabled
        }

        return dict(sorted(
            enabled.items(),
            key=lambda item: item[1].priority
        ))

    def add_source(self, name: str, config: SourceConfig) -> None:
        """Add a new source configuration."""
        self.sources[name] = config

    def get_source(self, name: str) -> Optional[SourceConfig]:
        """Get configuration for a specific source."""
        return self.sources.get(name)


__all__ = [
    "HttpSettings",
    "LinkSettings",
    "UISettings",
    "SearchSettings",
    "LoggingSettings",
    "AppSettings",
    "SourceConfig",
    "GlobalSourceConfig",
    "SourcesConfig",
]
