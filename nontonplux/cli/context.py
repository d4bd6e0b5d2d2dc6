"""
CLI Context - Global application state shared by the commands.

Holds the configuration manager set up by the main callback and the
factory used to build a provider manager for each command run.
"""

from typing import Callable, Optional

from nontonplux.core import ConfigManager
from nontonplux.core.provider_manager import ProviderManager


ProviderManagerFactory = Callable[[ConfigManager], ProviderManager]

# Global application state
_config_manager: Optional[ConfigManager] = None
_provider_manager_factory: ProviderManagerFactory = ProviderManager
_debug: bool = False


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    if _config_manager is None:
        raise RuntimeError("Configuration manager not initialized")
    return _config_manager


def set_config_manager(config_manager: ConfigManager) -> None:
    """Set the global configuration manager instance."""
    global _config_manager
    _config_manager = config_manager


def set_provider_manager_factory(factory: ProviderManagerFactory) -> None:
    """Replace how provider managers are built (tests inject fakes here)."""
    global _provider_manager_factory
    _provider_manager_factory = factory


def create_provider_manager() -> ProviderManager:
    """Build a provider manager for the current configuration."""
    return _provider_manager_factory(get_config_manager())


def is_debug() -> bool:
    return _debug


def set_debug(debug: bool) -> None:
    global _debug
    _debug = debug


# Export context functions
__all__ = [
    "get_config_manager",
    "set_config_manager",
    "set_provider_manager_factory",
    "create_provider_manager",
    "is_debug",
    "set_debug",
]
