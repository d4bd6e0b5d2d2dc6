"""
AnimeSail Provider Entry Point

This module serves as the entry point for the AnimeSail provider,
importing the main provider class from the animesail subdirectory.
"""

from nontonplux.providers.animesail.provider import AnimeSailProvider

# Export the provider class for discovery
__all__ = ["AnimeSailProvider"]
