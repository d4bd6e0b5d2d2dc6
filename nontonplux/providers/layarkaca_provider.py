"""
LayarKaca Provider Entry Point

This module serves as the entry point for the LayarKaca provider,
importing the main provider class from the layarkaca subdirectory.
"""

from nontonplux.providers.layarkaca.provider import LayarKacaProvider

# Export the provider class for discovery
__all__ = ["LayarKacaProvider"]
