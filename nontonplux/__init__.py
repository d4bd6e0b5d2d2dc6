"""
NontonPlux - Content providers for Indonesian anime and movie sites.

Scrapes listing, search and detail pages and resolves playable stream
links, with a Typer and Rich command-line front end.
"""

__version__ = "0.1.0"
__author__ = "NontonPlux Team"

# Package metadata
__title__ = "nontonplux"
__description__ = "Content providers for Indonesian anime and movie streaming sites"
__license__ = "MIT"

# Version info tuple for programmatic access
VERSION_INFO = tuple(map(int, __version__.split(".")))

# Export main components for easy importing
from nontonplux.core.models import ExtractorLink, LoadResult, SearchResult
from nontonplux.cli.main import cli_main

__all__ = [
    "__version__",
    "__author__",
    "SearchResult",
    "LoadResult",
    "ExtractorLink",
    "cli_main",
]
