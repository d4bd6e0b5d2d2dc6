"""
CLI Commands - Individual command implementations.

This module contains the browse commands (home, search, load, links),
provider management and configuration management.
"""

from nontonplux.cli.commands import browse, config, sources

__all__ = ["browse", "config", "sources"]
