"""
CLI Layer - Typer front end.

This module contains the command-line application that drives the
providers: home page sections, search, detail pages, link resolution,
provider management and configuration.
"""

from nontonplux.cli.main import app, cli_main

__all__ = ["app", "cli_main"]
