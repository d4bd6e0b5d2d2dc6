"""
CLI Main Application - Typer app entry point.

This module provides the main CLI application: global options, logging
and theme setup, and command registration.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.traceback import install as install_rich_traceback

from nontonplux import __version__
from nontonplux.core import ConfigManager, create_default_config_files
from nontonplux.core.exceptions import ConfigurationError, NontonPluxError
from nontonplux.ui import (
    ThemeName,
    get_console,
    handle_error,
    set_theme,
    setup_console,
)
from nontonplux.cli.context import get_config_manager, set_config_manager, set_debug


# Create main Typer application
app = typer.Typer(
    name="nontonplux",
    help="📺 Browse Indonesian anime and movie sites from the terminal",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _version_callback(value: bool) -> None:
    if value:
        get_console().print(f"[bold blue]NontonPlux[/bold blue] version [green]{__version__}[/green]")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version information and exit",
        callback=_version_callback,
        is_eager=True,
    ),
    config_dir: Optional[Path] = typer.Option(
        None,
        "--config-dir",
        help="Configuration directory path",
        file_okay=False,
        dir_okay=True,
    ),
    theme: Optional[ThemeName] = typer.Option(
        None,
        "--theme",
        help="UI color theme",
        case_sensitive=False,
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug mode with detailed logging",
    ),
) -> None:
    """
    📺 NontonPlux - content providers for Indonesian streaming sites.

    List home page sections, search, inspect titles and resolve
    playable links from AnimeSail and LayarKaca.
    """
    try:
        _initialize_application(config_dir=config_dir, theme=theme, debug=debug)
    except Exception as e:
        if isinstance(e, NontonPluxError):
            handle_error(e, "During application initialization")
        else:
            handle_error(e, "Unexpected error during startup", show_traceback=debug)
        raise typer.Exit(1)


def _initialize_application(
    config_dir: Optional[Path] = None,
    theme: Optional[ThemeName] = None,
    debug: bool = False,
) -> None:
    """
    Initialize configuration, logging and the console.

    Args:
        config_dir: Configuration directory override
        theme: Theme override
        debug: Enable debug mode
    """
    set_debug(debug)
    install_rich_traceback(show_locals=debug)

    if config_dir is None:
        config_dir = Path("config")

    if not config_dir.exists():
        create_default_config_files(config_dir)

    try:
        config_manager = ConfigManager(config_dir)
    except Exception as e:
        raise ConfigurationError(f"Failed to load configuration: {e}", str(config_dir))
    set_config_manager(config_manager)

    _setup_logging(debug, config_manager.settings.logging.level)
    _setup_ui(theme)


def _setup_logging(debug: bool = False, level_name: str = "WARNING") -> None:
    """
    Set up application logging.

    Args:
        debug: Enable debug logging (overrides the configured level)
        level_name: Configured logging level
    """
    level = logging.DEBUG if debug else getattr(logging, level_name, logging.WARNING)

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stderr),
        ],
    )

    # Reduce noise from third-party libraries
    if not debug:
        logging.getLogger("aiohttp").setLevel(logging.WARNING)


def _setup_ui(theme_override: Optional[ThemeName] = None) -> None:
    """Apply the theme override or the configured theme."""
    if theme_override:
        theme = theme_override
    else:
        try:
            theme = ThemeName(get_config_manager().settings.ui.color_theme)
        except (RuntimeError, ValueError):
            theme = ThemeName.DEFAULT

    set_theme(theme)
    setup_console(theme_name=theme)


def _register_commands() -> None:
    """Register commands with the main app."""
    # Imported here to avoid circular imports
    from nontonplux.cli.commands import browse, config, sources

    app.command(name="home")(browse.home)
    app.command(name="search")(browse.search)
    app.command(name="load")(browse.load)
    app.command(name="links")(browse.links)

    app.add_typer(sources.app, name="sources", help="🔌 Manage providers")
    app.add_typer(config.app, name="config", help="⚙️  Manage configuration")


_register_commands()


def cli_main() -> None:
    """Entry point of the nontonplux command."""
    try:
        app()
    except KeyboardInterrupt:
        get_console().print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)
    except Exception as e:
        handle_error(e, "Unexpected error in CLI")
        sys.exit(1)


# Export main components
__all__ = [
    "app",
    "cli_main",
]
