"""
Config Command - Configuration management functionality.

This module implements commands for viewing, changing, resetting and
validating settings.json and sources.json.
"""

import json
from typing import Any, Optional

import typer
from rich.prompt import Confirm
from rich.syntax import Syntax

from nontonplux.cli.context import get_config_manager
from nontonplux.core.exceptions import ConfigurationError
from nontonplux.ui import (
    ThemeName,
    display_info,
    display_warning,
    get_console,
    handle_error,
    set_theme,
    update_console_theme,
)

# Create config command group
app = typer.Typer(
    name="config",
    help="⚙️  Manage configuration",
    no_args_is_help=True,
)


def _parse_value(value: str) -> Any:
    """Interpret a command-line value as JSON when it looks like JSON."""
    if value.lower() in ("null", "none"):
        return None
    try:
        return json.loads(value)
    except ValueError:
        return value


@app.command(name="show")
def show_config(
    section: Optional[str] = typer.Argument(
        None,
        help="Section to display: settings, sources, or a settings section such as http"
    ),
) -> None:
    """
    📋 Display current configuration.

    Examples:

        nontonplux config show

        nontonplux config show http
    """
    try:
        config_manager = get_config_manager()
        data = {
            "settings": config_manager.settings.model_dump(mode='json'),
            "sources": config_manager.sources.model_dump(mode='json'),
        }

        if section is None:
            shown: Any = data
        elif section in data:
            shown = data[section]
        elif section in data["settings"]:
            shown = data["settings"][section]
        else:
            raise ConfigurationError(f"Unknown configuration section: {section}")

        get_console().print(Syntax(json.dumps(shown, indent=2, ensure_ascii=False), "json"))
    except Exception as e:
        handle_error(e, "Failed to display configuration")
        raise typer.Exit(1)


@app.command(name="set")
def set_config(
    key: str = typer.Argument(..., help="Configuration key (dot notation)"),
    value: str = typer.Argument(..., help="New value for the setting"),
) -> None:
    """
    🔧 Set a configuration value.

    Examples:

        nontonplux config set ui.color_theme dark

        nontonplux config set http.max_retries 2
    """
    try:
        config_manager = get_config_manager()
        config_manager.update_setting(key, _parse_value(value))

        if key == "ui.color_theme":
            theme = ThemeName(config_manager.settings.ui.color_theme)
            set_theme(theme)
            update_console_theme(theme)

        display_info(f"{key} = {value}", "✅ Configuration Updated")
    except Exception as e:
        handle_error(e, f"Failed to set configuration value '{key}'")
        raise typer.Exit(1)


@app.command(name="reset")
def reset_config(
    confirm: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Skip confirmation prompt"
    ),
) -> None:
    """🔄 Reset configuration to defaults."""
    try:
        if not confirm and not Confirm.ask(
            "[bold red]⚠️  This will reset ALL configuration to defaults. Continue?[/bold red]",
            default=False
        ):
            display_info("Configuration reset cancelled.", "ℹ️  Cancelled")
            return

        get_config_manager().reset_to_defaults()
        display_info("Configuration has been reset to default values.", "✅ Configuration Reset")
    except Exception as e:
        handle_error(e, "Failed to reset configuration")
        raise typer.Exit(1)


@app.command(name="validate")
def validate_config() -> None:
    """✅ Validate current configuration."""
    try:
        report = get_config_manager().validate_configuration()
    except Exception as e:
        handle_error(e, "Configuration validation failed")
        raise typer.Exit(1)

    for warning in report["warnings"]:
        display_warning(warning)

    if not report["valid"]:
        error = ConfigurationError("Configuration is invalid", details="\n".join(report["issues"]))
        handle_error(error, show_traceback=True)
        raise typer.Exit(1)

    display_info("Configuration is valid.", "✅ Valid")


__all__ = ["app"]
