"""
Sources Command - Provider management.

This module implements the commands for listing, enabling, disabling and
testing providers, and for printing the provider manifest.
"""

import asyncio
import json
from typing import Optional

import typer

from nontonplux.cli.context import create_provider_manager, get_config_manager
from nontonplux.core.exceptions import ProviderError
from nontonplux.ui import (
    UIComponents,
    display_info,
    display_warning,
    get_console,
    handle_error,
    status_spinner,
)

# Create sources command group
app = typer.Typer(
    name="sources",
    help="🔌 Manage providers",
    no_args_is_help=True,
)


def _require_known(source_name: str) -> None:
    manager = create_provider_manager()
    if source_name not in manager.available_providers:
        raise ProviderError(
            f"Unknown provider '{source_name}' (available: {', '.join(manager.available_providers)})",
            source_name,
        )


@app.command(name="list")
def list_sources(
    enabled_only: bool = typer.Option(
        False,
        "--enabled",
        "-e",
        help="Show only enabled providers"
    ),
) -> None:
    """
    📋 List discovered providers.

    Examples:

        nontonplux sources list

        nontonplux sources list --enabled
    """
    try:
        manager = create_provider_manager()
        status = manager.get_provider_status()
        if enabled_only:
            status["providers"] = {
                name: info for name, info in status["providers"].items() if info["enabled"]
            }

        table_style = get_config_manager().settings.ui.table_style
        get_console().print(UIComponents(table_style=table_style).create_sources_table(status))
    except Exception as e:
        handle_error(e, "Failed to list sources")
        raise typer.Exit(1)


@app.command(name="enable")
def enable_source(
    source_name: str = typer.Argument(..., help="Provider name to enable"),
) -> None:
    """✅ Enable a provider."""
    try:
        _require_known(source_name)
        get_config_manager().enable_source(source_name)
        display_info(f"Provider '{source_name}' enabled.", "✅ Source Enabled")
    except Exception as e:
        handle_error(e, f"Failed to enable source '{source_name}'")
        raise typer.Exit(1)


@app.command(name="disable")
def disable_source(
    source_name: str = typer.Argument(..., help="Provider name to disable"),
) -> None:
    """❌ Disable a provider."""
    try:
        _require_known(source_name)
        get_config_manager().disable_source(source_name)
        display_info(f"Provider '{source_name}' disabled.", "❌ Source Disabled")
    except Exception as e:
        handle_error(e, f"Failed to disable source '{source_name}'")
        raise typer.Exit(1)


@app.command(name="test")
def test_source(
    source_name: Optional[str] = typer.Argument(
        None,
        help="Provider to test (all enabled providers if omitted)"
    ),
) -> None:
    """
    🧪 Check that providers can reach their sites.

    Examples:

        nontonplux sources test

        nontonplux sources test layarkaca
    """
    try:
        failures = asyncio.run(_test_sources(source_name))
    except Exception as e:
        handle_error(e, "Source test failed")
        raise typer.Exit(1)

    if failures:
        raise typer.Exit(1)


async def _test_sources(source_name: Optional[str]) -> int:
    manager = create_provider_manager()
    try:
        if source_name:
            providers = {source_name: manager.get_provider(source_name)}
        else:
            providers = manager.get_active_providers()

        if not providers:
            display_warning("No providers to test.", "⚠️  Nothing To Test")
            return 0

        console = get_console()
        failures = 0
        for name, provider in providers.items():
            with status_spinner(f"Testing {name} ({provider.main_url})..."):
                reachable = await provider.validate_connection()
            if reachable:
                console.print(f"[success]✓[/success] {name} [muted]{provider.main_url}[/muted]")
            else:
                failures += 1
                console.print(f"[error]✗[/error] {name} [muted]{provider.main_url}[/muted]")
        return failures
    finally:
        await manager.cleanup()


@app.command(name="manifest")
def show_manifest() -> None:
    """📦 Print the provider manifest as JSON."""
    try:
        manager = create_provider_manager()
        typer.echo(json.dumps(manager.build_manifest(), indent=2, ensure_ascii=False))
    except Exception as e:
        handle_error(e, "Failed to build manifest")
        raise typer.Exit(1)


__all__ = ["app"]
