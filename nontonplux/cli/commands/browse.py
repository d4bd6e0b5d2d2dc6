"""
Browse Commands - Home pages, search, detail pages and links.

Each command builds a provider manager, runs one provider operation
and renders the result. Provider sessions are closed when the command
finishes.
"""

import asyncio
import logging
from typing import List, Optional

import typer

from nontonplux.cli.context import create_provider_manager, get_config_manager, is_debug
from nontonplux.core.exceptions import SearchError
from nontonplux.ui import (
    UIComponents,
    display_info,
    display_warning,
    get_console,
    handle_error,
    search_progress,
    status_spinner,
)


logger = logging.getLogger(__name__)


def _components() -> UIComponents:
    return UIComponents(table_style=get_config_manager().settings.ui.table_style)


def home(
    provider: str = typer.Argument(..., help="Provider name, e.g. animesail"),
    page: int = typer.Option(1, "--page", "-p", min=1, help="Page number"),
    section: Optional[str] = typer.Option(
        None,
        "--section",
        "-s",
        help="Home page section name (defaults to the first one)",
    ),
) -> None:
    """
    🏠 List a home page section of a provider.

    Examples:

        nontonplux home animesail

        nontonplux home layarkaca --section "Series Terbaru" --page 2
    """
    try:
        asyncio.run(_home(provider, page, section))
    except typer.Exit:
        raise
    except Exception as e:
        handle_error(e, f"Failed to load home page of '{provider}'", show_traceback=is_debug())
        raise typer.Exit(1)


async def _home(provider_name: str, page: int, section: Optional[str]) -> None:
    manager = create_provider_manager()
    try:
        with status_spinner(f"Loading {provider_name} page {page}..."):
            response = await manager.get_main_page(provider_name, page, section)

        console = get_console()
        components = _components()
        for home_list in response.items:
            console.print(components.create_results_table(home_list.items, title=f"🏠 {home_list.name} (page {page})"))
    finally:
        await manager.cleanup()


def search(
    query: str = typer.Argument(..., help="Title to search for"),
    source: Optional[List[str]] = typer.Option(
        None,
        "--source",
        "-s",
        help="Search only this provider (repeatable)",
    ),
    limit: Optional[int] = typer.Option(
        None,
        "--limit",
        "-l",
        min=1,
        max=200,
        help="Maximum number of results per provider",
    ),
) -> None:
    """
    🔍 Search all enabled providers.

    Examples:

        nontonplux search "one piece"

        nontonplux search naruto --source animesail --limit 10
    """
    try:
        asyncio.run(_search(query, source, limit))
    except typer.Exit:
        raise
    except Exception as e:
        handle_error(e, "Search failed", show_traceback=is_debug())
        raise typer.Exit(1)


async def _search(query: str, sources: Optional[List[str]], limit: Optional[int]) -> None:
    config_manager = get_config_manager()
    min_length = config_manager.settings.search.min_query_length
    if len(query.strip()) < min_length:
        raise SearchError(f"Search query must be at least {min_length} characters", query=query)

    manager = create_provider_manager()
    try:
        names = sources or list(config_manager.get_enabled_sources())
        with search_progress(names):
            results = await manager.search_all(query.strip(), sources=sources)

        if not results:
            display_warning("No enabled providers matched the request.", "⚠️  No Providers")
            return

        console = get_console()
        components = _components()
        total = 0
        for provider_name, items in results.items():
            items = items[:limit] if limit else items
            total += len(items)
            if items:
                console.print(components.create_results_table(items, title=f"🔍 {provider_name}"))

        if total == 0:
            display_info(f"No results for '{query}'.", "ℹ️  No Results")
    finally:
        await manager.cleanup()


def load(
    provider: str = typer.Argument(..., help="Provider name"),
    url: str = typer.Argument(..., help="Detail page URL"),
) -> None:
    """
    📋 Show a title's details and episodes.

    Example:

        nontonplux load animesail https://111.90.143.42/anime/one-piece/
    """
    try:
        asyncio.run(_load(provider, url))
    except typer.Exit:
        raise
    except Exception as e:
        handle_error(e, f"Failed to load '{url}'", show_traceback=is_debug())
        raise typer.Exit(1)


async def _load(provider_name: str, url: str) -> None:
    manager = create_provider_manager()
    try:
        with status_spinner(f"Loading {url}..."):
            result = await manager.load(provider_name, url)

        console = get_console()
        components = _components()
        console.print(components.create_detail_panel(result))
        if result.episodes:
            console.print(components.create_episodes_table(result.episodes))
        if result.recommendations:
            console.print(components.create_results_table(result.recommendations, title="💡 Recommendations"))
    finally:
        await manager.cleanup()


def links(
    provider: str = typer.Argument(..., help="Provider name"),
    url: str = typer.Argument(..., help="Episode or movie playback page URL"),
) -> None:
    """
    ▶️  Resolve playable links for an episode or movie.

    Example:

        nontonplux links layarkaca https://lk21official.info/some-movie-2023/
    """
    try:
        asyncio.run(_links(provider, url))
    except typer.Exit:
        raise
    except Exception as e:
        handle_error(e, f"Failed to resolve links for '{url}'", show_traceback=is_debug())
        raise typer.Exit(1)


async def _links(provider_name: str, url: str) -> None:
    manager = create_provider_manager()
    try:
        with status_spinner("Resolving mirrors..."):
            found, subtitles = await manager.collect_links(provider_name, url)

        if not found and not subtitles:
            display_warning("No playable links were found on this page.", "⚠️  No Links")
            return

        get_console().print(_components().create_links_table(found, subtitles))
    finally:
        await manager.cleanup()


__all__ = ["home", "search", "load", "links"]
