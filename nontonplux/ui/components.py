"""
UI Components - Rich tables and panels for provider results.

This module renders search results, detail pages, episode lists,
resolved links and provider status with consistent styling.
"""

from typing import Any, Dict, List, Optional

from rich import box
from rich.panel import Panel
from rich.table import Table

from nontonplux.core.models import Episode, ExtractorLink, LoadResult, Quality, SearchResult, SubtitleFile
from nontonplux.ui.themes import get_palette


TABLE_BOXES = {
    "rounded": box.ROUNDED,
    "simple": box.SIMPLE,
    "grid": box.SQUARE,
    "minimal": box.MINIMAL,
}

QUALITY_STYLES = {
    Quality.UNKNOWN: "quality.unknown",
    Quality.LOW: "quality.low",
    Quality.MEDIUM: "quality.medium",
    Quality.HIGH: "quality.high",
    Quality.ULTRA: "quality.high",
    Quality.FOUR_K: "quality.high",
}


class UIComponents:
    """Collection of standardized UI components with consistent styling."""

    def __init__(self, table_style: str = "rounded"):
        """
        Initialize UI components.

        Args:
            table_style: One of rounded, simple, grid, minimal
        """
        self.palette = get_palette()
        self.table_box = TABLE_BOXES.get(table_style, box.ROUNDED)

    def _table(self, title: Optional[str]) -> Table:
        return Table(
            title=title,
            show_header=True,
            header_style=f"bold {self.palette.secondary}",
            border_style=self.palette.border_primary,
            box=self.table_box,
            expand=True,
        )

    def create_results_table(self, results: List[SearchResult], title: str = "🔍 Search Results") -> Table:
        """
        Create a table of listing or search results.

        Args:
            results: Results to show
            title: Table title

        Returns:
            Formatted table
        """
        table = self._table(title)

        table.add_column("#", style="dim", width=4)
        table.add_column("Title", style=self.palette.primary, min_width=30)
        table.add_column("Type", style=self.palette.text_secondary, width=11)
        table.add_column("Ep/Quality", style=self.palette.accent, width=10)
        table.add_column("URL", style="link", overflow="fold")

        for i, result in enumerate(results, 1):
            if result.episode_count is not None:
                hint = f"Ep {result.episode_count}"
            else:
                hint = result.quality or "-"
            table.add_row(str(i), result.title, result.type.value, hint, result.url)

        return table

    def create_detail_panel(self, result: LoadResult) -> Panel:
        """Create a panel summarising a detail page."""
        rows = {
            "Type": result.type.value,
            "Year": result.year,
            "Status": result.status.value if result.status else None,
            "Rating": result.rating,
            "Tags": ", ".join(result.tags) if result.tags else None,
            "Actors": ", ".join(result.actors) if result.actors else None,
            "MyAnimeList": result.mal_id,
            "AniList": result.anilist_id,
            "Trailer": result.trailer_url,
            "Poster": result.poster_url,
            "Play": result.data_url,
        }
        grid = self.create_status_grid({key: value for key, value in rows.items() if value is not None})

        if result.plot:
            grid.add_row("Plot", result.plot)

        return Panel(
            grid,
            title=f"[{self.palette.primary}]{result.title}[/{self.palette.primary}]",
            subtitle=result.source,
            border_style=self.palette.border_primary,
            padding=(1, 2),
        )

    def create_episodes_table(self, episodes: List[Episode]) -> Table:
        """
        Create a table of episodes, oldest first.

        Args:
            episodes: Episodes to show

        Returns:
            Formatted table
        """
        table = self._table("📺 Episodes")

        table.add_column("Season", style="dim", width=6)
        table.add_column("Episode", style=self.palette.accent, width=7)
        table.add_column("Name", style=self.palette.primary, min_width=20)
        table.add_column("URL", style="link", overflow="fold")

        for episode in episodes:
            table.add_row(
                str(episode.season) if episode.season is not None else "-",
                str(episode.episode) if episode.episode is not None else "?",
                str(episode),
                episode.data,
            )

        return table

    def create_links_table(self, links: List[ExtractorLink], subtitles: Optional[List[SubtitleFile]] = None) -> Table:
        """
        Create a table of resolved links, best quality first.

        Args:
            links: Resolved links
            subtitles: Subtitle tracks, listed after the links

        Returns:
            Formatted table
        """
        table = self._table("▶️  Links")

        table.add_column("Source", style=self.palette.primary, width=18)
        table.add_column("Quality", width=9)
        table.add_column("HLS", style="dim", width=4)
        table.add_column("URL", style="link", overflow="fold")
        table.add_column("Referer", style="muted", overflow="fold")

        for link in sorted(links, key=lambda item: item.quality or 0, reverse=True):
            style = QUALITY_STYLES[link.tier]
            table.add_row(
                link.name,
                f"[{style}]{link.quality_label}[/{style}]",
                "yes" if link.is_m3u8 else "",
                link.url,
                link.referer or "",
            )

        for subtitle in subtitles or []:
            table.add_row(f"Subtitle ({subtitle.lang})", "", "", subtitle.url, "")

        return table

    def create_sources_table(self, status: Dict[str, Any]) -> Table:
        """Create a table from ProviderManager.get_provider_status()."""
        table = self._table("🔌 Providers")

        table.add_column("Name", style=self.palette.primary)
        table.add_column("Class", style="dim")
        table.add_column("Enabled", width=8)
        table.add_column("Loaded", width=7)
        table.add_column("Error", style="status.error", overflow="fold")

        for name, info in status.get("providers", {}).items():
            enabled = "[status.enabled]yes[/status.enabled]" if info["enabled"] else "[status.disabled]no[/status.disabled]"
            table.add_row(
                name,
                info["class"],
                enabled,
                "yes" if info["loaded"] else "no",
                info["error"] or "",
            )

        return table

    def create_status_grid(self, status_items: Dict[str, Any]) -> Table:
        """
        Create a key/value grid.

        Args:
            status_items: Dictionary of status key-value pairs

        Returns:
            Formatted status table
        """
        table = Table(
            show_header=False,
            box=None,
            expand=True,
            padding=(0, 1)
        )

        table.add_column("Key", style=f"bold {self.palette.secondary}", width=14)
        table.add_column("Value", style=self.palette.text_primary, overflow="fold")

        for key, value in status_items.items():
            table.add_row(key, str(value))

        return table


# Export UI components
__all__ = ["UIComponents"]
