"""
AnimeSail Page Parser

This module turns AnimeSail listing and detail pages into result models.
"""

import logging
from typing import List, Optional

from bs4 import Tag

from nontonplux.core.http import Document
from nontonplux.core.models import Episode, LoadResult, SearchResult, ShowStatus, TvType
from nontonplux.providers.common import TextCleaner, URLHelper


logger = logging.getLogger(__name__)


def get_type(text: str) -> TvType:
    """
    Map the "Tipe" cell of a detail page to a content type.

    Args:
        text: Type label, e.g. "TV", "Movie", "OVA"

    Returns:
        OVA for OVA/Special, AnimeMovie for movies, Anime otherwise
    """
    lowered = text.lower()
    if "ova" in lowered or "special" in lowered:
        return TvType.OVA
    if "movie" in lowered:
        return TvType.ANIME_MOVIE
    return TvType.ANIME


def get_status(text: str) -> ShowStatus:
    """Map the "Status" cell; anything unrecognised counts as completed."""
    if text == "Ongoing":
        return ShowStatus.ONGOING
    return ShowStatus.COMPLETED


class AnimeSailParser:
    """Parser for AnimeSail HTML pages."""

    def __init__(self, main_url: str, source: str = "AnimeSail"):
        """
        Initialize parser.

        Args:
            main_url: Site root used to resolve relative links
            source: Provider name stamped on results
        """
        self.main_url = main_url
        self.source = source

    def fix_url(self, url: Optional[str]) -> str:
        return URLHelper.fix_url(url, self.main_url)

    def fix_url_null(self, url: Optional[str]) -> Optional[str]:
        return URLHelper.fix_url_null(url, self.main_url)

    def get_proper_anime_link(self, uri: str) -> str:
        """
        Rewrite an episode or movie link to its series page.

        `{main}/one-piece-episode-1100-subtitle-indonesia/` becomes
        `{main}/anime/one-piece`; links already under /anime/ are kept.
        """
        if "/anime/" in uri:
            return uri

        slug = URLHelper.substring_after(uri, f"{self.main_url}/")
        if "-episode" in slug and "-movie" not in slug:
            slug = URLHelper.substring_before(slug, "-episode")
        elif "-movie" in slug:
            slug = URLHelper.substring_before(slug, "-movie")

        return f"{self.main_url}/anime/{slug}"

    def to_search_result(self, article: Tag) -> Optional[SearchResult]:
        """
        Convert a listing `article` node into a search result.

        Args:
            article: Listing item element

        Returns:
            Search result pointing at the canonical series page, or None
            for items without a link
        """
        anchor = article.select_one("a")
        href = self.fix_url_null(anchor.get("href") if anchor else None)
        if not href:
            logger.debug("Skipping listing item without a link")
            return None

        heading = " ".join(h2.get_text(" ", strip=True) for h2 in article.select(".tt > h2")).strip()
        image = article.select_one("div.limit img")

        return SearchResult(
            title=heading,
            url=self.get_proper_anime_link(href),
            source=self.source,
            type=TvType.ANIME,
            poster_url=self.fix_url_null(image.get("src") if image else None),
            episode_count=TextCleaner.extract_episode_number(heading),
        )

    def parse_listing(self, document: Document, selector: str = "article") -> List[SearchResult]:
        """Parse every listing item matched by `selector`."""
        results = []
        for article in document.select(selector):
            result = self.to_search_result(article)
            if result is not None:
                results.append(result)
        logger.debug(f"Parsed {len(results)} listing items from {document.base_url}")
        return results

    def parse_episodes(self, document: Document) -> List[Episode]:
        """
        Parse the episode list of a detail page.

        The site lists newest first; the result is oldest first.
        """
        episodes = []
        for item in document.select("ul.daftar > li"):
            label = " ".join(a.get_text(" ", strip=True) for a in item.select("a")).strip()
            anchor = item.select_one("a")
            episodes.append(Episode(
                data=self.fix_url(anchor.get("href") if anchor else None),
                name=label or None,
                episode=TextCleaner.extract_episode_number(label),
            ))

        episodes.reverse()
        return episodes

    def parse_detail(self, document: Document, url: str) -> LoadResult:
        """
        Parse a series or movie detail page.

        Tracker ids are not filled in here.

        Args:
            document: Detail page
            url: URL the page was loaded from

        Returns:
            Load result with episodes oldest first
        """
        heading = document.select_one("h1.entry-title")
        title = heading.get_text(" ", strip=True) if heading else ""
        title = title.replace("Subtitle Indonesia", "").strip()

        type_label = document.row_text("Tipe").lower()
        year = TextCleaner.parse_int(document.row_text("Dirilis"))

        genre_cell = document.row_value("Genre")
        tags = [a.get_text(strip=True) for a in genre_cell.select("a")] if genre_cell else []

        poster = document.select_one("div.entry-content > img")
        plot = document.select_one("div.entry-content > p")

        return LoadResult(
            title=title,
            url=url,
            source=self.source,
            type=get_type(type_label),
            poster_url=poster.get("src") if poster else None,
            plot=plot.get_text(" ", strip=True) if plot else None,
            year=year,
            tags=tags,
            status=get_status(document.row_text("Status").strip()),
            episodes=self.parse_episodes(document),
        )


__all__ = ["AnimeSailParser", "get_type", "get_status"]
