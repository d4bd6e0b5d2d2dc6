"""
LayarKaca Page Parser

This module turns LayarKaca listing, search and detail pages into
result models. Movies are served from the main host and series from a
separate host; links are moved between them here.
"""

import logging
import re
from typing import List, Optional

from bs4 import Tag

from nontonplux.core.http import Document
from nontonplux.core.models import Episode, LoadResult, SearchResult, TvType
from nontonplux.providers.common import TextCleaner, URLHelper


logger = logging.getLogger(__name__)


YEAR_PATTERN = re.compile(r'\d, (\d+)')


class LayarKacaParser:
    """Parser for LayarKaca HTML pages."""

    def __init__(self, main_url: str, series_url: str, source: str = "LayarKaca"):
        """
        Initialize parser.

        Args:
            main_url: Movie site root
            series_url: Series site root
            source: Provider name stamped on results
        """
        self.main_url = main_url
        self.series_url = series_url
        self.source = source

    def fix_url(self, url: Optional[str]) -> str:
        return URLHelper.fix_url(url, self.main_url)

    def fix_url_null(self, url: Optional[str]) -> Optional[str]:
        return URLHelper.fix_url_null(url, self.main_url)

    def get_proper_link(self, url: str, check: str) -> str:
        """Move a link to the series host when `check` marks it as a series."""
        lowered = check.lower()
        if "/series" in lowered or "season" in lowered:
            return url.replace(self.main_url, self.series_url)
        return url

    def to_search_result(self, item: Tag) -> Optional[SearchResult]:
        """
        Convert a `article.mega-item` listing node.

        Returns:
            Search result, or None for items without a title link
        """
        title_link = item.select_one("h1.grid-title > a")
        if title_link is None:
            return None
        title = TextCleaner.own_text(title_link)

        anchor = item.select_one("a")
        href = self.get_proper_link(anchor.get("href", "") if anchor else "", title)
        image = item.select_one(".grid-poster > a > img")
        poster_url = self.fix_url_null(image.get("src") if image else None)

        last_episode = item.select_one("div.last-episode")
        if last_episode is not None:
            counter = item.select_one("div.last-episode span")
            return SearchResult(
                title=title,
                url=href,
                source=self.source,
                type=TvType.TV_SERIES,
                poster_url=poster_url,
                episode_count=TextCleaner.digits_only(counter.get_text() if counter else None),
            )

        quality = " ".join(q.get_text(" ", strip=True) for q in item.select("div.quality")).strip()
        return SearchResult(
            title=title,
            url=href,
            source=self.source,
            type=TvType.MOVIE,
            poster_url=poster_url,
            quality=quality or None,
        )

    def parse_listing(self, document: Document) -> List[SearchResult]:
        """Parse a home page section, skipping untitled items."""
        results = []
        for item in document.select("article.mega-item"):
            result = self.to_search_result(item)
            if result is not None:
                results.append(result)
        return results

    def parse_search(self, document: Document) -> List[SearchResult]:
        """Parse the `div.search-item` blocks of a search page."""
        results = []
        for item in document.select("div.search-item"):
            title_link = item.select_one("h2 > a")
            anchor = item.select_one("a")
            if title_link is None or anchor is None:
                logger.debug("Skipping search item without links")
                continue

            category = item.select_one("p.cat-links a")
            check = str(category.get("href")) if category else ""
            image = item.select_one("img.img-thumbnail")

            results.append(SearchResult(
                title=title_link.get_text(" ", strip=True),
                url=self.get_proper_link(anchor.get("href", ""), check),
                source=self.source,
                type=TvType.TV_SERIES,
                poster_url=self.fix_url_null(image.get("src") if image else None),
            ))

        return results

    def parse_recommendations(self, document: Document) -> List[SearchResult]:
        recommendations = []
        for item in document.select("div.row.item-media"):
            link = item.select_one(".content-media > a")
            if link is None:
                continue
            heading = item.select_one("h3")
            image = item.select_one(".poster-media > a > img")
            recommendations.append(SearchResult(
                title=heading.get_text(" ", strip=True) if heading else "",
                url=link.get("href", ""),
                source=self.source,
                type=TvType.TV_SERIES,
                poster_url=self.fix_url_null(image.get("src") if image else None),
            ))
        return recommendations

    def parse_episodes(self, document: Document) -> List[Episode]:
        """
        Parse the episode grid of a series page, oldest first.

        Only links whose text contains a number are episodes; the season
        comes from the `season-N-` part of the link.
        """
        episodes = []
        for link in document.select("div.episode-list > a"):
            text = link.get_text(strip=True)
            if not re.search(r'\d+', text):
                continue

            href = link.get("href", "")
            episode_number = TextCleaner.parse_int(text)
            season_token = URLHelper.substring_before(URLHelper.substring_after(href, "season-"), "-")

            episodes.append(Episode(
                data=self.fix_url(href),
                name=f"Episode {episode_number}",
                season=TextCleaner.parse_int(season_token),
                episode=episode_number,
            ))

        episodes.reverse()
        return episodes

    def parse_detail(self, document: Document, url: str) -> LoadResult:
        """
        Parse a movie or series page.

        Args:
            document: Detail page
            url: URL the page was loaded from

        Returns:
            Load result; series carry episodes, movies a data_url
        """
        title = document.text("li.last > span[itemprop=name]")
        poster = self.fix_url_null(document.attr("img.img-thumbnail", "src"))
        tags = [a.get_text(strip=True) for a in document.select("div.content > div:nth-child(5) > h3 > a")]

        year_match = YEAR_PATTERN.search(document.text("div.content > div:nth-child(7) > h3"))
        year = TextCleaner.parse_int(year_match.group(1)) if year_match else None

        rating_cell = document.select_one("div.content > div:nth-child(6) > h3")
        trailer = document.select_one("div.action-player li > a.fancybox")
        actors = [
            a.get_text(strip=True)
            for a in document.select("div.col-xs-9.content > div:nth-child(3) > h3 > a")
        ]

        is_series = bool(document.select("div.serial-wrapper"))

        result = LoadResult(
            title=title,
            url=url,
            source=self.source,
            type=TvType.TV_SERIES if is_series else TvType.MOVIE,
            poster_url=poster,
            plot=document.text("div.content > blockquote") or None,
            year=year,
            tags=tags,
            rating=TextCleaner.parse_rating(rating_cell.get_text(" ", strip=True) if rating_cell else None),
            actors=actors,
            trailer_url=trailer.get("href") if trailer else None,
            recommendations=self.parse_recommendations(document),
        )

        if is_series:
            result.episodes = self.parse_episodes(document)
        else:
            result.data_url = url

        return result

    def parse_player_links(self, document: Document, trimmed_host: str) -> List[str]:
        """
        Collect the player links of a playback page.

        Links on `trimmed_host` are cut back to their parent path.
        """
        links = []
        for item in document.select("ul#loadProviders > li"):
            anchor = item.select_one("a")
            link = self.fix_url(anchor.get("href") if anchor else None)
            if not link:
                continue
            if link.startswith(trimmed_host):
                link = URLHelper.substring_before_last(link, "/")
            links.append(link)
        return links


__all__ = ["LayarKacaParser", "YEAR_PATTERN"]
