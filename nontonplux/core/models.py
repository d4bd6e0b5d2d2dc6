"""
Core Data Models - Pydantic models for provider results.

This module defines the request-scoped records that providers hand back
to the host: search results, detail pages, episodes, home page sections
and resolved stream links. Every field is a best-effort scrape result,
so nearly everything is optional.
"""

from enum import Enum, IntEnum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class TvType(str, Enum):
    """Kinds of content a provider can list."""

    MOVIE = "Movie"
    ANIME_MOVIE = "AnimeMovie"
    TV_SERIES = "TvSeries"
    ANIME = "Anime"
    OVA = "OVA"
    ASIAN_DRAMA = "AsianDrama"


class ShowStatus(str, Enum):
    """Airing status of a series."""

    COMPLETED = "Completed"
    ONGOING = "Ongoing"


class ProviderStatus(IntEnum):
    """Provider health as published in the plugin manifest."""

    DOWN = 0
    OK = 1
    SLOW = 2
    BETA = 3


class Quality(str, Enum):
    """Video quality buckets for resolved links."""

    UNKNOWN = "unknown"
    LOW = "480p"
    MEDIUM = "720p"
    HIGH = "1080p"
    ULTRA = "1440p"
    FOUR_K = "2160p"

    @classmethod
    def from_height(cls, height: Optional[int]) -> "Quality":
        """Bucket a numeric frame height into a Quality."""
        if not height or height <= 0:
            return cls.UNKNOWN
        if height <= 480:
            return cls.LOW
        elif height <= 720:
            return cls.MEDIUM
        elif height <= 1080:
            return cls.HIGH
        elif height <= 1440:
            return cls.ULTRA
        else:
            return cls.FOUR_K

    def __str__(self) -> str:
        return self.value


class SearchResult(BaseModel):
    """
    Represents one entry of a listing or search page.

    The URL always points to the canonical detail page of the title,
    even when the listing itself linked to a single episode.
    """

    title: str = Field(..., description="Display title")
    url: str = Field(..., description="Canonical detail-page URL")
    source: Optional[str] = Field(None, description="Provider name")
    type: TvType = Field(TvType.ANIME, description="Content type")
    poster_url: Optional[str] = Field(None, description="Poster image URL")
    episode_count: Optional[int] = Field(None, ge=0, description="Latest subbed episode hint")
    quality: Optional[str] = Field(None, description="Search quality label, e.g. 'HD'")

    @field_validator('title')
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Collapse surrounding whitespace."""
        return v.strip()

    def __str__(self) -> str:
        return f"{self.title} ({self.source})"


class Episode(BaseModel):
    """A playable unit of a series; `data` is what load_links receives."""

    data: str = Field(..., description="Playback page URL")
    name: Optional[str] = Field(None, description="Display label")
    season: Optional[int] = Field(None, description="Season number")
    episode: Optional[int] = Field(None, description="Episode number")

    def __str__(self) -> str:
        if self.name:
            return self.name
        if self.episode is not None:
            return f"Episode {self.episode}"
        return self.data


class LoadResult(BaseModel):
    """
    Detail page of a title.

    Series carry an ordered (oldest first) list of episodes; movies carry
    a `data_url` pointing at the page that load_links understands.
    """

    title: str = Field(..., description="Display title")
    url: str = Field(..., description="Detail-page URL")
    source: Optional[str] = Field(None, description="Provider name")
    type: TvType = Field(TvType.ANIME, description="Content type")
    poster_url: Optional[str] = Field(None, description="Poster image URL")
    plot: Optional[str] = Field(None, description="Synopsis")
    year: Optional[int] = Field(None, description="Release year")
    tags: List[str] = Field(default_factory=list, description="Genres and tags")
    rating: Optional[float] = Field(None, description="Site rating")
    actors: List[str] = Field(default_factory=list, description="Cast names")
    trailer_url: Optional[str] = Field(None, description="Trailer URL")
    status: Optional[ShowStatus] = Field(None, description="Airing status")
    episodes: List[Episode] = Field(default_factory=list, description="Episodes, oldest first")
    recommendations: List[SearchResult] = Field(default_factory=list, description="Related titles")
    mal_id: Optional[int] = Field(None, description="MyAnimeList id")
    anilist_id: Optional[int] = Field(None, description="AniList id")
    data_url: Optional[str] = Field(None, description="Playback page for movies")

    @field_validator('tags', 'actors')
    @classmethod
    def validate_names(cls, v: List[str]) -> List[str]:
        """Drop blank entries."""
        return [item.strip() for item in v if item and item.strip()]

    @property
    def is_movie(self) -> bool:
        """Whether the title is played from a single page."""
        return self.type in (TvType.MOVIE, TvType.ANIME_MOVIE) and not self.episodes


class ExtractorLink(BaseModel):
    """A resolved, directly playable stream URL."""

    source: str = Field(..., description="Source label, e.g. 'Arch'")
    name: str = Field(..., description="Display name")
    url: str = Field(..., description="Stream URL")
    referer: Optional[str] = Field(None, description="Referer the player must send")
    quality: Optional[int] = Field(None, description="Frame height, None when unknown")
    is_m3u8: bool = Field(False, description="Whether the URL is an HLS playlist")

    @model_validator(mode='after')
    def detect_hls(self) -> 'ExtractorLink':
        """Flag HLS playlists from the URL."""
        if not self.is_m3u8 and ".m3u8" in self.url:
            self.is_m3u8 = True
        return self

    @property
    def quality_label(self) -> str:
        """Human readable quality, 'unknown' when absent."""
        if self.quality is None:
            return Quality.UNKNOWN.value
        return f"{self.quality}p"

    @property
    def tier(self) -> Quality:
        return Quality.from_height(self.quality)

    def __str__(self) -> str:
        return f"{self.name} [{self.quality_label}] {self.url}"


class SubtitleFile(BaseModel):
    """External subtitle track."""

    lang: str
    url: str


class MainPageRequest(BaseModel):
    """A home page section; the page number is appended to `data`."""

    name: str
    data: str


class HomePageList(BaseModel):
    """One titled row of home page items."""

    name: str
    items: List[SearchResult] = Field(default_factory=list)


class HomePageResponse(BaseModel):
    """Result of get_main_page."""

    items: List[HomePageList] = Field(default_factory=list)
    has_next: bool = Field(True, description="Whether another page may exist")


# Export all models
__all__ = [
    "TvType",
    "ShowStatus",
    "ProviderStatus",
    "Quality",
    "SearchResult",
    "Episode",
    "LoadResult",
    "ExtractorLink",
    "SubtitleFile",
    "MainPageRequest",
    "HomePageList",
    "HomePageResponse",
]
