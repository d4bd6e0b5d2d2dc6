"""
Tracker API Client

Looks up MyAnimeList ids through Jikan and maps them to AniList ids
through the AniList GraphQL API. Lookups are best-effort: any failure
yields None.
"""

import logging
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError

from nontonplux.core.exceptions import NetworkError
from nontonplux.core.http import HttpClient


logger = logging.getLogger(__name__)


class JikanEntry(BaseModel):
    mal_id: Optional[int] = None


class JikanResponse(BaseModel):
    data: List[JikanEntry] = Field(default_factory=list)


class AniListId(BaseModel):
    id: Optional[int] = None


class AniListMedia(BaseModel):
    media: Optional[AniListId] = Field(None, alias="Media")


class AniListResponse(BaseModel):
    data: Optional[AniListMedia] = None


class TrackerClient:
    """Client for the Jikan and AniList lookups."""

    def __init__(
        self,
        http: HttpClient,
        jikan_api_url: str = "https://api.jikan.moe/v4",
        anilist_api_url: str = "https://graphql.anilist.co/",
    ):
        self.http = http
        self.jikan_api_url = jikan_api_url.rstrip('/')
        self.anilist_api_url = anilist_api_url

    async def find_mal_id(self, title: str, year: Optional[int], type_label: str) -> Optional[int]:
        """
        Search Jikan for the first anime matching title, year and type.

        Args:
            title: Title to search for
            year: Release year, sent as start_date when known
            type_label: Lower-cased type label from the detail page

        Returns:
            MyAnimeList id or None
        """
        params = {
            "q": title,
            "start_date": year,
            "type": type_label or None,
            "limit": 1,
        }
        params = {key: value for key, value in params.items() if value is not None}

        try:
            payload = await self.http.get_json(f"{self.jikan_api_url}/anime", params=params)
            response = JikanResponse.model_validate(payload)
        except (NetworkError, ValidationError) as e:
            logger.debug(f"Jikan lookup failed for '{title}': {e}")
            return None

        return response.data[0].mal_id if response.data else None

    async def find_anilist_id(self, mal_id: int) -> Optional[int]:
        """
        Map a MyAnimeList id to an AniList id.

        Args:
            mal_id: MyAnimeList id

        Returns:
            AniList id or None
        """
        query = f"{{Media(idMal:{mal_id},type:ANIME){{id}}}}"

        try:
            payload = await self.http.post_json(self.anilist_api_url, json={"query": query})
            response = AniListResponse.model_validate(payload)
        except (NetworkError, ValidationError) as e:
            logger.debug(f"AniList lookup failed for MAL id {mal_id}: {e}")
            return None

        if response.data is None or response.data.media is None:
            return None
        return response.data.media.id

    async def lookup(self, title: str, year: Optional[int], type_label: str) -> Tuple[Optional[int], Optional[int]]:
        """
        Resolve both tracker ids for a title.

        Returns:
            (mal_id, anilist_id), each None when unknown
        """
        mal_id = await self.find_mal_id(title, year, type_label)
        if mal_id is None:
            return None, None

        anilist_id = await self.find_anilist_id(mal_id)
        logger.debug(f"Tracker ids for '{title}': MAL {mal_id}, AniList {anilist_id}")
        return mal_id, anilist_id


__all__ = ["TrackerClient", "JikanResponse", "AniListResponse"]
