"""
Provider Utilities - Helpers shared by the site-specific providers.

URL normalisation the host applies to scraped links, plus the small
text extraction routines (episode numbers, years, ratings, quality
tokens) every scraper ends up needing.
"""

import base64
import logging
import re
from typing import Optional
from urllib.parse import urlparse

from bs4 import Tag


logger = logging.getLogger(__name__)


EPISODE_PATTERN = re.compile(r'Episode\s?([0-9]+)')
QUALITY_TOKEN_PATTERN = re.compile(r'\.([0-9]{3,4})\.')


class URLHelper:
    """Utility class for URL manipulation."""

    @staticmethod
    def fix_url(url: Optional[str], main_url: str) -> str:
        """
        Normalise a scraped link against a site root.

        Absolute URLs (and inline JSON payloads) are kept, protocol
        relative URLs get https, everything else is joined to main_url.

        Args:
            url: Scraped href/src value
            main_url: Site root without trailing slash

        Returns:
            Normalised URL, empty string for empty input
        """
        if not url:
            return ""
        if url.startswith("http") or url.startswith('{"'):
            return url
        if url.startswith("//"):
            return f"https:{url}"
        if url.startswith("/"):
            return f"{main_url}{url}"
        return f"{main_url}/{url}"

    @staticmethod
    def fix_url_null(url: Optional[str], main_url: str) -> Optional[str]:
        """Like fix_url, but None for missing or empty input."""
        if not url:
            return None
        return URLHelper.fix_url(url, main_url)

    @staticmethod
    def extract_domain(url: str) -> str:
        """Extract the host name from a URL."""
        return urlparse(url).netloc

    @staticmethod
    def substring_after(text: str, delimiter: str) -> str:
        """Text after the first delimiter, or the whole text if absent."""
        index = text.find(delimiter)
        if index == -1:
            return text
        return text[index + len(delimiter):]

    @staticmethod
    def substring_before(text: str, delimiter: str) -> str:
        """Text before the first delimiter, or the whole text if absent."""
        index = text.find(delimiter)
        if index == -1:
            return text
        return text[:index]

    @staticmethod
    def substring_before_last(text: str, delimiter: str) -> str:
        """Text before the last delimiter, or the whole text if absent."""
        index = text.rfind(delimiter)
        if index == -1:
            return text
        return text[:index]


class TextCleaner:
    """Utility class for extracting values from scraped text."""

    @staticmethod
    def extract_episode_number(text: Optional[str]) -> Optional[int]:
        """
        Extract the number of an "Episode N" token.

        Args:
            text: Title or label text

        Returns:
            Episode number or None if there is no such token
        """
        if not text:
            return None
        match = EPISODE_PATTERN.search(text)
        return int(match.group(1)) if match else None

    @staticmethod
    def extract_quality(link: Optional[str]) -> Optional[int]:
        """
        Extract a `.NNN.` / `.NNNN.` height token from a stream filename.

        Args:
            link: Stream URL

        Returns:
            Frame height or None when the name has no such token
        """
        if not link:
            return None
        match = QUALITY_TOKEN_PATTERN.search(link)
        return int(match.group(1)) if match else None

    @staticmethod
    def parse_int(text: Optional[str]) -> Optional[int]:
        """Strict integer parse, None on anything that is not a whole number."""
        if text is None:
            return None
        text = text.strip()
        if not re.fullmatch(r'[+-]?\d+', text):
            return None
        return int(text)

    @staticmethod
    def digits_only(text: Optional[str]) -> Optional[int]:
        """Keep only the digits of the text and parse them."""
        if not text:
            return None
        digits = "".join(ch for ch in text if ch.isdigit())
        return int(digits) if digits else None

    @staticmethod
    def parse_rating(text: Optional[str]) -> Optional[float]:
        """First decimal number in the text, e.g. '7.4' from 'IMDb 7.4/10'."""
        if not text:
            return None
        match = re.search(r'(\d+(?:[.,]\d+)?)', text)
        if not match:
            return None
        return float(match.group(1).replace(',', '.'))

    @staticmethod
    def own_text(element: Optional[Tag]) -> str:
        """Text directly inside an element, ignoring its children."""
        if element is None:
            return ""
        return "".join(element.find_all(string=True, recursive=False)).strip()

    @staticmethod
    def decode_base64(payload: str) -> str:
        """
        Decode a base64 attribute into text.

        Raises:
            ValueError: If the payload is not valid base64
        """
        padded = payload.strip() + "=" * (-len(payload.strip()) % 4)
        return base64.b64decode(padded, validate=False).decode('utf-8', errors='replace')


__all__ = ["URLHelper", "TextCleaner", "EPISODE_PATTERN", "QUALITY_TOKEN_PATTERN"]
