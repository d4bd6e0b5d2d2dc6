"""
HTTP Layer - Shared aiohttp client and parsed HTML documents.

Providers never talk to aiohttp directly; they go through HttpClient,
which owns the session, default headers and error translation, and
through Document, a small BeautifulSoup wrapper with the selector
helpers scraping code keeps reaching for.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

import aiohttp
from bs4 import BeautifulSoup, Tag

from nontonplux.core.exceptions import NetworkError


logger = logging.getLogger(__name__)


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

HTML_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,*/*;q=0.8"


class Document:
    """Parsed HTML page with CSS-selector helpers."""

    def __init__(self, html_content: str, base_url: str = ""):
        """
        Initialize document.

        Args:
            html_content: HTML content to parse
            base_url: URL the content was fetched from
        """
        self.soup = BeautifulSoup(html_content or "", 'html.parser')
        self.base_url = base_url

    def select(self, selector: str) -> List[Tag]:
        return self.soup.select(selector)

    def select_one(self, selector: str) -> Optional[Tag]:
        return self.soup.select_one(selector)

    def text(self, selector: str, default: str = "") -> str:
        """
        Joined text of every element matching the selector.

        Args:
            selector: CSS selector string
            default: Value returned when nothing matches

        Returns:
            Whitespace-trimmed text or default
        """
        elements = self.soup.select(selector)
        if not elements:
            return default
        return " ".join(elem.get_text(" ", strip=True) for elem in elements).strip()

    def attr(self, selector: str, attr: str, default: str = "") -> str:
        """
        Attribute of the first element matching the selector.

        Args:
            selector: CSS selector string
            attr: Attribute name
            default: Value returned when the element or attribute is missing

        Returns:
            Attribute value or default
        """
        element = self.soup.select_one(selector)
        if element is None or not element.has_attr(attr):
            return default
        value = element[attr]
        # BeautifulSoup returns multi-valued attributes as lists
        if isinstance(value, list):
            value = " ".join(value)
        return value

    def row_value(self, label: str, header_selector: str = "tbody th") -> Optional[Tag]:
        """
        Find the table row whose header cell contains `label`.

        Args:
            label: Text to look for in the header cell (case-insensitive)
            header_selector: CSS selector for header cells

        Returns:
            The header's next sibling cell, or None
        """
        needle = label.lower()
        for header in self.soup.select(header_selector):
            if needle in header.get_text(" ", strip=True).lower():
                return header.find_next_sibling()
        return None

    def row_text(self, label: str, default: str = "") -> str:
        """Text of the cell next to the header containing `label`."""
        cell = self.row_value(label)
        if cell is None:
            return default
        return cell.get_text(" ", strip=True)


class HttpClient:
    """
    Shared HTTP client for providers.

    Wraps a lazily created aiohttp session. Failures surface as
    NetworkError; retries are available but disabled by default.
    """

    def __init__(
        self,
        timeout: float = 30,
        user_agent: str = DEFAULT_USER_AGENT,
        max_retries: int = 0,
        retry_delay: float = 1.0,
        headers: Optional[Dict[str, str]] = None,
    ):
        """
        Initialize the client.

        Args:
            timeout: Total request timeout in seconds
            user_agent: User-Agent header sent with every request
            max_retries: Extra attempts after a transport failure
            retry_delay: Base delay between attempts in seconds
            headers: Extra default headers
        """
        self.timeout = timeout
        self.user_agent = user_agent
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.default_headers = {
            'User-Agent': user_agent,
            'Accept-Language': 'en-US,en;q=0.5',
            **(headers or {}),
        }
        self._session: Optional[aiohttp.ClientSession] = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create the HTTP session."""
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(
                limit=20,
                limit_per_host=8,
                ttl_dns_cache=300,
            )
            self._session = aiohttp.ClientSession(
                connector=connector,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
                headers=self.default_headers,
            )
        return self._session

    @staticmethod
    def _build_headers(
        headers: Optional[Dict[str, str]],
        cookies: Optional[Dict[str, str]],
        referer: Optional[str],
    ) -> Dict[str, str]:
        merged = dict(headers or {})
        if referer:
            merged['Referer'] = referer
        if cookies:
            merged['Cookie'] = "; ".join(f"{name}={value}" for name, value in cookies.items())
        return merged

    async def _request(
        self,
        method: str,
        url: str,
        *,
        headers: Optional[Dict[str, str]] = None,
        cookies: Optional[Dict[str, str]] = None,
        referer: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None,
        data: Optional[Any] = None,
        json: Optional[Any] = None,
        as_json: bool = False,
    ) -> Any:
        request_headers = self._build_headers(headers, cookies, referer)
        last_exception: Optional[BaseException] = None

        for attempt in range(self.max_retries + 1):
            try:
                logger.debug(f"{method} {url} (attempt {attempt + 1})")

                async with self.session.request(
                    method,
                    url,
                    headers=request_headers,
                    params=params,
                    data=data,
                    json=json,
                ) as response:
                    if response.status >= 400:
                        error_text = await response.text(errors="replace")
                        raise NetworkError(
                            f"HTTP {response.status} error for {url}",
                            url=url,
                            status_code=response.status,
                            details=error_text[:500],
                        )

                    try:
                        if as_json:
                            return await response.json(content_type=None)
                        return await response.text()
                    except ValueError as e:
                        # UnicodeDecodeError and JSONDecodeError are both ValueErrors
                        raise NetworkError(
                            f"Invalid response body from {url}",
                            url=url,
                            status_code=response.status,
                            details=str(e),
                        )

            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                last_exception = e
                logger.warning(f"Request to {url} failed (attempt {attempt + 1}): {e}")

                if attempt < self.max_retries:
                    await asyncio.sleep(self.retry_delay * (attempt + 1))

        raise NetworkError(
            f"Request failed after {self.max_retries + 1} attempts: {last_exception}",
            url=url,
            details=str(last_exception),
        )

    async def get_text(self, url: str, **kwargs) -> str:
        """GET a URL and return the body as text."""
        return await self._request('GET', url, **kwargs)

    async def get_document(self, url: str, **kwargs) -> Document:
        """GET a URL and parse the body as HTML."""
        html_content = await self._request('GET', url, **kwargs)
        return Document(html_content, url)

    async def get_json(self, url: str, **kwargs) -> Any:
        """GET a URL and decode the body as JSON."""
        return await self._request('GET', url, as_json=True, **kwargs)

    async def post_json(self, url: str, **kwargs) -> Any:
        """POST to a URL and decode the response body as JSON."""
        return await self._request('POST', url, as_json=True, **kwargs)

    async def close(self) -> None:
        """Close the underlying session."""
        if self._session and not self._session.closed:
            await self._session.close()
            logger.debug("HTTP session closed")
        self._session = None


__all__ = ["Document", "HttpClient", "DEFAULT_USER_AGENT", "HTML_ACCEPT"]
