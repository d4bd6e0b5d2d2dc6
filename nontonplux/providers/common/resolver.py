"""
Generic Resolver - the seam to third-party embed host extractors.

Providers hand every embed URL they do not understand themselves to a
GenericResolver. The real resolver (one extractor per embed host) is
supplied by the host application; PassthroughResolver is the stand-in
used when nothing else is injected.
"""

import logging
from abc import ABC, abstractmethod
from typing import Callable, Optional

from nontonplux.core.models import ExtractorLink, SubtitleFile
from nontonplux.providers.common.utils import URLHelper


logger = logging.getLogger(__name__)


SubtitleCallback = Callable[[SubtitleFile], None]
LinkCallback = Callable[[ExtractorLink], None]


class GenericResolver(ABC):
    """Turns arbitrary embed URLs into extractor links."""

    @abstractmethod
    async def resolve(
        self,
        url: str,
        referer: Optional[str],
        subtitle_callback: SubtitleCallback,
        callback: LinkCallback,
    ) -> bool:
        """
        Resolve one embed URL.

        Args:
            url: Embed page URL
            referer: Referer to send to the embed host
            subtitle_callback: Receives subtitle tracks
            callback: Receives resolved links

        Returns:
            True if the URL was handled
        """


class PassthroughResolver(GenericResolver):
    """Emits the embed URL itself, labelled with its host name."""

    async def resolve(
        self,
        url: str,
        referer: Optional[str],
        subtitle_callback: SubtitleCallback,
        callback: LinkCallback,
    ) -> bool:
        if not url:
            return False

        host = URLHelper.extract_domain(url) or "embed"
        logger.debug(f"Passing through embed {url}")
        callback(ExtractorLink(
            source=host,
            name=host,
            url=url,
            referer=referer,
        ))
        return True


__all__ = ["GenericResolver", "PassthroughResolver", "SubtitleCallback", "LinkCallback"]
