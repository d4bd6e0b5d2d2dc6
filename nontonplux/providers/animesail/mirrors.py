"""
AnimeSail Mirror Handling

Each episode page offers a `<select>` of mirrors whose options carry a
base64-encoded iframe snippet. This module decodes those snippets and
sorts the iframe URLs into the player families the provider knows how
to handle.
"""

import logging
from enum import Enum
from typing import Optional

from bs4 import BeautifulSoup, Tag

from nontonplux.core.exceptions import ExtractionError
from nontonplux.providers.common import TextCleaner, URLHelper


logger = logging.getLogger(__name__)


MIRROR_SELECTOR = ".mobius > .mirror > option"

REDIRECT_PREFIX = "https://aghanim.xyz/tools/redirect/"
REDIRECT_TARGET = "https://rasa-cintaku-semakin-berantai.xyz/v/"
USERVIDEO_PREFIX = "https://uservideo.xyz"


class MirrorKind(str, Enum):
    """Player families found behind AnimeSail mirrors."""

    ARCH = "Arch"
    RACE = "Race"
    REDIRECT = "redirect"
    FRAMEZILLA = "framezilla"
    EXTERNAL = "external"


def classify_iframe(iframe: str, main_url: str) -> MirrorKind:
    """
    Decide how an iframe URL is resolved.

    Args:
        iframe: Absolute iframe URL
        main_url: Site root of the provider

    Returns:
        The player family of the iframe
    """
    if iframe.startswith(f"{main_url}/utils/player/arch/"):
        return MirrorKind.ARCH
    if iframe.startswith(f"{main_url}/utils/player/race/"):
        return MirrorKind.RACE
    if iframe.startswith(REDIRECT_PREFIX):
        return MirrorKind.REDIRECT
    if iframe.startswith(f"{main_url}/utils/player/framezilla/") or iframe.startswith(USERVIDEO_PREFIX):
        return MirrorKind.FRAMEZILLA
    return MirrorKind.EXTERNAL


def rewrite_redirect_url(iframe: str) -> str:
    """
    Turn a redirect-tool URL into the embed page it points at.

    `https://aghanim.xyz/tools/redirect/?id=abc123&token=xyz` becomes
    `https://rasa-cintaku-semakin-berantai.xyz/v/abc123`.
    """
    video_id = URLHelper.substring_before(URLHelper.substring_after(iframe, "id="), "&token")
    return f"{REDIRECT_TARGET}{video_id}"


def decode_mirror_iframe(option: Tag, main_url: str) -> str:
    """
    Decode the iframe URL hidden in a mirror option.

    Args:
        option: `<option>` element with a `data-em` attribute
        main_url: Site root used to resolve relative iframe URLs

    Returns:
        Absolute iframe URL

    Raises:
        ExtractionError: If the payload is not base64 or holds no iframe
    """
    payload = option.get("data-em") or ""
    try:
        fragment = TextCleaner.decode_base64(payload)
    except ValueError as e:
        raise ExtractionError(f"Mirror payload is not valid base64: {e}", details=payload[:100])

    iframe = BeautifulSoup(fragment, 'html.parser').select_one("iframe")
    src: Optional[str] = iframe.get("src") if iframe else None
    if not src:
        raise ExtractionError("No iframe found", details=fragment[:200])

    return URLHelper.fix_url(src, main_url)


__all__ = [
    "MIRROR_SELECTOR",
    "MirrorKind",
    "classify_iframe",
    "rewrite_redirect_url",
    "decode_mirror_iframe",
]
