"""
Common utilities for provider development.

This package contains shared helpers and the generic resolver seam
used across providers.
"""

from .utils import URLHelper, TextCleaner
from .resolver import GenericResolver, PassthroughResolver, SubtitleCallback, LinkCallback

__all__ = [
    "URLHelper",
    "TextCleaner",
    "GenericResolver",
    "PassthroughResolver",
    "SubtitleCallback",
    "LinkCallback",
]
