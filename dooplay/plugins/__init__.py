"""
Source Layer - Anime catalog source implementations.

This module contains the source contract and the DooPlay theme source
built on it.
"""

from dooplay.plugins.base import AnimeSource, FetchedPage, SourceMetadata
from dooplay.plugins.common import HTMLParser, TextCleaner, URLHelper, get_image_url

__all__ = [
    # Base Source Architecture
    "AnimeSource",
    "SourceMetadata",
    "FetchedPage",
    # Source Development Utilities
    "HTMLParser",
    "URLHelper",
    "TextCleaner",
    "get_image_url",
]
