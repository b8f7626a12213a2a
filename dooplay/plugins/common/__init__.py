"""
Common utilities for source development.

This package contains shared utilities and helper functions
used across sources.
"""

from .utils import (
    HTMLParser,
    URLHelper,
    TextCleaner,
    require_one,
    attr_text,
    own_text,
    element_text,
    get_image_url,
)

__all__ = [
    "HTMLParser",
    "URLHelper",
    "TextCleaner",
    "require_one",
    "attr_text",
    "own_text",
    "element_text",
    "get_image_url",
]
