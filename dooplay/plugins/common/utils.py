"""
Source Utilities - Common helpers for HTML scraping sources.

This module provides the document wrapper used by parsers, plus URL and
text helpers that mirror how browsers and the theme markup treat links,
lazy-loaded images and whitespace.
"""

import re
import logging
from typing import List, Optional
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup, NavigableString, Tag

from dooplay.core.exceptions import ParseError


logger = logging.getLogger(__name__)


class HTMLParser:
    """A parsed HTML document together with the URL it was loaded from."""

    def __init__(self, html_content: str, location: str = ""):
        """
        Initialize HTML parser.

        Args:
            html_content: HTML content to parse
            location: URL of the document, used to resolve relative links
        """
        self.soup = BeautifulSoup(html_content, 'html.parser')
        self.location = location

    def select(self, selector: str) -> List[Tag]:
        return self.soup.select(selector)

    def select_one(self, selector: str) -> Optional[Tag]:
        return self.soup.select_one(selector)

    def require(self, selector: str, scope: Optional[Tag] = None) -> Tag:
        """
        Select the first node matching a selector that must be present.

        Args:
            selector: CSS selector string
            scope: Node to search inside; defaults to the whole document

        Raises:
            ParseError: If nothing matches
        """
        return require_one(scope if scope is not None else self.soup, selector, self.location)


def require_one(scope: Tag, selector: str, location: str = "") -> Tag:
    """
    Select the first node under ``scope`` that the markup guarantees.

    Raises:
        ParseError: If nothing matches
    """
    element = scope.select_one(selector)
    if element is None:
        raise ParseError(
            f"Expected element '{selector}' was not found",
            selector=selector,
            url=location or None,
        )
    return element


def attr_text(element: Tag, attr: str) -> str:
    """Attribute value as a string, joining multi-valued attributes."""
    value = element.get(attr)
    if value is None:
        return ""
    if isinstance(value, list):
        return " ".join(value)
    return value


def own_text(element: Tag) -> str:
    """Text of the element's direct text children, excluding nested tags."""
    parts = [str(child) for child in element.children if isinstance(child, NavigableString)]
    return TextCleaner.normalize("".join(parts))


def element_text(element: Tag) -> str:
    """All text under the element with whitespace collapsed."""
    return TextCleaner.normalize(element.get_text())


def get_image_url(element: Tag, location: str) -> Optional[str]:
    """
    Resolve a poster URL from the attributes lazy-loading plugins use.

    Tries ``data-src``, ``data-lazy-src``, the first ``srcset`` token and
    finally ``src``, resolving each against the document location.
    """
    if element.has_attr('data-src'):
        return URLHelper.abs_attr(element, 'data-src', location)
    if element.has_attr('data-lazy-src'):
        return URLHelper.abs_attr(element, 'data-lazy-src', location)
    if element.has_attr('srcset'):
        return URLHelper.substring_before(URLHelper.abs_attr(element, 'srcset', location), " ")
    return URLHelper.abs_attr(element, 'src', location)


class URLHelper:
    """Utility class for URL manipulation."""

    @staticmethod
    def is_absolute(url: str) -> bool:
        """Check if URL is absolute."""
        return bool(urlparse(url).netloc)

    @staticmethod
    def make_absolute(url: str, base_url: str) -> str:
        """Convert relative URL to absolute."""
        if URLHelper.is_absolute(url):
            return url
        return urljoin(base_url, url)

    @staticmethod
    def abs_attr(element: Tag, attr: str, location: str) -> str:
        """Resolve an attribute against the document location."""
        value = attr_text(element, attr).strip()
        if not value:
            return ""
        if not location:
            return value if URLHelper.is_absolute(value) else ""
        return urljoin(location, value)

    @staticmethod
    def without_domain(url: str) -> str:
        """
        Strip scheme and host, keeping path, query and fragment.

        Example: "https://site.tv/anime/slug/?x=1" -> "/anime/slug/?x=1"
        """
        parsed = urlparse(url.strip())
        result = parsed.path or "/"
        if parsed.query:
            result += "?" + parsed.query
        if parsed.fragment:
            result += "#" + parsed.fragment
        return result

    @staticmethod
    def substring_after(value: str, delimiter: str) -> str:
        """Part after the first delimiter, or the whole value if absent."""
        index = value.find(delimiter)
        if index == -1:
            return value
        return value[index + len(delimiter):]

    @staticmethod
    def substring_before(value: str, delimiter: str) -> str:
        """Part before the first delimiter, or the whole value if absent."""
        index = value.find(delimiter)
        if index == -1:
            return value
        return value[:index]


class TextCleaner:
    """Utility class for cleaning and normalizing text content."""

    @staticmethod
    def normalize(text: str) -> str:
        """Collapse runs of whitespace and trim."""
        if not text:
            return ""
        return re.sub(r'\s+', ' ', text).strip()


# Export utility classes and functions
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
