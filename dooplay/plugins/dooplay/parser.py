"""
DooPlay Parser - Maps DooPlay theme markup onto catalog records.

This module turns parsed listing, search, details and genre-menu pages
into records. It never performs network access itself; pages that must be
replaced by another document (episode pages standing in for the anime
page) are resolved through a caller-supplied fetch function.
"""

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, List, Optional, Union

from bs4 import Tag

from dooplay.core.models import CatalogEntry, CatalogPage, DetailRecord, GenreFilterOption
from dooplay.plugins.common import (
    HTMLParser,
    URLHelper,
    attr_text,
    element_text,
    get_image_url,
    require_one,
)

from .config import SiteConfig
from .request_builder import is_text_search


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Direct:
    """The document already is the anime details page."""

    document: HTMLParser


@dataclass(frozen=True)
class Redirected:
    """The document was an episode page; ``document`` is the anime page it links to."""

    document: HTMLParser
    origin: str


ResolvedDocument = Union[Direct, Redirected]
DocumentFetcher = Callable[[str], Awaitable[HTMLParser]]


class DooPlayParser:
    """Selector-driven extraction for one DooPlay site."""

    def __init__(self, site: SiteConfig):
        self.site = site
        self.selectors = site.selectors

    # ============================== Listings ==============================

    def parse_listing(
        self,
        doc: HTMLParser,
        selector: str,
        next_page_selector: Optional[str] = None,
    ) -> CatalogPage:
        """
        Map every node matching ``selector`` to a catalog entry.

        A next page exists only when ``next_page_selector`` is given and
        matches something in the document.
        """
        entries = [self.entry_from_listing(element, doc) for element in doc.select(selector)]
        has_next_page = bool(next_page_selector) and doc.select_one(next_page_selector) is not None
        logger.debug(f"Parsed {len(entries)} entries from {doc.location} (next page: {has_next_page})")
        return CatalogPage(entries=entries, has_next_page=has_next_page)

    def parse_popular(self, doc: HTMLParser) -> CatalogPage:
        return self.parse_listing(doc, self.selectors.popular_anime)

    def parse_latest(self, doc: HTMLParser) -> CatalogPage:
        return self.parse_listing(doc, self.selectors.latest_updates, self.selectors.latest_next_page)

    def parse_search(self, doc: HTMLParser, request_url: str) -> CatalogPage:
        """
        Parse a search response.

        Text searches use the search result markup; genre browsing pages
        share the latest-updates markup.
        """
        if is_text_search(request_url):
            entries = [
                self.entry_from_search(element, doc)
                for element in doc.select(self.selectors.search_anime)
            ]
        else:
            entries = [
                self.entry_from_listing(element, doc)
                for element in doc.select(self.selectors.latest_updates)
            ]

        has_next_page = doc.select_one(self.selectors.latest_next_page) is not None
        return CatalogPage(entries=entries, has_next_page=has_next_page)

    def entry_from_listing(self, element: Tag, doc: HTMLParser) -> CatalogEntry:
        """Listing node: the node or its first anchor links to the anime."""
        img = require_one(element, "img", doc.location)
        anchor = element if element.name == "a" else element.select_one("a")
        href = attr_text(anchor, "href") if anchor is not None else attr_text(element, "href")
        return CatalogEntry(
            detail_path=URLHelper.without_domain(href),
            title=attr_text(img, "alt"),
            thumbnail_url=get_image_url(img, doc.location),
        )

    def entry_from_search(self, element: Tag, doc: HTMLParser) -> CatalogEntry:
        """Search result node: the node itself is the anchor."""
        img = require_one(element, "img", doc.location)
        return CatalogEntry(
            detail_path=URLHelper.without_domain(attr_text(element, "href")),
            title=attr_text(img, "alt"),
            thumbnail_url=get_image_url(img, doc.location),
        )

    # ============================ Anime details ===========================

    def anime_menu_link(self, doc: HTMLParser) -> Optional[str]:
        """
        Link to the anime page when ``doc`` is an episode page.

        Episode pages carry a menu item (a "bars" icon inside an anchor)
        pointing back at the series.
        """
        icon = doc.select_one(self.selectors.anime_menu)
        if icon is None:
            return None
        anchor = icon.parent
        href = attr_text(anchor, "href") if anchor is not None else ""
        return URLHelper.make_absolute(href, doc.location) if doc.location else href

    async def resolve_anime_document(self, doc: HTMLParser, fetch: DocumentFetcher) -> ResolvedDocument:
        """Return the anime details document for ``doc``, fetching it when needed."""
        link = self.anime_menu_link(doc)
        if link is None:
            return Direct(doc)

        logger.debug(f"{doc.location} is an episode page, following {link}")
        return Redirected(await fetch(link), origin=doc.location)

    def parse_details(self, doc: HTMLParser) -> DetailRecord:
        """
        Extract anime details from an anime page.

        Raises:
            ParseError: If the header or poster is missing
        """
        sheader = doc.require(self.selectors.detail_header)
        poster = doc.require(self.selectors.detail_poster, sheader)

        title = attr_text(poster, "alt")
        if not title:
            title = element_text(doc.require(self.selectors.detail_title, sheader))

        genres = [element_text(a) for a in sheader.select(self.selectors.detail_genres)]

        description = None
        info = doc.select_one(self.selectors.additional_info)
        if info is not None:
            parts = [self._synopsis(doc)]
            for label in self.site.locale.additional_info_items:
                line = self._info_line(info, label, doc.location)
                if line:
                    parts.append(line)
            description = "".join(parts)

        return DetailRecord(
            detail_path=URLHelper.without_domain(doc.location),
            title=title,
            thumbnail_url=get_image_url(poster, doc.location),
            genres=genres,
            description=description,
        )

    def _synopsis(self, doc: HTMLParser) -> str:
        paragraph = doc.select_one(f"{self.selectors.additional_info} p")
        if paragraph is None:
            return ""
        return element_text(paragraph) + "\n"

    def _info_line(self, info: Tag, label: str, location: str) -> Optional[str]:
        """``"\\n<Key>: <Value>"`` for the first custom field mentioning ``label``."""
        wanted = label.lower()
        for field in info.select(self.selectors.additional_info_field):
            if wanted in element_text(field).lower():
                key = element_text(require_one(field, "b", location))
                value = element_text(require_one(field, "span", location))
                return f"\n{key}: {value}"
        return None

    # =============================== Genres ===============================

    def parse_genres(self, doc: HTMLParser) -> List[GenreFilterOption]:
        """
        Read the genre menu.

        Looks inside every menu item mentioning the plural genre label and
        keeps each link once, in document order.
        """
        label = self.site.locale.genres_menu_label.lower()
        prefix = f"{self.site.base_url}/"
        options: List[GenreFilterOption] = []
        seen = set()

        for item in doc.select(self.selectors.genres_menu_item):
            if label not in element_text(item).lower():
                continue
            for link in item.select(self.selectors.genres_list):
                if id(link) in seen:
                    continue
                seen.add(id(link))
                options.append(GenreFilterOption(
                    display_name=element_text(link),
                    uri_fragment=URLHelper.substring_after(attr_text(link, "href"), prefix),
                ))

        return options


__all__ = [
    "Direct",
    "Redirected",
    "ResolvedDocument",
    "DocumentFetcher",
    "DooPlayParser",
]
