"""
DooPlay Source - Catalog source for sites built on the DooPlay theme.

A single DooPlaySource class serves every DooPlay site; the site it talks
to is chosen by the SiteConfig it is constructed with. It wires request
building, extraction, episode normalization, the genre cache and the
quality preference together.
"""

import logging
from typing import Any, Dict, List, Optional

from bs4 import Tag

from dooplay.core.exceptions import ConfigurationError, UnsupportedOperationError
from dooplay.core.models import (
    CatalogPage,
    DetailRecord,
    EpisodeRecord,
    FilterList,
    ListPreference,
    Video,
)
from dooplay.core.preferences import PreferenceStore
from dooplay.plugins.base import AnimeSource, SourceMetadata
from dooplay.plugins.common import HTMLParser

from .config import SiteConfig
from .episodes import EpisodeNormalizer
from .genres import GenreFilterCache
from .parser import DooPlayParser
from .request_builder import PageRequest, RequestBuilder, is_path_query
from .videos import PREF_QUALITY_KEY, sort_videos


logger = logging.getLogger(__name__)


default_config = {
    "timeout": 30,
    "max_retries": 3,
    "retry_delay": 1.0,
    "rate_limit": 1.0,
}


class DooPlaySource(AnimeSource):
    """
    Anime source for one DooPlay site.

    Provides popular and latest listings, text and genre search, anime
    details and episode lists. Video extraction is hoster specific and is
    not offered here.
    """

    def __init__(
        self,
        site: SiteConfig,
        preferences: Optional[PreferenceStore] = None,
        config: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize the source.

        Args:
            site: Selectors, strings and settings of the site
            preferences: Store for the quality preference; defaults apply when None
            config: Network configuration overrides
        """
        merged_config = {**default_config}
        if config:
            merged_config.update(config)

        super().__init__(merged_config)

        self.site = site
        self.preferences = preferences
        self.requests = RequestBuilder(site)
        self.parser = DooPlayParser(site)
        self.episodes = EpisodeNormalizer(site)
        self.genres = GenreFilterCache(site.locale, enabled=site.fetch_genres)
        self._metadata = SourceMetadata(
            name=site.name,
            lang=site.lang,
            website=site.base_url,
        )

    @property
    def metadata(self) -> SourceMetadata:
        return self._metadata

    @property
    def base_url(self) -> str:
        return self.site.base_url

    @property
    def source_id(self) -> int:
        return self.site.source_id

    @property
    def preference_scope(self) -> str:
        return PreferenceStore.scope_name(self.source_id)

    # ============================== Fetching ==============================

    async def _fetch_document(self, request: PageRequest) -> HTMLParser:
        page = await self._get_page(request.url, headers=request.headers)
        return HTMLParser(page.text, page.url)

    async def _fetch_url(self, url: str) -> HTMLParser:
        return await self._fetch_document(self.requests.absolute(url))

    async def _anime_document(self, doc: HTMLParser) -> HTMLParser:
        resolved = await self.parser.resolve_anime_document(doc, self._fetch_url)
        return resolved.document

    # ============================== Listings ==============================

    async def popular_anime(self, page: int = 1) -> CatalogPage:
        doc = await self._fetch_document(self.requests.popular(page))
        await self.fetch_genres_list()
        return self.parser.parse_popular(doc)

    async def latest_updates(self, page: int = 1) -> CatalogPage:
        doc = await self._fetch_document(self.requests.latest(page))
        await self.fetch_genres_list()
        return self.parser.parse_latest(doc)

    # =============================== Search ===============================

    async def search_anime(self, page: int, query: str, filters: Optional[FilterList] = None) -> CatalogPage:
        """
        Search by text, by genre filter, or open a page directly.

        A query starting with ``path:`` fetches that site path and returns
        its anime as the only result.
        """
        if is_path_query(query):
            return await self._search_by_path(query)

        request = self.requests.search(page, query, filters)
        self.logger.debug(f"Searching {self.site.name}: {request.url}")
        doc = await self._fetch_document(request)
        return self.parser.parse_search(doc, request.url)

    async def _search_by_path(self, query: str) -> CatalogPage:
        doc = await self._fetch_document(self.requests.by_path(query))
        details = await self._details_from_document(doc)
        return CatalogPage(entries=[details.to_catalog_entry()], has_next_page=False)

    # ============================ Anime details ===========================

    async def anime_details(self, detail_path: str) -> DetailRecord:
        doc = await self._fetch_url(detail_path)
        return await self._details_from_document(doc)

    async def _details_from_document(self, doc: HTMLParser) -> DetailRecord:
        return self.parser.parse_details(await self._anime_document(doc))

    # ============================== Episodes ==============================

    async def episode_list(self, detail_path: str) -> List[EpisodeRecord]:
        doc = await self._fetch_url(detail_path)
        return self.episodes.parse(await self._anime_document(doc))

    def episode_from_element(self, element: Tag) -> EpisodeRecord:
        raise UnsupportedOperationError("episode_from_element", self.site.name)

    # ============================ Video links =============================

    async def video_list(self, episode_path: str) -> List[Video]:
        raise UnsupportedOperationError("video_list", self.site.name)

    def parse_video_list(self, doc: HTMLParser) -> List[Video]:
        raise UnsupportedOperationError("parse_video_list", self.site.name)

    def video_list_selector(self) -> str:
        raise UnsupportedOperationError("video_list_selector", self.site.name)

    def video_from_element(self, element: Tag) -> Video:
        raise UnsupportedOperationError("video_from_element", self.site.name)

    def video_url_parse(self, doc: HTMLParser) -> str:
        raise UnsupportedOperationError("video_url_parse", self.site.name)

    def sort_videos(self, videos: List[Video]) -> List[Video]:
        """Order videos so the preferred quality comes first."""
        return sort_videos(videos, self.preferred_quality)

    # =============================== Filters ==============================

    async def fetch_genres_list(self) -> None:
        """Load the genre filter unless it is already known."""
        await self.genres.ensure_loaded(self._load_genres)

    async def _load_genres(self):
        doc = await self._fetch_document(self.requests.genres())
        return self.parser.parse_genres(doc)

    def get_filter_list(self) -> FilterList:
        return self.genres.filter_list()

    # ============================= Preferences ============================

    @property
    def preferred_quality(self) -> str:
        """Stored quality preference, or the site default."""
        if self.preferences is None:
            return self.site.quality_default
        value = self.preferences.get_string(self.preference_scope, PREF_QUALITY_KEY)
        return value or self.site.quality_default

    def preference_screen(self) -> List[ListPreference]:
        """Preferences the host should let the user edit."""
        return [
            ListPreference(
                key=PREF_QUALITY_KEY,
                title=self.site.locale.quality_title,
                entries=list(self.site.quality_values),
                entry_values=list(self.site.quality_values),
                default_value=self.site.quality_default,
            )
        ]

    def set_preference(self, key: str, value: str) -> str:
        """
        Validate and store a preference value.

        Returns:
            The stored value

        Raises:
            ConfigurationError: If the key is unknown, the value is not
                selectable, or no preference store is attached
        """
        preference = next((p for p in self.preference_screen() if p.key == key), None)
        if preference is None:
            raise ConfigurationError(f"Unknown preference: {key}")

        index = preference.find_index_of_value(value)
        if index < 0:
            raise ConfigurationError(
                f"Invalid value {value!r} for {preference.title}; "
                f"choose one of {', '.join(preference.entry_values)}"
            )

        if self.preferences is None:
            raise ConfigurationError("No preference store is configured")

        entry = preference.entry_values[index]
        self.preferences.put_string(self.preference_scope, key, entry)
        return entry


__all__ = ["DooPlaySource", "default_config"]
