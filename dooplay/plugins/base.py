"""
Base Source Interface - Abstract base class for anime catalog sources.

This module defines the contract every source implements (listing, search,
details, episodes, videos, filters) together with the shared aiohttp
session, rate limiting and retry handling used to fetch pages.
"""

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from urllib.parse import urljoin, urlparse

import aiohttp
from pydantic import BaseModel, Field

from dooplay.core.config_schemas import NetworkSettings
from dooplay.core.exceptions import NetworkError
from dooplay.core.models import (
    CatalogPage,
    DetailRecord,
    EpisodeRecord,
    FilterList,
    Video,
)


logger = logging.getLogger(__name__)


class SourceMetadata(BaseModel):
    """Metadata information for a source."""

    name: str = Field(..., description="Source display name")
    lang: str = Field(..., description="Locale tag of the site")
    version: str = Field(default="1.0.0", description="Source version")
    website: Optional[str] = Field(None, description="Source website URL")


class FetchedPage(BaseModel):
    """Body of a fetched page and the location it was served from."""

    url: str = Field(..., description="Final URL after redirects")
    text: str = Field(..., description="Decoded response body")


class AnimeSource(ABC):
    """
    Abstract base class for anime catalog sources.

    Subclasses implement the catalog operations; this class owns the HTTP
    session and the request plumbing they share.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the source with network configuration.

        Args:
            config: Values for NetworkSettings; unknown keys are ignored
        """
        self.config = config or {}
        self.network = NetworkSettings(
            **{k: v for k, v in self.config.items() if k in NetworkSettings.model_fields}
        )
        self._session: Optional[aiohttp.ClientSession] = None
        self._last_request_time = 0.0

        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @property
    @abstractmethod
    def metadata(self) -> SourceMetadata:
        """Get source metadata information."""
        pass

    @property
    @abstractmethod
    def base_url(self) -> str:
        """Get the base URL for the anime source."""
        pass

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session with proper configuration."""
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(
                limit=10,
                limit_per_host=5,
                ttl_dns_cache=300,
                use_dns_cache=True
            )

            timeout = aiohttp.ClientTimeout(total=self.network.timeout)

            headers = {
                'User-Agent': self.network.user_agent,
                'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
            }

            self._session = aiohttp.ClientSession(
                connector=connector,
                timeout=timeout,
                headers=headers
            )

        return self._session

    async def _rate_limit(self) -> None:
        """Enforce rate limiting between requests."""
        current_time = time.monotonic()
        time_since_last = current_time - self._last_request_time

        if time_since_last < self.network.rate_limit:
            await asyncio.sleep(self.network.rate_limit - time_since_last)

        self._last_request_time = time.monotonic()

    async def _get_page(self, url: str, headers: Optional[Dict[str, str]] = None) -> FetchedPage:
        """
        GET a page with rate limiting and retries.

        Args:
            url: URL to request; relative URLs are resolved against base_url
            headers: Extra request headers

        Returns:
            The page body and its final location

        Raises:
            NetworkError: If request fails after retries
        """
        await self._rate_limit()

        if not urlparse(url).netloc:
            url = urljoin(self.base_url + "/", url)

        last_exception = None

        for attempt in range(self.network.max_retries + 1):
            try:
                self.logger.debug(f"Making GET request to {url} (attempt {attempt + 1})")

                async with self.session.get(url, headers=headers) as response:
                    if response.status >= 400:
                        error_text = await response.text()
                        raise NetworkError(
                            f"HTTP {response.status} error for {url}",
                            url=url,
                            status_code=response.status,
                            details=error_text
                        )

                    return FetchedPage(url=str(response.url), text=await response.text())

            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                last_exception = e
                self.logger.warning(f"Request failed (attempt {attempt + 1}): {e}")

                if attempt < self.network.max_retries:
                    await asyncio.sleep(self.network.retry_delay * (attempt + 1))

        raise NetworkError(
            f"Request failed after {self.network.max_retries + 1} attempts: {last_exception}",
            url=url,
            details=str(last_exception)
        )

    @abstractmethod
    async def popular_anime(self, page: int) -> CatalogPage:
        """Fetch a page of the popular listing."""
        pass

    @abstractmethod
    async def latest_updates(self, page: int) -> CatalogPage:
        """Fetch a page of recently updated anime."""
        pass

    @abstractmethod
    async def search_anime(self, page: int, query: str, filters: Optional[FilterList] = None) -> CatalogPage:
        """
        Search the catalog by text or by filters.

        Args:
            page: Page number, starting at 1
            query: Free text; may be blank when filters are used
            filters: Filters as returned by get_filter_list

        Raises:
            SearchError: If the search cannot be performed
        """
        pass

    @abstractmethod
    async def anime_details(self, detail_path: str) -> DetailRecord:
        """Fetch the details of an anime by its site-relative path."""
        pass

    @abstractmethod
    async def episode_list(self, detail_path: str) -> List[EpisodeRecord]:
        """Fetch every episode of an anime."""
        pass

    @abstractmethod
    async def video_list(self, episode_path: str) -> List[Video]:
        """Fetch the playable variants of an episode."""
        pass

    def get_filter_list(self) -> FilterList:
        """Filters the host may render for searching."""
        return []

    async def cleanup(self) -> None:
        """Clean up resources used by the source."""
        if self._session and not self._session.closed:
            try:
                await self._session.close()
                self.logger.debug("HTTP session closed")
            except aiohttp.ClientError as e:
                self.logger.debug(f"Error closing HTTP session: {e}")
        self._session = None

    async def __aenter__(self) -> "AnimeSource":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.cleanup()

    def __str__(self) -> str:
        return f"{self.metadata.name} ({self.metadata.lang})"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.metadata.name}')"


__all__ = ["AnimeSource", "SourceMetadata", "FetchedPage"]
