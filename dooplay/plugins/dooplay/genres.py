"""
DooPlay Genres - Lazily fetched genre filter cache.

The genre menu is fetched the first time a popular or latest page is
loaded. Failures and empty menus are retried on the next listing fetch;
once a non-empty menu has been read it is kept for the lifetime of the
source and never refreshed.
"""

import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable, List, Optional

from dooplay.core.models import FilterList, GenreFilter, GenreFilterOption, HeaderFilter

from .config import LocaleStrings


logger = logging.getLogger(__name__)

GenreFetcher = Callable[[], Awaitable[List[GenreFilterOption]]]


class GenreCacheState(str, Enum):
    """Lifecycle of the genre cache."""

    UNFETCHED = "unfetched"
    EMPTY = "empty"
    POPULATED = "populated"


class GenreFilterCache:
    """Holds the genre filter of one source and loads it at most once."""

    def __init__(self, strings: LocaleStrings, enabled: bool = True):
        """
        Args:
            strings: Localized labels for the filter and its headers
            enabled: Whether genres may be fetched at all
        """
        self.strings = strings
        self.enabled = enabled
        self._state = GenreCacheState.UNFETCHED
        self._filter: Optional[GenreFilter] = None
        self._lock = asyncio.Lock()

    @property
    def state(self) -> GenreCacheState:
        return self._state

    @property
    def is_populated(self) -> bool:
        return self._state is GenreCacheState.POPULATED

    @property
    def genre_filter(self) -> Optional[GenreFilter]:
        return self._filter

    async def ensure_loaded(self, fetch: GenreFetcher) -> None:
        """
        Fetch the genres unless they are already known or fetching is off.

        Concurrent callers share a single fetch. Errors are logged and
        leave the cache as it was so that a later call retries.
        """
        if self.is_populated or not self.enabled:
            return

        async with self._lock:
            if self.is_populated:
                return

            try:
                options = await fetch()
            except Exception as e:
                logger.error(f"Failed to fetch genres: {e}", exc_info=True)
                return

            if not options:
                logger.info("Genre menu is empty, will retry on next listing")
                self._state = GenreCacheState.EMPTY
                return

            self._filter = GenreFilter(name=self.strings.genres_list_message, options=options)
            self._state = GenreCacheState.POPULATED
            logger.info(f"Loaded {len(options)} genres")

    def filter_list(self) -> FilterList:
        """Filters to show for the current cache state."""
        if self._filter is not None:
            return [HeaderFilter(text=self.strings.genre_filter_header), self._filter]
        if self.enabled:
            return [HeaderFilter(text=self.strings.genres_missing_warning)]
        return []


__all__ = ["GenreCacheState", "GenreFilterCache", "GenreFetcher"]
