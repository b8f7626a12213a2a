"""
Unit tests for the genre filter cache.

Tests the cache states, retries after failures and empty menus, and that
concurrent loads share one fetch.
"""

import asyncio

import pytest

from dooplay.core.models import GenreFilter, GenreFilterOption, HeaderFilter
from dooplay.plugins.dooplay import GenreCacheState, GenreFilterCache, get_locale_strings


OPTIONS = [
    GenreFilterOption(display_name="Action", uri_fragment="genre/action/"),
    GenreFilterOption(display_name="Drama", uri_fragment="genre/drama/"),
]


class CountingFetcher:
    """Returns queued results, one per call."""

    def __init__(self, *results):
        self.results = list(results)
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        await asyncio.sleep(0)
        result = self.results.pop(0) if len(self.results) > 1 else self.results[0]
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def cache():
    return GenreFilterCache(get_locale_strings("en"))


class TestInitialState:
    """Tests for a cache that has not fetched yet."""

    def test_unfetched(self, cache):
        """Test the starting state."""
        assert cache.state is GenreCacheState.UNFETCHED
        assert cache.genre_filter is None

    def test_filter_list_shows_warning(self, cache):
        """Test that only the reset hint is offered before genres are known."""
        filters = cache.filter_list()
        assert len(filters) == 1
        assert isinstance(filters[0], HeaderFilter)
        assert filters[0].text == "Press 'Reset' to attempt to show the genres"


class TestLoading:
    """Tests for ensure_loaded."""

    @pytest.mark.asyncio
    async def test_populates(self, cache):
        """Test a successful load."""
        await cache.ensure_loaded(CountingFetcher(OPTIONS))
        assert cache.state is GenreCacheState.POPULATED
        filters = cache.filter_list()
        assert filters[0].text == "NOTE: Filters are going to be ignored if using search text!"
        assert isinstance(filters[1], GenreFilter)
        assert filters[1].name == "Genre"
        assert filters[1].values == ["Action", "Drama"]

    @pytest.mark.asyncio
    async def test_populated_is_never_refetched(self, cache):
        """Test that a populated cache keeps its genres."""
        fetch = CountingFetcher(OPTIONS, [OPTIONS[0]])
        await cache.ensure_loaded(fetch)
        await cache.ensure_loaded(fetch)
        assert fetch.calls == 1
        assert cache.genre_filter.values == ["Action", "Drama"]

    @pytest.mark.asyncio
    async def test_failure_keeps_state_and_retries(self, cache):
        """Test that errors are swallowed and the next call retries."""
        fetch = CountingFetcher(RuntimeError("boom"), OPTIONS)
        await cache.ensure_loaded(fetch)
        assert cache.state is GenreCacheState.UNFETCHED
        assert len(cache.filter_list()) == 1

        await cache.ensure_loaded(fetch)
        assert fetch.calls == 2
        assert cache.state is GenreCacheState.POPULATED

    @pytest.mark.asyncio
    async def test_empty_menu_is_retried(self, cache):
        """Test that an empty menu does not populate the cache."""
        fetch = CountingFetcher([], OPTIONS)
        await cache.ensure_loaded(fetch)
        assert cache.state is GenreCacheState.EMPTY
        assert not cache.is_populated
        assert len(cache.filter_list()) == 1

        await cache.ensure_loaded(fetch)
        assert fetch.calls == 2
        assert cache.is_populated

    @pytest.mark.asyncio
    async def test_concurrent_loads_share_one_fetch(self, cache):
        """Test that simultaneous callers trigger a single fetch."""
        fetch = CountingFetcher(OPTIONS)
        await asyncio.gather(*(cache.ensure_loaded(fetch) for _ in range(5)))
        assert fetch.calls == 1
        assert cache.is_populated


class TestDisabled:
    """Tests for sites that do not fetch genres."""

    @pytest.mark.asyncio
    async def test_never_fetches(self):
        """Test that a disabled cache does not call the fetcher."""
        cache = GenreFilterCache(get_locale_strings("en"), enabled=False)
        fetch = CountingFetcher(OPTIONS)
        await cache.ensure_loaded(fetch)
        assert fetch.calls == 0
        assert cache.filter_list() == []
