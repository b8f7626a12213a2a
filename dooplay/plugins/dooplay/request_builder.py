"""
DooPlay Requests - Builds the GET requests for every page kind.

All requests carry a Referer header pointing at the site root and
nothing else; transport defaults are left to the HTTP session.
"""

from typing import Dict, Optional

from pydantic import BaseModel, Field
from urllib.parse import quote_plus

from dooplay.core.exceptions import SearchError
from dooplay.core.models import FilterList, GenreFilter

from .config import SiteConfig


PREFIX_SEARCH = "path:"
SEARCH_MARKER = "/?s="


class PageRequest(BaseModel):
    """A GET request for one page of a site."""

    url: str
    headers: Dict[str, str] = Field(default_factory=dict)


class RequestBuilder:
    """Builds page requests from a site configuration."""

    def __init__(self, site: SiteConfig):
        self.site = site

    @property
    def headers(self) -> Dict[str, str]:
        return {"Referer": self.site.base_url}

    def _get(self, url: str) -> PageRequest:
        return PageRequest(url=url, headers=self.headers)

    def popular(self, page: int = 1) -> PageRequest:
        """The popular listing is the home page and has no pagination."""
        return self._get(self.site.base_url)

    def latest(self, page: int) -> PageRequest:
        return self._get(f"{self.site.base_url}/{self.site.locale.latest_path}/page/{page}")

    def search(self, page: int, query: str, filters: Optional[FilterList] = None) -> PageRequest:
        """
        Build a text search or, for a blank query, a genre browse request.

        Raises:
            SearchError: If the query is blank and no genre filter is given
        """
        if query.strip():
            return self._get(f"{self.site.base_url}/page/{page}/?s={quote_plus(query.strip())}")

        genre = next((f for f in filters or [] if isinstance(f, GenreFilter)), None)
        if genre is None:
            raise SearchError(
                "A genre filter is required when the search text is blank",
                query=query,
                source=self.site.name,
            )

        url = f"{self.site.base_url}/{genre.to_uri_part()}"
        if page > 1:
            url += f"/page/{page}"
        return self._get(url)

    def by_path(self, query: str) -> PageRequest:
        """Direct request for a ``path:`` query."""
        path = query[len(PREFIX_SEARCH):] if query.startswith(PREFIX_SEARCH) else query
        return self._get(f"{self.site.base_url}/{path.lstrip('/')}")

    def genres(self) -> PageRequest:
        return self._get(self.site.base_url)

    def absolute(self, url: str) -> PageRequest:
        """Request for a URL or site-relative path taken from a record."""
        if url.startswith(("http://", "https://")):
            return self._get(url)
        return self._get(f"{self.site.base_url}/{url.lstrip('/')}")


def is_path_query(query: str) -> bool:
    return query.startswith(PREFIX_SEARCH)


def is_text_search(url: str) -> bool:
    """Whether a request URL is a free-text search rather than a browse."""
    return SEARCH_MARKER in url


__all__ = [
    "PREFIX_SEARCH",
    "SEARCH_MARKER",
    "PageRequest",
    "RequestBuilder",
    "is_path_query",
    "is_text_search",
]
