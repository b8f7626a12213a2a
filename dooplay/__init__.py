"""
DooPlay - Scraping engine for anime sites built on the DooPlay WordPress theme.

One configurable source maps the theme's markup onto catalog listings,
search results, anime details, episode lists and genre filters, with a
Typer and Rich command line interface on top.
"""

__version__ = "0.1.0"

# Package metadata
__title__ = "dooplay"
__description__ = "Scraping engine for anime sites built on the DooPlay WordPress theme"
__license__ = "MIT"

# Version info tuple for programmatic access
VERSION_INFO = tuple(map(int, __version__.split(".")))

# Export main components for easy importing
from dooplay.core.models import CatalogEntry, CatalogPage, DetailRecord, EpisodeRecord, Quality
from dooplay.plugins.dooplay import DooPlaySource, SiteConfig

__all__ = [
    "__version__",
    "CatalogEntry",
    "CatalogPage",
    "DetailRecord",
    "EpisodeRecord",
    "Quality",
    "DooPlaySource",
    "SiteConfig",
]
