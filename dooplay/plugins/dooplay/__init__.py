"""
DooPlay Source - Scraping engine for the DooPlay WordPress theme.

One configurable source serves every DooPlay site; sites are described
by SiteConfig values.
"""

from .config import LOCALE_STRINGS, LocaleStrings, SelectorConfig, SiteConfig, get_locale_strings
from .episodes import EpisodeNormalizer, extract_episode_number, parse_upload_date
from .genres import GenreCacheState, GenreFilterCache
from .parser import Direct, DooPlayParser, Redirected
from .plugin import DooPlaySource, default_config
from .request_builder import PREFIX_SEARCH, PageRequest, RequestBuilder
from .videos import PREF_QUALITY_KEY, sort_videos

__all__ = [
    "DooPlaySource",
    "default_config",
    "SiteConfig",
    "SelectorConfig",
    "LocaleStrings",
    "LOCALE_STRINGS",
    "get_locale_strings",
    "RequestBuilder",
    "PageRequest",
    "PREFIX_SEARCH",
    "DooPlayParser",
    "Direct",
    "Redirected",
    "EpisodeNormalizer",
    "extract_episode_number",
    "parse_upload_date",
    "GenreCacheState",
    "GenreFilterCache",
    "PREF_QUALITY_KEY",
    "sort_videos",
]
