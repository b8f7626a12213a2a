"""
Core Layer - Data models, configuration and error types.

This module contains the records the scraper produces, the configuration
schemas and preference storage, and the exception hierarchy shared by
sources and the CLI.
"""

from dooplay.core.config_schemas import NetworkSettings, PreferencesFile
from dooplay.core.exceptions import (
    ConfigurationError,
    DooPlayError,
    NetworkError,
    ParseError,
    PluginError,
    SearchError,
    UnsupportedOperationError,
)
from dooplay.core.models import (
    CatalogEntry,
    CatalogPage,
    DetailRecord,
    EpisodeRecord,
    GenreFilter,
    GenreFilterOption,
    HeaderFilter,
    ListPreference,
    Quality,
    Video,
)
from dooplay.core.preferences import PreferenceStore

__all__ = [
    # Data Models
    "CatalogEntry",
    "CatalogPage",
    "DetailRecord",
    "EpisodeRecord",
    "GenreFilter",
    "GenreFilterOption",
    "HeaderFilter",
    "ListPreference",
    "Quality",
    "Video",
    # Configuration
    "NetworkSettings",
    "PreferencesFile",
    "PreferenceStore",
    # Exceptions
    "DooPlayError",
    "ConfigurationError",
    "NetworkError",
    "ParseError",
    "PluginError",
    "SearchError",
    "UnsupportedOperationError",
]
