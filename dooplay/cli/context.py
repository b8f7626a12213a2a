"""
CLI Context - Global application context and state management.

This module holds the site configuration and preference store chosen by
the global CLI options, and builds sources from them.
"""

from typing import Optional

from dooplay.core import PreferenceStore
from dooplay.core.exceptions import ConfigurationError
from dooplay.plugins.dooplay import DooPlaySource, SiteConfig


# Global application state
_site_config: Optional[SiteConfig] = None
_preference_store: Optional[PreferenceStore] = None


def get_site_config() -> SiteConfig:
    """Get the configured site, or explain how to configure one."""
    if _site_config is None:
        raise ConfigurationError(
            "No site configured; pass --base-url or --site-config"
        )
    return _site_config


def set_site_config(site_config: Optional[SiteConfig]) -> None:
    """Set the global site configuration."""
    global _site_config
    _site_config = site_config


def get_preference_store() -> PreferenceStore:
    """Get the global preference store instance."""
    global _preference_store
    if _preference_store is None:
        raise RuntimeError("Preference store not initialized")
    return _preference_store


def set_preference_store(preference_store: Optional[PreferenceStore]) -> None:
    """Set the global preference store instance."""
    global _preference_store
    _preference_store = preference_store


def create_source() -> DooPlaySource:
    """Build a source for the configured site."""
    return DooPlaySource(get_site_config(), preferences=get_preference_store())


# Export context functions
__all__ = [
    "get_site_config",
    "set_site_config",
    "get_preference_store",
    "set_preference_store",
    "create_source",
]
