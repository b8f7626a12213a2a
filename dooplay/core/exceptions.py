"""
Core Exceptions - Custom exception classes for the DooPlay scraper.

This module defines custom exception classes used throughout the
scraper for consistent error handling and user feedback.
"""

from typing import Optional, Any


class DooPlayError(Exception):
    """Base exception class for all scraper-specific errors."""

    def __init__(self, message: str, details: Optional[Any] = None):
        """
        Initialize scraper error.

        Args:
            message: Human-readable error message
            details: Additional error details for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        return self.message


class ConfigurationError(DooPlayError):
    """Raised when site or preference configuration is invalid."""

    def __init__(self, message: str, config_path: Optional[str] = None, details: Optional[Any] = None):
        """
        Initialize configuration error.

        Args:
            message: Error description
            config_path: Path to the problematic configuration file
            details: Additional error context
        """
        super().__init__(message, details)
        self.config_path = config_path


class PluginError(DooPlayError):
    """Raised when a source fails to honour the host contract."""

    def __init__(self, message: str, plugin_name: Optional[str] = None, details: Optional[Any] = None):
        super().__init__(message, details)
        self.plugin_name = plugin_name


class UnsupportedOperationError(PluginError):
    """Raised when an entry point this scraping strategy does not use is invoked."""

    def __init__(self, operation: str, plugin_name: Optional[str] = None):
        super().__init__(f"{operation} is not used by this source", plugin_name)
        self.operation = operation


class NetworkError(DooPlayError):
    """Raised when network-related errors occur."""

    def __init__(self, message: str, url: Optional[str] = None, status_code: Optional[int] = None, details: Optional[Any] = None):
        """
        Initialize network error.

        Args:
            message: Error description
            url: URL that caused the error
            status_code: HTTP status code if applicable
            details: Additional error context
        """
        super().__init__(message, details)
        self.url = url
        self.status_code = status_code


class ParseError(DooPlayError):
    """Raised when a node the page structure requires is missing."""

    def __init__(self, message: str, selector: Optional[str] = None, url: Optional[str] = None, details: Optional[Any] = None):
        """
        Initialize parse error.

        Args:
            message: Error description
            selector: CSS selector that matched nothing
            url: Location of the document being parsed
            details: Additional error context
        """
        super().__init__(message, details)
        self.selector = selector
        self.url = url


class SearchError(DooPlayError):
    """Raised when a search request cannot be built or executed."""

    def __init__(self, message: str, query: Optional[str] = None, source: Optional[str] = None, details: Optional[Any] = None):
        super().__init__(message, details)
        self.query = query
        self.source = source


# Export all exception classes
__all__ = [
    "DooPlayError",
    "ConfigurationError",
    "PluginError",
    "UnsupportedOperationError",
    "NetworkError",
    "ParseError",
    "SearchError",
]
