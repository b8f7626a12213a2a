"""
Error Handler - Error panels with context and suggestions.

This module provides consistent error display across CLI commands, with
suggestions tailored to each error type.
"""

import traceback
from typing import List, Optional

from rich.panel import Panel

from dooplay.core.exceptions import (
    ConfigurationError,
    DooPlayError,
    NetworkError,
    ParseError,
    PluginError,
    SearchError,
    UnsupportedOperationError,
)
from dooplay.ui.console import get_console


ERROR_STYLE = "red"
INFO_STYLE = "cyan"
WARNING_STYLE = "yellow"


class ErrorHandler:
    """Handles error display with consistent formatting and helpful context."""

    def handle_error(
        self,
        error: Exception,
        context: Optional[str] = None,
        show_traceback: bool = False
    ) -> None:
        """
        Handle and display an error with appropriate formatting.

        Args:
            error: Exception to handle
            context: Additional context about where the error occurred
            show_traceback: Whether to show the full traceback
        """
        if isinstance(error, DooPlayError):
            title, lines, suggestions = self._describe(error)
            message = error.message
        else:
            title = "💥 Unexpected Error"
            lines = []
            suggestions = [
                "Check the command syntax and arguments",
                "Try running the command again with --debug",
            ]
            message = f"{error.__class__.__name__}: {error}"

        content_parts = [f"[{ERROR_STYLE}]{message}[/{ERROR_STYLE}]"]
        content_parts.extend(lines)

        if context:
            content_parts.append(f"\n[dim]Context:[/dim] {context}")

        if suggestions:
            content_parts.append(f"\n\n[{INFO_STYLE}]💡 Suggestions:[/{INFO_STYLE}]")
            content_parts.extend(f"• {suggestion}" for suggestion in suggestions)

        if show_traceback:
            if isinstance(error, DooPlayError) and error.details:
                content_parts.append(f"\n\n[dim]Details:[/dim]\n{error.details}")
            content_parts.append(f"\n\n[dim]Traceback:[/dim]\n{traceback.format_exc()}")

        get_console().print(Panel(
            "\n".join(content_parts),
            title=title,
            border_style=ERROR_STYLE,
            padding=(1, 2)
        ))

    def _describe(self, error: DooPlayError):
        """Title, detail lines and suggestions for a scraper error."""
        lines: List[str] = []

        if isinstance(error, ConfigurationError):
            if error.config_path:
                lines.append(f"\n[dim]Configuration file:[/dim] [cyan]{error.config_path}[/cyan]")
            return "⚙️  Configuration Error", lines, [
                "Check the site configuration JSON for typos",
                "Make sure base_url starts with http:// or https://",
            ]

        if isinstance(error, NetworkError):
            suggestions = [
                "Check your internet connection",
                "Verify the site is reachable in a browser",
                "Try again in a few moments",
            ]
            if error.url:
                lines.append(f"\n[dim]URL:[/dim] [blue]{error.url}[/blue]")
            if error.status_code:
                lines.append(f"\n[dim]Status Code:[/dim] {error.status_code}")
                if error.status_code == 403:
                    suggestions.insert(0, "The site may be blocking requests, try another user agent")
                elif error.status_code == 404:
                    suggestions.insert(0, "The requested page may no longer exist")
                elif error.status_code >= 500:
                    suggestions.insert(0, "The site is experiencing issues")
            return "🌐 Network Error", lines, suggestions

        if isinstance(error, ParseError):
            if error.selector:
                lines.append(f"\n[dim]Selector:[/dim] [cyan]{error.selector}[/cyan]")
            if error.url:
                lines.append(f"\n[dim]Page:[/dim] [blue]{error.url}[/blue]")
            return "🧩 Parse Error", lines, [
                "The site's markup may have changed",
                "Override the selector in the site configuration",
            ]

        if isinstance(error, SearchError):
            if error.query is not None:
                lines.append(f"\n[dim]Query:[/dim] '{error.query}'")
            return "🔍 Search Error", lines, [
                "Pass search text, or pick a genre with --genre",
                "Run the genres command to list available genres",
            ]

        if isinstance(error, UnsupportedOperationError):
            return "🚫 Unsupported Operation", lines, []

        if isinstance(error, PluginError):
            if error.plugin_name:
                lines.append(f"\n[dim]Source:[/dim] [cyan]{error.plugin_name}[/cyan]")
            return "🔌 Source Error", lines, []

        return "❌ Error", lines, []

    def display_warning(self, message: str, title: str = "⚠️  Warning") -> None:
        """Display a warning message."""
        get_console().print(Panel(
            f"[{WARNING_STYLE}]{message}[/{WARNING_STYLE}]",
            title=f"[{WARNING_STYLE}]{title}[/{WARNING_STYLE}]",
            border_style=WARNING_STYLE,
            padding=(1, 2)
        ))

    def display_info(self, message: str, title: str = "ℹ️  Information") -> None:
        """Display an information message."""
        get_console().print(Panel(
            f"[{INFO_STYLE}]{message}[/{INFO_STYLE}]",
            title=f"[{INFO_STYLE}]{title}[/{INFO_STYLE}]",
            border_style=INFO_STYLE,
            padding=(1, 2)
        ))


# Global error handler instance
_error_handler = ErrorHandler()


def handle_error(
    error: Exception,
    context: Optional[str] = None,
    show_traceback: bool = False
) -> None:
    """Handle and display an error using the global error handler."""
    _error_handler.handle_error(error, context, show_traceback)


def display_warning(message: str, title: str = "⚠️  Warning") -> None:
    """Display a warning message using the global error handler."""
    _error_handler.display_warning(message, title)


def display_info(message: str, title: str = "ℹ️  Information") -> None:
    """Display an information message using the global error handler."""
    _error_handler.display_info(message, title)


# Export error handling functions
__all__ = [
    "ErrorHandler",
    "handle_error",
    "display_warning",
    "display_info",
]
