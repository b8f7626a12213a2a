"""
UI Layer - Rich console, components and error display for the CLI.
"""

from dooplay.ui.components import UIComponents
from dooplay.ui.console import get_console, setup_console, status_spinner
from dooplay.ui.error_handler import ErrorHandler, display_info, display_warning, handle_error

__all__ = [
    "UIComponents",
    "get_console",
    "setup_console",
    "status_spinner",
    "ErrorHandler",
    "handle_error",
    "display_warning",
    "display_info",
]
