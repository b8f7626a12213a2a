"""
Console - Shared Rich console for command output.

Tables and panels go to stdout; the status spinner shown while pages are
fetched is drawn on the same console and removed when the fetch ends.
"""

from contextlib import contextmanager
from typing import Iterator, Optional

from rich.console import Console
from rich.status import Status


_console: Optional[Console] = None


def setup_console(
    width: Optional[int] = None,
    no_color: bool = False,
    force_terminal: Optional[bool] = None,
) -> Console:
    """
    Replace the shared console.

    Args:
        width: Fixed output width; detected from the terminal when None
        no_color: Print without styles
        force_terminal: Override terminal detection
    """
    global _console

    options = {
        "force_terminal": force_terminal,
        "no_color": no_color,
        "color_system": None if no_color else "auto",
    }
    if width is not None:
        options["width"] = width

    _console = Console(**options)
    return _console


def get_console() -> Console:
    """Shared console, created on first use."""
    if _console is None:
        return setup_console()
    return _console


@contextmanager
def status_spinner(message: str, spinner: str = "dots") -> Iterator[Status]:
    """Show a transient spinner with ``message`` while the block runs."""
    status = Status(message, spinner=spinner, console=get_console())
    status.start()
    try:
        yield status
    finally:
        status.stop()


__all__ = [
    "setup_console",
    "get_console",
    "status_spinner",
]
