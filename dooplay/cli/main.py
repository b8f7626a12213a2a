"""
CLI Main Application - Typer app for browsing a DooPlay site.

This module provides the command line entry point: global options select
the site, and each command runs one catalog operation and renders it
with Rich.
"""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Awaitable, Callable, Optional, TypeVar

import typer
from rich.traceback import install as install_rich_traceback

from dooplay import __version__
from dooplay.core import PreferenceStore
from dooplay.core.exceptions import DooPlayError, SearchError
from dooplay.core.models import GenreFilter
from dooplay.plugins.dooplay import PREF_QUALITY_KEY, DooPlaySource, SiteConfig
from dooplay.ui import (
    UIComponents,
    display_info,
    display_warning,
    get_console,
    handle_error,
    status_spinner,
)
from dooplay.cli.context import (
    create_source,
    get_site_config,
    set_preference_store,
    set_site_config,
)


T = TypeVar("T")

DEFAULT_SITE_NAME = "DooPlay"

logger = logging.getLogger(__name__)
components = UIComponents()

# Create main Typer application
app = typer.Typer(
    name="dooplay",
    help="🎬 Browse anime catalogs of DooPlay theme sites",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)

_debug = False


def _version_callback(value: Optional[bool]) -> None:
    if value:
        get_console().print(f"[bold blue]DooPlay[/bold blue] version [green]{__version__}[/green]")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version information and exit",
        callback=_version_callback,
        is_eager=True,
    ),
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        envvar="DOOPLAY_BASE_URL",
        help="Root URL of the DooPlay site",
    ),
    name: Optional[str] = typer.Option(
        None,
        "--name",
        help="Display name of the site",
    ),
    lang: Optional[str] = typer.Option(
        None,
        "--lang",
        help="Locale of the site (en, pt-BR)",
    ),
    site_config: Optional[Path] = typer.Option(
        None,
        "--site-config",
        help="JSON file describing the site",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
    config_dir: Optional[Path] = typer.Option(
        None,
        "--config-dir",
        help="Directory holding preferences.json",
        file_okay=False,
        dir_okay=True,
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug mode with detailed logging",
        is_flag=True,
    ),
) -> None:
    """
    🎬 DooPlay - Browse anime catalogs of DooPlay theme sites.

    Select a site with --base-url (and optionally --name and --lang) or
    with a --site-config JSON file, then run one of the commands.
    """
    global _debug

    _debug = debug
    _setup_logging(debug)
    install_rich_traceback(show_locals=debug)

    try:
        set_preference_store(PreferenceStore(config_dir))
        site = _build_site_config(site_config, base_url, name, lang)
        set_site_config(site)
        if site is not None:
            logger.debug(f"Using {site.name} at {site.base_url} (source id {site.source_id})")
    except DooPlayError as e:
        handle_error(e, "During application initialization", show_traceback=debug)
        raise typer.Exit(1)


def _build_site_config(
    site_config: Optional[Path],
    base_url: Optional[str],
    name: Optional[str],
    lang: Optional[str],
) -> Optional[SiteConfig]:
    """
    Combine the site file and command line overrides.

    Returns None when neither a file nor a base URL was given; commands
    that need a site report that themselves.
    """
    data: dict = {}
    if site_config is not None:
        data = SiteConfig.from_file(site_config).to_dict()
    elif base_url is None:
        return None

    if base_url is not None:
        data["base_url"] = base_url
    if name is not None:
        data["name"] = name
    if lang is not None:
        data["lang"] = lang
        # strings follow the new locale
        data.pop("strings", None)

    data.setdefault("name", DEFAULT_SITE_NAME)
    return SiteConfig.from_dict(data)


def _setup_logging(debug: bool = False) -> None:
    """
    Set up application logging.

    Args:
        debug: Enable debug logging
    """
    level = logging.DEBUG if debug else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stderr),
        ],
    )

    # Reduce noise from third-party libraries
    if not debug:
        logging.getLogger("aiohttp").setLevel(logging.WARNING)
        logging.getLogger("asyncio").setLevel(logging.WARNING)


def _run_with_source(
    action: Callable[[DooPlaySource], Awaitable[T]],
    message: str,
    context: str,
) -> T:
    """
    Run one async source operation and close the session afterwards.

    Scraper errors are shown in an error panel and end the command with
    exit code 1.
    """
    async def runner() -> T:
        source = create_source()
        try:
            with status_spinner(message):
                return await action(source)
        finally:
            await source.cleanup()

    try:
        return asyncio.run(runner())
    except DooPlayError as e:
        handle_error(e, context, show_traceback=_debug)
        raise typer.Exit(1)


@app.command()
def popular(
    page: int = typer.Option(1, "--page", "-p", min=1, help="Page number"),
) -> None:
    """🔥 Show the site's popular anime."""
    result = _run_with_source(
        lambda source: source.popular_anime(page),
        "Loading popular anime...",
        "While loading popular anime",
    )
    get_console().print(components.create_catalog_table(result, f"🔥 Popular - {get_site_config().name}"))


@app.command()
def latest(
    page: int = typer.Option(1, "--page", "-p", min=1, help="Page number"),
) -> None:
    """🆕 Show the latest episode updates."""
    result = _run_with_source(
        lambda source: source.latest_updates(page),
        "Loading latest updates...",
        "While loading latest updates",
    )
    get_console().print(
        components.create_catalog_table(result, f"🆕 Latest updates - page {page}")
    )


@app.command()
def search(
    query: str = typer.Argument("", help="Search text, or path:<site path> to open a page"),
    page: int = typer.Option(1, "--page", "-p", min=1, help="Page number"),
    genre: Optional[str] = typer.Option(
        None,
        "--genre",
        "-g",
        help="Browse a genre instead of searching (use with an empty query)",
    ),
) -> None:
    """
    🔍 Search the site.

    Examples:

        dooplay --base-url https://example.org search "one piece"

        dooplay --base-url https://example.org search --genre Action

        dooplay --base-url https://example.org search path:anime/one-piece
    """
    async def action(source: DooPlaySource):
        filters = []
        if genre is not None:
            filters.append(await _select_genre(source, genre))
        return await source.search_anime(page, query, filters)

    result = _run_with_source(action, "Searching...", "While searching")
    title = f"🔍 Results for '{query}'" if query.strip() else f"🏷️  {genre or 'Search'}"
    get_console().print(components.create_catalog_table(result, title))


async def _select_genre(source: DooPlaySource, display_name: str) -> GenreFilter:
    """Load the genre filter and select one genre by name."""
    await source.fetch_genres_list()
    genre_filter = next(
        (f for f in source.get_filter_list() if isinstance(f, GenreFilter)),
        None,
    )
    if genre_filter is None:
        raise SearchError(
            source.site.locale.genres_missing_warning,
            query=display_name,
            source=source.site.name,
        )
    try:
        return genre_filter.select(display_name)
    except ValueError as e:
        raise SearchError(str(e), query=display_name, source=source.site.name)


@app.command()
def details(
    path: str = typer.Argument(..., help="Site-relative path of the anime"),
) -> None:
    """📋 Show anime details."""
    result = _run_with_source(
        lambda source: source.anime_details(path),
        "Loading details...",
        "While loading anime details",
    )
    get_console().print(components.create_details_panel(result))


@app.command()
def episodes(
    path: str = typer.Argument(..., help="Site-relative path of the anime"),
) -> None:
    """📺 List the episodes of an anime."""
    result = _run_with_source(
        lambda source: source.episode_list(path),
        "Loading episodes...",
        "While loading episodes",
    )
    get_console().print(components.create_episodes_table(result))


@app.command()
def genres() -> None:
    """🏷️  List the genres offered by the site."""
    async def action(source: DooPlaySource):
        await source.fetch_genres_list()
        return source.get_filter_list()

    result = _run_with_source(action, "Loading genres...", "While loading genres")
    if not any(isinstance(f, GenreFilter) for f in result):
        display_warning("The site did not list any genres")
        return
    get_console().print(components.create_filters_table(result))


@app.command()
def quality(
    value: Optional[str] = typer.Argument(None, help="New preferred quality"),
) -> None:
    """⚙️  Show or set the preferred video quality."""
    try:
        source = create_source()
        if value is not None:
            stored = source.set_preference(PREF_QUALITY_KEY, value)
            display_info(f"Preferred quality set to {stored}")
        preference = source.preference_screen()[0]
        get_console().print(components.create_preference_panel(preference, source.preferred_quality))
    except DooPlayError as e:
        handle_error(e, "While updating preferences", show_traceback=_debug)
        raise typer.Exit(1)


def cli_main() -> None:
    """
    Main CLI entry point for the dooplay command.
    """
    try:
        app()
    except KeyboardInterrupt:
        get_console().print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)  # Standard exit code for SIGINT
    except Exception as e:
        handle_error(e, "Unexpected error in CLI")
        sys.exit(1)


# Export main components
__all__ = [
    "app",
    "cli_main",
]
