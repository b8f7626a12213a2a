"""
UI Components - Rich tables and panels for scraper records.
"""

from datetime import datetime, timezone
from typing import List, Optional

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from dooplay.core.models import (
    CatalogPage,
    DetailRecord,
    EpisodeRecord,
    FilterList,
    GenreFilter,
    HeaderFilter,
    ListPreference,
)


HEADER_STYLE = "bold magenta"
BORDER_STYLE = "bright_black"


class UIComponents:
    """Builds the renderables printed by CLI commands."""

    def create_data_table(
        self,
        headers: List[str],
        rows: List[List[str]],
        title: Optional[str] = None,
        caption: Optional[str] = None,
    ) -> Table:
        """Create a data table with consistent styling."""
        table = Table(
            title=title,
            caption=caption,
            show_header=True,
            header_style=HEADER_STYLE,
            border_style=BORDER_STYLE,
            expand=True
        )

        for header in headers:
            table.add_column(header)

        for row in rows:
            table.add_row(*(escape(cell) for cell in row))

        return table

    def create_catalog_table(self, page: CatalogPage, title: str) -> Table:
        rows = [
            [str(index), entry.title, entry.detail_path]
            for index, entry in enumerate(page.entries, 1)
        ]
        caption = "More results on the next page" if page.has_next_page else None
        return self.create_data_table(["#", "Title", "Path"], rows, title=title, caption=caption)

    def create_episodes_table(self, episodes: List[EpisodeRecord]) -> Table:
        rows = [
            [
                _format_number(episode.episode_number),
                episode.title,
                _format_timestamp(episode.upload_timestamp),
                episode.detail_path,
            ]
            for episode in episodes
        ]
        return self.create_data_table(
            ["Ep", "Title", "Uploaded", "Path"],
            rows,
            title=f"📺 {len(episodes)} episodes",
        )

    def create_details_panel(self, details: DetailRecord) -> Panel:
        lines = [f"[bold]{escape(details.title)}[/bold]", f"[dim]{escape(details.detail_path)}[/dim]"]
        if details.genres:
            lines.append(f"\n[cyan]Genres:[/cyan] {escape(details.genre)}")
        if details.thumbnail_url:
            lines.append(f"[cyan]Poster:[/cyan] {escape(details.thumbnail_url)}")
        if details.description:
            lines.append(f"\n{escape(details.description)}")
        return Panel("\n".join(lines), title="📋 Details", border_style="cyan", padding=(1, 2))

    def create_filters_table(self, filters: FilterList) -> Table:
        notes = [f.text for f in filters if isinstance(f, HeaderFilter)]
        rows: List[List[str]] = []
        for f in filters:
            if isinstance(f, GenreFilter):
                rows.extend([option.display_name, option.uri_fragment] for option in f.options)
        return self.create_data_table(
            ["Genre", "Path"],
            rows,
            title="🏷️  Genres",
            caption=" ".join(notes) or None,
        )

    def create_preference_panel(self, preference: ListPreference, current: str) -> Panel:
        choices = ", ".join(
            f"[bold green]{value}[/bold green]" if value == current else value
            for value in preference.entry_values
        )
        return Panel(
            f"{preference.title}: [bold]{current}[/bold]\n[dim]Choices:[/dim] {choices}",
            title="⚙️  Preferences",
            border_style="cyan",
            padding=(1, 2)
        )


def _format_number(number: float) -> str:
    return str(int(number)) if number.is_integer() else str(number)


def _format_timestamp(millis: int) -> str:
    if not millis:
        return "-"
    return datetime.fromtimestamp(millis / 1000, tz=timezone.utc).strftime("%Y-%m-%d")


__all__ = ["UIComponents"]
