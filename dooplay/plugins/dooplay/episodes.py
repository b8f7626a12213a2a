"""
DooPlay Episodes - Builds the episode list of an anime page.

Pages without a season list are movies and yield a single episode.
Otherwise each season block is read in document order and the season
groups are returned newest-markup-last, i.e. the last season block on the
page comes first.
"""

import logging
import re
from datetime import datetime, timezone
from typing import List

from bs4 import Tag

from dooplay.core.models import EpisodeRecord
from dooplay.plugins.common import HTMLParser, URLHelper, attr_text, element_text, own_text, require_one

from .config import SiteConfig


logger = logging.getLogger(__name__)


def extract_episode_number(text: str, pattern: str = r"(\d+)$") -> str:
    """
    Episode number text captured by ``pattern``, or "0".

    Example: "Episódio 12" -> "12"
    """
    match = re.search(pattern, text.strip())
    if not match:
        return "0"
    return match.group(match.lastindex or 0)


def to_episode_number(value: str) -> float:
    """Parse an episode number, mapping anything unparseable to 0."""
    try:
        return float(value)
    except ValueError:
        return 0.0


def parse_upload_date(text: str, date_format: str) -> int:
    """
    Parse an episode date into epoch milliseconds (UTC).

    Full month names in ``date_format`` also accept abbreviated ones, so
    "%B. %d, %Y" reads both "January. 05, 2021" and "Jan. 05, 2021".
    Returns 0 when the text does not match ``date_format``.
    """
    formats = [date_format]
    if "%B" in date_format:
        formats.append(date_format.replace("%B", "%b"))

    for fmt in formats:
        try:
            parsed = datetime.strptime(text.strip(), fmt)
        except ValueError:
            continue
        return int(parsed.replace(tzinfo=timezone.utc).timestamp() * 1000)
    return 0


class EpisodeNormalizer:
    """Turns an anime details document into episode records."""

    def __init__(self, site: SiteConfig):
        self.site = site
        self.selectors = site.selectors

    def parse(self, doc: HTMLParser) -> List[EpisodeRecord]:
        seasons = doc.select(self.selectors.season_list)
        if not seasons:
            return [self.movie_episode(doc)]

        groups = [self.season_episodes(season, doc) for season in seasons]
        logger.debug(f"Found {len(groups)} seasons at {doc.location}")

        episodes: List[EpisodeRecord] = []
        for group in reversed(groups):
            episodes.extend(group)
        return episodes

    def movie_episode(self, doc: HTMLParser) -> EpisodeRecord:
        """The single episode of a page without seasons."""
        return EpisodeRecord(
            detail_path=URLHelper.without_domain(doc.location),
            episode_number=1.0,
            title=self.site.locale.movie_text,
        )

    def season_episodes(self, season: Tag, doc: HTMLParser) -> List[EpisodeRecord]:
        season_name = element_text(require_one(season, self.selectors.season_name, doc.location))
        return [
            self.episode_from_element(element, season_name, doc)
            for element in season.select(self.selectors.episode_list)
        ]

    def episode_from_element(self, element: Tag, season_name: str, doc: HTMLParser) -> EpisodeRecord:
        """
        Build one episode from its list item.

        Raises:
            ParseError: If the numbering block or the link is missing
        """
        numbering = element_text(require_one(element, self.selectors.episode_numbering, doc.location))
        ep_num = extract_episode_number(numbering, self.selectors.episode_number_regex)

        link = require_one(element, self.selectors.episode_link, doc.location)
        episode_name = own_text(link)

        date = element.select_one(self.selectors.episode_date)
        upload = parse_upload_date(element_text(date), self.site.date_format) if date is not None else 0

        return EpisodeRecord(
            detail_path=URLHelper.without_domain(attr_text(link, "href")),
            episode_number=to_episode_number(ep_num),
            title=f"{self.site.locale.season_prefix} {season_name} x {ep_num} - {episode_name}",
            upload_timestamp=upload,
        )


__all__ = [
    "EpisodeNormalizer",
    "extract_episode_number",
    "to_episode_number",
    "parse_upload_date",
]
