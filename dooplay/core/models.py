"""
Core Data Models - Pydantic models for type safety and validation.

This module defines the cross-source records produced by the scraper:
catalog entries, episodes, anime details, genre filters, video variants
and preference descriptors. Every path stored here is site-relative so
records compose with any mirror of a site.
"""

from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Quality(str, Enum):
    """Video quality labels a quality preference may hold."""

    LOW = "480p"
    MEDIUM = "720p"
    HIGH = "1080p"
    ULTRA = "1440p"
    FOUR_K = "2160p"

    def __str__(self) -> str:
        return self.value


class CatalogEntry(BaseModel):
    """
    One anime found on a listing or search page.

    Built once from a single DOM node and never modified afterwards.
    """

    model_config = ConfigDict(frozen=True)

    detail_path: str = Field(..., description="Site-relative path of the anime page")
    title: str = Field(..., description="Anime title, taken from the poster alt text")
    thumbnail_url: Optional[str] = Field(None, description="Absolute poster URL")

    def __str__(self) -> str:
        return self.title


class CatalogPage(BaseModel):
    """A page of catalog entries plus whether another page follows."""

    entries: List[CatalogEntry] = Field(default_factory=list)
    has_next_page: bool = Field(False, description="Whether a next page control was found")

    def __len__(self) -> int:
        return len(self.entries)


class EpisodeRecord(BaseModel):
    """
    Represents an episode extracted from an anime page.

    The episode number defaults to 0 and the upload timestamp to 0 when
    the page does not yield a usable value, so sorting stays total.
    """

    detail_path: str = Field(..., description="Site-relative path of the episode page")
    episode_number: float = Field(0.0, ge=0.0, description="Episode number within its season")
    title: str = Field(..., description="Season-qualified episode title")
    upload_timestamp: int = Field(0, description="Upload date in epoch milliseconds")

    def __str__(self) -> str:
        return self.title

    def __repr__(self) -> str:
        return f"EpisodeRecord(episode_number={self.episode_number}, title='{self.title}')"


class DetailRecord(BaseModel):
    """Full information about an anime taken from its details page."""

    detail_path: str = Field(..., description="Site-relative path of the anime page")
    title: str = Field(..., description="Anime title")
    thumbnail_url: Optional[str] = Field(None, description="Absolute poster URL")
    genres: List[str] = Field(default_factory=list, description="Genre names in page order")
    description: Optional[str] = Field(None, description="Synopsis plus additional info lines")

    @field_validator('title')
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Ensure title is properly formatted."""
        return v.strip()

    @property
    def genre(self) -> str:
        """Genres joined for display."""
        return ", ".join(self.genres)

    def to_catalog_entry(self) -> CatalogEntry:
        """Reduce the details to the listing shape."""
        return CatalogEntry(
            detail_path=self.detail_path,
            title=self.title,
            thumbnail_url=self.thumbnail_url,
        )

    def __str__(self) -> str:
        return self.title


class GenreFilterOption(BaseModel):
    """A selectable genre and the site path fragment that lists it."""

    model_config = ConfigDict(frozen=True)

    display_name: str
    uri_fragment: str


class HeaderFilter(BaseModel):
    """Informational text shown above the filters."""

    text: str


class GenreFilter(BaseModel):
    """Single-choice genre selector built from the site's genre menu."""

    name: str = Field(..., description="Label shown for the selector")
    options: List[GenreFilterOption] = Field(..., min_length=1)
    state: int = Field(0, ge=0, description="Index of the selected option")

    @model_validator(mode='after')
    def validate_state(self) -> 'GenreFilter':
        """Keep the selection inside the option list."""
        if self.state >= len(self.options):
            raise ValueError(f"Selected index {self.state} is out of range")
        return self

    @property
    def values(self) -> List[str]:
        return [option.display_name for option in self.options]

    def select(self, display_name: str) -> 'GenreFilter':
        """
        Return a copy of this filter with the named genre selected.

        Raises:
            ValueError: If no option has that name
        """
        wanted = display_name.strip().lower()
        for index, option in enumerate(self.options):
            if option.display_name.lower() == wanted:
                return self.model_copy(update={"state": index})
        raise ValueError(f"Unknown genre: {display_name}")

    def to_uri_part(self) -> str:
        return self.options[self.state].uri_fragment


AnimeFilter = Union[HeaderFilter, GenreFilter]


class Video(BaseModel):
    """A playable variant of an episode."""

    url: str = Field(..., description="Page or embed URL the variant came from")
    quality: str = Field(..., description="Quality label as shown by the hoster")
    video_url: Optional[str] = Field(None, description="Direct stream URL when known")

    def __str__(self) -> str:
        return self.quality


class ListPreference(BaseModel):
    """Describes a single-choice preference the host should render."""

    key: str
    title: str
    entries: List[str]
    entry_values: List[str]
    default_value: str
    summary: str = "%s"

    @model_validator(mode='after')
    def validate_default(self) -> 'ListPreference':
        """Ensure the default is one of the selectable values."""
        if self.default_value not in self.entry_values:
            raise ValueError(f"Default value {self.default_value!r} is not selectable")
        return self

    def find_index_of_value(self, value: str) -> int:
        """Position of a value in entry_values, or -1."""
        try:
            return self.entry_values.index(value)
        except ValueError:
            return -1


# Type aliases for better code readability
FilterList = List[AnimeFilter]

# Export all models and types
__all__ = [
    "Quality",
    "CatalogEntry",
    "CatalogPage",
    "EpisodeRecord",
    "DetailRecord",
    "GenreFilterOption",
    "HeaderFilter",
    "GenreFilter",
    "AnimeFilter",
    "Video",
    "ListPreference",
    "FilterList",
]
