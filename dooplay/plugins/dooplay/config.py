"""
DooPlay Configuration - Per-site selectors, localized strings and settings.

Every DooPlay site is described by one SiteConfig value. Differences
between sites (markup tweaks, language, qualities) are expressed as data
here instead of in code.
"""

import hashlib
import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from dooplay.core.exceptions import ConfigurationError
from dooplay.core.models import Quality


logger = logging.getLogger(__name__)

DEFAULT_LANG = "en"


class LocaleStrings(BaseModel):
    """User-facing strings and localized path segments of a site."""

    quality_title: str
    movie_text: str
    season_prefix: str
    latest_path: str
    additional_info_items: List[str] = Field(..., min_length=1)
    genre_filter_header: str
    genres_missing_warning: str
    genres_list_message: str

    @property
    def genres_menu_label(self) -> str:
        """Menu entry holding the genre links, e.g. "Genres"."""
        return f"{self.genres_list_message}s"


LOCALE_STRINGS: Dict[str, LocaleStrings] = {
    "en": LocaleStrings(
        quality_title="Preferred quality",
        movie_text="Movie",
        season_prefix="Season",
        latest_path="episodes",
        additional_info_items=["Original", "First", "Last", "Seasons", "Episodes"],
        genre_filter_header="NOTE: Filters are going to be ignored if using search text!",
        genres_missing_warning="Press 'Reset' to attempt to show the genres",
        genres_list_message="Genre",
    ),
    "pt-BR": LocaleStrings(
        quality_title="Qualidade preferida",
        movie_text="Filme",
        season_prefix="Temporada",
        latest_path="episodio",
        additional_info_items=["Título", "Ano", "Temporadas", "Episódios"],
        genre_filter_header="NOTA: Filtros serão ignorados se usar a pesquisa por nome!",
        genres_missing_warning="Aperte 'Redefinir' para tentar mostrar os gêneros",
        genres_list_message="Gênero",
    ),
}


def get_locale_strings(lang: str) -> LocaleStrings:
    """Strings for a locale tag; sites in other languages use English."""
    strings = LOCALE_STRINGS.get(lang)
    if strings is None:
        logger.debug(f"No strings for locale '{lang}', using '{DEFAULT_LANG}'")
        strings = LOCALE_STRINGS[DEFAULT_LANG]
    return strings


class SelectorConfig(BaseModel):
    """CSS selectors of the DooPlay theme."""

    popular_anime: str = "article.w_item_a > a"
    latest_updates: str = "div.content article > div.poster"
    latest_next_page: str = "div.resppages > a > span.fa-chevron-right"
    search_anime: str = "div.result-item div.image a"

    season_list: str = "div#seasons > div"
    season_name: str = "span.se-t"
    episode_list: str = "ul.episodios > li"
    episode_numbering: str = "div.numerando"
    episode_link: str = "a[href]"
    episode_date: str = ".date"
    episode_number_regex: str = r"(\d+)$"

    detail_header: str = "div.sheader"
    detail_poster: str = "div.poster > img"
    detail_title: str = "div.data > h1"
    detail_genres: str = "div.data > div.sgeneros > a"
    additional_info: str = "div#info"
    additional_info_field: str = "div.custom_fields"

    anime_menu: str = "div.pag_episodes div.item a[href] i.fa-bars"

    genres_menu_item: str = "li"
    genres_list: str = "ul.sub-menu li > a"

    @field_validator('episode_number_regex')
    @classmethod
    def validate_regex(cls, v: str) -> str:
        """Reject patterns that do not compile."""
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f"Invalid episode number regex: {e}")
        return v


class SiteConfig(BaseModel):
    """Everything that distinguishes one DooPlay site from another."""

    name: str = Field(..., min_length=1, description="Source display name")
    lang: str = Field(DEFAULT_LANG, description="Locale tag of the site")
    base_url: str = Field(..., description="Site root, without trailing slash")
    selectors: SelectorConfig = Field(default_factory=SelectorConfig)
    strings: Optional[LocaleStrings] = Field(
        None,
        description="Localized strings; resolved from lang when omitted"
    )
    date_format: str = Field("%B. %d, %Y", description="strptime format of episode dates")
    quality_values: List[str] = Field(
        default_factory=lambda: [Quality.LOW.value, Quality.MEDIUM.value],
        min_length=1,
        description="Qualities the preference may select"
    )
    quality_default: str = Field(Quality.MEDIUM.value, description="Preferred quality when unset")
    fetch_genres: bool = Field(True, description="Fetch the genre menu for filters")

    @field_validator('base_url')
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Require an http(s) URL and drop the trailing slash."""
        v = v.strip()
        if not v.startswith(('http://', 'https://')):
            raise ValueError(f"Base URL must start with http:// or https://: {v}")
        return v.rstrip('/')

    @field_validator('quality_values')
    @classmethod
    def validate_quality_values(cls, v: List[str]) -> List[str]:
        """Only known quality labels can be preferred."""
        known = {q.value for q in Quality}
        unknown = [value for value in v if value not in known]
        if unknown:
            raise ValueError(f"Unknown qualities: {', '.join(unknown)}")
        return list(dict.fromkeys(v))

    @model_validator(mode='after')
    def resolve_defaults(self) -> 'SiteConfig':
        """Resolve locale strings and check the default quality."""
        if self.strings is None:
            self.strings = get_locale_strings(self.lang)
        if self.quality_default not in self.quality_values:
            raise ValueError(
                f"Default quality {self.quality_default} is not one of {', '.join(self.quality_values)}"
            )
        return self

    @property
    def locale(self) -> LocaleStrings:
        # resolve_defaults always fills strings
        assert self.strings is not None
        return self.strings

    @property
    def source_id(self) -> int:
        """Stable numeric id derived from name, language and version."""
        key = f"{self.name.lower()}/{self.lang}/1"
        digest = hashlib.md5(key.encode('utf-8')).digest()
        return int.from_bytes(digest[:8], 'big') & 0x7FFFFFFFFFFFFFFF

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return self.model_dump()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SiteConfig':
        """
        Create a site configuration from a dictionary.

        Raises:
            ConfigurationError: If the data is invalid
        """
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid site configuration: {e}", details=e.errors())

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> 'SiteConfig':
        """
        Load a site configuration from a JSON file.

        Raises:
            ConfigurationError: If the file cannot be read or is invalid
        """
        path = Path(path)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Cannot read site configuration: {e}", config_path=str(path))

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid site configuration: {e}",
                config_path=str(path),
                details=e.errors(),
            )


# Export configuration utilities
__all__ = [
    "DEFAULT_LANG",
    "LocaleStrings",
    "LOCALE_STRINGS",
    "get_locale_strings",
    "SelectorConfig",
    "SiteConfig",
]
