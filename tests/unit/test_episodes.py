"""
Unit tests for episode list normalization.

Tests episode numbers, upload dates, movie pages and season ordering.
"""

import pytest

from dooplay.core.exceptions import ParseError
from dooplay.plugins.common import HTMLParser
from dooplay.plugins.dooplay import EpisodeNormalizer, extract_episode_number, parse_upload_date
from dooplay.plugins.dooplay.episodes import to_episode_number
from tests.conftest import BASE_URL, DETAILS_HTML, MOVIE_HTML


class TestEpisodeNumbers:
    """Tests for reading episode numbers."""

    def test_trailing_digits(self):
        """Test that the trailing number is captured."""
        assert extract_episode_number("Episódio 12") == "12"
        assert extract_episode_number("3 - 7") == "7"

    def test_surrounding_whitespace(self):
        """Test that whitespace around the text is ignored."""
        assert extract_episode_number("  1 - 24 \n") == "24"

    def test_no_trailing_digits(self):
        """Test the fallback when the text does not end in digits."""
        assert extract_episode_number("1 - Special") == "0"
        assert extract_episode_number("") == "0"

    def test_custom_pattern(self):
        """Test a site specific pattern."""
        assert extract_episode_number("E05 (HD)", r"E(\d+)") == "05"

    def test_to_episode_number(self):
        """Test conversion to a float with a zero fallback."""
        assert to_episode_number("12") == 12.0
        assert to_episode_number("12.5") == 12.5
        assert to_episode_number("abc") == 0.0


class TestUploadDates:
    """Tests for episode date parsing."""

    def test_theme_date_format(self):
        """Test the default DooPlay date format."""
        assert parse_upload_date("January. 05, 2021", "%B. %d, %Y") == 1609804800000

    def test_abbreviated_month(self):
        """Test that the default format accepts short month names."""
        assert parse_upload_date("Jan. 05, 2021", "%B. %d, %Y") == 1609804800000
        assert parse_upload_date("May. 05, 2021", "%B. %d, %Y") == 1620172800000

    def test_unparseable_date(self):
        """Test that bad dates map to 0."""
        assert parse_upload_date("soon", "%B. %d, %Y") == 0
        assert parse_upload_date("", "%B. %d, %Y") == 0

    def test_custom_format(self):
        """Test a site with numeric dates."""
        assert parse_upload_date("05/01/2021", "%d/%m/%Y") == 1609804800000


class TestEpisodeNormalizer:
    """Tests for building episode lists from anime pages."""

    @pytest.fixture
    def normalizer(self, site):
        return EpisodeNormalizer(site)

    @pytest.fixture
    def episodes(self, normalizer):
        return normalizer.parse(HTMLParser(DETAILS_HTML, f"{BASE_URL}/anime/one-piece/"))

    def test_last_season_first(self, episodes):
        """Test that season groups are reversed and episodes keep their order."""
        assert [episode.detail_path for episode in episodes] == [
            "/episodes/one-piece-2x1/",
            "/episodes/one-piece-2-special/",
            "/episodes/one-piece-1x1/",
            "/episodes/one-piece-1x2/",
        ]

    def test_titles(self, episodes):
        """Test the season qualified titles."""
        assert episodes[0].title == "Season 2 x 1 - Grand Line"
        assert episodes[2].title == "Season 1 x 1 - Romance Dawn"

    def test_unnumbered_episode(self, episodes):
        """Test that episodes without a number get 0."""
        assert episodes[1].episode_number == 0.0
        assert episodes[1].title == "Season 2 x 0 - Recap"

    def test_numbers(self, episodes):
        """Test the parsed episode numbers."""
        assert [episode.episode_number for episode in episodes] == [1.0, 0.0, 1.0, 2.0]

    def test_upload_dates(self, episodes):
        """Test parsed, unparseable and missing dates."""
        assert episodes[2].upload_timestamp == 1609804800000
        assert episodes[3].upload_timestamp == 0
        assert episodes[0].upload_timestamp == 0

    def test_movie_page(self, normalizer):
        """Test that pages without seasons are a single movie episode."""
        episodes = normalizer.parse(HTMLParser(MOVIE_HTML, f"{BASE_URL}/movies/your-name/"))
        assert len(episodes) == 1
        assert episodes[0].episode_number == 1.0
        assert episodes[0].title == "Movie"
        assert episodes[0].detail_path == "/movies/your-name/"
        assert episodes[0].upload_timestamp == 0

    def test_portuguese_labels(self, pt_site):
        """Test the localized season prefix and movie label."""
        normalizer = EpisodeNormalizer(pt_site)
        episodes = normalizer.parse(HTMLParser(DETAILS_HTML, "https://animes.example/anime/one-piece/"))
        assert episodes[0].title == "Temporada 2 x 1 - Grand Line"
        movie = normalizer.parse(HTMLParser(MOVIE_HTML, "https://animes.example/filmes/x/"))
        assert movie[0].title == "Filme"

    def test_anchor_own_text_only(self, normalizer):
        """Test that nested markup inside the link is not part of the title."""
        html = """
        <div id="seasons"><div>
          <span class="se-t">1</span>
          <ul class="episodios"><li>
            <div class="numerando">1 - 3</div>
            <a href="/episodes/x-1x3/">Third <span class="badge">NEW</span></a>
          </li></ul>
        </div></div>
        """
        episodes = normalizer.parse(HTMLParser(html, BASE_URL))
        assert episodes[0].title == "Season 1 x 3 - Third"

    def test_abbreviated_month_in_season(self, normalizer):
        """Test short month names on episodes inside a season block."""
        html = """
        <div id="seasons"><div>
          <span class="se-t">1</span>
          <ul class="episodios"><li>
            <div class="numerando">1 - 1</div>
            <div class="episodiotitle">
              <a href="/episodes/x-1x1/">Pilot</a>
              <span class="date">Oct. 20, 1999</span>
            </div>
          </li></ul>
        </div></div>
        """
        episodes = normalizer.parse(HTMLParser(html, BASE_URL))
        assert episodes[0].upload_timestamp == 940377600000

    def test_missing_numbering_raises(self, normalizer):
        """Test that an episode needs its numbering block."""
        html = """
        <div id="seasons"><div>
          <span class="se-t">1</span>
          <ul class="episodios"><li><a href="/episodes/x-1x1/">One</a></li></ul>
        </div></div>
        """
        with pytest.raises(ParseError):
            normalizer.parse(HTMLParser(html, BASE_URL))

    def test_missing_season_name_raises(self, normalizer):
        """Test that a season needs its name."""
        html = '<div id="seasons"><div><ul class="episodios"></ul></div></div>'
        with pytest.raises(ParseError):
            normalizer.parse(HTMLParser(html, BASE_URL))
