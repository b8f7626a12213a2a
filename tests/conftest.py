"""
Pytest Configuration and Shared Fixtures

This file contains the HTML pages of a small DooPlay site and fixtures that
build sources whose page fetches are served from memory.
"""

from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pytest

from dooplay.core import PreferenceStore
from dooplay.core.exceptions import NetworkError
from dooplay.plugins import FetchedPage
from dooplay.plugins.dooplay import DooPlaySource, SiteConfig


BASE_URL = "https://anime.example"


# ============================================================================
# Sample Pages
# ============================================================================

HOME_HTML = """
<html>
<body>
  <header>
    <ul class="main-header">
      <li class="menu-item"><a href="https://anime.example/">Home</a></li>
      <li class="menu-item menu-item-has-children">
        <a href="#">Genres</a>
        <ul class="sub-menu">
          <li><a href="https://anime.example/genre/action/">Action</a></li>
          <li><a href="https://anime.example/genre/comedy/">Comedy</a></li>
          <li><a href="/genre/drama/">Drama</a></li>
        </ul>
      </li>
    </ul>
  </header>
  <div class="items featured">
    <article class="w_item_a">
      <a href="https://anime.example/anime/one-piece/">
        <div class="image">
          <img data-src="/img/one-piece.jpg" src="data:image/gif;base64,R0lGOD" alt="One Piece">
        </div>
        <h3>One Piece (Dubbed)</h3>
      </a>
    </article>
    <article class="w_item_a">
      <a href="https://anime.example/anime/naruto/">
        <img srcset="https://cdn.anime.example/naruto-300.jpg 300w, https://cdn.anime.example/naruto-600.jpg 600w"
             src="/img/naruto.jpg" alt="Naruto">
      </a>
    </article>
  </div>
  <div class="resppages"><a href="/page/2"><span class="fas fa-chevron-right"></span></a></div>
</body>
</html>
"""

LATEST_HTML = """
<html>
<body>
  <div class="content">
    <article class="item se episodes">
      <div class="poster">
        <img data-lazy-src="https://anime.example/img/bleach-3.jpg" alt="Bleach Episode 3">
        <a href="https://anime.example/episodes/bleach-episode-3/"><div class="see"></div></a>
      </div>
    </article>
    <article class="item se episodes">
      <div class="poster">
        <img src="/img/dororo-1.jpg" alt="Dororo Episode 1">
        <a href="https://anime.example/episodes/dororo-1/?ref=home#top"><div class="see"></div></a>
      </div>
    </article>
  </div>
  <div class="resppages">
    <a href="/episodes/page/2"><span class="fas fa-chevron-right"></span></a>
  </div>
</body>
</html>
"""

SEARCH_HTML = """
<html>
<body>
  <div class="search-page">
    <div class="result-item">
      <article>
        <div class="image">
          <div class="thumbnail animation-2">
            <a href="https://anime.example/anime/one-piece/">
              <img src="https://anime.example/img/op-thumb.jpg" alt="One Piece">
            </a>
          </div>
        </div>
        <div class="details">
          <div class="title"><a href="https://anime.example/anime/one-piece/">One Piece TV</a></div>
        </div>
      </article>
    </div>
    <div class="result-item">
      <article>
        <div class="image">
          <div class="thumbnail animation-2">
            <a href="https://anime.example/movies/one-piece-film-red/">
              <img data-src="/img/film-red.jpg" alt="One Piece Film: Red">
            </a>
          </div>
        </div>
      </article>
    </div>
  </div>
</body>
</html>
"""

DETAILS_HTML = """
<html>
<body>
  <div class="sheader">
    <div class="poster"><img data-src="/img/op-poster.jpg" alt="One Piece"></div>
    <div class="data">
      <h1>One Piece (TV)</h1>
      <div class="sgeneros">
        <a href="/genre/action/">Action</a>
        <a href="/genre/adventure/">Adventure</a>
      </div>
    </div>
  </div>
  <div id="info" class="sbox">
    <h2>Synopsis</h2>
    <div class="wp-content"><p>Monkey D. Luffy sets off
      on an adventure.</p></div>
    <div class="custom_fields"><b class="variante">Original title</b> <span class="valor">ワンピース</span></div>
    <div class="custom_fields"><b class="variante">First air date</b> <span class="valor">Oct. 20, 1999</span></div>
    <div class="custom_fields"><b class="variante">Seasons</b> <span class="valor">2</span></div>
    <div class="custom_fields"><b class="variante">Rating</b> <span class="valor">9</span></div>
  </div>
  <div id="seasons">
    <div class="se-c">
      <div class="se-q"><span class="se-t">1</span><span class="title">Season 1</span></div>
      <div class="se-a">
        <ul class="episodios">
          <li>
            <div class="numerando">1 - 1</div>
            <div class="episodiotitle">
              <a href="https://anime.example/episodes/one-piece-1x1/">Romance Dawn</a>
              <span class="date">January. 05, 2021</span>
            </div>
          </li>
          <li>
            <div class="numerando">1 - 2</div>
            <div class="episodiotitle">
              <a href="https://anime.example/episodes/one-piece-1x2/">The Great Swordsman</a>
              <span class="date">soon</span>
            </div>
          </li>
        </ul>
      </div>
    </div>
    <div class="se-c">
      <div class="se-q"><span class="se-t">2</span><span class="title">Season 2</span></div>
      <div class="se-a">
        <ul class="episodios">
          <li>
            <div class="numerando">2 - 1</div>
            <div class="episodiotitle">
              <a href="https://anime.example/episodes/one-piece-2x1/">Grand Line</a>
            </div>
          </li>
          <li>
            <div class="numerando">2 - Special</div>
            <div class="episodiotitle">
              <a href="https://anime.example/episodes/one-piece-2-special/">Recap</a>
            </div>
          </li>
        </ul>
      </div>
    </div>
  </div>
</body>
</html>
"""

EPISODE_PAGE_HTML = """
<html>
<body>
  <div id="player"><iframe src="https://player.example/embed/1"></iframe></div>
  <div class="pag_episodes">
    <div class="item">
      <a href="https://anime.example/episodes/one-piece-1x2/"><i class="fas fa-arrow-left"></i></a>
    </div>
    <div class="item">
      <a href="https://anime.example/anime/one-piece/" title="All episodes">
        <i class="fas fa-bars"></i><span>All episodes</span>
      </a>
    </div>
  </div>
</body>
</html>
"""

MOVIE_HTML = """
<html>
<body>
  <div class="sheader">
    <div class="poster"><img src="/img/your-name.jpg" alt=""></div>
    <div class="data">
      <h1>Your Name</h1>
      <div class="sgeneros"><a href="/genre/romance/">Romance</a></div>
    </div>
  </div>
</body>
</html>
"""

GENRE_BROWSE_HTML = """
<html>
<body>
  <div class="content">
    <article class="item tvshows">
      <div class="poster">
        <img src="/img/one-piece.jpg" alt="One Piece">
        <a href="https://anime.example/anime/one-piece/"></a>
      </div>
    </article>
  </div>
  <div class="resppages"><a href="/genre/action/page/2"><span class="fas fa-chevron-right"></span></a></div>
</body>
</html>
"""


# ============================================================================
# Fake Transport
# ============================================================================

class FakeFetcher:
    """Serves pages from memory in place of AnimeSource._get_page."""

    def __init__(self, pages: Optional[Dict[str, str]] = None):
        self.pages: Dict[str, str] = dict(pages or {})
        self.calls: List[Tuple[str, Optional[Dict[str, str]]]] = []

    @property
    def urls(self) -> List[str]:
        return [url for url, _ in self.calls]

    async def __call__(self, url: str, headers: Optional[Dict[str, str]] = None) -> FetchedPage:
        self.calls.append((url, headers))
        if url not in self.pages:
            raise NetworkError(f"HTTP 404 error for {url}", url=url, status_code=404)
        return FetchedPage(url=url, text=self.pages[url])


# ============================================================================
# Source Fixtures
# ============================================================================

@pytest.fixture
def site() -> SiteConfig:
    """English DooPlay site with default selectors."""
    return SiteConfig(name="Anime Example", base_url=BASE_URL)


@pytest.fixture
def pt_site() -> SiteConfig:
    """Brazilian Portuguese DooPlay site."""
    return SiteConfig(name="Animes Exemplo", lang="pt-BR", base_url="https://animes.example/")


@pytest.fixture
def preference_store(tmp_path: Path) -> PreferenceStore:
    """Preference store in a temporary directory."""
    return PreferenceStore(tmp_path / "config")


@pytest.fixture
def fetcher() -> FakeFetcher:
    """In-memory pages of the example site."""
    return FakeFetcher({
        BASE_URL: HOME_HTML,
        f"{BASE_URL}/episodes/page/1": LATEST_HTML,
        f"{BASE_URL}/page/1/?s=one+piece": SEARCH_HTML,
        f"{BASE_URL}/anime/one-piece/": DETAILS_HTML,
        f"{BASE_URL}/episodes/one-piece-1x1/": EPISODE_PAGE_HTML,
        f"{BASE_URL}/movies/your-name/": MOVIE_HTML,
        f"{BASE_URL}/genre/action/": GENRE_BROWSE_HTML,
    })


@pytest.fixture
def source(site: SiteConfig, preference_store: PreferenceStore, fetcher: FakeFetcher) -> DooPlaySource:
    """Source whose page fetches are served by the fake fetcher."""
    dooplay_source = DooPlaySource(site, preferences=preference_store)
    dooplay_source._get_page = fetcher
    return dooplay_source
