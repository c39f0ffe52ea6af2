"""Test fixtures and configuration."""

import json
from typing import Any

import pytest
from ammeta.models.results import FetchFailure, Page

ALBUM_URL = "https://music.apple.com/us/album/after-hours/1499378108"
PLAYLIST_URL = (
    "https://music.apple.com/us/playlist/office-dj/pl.f820ed7063f9447f8751abf885525698"
)

ALBUM_ROWS: list[dict[str, Any]] = [
    {"title": "Alone Again", "time": "4:10", "target_id": 1499378612},
    {"title": "Too Late", "time": "3:59", "target_id": 1499378613},
    {"title": "Blinding Lights", "time": "3:20", "target_id": 1499378615},
]

PLAYLIST_ROWS: list[dict[str, Any]] = [
    {
        "title": "Levitating",
        "artist": "Dua Lipa",
        "artist_href": "/us/artist/dua-lipa/1031397873",
        "album_href": "https://music.apple.com/us/album/future-nostalgia/1538003494?i=1538003843",
        "time": "3:23",
    },
    {
        "title": "Get Lucky",
        "artist": "Daft Punk",
        "artist_href": "/us/artist/daft-punk/5468295",
        "album_href": "https://music.apple.com/us/album/random-access-memories/617154241?i=617154366",
        "time": "6:09",
    },
]


def json_ld_script(data: Any) -> str:
    """Render a JSON-LD script block."""
    return f'<script type="application/ld+json">{json.dumps(data)}</script>'


def header_html(title: str, creator: str, creator_href: str | None, notes: str) -> str:
    """Render the product page header."""
    link = (
        f'<a class="dt-link-to" href="{creator_href}">{creator}</a>'
        if creator_href is not None
        else f'<a class="dt-link-to">{creator}</a>'
    )
    return (
        '<div class="product-page-header">'
        f'<h1 class="product-name">\n  {title}\n</h1>'
        f'<div class="product-creator">{link}</div>'
        f'<div class="product-page-header__metadata--notes"> {notes} </div>'
        "</div>"
    )


def album_row_html(row: dict[str, Any]) -> str:
    """Render one album track row.

    ``target_id`` None omits the preview button; ``metrics`` overrides the
    raw data-metrics-click attribute value.
    """
    if "metrics" in row:
        button = f"<button class=\"preview-button\" data-metrics-click='{row['metrics']}'></button>"
    elif row.get("target_id") is not None:
        metrics = json.dumps({"actionType": "play", "targetId": row["target_id"]})
        button = f"<button class=\"preview-button\" data-metrics-click='{metrics}'></button>"
    else:
        button = ""
    time = f"<time>{row['time']}</time>" if row.get("time") is not None else ""
    return (
        '<div class="songs-list-row">'
        '<div class="songs-list__col--song">'
        f'<div class="songs-list-row__song-name">{row["title"]}</div>'
        "</div>"
        f'<div class="songs-list__col--time">{time}{button}</div>'
        "</div>"
    )


def playlist_row_html(row: dict[str, Any]) -> str:
    """Render one playlist track row. Missing keys omit that cell."""
    cells = [
        '<div class="songs-list__col--song">'
        f'<div class="songs-list-row__song-name">{row["title"]}</div>'
        "</div>"
    ]
    if "artist" in row:
        cells.append(
            '<div class="songs-list__col--artist">'
            f'<a class="songs-list-row__link" href="{row["artist_href"]}">{row["artist"]}</a>'
            "</div>"
        )
    if "album_href" in row:
        cells.append(
            '<div class="songs-list__col--album">'
            f'<a class="songs-list-row__link" href="{row["album_href"]}">Album</a>'
            "</div>"
        )
    if "time" in row:
        cells.append(
            f'<div class="songs-list__col--time"><time> {row["time"]} </time></div>'
        )
    return f'<div class="songs-list-row">{"".join(cells)}</div>'


def album_page(
    rows: list[dict[str, Any]] | None = None,
    *,
    title: str = "After Hours",
    artist: str = "The Weeknd",
    artist_href: str | None = "https://music.apple.com/us/artist/the-weeknd/479756766",
    og_url: str | None = ALBUM_URL,
    notes: str = "The fourth studio album.",
    json_ld: Any = None,
) -> str:
    """Render an album page."""
    rows = ALBUM_ROWS if rows is None else rows
    meta = f'<meta property="og:url" content="{og_url}">' if og_url else ""
    scripts = json_ld_script(json_ld) if json_ld is not None else ""
    return (
        f"<html><head>{meta}{scripts}</head><body>"
        f"{header_html(title, artist, artist_href, notes)}"
        f'<div class="songs-list">{"".join(album_row_html(r) for r in rows)}</div>'
        "</body></html>"
    )


def playlist_page(
    rows: list[dict[str, Any]] | None = None,
    *,
    title: str = "Office DJ",
    creator: str = "Apple Music Pop",
    creator_href: str | None = "/us/curator/apple-music-pop/976439548",
    notes: str = "Background music for the workday.",
    json_ld: Any = None,
) -> str:
    """Render a playlist page."""
    rows = PLAYLIST_ROWS if rows is None else rows
    scripts = json_ld_script(json_ld) if json_ld is not None else ""
    return (
        f"<html><head>{scripts}</head><body>"
        f"{header_html(title, creator, creator_href, notes)}"
        f'<div class="songs-list">{"".join(playlist_row_html(r) for r in rows)}</div>'
        "</body></html>"
    )


def music_album_ld(
    name: str = "After Hours",
    artist: str = "The Weeknd",
    tracks: list[str] | None = None,
) -> dict[str, Any]:
    """Build a MusicAlbum JSON-LD node."""
    return {
        "@context": "http://schema.org",
        "@type": "MusicAlbum",
        "name": name,
        "description": "The fourth studio album.",
        "byArtist": [
            {
                "@type": "MusicGroup",
                "name": artist,
                "url": "https://music.apple.com/us/artist/the-weeknd/479756766",
            }
        ],
        "tracks": [
            {"@type": "MusicRecording", "name": t, "duration": "PT3M20S"}
            for t in (tracks if tracks is not None else ["Alone Again", "Too Late"])
        ],
    }


def music_playlist_ld(
    track_urls: list[str],
    name: str = "Office DJ",
    author: str = "Apple Music Pop",
) -> dict[str, Any]:
    """Build a MusicPlaylist JSON-LD node."""
    return {
        "@context": "http://schema.org",
        "@type": "MusicPlaylist",
        "name": name,
        "description": "Background music for the workday.",
        "author": {
            "@type": "Person",
            "name": author,
            "url": "https://music.apple.com/us/curator/apple-music-pop/976439548",
        },
        "track": [
            {"@type": "MusicRecording", "name": f"Track {i}", "url": url}
            for i, url in enumerate(track_urls, 1)
        ],
    }


def song_page(album: str, artist: str) -> str:
    """Render a minimal song page carrying only MusicAlbum JSON-LD."""
    return (
        "<html><head>"
        f"{json_ld_script(music_album_ld(name=album, artist=artist))}"
        "</head><body></body></html>"
    )


def make_page(url: str, html: str) -> Page:
    """Wrap markup in a Page as if fetched from url."""
    return Page(url=url, final_url=url, status=200, html=html)


class MockPageFetcher:
    """Mock page fetcher for testing.

    Serves markup from a URL -> html mapping. URLs not in the mapping yield
    a FetchFailure.
    """

    def __init__(self, pages: dict[str, str] | None = None) -> None:
        self._pages = pages or {}
        self.fetch_calls: list[str] = []

    async def fetch(self, url: str) -> Page | FetchFailure:
        """Mock fetch."""
        self.fetch_calls.append(url)
        if url not in self._pages:
            return FetchFailure(url=url, reason="HTTP 404", attempts=1)
        return make_page(url, self._pages[url])


@pytest.fixture
def album_html() -> str:
    """Album page with three tracks and a canonical URL."""
    return album_page()


@pytest.fixture
def playlist_html() -> str:
    """Playlist page with two rows and no JSON-LD."""
    return playlist_page()


@pytest.fixture
def song_urls() -> list[str]:
    """Song URLs referenced by the sample playlist JSON-LD."""
    return [
        "https://music.apple.com/us/song/levitating/1538003843",
        "https://music.apple.com/us/song/get-lucky/617154366",
    ]


@pytest.fixture
def song_pages(song_urls: list[str]) -> dict[str, str]:
    """Song pages for each sample song URL."""
    return {
        song_urls[0]: song_page("Future Nostalgia", "Dua Lipa"),
        song_urls[1]: song_page("Random Access Memories", "Daft Punk"),
    }


@pytest.fixture
def mock_fetcher() -> MockPageFetcher:
    """Fetcher that fails every request."""
    return MockPageFetcher()
