"""DOM extraction: scrape album and playlist pages by tag and class.

Layout reference (Apple Music web player, server-rendered markup)::

    div.product-page-header
        h1.product-name
        div.product-creator > a.dt-link-to
        div.product-page-header__metadata--notes
    div.songs-list-row                       (one per track)
        div.songs-list__col--song   div.songs-list-row__song-name
        div.songs-list__col--artist a.songs-list-row__link
        div.songs-list__col--album  a.songs-list-row__link
        div.songs-list__col--time   time, button.preview-button[data-metrics-click]

A row that lacks one of its cells still produces a track with empty/zero
defaults. Only a page with no rows at all is handed to another strategy.
"""

import json
import logging

from bs4 import BeautifulSoup, Tag

from ammeta.exceptions import MalformedDurationError
from ammeta.models.catalog import Album, Artist, Playlist, Track
from ammeta.models.results import ExtractionResult, Fatal, NeedsFallback, Ok, Page
from ammeta.utils.duration import parse_duration
from ammeta.utils.url import absolute_url

logger = logging.getLogger(__name__)

TRACK_ROW = "div.songs-list-row"
ROW_TITLE = "div.songs-list__col--song div.songs-list-row__song-name"
ROW_ARTIST = "div.songs-list__col--artist a.songs-list-row__link"
ROW_ALBUM = "div.songs-list__col--album a.songs-list-row__link"
ROW_TIME = "div.songs-list__col--time time"
ROW_PREVIEW = "div.songs-list__col--time button.preview-button"

HEADER = "div.product-page-header"
HEADER_TITLE = "h1.product-name"
HEADER_CREATOR = "div.product-creator a.dt-link-to"
HEADER_NOTES = "div.product-page-header__metadata--notes"

CANONICAL_URL = "meta[property='og:url']"

# Used when a row's preview button carries no usable click metrics
DEFAULT_TARGET_ID = "0"


def _select_text(node: Tag | None, selector: str) -> str:
    if node is None:
        return ""
    element = node.select_one(selector)
    return element.get_text().strip() if element else ""


def _select_attr(node: Tag | None, selector: str, attr: str) -> str:
    if node is None:
        return ""
    element = node.select_one(selector)
    value = element.get(attr) if element else None
    return value.strip() if isinstance(value, str) else ""


def _row_duration(row: Tag) -> int:
    """Parse the row's duration cell; a missing cell counts as zero."""
    text = _select_text(row, ROW_TIME)
    if not text:
        return 0
    return parse_duration(text)


def _row_target_id(row: Tag) -> str:
    """Decode ``targetId`` from the preview button's click metrics JSON."""
    raw = _select_attr(row, ROW_PREVIEW, "data-metrics-click")
    if not raw:
        return DEFAULT_TARGET_ID
    try:
        metrics = json.loads(raw)
    except json.JSONDecodeError:
        logger.debug("Malformed click metrics on track row: %r", raw)
        return DEFAULT_TARGET_ID
    target_id = metrics.get("targetId") if isinstance(metrics, dict) else None
    if isinstance(target_id, bool) or not isinstance(target_id, (int, str)):
        return DEFAULT_TARGET_ID
    return str(target_id).strip() or DEFAULT_TARGET_ID


def _header_creator(header: Tag | None) -> tuple[str, str]:
    """Return the header creator link's text and raw href."""
    return (
        _select_text(header, HEADER_CREATOR),
        _select_attr(header, HEADER_CREATOR, "href"),
    )


class DomExtractor:
    """Scrapes track rows and page headers directly from markup.

    Implements ExtractionStrategy.
    """

    name = "dom"

    async def extract_album(self, page: Page) -> ExtractionResult[Album]:
        """Extract an album from a fetched page."""
        return self.parse_album(page.html)

    async def extract_playlist(self, page: Page) -> ExtractionResult[Playlist]:
        """Extract a playlist from a fetched page."""
        return self.parse_playlist(page.html)

    def parse_album(self, html: str) -> ExtractionResult[Album]:
        """Parse album markup.

        The header artist is copied onto every track. Track URLs are the
        page's canonical URL plus ``?i=<targetId>``; rows without click
        metrics get ``targetId`` 0, and a page without a canonical URL gives
        empty track URLs.

        Args:
            html: Album page markup.

        Returns:
            Ok with the Album, NeedsFallback if the page has no track rows,
            or Fatal if a duration cell cannot be parsed.
        """
        soup = BeautifulSoup(html, "html.parser")
        rows = soup.select(TRACK_ROW)
        if not rows:
            return NeedsFallback("no track rows found in album markup")

        header = soup.select_one(HEADER)
        name, href = _header_creator(header)
        artist = Artist(name=name, url=href)
        album_url = _select_attr(soup, CANONICAL_URL, "content")

        try:
            tracks = [
                Track(
                    artist=artist,
                    title=_select_text(row, ROW_TITLE),
                    duration=_row_duration(row),
                    url=f"{album_url}?i={_row_target_id(row)}" if album_url else "",
                )
                for row in rows
            ]
        except MalformedDurationError as e:
            logger.warning("Album markup has an unparseable duration: %s", e)
            return Fatal(e)

        logger.debug("Scraped %d album tracks", len(tracks))
        return Ok(
            Album(
                artist=artist,
                title=_select_text(header, HEADER_TITLE),
                description=_select_text(header, HEADER_NOTES),
                tracks=tracks,
            )
        )

    def parse_playlist(self, html: str) -> ExtractionResult[Playlist]:
        """Parse playlist markup.

        Each row supplies its own artist and links to its album; that link
        becomes the track URL. The creator link is made absolute.

        Args:
            html: Playlist page markup.

        Returns:
            Ok with the Playlist, NeedsFallback if the page has no track
            rows, or Fatal if a duration cell cannot be parsed.
        """
        soup = BeautifulSoup(html, "html.parser")
        rows = soup.select(TRACK_ROW)
        if not rows:
            return NeedsFallback("no track rows found in playlist markup")

        try:
            tracks = [
                Track(
                    artist=Artist(
                        name=_select_text(row, ROW_ARTIST),
                        url=_select_attr(row, ROW_ARTIST, "href"),
                    ),
                    title=_select_text(row, ROW_TITLE),
                    duration=_row_duration(row),
                    url=_select_attr(row, ROW_ALBUM, "href"),
                )
                for row in rows
            ]
        except MalformedDurationError as e:
            logger.warning("Playlist markup has an unparseable duration: %s", e)
            return Fatal(e)

        header = soup.select_one(HEADER)
        name, href = _header_creator(header)
        logger.debug("Scraped %d playlist tracks", len(tracks))
        return Ok(
            Playlist(
                creator=Artist(name=name, url=absolute_url(href)),
                title=_select_text(header, HEADER_TITLE),
                description=_select_text(header, HEADER_NOTES),
                tracks=tracks,
            )
        )
