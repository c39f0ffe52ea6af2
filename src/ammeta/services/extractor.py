"""Metadata extraction service."""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

from ammeta.client import PageFetcherProtocol
from ammeta.config import ExtractOptions
from ammeta.models.catalog import Album, Artist, Playlist, Track
from ammeta.models.enums import ExtractMode, UrlKind
from ammeta.models.results import (
    ExtractionResult,
    Fatal,
    FetchFailure,
    NeedsFallback,
    Ok,
    Page,
)
from ammeta.services.dom import DomExtractor
from ammeta.services.protocols import ExtractionStrategy
from ammeta.services.resolver import resolve_track, track_from_song_page
from ammeta.services.structured import StructuredDataExtractor
from ammeta.utils.url import classify_url, extract_song_id

logger = logging.getLogger(__name__)

T = TypeVar("T")

# A named extraction step, tried in order until one returns Ok
Attempt = tuple[str, Callable[[], Awaitable[ExtractionResult[T]]]]

CatalogRecord = Album | Playlist | Track


class MetadataExtractorService:
    """Service for extracting metadata from Apple Music pages.

    Pipeline Overview:
    ==================
    1. extract() - Main entry point: classifies the URL, fetches the page
                   and dispatches on the URL kind
    2. _extract_playlist() - DOM tracks + JSON-LD title/creator, falling
                   back to full JSON-LD (one fetch per track), then to
                   DOM alone
    3. _extract_album() - DOM album, falling back to JSON-LD when the page
                   has no track rows
    4. _extract_song() - Scrapes the album the song page redirects to and
                   picks the row whose URL carries the song's ``?i=`` id
    """

    def __init__(
        self,
        fetcher: PageFetcherProtocol,
        *,
        dom: ExtractionStrategy | None = None,
        structured: StructuredDataExtractor | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            fetcher: Page fetcher used for the requested page and, in full
                playlist mode, for every track page.
            dom: Optional markup strategy tried before JSON-LD. Defaults to
                DomExtractor.
            structured: Optional JSON-LD extraction strategy.
        """
        self._fetcher = fetcher
        self._dom = dom or DomExtractor()
        self._structured = structured or StructuredDataExtractor(fetcher)

    # ============================================================================
    # PUBLIC API
    # ============================================================================

    async def extract(
        self, url: str, options: ExtractOptions | None = None
    ) -> CatalogRecord | None:
        """Extract metadata from an Apple Music song, album or playlist URL.

        URL types supported:
        - Song: https://music.apple.com/us/album/<slug>/<id>?i=<song id>
        - Album: https://music.apple.com/us/album/<slug>/<id>
        - Playlist: https://music.apple.com/us/playlist/<slug>/pl.<id>

        Args:
            url: Apple Music URL.
            options: Request-scoped options. Uses defaults if not provided.

        Returns:
            A Track, Album or Playlist, or None when the page could not be
            fetched, no strategy could read it, or the song is not on the
            album it redirects to.

        Raises:
            InvalidUrlKindError: If the URL is not an Apple Music
                song, album or playlist URL.
            MalformedDurationError: If an album page lists a duration that
                cannot be parsed.
        """
        options = options or ExtractOptions()
        kind = classify_url(url)
        logger.debug("Extracting %s metadata: %s", kind.value, url)

        page = await self._fetcher.fetch(url)
        if isinstance(page, FetchFailure):
            self._note(options, "HTTP request failed for %s: %s", url, page.reason)
            return None

        match kind:
            case UrlKind.PLAYLIST:
                return await self._extract_playlist(page, options)
            case UrlKind.ALBUM:
                return await self._extract_album(page, options)
            case UrlKind.SONG:
                return await self._extract_song(url, page, options)

    async def extract_many(
        self, urls: Sequence[str], options: ExtractOptions | None = None
    ) -> list[CatalogRecord | None]:
        """Run independent extractions concurrently.

        Results are returned in the order of ``urls``.

        Raises:
            InvalidUrlKindError: If any URL is not a supported Apple Music URL.
        """
        for url in urls:
            classify_url(url)
        return list(await asyncio.gather(*(self.extract(u, options) for u in urls)))

    # ============================================================================
    # PER-KIND PIPELINES
    # ============================================================================

    async def _extract_playlist(
        self, page: Page, options: ExtractOptions
    ) -> Playlist | None:
        attempts: list[Attempt[Playlist]] = []
        if options.mode is ExtractMode.FAST:
            attempts.append(("fast playlist", lambda: self._fast_playlist(page)))
        attempts.append(
            ("full JSON-LD playlist", lambda: self._structured.extract_playlist(page))
        )
        attempts.append(("DOM playlist", lambda: self._dom.extract_playlist(page)))
        return await self._first_ok(attempts, options, raise_fatal=False)

    async def _fast_playlist(self, page: Page) -> ExtractionResult[Playlist]:
        """Combine DOM track rows with the JSON-LD title and creator."""
        scraped = await self._dom.extract_playlist(page)
        if not isinstance(scraped, Ok):
            return scraped
        summary = await self._structured.summarize_playlist(page)
        if not isinstance(summary, Ok):
            return summary

        playlist, info = scraped.value, summary.value
        creator = info.creator
        if not creator.url:
            creator = Artist(
                name=creator.name or playlist.creator.name,
                url=playlist.creator.url,
            )
        return Ok(
            Playlist(
                creator=creator,
                title=info.title or playlist.title,
                description=playlist.description,
                tracks=playlist.tracks,
            )
        )

    async def _extract_album(self, page: Page, options: ExtractOptions) -> Album | None:
        attempts: list[Attempt[Album]] = [
            ("DOM album", lambda: self._dom.extract_album(page)),
            ("JSON-LD album", lambda: self._structured.extract_album(page)),
        ]
        return await self._first_ok(attempts, options, raise_fatal=True)

    async def _extract_song(
        self, url: str, page: Page, options: ExtractOptions
    ) -> Track | None:
        song_id = extract_song_id(url)
        if song_id is None:
            self._note(options, "Failed to extract song id from %s", url)
            return None

        # Song pages redirect to their album, so scrape the album rows
        result = await self._dom.extract_album(page)
        if isinstance(result, Fatal):
            raise result.error
        if isinstance(result, NeedsFallback):
            self._note(
                options, "No album rows for song (%s); using JSON-LD", result.reason
            )
            return track_from_song_page(url, page.html)

        track = resolve_track(result.value, song_id)
        if track is None:
            self._note(
                options, "Track %d not found in album %s", song_id, result.value.title
            )
        return track

    # ============================================================================
    # FALLBACK COMPOSITION
    # ============================================================================

    async def _first_ok(
        self,
        attempts: Sequence[Attempt[T]],
        options: ExtractOptions,
        *,
        raise_fatal: bool,
    ) -> T | None:
        """Run extraction attempts in order and return the first success.

        Args:
            attempts: Named attempts, cheapest first.
            options: Request options (controls diagnostic log level).
            raise_fatal: Raise a Fatal error instead of moving on.

        Returns:
            The first successful value, or None if every attempt fell through.
        """
        for name, attempt in attempts:
            match await attempt():
                case Ok(value=value):
                    logger.debug("%s succeeded", name)
                    return value
                case Fatal(error=error):
                    if raise_fatal:
                        raise error
                    self._note(options, "%s failed: %s", name, error.message)
                case NeedsFallback(reason=reason):
                    self._note(options, "%s unavailable: %s", name, reason)
        self._note(options, "No extraction strategy could read this page")
        return None

    def _note(self, options: ExtractOptions, msg: str, *args: object) -> None:
        """Log an extraction diagnostic, at INFO when verbose was requested."""
        log = logger.info if options.verbose else logger.debug
        log(msg, *args)
