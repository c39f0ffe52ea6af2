"""Structured-data extraction: build records from embedded JSON-LD.

JSON-LD is more stable than the page layout but thinner: album tracks carry
titles only, and playlist tracks carry only their URLs. Full playlist mode
therefore fetches every track page, which is correct but slow, so the
orchestrator only uses it when the cheaper paths fail.
"""

import asyncio
import logging
from collections.abc import Iterator
from typing import Any

from ammeta.client import PageFetcherProtocol
from ammeta.exceptions import NoStructuredDataFoundError
from ammeta.lib.jsonld import (
    MUSIC_ALBUM,
    MUSIC_PLAYLIST,
    MusicEntity,
    album_summary,
    find_music_entity,
    parse_artist,
    text_value,
)
from ammeta.models.catalog import (
    Album,
    AlbumSummary,
    Playlist,
    PlaylistSummary,
    Track,
)
from ammeta.models.enums import ExtractMode
from ammeta.models.results import ExtractionResult, NeedsFallback, Ok, Page
from ammeta.services.resolver import resolve_song

logger = logging.getLogger(__name__)


def _iter_track_nodes(value: Any) -> Iterator[dict[str, Any]]:
    """Yield track nodes from a list or an ItemList of ListItems."""
    if isinstance(value, dict):
        value = value.get("itemListElement", [value])
    if not isinstance(value, list):
        return
    for node in value:
        if isinstance(node, dict) and isinstance(node.get("item"), dict):
            node = node["item"]
        if isinstance(node, dict):
            yield node


def _track_nodes(data: dict[str, Any]) -> list[dict[str, Any]]:
    return list(_iter_track_nodes(data.get("track") or data.get("tracks")))


class StructuredDataExtractor:
    """Builds albums and playlists from MusicAlbum/MusicPlaylist JSON-LD.

    Implements ExtractionStrategy (full mode). Fast-mode summaries are
    available through ``extract`` and the ``summarize_*`` helpers.
    """

    name = "structured"

    def __init__(self, fetcher: PageFetcherProtocol) -> None:
        """Initialize the extractor.

        Args:
            fetcher: Fetcher used to resolve playlist tracks in full mode.
        """
        self._fetcher = fetcher

    async def extract(
        self, page: Page, mode: ExtractMode = ExtractMode.FULL
    ) -> ExtractionResult[Album | AlbumSummary | Playlist | PlaylistSummary]:
        """Extract whatever entity the page's JSON-LD describes.

        Args:
            page: Fetched page.
            mode: FAST for summaries, FULL for complete records.

        Returns:
            Ok with an AlbumSummary/Album (MusicAlbum) or a
            PlaylistSummary/Playlist (MusicPlaylist), or NeedsFallback when
            the page carries no such block.
        """
        try:
            entity = find_music_entity(page.html)
        except NoStructuredDataFoundError as e:
            logger.debug("No JSON-LD on %s", page.url)
            return NeedsFallback(e.message)
        return Ok(await self._build(entity, mode))

    async def extract_album(self, page: Page) -> ExtractionResult[Album]:
        """Extract a complete album (track titles only)."""
        return await self._extract_as(page, MUSIC_ALBUM, ExtractMode.FULL)

    async def extract_playlist(self, page: Page) -> ExtractionResult[Playlist]:
        """Extract a complete playlist, fetching every track page."""
        return await self._extract_as(page, MUSIC_PLAYLIST, ExtractMode.FULL)

    async def summarize_album(self, page: Page) -> ExtractionResult[AlbumSummary]:
        """Read only the album name and artist."""
        return await self._extract_as(page, MUSIC_ALBUM, ExtractMode.FAST)

    async def summarize_playlist(
        self, page: Page
    ) -> ExtractionResult[PlaylistSummary]:
        """Read only the playlist title and creator."""
        return await self._extract_as(page, MUSIC_PLAYLIST, ExtractMode.FAST)

    async def _extract_as(
        self, page: Page, expected_type: str, mode: ExtractMode
    ) -> ExtractionResult[Any]:
        try:
            entity = find_music_entity(page.html)
        except NoStructuredDataFoundError as e:
            logger.debug("No JSON-LD on %s", page.url)
            return NeedsFallback(e.message)
        if entity.type != expected_type:
            return NeedsFallback(
                f"JSON-LD describes a {entity.type}, expected {expected_type}"
            )
        return Ok(await self._build(entity, mode))

    async def _build(
        self, entity: MusicEntity, mode: ExtractMode
    ) -> Album | AlbumSummary | Playlist | PlaylistSummary:
        if entity.type == MUSIC_ALBUM:
            if mode is ExtractMode.FAST:
                return album_summary(entity)
            return self._build_album(entity)
        if mode is ExtractMode.FAST:
            return PlaylistSummary(
                title=text_value(entity.data.get("name")),
                creator=parse_artist(entity.data.get("author")),
            )
        return await self._build_playlist(entity)

    def _build_album(self, entity: MusicEntity) -> Album:
        data = entity.data
        artist = parse_artist(data.get("byArtist"))
        tracks = [
            Track(artist=artist, title=text_value(node.get("name")))
            for node in _track_nodes(data)
        ]
        return Album(
            artist=artist,
            title=text_value(data.get("name")),
            description=text_value(data.get("description")),
            tracks=tracks,
        )

    async def _build_playlist(self, entity: MusicEntity) -> Playlist:
        data = entity.data
        urls: list[str] = []
        for node in _track_nodes(data):
            if url := text_value(node.get("url")):
                urls.append(url)
            else:
                logger.warning(
                    "Skipping playlist track without URL: %s",
                    text_value(node.get("name")) or "Unknown",
                )

        logger.debug("Resolving %d playlist tracks from their pages", len(urls))
        # gather() returns results in argument order, not completion order
        resolved = await asyncio.gather(*(resolve_song(self._fetcher, u) for u in urls))
        tracks = [track for track in resolved if track is not None]
        if len(tracks) < len(urls):
            logger.warning(
                "Resolved %d of %d playlist tracks", len(tracks), len(urls)
            )

        return Playlist(
            creator=parse_artist(data.get("author")),
            title=text_value(data.get("name")),
            description=text_value(data.get("description")),
            tracks=tracks,
        )
