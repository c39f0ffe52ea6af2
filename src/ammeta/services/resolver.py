"""Track resolution: find a song inside an album, or from its own page."""

import logging
import re

from ammeta.client import PageFetcherProtocol
from ammeta.exceptions import NoStructuredDataFoundError
from ammeta.lib.jsonld import MUSIC_ALBUM, album_summary, find_music_entity
from ammeta.models.catalog import Album, Track
from ammeta.models.results import FetchFailure
from ammeta.utils.url import title_from_url

logger = logging.getLogger(__name__)


def resolve_track(album: Album, song_id: int) -> Track | None:
    """Find the album track whose URL carries ``?i=<song_id>``.

    Unlike a plain substring check, the id must end at a non-digit:
    ``?i=22`` does not match a URL ending in ``?i=222``.

    Args:
        album: Album whose track URLs encode numeric ids.
        song_id: Id from the requested song URL.

    Returns:
        The first matching track, or None when the song is not on the album.
    """
    pattern = re.compile(rf"\?i={song_id}(?![0-9])")
    for track in album.tracks:
        if pattern.search(track.url):
            return track
    return None


def track_from_song_page(url: str, html: str) -> Track | None:
    """Build a track from a song page's MusicAlbum JSON-LD and URL slug.

    Artist and album come from the JSON-LD summary; the title comes from
    the URL slug. Duration is not available this way and is left at 0.

    Args:
        url: Song URL the page was fetched from.
        html: Song page markup.

    Returns:
        The Track, or None if the page carries no album metadata.
    """
    try:
        entity = find_music_entity(html)
    except NoStructuredDataFoundError:
        logger.warning("Song page %s has no album metadata", url)
        return None
    if entity.type != MUSIC_ALBUM:
        logger.warning("Song page %s describes a %s, not an album", url, entity.type)
        return None

    summary = album_summary(entity)
    return Track(
        artist=summary.artist,
        title=title_from_url(url),
        url=url,
        album=summary.album,
    )


async def resolve_song(fetcher: PageFetcherProtocol, url: str) -> Track | None:
    """Resolve a song from its own page rather than from album markup.

    Args:
        fetcher: Page fetcher.
        url: Song URL (``/song/<slug>/<id>`` or ``/album/<slug>/<id>?i=<id>``).

    Returns:
        The Track, or None if the page could not be fetched or carries no
        album metadata.
    """
    result = await fetcher.fetch(url)
    if isinstance(result, FetchFailure):
        logger.warning("Could not fetch song page %s: %s", url, result.reason)
        return None
    return track_from_song_page(url, result.html)
