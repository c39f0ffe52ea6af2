"""URL classification utilities for Apple Music catalog pages."""

import re
from urllib.parse import unquote, urlparse

from ammeta.exceptions import InvalidUrlKindError
from ammeta.models.enums import UrlKind

APPLE_MUSIC_ORIGIN = "https://music.apple.com"

# Song links are album links with a track index: /<cc>/album/<slug>/<id>?i=<id>
SONG_PATTERN = re.compile(
    r"https?://music\.apple\.com/.+?/album/.+?/.+?\?i=([0-9]+)(?:$|[&#])"
)
PLAYLIST_PATTERN = re.compile(r"https?://music\.apple\.com/.+?/playlist/")
ALBUM_PATTERN = re.compile(r"https?://music\.apple\.com/.+?/album/")

# Maximum URL length to prevent potential abuse (standard browser limit)
MAX_URL_LENGTH = 2048


def classify_url(url: str) -> UrlKind:
    """Classify an Apple Music URL as a song, playlist or album page.

    Song is checked first because song URLs are album URLs plus ``?i=``.
    A non-numeric ``?i=`` value is not a song and falls through to album.

    Args:
        url: Absolute Apple Music URL.

    Returns:
        The URL kind.

    Raises:
        InvalidUrlKindError: If the URL matches no known page shape.
    """
    if url and len(url) <= MAX_URL_LENGTH:
        url = url.strip()
        if SONG_PATTERN.match(url):
            return UrlKind.SONG
        if PLAYLIST_PATTERN.match(url):
            return UrlKind.PLAYLIST
        if ALBUM_PATTERN.match(url):
            return UrlKind.ALBUM
    raise InvalidUrlKindError(f"Apple Music link is invalid: {url}")


def extract_song_id(url: str) -> int | None:
    """Extract the numeric track id from a song URL's ``?i=`` parameter.

    Args:
        url: Apple Music song URL.

    Returns:
        The song id, or None if the URL is not a song URL.
    """
    if not url or len(url) > MAX_URL_LENGTH:
        return None
    if match := SONG_PATTERN.match(url.strip()):
        return int(match.group(1))
    return None


def title_from_url(url: str) -> str:
    """Read a title from the slug segment of a catalog URL.

    ``https://music.apple.com/us/song/blinding-lights/1499378615`` yields
    ``blinding-lights``. The slug is URL-decoded but otherwise untouched.

    Args:
        url: Apple Music song, album or playlist URL.

    Returns:
        The slug, or an empty string when the path is too short.
    """
    segments = [s for s in urlparse(url).path.split("/") if s]
    if len(segments) < 3:
        return ""
    return unquote(segments[2])


def absolute_url(href: str | None) -> str:
    """Resolve a root-relative catalog link against music.apple.com.

    Returns an empty string for missing links. Absolute links pass through.
    """
    href = (href or "").strip()
    if not href:
        return ""
    if href.startswith("//"):
        return "https:" + href
    if href.startswith("/"):
        return APPLE_MUSIC_ORIGIN + href
    return href


def is_supported_url(url: str) -> bool:
    """Check if URL is a supported Apple Music song, album or playlist.

    Args:
        url: Any URL.

    Returns:
        True if ``classify_url`` would accept it, False otherwise.
    """
    try:
        classify_url(url)
    except InvalidUrlKindError:
        return False
    return True
