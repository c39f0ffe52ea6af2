"""Enumerations for ammeta domain models."""

from enum import StrEnum


class UrlKind(StrEnum):
    """Kind of Apple Music page a URL points at."""

    SONG = "song"
    ALBUM = "album"
    PLAYLIST = "playlist"


class ExtractMode(StrEnum):
    """How much of a JSON-LD entity to resolve.

    FAST returns summary fields only (album/artist, playlist title/creator).
    FULL returns complete records, fetching every playlist track page.
    """

    FAST = "fast"
    FULL = "full"
