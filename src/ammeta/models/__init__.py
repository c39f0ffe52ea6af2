"""Data models for ammeta.

Public API:
    Artist, Track, Album, Playlist - Extracted catalog records
    AlbumSummary, PlaylistSummary - JSON-LD summaries (fast mode)
    UrlKind - URL classification (SONG/ALBUM/PLAYLIST)
    ExtractMode - JSON-LD resolution depth (FAST/FULL)

Internal (not exported):
    results.py - Result values exchanged between fetcher, strategies
                 and orchestrator
"""

from ammeta.models.catalog import (
    Album,
    AlbumSummary,
    Artist,
    Playlist,
    PlaylistSummary,
    Track,
)
from ammeta.models.enums import ExtractMode, UrlKind

__all__ = [
    "Album",
    "AlbumSummary",
    "Artist",
    "ExtractMode",
    "Playlist",
    "PlaylistSummary",
    "Track",
    "UrlKind",
]
