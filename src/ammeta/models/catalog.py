"""Catalog record models: artists, tracks, albums and playlists.

All records are frozen snapshots built fresh per extraction call. Dump them
with ``model_dump(by_alias=True)`` to get the public JSON field names
(``numTracks``).
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

__all__ = [
    "Album",
    "AlbumSummary",
    "Artist",
    "Playlist",
    "PlaylistSummary",
    "Track",
]


class CatalogModel(BaseModel):
    """Base model for extracted catalog records."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Artist(CatalogModel):
    """Artist or playlist creator reference.

    ``url`` may be relative or absolute depending on the extraction path,
    and is empty when the page does not link the artist.
    """

    name: str = ""
    url: str = ""


class Track(CatalogModel):
    """A single song.

    Attributes:
        artist: Performing artist.
        title: Song title.
        duration: Length in whole seconds.
        url: Song URL. Album extraction produces ``<album url>?i=<id>``.
        album: Album name, only known when resolved from a song page.
        kind: Always ``"song"``.
    """

    artist: Artist
    title: str = ""
    duration: int = Field(default=0, ge=0)
    url: str = ""
    album: str | None = None
    kind: Literal["song"] = "song"


class _TrackList(CatalogModel):
    """Shared track list with a derived, always-consistent count."""

    title: str = ""
    description: str = ""
    tracks: list[Track] = Field(default_factory=list)
    num_tracks: int = Field(alias="numTracks")

    @model_validator(mode="before")
    @classmethod
    def _default_num_tracks(cls, data: Any) -> Any:
        if isinstance(data, dict) and not {"numTracks", "num_tracks"} & data.keys():
            return {**data, "numTracks": len(data.get("tracks") or [])}
        return data

    @model_validator(mode="after")
    def _check_num_tracks(self) -> _TrackList:
        if self.num_tracks != len(self.tracks):
            raise ValueError(
                f"numTracks ({self.num_tracks}) does not match "
                f"number of tracks ({len(self.tracks)})"
            )
        return self


class Album(_TrackList):
    """An album. Every track carries the album's single artist."""

    artist: Artist
    kind: Literal["album"] = "album"


class Playlist(_TrackList):
    """A playlist. Tracks carry their own artists."""

    creator: Artist
    kind: Literal["playlist"] = "playlist"


class AlbumSummary(CatalogModel):
    """Album name and artist read from a MusicAlbum JSON-LD block."""

    artist: Artist
    album: str


class PlaylistSummary(CatalogModel):
    """Playlist title and creator read from a MusicPlaylist JSON-LD block."""

    title: str
    creator: Artist
