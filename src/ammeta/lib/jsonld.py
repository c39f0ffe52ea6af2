"""JSON-LD block discovery for catalog pages.

Apple Music embeds schema.org metadata describing the page's subject in
``<script type="application/ld+json">`` blocks. This module finds the first
MusicAlbum or MusicPlaylist node and converts schema.org fragments into
catalog models.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from bs4 import BeautifulSoup

from ammeta.exceptions import NoStructuredDataFoundError
from ammeta.models.catalog import AlbumSummary, Artist

logger = logging.getLogger(__name__)

MUSIC_ALBUM = "MusicAlbum"
MUSIC_PLAYLIST = "MusicPlaylist"
_MUSIC_ENTITY_TYPES = (MUSIC_ALBUM, MUSIC_PLAYLIST)


@dataclass(frozen=True)
class MusicEntity:
    """A MusicAlbum or MusicPlaylist JSON-LD node."""

    type: str
    data: dict[str, Any]


def iter_json_ld(html: str) -> Iterator[Any]:
    """Yield the decoded body of every JSON-LD block in document order.

    Blocks that are not valid JSON are skipped.
    """
    soup = BeautifulSoup(html, "html.parser")
    for script in soup.find_all("script", attrs={"type": "application/ld+json"}):
        text = script.get_text()
        if not text.strip():
            continue
        try:
            yield json.loads(text)
        except json.JSONDecodeError as e:
            logger.debug("Skipping malformed JSON-LD block: %s", e)


def _iter_nodes(data: Any) -> Iterator[dict[str, Any]]:
    """Flatten top-level arrays and ``@graph`` wrappers into nodes."""
    if isinstance(data, list):
        for item in data:
            yield from _iter_nodes(item)
    elif isinstance(data, dict):
        if "@graph" in data:
            yield from _iter_nodes(data["@graph"])
        else:
            yield data


def _music_type(node: dict[str, Any]) -> str | None:
    declared = node.get("@type")
    types = declared if isinstance(declared, list) else [declared]
    for entity_type in _MUSIC_ENTITY_TYPES:
        if entity_type in types:
            return entity_type
    return None


def find_music_entity(html: str) -> MusicEntity:
    """Find the first MusicAlbum or MusicPlaylist node on a page.

    No merging happens across blocks; the first match wins.

    Args:
        html: Page markup.

    Returns:
        The matching node and its type.

    Raises:
        NoStructuredDataFoundError: If no block describes an album or playlist.
    """
    for data in iter_json_ld(html):
        for node in _iter_nodes(data):
            if entity_type := _music_type(node):
                logger.debug("Found %s JSON-LD block", entity_type)
                return MusicEntity(type=entity_type, data=node)
    raise NoStructuredDataFoundError("No MusicAlbum or MusicPlaylist JSON-LD found")


def text_value(value: Any) -> str:
    """Return a JSON-LD scalar as a stripped string ("" for missing)."""
    if value is None or isinstance(value, (dict, list)):
        return ""
    return str(value).strip()


def parse_artist(value: Any) -> Artist:
    """Convert a schema.org person/group reference into an Artist.

    ``byArtist`` and ``author`` may be a single object, a list of objects or
    a bare name. Multiple artists are joined with ", " and the first URL is
    kept.
    """
    if isinstance(value, str):
        return Artist(name=value.strip())
    refs = value if isinstance(value, list) else [value]
    refs = [r for r in refs if isinstance(r, dict)]
    if not refs:
        return Artist()
    names = [name for r in refs if (name := text_value(r.get("name")))]
    return Artist(name=", ".join(names), url=text_value(refs[0].get("url")))


def album_summary(entity: MusicEntity) -> AlbumSummary:
    """Build the album/artist summary of a MusicAlbum node."""
    return AlbumSummary(
        artist=parse_artist(entity.data.get("byArtist")),
        album=text_value(entity.data.get("name")),
    )
