"""Extraction strategy protocol.

DOM scraping and JSON-LD parsing are interchangeable ways to turn a page
into an Album or Playlist. The orchestrator composes them in an explicit
fallback order instead of branching on page details itself.
"""

from typing import Protocol

from ammeta.models.catalog import Album, Playlist
from ammeta.models.results import ExtractionResult, Page


class ExtractionStrategy(Protocol):
    """Produces catalog records from a fetched page."""

    name: str

    async def extract_album(self, page: Page) -> ExtractionResult[Album]:
        """Extract a complete album."""
        ...

    async def extract_playlist(self, page: Page) -> ExtractionResult[Playlist]:
        """Extract a complete playlist."""
        ...
