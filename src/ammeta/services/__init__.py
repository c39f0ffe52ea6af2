"""Business logic services for ammeta.

Public API:
    MetadataExtractorService - Classify, fetch and extract Apple Music pages

Strategies (composed by MetadataExtractorService):
    DomExtractor - Scrapes track rows and headers from markup
    StructuredDataExtractor - Reads embedded JSON-LD

Protocols (for dependency injection):
    ExtractionStrategy - Produces albums/playlists from a fetched page

Track resolution:
    resolve_track - Find a ``?i=<id>`` track inside an album
    resolve_song - Resolve a song from its own page
"""

from ammeta.services.dom import DomExtractor
from ammeta.services.extractor import MetadataExtractorService
from ammeta.services.protocols import ExtractionStrategy
from ammeta.services.resolver import resolve_song, resolve_track
from ammeta.services.structured import StructuredDataExtractor

__all__ = [
    "DomExtractor",
    "ExtractionStrategy",
    "MetadataExtractorService",
    "StructuredDataExtractor",
    "resolve_song",
    "resolve_track",
]
