"""ammeta - Extract metadata from Apple Music pages.

This library extracts structured metadata (artists, titles, durations and
canonical URLs) from Apple Music song, album and playlist web pages. Pages
are read two ways, by scraping their markup and by parsing their embedded
JSON-LD, with automatic fallback from one to the other.

Designed for use as a library in applications (e.g., FastAPI) with
a CLI for debugging and development.

Examples:
    Extract an album:
    ```python
    import asyncio
    from ammeta import create_extractor

    extractor = create_extractor()
    album = asyncio.run(extractor.extract("https://music.apple.com/us/album/..."))
    for track in album.tracks:
        print(f"{track.artist.name} - {track.title} ({track.duration}s)")
    ```

    Force full JSON-LD resolution of a playlist:
    ```python
    from ammeta import ExtractMode, ExtractOptions

    options = ExtractOptions(mode=ExtractMode.FULL, verbose=True)
    playlist = await extractor.extract(playlist_url, options)
    ```
"""

# Internal imports (not exported)
from ammeta.client import PageFetcher as _PageFetcher
from ammeta.config import ExtractOptions, FetchConfig
from ammeta.exceptions import (
    AMMetaError,
    InvalidUrlKindError,
    MalformedDurationError,
    NoStructuredDataFoundError,
)
from ammeta.models import (
    Album,
    AlbumSummary,
    Artist,
    ExtractMode,
    Playlist,
    PlaylistSummary,
    Track,
    UrlKind,
)
from ammeta.models.results import FetchFailure, Page
from ammeta.services import MetadataExtractorService
from ammeta.utils.duration import parse_duration
from ammeta.utils.url import classify_url, extract_song_id, is_supported_url


def create_extractor(config: FetchConfig | None = None) -> MetadataExtractorService:
    """Create a configured metadata extractor.

    This is the recommended way to create an extractor for library usage.
    It handles fetcher instantiation internally.

    Args:
        config: Optional fetch configuration. Uses defaults if not provided.

    Returns:
        A configured MetadataExtractorService instance.

    Examples:
        Basic usage:
        ```python
        extractor = create_extractor()
        record = await extractor.extract(url)
        ```

        With fewer retries and a shorter timeout:
        ```python
        config = FetchConfig(max_attempts=2, timeout=10.0)
        extractor = create_extractor(config)
        ```
    """
    return MetadataExtractorService(_PageFetcher(config))


__all__ = [
    "AMMetaError",
    "Album",
    "AlbumSummary",
    "Artist",
    "ExtractMode",
    "ExtractOptions",
    "FetchConfig",
    "FetchFailure",
    "InvalidUrlKindError",
    "MalformedDurationError",
    "MetadataExtractorService",
    "NoStructuredDataFoundError",
    "Page",
    "Playlist",
    "PlaylistSummary",
    "Track",
    "UrlKind",
    "classify_url",
    "create_extractor",
    "extract_song_id",
    "is_supported_url",
    "parse_duration",
]
