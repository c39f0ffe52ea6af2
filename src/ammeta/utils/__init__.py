"""Utility functions for ammeta.

Available via `from ammeta.utils import ...` for power users.
Not re-exported at the top-level `ammeta` package.
"""

from ammeta.utils.duration import parse_duration
from ammeta.utils.url import (
    absolute_url,
    classify_url,
    extract_song_id,
    is_supported_url,
    title_from_url,
)

__all__ = [
    "absolute_url",
    "classify_url",
    "extract_song_id",
    "is_supported_url",
    "parse_duration",
    "title_from_url",
]
