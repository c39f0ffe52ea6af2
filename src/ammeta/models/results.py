"""Result values passed between fetcher, extraction strategies and orchestrator.

Strategies never signal "try the other strategy" by raising. They return one
of ``Ok``, ``NeedsFallback`` or ``Fatal`` and the orchestrator decides what
to do next.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

from ammeta.exceptions import AMMetaError

T = TypeVar("T")


@dataclass(frozen=True)
class Page:
    """Markup fetched for a URL.

    Attributes:
        url: The URL that was requested.
        final_url: URL after redirects (song pages redirect to album pages).
        status: HTTP status code of the final response.
        html: Response body.
    """

    url: str
    final_url: str
    status: int
    html: str


@dataclass(frozen=True)
class FetchFailure:
    """A page could not be fetched after exhausting retries.

    Attributes:
        url: The URL that was requested.
        reason: Last error or status seen.
        attempts: Number of attempts made.
    """

    url: str
    reason: str
    attempts: int


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Extraction succeeded."""

    value: T


@dataclass(frozen=True)
class NeedsFallback:
    """This strategy cannot handle the page; try the next one."""

    reason: str


@dataclass(frozen=True)
class Fatal:
    """The page contradicts the expected markup contract."""

    error: AMMetaError


ExtractionResult: TypeAlias = Ok[T] | NeedsFallback | Fatal
