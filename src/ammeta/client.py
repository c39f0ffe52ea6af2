"""Apple Music page fetcher."""

import asyncio
import logging
from typing import Protocol

import httpx

from ammeta.config import FetchConfig
from ammeta.models.results import FetchFailure, Page

logger = logging.getLogger(__name__)

# Statuses Apple Music returns when overloaded or rate limiting
_TRANSIENT_STATUS_CODES = frozenset({408, 425, 429})


def _is_transient_status(status_code: int) -> bool:
    return status_code in _TRANSIENT_STATUS_CODES or status_code >= 500


class PageFetcherProtocol(Protocol):
    """Protocol for page fetchers.

    This protocol enables dependency injection and testing.
    Implement this protocol to create mock fetchers for testing.
    """

    async def fetch(self, url: str) -> Page | FetchFailure:
        """Fetch a page, returning a failure value instead of raising."""
        ...


class PageFetcher:
    """Production page fetcher backed by httpx.

    Retries network errors and overload responses, never caches, and opens a
    fresh client per call so concurrent pipelines share nothing.
    Implements PageFetcherProtocol.
    """

    def __init__(
        self,
        config: FetchConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the fetcher.

        Args:
            config: Optional fetch configuration. Uses defaults if not provided.
            transport: Optional httpx transport, e.g. ``httpx.MockTransport``
                in tests. Uses the default network transport if not provided.
        """
        self._config = config or FetchConfig()
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        return {
            "User-Agent": self._config.user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": self._config.accept_language,
        }

    async def fetch(self, url: str) -> Page | FetchFailure:
        """Fetch page markup for a URL.

        Transient failures (network errors, 429 and 5xx responses) are
        retried up to ``max_attempts`` times with linear backoff. Malformed
        URLs, undecodable bodies and other 4xx responses fail immediately.

        Args:
            url: Absolute URL to fetch.

        Returns:
            The fetched Page, or a FetchFailure describing the last error.
        """
        max_attempts = max(1, self._config.max_attempts)
        reason = ""

        async with httpx.AsyncClient(
            follow_redirects=True,
            timeout=self._config.timeout,
            headers=self._headers(),
            transport=self._transport,
        ) as client:
            for attempt in range(1, max_attempts + 1):
                logger.debug("Fetching %s (attempt %d/%d)", url, attempt, max_attempts)
                try:
                    response = await client.get(url)
                except (httpx.InvalidURL, httpx.UnsupportedProtocol) as e:
                    logger.warning("Not fetching malformed URL %s: %s", url, e)
                    return FetchFailure(url=url, reason=str(e), attempts=attempt)
                except httpx.TooManyRedirects as e:
                    logger.warning("Redirect loop for %s: %s", url, e)
                    return FetchFailure(url=url, reason=str(e), attempts=attempt)
                except httpx.TransportError as e:
                    reason = f"{type(e).__name__}: {e}"
                    logger.warning(
                        "Attempt %d/%d for %s failed: %s",
                        attempt,
                        max_attempts,
                        url,
                        reason,
                    )
                except httpx.RequestError as e:
                    # e.g. DecodingError for a corrupt compressed body
                    reason = f"{type(e).__name__}: {e}"
                    logger.warning("Fetching %s failed: %s", url, reason)
                    return FetchFailure(url=url, reason=reason, attempts=attempt)
                else:
                    if response.is_success:
                        logger.debug(
                            "Fetched %s (%d bytes)", response.url, len(response.text)
                        )
                        return Page(
                            url=url,
                            final_url=str(response.url),
                            status=response.status_code,
                            html=response.text,
                        )
                    reason = f"HTTP {response.status_code}"
                    if not _is_transient_status(response.status_code):
                        logger.warning("Fetching %s failed: %s", url, reason)
                        return FetchFailure(url=url, reason=reason, attempts=attempt)
                    logger.warning(
                        "Attempt %d/%d for %s failed: %s",
                        attempt,
                        max_attempts,
                        url,
                        reason,
                    )

                if attempt < max_attempts and self._config.backoff_seconds > 0:
                    await asyncio.sleep(self._config.backoff_seconds * attempt)

        logger.warning(
            "Giving up on %s after %d attempts: %s", url, max_attempts, reason
        )
        return FetchFailure(url=url, reason=reason, attempts=max_attempts)
