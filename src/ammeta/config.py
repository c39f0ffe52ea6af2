"""Configuration for ammeta."""

from dataclasses import dataclass

from ammeta.models.enums import ExtractMode

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36"
)


@dataclass(frozen=True)
class FetchConfig:
    """Page fetcher configuration.

    Attributes:
        max_attempts: Total attempts per URL (first try included).
            Apple Music sometimes rejects requests under load.
        backoff_seconds: Base delay between attempts; attempt N waits
            N * backoff_seconds.
        timeout: Per-request timeout in seconds passed to httpx.
        user_agent: User-Agent header sent with every request.
        accept_language: Accept-Language header sent with every request.
    """

    max_attempts: int = 5
    backoff_seconds: float = 1.0
    timeout: float | None = 30.0
    user_agent: str = DEFAULT_USER_AGENT
    accept_language: str = "en-US,en;q=0.9"


@dataclass(frozen=True)
class ExtractOptions:
    """Request-scoped extraction options.

    Attributes:
        verbose: Log extraction diagnostics (fetch failures, fallbacks,
            unmatched songs) at INFO instead of DEBUG.
        mode: FAST resolves playlists from page markup plus the JSON-LD
            summary. FULL skips straight to JSON-LD and fetches every
            track page.
    """

    verbose: bool = False
    mode: ExtractMode = ExtractMode.FAST
