"""Custom exceptions for ammeta.

All exceptions include an HTTP status_code attribute for easy
integration with web frameworks like FastAPI.

Network failures are not exceptions; the page fetcher returns them as
``FetchFailure`` values.
"""


class AMMetaError(Exception):
    """Base exception for ammeta.

    Attributes:
        status_code: HTTP status code for API error responses.
    """

    status_code: int = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidUrlKindError(AMMetaError):
    """URL is not a recognized Apple Music song, album or playlist page.

    Raised immediately by URL classification; never retried.
    """

    status_code: int = 400  # Bad Request


class NoStructuredDataFoundError(AMMetaError):
    """Page carries no MusicAlbum or MusicPlaylist JSON-LD block.

    Callers treat this as a signal to use DOM extraction instead.
    """

    status_code: int = 404  # Not Found


class MalformedDurationError(AMMetaError):
    """Duration text could not be parsed as colon-separated numbers.

    Indicates the page markup no longer matches what the scraper expects.
    """

    status_code: int = 422  # Unprocessable Entity
