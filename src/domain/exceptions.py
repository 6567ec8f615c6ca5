"""
Domain exceptions raised by the market-data adapters and use cases.
See docs/Architecture.md for how the entrypoint layer maps them to HTTP.

Every failure here is terminal for the current request; the only recovery
is the FMP client's own retry loop.
"""

from typing import Any, Optional


class MarketDataError(Exception):
    """Base class for every typed failure surfaced to the entrypoint layer."""


class ConfigurationError(MarketDataError):
    """A required setting (e.g. FMP_API_KEY) is missing or malformed."""


class FMPError(MarketDataError):
    """Non-retryable, or retry-exhausted, HTTP error from the FMP API."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        endpoint: Optional[str] = None,
        attempt: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.endpoint = endpoint
        self.attempt = attempt


class ApiSchemaError(MarketDataError):
    """Upstream body could not be decoded or had the wrong container shape."""

    def __init__(self, message: str, raw_response: Any = None) -> None:
        super().__init__(message)
        self.raw_response = raw_response


class RateLimitedError(MarketDataError):
    """Retries were exhausted while FMP kept answering HTTP 429."""

    def __init__(self, message: str, retry_after_ms: Optional[float] = None) -> None:
        super().__init__(message)
        self.retry_after_ms = retry_after_ms


class NetworkError(MarketDataError):
    """Transport-level failure (DNS, connect, timeout) after retries."""

    def __init__(self, message: str, original_error: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.original_error = original_error


class InvalidParameterError(MarketDataError):
    """Caller-supplied path or query parameter failed validation."""


class WatchlistItemNotFoundError(MarketDataError):
    pass


class WatchlistConflictError(MarketDataError):
    """The symbol is already on the user's watchlist."""


class DeadlineExceededError(MarketDataError):
    """The request's overall deadline expired before the upstream chain finished."""


class WatchlistStoreError(MarketDataError):
    """The watchlist backend answered with an unexpected HTTP status."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
