"""
Infrastructure: authenticated HTTP transport for the Financial Modeling Prep API.
See docs/Architecture.md for the layering rules.

One call to FMPClient.fetch() is one logical upstream request: up to
max_attempts sequential HTTP GETs with exponential backoff between them.
The decoded JSON is returned untouched; validating its shape is the job of
the normalizer adapters that call this client.

Only httpx.TransportError is treated as a transient transport failure.
asyncio.CancelledError (raised when the entrypoint's deadline expires)
propagates through both the request and the backoff sleep.
"""

import asyncio
import json
import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Mapping, Optional

import httpx

from src.domain.exceptions import (
    ApiSchemaError,
    ConfigurationError,
    FMPError,
    NetworkError,
    RateLimitedError,
)
from src.infrastructure.config.settings import FMP_BASE_URL, Settings

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 3
INITIAL_BACKOFF_MS = 1000.0
MAX_BACKOFF_MS = 8000.0
JITTER_RATIO = 0.25

# FMP reports errors under either key depending on the endpoint generation.
_ERROR_MESSAGE_KEYS = ("Error Message", "message")


def _reject_constant(name: str) -> Any:
    # NaN and Infinity are accepted by json.loads but are not JSON.
    raise ValueError(f"Non-JSON constant {name} in response body")


def decode_json(body: bytes) -> Any:
    return json.loads(body, parse_constant=_reject_constant)


class AttemptOutcome(Enum):
    SUCCESS = "success"
    RATE_LIMITED = "rate_limited"
    RETRYABLE = "retryable"
    FATAL = "fatal"


def classify_status(status_code: int) -> AttemptOutcome:
    """Decide what the retry loop does with an HTTP status."""
    if 200 <= status_code < 300:
        return AttemptOutcome.SUCCESS
    if status_code == 429:
        return AttemptOutcome.RATE_LIMITED
    if status_code >= 500:
        return AttemptOutcome.RETRYABLE
    return AttemptOutcome.FATAL


def calculate_backoff_ms(
    attempt: int,
    initial_ms: float = INITIAL_BACKOFF_MS,
    max_ms: float = MAX_BACKOFF_MS,
    rand: Callable[[], float] = random.random,
) -> float:
    """Exponential delay for the 0-indexed *attempt*, capped, plus up to 25% jitter."""
    capped = min(initial_ms * (2**attempt), max_ms)
    return capped + rand() * capped * JITTER_RATIO


def parse_retry_after_ms(value: Optional[str]) -> Optional[float]:
    """Convert a Retry-After header given in whole seconds to milliseconds.

    HTTP-date values and garbage yield None so the computed backoff applies.
    """
    if value is None:
        return None
    try:
        seconds = int(value.strip())
    except ValueError:
        return None
    if seconds < 0:
        return None
    return seconds * 1000.0


@dataclass(frozen=True)
class UpstreamRequest:
    endpoint: str
    params: Mapping[str, str]
    url: str


@dataclass(frozen=True)
class UpstreamResponse:
    status_code: int
    reason: str
    body: bytes
    retry_after_ms: Optional[float] = None

    def error_message(self) -> str:
        """FMP's own error text when the body carries one, else 'HTTP <status> <reason>'."""
        fallback = f"HTTP {self.status_code} {self.reason}".rstrip()
        try:
            data = decode_json(self.body)
        except ValueError:
            return fallback
        if isinstance(data, dict):
            for key in _ERROR_MESSAGE_KEYS:
                if data.get(key):
                    return str(data[key])
        return fallback


class FMPClient:
    """Async FMP transport with retry, backoff and typed failures."""

    def __init__(
        self,
        api_key: str,
        base_url: str = FMP_BASE_URL,
        timeout_seconds: float = 10.0,
        max_attempts: int = MAX_ATTEMPTS,
        initial_backoff_ms: float = INITIAL_BACKOFF_MS,
        max_backoff_ms: float = MAX_BACKOFF_MS,
        http_client: Optional[httpx.AsyncClient] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        rand: Callable[[], float] = random.random,
    ) -> None:
        if not api_key:
            raise ConfigurationError(
                "FMP_API_KEY environment variable is not configured. "
                "Cannot proceed with API requests."
            )
        if max_attempts < 1:
            raise ConfigurationError("max_attempts must be at least 1")
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._max_attempts = max_attempts
        self._initial_backoff_ms = initial_backoff_ms
        self._max_backoff_ms = max_backoff_ms
        self._sleep = sleep
        self._rand = rand
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout_seconds)

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> "FMPClient":
        return cls(
            api_key=settings.fmp_api_key,
            base_url=settings.fmp_base_url,
            timeout_seconds=settings.request_timeout_seconds,
            max_attempts=settings.max_attempts,
            initial_backoff_ms=settings.initial_backoff_ms,
            max_backoff_ms=settings.max_backoff_ms,
            **kwargs,
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    def build_request(
        self, endpoint: str, params: Optional[Mapping[str, str]] = None
    ) -> UpstreamRequest:
        query = {**(params or {}), "apikey": self._api_key}
        url = httpx.URL(f"{self._base_url}{endpoint}", params=query)
        return UpstreamRequest(endpoint=endpoint, params=dict(params or {}), url=str(url))

    async def fetch(self, endpoint: str, params: Optional[Mapping[str, str]] = None) -> Any:
        """GET *endpoint* (e.g. "/stable/profile") and return the decoded JSON.

        Raises:
            FMPError: non-retryable HTTP status, or 5xx on the final attempt.
            RateLimitedError: HTTP 429 on the final attempt.
            NetworkError: transport failure on the final attempt.
            ApiSchemaError: 2xx response whose body is not valid JSON.
        """
        request = self.build_request(endpoint, params)

        for attempt in range(self._max_attempts):
            is_last = attempt == self._max_attempts - 1
            try:
                response = await self._send(request)
            except httpx.TransportError as exc:
                if is_last:
                    raise NetworkError(
                        f"Network request failed after {self._max_attempts} attempts: {endpoint}",
                        exc,
                    ) from exc
                await self._wait(endpoint, self._backoff_ms(attempt), attempt, f"network error ({exc!r})")
                continue

            outcome = classify_status(response.status_code)

            if outcome is AttemptOutcome.SUCCESS:
                return self._decode(request, response)

            if outcome is AttemptOutcome.RATE_LIMITED:
                delay_ms = response.retry_after_ms
                if delay_ms is None:
                    delay_ms = self._backoff_ms(attempt)
                if is_last:
                    raise RateLimitedError(
                        f"Rate limit exceeded for {endpoint}. Retry after {delay_ms:.0f}ms.",
                        delay_ms,
                    )
                await self._wait(endpoint, delay_ms, attempt, "rate limited")
                continue

            if outcome is AttemptOutcome.RETRYABLE and not is_last:
                await self._wait(
                    endpoint,
                    self._backoff_ms(attempt),
                    attempt,
                    f"server error {response.status_code}",
                )
                continue

            raise FMPError(response.error_message(), response.status_code, endpoint, attempt + 1)

        raise NetworkError(f"Request to {endpoint} failed after {self._max_attempts} attempts")

    async def _send(self, request: UpstreamRequest) -> UpstreamResponse:
        response = await self._http.get(
            request.url,
            headers={"Accept": "application/json", "Cache-Control": "no-cache"},
        )
        return UpstreamResponse(
            status_code=response.status_code,
            reason=response.reason_phrase,
            body=response.content,
            retry_after_ms=parse_retry_after_ms(response.headers.get("Retry-After")),
        )

    def _decode(self, request: UpstreamRequest, response: UpstreamResponse) -> Any:
        try:
            data = decode_json(response.body)
        except ValueError as exc:
            raise ApiSchemaError(
                f"Failed to parse JSON response from {request.endpoint}",
                response.body[:2048].decode("utf-8", errors="replace"),
            ) from exc
        logger.debug("FMP %s -> %d", request.endpoint, response.status_code)
        return data

    def _backoff_ms(self, attempt: int) -> float:
        return calculate_backoff_ms(
            attempt, self._initial_backoff_ms, self._max_backoff_ms, self._rand
        )

    async def _wait(self, endpoint: str, delay_ms: float, attempt: int, reason: str) -> None:
        logger.warning(
            "FMP %s on %s; retrying after %.0fms (attempt %d/%d)",
            reason,
            endpoint,
            delay_ms,
            attempt + 1,
            self._max_attempts,
            extra={
                "endpoint": endpoint,
                "delay_ms": delay_ms,
                "attempt": attempt + 1,
                "max_attempts": self._max_attempts,
            },
        )
        await self._sleep(delay_ms / 1000.0)
