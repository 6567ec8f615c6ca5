"""
Translation of domain exceptions into HTTP responses.

This is the only place in the service that knows about status codes; the
adapters and use cases below it raise typed MarketDataError subclasses.
"""

import logging
import math

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.domain.exceptions import (
    ApiSchemaError,
    ConfigurationError,
    DeadlineExceededError,
    FMPError,
    InvalidParameterError,
    NetworkError,
    RateLimitedError,
    WatchlistConflictError,
    WatchlistItemNotFoundError,
    WatchlistStoreError,
)

logger = logging.getLogger(__name__)


def _error(status_code: int, error: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error, **extra})


def register_error_handlers(app: FastAPI, expose_error_details: bool = False) -> None:
    """Install one handler per exception kind on *app*."""

    @app.exception_handler(InvalidParameterError)
    async def invalid_parameter(request: Request, exc: InvalidParameterError) -> JSONResponse:
        return _error(400, str(exc))

    @app.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError) -> JSONResponse:
        first = exc.errors()[0] if exc.errors() else {}
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = first.get("msg", "Invalid request")
        return _error(400, f"{location}: {message}" if location else message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(FMPError)
    async def fmp_error(request: Request, exc: FMPError) -> JSONResponse:
        logger.warning(
            "FMP error on %s (status=%s, attempt=%s): %s",
            exc.endpoint,
            exc.status_code,
            exc.attempt,
            exc,
        )
        return _error(exc.status_code or 500, str(exc))

    @app.exception_handler(ApiSchemaError)
    async def schema_error(request: Request, exc: ApiSchemaError) -> JSONResponse:
        logger.warning("Unexpected FMP payload for %s: %s", request.url.path, exc)
        logger.debug("Raw payload: %r", exc.raw_response)
        extra = {"rawResponse": exc.raw_response} if expose_error_details else {}
        return _error(502, "Invalid response from FMP API", details=str(exc), **extra)

    @app.exception_handler(RateLimitedError)
    async def rate_limited(request: Request, exc: RateLimitedError) -> JSONResponse:
        response = _error(429, "Rate limit exceeded", retryAfter=exc.retry_after_ms)
        if exc.retry_after_ms is not None:
            response.headers["Retry-After"] = str(math.ceil(exc.retry_after_ms / 1000))
        return response

    @app.exception_handler(NetworkError)
    async def network_error(request: Request, exc: NetworkError) -> JSONResponse:
        logger.error("Network failure: %s (%r)", exc, exc.original_error)
        return _error(503, "Network error", details=str(exc))

    @app.exception_handler(DeadlineExceededError)
    async def deadline_exceeded(request: Request, exc: DeadlineExceededError) -> JSONResponse:
        logger.warning("%s %s: %s", request.method, request.url.path, exc)
        return _error(504, "Upstream request timed out")

    @app.exception_handler(ConfigurationError)
    async def configuration_error(request: Request, exc: ConfigurationError) -> JSONResponse:
        logger.error("Configuration error: %s", exc)
        return _error(500, "Server is misconfigured")

    @app.exception_handler(WatchlistItemNotFoundError)
    async def item_not_found(request: Request, exc: WatchlistItemNotFoundError) -> JSONResponse:
        return _error(404, str(exc))

    @app.exception_handler(WatchlistConflictError)
    async def item_conflict(request: Request, exc: WatchlistConflictError) -> JSONResponse:
        return _error(409, str(exc))

    @app.exception_handler(WatchlistStoreError)
    async def store_error(request: Request, exc: WatchlistStoreError) -> JSONResponse:
        logger.error("Watchlist store error (status=%s): %s", exc.status_code, exc)
        return _error(502, "Watchlist storage error")

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "Unexpected error on %s %s", request.method, request.url.path, exc_info=exc
        )
        return _error(500, "An unexpected error occurred")
