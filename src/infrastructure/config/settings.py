"""
Process configuration, read once at startup.

The composition root calls load_dotenv() and then Settings.from_env(); the
resulting frozen value is injected into every adapter that needs it, so no
adapter reads os.environ on its own.
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from src.domain.exceptions import ConfigurationError

FMP_BASE_URL = "https://financialmodelingprep.com"

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    fmp_api_key: str
    fmp_base_url: str = FMP_BASE_URL
    request_timeout_seconds: float = 10.0
    max_attempts: int = 3
    initial_backoff_ms: float = 1000.0
    max_backoff_ms: float = 8000.0
    request_deadline_seconds: float = 30.0
    expose_error_details: bool = False
    log_level: str = "INFO"
    supabase_url: Optional[str] = None
    supabase_service_role_key: Optional[str] = None
    supabase_jwt_secret: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.fmp_api_key:
            raise ConfigurationError(
                "FMP_API_KEY environment variable is not configured. "
                "Cannot proceed with API requests."
            )
        if self.max_attempts < 1:
            raise ConfigurationError("FMP_MAX_ATTEMPTS must be at least 1")
        if self.request_timeout_seconds <= 0 or self.request_deadline_seconds <= 0:
            raise ConfigurationError("Timeouts must be positive numbers of seconds")

    @property
    def watchlist_enabled(self) -> bool:
        return bool(self.supabase_jwt_secret)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from *environ* (defaults to os.environ).

        Raises:
            ConfigurationError: if FMP_API_KEY is missing or a numeric value is malformed.
        """
        env = os.environ if environ is None else environ
        return cls(
            fmp_api_key=env.get("FMP_API_KEY", "").strip(),
            fmp_base_url=env.get("FMP_BASE_URL", FMP_BASE_URL).rstrip("/"),
            request_timeout_seconds=_number(env, "FMP_TIMEOUT_SECONDS", 10.0),
            max_attempts=_integer(env, "FMP_MAX_ATTEMPTS", 3),
            initial_backoff_ms=_number(env, "FMP_INITIAL_BACKOFF_MS", 1000.0),
            max_backoff_ms=_number(env, "FMP_MAX_BACKOFF_MS", 8000.0),
            request_deadline_seconds=_number(env, "REQUEST_DEADLINE_SECONDS", 30.0),
            expose_error_details=env.get("EXPOSE_ERROR_DETAILS", "").lower() in _TRUE_VALUES,
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
            supabase_url=env.get("SUPABASE_URL") or None,
            supabase_service_role_key=env.get("SUPABASE_SERVICE_ROLE_KEY") or None,
            supabase_jwt_secret=env.get("SUPABASE_JWT_SECRET") or None,
        )


def _number(env: Mapping[str, str], key: str, default: float) -> float:
    raw = env.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{key} must be a number, got {raw!r}") from exc


def _integer(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise ConfigurationError(f"{key} must be a whole number, got {raw!r}") from exc

def configure_logging(level: str = "INFO") -> None:
    """Install a single stream handler on the root logger."""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    # httpx logs every request URL at INFO, and FMP URLs carry the API key.
    logging.getLogger("httpx").setLevel(logging.WARNING)
