"""
FastAPI entry point: financial data proxy for the dashboard.
See docs/Architecture.md for the layering rules.

This module is the Composition Root: it reads configuration once, wires the
FMP client into the four normalizer adapters, binds them to use cases and
mounts the routes. Tests call create_app() with fake providers instead.

Run locally:
    uvicorn src.infrastructure.entrypoints.fastapi_app:create_app --factory --reload --port 8000
"""

import logging
import os
import time
from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, Request

from src.application.services.watchlist_service import WatchlistService
from src.domain.ports.chart_data_port import IChartDataProvider
from src.domain.ports.company_data_port import ICompanyDataProvider
from src.domain.ports.financial_statement_port import IFinancialStatementProvider
from src.domain.ports.metrics_port import IMetricsProvider
from src.domain.ports.token_validator_port import ITokenValidator
from src.domain.ports.watchlist_store_port import IWatchlistStore
from src.infrastructure.auth.supabase_validator import SupabaseTokenValidator
from src.infrastructure.config.settings import Settings, configure_logging
from src.infrastructure.entrypoints.error_handlers import register_error_handlers
from src.infrastructure.entrypoints.routes import (
    MarketDataUseCases,
    create_market_data_router,
    create_watchlist_router,
)
from src.infrastructure.fmp.chart_adapter import FMPChartDataProvider
from src.infrastructure.fmp.client import FMPClient
from src.infrastructure.fmp.company_adapter import FMPCompanyDataProvider
from src.infrastructure.fmp.financial_statement_adapter import FMPFinancialStatementProvider
from src.infrastructure.fmp.metrics_adapter import FMPMetricsProvider
from src.infrastructure.watchlist.in_memory_store import InMemoryWatchlistStore
from src.infrastructure.watchlist.supabase_store import SupabaseWatchlistStore

logger = logging.getLogger(__name__)


def load_settings() -> Settings:
    """Read .env, pull shared secrets if configured, then validate settings.

    Raises:
        ConfigurationError: if FMP_API_KEY is missing or a value is malformed.
    """
    load_dotenv()
    secret_id = os.environ.get("FMP_SECRET_ARN")
    if secret_id:
        from src.infrastructure.secrets.secrets_manager_adapter import SecretsManagerAdapter

        SecretsManagerAdapter().export_missing(secret_id)
    return Settings.from_env()


def create_app(
    settings: Optional[Settings] = None,
    *,
    company_provider: Optional[ICompanyDataProvider] = None,
    statement_provider: Optional[IFinancialStatementProvider] = None,
    metrics_provider: Optional[IMetricsProvider] = None,
    chart_provider: Optional[IChartDataProvider] = None,
    watchlist_store: Optional[IWatchlistStore] = None,
    token_validator: Optional[ITokenValidator] = None,
) -> FastAPI:
    """Build the application.

    Providers left as None are backed by one shared FMPClient built from
    *settings*. Watchlist routes are mounted only when a token validator is
    supplied or SUPABASE_JWT_SECRET is configured.
    """
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    closables = []
    fmp_client: Optional[FMPClient] = None
    if None in (company_provider, statement_provider, metrics_provider, chart_provider):
        fmp_client = FMPClient.from_settings(settings)
        closables.append(fmp_client)

    use_cases = MarketDataUseCases.from_providers(
        company=company_provider or FMPCompanyDataProvider(fmp_client),
        statements=statement_provider or FMPFinancialStatementProvider(fmp_client),
        metrics=metrics_provider or FMPMetricsProvider(fmp_client),
        chart=chart_provider or FMPChartDataProvider(fmp_client),
    )

    if token_validator is None and settings.watchlist_enabled:
        issuer = f"{settings.supabase_url.rstrip('/')}/auth/v1" if settings.supabase_url else None
        token_validator = SupabaseTokenValidator(settings.supabase_jwt_secret, issuer=issuer)

    if token_validator is not None and watchlist_store is None:
        if settings.supabase_url and settings.supabase_service_role_key:
            watchlist_store = SupabaseWatchlistStore(
                settings.supabase_url, settings.supabase_service_role_key
            )
            closables.append(watchlist_store)
        else:
            logger.warning("Supabase URL/key not set; watchlist is kept in memory only")
            watchlist_store = InMemoryWatchlistStore()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        for resource in closables:
            await resource.aclose()

    app = FastAPI(title="Financial Data Proxy API", lifespan=lifespan)
    register_error_handlers(app, expose_error_details=settings.expose_error_details)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "%s %s -> %d (%.0fms)",
            request.method,
            request.url.path,
            response.status_code,
            (time.perf_counter() - started) * 1000,
        )
        return response

    app.include_router(
        create_market_data_router(use_cases, settings.request_deadline_seconds)
    )
    if token_validator is not None:
        app.include_router(
            create_watchlist_router(WatchlistService(watchlist_store), token_validator)
        )

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app
