"""
FastAPI route registry: binds each application use-case to an HTTP route.
See docs/Architecture.md for the layering rules.

Routing is an infrastructure concern and must NOT appear in the application
or domain layers. The factories below close over already-built use cases, so
the composition root decides which adapters back them.

Every market-data call runs under asyncio.wait_for(); when the deadline
expires the task is cancelled, which unwinds the use case, the normalizer,
the in-flight httpx request and any pending backoff sleep together.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from src.application.services.watchlist_service import WatchlistService
from src.application.use_cases.get_company_profile import GetCompanyProfileUseCase
from src.application.use_cases.get_company_quote import GetCompanyQuoteUseCase
from src.application.use_cases.get_financial_statements import (
    GetBalanceSheetUseCase,
    GetCashFlowUseCase,
    GetIncomeStatementUseCase,
)
from src.application.use_cases.get_historical_prices import GetHistoricalPricesUseCase
from src.application.use_cases.get_metrics import (
    GetFinancialRatiosUseCase,
    GetKeyMetricsUseCase,
)
from src.application.use_cases.search_companies import SearchCompaniesUseCase
from src.domain.entities.watchlist_item import AuthenticatedUser
from src.domain.exceptions import DeadlineExceededError
from src.domain.ports.chart_data_port import IChartDataProvider
from src.domain.ports.company_data_port import ICompanyDataProvider
from src.domain.ports.financial_statement_port import IFinancialStatementProvider
from src.domain.ports.metrics_port import IMetricsProvider
from src.domain.ports.token_validator_port import ITokenValidator
from src.infrastructure.entrypoints.params import (
    parse_chart_period,
    parse_financial_period,
    parse_limit,
    parse_query,
    parse_symbol,
)
from src.infrastructure.entrypoints.presenters import present

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MarketDataUseCases:
    profile: GetCompanyProfileUseCase
    quote: GetCompanyQuoteUseCase
    search: SearchCompaniesUseCase
    historical: GetHistoricalPricesUseCase
    income_statement: GetIncomeStatementUseCase
    balance_sheet: GetBalanceSheetUseCase
    cash_flow: GetCashFlowUseCase
    key_metrics: GetKeyMetricsUseCase
    ratios: GetFinancialRatiosUseCase

    @classmethod
    def from_providers(
        cls,
        company: ICompanyDataProvider,
        statements: IFinancialStatementProvider,
        metrics: IMetricsProvider,
        chart: IChartDataProvider,
    ) -> "MarketDataUseCases":
        return cls(
            profile=GetCompanyProfileUseCase(company),
            quote=GetCompanyQuoteUseCase(company),
            search=SearchCompaniesUseCase(company),
            historical=GetHistoricalPricesUseCase(chart),
            income_statement=GetIncomeStatementUseCase(statements),
            balance_sheet=GetBalanceSheetUseCase(statements),
            cash_flow=GetCashFlowUseCase(statements),
            key_metrics=GetKeyMetricsUseCase(metrics),
            ratios=GetFinancialRatiosUseCase(metrics),
        )


def create_market_data_router(
    use_cases: MarketDataUseCases,
    deadline_seconds: float,
) -> APIRouter:
    """Build the read-only proxy routes.

    Args:
        use_cases:        Use cases wired to concrete providers.
        deadline_seconds: Upper bound for one request, retries and backoff included.

    Returns:
        An APIRouter with one GET route per market-data operation.
    """
    router = APIRouter()

    async def run(operation: Awaitable[Any], label: str) -> Any:
        try:
            result = await asyncio.wait_for(operation, timeout=deadline_seconds)
        except asyncio.TimeoutError as exc:
            raise DeadlineExceededError(
                f"{label} did not complete within {deadline_seconds:g}s"
            ) from exc
        return present(result)

    @router.get("/profile/{symbol}")
    async def get_profile(symbol: str):
        """Company profile for *symbol*."""
        return await run(use_cases.profile.execute(parse_symbol(symbol)), "profile")

    @router.get("/quote/{symbol}")
    async def get_quote(symbol: str):
        """Latest quote for *symbol*."""
        return await run(use_cases.quote.execute(parse_symbol(symbol)), "quote")

    @router.get("/search")
    async def search(
        q: Optional[str] = Query(default=None),
        limit: Optional[str] = Query(default=None),
    ):
        """Companies matching *q* by ticker or name."""
        query = parse_query(q)
        return await run(use_cases.search.execute(query, parse_limit(limit)), "search")

    @router.get("/historical/{symbol}")
    async def get_historical(symbol: str, period: Optional[str] = Query(default=None)):
        """Daily prices for *symbol*, oldest first."""
        ticker = parse_symbol(symbol)
        return await run(
            use_cases.historical.execute(ticker, parse_chart_period(period)), "historical"
        )

    def add_period_route(path: str, use_case: Any, label: str) -> None:
        async def endpoint(
            symbol: str,
            period: Optional[str] = Query(default=None),
            limit: Optional[str] = Query(default=None),
        ):
            ticker = parse_symbol(symbol)
            parsed_period = parse_financial_period(period)
            parsed_limit = parse_limit(limit)
            return await run(use_case.execute(ticker, parsed_period, parsed_limit), label)

        router.add_api_route(path, endpoint, methods=["GET"], name=label)

    add_period_route("/income-statement/{symbol}", use_cases.income_statement, "income_statement")
    add_period_route("/balance-sheet/{symbol}", use_cases.balance_sheet, "balance_sheet")
    add_period_route("/cash-flow/{symbol}", use_cases.cash_flow, "cash_flow")
    add_period_route("/metrics/{symbol}", use_cases.key_metrics, "key_metrics")
    add_period_route("/ratios/{symbol}", use_cases.ratios, "ratios")

    return router


class AddWatchlistItemRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    symbol: str
    company_name: str
    notes: Optional[str] = None


class UpdateWatchlistItemRequest(BaseModel):
    notes: Optional[str] = None


def create_watchlist_router(
    service: WatchlistService,
    validator: ITokenValidator,
) -> APIRouter:
    """Build the authenticated watchlist CRUD routes."""
    router = APIRouter(prefix="/watchlist")

    async def get_current_user(request: Request) -> AuthenticatedUser:
        """FastAPI dependency: validate the bearer token from the Authorization header."""
        auth_header = request.headers.get("Authorization", "")
        if not auth_header.startswith("Bearer "):
            raise HTTPException(status_code=401, detail="Missing or invalid Authorization header.")
        token = auth_header.split(" ", 1)[1]
        try:
            return validator.validate(token)
        except ValueError as exc:
            raise HTTPException(status_code=401, detail=str(exc)) from exc

    @router.get("")
    async def list_items(user: AuthenticatedUser = Depends(get_current_user)):
        return present(await service.list_items(user.user_id))

    @router.post("", status_code=201)
    async def add_item(
        body: AddWatchlistItemRequest,
        user: AuthenticatedUser = Depends(get_current_user),
    ):
        item = await service.add_item(user.user_id, body.symbol, body.company_name, body.notes)
        logger.info("User %s added %s to watchlist", user.user_id, item.symbol)
        return present(item)

    @router.patch("/{item_id}")
    async def update_item(
        item_id: str,
        body: UpdateWatchlistItemRequest,
        user: AuthenticatedUser = Depends(get_current_user),
    ):
        return present(await service.update_notes(user.user_id, item_id, body.notes))

    @router.delete("/{item_id}", status_code=204)
    async def remove_item(item_id: str, user: AuthenticatedUser = Depends(get_current_user)):
        await service.remove_item(user.user_id, item_id)
        return Response(status_code=204)

    return router
