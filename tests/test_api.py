import asyncio

import httpx
import pytest
from fastapi.testclient import TestClient

from src.domain.entities.periods import ChartPeriod
from src.domain.exceptions import (
    ApiSchemaError,
    ConfigurationError,
    FMPError,
    NetworkError,
    RateLimitedError,
)
from src.domain.ports.chart_data_port import IChartDataProvider
from src.infrastructure.config.settings import Settings
from src.infrastructure.entrypoints.fastapi_app import create_app
from src.infrastructure.fmp.chart_adapter import (
    HISTORICAL_PRICE_ENDPOINT,
    FMPChartDataProvider,
)
from src.infrastructure.fmp.client import FMPClient
from src.infrastructure.fmp.company_adapter import (
    PROFILE_ENDPOINT,
    QUOTE_ENDPOINT,
    SEARCH_NAME_ENDPOINT,
    SEARCH_SYMBOL_ENDPOINT,
    FMPCompanyDataProvider,
)
from src.infrastructure.fmp.financial_statement_adapter import (
    BALANCE_SHEET_ENDPOINT,
    CASH_FLOW_ENDPOINT,
    INCOME_STATEMENT_ENDPOINT,
    FMPFinancialStatementProvider,
)
from src.infrastructure.fmp.metrics_adapter import (
    KEY_METRICS_ENDPOINT,
    RATIOS_ENDPOINT,
    FMPMetricsProvider,
)
from tests.fakes import RecordingFMPClient

DEFAULT_PAYLOADS = {
    PROFILE_ENDPOINT: [{"symbol": "AAPL", "companyName": "Apple Inc.", "mktCap": 3e12}],
    QUOTE_ENDPOINT: [{"symbol": "AAPL", "price": 190.1, "priceAvg50": 185.0}],
    SEARCH_SYMBOL_ENDPOINT: [{"symbol": "AAPL", "name": "Apple Inc."}],
    SEARCH_NAME_ENDPOINT: [],
    HISTORICAL_PRICE_ENDPOINT: [
        {"date": "2024-03-01", "close": 3.0},
        {"date": "2024-02-29", "close": 2.0},
    ],
    INCOME_STATEMENT_ENDPOINT: [{"date": "2024-09-28", "epsdiluted": 6.08}],
    BALANCE_SHEET_ENDPOINT: [{"date": "2024-09-28", "totalAssets": 3.6e11}],
    CASH_FLOW_ENDPOINT: [{"date": "2024-09-28", "freeCashFlow": 1.08e11}],
    KEY_METRICS_ENDPOINT: [{"date": "2024-09-28", "pe": 37.3}],
    RATIOS_ENDPOINT: [{"date": "2024-09-28", "currentRatio": 0.87}],
}


def make_app(overrides=None, settings=None, chart_provider=None):
    client = RecordingFMPClient({**DEFAULT_PAYLOADS, **(overrides or {})})
    app = create_app(
        settings or Settings(fmp_api_key="test-key"),
        company_provider=FMPCompanyDataProvider(client),
        statement_provider=FMPFinancialStatementProvider(client),
        metrics_provider=FMPMetricsProvider(client),
        chart_provider=chart_provider or FMPChartDataProvider(client),
    )
    return TestClient(app, raise_server_exceptions=False), client


def test_health():
    api, _ = make_app()
    assert api.get("/health").json() == {"status": "ok"}


def test_profile_is_rendered_in_camel_case():
    api, client = make_app()

    response = api.get("/profile/aapl")

    assert response.status_code == 200
    body = response.json()
    assert body["symbol"] == "AAPL"
    assert body["companyName"] == "Apple Inc."
    assert body["marketCap"] == 3e12
    assert body["isEtf"] is None
    assert client.calls == [(PROFILE_ENDPOINT, {"symbol": "AAPL"})]


def test_quote():
    api, _ = make_app()

    body = api.get("/quote/AAPL").json()

    assert body["price"] == 190.1
    assert body["priceAvg50"] == 185.0


def test_search_uses_default_limit():
    api, client = make_app()

    response = api.get("/search", params={"q": "AAPL"})

    assert response.status_code == 200
    assert response.json()[0]["symbol"] == "AAPL"
    assert client.calls == [(SEARCH_SYMBOL_ENDPOINT, {"query": "AAPL", "limit": "10"})]


@pytest.mark.parametrize("params", [{}, {"q": ""}, {"q": "   "}])
def test_search_requires_query(params):
    api, client = make_app()

    response = api.get("/search", params=params)

    assert response.status_code == 400
    assert response.json() == {"error": 'Query parameter "q" is required'}
    assert client.calls == []


@pytest.mark.parametrize("limit", ["-1", "0", "abc", "2.5"])
def test_invalid_limit_is_rejected(limit):
    api, client = make_app()

    response = api.get("/income-statement/AAPL", params={"limit": limit})

    assert response.status_code == 400
    assert response.json() == {"error": "Limit must be a positive number"}
    assert client.calls == []


def test_invalid_financial_period_lists_choices():
    api, client = make_app()

    response = api.get("/metrics/AAPL", params={"period": "weekly"})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid period. Must be one of: annual, quarterly"}
    assert client.calls == []


def test_invalid_chart_period_lists_choices():
    api, _ = make_app()

    response = api.get("/historical/AAPL", params={"period": "2Y"})

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid period. Must be one of: 1D, 1W, 1M, 3M, 1Y, 5Y, MAX"


def test_blank_symbol_is_rejected():
    api, _ = make_app()

    response = api.get("/quote/%20")

    assert response.status_code == 400
    assert response.json() == {"error": "Symbol parameter is required"}


@pytest.mark.parametrize(
    "path,endpoint,field,value",
    [
        ("/income-statement/AAPL", INCOME_STATEMENT_ENDPOINT, "epsDiluted", 6.08),
        ("/balance-sheet/AAPL", BALANCE_SHEET_ENDPOINT, "totalAssets", 3.6e11),
        ("/cash-flow/AAPL", CASH_FLOW_ENDPOINT, "freeCashFlow", 1.08e11),
        ("/metrics/AAPL", KEY_METRICS_ENDPOINT, "peRatio", 37.3),
        ("/ratios/AAPL", RATIOS_ENDPOINT, "currentRatio", 0.87),
    ],
)
def test_period_routes(path, endpoint, field, value):
    api, client = make_app()

    response = api.get(path, params={"period": "quarterly", "limit": "4"})

    assert response.status_code == 200
    assert response.json()[0][field] == value
    assert client.calls == [
        (endpoint, {"symbol": "AAPL", "period": "quarterly", "limit": "4"})
    ]


def test_historical_defaults_to_one_year_and_sorts_oldest_first():
    api, client = make_app()

    response = api.get("/historical/aapl")

    assert [point["date"] for point in response.json()] == ["2024-02-29", "2024-03-01"]
    assert response.json()[0]["adjClose"] == 2.0
    _, params = client.calls[0]
    assert params["symbol"] == "AAPL"
    assert "from" in params


def test_schema_error_maps_to_502():
    api, _ = make_app({PROFILE_ENDPOINT: []})

    response = api.get("/profile/XXXX")

    assert response.status_code == 502
    body = response.json()
    assert body["error"] == "Invalid response from FMP API"
    assert "XXXX" in body["details"]
    assert "rawResponse" not in body


def test_schema_error_exposes_raw_payload_when_enabled():
    api, _ = make_app(
        {PROFILE_ENDPOINT: {"unexpected": True}},
        settings=Settings(fmp_api_key="test-key", expose_error_details=True),
    )

    body = api.get("/profile/AAPL").json()

    assert body["rawResponse"] == {"unexpected": True}


def test_upstream_client_error_keeps_status():
    api, _ = make_app({QUOTE_ENDPOINT: FMPError("Invalid API KEY.", 401, QUOTE_ENDPOINT, 1)})

    response = api.get("/quote/AAPL")

    assert response.status_code == 401
    assert response.json() == {"error": "Invalid API KEY."}


def test_rate_limit_maps_to_429_with_retry_after():
    api, _ = make_app({QUOTE_ENDPOINT: RateLimitedError("Rate limit exceeded", 2500.0)})

    response = api.get("/quote/AAPL")

    assert response.status_code == 429
    assert response.json() == {"error": "Rate limit exceeded", "retryAfter": 2500.0}
    assert response.headers["Retry-After"] == "3"


def test_network_error_maps_to_503():
    api, _ = make_app({RATIOS_ENDPOINT: NetworkError("Network request failed after 3 attempts")})

    response = api.get("/ratios/AAPL")

    assert response.status_code == 503
    assert response.json()["error"] == "Network error"


def test_configuration_error_maps_to_500():
    api, _ = make_app({QUOTE_ENDPOINT: ConfigurationError("FMP_API_KEY missing")})

    response = api.get("/quote/AAPL")

    assert response.status_code == 500
    assert response.json() == {"error": "Server is misconfigured"}


def test_unexpected_error_maps_to_500():
    api, _ = make_app({QUOTE_ENDPOINT: RuntimeError("boom")})

    response = api.get("/quote/AAPL")

    assert response.status_code == 500
    assert response.json() == {"error": "An unexpected error occurred"}


class SlowChartProvider(IChartDataProvider):
    def __init__(self):
        self.cancelled = False

    async def get_historical_prices(self, symbol, period=ChartPeriod.ONE_YEAR):
        try:
            await asyncio.sleep(5)
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        return []


def test_deadline_cancels_work_and_maps_to_504():
    provider = SlowChartProvider()
    api, _ = make_app(
        settings=Settings(fmp_api_key="test-key", request_deadline_seconds=0.05),
        chart_provider=provider,
    )

    response = api.get("/historical/AAPL")

    assert response.status_code == 504
    assert response.json() == {"error": "Upstream request timed out"}
    assert provider.cancelled is True


def test_watchlist_routes_absent_without_auth():
    api, _ = make_app()

    assert api.get("/watchlist").status_code == 404


def test_nan_in_upstream_body_maps_to_502():
    transport = httpx.MockTransport(
        lambda request: httpx.Response(200, content=b'[{"symbol": "AAPL", "price": NaN}]')
    )
    client = FMPClient(api_key="test-key", http_client=httpx.AsyncClient(transport=transport))
    app = create_app(
        Settings(fmp_api_key="test-key"),
        company_provider=FMPCompanyDataProvider(client),
        statement_provider=FMPFinancialStatementProvider(client),
        metrics_provider=FMPMetricsProvider(client),
        chart_provider=FMPChartDataProvider(client),
    )

    response = TestClient(app).get("/profile/AAPL")

    assert response.status_code == 502
    assert response.json()["error"] == "Invalid response from FMP API"
