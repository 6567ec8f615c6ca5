import pytest

from src.domain.entities.periods import FinancialPeriod
from src.domain.exceptions import ApiSchemaError
from src.infrastructure.fmp.financial_statement_adapter import (
    BALANCE_SHEET_ENDPOINT,
    CASH_FLOW_ENDPOINT,
    INCOME_STATEMENT_ENDPOINT,
    FMPFinancialStatementProvider,
    build_period_params,
)
from src.infrastructure.fmp.metrics_adapter import (
    KEY_METRICS_ENDPOINT,
    RATIOS_ENDPOINT,
    FMPMetricsProvider,
)
from tests.fakes import RecordingFMPClient


def test_build_period_params():
    assert build_period_params("AAPL", FinancialPeriod.QUARTERLY, 4) == {
        "symbol": "AAPL",
        "period": "quarterly",
        "limit": "4",
    }


@pytest.mark.asyncio
async def test_income_statements_keep_upstream_order():
    client = RecordingFMPClient(
        {
            INCOME_STATEMENT_ENDPOINT: [
                {"date": "2024-09-28", "revenue": 391e9, "calendarYear": "2024"},
                {"date": "2023-09-30", "revenue": 383e9, "calendarYear": "2023"},
            ]
        }
    )
    provider = FMPFinancialStatementProvider(client)

    statements = await provider.get_income_statement("AAPL", FinancialPeriod.ANNUAL, 2)

    assert [s.date for s in statements] == ["2024-09-28", "2023-09-30"]
    assert statements[0].revenue == 391e9
    assert statements[0].calendar_year == "2024"
    assert client.calls == [
        (INCOME_STATEMENT_ENDPOINT, {"symbol": "AAPL", "period": "annual", "limit": "2"})
    ]


@pytest.mark.asyncio
async def test_empty_statement_array_is_not_an_error():
    client = RecordingFMPClient({BALANCE_SHEET_ENDPOINT: []})

    assert await FMPFinancialStatementProvider(client).get_balance_sheet("AAPL") == []


@pytest.mark.asyncio
async def test_balance_sheet_null_element_becomes_empty_record():
    client = RecordingFMPClient({BALANCE_SHEET_ENDPOINT: [None, {"totalAssets": 1.0}]})

    sheets = await FMPFinancialStatementProvider(client).get_balance_sheet("AAPL")

    assert sheets[0].total_assets is None
    assert sheets[1].total_assets == 1.0


@pytest.mark.asyncio
async def test_cash_flow_non_array_names_symbol():
    client = RecordingFMPClient({CASH_FLOW_ENDPOINT: {"Error Message": "nope"}})

    with pytest.raises(ApiSchemaError) as excinfo:
        await FMPFinancialStatementProvider(client).get_cash_flow("TSLA")

    assert str(excinfo.value) == "Cash flow statement response is not an array for symbol: TSLA"
    assert excinfo.value.raw_response == {"Error Message": "nope"}


@pytest.mark.asyncio
async def test_key_metrics_request_and_normalization():
    client = RecordingFMPClient(
        {KEY_METRICS_ENDPOINT: [{"symbol": "AAPL", "priceToEarningsRatio": 29.5}]}
    )

    metrics = await FMPMetricsProvider(client).get_key_metrics(
        "AAPL", FinancialPeriod.QUARTERLY, 8
    )

    assert metrics[0].pe_ratio == 29.5
    assert metrics[0].pb_ratio is None
    assert client.calls == [
        (KEY_METRICS_ENDPOINT, {"symbol": "AAPL", "period": "quarterly", "limit": "8"})
    ]


@pytest.mark.asyncio
async def test_ratios_non_array_raises_schema_error():
    client = RecordingFMPClient({RATIOS_ENDPOINT: "oops"})

    with pytest.raises(ApiSchemaError, match="Financial ratios response is not an array"):
        await FMPMetricsProvider(client).get_financial_ratios("AAPL")
