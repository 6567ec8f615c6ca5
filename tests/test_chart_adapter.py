from datetime import date, datetime, timedelta, timezone

import pytest

from src.domain.entities.periods import ChartPeriod
from src.domain.exceptions import ApiSchemaError
from src.infrastructure.fmp.chart_adapter import (
    HISTORICAL_PRICE_ENDPOINT,
    FMPChartDataProvider,
    calculate_date_range,
    extract_daily_records,
    normalize_historical_prices,
)
from tests.fakes import RecordingFMPClient

TODAY = date(2024, 3, 1)

NEWEST_FIRST = [
    {"date": "2024-03-01", "close": 3.0},
    {"date": "2024-02-29", "close": 2.0},
    {"date": "2024-02-28", "close": 1.0},
]


@pytest.mark.parametrize(
    "period,expected_from",
    [
        (ChartPeriod.ONE_DAY, "2024-02-29"),
        (ChartPeriod.ONE_WEEK, "2024-02-23"),
        (ChartPeriod.ONE_MONTH, "2024-01-31"),
        (ChartPeriod.THREE_MONTHS, (TODAY - timedelta(days=90)).isoformat()),
        (ChartPeriod.ONE_YEAR, "2023-03-02"),
        (ChartPeriod.FIVE_YEARS, (TODAY - timedelta(days=365 * 5)).isoformat()),
    ],
)
def test_calculate_date_range(period, expected_from):
    date_range = calculate_date_range(period, today=TODAY)
    assert date_range.from_date == expected_from
    assert date_range.to_date == "2024-03-01"


def test_max_period_has_no_range():
    assert calculate_date_range(ChartPeriod.MAX, today=TODAY) is None


def test_range_defaults_to_utc_today():
    date_range = calculate_date_range(ChartPeriod.ONE_DAY)
    assert date_range.to_date == datetime.now(timezone.utc).date().isoformat()


def test_extract_daily_records_accepts_both_shapes():
    assert extract_daily_records(NEWEST_FIRST) is NEWEST_FIRST
    assert extract_daily_records({"symbol": "AAPL", "historical": NEWEST_FIRST}) is NEWEST_FIRST
    assert extract_daily_records({"symbol": "AAPL"}) is None
    assert extract_daily_records("junk") is None


def test_normalize_orders_oldest_first():
    points = normalize_historical_prices(NEWEST_FIRST)
    assert [p.date for p in points] == ["2024-02-28", "2024-02-29", "2024-03-01"]
    assert [p.close for p in points] == [1.0, 2.0, 3.0]


def test_normalize_does_not_depend_on_input_order():
    assert normalize_historical_prices(NEWEST_FIRST) == normalize_historical_prices(
        list(reversed(NEWEST_FIRST))
    )


@pytest.mark.asyncio
async def test_provider_sends_range_and_accepts_wrapped_shape():
    client = RecordingFMPClient(
        {HISTORICAL_PRICE_ENDPOINT: {"symbol": "AAPL", "historical": NEWEST_FIRST}}
    )

    points = await FMPChartDataProvider(client).get_historical_prices("AAPL", ChartPeriod.ONE_MONTH)

    assert [p.date for p in points] == ["2024-02-28", "2024-02-29", "2024-03-01"]
    endpoint, params = client.calls[0]
    assert endpoint == HISTORICAL_PRICE_ENDPOINT
    assert params["symbol"] == "AAPL"
    assert set(params) == {"from", "to", "symbol"}


@pytest.mark.asyncio
async def test_provider_omits_range_for_max():
    client = RecordingFMPClient({HISTORICAL_PRICE_ENDPOINT: []})

    assert await FMPChartDataProvider(client).get_historical_prices("AAPL", ChartPeriod.MAX) == []
    assert client.calls == [(HISTORICAL_PRICE_ENDPOINT, {"symbol": "AAPL"})]


@pytest.mark.asyncio
async def test_provider_rejects_unexpected_shape():
    client = RecordingFMPClient({HISTORICAL_PRICE_ENDPOINT: {"symbol": "AAPL"}})

    with pytest.raises(ApiSchemaError, match="Historical price response is invalid for symbol: AAPL"):
        await FMPChartDataProvider(client).get_historical_prices("AAPL")
