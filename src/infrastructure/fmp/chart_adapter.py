"""
Infrastructure adapter: FMP end-of-day history → IChartDataProvider.
See docs/Architecture.md for the layering rules.

The endpoint answers in one of two shapes depending on the plan and API
generation: a bare array of daily records, or {"symbol": ..., "historical": [...]}.
Both are accepted. FMP sends newest first; callers always receive oldest first.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Any, Optional

from src.domain.entities.periods import CHART_PERIOD_DAYS, ChartPeriod
from src.domain.entities.stock_price import DateRange, HistoricalPricePoint
from src.domain.exceptions import ApiSchemaError
from src.domain.ports.chart_data_port import IChartDataProvider
from src.infrastructure.fmp.client import FMPClient
from src.infrastructure.fmp.field_mapping import FieldMap, Numeric, build_record

HISTORICAL_PRICE_ENDPOINT = "/stable/historical-price-eod/full"

HISTORICAL_PRICE_FIELDS: FieldMap = {
    "date": "date",
    "open": "open",
    "high": "high",
    "low": "low",
    "close": "close",
    # The array shape has no adjusted close; the unadjusted close stands in.
    "adj_close": Numeric("adjClose", "close"),
    "volume": "volume",
    "change": "change",
    "change_percent": "changePercent",
    "vwap": "vwap",
}


def calculate_date_range(
    period: ChartPeriod, today: Optional[date] = None
) -> Optional[DateRange]:
    """Lookback window ending today (UTC) for *period*; None for MAX."""
    days = CHART_PERIOD_DAYS[ChartPeriod(period)]
    if days is None:
        return None
    end = today or datetime.now(timezone.utc).date()
    start = end - timedelta(days=days)
    return DateRange(from_date=start.isoformat(), to_date=end.isoformat())


def extract_daily_records(payload: Any) -> Optional[list]:
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict) and isinstance(payload.get("historical"), list):
        return payload["historical"]
    return None


def normalize_historical_prices(records: list) -> list[HistoricalPricePoint]:
    """Map daily records and order them oldest first.

    Ordering is by ISO date, so the result does not depend on whether the
    provider sent newest-first or oldest-first. Undated records sort first.
    """
    points = [build_record(HistoricalPricePoint, record, HISTORICAL_PRICE_FIELDS) for record in records]
    return sorted(points, key=lambda point: point.date if isinstance(point.date, str) else "")


class FMPChartDataProvider(IChartDataProvider):
    """Daily price history from FMP."""

    def __init__(self, client: FMPClient) -> None:
        self._client = client

    async def get_historical_prices(
        self,
        symbol: str,
        period: ChartPeriod = ChartPeriod.ONE_YEAR,
    ) -> list[HistoricalPricePoint]:
        params = {}
        date_range = calculate_date_range(period)
        if date_range is not None:
            params["from"] = date_range.from_date
            params["to"] = date_range.to_date
        params["symbol"] = symbol

        payload = await self._client.fetch(HISTORICAL_PRICE_ENDPOINT, params)

        records = extract_daily_records(payload)
        if records is None:
            raise ApiSchemaError(
                f"Historical price response is invalid for symbol: {symbol}", payload
            )
        return normalize_historical_prices(records)
