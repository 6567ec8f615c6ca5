"""
Domain entities for historical price data.
See docs/Architecture.md for the layering rules.
Zero external dependencies: pure Python dataclasses only.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class HistoricalPricePoint:
    date: Optional[str]
    open: Optional[float]
    high: Optional[float]
    low: Optional[float]
    close: Optional[float]
    adj_close: Optional[float]
    volume: Optional[float]
    change: Optional[float]
    change_percent: Optional[float]
    vwap: Optional[float]


@dataclass(frozen=True)
class DateRange:
    """Inclusive calendar window, both ends formatted as YYYY-MM-DD (UTC)."""

    from_date: str
    to_date: str
