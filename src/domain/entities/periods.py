"""
Closed period enumerations shared by the statement, metrics and chart ports.
Zero external dependencies.
"""

from enum import Enum


class FinancialPeriod(str, Enum):
    ANNUAL = "annual"
    QUARTERLY = "quarterly"


class ChartPeriod(str, Enum):
    ONE_DAY = "1D"
    ONE_WEEK = "1W"
    ONE_MONTH = "1M"
    THREE_MONTHS = "3M"
    ONE_YEAR = "1Y"
    FIVE_YEARS = "5Y"
    MAX = "MAX"


# Lookback window per chart period; MAX means "no date bounds".
CHART_PERIOD_DAYS: dict[ChartPeriod, int | None] = {
    ChartPeriod.ONE_DAY: 1,
    ChartPeriod.ONE_WEEK: 7,
    ChartPeriod.ONE_MONTH: 30,
    ChartPeriod.THREE_MONTHS: 90,
    ChartPeriod.ONE_YEAR: 365,
    ChartPeriod.FIVE_YEARS: 365 * 5,
    ChartPeriod.MAX: None,
}
