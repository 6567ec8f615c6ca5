"""
Port (interface) for historical price providers.
See docs/Architecture.md for the layering rules.
Infrastructure adapters (e.g. FMPChartDataProvider) must implement this interface.
"""

from abc import ABC, abstractmethod

from src.domain.entities.periods import ChartPeriod
from src.domain.entities.stock_price import HistoricalPricePoint


class IChartDataProvider(ABC):
    @abstractmethod
    async def get_historical_prices(
        self,
        symbol: str,
        period: ChartPeriod = ChartPeriod.ONE_YEAR,
    ) -> list[HistoricalPricePoint]:
        """Return daily prices for *period*, oldest first."""
        ...
