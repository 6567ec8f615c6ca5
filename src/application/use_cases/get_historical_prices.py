"""
Use-case: retrieve daily historical prices for a given symbol.
See docs/Architecture.md for the layering rules.
Depends only on Domain ports and entities: no infrastructure imports.
"""

from src.application.use_cases._symbols import canonical_symbol
from src.domain.entities.periods import ChartPeriod
from src.domain.entities.stock_price import HistoricalPricePoint
from src.domain.ports.chart_data_port import IChartDataProvider


class GetHistoricalPricesUseCase:
    def __init__(self, provider: IChartDataProvider) -> None:
        self._provider = provider

    async def execute(
        self,
        symbol: str,
        period: ChartPeriod = ChartPeriod.ONE_YEAR,
    ) -> list[HistoricalPricePoint]:
        """Fetch daily prices for *symbol* over *period*.

        Args:
            symbol: Ticker symbol (case-insensitive).
            period: Lookback window; MAX requests the full history.

        Returns:
            Price points ordered oldest first.

        Raises:
            InvalidParameterError: if *symbol* is blank.
            Any MarketDataError propagated from the IChartDataProvider.
        """
        return await self._provider.get_historical_prices(canonical_symbol(symbol), period)
