"""
Use-cases: retrieve key metrics and financial ratios.
Depends only on Domain ports and entities: no infrastructure imports.
"""

from src.application.use_cases._symbols import canonical_symbol, positive_limit
from src.domain.entities.metrics import FinancialRatios, KeyMetrics
from src.domain.entities.periods import FinancialPeriod
from src.domain.ports.metrics_port import IMetricsProvider


class GetKeyMetricsUseCase:
    def __init__(self, provider: IMetricsProvider) -> None:
        self._provider = provider

    async def execute(
        self,
        symbol: str,
        period: FinancialPeriod = FinancialPeriod.ANNUAL,
        limit: int = 10,
    ) -> list[KeyMetrics]:
        return await self._provider.get_key_metrics(
            canonical_symbol(symbol), period, positive_limit(limit)
        )


class GetFinancialRatiosUseCase:
    def __init__(self, provider: IMetricsProvider) -> None:
        self._provider = provider

    async def execute(
        self,
        symbol: str,
        period: FinancialPeriod = FinancialPeriod.ANNUAL,
        limit: int = 10,
    ) -> list[FinancialRatios]:
        return await self._provider.get_financial_ratios(
            canonical_symbol(symbol), period, positive_limit(limit)
        )
