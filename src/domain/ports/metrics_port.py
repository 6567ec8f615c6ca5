"""
Port (interface) for key metrics and financial ratio providers.
Infrastructure adapters (e.g. FMPMetricsProvider) must implement this interface.
"""

from abc import ABC, abstractmethod

from src.domain.entities.metrics import FinancialRatios, KeyMetrics
from src.domain.entities.periods import FinancialPeriod


class IMetricsProvider(ABC):
    @abstractmethod
    async def get_key_metrics(
        self,
        symbol: str,
        period: FinancialPeriod = FinancialPeriod.ANNUAL,
        limit: int = 10,
    ) -> list[KeyMetrics]: ...

    @abstractmethod
    async def get_financial_ratios(
        self,
        symbol: str,
        period: FinancialPeriod = FinancialPeriod.ANNUAL,
        limit: int = 10,
    ) -> list[FinancialRatios]: ...
