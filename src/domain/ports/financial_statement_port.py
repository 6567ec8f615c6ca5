"""
Port (interface) for financial statement providers.
See docs/Architecture.md for the layering rules.
Infrastructure adapters (e.g. FMPFinancialStatementProvider) must implement this interface.
"""

from abc import ABC, abstractmethod

from src.domain.entities.financial_statement import (
    BalanceSheet,
    CashFlowStatement,
    IncomeStatement,
)
from src.domain.entities.periods import FinancialPeriod


class IFinancialStatementProvider(ABC):
    @abstractmethod
    async def get_income_statement(
        self,
        symbol: str,
        period: FinancialPeriod = FinancialPeriod.ANNUAL,
        limit: int = 10,
    ) -> list[IncomeStatement]: ...

    @abstractmethod
    async def get_balance_sheet(
        self,
        symbol: str,
        period: FinancialPeriod = FinancialPeriod.ANNUAL,
        limit: int = 10,
    ) -> list[BalanceSheet]: ...

    @abstractmethod
    async def get_cash_flow(
        self,
        symbol: str,
        period: FinancialPeriod = FinancialPeriod.ANNUAL,
        limit: int = 10,
    ) -> list[CashFlowStatement]: ...
