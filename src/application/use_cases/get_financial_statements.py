"""
Use-cases: retrieve income statements, balance sheets and cash flow statements.
Depends only on Domain ports and entities: no infrastructure imports.
"""

from src.application.use_cases._symbols import canonical_symbol, positive_limit
from src.domain.entities.financial_statement import (
    BalanceSheet,
    CashFlowStatement,
    IncomeStatement,
)
from src.domain.entities.periods import FinancialPeriod
from src.domain.ports.financial_statement_port import IFinancialStatementProvider


class _StatementUseCase:
    def __init__(self, provider: IFinancialStatementProvider) -> None:
        self._provider = provider


class GetIncomeStatementUseCase(_StatementUseCase):
    async def execute(
        self,
        symbol: str,
        period: FinancialPeriod = FinancialPeriod.ANNUAL,
        limit: int = 10,
    ) -> list[IncomeStatement]:
        return await self._provider.get_income_statement(
            canonical_symbol(symbol), period, positive_limit(limit)
        )


class GetBalanceSheetUseCase(_StatementUseCase):
    async def execute(
        self,
        symbol: str,
        period: FinancialPeriod = FinancialPeriod.ANNUAL,
        limit: int = 10,
    ) -> list[BalanceSheet]:
        return await self._provider.get_balance_sheet(
            canonical_symbol(symbol), period, positive_limit(limit)
        )


class GetCashFlowUseCase(_StatementUseCase):
    async def execute(
        self,
        symbol: str,
        period: FinancialPeriod = FinancialPeriod.ANNUAL,
        limit: int = 10,
    ) -> list[CashFlowStatement]:
        return await self._provider.get_cash_flow(
            canonical_symbol(symbol), period, positive_limit(limit)
        )
