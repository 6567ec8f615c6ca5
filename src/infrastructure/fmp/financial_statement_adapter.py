"""
Infrastructure adapter: FMP statement endpoints → IFinancialStatementProvider.
See docs/Architecture.md for the layering rules.

Statements are returned in upstream order (FMP sends newest period first).
FMP spells several cash-flow keys "...Activites"; the typo and the correct
spelling are both accepted, correct spelling first.
"""

from typing import Any, TypeVar

from src.domain.entities.financial_statement import (
    BalanceSheet,
    CashFlowStatement,
    IncomeStatement,
)
from src.domain.entities.periods import FinancialPeriod
from src.domain.exceptions import ApiSchemaError
from src.domain.ports.financial_statement_port import IFinancialStatementProvider
from src.infrastructure.fmp.client import FMPClient
from src.infrastructure.fmp.field_mapping import FieldMap, Numeric, build_record

T = TypeVar("T")

INCOME_STATEMENT_ENDPOINT = "/stable/income-statement"
BALANCE_SHEET_ENDPOINT = "/stable/balance-sheet-statement"
CASH_FLOW_ENDPOINT = "/stable/cash-flow-statement"

_STATEMENT_HEADER: FieldMap = {
    "date": "date",
    "symbol": "symbol",
    "reported_currency": "reportedCurrency",
    "calendar_year": "calendarYear",
    "period": "period",
}

INCOME_STATEMENT_FIELDS: FieldMap = {
    **_STATEMENT_HEADER,
    "revenue": "revenue",
    "cost_of_revenue": "costOfRevenue",
    "gross_profit": "grossProfit",
    "gross_profit_ratio": "grossProfitRatio",
    "research_and_development_expenses": "researchAndDevelopmentExpenses",
    "selling_general_and_administrative_expenses": "sellingGeneralAndAdministrativeExpenses",
    "operating_expenses": "operatingExpenses",
    "operating_income": "operatingIncome",
    "operating_income_ratio": "operatingIncomeRatio",
    "interest_income": "interestIncome",
    "interest_expense": "interestExpense",
    "depreciation_and_amortization": "depreciationAndAmortization",
    "ebitda": "ebitda",
    # FMP lowercases "ratio" and "diluted" on the legacy endpoints.
    "ebitda_ratio": Numeric("ebitdaratio", "ebitdaRatio"),
    "total_other_income_expenses_net": "totalOtherIncomeExpensesNet",
    "income_before_tax": "incomeBeforeTax",
    "income_before_tax_ratio": "incomeBeforeTaxRatio",
    "income_tax_expense": "incomeTaxExpense",
    "net_income": "netIncome",
    "net_income_ratio": "netIncomeRatio",
    "eps": "eps",
    "eps_diluted": Numeric("epsdiluted", "epsDiluted"),
    "weighted_average_shares_outstanding": "weightedAverageShsOut",
    "weighted_average_shares_outstanding_diluted": "weightedAverageShsOutDil",
}

BALANCE_SHEET_FIELDS: FieldMap = {
    **_STATEMENT_HEADER,
    "cash_and_cash_equivalents": "cashAndCashEquivalents",
    "short_term_investments": "shortTermInvestments",
    "cash_and_short_term_investments": "cashAndShortTermInvestments",
    "net_receivables": "netReceivables",
    "inventory": "inventory",
    "other_current_assets": "otherCurrentAssets",
    "total_current_assets": "totalCurrentAssets",
    "property_plant_equipment_net": "propertyPlantEquipmentNet",
    "goodwill": "goodwill",
    "intangible_assets": "intangibleAssets",
    "goodwill_and_intangible_assets": "goodwillAndIntangibleAssets",
    "long_term_investments": "longTermInvestments",
    "tax_assets": "taxAssets",
    "other_non_current_assets": "otherNonCurrentAssets",
    "total_non_current_assets": "totalNonCurrentAssets",
    "total_assets": "totalAssets",
    "account_payables": "accountPayables",
    "short_term_debt": "shortTermDebt",
    "tax_payables": "taxPayables",
    "deferred_revenue": "deferredRevenue",
    "other_current_liabilities": "otherCurrentLiabilities",
    "total_current_liabilities": "totalCurrentLiabilities",
    "long_term_debt": "longTermDebt",
    "deferred_revenue_non_current": "deferredRevenueNonCurrent",
    "deferred_tax_liabilities_non_current": "deferredTaxLiabilitiesNonCurrent",
    "other_non_current_liabilities": "otherNonCurrentLiabilities",
    "total_non_current_liabilities": "totalNonCurrentLiabilities",
    "total_liabilities": "totalLiabilities",
    "common_stock": "commonStock",
    "retained_earnings": "retainedEarnings",
    "accumulated_other_comprehensive_income_loss": "accumulatedOtherComprehensiveIncomeLoss",
    "total_stockholders_equity": "totalStockholdersEquity",
    "total_equity": "totalEquity",
    "total_liabilities_and_stockholders_equity": "totalLiabilitiesAndStockholdersEquity",
    "minority_interest": "minorityInterest",
    "total_investments": "totalInvestments",
    "total_debt": "totalDebt",
    "net_debt": "netDebt",
}

CASH_FLOW_FIELDS: FieldMap = {
    **_STATEMENT_HEADER,
    "net_income": "netIncome",
    "depreciation_and_amortization": "depreciationAndAmortization",
    "deferred_income_tax": "deferredIncomeTax",
    "stock_based_compensation": "stockBasedCompensation",
    "change_in_working_capital": "changeInWorkingCapital",
    "accounts_receivables": "accountsReceivables",
    "inventory": "inventory",
    "accounts_payables": "accountsPayables",
    "other_working_capital": "otherWorkingCapital",
    "other_non_cash_items": "otherNonCashItems",
    "net_cash_provided_by_operating_activities": "netCashProvidedByOperatingActivities",
    "investments_in_property_plant_and_equipment": "investmentsInPropertyPlantAndEquipment",
    "acquisitions_net": "acquisitionsNet",
    "purchases_of_investments": "purchasesOfInvestments",
    "sales_maturities_of_investments": "salesMaturitiesOfInvestments",
    "other_investing_activities": Numeric(
        "otherInvestingActivities", "otherInvestingActivites"
    ),
    "net_cash_used_for_investing_activities": Numeric(
        "netCashUsedForInvestingActivities", "netCashUsedForInvestingActivites"
    ),
    "debt_repayment": "debtRepayment",
    "common_stock_issued": "commonStockIssued",
    "common_stock_repurchased": "commonStockRepurchased",
    "dividends_paid": "dividendsPaid",
    "other_financing_activities": Numeric(
        "otherFinancingActivities", "otherFinancingActivites"
    ),
    "net_cash_used_provided_by_financing_activities": Numeric(
        "netCashUsedProvidedByFinancingActivities", "netCashProvidedByFinancingActivities"
    ),
    "effect_of_forex_changes_on_cash": "effectOfForexChangesOnCash",
    "net_change_in_cash": "netChangeInCash",
    "cash_at_end_of_period": "cashAtEndOfPeriod",
    "cash_at_beginning_of_period": "cashAtBeginningOfPeriod",
    "operating_cash_flow": "operatingCashFlow",
    "capital_expenditure": "capitalExpenditure",
    "free_cash_flow": "freeCashFlow",
}


def build_period_params(symbol: str, period: FinancialPeriod, limit: int) -> dict[str, str]:
    return {"symbol": symbol, "period": FinancialPeriod(period).value, "limit": str(limit)}


def normalize_list(
    payload: Any, record_type: type[T], field_map: FieldMap, message: str
) -> list[T]:
    """Map every element of an array payload, or fail on any other container."""
    if not isinstance(payload, list):
        raise ApiSchemaError(message, payload)
    return [build_record(record_type, item, field_map) for item in payload]


class FMPFinancialStatementProvider(IFinancialStatementProvider):
    """Income, balance-sheet and cash-flow statements from FMP."""

    def __init__(self, client: FMPClient) -> None:
        self._client = client

    async def get_income_statement(
        self,
        symbol: str,
        period: FinancialPeriod = FinancialPeriod.ANNUAL,
        limit: int = 10,
    ) -> list[IncomeStatement]:
        payload = await self._client.fetch(
            INCOME_STATEMENT_ENDPOINT, build_period_params(symbol, period, limit)
        )
        return normalize_list(
            payload,
            IncomeStatement,
            INCOME_STATEMENT_FIELDS,
            f"Income statement response is not an array for symbol: {symbol}",
        )

    async def get_balance_sheet(
        self,
        symbol: str,
        period: FinancialPeriod = FinancialPeriod.ANNUAL,
        limit: int = 10,
    ) -> list[BalanceSheet]:
        payload = await self._client.fetch(
            BALANCE_SHEET_ENDPOINT, build_period_params(symbol, period, limit)
        )
        return normalize_list(
            payload,
            BalanceSheet,
            BALANCE_SHEET_FIELDS,
            f"Balance sheet response is not an array for symbol: {symbol}",
        )

    async def get_cash_flow(
        self,
        symbol: str,
        period: FinancialPeriod = FinancialPeriod.ANNUAL,
        limit: int = 10,
    ) -> list[CashFlowStatement]:
        payload = await self._client.fetch(
            CASH_FLOW_ENDPOINT, build_period_params(symbol, period, limit)
        )
        return normalize_list(
            payload,
            CashFlowStatement,
            CASH_FLOW_FIELDS,
            f"Cash flow statement response is not an array for symbol: {symbol}",
        )
