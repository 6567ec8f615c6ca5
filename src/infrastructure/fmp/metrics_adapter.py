"""
Infrastructure adapter: FMP key-metrics and ratios endpoints → IMetricsProvider.
See docs/Architecture.md for the layering rules.

FMP has renamed many valuation fields across API generations (peRatio,
priceEarningsRatio, priceToEarningsRatio, pe, ...). Every spelling seen in
the wild is listed below in a fixed priority order. When two spellings both
carry numbers, the earlier one wins even if the values disagree.
"""

from src.domain.entities.metrics import FinancialRatios, KeyMetrics
from src.domain.entities.periods import FinancialPeriod
from src.domain.ports.metrics_port import IMetricsProvider
from src.infrastructure.fmp.client import FMPClient
from src.infrastructure.fmp.field_mapping import FieldMap, Numeric
from src.infrastructure.fmp.financial_statement_adapter import (
    build_period_params,
    normalize_list,
)

KEY_METRICS_ENDPOINT = "/stable/key-metrics"
RATIOS_ENDPOINT = "/stable/ratios"

KEY_METRICS_FIELDS: FieldMap = {
    "symbol": "symbol",
    "date": "date",
    "calendar_year": "calendarYear",
    "period": "period",
    "revenue_per_share": Numeric("revenuePerShare", "revenuePerShareTTM"),
    "net_income_per_share": Numeric("netIncomePerShare", "earningsPerShare", "eps"),
    "operating_cash_flow_per_share": "operatingCashFlowPerShare",
    "free_cash_flow_per_share": "freeCashFlowPerShare",
    "cash_per_share": "cashPerShare",
    "book_value_per_share": "bookValuePerShare",
    "tangible_book_value_per_share": "tangibleBookValuePerShare",
    "market_cap": Numeric("marketCap", "marketCapitalization"),
    "enterprise_value": "enterpriseValue",
    "pe_ratio": Numeric(
        "peRatio", "priceEarningsRatio", "priceToEarningsRatio", "pe", "peRatioTTM"
    ),
    "price_to_sales_ratio": "priceToSalesRatio",
    "pfcf_ratio": "pfcfRatio",
    "pb_ratio": Numeric(
        "pbRatio", "priceToBookRatio", "priceBookValueRatio", "priceToBook", "pbRatioTTM"
    ),
    "ev_to_sales": "evToSales",
    "ev_to_ebitda": Numeric("enterpriseValueOverEBITDA", "evToEBITDA"),
    "ev_to_operating_cash_flow": "evToOperatingCashFlow",
    "ev_to_free_cash_flow": "evToFreeCashFlow",
    "earnings_yield": "earningsYield",
    "free_cash_flow_yield": "freeCashFlowYield",
    "debt_to_equity": "debtToEquity",
    "debt_to_assets": "debtToAssets",
    "net_debt_to_ebitda": "netDebtToEBITDA",
    "current_ratio": "currentRatio",
    "interest_coverage": "interestCoverage",
    "roe": Numeric("roe", "returnOnEquity", "roeTTM", "returnOnEquityTTM"),
    "roic": "roic",
    "return_on_tangible_assets": "returnOnTangibleAssets",
    "income_quality": "incomeQuality",
    "dividend_yield": "dividendYield",
    "payout_ratio": "payoutRatio",
    "days_sales_outstanding": "daysSalesOutstanding",
    "days_payables_outstanding": "daysPayablesOutstanding",
    "days_of_inventory_on_hand": "daysOfInventoryOnHand",
    "receivables_turnover": "receivablesTurnover",
    "payables_turnover": "payablesTurnover",
    "inventory_turnover": "inventoryTurnover",
}

FINANCIAL_RATIOS_FIELDS: FieldMap = {
    "symbol": "symbol",
    "date": "date",
    "calendar_year": "calendarYear",
    "period": "period",
    "current_ratio": "currentRatio",
    "quick_ratio": "quickRatio",
    "cash_ratio": "cashRatio",
    "gross_profit_margin": "grossProfitMargin",
    "operating_profit_margin": "operatingProfitMargin",
    "pretax_profit_margin": "pretaxProfitMargin",
    "net_profit_margin": "netProfitMargin",
    "effective_tax_rate": "effectiveTaxRate",
    "return_on_assets": "returnOnAssets",
    "return_on_equity": "returnOnEquity",
    "return_on_capital_employed": "returnOnCapitalEmployed",
    "debt_ratio": "debtRatio",
    "debt_equity_ratio": Numeric("debtEquityRatio", "debtToEquity"),
    "long_term_debt_to_capitalization": "longTermDebtToCapitalization",
    "total_debt_to_capitalization": "totalDebtToCapitalization",
    "interest_coverage": "interestCoverage",
    "cash_flow_to_debt_ratio": "cashFlowToDebtRatio",
    "company_equity_multiplier": "companyEquityMultiplier",
    "receivables_turnover": "receivablesTurnover",
    "payables_turnover": "payablesTurnover",
    "inventory_turnover": "inventoryTurnover",
    "fixed_asset_turnover": "fixedAssetTurnover",
    "asset_turnover": "assetTurnover",
    "operating_cycle": "operatingCycle",
    "cash_conversion_cycle": "cashConversionCycle",
    "operating_cash_flow_per_share": "operatingCashFlowPerShare",
    "free_cash_flow_per_share": "freeCashFlowPerShare",
    "cash_per_share": "cashPerShare",
    "price_book_value_ratio": "priceBookValueRatio",
    "price_to_sales_ratio": "priceToSalesRatio",
    "price_earnings_ratio": "priceEarningsRatio",
    "price_to_free_cash_flows_ratio": "priceToFreeCashFlowsRatio",
    "price_to_operating_cash_flows_ratio": "priceToOperatingCashFlowsRatio",
    "price_earnings_to_growth_ratio": "priceEarningsToGrowthRatio",
    "dividend_yield": "dividendYield",
    "enterprise_value_multiple": "enterpriseValueMultiple",
    "price_fair_value": "priceFairValue",
    "dividend_payout_ratio": "dividendPayoutRatio",
}


class FMPMetricsProvider(IMetricsProvider):
    def __init__(self, client: FMPClient) -> None:
        self._client = client

    async def get_key_metrics(
        self,
        symbol: str,
        period: FinancialPeriod = FinancialPeriod.ANNUAL,
        limit: int = 10,
    ) -> list[KeyMetrics]:
        payload = await self._client.fetch(
            KEY_METRICS_ENDPOINT, build_period_params(symbol, period, limit)
        )
        return normalize_list(
            payload,
            KeyMetrics,
            KEY_METRICS_FIELDS,
            f"Key metrics response is not an array for symbol: {symbol}",
        )

    async def get_financial_ratios(
        self,
        symbol: str,
        period: FinancialPeriod = FinancialPeriod.ANNUAL,
        limit: int = 10,
    ) -> list[FinancialRatios]:
        payload = await self._client.fetch(
            RATIOS_ENDPOINT, build_period_params(symbol, period, limit)
        )
        return normalize_list(
            payload,
            FinancialRatios,
            FINANCIAL_RATIOS_FIELDS,
            f"Financial ratios response is not an array for symbol: {symbol}",
        )
