"""
Domain entities for derived per-period metrics and financial ratios.
Zero external dependencies: pure Python dataclasses only.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class KeyMetrics:
    symbol: Optional[str]
    date: Optional[str]
    calendar_year: Optional[str]
    period: Optional[str]
    # Per-share
    revenue_per_share: Optional[float]
    net_income_per_share: Optional[float]
    operating_cash_flow_per_share: Optional[float]
    free_cash_flow_per_share: Optional[float]
    cash_per_share: Optional[float]
    book_value_per_share: Optional[float]
    tangible_book_value_per_share: Optional[float]
    # Valuation
    market_cap: Optional[float]
    enterprise_value: Optional[float]
    pe_ratio: Optional[float]
    price_to_sales_ratio: Optional[float]
    pfcf_ratio: Optional[float]
    pb_ratio: Optional[float]
    ev_to_sales: Optional[float]
    ev_to_ebitda: Optional[float]
    ev_to_operating_cash_flow: Optional[float]
    ev_to_free_cash_flow: Optional[float]
    earnings_yield: Optional[float]
    free_cash_flow_yield: Optional[float]
    # Leverage and liquidity
    debt_to_equity: Optional[float]
    debt_to_assets: Optional[float]
    net_debt_to_ebitda: Optional[float]
    current_ratio: Optional[float]
    interest_coverage: Optional[float]
    # Profitability
    roe: Optional[float]
    roic: Optional[float]
    return_on_tangible_assets: Optional[float]
    income_quality: Optional[float]
    # Dividends
    dividend_yield: Optional[float]
    payout_ratio: Optional[float]
    # Efficiency
    days_sales_outstanding: Optional[float]
    days_payables_outstanding: Optional[float]
    days_of_inventory_on_hand: Optional[float]
    receivables_turnover: Optional[float]
    payables_turnover: Optional[float]
    inventory_turnover: Optional[float]


@dataclass(frozen=True)
class FinancialRatios:
    symbol: Optional[str]
    date: Optional[str]
    calendar_year: Optional[str]
    period: Optional[str]
    # Liquidity
    current_ratio: Optional[float]
    quick_ratio: Optional[float]
    cash_ratio: Optional[float]
    # Margins
    gross_profit_margin: Optional[float]
    operating_profit_margin: Optional[float]
    pretax_profit_margin: Optional[float]
    net_profit_margin: Optional[float]
    effective_tax_rate: Optional[float]
    # Returns
    return_on_assets: Optional[float]
    return_on_equity: Optional[float]
    return_on_capital_employed: Optional[float]
    # Leverage
    debt_ratio: Optional[float]
    debt_equity_ratio: Optional[float]
    long_term_debt_to_capitalization: Optional[float]
    total_debt_to_capitalization: Optional[float]
    interest_coverage: Optional[float]
    cash_flow_to_debt_ratio: Optional[float]
    company_equity_multiplier: Optional[float]
    # Activity
    receivables_turnover: Optional[float]
    payables_turnover: Optional[float]
    inventory_turnover: Optional[float]
    fixed_asset_turnover: Optional[float]
    asset_turnover: Optional[float]
    operating_cycle: Optional[float]
    cash_conversion_cycle: Optional[float]
    # Per-share
    operating_cash_flow_per_share: Optional[float]
    free_cash_flow_per_share: Optional[float]
    cash_per_share: Optional[float]
    # Valuation
    price_book_value_ratio: Optional[float]
    price_to_sales_ratio: Optional[float]
    price_earnings_ratio: Optional[float]
    price_to_free_cash_flows_ratio: Optional[float]
    price_to_operating_cash_flows_ratio: Optional[float]
    price_earnings_to_growth_ratio: Optional[float]
    dividend_yield: Optional[float]
    enterprise_value_multiple: Optional[float]
    price_fair_value: Optional[float]
    # Dividends
    dividend_payout_ratio: Optional[float]
