"""
Domain entities for income statements, balance sheets and cash flow statements.
See docs/Architecture.md for the layering rules.
Zero external dependencies: pure Python dataclasses only.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class IncomeStatement:
    date: Optional[str]
    symbol: Optional[str]
    reported_currency: Optional[str]
    calendar_year: Optional[str]
    period: Optional[str]
    revenue: Optional[float]
    cost_of_revenue: Optional[float]
    gross_profit: Optional[float]
    gross_profit_ratio: Optional[float]
    research_and_development_expenses: Optional[float]
    selling_general_and_administrative_expenses: Optional[float]
    operating_expenses: Optional[float]
    operating_income: Optional[float]
    operating_income_ratio: Optional[float]
    interest_income: Optional[float]
    interest_expense: Optional[float]
    depreciation_and_amortization: Optional[float]
    ebitda: Optional[float]
    ebitda_ratio: Optional[float]
    total_other_income_expenses_net: Optional[float]
    income_before_tax: Optional[float]
    income_before_tax_ratio: Optional[float]
    income_tax_expense: Optional[float]
    net_income: Optional[float]
    net_income_ratio: Optional[float]
    eps: Optional[float]
    eps_diluted: Optional[float]
    weighted_average_shares_outstanding: Optional[float]
    weighted_average_shares_outstanding_diluted: Optional[float]


@dataclass(frozen=True)
class BalanceSheet:
    date: Optional[str]
    symbol: Optional[str]
    reported_currency: Optional[str]
    calendar_year: Optional[str]
    period: Optional[str]
    # Assets
    cash_and_cash_equivalents: Optional[float]
    short_term_investments: Optional[float]
    cash_and_short_term_investments: Optional[float]
    net_receivables: Optional[float]
    inventory: Optional[float]
    other_current_assets: Optional[float]
    total_current_assets: Optional[float]
    property_plant_equipment_net: Optional[float]
    goodwill: Optional[float]
    intangible_assets: Optional[float]
    goodwill_and_intangible_assets: Optional[float]
    long_term_investments: Optional[float]
    tax_assets: Optional[float]
    other_non_current_assets: Optional[float]
    total_non_current_assets: Optional[float]
    total_assets: Optional[float]
    # Liabilities
    account_payables: Optional[float]
    short_term_debt: Optional[float]
    tax_payables: Optional[float]
    deferred_revenue: Optional[float]
    other_current_liabilities: Optional[float]
    total_current_liabilities: Optional[float]
    long_term_debt: Optional[float]
    deferred_revenue_non_current: Optional[float]
    deferred_tax_liabilities_non_current: Optional[float]
    other_non_current_liabilities: Optional[float]
    total_non_current_liabilities: Optional[float]
    total_liabilities: Optional[float]
    # Equity
    common_stock: Optional[float]
    retained_earnings: Optional[float]
    accumulated_other_comprehensive_income_loss: Optional[float]
    total_stockholders_equity: Optional[float]
    total_equity: Optional[float]
    total_liabilities_and_stockholders_equity: Optional[float]
    minority_interest: Optional[float]
    # Aggregates computed by the provider
    total_investments: Optional[float]
    total_debt: Optional[float]
    net_debt: Optional[float]


@dataclass(frozen=True)
class CashFlowStatement:
    date: Optional[str]
    symbol: Optional[str]
    reported_currency: Optional[str]
    calendar_year: Optional[str]
    period: Optional[str]
    # Operating activities
    net_income: Optional[float]
    depreciation_and_amortization: Optional[float]
    deferred_income_tax: Optional[float]
    stock_based_compensation: Optional[float]
    change_in_working_capital: Optional[float]
    accounts_receivables: Optional[float]
    inventory: Optional[float]
    accounts_payables: Optional[float]
    other_working_capital: Optional[float]
    other_non_cash_items: Optional[float]
    net_cash_provided_by_operating_activities: Optional[float]
    # Investing activities
    investments_in_property_plant_and_equipment: Optional[float]
    acquisitions_net: Optional[float]
    purchases_of_investments: Optional[float]
    sales_maturities_of_investments: Optional[float]
    other_investing_activities: Optional[float]
    net_cash_used_for_investing_activities: Optional[float]
    # Financing activities
    debt_repayment: Optional[float]
    common_stock_issued: Optional[float]
    common_stock_repurchased: Optional[float]
    dividends_paid: Optional[float]
    other_financing_activities: Optional[float]
    net_cash_used_provided_by_financing_activities: Optional[float]
    # Summary
    effect_of_forex_changes_on_cash: Optional[float]
    net_change_in_cash: Optional[float]
    cash_at_end_of_period: Optional[float]
    cash_at_beginning_of_period: Optional[float]
    operating_cash_flow: Optional[float]
    capital_expenditure: Optional[float]
    free_cash_flow: Optional[float]
