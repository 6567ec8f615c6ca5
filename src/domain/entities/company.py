"""
Domain entities for company search results, profiles and quotes.
See docs/Architecture.md for the layering rules.
Zero external dependencies: pure Python dataclasses only.

Every field is present on every instance; a value the provider did not send
is None rather than absent.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SearchResult:
    symbol: Optional[str]
    name: Optional[str]
    currency: Optional[str]
    exchange: Optional[str]
    exchange_short_name: Optional[str]


@dataclass(frozen=True)
class CompanyProfile:
    symbol: Optional[str]
    company_name: Optional[str]
    price: Optional[float]
    changes: Optional[float]
    currency: Optional[str]
    exchange: Optional[str]
    exchange_short_name: Optional[str]
    industry: Optional[str]
    sector: Optional[str]
    country: Optional[str]
    market_cap: Optional[float]
    description: Optional[str]
    ceo: Optional[str]
    website: Optional[str]
    image: Optional[str]
    ipo_date: Optional[str]
    full_time_employees: Optional[str]
    phone: Optional[str]
    address: Optional[str]
    city: Optional[str]
    state: Optional[str]
    zip: Optional[str]
    beta: Optional[float]
    volume_avg: Optional[float]
    last_dividend: Optional[float]
    range: Optional[str]
    dcf: Optional[float]
    is_etf: Optional[bool]
    is_actively_trading: Optional[bool]
    is_adr: Optional[bool]
    is_fund: Optional[bool]


@dataclass(frozen=True)
class CompanyQuote:
    symbol: Optional[str]
    name: Optional[str]
    price: Optional[float]
    change: Optional[float]
    changes_percentage: Optional[float]
    day_low: Optional[float]
    day_high: Optional[float]
    year_low: Optional[float]
    year_high: Optional[float]
    market_cap: Optional[float]
    volume: Optional[float]
    avg_volume: Optional[float]
    open: Optional[float]
    previous_close: Optional[float]
    eps: Optional[float]
    pe: Optional[float]
    price_avg50: Optional[float]
    price_avg200: Optional[float]
    shares_outstanding: Optional[float]
    earnings_announcement: Optional[str]
    timestamp: Optional[int]
