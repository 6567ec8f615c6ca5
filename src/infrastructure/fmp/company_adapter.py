"""
Infrastructure adapter: FMP search, profile and quote endpoints → ICompanyDataProvider.
See docs/Architecture.md for the layering rules.
All FMP field names for company data are confined to the tables below.
"""

import logging
from typing import Any

from src.domain.entities.company import CompanyProfile, CompanyQuote, SearchResult
from src.domain.exceptions import ApiSchemaError
from src.domain.ports.company_data_port import ICompanyDataProvider
from src.infrastructure.fmp.client import FMPClient
from src.infrastructure.fmp.field_mapping import FieldMap, Numeric, Text, build_record

logger = logging.getLogger(__name__)

SEARCH_SYMBOL_ENDPOINT = "/stable/search-symbol"
SEARCH_NAME_ENDPOINT = "/stable/search-name"
PROFILE_ENDPOINT = "/stable/profile"
QUOTE_ENDPOINT = "/stable/quote"

SEARCH_RESULT_FIELDS: FieldMap = {
    "symbol": "symbol",
    "name": "name",
    "currency": "currency",
    "exchange": Text("stockExchange", "exchangeFullName"),
    "exchange_short_name": Text("exchangeShortName", "exchange"),
}

COMPANY_PROFILE_FIELDS: FieldMap = {
    "symbol": "symbol",
    "company_name": "companyName",
    "price": "price",
    "changes": Numeric("changes", "change"),
    "currency": "currency",
    "exchange": Text("exchangeFullName", "exchange"),
    "exchange_short_name": Text("exchangeShortName", "exchange"),
    "industry": "industry",
    "sector": "sector",
    "country": "country",
    "market_cap": Numeric("mktCap", "marketCap"),
    "description": "description",
    "ceo": "ceo",
    "website": "website",
    "image": "image",
    "ipo_date": "ipoDate",
    "full_time_employees": "fullTimeEmployees",
    "phone": "phone",
    "address": "address",
    "city": "city",
    "state": "state",
    "zip": "zip",
    "beta": "beta",
    "volume_avg": Numeric("volAvg", "averageVolume"),
    "last_dividend": Numeric("lastDiv", "lastDividend"),
    "range": "range",
    "dcf": "dcf",
    "is_etf": "isEtf",
    "is_actively_trading": "isActivelyTrading",
    "is_adr": "isAdr",
    "is_fund": "isFund",
}

COMPANY_QUOTE_FIELDS: FieldMap = {
    "symbol": "symbol",
    "name": "name",
    "price": "price",
    "change": "change",
    "changes_percentage": Numeric("changesPercentage", "changePercentage"),
    "day_low": "dayLow",
    "day_high": "dayHigh",
    "year_low": "yearLow",
    "year_high": "yearHigh",
    "market_cap": "marketCap",
    "volume": "volume",
    "avg_volume": "avgVolume",
    "open": "open",
    "previous_close": "previousClose",
    "eps": "eps",
    "pe": "pe",
    "price_avg50": "priceAvg50",
    "price_avg200": "priceAvg200",
    "shares_outstanding": "sharesOutstanding",
    "earnings_announcement": "earningsAnnouncement",
    "timestamp": "timestamp",
}


def search_endpoints(query: str) -> tuple[str, str]:
    """(primary, fallback) search endpoints: name-first for multi-word queries."""
    if any(ch.isspace() for ch in query.strip()):
        return SEARCH_NAME_ENDPOINT, SEARCH_SYMBOL_ENDPOINT
    return SEARCH_SYMBOL_ENDPOINT, SEARCH_NAME_ENDPOINT


class FMPCompanyDataProvider(ICompanyDataProvider):
    """Company lookups backed by the FMP stable API."""

    def __init__(self, client: FMPClient) -> None:
        self._client = client

    async def search_companies(self, query: str, limit: int = 10) -> list[SearchResult]:
        trimmed = query.strip()
        primary, fallback = search_endpoints(trimmed)
        params = {"query": trimmed, "limit": str(limit)}

        results = await self._search(primary, params)
        if results:
            return results

        logger.info("No results from %s for %r; trying %s", primary, trimmed, fallback)
        return await self._search(fallback, params)

    async def get_company_profile(self, symbol: str) -> CompanyProfile:
        payload = await self._client.fetch(PROFILE_ENDPOINT, {"symbol": symbol})
        first = _first_element(payload, f"Company profile not found for symbol: {symbol}")
        return build_record(CompanyProfile, first, COMPANY_PROFILE_FIELDS)

    async def get_company_quote(self, symbol: str) -> CompanyQuote:
        payload = await self._client.fetch(QUOTE_ENDPOINT, {"symbol": symbol})
        first = _first_element(payload, f"Quote not found for symbol: {symbol}")
        return build_record(CompanyQuote, first, COMPANY_QUOTE_FIELDS)

    async def _search(self, endpoint: str, params: dict[str, str]) -> list[SearchResult]:
        payload = await self._client.fetch(endpoint, params)
        if not isinstance(payload, list):
            raise ApiSchemaError("Search response is not an array", payload)
        return [build_record(SearchResult, item, SEARCH_RESULT_FIELDS) for item in payload]


def _first_element(payload: Any, message: str) -> Any:
    if not isinstance(payload, list) or not payload:
        raise ApiSchemaError(message, payload)
    return payload[0]
