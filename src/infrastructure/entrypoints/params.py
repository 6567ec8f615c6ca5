"""
Query/path parameter parsing for the proxy endpoints.

Values arrive as raw strings so that malformed input produces the 400
messages dashboard clients already rely on, instead of FastAPI's 422.
"""

from enum import Enum
from typing import Optional, TypeVar

from src.domain.entities.periods import ChartPeriod, FinancialPeriod
from src.domain.exceptions import InvalidParameterError

DEFAULT_LIMIT = 10

E = TypeVar("E", bound=Enum)


def parse_symbol(raw: Optional[str]) -> str:
    if raw is None or not raw.strip():
        raise InvalidParameterError("Symbol parameter is required")
    return raw.strip().upper()


def parse_query(raw: Optional[str]) -> str:
    if raw is None or not raw.strip():
        raise InvalidParameterError('Query parameter "q" is required')
    return raw


def parse_limit(raw: Optional[str], default: int = DEFAULT_LIMIT) -> int:
    if raw is None or raw == "":
        return default
    try:
        limit = int(raw.strip())
    except ValueError:
        raise InvalidParameterError("Limit must be a positive number") from None
    if limit < 1:
        raise InvalidParameterError("Limit must be a positive number")
    return limit


def _parse_enum(raw: Optional[str], enum_type: type[E], default: E) -> E:
    if raw is None or raw == "":
        return default
    try:
        return enum_type(raw)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_type)
        raise InvalidParameterError(f"Invalid period. Must be one of: {allowed}") from None


def parse_financial_period(raw: Optional[str]) -> FinancialPeriod:
    return _parse_enum(raw, FinancialPeriod, FinancialPeriod.ANNUAL)


def parse_chart_period(raw: Optional[str]) -> ChartPeriod:
    return _parse_enum(raw, ChartPeriod, ChartPeriod.ONE_YEAR)
