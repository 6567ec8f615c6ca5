from src.domain.exceptions import InvalidParameterError


def canonical_symbol(symbol: str) -> str:
    """Trimmed, uppercased ticker.

    Raises:
        InvalidParameterError: if *symbol* is blank.
    """
    if not symbol or not symbol.strip():
        raise InvalidParameterError("Symbol parameter is required")
    return symbol.strip().upper()


def positive_limit(limit: int) -> int:
    if limit < 1:
        raise InvalidParameterError("Limit must be a positive number")
    return limit
