"""
Use-case: retrieve the latest quote for a given symbol.
See docs/Architecture.md for the layering rules.
Depends only on Domain ports and entities: no infrastructure imports.
"""

from src.application.use_cases._symbols import canonical_symbol
from src.domain.entities.company import CompanyQuote
from src.domain.ports.company_data_port import ICompanyDataProvider


class GetCompanyQuoteUseCase:
    def __init__(self, provider: ICompanyDataProvider) -> None:
        self._provider = provider

    async def execute(self, symbol: str) -> CompanyQuote:
        """Fetch the quote for *symbol* (uppercased).

        Raises:
            InvalidParameterError: if *symbol* is blank.
            Any MarketDataError propagated from the ICompanyDataProvider.
        """
        return await self._provider.get_company_quote(canonical_symbol(symbol))
