"""
Use-case: retrieve the company profile for a given symbol.
Depends only on Domain ports and entities: no infrastructure imports.
"""

from src.application.use_cases._symbols import canonical_symbol
from src.domain.entities.company import CompanyProfile
from src.domain.ports.company_data_port import ICompanyDataProvider


class GetCompanyProfileUseCase:
    def __init__(self, provider: ICompanyDataProvider) -> None:
        self._provider = provider

    async def execute(self, symbol: str) -> CompanyProfile:
        return await self._provider.get_company_profile(canonical_symbol(symbol))
