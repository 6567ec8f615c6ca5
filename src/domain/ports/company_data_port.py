"""
Port (interface) for company search, profile and quote providers.
See docs/Architecture.md for the layering rules.
Infrastructure adapters (e.g. FMPCompanyDataProvider) must implement this interface.
"""

from abc import ABC, abstractmethod

from src.domain.entities.company import CompanyProfile, CompanyQuote, SearchResult


class ICompanyDataProvider(ABC):
    @abstractmethod
    async def search_companies(self, query: str, limit: int = 10) -> list[SearchResult]: ...

    @abstractmethod
    async def get_company_profile(self, symbol: str) -> CompanyProfile: ...

    @abstractmethod
    async def get_company_quote(self, symbol: str) -> CompanyQuote: ...
