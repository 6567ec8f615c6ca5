"""
Use-case: find companies by ticker or name.
Depends only on Domain ports and entities: no infrastructure imports.
"""

from src.application.use_cases._symbols import positive_limit
from src.domain.entities.company import SearchResult
from src.domain.exceptions import InvalidParameterError
from src.domain.ports.company_data_port import ICompanyDataProvider


class SearchCompaniesUseCase:
    DEFAULT_LIMIT: int = 10

    def __init__(self, provider: ICompanyDataProvider) -> None:
        self._provider = provider

    async def execute(self, query: str, limit: int = DEFAULT_LIMIT) -> list[SearchResult]:
        """Search by *query*; the provider decides whether name or symbol lookup goes first.

        Raises:
            InvalidParameterError: if *query* is blank or *limit* is not positive.
        """
        if not query or not query.strip():
            raise InvalidParameterError('Query parameter "q" is required')
        return await self._provider.search_companies(query.strip(), positive_limit(limit))
