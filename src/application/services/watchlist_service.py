"""
Application service: manage the caller's annotated watchlist.
See docs/Architecture.md for the layering rules.

Business rules owned here:
  - symbols are stored uppercased;
  - a blank symbol or company name is rejected;
  - blank notes are stored as None.
"""

from typing import Optional

from src.application.use_cases._symbols import canonical_symbol
from src.domain.entities.watchlist_item import WatchlistItem
from src.domain.exceptions import InvalidParameterError
from src.domain.ports.watchlist_store_port import IWatchlistStore


def _clean_notes(notes: Optional[str]) -> Optional[str]:
    if notes is None or not notes.strip():
        return None
    return notes.strip()


class WatchlistService:
    def __init__(self, store: IWatchlistStore) -> None:
        self._store = store

    async def list_items(self, user_id: str) -> list[WatchlistItem]:
        return await self._store.list_items(user_id)

    async def add_item(
        self,
        user_id: str,
        symbol: str,
        company_name: str,
        notes: Optional[str] = None,
    ) -> WatchlistItem:
        """Add *symbol* to the user's watchlist.

        Raises:
            InvalidParameterError: on a blank symbol or company name.
            WatchlistConflictError: if the symbol is already listed.
        """
        if not company_name or not company_name.strip():
            raise InvalidParameterError("Company name is required")
        return await self._store.add_item(
            user_id, canonical_symbol(symbol), company_name.strip(), _clean_notes(notes)
        )

    async def update_notes(
        self, user_id: str, item_id: str, notes: Optional[str]
    ) -> WatchlistItem:
        return await self._store.update_notes(user_id, item_id, _clean_notes(notes))

    async def remove_item(self, user_id: str, item_id: str) -> None:
        await self._store.remove_item(user_id, item_id)
