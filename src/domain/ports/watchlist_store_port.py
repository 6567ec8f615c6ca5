"""
Port (interface) for persisted watchlists.
See docs/Architecture.md for the layering rules.
Infrastructure adapters (e.g. SupabaseWatchlistStore) must implement this interface.
"""

from abc import ABC, abstractmethod
from typing import Optional

from src.domain.entities.watchlist_item import WatchlistItem


class IWatchlistStore(ABC):
    @abstractmethod
    async def list_items(self, user_id: str) -> list[WatchlistItem]:
        """Return the user's items, most recently added first."""
        ...

    @abstractmethod
    async def add_item(
        self,
        user_id: str,
        symbol: str,
        company_name: str,
        notes: Optional[str] = None,
    ) -> WatchlistItem:
        """Insert a new item.

        Raises:
            WatchlistConflictError: if *symbol* is already on the user's list.
        """
        ...

    @abstractmethod
    async def update_notes(
        self, user_id: str, item_id: str, notes: Optional[str]
    ) -> WatchlistItem:
        """Replace the notes of one item and bump its updated_at.

        Raises:
            WatchlistItemNotFoundError: if the item does not belong to the user.
        """
        ...

    @abstractmethod
    async def remove_item(self, user_id: str, item_id: str) -> None:
        """Delete one item.

        Raises:
            WatchlistItemNotFoundError: if the item does not belong to the user.
        """
        ...
