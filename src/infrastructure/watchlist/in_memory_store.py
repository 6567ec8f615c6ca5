"""
Infrastructure adapter: process-local dict → IWatchlistStore.
Used for local development without Supabase credentials and in tests.
Contents are lost on restart.
"""

import asyncio
import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import Optional

from src.domain.entities.watchlist_item import WatchlistItem
from src.domain.exceptions import WatchlistConflictError, WatchlistItemNotFoundError
from src.domain.ports.watchlist_store_port import IWatchlistStore


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class InMemoryWatchlistStore(IWatchlistStore):
    def __init__(self) -> None:
        self._items: dict[str, WatchlistItem] = {}
        self._lock = asyncio.Lock()

    async def list_items(self, user_id: str) -> list[WatchlistItem]:
        owned = [item for item in self._items.values() if item.user_id == user_id]
        # dict preserves insertion order, which is the add order
        return list(reversed(owned))

    async def add_item(
        self,
        user_id: str,
        symbol: str,
        company_name: str,
        notes: Optional[str] = None,
    ) -> WatchlistItem:
        async with self._lock:
            if any(
                item.user_id == user_id and item.symbol == symbol
                for item in self._items.values()
            ):
                raise WatchlistConflictError(f"{symbol} is already on the watchlist")
            timestamp = _now()
            item = WatchlistItem(
                id=str(uuid.uuid4()),
                user_id=user_id,
                symbol=symbol,
                company_name=company_name,
                notes=notes,
                added_at=timestamp,
                updated_at=timestamp,
            )
            self._items[item.id] = item
            return item

    async def update_notes(
        self, user_id: str, item_id: str, notes: Optional[str]
    ) -> WatchlistItem:
        async with self._lock:
            item = self._owned(user_id, item_id)
            updated = replace(item, notes=notes, updated_at=_now())
            self._items[item_id] = updated
            return updated

    async def remove_item(self, user_id: str, item_id: str) -> None:
        async with self._lock:
            self._owned(user_id, item_id)
            del self._items[item_id]

    def _owned(self, user_id: str, item_id: str) -> WatchlistItem:
        item = self._items.get(item_id)
        if item is None or item.user_id != user_id:
            raise WatchlistItemNotFoundError(f"Watchlist item not found: {item_id}")
        return item
