"""
Infrastructure adapter: Supabase (PostgREST) `watchlist` table → IWatchlistStore.
See docs/Architecture.md for the layering rules.

The service-role key bypasses row-level security, so every query filters on
user_id explicitly. A unique (user_id, symbol) constraint on the table makes
PostgREST answer 409 for duplicates.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

import httpx

from src.domain.entities.watchlist_item import WatchlistItem
from src.domain.exceptions import (
    NetworkError,
    WatchlistConflictError,
    WatchlistItemNotFoundError,
    WatchlistStoreError,
)
from src.domain.ports.watchlist_store_port import IWatchlistStore

logger = logging.getLogger(__name__)

TABLE = "watchlist"


def row_to_item(row: dict[str, Any]) -> WatchlistItem:
    return WatchlistItem(
        id=str(row["id"]),
        user_id=str(row["user_id"]),
        symbol=row["symbol"],
        company_name=row["company_name"],
        notes=row.get("notes"),
        added_at=row["added_at"],
        updated_at=row["updated_at"],
    )


class SupabaseWatchlistStore(IWatchlistStore):
    """Reads and writes watchlist rows through the Supabase REST API."""

    def __init__(
        self,
        url: str,
        service_role_key: str,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._endpoint = f"{url.rstrip('/')}/rest/v1/{TABLE}"
        self._headers = {
            "apikey": service_role_key,
            "Authorization": f"Bearer {service_role_key}",
            "Content-Type": "application/json",
            "Prefer": "return=representation",
        }
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=10)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def list_items(self, user_id: str) -> list[WatchlistItem]:
        response = await self._request(
            "GET",
            params={"user_id": f"eq.{user_id}", "select": "*", "order": "added_at.desc"},
        )
        return [row_to_item(row) for row in _rows(response)]

    async def add_item(
        self,
        user_id: str,
        symbol: str,
        company_name: str,
        notes: Optional[str] = None,
    ) -> WatchlistItem:
        response = await self._request(
            "POST",
            json={
                "user_id": user_id,
                "symbol": symbol,
                "company_name": company_name,
                "notes": notes,
            },
        )
        if response.status_code == 409:
            raise WatchlistConflictError(f"{symbol} is already on the watchlist")
        return row_to_item(_rows(response)[0])

    async def update_notes(
        self, user_id: str, item_id: str, notes: Optional[str]
    ) -> WatchlistItem:
        response = await self._request(
            "PATCH",
            params={"id": f"eq.{item_id}", "user_id": f"eq.{user_id}"},
            json={"notes": notes, "updated_at": datetime.now(timezone.utc).isoformat()},
        )
        rows = _rows(response)
        if not rows:
            raise WatchlistItemNotFoundError(f"Watchlist item not found: {item_id}")
        return row_to_item(rows[0])

    async def remove_item(self, user_id: str, item_id: str) -> None:
        response = await self._request(
            "DELETE",
            params={"id": f"eq.{item_id}", "user_id": f"eq.{user_id}"},
        )
        if not _rows(response):
            raise WatchlistItemNotFoundError(f"Watchlist item not found: {item_id}")
        logger.info("Removed watchlist item %s for user %s", item_id, user_id)

    async def _request(self, method: str, **kwargs: Any) -> httpx.Response:
        try:
            return await self._http.request(
                method, self._endpoint, headers=self._headers, **kwargs
            )
        except httpx.TransportError as exc:
            raise NetworkError(f"Watchlist store request failed: {method} {TABLE}", exc) from exc


def _rows(response: httpx.Response) -> list[dict[str, Any]]:
    if not response.is_success:
        raise WatchlistStoreError(
            f"Watchlist store answered HTTP {response.status_code}", response.status_code
        )
    return response.json()
