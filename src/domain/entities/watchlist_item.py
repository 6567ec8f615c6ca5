"""
Domain entities for the user's annotated watchlist and the authenticated caller.
Zero external dependencies: pure Python dataclasses only.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class WatchlistItem:
    id: str
    user_id: str
    symbol: str
    company_name: str
    notes: Optional[str]
    added_at: str
    updated_at: str


@dataclass(frozen=True)
class AuthenticatedUser:
    user_id: str
    email: Optional[str] = None
