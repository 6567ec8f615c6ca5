"""
Port (interface) for access-token validators.
See docs/Architecture.md for the layering rules.
Infrastructure adapters (e.g. SupabaseTokenValidator) must implement this interface.
"""

from abc import ABC, abstractmethod

from src.domain.entities.watchlist_item import AuthenticatedUser


class ITokenValidator(ABC):
    @abstractmethod
    def validate(self, token: str) -> AuthenticatedUser:
        """Validate a bearer token and return the user it was issued to.

        Raises:
            ValueError: if the token is malformed, expired, or fails signature/audience checks.
        """
        ...
