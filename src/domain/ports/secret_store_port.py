"""
Port (interface) for secret stores.
See docs/Architecture.md for the layering rules.
Infrastructure adapters (e.g. SecretsManagerAdapter) must implement this interface.
"""

from abc import ABC, abstractmethod


class ISecretStore(ABC):
    @abstractmethod
    def get_secret(self, secret_id: str) -> dict[str, str]:
        """Fetch and deserialize a secret. Returns its key-value pairs."""
        ...
