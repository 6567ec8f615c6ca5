"""
Infrastructure adapter: AWS Secrets Manager → ISecretStore.
See docs/Architecture.md for the layering rules.

Deployed containers keep FMP_API_KEY and the Supabase keys in one JSON secret.
The composition root calls export_missing() before Settings.from_env() so the
credentials look like ordinary environment variables to the rest of the app.
"""

import json
import logging
import os
from typing import MutableMapping, Optional

import boto3

from src.domain.ports.secret_store_port import ISecretStore

logger = logging.getLogger(__name__)


class SecretsManagerAdapter(ISecretStore):
    """Fetches and deserializes JSON secrets from AWS Secrets Manager."""

    def __init__(self, region: str | None = None, client=None) -> None:
        self._client = client or boto3.client(
            "secretsmanager",
            region_name=region or os.environ.get("AWS_DEFAULT_REGION", "us-east-1"),
        )

    def get_secret(self, secret_id: str) -> dict[str, str]:
        response = self._client.get_secret_value(SecretId=secret_id)
        return {key: str(value) for key, value in json.loads(response["SecretString"]).items()}

    def export_missing(
        self,
        secret_id: str,
        environ: Optional[MutableMapping[str, str]] = None,
    ) -> list[str]:
        """Copy secret keys into *environ* (default os.environ) unless already set.

        Values exported by the operator win over the stored secret, so a local
        FMP_API_KEY can still override the shared one.

        Returns:
            The keys that were exported.
        """
        env = os.environ if environ is None else environ
        exported = []
        for key, value in self.get_secret(secret_id).items():
            if env.get(key):
                continue
            env[key] = value
            exported.append(key)
        logger.info("Loaded %d setting(s) from secret store", len(exported))
        return exported
