import json

import pytest

from src.domain.exceptions import ConfigurationError
from src.infrastructure.config.settings import FMP_BASE_URL, Settings
from src.infrastructure.secrets.secrets_manager_adapter import SecretsManagerAdapter


def test_defaults():
    settings = Settings.from_env({"FMP_API_KEY": "abc"})

    assert settings.fmp_api_key == "abc"
    assert settings.fmp_base_url == FMP_BASE_URL
    assert settings.max_attempts == 3
    assert settings.initial_backoff_ms == 1000.0
    assert settings.max_backoff_ms == 8000.0
    assert settings.request_deadline_seconds == 30.0
    assert settings.expose_error_details is False
    assert settings.watchlist_enabled is False


def test_overrides():
    settings = Settings.from_env(
        {
            "FMP_API_KEY": "abc",
            "FMP_BASE_URL": "https://proxy.test/",
            "FMP_MAX_ATTEMPTS": "5",
            "REQUEST_DEADLINE_SECONDS": "12.5",
            "EXPOSE_ERROR_DETAILS": "true",
            "LOG_LEVEL": "debug",
            "SUPABASE_JWT_SECRET": "jwt",
        }
    )

    assert settings.fmp_base_url == "https://proxy.test"
    assert settings.max_attempts == 5
    assert settings.request_deadline_seconds == 12.5
    assert settings.expose_error_details is True
    assert settings.log_level == "DEBUG"
    assert settings.watchlist_enabled is True


@pytest.mark.parametrize("environ", [{}, {"FMP_API_KEY": ""}, {"FMP_API_KEY": "   "}])
def test_missing_api_key(environ):
    with pytest.raises(ConfigurationError, match="FMP_API_KEY environment variable is not configured"):
        Settings.from_env(environ)


def test_malformed_number():
    with pytest.raises(ConfigurationError, match="FMP_TIMEOUT_SECONDS"):
        Settings.from_env({"FMP_API_KEY": "abc", "FMP_TIMEOUT_SECONDS": "ten"})


def test_zero_attempts_rejected():
    with pytest.raises(ConfigurationError):
        Settings(fmp_api_key="abc", max_attempts=0)


class FakeSecretsClient:
    def __init__(self, secret):
        self.secret = secret
        self.requested = []

    def get_secret_value(self, SecretId):
        self.requested.append(SecretId)
        return {"SecretString": json.dumps(self.secret)}


def test_secret_export_does_not_override_existing_values():
    client = FakeSecretsClient({"FMP_API_KEY": "from-secret", "SUPABASE_JWT_SECRET": "jwt"})
    environ = {"FMP_API_KEY": "local"}

    exported = SecretsManagerAdapter(client=client).export_missing("arn:fmp", environ)

    assert exported == ["SUPABASE_JWT_SECRET"]
    assert environ == {"FMP_API_KEY": "local", "SUPABASE_JWT_SECRET": "jwt"}
    assert client.requested == ["arn:fmp"]


@pytest.mark.parametrize("raw", ["2.5", "three"])
def test_fractional_or_garbage_attempts_rejected(raw):
    with pytest.raises(ConfigurationError, match="FMP_MAX_ATTEMPTS"):
        Settings.from_env({"FMP_API_KEY": "abc", "FMP_MAX_ATTEMPTS": raw})
