"""Test doubles shared across the test modules."""

from typing import Any


class RecordingFMPClient:
    """Stands in for FMPClient: returns a canned payload per endpoint."""

    def __init__(self, payloads: dict[str, Any]):
        self.payloads = payloads
        self.calls = []

    async def fetch(self, endpoint, params=None):
        self.calls.append((endpoint, dict(params or {})))
        payload = self.payloads[endpoint]
        if isinstance(payload, BaseException):
            raise payload
        return payload


class RecordingSleep:
    def __init__(self):
        self.calls = []

    async def __call__(self, seconds):
        self.calls.append(seconds)
