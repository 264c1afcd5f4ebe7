"""Shared pytest fixtures for the Instinct client tests.

All HTTP traffic is stubbed with ``requests-mock``; no test talks to
the real partner API.
"""

from __future__ import annotations

import pytest

from instinct_api_client import ClientConfig, InstinctClient


BASE_URL = "https://host.example/v1/"
TOKEN_URL = "https://host.example/v1/auth/token"
TOKEN_RESP = {"access_token": "abc", "token_type": "Bearer", "expires_in": 3600}


def api(path: str) -> str:
    """Absolute URL of ``path`` under the test base URL."""
    return BASE_URL + path.lstrip("/")


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(api_url=BASE_URL, client_id="test-client", client_secret="test-secret", timeout=5)


@pytest.fixture
def client(config: ClientConfig) -> InstinctClient:
    return InstinctClient(config=config)


@pytest.fixture
def token_route(requests_mock):
    """Register a successful token exchange and return its matcher."""
    return requests_mock.post(TOKEN_URL, json=TOKEN_RESP, status_code=200)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    # Keep real credentials and .env files out of the tests
    for name in ("INSTINCT_CLIENT_ID", "INSTINCT_CLIENT_SECRET", "INSTINCT_API_URL", "INSTINCT_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
