"""Tests for loading client configuration from the environment."""

from __future__ import annotations

import dataclasses

import pytest

from instinct_api_client import ClientConfig, InstinctConfigError, load_config_from_env
from instinct_api_client.config import DEFAULT_API_URL, DEFAULT_TIMEOUT


def test_defaults() -> None:
    config = ClientConfig()
    assert config.api_url == "https://partner.instinctvet.com/v1/"
    assert config.timeout == 30
    assert not config.has_credentials


def test_config_is_immutable() -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        ClientConfig().timeout = 5  # type: ignore[misc]


def test_reads_process_environment(monkeypatch) -> None:
    monkeypatch.setenv("INSTINCT_CLIENT_ID", "env-id")
    monkeypatch.setenv("INSTINCT_CLIENT_SECRET", "env-secret")
    monkeypatch.setenv("INSTINCT_API_URL", "https://staging.example/v1/")
    monkeypatch.setenv("INSTINCT_TIMEOUT", "12.5")

    config = load_config_from_env()

    assert config == ClientConfig(
        api_url="https://staging.example/v1/",
        client_id="env-id",
        client_secret="env-secret",
        timeout=12.5,
    )
    assert config.has_credentials


def test_nothing_configured() -> None:
    config = load_config_from_env()
    assert config == ClientConfig(api_url=DEFAULT_API_URL, timeout=DEFAULT_TIMEOUT)


def test_reads_dotenv_file(tmp_path, monkeypatch) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("INSTINCT_CLIENT_ID=file-id\nINSTINCT_CLIENT_SECRET=file-secret\n")
    # Register the names so monkeypatch removes what load_dotenv sets
    monkeypatch.setenv("INSTINCT_CLIENT_ID", "")
    monkeypatch.delenv("INSTINCT_CLIENT_ID")
    monkeypatch.setenv("INSTINCT_CLIENT_SECRET", "")
    monkeypatch.delenv("INSTINCT_CLIENT_SECRET")

    config = load_config_from_env()

    assert config.client_id == "file-id"
    assert config.client_secret == "file-secret"


def test_process_environment_wins_over_dotenv(tmp_path, monkeypatch) -> None:
    env_file = tmp_path / "custom.env"
    env_file.write_text("INSTINCT_CLIENT_ID=file-id\n")
    monkeypatch.setenv("INSTINCT_CLIENT_ID", "process-id")

    assert load_config_from_env(env_file).client_id == "process-id"


def test_explicit_overrides_win(monkeypatch) -> None:
    monkeypatch.setenv("INSTINCT_CLIENT_ID", "env-id")
    monkeypatch.setenv("INSTINCT_TIMEOUT", "not-a-number")

    config = load_config_from_env(client_id="arg-id", timeout=3)

    assert config.client_id == "arg-id"
    assert config.timeout == 3.0


@pytest.mark.parametrize("raw", ["soon", "0", "-5"])
def test_bad_timeout_raises(monkeypatch, raw: str) -> None:
    monkeypatch.setenv("INSTINCT_TIMEOUT", raw)
    with pytest.raises(InstinctConfigError, match="INSTINCT_TIMEOUT"):
        load_config_from_env()


@pytest.mark.parametrize("name", [".", "missing.env"])
def test_explicit_dotenv_must_be_a_file(tmp_path, name: str) -> None:
    with pytest.raises(InstinctConfigError, match="dotenv"):
        load_config_from_env(tmp_path / name)
