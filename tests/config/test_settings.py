from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import pytest

from musichub.config import (
    ConfigurationError,
    MissingConfigurationError,
    get_database_config,
    get_service_config,
    get_spotify_config,
    get_storage_config,
    get_tidal_config,
)
from musichub.config.tidal import DEFAULT_TIDAL_API_BASE_URL, has_json_api_data

if TYPE_CHECKING:
    from pathlib import Path


def test_service_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MUSICHUB_MAX_ATTEMPTS", raising=False)
    monkeypatch.delenv("MUSICHUB_LOOKUP_TIMEOUT_SECONDS", raising=False)

    config = get_service_config()

    assert config.max_attempts == 3
    assert config.lookup_timeout_seconds == 10.0


def test_zero_timeout_disables_it(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MUSICHUB_MAX_ATTEMPTS", "5")
    monkeypatch.setenv("MUSICHUB_LOOKUP_TIMEOUT_SECONDS", "0")

    config = get_service_config()

    assert config.max_attempts == 5
    assert config.lookup_timeout_seconds is None


@pytest.mark.parametrize(
    ("name", "value"),
    [("MUSICHUB_MAX_ATTEMPTS", "0"), ("MUSICHUB_LOOKUP_TIMEOUT_SECONDS", "-1")],
)
def test_service_settings_are_validated(
    monkeypatch: pytest.MonkeyPatch, name: str, value: str
) -> None:
    monkeypatch.setenv(name, value)

    with pytest.raises(ConfigurationError):
        get_service_config()


def test_tidal_config_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TIDAL_CLIENT_ID", "id")
    monkeypatch.setenv("TIDAL_CLIENT_SECRET", "secret")
    monkeypatch.setenv("TIDAL_COUNTRY_CODE", " de ")
    monkeypatch.delenv("TIDAL_API_BASE_URL", raising=False)

    config = get_tidal_config()

    assert config.client_id == "id"
    assert config.country_code == "DE"
    assert config.api.base_url == DEFAULT_TIDAL_API_BASE_URL
    assert config.api.ratelimit is not None
    assert config.auth.cache is None


def test_tidal_retries_only_transport_failures(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TIDAL_CLIENT_ID", "id")
    monkeypatch.setenv("TIDAL_CLIENT_SECRET", "secret")

    config = get_tidal_config()

    for policy in (config.api.retry, config.auth.retry):
        assert policy.retry_on_exceptions == (
            httpx.TimeoutException,
            httpx.NetworkError,
            httpx.RemoteProtocolError,
        )
    assert config.api.response_hooks == ()


def test_tidal_config_requires_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("TIDAL_CLIENT_ID", raising=False)
    monkeypatch.setenv("TIDAL_CLIENT_SECRET", "secret")

    with pytest.raises(MissingConfigurationError, match="TIDAL_CLIENT_ID"):
        get_tidal_config()


def test_spotify_config_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SPOTIFY_CLIENT_ID", "id")
    monkeypatch.setenv("SPOTIFY_CLIENT_SECRET", "secret")

    assert get_spotify_config().client_secret == "secret"


def test_only_json_api_documents_with_data_are_cached() -> None:
    assert has_json_api_data({"data": [{"id": "1"}]})
    assert not has_json_api_data({"data": []})
    assert not has_json_api_data(["data"])


def test_storage_paths(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("MUSICHUB_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.delenv("DATABASE_URI", raising=False)

    storage = get_storage_config()

    assert storage.database_path() == (tmp_path / "data" / "musichub.db").resolve()
    assert get_database_config().uri.endswith("musichub.db")


def test_database_uri_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URI", "sqlite+pysqlite:///:memory:")

    assert get_database_config().uri == "sqlite+pysqlite:///:memory:"
