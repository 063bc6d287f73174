from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

import httpx
import pytest

from musichub.adapters.tidal import TidalAPIError, TidalClient, TidalTokenProvider
from musichub.domain.errors import ExternalServiceError
from tests.helpers.http import make_client_factory, token_response

if TYPE_CHECKING:
    from musichub.config.tidal import TidalConfig


def test_track_search_uses_bearer_token_and_filters(
    tidal_config: TidalConfig, tracks_payload: dict[str, Any]
) -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if request.url.path.endswith("/oauth2/token"):
            return token_response()
        return httpx.Response(200, json=tracks_payload)

    client = TidalClient(config=tidal_config, client_factory=make_client_factory(handler))

    response = asyncio.run(client.search_tracks_by_isrc("DEU630901306"))

    token_request, tracks_request = requests
    assert token_request.method == "POST"
    assert b"grant_type=client_credentials" in token_request.content
    assert token_request.headers["Authorization"].startswith("Basic ")
    assert tracks_request.url.path == "/v2/tracks"
    assert tracks_request.url.params["filter[isrc]"] == "DEU630901306"
    assert tracks_request.url.params["include"] == "artists"
    assert tracks_request.url.params["countryCode"] == "DE"
    assert tracks_request.headers["Authorization"] == "Bearer token-1"
    assert response.data[0].artist_ids == ["2", "1"]


def test_token_is_reused_between_requests(
    tidal_config: TidalConfig, tracks_payload: dict[str, Any]
) -> None:
    token_calls = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal token_calls
        if request.url.path.endswith("/oauth2/token"):
            token_calls += 1
            return token_response()
        return httpx.Response(200, json=tracks_payload)

    client = TidalClient(config=tidal_config, client_factory=make_client_factory(handler))

    asyncio.run(client.search_tracks_by_isrc("DEU630901306"))
    asyncio.run(client.search_tracks_by_isrc("DEU630901306"))

    assert token_calls == 1


def test_not_found_yields_empty_response(tidal_config: TidalConfig) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/oauth2/token"):
            return token_response()
        return httpx.Response(404, json={"errors": [{"code": "NOT_FOUND"}]})

    client = TidalClient(config=tidal_config, client_factory=make_client_factory(handler))

    assert asyncio.run(client.search_tracks_by_isrc("DEU630901306")).data == []
    assert asyncio.run(client.get_artist("missing")).data is None


def test_rejected_token_is_refreshed_once(
    tidal_config: TidalConfig, artists_payload: dict[str, Any]
) -> None:
    token_calls = 0
    artist_calls = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal token_calls, artist_calls
        if request.url.path.endswith("/oauth2/token"):
            token_calls += 1
            return token_response()
        artist_calls += 1
        if artist_calls == 1:
            return httpx.Response(401)
        return httpx.Response(200, json=artists_payload)

    client = TidalClient(config=tidal_config, client_factory=make_client_factory(handler))

    response = asyncio.run(client.search_artists_by_handle("thetesters"))

    assert token_calls == 2
    assert response.data[0].id == "4242"


def test_server_errors_raise_tidal_api_error(tidal_config: TidalConfig) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/oauth2/token"):
            return token_response()
        return httpx.Response(500)

    client = TidalClient(config=tidal_config, client_factory=make_client_factory(handler))

    with pytest.raises(TidalAPIError) as excinfo:
        asyncio.run(client.search_tracks_by_isrc("DEU630901306"))

    assert isinstance(excinfo.value, ExternalServiceError)
    assert excinfo.value.service == "tidal"


def test_failed_token_request_raises(tidal_config: TidalConfig) -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"error": "invalid_client"})

    provider = TidalTokenProvider(config=tidal_config, client_factory=make_client_factory(handler))

    with pytest.raises(TidalAPIError, match="token"):
        asyncio.run(provider.get_access_token())


def test_token_expires_before_its_lifetime(tidal_config: TidalConfig) -> None:
    now = 1000.0
    token_calls = 0

    def handler(_request: httpx.Request) -> httpx.Response:
        nonlocal token_calls
        token_calls += 1
        return token_response()

    provider = TidalTokenProvider(
        config=tidal_config,
        client_factory=make_client_factory(handler),
        clock=lambda: now,
    )

    asyncio.run(provider.get_access_token())
    now += 3600 - 301
    assert provider.has_valid_token()
    now += 2
    assert not provider.has_valid_token()
    asyncio.run(provider.get_access_token())

    assert token_calls == 2
