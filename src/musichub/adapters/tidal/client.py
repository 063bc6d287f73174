"""TIDAL OpenAPI v2 client."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from musichub.adapters.http_resilience import ResilientClient

from .auth import TidalTokenProvider
from .errors import TidalAPIError
from .schema import TidalArtistResponse, TidalArtistsResponse, TidalTracksResponse

if TYPE_CHECKING:
    from collections.abc import Callable

    from musichub.config.http_resilience import ResilienceConfig
    from musichub.config.tidal import TidalConfig

log = getLogger(__name__)


class TidalClient:
    """Async access to the TIDAL catalogue endpoints used for identity lookups."""

    def __init__(
        self,
        *,
        config: TidalConfig,
        token_provider: TidalTokenProvider | None = None,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._client_factory = client_factory or ResilientClient
        self._tokens = token_provider or TidalTokenProvider(
            config=config, client_factory=self._client_factory
        )

    async def search_tracks_by_isrc(self, isrc: str) -> TidalTracksResponse:
        params = {
            "filter[isrc]": isrc,
            "include": "artists",
            "countryCode": self._config.country_code,
        }
        payload = await self._get_json("/tracks", params=params)
        if payload is None:
            return TidalTracksResponse()
        return TidalTracksResponse.model_validate(payload)

    async def search_artists_by_handle(self, handle: str) -> TidalArtistsResponse:
        params = {"filter[handle]": handle, "countryCode": self._config.country_code}
        payload = await self._get_json("/artists", params=params)
        if payload is None:
            return TidalArtistsResponse()
        return TidalArtistsResponse.model_validate(payload)

    async def get_artist(self, artist_id: str) -> TidalArtistResponse:
        params = {"countryCode": self._config.country_code}
        payload = await self._get_json(f"/artists/{artist_id}", params=params)
        if payload is None:
            return TidalArtistResponse()
        return TidalArtistResponse.model_validate(payload)

    async def _get_json(self, path: str, *, params: dict[str, str]) -> dict[str, object] | None:
        """GET ``path``; ``None`` for 404, one token refresh on 401."""
        async with self._client_factory(self._config.api) as client:
            response = await self._authorized_get(client, path, params)
            if response.status_code == httpx.codes.UNAUTHORIZED:
                log.info("TIDAL rejected the cached token, refreshing")
                self._tokens.invalidate()
                response = await self._authorized_get(client, path, params)

        if response.status_code == httpx.codes.NOT_FOUND:
            return None
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise TidalAPIError(
                f"TIDAL request {path} failed with HTTP {response.status_code}"
            ) from exc

        payload = response.json()
        if not isinstance(payload, dict):
            raise TidalAPIError(f"Unexpected TIDAL response payload for {path}")
        return payload

    async def _authorized_get(
        self,
        client: ResilientClient,
        path: str,
        params: dict[str, str],
    ) -> httpx.Response:
        token = await self._tokens.get_access_token()
        try:
            return await client.get(
                path,
                params=params,
                headers={"Authorization": f"Bearer {token}"},
            )
        except httpx.HTTPError as exc:
            raise TidalAPIError(f"TIDAL request {path} failed: {exc}") from exc
