"""Client-credentials access tokens for the TIDAL API."""

from __future__ import annotations

import time
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Final

import httpx

from musichub.adapters.http_resilience import ResilientClient

from .errors import TidalAPIError
from .schema import TidalTokenResponse

if TYPE_CHECKING:
    from collections.abc import Callable

    from musichub.config.http_resilience import ResilienceConfig
    from musichub.config.tidal import TidalConfig

log = getLogger(__name__)

TOKEN_PATH: Final[str] = "/oauth2/token"
DEFAULT_TOKEN_TTL_SECONDS: Final[int] = 3600
TOKEN_EXPIRY_BUFFER_SECONDS: Final[int] = 300


@dataclass(slots=True, frozen=True)
class _CachedToken:
    access_token: str
    expires_at: float


class TidalTokenProvider:
    """Fetch and cache a bearer token until shortly before it expires."""

    def __init__(
        self,
        *,
        config: TidalConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._config = config
        self._client_factory = client_factory or ResilientClient
        self._clock = clock
        self._token: _CachedToken | None = None

    def has_valid_token(self) -> bool:
        return self._token is not None and self._clock() < self._token.expires_at

    def invalidate(self) -> None:
        self._token = None

    async def get_access_token(self) -> str:
        if self._token is not None and self.has_valid_token():
            return self._token.access_token
        token = await self._request_token()
        ttl = token.expires_in or DEFAULT_TOKEN_TTL_SECONDS
        self._token = _CachedToken(
            access_token=token.access_token,
            expires_at=self._clock() + max(ttl - TOKEN_EXPIRY_BUFFER_SECONDS, 0),
        )
        log.info("Obtained TIDAL access token, valid for %ss", ttl)
        return token.access_token

    async def _request_token(self) -> TidalTokenResponse:
        async with self._client_factory(self._config.auth) as client:
            try:
                response = await client.post(
                    TOKEN_PATH,
                    data={"grant_type": "client_credentials"},
                    auth=(self._config.client_id, self._config.client_secret),
                )
                response.raise_for_status()
            except httpx.HTTPError as exc:
                raise TidalAPIError(f"TIDAL token request failed: {exc}") from exc

        token = TidalTokenResponse.model_validate(response.json())
        if not token.access_token.strip():
            raise TidalAPIError("TIDAL token response carried an empty access token")
        return token
