"""Spotify implementation of the artist reconciliation port."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

import spotipy
from spotipy.oauth2 import SpotifyClientCredentials

from musichub.domain.errors import ExternalServiceError
from musichub.domain.model import SourceType

from .schema import SpotifyArtist, SpotifyArtistSearch
from .translator import pick_artist, translate_artist

if TYPE_CHECKING:
    from musichub.config.spotify import SpotifyConfig
    from musichub.domain.model import Artist

log = getLogger(__name__)

NOT_FOUND_STATUSES = frozenset({400, 404})


class SpotifyArtistReconciler:
    """Look artists up through spotipy; blocking calls run in a worker thread."""

    def __init__(
        self,
        *,
        config: SpotifyConfig | None = None,
        client: spotipy.Spotify | None = None,
    ) -> None:
        if client is None:
            if config is None:
                raise ValueError("Either config or client is required")
            auth_manager = SpotifyClientCredentials(
                client_id=config.client_id,
                client_secret=config.client_secret,
            )
            client = spotipy.Spotify(auth_manager=auth_manager)
        self._client = client
        self._search_limit = config.search_limit if config is not None else 5

    def supports(self, source_type: SourceType) -> bool:
        return source_type is SourceType.SPOTIFY

    async def find_artist_by_name(self, name: str, source_type: SourceType) -> Artist | None:
        if not self.supports(source_type) or not name.strip():
            return None
        try:
            raw_payload = await asyncio.to_thread(
                self._client.search,  # pyright: ignore[reportUnknownMemberType, reportUnknownArgumentType]
                q=f"artist:{name.strip()}",
                type="artist",
                limit=self._search_limit,
            )
        except spotipy.SpotifyException as exc:
            raise ExternalServiceError(
                f"Spotify artist search failed for {name!r}: {exc}", service="spotify"
            ) from exc
        payload = SpotifyArtistSearch.model_validate(raw_payload or {})
        candidate = pick_artist(payload.artists.items, name)
        if candidate is None:
            log.debug("Spotify has no artist named %r", name)
            return None
        return translate_artist(candidate)

    async def find_artist_by_external_id(
        self, external_id: str, source_type: SourceType
    ) -> Artist | None:
        if not self.supports(source_type) or not external_id.strip():
            return None
        try:
            raw_payload = await asyncio.to_thread(
                self._client.artist,  # pyright: ignore[reportUnknownMemberType, reportUnknownArgumentType]
                external_id.strip(),
            )
        except spotipy.SpotifyException as exc:
            if exc.http_status in NOT_FOUND_STATUSES:
                return None
            raise ExternalServiceError(
                f"Spotify artist lookup failed for {external_id!r}: {exc}", service="spotify"
            ) from exc
        if not raw_payload:
            return None
        return translate_artist(SpotifyArtist.model_validate(raw_payload))


if TYPE_CHECKING:
    from musichub.domain.ports import ArtistReconciliationPort

    _reconciler_check: ArtistReconciliationPort = SpotifyArtistReconciler()
