"""TIDAL implementations of the metadata and reconciliation ports."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING, Protocol

from musichub.domain.model import SourceType

from .client import TidalClient
from .translator import TIDAL_PLATFORM, artist_handle, translate_artist, translate_track

if TYPE_CHECKING:
    from musichub.config.tidal import TidalConfig
    from musichub.domain.model import Artist, Isrc
    from musichub.domain.ports import ExternalTrackMetadata

    from .schema import TidalArtistResponse, TidalArtistsResponse, TidalTracksResponse

log = getLogger(__name__)


class TidalCatalogClient(Protocol):
    async def search_tracks_by_isrc(self, isrc: str) -> TidalTracksResponse: ...

    async def search_artists_by_handle(self, handle: str) -> TidalArtistsResponse: ...

    async def get_artist(self, artist_id: str) -> TidalArtistResponse: ...


class TidalTrackMetadataFetcher:
    """Blocking track lookup by ISRC for the registration flow."""

    platform = TIDAL_PLATFORM

    def __init__(
        self,
        *,
        config: TidalConfig | None = None,
        client: TidalCatalogClient | None = None,
    ) -> None:
        if client is None:
            if config is None:
                raise ValueError("Either config or client is required")
            client = TidalClient(config=config)
        self._client = client

    def fetch_track_by_isrc(self, isrc: Isrc) -> ExternalTrackMetadata | None:
        response = asyncio.run(self._client.search_tracks_by_isrc(isrc.value))
        metadata = translate_track(response, isrc.value)
        if metadata is not None:
            log.info(
                "TIDAL track for %s: %r by %s",
                isrc,
                metadata.title,
                ", ".join(metadata.artist_names) or "unknown artists",
            )
        return metadata


class TidalArtistReconciler:
    def __init__(
        self,
        *,
        config: TidalConfig | None = None,
        client: TidalCatalogClient | None = None,
    ) -> None:
        if client is None:
            if config is None:
                raise ValueError("Either config or client is required")
            client = TidalClient(config=config)
        self._client = client

    def supports(self, source_type: SourceType) -> bool:
        return source_type is SourceType.TIDAL

    async def find_artist_by_name(self, name: str, source_type: SourceType) -> Artist | None:
        if not self.supports(source_type) or not name.strip():
            return None
        response = await self._client.search_artists_by_handle(artist_handle(name))
        if not response.data:
            log.debug("TIDAL has no artist with handle for %r", name)
            return None
        return translate_artist(response.data[0])

    async def find_artist_by_external_id(
        self, external_id: str, source_type: SourceType
    ) -> Artist | None:
        if not self.supports(source_type) or not external_id.strip():
            return None
        response = await self._client.get_artist(external_id.strip())
        if response.data is None:
            return None
        return translate_artist(response.data)


if TYPE_CHECKING:
    from musichub.domain.ports import ArtistReconciliationPort, TrackMetadataPort

    _metadata_check: TrackMetadataPort = TidalTrackMetadataFetcher(config=None)
    _reconciler_check: ArtistReconciliationPort = TidalArtistReconciler(config=None)
