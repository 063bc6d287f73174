"""TIDAL adapter package."""

from __future__ import annotations

from .auth import TidalTokenProvider
from .client import TidalClient
from .errors import TidalAPIError
from .fetcher import TidalArtistReconciler, TidalTrackMetadataFetcher
from .schema import (
    TidalArtist,
    TidalArtistResponse,
    TidalArtistsResponse,
    TidalTokenResponse,
    TidalTrack,
    TidalTracksResponse,
)
from .translator import TIDAL_PLATFORM, artist_handle, translate_artist, translate_track

__all__ = [
    "TIDAL_PLATFORM",
    "TidalAPIError",
    "TidalArtist",
    "TidalArtistReconciler",
    "TidalArtistResponse",
    "TidalArtistsResponse",
    "TidalClient",
    "TidalTokenProvider",
    "TidalTokenResponse",
    "TidalTrack",
    "TidalTrackMetadataFetcher",
    "TidalTracksResponse",
    "artist_handle",
    "translate_artist",
    "translate_track",
]
