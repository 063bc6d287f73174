"""Translate TIDAL payloads into domain values."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Final

from musichub.domain.model import Artist, Source, SourceType
from musichub.domain.ports import ExternalTrackMetadata

if TYPE_CHECKING:
    from .schema import TidalArtist, TidalTracksResponse

log = getLogger(__name__)

TIDAL_PLATFORM: Final[str] = "tidal"


def artist_handle(name: str) -> str:
    """TIDAL handles are lowercase names without spaces."""
    return name.lower().replace(" ", "")


def translate_track(
    response: TidalTracksResponse,
    requested_isrc: str,
) -> ExternalTrackMetadata | None:
    if not response.data:
        log.info("TIDAL has no track for ISRC %s", requested_isrc)
        return None
    track = response.data[0]
    if track.attributes is None:
        log.warning("TIDAL track %s for ISRC %s has no attributes", track.id, requested_isrc)
        return None

    wanted = track.artist_ids
    by_id = {
        resource.id: resource.name
        for resource in response.included
        if resource.is_artist and resource.name is not None
    }
    artist_names = tuple(name for artist_id in wanted if (name := by_id.get(artist_id)))

    return ExternalTrackMetadata(
        isrc=track.attributes.isrc,
        title=track.attributes.title,
        platform=TIDAL_PLATFORM,
        artist_names=artist_names,
        external_id=track.id,
    )


def translate_artist(artist: TidalArtist) -> Artist | None:
    """Build a verified artist vouched for by TIDAL."""
    if artist.attributes is None or not artist.attributes.name.strip():
        log.warning("TIDAL artist %s has no name", artist.id)
        return None
    result = Artist.create_provisional(artist.attributes.name)
    result.add_source(Source(SourceType.TIDAL, artist.id))
    result.mark_verified()
    return result
