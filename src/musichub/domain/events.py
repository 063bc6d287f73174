"""Domain events exchanged between the producer and artist contexts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from uuid import UUID

    from musichub.domain.model import Isrc, Track

TRACK_REGISTERED_ADDRESS: Final[str] = "track-registered"


@dataclass(frozen=True, slots=True)
class ArtistCreditInfo:
    name: str
    artist_id: UUID | None = None


@dataclass(frozen=True, slots=True)
class SourceInfo:
    name: str
    source_id: str


@dataclass(frozen=True, slots=True)
class TrackWasRegistered:
    """A track was stored for the first time under its producer."""

    isrc: Isrc
    title: str
    producer_id: UUID
    artist_credits: tuple[ArtistCreditInfo, ...]
    sources: tuple[SourceInfo, ...]

    address = TRACK_REGISTERED_ADDRESS

    @classmethod
    def from_track(cls, track: Track, *, producer_id: UUID) -> TrackWasRegistered:
        return cls(
            isrc=track.isrc,
            title=track.title,
            producer_id=producer_id,
            artist_credits=tuple(
                ArtistCreditInfo(name=credit.artist_name, artist_id=credit.artist_id)
                for credit in track.credits
            ),
            sources=tuple(
                SourceInfo(name=source.source_type.value, source_id=source.source_id)
                for source in track.sources
            ),
        )
