"""Port for looking up track metadata on an external music platform."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from musichub.domain.model import Isrc


@dataclass(frozen=True, slots=True)
class ExternalTrackMetadata:
    isrc: str
    title: str
    platform: str
    artist_names: tuple[str, ...] = field(default_factory=tuple)
    external_id: str | None = None


@runtime_checkable
class TrackMetadataPort(Protocol):
    """Return metadata for ``isrc`` or ``None`` when the platform has no such track."""

    @property
    def platform(self) -> str: ...

    def fetch_track_by_isrc(self, isrc: Isrc) -> ExternalTrackMetadata | None: ...
