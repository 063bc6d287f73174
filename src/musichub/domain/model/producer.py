"""Producer aggregate: the owner of every track registered under one ISRC prefix."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from musichub.domain.errors import ValidationError
from musichub.domain.model.entity import Entity
from musichub.domain.model.enums import SourceType, VerificationStatus
from musichub.domain.model.identity import derive_producer_id, derive_track_id
from musichub.domain.model.priority import has_at_least_priority, highest_priority_source

if TYPE_CHECKING:
    from collections.abc import Iterable
    from uuid import UUID

    from musichub.domain.model.codes import Isrc, ProducerCode, Source


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True, slots=True)
class ArtistCredit:
    """An artist named on a track, optionally resolved to an Artist id."""

    artist_name: str
    artist_id: UUID | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.artist_name, str) or not self.artist_name.strip():
            raise ValidationError("Artist credit name cannot be blank")
        object.__setattr__(self, "artist_name", self.artist_name.strip())

    @property
    def is_resolved(self) -> bool:
        return self.artist_id is not None

    def with_artist_id(self, artist_id: UUID) -> ArtistCredit:
        return ArtistCredit(self.artist_name, artist_id)


@dataclass(frozen=True, slots=True, kw_only=True, eq=False)
class Track:
    """Track value owned by a Producer. Two tracks are equal when their ISRCs are."""

    isrc: Isrc
    title: str
    sources: tuple[Source, ...]
    credits: tuple[ArtistCredit, ...] = ()
    status: VerificationStatus = VerificationStatus.PROVISIONAL
    submitted_at: datetime = field(default_factory=_utcnow)

    def __post_init__(self) -> None:
        if not isinstance(self.title, str) or not self.title.strip():
            raise ValidationError("Track title cannot be blank")
        object.__setattr__(self, "title", self.title.strip())
        object.__setattr__(self, "credits", tuple(self.credits))
        object.__setattr__(self, "sources", tuple(self.sources))
        if not self.sources:
            raise ValidationError(f"Track {self.isrc} needs at least one source")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Track):
            return NotImplemented
        return self.isrc == other.isrc

    def __hash__(self) -> int:
        return hash(self.isrc)

    @property
    def id(self) -> UUID:
        return derive_track_id(self.isrc)

    @property
    def artist_names(self) -> tuple[str, ...]:
        return tuple(credit.artist_name for credit in self.credits)

    @property
    def highest_priority_source(self) -> Source | None:
        return highest_priority_source(self.sources)

    def update_from_source(
        self,
        source: Source,
        *,
        title: str | None = None,
        credits: Iterable[ArtistCredit] | None = None,
        status: VerificationStatus | None = None,
    ) -> Track:
        """Record ``source`` and take its data if it ranks at least as high as the current best.

        A lower-ranked source is still recorded but cannot overwrite anything.
        """
        sources = self.sources if source in self.sources else (*self.sources, source)
        current = self.highest_priority_source
        if current is not None and not has_at_least_priority(
            source.source_type, current.source_type
        ):
            return replace(self, sources=sources)

        new_status = status or self.status
        if source.source_type is SourceType.MANUAL:
            new_status = VerificationStatus.VERIFIED
        if self.status is VerificationStatus.VERIFIED:
            new_status = VerificationStatus.VERIFIED
        return replace(
            self,
            sources=sources,
            title=title or self.title,
            credits=tuple(credits) if credits is not None else self.credits,
            status=new_status,
        )


@dataclass(eq=False, kw_only=True)
class Producer(Entity):
    producer_code: ProducerCode
    name: str | None = None
    _tracks: dict[Isrc, Track] = field(default_factory=dict, init=False, repr=False)
    _unsaved: set[Isrc] = field(default_factory=set, init=False, repr=False)

    @classmethod
    def create(cls, producer_code: ProducerCode, *, name: str | None = None) -> Producer:
        """New producer whose id is derived from its code."""
        return cls(id=derive_producer_id(producer_code), producer_code=producer_code, name=name)

    @classmethod
    def restore(
        cls,
        *,
        id: UUID,  # noqa: A002
        producer_code: ProducerCode,
        name: str | None,
        tracks: Iterable[Track],
    ) -> Producer:
        producer = cls(id=id, producer_code=producer_code, name=name)
        for track in tracks:
            producer.add_track(track)
        producer.mark_saved()
        return producer

    @property
    def tracks(self) -> tuple[Track, ...]:
        return tuple(self._tracks.values())

    @property
    def isrcs(self) -> frozenset[Isrc]:
        return frozenset(self._tracks)

    @property
    def unsaved_tracks(self) -> tuple[Track, ...]:
        """Tracks added since the producer was loaded; the store must not know them yet."""
        return tuple(track for isrc, track in self._tracks.items() if isrc in self._unsaved)

    def mark_saved(self) -> None:
        self._unsaved.clear()

    def has_track(self, isrc: Isrc) -> bool:
        return isrc in self._tracks

    def get_track(self, isrc: Isrc) -> Track | None:
        return self._tracks.get(isrc)

    def add_track(self, track: Track) -> bool:
        """Insert ``track`` unless its ISRC is already present. Returns whether it was added."""
        if not self.producer_code.owns(track.isrc):
            raise ValidationError(
                f"ISRC {track.isrc} does not belong to producer {self.producer_code}"
            )
        if track.isrc in self._tracks:
            return False
        self._tracks[track.isrc] = track
        self._unsaved.add(track.isrc)
        return True

    def register_track(
        self,
        isrc: Isrc,
        title: str,
        credits: Iterable[ArtistCredit],
        sources: Iterable[Source],
    ) -> bool:
        if isrc in self._tracks:
            return False
        return self.add_track(
            Track(isrc=isrc, title=title, credits=tuple(credits), sources=tuple(sources))
        )

    def apply_source_update(
        self,
        isrc: Isrc,
        source: Source,
        *,
        title: str | None = None,
        credits: Iterable[ArtistCredit] | None = None,
        status: VerificationStatus | None = None,
    ) -> Track:
        track = self._tracks.get(isrc)
        if track is None:
            raise ValidationError(f"Producer {self.producer_code} has no track {isrc}")
        updated = track.update_from_source(source, title=title, credits=credits, status=status)
        self._tracks[isrc] = updated
        return updated

    def rename(self, name: str | None) -> None:
        self.name = name.strip() if name and name.strip() else None

    def snapshot(self) -> ProducerSnapshot:
        return ProducerSnapshot(
            id=self.id,
            producer_code=self.producer_code.value,
            name=self.name,
            tracks=frozenset(isrc.value for isrc in self._tracks),
        )


@dataclass(frozen=True, slots=True)
class ProducerSnapshot:
    """Read-only view returned to callers of the registration operation."""

    id: UUID
    producer_code: str
    name: str | None
    tracks: frozenset[str]
