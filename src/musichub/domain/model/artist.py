"""Artist aggregate."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from musichub.domain.errors import ValidationError
from musichub.domain.model.codes import ArtistName
from musichub.domain.model.entity import Entity
from musichub.domain.model.enums import VerificationStatus
from musichub.domain.model.priority import has_at_least_priority, highest_priority_source

if TYPE_CHECKING:
    from collections.abc import Iterable
    from uuid import UUID

    from musichub.domain.model.codes import Isrc, Source
    from musichub.domain.model.enums import SourceType


@dataclass(frozen=True, slots=True)
class Contribution:
    """Denormalised record of a track the artist is credited on."""

    track_id: UUID
    title: str
    isrc: Isrc

    def __post_init__(self) -> None:
        if not isinstance(self.title, str) or not self.title.strip():
            raise ValidationError("Contribution title cannot be blank")
        object.__setattr__(self, "title", self.title.strip())


@dataclass(eq=False, kw_only=True)
class Artist(Entity):
    name: ArtistName
    status: VerificationStatus = VerificationStatus.PROVISIONAL
    _track_references: set[Isrc] = field(default_factory=set, init=False, repr=False)
    _sources: list[Source] = field(default_factory=list, init=False, repr=False)
    _contributions: list[Contribution] = field(default_factory=list, init=False, repr=False)

    @classmethod
    def create_provisional(cls, name: ArtistName | str) -> Artist:
        artist_name = name if isinstance(name, ArtistName) else ArtistName(name)
        return cls(name=artist_name)

    @classmethod
    def restore(
        cls,
        *,
        id: UUID,  # noqa: A002
        name: ArtistName,
        status: VerificationStatus,
        track_references: Iterable[Isrc] = (),
        sources: Iterable[Source] = (),
        contributions: Iterable[Contribution] = (),
    ) -> Artist:
        artist = cls(id=id, name=name, status=status)
        artist._track_references.update(track_references)
        for source in sources:
            artist.add_source(source)
        for contribution in contributions:
            artist.add_contribution(contribution)
        return artist

    @property
    def track_references(self) -> frozenset[Isrc]:
        return frozenset(self._track_references)

    @property
    def sources(self) -> tuple[Source, ...]:
        return tuple(self._sources)

    @property
    def contributions(self) -> tuple[Contribution, ...]:
        return tuple(self._contributions)

    @property
    def is_provisional(self) -> bool:
        return self.status is VerificationStatus.PROVISIONAL

    @property
    def is_verified(self) -> bool:
        return self.status is VerificationStatus.VERIFIED

    def add_track_reference(self, isrc: Isrc) -> bool:
        if isrc in self._track_references:
            return False
        self._track_references.add(isrc)
        return True

    def has_track_reference(self, isrc: Isrc) -> bool:
        return isrc in self._track_references

    def add_contribution(self, contribution: Contribution) -> bool:
        if contribution in self._contributions:
            return False
        self._contributions.append(contribution)
        return True

    def add_source(self, source: Source) -> bool:
        if source in self._sources:
            return False
        self._sources.append(source)
        return True

    def rename_from_source(self, name: ArtistName | str, source_type: SourceType) -> bool:
        """Take ``name`` when ``source_type`` ranks at least as high as every known source."""
        new_name = name if isinstance(name, ArtistName) else ArtistName(name)
        current = highest_priority_source(self._sources)
        if current is not None and not has_at_least_priority(source_type, current.source_type):
            return False
        self.name = new_name
        return True

    def mark_verified(self) -> None:
        if not self.is_provisional:
            raise ValidationError(f"Artist {self.id} is not provisional")
        self.status = VerificationStatus.VERIFIED

    def merge(self, external: Artist) -> None:
        """Fold an external match into this artist.

        Sources accumulate and the status only moves towards verified. The
        external name wins unless a higher ranked source is already recorded.
        """
        for source in external.sources:
            self.add_source(source)
        if external.sources:
            self.rename_from_source(external.name, external.sources[0].source_type)
        if external.is_verified and self.is_provisional:
            self.mark_verified()
