"""Ports for persisting domain aggregates.

``save`` takes a complete aggregate and returns the stored snapshot; there is no
lazy loading behind these contracts.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from musichub.domain.model import Artist, Producer

if TYPE_CHECKING:
    from datetime import datetime
    from uuid import UUID

    from musichub.domain.model import ArtistName, ProducerCode, Source, VerificationStatus


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract for a persistent aggregate store."""

    def save(self, entity: TEntity) -> TEntity: ...


@runtime_checkable
class ProducerRepository(Repository[Producer], Protocol):
    def find_by_code(self, code: ProducerCode) -> Producer | None: ...


@runtime_checkable
class ArtistRepository(Repository[Artist], Protocol):
    def find_by_name(self, name: ArtistName) -> Artist | None: ...

    def find_by_id(self, artist_id: UUID) -> Artist | None: ...


@dataclass(frozen=True, slots=True)
class TrackInfo:
    """Flat read model of a registered track."""

    isrc: str
    title: str
    artist_names: tuple[str, ...]
    sources: tuple[Source, ...]
    status: VerificationStatus
    submitted_at: datetime


@runtime_checkable
class TrackQueryRepository(Protocol):
    def find_recent(self, limit: int) -> list[TrackInfo]: ...
