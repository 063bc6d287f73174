"""Domain port definitions for adapters."""

from __future__ import annotations

from .messaging import EventHandler, MessageChannel
from .metadata import ExternalTrackMetadata, TrackMetadataPort
from .persistence import (
    ArtistRepository,
    ProducerRepository,
    Repository,
    TrackInfo,
    TrackQueryRepository,
)
from .reconciliation import ArtistReconciliationPort
from .unit_of_work import (
    ArtistRepositories,
    ArtistUnitOfWork,
    ProducerRepositories,
    ProducerUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "ArtistReconciliationPort",
    "ArtistRepositories",
    "ArtistRepository",
    "ArtistUnitOfWork",
    "EventHandler",
    "ExternalTrackMetadata",
    "MessageChannel",
    "ProducerRepositories",
    "ProducerRepository",
    "ProducerUnitOfWork",
    "Repository",
    "RepositoryCollection",
    "TrackInfo",
    "TrackMetadataPort",
    "TrackQueryRepository",
    "UnitOfWork",
]
