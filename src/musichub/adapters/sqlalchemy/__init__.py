"""SQLAlchemy adapter package for MusicHub."""

from __future__ import annotations

from .mappings import metadata
from .repositories import (
    SqlAlchemyArtistRepository,
    SqlAlchemyProducerRepository,
    SqlAlchemyTrackQueryRepository,
)

__all__ = [
    "SqlAlchemyArtistRepository",
    "SqlAlchemyProducerRepository",
    "SqlAlchemyTrackQueryRepository",
    "metadata",
]
