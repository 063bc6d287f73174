"""Domain model package."""

from __future__ import annotations

from .artist import Artist, Contribution
from .codes import ArtistName, Isrc, ProducerCode, Source, normalize_isrc
from .entity import Entity
from .enums import SourceType, VerificationStatus
from .identity import (
    ARTIST_NAMESPACE,
    PRODUCER_NAMESPACE,
    TRACK_NAMESPACE,
    derive_artist_id,
    derive_producer_id,
    derive_track_id,
    hash_id,
    new_id,
)
from .priority import (
    SOURCE_OF_TRUTH_HIERARCHY,
    has_at_least_priority,
    has_higher_priority,
    highest_priority_source,
    priority_of,
)
from .producer import ArtistCredit, Producer, ProducerSnapshot, Track

__all__ = [
    "ARTIST_NAMESPACE",
    "PRODUCER_NAMESPACE",
    "SOURCE_OF_TRUTH_HIERARCHY",
    "TRACK_NAMESPACE",
    "Artist",
    "ArtistCredit",
    "ArtistName",
    "Contribution",
    "Entity",
    "Isrc",
    "Producer",
    "ProducerCode",
    "ProducerSnapshot",
    "Source",
    "SourceType",
    "Track",
    "VerificationStatus",
    "derive_artist_id",
    "derive_producer_id",
    "derive_track_id",
    "has_at_least_priority",
    "has_higher_priority",
    "hash_id",
    "highest_priority_source",
    "new_id",
    "normalize_isrc",
    "priority_of",
]
