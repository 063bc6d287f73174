"""Identity derivation.

New aggregates get random identifiers. Identifiers derived from codes use
name-based UUIDs (version 5) under fixed namespaces, so the same code maps to
the same identifier in every process.
"""

from __future__ import annotations

import hashlib
from typing import TYPE_CHECKING, Final
from uuid import UUID, uuid4, uuid5

from musichub.domain.errors import ValidationError

if TYPE_CHECKING:
    from musichub.domain.model.codes import ArtistName, Isrc, ProducerCode

PRODUCER_NAMESPACE: Final[UUID] = UUID("550e8400-e29b-41d4-a716-446655440001")
ARTIST_NAMESPACE: Final[UUID] = UUID("550e8400-e29b-41d4-a716-446655440002")
TRACK_NAMESPACE: Final[UUID] = UUID("550e8400-e29b-41d4-a716-446655440003")


def new_id() -> UUID:
    return uuid4()


def derive_producer_id(code: ProducerCode) -> UUID:
    return uuid5(PRODUCER_NAMESPACE, code.value)


def derive_track_id(isrc: Isrc) -> UUID:
    return uuid5(TRACK_NAMESPACE, isrc.value)


def derive_artist_id(name: ArtistName) -> UUID:
    return uuid5(ARTIST_NAMESPACE, name.value)


def hash_id(value: str) -> UUID:
    """Fold the SHA-256 digest of ``value`` into a UUID.

    Not collision-safe against adversarial input; use it for synthetic
    correlation keys only.
    """
    if not value or not value.strip():
        raise ValidationError("Cannot derive an id from a blank value")
    digest = hashlib.sha256(value.encode("utf-8")).digest()
    return UUID(bytes=digest[:16])
