"""SQLAlchemy table metadata for MusicHub aggregates.

Aggregates are mapped by hand in the repositories; these are plain Core tables.
"""

from __future__ import annotations

import json
import uuid
from datetime import UTC, datetime
from typing import Any, cast

from sqlalchemy import (
    Column,
    DateTime,
    Dialect,
    Enum,
    ForeignKey,
    Index,
    MetaData,
    String,
    Table,
    TypeDecorator,
    UniqueConstraint,
    Uuid,
)

from musichub.domain.model import ArtistCredit, Source, SourceType, VerificationStatus

UUIDColumnType = Uuid[uuid.UUID]


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


def _load_json_list(value: str | None) -> list[dict[str, Any]]:
    if value is None:
        return []
    loaded = json.loads(value)
    if not isinstance(loaded, list):
        return []
    items = cast(list[Any], loaded)
    return [item for item in items if isinstance(item, dict)]


class SourceListType(TypeDecorator[tuple[Source, ...]]):
    """Ordered list of sources stored as JSON."""

    impl = String
    cache_ok = True

    def process_bind_param(
        self, value: tuple[Source, ...] | None, dialect: Dialect
    ) -> str | None:
        _ = dialect
        if value is None:
            return None
        payload = [{"type": source.source_type.value, "id": source.source_id} for source in value]
        return json.dumps(payload)

    def process_result_value(self, value: str | None, dialect: Dialect) -> tuple[Source, ...]:
        _ = dialect
        return tuple(
            Source(SourceType(item["type"]), str(item["id"])) for item in _load_json_list(value)
        )


class ArtistCreditListType(TypeDecorator[tuple[ArtistCredit, ...]]):
    """Ordered artist credits stored as JSON."""

    impl = String
    cache_ok = True

    def process_bind_param(
        self, value: tuple[ArtistCredit, ...] | None, dialect: Dialect
    ) -> str | None:
        _ = dialect
        if value is None:
            return None
        payload = [
            {
                "name": credit.artist_name,
                "artist_id": str(credit.artist_id) if credit.artist_id else None,
            }
            for credit in value
        ]
        return json.dumps(payload)

    def process_result_value(
        self, value: str | None, dialect: Dialect
    ) -> tuple[ArtistCredit, ...]:
        _ = dialect
        credits: list[ArtistCredit] = []
        for item in _load_json_list(value):
            artist_id = item.get("artist_id")
            credits.append(
                ArtistCredit(str(item["name"]), uuid.UUID(artist_id) if artist_id else None)
            )
        return tuple(credits)


metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_label)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)

# Producer context -------------------------------------------------------------

producer_table = Table(
    "producer",
    metadata,
    Column("id", UUIDColumnType, primary_key=True),
    Column("producer_code", String(5), nullable=False, unique=True),
    Column("name", String, nullable=True),
)

producer_track_table = Table(
    "producer_track",
    metadata,
    Column("id", UUIDColumnType, primary_key=True),
    Column(
        "producer_id",
        UUIDColumnType,
        ForeignKey("producer.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("isrc", String(12), nullable=False),
    Column("title", String, nullable=False),
    Column("status", Enum(VerificationStatus, native_enum=False), nullable=False),
    Column("credits", ArtistCreditListType, nullable=False),
    Column("sources", SourceListType, nullable=False),
    Column("submitted_at", UTCDateTime, nullable=False),
    UniqueConstraint("producer_id", "isrc"),
    Index("ix_producer_track_submitted_at", "submitted_at"),
)

# Artist context ---------------------------------------------------------------

artist_table = Table(
    "artist",
    metadata,
    Column("id", UUIDColumnType, primary_key=True),
    Column("name", String(255), nullable=False, unique=True),
    Column("status", Enum(VerificationStatus, native_enum=False), nullable=False),
    Column("sources", SourceListType, nullable=False),
)

artist_track_reference_table = Table(
    "artist_track_reference",
    metadata,
    Column(
        "artist_id",
        UUIDColumnType,
        ForeignKey("artist.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("isrc", String(12), primary_key=True),
)

artist_contribution_table = Table(
    "artist_contribution",
    metadata,
    Column(
        "artist_id",
        UUIDColumnType,
        ForeignKey("artist.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("track_id", UUIDColumnType, primary_key=True),
    Column("isrc", String(12), nullable=False),
    Column("title", String, nullable=False),
)
