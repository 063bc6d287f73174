"""Repository implementations backed by SQLAlchemy sessions.

``save`` writes the whole aggregate and returns it as freshly read from the
session, so callers always hold a complete snapshot.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import insert, select, update

from musichub.adapters.sqlalchemy.errors import translate_errors
from musichub.adapters.sqlalchemy.mappings import (
    artist_contribution_table,
    artist_table,
    artist_track_reference_table,
    producer_table,
    producer_track_table,
)
from musichub.domain.model import (
    Artist,
    ArtistName,
    Contribution,
    Isrc,
    Producer,
    ProducerCode,
    Track,
    VerificationStatus,
    has_higher_priority,
    highest_priority_source,
)
from musichub.domain.ports.persistence import TrackInfo

if TYPE_CHECKING:
    from uuid import UUID

    from sqlalchemy import Row
    from sqlalchemy.orm import Session


class SqlAlchemyProducerRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def find_by_code(self, code: ProducerCode) -> Producer | None:
        with translate_errors(f"loading producer {code}"):
            row = self.session.execute(
                select(producer_table).where(producer_table.c.producer_code == code.value)
            ).one_or_none()
            if row is None:
                return None
            return self._restore(row)

    def find_by_id(self, producer_id: UUID) -> Producer | None:
        with translate_errors(f"loading producer {producer_id}"):
            row = self.session.execute(
                select(producer_table).where(producer_table.c.id == producer_id)
            ).one_or_none()
            if row is None:
                return None
            return self._restore(row)

    def save(self, entity: Producer) -> Producer:
        with translate_errors(f"saving producer {entity.producer_code}"):
            self._write_producer(entity)
            self._write_tracks(entity)
            stored = self.find_by_id(entity.id)
        if stored is None:
            raise LookupError(f"Producer {entity.id} vanished while saving")
        return stored

    def _write_producer(self, producer: Producer) -> None:
        values = {"producer_code": producer.producer_code.value, "name": producer.name}
        exists = self.session.execute(
            select(producer_table.c.id).where(producer_table.c.id == producer.id)
        ).scalar_one_or_none()
        if exists is None:
            self.session.execute(insert(producer_table).values(id=producer.id, **values))
        else:
            self.session.execute(
                update(producer_table).where(producer_table.c.id == producer.id).values(**values)
            )

    def _write_tracks(self, producer: Producer) -> None:
        unsaved = {track.isrc for track in producer.unsaved_tracks}
        for track in producer.tracks:
            values = _track_values(track)
            if track.isrc in unsaved:
                # plain insert: a concurrent registration of the same ISRC must conflict
                self.session.execute(
                    insert(producer_track_table).values(
                        id=track.id,
                        producer_id=producer.id,
                        isrc=track.isrc.value,
                        submitted_at=track.submitted_at,
                        **values,
                    )
                )
            else:
                self.session.execute(
                    update(producer_track_table)
                    .where(producer_track_table.c.id == track.id)
                    .values(**values)
                )

    def _restore(self, row: Row[Any]) -> Producer:
        track_rows = self.session.execute(
            select(producer_track_table)
            .where(producer_track_table.c.producer_id == row.id)
            .order_by(producer_track_table.c.submitted_at, producer_track_table.c.isrc)
        ).all()
        return Producer.restore(
            id=row.id,
            producer_code=ProducerCode(row.producer_code),
            name=row.name,
            tracks=[_track_from_row(track_row) for track_row in track_rows],
        )


class SqlAlchemyTrackQueryRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def find_recent(self, limit: int) -> list[TrackInfo]:
        stmt = (
            select(producer_track_table)
            .order_by(producer_track_table.c.submitted_at.desc(), producer_track_table.c.isrc)
            .limit(limit)
        )
        with translate_errors("loading recent tracks"):
            rows = self.session.execute(stmt).all()
        return [
            TrackInfo(
                isrc=row.isrc,
                title=row.title,
                artist_names=tuple(credit.artist_name for credit in row.credits),
                sources=row.sources,
                status=row.status,
                submitted_at=row.submitted_at,
            )
            for row in rows
        ]


class SqlAlchemyArtistRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def find_by_name(self, name: ArtistName) -> Artist | None:
        with translate_errors(f"loading artist {name.value!r}"):
            row = self.session.execute(
                select(artist_table).where(artist_table.c.name == name.value)
            ).one_or_none()
            if row is None:
                return None
            return self._restore(row)

    def find_by_id(self, artist_id: UUID) -> Artist | None:
        with translate_errors(f"loading artist {artist_id}"):
            row = self.session.execute(
                select(artist_table).where(artist_table.c.id == artist_id)
            ).one_or_none()
            if row is None:
                return None
            return self._restore(row)

    def save(self, entity: Artist) -> Artist:
        with translate_errors(f"saving artist {entity.name.value!r}"):
            self._write_artist(entity)
            self._write_track_references(entity)
            self._write_contributions(entity)
            stored = self.find_by_id(entity.id)
        if stored is None:
            raise LookupError(f"Artist {entity.id} vanished while saving")
        return stored

    def _write_artist(self, artist: Artist) -> None:
        stored = self.session.execute(
            select(artist_table.c.name, artist_table.c.status, artist_table.c.sources)
            .where(artist_table.c.id == artist.id)
            .with_for_update()
        ).one_or_none()
        if stored is None:
            self.session.execute(
                insert(artist_table).values(
                    id=artist.id,
                    name=artist.name.value,
                    status=artist.status,
                    sources=artist.sources,
                )
            )
            return
        self.session.execute(
            update(artist_table)
            .where(artist_table.c.id == artist.id)
            .values(**_merged_artist_values(artist, stored))
        )

    def _write_track_references(self, artist: Artist) -> None:
        # references only ever grow; rows written by other writers are kept
        stored = set(
            self.session.execute(
                select(artist_track_reference_table.c.isrc).where(
                    artist_track_reference_table.c.artist_id == artist.id
                )
            ).scalars()
        )
        missing = sorted(
            isrc.value for isrc in artist.track_references if isrc.value not in stored
        )
        if missing:
            self.session.execute(
                insert(artist_track_reference_table),
                [{"artist_id": artist.id, "isrc": isrc} for isrc in missing],
            )

    def _write_contributions(self, artist: Artist) -> None:
        stored = set(
            self.session.execute(
                select(artist_contribution_table.c.track_id).where(
                    artist_contribution_table.c.artist_id == artist.id
                )
            ).scalars()
        )
        missing = [c for c in artist.contributions if c.track_id not in stored]
        if missing:
            self.session.execute(
                insert(artist_contribution_table),
                [
                    {
                        "artist_id": artist.id,
                        "track_id": contribution.track_id,
                        "isrc": contribution.isrc.value,
                        "title": contribution.title,
                    }
                    for contribution in missing
                ],
            )

    def _restore(self, row: Row[Any]) -> Artist:
        references = self.session.execute(
            select(artist_track_reference_table.c.isrc).where(
                artist_track_reference_table.c.artist_id == row.id
            )
        ).scalars()
        contribution_rows = self.session.execute(
            select(artist_contribution_table)
            .where(artist_contribution_table.c.artist_id == row.id)
            .order_by(artist_contribution_table.c.isrc)
        ).all()
        return Artist.restore(
            id=row.id,
            name=ArtistName(row.name),
            status=row.status,
            track_references=[Isrc(value) for value in references],
            sources=row.sources,
            contributions=[
                Contribution(
                    track_id=contribution.track_id,
                    title=contribution.title,
                    isrc=Isrc(contribution.isrc),
                )
                for contribution in contribution_rows
            ],
        )


def _track_values(track: Track) -> dict[str, Any]:
    return {
        "title": track.title,
        "status": track.status,
        "credits": track.credits,
        "sources": track.sources,
    }


def _track_from_row(row: Row[Any]) -> Track:
    return Track(
        isrc=Isrc(row.isrc),
        title=row.title,
        credits=row.credits,
        sources=row.sources,
        status=row.status,
        submitted_at=row.submitted_at,
    )


def _merged_artist_values(artist: Artist, stored: Row[Any]) -> dict[str, Any]:
    """Column values for an update that never loses what another writer stored.

    Sources accumulate and a verified status is never written back to provisional.
    The stored name stays while it is backed by a higher ranked source.
    """
    sources = (*stored.sources, *(s for s in artist.sources if s not in stored.sources))
    status = artist.status
    if stored.status is VerificationStatus.VERIFIED:
        status = VerificationStatus.VERIFIED
    name = artist.name.value
    stored_best = highest_priority_source(stored.sources)
    incoming_best = highest_priority_source(artist.sources)
    if stored_best is not None and (
        incoming_best is None
        or has_higher_priority(stored_best.source_type, incoming_best.source_type)
    ):
        name = stored.name
    return {"name": name, "status": status, "sources": sources}


if TYPE_CHECKING:
    from musichub.domain.ports import (
        ArtistRepository,
        ProducerRepository,
        TrackQueryRepository,
    )

    def _check_protocols(session: Session) -> None:
        _producers: ProducerRepository = SqlAlchemyProducerRepository(session)
        _tracks: TrackQueryRepository = SqlAlchemyTrackQueryRepository(session)
        _artists: ArtistRepository = SqlAlchemyArtistRepository(session)
