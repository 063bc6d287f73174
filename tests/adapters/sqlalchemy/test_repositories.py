from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING
from uuid import uuid4

import pytest

from musichub.domain.errors import UniquenessConflictError
from musichub.domain.model import (
    Artist,
    ArtistCredit,
    ArtistName,
    Contribution,
    Isrc,
    Producer,
    ProducerCode,
    Source,
    SourceType,
    Track,
    VerificationStatus,
    derive_track_id,
)
from tests.helpers.artists import make_external_artist

if TYPE_CHECKING:
    from collections.abc import Callable
    from uuid import UUID

    from musichub.adapters.sqlalchemy.unit_of_work import (
        SqlAlchemyArtistUnitOfWork,
        SqlAlchemyProducerUnitOfWork,
    )

TIDAL = Source(SourceType.TIDAL, "tidal-1")


def _producer_with(*isrcs: str) -> Producer:
    producer = Producer.create(ProducerCode("FRLA1"), name="Label")
    for isrc in isrcs:
        producer.register_track(
            Isrc(isrc),
            f"Title {isrc}",
            [ArtistCredit("The Testers"), ArtistCredit("Guest")],
            [TIDAL],
        )
    return producer


def test_producer_round_trip(
    producer_unit_of_work: Callable[[], SqlAlchemyProducerUnitOfWork],
) -> None:
    with producer_unit_of_work() as uow:
        saved = uow.repositories.producers.save(_producer_with("FRLA12400001"))
        uow.commit()

    assert saved.unsaved_tracks == ()

    with producer_unit_of_work() as uow:
        loaded = uow.repositories.producers.find_by_code(ProducerCode("FRLA1"))

    assert loaded is not None
    assert loaded.id == saved.id
    assert loaded.name == "Label"
    track = loaded.get_track(Isrc("FRLA12400001"))
    assert track is not None
    assert track.title == "Title FRLA12400001"
    assert track.artist_names == ("The Testers", "Guest")
    assert track.sources == (TIDAL,)
    assert track.status is VerificationStatus.PROVISIONAL
    assert track.submitted_at.tzinfo is not None


def test_adding_a_track_to_a_stored_producer(
    producer_unit_of_work: Callable[[], SqlAlchemyProducerUnitOfWork],
) -> None:
    with producer_unit_of_work() as uow:
        uow.repositories.producers.save(_producer_with("FRLA12400001"))
        uow.commit()

    with producer_unit_of_work() as uow:
        producer = uow.repositories.producers.find_by_code(ProducerCode("FRLA1"))
        assert producer is not None
        producer.register_track(Isrc("FRLA12400002"), "Second", [], [TIDAL])
        producer.apply_source_update(
            Isrc("FRLA12400001"), Source(SourceType.MANUAL, "curator"), title="Curated"
        )
        uow.repositories.producers.save(producer)
        uow.commit()

    with producer_unit_of_work() as uow:
        loaded = uow.repositories.producers.find_by_code(ProducerCode("FRLA1"))

    assert loaded is not None
    assert {isrc.value for isrc in loaded.isrcs} == {"FRLA12400001", "FRLA12400002"}
    first = loaded.get_track(Isrc("FRLA12400001"))
    assert first is not None
    assert first.title == "Curated"
    assert first.status is VerificationStatus.VERIFIED


def test_late_creator_of_a_producer_keeps_stored_tracks(
    producer_unit_of_work: Callable[[], SqlAlchemyProducerUnitOfWork],
) -> None:
    with producer_unit_of_work() as uow:
        uow.repositories.producers.save(_producer_with("FRLA12400001"))
        uow.commit()

    with producer_unit_of_work() as uow:
        saved = uow.repositories.producers.save(_producer_with("FRLA12400002"))
        uow.commit()

    assert {isrc.value for isrc in saved.isrcs} == {"FRLA12400001", "FRLA12400002"}


def test_stale_copy_inserting_a_known_track_conflicts(
    producer_unit_of_work: Callable[[], SqlAlchemyProducerUnitOfWork],
) -> None:
    with producer_unit_of_work() as uow:
        uow.repositories.producers.save(Producer.create(ProducerCode("FRLA1")))
        uow.commit()

    with producer_unit_of_work() as uow:
        stale = uow.repositories.producers.find_by_code(ProducerCode("FRLA1"))
    with producer_unit_of_work() as uow:
        winner = uow.repositories.producers.find_by_code(ProducerCode("FRLA1"))
        assert winner is not None
        winner.register_track(Isrc("FRLA12400001"), "Winner", [], [TIDAL])
        uow.repositories.producers.save(winner)
        uow.commit()

    assert stale is not None
    stale.register_track(Isrc("FRLA12400001"), "Loser", [], [TIDAL])
    with pytest.raises(UniquenessConflictError), producer_unit_of_work() as uow:
        uow.repositories.producers.save(stale)


def test_recent_tracks_query(
    producer_unit_of_work: Callable[[], SqlAlchemyProducerUnitOfWork],
) -> None:
    producer = Producer.create(ProducerCode("FRLA1"))
    start = datetime(2024, 1, 1, tzinfo=UTC)
    for index in range(3):
        producer.add_track(
            Track(
                isrc=Isrc(f"FRLA1240000{index}"),
                title=f"Track {index}",
                sources=(TIDAL,),
                credits=(ArtistCredit("The Testers"),),
                submitted_at=start + timedelta(hours=index),
            )
        )
    with producer_unit_of_work() as uow:
        uow.repositories.producers.save(producer)
        uow.commit()

    with producer_unit_of_work() as uow:
        recent = uow.repositories.tracks.find_recent(2)

    assert [info.isrc for info in recent] == ["FRLA12400002", "FRLA12400001"]
    assert recent[0].artist_names == ("The Testers",)
    assert recent[0].submitted_at == start + timedelta(hours=2)


def test_artist_round_trip(
    artist_unit_of_work: Callable[[], SqlAlchemyArtistUnitOfWork],
) -> None:
    isrc = Isrc("DEU630901306")
    artist = Artist.create_provisional("The Testers")
    artist.add_track_reference(isrc)
    artist.add_contribution(Contribution(track_id=derive_track_id(isrc), title="Song", isrc=isrc))
    artist.add_source(Source(SourceType.SPOTIFY, "sp-1"))

    with artist_unit_of_work() as uow:
        uow.repositories.artists.save(artist)
        uow.commit()

    with artist_unit_of_work() as uow:
        by_name = uow.repositories.artists.find_by_name(ArtistName("The Testers"))
        by_id = uow.repositories.artists.find_by_id(artist.id)

    assert by_name is not None
    assert by_id is not None
    assert by_name.id == artist.id
    assert by_name.track_references == frozenset({isrc})
    assert by_name.contributions == artist.contributions
    assert by_name.sources == (Source(SourceType.SPOTIFY, "sp-1"),)
    assert by_name.is_provisional


def test_artist_updates_keep_existing_references(
    artist_unit_of_work: Callable[[], SqlAlchemyArtistUnitOfWork],
) -> None:
    artist = Artist.create_provisional("The Testers")
    artist.add_track_reference(Isrc("DEU630901306"))
    with artist_unit_of_work() as uow:
        uow.repositories.artists.save(artist)
        uow.commit()

    with artist_unit_of_work() as uow:
        loaded = uow.repositories.artists.find_by_id(artist.id)
        assert loaded is not None
        loaded.add_track_reference(Isrc("DEU630901307"))
        loaded.add_source(Source(SourceType.TIDAL, "t-1"))
        loaded.mark_verified()
        uow.repositories.artists.save(loaded)
        uow.commit()

    with artist_unit_of_work() as uow:
        stored = uow.repositories.artists.find_by_id(artist.id)

    assert stored is not None
    assert stored.is_verified
    assert stored.track_references == frozenset({Isrc("DEU630901306"), Isrc("DEU630901307")})


def test_artist_names_are_unique(
    artist_unit_of_work: Callable[[], SqlAlchemyArtistUnitOfWork],
) -> None:
    with artist_unit_of_work() as uow:
        uow.repositories.artists.save(Artist.create_provisional("The Testers"))
        uow.commit()

    with pytest.raises(UniquenessConflictError), artist_unit_of_work() as uow:
        uow.repositories.artists.save(Artist(id=uuid4(), name=ArtistName("The Testers")))


def _enrich_stored(
    artist_unit_of_work: Callable[[], SqlAlchemyArtistUnitOfWork], artist_id: UUID
) -> None:
    with artist_unit_of_work() as uow:
        current = uow.repositories.artists.find_by_id(artist_id)
        assert current is not None
        current.merge(make_external_artist("Testers, The", SourceType.TIDAL, "t-1"))
        uow.repositories.artists.save(current)
        uow.commit()


def test_stale_reference_write_keeps_an_enrichment(
    artist_unit_of_work: Callable[[], SqlAlchemyArtistUnitOfWork],
) -> None:
    artist = Artist.create_provisional("The Testers")
    artist.add_track_reference(Isrc("DEU630901306"))
    with artist_unit_of_work() as uow:
        uow.repositories.artists.save(artist)
        uow.commit()

    # read before the enrichment commits, written after it
    with artist_unit_of_work() as uow:
        stale = uow.repositories.artists.find_by_id(artist.id)
    _enrich_stored(artist_unit_of_work, artist.id)

    assert stale is not None
    assert stale.is_provisional
    stale.add_track_reference(Isrc("DEU630901307"))
    with artist_unit_of_work() as uow:
        saved = uow.repositories.artists.save(stale)
        uow.commit()

    with artist_unit_of_work() as uow:
        stored = uow.repositories.artists.find_by_id(artist.id)

    assert stored is not None
    assert saved.is_verified
    assert stored.is_verified
    assert stored.name == ArtistName("Testers, The")
    assert stored.sources == (Source(SourceType.TIDAL, "t-1"),)
    assert stored.track_references == frozenset({Isrc("DEU630901306"), Isrc("DEU630901307")})


def test_higher_ranked_rename_replaces_stored_name(
    artist_unit_of_work: Callable[[], SqlAlchemyArtistUnitOfWork],
) -> None:
    artist = Artist.create_provisional("The Testers")
    with artist_unit_of_work() as uow:
        uow.repositories.artists.save(artist)
        uow.commit()
    _enrich_stored(artist_unit_of_work, artist.id)

    with artist_unit_of_work() as uow:
        loaded = uow.repositories.artists.find_by_id(artist.id)
        assert loaded is not None
        loaded.add_source(Source(SourceType.MANUAL, "editor-1"))
        assert loaded.rename_from_source("The Testers", SourceType.MANUAL)
        saved = uow.repositories.artists.save(loaded)
        uow.commit()

    assert saved.name == ArtistName("The Testers")
    assert saved.sources == (Source(SourceType.TIDAL, "t-1"), Source(SourceType.MANUAL, "editor-1"))
