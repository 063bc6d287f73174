from __future__ import annotations

from uuid import uuid4

import pytest

from musichub.domain.errors import ValidationError
from musichub.domain.model import (
    Artist,
    ArtistName,
    Contribution,
    Isrc,
    Source,
    SourceType,
    VerificationStatus,
    derive_track_id,
)
from tests.helpers.artists import make_external_artist


def test_create_provisional() -> None:
    artist = Artist.create_provisional("The Testers")

    assert artist.name == ArtistName("The Testers")
    assert artist.is_provisional
    assert artist.track_references == frozenset()


def test_track_references_only_grow() -> None:
    artist = Artist.create_provisional("The Testers")
    first = Isrc("DEU630901306")

    assert artist.add_track_reference(first)
    assert not artist.add_track_reference(first)
    assert artist.add_track_reference(Isrc("DEU630901307"))

    assert artist.has_track_reference(first)
    assert len(artist.track_references) == 2


def test_contributions_are_deduplicated() -> None:
    artist = Artist.create_provisional("The Testers")
    isrc = Isrc("DEU630901306")
    contribution = Contribution(track_id=derive_track_id(isrc), title="Song", isrc=isrc)

    assert artist.add_contribution(contribution)
    assert not artist.add_contribution(contribution)
    assert artist.contributions == (contribution,)


def test_mark_verified_only_from_provisional() -> None:
    artist = Artist.create_provisional("The Testers")
    artist.mark_verified()

    assert artist.is_verified
    with pytest.raises(ValidationError):
        artist.mark_verified()


def test_merge_accumulates_sources_and_verifies() -> None:
    artist = Artist.create_provisional("the testers")
    artist.add_track_reference(Isrc("DEU630901306"))
    match = make_external_artist("The Testers", SourceType.TIDAL, "tidal-42")

    artist.merge(match)

    assert artist.status is VerificationStatus.VERIFIED
    assert artist.name.value == "The Testers"
    assert artist.sources == (Source(SourceType.TIDAL, "tidal-42"),)
    assert artist.has_track_reference(Isrc("DEU630901306"))


def test_merge_keeps_verified_status() -> None:
    artist = Artist.restore(
        id=uuid4(),
        name=ArtistName("The Testers"),
        status=VerificationStatus.VERIFIED,
        sources=[Source(SourceType.MANUAL, "curator")],
    )
    match = Artist.create_provisional("Testers")
    match.add_source(Source(SourceType.SPOTIFY, "sp-1"))

    artist.merge(match)

    assert artist.is_verified
    assert artist.name.value == "The Testers"
    assert Source(SourceType.SPOTIFY, "sp-1") in artist.sources
    assert Source(SourceType.MANUAL, "curator") in artist.sources


def test_rename_from_source_respects_priority() -> None:
    artist = Artist.create_provisional("The Testers")
    artist.add_source(Source(SourceType.TIDAL, "t"))

    assert not artist.rename_from_source("Testers", SourceType.SPOTIFY)
    assert artist.rename_from_source("THE TESTERS", SourceType.MANUAL)
    assert artist.name.value == "THE TESTERS"


def test_add_source_ignores_duplicates() -> None:
    artist = Artist.create_provisional("The Testers")
    source = Source(SourceType.DEEZER, "dz")

    assert artist.add_source(source)
    assert not artist.add_source(source)
    assert artist.sources == (source,)
