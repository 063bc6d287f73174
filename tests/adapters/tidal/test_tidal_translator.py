from __future__ import annotations

from typing import Any

from musichub.adapters.tidal import (
    TidalArtist,
    TidalTracksResponse,
    artist_handle,
    translate_artist,
    translate_track,
)
from musichub.domain.model import Source, SourceType


def test_translate_track_keeps_artist_order(tracks_payload: dict[str, Any]) -> None:
    response = TidalTracksResponse.model_validate(tracks_payload)

    metadata = translate_track(response, "DEU630901306")

    assert metadata is not None
    assert metadata.title == "Test Song"
    assert metadata.isrc == "DEU630901306"
    assert metadata.platform == "tidal"
    assert metadata.artist_names == ("The Testers", "Guest")
    assert metadata.external_id == "77646168"


def test_translate_track_without_data() -> None:
    assert translate_track(TidalTracksResponse(), "DEU630901306") is None


def test_translate_track_without_attributes() -> None:
    response = TidalTracksResponse.model_validate({"data": [{"id": "1", "type": "tracks"}]})

    assert translate_track(response, "DEU630901306") is None


def test_translate_artist_is_verified_by_tidal(artists_payload: dict[str, Any]) -> None:
    artist = translate_artist(TidalArtist.model_validate(artists_payload["data"][0]))

    assert artist is not None
    assert artist.name.value == "The Testers"
    assert artist.is_verified
    assert artist.sources == (Source(SourceType.TIDAL, "4242"),)


def test_translate_artist_without_name() -> None:
    assert translate_artist(TidalArtist(id="1")) is None


def test_artist_handle() -> None:
    assert artist_handle("The Testers") == "thetesters"
