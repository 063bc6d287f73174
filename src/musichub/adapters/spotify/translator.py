"""Translate Spotify payloads into domain artists."""

from __future__ import annotations

from typing import TYPE_CHECKING

from musichub.domain.model import Artist, Source, SourceType

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .schema import SpotifyArtist


def pick_artist(candidates: Sequence[SpotifyArtist], name: str) -> SpotifyArtist | None:
    """Prefer a case-insensitive exact name match, else Spotify's top hit."""
    if not candidates:
        return None
    wanted = name.strip().casefold()
    for candidate in candidates:
        if candidate.name.strip().casefold() == wanted:
            return candidate
    return candidates[0]


def translate_artist(artist: SpotifyArtist) -> Artist:
    result = Artist.create_provisional(artist.name)
    result.add_source(Source(SourceType.SPOTIFY, artist.id))
    result.mark_verified()
    return result
