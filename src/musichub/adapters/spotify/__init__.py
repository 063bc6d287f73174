"""Spotify adapter package."""

from __future__ import annotations

from .reconciler import SpotifyArtistReconciler
from .schema import SpotifyArtist, SpotifyArtistSearch
from .translator import pick_artist, translate_artist

__all__ = [
    "SpotifyArtist",
    "SpotifyArtistReconciler",
    "SpotifyArtistSearch",
    "pick_artist",
    "translate_artist",
]
