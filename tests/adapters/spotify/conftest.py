"""Shared fixtures for Spotify adapter tests."""

from __future__ import annotations

import pytest

from tests.helpers.spotify import SpotifyPayload


@pytest.fixture
def search_payload() -> SpotifyPayload:
    return {
        "artists": {
            "href": "https://api.spotify.com/v1/search?query=artist%3AThe+Testers",
            "limit": 5,
            "offset": 0,
            "total": 2,
            "next": None,
            "items": [
                {
                    "id": "0aaa",
                    "name": "The Testers Tribute Band",
                    "popularity": 12,
                    "genres": [],
                    "type": "artist",
                },
                {
                    "id": "1bbb",
                    "name": "the testers",
                    "popularity": 40,
                    "genres": ["indie"],
                    "type": "artist",
                },
            ],
        }
    }
