from __future__ import annotations

from typing import Any

import pytest

from musichub.config.tidal import TidalConfig


@pytest.fixture
def tidal_config() -> TidalConfig:
    return TidalConfig(client_id="client-id", client_secret="client-secret", country_code="DE")


@pytest.fixture
def tracks_payload() -> dict[str, Any]:
    return {
        "data": [
            {
                "id": "77646168",
                "type": "tracks",
                "attributes": {
                    "title": "Test Song",
                    "isrc": "DEU630901306",
                    "duration": "PT3M2S",
                    "explicit": False,
                },
                "relationships": {
                    "artists": {
                        "data": [
                            {"id": "2", "type": "artists"},
                            {"id": "1", "type": "artists"},
                        ],
                        "links": {"self": "/tracks/77646168/relationships/artists"},
                    }
                },
            }
        ],
        "included": [
            {"id": "1", "type": "artists", "attributes": {"name": "Guest"}},
            {"id": "2", "type": "artists", "attributes": {"name": "The Testers"}},
            {"id": "9", "type": "albums", "attributes": {"title": "Album"}},
        ],
        "links": {"self": "/tracks?filter%5Bisrc%5D=DEU630901306"},
    }


@pytest.fixture
def artists_payload() -> dict[str, Any]:
    return {
        "data": [
            {
                "id": "4242",
                "type": "artists",
                "attributes": {"name": "The Testers", "handle": "thetesters", "popularity": 0.4},
            }
        ]
    }
