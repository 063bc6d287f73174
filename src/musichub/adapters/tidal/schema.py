"""TIDAL OpenAPI v2 (JSON:API) response schemas."""

from __future__ import annotations

import logging
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

log = logging.getLogger(__name__)

ARTISTS_TYPE = "artists"
TRACKS_TYPE = "tracks"


class TidalBaseModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)
    _logged_extra_keys: ClassVar[set[str]] = set()

    def model_post_init(self, _context: object, /) -> None:
        extras = self.__pydantic_extra__
        if not extras:
            return
        new_keys = set(extras).difference(self._logged_extra_keys)
        if not new_keys:
            return
        self._logged_extra_keys.update(new_keys)
        log.debug(
            "TIDAL %s: unmodeled keys: %s",
            type(self).__name__,
            ", ".join(sorted(new_keys)),
        )


class TidalTokenResponse(TidalBaseModel):
    access_token: str
    token_type: str = "Bearer"
    expires_in: int | None = None
    scope: str | None = None


class TidalResourceIdentifier(TidalBaseModel):
    id: str
    type: str


class TidalRelationship(TidalBaseModel):
    data: list[TidalResourceIdentifier] = Field(default_factory=list["TidalResourceIdentifier"])


class TidalTrackRelationships(TidalBaseModel):
    artists: TidalRelationship | None = None


class TidalTrackAttributes(TidalBaseModel):
    title: str
    isrc: str
    duration: str | None = None
    explicit: bool | None = None
    popularity: float | None = None


class TidalTrack(TidalBaseModel):
    id: str
    type: str = TRACKS_TYPE
    attributes: TidalTrackAttributes | None = None
    relationships: TidalTrackRelationships | None = None

    @property
    def artist_ids(self) -> list[str]:
        if self.relationships is None or self.relationships.artists is None:
            return []
        return [ref.id for ref in self.relationships.artists.data if ref.type == ARTISTS_TYPE]


class TidalArtistAttributes(TidalBaseModel):
    name: str
    popularity: float | None = None
    handle: str | None = None


class TidalArtist(TidalBaseModel):
    id: str
    type: str = ARTISTS_TYPE
    attributes: TidalArtistAttributes | None = None


class TidalIncludedResource(TidalBaseModel):
    id: str
    type: str
    attributes: dict[str, object] | None = None

    @property
    def is_artist(self) -> bool:
        return self.type == ARTISTS_TYPE

    @property
    def name(self) -> str | None:
        if self.attributes is None:
            return None
        value = self.attributes.get("name")
        return value if isinstance(value, str) and value.strip() else None


class TidalTracksResponse(TidalBaseModel):
    data: list[TidalTrack] = Field(default_factory=list["TidalTrack"])
    included: list[TidalIncludedResource] = Field(
        default_factory=list["TidalIncludedResource"]
    )


class TidalArtistsResponse(TidalBaseModel):
    data: list[TidalArtist] = Field(default_factory=list["TidalArtist"])


class TidalArtistResponse(TidalBaseModel):
    data: TidalArtist | None = None
