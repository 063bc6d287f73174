"""Minimal Pydantic models for the Spotify Web API artist endpoints."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SpotifyBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class SpotifyArtist(SpotifyBaseModel):
    id: str
    name: str
    popularity: int | None = None
    genres: list[str] = Field(default_factory=list)


class SpotifyArtistPage(SpotifyBaseModel):
    href: str | None = None
    limit: int | None = None
    next: str | None = None
    offset: int | None = None
    total: int | None = None
    items: list[SpotifyArtist] = Field(default_factory=list["SpotifyArtist"])


class SpotifyArtistSearch(SpotifyBaseModel):
    artists: SpotifyArtistPage = Field(default_factory=SpotifyArtistPage)
