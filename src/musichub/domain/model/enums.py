"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum

from musichub.domain.errors import ValidationError


class SourceType(StrEnum):
    MANUAL = "MANUAL"
    TIDAL = "TIDAL"
    SPOTIFY = "SPOTIFY"
    DEEZER = "DEEZER"
    APPLE_MUSIC = "APPLE_MUSIC"

    @classmethod
    def parse(cls, raw: str) -> SourceType:
        """Case-insensitive lookup by name, ignoring surrounding whitespace."""
        if not raw or not raw.strip():
            raise ValidationError("Source type cannot be blank")
        try:
            return cls(raw.strip().upper())
        except ValueError as exc:
            raise ValidationError(f"Unknown source type: {raw!r}") from exc


class VerificationStatus(StrEnum):
    PROVISIONAL = "PROVISIONAL"
    VERIFIED = "VERIFIED"
