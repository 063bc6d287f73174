"""TIDAL adapter errors."""

from __future__ import annotations

from musichub.domain.errors import ExternalServiceError


class TidalAPIError(ExternalServiceError):
    """Raised when the TIDAL API fails or returns an unexpected payload."""

    def __init__(self, message: str, *, isrc: str | None = None) -> None:
        super().__init__(message, isrc=isrc, service="tidal")
