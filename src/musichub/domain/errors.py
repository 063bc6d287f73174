"""Error taxonomy shared by every MusicHub service.

Each error carries an :class:`ErrorKind` so callers can map failures uniformly
(client input, upstream dependency, storage) without matching on concrete
exception types.
"""

from __future__ import annotations

from enum import StrEnum
from typing import ClassVar


class ErrorKind(StrEnum):
    VALIDATION = "validation"
    EXTERNAL_SERVICE = "external_service"
    PERSISTENCE = "persistence"


class MusicHubError(Exception):
    kind: ClassVar[ErrorKind]


class ValidationError(MusicHubError, ValueError):
    """Malformed input. Terminal, never retried."""

    kind = ErrorKind.VALIDATION


class InvalidIsrcFormatError(ValidationError):
    def __init__(self, value: str) -> None:
        super().__init__(f"Invalid ISRC format: {value!r}")
        self.value = value


class ExternalServiceError(MusicHubError):
    """An upstream metadata or reconciliation source failed or returned nothing."""

    kind = ErrorKind.EXTERNAL_SERVICE

    def __init__(
        self,
        message: str,
        *,
        isrc: str | None = None,
        service: str | None = None,
    ) -> None:
        super().__init__(message)
        self.isrc = isrc
        self.service = service


class UnresolvableIsrcError(ExternalServiceError):
    def __init__(self, isrc: str, *, service: str | None = None) -> None:
        where = f" in {service}" if service else ""
        super().__init__(f"No track found for ISRC {isrc}{where}", isrc=isrc, service=service)


class PersistenceError(MusicHubError):
    kind = ErrorKind.PERSISTENCE


class UniquenessConflictError(PersistenceError):
    """A concurrent writer created the same row first."""
