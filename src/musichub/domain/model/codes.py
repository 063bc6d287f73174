"""Validated code value objects.

Construction validates, so no instance of these types can hold an invalid value.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final

from musichub.domain.errors import InvalidIsrcFormatError, ValidationError
from musichub.domain.model.enums import SourceType

ISRC_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[A-Z]{3}[A-Z0-9]{2}[0-9]{7}$")
PRODUCER_CODE_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[A-Z]{3}[A-Z0-9]{2}$")
PRODUCER_CODE_LENGTH: Final[int] = 5
ISRC_LENGTH: Final[int] = 12
MAX_ARTIST_NAME_LENGTH: Final[int] = 255


def normalize_isrc(raw: str) -> str:
    """Trim, drop hyphens and uppercase a user-supplied ISRC."""
    return raw.strip().replace("-", "").upper()


@dataclass(frozen=True, slots=True)
class Isrc:
    """International Standard Recording Code.

    The constructor is strict: hyphens are dropped but case is significant, so
    ``Isrc("frla12400001")`` is rejected. Use :meth:`parse` for raw user input.
    """

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise InvalidIsrcFormatError(repr(self.value))
        compact = self.value.replace("-", "")
        if not ISRC_PATTERN.fullmatch(compact):
            raise InvalidIsrcFormatError(self.value)
        object.__setattr__(self, "value", compact)

    @classmethod
    def parse(cls, raw: str) -> Isrc:
        if not raw or not raw.strip():
            raise InvalidIsrcFormatError(raw or "")
        return cls(normalize_isrc(raw))

    @property
    def producer_code(self) -> ProducerCode:
        return ProducerCode.from_isrc(self)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class ProducerCode:
    """Registrant prefix of an ISRC (country code plus registrant)."""

    value: str

    def __post_init__(self) -> None:
        raw = self.value
        if not isinstance(raw, str) or len(raw) not in (PRODUCER_CODE_LENGTH, ISRC_LENGTH):
            raise ValidationError(f"ProducerCode {raw!r} is invalid")
        code = raw[:PRODUCER_CODE_LENGTH]
        if not PRODUCER_CODE_PATTERN.fullmatch(code):
            raise ValidationError(f"ProducerCode {raw!r} is invalid")
        object.__setattr__(self, "value", code)

    @classmethod
    def from_isrc(cls, isrc: Isrc) -> ProducerCode:
        return cls(isrc.value[:PRODUCER_CODE_LENGTH])

    def owns(self, isrc: Isrc) -> bool:
        return isrc.value.startswith(self.value)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class ArtistName:
    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValidationError("Artist name cannot be blank")
        name = self.value.strip()
        if len(name) > MAX_ARTIST_NAME_LENGTH:
            raise ValidationError(
                f"Artist name cannot exceed {MAX_ARTIST_NAME_LENGTH} characters"
            )
        object.__setattr__(self, "value", name)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Source:
    """A platform and the identifier the platform uses for the record."""

    source_type: SourceType
    source_id: str

    def __post_init__(self) -> None:
        if not isinstance(self.source_type, SourceType):
            raise ValidationError(f"Unknown source type: {self.source_type!r}")
        if not isinstance(self.source_id, str) or not self.source_id.strip():
            raise ValidationError("Source id cannot be blank")
        object.__setattr__(self, "source_id", self.source_id.strip())

    @classmethod
    def of(cls, source_type: str, source_id: str) -> Source:
        return cls(SourceType.parse(source_type), source_id)
