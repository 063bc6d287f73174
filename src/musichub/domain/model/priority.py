"""Source of Truth Hierarchy."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from musichub.domain.model.enums import SourceType

if TYPE_CHECKING:
    from collections.abc import Iterable

    from musichub.domain.model.codes import Source

# Highest priority first.
SOURCE_OF_TRUTH_HIERARCHY: Final[tuple[SourceType, ...]] = (
    SourceType.MANUAL,
    SourceType.TIDAL,
    SourceType.SPOTIFY,
    SourceType.DEEZER,
    SourceType.APPLE_MUSIC,
)

_LOWEST_PRIORITY: Final[int] = len(SOURCE_OF_TRUTH_HIERARCHY)


def priority_of(
    source_type: SourceType,
    hierarchy: tuple[SourceType, ...] = SOURCE_OF_TRUTH_HIERARCHY,
) -> int:
    """Return the rank of ``source_type``; lower is more trusted."""
    try:
        return hierarchy.index(source_type)
    except ValueError:
        return _LOWEST_PRIORITY


def has_higher_priority(candidate: SourceType, current: SourceType) -> bool:
    return priority_of(candidate) < priority_of(current)


def has_at_least_priority(candidate: SourceType, current: SourceType) -> bool:
    return priority_of(candidate) <= priority_of(current)


def highest_priority_source(sources: Iterable[Source]) -> Source | None:
    best: Source | None = None
    for source in sources:
        if best is None or has_higher_priority(source.source_type, best.source_type):
            best = source
    return best
