"""Read-side queries over registered tracks."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from musichub.domain.errors import ValidationError

if TYPE_CHECKING:
    from collections.abc import Callable

    from musichub.domain.ports import ProducerUnitOfWork, TrackInfo

MIN_RECENT_LIMIT: Final[int] = 1
MAX_RECENT_LIMIT: Final[int] = 100
DEFAULT_RECENT_LIMIT: Final[int] = 10


def get_recent_tracks(
    limit: int = DEFAULT_RECENT_LIMIT,
    *,
    unit_of_work_factory: Callable[[], ProducerUnitOfWork],
) -> list[TrackInfo]:
    """Return the most recently submitted tracks, newest first."""
    if not MIN_RECENT_LIMIT <= limit <= MAX_RECENT_LIMIT:
        raise ValidationError(
            f"Limit must be between {MIN_RECENT_LIMIT} and {MAX_RECENT_LIMIT}, got {limit}"
        )
    with unit_of_work_factory() as uow:
        return uow.repositories.tracks.find_recent(limit)
