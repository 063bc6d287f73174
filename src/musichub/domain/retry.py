"""Retry loop for find-or-create flows that can lose a creation race."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Final

from musichub.domain.errors import UniquenessConflictError

if TYPE_CHECKING:
    from collections.abc import Callable

log = getLogger(__name__)

DEFAULT_MAX_ATTEMPTS: Final[int] = 3


def retry_on_conflict[T](
    operation: Callable[[], T],
    *,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    description: str = "operation",
) -> T:
    """Run ``operation``, re-running it when a concurrent writer created the same row first.

    Each attempt must open its own unit of work so the retry re-reads the
    winner's state.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")
    attempt = 1
    while True:
        try:
            return operation()
        except UniquenessConflictError:
            if attempt >= max_attempts:
                log.warning("Giving up on %s after %s conflicting attempts", description, attempt)
                raise
            log.info(
                "Lost creation race during %s (attempt %s/%s), retrying",
                description,
                attempt,
                max_attempts,
            )
            attempt += 1
