"""Artist side of ``TrackWasRegistered``: one find-or-create per credited name."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import partial
from logging import getLogger
from typing import TYPE_CHECKING

from musichub.domain.errors import ValidationError
from musichub.domain.model import Artist, ArtistName, Contribution, derive_track_id
from musichub.domain.retry import DEFAULT_MAX_ATTEMPTS, retry_on_conflict

if TYPE_CHECKING:
    from collections.abc import Callable

    from musichub.domain.events import ArtistCreditInfo, TrackWasRegistered
    from musichub.domain.model import Isrc
    from musichub.domain.ports import ArtistUnitOfWork

log = getLogger(__name__)


@dataclass(slots=True)
class TrackRegistrationOutcome:
    artists: list[Artist] = field(default_factory=list["Artist"])
    created: list[Artist] = field(default_factory=list["Artist"])
    skipped: list[str] = field(default_factory=list[str])


def record_track_registration(
    event: TrackWasRegistered,
    *,
    unit_of_work_factory: Callable[[], ArtistUnitOfWork],
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> TrackRegistrationOutcome:
    """Attach the registered track to every credited artist.

    Each artist is updated in its own unit of work; newly created artists are
    returned separately so they can be queued for enrichment. A credit whose
    name is not a valid artist name is logged and skipped.
    """

    outcome = TrackRegistrationOutcome()
    contribution = Contribution(
        track_id=derive_track_id(event.isrc),
        title=event.title,
        isrc=event.isrc,
    )
    seen: set[ArtistName] = set()
    for credit in event.artist_credits:
        try:
            name = ArtistName(credit.name)
        except ValidationError as exc:
            log.warning("Skipping credit on %s: %s", event.isrc, exc)
            outcome.skipped.append(credit.name)
            continue
        if name in seen:
            continue
        seen.add(name)

        artist, created = retry_on_conflict(
            partial(
                _record_for_artist,
                credit,
                name,
                event.isrc,
                contribution,
                unit_of_work_factory=unit_of_work_factory,
            ),
            max_attempts=max_attempts,
            description=f"track reference {event.isrc} for {name}",
        )
        outcome.artists.append(artist)
        if created:
            outcome.created.append(artist)

    log.info(
        "Recorded track %s for %s artist(s), %s new, %s skipped",
        event.isrc,
        len(outcome.artists),
        len(outcome.created),
        len(outcome.skipped),
    )
    return outcome


def _record_for_artist(
    credit: ArtistCreditInfo,
    name: ArtistName,
    isrc: Isrc,
    contribution: Contribution,
    *,
    unit_of_work_factory: Callable[[], ArtistUnitOfWork],
) -> tuple[Artist, bool]:
    with unit_of_work_factory() as uow:
        artists = uow.repositories.artists
        artist: Artist | None = None
        if credit.artist_id is not None:
            artist = artists.find_by_id(credit.artist_id)
        if artist is None:
            artist = artists.find_by_name(name)
        created = artist is None
        if artist is None:
            log.info("Creating provisional artist %r", name.value)
            artist = Artist.create_provisional(name)

        changed = artist.add_track_reference(isrc)
        changed = artist.add_contribution(contribution) or changed
        if created or changed:
            artist = artists.save(artist)
            uow.commit()
    return artist, created
