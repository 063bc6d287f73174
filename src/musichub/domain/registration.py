"""Idempotent track registration on the Producer aggregate.

A track is fetched from the metadata platform first, then added to the producer
owning its ISRC prefix. ``TrackWasRegistered`` is published only for ISRCs the
store had not seen, and only after the producer was committed.
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from time import perf_counter
from typing import TYPE_CHECKING

from musichub.domain.correlation import build_service_correlation_id
from musichub.domain.errors import ExternalServiceError, UnresolvableIsrcError
from musichub.domain.events import TrackWasRegistered
from musichub.domain.model import ArtistCredit, Isrc, Producer, ProducerCode, Source, SourceType
from musichub.domain.retry import DEFAULT_MAX_ATTEMPTS, retry_on_conflict

if TYPE_CHECKING:
    from collections.abc import Callable

    from musichub.domain.model import ProducerSnapshot
    from musichub.domain.ports import (
        ExternalTrackMetadata,
        MessageChannel,
        ProducerUnitOfWork,
        TrackMetadataPort,
    )

log = getLogger(__name__)


@dataclass(slots=True)
class RegistrationResult:
    producer: ProducerSnapshot
    added: bool
    event: TrackWasRegistered | None
    correlation_id: str


def register_track(
    raw_isrc: str,
    *,
    metadata: TrackMetadataPort,
    channel: MessageChannel,
    unit_of_work_factory: Callable[[], ProducerUnitOfWork],
    correlation_id: str | None = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> RegistrationResult:
    """Register ``raw_isrc`` under its producer and announce it if it is new."""

    cid = build_service_correlation_id(correlation_id)
    started = perf_counter()
    isrc = Isrc.parse(raw_isrc)
    code = ProducerCode.from_isrc(isrc)
    log.info("[%s] Registering track %s for producer %s", cid, isrc, code)

    track_metadata = _fetch_metadata(isrc, metadata, cid)
    credits = tuple(ArtistCredit(name) for name in track_metadata.artist_names)
    source = Source(
        SourceType.parse(track_metadata.platform),
        track_metadata.external_id or track_metadata.isrc,
    )

    def store() -> tuple[Producer, bool]:
        return _store_track(
            isrc,
            code,
            title=track_metadata.title,
            credits=credits,
            source=source,
            unit_of_work_factory=unit_of_work_factory,
            cid=cid,
        )

    persist_started = perf_counter()
    producer, added = retry_on_conflict(
        store, max_attempts=max_attempts, description=f"registration of {isrc}"
    )
    log.info("[%s] Persistence took %.1f ms", cid, (perf_counter() - persist_started) * 1000)

    event: TrackWasRegistered | None = None
    track = producer.get_track(isrc)
    if added and track is not None:
        event = TrackWasRegistered.from_track(track, producer_id=producer.id)
        channel.publish(event)
        log.info("[%s] Published %s for %s", cid, event.address, isrc)
    else:
        log.info("[%s] Track %s already registered, nothing published", cid, isrc)

    log.info("[%s] Registration finished in %.1f ms", cid, (perf_counter() - started) * 1000)
    return RegistrationResult(
        producer=producer.snapshot(),
        added=added,
        event=event,
        correlation_id=cid,
    )


def _fetch_metadata(
    isrc: Isrc,
    metadata: TrackMetadataPort,
    cid: str,
) -> ExternalTrackMetadata:
    started = perf_counter()
    try:
        result = metadata.fetch_track_by_isrc(isrc)
    except ExternalServiceError:
        raise
    except Exception as exc:
        raise ExternalServiceError(
            f"Metadata lookup failed for ISRC {isrc}: {exc}",
            isrc=isrc.value,
            service=metadata.platform,
        ) from exc
    finally:
        log.info(
            "[%s] Metadata lookup on %s took %.1f ms",
            cid,
            metadata.platform,
            (perf_counter() - started) * 1000,
        )
    if result is None:
        raise UnresolvableIsrcError(isrc.value, service=metadata.platform)
    return result


def _store_track(
    isrc: Isrc,
    code: ProducerCode,
    *,
    title: str,
    credits: tuple[ArtistCredit, ...],
    source: Source,
    unit_of_work_factory: Callable[[], ProducerUnitOfWork],
    cid: str,
) -> tuple[Producer, bool]:
    with unit_of_work_factory() as uow:
        producers = uow.repositories.producers
        producer = producers.find_by_code(code)
        if producer is None:
            log.info("[%s] Creating producer %s", cid, code)
            producer = Producer.create(code)
        added = producer.register_track(isrc, title, credits, (source,))
        if added:
            producer = producers.save(producer)
            uow.commit()
    return producer, added
