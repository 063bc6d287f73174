"""Application orchestration entry points.

The entry points are synchronous and drive the async adapters with
``asyncio.run``. From async code, call them through ``asyncio.to_thread``.
"""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

from musichub.adapters.messaging import InMemoryMessageChannel
from musichub.adapters.spotify import SpotifyArtistReconciler
from musichub.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyArtistUnitOfWork,
    SqlAlchemyProducerUnitOfWork,
    is_started,
    startup,
)
from musichub.adapters.tidal import TidalArtistReconciler, TidalClient, TidalTrackMetadataFetcher
from musichub.config import (
    MissingConfigurationError,
    ServiceConfig,
    get_service_config,
    get_spotify_config,
    get_tidal_config,
)
from musichub.domain import catalog, registration
from musichub.domain.artist_tracking import record_track_registration
from musichub.domain.enrichment import ArtistEnricher
from musichub.domain.model import ArtistName

if TYPE_CHECKING:
    from collections.abc import Callable

    from musichub.domain.events import TrackWasRegistered
    from musichub.domain.model import Artist
    from musichub.domain.ports import (
        ArtistReconciliationPort,
        ArtistUnitOfWork,
        EventHandler,
        MessageChannel,
        ProducerUnitOfWork,
        TrackInfo,
        TrackMetadataPort,
    )
    from musichub.domain.registration import RegistrationResult

type ProducerUnitOfWorkFactory = Callable[[], ProducerUnitOfWork]
type ArtistUnitOfWorkFactory = Callable[[], ArtistUnitOfWork]

log = getLogger(__name__)


def _ensure_started() -> None:
    if not is_started():
        startup()


def _require_sync_context(operation: str) -> None:
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return
    raise RuntimeError(
        f"{operation} cannot run inside an event loop; use asyncio.to_thread from async code"
    )


def build_reconciliation_ports() -> list[ArtistReconciliationPort]:
    """Return the configured reconciliation ports, TIDAL first.

    Spotify is optional: without credentials the enricher runs on TIDAL alone.
    """

    tidal_client = TidalClient(config=get_tidal_config())
    ports: list[ArtistReconciliationPort] = [TidalArtistReconciler(client=tidal_client)]
    try:
        ports.append(SpotifyArtistReconciler(config=get_spotify_config()))
    except MissingConfigurationError as exc:
        log.warning("Spotify reconciliation disabled: %s", exc)
    return ports


def build_artist_enricher(
    *,
    ports: list[ArtistReconciliationPort] | None = None,
    unit_of_work_factory: ArtistUnitOfWorkFactory | None = None,
    service_config: ServiceConfig | None = None,
) -> ArtistEnricher:
    settings = service_config or get_service_config()
    return ArtistEnricher(
        ports if ports is not None else build_reconciliation_ports(),
        unit_of_work_factory=unit_of_work_factory or SqlAlchemyArtistUnitOfWork,
        lookup_timeout=settings.lookup_timeout_seconds,
    )


def track_registered_handler(
    *,
    unit_of_work_factory: ArtistUnitOfWorkFactory,
    enricher: ArtistEnricher | None = None,
    max_attempts: int,
) -> EventHandler:
    """Subscriber recording artist track references, then enriching new artists."""

    def handle(event: TrackWasRegistered) -> None:
        outcome = record_track_registration(
            event,
            unit_of_work_factory=unit_of_work_factory,
            max_attempts=max_attempts,
        )
        if enricher is not None and outcome.created:
            _require_sync_context("Artist enrichment")
            asyncio.run(enricher.enrich_many(outcome.created))

    return handle


def build_message_channel(
    *,
    artist_unit_of_work_factory: ArtistUnitOfWorkFactory | None = None,
    enricher: ArtistEnricher | None = None,
    service_config: ServiceConfig | None = None,
) -> InMemoryMessageChannel:
    settings = service_config or get_service_config()
    channel = InMemoryMessageChannel()
    channel.subscribe(
        track_registered_handler(
            unit_of_work_factory=artist_unit_of_work_factory or SqlAlchemyArtistUnitOfWork,
            enricher=enricher,
            max_attempts=settings.max_attempts,
        )
    )
    return channel


def register_track(
    isrc: str,
    *,
    correlation_id: str | None = None,
    metadata: TrackMetadataPort | None = None,
    channel: MessageChannel | None = None,
    unit_of_work_factory: ProducerUnitOfWorkFactory | None = None,
    service_config: ServiceConfig | None = None,
) -> RegistrationResult:
    """Register a track by ISRC using the configured adapters."""

    _require_sync_context("Track registration")
    _ensure_started()
    settings = service_config or get_service_config()
    effective_metadata = metadata or TidalTrackMetadataFetcher(config=get_tidal_config())
    effective_channel = channel or build_message_channel(
        enricher=build_artist_enricher(service_config=settings),
        service_config=settings,
    )
    result = registration.register_track(
        isrc,
        metadata=effective_metadata,
        channel=effective_channel,
        unit_of_work_factory=unit_of_work_factory or SqlAlchemyProducerUnitOfWork,
        correlation_id=correlation_id,
        max_attempts=settings.max_attempts,
    )
    log.info(
        "Finished registration: producer=%s, added=%s, tracks=%s",
        result.producer.producer_code,
        result.added,
        len(result.producer.tracks),
    )
    return result


def get_recent_tracks(
    limit: int = 10,
    *,
    unit_of_work_factory: ProducerUnitOfWorkFactory | None = None,
) -> list[TrackInfo]:
    _ensure_started()
    return catalog.get_recent_tracks(
        limit,
        unit_of_work_factory=unit_of_work_factory or SqlAlchemyProducerUnitOfWork,
    )


def enrich_artist(name: str, *, enricher: ArtistEnricher | None = None) -> Artist | None:
    """Reconcile a stored artist by name; ``None`` if no such artist is stored."""

    _require_sync_context("Artist enrichment")
    _ensure_started()
    effective_enricher = enricher or build_artist_enricher()
    return asyncio.run(effective_enricher.enrich_by_name(ArtistName(name)))
