"""Source-of-truth reconciliation for provisional artists.

Ports are consulted one at a time in hierarchy order and the first match wins;
lower ranked platforms are never queried once a higher one has answered. A
failing or slow port counts as "no match" for that platform only.
"""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

from musichub.domain.model import SOURCE_OF_TRUTH_HIERARCHY

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

    from musichub.domain.model import Artist, ArtistName, SourceType
    from musichub.domain.ports import ArtistReconciliationPort, ArtistUnitOfWork

log = getLogger(__name__)


class ArtistEnricher:
    def __init__(
        self,
        ports: Sequence[ArtistReconciliationPort],
        *,
        unit_of_work_factory: Callable[[], ArtistUnitOfWork],
        hierarchy: tuple[SourceType, ...] = SOURCE_OF_TRUTH_HIERARCHY,
        lookup_timeout: float | None = None,
    ) -> None:
        self._hierarchy = hierarchy
        self._ports = _index_ports(ports, hierarchy)
        self._unit_of_work_factory = unit_of_work_factory
        self._lookup_timeout = lookup_timeout

    @property
    def source_types(self) -> tuple[SourceType, ...]:
        """Source types with a registered port, in the order they are consulted."""
        return tuple(source_type for source_type in self._hierarchy if source_type in self._ports)

    async def enrich(self, artist: Artist) -> Artist:
        if not artist.is_provisional:
            log.debug("Artist %s is already verified, skipping enrichment", artist.id)
            return artist

        match = await self._first_match(artist.name.value)
        if match is None:
            log.info("No external source knows %r, artist stays provisional", artist.name.value)
            return artist
        return self._merge_and_save(artist, match)

    async def enrich_many(self, artists: Iterable[Artist]) -> list[Artist]:
        return [await self.enrich(artist) for artist in artists]

    async def enrich_by_name(self, name: ArtistName) -> Artist | None:
        with self._unit_of_work_factory() as uow:
            artist = uow.repositories.artists.find_by_name(name)
        if artist is None:
            return None
        return await self.enrich(artist)

    async def _first_match(self, name: str) -> Artist | None:
        for source_type in self.source_types:
            result = await self._lookup(self._ports[source_type], name, source_type)
            if result is not None:
                log.info("Found %r on %s", name, source_type)
                return result
            log.debug("No match for %r on %s", name, source_type)
        return None

    async def _lookup(
        self,
        port: ArtistReconciliationPort,
        name: str,
        source_type: SourceType,
    ) -> Artist | None:
        try:
            if self._lookup_timeout is None:
                return await port.find_artist_by_name(name, source_type)
            return await asyncio.wait_for(
                port.find_artist_by_name(name, source_type),
                timeout=self._lookup_timeout,
            )
        except TimeoutError:
            log.warning(
                "Lookup of %r on %s timed out after %ss", name, source_type, self._lookup_timeout
            )
        except Exception:  # noqa: BLE001
            log.warning("Lookup of %r on %s failed", name, source_type, exc_info=True)
        return None

    def _merge_and_save(self, artist: Artist, match: Artist) -> Artist:
        with self._unit_of_work_factory() as uow:
            artists = uow.repositories.artists
            current = artists.find_by_id(artist.id) or artist
            current.merge(match)
            saved = artists.save(current)
            uow.commit()
        log.info("Enriched artist %s (%r), status %s", saved.id, saved.name.value, saved.status)
        return saved


def _index_ports(
    ports: Sequence[ArtistReconciliationPort],
    hierarchy: tuple[SourceType, ...],
) -> dict[SourceType, ArtistReconciliationPort]:
    indexed: dict[SourceType, ArtistReconciliationPort] = {}
    for source_type in hierarchy:
        matching = [port for port in ports if port.supports(source_type)]
        if len(matching) > 1:
            names = ", ".join(type(port).__name__ for port in matching)
            raise ValueError(f"More than one reconciliation port supports {source_type}: {names}")
        if matching:
            indexed[source_type] = matching[0]
    return indexed
