"""Port implemented once per external platform that can vouch for artist identity."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from musichub.domain.model import Artist, SourceType


@runtime_checkable
class ArtistReconciliationPort(Protocol):
    def supports(self, source_type: SourceType) -> bool: ...

    async def find_artist_by_name(self, name: str, source_type: SourceType) -> Artist | None: ...

    async def find_artist_by_external_id(
        self, external_id: str, source_type: SourceType
    ) -> Artist | None: ...
