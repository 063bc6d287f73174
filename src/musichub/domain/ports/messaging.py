"""Transport-neutral message channel between bounded contexts."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable

from musichub.domain.events import TrackWasRegistered

type EventHandler = Callable[[TrackWasRegistered], None]


@runtime_checkable
class MessageChannel(Protocol):
    def publish(self, event: TrackWasRegistered) -> None: ...

    def subscribe(self, handler: EventHandler) -> None: ...
