"""In-process message channel."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from musichub.domain.events import TrackWasRegistered
    from musichub.domain.ports import EventHandler

log = getLogger(__name__)


class InMemoryMessageChannel:
    """Deliver each published event synchronously to every subscriber.

    A subscriber that raises is logged and skipped; the publisher and the
    remaining subscribers are unaffected.
    """

    def __init__(self) -> None:
        self._handlers: list[EventHandler] = []

    def subscribe(self, handler: EventHandler) -> None:
        if handler not in self._handlers:
            self._handlers.append(handler)

    def publish(self, event: TrackWasRegistered) -> None:
        log.debug(
            "Publishing %s for %s to %s handler(s)",
            event.address,
            event.isrc,
            len(self._handlers),
        )
        for handler in list(self._handlers):
            try:
                handler(event)
            except Exception:
                log.exception("Handler %r failed for %s %s", handler, event.address, event.isrc)


if TYPE_CHECKING:
    from musichub.domain.ports import MessageChannel

    _channel_check: MessageChannel = InMemoryMessageChannel()
