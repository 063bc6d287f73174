from __future__ import annotations

import logging
from uuid import uuid4

import pytest

from musichub.adapters.messaging import InMemoryMessageChannel
from musichub.domain.events import TrackWasRegistered
from musichub.domain.model import Isrc


def _event() -> TrackWasRegistered:
    return TrackWasRegistered(
        isrc=Isrc("FRLA12400001"),
        title="Song",
        producer_id=uuid4(),
        artist_credits=(),
        sources=(),
    )


def test_every_subscriber_receives_the_event() -> None:
    channel = InMemoryMessageChannel()
    received: list[str] = []
    channel.subscribe(lambda event: received.append(f"a:{event.isrc}"))
    channel.subscribe(lambda event: received.append(f"b:{event.isrc}"))

    channel.publish(_event())

    assert received == ["a:FRLA12400001", "b:FRLA12400001"]


def test_subscribing_twice_delivers_once() -> None:
    channel = InMemoryMessageChannel()
    received: list[TrackWasRegistered] = []
    channel.subscribe(received.append)
    channel.subscribe(received.append)

    channel.publish(_event())

    assert len(received) == 1


def test_failing_subscriber_is_isolated(caplog: pytest.LogCaptureFixture) -> None:
    channel = InMemoryMessageChannel()
    received: list[TrackWasRegistered] = []

    def broken(_event: TrackWasRegistered) -> None:
        raise RuntimeError("subscriber down")

    channel.subscribe(broken)
    channel.subscribe(received.append)

    with caplog.at_level(logging.ERROR):
        channel.publish(_event())

    assert len(received) == 1
    assert "subscriber down" in caplog.text
