from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002

from musichub.adapters.sqlalchemy.migrations import upgrade_head
from musichub.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyArtistUnitOfWork,
    SqlAlchemyProducerUnitOfWork,
    shutdown,
    startup,
)
from tests.helpers.artists import InMemoryArtistStore
from tests.helpers.producers import InMemoryProducerStore, RecordingChannel

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    upgrade_head(engine=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def started_engine(sqlite_engine: Engine) -> Iterator[Engine]:
    startup(engine=sqlite_engine, force=True)
    try:
        yield sqlite_engine
    finally:
        shutdown()


@pytest.fixture
def file_engine(tmp_path: Path) -> Iterator[Engine]:
    """Started adapter on a file database, shared by connections from several threads."""
    engine = create_engine(
        f"sqlite+pysqlite:///{tmp_path / 'musichub.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    startup(engine=engine, force=True)
    try:
        yield engine
    finally:
        shutdown()


@pytest.fixture
def producer_unit_of_work(
    started_engine: Engine,
) -> Callable[[], SqlAlchemyProducerUnitOfWork]:
    return SqlAlchemyProducerUnitOfWork


@pytest.fixture
def artist_unit_of_work(started_engine: Engine) -> Callable[[], SqlAlchemyArtistUnitOfWork]:
    return SqlAlchemyArtistUnitOfWork


@pytest.fixture
def producer_store() -> InMemoryProducerStore:
    return InMemoryProducerStore()


@pytest.fixture
def artist_store() -> InMemoryArtistStore:
    return InMemoryArtistStore()


@pytest.fixture
def channel() -> RecordingChannel:
    return RecordingChannel()
