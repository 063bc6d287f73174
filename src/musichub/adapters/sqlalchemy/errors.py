"""Translate SQLAlchemy failures into the domain error taxonomy."""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from musichub.domain.errors import PersistenceError, UniquenessConflictError

if TYPE_CHECKING:
    from collections.abc import Iterator


@contextmanager
def translate_errors(action: str) -> Iterator[None]:
    try:
        yield
    except IntegrityError as exc:
        raise UniquenessConflictError(f"Conflicting write while {action}: {exc.orig}") from exc
    except SQLAlchemyError as exc:
        raise PersistenceError(f"Storage failure while {action}: {exc}") from exc
