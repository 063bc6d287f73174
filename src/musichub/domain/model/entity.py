"""Aggregate identity base."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from musichub.domain.model.identity import new_id

if TYPE_CHECKING:
    from uuid import UUID


@dataclass(eq=False, kw_only=True)
class Entity:
    """Internal identity exists immediately in the domain and never changes."""

    id: UUID = field(default_factory=new_id)
