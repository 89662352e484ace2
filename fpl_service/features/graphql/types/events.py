"""GraphQL type for gameweek events."""

from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry

if TYPE_CHECKING:
    from fpl_service.features.stats.schemas import EventRow


@strawberry.type(name="Events", description="A gameweek event and its status")
class EventType:
    id: int
    finished: bool
    is_current: bool

    @classmethod
    def from_row(cls, row: EventRow) -> EventType:
        return cls(id=row.id, finished=row.finished, is_current=row.is_current)


__all__ = ["EventType"]
