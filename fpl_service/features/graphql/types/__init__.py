"""Strawberry types exposed by the schema."""

from fpl_service.features.graphql.types.events import EventType
from fpl_service.features.graphql.types.players import PlayerGameweekDataType, PlayerType
from fpl_service.features.graphql.types.teams import TeamMatchlogType, TeamType

__all__ = [
    "EventType",
    "PlayerGameweekDataType",
    "PlayerType",
    "TeamMatchlogType",
    "TeamType",
]
