"""Fantasy-football statistics: row models, store access and aggregation."""

from fpl_service.features.stats.aggregation import aggregate_team_matchlogs
from fpl_service.features.stats.repository import StatsRepository
from fpl_service.features.stats.schemas import (
    EventRow,
    PlayerGameweekRow,
    PlayerRow,
    Team,
    TeamMatchlogEntry,
    TeamMatchRow,
)

__all__ = [
    "EventRow",
    "PlayerGameweekRow",
    "PlayerRow",
    "StatsRepository",
    "Team",
    "TeamMatchRow",
    "TeamMatchlogEntry",
    "aggregate_team_matchlogs",
]
