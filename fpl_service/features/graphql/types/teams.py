"""GraphQL types for teams and their match logs."""

from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry

if TYPE_CHECKING:
    from fpl_service.features.stats.schemas import Team, TeamMatchlogEntry


@strawberry.type(name="TeamMatchlog", description="One match in a team's season, numbered by date")
class TeamMatchlogType:
    fbref_match_date: str = strawberry.field(description="Match date (YYYY-MM-DD)")
    fbref_round: int
    match_number: int = strawberry.field(description="1-based position of the match in date order")

    @classmethod
    def from_entry(cls, entry: TeamMatchlogEntry) -> TeamMatchlogType:
        return cls(
            fbref_match_date=entry.fbref_match_date,
            fbref_round=entry.fbref_round,
            match_number=entry.match_number,
        )


@strawberry.type(name="Team", description="A team with its match log")
class TeamType:
    fbref_team: str
    fbref_team_matchlog: list[TeamMatchlogType]

    @classmethod
    def from_model(cls, team: Team) -> TeamType:
        return cls(
            fbref_team=team.fbref_team,
            fbref_team_matchlog=[TeamMatchlogType.from_entry(e) for e in team.fbref_team_matchlog],
        )


__all__ = ["TeamMatchlogType", "TeamType"]
