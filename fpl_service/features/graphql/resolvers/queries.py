"""Query resolvers for the GraphQL API.

Root fields:
- players(ids): player metadata, optionally filtered by id
- teams(teamNames): teams with numbered match logs
- events: gameweek events
"""

from __future__ import annotations

import logging
from typing import Annotated

import strawberry
from strawberry.types import Info

from fpl_service.features.graphql.context import GraphQLContext
from fpl_service.features.graphql.types.events import EventType
from fpl_service.features.graphql.types.players import PlayerType
from fpl_service.features.graphql.types.teams import TeamType
from fpl_service.features.stats.aggregation import aggregate_team_matchlogs

logger = logging.getLogger(__name__)

IdsArg = Annotated[
    list[str] | None,
    strawberry.argument(description="Only return players with these fpl_player_id values"),
]
TeamNamesArg = Annotated[
    list[str] | None,
    strawberry.argument(name="teamNames", description="Only return these teams (fbref_team)"),
]


@strawberry.type(description="Root query type")
class Query:
    """GraphQL Query resolvers.

    Root fields are nullable: a store failure nulls the field and reports
    an error without discarding sibling fields.
    """

    @strawberry.field(description="Players, optionally filtered by id")
    async def players(
        self,
        info: Info[GraphQLContext, None],
        ids: IdsArg = None,
    ) -> list[PlayerType] | None:
        if ids is not None and not ids:
            return []

        rows = await info.context.repository.fetch_players(ids)
        logger.debug("Resolved players", extra={"player_count": len(rows), "filtered": ids is not None})
        return [PlayerType.from_row(row) for row in rows]

    @strawberry.field(description="Teams with match logs ordered and numbered by match date")
    async def teams(
        self,
        info: Info[GraphQLContext, None],
        team_names: TeamNamesArg = None,
    ) -> list[TeamType] | None:
        if team_names is not None and not team_names:
            return []

        rows = await info.context.repository.fetch_team_matches(team_names)
        teams = aggregate_team_matchlogs(rows)
        return [TeamType.from_model(team) for team in teams]

    @strawberry.field(description="Gameweek events ordered by id")
    async def events(self, info: Info[GraphQLContext, None]) -> list[EventType] | None:
        rows = await info.context.repository.fetch_events()
        return [EventType.from_row(row) for row in rows]


__all__ = ["Query"]
