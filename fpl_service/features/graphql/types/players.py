"""GraphQL types for players and their per-gameweek statistics."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Annotated

import strawberry
from strawberry.types import Info

from fpl_service.features.graphql.context import GraphQLContext
from fpl_service.features.graphql.error_handler import format_validation_error

if TYPE_CHECKING:
    from fpl_service.features.stats.schemas import PlayerGameweekRow, PlayerRow

logger = logging.getLogger(__name__)

GameweekStartArg = Annotated[
    int | None,
    strawberry.argument(name="gameweekStart", description="First gameweek to include (inclusive)"),
]
GameweekEndArg = Annotated[
    int | None,
    strawberry.argument(name="gameweekEnd", description="Last gameweek to include (inclusive)"),
]


@strawberry.type(name="PlayerGameweekData", description="A player's statistics for one gameweek")
class PlayerGameweekDataType:
    fbref_round: int
    fbref_minutes: int
    fbref_npxg: float = strawberry.field(description="Non-penalty expected goals")
    fbref_xg_assist: float = strawberry.field(description="Expected assisted goals")
    calc_fpl_npxp: float = strawberry.field(description="Non-penalty expected FPL points")
    fpl_gameweek: int
    fpl_total_points: int
    fpl_goals_scored: int
    fpl_assists: int
    fpl_bps: int = strawberry.field(description="Bonus points system score")
    fpl_clean_sheet: int
    fpl_defensive_contribution: int

    @classmethod
    def from_row(cls, row: PlayerGameweekRow) -> PlayerGameweekDataType:
        return cls(
            fbref_round=row.fbref_round,
            fbref_minutes=row.fbref_minutes,
            fbref_npxg=row.fbref_npxg,
            fbref_xg_assist=row.fbref_xg_assist,
            calc_fpl_npxp=row.calc_fpl_npxp,
            fpl_gameweek=row.fpl_gameweek,
            fpl_total_points=row.fpl_total_points,
            fpl_goals_scored=row.fpl_goals_scored,
            fpl_assists=row.fpl_assists,
            fpl_bps=row.fpl_bps,
            fpl_clean_sheet=row.fpl_clean_sheet,
            fpl_defensive_contribution=row.fpl_defensive_contribution,
        )


@strawberry.type(name="Player", description="A player with season metadata")
class PlayerType:
    """GraphQL type for one ``mv_player_data`` row.

    ``player_gameweek_data`` is resolved lazily through the request's
    batching loader, so listing many players costs one extra query in total.
    """

    fpl_player_id: str
    fpl_player_code: int
    fpl_web_name: str
    fbref_team: str
    fpl_player_position: str
    fpl_player_cost: float
    fpl_selected_by_percent: float

    @strawberry.field(description="Per-gameweek statistics ordered by gameweek")
    async def player_gameweek_data(
        self,
        info: Info[GraphQLContext, None],
        gameweek_start: GameweekStartArg = None,
        gameweek_end: GameweekEndArg = None,
    ) -> list[PlayerGameweekDataType] | None:
        """Resolve gameweek rows via the DataLoader, then apply the gameweek range.

        The range is applied after loading so the batch key stays the
        player id and every Player in the response shares one batch.
        """
        if gameweek_start is not None and gameweek_end is not None and gameweek_start > gameweek_end:
            raise format_validation_error(
                f"gameweekStart ({gameweek_start}) must not be greater than gameweekEnd ({gameweek_end})",
                argument="gameweekStart",
            )

        rows = await info.context.loaders.player_gameweeks.load(self.fpl_player_id)
        return [
            PlayerGameweekDataType.from_row(row)
            for row in rows
            if (gameweek_start is None or row.fpl_gameweek >= gameweek_start)
            and (gameweek_end is None or row.fpl_gameweek <= gameweek_end)
        ]

    @classmethod
    def from_row(cls, row: PlayerRow) -> PlayerType:
        return cls(
            fpl_player_id=row.fpl_player_id,
            fpl_player_code=row.fpl_player_code,
            fpl_web_name=row.fpl_web_name,
            fbref_team=row.fbref_team,
            fpl_player_position=row.fpl_player_position,
            fpl_player_cost=row.fpl_player_cost,
            fpl_selected_by_percent=row.fpl_selected_by_percent,
        )


__all__ = ["PlayerGameweekDataType", "PlayerType"]
