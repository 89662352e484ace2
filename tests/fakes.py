"""In-memory stand-ins for the store layer."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date
from typing import Any

from fpl_service.features.stats.schemas import (
    EventRow,
    PlayerGameweekRow,
    PlayerRow,
    TeamMatchRow,
)


def make_player(player_id: str, **overrides: Any) -> PlayerRow:
    data: dict[str, Any] = {
        "fpl_player_id": player_id,
        "fpl_player_code": int(player_id) * 10 if player_id.isdigit() else 0,
        "fpl_web_name": f"Player {player_id}",
        "fbref_team": "Arsenal",
        "fpl_player_position": "MID",
        "fpl_player_cost": 7.5,
        "fpl_selected_by_percent": 12.3,
    }
    data.update(overrides)
    return PlayerRow.model_validate(data)


def make_gameweek(player_id: str, gameweek: int, **overrides: Any) -> PlayerGameweekRow:
    data: dict[str, Any] = {
        "fpl_player_id": player_id,
        "fbref_round": gameweek,
        "fbref_minutes": 90,
        "fbref_npxg": 0.4,
        "fbref_xg_assist": 0.1,
        "calc_fpl_npxp": 3.2,
        "fpl_gameweek": gameweek,
        "fpl_total_points": 6,
        "fpl_goals_scored": 0,
        "fpl_assists": 1,
        "fpl_bps": 22,
        "fpl_clean_sheet": 0,
        "fpl_defensive_contribution": 4,
    }
    data.update(overrides)
    return PlayerGameweekRow.model_validate(data)


def make_match(team: str, match_date: str, fbref_round: int = 1) -> TeamMatchRow:
    return TeamMatchRow(fbref_team=team, fbref_date=date.fromisoformat(match_date), fbref_round=fbref_round)


class FakeStatsRepository:
    """Serves canned rows and records every store call."""

    def __init__(
        self,
        *,
        players: Sequence[PlayerRow] = (),
        gameweeks: Sequence[PlayerGameweekRow] = (),
        team_matches: Sequence[TeamMatchRow] = (),
        events: Sequence[EventRow] = (),
    ) -> None:
        self.players = list(players)
        self.gameweeks = list(gameweeks)
        self.team_matches = list(team_matches)
        self.events = list(events)
        self.errors: dict[str, Exception] = {}
        self.calls: list[tuple[str, Any]] = []

    def fail(self, operation: str, error: Exception) -> None:
        self.errors[operation] = error

    def calls_to(self, operation: str) -> list[Any]:
        return [args for name, args in self.calls if name == operation]

    def _record(self, operation: str, args: Any) -> None:
        self.calls.append((operation, args))
        if operation in self.errors:
            raise self.errors[operation]

    async def fetch_players(self, ids: Sequence[str] | None = None) -> list[PlayerRow]:
        self._record("fetch_players", None if ids is None else list(ids))
        if ids is None:
            return list(self.players)
        wanted = set(ids)
        return [p for p in self.players if p.fpl_player_id in wanted]

    async def fetch_team_matches(self, team_names: Sequence[str] | None = None) -> list[TeamMatchRow]:
        self._record("fetch_team_matches", None if team_names is None else list(team_names))
        if team_names is None:
            return list(self.team_matches)
        wanted = set(team_names)
        return [m for m in self.team_matches if m.fbref_team in wanted]

    async def fetch_events(self) -> list[EventRow]:
        self._record("fetch_events", None)
        return list(self.events)

    async def fetch_player_gameweeks(self, player_ids: Sequence[str]) -> list[PlayerGameweekRow]:
        self._record("fetch_player_gameweeks", list(player_ids))
        wanted = set(player_ids)
        return [g for g in self.gameweeks if g.fpl_player_id in wanted]


class FakeQueryExecutor:
    """QueryExecutor double: returns rows per relation name and records queries."""

    def __init__(self, rows_by_relation: dict[str, list[dict[str, Any]]] | None = None) -> None:
        self.rows_by_relation = rows_by_relation or {}
        self.queries: list[tuple[Any, Any, str | None]] = []
        self.error: Exception | None = None

    async def fetch_all(
        self,
        query: Any,
        params: Sequence[Any] | None = None,
        *,
        operation: str | None = None,
    ) -> list[dict[str, Any]]:
        self.queries.append((query, params, operation))
        if self.error is not None:
            raise self.error
        rendered = repr(query)
        for relation, rows in self.rows_by_relation.items():
            if f"Identifier('{relation}')" in rendered:
                return [dict(row) for row in rows]
        return []

    async def ping(self) -> bool:
        await self.fetch_all("SELECT 1 AS ok", operation="ping")
        return True
