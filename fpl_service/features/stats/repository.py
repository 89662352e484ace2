"""Read access to the statistics views.

Every query is composed with ``psycopg.sql`` so the schema name is quoted as
an identifier and user input is always a bound parameter.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, Protocol, TypeVar

from psycopg import sql
from pydantic import ValidationError

from fpl_service.core.database.exceptions import MalformedRowError
from fpl_service.features.stats.schemas import (
    EventRow,
    PlayerGameweekRow,
    PlayerRow,
    StoreRow,
    TeamMatchRow,
)

logger = logging.getLogger(__name__)

RowT = TypeVar("RowT", bound=StoreRow)

PLAYER_DATA_VIEW = "mv_player_data"
PLAYER_MATCHLOG_VIEW = "mv_player_matchlog"
TEAM_MATCHLOG_VIEW = "mv_team_matchlog"
EVENTS_TABLE = "fpl_events"


class RowFetcher(Protocol):
    """Anything that can run a read query and return dict rows (QueryExecutor)."""

    async def fetch_all(
        self,
        query: str | sql.Composable,
        params: Sequence[Any] | None = None,
        *,
        operation: str | None = None,
    ) -> list[dict[str, Any]]: ...


class StatsRepository:
    """Queries for players, per-gameweek player data, team match logs and events.

    Example:
        repo = StatsRepository(QueryExecutor(), "test_schema_2025")
        rows = await repo.fetch_player_gameweeks(["101", "202"])
    """

    def __init__(self, executor: RowFetcher, schema_name: str) -> None:
        self._executor = executor
        self._schema = sql.Identifier(schema_name)
        self.schema_name = schema_name

    def _relation(self, name: str) -> sql.Composed:
        return sql.SQL("{}.{}").format(self._schema, sql.Identifier(name))

    async def _fetch(
        self,
        model: type[RowT],
        source: str,
        query: sql.Composable,
        params: Sequence[Any] | None = None,
    ) -> list[RowT]:
        rows = await self._executor.fetch_all(query, params, operation=source)
        parsed: list[RowT] = []
        for index, row in enumerate(rows):
            try:
                parsed.append(model.model_validate(row))
            except ValidationError as exc:
                first = exc.errors()[0]
                raise MalformedRowError(
                    source,
                    row_index=index,
                    reason=f"{'.'.join(str(p) for p in first['loc'])}: {first['msg']}",
                ) from exc
        logger.debug("Fetched rows", extra={"source": source, "row_count": len(parsed)})
        return parsed

    async def fetch_players(self, ids: Sequence[str] | None = None) -> list[PlayerRow]:
        """All players, or only those whose ``fpl_player_id`` is in ``ids``."""
        query = sql.SQL("SELECT * FROM {}").format(self._relation(PLAYER_DATA_VIEW))
        params: list[Any] | None = None
        if ids is not None:
            query = sql.SQL("{} WHERE fpl_player_id = ANY(%s::text[])").format(query)
            params = [list(ids)]
        return await self._fetch(PlayerRow, PLAYER_DATA_VIEW, query, params)

    async def fetch_team_matches(self, team_names: Sequence[str] | None = None) -> list[TeamMatchRow]:
        """Flat team match rows, optionally restricted to ``team_names``."""
        query = sql.SQL("SELECT * FROM {}").format(self._relation(TEAM_MATCHLOG_VIEW))
        params: list[Any] | None = None
        if team_names is not None:
            query = sql.SQL("{} WHERE fbref_team = ANY(%s::text[])").format(query)
            params = [list(team_names)]
        return await self._fetch(TeamMatchRow, TEAM_MATCHLOG_VIEW, query, params)

    async def fetch_events(self) -> list[EventRow]:
        query = sql.SQL("SELECT * FROM {} ORDER BY id").format(self._relation(EVENTS_TABLE))
        return await self._fetch(EventRow, EVENTS_TABLE, query)

    async def fetch_player_gameweeks(self, player_ids: Sequence[str]) -> list[PlayerGameweekRow]:
        """Gameweek rows for every player in ``player_ids`` in a single query.

        Rows come back ordered by player then gameweek. Callers group them.
        """
        query = sql.SQL(
            "SELECT * FROM {} WHERE fpl_player_id = ANY(%s::text[]) "
            "ORDER BY fpl_player_id, fpl_gameweek ASC"
        ).format(self._relation(PLAYER_MATCHLOG_VIEW))
        return await self._fetch(
            PlayerGameweekRow,
            PLAYER_MATCHLOG_VIEW,
            query,
            [list(player_ids)],
        )
