"""DataLoader for batch-loading player gameweek data.

Every ``Player.player_gameweek_data`` field in one response goes through
this loader, so a query listing N players issues one store query instead
of N.
"""

from __future__ import annotations

import logging
from operator import attrgetter
from typing import TYPE_CHECKING

from strawberry.dataloader import DataLoader

from fpl_service.features.stats.schemas import PlayerGameweekRow

if TYPE_CHECKING:
    from fpl_service.features.stats.repository import StatsRepository

logger = logging.getLogger(__name__)


class PlayerGameweekDataLoader:
    """Batch-load gameweek rows keyed by ``fpl_player_id``.

    Loads requested before the event loop yields are dispatched together as
    one batch. Repeated keys share a single cached result, so the batch
    function only ever sees distinct ids.

    Usage:
        loader = PlayerGameweekDataLoader(repository)
        rows = await loader.load("101")  # batched with other loads
        per_player = await loader.load_many(["101", "202"])
    """

    def __init__(self, repository: StatsRepository) -> None:
        """Initialize with the request's repository.

        Args:
            repository: StatsRepository scoped to the current request
        """
        self._repository = repository
        self._loader: DataLoader[str, list[PlayerGameweekRow]] = DataLoader(
            load_fn=self._batch_load_gameweeks
        )

    async def _batch_load_gameweeks(self, player_ids: list[str]) -> list[list[PlayerGameweekRow]]:
        """Fetch rows for all ``player_ids`` in one query and split them per player.

        The result has exactly one entry per key, in key order. Players with
        no rows get an empty list. Each player's rows are ordered by
        gameweek ascending. A store failure propagates and fails every
        pending load of the batch.
        """
        if not player_ids:
            return []

        rows = await self._repository.fetch_player_gameweeks(player_ids)

        grouped: dict[str, list[PlayerGameweekRow]] = {player_id: [] for player_id in player_ids}
        for row in rows:
            bucket = grouped.get(row.fpl_player_id)
            if bucket is not None:
                bucket.append(row)

        for bucket in grouped.values():
            bucket.sort(key=attrgetter("fpl_gameweek"))

        logger.debug(
            "Loaded player gameweek batch",
            extra={"key_count": len(player_ids), "row_count": len(rows)},
        )
        return [grouped[player_id] for player_id in player_ids]

    async def load(self, player_id: str) -> list[PlayerGameweekRow]:
        """Load one player's gameweek rows (batched with concurrent loads)."""
        return await self._loader.load(player_id)

    async def load_many(self, player_ids: list[str]) -> list[list[PlayerGameweekRow]]:
        """Load gameweek rows for several players, in the order given."""
        return await self._loader.load_many(player_ids)


__all__ = ["PlayerGameweekDataLoader"]
