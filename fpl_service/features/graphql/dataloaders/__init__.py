"""DataLoader container and factory.

Each GraphQL request gets its own DataLoaders instance, which fixes the
batching boundary and keeps cached results from leaking between requests.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from fpl_service.features.graphql.dataloaders.gameweeks import PlayerGameweekDataLoader

if TYPE_CHECKING:
    from fpl_service.features.stats.repository import StatsRepository


@dataclass
class DataLoaders:
    """Request-scoped loaders.

    Usage in resolver:
        rows = await info.context.loaders.player_gameweeks.load(player_id)
    """

    player_gameweeks: PlayerGameweekDataLoader


def create_dataloaders(repository: StatsRepository) -> DataLoaders:
    """Build a fresh set of loaders bound to ``repository``."""
    return DataLoaders(
        player_gameweeks=PlayerGameweekDataLoader(repository),
    )


__all__ = ["DataLoaders", "PlayerGameweekDataLoader", "create_dataloaders"]
