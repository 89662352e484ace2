"""Team match log aggregation.

Turns the flat ``mv_team_matchlog`` rows (one row per team per match) into
one Team per distinct team with its matches in date order and numbered
from 1.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from operator import attrgetter
from typing import Any

from pydantic import ValidationError

from fpl_service.core.database.exceptions import MalformedRowError
from fpl_service.features.stats.schemas import Team, TeamMatchlogEntry, TeamMatchRow

logger = logging.getLogger(__name__)

TEAM_MATCHLOG_SOURCE = "mv_team_matchlog"


def _coerce_rows(rows: Iterable[TeamMatchRow | Mapping[str, Any]]) -> list[TeamMatchRow]:
    parsed: list[TeamMatchRow] = []
    for index, row in enumerate(rows):
        if isinstance(row, TeamMatchRow):
            parsed.append(row)
            continue
        try:
            parsed.append(TeamMatchRow.model_validate(row))
        except ValidationError as exc:
            raise MalformedRowError(
                TEAM_MATCHLOG_SOURCE,
                row_index=index,
                reason="; ".join(
                    f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
                ),
            ) from exc
    return parsed


def aggregate_team_matchlogs(rows: Iterable[TeamMatchRow | Mapping[str, Any]]) -> list[Team]:
    """Group flat team-match rows into teams with numbered match logs.

    Teams are returned in order of first appearance in ``rows``. Within a
    team, matches are sorted by date ascending (stable, so same-day matches
    keep their input order) and ``match_number`` runs 1..N.

    Raw mappings are validated first; any invalid row (for example an
    unparsable date) raises MalformedRowError and nothing is returned.

    Example:
        >>> teams = aggregate_team_matchlogs([
        ...     {"fbref_team": "Arsenal", "fbref_date": "2024-08-24", "fbref_round": 2},
        ...     {"fbref_team": "Arsenal", "fbref_date": "2024-08-17", "fbref_round": 1},
        ... ])
        >>> [(m.fbref_round, m.match_number) for m in teams[0].fbref_team_matchlog]
        [(1, 1), (2, 2)]
    """
    grouped: dict[str, list[TeamMatchRow]] = {}
    for row in _coerce_rows(rows):
        grouped.setdefault(row.fbref_team, []).append(row)

    teams = [
        Team(
            fbref_team=team_name,
            fbref_team_matchlog=[
                TeamMatchlogEntry(
                    fbref_match_date=match.fbref_date.isoformat(),
                    fbref_round=match.fbref_round,
                    match_number=number,
                )
                for number, match in enumerate(sorted(matches, key=attrgetter("fbref_date")), start=1)
            ],
        )
        for team_name, matches in grouped.items()
    ]

    logger.debug("Aggregated team match logs", extra={"team_count": len(teams)})
    return teams
