"""Pydantic models for rows read from the statistics views.

Views are queried with ``SELECT *``, so every row model ignores columns it
does not declare. Numeric identifiers are coerced to strings and
``numeric``/``Decimal`` values to floats.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class StoreRow(BaseModel):
    """Base for immutable rows validated at the store boundary."""

    model_config = ConfigDict(
        extra="ignore",
        frozen=True,
        coerce_numbers_to_str=True,
    )


class PlayerRow(StoreRow):
    """One row of ``mv_player_data``."""

    fpl_player_id: str
    fpl_player_code: int
    fpl_web_name: str
    fbref_team: str
    fpl_player_position: str
    fpl_player_cost: float
    fpl_selected_by_percent: float


class PlayerGameweekRow(StoreRow):
    """One player's statistics for one gameweek (``mv_player_matchlog``)."""

    fpl_player_id: str
    fbref_round: int
    fbref_minutes: int
    fbref_npxg: float
    fbref_xg_assist: float
    calc_fpl_npxp: float
    fpl_gameweek: int
    fpl_total_points: int
    fpl_goals_scored: int
    fpl_assists: int
    fpl_bps: int
    fpl_clean_sheet: int
    fpl_defensive_contribution: int


class TeamMatchRow(StoreRow):
    """Flat ``mv_team_matchlog`` row: one team, one match."""

    fbref_team: str
    fbref_date: date
    fbref_round: int

    @field_validator("fbref_date", mode="before")
    @classmethod
    def _date_from_timestamp(cls, value: Any) -> Any:
        # timestamp columns arrive as datetime; only the calendar day matters
        if isinstance(value, datetime):
            return value.date()
        return value


class TeamMatchlogEntry(BaseModel):
    """A team's match with its 1-based position in date order."""

    model_config = ConfigDict(frozen=True)

    fbref_match_date: str = Field(..., description="ISO 8601 calendar date (YYYY-MM-DD)")
    fbref_round: int
    match_number: int = Field(..., ge=1)


class Team(BaseModel):
    """A team and its ordered match log."""

    model_config = ConfigDict(frozen=True)

    fbref_team: str
    fbref_team_matchlog: list[TeamMatchlogEntry] = Field(default_factory=list)


class EventRow(StoreRow):
    """One gameweek event from ``fpl_events``."""

    id: int
    finished: bool
    is_current: bool
