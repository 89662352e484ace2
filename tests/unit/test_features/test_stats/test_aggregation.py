"""Tests for team match log aggregation."""

from __future__ import annotations

import random
from datetime import datetime

import pytest

from fpl_service.core.database.exceptions import MalformedRowError
from fpl_service.features.stats.aggregation import aggregate_team_matchlogs
from tests.fakes import make_match


def _summary(teams):
    return [
        (team.fbref_team, [(m.fbref_match_date, m.fbref_round, m.match_number) for m in team.fbref_team_matchlog])
        for team in teams
    ]


class TestAggregateTeamMatchlogs:
    """Grouping, ordering and numbering."""

    def test_groups_sorts_and_numbers(self):
        rows = [
            {"fbref_team": "ARS", "fbref_date": "2024-08-24", "fbref_round": 2},
            {"fbref_team": "CHE", "fbref_date": "2024-08-18", "fbref_round": 1},
            {"fbref_team": "ARS", "fbref_date": "2024-08-17", "fbref_round": 1},
        ]

        teams = aggregate_team_matchlogs(rows)

        assert _summary(teams) == [
            ("ARS", [("2024-08-17", 1, 1), ("2024-08-24", 2, 2)]),
            ("CHE", [("2024-08-18", 1, 1)]),
        ]

    def test_two_teams_out_of_order(self):
        rows = [
            make_match("ARS", "2024-08-10", 2),
            make_match("ARS", "2024-08-03", 1),
            make_match("CHE", "2024-08-05", 1),
        ]

        assert _summary(aggregate_team_matchlogs(rows)) == [
            ("ARS", [("2024-08-03", 1, 1), ("2024-08-10", 2, 2)]),
            ("CHE", [("2024-08-05", 1, 1)]),
        ]

    def test_empty_input(self):
        assert aggregate_team_matchlogs([]) == []

    def test_single_row(self):
        teams = aggregate_team_matchlogs([make_match("LIV", "2024-09-01", 3)])

        assert _summary(teams) == [("LIV", [("2024-09-01", 3, 1)])]

    def test_teams_keep_first_appearance_order(self):
        rows = [
            make_match("WOL", "2024-08-20"),
            make_match("ARS", "2024-08-10"),
            make_match("WOL", "2024-08-01"),
            make_match("BOU", "2024-08-05"),
        ]

        assert [t.fbref_team for t in aggregate_team_matchlogs(rows)] == ["WOL", "ARS", "BOU"]

    def test_same_day_matches_keep_input_order(self):
        rows = [
            make_match("ARS", "2024-08-17", 7),
            make_match("ARS", "2024-08-10", 1),
            make_match("ARS", "2024-08-17", 3),
        ]

        matchlog = aggregate_team_matchlogs(rows)[0].fbref_team_matchlog

        assert [(m.fbref_round, m.match_number) for m in matchlog] == [(1, 1), (7, 2), (3, 3)]

    def test_match_numbers_are_contiguous_from_one(self):
        rows = [make_match("ARS", f"2024-{month:02d}-01", month) for month in (12, 3, 9, 1, 5)]

        matchlog = aggregate_team_matchlogs(rows)[0].fbref_team_matchlog

        assert [m.match_number for m in matchlog] == [1, 2, 3, 4, 5]
        assert [m.fbref_round for m in matchlog] == [1, 3, 5, 9, 12]

    def test_result_per_team_is_independent_of_input_order(self):
        rows = [make_match(team, f"2024-08-{day:02d}", day) for team in ("ARS", "CHE") for day in range(1, 11)]
        shuffled = list(rows)
        random.Random(7).shuffle(shuffled)

        expected = {t.fbref_team: t.fbref_team_matchlog for t in aggregate_team_matchlogs(rows)}
        actual = {t.fbref_team: t.fbref_team_matchlog for t in aggregate_team_matchlogs(shuffled)}

        assert actual == expected

    def test_accepts_datetime_values(self):
        teams = aggregate_team_matchlogs(
            [{"fbref_team": "ARS", "fbref_date": datetime(2024, 8, 17, 15, 0), "fbref_round": 1}]
        )

        assert teams[0].fbref_team_matchlog[0].fbref_match_date == "2024-08-17"

    def test_malformed_date_raises(self):
        rows = [
            {"fbref_team": "ARS", "fbref_date": "2024-08-17", "fbref_round": 1},
            {"fbref_team": "ARS", "fbref_date": "not-a-date", "fbref_round": 2},
        ]

        with pytest.raises(MalformedRowError) as exc_info:
            aggregate_team_matchlogs(rows)

        assert exc_info.value.details["source"] == "mv_team_matchlog"
        assert exc_info.value.details["row_index"] == 1
        assert "fbref_date" in exc_info.value.details["reason"]
