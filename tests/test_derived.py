"""
Tests for derived statistics: averages, percentages and team aggregates.
"""

from __future__ import annotations

import pytest

from season_stats.aggregators.derived import (
    all_player_averages,
    per_game,
    player_averages,
    ratio,
    shooting_pct,
    sort_players,
    summarize_team,
    team_shooting,
    weighted_average,
)
from season_stats.core.models import GameCatalog, PlayerRef, PlayerSeasonTotals
from season_stats.core.types import ShootingSplit


def totals(player_id: int, games: int, **sums) -> PlayerSeasonTotals:
    return PlayerSeasonTotals(player=PlayerRef(id=player_id), games_played=games, **sums)


def averages(player_id: int, games: int, **sums):
    return player_averages(totals(player_id, games, **sums))


class TestDivisionHelpers:
    def test_per_game(self):
        assert per_game(50, 4) == 12.5
        assert per_game(50, 0) is None

    def test_ratio(self):
        assert ratio(3, 4) == 0.75
        assert ratio(0, 0) is None

    def test_shooting_pct_zero_attempts_is_zero(self):
        assert shooting_pct(0, 0) == 0.0
        assert shooting_pct(0, 10) == 0.0
        assert shooting_pct(5, 10) == 0.5


class TestPlayerAverages:
    def test_per_game_rates(self):
        avg = averages(7, 4, pts=100, reb=30, ast=22, stl=6, blk=2, turnover=9)
        assert avg.pts == 25.0
        assert avg.reb == 7.5
        assert avg.ast == 5.5
        assert avg.stl == 1.5
        assert avg.blk == 0.5
        assert avg.turnover == 2.25

    def test_percentages_and_raw_totals(self):
        avg = averages(7, 2, fgm=9, fga=20, fg3m=3, fg3a=8, ftm=4, fta=5)
        assert avg.fg_pct == 0.45
        assert avg.fg3_pct == 0.375
        assert avg.ft_pct == 0.8
        assert (avg.fgm, avg.fga) == (9, 20)

    def test_no_attempts_distinguished_from_zero_percent(self):
        no_attempts = averages(1, 3, fta=0, ftm=0)
        all_missed = averages(2, 3, fta=10, ftm=0)

        assert no_attempts.ft_pct == 0.0
        assert all_missed.ft_pct == 0.0
        assert no_attempts.shooting_pct(ShootingSplit.FT) is None
        assert all_missed.shooting_pct(ShootingSplit.FT) == 0.0

    def test_zero_games_has_no_averages(self):
        assert player_averages(totals(7, 0)) is None

    def test_all_player_averages_skips_zero_game_players(self):
        result = all_player_averages([totals(9, 2, pts=10), totals(3, 0), totals(5, 1, pts=4)])
        assert [p.player.id for p in result] == [5, 9]


class TestWeightedAverage:
    def test_only_qualified_players_count(self):
        players = [averages(1, 10, pts=200), averages(2, 2, pts=20)]
        assert weighted_average(players, "pts", min_games=5) == 20.0

    def test_weights_by_games(self):
        players = [averages(1, 10, reb=100), averages(2, 5, reb=25)]
        # (10 * 10 + 5 * 5) / 15
        assert weighted_average(players, "reb") == pytest.approx(125 / 15)

    def test_no_qualified_players_is_undefined(self):
        assert weighted_average([averages(1, 4, pts=40)], "pts") is None
        assert weighted_average([], "pts") is None


class TestTeamShooting:
    def test_uses_all_players_regardless_of_games(self):
        players = [averages(1, 10, fgm=40, fga=100), averages(2, 1, fgm=10, fga=10)]
        assert team_shooting(players, ShootingSplit.FG) == pytest.approx(50 / 110)

    def test_no_attempts_is_undefined(self):
        players = [averages(1, 10, fg3m=0, fg3a=0)]
        assert team_shooting(players, ShootingSplit.FG3) is None


class TestSortPlayers:
    def test_descending_with_id_tiebreak(self):
        players = [averages(3, 1, pts=10), averages(1, 1, pts=10), averages(2, 1, pts=30)]
        assert [p.player.id for p in sort_players(players, "pts")] == [2, 1, 3]


class TestSummarizeTeam:
    def test_combines_record_and_players(self):
        catalog = GameCatalog(team_id=16, finished=(), wins=0, losses=0, points_per_game=None)
        summary = summarize_team(catalog, [])

        assert summary.games_played == 0
        assert summary.win_pct is None
        assert summary.points_per_game is None
        assert summary.weighted_averages["pts"] is None
        assert summary.shooting == {"fg_pct": None, "fg3_pct": None, "ft_pct": None}
        assert summary.record == "0-0"

    def test_with_players(self):
        players = [
            averages(1, 10, pts=200, reb=50, fgm=80, fga=160, ftm=0, fta=0),
            averages(2, 2, pts=20, reb=20, fgm=8, fga=20),
        ]
        catalog = GameCatalog(team_id=16, wins=7, losses=3, points_per_game=110.4)
        summary = summarize_team(catalog, players, min_games=5)

        assert summary.wins == 7
        assert summary.points_per_game == 110.4
        assert summary.weighted_averages["pts"] == 20.0
        assert summary.weighted_averages["reb"] == 5.0
        assert summary.shooting["fg_pct"] == pytest.approx(88 / 180)
        assert summary.shooting["ft_pct"] is None
