"""
Season statistics aggregators.

BallDontLie returns game-by-game box scores; these modules fold them into
per-player season totals and derive averages and team-level aggregates.
"""

from .box_scores import BoxScoreAggregator
from .derived import (
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

__all__ = [
    "BoxScoreAggregator",
    "all_player_averages",
    "per_game",
    "player_averages",
    "ratio",
    "shooting_pct",
    "sort_players",
    "summarize_team",
    "team_shooting",
    "weighted_average",
]
