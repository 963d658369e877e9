"""
Data provider layer.

Wraps the BallDontLie REST API and its cursor pagination.

Usage:
    from season_stats.providers import BallDontLieNBA

    async with BallDontLieNBA(api_key="...") as api:
        games = await api.get_team_games(team_id=16, season=2025)
"""

from .balldontlie import BallDontLieNBA
from .pagination import CursorPager

__all__ = [
    "BallDontLieNBA",
    "CursorPager",
]
