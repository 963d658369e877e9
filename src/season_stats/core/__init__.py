"""
Core module for the season stats pipeline.

This module provides the foundational components:
- Configuration management (config.py)
- Data models (models.py)
- Stat keys and constants (types.py)
- Shared HTTP client infrastructure (http.py)

Usage:
    from season_stats.core import Settings, get_settings
    from season_stats.core import Game, BoxScoreRow, SeasonSnapshot
    from season_stats.core.http import BaseApiClient, ExternalAPIError
"""

# Configuration
from .config import Settings, get_settings

# Types
from .types import (
    COUNTING_STATS,
    SHOT_STATS,
    FINAL_STATUS,
    DID_NOT_PLAY_MINUTES,
    ShootingSplit,
)

# Models
from .models import (
    TeamRef,
    PlayerRef,
    Game,
    BoxScoreRow,
    Standing,
    PlayerSeasonTotals,
    PlayerSeasonAverages,
    GameResult,
    UpcomingGame,
    GameCatalog,
    TeamSeasonSummary,
    LastGame,
    SeasonSnapshot,
)

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Types
    "COUNTING_STATS",
    "SHOT_STATS",
    "FINAL_STATUS",
    "DID_NOT_PLAY_MINUTES",
    "ShootingSplit",
    # Models
    "TeamRef",
    "PlayerRef",
    "Game",
    "BoxScoreRow",
    "Standing",
    "PlayerSeasonTotals",
    "PlayerSeasonAverages",
    "GameResult",
    "UpcomingGame",
    "GameCatalog",
    "TeamSeasonSummary",
    "LastGame",
    "SeasonSnapshot",
]
