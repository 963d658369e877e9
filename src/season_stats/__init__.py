"""
Season Stats

Season-level aggregates for a single NBA team, built from the BallDontLie API:
player averages, team averages, win/loss record, recent results and upcoming
games.

Key Features:
- One shared, cursor-paginated game catalog per run
- Box scores fetched in rate-limited chunks, failed chunks skipped
- Undefined values (no attempts, no qualifying players) reported as None
- Runs are generation-tagged; stale results never overwrite newer ones

Usage:
    from season_stats import BallDontLieNBA, SeasonPipeline

    async with BallDontLieNBA(api_key="...") as api:
        snapshot = await SeasonPipeline(api, team_id=16, season=2025).refresh()

    print(snapshot.summary.record)
"""

from .core import (
    Settings,
    get_settings,
    Game,
    BoxScoreRow,
    PlayerSeasonTotals,
    PlayerSeasonAverages,
    TeamSeasonSummary,
    SeasonSnapshot,
)
from .core.http import (
    ExternalAPIError,
    HttpError,
    InvalidResponseError,
    MissingCredentialError,
    NetworkError,
)
from .providers import BallDontLieNBA
from .aggregators import BoxScoreAggregator
from .services.pipeline import SeasonPipeline

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Models
    "Game",
    "BoxScoreRow",
    "PlayerSeasonTotals",
    "PlayerSeasonAverages",
    "TeamSeasonSummary",
    "SeasonSnapshot",
    # Errors
    "ExternalAPIError",
    "HttpError",
    "InvalidResponseError",
    "MissingCredentialError",
    "NetworkError",
    # Pipeline
    "BallDontLieNBA",
    "BoxScoreAggregator",
    "SeasonPipeline",
]
