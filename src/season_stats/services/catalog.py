"""
Game catalog for one team and season.

SharedGameCatalog fetches the season's games once per pipeline run; both the
games view and the box score aggregation read from it, so they always agree on
which games are finished.
"""

from __future__ import annotations

import asyncio
import datetime as dt
import logging
from typing import Iterable, Optional

from ..core.models import Game, GameCatalog, GameResult, UpcomingGame
from ..providers.balldontlie import BallDontLieNBA

logger = logging.getLogger(__name__)


class SharedGameCatalog:
    """
    Memoized, single-flight fetch of a team's season games.

    The first ``get()`` starts the request; concurrent callers wait on the
    same task and later callers get the cached result. A failure is cached
    as well and re-raised to every caller.
    """

    def __init__(self, api: BallDontLieNBA, team_id: int, season: int):
        self.api = api
        self.team_id = team_id
        self.season = season
        self._task: Optional[asyncio.Task[tuple[Game, ...]]] = None

    async def get(self) -> tuple[Game, ...]:
        if self._task is None:
            self._task = asyncio.get_running_loop().create_task(self._fetch())
        return await self._task

    async def _fetch(self) -> tuple[Game, ...]:
        games = await self.api.get_team_games(self.team_id, self.season)
        team_games = tuple(g for g in games if g.involves(self.team_id))
        logger.info(
            "Loaded %d games for team %d in season %d",
            len(team_games), self.team_id, self.season,
        )
        return team_games


def _result(game: Game, team_id: int) -> GameResult:
    return GameResult(
        game_id=game.id,
        date=game.date,
        opponent=game.opponent(team_id),
        home=game.is_home(team_id),
        team_score=game.team_score(team_id),
        opponent_score=game.opponent_score(team_id),
        won=game.won(team_id),
    )


def _upcoming(game: Game, team_id: int) -> UpcomingGame:
    return UpcomingGame(
        game_id=game.id,
        date=game.date,
        opponent=game.opponent(team_id),
        home=game.is_home(team_id),
        status=game.status,
    )


def to_upcoming(games: Iterable[Game], team_id: int) -> tuple[UpcomingGame, ...]:
    return tuple(_upcoming(g, team_id) for g in games)


def build_game_catalog(
    games: Iterable[Game],
    team_id: int,
    *,
    today: Optional[dt.date] = None,
    upcoming_limit: int = 5,
    recent_limit: int = 10,
) -> GameCatalog:
    """
    Partition a team's games into finished and upcoming views.

    Args:
        games: Season games (games not involving the team are ignored)
        team_id: Tracked team
        today: Local calendar day; upcoming games are on or after it
        upcoming_limit: Number of upcoming games to keep
        recent_limit: Number of recent results to keep

    Returns:
        GameCatalog with finished games newest first, the next upcoming
        games oldest first, the record and points per game
    """
    today = today or dt.date.today()
    team_games = [g for g in games if g.involves(team_id)]

    finished = sorted(
        (g for g in team_games if g.is_final),
        key=lambda g: (g.date, g.id),
        reverse=True,
    )
    upcoming = sorted(
        (g for g in team_games if not g.is_final and g.date >= today),
        key=lambda g: (g.date, g.id),
    )[:upcoming_limit]

    wins = sum(1 for g in finished if g.won(team_id))
    losses = len(finished) - wins

    points_per_game = None
    if finished:
        points_per_game = sum(g.team_score(team_id) for g in finished) / len(finished)

    return GameCatalog(
        team_id=team_id,
        finished=tuple(finished),
        upcoming=tuple(upcoming),
        recent_results=tuple(_result(g, team_id) for g in finished[:recent_limit]),
        wins=wins,
        losses=losses,
        points_per_game=points_per_game,
    )
