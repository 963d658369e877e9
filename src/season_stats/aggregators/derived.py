"""
Derived statistics: per-game averages, shooting percentages and team-level
weighted aggregates.

All functions are pure. Undefined results (nothing to divide by) are ``None``,
never 0, so a consumer can render a placeholder instead of a misleading zero.
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..core.models import (
    GameCatalog,
    PlayerSeasonAverages,
    PlayerSeasonTotals,
    TeamSeasonSummary,
)
from ..core.types import COUNTING_STATS, SHOT_STATS, ShootingSplit

DEFAULT_MIN_GAMES = 5


def per_game(total: float, games: int) -> Optional[float]:
    """Per-game rate, or None when no games were played."""
    if games <= 0:
        return None
    return total / games


def ratio(made: float, attempted: float) -> Optional[float]:
    """Made / attempted, or None when nothing was attempted."""
    if attempted <= 0:
        return None
    return made / attempted


def shooting_pct(made: int, attempted: int) -> float:
    """Made / attempted as a fraction; 0.0 when there were no attempts."""
    value = ratio(made, attempted)
    return 0.0 if value is None else value


def player_averages(totals: PlayerSeasonTotals) -> Optional[PlayerSeasonAverages]:
    """Per-game view of one player's totals (None if no games played)."""
    games = totals.games_played
    if games <= 0:
        return None

    averages = {key: getattr(totals, key) / games for key in COUNTING_STATS}
    shots = {key: getattr(totals, key) for key in SHOT_STATS}
    pcts = {
        split.pct_key: shooting_pct(shots[split.made], shots[split.attempted])
        for split in ShootingSplit
    }
    return PlayerSeasonAverages(
        player=totals.player,
        games_played=games,
        **averages,
        **pcts,
        **shots,
    )


def all_player_averages(totals: Iterable[PlayerSeasonTotals]) -> list[PlayerSeasonAverages]:
    """Averages for every player with at least one game, ordered by player id."""
    result = [avg for avg in (player_averages(t) for t in totals) if avg is not None]
    return sorted(result, key=lambda p: p.player.id)


def weighted_average(
    players: Sequence[PlayerSeasonAverages],
    stat: str,
    min_games: int = DEFAULT_MIN_GAMES,
) -> Optional[float]:
    """
    Games-weighted average of a per-game stat.

    Only players with at least ``min_games`` games count. Returns None when
    no player qualifies.
    """
    qualified = [p for p in players if p.games_played >= min_games]
    total = sum(getattr(p, stat) * p.games_played for p in qualified)
    games = sum(p.games_played for p in qualified)
    return ratio(total, games)


def team_shooting(
    players: Sequence[PlayerSeasonAverages],
    split: ShootingSplit,
) -> Optional[float]:
    """Team percentage from summed makes and attempts of all players."""
    made = sum(getattr(p, split.made) for p in players)
    attempted = sum(getattr(p, split.attempted) for p in players)
    return ratio(made, attempted)


def sort_players(
    players: Iterable[PlayerSeasonAverages],
    key: str = "pts",
) -> list[PlayerSeasonAverages]:
    """Players by ``key`` descending, ties broken by player id."""
    return sorted(players, key=lambda p: (-(getattr(p, key) or 0), p.player.id))


def summarize_team(
    catalog: GameCatalog,
    players: Sequence[PlayerSeasonAverages],
    min_games: int = DEFAULT_MIN_GAMES,
) -> TeamSeasonSummary:
    """Combine the game record with player aggregates into a team summary."""
    games_played = len(catalog.finished)
    return TeamSeasonSummary(
        games_played=games_played,
        wins=catalog.wins,
        losses=catalog.losses,
        win_pct=ratio(catalog.wins, games_played),
        points_per_game=catalog.points_per_game,
        weighted_averages={
            stat: weighted_average(players, stat, min_games) for stat in COUNTING_STATS
        },
        shooting={split.pct_key: team_shooting(players, split) for split in ShootingSplit},
    )
