"""
Pydantic models for season stats entities.

These models are used for:
- Validating BallDontLie payloads (games, box scores, standings)
- Carrying per-player totals and derived averages through the pipeline
- The immutable snapshot handed to consumers (CLI, rendering layer)
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from .types import COUNTING_STATS, DID_NOT_PLAY_MINUTES, FINAL_STATUS, SHOT_STATS, ShootingSplit


def _zero_if_missing(value: Any) -> Any:
    return 0 if value is None or value == "" else value


# =============================================================================
# API Entities
# =============================================================================


class TeamRef(BaseModel):
    """Team reference as embedded in games, box scores and standings."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int
    abbreviation: Optional[str] = None
    full_name: Optional[str] = None
    city: Optional[str] = None
    name: Optional[str] = None
    conference: Optional[str] = None


class PlayerRef(BaseModel):
    """Player reference as embedded in box score rows."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    position: Optional[str] = None

    @property
    def full_name(self) -> str:
        name = f"{self.first_name or ''} {self.last_name or ''}".strip()
        return name or f"Player {self.id}"


class Game(BaseModel):
    """A scheduled or completed game."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int
    date: dt.date
    status: str = ""
    home_team: TeamRef
    home_team_score: int = 0
    visitor_team: TeamRef
    visitor_team_score: int = 0

    @field_validator("date", mode="before")
    @classmethod
    def _calendar_day(cls, value: Any) -> Any:
        # Older payloads carry "2025-11-01T00:00:00.000Z"; only the day matters.
        if isinstance(value, str):
            return value[:10]
        return value

    @field_validator("home_team_score", "visitor_team_score", mode="before")
    @classmethod
    def _score(cls, value: Any) -> Any:
        return _zero_if_missing(value)

    @property
    def is_final(self) -> bool:
        return self.status == FINAL_STATUS

    def involves(self, team_id: int) -> bool:
        return self.home_team.id == team_id or self.visitor_team.id == team_id

    def is_home(self, team_id: int) -> bool:
        return self.home_team.id == team_id

    def team_score(self, team_id: int) -> int:
        return self.home_team_score if self.is_home(team_id) else self.visitor_team_score

    def opponent_score(self, team_id: int) -> int:
        return self.visitor_team_score if self.is_home(team_id) else self.home_team_score

    def opponent(self, team_id: int) -> TeamRef:
        return self.visitor_team if self.is_home(team_id) else self.home_team

    def won(self, team_id: int) -> bool:
        """Strictly more points than the opponent; anything else is a loss."""
        return self.team_score(team_id) > self.opponent_score(team_id)


class BoxScoreRow(BaseModel):
    """One player's statistical line for one game (BallDontLie /stats row)."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: Optional[int] = None
    game_id: Optional[int] = None
    player: Optional[PlayerRef] = None
    team: Optional[TeamRef] = None
    min: str = ""

    pts: int = 0
    reb: int = 0
    ast: int = 0
    stl: int = 0
    blk: int = 0
    turnover: int = 0
    fgm: int = 0
    fga: int = 0
    fg3m: int = 0
    fg3a: int = 0
    ftm: int = 0
    fta: int = 0

    @model_validator(mode="before")
    @classmethod
    def _flatten_game(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("game_id") is None:
            game = data.get("game") or {}
            if isinstance(game, dict) and game.get("id") is not None:
                data = {**data, "game_id": game["id"]}
        return data

    @field_validator("min", mode="before")
    @classmethod
    def _minutes(cls, value: Any) -> str:
        return "" if value is None else str(value).strip()

    @field_validator(*COUNTING_STATS, *SHOT_STATS, mode="before")
    @classmethod
    def _stat(cls, value: Any) -> Any:
        return _zero_if_missing(value)

    @property
    def did_not_play(self) -> bool:
        return self.min in DID_NOT_PLAY_MINUTES


class Standing(BaseModel):
    """Standings row for one team (only the fields we surface)."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    team: TeamRef
    conference: Optional[str] = None
    conference_rank: Optional[int] = None
    wins: Optional[int] = None
    losses: Optional[int] = None


# =============================================================================
# Aggregates
# =============================================================================


@dataclass
class PlayerSeasonTotals:
    """Running per-player sums, folded one box score row at a time."""

    player: PlayerRef
    games_played: int = 0
    pts: int = 0
    reb: int = 0
    ast: int = 0
    stl: int = 0
    blk: int = 0
    turnover: int = 0
    fgm: int = 0
    fga: int = 0
    fg3m: int = 0
    fg3a: int = 0
    ftm: int = 0
    fta: int = 0

    def add(self, row: BoxScoreRow) -> None:
        self.games_played += 1
        for key in COUNTING_STATS + SHOT_STATS:
            setattr(self, key, getattr(self, key) + getattr(row, key))


class PlayerSeasonAverages(BaseModel):
    """
    Per-game view over PlayerSeasonTotals.

    ``fg_pct``/``fg3_pct``/``ft_pct`` are 0.0 when there were no attempts;
    use ``shooting_pct()`` (or the attempted totals) to tell that apart from
    a real 0%.
    """

    model_config = ConfigDict(frozen=True)

    player: PlayerRef
    games_played: int

    pts: float
    reb: float
    ast: float
    stl: float
    blk: float
    turnover: float

    fg_pct: float
    fg3_pct: float
    ft_pct: float

    fgm: int
    fga: int
    fg3m: int
    fg3a: int
    ftm: int
    fta: int

    def attempts(self, split: ShootingSplit) -> int:
        return getattr(self, split.attempted)

    def shooting_pct(self, split: ShootingSplit) -> Optional[float]:
        """Made/attempted, or None when the player has no attempts."""
        if self.attempts(split) == 0:
            return None
        return getattr(self, split.pct_key)


class GameResult(BaseModel):
    """A finished game seen from the tracked team's side."""

    model_config = ConfigDict(frozen=True)

    game_id: int
    date: dt.date
    opponent: TeamRef
    home: bool
    team_score: int
    opponent_score: int
    won: bool


class UpcomingGame(BaseModel):
    """A scheduled game seen from the tracked team's side."""

    model_config = ConfigDict(frozen=True)

    game_id: int
    date: dt.date
    opponent: TeamRef
    home: bool
    status: str


@dataclass(frozen=True)
class GameCatalog:
    """Partitioned, sorted view of one team's season games."""

    team_id: int
    finished: tuple[Game, ...] = ()
    upcoming: tuple[Game, ...] = ()
    recent_results: tuple[GameResult, ...] = ()
    wins: int = 0
    losses: int = 0
    points_per_game: Optional[float] = None

    @property
    def last_game(self) -> Optional[Game]:
        return self.finished[0] if self.finished else None

    @property
    def finished_ids(self) -> list[int]:
        return [game.id for game in self.finished]


class TeamSeasonSummary(BaseModel):
    """Team-level season aggregates. ``None`` means undefined, never 0."""

    model_config = ConfigDict(frozen=True)

    games_played: int = 0
    wins: int = 0
    losses: int = 0
    win_pct: Optional[float] = None
    points_per_game: Optional[float] = None
    weighted_averages: dict[str, Optional[float]] = {}
    shooting: dict[str, Optional[float]] = {}

    @property
    def record(self) -> str:
        return f"{self.wins}-{self.losses}"


class LastGame(BaseModel):
    """Most recent finished game with the tracked team's box score."""

    model_config = ConfigDict(frozen=True)

    game: Game
    won: bool
    rows: tuple[BoxScoreRow, ...] = ()


class SeasonSnapshot(BaseModel):
    """Immutable result of one pipeline run."""

    model_config = ConfigDict(frozen=True)

    team_id: int
    season: int
    generation: int = 0

    finished_games: tuple[Game, ...] = ()
    upcoming_games: tuple[UpcomingGame, ...] = ()
    recent_results: tuple[GameResult, ...] = ()
    last_game: Optional[LastGame] = None

    players: tuple[PlayerSeasonAverages, ...] = ()
    summary: TeamSeasonSummary = TeamSeasonSummary()
    conference_rank: Optional[int] = None

    games_loading: bool = False
    players_loading: bool = False

    def to_json(self, *, include_generation: bool = False) -> str:
        exclude = None if include_generation else {"generation"}
        return self.model_dump_json(exclude=exclude)
