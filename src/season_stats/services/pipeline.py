"""
Season pipeline: fetch, aggregate and publish one team's season.

A run fans out into two cooperative tasks that share one game catalog:

  games task:   catalog -> record/PPG/schedule -> last game box score
                -> standings (best effort)
  players task: catalog -> finished game ids -> chunked box scores
                -> per-player totals -> averages

Each run carries a generation number. Only the latest generation's result is
committed to ``SeasonPipeline.snapshot``; a run that finishes after a newer
one has started is discarded.
"""

from __future__ import annotations

import asyncio
import datetime as dt
import logging
from dataclasses import dataclass, field
from typing import Optional

from ..aggregators.box_scores import BoxScoreAggregator
from ..aggregators.derived import all_player_averages, summarize_team
from ..core.config import Settings, get_settings
from ..core.http import ExternalAPIError
from ..core.models import (
    GameCatalog,
    LastGame,
    PlayerSeasonAverages,
    SeasonSnapshot,
    Standing,
)
from ..providers.balldontlie import BallDontLieNBA
from .catalog import SharedGameCatalog, build_game_catalog, to_upcoming

logger = logging.getLogger(__name__)


@dataclass
class _RunState:
    """Mutable state owned by a single run until it is frozen into a snapshot."""

    generation: int
    catalog: GameCatalog
    last_game: Optional[LastGame] = None
    conference_rank: Optional[int] = None
    players: list[PlayerSeasonAverages] = field(default_factory=list)
    games_loading: bool = True
    players_loading: bool = True


class SeasonPipeline:
    """
    Build season snapshots for one team.

    Usage:
        async with BallDontLieNBA(api_key) as api:
            pipeline = SeasonPipeline(api, team_id=16, season=2025)
            snapshot = await pipeline.refresh()
    """

    def __init__(
        self,
        api: BallDontLieNBA,
        team_id: Optional[int] = None,
        season: Optional[int] = None,
        settings: Optional[Settings] = None,
    ):
        self.api = api
        self.settings = settings or get_settings()
        self.team_id = team_id if team_id is not None else self.settings.team_id
        self.season = season if season is not None else self.settings.season

        self._generation = 0
        self._snapshot: Optional[SeasonSnapshot] = None
        self._runs: dict[int, _RunState] = {}

    # -- Published state -----------------------------------------------------

    @property
    def snapshot(self) -> Optional[SeasonSnapshot]:
        """Latest committed snapshot, or None before the first run completes."""
        return self._snapshot

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def games_loading(self) -> bool:
        state = self._runs.get(self._generation)
        return state.games_loading if state else False

    @property
    def players_loading(self) -> bool:
        state = self._runs.get(self._generation)
        return state.players_loading if state else False

    # -- Run -----------------------------------------------------------------

    async def refresh(self, *, today: Optional[dt.date] = None) -> SeasonSnapshot:
        """
        Run the pipeline once and return its snapshot.

        Raises:
            MissingCredentialError: no API key; nothing is fetched
        """
        self.api.require_credential()

        self._generation += 1
        generation = self._generation
        state = _RunState(generation=generation, catalog=GameCatalog(team_id=self.team_id))
        self._runs[generation] = state

        logger.info(
            "Starting run %d for team %d, season %d",
            generation, self.team_id, self.season,
        )

        shared = SharedGameCatalog(self.api, self.team_id, self.season)
        try:
            await asyncio.gather(
                self._load_games(state, shared, today),
                self._load_players(state, shared),
            )
        finally:
            self._runs.pop(generation, None)

        snapshot = self._freeze(state)
        if generation == self._generation:
            self._snapshot = snapshot
        else:
            logger.info(
                "Discarding run %d, superseded by run %d", generation, self._generation
            )
        return snapshot

    async def _load_games(
        self,
        state: _RunState,
        shared: SharedGameCatalog,
        today: Optional[dt.date],
    ) -> None:
        try:
            games = await shared.get()
        except ExternalAPIError as e:
            logger.error("Games load error: %s", e)
            state.games_loading = False
            return

        state.catalog = build_game_catalog(
            games,
            self.team_id,
            today=today,
            upcoming_limit=self.settings.upcoming_limit,
            recent_limit=self.settings.recent_limit,
        )

        last = state.catalog.last_game
        if last is not None:
            aggregator = BoxScoreAggregator(self.api, self.team_id)
            try:
                rows = await aggregator.fetch_game_box_score(last.id)
            except ExternalAPIError as e:
                logger.error("Last game box score error for game %d: %s", last.id, e)
                rows = []
            state.last_game = LastGame(game=last, won=last.won(self.team_id), rows=tuple(rows))

        state.conference_rank = await self._conference_rank()
        state.games_loading = False

    async def _load_players(self, state: _RunState, shared: SharedGameCatalog) -> None:
        try:
            games = await shared.get()
        except ExternalAPIError as e:
            logger.error("Player load error: %s", e)
            state.players_loading = False
            return

        finished_ids = [g.id for g in games if g.is_final]
        aggregator = BoxScoreAggregator(
            self.api,
            self.team_id,
            chunk_size=self.settings.batch_chunk_size,
            delay=self.settings.batch_delay_seconds,
        )
        totals = await aggregator.aggregate(finished_ids)
        state.players = all_player_averages(totals.values())
        state.players_loading = False

    async def _conference_rank(self) -> Optional[int]:
        """Best effort: any failure just means no rank."""
        try:
            standings = await self.api.get_standings(self.season)
        except ExternalAPIError as e:
            logger.debug("Standings unavailable: %s", e)
            return None

        row = find_team_standing(standings, self.team_id, self.settings.team_name)
        return row.conference_rank if row else None

    def _freeze(self, state: _RunState) -> SeasonSnapshot:
        catalog = state.catalog
        return SeasonSnapshot(
            team_id=self.team_id,
            season=self.season,
            generation=state.generation,
            finished_games=catalog.finished,
            upcoming_games=to_upcoming(catalog.upcoming, self.team_id),
            recent_results=catalog.recent_results,
            last_game=state.last_game,
            players=tuple(state.players),
            summary=summarize_team(
                catalog, state.players, self.settings.min_games_for_team_average
            ),
            conference_rank=state.conference_rank,
            games_loading=state.games_loading,
            players_loading=state.players_loading,
        )


def find_team_standing(
    standings: list[Standing],
    team_id: int,
    team_name: str = "",
) -> Optional[Standing]:
    """Match by team id, falling back to the team name in ``full_name``."""
    name = team_name.lower()
    for row in standings:
        if row.team.id == team_id:
            return row
    if name:
        for row in standings:
            if name in (row.team.full_name or "").lower():
                return row
    return None
