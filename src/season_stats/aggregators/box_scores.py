"""
Box score aggregation.

The BallDontLie /stats endpoint returns one row per player per game. Rows of
the tracked team where the player actually took the floor are summed into
season totals per player.
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from ..core.models import BoxScoreRow, PlayerSeasonTotals
from ..providers.balldontlie import BallDontLieNBA
from ..services.batch import DEFAULT_CHUNK_SIZE, DEFAULT_DELAY_SECONDS, fetch_in_chunks

logger = logging.getLogger(__name__)


class BoxScoreAggregator:
    """Aggregate a team's game-by-game box scores into season totals."""

    def __init__(
        self,
        api: BallDontLieNBA,
        team_id: int,
        *,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        delay: float = DEFAULT_DELAY_SECONDS,
    ):
        self.api = api
        self.team_id = team_id
        self.chunk_size = chunk_size
        self.delay = delay

    @staticmethod
    def filter_rows(rows: Iterable[BoxScoreRow], team_id: int) -> list[BoxScoreRow]:
        """Keep rows of ``team_id`` for players who played.

        Args:
            rows: Raw box score rows, possibly from both teams
            team_id: Tracked team

        Returns:
            Rows with a player, belonging to the team, with real minutes
        """
        return [
            row
            for row in rows
            if row.player is not None
            and row.team is not None
            and row.team.id == team_id
            and not row.did_not_play
        ]

    @staticmethod
    def fold(rows: Iterable[BoxScoreRow]) -> dict[int, PlayerSeasonTotals]:
        """Sum rows into per-player totals.

        Players appear in the order their first row was seen. Rows are
        expected to be filtered already; rows without a player are ignored.
        """
        totals: dict[int, PlayerSeasonTotals] = {}
        for row in rows:
            if row.player is None:
                continue
            entry = totals.get(row.player.id)
            if entry is None:
                entry = totals[row.player.id] = PlayerSeasonTotals(player=row.player)
            entry.add(row)
        return totals

    async def _fetch_chunk(self, game_ids: list[int]) -> list[BoxScoreRow]:
        rows = await self.api.get_box_scores(game_ids)
        return self.filter_rows(rows, self.team_id)

    async def fetch_rows(self, game_ids: Sequence[int]) -> list[BoxScoreRow]:
        """Fetch filtered rows for all games, chunk by chunk."""
        return await fetch_in_chunks(
            game_ids,
            self._fetch_chunk,
            chunk_size=self.chunk_size,
            delay=self.delay,
        )

    async def aggregate(self, finished_game_ids: Sequence[int]) -> dict[int, PlayerSeasonTotals]:
        """Season totals per player id for the given finished games."""
        if not finished_game_ids:
            logger.info("No finished games for team %d, nothing to aggregate", self.team_id)
            return {}

        rows = await self.fetch_rows(finished_game_ids)
        totals = self.fold(rows)
        logger.info(
            "Aggregated %d rows from %d games into %d players",
            len(rows), len(finished_game_ids), len(totals),
        )
        return totals

    async def fetch_game_box_score(self, game_id: int) -> list[BoxScoreRow]:
        """Rows of the tracked team for one game, highest scorer first."""
        rows = self.filter_rows(await self.api.get_box_scores([game_id]), self.team_id)
        return sorted(rows, key=lambda r: (-r.pts, r.player.id))
