"""
BallDontLie NBA API client.

Provides access to games, box scores and standings
via the BallDontLie API (https://api.balldontlie.io).
"""

import logging
from typing import Any, Iterable, Optional, Sequence, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from ..core.config import Settings
from ..core.http import BaseApiClient, InvalidResponseError
from ..core.models import BoxScoreRow, Game, Standing
from .pagination import CursorPager

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_records(model: Type[ModelT], records: Iterable[Any], path: str) -> list[ModelT]:
    """Validate raw records, raising InvalidResponseError on a malformed one."""
    try:
        return [model.model_validate(record) for record in records]
    except ValidationError as e:
        logger.warning("Malformed %s record from %s: %s", model.__name__, path, e)
        raise InvalidResponseError(f"Malformed {model.__name__} record from {path}") from e


class BallDontLieNBA(BaseApiClient):
    """BallDontLie NBA API client."""

    BASE_URL = "https://api.balldontlie.io/v1"

    def __init__(
        self,
        api_key: Optional[str],
        *,
        base_url: str | None = None,
        auth_scheme: str = "",
        requests_per_minute: Optional[int] = 600,
        timeout: float = 30.0,
        per_page: int = 100,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(
            api_key,
            base_url=base_url,
            auth_scheme=auth_scheme,
            requests_per_minute=requests_per_minute,
            timeout=timeout,
            transport=transport,
        )
        self.per_page = per_page

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        api_key: Optional[str] = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "BallDontLieNBA":
        return cls(
            api_key if api_key is not None else settings.balldontlie_api_key,
            base_url=settings.api_base_url,
            auth_scheme=settings.auth_scheme,
            requests_per_minute=settings.requests_per_minute,
            timeout=settings.request_timeout,
            per_page=settings.page_size,
            transport=transport,
        )

    def _pager(self, path: str, params: dict[str, Any]) -> CursorPager:
        async def fetch_page(page_params: dict[str, Any]) -> dict[str, Any]:
            return await self.fetch_json(path, page_params)

        return CursorPager(fetch_page, {**params, "per_page": self.per_page})

    # =========================================================================
    # Games
    # =========================================================================

    def iter_team_games(self, team_id: int, season: int) -> CursorPager:
        """Iterate raw game records for one team and season (all pages)."""
        return self._pager("/games", {"team_ids[]": [team_id], "seasons[]": [season]})

    async def get_team_games(self, team_id: int, season: int) -> list[Game]:
        """Get every game of a team's season."""
        records = await self.iter_team_games(team_id, season).collect()
        logger.debug("Fetched %d games for team %d season %d", len(records), team_id, season)
        return parse_records(Game, records, "/games")

    # =========================================================================
    # Box Scores
    # =========================================================================

    async def get_box_scores(self, game_ids: Sequence[int]) -> list[BoxScoreRow]:
        """Get every player stat line for the given games."""
        if not game_ids:
            return []
        records = await self._pager("/stats", {"game_ids[]": list(game_ids)}).collect()
        return parse_records(BoxScoreRow, records, "/stats")

    # =========================================================================
    # Standings
    # =========================================================================

    async def get_standings(self, season: int) -> list[Standing]:
        """Get league standings for a season."""
        response = await self.fetch_json("/standings", {"season": season})
        rows = response.get("data") or []
        if not isinstance(rows, list):
            raise InvalidResponseError("Standings data is not a list")
        return parse_records(Standing, rows, "/standings")
