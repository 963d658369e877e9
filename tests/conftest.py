"""
Pytest configuration for season-stats tests.

Provides payload builders and an in-memory BallDontLie stand-in served through
httpx.MockTransport, so no test touches the network.
"""

from __future__ import annotations

import asyncio
from typing import Any, Optional

import httpx
import pytest

from season_stats.core.config import Settings
from season_stats.providers.balldontlie import BallDontLieNBA

TEAM_ID = 16

TEAMS = {
    16: {"id": 16, "abbreviation": "MIA", "city": "Miami", "name": "Heat", "full_name": "Miami Heat", "conference": "East"},
    2: {"id": 2, "abbreviation": "BOS", "city": "Boston", "name": "Celtics", "full_name": "Boston Celtics", "conference": "East"},
    20: {"id": 20, "abbreviation": "NYK", "city": "New York", "name": "Knicks", "full_name": "New York Knicks", "conference": "East"},
    14: {"id": 14, "abbreviation": "LAL", "city": "Los Angeles", "name": "Lakers", "full_name": "Los Angeles Lakers", "conference": "West"},
}


def make_game(
    game_id: int,
    date: str,
    *,
    home: int = TEAM_ID,
    visitor: int = 2,
    home_score: Optional[int] = 0,
    visitor_score: Optional[int] = 0,
    status: str = "Final",
) -> dict[str, Any]:
    return {
        "id": game_id,
        "date": date,
        "season": 2025,
        "status": status,
        "home_team": TEAMS[home],
        "home_team_score": home_score,
        "visitor_team": TEAMS[visitor],
        "visitor_team_score": visitor_score,
    }


def make_row(
    row_id: int,
    game_id: int,
    player_id: int,
    *,
    team_id: int = TEAM_ID,
    minutes: Any = "30",
    first_name: str = "Player",
    last_name: Optional[str] = None,
    position: str = "G",
    **stats: Any,
) -> dict[str, Any]:
    row = {
        "id": row_id,
        "min": minutes,
        "pts": 0, "reb": 0, "ast": 0, "stl": 0, "blk": 0, "turnover": 0,
        "fgm": 0, "fga": 0, "fg3m": 0, "fg3a": 0, "ftm": 0, "fta": 0,
        "player": {
            "id": player_id,
            "first_name": first_name,
            "last_name": last_name or str(player_id),
            "position": position,
        },
        "team": TEAMS[team_id],
        "game": {"id": game_id, "date": "2025-11-01", "season": 2025},
    }
    row.update(stats)
    return row


def paginate(records: list[dict[str, Any]], params: httpx.QueryParams) -> dict[str, Any]:
    """Offset-as-cursor pagination, like the real API's next_cursor meta."""
    offset = int(params.get("cursor") or 0)
    per_page = int(params.get("per_page") or 25)
    page = records[offset : offset + per_page]
    meta: dict[str, Any] = {"per_page": per_page}
    if offset + per_page < len(records):
        meta["next_cursor"] = offset + per_page
    return {"data": page, "meta": meta}


class FakeBallDontLie:
    """In-memory /games, /stats and /standings endpoints."""

    def __init__(self):
        self.games: list[dict[str, Any]] = []
        self.rows: list[dict[str, Any]] = []
        self.standings: list[dict[str, Any]] = []
        self.requests: list[httpx.Request] = []
        self.fail_paths: dict[str, int] = {}
        self.fail_game_ids: set[int] = set()
        self.bad_bodies: dict[str, str] = {}
        self.bad_body_game_ids: set[int] = set()
        self.games_gate: Optional[asyncio.Event] = None

    def paths(self) -> list[str]:
        return [r.url.path for r in self.requests]

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/v1")
        params = request.url.params

        if path in self.fail_paths:
            return httpx.Response(self.fail_paths[path], json={"error": "boom"})

        if path in self.bad_bodies:
            return httpx.Response(200, text=self.bad_bodies[path])

        if path == "/games":
            if self.games_gate is not None:
                gate, self.games_gate = self.games_gate, None
                await gate.wait()
            team_ids = {int(t) for t in params.get_list("team_ids[]")}
            games = [
                g for g in self.games
                if not team_ids or {g["home_team"]["id"], g["visitor_team"]["id"]} & team_ids
            ]
            return httpx.Response(200, json=paginate(games, params))

        if path == "/stats":
            game_ids = [int(g) for g in params.get_list("game_ids[]")]
            if self.fail_game_ids & set(game_ids):
                return httpx.Response(500, json={"error": "upstream"})
            if self.bad_body_game_ids & set(game_ids):
                return httpx.Response(200, text="not json")
            rows = [r for r in self.rows if r["game"]["id"] in game_ids]
            return httpx.Response(200, json=paginate(rows, params))

        if path == "/standings":
            return httpx.Response(200, json={"data": self.standings})

        return httpx.Response(404, json={"error": "not found"})


@pytest.fixture
def fake_api() -> FakeBallDontLie:
    return FakeBallDontLie()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        balldontlie_api_key="test-key",
        team_id=TEAM_ID,
        season=2025,
        batch_delay_seconds=0,
        requests_per_minute=None,
    )


@pytest.fixture
def api(fake_api: FakeBallDontLie) -> BallDontLieNBA:
    return BallDontLieNBA(
        "test-key",
        requests_per_minute=None,
        transport=httpx.MockTransport(fake_api.handler),
    )
