"""
Core constants for the season stats pipeline.

Stat keys follow the BallDontLie /stats payload so rows can be validated
without a mapping layer.
"""

from enum import Enum

# Per-game counting stats that are summed per player and averaged per game.
COUNTING_STATS: tuple[str, ...] = ("pts", "reb", "ast", "stl", "blk", "turnover")

# Made/attempted pairs that are summed but only surfaced as percentages.
SHOT_STATS: tuple[str, ...] = ("fgm", "fga", "fg3m", "fg3a", "ftm", "fta")

# Status value the API uses for a completed game.
FINAL_STATUS = "Final"

# Minutes values meaning the player did not take the floor.
DID_NOT_PLAY_MINUTES = frozenset({"", "0", "00"})


class ShootingSplit(str, Enum):
    """Shooting percentages, each backed by a made/attempted pair."""

    FG = "fg"
    FG3 = "fg3"
    FT = "ft"

    @property
    def made(self) -> str:
        return f"{self.value}m"

    @property
    def attempted(self) -> str:
        return f"{self.value}a"

    @property
    def pct_key(self) -> str:
        return f"{self.value}_pct"
