"""
Configuration management for the season stats pipeline.

Uses Pydantic settings for type-safe configuration with environment variable support.
All settings can be overridden via environment variables or a local .env file.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Pipeline settings with environment variable support.

    Example:
        BALLDONTLIE_API_KEY=... TEAM_ID=14 SEASON=2024 season-stats team
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ==========================================================================
    # BallDontLie API
    # ==========================================================================
    balldontlie_api_key: Optional[str] = Field(
        default=None,
        description="BallDontLie API key, sent in the Authorization header",
    )
    api_base_url: str = "https://api.balldontlie.io/v1"
    auth_scheme: str = Field(
        default="",
        description="Optional scheme prefix for the Authorization header (e.g. 'Bearer')",
    )
    request_timeout: float = Field(default=30.0, gt=0)
    requests_per_minute: Optional[int] = Field(
        default=600,
        ge=1,
        description="Client-side request ceiling; unset to disable",
    )
    page_size: int = Field(default=100, ge=1, le=100)

    # ==========================================================================
    # Tracked team / season
    # ==========================================================================
    team_id: int = 16
    team_name: str = Field(
        default="Miami Heat",
        description="Fallback for matching the team in standings rows",
    )
    season: int = 2025

    # ==========================================================================
    # Box score batching
    # ==========================================================================
    batch_chunk_size: int = Field(default=10, ge=1)
    batch_delay_seconds: float = Field(default=0.2, ge=0)

    # ==========================================================================
    # Views
    # ==========================================================================
    upcoming_limit: int = Field(default=5, ge=0)
    recent_limit: int = Field(default=10, ge=0)
    min_games_for_team_average: int = Field(default=5, ge=1)

    # ==========================================================================
    # Logging
    # ==========================================================================
    log_level: str = "INFO"

    @property
    def season_label(self) -> str:
        """NBA seasons span two years (e.g., 2025-26)."""
        return f"{self.season}-{(self.season + 1) % 100:02d}"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
