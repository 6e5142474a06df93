"""
Application configuration using Pydantic settings.

Every field can be overridden with a ``HARVEST_``-prefixed environment
variable (e.g. ``HARVEST_CACHE_TTL_MINUTES=10``) or a ``.env`` file.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="HARVEST_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="harvest-planner", description="Application name")
    app_env: str = Field(default="development", description="Deployment environment")
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )

    # Default caller location (Kansas City, roughly the middle of the catalog)
    lat: float = Field(default=39.1, ge=-90, le=90)
    lon: float = Field(default=-94.6, ge=-180, le=180)
    timezone: str = Field(
        default="America/Chicago",
        description="Timezone used to decide what 'today' is",
    )

    # Prediction engine
    cache_ttl_minutes: int = Field(
        default=30,
        gt=0,
        description="How long a computed prediction set stays valid",
    )
    approaching_days: int = Field(
        default=21,
        ge=0,
        description="Days before harvest start at which an item counts as approaching",
    )
    trailing_window_days: int = Field(
        default=14,
        gt=0,
        description="Days in the trailing average used to project GDD forward",
    )
    weather_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Per-request timeout for weather fetches",
    )
    max_workers: int = Field(
        default=8,
        gt=0,
        description="Concurrent weather fetches during a refresh",
    )
    data_dir: str = Field(default="data", description="Root of the on-disk data store")


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings (read once)."""
    return Settings()
