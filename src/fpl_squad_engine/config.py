"""
Configuration management for the squad engine using pydantic-settings.

Squad constraints are an explicit value passed into every optimizer and
pipeline call. Environment-backed settings only supply their defaults.
"""

from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import InvalidConstraintsError
from .optimizer.constraints import (
    DEFAULT_BUDGET,
    DEFAULT_FIXTURE_WINDOW,
    DEFAULT_MAX_PER_TEAM,
    SquadConstraints,
)


class EngineSettings(BaseSettings):
    """Valuation and optimization engine settings."""

    fixture_window: int = Field(
        default=DEFAULT_FIXTURE_WINDOW,
        ge=1,
        le=38,
        description="Number of upcoming gameweeks in each fixture window",
    )
    budget: float = Field(default=DEFAULT_BUDGET, ge=0, description="Squad budget")
    max_per_team: int = Field(
        default=DEFAULT_MAX_PER_TEAM, ge=1, description="Max players per club"
    )
    max_risk: int = Field(
        default=3,
        ge=1,
        le=6,
        description="Players at or above this availability risk are excluded",
    )
    captain_count: int = Field(
        default=3, ge=1, description="Number of captain candidates to return"
    )
    strategy: Literal["greedy", "optimal"] = Field(
        default="greedy", description="Squad selection strategy"
    )
    solver_time_limit: int = Field(
        default=60, ge=1, le=300, description="ILP solver time limit in seconds"
    )

    model_config = SettingsConfigDict(env_prefix="ENGINE_")

    def __init__(self, **values: Any):
        try:
            super().__init__(**values)
        except ValidationError as e:
            raise InvalidConstraintsError(f"Invalid engine settings: {e}") from e

    def to_constraints(self) -> SquadConstraints:
        """Build squad constraints from these settings."""
        return SquadConstraints(budget=self.budget, max_per_team=self.max_per_team)


class AppSettings(BaseSettings):
    """General application settings."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging level"
    )

    model_config = SettingsConfigDict(env_prefix="")


class Settings(BaseSettings):
    """Main settings class combining all configuration sections."""

    engine: EngineSettings = Field(default_factory=EngineSettings)
    app: AppSettings = Field(default_factory=AppSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload settings.
    """
    from dotenv import load_dotenv

    env_paths = [
        Path(".env"),
        Path(__file__).parent.parent.parent / ".env",
    ]

    for env_path in env_paths:
        if env_path.exists():
            load_dotenv(env_path, override=True)
            break

    return Settings()
