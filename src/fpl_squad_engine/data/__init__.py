"""
Data Models and Input Processing.

Contains Pydantic models for FPL entities, derived analysis records, and
the processors that turn raw API payloads into typed models.
"""

from .models import (
    NEUTRAL_FDR,
    Fixture,
    FixtureDetail,
    FixtureWindow,
    Player,
    PlayerStatus,
    Position,
    ScoredPlayer,
    Team,
    round_half_up,
)
from .processors import (
    current_gameweek_from_events,
    process_fixtures,
    process_players,
    process_teams,
    require_list,
    safe_float,
    safe_int,
)

__all__ = [
    # Models
    "Player",
    "PlayerStatus",
    "Position",
    "Team",
    "Fixture",
    "FixtureDetail",
    "FixtureWindow",
    "ScoredPlayer",
    "NEUTRAL_FDR",
    "round_half_up",
    # Processors
    "process_players",
    "process_teams",
    "process_fixtures",
    "current_gameweek_from_events",
    "require_list",
    "safe_float",
    "safe_int",
]
