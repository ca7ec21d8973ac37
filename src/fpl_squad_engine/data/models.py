"""
Data models for the squad engine.

Reference data (teams, fixtures, players) are Pydantic models built once at
the input boundary. Derived analysis records (fixture windows, scored
players) are frozen dataclasses created fresh on every run.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum, StrEnum

from pydantic import BaseModel, ConfigDict, Field, computed_field

# Neutral rating used when a team has no upcoming fixtures
NEUTRAL_FDR = 3.0

# Fixture difficulty thresholds
EASY_FDR = 2
HARD_FDR = 4


class Position(IntEnum):
    """Player positions in FPL (matches FPL element_type)."""

    GK = 1
    DEF = 2
    MID = 3
    FWD = 4


class PlayerStatus(StrEnum):
    """Player availability status."""

    AVAILABLE = "a"
    DOUBTFUL = "d"
    INJURED = "i"
    UNAVAILABLE = "u"
    NOT_AVAILABLE = "n"
    SUSPENDED = "s"


def round_half_up(value: float, digits: int = 1) -> float:
    """Round with halves going up (1.25 -> 1.3, -1.25 -> -1.2)."""
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


# =============================================================================
# Reference Data
# =============================================================================


class Team(BaseModel):
    """Represents a Premier League team."""

    id: int = Field(description="FPL team ID")
    name: str = Field(default="", description="Full team name")
    short_name: str = Field(description="3-letter abbreviation")
    strength_attack_home: int = Field(default=0)
    strength_attack_away: int = Field(default=0)
    strength_defence_home: int = Field(default=0)
    strength_defence_away: int = Field(default=0)

    model_config = ConfigDict(frozen=True)


class Fixture(BaseModel):
    """Represents a Premier League fixture."""

    id: int = Field(default=0, description="Fixture ID")
    gameweek: int = Field(description="Gameweek number (0 if unscheduled)")
    home_team_id: int = Field(description="Home team ID")
    away_team_id: int = Field(description="Away team ID")
    home_difficulty: int = Field(default=3, ge=1, le=5, description="FDR for home team")
    away_difficulty: int = Field(default=3, ge=1, le=5, description="FDR for away team")
    kickoff_time: datetime | None = Field(default=None, description="Match kickoff time")
    finished: bool = Field(default=False, description="Has the match finished")

    model_config = ConfigDict(frozen=True)

    def involves(self, team_id: int) -> bool:
        return team_id in (self.home_team_id, self.away_team_id)

    def difficulty_for(self, team_id: int) -> int:
        """FDR from the given team's side of the fixture."""
        return self.home_difficulty if self.home_team_id == team_id else self.away_difficulty


class Player(BaseModel):
    """Represents a Premier League player in FPL."""

    id: int = Field(description="FPL element ID")
    web_name: str = Field(default="", description="Short name shown in FPL")
    team_id: int = Field(description="Premier League team ID")
    position: Position = Field(description="Playing position")
    now_cost: int = Field(ge=0, description="Price in tenths of a million (100 = £10.0m)")
    status: PlayerStatus = Field(
        default=PlayerStatus.AVAILABLE, description="Availability status"
    )
    news: str = Field(default="", description="Injury/suspension news")
    chance_of_playing_this_round: int | None = Field(
        default=None, description="Chance of playing this round (0-100)"
    )

    # Stats
    total_points: int = Field(default=0, description="Total FPL points this season")
    form: float = Field(default=0.0, description="Recent form rating")
    minutes: int = Field(default=0)
    expected_goals: float = Field(default=0.0, description="Cumulative xG this season")
    expected_assists: float = Field(default=0.0, description="Cumulative xA this season")

    model_config = ConfigDict(frozen=True)

    @computed_field
    @property
    def price(self) -> float:
        """Current price in millions."""
        return self.now_cost / 10.0

    @computed_field
    @property
    def position_name(self) -> str:
        """Human-readable position name."""
        return self.position.name

    @computed_field
    @property
    def expected_involvement(self) -> float:
        """xG + xA."""
        return self.expected_goals + self.expected_assists


# =============================================================================
# Derived Analysis Records
# =============================================================================


@dataclass(frozen=True)
class FixtureDetail:
    """Single upcoming fixture from one team's point of view."""

    gameweek: int
    opponent_id: int
    opponent_name: str
    is_home: bool
    fdr: int  # Fixture Difficulty Rating 1-5


@dataclass(frozen=True)
class FixtureWindow:
    """
    Rolling fixture difficulty summary for one team.

    ``is_default`` marks a window with no fixtures, whose ``avg_fdr`` is the
    neutral 3.0 rather than a measured value.
    """

    team_id: int
    team_short_name: str
    fixtures: tuple[FixtureDetail, ...] = ()
    avg_fdr: float = NEUTRAL_FDR
    easy_run: int = 0
    hard_run: int = 0
    is_default: bool = False

    @property
    def fdr_list(self) -> list[int]:
        return [f.fdr for f in self.fixtures]

    @property
    def next_opponent(self) -> str:
        return self.fixtures[0].opponent_name if self.fixtures else "TBC"

    def fixture_in(self, gameweek: int) -> FixtureDetail | None:
        """First fixture in the given gameweek, if any."""
        return next((f for f in self.fixtures if f.gameweek == gameweek), None)


@dataclass(frozen=True)
class ScoredPlayer:
    """A player enriched with the engine's valuation."""

    player: Player
    fixture_window: FixtureWindow
    overall_score: float
    availability_risk: int  # 0 (fit) to 5 (unavailable)
    price_per_point: float
    form_score: float
    expected_score: float  # xG + xA
    score_breakdown: dict[str, float] = field(default_factory=dict, compare=False)

    @property
    def id(self) -> int:
        return self.player.id

    @property
    def web_name(self) -> str:
        return self.player.web_name

    @property
    def position(self) -> Position:
        return self.player.position

    @property
    def team_id(self) -> int:
        return self.player.team_id

    @property
    def price(self) -> float:
        return self.player.price

    @property
    def now_cost(self) -> int:
        return self.player.now_cost

    @property
    def total_points(self) -> int:
        return self.player.total_points

    @property
    def team_short_name(self) -> str:
        return self.fixture_window.team_short_name
