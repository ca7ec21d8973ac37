"""
Player Valuation Module.

Scores each player with a transparent additive formula. Every term is a
separate function so each weight can be tuned and tested on its own.

    score = base + form + expected + fixture + value + reliability + position

Availability risk is reported alongside the score but never folded into it.
"""

import logging
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field

from ..data.models import (
    NEUTRAL_FDR,
    FixtureWindow,
    Player,
    PlayerStatus,
    Position,
    ScoredPlayer,
    round_half_up,
)

logger = logging.getLogger(__name__)

# Sentinel price-per-point for players without positive points
NO_POINTS_PRICE_PER_POINT = 999.0

# Chance-of-playing percentage -> availability risk
CHANCE_RISK = {
    0: 4,
    25: 3,
    50: 2,
    75: 1,
}


class ScoringWeights(BaseModel):
    """Weights of the additive player score."""

    points: float = Field(default=0.4, description="Per season point")
    form: float = Field(default=4.0, description="Per unit of form")
    xg: float = Field(default=4.0, description="Goal value of 1 xG")
    xa: float = Field(default=3.0, description="Assist value of 1 xA")
    expected_scale: float = Field(default=2.5, description="Scale for xG/xA value")
    fixture: float = Field(default=2.0, description="Per FDR point below 5")
    value: float = Field(default=0.5, description="Per point per million")
    reliability: float = Field(default=5.0, description="Max minutes reliability")
    reliability_minutes: int = Field(default=180, gt=0, description="Minutes for full reliability")
    gk_fixture: float = Field(default=1.5, description="GK clean sheet bonus per FDR point")
    def_fixture: float = Field(default=1.2, description="DEF clean sheet bonus per FDR point")
    fwd_xg: float = Field(default=2.0, description="FWD extra goal potential per xG")

    model_config = ConfigDict(frozen=True)


DEFAULT_WEIGHTS = ScoringWeights()


@dataclass(frozen=True)
class ScoreBreakdown:
    """Individual contributions to a player's overall score."""

    base: float
    form: float
    expected: float
    fixture: float
    value: float
    reliability: float
    position: float

    @property
    def total(self) -> float:
        """Sum of all terms rounded to one decimal."""
        return round_half_up(
            self.base + self.form + self.expected + self.fixture
            + self.value + self.reliability + self.position
        )

    def as_dict(self) -> dict[str, float]:
        return {
            "base": self.base,
            "form": self.form,
            "expected": self.expected,
            "fixture": self.fixture,
            "value": self.value,
            "reliability": self.reliability,
            "position": self.position,
        }


# =============================================================================
# Score Terms
# =============================================================================


def base_points_term(player: Player, weights: ScoringWeights = DEFAULT_WEIGHTS) -> float:
    return player.total_points * weights.points


def form_term(player: Player, weights: ScoringWeights = DEFAULT_WEIGHTS) -> float:
    return player.form * weights.form


def expected_term(player: Player, weights: ScoringWeights = DEFAULT_WEIGHTS) -> float:
    """FPL-style value of xG and xA."""
    return (
        player.expected_goals * weights.xg + player.expected_assists * weights.xa
    ) * weights.expected_scale


def fixture_ease(avg_fdr: float) -> float:
    """How far below the hardest rating the schedule sits (never negative)."""
    return max(0.0, 5 - avg_fdr)


def fixture_term(avg_fdr: float, weights: ScoringWeights = DEFAULT_WEIGHTS) -> float:
    return fixture_ease(avg_fdr) * weights.fixture


def points_per_million(player: Player) -> float:
    if player.total_points <= 0 or player.price <= 0:
        return 0.0
    return player.total_points / player.price


def value_term(player: Player, weights: ScoringWeights = DEFAULT_WEIGHTS) -> float:
    return points_per_million(player) * weights.value


def reliability_term(player: Player, weights: ScoringWeights = DEFAULT_WEIGHTS) -> float:
    """Minutes played, capped at two full matches."""
    minutes = max(0, player.minutes)
    return min(1.0, minutes / weights.reliability_minutes) * weights.reliability


def position_term(
    player: Player,
    avg_fdr: float,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> float:
    """Position-specific bonus; midfielders get none."""
    if player.position == Position.GK:
        return fixture_ease(avg_fdr) * weights.gk_fixture
    if player.position == Position.DEF:
        return fixture_ease(avg_fdr) * weights.def_fixture
    if player.position == Position.FWD:
        return player.expected_goals * weights.fwd_xg
    return 0.0


def availability_risk(player: Player) -> int:
    """
    Discrete availability risk from 0 (fit) to 5 (unavailable).

    Checked top to bottom, first match wins:
    unavailable status, chance of playing 0/25/50/75%, any news.
    """
    if player.status == PlayerStatus.UNAVAILABLE:
        return 5
    chance = player.chance_of_playing_this_round
    if chance is not None and chance in CHANCE_RISK:
        return CHANCE_RISK[chance]
    if player.news and player.news.strip():
        return 1
    return 0


def price_per_point(player: Player) -> float:
    if player.total_points > 0:
        return player.price / player.total_points
    return NO_POINTS_PRICE_PER_POINT


# =============================================================================
# Scorer
# =============================================================================


class PlayerScorer:
    """Turns raw players into ScoredPlayers."""

    def __init__(self, weights: ScoringWeights | None = None):
        self.weights = weights or DEFAULT_WEIGHTS

    def breakdown(self, player: Player, window: FixtureWindow) -> ScoreBreakdown:
        """Compute every score term for a player."""
        w = self.weights
        return ScoreBreakdown(
            base=base_points_term(player, w),
            form=form_term(player, w),
            expected=expected_term(player, w),
            fixture=fixture_term(window.avg_fdr, w),
            value=value_term(player, w),
            reliability=reliability_term(player, w),
            position=position_term(player, window.avg_fdr, w),
        )

    def score(self, player: Player, window: FixtureWindow) -> ScoredPlayer:
        """
        Score a single player against their club's fixture window.

        Args:
            player: Player to score
            window: Fixture window of the player's club

        Returns:
            ScoredPlayer with overall score rounded to one decimal
        """
        parts = self.breakdown(player, window)
        return ScoredPlayer(
            player=player,
            fixture_window=window,
            overall_score=parts.total,
            availability_risk=availability_risk(player),
            price_per_point=price_per_point(player),
            form_score=player.form,
            expected_score=player.expected_involvement,
            score_breakdown=parts.as_dict(),
        )

    def score_all(
        self,
        players: list[Player],
        windows: dict[int, FixtureWindow],
    ) -> list[ScoredPlayer]:
        """
        Score every player, in input order.

        A player whose club has no window gets the neutral default window.
        """
        scored = []
        for player in players:
            window = windows.get(player.team_id)
            if window is None:
                logger.debug(f"No fixture window for team {player.team_id}")
                window = FixtureWindow(
                    team_id=player.team_id,
                    team_short_name="???",
                    avg_fdr=NEUTRAL_FDR,
                    is_default=True,
                )
            scored.append(self.score(player, window))

        logger.info(f"Scored {len(scored)} players")
        return scored
