"""
Captaincy Ranking.

Ranks the squad's midfielders and forwards for the armband and attaches
rule-based reasons. The reasons explain a pick; they never change its score.
"""

import logging
from dataclasses import dataclass, field

from ..data.models import Position, ScoredPlayer, round_half_up
from ..exceptions import InvalidConstraintsError
from .squad import Squad

logger = logging.getLogger(__name__)

CAPTAIN_POSITIONS = (Position.MID, Position.FWD)
DEFAULT_CAPTAIN_COUNT = 3

# Reason thresholds
EXCELLENT_FORM = 6.0
GREAT_FIXTURES_FDR = 2.5
HIGH_EXPECTED = 1.0
LONG_EASY_RUN = 3


@dataclass(frozen=True)
class CaptainCandidate:
    """A captaincy option drawn from the squad."""

    player: ScoredPlayer
    captain_score: float
    reasons: list[str] = field(default_factory=list, compare=False)

    @property
    def reasoning(self) -> str:
        return ", ".join(self.reasons)

    @property
    def next_fixture(self) -> str:
        return self.player.fixture_window.next_opponent

    @property
    def expected_points(self) -> float:
        return round_half_up(self.player.expected_score)


def captain_score(player: ScoredPlayer) -> float:
    """Form plus fixture ease plus double-weighted expected involvement."""
    return (
        player.form_score
        + (5 - player.fixture_window.avg_fdr)
        + player.expected_score * 2
    )


def captain_reasons(player: ScoredPlayer) -> list[str]:
    """Every rule that applies, in a fixed order."""
    reasons = []
    window = player.fixture_window

    if player.form_score >= EXCELLENT_FORM:
        reasons.append(f"Excellent form ({player.form_score:g})")
    if window.avg_fdr <= GREAT_FIXTURES_FDR:
        reasons.append("Great fixtures")
    if player.expected_score >= HIGH_EXPECTED:
        reasons.append("High expected returns")
    if window.easy_run >= LONG_EASY_RUN:
        reasons.append(f"{window.easy_run} game easy run")

    return reasons or ["Consistent performer"]


class CaptainSelector:
    """Picks the top captaincy options from a finished squad."""

    def __init__(self, top_n: int = DEFAULT_CAPTAIN_COUNT):
        """
        Raises:
            InvalidConstraintsError: If top_n is less than 1
        """
        if top_n < 1:
            raise InvalidConstraintsError(f"Captain count must be at least 1, got {top_n}")
        self.top_n = top_n

    def select(self, squad: Squad) -> list[CaptainCandidate]:
        """
        Rank MID/FWD squad members by captain score.

        Ties keep squad order (the sort is stable).

        Returns:
            At most top_n candidates, best first
        """
        eligible = [p for p in squad.players if p.position in CAPTAIN_POSITIONS]
        ranked = sorted(eligible, key=captain_score, reverse=True)

        candidates = [
            CaptainCandidate(
                player=p,
                captain_score=round_half_up(captain_score(p), 2),
                reasons=captain_reasons(p),
            )
            for p in ranked[: self.top_n]
        ]

        if candidates:
            logger.info(
                f"Top captain: {candidates[0].player.web_name} "
                f"({candidates[0].captain_score:.2f})"
            )
        return candidates
