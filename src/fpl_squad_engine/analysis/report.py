"""
Squad Report Module.

Read-only views over a finished squad: bench alternatives, a per-gameweek
outlook, transfer suggestions and a risk assessment.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from ..data.models import (
    EASY_FDR,
    HARD_FDR,
    FixtureDetail,
    Position,
    ScoredPlayer,
    round_half_up,
)
from ..optimizer.constraints import POSITION_ORDER
from ..optimizer.squad import Squad
from ..optimizer.strategies import rank_key

logger = logging.getLogger(__name__)

# Transfer suggestion limits
MAX_UNDERPERFORMERS = 3
REPLACEMENTS_PER_PLAYER = 2
MAX_SUGGESTIONS = 5
MAX_EXTRA_COST = 5  # tenths, i.e. £0.5m

POOR_FORM = 3.0
TOUGH_FDR = 4.0


@dataclass
class GameweekEntry:
    """One squad player's fixture in a gameweek."""

    player_id: int
    name: str
    team: str
    opponent: str
    difficulty: int  # 0 when the player's club has no fixture
    is_home: bool | None
    expected_points: float


@dataclass
class GameweekOutlook:
    """Squad-wide view of a single upcoming gameweek."""

    gameweek: int
    total_expected: int
    average_difficulty: float
    best_fixtures: int
    worst_fixtures: int
    players: list[GameweekEntry] = field(default_factory=list)


@dataclass
class TransferSide:
    player_id: int
    name: str
    team: str
    price: float
    reason: str


@dataclass
class TransferSuggestion:
    """A like-for-like swap that raises the squad's score."""

    out: TransferSide
    into: TransferSide
    cost_diff: float
    priority: float


@dataclass
class RiskAssessment:
    """Squad-level risk counts and advice."""

    level: str  # "Low", "Medium" or "High"
    injury_risk: int
    fixture_risk: int
    form_risk: int
    team_concentration: int
    recommendations: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.injury_risk * 2 + self.fixture_risk + self.form_risk


# =============================================================================
# Alternatives
# =============================================================================


def find_alternatives(
    pool: Sequence[ScoredPlayer],
    squad: Squad,
    per_position: int = 5,
) -> dict[Position, list[ScoredPlayer]]:
    """
    Best players left out of the squad, per position.

    Args:
        pool: Eligible players
        squad: Selected squad
        per_position: How many alternatives to list per position

    Returns:
        Dict of Position -> players sorted by score
    """
    squad_ids = set(squad.player_ids)
    alternatives = {}
    for pos in POSITION_ORDER:
        others = [p for p in pool if p.position == pos and p.id not in squad_ids]
        alternatives[pos] = sorted(others, key=rank_key)[:per_position]
    return alternatives


# =============================================================================
# Gameweek Outlook
# =============================================================================


def expected_gameweek_points(player: ScoredPlayer, fixture: FixtureDetail) -> float:
    """
    Rough points estimate for one fixture.

    2 for playing, expected involvement scaled by fixture ease, half a
    point at home, and a clean sheet share for GK/DEF in easy fixtures.
    """
    expected = 2.0
    expected += player.expected_score * max(0.5, (5 - fixture.fdr) / 2)

    if fixture.is_home:
        expected += 0.5

    if player.position in (Position.GK, Position.DEF) and fixture.fdr <= EASY_FDR:
        expected += 4 * 0.3

    return round_half_up(expected)


def gameweek_outlook(squad: Squad) -> list[GameweekOutlook]:
    """
    Per-gameweek breakdown across every gameweek in the squad's windows.
    """
    gameweeks = sorted({
        f.gameweek for p in squad.players for f in p.fixture_window.fixtures
    })

    outlook = []
    for gw in gameweeks:
        entries = []
        for player in squad.players:
            fixture = player.fixture_window.fixture_in(gw)
            entries.append(GameweekEntry(
                player_id=player.id,
                name=player.web_name,
                team=player.team_short_name,
                opponent=fixture.opponent_name if fixture else "No fixture",
                difficulty=fixture.fdr if fixture else 0,
                is_home=fixture.is_home if fixture else None,
                expected_points=expected_gameweek_points(player, fixture) if fixture else 0.0,
            ))

        playing = [e for e in entries if e.difficulty > 0]
        outlook.append(GameweekOutlook(
            gameweek=gw,
            total_expected=int(round_half_up(sum(e.expected_points for e in entries), 0)),
            average_difficulty=round_half_up(
                sum(e.difficulty for e in entries) / len(entries)
            ),
            best_fixtures=sum(1 for e in playing if e.difficulty <= EASY_FDR),
            worst_fixtures=sum(1 for e in playing if e.difficulty >= HARD_FDR),
            players=entries,
        ))

    return outlook


# =============================================================================
# Transfers
# =============================================================================


def transfer_out_reason(player: ScoredPlayer) -> str:
    reasons = []
    if player.form_score < 2:
        reasons.append("Poor form")
    if player.fixture_window.avg_fdr >= TOUGH_FDR:
        reasons.append("Tough fixtures")
    if player.fixture_window.hard_run >= 3:
        reasons.append("Difficult run")
    if player.availability_risk >= 2:
        reasons.append("Injury concern")
    return ", ".join(reasons) or "Underperforming"


def transfer_in_reason(player: ScoredPlayer) -> str:
    reasons = []
    if player.form_score >= 6:
        reasons.append("Excellent form")
    if player.fixture_window.avg_fdr <= 2.5:
        reasons.append("Great fixtures")
    if player.fixture_window.easy_run >= 3:
        reasons.append("Easy run ahead")
    if player.price_per_point < 1:
        reasons.append("Great value")
    return ", ".join(reasons) or "Strong option"


def _side(player: ScoredPlayer, reason: str) -> TransferSide:
    return TransferSide(
        player_id=player.id,
        name=player.web_name,
        team=player.team_short_name,
        price=player.price,
        reason=reason,
    )


def suggest_transfers(
    squad: Squad,
    pool: Sequence[ScoredPlayer],
) -> list[TransferSuggestion]:
    """
    Suggest replacements for the weakest squad members.

    Only squad players in poor form or facing tough fixtures are considered.
    Replacements play the same position, cost at most £0.5m more, and score
    higher.

    Returns:
        Up to MAX_SUGGESTIONS suggestions, biggest score gain first
    """
    squad_ids = set(squad.player_ids)

    underperformers = sorted(
        (
            p for p in squad.players
            if p.form_score < POOR_FORM or p.fixture_window.avg_fdr >= TOUGH_FDR
        ),
        key=lambda p: (p.overall_score, p.id),
    )[:MAX_UNDERPERFORMERS]

    suggestions = []
    for player in underperformers:
        replacements = sorted(
            (
                p for p in pool
                if p.position == player.position
                and p.id not in squad_ids
                and p.now_cost <= player.now_cost + MAX_EXTRA_COST
                and p.overall_score > player.overall_score
            ),
            key=rank_key,
        )[:REPLACEMENTS_PER_PLAYER]

        for alt in replacements:
            suggestions.append(TransferSuggestion(
                out=_side(player, transfer_out_reason(player)),
                into=_side(alt, transfer_in_reason(alt)),
                cost_diff=(alt.now_cost - player.now_cost) / 10,
                priority=round_half_up(alt.overall_score - player.overall_score),
            ))

    suggestions.sort(key=lambda s: s.priority, reverse=True)
    logger.debug(f"Generated {len(suggestions)} transfer suggestions")
    return suggestions[:MAX_SUGGESTIONS]


# =============================================================================
# Risk
# =============================================================================


def assess_risk(squad: Squad) -> RiskAssessment:
    """Count injury, fixture, form and concentration risk in the squad."""
    players = squad.players
    club_counts = squad.club_counts

    assessment = RiskAssessment(
        level="Low",
        injury_risk=sum(1 for p in players if p.availability_risk >= 2),
        fixture_risk=sum(1 for p in players if p.fixture_window.avg_fdr >= TOUGH_FDR),
        form_risk=sum(1 for p in players if p.form_score < POOR_FORM),
        team_concentration=max(club_counts.values(), default=0),
    )

    total = assessment.total
    if total <= 3:
        assessment.level = "Low"
    elif total <= 6:
        assessment.level = "Medium"
    else:
        assessment.level = "High"

    if assessment.injury_risk >= 2:
        assessment.recommendations.append("Consider transferring injury-prone players")
    if assessment.fixture_risk >= 4:
        assessment.recommendations.append("Squad has many tough fixtures - plan ahead")
    if assessment.form_risk >= 3:
        assessment.recommendations.append("Multiple players in poor form - monitor closely")
    if assessment.team_concentration >= 3:
        assessment.recommendations.append("High team concentration - spread risk")

    return assessment


def fixture_strength(squad: Squad) -> int:
    """Squad schedule on a 0-100 scale (higher = easier)."""
    if not squad.players:
        return 0
    avg_fdr = sum(p.fixture_window.avg_fdr for p in squad.players) / len(squad.players)
    return int(round_half_up((5 - avg_fdr) * 20, 0))
