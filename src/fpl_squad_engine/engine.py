"""
Analysis Pipeline.

Runs one full pass over an already-fetched dataset:

    fixtures -> windows -> player scores -> filtered pool -> squad -> captains

Each run takes fresh inputs and returns fresh outputs; nothing is cached.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from .analysis.fixtures import FixtureDifficultyAnalyzer
from .analysis.report import (
    GameweekOutlook,
    RiskAssessment,
    TransferSuggestion,
    assess_risk,
    find_alternatives,
    fixture_strength,
    gameweek_outlook,
    suggest_transfers,
)
from .analysis.scoring import PlayerScorer, ScoringWeights
from .config import EngineSettings
from .data.models import FixtureWindow, PlayerStatus, Position, ScoredPlayer, round_half_up
from .data.processors import (
    current_gameweek_from_events,
    process_fixtures,
    process_players,
    process_teams,
    require_list,
)
from .exceptions import InputFormatError
from .optimizer.captaincy import CaptainCandidate, CaptainSelector
from .optimizer.constraints import SquadConstraints
from .optimizer.model import SquadOptimizer
from .optimizer.squad import Squad
from .optimizer.strategies import OptimalStrategy, SelectionStrategy, get_strategy

logger = logging.getLogger(__name__)


@dataclass
class AnalysisResult:
    """Everything produced by one analysis run."""

    current_gameweek: int
    fixture_window: int
    windows: dict[int, FixtureWindow]
    scored_players: list[ScoredPlayer]
    pool: list[ScoredPlayer]
    squad: Squad
    captains: list[CaptainCandidate]
    alternatives: dict[Position, list[ScoredPlayer]] = field(default_factory=dict)
    outlook: list[GameweekOutlook] = field(default_factory=list)
    transfers: list[TransferSuggestion] = field(default_factory=list)
    risk: RiskAssessment | None = None
    fixture_strength: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Plain JSON-friendly representation."""
        return {
            "current_gameweek": self.current_gameweek,
            "players_analyzed": len(self.pool),
            "squad": [_player_dict(p) for p in self.squad.players],
            "summary": self.squad.summary(),
            "fixture_strength": self.fixture_strength,
            "captain_options": [
                {
                    "name": c.player.web_name,
                    "team": c.player.team_short_name,
                    "form": c.player.form_score,
                    "next_fixture": c.next_fixture,
                    "expected_points": c.expected_points,
                    "captain_score": c.captain_score,
                    "reasoning": c.reasoning,
                }
                for c in self.captains
            ],
            "alternatives": {
                pos.name: [_player_dict(p) for p in players]
                for pos, players in self.alternatives.items()
            },
            "gameweeks": [
                {
                    "gameweek": gw.gameweek,
                    "total_expected": gw.total_expected,
                    "average_difficulty": gw.average_difficulty,
                    "best_fixtures": gw.best_fixtures,
                    "worst_fixtures": gw.worst_fixtures,
                }
                for gw in self.outlook
            ],
            "transfer_suggestions": [
                {
                    "out": t.out.name,
                    "out_reason": t.out.reason,
                    "in": t.into.name,
                    "in_reason": t.into.reason,
                    "cost_diff": t.cost_diff,
                    "priority": t.priority,
                }
                for t in self.transfers
            ],
            "risk": {
                "level": self.risk.level,
                "injury_risk": self.risk.injury_risk,
                "fixture_risk": self.risk.fixture_risk,
                "form_risk": self.risk.form_risk,
                "team_concentration": self.risk.team_concentration,
                "recommendations": self.risk.recommendations,
            } if self.risk else None,
        }


def _player_dict(player: ScoredPlayer) -> dict[str, Any]:
    return {
        "id": player.id,
        "name": player.web_name,
        "position": player.position.name,
        "team": player.team_short_name,
        "price": player.price,
        "points": player.total_points,
        "form": player.form_score,
        "score": player.overall_score,
        "avg_fdr": player.fixture_window.avg_fdr,
        "risk": player.availability_risk,
    }


def filter_pool(scored: Sequence[ScoredPlayer], max_risk: int = 3) -> list[ScoredPlayer]:
    """
    Drop players who should never be picked.

    Excludes unavailable players, anyone at or above max_risk, and players
    with negative season points.
    """
    return [
        p for p in scored
        if p.player.status != PlayerStatus.UNAVAILABLE
        and p.availability_risk < max_risk
        and p.total_points >= 0
    ]


def build_strategy(settings: EngineSettings) -> SelectionStrategy:
    """Strategy named in the settings; only the ILP takes a time limit."""
    if settings.strategy == OptimalStrategy.name:
        return get_strategy(settings.strategy, time_limit=settings.solver_time_limit)
    return get_strategy(settings.strategy)


def run_analysis(
    teams: list[dict[str, Any]],
    fixtures: list[dict[str, Any]],
    players: list[dict[str, Any]],
    current_gameweek: int,
    settings: EngineSettings | None = None,
    constraints: SquadConstraints | None = None,
    weights: ScoringWeights | None = None,
    strategy: SelectionStrategy | None = None,
) -> AnalysisResult:
    """
    Run the full valuation and selection pipeline on raw records.

    Args:
        teams: Raw team records (bootstrap-static 'teams')
        fixtures: Raw fixture records
        players: Raw player records (bootstrap-static 'elements')
        current_gameweek: First gameweek of every fixture window
        settings: Engine settings (defaults when None)
        constraints: Squad rules (built from settings when None)
        weights: Scoring weights (defaults when None)
        strategy: Selection strategy (from settings when None)

    Returns:
        AnalysisResult

    Raises:
        InputFormatError: If any top-level input is not a list
        InvalidConstraintsError: If settings or constraints are inconsistent
    """
    for value, name in ((teams, "teams"), (fixtures, "fixtures"), (players, "players")):
        require_list(value, name)

    settings = settings or EngineSettings()
    constraints = constraints or settings.to_constraints()
    strategy = strategy or build_strategy(settings)

    team_models = process_teams(teams)
    fixture_models = process_fixtures(fixtures)
    player_models = process_players(players)

    analyzer = FixtureDifficultyAnalyzer(team_models, fixture_models)
    windows = analyzer.analyze(current_gameweek, settings.fixture_window)

    scored = PlayerScorer(weights).score_all(player_models, windows)
    pool = filter_pool(scored, settings.max_risk)
    logger.info(f"{len(pool)} available players after filtering")

    squad = SquadOptimizer(strategy).optimize(pool, constraints)
    captains = CaptainSelector(settings.captain_count).select(squad)

    result = AnalysisResult(
        current_gameweek=current_gameweek,
        fixture_window=settings.fixture_window,
        windows=windows,
        scored_players=scored,
        pool=pool,
        squad=squad,
        captains=captains,
        alternatives=find_alternatives(pool, squad),
        outlook=gameweek_outlook(squad),
        transfers=suggest_transfers(squad, pool),
        risk=assess_risk(squad),
        fixture_strength=fixture_strength(squad),
    )
    logger.info(
        f"Analysis complete for GW{current_gameweek}: "
        f"{len(squad)} players, average form {round_half_up(squad.average_form, 2)}"
    )
    return result


def analyze_bootstrap(
    bootstrap: dict[str, Any],
    fixtures: list[dict[str, Any]],
    current_gameweek: int | None = None,
    **kwargs: Any,
) -> AnalysisResult:
    """
    Run the pipeline on a bootstrap-static payload and a fixtures payload.

    The current gameweek comes from the payload's events unless given.
    """
    if not isinstance(bootstrap, dict):
        raise InputFormatError(
            f"Expected bootstrap-static object, got {type(bootstrap).__name__}"
        )
    if current_gameweek is None:
        current_gameweek = current_gameweek_from_events(bootstrap.get("events", []))

    return run_analysis(
        teams=bootstrap.get("teams", []),
        fixtures=fixtures,
        players=bootstrap.get("elements", []),
        current_gameweek=current_gameweek,
        **kwargs,
    )
