"""
Analysis Module.

Fixture difficulty windows, player valuation, and read-only squad reports.
"""

from .fixtures import (
    FixtureDifficultyAnalyzer,
    get_fdr_emoji,
    longest_runs,
)
from .report import (
    GameweekOutlook,
    RiskAssessment,
    TransferSuggestion,
    assess_risk,
    find_alternatives,
    fixture_strength,
    gameweek_outlook,
    suggest_transfers,
)
from .scoring import (
    PlayerScorer,
    ScoreBreakdown,
    ScoringWeights,
    availability_risk,
)

__all__ = [
    # Fixture windows
    "FixtureDifficultyAnalyzer",
    "longest_runs",
    "get_fdr_emoji",
    # Valuation
    "PlayerScorer",
    "ScoreBreakdown",
    "ScoringWeights",
    "availability_risk",
    # Reports
    "GameweekOutlook",
    "RiskAssessment",
    "TransferSuggestion",
    "assess_risk",
    "find_alternatives",
    "fixture_strength",
    "gameweek_outlook",
    "suggest_transfers",
]
