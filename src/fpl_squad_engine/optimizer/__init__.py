"""
Squad Optimization Engine.

Constrained squad selection (greedy by default, optional ILP) and
captaincy ranking.
"""

from .captaincy import (
    CaptainCandidate,
    CaptainSelector,
    captain_reasons,
    captain_score,
)
from .constraints import (
    DEFAULT_BUDGET,
    DEFAULT_MAX_PER_TEAM,
    DEFAULT_POSITION_QUOTAS,
    POSITION_ORDER,
    SquadConstraints,
    squad_violations,
)
from .model import SquadOptimizer
from .squad import Squad
from .strategies import (
    GreedyStrategy,
    OptimalStrategy,
    SelectionStrategy,
    get_strategy,
)

__all__ = [
    # Main classes
    "SquadOptimizer",
    "Squad",
    "SquadConstraints",
    "CaptainSelector",
    "CaptainCandidate",
    # Strategies
    "SelectionStrategy",
    "GreedyStrategy",
    "OptimalStrategy",
    "get_strategy",
    # Constants
    "DEFAULT_BUDGET",
    "DEFAULT_MAX_PER_TEAM",
    "DEFAULT_POSITION_QUOTAS",
    "POSITION_ORDER",
    # Utility functions
    "squad_violations",
    "captain_score",
    "captain_reasons",
]
