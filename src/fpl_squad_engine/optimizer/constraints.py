"""
FPL Squad Rules.

Holds the squad constraint model and encodes the same rules as linear
programming constraints for PuLP, plus a plain checker used to validate
any finished squad.
"""

from collections import Counter
from collections.abc import Sequence
from typing import Any

import pulp
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from ..data.models import Position, ScoredPlayer
from ..exceptions import InvalidConstraintsError

# =============================================================================
# Squad Composition Constants
# =============================================================================

# Position quotas: exact counts, not ranges
DEFAULT_POSITION_QUOTAS: dict[Position, int] = {
    Position.GK: 2,
    Position.DEF: 5,
    Position.MID: 5,
    Position.FWD: 3,
}

# Fill order for the greedy selection
POSITION_ORDER = (Position.GK, Position.DEF, Position.MID, Position.FWD)

DEFAULT_BUDGET = 100.0  # £100 million
DEFAULT_MAX_PER_TEAM = 3
DEFAULT_FIXTURE_WINDOW = 8

# Tolerance for float budget sums (prices are multiples of 0.1)
BUDGET_EPSILON = 1e-9


class SquadConstraints(BaseModel):
    """
    Budget, positional and club-concentration rules for one squad.

    Passed explicitly into every optimizer call. Construction fails fast
    with InvalidConstraintsError.
    """

    budget: float = Field(
        default=DEFAULT_BUDGET, ge=0, description="Budget ceiling in millions"
    )
    position_quotas: dict[Position, int] = Field(
        default_factory=lambda: dict(DEFAULT_POSITION_QUOTAS),
        description="Exact number of players required per position",
    )
    max_per_team: int = Field(
        default=DEFAULT_MAX_PER_TEAM, ge=1, description="Max players from one club"
    )

    model_config = ConfigDict(frozen=True)

    def __init__(self, **data: Any):
        try:
            super().__init__(**data)
        except ValidationError as e:
            raise InvalidConstraintsError(f"Invalid squad constraints: {e}") from e

    @model_validator(mode="after")
    def check_quotas(self) -> "SquadConstraints":
        """Every position needs a non-negative quota."""
        missing = [pos.name for pos in Position if pos not in self.position_quotas]
        if missing:
            raise ValueError(f"missing quota for {', '.join(missing)}")
        negative = [pos.name for pos, n in self.position_quotas.items() if n < 0]
        if negative:
            raise ValueError(f"negative quota for {', '.join(negative)}")
        return self

    @property
    def squad_size(self) -> int:
        """Total seats in the squad."""
        return sum(self.position_quotas.values())

    def quota(self, position: Position) -> int:
        return self.position_quotas[position]


# =============================================================================
# LP Constraints
# =============================================================================


def add_position_constraints(
    prob: pulp.LpProblem,
    squad_vars: dict[int, pulp.LpVariable],
    players: dict[int, ScoredPlayer],
    constraints: SquadConstraints,
    name_prefix: str = "position",
) -> None:
    """
    Add constraints: exact quota per position.

    Args:
        prob: PuLP problem
        squad_vars: Dict mapping player_id to binary selection variable
        players: Dict of player_id -> ScoredPlayer
        constraints: Squad rules
        name_prefix: Prefix for constraint names
    """
    for pos in POSITION_ORDER:
        pos_players = [
            squad_vars[pid] for pid, p in players.items()
            if p.position == pos and pid in squad_vars
        ]
        prob += (
            pulp.lpSum(pos_players) == constraints.quota(pos),
            f"{name_prefix}_{pos.name}_exact",
        )


def add_team_constraint(
    prob: pulp.LpProblem,
    squad_vars: dict[int, pulp.LpVariable],
    players: dict[int, ScoredPlayer],
    constraints: SquadConstraints,
    name_prefix: str = "team",
) -> None:
    """
    Add constraint: at most max_per_team players from any club.

    Args:
        prob: PuLP problem
        squad_vars: Selection variables
        players: Dict of player_id -> ScoredPlayer
        constraints: Squad rules
        name_prefix: Prefix for constraint names
    """
    teams: dict[int, list[int]] = {}
    for pid, player in players.items():
        if pid in squad_vars:
            teams.setdefault(player.team_id, []).append(pid)

    for team_id, team_players in teams.items():
        prob += (
            pulp.lpSum(squad_vars[pid] for pid in team_players) <= constraints.max_per_team,
            f"{name_prefix}_{team_id}_max",
        )


def add_budget_constraint(
    prob: pulp.LpProblem,
    squad_vars: dict[int, pulp.LpVariable],
    players: dict[int, ScoredPlayer],
    constraints: SquadConstraints,
    name: str = "budget",
) -> None:
    """
    Add constraint: total squad cost must not exceed budget.

    Costs use integer tenths so the solver never sees float rounding.
    """
    prob += (
        pulp.lpSum(
            squad_vars[pid] * player.now_cost
            for pid, player in players.items()
            if pid in squad_vars
        ) <= round(constraints.budget * 10),
        name,
    )


# =============================================================================
# Validation
# =============================================================================


def squad_violations(
    players: Sequence[ScoredPlayer],
    constraints: SquadConstraints,
) -> list[str]:
    """
    Check a squad against the rules.

    Returns:
        List of violation messages (empty when the squad is legal)
    """
    violations = []

    position_counts = Counter(p.position for p in players)
    for pos in POSITION_ORDER:
        need = constraints.quota(pos)
        have = position_counts.get(pos, 0)
        if have != need:
            violations.append(f"{pos.name}: need exactly {need}, have {have}")

    total_cost = sum(p.now_cost for p in players) / 10
    if total_cost > constraints.budget + BUDGET_EPSILON:
        violations.append(
            f"Squad costs £{total_cost:.1f}m, budget is £{constraints.budget:.1f}m"
        )

    for team_id, count in Counter(p.team_id for p in players).items():
        if count > constraints.max_per_team:
            violations.append(
                f"Team {team_id}: max {constraints.max_per_team}, have {count}"
            )

    return violations
