"""
Squad Selection Strategies.

GreedyStrategy is the default and defines the observable squad: a single
pass per position, best score first, skipping anyone who breaks the budget
or club cap. It never backtracks, so an early expensive pick can starve a
later position of budget.

OptimalStrategy solves the same rules as a binary integer program with
PuLP. It is only used when asked for explicitly.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence

import pulp

from ..data.models import ScoredPlayer
from .constraints import (
    POSITION_ORDER,
    SquadConstraints,
    add_budget_constraint,
    add_position_constraints,
    add_team_constraint,
)

logger = logging.getLogger(__name__)


def rank_key(player: ScoredPlayer) -> tuple[float, int]:
    """Score descending, then player id ascending."""
    return (-player.overall_score, player.id)


class SelectionStrategy(ABC):
    """Picks squad members from a pool under the given constraints."""

    name = "base"

    @abstractmethod
    def select(
        self,
        pool: Sequence[ScoredPlayer],
        constraints: SquadConstraints,
    ) -> list[ScoredPlayer]:
        """Return the selected players in selection order."""


class GreedyStrategy(SelectionStrategy):
    """Single-pass greedy fill in GK, DEF, MID, FWD order."""

    name = "greedy"

    def select(
        self,
        pool: Sequence[ScoredPlayer],
        constraints: SquadConstraints,
    ) -> list[ScoredPlayer]:
        selected: list[ScoredPlayer] = []
        team_counts: dict[int, int] = {}
        spent = 0  # tenths of a million
        budget_tenths = constraints.budget * 10 + 1e-6

        for position in POSITION_ORDER:
            quota = constraints.quota(position)
            candidates = sorted(
                (p for p in pool if p.position == position),
                key=rank_key,
            )
            added = 0

            for player in candidates:
                if added >= quota:
                    break

                if spent + player.now_cost > budget_tenths:
                    logger.debug(f"Skip {player.web_name}: over budget")
                    continue

                team_count = team_counts.get(player.team_id, 0)
                if team_count >= constraints.max_per_team:
                    logger.debug(f"Skip {player.web_name}: team {player.team_id} full")
                    continue

                selected.append(player)
                team_counts[player.team_id] = team_count + 1
                spent += player.now_cost
                added += 1

            if added < quota:
                logger.warning(
                    f"Could only fill {added}/{quota} {position.name} places "
                    f"(£{spent / 10:.1f}m spent)"
                )

        return selected


class OptimalStrategy(SelectionStrategy):
    """
    Maximize total overall score with an integer linear program.

    Uses the CBC solver bundled with PuLP. Returns an empty selection when
    the problem is infeasible or the solver does not reach optimality.
    """

    name = "optimal"

    def __init__(self, time_limit: int = 60, gap_tolerance: float = 0.0):
        """
        Args:
            time_limit: Max solve time in seconds
            gap_tolerance: Acceptable optimality gap (0.0 = proven optimum)
        """
        self.time_limit = time_limit
        self.gap_tolerance = gap_tolerance

    def _get_solver(self) -> pulp.LpSolver:
        return pulp.PULP_CBC_CMD(
            msg=0,
            timeLimit=self.time_limit,
            gapRel=self.gap_tolerance,
        )

    def select(
        self,
        pool: Sequence[ScoredPlayer],
        constraints: SquadConstraints,
    ) -> list[ScoredPlayer]:
        players = {p.id: p for p in pool}
        if not players:
            logger.warning("Empty player pool, nothing to solve")
            return []
        logger.info(f"Solving squad ILP over {len(players)} players")

        prob = pulp.LpProblem("FPL_Squad", pulp.LpMaximize)
        squad_vars = {
            pid: pulp.LpVariable(f"squad_{pid}", cat="Binary")
            for pid in players
        }

        # Tiny id-based penalty prefers lower ids on equal scores
        prob += pulp.lpSum(
            squad_vars[pid] * (p.overall_score - pid * 1e-9)
            for pid, p in players.items()
        )

        add_position_constraints(prob, squad_vars, players, constraints)
        add_team_constraint(prob, squad_vars, players, constraints)
        add_budget_constraint(prob, squad_vars, players, constraints)

        status = prob.solve(self._get_solver())
        if status != pulp.LpStatusOptimal:
            logger.warning(f"Optimization status: {pulp.LpStatus[status]}")
            return []

        chosen = [
            players[pid] for pid, var in squad_vars.items()
            if var.value() and var.value() > 0.5
        ]
        order = {pos: i for i, pos in enumerate(POSITION_ORDER)}
        chosen.sort(key=lambda p: (order[p.position], rank_key(p)))
        return chosen


STRATEGIES: dict[str, type[SelectionStrategy]] = {
    GreedyStrategy.name: GreedyStrategy,
    OptimalStrategy.name: OptimalStrategy,
}


def get_strategy(name: str, **kwargs) -> SelectionStrategy:
    """
    Look up a strategy by name.

    Raises:
        ValueError: If the name is unknown
    """
    try:
        strategy_cls = STRATEGIES[name]
    except KeyError:
        raise ValueError(
            f"Unknown strategy {name!r}, choose from {', '.join(STRATEGIES)}"
        ) from None
    return strategy_cls(**kwargs)
