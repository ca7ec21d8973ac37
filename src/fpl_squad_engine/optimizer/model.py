"""
Squad Optimization Model.

Selects a 15-player squad from a pre-filtered pool of scored players. The
pool is expected to be clean already: the optimizer does no availability
filtering of its own.
"""

import logging
from collections.abc import Sequence

from ..data.models import ScoredPlayer
from .constraints import SquadConstraints
from .squad import Squad
from .strategies import GreedyStrategy, SelectionStrategy

logger = logging.getLogger(__name__)


class SquadOptimizer:
    """
    Main squad selection engine.

    Delegates the actual pick to a SelectionStrategy (greedy by default)
    and wraps the result in an immutable Squad.
    """

    def __init__(self, strategy: SelectionStrategy | None = None):
        self.strategy = strategy or GreedyStrategy()

    def optimize(
        self,
        pool: Sequence[ScoredPlayer],
        constraints: SquadConstraints | None = None,
    ) -> Squad:
        """
        Build a squad from the pool.

        Args:
            pool: Scored players eligible for selection
            constraints: Squad rules (FPL defaults when None)

        Returns:
            Squad, possibly short of a full squad if the pool ran out
        """
        constraints = constraints or SquadConstraints()
        logger.info(
            f"Optimizing squad ({self.strategy.name}) from {len(pool)} players, "
            f"budget £{constraints.budget:.1f}m"
        )

        selected = self.strategy.select(pool, constraints)
        squad = Squad(
            players=tuple(selected),
            constraints=constraints,
            strategy=self.strategy.name,
        )

        if len(squad) < constraints.squad_size:
            short = ", ".join(f"{n} {pos.name}" for pos, n in squad.shortfall.items())
            logger.warning(
                f"Squad incomplete: {len(squad)}/{constraints.squad_size} players"
                + (f" (missing {short})" if short else "")
            )
        else:
            logger.info(
                f"Selected {len(squad)} players for £{squad.total_cost:.1f}m "
                f"({squad.total_points} pts)"
            )

        return squad
