"""
Squad Value Object.

A Squad is built once by the optimizer and never mutated afterwards. It
may hold fewer players than the constraints ask for when the pool ran
dry; callers treat that as degraded output, not an error.
"""

from collections import Counter
from dataclasses import dataclass

from ..data.models import Position, ScoredPlayer, round_half_up
from .constraints import POSITION_ORDER, SquadConstraints, squad_violations


@dataclass(frozen=True)
class Squad:
    """Selected players, in selection order, with the rules they were picked under."""

    players: tuple[ScoredPlayer, ...]
    constraints: SquadConstraints
    strategy: str = "greedy"

    def __len__(self) -> int:
        return len(self.players)

    def __iter__(self):
        return iter(self.players)

    @property
    def player_ids(self) -> list[int]:
        return [p.id for p in self.players]

    @property
    def total_cost(self) -> float:
        """Combined price in millions."""
        return sum(p.now_cost for p in self.players) / 10

    @property
    def total_points(self) -> int:
        return sum(p.total_points for p in self.players)

    @property
    def total_score(self) -> float:
        return round_half_up(sum(p.overall_score for p in self.players))

    @property
    def average_form(self) -> float:
        if not self.players:
            return 0.0
        return sum(p.form_score for p in self.players) / len(self.players)

    @property
    def average_fdr(self) -> float:
        if not self.players:
            return 0.0
        return round_half_up(
            sum(p.fixture_window.avg_fdr for p in self.players) / len(self.players)
        )

    @property
    def bank(self) -> float:
        """Unspent budget."""
        return round_half_up(self.constraints.budget - self.total_cost)

    @property
    def position_counts(self) -> dict[Position, int]:
        counts = Counter(p.position for p in self.players)
        return {pos: counts.get(pos, 0) for pos in POSITION_ORDER}

    @property
    def club_counts(self) -> dict[int, int]:
        return dict(Counter(p.team_id for p in self.players))

    @property
    def shortfall(self) -> dict[Position, int]:
        """Unfilled seats per position (only positions that are short)."""
        counts = self.position_counts
        return {
            pos: self.constraints.quota(pos) - counts[pos]
            for pos in POSITION_ORDER
            if counts[pos] < self.constraints.quota(pos)
        }

    @property
    def is_complete(self) -> bool:
        return not squad_violations(self.players, self.constraints)

    def by_position(self, position: Position) -> list[ScoredPlayer]:
        return [p for p in self.players if p.position == position]

    def summary(self) -> dict[str, float | int | bool]:
        """Aggregate totals for reporting."""
        return {
            "players": len(self.players),
            "total_cost": round_half_up(self.total_cost),
            "total_points": self.total_points,
            "average_form": round_half_up(self.average_form, 2),
            "average_fdr": self.average_fdr,
            "bank": self.bank,
            "complete": self.is_complete,
        }
