"""
Fixture Difficulty Module.

Reduces the fixture list into a rolling difficulty window per team:
average FDR over the next few gameweeks plus the longest easy and hard
runs, used to weight player scores toward favourable schedules.
"""

import logging
from collections.abc import Iterable

from ..data.models import (
    EASY_FDR,
    HARD_FDR,
    NEUTRAL_FDR,
    Fixture,
    FixtureDetail,
    FixtureWindow,
    Team,
    round_half_up,
)
from ..exceptions import InvalidConstraintsError

logger = logging.getLogger(__name__)

DEFAULT_WINDOW = 8


def longest_runs(difficulties: Iterable[int]) -> tuple[int, int]:
    """
    Longest consecutive easy (FDR <= 2) and hard (FDR >= 4) streaks.

    An FDR of 3 breaks both streaks.

    Returns:
        (easy_run, hard_run)
    """
    easy_run = hard_run = 0
    current_easy = current_hard = 0

    for fdr in difficulties:
        if fdr <= EASY_FDR:
            current_easy += 1
            current_hard = 0
            easy_run = max(easy_run, current_easy)
        elif fdr >= HARD_FDR:
            current_hard += 1
            current_easy = 0
            hard_run = max(hard_run, current_hard)
        else:
            current_easy = 0
            current_hard = 0

    return easy_run, hard_run


class FixtureDifficultyAnalyzer:
    """
    Builds fixture windows for every team.

    Windows are recomputed on every call; nothing is cached between runs.
    """

    def __init__(self, teams: list[Team], fixtures: list[Fixture]):
        self.teams = {t.id: t for t in teams}
        self.fixtures = fixtures

    def analyze(
        self,
        current_gw: int,
        window: int = DEFAULT_WINDOW,
    ) -> dict[int, FixtureWindow]:
        """
        Get the fixture window for each team.

        Args:
            current_gw: First gameweek of the window
            window: Number of gameweeks (and max fixtures) to include

        Returns:
            Dict of team_id -> FixtureWindow
        """
        _check_window(window)
        windows = {
            team_id: self._build_window(team_id, current_gw, window)
            for team_id in self.teams
        }
        quiet = sum(1 for w in windows.values() if w.is_default)
        logger.info(
            f"Built fixture windows for {len(windows)} teams "
            f"(GW{current_gw}-{current_gw + window - 1}, {quiet} without fixtures)"
        )
        return windows

    def get_team_window(
        self,
        team_id: int,
        current_gw: int,
        window: int = DEFAULT_WINDOW,
    ) -> FixtureWindow:
        """
        Get the fixture window for a single team.

        Raises:
            ValueError: If the team is unknown
        """
        _check_window(window)
        if team_id not in self.teams:
            raise ValueError(f"Team {team_id} not found")
        return self._build_window(team_id, current_gw, window)

    def rank_teams(
        self,
        current_gw: int,
        window: int = DEFAULT_WINDOW,
    ) -> list[FixtureWindow]:
        """
        Get windows for all teams, sorted by avg FDR (best first).
        """
        windows = self.analyze(current_gw, window)
        return sorted(windows.values(), key=lambda w: (w.avg_fdr, w.team_id))

    def _build_window(self, team_id: int, current_gw: int, window: int) -> FixtureWindow:
        team = self.teams[team_id]

        upcoming = [
            f for f in self.fixtures
            if f.involves(team_id)
            and current_gw <= f.gameweek < current_gw + window
            and not f.finished
        ]
        upcoming.sort(key=lambda f: f.gameweek)

        details = []
        for fixture in upcoming[:window]:
            is_home = fixture.home_team_id == team_id
            opponent_id = fixture.away_team_id if is_home else fixture.home_team_id
            opponent = self.teams.get(opponent_id)
            details.append(FixtureDetail(
                gameweek=fixture.gameweek,
                opponent_id=opponent_id,
                opponent_name=opponent.short_name if opponent else "???",
                is_home=is_home,
                fdr=fixture.difficulty_for(team_id),
            ))

        if not details:
            return FixtureWindow(
                team_id=team_id,
                team_short_name=team.short_name,
                avg_fdr=NEUTRAL_FDR,
                is_default=True,
            )

        fdrs = [d.fdr for d in details]
        easy_run, hard_run = longest_runs(fdrs)

        return FixtureWindow(
            team_id=team_id,
            team_short_name=team.short_name,
            fixtures=tuple(details),
            avg_fdr=round_half_up(sum(fdrs) / len(fdrs)),
            easy_run=easy_run,
            hard_run=hard_run,
        )


def _check_window(window: int) -> None:
    if window < 1:
        raise InvalidConstraintsError(f"Fixture window must be at least 1, got {window}")


def get_fdr_emoji(fdr: int | None) -> str:
    """Get emoji for FDR value."""
    if fdr is None or fdr == 0:
        return "⬜"  # Blank

    emojis = {
        1: "🟢",  # Very easy
        2: "🟩",  # Easy
        3: "🟨",  # Medium
        4: "🟧",  # Hard
        5: "🔴",  # Very hard
    }
    return emojis.get(fdr, "🟨")
