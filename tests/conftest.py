"""
Shared fixtures for the squad engine tests.

Provides factories for raw API records and for ScoredPlayers built directly
(bypassing the scorer), plus a small synthetic 20-team league.
"""

import pytest

from fpl_squad_engine.data.models import (
    FixtureDetail,
    FixtureWindow,
    Player,
    PlayerStatus,
    Position,
    ScoredPlayer,
)

POSITION_LAYOUT = [1, 1, 2, 2, 2, 2, 2, 3, 3, 3, 3, 3, 4, 4, 4]


def raw_player(**overrides):
    """A bootstrap-static element with sensible defaults."""
    record = {
        "id": 1,
        "web_name": "Player",
        "element_type": 3,
        "team": 1,
        "total_points": 50,
        "form": "5.0",
        "expected_goals": "1.0",
        "expected_assists": "1.0",
        "now_cost": 60,
        "minutes": 900,
        "status": "a",
        "chance_of_playing_this_round": None,
        "news": "",
    }
    record.update(overrides)
    return record


def scored_player(
    pid,
    position=Position.MID,
    team_id=1,
    now_cost=50,
    score=50.0,
    form=0.0,
    xg=0.0,
    xa=0.0,
    total_points=50,
    avg_fdr=3.0,
    easy_run=0,
    hard_run=0,
    risk=0,
    fixtures=(),
    status=PlayerStatus.AVAILABLE,
):
    """Build a ScoredPlayer with a hand-picked score."""
    player = Player(
        id=pid,
        web_name=f"P{pid}",
        team_id=team_id,
        position=position,
        now_cost=now_cost,
        status=status,
        total_points=total_points,
        form=form,
        expected_goals=xg,
        expected_assists=xa,
        minutes=900,
    )
    window = FixtureWindow(
        team_id=team_id,
        team_short_name=f"T{team_id:02d}",
        fixtures=tuple(fixtures),
        avg_fdr=avg_fdr,
        easy_run=easy_run,
        hard_run=hard_run,
    )
    return ScoredPlayer(
        player=player,
        fixture_window=window,
        overall_score=score,
        availability_risk=risk,
        price_per_point=(now_cost / 10) / total_points if total_points > 0 else 999.0,
        form_score=form,
        expected_score=xg + xa,
    )


def fixture_detail(gameweek, fdr, opponent="OPP", is_home=True, opponent_id=99):
    return FixtureDetail(
        gameweek=gameweek,
        opponent_id=opponent_id,
        opponent_name=opponent,
        is_home=is_home,
        fdr=fdr,
    )


@pytest.fixture
def make_raw_player():
    return raw_player


@pytest.fixture
def make_scored():
    return scored_player


@pytest.fixture
def make_detail():
    return fixture_detail


@pytest.fixture
def league():
    """
    A deterministic 20-team league starting at GW3.

    Every player costs £4.0m-£6.5m, so any 15 fit in a £100m budget.
    """
    teams = [
        {"id": t, "name": f"Team {t}", "short_name": f"T{t:02d}"}
        for t in range(1, 21)
    ]

    fixtures = []
    fixture_id = 1
    for gw in range(1, 11):
        for k in range(10):
            home = (k + gw) % 20 + 1
            away = (19 - k + gw) % 20 + 1
            fixtures.append({
                "id": fixture_id,
                "event": gw,
                "team_h": home,
                "team_a": away,
                "team_h_difficulty": 1 + (home * gw) % 5,
                "team_a_difficulty": 1 + (away + gw) % 5,
                "finished": gw < 3,
                "kickoff_time": f"2025-09-{gw + 10:02d}T15:00:00Z",
            })
            fixture_id += 1

    players = []
    for t in range(1, 21):
        for j, element_type in enumerate(POSITION_LAYOUT):
            pid = (t - 1) * 15 + j + 1
            record = raw_player(
                id=pid,
                web_name=f"Player{pid}",
                element_type=element_type,
                team=t,
                total_points=(pid * 13) % 120,
                form=str(((pid * 3) % 90) / 10),
                expected_goals=str((pid % 17) / 10),
                expected_assists=str((pid % 11) / 10),
                now_cost=40 + (pid * 7) % 26,
                minutes=(pid * 37) % 1500,
            )
            if pid % 29 == 0:
                record.update(status="i", chance_of_playing_this_round=0, news="Knee injury")
            elif pid % 31 == 0:
                record.update(status="u", news="Left the club")
            players.append(record)

    events = [
        {"id": gw, "is_current": gw == 3, "finished": gw < 3}
        for gw in range(1, 39)
    ]

    return {
        "teams": teams,
        "fixtures": fixtures,
        "players": players,
        "events": events,
        "current_gameweek": 3,
    }
