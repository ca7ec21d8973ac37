"""
End-to-end tests for the analysis pipeline and its configuration.
"""

import json

import pytest

from fpl_squad_engine import (
    EngineError,
    EngineSettings,
    InputFormatError,
    InvalidConstraintsError,
    analyze_bootstrap,
    get_settings,
    run_analysis,
)
from fpl_squad_engine.data.models import PlayerStatus, Position
from fpl_squad_engine.engine import build_strategy, filter_pool
from fpl_squad_engine.optimizer.constraints import SquadConstraints, squad_violations
from fpl_squad_engine.optimizer.strategies import GreedyStrategy, OptimalStrategy


def _run(league, **kwargs):
    return run_analysis(
        teams=league["teams"],
        fixtures=league["fixtures"],
        players=league["players"],
        current_gameweek=league["current_gameweek"],
        **kwargs,
    )


def _bootstrap(league):
    return {
        "teams": league["teams"],
        "elements": league["players"],
        "events": league["events"],
    }


def test_full_pipeline(league):
    result = _run(league)
    squad = result.squad

    assert len(squad) == 15
    assert squad.is_complete
    assert squad_violations(squad.players, squad.constraints) == []
    assert squad.total_cost <= 100.0
    assert len(result.scored_players) == 300
    assert len(result.windows) == 20
    assert result.fixture_window == 8


def test_pipeline_excludes_unavailable_players(league):
    result = _run(league)
    pool_ids = {p.id for p in result.pool}

    for p in result.scored_players:
        if p.id % 29 == 0 or p.id % 31 == 0:
            assert p.id not in pool_ids
    assert all(p.availability_risk < 3 for p in result.squad)


def test_pipeline_captains(league):
    captains = _run(league).captains

    assert len(captains) == 3
    assert all(c.player.position in (Position.MID, Position.FWD) for c in captains)
    scores = [c.captain_score for c in captains]
    assert scores == sorted(scores, reverse=True)
    assert all(c.reasons for c in captains)


def test_pipeline_is_repeatable(league):
    first = _run(league)
    second = _run(league)
    assert first.squad.player_ids == second.squad.player_ids
    assert [c.player.id for c in first.captains] == [c.player.id for c in second.captains]


def test_result_serializes_to_json(league):
    data = json.loads(json.dumps(_run(league).to_dict()))

    assert data["current_gameweek"] == 3
    assert len(data["squad"]) == 15
    assert data["summary"]["complete"] is True
    assert len(data["captain_options"]) == 3
    assert set(data["alternatives"]) == {"GK", "DEF", "MID", "FWD"}
    assert [gw["gameweek"] for gw in data["gameweeks"]] == list(range(3, 11))
    assert data["risk"]["level"] in ("Low", "Medium", "High")
    assert 0 <= data["fixture_strength"] <= 100


def test_tight_budget_degrades_to_partial_squad(league):
    result = _run(league, settings=EngineSettings(budget=20.0))

    assert 0 < len(result.squad) < 15
    assert not result.squad.is_complete
    assert result.squad.total_cost <= 20.0


def test_explicit_constraints_override_settings(league):
    constraints = SquadConstraints(budget=100.0, max_per_team=1)
    result = _run(league, constraints=constraints)

    assert max(result.squad.club_counts.values()) == 1
    assert result.squad.constraints is constraints


def test_optimal_strategy_scores_at_least_greedy(league):
    greedy = _run(league, strategy=GreedyStrategy())
    optimal = _run(league, settings=EngineSettings(strategy="optimal", solver_time_limit=30))

    assert optimal.squad.strategy == "optimal"
    assert optimal.squad.is_complete
    assert optimal.squad.total_score >= greedy.squad.total_score


def test_explicit_strategy_overrides_settings(league):
    result = _run(
        league,
        settings=EngineSettings(strategy="optimal"),
        strategy=GreedyStrategy(),
    )
    assert result.squad.strategy == "greedy"


@pytest.mark.parametrize("field", ["teams", "fixtures", "players"])
def test_non_list_input_raises(league, field):
    kwargs = {
        "teams": league["teams"],
        "fixtures": league["fixtures"],
        "players": league["players"],
        field: {"oops": True},
    }
    with pytest.raises(InputFormatError):
        run_analysis(current_gameweek=3, **kwargs)


def test_empty_inputs_give_empty_squad():
    result = run_analysis(teams=[], fixtures=[], players=[], current_gameweek=1)

    assert len(result.squad) == 0
    assert result.captains == []
    assert result.fixture_strength == 0


@pytest.mark.parametrize(
    "overrides",
    [
        {"budget": -1},
        {"fixture_window": 0},
        {"max_per_team": 0},
        {"captain_count": 0},
        {"strategy": "random"},
    ],
)
def test_invalid_settings_raise_engine_error(overrides):
    with pytest.raises(InvalidConstraintsError) as excinfo:
        EngineSettings(**overrides)
    assert isinstance(excinfo.value, EngineError)


def test_invalid_settings_from_environment(monkeypatch):
    monkeypatch.setenv("ENGINE_BUDGET", "-10")
    with pytest.raises(InvalidConstraintsError):
        EngineSettings()


def test_unchecked_window_stops_the_run(league):
    settings = EngineSettings.model_construct(fixture_window=0)
    with pytest.raises(InvalidConstraintsError):
        _run(league, settings=settings)


def test_build_strategy_from_settings():
    assert isinstance(build_strategy(EngineSettings()), GreedyStrategy)

    optimal = build_strategy(EngineSettings(strategy="optimal", solver_time_limit=7))
    assert isinstance(optimal, OptimalStrategy)
    assert optimal.time_limit == 7


def test_filter_pool(make_scored):
    pool = [
        make_scored(1),
        make_scored(2, risk=3),
        make_scored(3, risk=2),
        make_scored(4, status=PlayerStatus.UNAVAILABLE),
        make_scored(5, total_points=-2),
    ]
    assert [p.id for p in filter_pool(pool)] == [1, 3]
    assert [p.id for p in filter_pool(pool, max_risk=2)] == [1]


def test_analyze_bootstrap_reads_current_gameweek(league):
    result = analyze_bootstrap(_bootstrap(league), league["fixtures"])
    assert result.current_gameweek == 3
    assert len(result.squad) == 15


def test_analyze_bootstrap_explicit_gameweek(league):
    result = analyze_bootstrap(_bootstrap(league), league["fixtures"], current_gameweek=5)
    assert result.current_gameweek == 5
    assert all(
        f.gameweek >= 5 for w in result.windows.values() for f in w.fixtures
    )


def test_analyze_bootstrap_rejects_non_object(league):
    with pytest.raises(InputFormatError):
        analyze_bootstrap([1, 2, 3], league["fixtures"])


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("ENGINE_BUDGET", "85.5")
    monkeypatch.setenv("ENGINE_MAX_PER_TEAM", "2")
    settings = EngineSettings()

    assert settings.budget == 85.5
    assert settings.max_per_team == 2
    constraints = settings.to_constraints()
    assert constraints.budget == 85.5
    assert constraints.max_per_team == 2


def test_get_settings_is_cached():
    get_settings.cache_clear()
    assert get_settings() is get_settings()
    get_settings.cache_clear()
