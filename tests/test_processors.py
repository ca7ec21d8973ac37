"""
Tests for raw record processing and safe parsing.
"""

import pytest

from fpl_squad_engine.data.models import PlayerStatus, Position
from fpl_squad_engine.data.processors import (
    current_gameweek_from_events,
    process_fixtures,
    process_players,
    process_teams,
    safe_float,
    safe_int,
)
from fpl_squad_engine.exceptions import InputFormatError


@pytest.mark.parametrize(
    "value, expected",
    [
        ("8.0", 8.0),
        ("0.45", 0.45),
        (3, 3.0),
        (None, 0.0),
        ("", 0.0),
        ("n/a", 0.0),
        ("nan", 0.0),
        (True, 0.0),
    ],
)
def test_safe_float(value, expected):
    assert safe_float(value) == expected


def test_safe_int_truncates_and_defaults():
    assert safe_int("105") == 105
    assert safe_int("4.7") == 4
    assert safe_int(None) == 0
    assert safe_int("bad", 3) == 3


def test_process_players_maps_element_type(make_raw_player):
    raw = [make_raw_player(id=i, element_type=i) for i in range(1, 5)]
    players = process_players(raw)

    assert [p.position for p in players] == [
        Position.GK, Position.DEF, Position.MID, Position.FWD
    ]


def test_process_players_parses_numeric_strings(make_raw_player):
    player = process_players([make_raw_player(
        form="6.5",
        expected_goals="2.31",
        expected_assists="1.10",
        now_cost=125,
    )])[0]

    assert player.form == 6.5
    assert player.expected_goals == 2.31
    assert player.expected_assists == 1.10
    assert player.price == 12.5


def test_process_players_missing_fields_become_zero():
    player = process_players([{"id": 7, "element_type": 2, "team": 4}])[0]

    assert player.total_points == 0
    assert player.form == 0.0
    assert player.expected_goals == 0.0
    assert player.minutes == 0
    assert player.now_cost == 0
    assert player.status == PlayerStatus.AVAILABLE
    assert player.chance_of_playing_this_round is None


def test_process_players_skips_invalid_records(make_raw_player):
    raw = [
        make_raw_player(id=1),
        make_raw_player(id=2, element_type=5),  # no such position
        make_raw_player(id=3, now_cost=-10),
        {"web_name": "No id"},
        "not a dict",
    ]
    players = process_players(raw)

    assert [p.id for p in players] == [1]


def test_unknown_status_treated_as_unavailable(make_raw_player):
    player = process_players([make_raw_player(status="x")])[0]
    assert player.status == PlayerStatus.UNAVAILABLE


def test_chance_of_playing_zero_is_kept(make_raw_player):
    player = process_players([make_raw_player(chance_of_playing_this_round=0)])[0]
    assert player.chance_of_playing_this_round == 0


def test_process_teams():
    teams = process_teams([
        {"id": 1, "name": "Arsenal", "short_name": "ARS", "strength": 4},
        {"name": "No id"},
    ])

    assert len(teams) == 1
    assert teams[0].short_name == "ARS"


def test_process_fixtures_defaults():
    fixtures = process_fixtures([
        {
            "id": 10,
            "event": None,
            "team_h": 1,
            "team_a": 2,
            "kickoff_time": "2025-08-16T14:00:00Z",
        },
        {"id": 11, "event": 4, "team_h": 3, "team_a": 4,
         "team_h_difficulty": 2, "team_a_difficulty": 5, "finished": True},
    ])

    unscheduled, played = fixtures
    assert unscheduled.gameweek == 0
    assert unscheduled.home_difficulty == 3
    assert unscheduled.kickoff_time is not None
    assert played.finished is True
    assert played.difficulty_for(3) == 2
    assert played.difficulty_for(4) == 5


@pytest.mark.parametrize("processor", [process_players, process_teams, process_fixtures])
def test_non_list_input_raises(processor):
    with pytest.raises(InputFormatError):
        processor({"elements": []})


def test_input_format_error_is_type_error():
    with pytest.raises(TypeError):
        process_players("elements")


def test_current_gameweek_from_events():
    events = [{"id": 1, "is_current": False}, {"id": 2, "is_current": True}]
    assert current_gameweek_from_events(events) == 2
    assert current_gameweek_from_events([]) == 1
