"""
Data Processors for raw FPL records.

Transforms the bootstrap-static and fixtures payloads into typed Pydantic
models. Numeric fields arrive as strings or may be missing entirely, so
every value goes through a safe parser that falls back to zero. Records
that still fail validation are skipped with a warning.
"""

import logging
import math
from datetime import datetime
from typing import Any

from ..exceptions import InputFormatError
from .models import Fixture, Player, PlayerStatus, Position, Team

logger = logging.getLogger(__name__)


# =============================================================================
# Safe Parsing
# =============================================================================


def safe_float(value: Any, default: float = 0.0) -> float:
    """Parse a numeric string or number, returning default when impossible."""
    if value is None or isinstance(value, bool):
        return default
    try:
        result = float(value)
    except (TypeError, ValueError):
        return default
    return result if math.isfinite(result) else default


def safe_int(value: Any, default: int = 0) -> int:
    """Parse an integer field, truncating floats and numeric strings."""
    return int(safe_float(value, float(default)))


def optional_int(value: Any) -> int | None:
    """Parse a nullable integer field such as chance of playing."""
    if value is None or value == "":
        return None
    parsed = safe_float(value, math.nan)
    return None if math.isnan(parsed) else int(parsed)


def require_list(value: Any, name: str) -> list[Any]:
    """
    Check that a top-level input is a list.

    Raises:
        InputFormatError: If the value is not a list
    """
    if not isinstance(value, list):
        raise InputFormatError(
            f"Expected a list of {name}, got {type(value).__name__}"
        )
    return value


# =============================================================================
# Bootstrap Static Processing
# =============================================================================


def process_players(elements: list[dict[str, Any]]) -> list[Player]:
    """
    Process player data from bootstrap-static 'elements' array.

    The numeric element_type is mapped to Position here and nowhere else.

    Args:
        elements: List of player dictionaries from API

    Returns:
        List of Player models
    """
    require_list(elements, "players")
    players = []

    for elem in elements:
        try:
            status_char = elem.get("status") or "a"
            try:
                status = PlayerStatus(status_char)
            except ValueError:
                logger.warning(
                    f"Unknown status {status_char!r} for player {elem.get('id')}"
                )
                status = PlayerStatus.UNAVAILABLE

            player = Player(
                id=elem["id"],
                web_name=elem.get("web_name") or "",
                team_id=safe_int(elem.get("team")),
                position=Position(safe_int(elem.get("element_type"))),
                now_cost=safe_int(elem.get("now_cost")),
                status=status,
                news=elem.get("news") or "",
                chance_of_playing_this_round=optional_int(
                    elem.get("chance_of_playing_this_round")
                ),
                total_points=safe_int(elem.get("total_points")),
                form=safe_float(elem.get("form")),
                minutes=safe_int(elem.get("minutes")),
                expected_goals=safe_float(elem.get("expected_goals")),
                expected_assists=safe_float(elem.get("expected_assists")),
            )
            players.append(player)

        except Exception as e:
            logger.warning(f"Error processing player {_record_id(elem)}: {e}")
            continue

    logger.info(f"Processed {len(players)} players")
    return players


def process_teams(teams_data: list[dict[str, Any]]) -> list[Team]:
    """
    Process team data from bootstrap-static 'teams' array.

    Args:
        teams_data: List of team dictionaries from API

    Returns:
        List of Team models
    """
    require_list(teams_data, "teams")
    teams = []

    for team_data in teams_data:
        try:
            team = Team(
                id=team_data["id"],
                name=team_data.get("name") or "",
                short_name=team_data.get("short_name") or "",
                strength_attack_home=safe_int(team_data.get("strength_attack_home")),
                strength_attack_away=safe_int(team_data.get("strength_attack_away")),
                strength_defence_home=safe_int(team_data.get("strength_defence_home")),
                strength_defence_away=safe_int(team_data.get("strength_defence_away")),
            )
            teams.append(team)

        except Exception as e:
            logger.warning(f"Error processing team {_record_id(team_data)}: {e}")
            continue

    logger.info(f"Processed {len(teams)} teams")
    return teams


def current_gameweek_from_events(events: list[dict[str, Any]]) -> int:
    """Return the id of the event flagged is_current, or 1 before the season."""
    require_list(events, "events")
    for event in events:
        if isinstance(event, dict) and event.get("is_current"):
            return safe_int(event.get("id"), 1) or 1
    return 1


# =============================================================================
# Fixture Processing
# =============================================================================


def process_fixtures(fixtures_data: list[dict[str, Any]]) -> list[Fixture]:
    """
    Process fixture data from fixtures endpoint.

    Args:
        fixtures_data: List of fixture dictionaries from API

    Returns:
        List of Fixture models
    """
    require_list(fixtures_data, "fixtures")
    fixtures = []

    for fix in fixtures_data:
        try:
            kickoff_str = fix.get("kickoff_time")
            kickoff = None
            if kickoff_str:
                kickoff_str = kickoff_str.replace("Z", "+00:00")
                kickoff = datetime.fromisoformat(kickoff_str)

            fixture = Fixture(
                id=safe_int(fix.get("id")),
                gameweek=safe_int(fix.get("event")),  # None for unscheduled
                home_team_id=safe_int(fix.get("team_h")),
                away_team_id=safe_int(fix.get("team_a")),
                home_difficulty=safe_int(fix.get("team_h_difficulty"), 3),
                away_difficulty=safe_int(fix.get("team_a_difficulty"), 3),
                kickoff_time=kickoff,
                finished=bool(fix.get("finished", False)),
            )
            fixtures.append(fixture)

        except Exception as e:
            logger.warning(f"Error processing fixture {_record_id(fix)}: {e}")
            continue

    logger.info(f"Processed {len(fixtures)} fixtures")
    return fixtures


def _record_id(record: Any) -> Any:
    return record.get("id") if isinstance(record, dict) else record
