"""
Tests for the command line interface.
"""

import json

import pytest
from typer.testing import CliRunner

from fpl_squad_engine import __version__
from fpl_squad_engine.cli import app

runner = CliRunner()


@pytest.fixture
def data_files(league, tmp_path):
    bootstrap = tmp_path / "bootstrap-static.json"
    bootstrap.write_text(json.dumps({
        "teams": league["teams"],
        "elements": league["players"],
        "events": league["events"],
    }))
    fixtures = tmp_path / "fixtures.json"
    fixtures.write_text(json.dumps(league["fixtures"]))
    return str(bootstrap), str(fixtures)


def test_analyze_prints_squad(data_files):
    result = runner.invoke(app, ["analyze", *data_files])

    assert result.exit_code == 0, result.output
    assert "Optimal Squad" in result.stdout
    assert "Captain Options" in result.stdout
    assert "GK" in result.stdout and "FWD" in result.stdout


def test_analyze_json(data_files):
    result = runner.invoke(app, ["analyze", *data_files, "--json", "--gameweek", "4"])

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["current_gameweek"] == 4
    assert len(data["squad"]) == 15


def test_analyze_budget_option(data_files):
    result = runner.invoke(app, ["analyze", *data_files, "--json", "--budget", "30"])

    assert result.exit_code == 0, result.output
    summary = json.loads(result.stdout)["summary"]
    assert summary["total_cost"] <= 30
    assert summary["complete"] is False


def test_analyze_rejects_invalid_settings(data_files):
    result = runner.invoke(app, ["analyze", *data_files, "--budget=-5"])
    assert result.exit_code == 1


def test_analyze_rejects_unknown_strategy(data_files):
    result = runner.invoke(app, ["analyze", *data_files, "--strategy", "random"])
    assert result.exit_code == 1


def test_analyze_missing_file(tmp_path):
    missing = str(tmp_path / "nope.json")
    result = runner.invoke(app, ["analyze", missing, missing])
    assert result.exit_code == 1


def test_analyze_wrong_payload_shape(tmp_path, data_files):
    _, fixtures = data_files
    bootstrap = tmp_path / "list.json"
    bootstrap.write_text("[]")

    result = runner.invoke(app, ["analyze", str(bootstrap), fixtures])
    assert result.exit_code == 1
    assert "Error" in result.stdout


def test_fixtures_ticker(data_files):
    result = runner.invoke(app, ["fixtures", *data_files, "--window", "4"])

    assert result.exit_code == 0, result.output
    assert "Fixture Ticker GW3-GW6" in result.stdout
    assert "T01" in result.stdout


def test_version():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert __version__ in result.stdout
