"""
FPL Squad Engine Command Line Interface.

Built with Typer. Reads already-downloaded bootstrap-static and fixtures
JSON files and prints the analysis with Rich.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .analysis.fixtures import FixtureDifficultyAnalyzer, get_fdr_emoji
from .config import EngineSettings, get_settings
from .data.processors import current_gameweek_from_events, process_fixtures, process_teams
from .engine import AnalysisResult, analyze_bootstrap
from .exceptions import EngineError, InvalidConstraintsError
from .optimizer.constraints import POSITION_ORDER

app = typer.Typer(
    name="fpl-squad-engine",
    help="Fantasy Premier League squad valuation and optimization",
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()


def load_json(path: Path) -> Any:
    """Read a JSON file, exiting with a message on failure."""
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        console.print(f"[red]Could not read {path}: {e}[/red]")
        raise typer.Exit(1)


def build_settings(**overrides: Any) -> EngineSettings:
    """Engine settings from the environment with CLI overrides applied."""
    base = get_settings().engine.model_dump()
    base.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return EngineSettings(**base)
    except InvalidConstraintsError as e:
        console.print(f"[red]Invalid settings: {escape(e.message)}[/red]")
        raise typer.Exit(1)


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """
    FPL Squad Engine - pick a squad from a data snapshot.

    Download bootstrap-static and fixtures JSON first, then point the
    commands below at those files.
    """
    level = "DEBUG" if verbose else get_settings().app.log_level
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command()
def analyze(
    bootstrap_path: Path = typer.Argument(..., help="bootstrap-static JSON file"),
    fixtures_path: Path = typer.Argument(..., help="fixtures JSON file"),
    gameweek: Optional[int] = typer.Option(
        None, "--gameweek", "-g", help="Current gameweek (default: from events)"
    ),
    window: Optional[int] = typer.Option(
        None, "--window", "-w", help="Fixture window in gameweeks"
    ),
    budget: Optional[float] = typer.Option(None, "--budget", "-b", help="Budget in millions"),
    max_per_team: Optional[int] = typer.Option(
        None, "--max-per-team", help="Max players from one club"
    ),
    strategy: Optional[str] = typer.Option(
        None, "--strategy", "-s", help="Selection strategy: greedy or optimal"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
) -> None:
    """
    Score every player and select the optimal squad.
    """
    settings = build_settings(
        fixture_window=window,
        budget=budget,
        max_per_team=max_per_team,
        strategy=strategy,
    )
    bootstrap = load_json(bootstrap_path)
    fixtures_data = load_json(fixtures_path)

    try:
        result = analyze_bootstrap(
            bootstrap, fixtures_data, current_gameweek=gameweek, settings=settings
        )
    except EngineError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        raise typer.Exit(1)

    if as_json:
        console.print_json(json.dumps(result.to_dict()))
        return

    print_result(result)


def print_result(result: AnalysisResult) -> None:
    """Render an analysis result as Rich tables."""
    squad = result.squad
    last_gw = result.current_gameweek + result.fixture_window - 1
    console.print(
        Panel(
            f"[bold blue]Optimal Squad - GW{result.current_gameweek} to GW{last_gw}[/bold blue]",
            style="blue",
        )
    )

    table = Table(title=f"Squad ({squad.strategy})")
    table.add_column("Pos", style="cyan")
    table.add_column("Player", style="white")
    table.add_column("Team", style="yellow")
    table.add_column("Price", style="green")
    table.add_column("Pts", style="magenta")
    table.add_column("Form", style="blue")
    table.add_column("FDR", style="dim")
    table.add_column("Score", style="bold")

    for pos in POSITION_ORDER:
        for p in squad.by_position(pos):
            table.add_row(
                pos.name,
                p.web_name,
                p.team_short_name,
                f"£{p.price:.1f}m",
                str(p.total_points),
                f"{p.form_score:.1f}",
                f"{p.fixture_window.avg_fdr:.1f}",
                f"{p.overall_score:.1f}",
            )
        if squad.by_position(pos) and pos != POSITION_ORDER[-1]:
            table.add_section()
    console.print(table)

    summary = Table(title="Summary", show_header=False)
    summary.add_column("Metric", style="cyan")
    summary.add_column("Value", style="green")
    summary.add_row("Players analyzed", str(len(result.pool)))
    summary.add_row("Total cost", f"£{squad.total_cost:.1f}m")
    summary.add_row("Bank", f"£{squad.bank:.1f}m")
    summary.add_row("Total points", str(squad.total_points))
    summary.add_row("Average form", f"{squad.average_form:.2f}")
    summary.add_row("Average FDR", f"{squad.average_fdr:.1f}")
    summary.add_row("Fixture strength", f"{result.fixture_strength}/100")
    if result.risk:
        summary.add_row("Risk", result.risk.level)
    console.print(summary)

    if not squad.is_complete:
        short = ", ".join(f"{n} {pos.name}" for pos, n in squad.shortfall.items())
        console.print(f"[yellow]Squad incomplete: missing {short or 'players'}[/yellow]")

    if result.captains:
        captains = Table(title="Captain Options")
        captains.add_column("#", style="dim")
        captains.add_column("Player", style="white")
        captains.add_column("Next", style="yellow")
        captains.add_column("Score", style="green")
        captains.add_column("Why", style="cyan")
        for i, c in enumerate(result.captains, start=1):
            captains.add_row(
                str(i),
                c.player.web_name,
                c.next_fixture,
                f"{c.captain_score:.2f}",
                c.reasoning,
            )
        console.print(captains)

    if result.transfers:
        transfers = Table(title="Transfer Suggestions")
        transfers.add_column("Out", style="red")
        transfers.add_column("In", style="green")
        transfers.add_column("Cost", style="yellow")
        transfers.add_column("Gain", style="cyan")
        for t in result.transfers:
            transfers.add_row(
                f"{t.out.name} ({t.out.reason})",
                f"{t.into.name} ({t.into.reason})",
                f"{t.cost_diff:+.1f}",
                f"+{t.priority:.1f}",
            )
        console.print(transfers)

    if result.risk and result.risk.recommendations:
        console.print()
        for rec in result.risk.recommendations:
            console.print(f"[yellow]• {rec}[/yellow]")


@app.command()
def fixtures(
    bootstrap_path: Path = typer.Argument(..., help="bootstrap-static JSON file"),
    fixtures_path: Path = typer.Argument(..., help="fixtures JSON file"),
    gameweek: Optional[int] = typer.Option(None, "--gameweek", "-g", help="Start gameweek"),
    window: int = typer.Option(6, "--window", "-w", help="Gameweeks to show"),
) -> None:
    """
    Show the fixture ticker: every team ranked by upcoming difficulty.
    """
    bootstrap = load_json(bootstrap_path)
    fixtures_data = load_json(fixtures_path)
    if not isinstance(bootstrap, dict):
        console.print("[red]bootstrap-static file must hold a JSON object[/red]")
        raise typer.Exit(1)

    try:
        teams = process_teams(bootstrap.get("teams", []))
        fixture_models = process_fixtures(fixtures_data)
        if gameweek is None:
            gameweek = current_gameweek_from_events(bootstrap.get("events", []))
        runs = FixtureDifficultyAnalyzer(teams, fixture_models).rank_teams(gameweek, window)
    except EngineError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        raise typer.Exit(1)

    table = Table(title=f"Fixture Ticker GW{gameweek}-GW{gameweek + window - 1}")
    table.add_column("Team", style="yellow")
    table.add_column("Avg", style="green")
    table.add_column("Easy", style="cyan")
    table.add_column("Hard", style="red")
    table.add_column("Fixtures", style="white")

    for run in runs:
        ticker = " ".join(
            f"{get_fdr_emoji(f.fdr)}{f.opponent_name}{'' if f.is_home else '(a)'}"
            for f in run.fixtures
        )
        table.add_row(
            run.team_short_name,
            f"{run.avg_fdr:.1f}",
            str(run.easy_run),
            str(run.hard_run),
            ticker or "[dim]no fixtures[/dim]",
        )

    console.print(table)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]FPL Squad Engine[/bold] v{__version__}")


if __name__ == "__main__":
    app()
