"""CLI interface for the race analytics engine.

Every command loads one race from the offline snapshots, runs a single
analysis and prints the result as JSON.
"""

import json
from dataclasses import asdict, is_dataclass
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.panel import Panel

from ....common.exception_handler import format_exception_json, get_error_code
from ....config.logging import get_logger, setup_logging
from ....config.settings import settings
from ....core.domain import ChartResult
from ....core.domain.exceptions import InvalidConfigurationError, InvalidSessionError
from ....core.ports.data_source_port import RaceDataSourcePort
from ....core.services.analysis_service import RaceAnalysisService
from ...outbound.data_sources.ergast_snapshot_adapter import ErgastSnapshotSource

FIRST_SEASON = 1950

app = typer.Typer(
    name="raceinsight",
    help="RaceInsight - lap-time analytics for a single Grand Prix",
    add_completion=False,
)

console = Console(force_terminal=True, legacy_windows=False)

logger = get_logger("cli")

service = RaceAnalysisService()

SEASON_ARG = typer.Argument(..., help="Championship year, e.g. 2024")
ROUND_ARG = typer.Argument(..., metavar="ROUND", help="Round number within the season")
DATA_DIR_OPTION = typer.Option(
    None, "--data-dir", help="Snapshot root directory (defaults to RACE_ANALYTICS_DATA_DIR)"
)


def handle_cli_error(exc: Exception) -> None:
    """Handle and display errors in CLI with structured format.

    In debug mode, shows full JSON error details.
    In normal mode, shows a user-friendly message with error code.

    Args:
        exc: The exception to handle.
    """
    error_data = format_exception_json(exc, include_trace=settings.debug)
    logger.debug(f"Command failed with {type(exc).__name__}")

    if settings.debug:
        console.print(
            Panel(
                json.dumps(error_data, indent=2),
                title="[bold red]Error Details[/]",
                border_style="red",
            )
        )
    else:
        error_type = error_data["error"]["type"]
        error_msg = error_data["error"]["message"]
        error_code = get_error_code(exc)
        location = error_data.get("location", {})

        console.print(f"\n[red]Error [{error_code}]:[/] {error_msg}")
        console.print(f"[dim]Type: {error_type}[/]")

        if location:
            loc_str = (
                f"{location.get('file', '?')}:{location.get('line', '?')}"
                f" in {location.get('method', '?')}"
            )
            console.print(f"[dim]Location: {loc_str}[/]")

        console.print("[dim]Set RACE_ANALYTICS_DEBUG=true for full details[/]")


def validate_session(season: int, round_num: int) -> None:
    """Reject seasons outside the championship's history and non-positive rounds."""
    current_year = datetime.now(UTC).year
    if not FIRST_SEASON <= season <= current_year:
        raise InvalidSessionError(
            f"Season must be between {FIRST_SEASON} and {current_year}",
            context={"season": season},
        )
    if round_num < 1:
        raise InvalidSessionError("Round must be 1 or greater", context={"round": round_num})


def get_source(season: int, round_num: int, data_dir: Path | None) -> RaceDataSourcePort:
    """Validate the session and open the snapshot source."""
    validate_session(season, round_num)
    root = data_dir or settings.data_dir
    if not root.is_dir():
        raise InvalidConfigurationError(
            f"Snapshot directory {root} does not exist",
            context={"data_dir": str(root)},
        )
    logger.debug(f"Reading {season} round {round_num} snapshots from {root}")
    return ErgastSnapshotSource(root)


def _jsonable(value: Any) -> Any:
    if is_dataclass(value) and not isinstance(value, type):
        return asdict(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Path):
        return str(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def print_json(data: Any) -> None:
    console.print_json(data=data, default=_jsonable, highlight=False)


@app.callback()
def main() -> None:
    """Configure logging before any command runs."""
    setup_logging(
        level=settings.log_level,
        log_file=settings.log_file,
        json_format=settings.log_json,
    )


@app.command()
def pace(
    season: int = SEASON_ARG,
    round_num: int = ROUND_ARG,
    data_dir: Path | None = DATA_DIR_OPTION,
) -> None:
    """Race pace, stints and tire management for every driver."""
    try:
        source = get_source(season, round_num, data_dir)
        profiles = service.pace(
            source.get_race_results(season, round_num),
            source.get_lap_times(season, round_num),
        )
    except Exception as exc:
        handle_cli_error(exc)
        raise typer.Exit(1)

    print_json(profiles)


@app.command()
def gap(
    season: int = SEASON_ARG,
    round_num: int = ROUND_ARG,
    data_dir: Path | None = DATA_DIR_OPTION,
) -> None:
    """Gaps to the car ahead and to the leader in finishing order."""
    try:
        source = get_source(season, round_num, data_dir)
        profiles = service.gap(
            source.get_race_results(season, round_num),
            source.get_lap_times(season, round_num),
        )
    except Exception as exc:
        handle_cli_error(exc)
        raise typer.Exit(1)

    print_json(profiles)


@app.command()
def sector(
    season: int = SEASON_ARG,
    round_num: int = ROUND_ARG,
    data_dir: Path | None = DATA_DIR_OPTION,
) -> None:
    """Estimated qualifying sector times and the theoretical best lap."""
    try:
        source = get_source(season, round_num, data_dir)
        analysis = service.sector(source.get_qualifying_results(season, round_num))
    except Exception as exc:
        handle_cli_error(exc)
        raise typer.Exit(1)

    print_json(analysis)


@app.command()
def overtake(
    season: int = SEASON_ARG,
    round_num: int = ROUND_ARG,
    data_dir: Path | None = DATA_DIR_OPTION,
) -> None:
    """Position changes reconstructed from lap times, flagged DRS or not."""
    try:
        source = get_source(season, round_num, data_dir)
        records = service.overtake(
            source.get_race_results(season, round_num),
            source.get_lap_times(season, round_num),
        )
    except Exception as exc:
        handle_cli_error(exc)
        raise typer.Exit(1)

    print_json(records)


@app.command()
def plot(
    season: int = SEASON_ARG,
    round_num: int = ROUND_ARG,
    driver: str = typer.Argument(..., help="Driver id, e.g. max_verstappen"),
    data_dir: Path | None = DATA_DIR_OPTION,
) -> None:
    """Lap-time progression chart for one driver."""
    try:
        source = get_source(season, round_num, data_dir)
        chart = service.plot(source.get_lap_times(season, round_num, driver_id=driver), driver)
    except Exception as exc:
        handle_cli_error(exc)
        raise typer.Exit(1)

    if not isinstance(chart, ChartResult):
        print_json(chart)
        return

    for row in chart.rows:
        console.print(row, markup=False, highlight=False, soft_wrap=True)
    print_json(
        {
            "driver_id": driver,
            "statistics": chart.statistics,
            "points": chart.points,
            "y_ticks": chart.y_ticks,
            "x_labels": chart.x_labels,
        }
    )


if __name__ == "__main__":
    app()
