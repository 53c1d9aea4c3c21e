"""Command-line interface for ganttcore."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Annotated

import typer

from . import context
from .config import EngineConfig, discover_engine_config
from .exceptions import GanttError
from .loader import load_project, save_project
from .logger import setup_logger
from .models import Project
from .scheduler import CriticalPathMode, GapStrategyType, compute_critical_path
from .timescale import TimeScale, position_of, span_of
from .workdays import ProjectSettings, project_date_add, project_duration

app = typer.Typer(
    name="ganttcore",
    help="Calendar-aware project scheduling: durations, working-day arithmetic and critical path",
    add_completion=False,
)


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbosity level: 0=silent (default), 1=show changes, 2=show all checks, 3=debug",
            min=0,
            max=3,
        ),
    ] = 0,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to engine config file (default: ganttcore_config.yaml)",
        ),
    ] = None,
) -> None:
    """Global options for ganttcore commands."""
    setup_logger(verbose)
    context.set_config_path(config)


def _load_project_or_exit(file: Path) -> Project:
    """Load a project file, turning load errors into a CLI error exit."""
    try:
        return load_project(file)
    except GanttError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None


def _load_config_or_exit(file: Path | None) -> EngineConfig:
    """Discover the engine config, turning config errors into a CLI error exit."""
    try:
        return discover_engine_config(file)
    except (FileNotFoundError, ValueError) as e:
        typer.echo(f"Error: Invalid config: {e}", err=True)
        raise typer.Exit(1) from None


def _parse_date_option(date_str: str | None, option_name: str) -> date | None:
    """Parse a YYYY-MM-DD date given on the command line."""
    if date_str is None:
        return None

    try:
        return date.fromisoformat(date_str)
    except ValueError:
        typer.echo(
            f"Error: Invalid date format for {option_name} '{date_str}'. Use YYYY-MM-DD format.",
            err=True,
        )
        raise typer.Exit(1) from None


def _settings_for(project_file: Path | None) -> ProjectSettings:
    """Calendar from a project file, or the default Mon-Fri calendar."""
    if project_file is None:
        return ProjectSettings()
    return _load_project_or_exit(project_file).settings


@app.command()
def critical_path(
    file: Annotated[Path, typer.Argument(help="Path to the project JSON file")],
    *,
    mode: Annotated[
        CriticalPathMode | None,
        typer.Option("--mode", help="Critical path solver (overrides config)"),
    ] = None,
    gap: Annotated[
        GapStrategyType | None,
        typer.Option("--gap", help="Gap strategy for the slack solver (overrides config)"),
    ] = None,
    only_critical: Annotated[
        bool, typer.Option("--only-critical", help="List only critical tasks")
    ] = False,
) -> None:
    """Compute the critical path and per-task slack."""
    project = _load_project_or_exit(file)
    config = _load_config_or_exit(file)

    updates: dict[str, object] = {}
    if mode is not None:
        updates["mode"] = mode
    if gap is not None:
        updates["gap_strategy"] = gap
    cp_config = config.critical_path.model_copy(update=updates)

    result = compute_critical_path(
        project.tasks, project.dependencies, project.settings, cp_config
    )

    if result.project_finish is None:
        typer.echo("No tasks")
        return

    typer.echo(f"Project finish: {result.project_finish.isoformat()}")
    for task in project.tasks:
        is_critical = result.is_critical(task.id)
        if only_critical and not is_critical:
            continue
        marker = "*" if is_critical else " "
        slack = result.slack.get(task.id)
        slack_str = str(slack) if slack is not None else "-"
        typer.echo(
            f"{marker} {task.id}\t{task.name}\t{task.start.isoformat()} -> "
            f"{task.end.isoformat()}\tslack={slack_str}"
        )

    for warning in result.warnings:
        typer.echo(f"Warning: {warning}", err=True)


@app.command()
def refresh(
    file: Annotated[Path, typer.Argument(help="Path to the project JSON file")],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output file path (default: overwrite input)"),
    ] = None,
) -> None:
    """Recompute every task duration from its dates and the project calendar."""
    project = _load_project_or_exit(file)
    target = output or file
    save_project(project, target)
    typer.echo(f"Durations refreshed for {len(project.tasks)} tasks, written to {target}")


@app.command()
def duration(
    start: Annotated[str, typer.Argument(help="Start date (YYYY-MM-DD)")],
    end: Annotated[str, typer.Argument(help="End date, inclusive (YYYY-MM-DD)")],
    *,
    project: Annotated[
        Path | None,
        typer.Option("--project", "-p", help="Project file whose calendar to use"),
    ] = None,
    strict: Annotated[
        bool, typer.Option("--strict", help="Report 0 when end is before start")
    ] = False,
) -> None:
    """Count working days between two dates (inclusive)."""
    start_date = _parse_date_option(start, "START")
    end_date = _parse_date_option(end, "END")
    assert start_date is not None and end_date is not None

    settings = _settings_for(project)
    typer.echo(str(project_duration(start_date, end_date, settings, strict=strict)))


@app.command()
def add_days(
    start: Annotated[str, typer.Argument(help="Start date (YYYY-MM-DD)")],
    days: Annotated[int, typer.Argument(help="Duration in working days")],
    *,
    project: Annotated[
        Path | None,
        typer.Option("--project", "-p", help="Project file whose calendar to use"),
    ] = None,
) -> None:
    """Print the end date of a task with the given working-day duration."""
    start_date = _parse_date_option(start, "START")
    assert start_date is not None

    settings = _settings_for(project)
    typer.echo(project_date_add(start_date, days, settings).isoformat())


@app.command()
def positions(
    file: Annotated[Path, typer.Argument(help="Path to the project JSON file")],
    *,
    scale: Annotated[
        TimeScale | None, typer.Option("--scale", help="Time scale (overrides config)")
    ] = None,
    reference: Annotated[
        str | None,
        typer.Option("--reference", help="Chart left edge (YYYY-MM-DD). Defaults to first start"),
    ] = None,
    unit_size: Annotated[
        float | None,
        typer.Option("--unit-size", help="Column width (overrides config)", min=0.0),
    ] = None,
) -> None:
    """Print chart x-offset and width for every task."""
    project = _load_project_or_exit(file)
    config = _load_config_or_exit(file)

    if not project.tasks:
        typer.echo("No tasks")
        return

    effective_scale = scale or config.timescale.scale
    effective_unit = unit_size if unit_size is not None else config.timescale.unit_size
    reference_date = _parse_date_option(reference, "--reference") or min(
        task.start for task in project.tasks
    )

    for task in project.tasks:
        x = position_of(task.start, reference_date, effective_scale, effective_unit)
        width = span_of(
            task.start,
            task.end,
            effective_scale,
            effective_unit,
            min_span=config.timescale.min_span,
        )
        typer.echo(f"{task.id}\t{x:.2f}\t{width:.2f}")


def main() -> int:
    """Main entry point."""
    # Typer handles sys.exit() internally
    app()
    return 0


if __name__ == "__main__":
    main()
