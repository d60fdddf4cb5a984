"""Shared Typer app object, shared option types, and store utility."""

from datetime import datetime
from pathlib import Path
from typing import Annotated, Optional

import typer

from ..core.exercises.base import ExerciseDefinition
from ..core.exercises.registry import get_exercise
from ..core.models import LogEntry, UnitSystem
from ..core.units import validate_unit_system
from ..io.log_store import LogStore, get_default_log_path
from ..io.serializers import ValidationError, validate_datetime
from . import views

# Shared --exercise option type used across all commands
ExerciseOption = Annotated[
    str,
    typer.Option("--exercise", "-e", help="Exercise ID, e.g. bench_press (see 'exercises')"),
]

LogPathOption = Annotated[
    Optional[Path],
    typer.Option("--log-path", "-p", help="Path to log JSONL file"),
]

UnitsOption = Annotated[
    str,
    typer.Option("--units", "-u", help="Display units: metric (kg) or imperial (lbs)"),
]

JsonOption = Annotated[
    bool,
    typer.Option("--json", "-j", help="Output as JSON for machine processing"),
]

app = typer.Typer(
    name="lift-predictor",
    help="Estimate one-rep maxes and forecast strength progress from your workout log.",
    no_args_is_help=True,
)


def get_store(log_path: Path | None) -> LogStore:
    """Get log store from path or default location."""
    if log_path is None:
        log_path = get_default_log_path()
    return LogStore(log_path)


def resolve_units(units: str) -> UnitSystem:
    """Validate --units, exiting with an error message if invalid."""
    try:
        return validate_unit_system(units)
    except ValueError as e:
        views.print_error(str(e))
        raise typer.Exit(1)


def resolve_exercise(exercise_id: str, require_weighted: bool = False) -> ExerciseDefinition:
    """Look up an exercise, exiting with an error message if unknown/unsuitable."""
    try:
        exercise = get_exercise(exercise_id)
    except ValueError as e:
        views.print_error(str(e))
        raise typer.Exit(1)
    if require_weighted and not exercise.is_weighted:
        views.print_error(
            f"{exercise.display_name} is not a weighted exercise; "
            "strength predictions need logged weights."
        )
        raise typer.Exit(1)
    return exercise


def resolve_as_of(as_of: str | None) -> datetime:
    """Parse --as-of (default: now), exiting with an error message if invalid."""
    if as_of is None:
        return datetime.now()
    try:
        return validate_datetime(as_of)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)


def load_logs_or_exit(store: LogStore) -> list[LogEntry]:
    """Load all entries, exiting with an error message if the file is missing or invalid."""
    if not store.exists():
        views.print_error(f"Log file not found: {store.log_path}")
        views.print_info("Run 'log' first to record a set.")
        raise typer.Exit(1)
    try:
        return store.load_logs()
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)
