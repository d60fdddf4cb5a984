"""Log management commands: log, history, delete, exercises."""

import json
from datetime import datetime
from typing import Annotated, Optional

import typer

from ...core.exercises.registry import EXERCISE_REGISTRY, weighted_exercises
from ...core.models import LogEntry
from ...core.units import to_storage_weight
from ...io.serializers import (
    ValidationError,
    generate_id,
    log_entry_to_dict,
    validate_datetime,
)
from .. import views
from ..app import (
    ExerciseOption,
    JsonOption,
    LogPathOption,
    UnitsOption,
    app,
    get_store,
    load_logs_or_exit,
    resolve_exercise,
    resolve_units,
)


@app.command("log")
def log_set(
    exercise_id: ExerciseOption,
    reps: Annotated[
        int,
        typer.Option("--reps", "-r", help="Reps performed"),
    ],
    weight: Annotated[
        Optional[float],
        typer.Option("--weight", "-w", help="Weight lifted, in display units (weighted exercises)"),
    ] = None,
    date: Annotated[
        Optional[str],
        typer.Option("--date", "-d", help="YYYY-MM-DD or YYYY-MM-DDTHH:MM (default: now)"),
    ] = None,
    units: UnitsOption = "metric",
    log_path: LogPathOption = None,
) -> None:
    """
    Record a completed set.
    """
    system = resolve_units(units)
    exercise = resolve_exercise(exercise_id)

    if reps <= 0:
        views.print_error("reps must be positive")
        raise typer.Exit(1)

    if weight is not None and weight < 0:
        views.print_error("weight must be non-negative")
        raise typer.Exit(1)

    if exercise.is_weighted and not weight:
        views.print_warning(
            f"{exercise.display_name} is weighted; sets without weight are ignored by predictions."
        )
    if not exercise.is_weighted and weight:
        views.print_warning(f"{exercise.display_name} is unweighted; the weight is stored anyway.")

    try:
        when = validate_datetime(date) if date else datetime.now().replace(second=0, microsecond=0)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    entry = LogEntry(
        id=generate_id(),
        date=when,
        exercise_id=exercise.exercise_id,
        reps=reps,
        weight=to_storage_weight(weight, system) if weight is not None else None,
    )

    store = get_store(log_path)
    try:
        store.append_log(entry)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    weight_str = f" @ {weight:g} {'kg' if system == 'metric' else 'lbs'}" if weight is not None else ""
    views.print_success(
        f"Logged {exercise.display_name}: {reps} reps{weight_str} on {when:%Y-%m-%d %H:%M} "
        f"(id {entry.id[:8]})"
    )


@app.command()
def history(
    exercise_id: Annotated[
        Optional[str],
        typer.Option("--exercise", "-e", help="Only show this exercise"),
    ] = None,
    limit: Annotated[
        Optional[int],
        typer.Option("--limit", "-n", help="Show only the most recent N entries"),
    ] = None,
    units: UnitsOption = "metric",
    log_path: LogPathOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Display logged sets.
    """
    system = resolve_units(units)
    entries = load_logs_or_exit(get_store(log_path))

    if exercise_id is not None:
        resolve_exercise(exercise_id)
        entries = [e for e in entries if e.exercise_id == exercise_id]
    if limit is not None and limit > 0:
        entries = entries[-limit:]

    if json_out:
        print(json.dumps([log_entry_to_dict(e) for e in entries], indent=2))
        return

    views.print_logs(entries, system)


@app.command()
def delete(
    entry_id: Annotated[
        str,
        typer.Argument(help="Entry id, or a unique prefix of it (see 'history')"),
    ],
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation"),
    ] = False,
    log_path: LogPathOption = None,
) -> None:
    """
    Delete a logged set by id.
    """
    store = get_store(log_path)
    entries = load_logs_or_exit(store)

    matches = [e for e in entries if e.id.startswith(entry_id)]
    if not matches:
        views.print_error(f"No entry with id {entry_id}")
        raise typer.Exit(1)
    if len(matches) > 1:
        views.print_error(f"Id prefix {entry_id} is ambiguous ({len(matches)} entries)")
        raise typer.Exit(1)

    target = matches[0]
    label = f"{target.exercise_id} {target.reps} reps on {target.date:%Y-%m-%d %H:%M}"
    if not yes and not views.confirm_action(f"Delete {label}?"):
        views.print_info("Cancelled.")
        return

    store.delete_log(target.id)
    views.print_success(f"Deleted {label}")


@app.command()
def exercises(
    weighted: Annotated[
        bool,
        typer.Option("--weighted", help="Only exercises usable for strength predictions"),
    ] = False,
    json_out: JsonOption = False,
) -> None:
    """
    List the exercise catalog.
    """
    catalog = weighted_exercises(EXERCISE_REGISTRY) if weighted else list(EXERCISE_REGISTRY.values())

    if json_out:
        print(json.dumps([
            {
                "exercise_id": ex.exercise_id,
                "display_name": ex.display_name,
                "target_muscle": ex.target_muscle,
                "is_weighted": ex.is_weighted,
            }
            for ex in catalog
        ], indent=2))
        return

    views.print_exercises(catalog)
