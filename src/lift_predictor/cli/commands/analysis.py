"""Analysis commands: one-rm, analyze, predict, records."""

import json
from typing import Annotated, Optional

import typer

from ...core.engine.config_loader import load_model_config
from ...core.estimator import brzycki_1rm, epley_1rm, estimate_1rm
from ...core.metrics import personal_record
from ...core.progression import analyze_progression
from ...core.projection import forecast, predict_next_milestone
from ...core.units import milestone_step, to_display_weight, to_storage_weight
from ...core.zones import training_zones
from ...io.serializers import (
    analysis_to_dict,
    milestone_to_dict,
    personal_record_to_dict,
    zone_to_dict,
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
    resolve_as_of,
    resolve_exercise,
    resolve_units,
)

AsOfOption = Annotated[
    Optional[str],
    typer.Option("--as-of", help="Evaluation date YYYY-MM-DD[THH:MM] (default: now)"),
]


@app.command("one-rm")
def one_rm(
    weight: Annotated[
        float,
        typer.Option("--weight", "-w", help="Weight lifted, in display units"),
    ],
    reps: Annotated[
        int,
        typer.Option("--reps", "-r", help="Reps performed to failure"),
    ],
    units: UnitsOption = "metric",
    json_out: JsonOption = False,
) -> None:
    """
    Estimate a one-rep max from a single set and show training zones.

    The estimate is the mean of the Epley and Brzycki formulas; a single
    rep is its own max.
    """
    system = resolve_units(units)
    if weight < 0 or reps < 0:
        views.print_error("weight and reps must be non-negative")
        raise typer.Exit(1)

    storage_weight = to_storage_weight(weight, system)
    estimate = estimate_1rm(storage_weight, reps)
    zones = training_zones(estimate)

    if json_out:
        print(json.dumps({
            "weight": weight,
            "reps": reps,
            "units": system,
            "epley": round(to_display_weight(epley_1rm(storage_weight, reps), system), 2),
            "brzycki": round(to_display_weight(brzycki_1rm(storage_weight, reps), system), 2),
            "estimated_1rm": round(to_display_weight(estimate, system), 2),
            "zones": [
                {**zone_to_dict(z), "weight": round(to_display_weight(z.weight, system), 2)}
                for z in zones
            ],
        }, indent=2))
        return

    views.console.print()
    views.console.print(
        f"[bold]Estimated 1RM:[/bold] {to_display_weight(estimate, system):.1f} "
        f"({weight:g} × {reps})"
    )
    if estimate > 0:
        views.print_zone_table(zones, system)
    else:
        views.print_info("Enter a set performed to exhaustion (weight and reps above zero).")
    views.console.print()


@app.command()
def analyze(
    exercise_id: ExerciseOption = "bench_press",
    log_path: LogPathOption = None,
    as_of: AsOfOption = None,
    units: UnitsOption = "metric",
    json_out: JsonOption = False,
) -> None:
    """
    Analyse strength progression for a weighted exercise.

    Reports the peak and current estimated 1RM, the weekly trend,
    staleness and the strongest weekday / time of day.
    """
    system = resolve_units(units)
    exercise = resolve_exercise(exercise_id, require_weighted=True)
    now = resolve_as_of(as_of)
    logs = load_logs_or_exit(get_store(log_path))

    analysis = analyze_progression(logs, exercise.exercise_id, now=now, config=load_model_config())

    if json_out:
        print(json.dumps({"exercise_id": exercise.exercise_id, **analysis_to_dict(analysis)}, indent=2))
        return

    views.print_analysis(analysis, exercise.display_name, system)


@app.command()
def predict(
    exercise_id: ExerciseOption = "bench_press",
    log_path: LogPathOption = None,
    as_of: AsOfOption = None,
    units: UnitsOption = "metric",
    step: Annotated[
        Optional[float],
        typer.Option("--step", help="Milestone step in display units (default: 2.5 kg / 5 lbs)"),
    ] = None,
    json_out: JsonOption = False,
) -> None:
    """
    Forecast future 1RM and the date of the next milestone.

    Projections start from the current estimated 1RM and follow the
    measured trend; a stale trend grows at half speed.
    """
    system = resolve_units(units)
    exercise = resolve_exercise(exercise_id, require_weighted=True)
    now = resolve_as_of(as_of)
    logs = load_logs_or_exit(get_store(log_path))
    config = load_model_config()

    analysis = analyze_progression(logs, exercise.exercise_id, now=now, config=config)
    baseline = analysis.projected_current_1rm
    projections = forecast(baseline, analysis, config=config)

    step_storage = to_storage_weight(step, system) if step is not None else milestone_step(system)
    milestone = predict_next_milestone(baseline, analysis, step_storage, now=now, config=config)

    if json_out:
        print(json.dumps({
            "exercise_id": exercise.exercise_id,
            "baseline_1rm": round(baseline, 2),
            "projections": [
                {"weeks": weeks, "projected_1rm": round(value, 2)} for weeks, value in projections
            ],
            "milestone": milestone_to_dict(milestone),
            "analysis": analysis_to_dict(analysis),
        }, indent=2))
        return

    views.print_forecast(baseline, projections, milestone, analysis, system)


@app.command()
def records(
    exercise_id: ExerciseOption = "bench_press",
    log_path: LogPathOption = None,
    units: UnitsOption = "metric",
    json_out: JsonOption = False,
) -> None:
    """
    Show personal records for an exercise.
    """
    system = resolve_units(units)
    exercise = resolve_exercise(exercise_id)
    logs = load_logs_or_exit(get_store(log_path))

    record = personal_record(logs, exercise.exercise_id)

    if json_out:
        print(json.dumps(personal_record_to_dict(record), indent=2))
        return

    views.print_record(record, exercise.display_name, system)
