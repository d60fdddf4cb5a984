"""
CLI view formatters using Rich for pretty console output.

Handles table formatting and display of logs and engine results.
All weights arrive in storage units and are converted for display here.
"""

from rich.console import Console
from rich.table import Table

from ..core.estimator import estimate_1rm
from ..core.exercises.base import ExerciseDefinition
from ..core.models import (
    LogEntry,
    Milestone,
    PersonalRecord,
    ProgressionAnalysis,
    TrainingZone,
    UnitSystem,
)
from ..core.units import to_display_rate, to_display_weight, weight_unit

console = Console()


def _w(value: float, system: UnitSystem) -> str:
    """Format a storage weight in the display unit."""
    return f"{to_display_weight(value, system):.1f} {weight_unit(system)}"


def format_log_table(entries: list[LogEntry], system: UnitSystem = "metric") -> Table:
    """
    Create a Rich table displaying log entries.

    Args:
        entries: Entries to display, in order
        system: Display unit system

    Returns:
        Rich Table object
    """
    table = Table(title="Workout Log")

    table.add_column("#", justify="right", style="dim", width=3)
    table.add_column("ID", style="dim")
    table.add_column("Date", style="cyan")
    table.add_column("Exercise", style="magenta")
    table.add_column("Reps", justify="right")
    table.add_column(f"Weight({weight_unit(system)})", justify="right")
    table.add_column("Est. 1RM", justify="right", style="bold")

    for i, entry in enumerate(entries, 1):
        est = estimate_1rm(entry.weight, entry.reps)
        table.add_row(
            str(i),
            entry.id[:8],
            entry.date.strftime("%Y-%m-%d %H:%M"),
            entry.exercise_id,
            str(entry.reps),
            f"{to_display_weight(entry.weight, system):.1f}" if entry.weight else "-",
            f"{to_display_weight(est, system):.1f}" if est > 0 else "-",
        )

    return table


def print_logs(entries: list[LogEntry], system: UnitSystem = "metric") -> None:
    """Print log entries to console."""
    if not entries:
        console.print("[yellow]No entries recorded yet.[/yellow]")
        return
    console.print(format_log_table(entries, system))


def print_exercises(exercises: list[ExerciseDefinition]) -> None:
    """Print the exercise catalog."""
    table = Table(title="Exercises")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Target muscle", style="dim")
    table.add_column("Weighted", justify="center")

    for ex in exercises:
        table.add_row(ex.exercise_id, ex.display_name, ex.target_muscle, "yes" if ex.is_weighted else "-")

    console.print(table)


def print_zone_table(zones: list[TrainingZone], system: UnitSystem = "metric") -> None:
    """Print the training-percentage table."""
    table = Table(title="Training Percentages")
    table.add_column("Intensity", justify="right", style="bold")
    table.add_column("Goal", style="dim")
    table.add_column("Weight", justify="right", style="cyan")

    for zone in zones:
        table.add_row(f"{zone.percent}%", zone.label, _w(zone.weight, system))

    console.print(table)


def format_analysis_display(
    analysis: ProgressionAnalysis,
    exercise_name: str,
    system: UnitSystem = "metric",
) -> str:
    """
    Format a progression analysis as a text block.

    Args:
        analysis: Engine output
        exercise_name: Display name shown in the heading
        system: Display unit system

    Returns:
        Formatted string
    """
    lines = [f"{exercise_name} progression"]
    lines.append(f"- Peak 1RM:      {_w(analysis.historical_peak_1rm, system)}")

    if not analysis.has_enough_data:
        lines.append("- Not enough data: log at least two weighted sets a week or more apart.")
        return "\n".join(lines)

    unit = weight_unit(system)
    weekly = to_display_rate(analysis.weekly_rate, system)
    lines.extend(
        [
            f"- Current (est.): {_w(analysis.projected_current_1rm, system)}",
            f"- Best set:       {analysis.best_date:%Y-%m-%d} ({analysis.days_since_best} days ago)",
            f"- Trend:          {weekly:+.2f} {unit}/week",
            f"- Stale:          {'yes (growth forecasts halved)' if analysis.is_stale else 'no'}",
            f"- Strongest day:  {analysis.optimal_day}",
            f"- Strongest time: {analysis.optimal_time}",
        ]
    )
    return "\n".join(lines)


def print_analysis(
    analysis: ProgressionAnalysis,
    exercise_name: str,
    system: UnitSystem = "metric",
) -> None:
    """Print a progression analysis."""
    console.print()
    console.print(format_analysis_display(analysis, exercise_name, system))
    console.print()


def print_forecast(
    baseline: float,
    projections: list[tuple[int, float]],
    milestone: Milestone,
    analysis: ProgressionAnalysis,
    system: UnitSystem = "metric",
) -> None:
    """
    Print future-growth projections and the next milestone.

    Args:
        baseline: Projected current 1RM in storage units
        projections: (weeks, projected 1RM) pairs
        milestone: Next milestone prediction
        analysis: Analysis the projections came from
        system: Display unit system
    """
    console.print()
    console.print(f"[bold]Current baseline:[/bold] {_w(baseline, system)}")

    if not analysis.has_enough_data:
        console.print("[yellow]Not enough history for a trend; projections stay at baseline.[/yellow]")

    table = Table(title="Projected 1RM")
    table.add_column("Horizon", justify="right")
    table.add_column("1RM", justify="right", style="bold")
    table.add_column("Change", justify="right", style="dim")
    for weeks, value in projections:
        delta = to_display_weight(value, system) - to_display_weight(baseline, system)
        table.add_row(f"{weeks} weeks", _w(value, system), f"{delta:+.1f}")
    console.print(table)

    if analysis.is_stale:
        print_warning(
            f"Best set is {analysis.days_since_best} days old; growth rate halved for detraining."
        )

    gain = to_display_weight(milestone.target, system) - to_display_weight(baseline, system)
    console.print(
        f"[bold]Next milestone:[/bold] {_w(milestone.target, system)} "
        f"(+{gain:.1f}), expected: [cyan]{milestone.date}[/cyan]"
    )
    console.print()


def print_record(
    record: PersonalRecord,
    exercise_name: str,
    system: UnitSystem = "metric",
) -> None:
    """Print personal records for one exercise."""
    if record.entry_count == 0:
        console.print(f"[yellow]No entries for {exercise_name} yet.[/yellow]")
        return

    table = Table(title=f"{exercise_name} records")
    table.add_column("Record")
    table.add_column("Value", justify="right", style="bold")
    table.add_column("Date", style="cyan")

    def _d(value) -> str:
        return value.strftime("%Y-%m-%d") if value is not None else "-"

    table.add_row("Most reps", str(record.max_reps), _d(record.max_reps_date))
    if record.max_weight > 0:
        table.add_row("Heaviest set", _w(record.max_weight, system), _d(record.max_weight_date))
        table.add_row("Best est. 1RM", _w(record.best_1rm, system), _d(record.best_1rm_date))
    table.add_row("Entries", str(record.entry_count), "")

    console.print(table)


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{message}[/green]")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error: {message}[/red]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning: {message}[/yellow]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]{message}[/blue]")


def confirm_action(message: str) -> bool:
    """
    Prompt user for confirmation.

    Args:
        message: Confirmation message

    Returns:
        True if confirmed, False otherwise
    """
    response = console.input(f"{message} [y/N]: ")
    return response.lower() in ("y", "yes")
