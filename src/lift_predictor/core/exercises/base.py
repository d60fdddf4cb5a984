"""
Base types for exercise definitions.

ExerciseDefinition is catalog metadata only: the progression engine
never looks it up.  Callers use is_weighted to decide which exercises
can be analysed at all.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ExerciseDefinition:
    """Static description of one exercise."""

    exercise_id: str      # e.g. "bench_press"
    display_name: str     # e.g. "Bench Press"
    target_muscle: str    # e.g. "Chest & Triceps"
    is_weighted: bool     # True when sets carry an external load
    unit: str = "reps"    # what LogEntry.reps counts
