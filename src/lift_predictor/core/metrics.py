"""
Pure metric computation functions.

Small building blocks shared by the trend analyzer and the CLI.
All functions are pure: they never mutate the entries they are given.
"""

import math
from datetime import datetime
from typing import Iterable

from .config import DEFAULT_MODEL_CONFIG, ModelConfig
from .estimator import estimate_1rm
from .models import LogEntry, PersonalRecord, TimeOfDay

SECONDS_PER_DAY = 86400


def is_relevant(entry: LogEntry, exercise_id: str) -> bool:
    """
    Check whether an entry contributes to weighted progression.

    Args:
        entry: Logged set
        exercise_id: Exercise being analysed

    Returns:
        True for a matching exercise with reps > 0 and a finite weight > 0
    """
    if entry.exercise_id != exercise_id:
        return False
    if entry.reps is None or entry.reps <= 0:
        return False
    w = entry.weight
    return w is not None and math.isfinite(w) and w > 0


def relevant_entries(logs: Iterable[LogEntry], exercise_id: str) -> list[LogEntry]:
    """
    Filter logs to one exercise's weighted sets, oldest first.

    The sort is stable, so entries sharing a timestamp keep input order.

    Args:
        logs: Any collection of log entries (left untouched)
        exercise_id: Exercise to keep

    Returns:
        New list of relevant entries sorted by date
    """
    return sorted(
        (e for e in logs if is_relevant(e, exercise_id)),
        key=lambda e: e.date,
    )


def whole_days_between(start: datetime, end: datetime) -> int:
    """
    Whole days elapsed from start to end (floor; negative if end < start).

    Args:
        start: Earlier instant
        end: Later instant

    Returns:
        floor((end - start) / 1 day)
    """
    return math.floor((end - start).total_seconds() / SECONDS_PER_DAY)


def weekday_index(when: datetime) -> int:
    """Weekday with Sunday=0 ... Saturday=6."""
    return (when.weekday() + 1) % 7


def time_of_day(when: datetime, config: ModelConfig = DEFAULT_MODEL_CONFIG) -> TimeOfDay:
    """
    Classify a timestamp into a training time band.

    Morning 04:00-11:59, Afternoon 12:00-17:59, Evening otherwise
    (with the default config).
    """
    h = when.hour
    if config.morning_start_hour <= h < config.afternoon_start_hour:
        return "Morning"
    if config.afternoon_start_hour <= h < config.evening_start_hour:
        return "Afternoon"
    return "Evening"


def personal_record(logs: Iterable[LogEntry], exercise_id: str) -> PersonalRecord:
    """
    Collect the best values ever logged for an exercise.

    Reps are counted for every entry of the exercise (weighted or not);
    weight and 1RM only for relevant weighted entries.  Ties keep the
    earliest date.

    Args:
        logs: Log history
        exercise_id: Exercise to summarise

    Returns:
        PersonalRecord (zeros and None dates when nothing was logged)
    """
    entries = sorted(
        (e for e in logs if e.exercise_id == exercise_id and e.reps is not None and e.reps > 0),
        key=lambda e: e.date,
    )

    max_reps = 0
    max_reps_date: datetime | None = None
    max_weight = 0.0
    max_weight_date: datetime | None = None
    best_1rm = 0.0
    best_1rm_date: datetime | None = None

    for e in entries:
        if e.reps > max_reps:
            max_reps, max_reps_date = e.reps, e.date
        if not is_relevant(e, exercise_id):
            continue
        if e.weight > max_weight:  # type: ignore[operator]
            max_weight, max_weight_date = float(e.weight), e.date  # type: ignore[arg-type]
        est = estimate_1rm(e.weight, e.reps)
        if est > best_1rm:
            best_1rm, best_1rm_date = est, e.date

    return PersonalRecord(
        exercise_id=exercise_id,
        entry_count=len(entries),
        max_reps=max_reps,
        max_reps_date=max_reps_date,
        max_weight=max_weight,
        max_weight_date=max_weight_date,
        best_1rm=best_1rm,
        best_1rm_date=best_1rm_date,
    )
