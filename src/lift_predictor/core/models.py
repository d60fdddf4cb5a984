"""
Data models for lift-predictor.

LogEntry is the only input shape the engine reads.  Everything else is
produced by the engine and is frozen: results are recomputed from the
log history on every call and never mutated afterwards.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Literal

UnitSystem = Literal["metric", "imperial"]
TimeOfDay = Literal["Morning", "Afternoon", "Evening"]

DAY_NAMES: tuple[str, ...] = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)
TIME_BANDS: tuple[TimeOfDay, ...] = ("Morning", "Afternoon", "Evening")

# Sentinels exposed to presentation code
NO_DAY_SIGNAL = "Any"  # not enough data to analyse at all
NO_DOMINANT_DAY = "Any Day"  # enough data, but no weekday stood out
NO_TIME_SIGNAL = "Anytime"
NO_DAY_INDEX = -1
UNKNOWN_DATE = "Unknown"
BEYOND_HORIZON = "> 1 Year"


@dataclass
class LogEntry:
    """
    A single logged set.

    weight is None for unweighted exercises.  The engine treats entries
    with reps <= 0 or a missing/non-positive weight as non-contributing
    rather than rejecting them; validation lives in io/serializers.py.
    """

    id: str
    date: datetime
    exercise_id: str
    reps: int
    weight: float | None = None


@dataclass(frozen=True)
class TrainingZone:
    """One row of the intensity table."""

    percent: int
    label: str
    weight: float


@dataclass(frozen=True)
class ProgressionAnalysis:
    """
    Trend analysis of one exercise's log history.

    When has_enough_data is False the rates are 0, optimal_day_idx is -1
    and projected_current_1rm equals historical_peak_1rm.
    """

    historical_peak_1rm: float
    projected_current_1rm: float
    best_date: datetime
    days_since_best: int
    daily_rate: float  # storage units per day
    weekly_rate: float
    is_stale: bool
    has_enough_data: bool
    optimal_day: str
    optimal_day_idx: int  # 0-6, Sunday=0; -1 when unknown
    optimal_time: str


@dataclass(frozen=True)
class Milestone:
    """Next round-number target and when it is expected."""

    date: str  # "Oct 21", or UNKNOWN_DATE / BEYOND_HORIZON
    target: float
    target_date: date | None = None  # None whenever date is a sentinel


@dataclass(frozen=True)
class PersonalRecord:
    """Best values ever logged for one exercise."""

    exercise_id: str
    entry_count: int
    max_reps: int
    max_reps_date: datetime | None
    max_weight: float
    max_weight_date: datetime | None
    best_1rm: float
    best_1rm_date: datetime | None
