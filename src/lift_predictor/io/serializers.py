"""
JSON serialization for log entries and engine results.

Handles conversion between dataclasses and JSON-compatible dicts.
"""

import json
import math
import re
import uuid
from datetime import datetime
from typing import Any

from ..core.models import LogEntry, Milestone, PersonalRecord, ProgressionAnalysis, TrainingZone


class ValidationError(Exception):
    """Raised when data validation fails."""

    pass


_DATETIME_RE = re.compile(r"^\d{4}-\d{2}-\d{2}([T ]\d{2}:\d{2}(:\d{2}(\.\d+)?)?)?$")


def generate_id() -> str:
    """Return a new opaque entry id."""
    return uuid.uuid4().hex


def validate_datetime(value: str) -> datetime:
    """
    Parse an ISO date or date-time string.

    Accepts YYYY-MM-DD, YYYY-MM-DDTHH:MM and YYYY-MM-DDTHH:MM:SS[.ffffff].
    A bare date means midnight.

    Args:
        value: String to parse

    Returns:
        Naive datetime

    Raises:
        ValidationError: If the format or the date itself is invalid
    """
    if not isinstance(value, str) or not _DATETIME_RE.match(value):
        raise ValidationError(
            f"Invalid date format: {value}. Expected YYYY-MM-DD or YYYY-MM-DDTHH:MM"
        )
    try:
        return datetime.fromisoformat(value)
    except ValueError as e:
        raise ValidationError(f"Invalid date: {value}") from e


def validate_positive(value: int | float, name: str) -> int | float:
    """
    Validate that a value is a finite positive number.

    Raises:
        ValidationError: If value is not positive
    """
    if not math.isfinite(value) or value <= 0:
        raise ValidationError(f"{name} must be positive, got {value}")
    return value


def validate_non_negative(value: int | float, name: str) -> int | float:
    """
    Validate that a value is a finite non-negative number.

    Raises:
        ValidationError: If value is negative
    """
    if not math.isfinite(value) or value < 0:
        raise ValidationError(f"{name} must be non-negative, got {value}")
    return value


def log_entry_to_dict(entry: LogEntry) -> dict[str, Any]:
    """
    Convert LogEntry to JSON-compatible dict.

    The weight key is omitted for unweighted entries.
    """
    data: dict[str, Any] = {
        "id": entry.id,
        "date": entry.date.isoformat(timespec="minutes")
        if entry.date.second == 0 and entry.date.microsecond == 0
        else entry.date.isoformat(),
        "exercise_id": entry.exercise_id,
        "reps": entry.reps,
    }
    if entry.weight is not None:
        data["weight"] = entry.weight
    return data


def dict_to_log_entry(data: dict[str, Any]) -> LogEntry:
    """
    Convert dict to LogEntry, validating every field.

    Raises:
        ValidationError: If a field is missing or invalid
    """
    try:
        entry_id = data["id"]
        date_str = data["date"]
        exercise_id = data["exercise_id"]
        reps = data["reps"]
    except KeyError as e:
        raise ValidationError(f"Missing required field: {e}") from e

    if not isinstance(entry_id, str) or not entry_id:
        raise ValidationError(f"Invalid id: {entry_id!r}")
    if not isinstance(exercise_id, str) or not exercise_id.strip():
        raise ValidationError(f"Invalid exercise_id: {exercise_id!r}")
    if isinstance(reps, bool) or not isinstance(reps, int):
        raise ValidationError(f"reps must be an integer, got {reps!r}")
    validate_positive(reps, "reps")

    weight = data.get("weight")
    if weight is not None:
        if isinstance(weight, bool) or not isinstance(weight, (int, float)):
            raise ValidationError(f"weight must be a number, got {weight!r}")
        weight = float(validate_non_negative(weight, "weight"))

    return LogEntry(
        id=entry_id,
        date=validate_datetime(date_str),
        exercise_id=exercise_id,
        reps=reps,
        weight=weight,
    )


def entry_to_json_line(entry: LogEntry) -> str:
    """Serialize an entry to a single JSON line (no trailing newline)."""
    return json.dumps(log_entry_to_dict(entry), separators=(",", ":"))


def json_line_to_entry(line: str) -> LogEntry:
    """
    Deserialize a JSON line to a LogEntry.

    Raises:
        ValidationError: If JSON is invalid or data validation fails
    """
    try:
        data = json.loads(line.strip())
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ValidationError("Log record must be a JSON object")
    return dict_to_log_entry(data)


def analysis_to_dict(analysis: ProgressionAnalysis) -> dict[str, Any]:
    """Convert a ProgressionAnalysis to a JSON-compatible dict."""
    return {
        "historical_peak_1rm": round(analysis.historical_peak_1rm, 2),
        "projected_current_1rm": round(analysis.projected_current_1rm, 2),
        "best_date": analysis.best_date.isoformat(timespec="minutes"),
        "days_since_best": analysis.days_since_best,
        "daily_rate": round(analysis.daily_rate, 4),
        "weekly_rate": round(analysis.weekly_rate, 4),
        "is_stale": analysis.is_stale,
        "has_enough_data": analysis.has_enough_data,
        "optimal_day": analysis.optimal_day,
        "optimal_day_idx": analysis.optimal_day_idx,
        "optimal_time": analysis.optimal_time,
    }


def milestone_to_dict(milestone: Milestone) -> dict[str, Any]:
    """Convert a Milestone to a JSON-compatible dict."""
    return {
        "date": milestone.date,
        "target": round(milestone.target, 2),
        "target_date": milestone.target_date.isoformat() if milestone.target_date else None,
    }


def zone_to_dict(zone: TrainingZone) -> dict[str, Any]:
    """Convert a TrainingZone to a JSON-compatible dict."""
    return {"percent": zone.percent, "label": zone.label, "weight": round(zone.weight, 2)}


def personal_record_to_dict(record: PersonalRecord) -> dict[str, Any]:
    """Convert a PersonalRecord to a JSON-compatible dict."""

    def _iso(d: datetime | None) -> str | None:
        return d.isoformat(timespec="minutes") if d is not None else None

    return {
        "exercise_id": record.exercise_id,
        "entry_count": record.entry_count,
        "max_reps": record.max_reps,
        "max_reps_date": _iso(record.max_reps_date),
        "max_weight": round(record.max_weight, 2),
        "max_weight_date": _iso(record.max_weight_date),
        "best_1rm": round(record.best_1rm, 2),
        "best_1rm_date": _iso(record.best_1rm_date),
    }
