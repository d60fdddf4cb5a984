"""
Strength trend analysis.

Scans one exercise's log history and derives:

  Peak        highest blended 1RM estimate, and the set that produced it.
  Daily rate  linear change in 1RM per day, clamped to [-0.1, 0.5].
                If the peak came more than 14 days after the first set:
                  rate = (peak − first) / days_to_peak
                otherwise:
                  rate = (last − first) / total_span_days
  Staleness   peak older than 30 days.
  Projection  peak + rate × days_since_peak, except for an improving but
              stale trend, which is frozen at the peak (maintenance is
              assumed after a layoff, not unproven growth).
  Patterns    weekday and time-of-day with the highest average estimate.

Insufficient history is reported through the sentinel fields of
ProgressionAnalysis, never by raising.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable

from .config import DEFAULT_MODEL_CONFIG, ModelConfig
from .estimator import estimate_1rm
from .metrics import relevant_entries, time_of_day, weekday_index, whole_days_between
from .models import (
    DAY_NAMES,
    NO_DAY_INDEX,
    NO_DAY_SIGNAL,
    NO_DOMINANT_DAY,
    NO_TIME_SIGNAL,
    TIME_BANDS,
    LogEntry,
    ProgressionAnalysis,
)


@dataclass(frozen=True)
class _TrendFit:
    """Intermediate result when the history supports a trend."""

    peak_1rm: float
    best_date: datetime
    days_since_best: int
    daily_rate: float
    is_stale: bool
    projected_1rm: float


def _no_signal(peak_1rm: float, best_date: datetime, days_since_best: int) -> ProgressionAnalysis:
    return ProgressionAnalysis(
        historical_peak_1rm=peak_1rm,
        projected_current_1rm=peak_1rm,
        best_date=best_date,
        days_since_best=days_since_best,
        daily_rate=0.0,
        weekly_rate=0.0,
        is_stale=False,
        has_enough_data=False,
        optimal_day=NO_DAY_SIGNAL,
        optimal_day_idx=NO_DAY_INDEX,
        optimal_time=NO_TIME_SIGNAL,
    )


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _daily_rate(
    first_est: float,
    peak_est: float,
    last_est: float,
    time_to_best_days: int,
    total_span_days: int,
    config: ModelConfig,
) -> float:
    """
    Linear 1RM change per day.

    A peak reached over a sustained period (> min_time_to_best_days) is
    trusted as the rate; a quick peak falls back to the whole-history
    slope.  Zero-length spans give 0.0.
    """
    if time_to_best_days > config.min_time_to_best_days and time_to_best_days > 0:
        rate = (peak_est - first_est) / time_to_best_days
    elif total_span_days > 0:
        rate = (last_est - first_est) / total_span_days
    else:
        rate = 0.0
    return _clamp(rate, config.daily_rate_min, config.daily_rate_max)


def _project_current(
    peak_1rm: float,
    daily_rate: float,
    days_since_best: int,
    is_stale: bool,
) -> float:
    projected = peak_1rm
    if daily_rate > 0 and not is_stale:
        projected += daily_rate * days_since_best
    elif daily_rate < 0:
        # A declining trend keeps declining regardless of staleness
        projected += daily_rate * days_since_best
    return max(0.0, projected)


def _fit_trend(
    entries: list[LogEntry],
    estimates: list[float],
    now: datetime,
    config: ModelConfig,
) -> tuple[_TrendFit | None, datetime, int]:
    """
    Fit the trend over sorted relevant entries.

    Returns:
        (fit or None when the span is too short, best_date, days_since_best)
    """
    best_idx = 0
    peak = 0.0
    for i, est in enumerate(estimates):
        if est > peak:
            peak = est
            best_idx = i

    first, last, best = entries[0], entries[-1], entries[best_idx]
    total_span_days = whole_days_between(first.date, last.date)
    time_to_best_days = whole_days_between(first.date, best.date)
    days_since_best = whole_days_between(best.date, now)

    if total_span_days < config.min_span_days:
        return None, best.date, days_since_best

    rate = _daily_rate(
        estimates[0], peak, estimates[-1], time_to_best_days, total_span_days, config
    )
    stale = days_since_best > config.stale_after_days

    fit = _TrendFit(
        peak_1rm=peak,
        best_date=best.date,
        days_since_best=days_since_best,
        daily_rate=rate,
        is_stale=stale,
        projected_1rm=_project_current(peak, rate, days_since_best, stale),
    )
    return fit, best.date, days_since_best


def _best_bucket(totals: dict, counts: dict, order: Iterable) -> object | None:
    """Key with the highest average; first in `order` wins ties."""
    best_key = None
    best_avg = 0.0
    for key in order:
        n = counts.get(key, 0)
        if n == 0:
            continue
        avg = totals[key] / n
        if avg > best_avg:
            best_avg = avg
            best_key = key
    return best_key


def optimal_patterns(
    entries: list[LogEntry],
    estimates: list[float],
    config: ModelConfig = DEFAULT_MODEL_CONFIG,
) -> tuple[int, str]:
    """
    Find the weekday and time band with the strongest average estimate.

    Args:
        entries: Relevant entries
        estimates: 1RM estimate for each entry (same order)
        config: Time band boundaries

    Returns:
        (weekday index Sunday=0, or -1; time band name, or "Anytime")
    """
    day_totals: dict[int, float] = {}
    day_counts: dict[int, int] = {}
    time_totals: dict[str, float] = {}
    time_counts: dict[str, int] = {}

    for entry, est in zip(entries, estimates):
        d = weekday_index(entry.date)
        day_totals[d] = day_totals.get(d, 0.0) + est
        day_counts[d] = day_counts.get(d, 0) + 1

        band = time_of_day(entry.date, config)
        time_totals[band] = time_totals.get(band, 0.0) + est
        time_counts[band] = time_counts.get(band, 0) + 1

    best_day = _best_bucket(day_totals, day_counts, range(7))
    best_time = _best_bucket(time_totals, time_counts, TIME_BANDS)

    day_idx = best_day if best_day is not None else NO_DAY_INDEX
    return day_idx, best_time if best_time is not None else NO_TIME_SIGNAL  # type: ignore[return-value]


def analyze_progression(
    logs: Iterable[LogEntry],
    exercise_id: str,
    now: datetime | None = None,
    config: ModelConfig | None = None,
) -> ProgressionAnalysis:
    """
    Analyse the 1RM trend of one exercise.

    Args:
        logs: Full log history (not mutated; other exercises are ignored)
        exercise_id: Exercise to analyse
        now: Evaluation instant (default: current local time)
        config: Model thresholds (default: DEFAULT_MODEL_CONFIG)

    Returns:
        ProgressionAnalysis; has_enough_data is False when fewer than two
        relevant entries exist or they span less than a week
    """
    cfg = config or DEFAULT_MODEL_CONFIG
    if now is None:
        now = datetime.now()

    entries = relevant_entries(logs, exercise_id)
    estimates = [estimate_1rm(e.weight, e.reps) for e in entries]
    peak = max(estimates, default=0.0)

    if len(entries) < cfg.min_entries:
        return _no_signal(peak, now, 0)

    fit, best_date, days_since_best = _fit_trend(entries, estimates, now, cfg)
    if fit is None:
        return _no_signal(peak, best_date, days_since_best)

    day_idx, best_time = optimal_patterns(entries, estimates, cfg)

    return ProgressionAnalysis(
        historical_peak_1rm=fit.peak_1rm,
        projected_current_1rm=fit.projected_1rm,
        best_date=fit.best_date,
        days_since_best=fit.days_since_best,
        daily_rate=fit.daily_rate,
        weekly_rate=fit.daily_rate * 7,
        is_stale=fit.is_stale,
        has_enough_data=True,
        optimal_day=DAY_NAMES[day_idx] if day_idx != NO_DAY_INDEX else NO_DOMINANT_DAY,
        optimal_day_idx=day_idx,
        optimal_time=best_time,
    )
