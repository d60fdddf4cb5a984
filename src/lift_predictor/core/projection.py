"""
Forward projections from a ProgressionAnalysis.

  Future max  baseline + daily_rate × 7 × weeks × k
  Milestone   next multiple of `step` above baseline, reached after
              (target − baseline) / (daily_rate × k) days

where k = 0.5 for a stale trend (detraining discount), else 1.0.
"""

from __future__ import annotations

import math
from datetime import date, datetime, timedelta
from typing import Sequence

from .config import DEFAULT_MODEL_CONFIG, FORECAST_WEEKS, ModelConfig
from .models import (
    BEYOND_HORIZON,
    NO_DAY_INDEX,
    UNKNOWN_DATE,
    Milestone,
    ProgressionAnalysis,
)


def _rate_multiplier(analysis: ProgressionAnalysis, config: ModelConfig) -> float:
    return config.stale_rate_multiplier if analysis.is_stale else 1.0


def predict_future_max(
    baseline_1rm: float,
    weeks: float,
    analysis: ProgressionAnalysis,
    config: ModelConfig | None = None,
) -> float:
    """
    Project a 1RM `weeks` into the future.

    Args:
        baseline_1rm: Starting capacity (usually projected_current_1rm)
        weeks: Horizon in weeks
        analysis: Trend analysis for the exercise
        config: Model thresholds

    Returns:
        Projected 1RM; the baseline itself when there is no trend signal
    """
    cfg = config or DEFAULT_MODEL_CONFIG
    if not analysis.has_enough_data:
        return baseline_1rm

    projected_gain = analysis.daily_rate * 7 * weeks * _rate_multiplier(analysis, cfg)

    # Never show a loss on an improving trend
    if analysis.daily_rate > 0 and projected_gain < 0:
        return baseline_1rm

    return max(0.0, baseline_1rm + projected_gain)


def forecast(
    baseline_1rm: float,
    analysis: ProgressionAnalysis,
    horizons: Sequence[int] = FORECAST_WEEKS,
    config: ModelConfig | None = None,
) -> list[tuple[int, float]]:
    """Projected 1RM at each horizon, as (weeks, value) pairs."""
    return [(w, predict_future_max(baseline_1rm, w, analysis, config)) for w in horizons]


def next_milestone_target(baseline_1rm: float, step: float) -> float:
    """
    Smallest multiple of step strictly greater than baseline_1rm.

    A baseline sitting exactly on a grid line advances one more step.
    """
    target = math.ceil(baseline_1rm / step) * step
    if target <= baseline_1rm:
        target += step
    return target


def format_month_day(d: date) -> str:
    """Render a date as e.g. 'Oct 21'."""
    return f"{d.strftime('%b')} {d.day}"


def predict_next_milestone(
    baseline_1rm: float,
    analysis: ProgressionAnalysis,
    step: float | None = None,
    now: datetime | None = None,
    config: ModelConfig | None = None,
) -> Milestone:
    """
    Predict the next round-number 1RM and the date it should be reached.

    The candidate date is pushed forward (0-6 days) onto the lifter's
    historically strongest weekday when one is known.

    Args:
        baseline_1rm: Current capacity in storage units
        analysis: Trend analysis for the exercise
        step: Milestone grid in storage units (default 2.5)
        now: Evaluation instant (default: current local time)
        config: Model thresholds

    Returns:
        Milestone with date "Unknown" for a flat/declining trend or
        insufficient data, and "> 1 Year" beyond the forecast horizon
    """
    cfg = config or DEFAULT_MODEL_CONFIG
    if step is None or not math.isfinite(step) or step <= 0:
        step = cfg.default_milestone_step
    if not math.isfinite(baseline_1rm) or baseline_1rm < 0:
        baseline_1rm = 0.0

    target = next_milestone_target(baseline_1rm, step)

    if not analysis.has_enough_data or analysis.daily_rate <= cfg.milestone_min_daily_rate:
        return Milestone(date=UNKNOWN_DATE, target=target)

    effective_rate = analysis.daily_rate * _rate_multiplier(analysis, cfg)
    if effective_rate <= 0:
        return Milestone(date=UNKNOWN_DATE, target=target)

    days_to_target = (target - baseline_1rm) / effective_rate
    if days_to_target > cfg.milestone_horizon_days:
        return Milestone(date=BEYOND_HORIZON, target=target)

    if now is None:
        now = datetime.now()
    target_date = now.date() + timedelta(days=math.ceil(days_to_target))

    if analysis.optimal_day_idx != NO_DAY_INDEX:
        current_idx = (target_date.weekday() + 1) % 7  # Sunday=0
        target_date += timedelta(days=(analysis.optimal_day_idx - current_idx + 7) % 7)

    return Milestone(date=format_month_day(target_date), target=target, target_date=target_date)
