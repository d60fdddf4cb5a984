"""
Configuration constants for the strength progression model.

All adjustable parameters are centralized here for easy tuning.
ModelConfig groups them so callers can pass an overridden set
(see core/engine/config_loader.py) without touching module globals.
"""

from dataclasses import dataclass
from typing import Final

# =============================================================================
# 1RM ESTIMATION
# =============================================================================

EPLEY_DIVISOR: Final[float] = 30.0  # 1RM = w * (1 + r/30)
BRZYCKI_NUMERATOR: Final[float] = 36.0  # 1RM = w * 36 / (37 - r)
BRZYCKI_REP_LIMIT: Final[int] = 37  # Brzycki undefined at and above this rep count

# =============================================================================
# TREND ANALYSIS
# =============================================================================

MIN_ENTRIES: Final[int] = 2  # Relevant entries needed before any trend is fitted
MIN_SPAN_DAYS: Final[int] = 7  # First-to-last span needed for a trend
MIN_TIME_TO_BEST_DAYS: Final[int] = 14  # Above this, rate is measured first → peak
DAILY_RATE_MIN: Final[float] = -0.1  # Clamp floor (storage units per day)
DAILY_RATE_MAX: Final[float] = 0.5  # Clamp ceiling (storage units per day)

# =============================================================================
# STALENESS (DETRAINING)
# =============================================================================

STALE_AFTER_DAYS: Final[int] = 30  # Best set older than this → stale
STALE_RATE_MULTIPLIER: Final[float] = 0.5  # Growth discount for a stale trend

# =============================================================================
# TIME-OF-DAY BANDS (hour of day, end exclusive)
# =============================================================================

MORNING_START_HOUR: Final[int] = 4
AFTERNOON_START_HOUR: Final[int] = 12
EVENING_START_HOUR: Final[int] = 18

# =============================================================================
# MILESTONES
# =============================================================================

DEFAULT_MILESTONE_STEP: Final[float] = 2.5  # Storage units (kg)
MILESTONE_MIN_DAILY_RATE: Final[float] = 0.01  # At or below: no date forecast
MILESTONE_HORIZON_DAYS: Final[int] = 365  # Beyond this: "> 1 Year"

# =============================================================================
# FORECAST HORIZONS
# =============================================================================

FORECAST_WEEKS: Final[tuple[int, ...]] = (4, 8, 12)


@dataclass(frozen=True)
class ModelConfig:
    """Tunable thresholds consumed by the progression engine."""

    min_entries: int = MIN_ENTRIES
    min_span_days: int = MIN_SPAN_DAYS
    min_time_to_best_days: int = MIN_TIME_TO_BEST_DAYS
    daily_rate_min: float = DAILY_RATE_MIN
    daily_rate_max: float = DAILY_RATE_MAX
    stale_after_days: int = STALE_AFTER_DAYS
    stale_rate_multiplier: float = STALE_RATE_MULTIPLIER
    morning_start_hour: int = MORNING_START_HOUR
    afternoon_start_hour: int = AFTERNOON_START_HOUR
    evening_start_hour: int = EVENING_START_HOUR
    default_milestone_step: float = DEFAULT_MILESTONE_STEP
    milestone_min_daily_rate: float = MILESTONE_MIN_DAILY_RATE
    milestone_horizon_days: int = MILESTONE_HORIZON_DAYS

    def __post_init__(self) -> None:
        """Validate threshold relationships."""
        if self.min_entries < 1:
            raise ValueError("min_entries must be at least 1")
        if self.min_time_to_best_days < 0:
            raise ValueError("min_time_to_best_days must be non-negative")
        if self.min_span_days < 0:
            raise ValueError("min_span_days must be non-negative")
        if self.daily_rate_min > self.daily_rate_max:
            raise ValueError("daily_rate_min must not exceed daily_rate_max")
        if self.stale_after_days < 0:
            raise ValueError("stale_after_days must be non-negative")
        if not 0.0 <= self.stale_rate_multiplier <= 1.0:
            raise ValueError("stale_rate_multiplier must be between 0 and 1")
        if not (
            0 <= self.morning_start_hour
            < self.afternoon_start_hour
            < self.evening_start_hour
            <= 24
        ):
            raise ValueError("time-of-day band hours must be increasing within 0-24")
        if self.default_milestone_step <= 0:
            raise ValueError("default_milestone_step must be positive")
        if self.milestone_horizon_days <= 0:
            raise ValueError("milestone_horizon_days must be positive")


DEFAULT_MODEL_CONFIG: Final[ModelConfig] = ModelConfig()
