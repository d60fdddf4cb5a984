"""
Storage ↔ display unit conversion.

The engine always works in storage units (kg).  These helpers convert
at the edges for users who prefer pounds.
"""

from typing import Final

from .config import DEFAULT_MILESTONE_STEP
from .models import UnitSystem

LBS_PER_KG: Final[float] = 2.20462
IMPERIAL_MILESTONE_STEP_LBS: Final[float] = 5.0

UNIT_SYSTEMS: Final[tuple[str, ...]] = ("metric", "imperial")


def validate_unit_system(system: str) -> UnitSystem:
    """
    Validate a unit system name.

    Raises:
        ValueError: If system is not "metric" or "imperial"
    """
    if system not in UNIT_SYSTEMS:
        raise ValueError(f"Invalid unit system: {system!r}. Must be one of {UNIT_SYSTEMS}")
    return system  # type: ignore[return-value]


def to_storage_weight(value: float, system: UnitSystem) -> float:
    """Convert a display weight into storage kg."""
    if system == "metric":
        return value
    return value / LBS_PER_KG


def to_display_weight(value: float, system: UnitSystem) -> float:
    """Convert storage kg into the display unit (lbs rounded to 0.1)."""
    if system == "metric":
        return value
    return round(value * LBS_PER_KG, 1)


def weight_unit(system: UnitSystem) -> str:
    """Short unit label: 'kg' or 'lbs'."""
    return "kg" if system == "metric" else "lbs"


def milestone_step(system: UnitSystem) -> float:
    """
    Milestone grid in storage units for the given display system.

    2.5 kg plates for metric users, 5 lb for imperial users.
    """
    if system == "metric":
        return DEFAULT_MILESTONE_STEP
    return to_storage_weight(IMPERIAL_MILESTONE_STEP_LBS, system)


def to_display_rate(value: float, system: UnitSystem) -> float:
    """Convert a storage rate (kg per day/week) without rounding."""
    if system == "metric":
        return value
    return value * LBS_PER_KG
