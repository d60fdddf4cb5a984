"""Training-intensity zones derived from a one-rep max."""

from typing import Final

from .models import TrainingZone

# (percent of 1RM, goal label), highest intensity first
ZONE_LADDER: Final[tuple[tuple[int, str], ...]] = (
    (95, "Power (1-3 reps)"),
    (90, "Strength (3-5 reps)"),
    (85, "Strength (5-6 reps)"),
    (80, "Hypertrophy (6-8 reps)"),
    (75, "Hypertrophy (8-10 reps)"),
    (70, "Endurance (10-12 reps)"),
    (60, "Endurance (15+ reps)"),
    (50, "Warmup / Recovery"),
)


def training_zones(one_rep_max: float) -> list[TrainingZone]:
    """
    Build the intensity table for a given 1RM.

    Args:
        one_rep_max: Estimated 1RM in storage units

    Returns:
        Eight zones in descending percent order
    """
    return [
        TrainingZone(percent=pct, label=label, weight=one_rep_max * pct / 100)
        for pct, label in ZONE_LADDER
    ]
