"""
One-rep-max estimation from a single (weight, reps) observation.

Two independent formulas are averaged:

  Epley (1985):    1RM = w × (1 + r / 30)
  Brzycki (1993):  1RM = w × 36 / (37 − r)

Epley tends to be optimistic and Brzycki conservative, so the mean is
used.  Brzycki has a pole at r = 37; from there on its term is the raw
weight rather than an extrapolation.
"""

from __future__ import annotations

import math

from .config import BRZYCKI_NUMERATOR, BRZYCKI_REP_LIMIT, EPLEY_DIVISOR


def _usable(weight: float | None, reps: float) -> bool:
    if weight is None or reps is None:
        return False
    if not (math.isfinite(weight) and math.isfinite(reps)):
        return False
    return weight > 0 and reps > 0


def epley_1rm(weight: float, reps: int) -> float:
    """
    Estimate 1RM using the Epley formula.

    1RM = weight * (1 + reps/30)

    Args:
        weight: Load lifted, in storage units
        reps: Reps performed

    Returns:
        Estimated 1RM, or 0.0 for an unusable observation
    """
    if not _usable(weight, reps):
        return 0.0
    if reps == 1:
        return float(weight)
    return weight * (1 + reps / EPLEY_DIVISOR)


def brzycki_1rm(weight: float, reps: int) -> float:
    """
    Estimate 1RM using the Brzycki formula.

    1RM = weight * 36 / (37 - reps), valid for reps < 37.
    At 37 reps and above the weight is returned unmodified.

    Args:
        weight: Load lifted, in storage units
        reps: Reps performed

    Returns:
        Estimated 1RM, or 0.0 for an unusable observation
    """
    if not _usable(weight, reps):
        return 0.0
    if reps == 1 or reps >= BRZYCKI_REP_LIMIT:
        return float(weight)
    return weight * (BRZYCKI_NUMERATOR / (BRZYCKI_REP_LIMIT - reps))


def estimate_1rm(weight: float | None, reps: int) -> float:
    """
    Blended 1RM estimate: mean of Epley and Brzycki.

    A single rep is its own max.  Absent, zero, negative or non-finite
    inputs give 0.0 (no observation) instead of raising.

    Args:
        weight: Load lifted, in storage units (None for unweighted sets)
        reps: Reps performed

    Returns:
        Estimated 1RM in storage units (always finite and >= 0)
    """
    if not _usable(weight, reps):
        return 0.0
    if reps == 1:
        return float(weight)  # type: ignore[arg-type]

    epley = epley_1rm(weight, reps)  # type: ignore[arg-type]
    brzycki = brzycki_1rm(weight, reps)  # type: ignore[arg-type]
    blended = (epley + brzycki) / 2
    # Huge finite weights overflow; treat as no observation
    return blended if math.isfinite(blended) else 0.0
