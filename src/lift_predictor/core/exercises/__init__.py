"""
Exercise catalog for lift-predictor.

Each exercise is described by an ExerciseDefinition loaded from YAML.
The catalog is passed to callers explicitly; the progression engine
itself never consults it.
"""

from .base import ExerciseDefinition
from .registry import EXERCISE_REGISTRY, get_exercise, weighted_exercises

__all__ = [
    "ExerciseDefinition",
    "EXERCISE_REGISTRY",
    "get_exercise",
    "weighted_exercises",
]
