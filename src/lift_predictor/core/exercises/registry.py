"""
Exercise registry.

All catalog exercises are registered here.  Use get_exercise() to look
up an ExerciseDefinition by its exercise_id string.

Exercises are loaded from per-exercise YAML files in the bundled
``src/lift_predictor/exercises/`` directory at import time.  If nothing
can be loaded a RuntimeError is raised; the CLI cannot offer exercise
choices without a catalog.

User overrides: place matching files in ``~/.lift-predictor/exercises/``.
"""

from typing import Mapping

from .base import ExerciseDefinition


def _build_registry() -> dict[str, ExerciseDefinition]:
    from .loader import load_exercises_from_yaml

    loaded = load_exercises_from_yaml()
    if not loaded:
        raise RuntimeError(
            "lift-predictor: no exercise definitions could be loaded from YAML. "
            "Check that src/lift_predictor/exercises/*.yaml files are present and valid."
        )
    return loaded


EXERCISE_REGISTRY: dict[str, ExerciseDefinition] = _build_registry()


def get_exercise(
    exercise_id: str,
    catalog: Mapping[str, ExerciseDefinition] | None = None,
) -> ExerciseDefinition:
    """
    Return the ExerciseDefinition for the given exercise_id.

    Args:
        exercise_id: e.g. "bench_press"
        catalog: Catalog to search (default: EXERCISE_REGISTRY)

    Returns:
        ExerciseDefinition for the requested exercise

    Raises:
        ValueError: If exercise_id is not in the catalog
    """
    catalog = EXERCISE_REGISTRY if catalog is None else catalog
    if exercise_id not in catalog:
        valid = ", ".join(catalog)
        raise ValueError(f"Unknown exercise '{exercise_id}'. Valid IDs: {valid}")
    return catalog[exercise_id]


def weighted_exercises(
    catalog: Mapping[str, ExerciseDefinition] | None = None,
) -> list[ExerciseDefinition]:
    """Exercises that can be analysed for strength progression."""
    catalog = EXERCISE_REGISTRY if catalog is None else catalog
    return [ex for ex in catalog.values() if ex.is_weighted]
