"""
YAML → ExerciseDefinition loader.

Loads exercise definitions from individual YAML files in the bundled
``src/lift_predictor/exercises/`` directory.  Each file (e.g. squat.yaml)
contains a flat exercise definition matching the ExerciseDefinition schema.

User overrides: place matching files in ``~/.lift-predictor/exercises/``.
A user file is deep-merged over the bundled definition, so only changed
keys need to be listed.  A user file whose stem does not match any
bundled file is treated as a new exercise and added to the catalog.

Usage (internal, called by registry.py):
    from .loader import load_exercises_from_yaml
    exercises = load_exercises_from_yaml()   # dict or None on failure
"""

from __future__ import annotations

import os
import warnings
from pathlib import Path

import yaml

from .base import ExerciseDefinition

_REQUIRED_EXERCISE_FIELDS: frozenset[str] = frozenset(
    {
        "exercise_id",
        "display_name",
        "target_muscle",
        "is_weighted",
    }
)


def exercise_from_dict(d: dict) -> ExerciseDefinition:
    """Convert a raw dict (from YAML) to an ExerciseDefinition.

    Raises ValueError if any required field is absent.
    """
    missing = _REQUIRED_EXERCISE_FIELDS - set(d)
    if missing:
        raise ValueError(f"ExerciseDefinition missing fields: {sorted(missing)}")

    is_weighted = d["is_weighted"]
    if not isinstance(is_weighted, bool):
        raise ValueError(f"is_weighted must be true or false, got {is_weighted!r}")

    return ExerciseDefinition(
        exercise_id=str(d["exercise_id"]),
        display_name=str(d["display_name"]),
        target_muscle=str(d["target_muscle"]),
        is_weighted=is_weighted,
        unit=str(d.get("unit", "reps")),
    )


def _load_yaml_file(path: Path) -> dict:
    """Load a YAML file; return {} (with a warning) if it cannot be parsed."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        warnings.warn(f"lift-predictor: cannot read {path} ({exc})", stacklevel=3)
        return {}
    return data if isinstance(data, dict) else {}


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base (non-destructive to base)."""
    result = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


def _get_bundled_exercises_dir() -> Path | None:
    """Return path to the bundled exercises/ data directory, or None if not found."""
    # loader.py lives at src/lift_predictor/core/exercises/loader.py
    # three levels up → src/lift_predictor/
    candidate = Path(__file__).parent.parent.parent / "exercises"
    return candidate if candidate.is_dir() else None


def _get_user_exercises_dir() -> Path | None:
    """Return ~/.lift-predictor/exercises/ if it exists, else None."""
    home = Path(os.environ.get("HOME", "~")).expanduser()
    p = home / ".lift-predictor" / "exercises"
    return p if p.is_dir() else None


def load_exercises_from_yaml(
    bundled_dir: Path | None = None,
    user_dir: Path | None = None,
) -> dict[str, ExerciseDefinition] | None:
    """Return {exercise_id: ExerciseDefinition} loaded from per-exercise YAML files.

    Loads each ``<exercise_id>.yaml`` from the bundled exercises/ directory,
    deep-merging a same-named user file over it when present.  User-only
    files (no bundled counterpart) are loaded as new exercises.  Invalid
    definitions are skipped with a warning.

    Returns None (rather than raising) when nothing could be loaded so the
    registry can report the problem.
    """
    bundled_dir = bundled_dir or _get_bundled_exercises_dir()
    user_dir = user_dir or _get_user_exercises_dir()

    if bundled_dir is None and user_dir is None:
        return None

    result: dict[str, ExerciseDefinition] = {}

    stems: dict[str, Path] = {}
    if bundled_dir is not None and bundled_dir.is_dir():
        for p in sorted(bundled_dir.glob("*.yaml")):
            stems[p.stem] = p

    user_only: list[Path] = []
    if user_dir is not None and user_dir.is_dir():
        for p in sorted(user_dir.glob("*.yaml")):
            if p.stem not in stems:
                user_only.append(p)

    for stem, bundled_path in stems.items():
        raw = _load_yaml_file(bundled_path)
        if not raw:
            continue
        if user_dir is not None:
            user_path = user_dir / f"{stem}.yaml"
            if user_path.exists():
                user_raw = _load_yaml_file(user_path)
                if user_raw:
                    raw = _deep_merge(raw, user_raw)
        try:
            ex = exercise_from_dict(raw)
            result[ex.exercise_id] = ex
        except ValueError as exc:
            warnings.warn(
                f"lift-predictor: skipping exercise '{stem}': {exc}",
                stacklevel=2,
            )

    for p in user_only:
        raw = _load_yaml_file(p)
        if not raw:
            continue
        try:
            ex = exercise_from_dict(raw)
            result[ex.exercise_id] = ex
        except ValueError as exc:
            warnings.warn(
                f"lift-predictor: skipping user exercise '{p.stem}': {exc}",
                stacklevel=2,
            )

    return result if result else None
