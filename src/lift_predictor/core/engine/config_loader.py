"""
YAML → ModelConfig loader.

Loads model thresholds from model.yaml (bundled with the package) and
optionally merges user overrides from ~/.lift-predictor/model.yaml.

Usage:
    from lift_predictor.core.engine.config_loader import load_model_config
    cfg = load_model_config()
    analysis = analyze_progression(logs, "bench_press", config=cfg)

The YAML is grouped into sections (trend, staleness, time_of_day,
milestones); keys inside each section are ModelConfig field names.
If the bundled file cannot be parsed the Python defaults from config.py
are used.  A broken user override is ignored with a warning.
"""

from __future__ import annotations

import dataclasses
import importlib.resources
import os
import warnings
from pathlib import Path
from typing import Any

import yaml

from ..config import DEFAULT_MODEL_CONFIG, ModelConfig

_FIELD_NAMES: frozenset[str] = frozenset(f.name for f in dataclasses.fields(ModelConfig))

# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a single YAML file; raises yaml.YAMLError / OSError on failure."""
    with open(path, "r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh)
    return data if isinstance(data, dict) else {}


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base* (non-destructive to base)."""
    result = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


def _flatten_sections(raw: dict[str, Any]) -> dict[str, Any]:
    """Collect ModelConfig fields from top level and from one level of sections."""
    flat: dict[str, Any] = {}
    for key, value in raw.items():
        if isinstance(value, dict):
            for inner_key, inner_value in value.items():
                if inner_key in _FIELD_NAMES:
                    flat[inner_key] = inner_value
        elif key in _FIELD_NAMES:
            flat[key] = value
    return flat


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def get_bundled_yaml_path() -> Path | None:
    """Return the path to the bundled model.yaml, or None if not found."""
    candidate = Path(str(importlib.resources.files("lift_predictor").joinpath("model.yaml")))
    return candidate if candidate.exists() else None


def get_user_yaml_path() -> Path | None:
    """Return ~/.lift-predictor/model.yaml if it exists, else None."""
    home = Path(os.environ.get("HOME", "~")).expanduser()
    p = home / ".lift-predictor" / "model.yaml"
    return p if p.exists() else None


def model_config_from_dict(raw: dict[str, Any]) -> ModelConfig:
    """
    Build a ModelConfig from a (possibly sectioned) dict.

    Missing keys keep their defaults; unknown keys are ignored.

    Raises:
        ValueError: If a value has the wrong type or breaks a config invariant
    """
    values = _flatten_sections(raw)
    typed: dict[str, Any] = {}
    for f in dataclasses.fields(ModelConfig):
        if f.name not in values:
            continue
        default = getattr(DEFAULT_MODEL_CONFIG, f.name)
        try:
            typed[f.name] = type(default)(values[f.name])
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid value for {f.name}: {values[f.name]!r}") from e
    return dataclasses.replace(DEFAULT_MODEL_CONFIG, **typed)


def load_model_config(
    bundled_path: Path | None = None,
    user_path: Path | None = None,
) -> ModelConfig:
    """
    Load and merge model configuration from YAML sources.

    Load order (later overrides earlier):
    1. Bundled src/lift_predictor/model.yaml
    2. User override at ~/.lift-predictor/model.yaml

    Args:
        bundled_path: Override for the bundled file location
        user_path: Override for the user file location

    Returns:
        Merged ModelConfig.  DEFAULT_MODEL_CONFIG if no YAML is usable.
    """
    merged: dict[str, Any] = {}

    bundled = bundled_path or get_bundled_yaml_path()
    if bundled is not None and bundled.exists():
        try:
            merged = _deep_merge(merged, _load_yaml_file(bundled))
        except (OSError, yaml.YAMLError) as exc:
            warnings.warn(
                f"lift-predictor: cannot read bundled model config ({exc}); using defaults.",
                stacklevel=2,
            )

    user = user_path or get_user_yaml_path()
    if user is not None and user.exists():
        try:
            user_raw = _load_yaml_file(user)
        except (OSError, yaml.YAMLError) as exc:
            warnings.warn(
                f"lift-predictor: ignoring user model config {user} ({exc}).",
                stacklevel=2,
            )
        else:
            candidate = _deep_merge(merged, user_raw)
            try:
                model_config_from_dict(candidate)
            except ValueError as exc:
                warnings.warn(
                    f"lift-predictor: ignoring user model config {user} ({exc}).",
                    stacklevel=2,
                )
            else:
                merged = candidate

    try:
        return model_config_from_dict(merged)
    except ValueError as exc:
        warnings.warn(
            f"lift-predictor: invalid bundled model config ({exc}); using defaults.",
            stacklevel=2,
        )
        return DEFAULT_MODEL_CONFIG
