"""
Tests for JSONL storage, serializers, and YAML-backed configuration.
"""

import json
import warnings
from datetime import date, datetime
from pathlib import Path

import pytest

from lift_predictor.core.config import DEFAULT_MODEL_CONFIG
from lift_predictor.core.engine.config_loader import load_model_config, model_config_from_dict
from lift_predictor.core.exercises import EXERCISE_REGISTRY, get_exercise, weighted_exercises
from lift_predictor.core.exercises.loader import exercise_from_dict, load_exercises_from_yaml
from lift_predictor.core.models import LogEntry, Milestone
from lift_predictor.io.log_store import LogStore
from lift_predictor.io.serializers import (
    ValidationError,
    dict_to_log_entry,
    entry_to_json_line,
    json_line_to_entry,
    log_entry_to_dict,
    milestone_to_dict,
    validate_datetime,
)


def _entry(entry_id: str, when: datetime, reps: int = 5, weight: float | None = 60.0) -> LogEntry:
    return LogEntry(id=entry_id, date=when, exercise_id="bench_press", reps=reps, weight=weight)


# ---------------------------------------------------------------------------
# Serializers
# ---------------------------------------------------------------------------

class TestSerializers:

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("2026-02-01", datetime(2026, 2, 1)),
            ("2026-02-01T18:30", datetime(2026, 2, 1, 18, 30)),
            ("2026-02-01 07:05:09", datetime(2026, 2, 1, 7, 5, 9)),
        ],
    )
    def test_validate_datetime(self, text, expected):
        assert validate_datetime(text) == expected

    @pytest.mark.parametrize("text", ["01/02/2026", "2026-13-01", "2026-02-30", "", "tomorrow"])
    def test_validate_datetime_rejects(self, text):
        with pytest.raises(ValidationError):
            validate_datetime(text)

    def test_entry_dict_shape(self):
        d = log_entry_to_dict(_entry("a1", datetime(2026, 2, 1, 18, 30)))
        assert d == {
            "id": "a1",
            "date": "2026-02-01T18:30",
            "exercise_id": "bench_press",
            "reps": 5,
            "weight": 60.0,
        }

    def test_unweighted_entry_omits_weight(self):
        d = log_entry_to_dict(_entry("a1", datetime(2026, 2, 1), weight=None))
        assert "weight" not in d
        assert dict_to_log_entry(d).weight is None

    def test_json_line_round_trip(self):
        entry = _entry("a1", datetime(2026, 2, 1, 18, 30, 15), reps=3, weight=102.5)
        line = entry_to_json_line(entry)
        assert "\n" not in line
        assert json_line_to_entry(line) == entry

    @pytest.mark.parametrize(
        "patch",
        [
            {"reps": 0},
            {"reps": -2},
            {"reps": 2.5},
            {"reps": True},
            {"weight": -1},
            {"weight": "heavy"},
            {"date": "yesterday"},
            {"exercise_id": ""},
        ],
    )
    def test_dict_to_entry_rejects_invalid(self, patch):
        data = {"id": "a1", "date": "2026-02-01", "exercise_id": "bench_press", "reps": 5, "weight": 60}
        data.update(patch)
        with pytest.raises(ValidationError):
            dict_to_log_entry(data)

    def test_missing_field(self):
        with pytest.raises(ValidationError, match="reps"):
            dict_to_log_entry({"id": "a1", "date": "2026-02-01", "exercise_id": "bench_press"})

    @pytest.mark.parametrize("line", ["{not json", "[1, 2]"])
    def test_bad_json_line(self, line):
        with pytest.raises(ValidationError):
            json_line_to_entry(line)

    def test_milestone_dict(self):
        d = milestone_to_dict(Milestone(date="Apr 3", target=60.0, target_date=date(2026, 4, 3)))
        assert d == {"date": "Apr 3", "target": 60.0, "target_date": "2026-04-03"}
        assert milestone_to_dict(Milestone(date="Unknown", target=62.5))["target_date"] is None


# ---------------------------------------------------------------------------
# LogStore
# ---------------------------------------------------------------------------

class TestLogStore:

    def test_missing_file(self, tmp_path):
        store = LogStore(tmp_path / "logs.jsonl")
        assert not store.exists()
        with pytest.raises(FileNotFoundError):
            store.load_logs()

    def test_init_creates_parents(self, tmp_path):
        store = LogStore(tmp_path / "nested" / "dir" / "logs.jsonl")
        store.init()
        assert store.exists()
        assert store.load_logs() == []

    def test_append_keeps_chronological_order(self, tmp_path):
        store = LogStore(tmp_path / "logs.jsonl")
        store.append_log(_entry("b", datetime(2026, 2, 10)))
        store.append_log(_entry("a", datetime(2026, 2, 1)))
        store.append_log(_entry("c", datetime(2026, 2, 20)))

        assert [e.id for e in store.load_logs()] == ["a", "b", "c"]
        lines = store.log_path.read_text().splitlines()
        assert [json.loads(l)["id"] for l in lines] == ["a", "b", "c"]

    def test_duplicate_id_rejected(self, tmp_path):
        store = LogStore(tmp_path / "logs.jsonl")
        store.append_log(_entry("a", datetime(2026, 2, 1)))
        with pytest.raises(ValidationError, match="Duplicate"):
            store.append_log(_entry("a", datetime(2026, 2, 2)))

    def test_delete(self, tmp_path):
        store = LogStore(tmp_path / "logs.jsonl")
        store.append_log(_entry("a", datetime(2026, 2, 1)))
        store.append_log(_entry("b", datetime(2026, 2, 2)))

        removed = store.delete_log("a")
        assert removed.id == "a"
        assert [e.id for e in store.load_logs()] == ["b"]

        with pytest.raises(KeyError):
            store.delete_log("a")

    def test_load_exercise_logs(self, tmp_path):
        store = LogStore(tmp_path / "logs.jsonl")
        store.append_log(_entry("a", datetime(2026, 2, 1)))
        store.append_log(
            LogEntry(id="s", date=datetime(2026, 2, 2), exercise_id="squat", reps=5, weight=100.0)
        )
        assert [e.id for e in store.load_exercise_logs("squat")] == ["s"]

    def test_malformed_line_reports_line_number(self, tmp_path):
        path = tmp_path / "logs.jsonl"
        good = entry_to_json_line(_entry("a", datetime(2026, 2, 1)))
        path.write_text(good + "\n\n" + '{"id": "b", "reps": 5}\n')

        with pytest.raises(ValidationError, match="line 3"):
            LogStore(path).load_logs()

    def test_blank_lines_ignored(self, tmp_path):
        path = tmp_path / "logs.jsonl"
        good = entry_to_json_line(_entry("a", datetime(2026, 2, 1)))
        path.write_text("\n" + good + "\n\n")
        assert len(LogStore(path).load_logs()) == 1


# ---------------------------------------------------------------------------
# Model config YAML
# ---------------------------------------------------------------------------

class TestModelConfigLoader:

    def test_bundled_matches_defaults(self, tmp_path):
        cfg = load_model_config(user_path=tmp_path / "absent.yaml")
        assert cfg == DEFAULT_MODEL_CONFIG

    def test_sections_and_flat_keys(self):
        cfg = model_config_from_dict({
            "staleness": {"stale_after_days": 45},
            "daily_rate_max": 1,
            "unknown_section": {"nothing": 1},
        })
        assert cfg.stale_after_days == 45
        assert cfg.daily_rate_max == 1.0
        assert isinstance(cfg.daily_rate_max, float)
        assert cfg.min_span_days == DEFAULT_MODEL_CONFIG.min_span_days

    @pytest.mark.parametrize(
        "raw",
        [
            {"staleness": {"stale_after_days": "soon"}},
            {"trend": {"daily_rate_min": 1.0, "daily_rate_max": 0.5}},
        ],
    )
    def test_invalid_values(self, raw):
        with pytest.raises(ValueError):
            model_config_from_dict(raw)

    def test_user_override_merges(self, tmp_path):
        user = tmp_path / "model.yaml"
        user.write_text("staleness:\n  stale_after_days: 10\nmilestones:\n  milestone_horizon_days: 180\n")
        cfg = load_model_config(user_path=user)
        assert cfg.stale_after_days == 10
        assert cfg.milestone_horizon_days == 180
        assert cfg.stale_rate_multiplier == DEFAULT_MODEL_CONFIG.stale_rate_multiplier

    def test_broken_user_yaml_warns(self, tmp_path):
        user = tmp_path / "model.yaml"
        user.write_text("staleness: [unclosed\n")
        with pytest.warns(UserWarning, match="ignoring user model config"):
            cfg = load_model_config(user_path=user)
        assert cfg == DEFAULT_MODEL_CONFIG

    def test_invalid_user_values_warn(self, tmp_path):
        user = tmp_path / "model.yaml"
        user.write_text("staleness:\n  stale_rate_multiplier: 3\n")
        with pytest.warns(UserWarning):
            cfg = load_model_config(user_path=user)
        assert cfg.stale_rate_multiplier == DEFAULT_MODEL_CONFIG.stale_rate_multiplier

    def test_negative_time_to_best_threshold_ignored(self, tmp_path):
        with pytest.raises(ValueError):
            model_config_from_dict({"trend": {"min_time_to_best_days": -1}})

        user = tmp_path / "model.yaml"
        user.write_text("trend:\n  min_time_to_best_days: -1\n")
        with pytest.warns(UserWarning):
            cfg = load_model_config(user_path=user)
        assert cfg.min_time_to_best_days == DEFAULT_MODEL_CONFIG.min_time_to_best_days

    def test_custom_bundled_file(self, tmp_path):
        bundled = tmp_path / "bundled.yaml"
        bundled.write_text("trend:\n  min_span_days: 3\n")
        cfg = load_model_config(bundled_path=bundled, user_path=tmp_path / "absent.yaml")
        assert cfg.min_span_days == 3


# ---------------------------------------------------------------------------
# Exercise catalog
# ---------------------------------------------------------------------------

class TestExerciseCatalog:

    def test_registry_contents(self):
        assert get_exercise("bench_press").is_weighted is True
        assert get_exercise("pushups").is_weighted is False
        assert get_exercise("squat").display_name == "Back Squat"
        assert len(EXERCISE_REGISTRY) >= 8

    def test_unknown_exercise(self):
        with pytest.raises(ValueError, match="Unknown exercise"):
            get_exercise("curling")

    def test_weighted_exercises(self):
        ids = {ex.exercise_id for ex in weighted_exercises()}
        assert {"bench_press", "squat", "deadlift", "overhead_press", "bicep_curls"} <= ids
        assert not ids & {"pushups", "situps", "pull_ups"}

    def test_exercise_from_dict_requires_fields(self):
        with pytest.raises(ValueError, match="missing"):
            exercise_from_dict({"exercise_id": "x", "display_name": "X"})
        with pytest.raises(ValueError):
            exercise_from_dict({
                "exercise_id": "x", "display_name": "X", "target_muscle": "Legs", "is_weighted": "yes",
            })

    def _write(self, directory: Path, stem: str, text: str) -> None:
        directory.mkdir(parents=True, exist_ok=True)
        (directory / f"{stem}.yaml").write_text(text)

    def test_user_override_and_new_exercise(self, tmp_path):
        bundled = tmp_path / "bundled"
        user = tmp_path / "user"
        self._write(bundled, "squat", (
            "exercise_id: squat\ndisplay_name: Squat\ntarget_muscle: Legs\nis_weighted: true\n"
        ))
        self._write(user, "squat", "display_name: Back Squat\n")
        self._write(user, "hip_thrust", (
            "exercise_id: hip_thrust\ndisplay_name: Hip Thrust\ntarget_muscle: Glutes\nis_weighted: true\n"
        ))

        catalog = load_exercises_from_yaml(bundled_dir=bundled, user_dir=user)
        assert catalog["squat"].display_name == "Back Squat"
        assert catalog["squat"].target_muscle == "Legs"
        assert catalog["hip_thrust"].is_weighted is True
        assert get_exercise("hip_thrust", catalog).display_name == "Hip Thrust"

    def test_invalid_definition_skipped_with_warning(self, tmp_path):
        bundled = tmp_path / "bundled"
        self._write(bundled, "squat", (
            "exercise_id: squat\ndisplay_name: Squat\ntarget_muscle: Legs\nis_weighted: true\n"
        ))
        self._write(bundled, "broken", "exercise_id: broken\n")

        with pytest.warns(UserWarning, match="broken"):
            catalog = load_exercises_from_yaml(bundled_dir=bundled, user_dir=tmp_path / "none")
        assert set(catalog) == {"squat"}

    def test_nothing_loadable_returns_none(self, tmp_path):
        empty = tmp_path / "empty"
        empty.mkdir()
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            assert load_exercises_from_yaml(bundled_dir=empty, user_dir=tmp_path / "none") is None
