"""Strength progression and 1RM prediction for weighted exercise logs."""

from .core.estimator import brzycki_1rm, epley_1rm, estimate_1rm
from .core.metrics import personal_record
from .core.models import LogEntry, Milestone, PersonalRecord, ProgressionAnalysis, TrainingZone
from .core.progression import analyze_progression
from .core.projection import forecast, predict_future_max, predict_next_milestone
from .core.zones import training_zones

__version__ = "0.1.0"

__all__ = [
    "LogEntry",
    "Milestone",
    "PersonalRecord",
    "ProgressionAnalysis",
    "TrainingZone",
    "analyze_progression",
    "brzycki_1rm",
    "epley_1rm",
    "estimate_1rm",
    "forecast",
    "personal_record",
    "predict_future_max",
    "predict_next_milestone",
    "training_zones",
]
