"""Data models for the workout engine."""

from workout_engine.models.enums import ReplacementFailure, TimerEvent, TimerPhase
from workout_engine.models.exercise import Exercise
from workout_engine.models.results import (
    CatalogHealth,
    ConstraintStats,
    GenerationResult,
    InsertionCheck,
)
from workout_engine.models.timer_config import TimerConfig
from workout_engine.models.timer_state import (
    TimerNotification,
    TimerState,
    WorkoutRunState,
)

__all__ = [
    "CatalogHealth",
    "ConstraintStats",
    "Exercise",
    "GenerationResult",
    "InsertionCheck",
    "ReplacementFailure",
    "TimerConfig",
    "TimerEvent",
    "TimerNotification",
    "TimerPhase",
    "TimerState",
    "WorkoutRunState",
]
