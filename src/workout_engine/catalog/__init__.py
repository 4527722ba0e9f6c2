"""Exercise catalog — the read-only source of exercises for generation."""

from workout_engine.catalog.catalog import ExerciseCatalog, normalize_group
from workout_engine.catalog.exercises import DEFAULT_EXERCISES, MUSCLE_GROUP_LABELS

__all__ = [
    "DEFAULT_EXERCISES",
    "ExerciseCatalog",
    "MUSCLE_GROUP_LABELS",
    "normalize_group",
]
