"""Workout generation, reordering and replacement."""

from workout_engine.generator.generator import WorkoutGenerator
from workout_engine.generator.history import ReplacementHistory, ReplacementRecord
from workout_engine.generator.shuffle import can_interleave, interleave_by_group, shuffle_array

__all__ = [
    "ReplacementHistory",
    "ReplacementRecord",
    "WorkoutGenerator",
    "can_interleave",
    "interleave_by_group",
    "shuffle_array",
]
