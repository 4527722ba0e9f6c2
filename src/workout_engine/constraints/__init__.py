"""Constraint validator — pure adjacency checks over exercise sequences."""

from workout_engine.constraints.validator import (
    can_add_exercise,
    constraint_stats,
    exercise_id_of,
    is_valid_workout,
    last_muscle_group,
    muscle_group_of,
    valid_options,
    validate_exercise_insertion,
)

__all__ = [
    "can_add_exercise",
    "constraint_stats",
    "exercise_id_of",
    "is_valid_workout",
    "last_muscle_group",
    "muscle_group_of",
    "valid_options",
    "validate_exercise_insertion",
]
