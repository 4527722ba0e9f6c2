"""Adjacency-constraint checks over exercise sequences.

Core rule: no two consecutive exercises may target the same muscle group.
Every function here is pure; none mutates its inputs. Muscle groups are
compared case-insensitively.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any, Sequence

from workout_engine.exceptions import IndexOutOfBounds, InvalidInput
from workout_engine.models.results import ConstraintStats, InsertionCheck

logger = logging.getLogger(__name__)


def muscle_group_of(item: Any, context: str = "exercise") -> str:
    """Return the normalised muscle group of *item*.

    Raises:
        InvalidInput: *item* has no non-empty ``muscle_group`` string.
    """
    group = getattr(item, "muscle_group", None)
    if not isinstance(group, str) or not group.strip():
        raise InvalidInput(f"{context} must have a muscle_group string, got {item!r}")
    return group.strip().lower()


def exercise_id_of(item: Any, context: str = "exercise") -> str:
    """Return the id of *item*, raising InvalidInput when it is missing."""
    exercise_id = getattr(item, "id", None)
    if not isinstance(exercise_id, str) or not exercise_id:
        raise InvalidInput(f"{context} must have an id string, got {item!r}")
    return exercise_id


def _groups(sequence: Sequence[Any], context: str) -> list[str]:
    if isinstance(sequence, (str, bytes)) or not isinstance(sequence, Sequence):
        raise InvalidInput(f"{context} must be a sequence of exercises")
    return [
        muscle_group_of(item, f"exercise at index {i} in {context}")
        for i, item in enumerate(sequence)
    ]


def is_valid_workout(sequence: Sequence[Any]) -> bool:
    """True when no adjacent pair shares a muscle group.

    Empty and single-element sequences are always valid, but every element
    is still checked for a muscle group.
    """
    groups = _groups(sequence, "sequence")
    return all(a != b for a, b in zip(groups, groups[1:]))


def can_add_exercise(sequence: Sequence[Any], candidate: Any) -> bool:
    """True if *candidate* may be appended to *sequence*."""
    candidate_group = muscle_group_of(candidate, "candidate")
    previous = last_muscle_group(sequence)
    return previous is None or previous != candidate_group


def last_muscle_group(sequence: Sequence[Any]) -> str | None:
    """Muscle group of the final element, or None for an empty sequence."""
    if isinstance(sequence, (str, bytes)) or not isinstance(sequence, Sequence):
        raise InvalidInput("sequence must be a sequence of exercises")
    if not sequence:
        return None
    return muscle_group_of(sequence[-1], "last exercise in sequence")


def valid_options(sequence: Sequence[Any], candidates: Sequence[Any]) -> list[Any]:
    """Filter *candidates* to those that can follow *sequence*.

    Malformed candidates (missing id or muscle group) are skipped with a
    warning instead of failing the whole call.
    """
    previous = last_muscle_group(sequence)
    options: list[Any] = []
    for candidate in candidates:
        try:
            exercise_id_of(candidate, "candidate")
            group = muscle_group_of(candidate, "candidate")
        except InvalidInput as exc:
            logger.warning("Skipping invalid candidate: %s", exc)
            continue
        if previous is None or group != previous:
            options.append(candidate)
    return options


def constraint_stats(sequence: Sequence[Any]) -> ConstraintStats:
    """Count adjacency violations and the muscle-group distribution."""
    groups = _groups(sequence, "sequence")
    positions = tuple(
        i for i in range(1, len(groups)) if groups[i] == groups[i - 1]
    )
    return ConstraintStats(
        total_exercises=len(groups),
        violations=len(positions),
        violation_positions=positions,
        is_valid=not positions,
        muscle_group_distribution=dict(Counter(groups)),
    )


def validate_exercise_insertion(
    sequence: Sequence[Any], index: int, candidate: Any
) -> InsertionCheck:
    """Check *candidate* placed at *index* against its neighbours.

    The element currently at *index* is the one being replaced, so only
    ``index - 1`` and ``index + 1`` are compared.
    """
    if isinstance(index, bool) or not isinstance(index, int):
        raise InvalidInput(f"index must be an int, got {index!r}")
    if index < 0 or index >= len(sequence):
        raise IndexOutOfBounds(
            f"Invalid position {index} (sequence length: {len(sequence)})"
        )
    group = muscle_group_of(candidate, "candidate")
    errors: list[str] = []
    if index > 0:
        before = muscle_group_of(sequence[index - 1], f"exercise at index {index - 1}")
        if before == group:
            errors.append(
                f"Same muscle group '{group}' as previous exercise at index {index - 1}"
            )
    if index < len(sequence) - 1:
        after = muscle_group_of(sequence[index + 1], f"exercise at index {index + 1}")
        if after == group:
            errors.append(
                f"Same muscle group '{group}' as next exercise at index {index + 1}"
            )
    return InsertionCheck(is_valid=not errors, errors=tuple(errors))
