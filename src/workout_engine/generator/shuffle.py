"""Shuffling primitives: uniform Fisher–Yates and constraint-aware interleave."""

from __future__ import annotations

import random
from typing import Sequence, TypeVar

from workout_engine.constraints.validator import muscle_group_of
from workout_engine.models.exercise import Exercise

T = TypeVar("T")


def shuffle_array(items: Sequence[T], rng: random.Random | None = None) -> list[T]:
    """Return a uniformly shuffled copy of *items* (Fisher–Yates).

    The input is never mutated; sequences of length <= 1 come back as a
    plain copy.
    """
    rng = rng or random.Random()
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def can_interleave(sequence: Sequence[Exercise]) -> bool:
    """True if some ordering of *sequence* satisfies the adjacency rule.

    That holds exactly when no muscle group makes up more than
    ceil(n / 2) of the sequence.
    """
    counts: dict[str, int] = {}
    for ex in sequence:
        group = muscle_group_of(ex)
        counts[group] = counts.get(group, 0) + 1
    if not counts:
        return True
    return max(counts.values()) <= (len(sequence) + 1) // 2


def interleave_by_group(
    sequence: Sequence[Exercise], rng: random.Random | None = None
) -> list[Exercise] | None:
    """Reorder *sequence* so that no two neighbours share a muscle group.

    Exercises are bucketed by group and the bucket order is shuffled. Each
    slot takes from the bucket with the most exercises left among those
    that differ from the previous pick; ties go to the earlier bucket in the
    shuffled order. Returns None when no valid ordering exists.
    """
    rng = rng or random.Random()
    if not can_interleave(sequence):
        return None

    buckets: dict[str, list[Exercise]] = {}
    for ex in sequence:
        buckets.setdefault(muscle_group_of(ex), []).append(ex)
    order = shuffle_array(list(buckets), rng)
    for group in order:
        buckets[group] = shuffle_array(buckets[group], rng)

    result: list[Exercise] = []
    previous: str | None = None
    for _ in range(len(sequence)):
        best: str | None = None
        for group in order:
            if group == previous or not buckets[group]:
                continue
            if best is None or len(buckets[group]) > len(buckets[best]):
                best = group
        if best is None:
            return None
        result.append(buckets[best].pop())
        previous = best
    return result
