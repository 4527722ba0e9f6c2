"""Undo/redo bookkeeping for single-position exercise replacements."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Sequence

from workout_engine.constraints.validator import is_valid_workout
from workout_engine.models.enums import REPLACEMENT_HISTORY_LIMIT
from workout_engine.models.exercise import Exercise


@dataclass(frozen=True)
class ReplacementRecord:
    """One accepted replacement."""

    workout_index: int
    old_exercise: Exercise
    new_exercise: Exercise
    timestamp: float


class ReplacementHistory:
    """Linear undo/redo stack of replacements.

    Recording a new replacement after an undo discards the redo branch.
    ``undo``/``redo`` return a new list and leave the caller's sequence
    untouched. They return None, leaving the cursor where it was, when
    there is nothing to do, when the recorded position no longer holds the
    expected exercise, or when the restored sequence would break adjacency
    or repeat an exercise.
    """

    def __init__(self, max_history: int = REPLACEMENT_HISTORY_LIMIT) -> None:
        self.max_history = max_history
        self._records: list[ReplacementRecord] = []
        self._cursor = -1

    def record(self, workout_index: int, old: Exercise, new: Exercise) -> None:
        del self._records[self._cursor + 1:]
        self._records.append(
            ReplacementRecord(workout_index, old, new, timestamp=time.time())
        )
        if len(self._records) > self.max_history:
            self._records = self._records[-self.max_history:]
        self._cursor = len(self._records) - 1

    def can_undo(self) -> bool:
        return self._cursor >= 0

    def can_redo(self) -> bool:
        return self._cursor < len(self._records) - 1

    def undo(self, sequence: Sequence[Exercise]) -> list[Exercise] | None:
        if not self.can_undo():
            return None
        rec = self._records[self._cursor]
        restored = _swap(sequence, rec.workout_index, rec.new_exercise, rec.old_exercise)
        if restored is not None:
            self._cursor -= 1
        return restored

    def redo(self, sequence: Sequence[Exercise]) -> list[Exercise] | None:
        if not self.can_redo():
            return None
        rec = self._records[self._cursor + 1]
        restored = _swap(sequence, rec.workout_index, rec.old_exercise, rec.new_exercise)
        if restored is not None:
            self._cursor += 1
        return restored

    def clear(self) -> None:
        self._records.clear()
        self._cursor = -1

    @property
    def size(self) -> int:
        return len(self._records)


def _swap(
    sequence: Sequence[Exercise], index: int, expected: Exercise, replacement: Exercise
) -> list[Exercise] | None:
    if not 0 <= index < len(sequence) or sequence[index].id != expected.id:
        return None
    restored = list(sequence)
    restored[index] = replacement
    ids = [ex.id for ex in restored]
    if len(set(ids)) != len(ids) or not is_valid_workout(restored):
        return None
    return restored
