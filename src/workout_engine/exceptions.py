"""Custom exception hierarchy for the workout engine."""

from __future__ import annotations

from workout_engine.models.enums import ReplacementFailure


class WorkoutEngineError(Exception):
    """Base exception for all workout_engine errors."""


class InvalidInput(WorkoutEngineError, ValueError):
    """Malformed argument: wrong type, out-of-range value, missing field."""


class IndexOutOfBounds(InvalidInput, IndexError):
    """A position does not exist in the given sequence."""


class ConstraintUnsatisfiable(WorkoutEngineError):
    """The requested length/groups can never satisfy the adjacency constraint."""


class InsufficientExercises(WorkoutEngineError):
    """The enabled groups do not hold enough distinct exercises."""


class GenerationFailed(WorkoutEngineError):
    """The retry ceiling was exhausted before reaching the target length."""

    def __init__(self, message: str, attempts: int = 0) -> None:
        super().__init__(message)
        self.attempts = attempts


class ConstraintViolation(WorkoutEngineError):
    """An internal invariant broke while building or reordering a workout."""


class ReplacementError(WorkoutEngineError):
    """A single-position replacement was rejected by one specific rule."""

    def __init__(self, message: str, reason: ReplacementFailure) -> None:
        super().__init__(message)
        self.reason = reason


class TimerStateError(WorkoutEngineError):
    """A timer operation is not valid in the current phase."""


class CatalogError(WorkoutEngineError):
    """The exercise catalog is unusable or a lookup failed."""

    def __init__(self, message: str, code: str = "CATALOG_ERROR") -> None:
        super().__init__(message)
        self.code = code


class UnknownMuscleGroup(CatalogError, InvalidInput):
    """Lookup of a muscle group the catalog does not hold."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="UNKNOWN_MUSCLE_GROUP")
