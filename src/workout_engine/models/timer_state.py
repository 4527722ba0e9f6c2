"""Timer runtime state, notification payloads and sequencing state."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Mapping

from workout_engine.models.enums import TimerEvent, TimerPhase
from workout_engine.models.exercise import Exercise


@dataclass
class TimerState:
    """Mutable state owned exclusively by one TimerEngine.

    Times (``start_time``, ``pause_start_time``) are readings of the
    engine's monotonic clock in seconds. ``remaining_time`` and
    ``total_time`` refer to the current phase only.
    """

    phase: TimerPhase = TimerPhase.IDLE
    exercise: Exercise | None = None
    exercise_index: int = 0
    total_exercises: int = 0
    current_set: int = 1
    current_cycle: int = 1
    remaining_time: float = 0.0
    total_time: float = 0.0
    is_paused: bool = False
    start_time: float | None = None
    paused_time_accumulated: float = 0.0
    pause_start_time: float | None = None

    def snapshot(self) -> TimerState:
        """Detached copy; Exercise is frozen so a shallow copy suffices."""
        return dataclasses.replace(self)


@dataclass(frozen=True)
class TimerNotification:
    """Payload delivered to observers.

    ``state`` is a snapshot taken at emission time, never the live object.
    ``data`` carries event-specific context (e.g. remaining/total for TICK).
    """

    event: TimerEvent
    timestamp: float
    state: TimerState
    data: Mapping[str, Any] = field(default_factory=dict)


@dataclass
class WorkoutRunState:
    """Position of the sequencer within the installed workout."""

    workout_list: tuple[Exercise, ...] = field(default_factory=tuple)
    current_exercise_index: int = 0

    @property
    def current_exercise(self) -> Exercise | None:
        if not self.workout_list:
            return None
        return self.workout_list[self.current_exercise_index]

    @property
    def is_first(self) -> bool:
        return self.current_exercise_index == 0

    @property
    def is_last(self) -> bool:
        return self.current_exercise_index >= len(self.workout_list) - 1
