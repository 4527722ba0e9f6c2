"""WorkoutSequencer — steps a TimerEngine through a whole workout."""

from __future__ import annotations

import logging
from typing import Sequence

from workout_engine.exceptions import InvalidInput
from workout_engine.models.enums import TimerEvent
from workout_engine.models.exercise import Exercise
from workout_engine.models.timer_state import TimerNotification, WorkoutRunState
from workout_engine.timer.engine import TimerEngine

logger = logging.getLogger(__name__)


class WorkoutSequencer:
    """Owns the position within a workout and drives one engine through it.

    When an exercise finishes, the next one starts automatically if the
    config's ``auto_advance`` is set. Finishing the last exercise emits
    WORKOUT_COMPLETED on the engine's event bus instead. Navigation never
    wraps around. An exercise started through ``show_timer`` that is not the
    workout's entry at that index runs on its own and never auto-advances.
    """

    def __init__(self, engine: TimerEngine) -> None:
        self.engine = engine
        self.run_state = WorkoutRunState()
        self.workout_complete = False
        self._detached = False
        self._unsubscribe = engine.subscribe(
            TimerEvent.EXERCISE_COMPLETED, self._on_exercise_completed
        )

    def set_workout(self, workout: Sequence[Exercise]) -> None:
        """Install *workout* and rewind to its first exercise."""
        if isinstance(workout, (str, bytes)) or not isinstance(workout, Sequence):
            raise InvalidInput("workout must be a sequence of exercises")
        if self.engine.is_running():
            self.engine.stop_timer()
        self.run_state = WorkoutRunState(workout_list=tuple(workout))
        self.workout_complete = False
        self._detached = False
        logger.info("Workout installed with %d exercise(s)", len(workout))

    def show_timer(
        self,
        exercise: Exercise | None = None,
        index: int | None = None,
        total: int | None = None,
    ) -> bool:
        """Stop whatever is running and start the timer for one exercise.

        With no arguments the current exercise of the installed workout is
        shown.
        """
        workout = self.run_state.workout_list
        if index is None:
            index = self.run_state.current_exercise_index
        if exercise is None:
            if not 0 <= index < len(workout):
                logger.warning("show_timer: no exercise at index %d", index)
                return False
            exercise = workout[index]
        if total is None:
            total = max(len(workout), index + 1)

        if self.engine.is_running():
            self.engine.stop_timer()
        in_workout = 0 <= index < len(workout) and workout[index] == exercise
        if in_workout:
            self.run_state.current_exercise_index = index
        self._detached = not in_workout
        return self.engine.start_timer(exercise, index, total)

    def start(self) -> bool:
        """Start the installed workout at its current position."""
        return self.show_timer()

    def next(self) -> bool:
        """Move to the following exercise; False at the last one."""
        if not self.run_state.workout_list or self.run_state.is_last:
            return False
        return self.show_timer(index=self.run_state.current_exercise_index + 1)

    def previous(self) -> bool:
        """Move to the preceding exercise; False at the first one."""
        if not self.run_state.workout_list or self.run_state.is_first:
            return False
        return self.show_timer(index=self.run_state.current_exercise_index - 1)

    def close(self) -> None:
        self._unsubscribe()

    def _on_exercise_completed(self, notification: TimerNotification) -> None:
        workout = self.run_state.workout_list
        if not workout or self._detached:
            return
        if notification.data.get("index") != self.run_state.current_exercise_index:
            logger.debug(
                "Ignoring completion of exercise %s; workout is at index %d",
                notification.data.get("index"),
                self.run_state.current_exercise_index,
            )
            return
        if not self.run_state.is_last:
            if not self.engine.get_active_config().auto_advance:
                logger.debug("Auto-advance disabled; waiting at index %d", self.run_state.current_exercise_index)
                return
            self.run_state.current_exercise_index += 1
            self.engine.start_timer(
                workout[self.run_state.current_exercise_index],
                self.run_state.current_exercise_index,
                len(workout),
            )
            return

        self.workout_complete = True
        logger.info("Workout completed (%d exercises)", len(workout))
        self.engine.emit(TimerEvent.WORKOUT_COMPLETED, {"total_exercises": len(workout)})
