"""Interval timer engine, workout sequencer and phase planning."""

from workout_engine.timer.engine import TimerEngine
from workout_engine.timer.events import EventBus
from workout_engine.timer.schedule import (
    ScheduledPhase,
    exercise_duration,
    phase_schedule,
    workout_duration,
)
from workout_engine.timer.sequencer import WorkoutSequencer

__all__ = [
    "EventBus",
    "ScheduledPhase",
    "TimerEngine",
    "WorkoutSequencer",
    "exercise_duration",
    "phase_schedule",
    "workout_duration",
]
