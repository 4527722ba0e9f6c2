"""Deterministic phase plan for a timer config.

Lists the phases an uninterrupted session walks through, in order, with
the set/cycle numbers the engine reports while each phase is current.
"""

from __future__ import annotations

from dataclasses import dataclass

from workout_engine.exceptions import InvalidInput
from workout_engine.models.enums import TimerPhase
from workout_engine.models.timer_config import TimerConfig


@dataclass(frozen=True)
class ScheduledPhase:
    phase: TimerPhase
    duration: int          # seconds
    set_number: int
    cycle_number: int
    offset: int            # seconds from exercise start


def _checked(config: TimerConfig) -> TimerConfig:
    errors = config.validate()
    if errors:
        raise InvalidInput(f"Invalid timer config: {'; '.join(errors)}")
    return config


def phase_schedule(config: TimerConfig) -> list[ScheduledPhase]:
    """Every timed phase of one exercise, ending with the final work phase."""
    config = _checked(config)
    plan: list[ScheduledPhase] = []
    offset = 0

    def add(phase: TimerPhase, duration: int, set_number: int, cycle_number: int) -> None:
        nonlocal offset
        plan.append(ScheduledPhase(phase, duration, set_number, cycle_number, offset))
        offset += duration

    add(TimerPhase.PREPARING, config.prepare, 1, 1)
    for set_number in range(1, config.sets + 1):
        for cycle in range(1, config.cycles_per_set + 1):
            add(TimerPhase.WORKING, config.work, set_number, cycle)
            if cycle < config.cycles_per_set:
                add(TimerPhase.RESTING, config.rest, set_number, cycle + 1)
            elif set_number < config.sets:
                add(TimerPhase.RESTING, config.rest_between_sets, set_number + 1, 1)
    return plan


def exercise_duration(config: TimerConfig) -> int:
    """Seconds from start to completion of one uninterrupted exercise."""
    config = _checked(config)
    return (
        config.prepare
        + config.total_cycles * config.work
        + config.sets * (config.cycles_per_set - 1) * config.rest
        + (config.sets - 1) * config.rest_between_sets
    )


def workout_duration(config: TimerConfig, exercise_count: int) -> int:
    """Total seconds for *exercise_count* exercises run back to back."""
    if isinstance(exercise_count, bool) or not isinstance(exercise_count, int) or exercise_count < 0:
        raise InvalidInput(f"exercise_count must be a non-negative int, got {exercise_count!r}")
    return exercise_duration(config) * exercise_count
