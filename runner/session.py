"""Workout session runner — generates a workout and times it in the terminal.

Usage:
    python -m runner.session --length 8 --groups chest back legs
    python -m runner.session --no-timer --seed 42     # just print a workout
    python -m runner.session --time-scale 10          # fast demo run
    python -m runner.session --daily                  # APScheduler workout of the day
"""

from __future__ import annotations

import argparse
import logging
import random
import sys
import time
from typing import Callable, Sequence

from workout_engine.catalog import ExerciseCatalog
from workout_engine.exceptions import WorkoutEngineError
from workout_engine.generator import WorkoutGenerator
from workout_engine.models.enums import TimerEvent
from workout_engine.models.exercise import Exercise
from workout_engine.models.timer_config import TimerConfig
from workout_engine.models.timer_state import TimerNotification
from workout_engine.timer import TimerEngine, WorkoutSequencer, workout_duration

from runner.config import (
    CYCLES_PER_SET,
    DAILY_HOUR,
    DAILY_MINUTE,
    DEFAULT_GROUPS,
    DEFAULT_LENGTH,
    LOG_LEVEL,
    MAX_GENERATION_ATTEMPTS,
    MAX_SHUFFLE_ATTEMPTS,
    PREPARE_S,
    REST_BETWEEN_SETS_S,
    REST_S,
    SETS,
    TICK_INTERVAL_S,
    WORK_S,
)

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def build_generator(seed: int | None = None) -> WorkoutGenerator:
    """Generator over the built-in catalog with the configured retry ceilings."""
    return WorkoutGenerator(
        ExerciseCatalog.default(),
        random.Random(seed),
        max_attempts=MAX_GENERATION_ATTEMPTS,
        max_shuffle_attempts=MAX_SHUFFLE_ATTEMPTS,
    )


def default_timer_config() -> TimerConfig:
    return TimerConfig(
        prepare=PREPARE_S,
        work=WORK_S,
        rest=REST_S,
        cycles_per_set=CYCLES_PER_SET,
        sets=SETS,
        rest_between_sets=REST_BETWEEN_SETS_S,
    )


def describe_workout(workout: Sequence[Exercise]) -> list[str]:
    """One display line per exercise, e.g. ' 1. Push-ups (chest)'."""
    width = len(str(len(workout)))
    return [
        f"{i + 1:>{width}}. {ex.name} ({ex.muscle_group})"
        for i, ex in enumerate(workout)
    ]


def _log_phase(notification: TimerNotification) -> None:
    state = notification.state
    name = state.exercise.name if state.exercise else "?"
    logger.info(
        "[%d/%d] %s: %s %.0fs (set %d, cycle %d)",
        state.exercise_index + 1,
        state.total_exercises,
        name,
        state.phase.label,
        notification.data.get("duration", state.total_time),
        state.current_set,
        state.current_cycle,
    )


def run_workout(
    workout: Sequence[Exercise],
    config: TimerConfig,
    *,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
    tick_interval: float = TICK_INTERVAL_S,
) -> int:
    """Time every exercise of *workout* back to back.

    Drives the engine with a tick loop until the last exercise completes.
    When the config disables auto-advance the runner steps to the next
    exercise itself once the current one finishes. Returns the number of
    exercises completed.
    """
    engine = TimerEngine(config, clock=clock)
    sequencer = WorkoutSequencer(engine)
    completed: list[int] = []
    engine.subscribe(TimerEvent.PHASE_CHANGED, _log_phase)
    engine.subscribe(
        TimerEvent.EXERCISE_COMPLETED, lambda n: completed.append(n.state.exercise_index)
    )

    sequencer.set_workout(workout)
    if not sequencer.start():
        sequencer.close()
        return 0
    try:
        while True:
            while engine.is_running():
                engine.tick()
                sleep(tick_interval)
            if sequencer.workout_complete or not sequencer.next():
                break
    except KeyboardInterrupt:
        engine.stop_timer()
        logger.info("Session interrupted after %d exercise(s)", len(completed))
    finally:
        sequencer.close()
    return len(completed)


def workout_of_the_day(length: int, groups: Sequence[str], seed: int | None = None) -> list[Exercise]:
    """Generate and log one workout; failures are logged, not raised."""
    try:
        workout = build_generator(seed).generate_random_workout(length, groups)
    except WorkoutEngineError as exc:
        logger.error("Failed to generate workout of the day: %s", exc)
        return []
    logger.info("Workout of the day:\n%s", "\n".join(describe_workout(workout)))
    return workout


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Circuit workout generator and interval timer")
    parser.add_argument("--length", type=int, default=DEFAULT_LENGTH, help="Number of exercises")
    parser.add_argument(
        "--groups", nargs="+", default=list(DEFAULT_GROUPS), help="Muscle groups to include"
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible workouts")
    parser.add_argument("--no-timer", action="store_true", help="Print the workout and exit")
    parser.add_argument(
        "--time-scale", type=float, default=1.0, help="Run the timer this many times faster"
    )
    parser.add_argument(
        "--daily", action="store_true", help="Log a fresh workout every day (APScheduler daemon)"
    )
    args = parser.parse_args(argv)
    if args.time_scale <= 0:
        parser.error("--time-scale must be positive")
    return args


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    if args.daily:
        from apscheduler.schedulers.blocking import BlockingScheduler

        scheduler = BlockingScheduler()
        scheduler.add_job(
            workout_of_the_day,
            "cron",
            args=[args.length, args.groups],
            hour=DAILY_HOUR,
            minute=DAILY_MINUTE,
            id="workout_of_the_day",
        )
        logger.info(
            "Scheduler started, workout of the day at %02d:%02d",
            DAILY_HOUR,
            DAILY_MINUTE,
        )
        try:
            scheduler.start()
        except (KeyboardInterrupt, SystemExit):
            logger.info("Scheduler stopped")
        return 0

    workout = workout_of_the_day(args.length, args.groups, args.seed)
    if not workout:
        return 1
    if args.no_timer:
        return 0

    config = default_timer_config()
    errors = config.validate()
    if errors:
        logger.error("Invalid timer settings: %s", "; ".join(errors))
        return 1
    logger.info(
        "Estimated session length: %d s", workout_duration(config, len(workout))
    )

    started = time.monotonic()
    scale = args.time_scale
    done = run_workout(
        workout,
        config,
        clock=lambda: started + (time.monotonic() - started) * scale,
        tick_interval=TICK_INTERVAL_S / scale,
    )
    logger.info("Completed %d of %d exercises", done, len(workout))
    return 0 if done == len(workout) else 1


if __name__ == "__main__":
    sys.exit(main())
