"""TimerEngine — phase state machine for one exercise's interval session.

Phases run ``preparing -> working -> resting -> working -> ... -> completed``.
Remaining time is always derived from the injected monotonic clock (elapsed
since phase start minus paused time), never from counting ticks, so a late
or skipped tick cannot make the countdown drift.

Transport operations (start/pause/resume/skip/reset/stop) return ``bool``
instead of raising; the reason for a refusal is logged. Notifications are
collected while state is mutated and only delivered once the mutation is
complete, so listeners may call back into the engine. A listener that
stops, resets or restarts the timer ends delivery of the rest of that batch.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Mapping

from workout_engine.constraints.validator import exercise_id_of, muscle_group_of
from workout_engine.exceptions import InvalidInput, TimerStateError
from workout_engine.models.enums import TimerEvent, TimerPhase
from workout_engine.models.exercise import Exercise
from workout_engine.models.timer_config import TimerConfig
from workout_engine.models.timer_state import TimerNotification, TimerState
from workout_engine.timer.events import EventBus, Listener

logger = logging.getLogger(__name__)

_RUNNING_PHASES = frozenset({TimerPhase.PREPARING, TimerPhase.WORKING, TimerPhase.RESTING})


class TimerEngine:
    """Interval timer for a single exercise at a time.

    Usage::

        engine = TimerEngine(TimerConfig(work=30))
        engine.subscribe(TimerEvent.EXERCISE_COMPLETED, on_done)
        engine.start_timer(exercise, index=0, total_exercises=8)
        while engine.is_running():
            engine.tick()
            time.sleep(TICK_INTERVAL_S)

    Args:
        config: initial timer configuration (defaults when None).
        clock: monotonic time source in seconds; inject a fake in tests.
    """

    def __init__(
        self,
        config: TimerConfig | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        config = config or TimerConfig()
        errors = config.validate()
        if errors:
            raise InvalidInput(f"Invalid timer config: {'; '.join(errors)}")
        self._config = config
        self._active_config = config
        self._clock = clock
        self._state = TimerState()
        self.events = EventBus()
        # bumped on every start and stop
        self._session = 0

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def subscribe(self, event: TimerEvent, listener: Listener) -> Callable[[], bool]:
        return self.events.subscribe(event, listener)

    def unsubscribe(self, event: TimerEvent, listener: Listener) -> bool:
        return self.events.unsubscribe(event, listener)

    def emit(self, event: TimerEvent, data: Mapping[str, Any] | None = None) -> None:
        """Deliver *event* with a snapshot of the current state."""
        self.events.emit(self._notification(event, self._clock(), **dict(data or {})))

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def start_timer(
        self, exercise: Exercise, index: int = 0, total_exercises: int = 1
    ) -> bool:
        """Begin *exercise* at the preparing phase.

        Returns False when a session is already running or the arguments
        are malformed. The current config is copied at this point; later
        ``set_timer_config`` calls apply from the next start.
        """
        return self._attempt("start_timer", self._start, exercise, index, total_exercises)

    def pause_timer(self) -> bool:
        return self._attempt("pause_timer", self._pause)

    def resume_timer(self) -> bool:
        return self._attempt("resume_timer", self._resume)

    def skip_phase(self) -> bool:
        """End the current phase now, applying the normal transition."""
        return self._attempt("skip_phase", self._skip)

    def reset_exercise(self) -> bool:
        """Restart the current exercise from preparing, discarding progress."""
        return self._attempt("reset_exercise", self._reset)

    def stop_timer(self) -> bool:
        return self._attempt("stop_timer", self._stop)

    def tick(self) -> float:
        """Recompute the countdown, emit TICK and transition at zero.

        Returns the remaining time of the phase that is current after the
        tick. Paused and idle engines emit nothing.
        """
        if not self.is_running():
            return self._state.remaining_time
        now = self._clock()
        remaining = self._refresh_remaining(now)
        if self._state.is_paused:
            return remaining

        state = self._state
        notifications = [
            self._notification(
                TimerEvent.TICK,
                now,
                remaining=remaining,
                total=state.total_time,
                phase=state.phase,
                set=state.current_set,
                cycle=state.current_cycle,
            )
        ]
        if remaining <= 0:
            notifications.extend(self._advance(now))
        self._flush(notifications)
        return self._state.remaining_time

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def set_timer_config(self, config: TimerConfig | Mapping[str, Any]) -> bool:
        """Replace the config; a mapping is merged over the current one."""
        if isinstance(config, TimerConfig):
            candidate = config
        elif isinstance(config, Mapping):
            candidate = TimerConfig.from_mapping(config, base=self._config)
        else:
            logger.warning("set_timer_config rejected: unsupported type %s", type(config).__name__)
            return False
        errors = candidate.validate()
        if errors:
            logger.warning("set_timer_config rejected: %s", "; ".join(errors))
            return False
        self._config = candidate
        if self.is_running():
            logger.info("Timer config updated; takes effect from the next exercise")
        return True

    def get_timer_config(self) -> TimerConfig:
        return self._config

    def get_active_config(self) -> TimerConfig:
        """Config the current (or last finished) exercise runs with."""
        return self._active_config

    @staticmethod
    def get_default_config() -> TimerConfig:
        return TimerConfig()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_timer_state(self) -> TimerState:
        """Snapshot of the state with the remaining time brought up to date."""
        self._refresh_remaining(self._clock())
        return self._state.snapshot()

    def get_current_phase(self) -> TimerPhase:
        return self._state.phase

    def get_remaining_time(self) -> float:
        return self._refresh_remaining(self._clock())

    def get_current_set(self) -> int:
        return self._state.current_set

    def get_current_cycle(self) -> int:
        return self._state.current_cycle

    def get_progress(self) -> float:
        """Percentage (0-100) of this exercise's work cycles completed."""
        state = self._state
        if state.phase == TimerPhase.COMPLETED:
            return 100.0
        if state.phase == TimerPhase.IDLE:
            return 0.0
        config = self._active_config
        completed = (state.current_set - 1) * config.cycles_per_set + (state.current_cycle - 1)
        return completed * 100.0 / config.total_cycles

    def is_running(self) -> bool:
        """True during preparing, working and resting, paused or not."""
        return self._state.phase in _RUNNING_PHASES

    def is_paused(self) -> bool:
        return self._state.is_paused

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _attempt(self, operation: str, func: Callable[..., list[TimerNotification]], *args: Any) -> bool:
        try:
            notifications = func(*args)
        except (TimerStateError, InvalidInput) as exc:
            logger.warning("%s rejected: %s", operation, exc)
            return False
        self._flush(notifications)
        return True

    def _flush(self, notifications: list[TimerNotification]) -> None:
        session = self._session
        for i, notification in enumerate(notifications):
            if self._session != session:
                logger.debug(
                    "Dropped %d stale notification(s) after the session changed",
                    len(notifications) - i,
                )
                return
            self.events.emit(notification)

    def _notification(self, event: TimerEvent, now: float, **data: Any) -> TimerNotification:
        return TimerNotification(
            event=event, timestamp=now, state=self._state.snapshot(), data=data
        )

    def _start(self, exercise: Exercise, index: int, total_exercises: int) -> list[TimerNotification]:
        if self.is_running():
            raise TimerStateError("a timer is already running; stop it first")
        exercise_id_of(exercise, "timer exercise")
        muscle_group_of(exercise, "timer exercise")
        for name, value in (("index", index), ("total_exercises", total_exercises)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidInput(f"{name} must be an int, got {value!r}")
        if total_exercises < 1 or not 0 <= index < total_exercises:
            raise InvalidInput(
                f"index {index} is outside a workout of {total_exercises} exercise(s)"
            )

        now = self._clock()
        self._active_config = self._config
        self._session += 1
        self._state = TimerState(
            exercise=exercise, exercise_index=index, total_exercises=total_exercises
        )
        self._begin_phase(TimerPhase.PREPARING, self._active_config.prepare, now)
        logger.info(
            "Timer started for '%s' (%d/%d)",
            getattr(exercise, "name", exercise.id),
            index + 1,
            total_exercises,
        )
        return [
            self._notification(
                TimerEvent.STARTED,
                now,
                exercise=exercise,
                index=index,
                total_exercises=total_exercises,
            ),
            self._phase_changed(now),
        ]

    def _pause(self) -> list[TimerNotification]:
        if not self.is_running():
            raise TimerStateError("timer is not running")
        if self._state.is_paused:
            raise TimerStateError("timer is already paused")
        now = self._clock()
        remaining = self._refresh_remaining(now)
        self._state.is_paused = True
        self._state.pause_start_time = now
        return [self._notification(TimerEvent.PAUSED, now, remaining=remaining)]

    def _resume(self) -> list[TimerNotification]:
        state = self._state
        if not state.is_paused or state.pause_start_time is None:
            raise TimerStateError("timer is not paused")
        now = self._clock()
        state.paused_time_accumulated += now - state.pause_start_time
        state.is_paused = False
        state.pause_start_time = None
        remaining = self._refresh_remaining(now)
        return [self._notification(TimerEvent.RESUMED, now, remaining=remaining)]

    def _skip(self) -> list[TimerNotification]:
        if not self.is_running():
            raise TimerStateError("no phase to skip")
        now = self._clock()
        logger.debug("Skipping %s phase", self._state.phase.label)
        return self._advance(now)

    def _reset(self) -> list[TimerNotification]:
        state = self._state
        if state.phase == TimerPhase.IDLE or state.exercise is None:
            raise TimerStateError("no exercise to reset")
        exercise, index, total = state.exercise, state.exercise_index, state.total_exercises
        return self._stop() + self._start(exercise, index, total)

    def _stop(self) -> list[TimerNotification]:
        previous = self._state
        if previous.phase == TimerPhase.IDLE:
            raise TimerStateError("timer is already idle")
        now = self._clock()
        self._state = TimerState()
        self._session += 1
        logger.info("Timer stopped")
        return [
            self._notification(
                TimerEvent.STOPPED,
                now,
                exercise=previous.exercise,
                index=previous.exercise_index,
                phase=previous.phase,
            )
        ]

    def _advance(self, now: float) -> list[TimerNotification]:
        """Apply the transition for the current phase ending at *now*."""
        state = self._state
        config = self._active_config

        if state.phase in (TimerPhase.PREPARING, TimerPhase.RESTING):
            self._begin_phase(TimerPhase.WORKING, config.work, now)
            return [self._phase_changed(now)]

        if state.current_cycle < config.cycles_per_set:
            finished_cycle = state.current_cycle
            state.current_cycle += 1
            self._begin_phase(TimerPhase.RESTING, config.rest, now)
            return [
                self._notification(
                    TimerEvent.CYCLE_COMPLETED,
                    now,
                    cycle=finished_cycle,
                    set=state.current_set,
                ),
                self._phase_changed(now),
            ]

        if state.current_set < config.sets:
            finished_set = state.current_set
            state.current_set += 1
            state.current_cycle = 1
            self._begin_phase(TimerPhase.RESTING, config.rest_between_sets, now)
            return [
                self._notification(
                    TimerEvent.SET_COMPLETED,
                    now,
                    set=finished_set,
                    total_sets=config.sets,
                ),
                self._phase_changed(now),
            ]

        state.phase = TimerPhase.COMPLETED
        state.remaining_time = 0.0
        state.total_time = 0.0
        state.is_paused = False
        state.pause_start_time = None
        logger.info("Exercise %d/%d completed", state.exercise_index + 1, state.total_exercises)
        return [
            self._phase_changed(now),
            self._notification(
                TimerEvent.EXERCISE_COMPLETED,
                now,
                exercise=state.exercise,
                index=state.exercise_index,
                total_exercises=state.total_exercises,
            ),
        ]

    def _begin_phase(self, phase: TimerPhase, duration: int, now: float) -> None:
        state = self._state
        state.phase = phase
        state.total_time = float(duration)
        state.remaining_time = float(duration)
        state.start_time = now
        state.paused_time_accumulated = 0.0
        # a phase entered while paused starts frozen
        state.pause_start_time = now if state.is_paused else None

    def _phase_changed(self, now: float) -> TimerNotification:
        state = self._state
        return self._notification(
            TimerEvent.PHASE_CHANGED,
            now,
            phase=state.phase,
            set=state.current_set,
            cycle=state.current_cycle,
            duration=state.total_time,
        )

    def _refresh_remaining(self, now: float) -> float:
        state = self._state
        if state.phase not in _RUNNING_PHASES or state.start_time is None:
            return state.remaining_time
        paused = state.paused_time_accumulated
        if state.is_paused and state.pause_start_time is not None:
            paused += now - state.pause_start_time
        elapsed = now - state.start_time - paused
        state.remaining_time = max(0.0, state.total_time - elapsed)
        return state.remaining_time
