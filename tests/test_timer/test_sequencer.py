"""Tests for WorkoutSequencer — auto-advance, navigation, end of workout."""

from __future__ import annotations

import dataclasses

import pytest

from workout_engine.exceptions import InvalidInput
from workout_engine.models.enums import TimerEvent, TimerPhase
from workout_engine.timer import TimerEngine, WorkoutSequencer


@pytest.fixture
def workout(exercise_factory):
    return [
        exercise_factory("chest", 1),
        exercise_factory("back", 1),
        exercise_factory("legs", 1),
    ]


@pytest.fixture
def sequencer(engine: TimerEngine) -> WorkoutSequencer:
    return WorkoutSequencer(engine)


def _finish_current(engine: TimerEngine) -> None:
    """Skip through every phase of the running exercise (short config: 4 phases)."""
    for _ in range(4):
        assert engine.skip_phase()


class TestAutoAdvance:
    def test_three_exercise_workout(self, engine, sequencer, recorder, workout) -> None:
        sequencer.set_workout(workout)
        assert sequencer.start()

        _finish_current(engine)
        assert sequencer.run_state.current_exercise_index == 1
        assert engine.get_timer_state().exercise == workout[1]
        assert engine.get_current_phase() == TimerPhase.PREPARING

        _finish_current(engine)
        assert sequencer.run_state.current_exercise_index == 2
        assert engine.get_timer_state().exercise == workout[2]
        assert recorder.count(TimerEvent.WORKOUT_COMPLETED) == 0

        _finish_current(engine)
        assert sequencer.run_state.current_exercise_index == 2
        assert sequencer.workout_complete
        assert engine.get_current_phase() == TimerPhase.COMPLETED
        done = recorder.of(TimerEvent.WORKOUT_COMPLETED)
        assert len(done) == 1
        assert done[0].data["total_exercises"] == 3

        assert not sequencer.next()
        assert sequencer.run_state.current_exercise_index == 2
        assert not engine.is_running()

    def test_driven_by_clock(self, engine, fake_clock, sequencer, recorder, workout) -> None:
        sequencer.set_workout(workout)
        sequencer.start()
        while engine.is_running():
            fake_clock.advance(0.5)
            engine.tick()
        completed = [n.data["index"] for n in recorder.of(TimerEvent.EXERCISE_COMPLETED)]
        assert completed == [0, 1, 2]
        assert recorder.count(TimerEvent.WORKOUT_COMPLETED) == 1
        assert sequencer.workout_complete

    def test_started_events_carry_position(self, engine, sequencer, recorder, workout) -> None:
        sequencer.set_workout(workout)
        sequencer.start()
        _finish_current(engine)
        started = recorder.of(TimerEvent.STARTED)
        assert [(n.data["index"], n.data["total_exercises"]) for n in started] == [(0, 3), (1, 3)]

    def test_auto_advance_disabled(self, engine, sequencer, short_config, workout) -> None:
        engine.set_timer_config(dataclasses.replace(short_config, auto_advance=False))
        sequencer.set_workout(workout)
        sequencer.start()
        _finish_current(engine)
        assert sequencer.run_state.current_exercise_index == 0
        assert engine.get_current_phase() == TimerPhase.COMPLETED
        assert sequencer.next()
        assert engine.get_timer_state().exercise == workout[1]

    def test_close_stops_following(self, engine, sequencer, workout) -> None:
        sequencer.set_workout(workout)
        sequencer.start()
        sequencer.close()
        _finish_current(engine)
        assert sequencer.run_state.current_exercise_index == 0
        assert not engine.is_running()

    def test_uses_config_the_exercise_ran_with(self, engine, sequencer, short_config, workout) -> None:
        sequencer.set_workout(workout)
        sequencer.start()
        engine.set_timer_config(dataclasses.replace(short_config, auto_advance=False))
        _finish_current(engine)
        assert sequencer.run_state.current_exercise_index == 1
        assert engine.get_current_phase() == TimerPhase.PREPARING

        _finish_current(engine)
        assert sequencer.run_state.current_exercise_index == 1
        assert engine.get_current_phase() == TimerPhase.COMPLETED

    def test_ignores_completion_of_other_index(self, engine, sequencer, recorder, workout) -> None:
        sequencer.set_workout(workout)
        assert engine.start_timer(workout[2], 2, 3)
        _finish_current(engine)
        assert sequencer.run_state.current_exercise_index == 0
        assert not sequencer.workout_complete
        assert recorder.count(TimerEvent.WORKOUT_COMPLETED) == 0


class TestListenerStops:
    def test_stop_on_completed_phase_wins(self, engine, sequencer, recorder, workout) -> None:
        def stop_when_done(notification) -> None:
            if notification.data["phase"] == TimerPhase.COMPLETED:
                engine.stop_timer()

        engine.subscribe(TimerEvent.PHASE_CHANGED, stop_when_done)
        sequencer.set_workout(workout)
        sequencer.start()
        _finish_current(engine)

        assert engine.get_current_phase() == TimerPhase.IDLE
        assert sequencer.run_state.current_exercise_index == 0
        assert recorder.count(TimerEvent.EXERCISE_COMPLETED) == 0
        assert recorder.count(TimerEvent.STARTED) == 1
        assert recorder.events()[-1] == TimerEvent.STOPPED

    def test_stop_on_final_tick_wins(self, engine, fake_clock, sequencer, recorder, workout) -> None:
        def stop_at_zero(notification) -> None:
            data = notification.data
            if data["phase"] == TimerPhase.WORKING and data["cycle"] == 2 and data["remaining"] <= 0:
                engine.stop_timer()

        engine.subscribe(TimerEvent.TICK, stop_at_zero)
        sequencer.set_workout(workout)
        sequencer.start()
        while engine.is_running():
            fake_clock.advance(1)
            engine.tick()

        assert engine.get_current_phase() == TimerPhase.IDLE
        assert sequencer.run_state.current_exercise_index == 0
        assert recorder.count(TimerEvent.EXERCISE_COMPLETED) == 0
        assert recorder.count(TimerEvent.STARTED) == 1


class TestNavigation:
    def test_next_stops_current_timer(self, engine, sequencer, recorder, workout) -> None:
        sequencer.set_workout(workout)
        sequencer.start()
        engine.skip_phase()
        assert sequencer.next()
        assert TimerEvent.STOPPED in recorder.events()
        state = engine.get_timer_state()
        assert state.exercise == workout[1]
        assert state.phase == TimerPhase.PREPARING

    def test_previous(self, engine, sequencer, workout) -> None:
        sequencer.set_workout(workout)
        sequencer.start()
        assert not sequencer.previous()
        sequencer.next()
        assert sequencer.previous()
        assert sequencer.run_state.current_exercise_index == 0
        assert engine.get_timer_state().exercise == workout[0]

    def test_no_wraparound(self, sequencer, workout) -> None:
        sequencer.set_workout(workout)
        sequencer.start()
        assert sequencer.next()
        assert sequencer.next()
        assert not sequencer.next()
        assert sequencer.run_state.current_exercise_index == 2

    def test_show_timer_by_index(self, engine, sequencer, workout) -> None:
        sequencer.set_workout(workout)
        assert sequencer.show_timer(index=2)
        assert sequencer.run_state.current_exercise_index == 2
        assert engine.get_timer_state().total_exercises == 3

    def test_show_timer_explicit_exercise(self, engine, sequencer, exercise_factory) -> None:
        extra = exercise_factory("core", 1)
        assert sequencer.show_timer(extra, 0, 1)
        assert engine.get_timer_state().exercise == extra

    def test_outside_exercise_does_not_advance(self, engine, sequencer, exercise_factory, workout) -> None:
        sequencer.set_workout(workout)
        extra = exercise_factory("core", 1)
        assert sequencer.show_timer(extra, 0, 3)
        _finish_current(engine)
        assert sequencer.run_state.current_exercise_index == 0
        assert engine.get_current_phase() == TimerPhase.COMPLETED
        assert not sequencer.workout_complete

    def test_out_of_range_exercise_keeps_position(self, engine, sequencer, exercise_factory, workout) -> None:
        sequencer.set_workout(workout)
        sequencer.next()
        assert sequencer.show_timer(exercise_factory("core", 1), 5, 6)
        assert sequencer.run_state.current_exercise_index == 1
        _finish_current(engine)
        assert sequencer.run_state.current_exercise_index == 1
        assert engine.get_timer_state().exercise == exercise_factory("core", 1)

        assert sequencer.next()
        assert engine.get_timer_state().exercise == workout[2]

    def test_show_timer_bad_index(self, sequencer, workout) -> None:
        sequencer.set_workout(workout)
        assert not sequencer.show_timer(index=7)

    def test_empty_workout(self, sequencer) -> None:
        assert not sequencer.start()
        assert not sequencer.next()
        assert not sequencer.previous()


class TestSetWorkout:
    def test_resets_position_and_stops_timer(self, engine, sequencer, workout) -> None:
        sequencer.set_workout(workout)
        sequencer.start()
        sequencer.next()
        sequencer.set_workout(list(reversed(workout)))
        assert sequencer.run_state.current_exercise_index == 0
        assert not engine.is_running()
        assert not sequencer.workout_complete

    def test_stores_copy(self, sequencer, workout) -> None:
        sequencer.set_workout(workout)
        workout.clear()
        assert len(sequencer.run_state.workout_list) == 3

    def test_rejects_non_sequence(self, sequencer) -> None:
        with pytest.raises(InvalidInput):
            sequencer.set_workout("chest")
