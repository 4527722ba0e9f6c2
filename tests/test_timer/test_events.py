"""Tests for the per-engine EventBus."""

from __future__ import annotations

from workout_engine.models.enums import TimerEvent
from workout_engine.models.timer_state import TimerNotification, TimerState
from workout_engine.timer import EventBus


def _note(event: TimerEvent) -> TimerNotification:
    return TimerNotification(event=event, timestamp=0.0, state=TimerState())


class TestEventBus:
    def test_delivers_only_matching_event(self) -> None:
        bus = EventBus()
        seen = []
        bus.subscribe(TimerEvent.PAUSED, seen.append)
        bus.emit(_note(TimerEvent.RESUMED))
        bus.emit(_note(TimerEvent.PAUSED))
        assert [n.event for n in seen] == [TimerEvent.PAUSED]

    def test_subscription_order(self) -> None:
        bus = EventBus()
        order = []
        bus.subscribe(TimerEvent.TICK, lambda n: order.append("a"))
        bus.subscribe(TimerEvent.TICK, lambda n: order.append("b"))
        bus.emit(_note(TimerEvent.TICK))
        assert order == ["a", "b"]

    def test_returned_callable_unsubscribes(self) -> None:
        bus = EventBus()
        seen = []
        cancel = bus.subscribe(TimerEvent.TICK, seen.append)
        assert cancel()
        assert not cancel()
        bus.emit(_note(TimerEvent.TICK))
        assert seen == []

    def test_unsubscribe_unknown_listener(self) -> None:
        assert not EventBus().unsubscribe(TimerEvent.TICK, print)

    def test_listener_added_during_emit_waits_for_next(self) -> None:
        bus = EventBus()
        late = []

        def add_late(notification) -> None:
            bus.subscribe(TimerEvent.TICK, late.append)

        bus.subscribe(TimerEvent.TICK, add_late)
        bus.emit(_note(TimerEvent.TICK))
        assert late == []
        bus.emit(_note(TimerEvent.TICK))
        assert len(late) == 1

    def test_failing_listener_isolated(self) -> None:
        bus = EventBus()
        seen = []

        def boom(notification) -> None:
            raise ValueError("bad listener")

        bus.subscribe(TimerEvent.STOPPED, boom)
        bus.subscribe(TimerEvent.STOPPED, seen.append)
        bus.emit(_note(TimerEvent.STOPPED))
        assert len(seen) == 1

    def test_listener_count_and_clear(self) -> None:
        bus = EventBus()
        bus.subscribe(TimerEvent.TICK, print)
        bus.subscribe(TimerEvent.STOPPED, print)
        assert bus.listener_count(TimerEvent.TICK) == 1
        assert bus.listener_count() == 2
        bus.clear()
        assert bus.listener_count() == 0
