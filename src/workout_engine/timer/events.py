"""Per-engine observer registry for timer notifications."""

from __future__ import annotations

import logging
from typing import Callable

from workout_engine.models.enums import TimerEvent
from workout_engine.models.timer_state import TimerNotification

logger = logging.getLogger(__name__)

Listener = Callable[[TimerNotification], None]


class EventBus:
    """Callback lists keyed by TimerEvent.

    Listeners run synchronously in subscription order. A listener may
    subscribe, unsubscribe or drive the engine from inside its callback;
    the current emission keeps iterating over the list as it was when the
    emission began. A failing listener is logged and does not stop the
    others from being called.
    """

    def __init__(self) -> None:
        self._listeners: dict[TimerEvent, list[Listener]] = {}

    def subscribe(self, event: TimerEvent, listener: Listener) -> Callable[[], bool]:
        """Register *listener*; returns a callable that unsubscribes it."""
        self._listeners.setdefault(event, []).append(listener)
        return lambda: self.unsubscribe(event, listener)

    def unsubscribe(self, event: TimerEvent, listener: Listener) -> bool:
        listeners = self._listeners.get(event, [])
        if listener not in listeners:
            return False
        listeners.remove(listener)
        return True

    def emit(self, notification: TimerNotification) -> None:
        for listener in list(self._listeners.get(notification.event, ())):
            try:
                listener(notification)
            except Exception:
                logger.exception(
                    "Listener %r failed while handling %s",
                    listener,
                    notification.event.name,
                )

    def listener_count(self, event: TimerEvent | None = None) -> int:
        if event is not None:
            return len(self._listeners.get(event, ()))
        return sum(len(v) for v in self._listeners.values())

    def clear(self) -> None:
        self._listeners.clear()
