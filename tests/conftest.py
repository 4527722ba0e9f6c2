"""Shared test fixtures: catalogs, seeded generators, a fake clock, event recorders."""

from __future__ import annotations

import random
from typing import Callable

import pytest

from workout_engine.catalog import ExerciseCatalog
from workout_engine.generator import WorkoutGenerator
from workout_engine.models.enums import TimerEvent
from workout_engine.models.exercise import Exercise
from workout_engine.models.timer_config import TimerConfig
from workout_engine.models.timer_state import TimerNotification
from workout_engine.timer import TimerEngine


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class EventRecorder:
    """Subscribes to every TimerEvent on an engine and keeps the payloads."""

    def __init__(self, engine: TimerEngine) -> None:
        self.notifications: list[TimerNotification] = []
        for event in TimerEvent:
            engine.subscribe(event, self.notifications.append)

    def events(self, *, include_ticks: bool = False) -> list[TimerEvent]:
        return [
            n.event for n in self.notifications
            if include_ticks or n.event != TimerEvent.TICK
        ]

    def count(self, event: TimerEvent) -> int:
        return sum(1 for n in self.notifications if n.event == event)

    def of(self, event: TimerEvent) -> list[TimerNotification]:
        return [n for n in self.notifications if n.event == event]


def make_exercise(group: str, number: int, name: str | None = None) -> Exercise:
    return Exercise(
        id=f"{group}_{number:03d}",
        name=name or f"{group.title()} move {number}",
        muscle_group=group,
    )


@pytest.fixture
def catalog() -> ExerciseCatalog:
    """The built-in six-group catalog."""
    return ExerciseCatalog.default()


@pytest.fixture
def small_catalog() -> ExerciseCatalog:
    """Three groups of exactly eight exercises each."""
    return ExerciseCatalog(
        {g: [make_exercise(g, i) for i in range(1, 9)] for g in ("chest", "back", "legs")}
    )


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def generator(catalog: ExerciseCatalog, rng: random.Random) -> WorkoutGenerator:
    return WorkoutGenerator(catalog, rng)


@pytest.fixture
def exercise_factory() -> Callable[..., Exercise]:
    return make_exercise


@pytest.fixture
def chest_back_legs(catalog: ExerciseCatalog) -> list[Exercise]:
    """[chest_001, back_001, legs_001] straight from the catalog."""
    return [catalog.get_exercise_by_id(i) for i in ("chest_001", "back_001", "legs_001")]


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def short_config() -> TimerConfig:
    """prepare 2, work 3, rest 1, 2 cycles, 1 set, 5 s between sets."""
    return TimerConfig(
        prepare=2, work=3, rest=1, cycles_per_set=2, sets=1, rest_between_sets=5
    )


@pytest.fixture
def engine(short_config: TimerConfig, fake_clock: FakeClock) -> TimerEngine:
    return TimerEngine(short_config, clock=fake_clock)


@pytest.fixture
def recorder(engine: TimerEngine) -> EventRecorder:
    return EventRecorder(engine)


@pytest.fixture
def recorder_factory() -> Callable[[TimerEngine], EventRecorder]:
    return EventRecorder
