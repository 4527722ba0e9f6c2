"""Enumerations and tuning constants for the workout engine.

Limits that come from product policy (workout length, settings ranges) and
the empirical retry ceilings used by the generator live here so the rest of
the package imports them from one place.
"""

from enum import IntEnum, auto


class TimerPhase(IntEnum):
    """Phases of a single exercise's timing session.

    Pausing is orthogonal to the phase and is tracked separately on
    ``TimerState.is_paused``.
    """

    IDLE = auto()
    PREPARING = auto()
    WORKING = auto()
    RESTING = auto()
    COMPLETED = auto()

    @property
    def label(self) -> str:
        return self.name.lower()


class TimerEvent(IntEnum):
    """Notifications emitted by the timer engine and the sequencer."""

    STARTED = auto()
    PAUSED = auto()
    RESUMED = auto()
    STOPPED = auto()
    TICK = auto()
    PHASE_CHANGED = auto()
    CYCLE_COMPLETED = auto()
    SET_COMPLETED = auto()
    EXERCISE_COMPLETED = auto()
    WORKOUT_COMPLETED = auto()


class ReplacementFailure(IntEnum):
    """Which replacement rule rejected a swap."""

    INVALID_EXERCISE = auto()
    NOT_IN_CATALOG = auto()
    MUSCLE_GROUP_MISMATCH = auto()
    DUPLICATE_IN_WORKOUT = auto()
    WOULD_VIOLATE_ADJACENCY = auto()


# ---------------------------------------------------------------------------
# Workout length policy
# ---------------------------------------------------------------------------
MIN_WORKOUT_LENGTH = 4
MAX_WORKOUT_LENGTH = 20

# ---------------------------------------------------------------------------
# Generator tuning (empirical, not semantically meaningful)
# ---------------------------------------------------------------------------
MAX_GENERATION_ATTEMPTS = 100   # full greedy builds before GenerationFailed
MAX_SHUFFLE_ATTEMPTS = 50       # random reorders before the interleave fallback
REPLACEMENT_HISTORY_LIMIT = 50

# ---------------------------------------------------------------------------
# Catalog health thresholds
# ---------------------------------------------------------------------------
MIN_EXERCISES_PER_GROUP = 8
MIN_HEALTHY_GROUPS = 3      # recovery keeps the catalog only above this

# ---------------------------------------------------------------------------
# Timer defaults (seconds / counts)
# ---------------------------------------------------------------------------
DEFAULT_PREPARE_S = 10
DEFAULT_WORK_S = 45
DEFAULT_REST_S = 15
DEFAULT_CYCLES_PER_SET = 3
DEFAULT_SETS = 3
DEFAULT_REST_BETWEEN_SETS_S = 60

# Tick cadence for UI smoothness only; phase completion is clock-derived
TICK_INTERVAL_S = 0.1

# ---------------------------------------------------------------------------
# User-facing settings ranges: (min, max, display name, unit)
# ---------------------------------------------------------------------------
SETTINGS_RANGES: dict[str, tuple[int, int, str, str]] = {
    "prepare": (0, 60, "Prepare time", "seconds"),
    "work": (5, 600, "Work time", "seconds"),
    "rest": (0, 300, "Rest time", "seconds"),
    "cycles_per_set": (1, 20, "Cycles per set", "cycles"),
    "sets": (1, 20, "Sets", "sets"),
    "rest_between_sets": (0, 600, "Rest between sets", "seconds"),
}
