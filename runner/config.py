"""Environment-variable-based configuration for the workout runner."""

from __future__ import annotations

import os

from workout_engine.models import enums

LOG_LEVEL: str = os.environ.get("WORKOUT_LOG_LEVEL", "INFO").upper()

DEFAULT_LENGTH: int = int(os.environ.get("WORKOUT_LENGTH", "8"))
DEFAULT_GROUPS: tuple[str, ...] = tuple(
    g.strip()
    for g in os.environ.get("WORKOUT_GROUPS", "chest,back,legs").split(",")
    if g.strip()
)

PREPARE_S: int = int(os.environ.get("WORKOUT_PREPARE_S", str(enums.DEFAULT_PREPARE_S)))
WORK_S: int = int(os.environ.get("WORKOUT_WORK_S", str(enums.DEFAULT_WORK_S)))
REST_S: int = int(os.environ.get("WORKOUT_REST_S", str(enums.DEFAULT_REST_S)))
CYCLES_PER_SET: int = int(
    os.environ.get("WORKOUT_CYCLES_PER_SET", str(enums.DEFAULT_CYCLES_PER_SET))
)
SETS: int = int(os.environ.get("WORKOUT_SETS", str(enums.DEFAULT_SETS)))
REST_BETWEEN_SETS_S: int = int(
    os.environ.get("WORKOUT_REST_BETWEEN_SETS_S", str(enums.DEFAULT_REST_BETWEEN_SETS_S))
)

TICK_INTERVAL_S: float = float(os.environ.get("WORKOUT_TICK_S", str(enums.TICK_INTERVAL_S)))

MAX_GENERATION_ATTEMPTS: int = int(
    os.environ.get("WORKOUT_MAX_ATTEMPTS", str(enums.MAX_GENERATION_ATTEMPTS))
)
MAX_SHUFFLE_ATTEMPTS: int = int(
    os.environ.get("WORKOUT_MAX_SHUFFLE_ATTEMPTS", str(enums.MAX_SHUFFLE_ATTEMPTS))
)

DAILY_HOUR: int = int(os.environ.get("WORKOUT_DAILY_HOUR", "7"))
DAILY_MINUTE: int = int(os.environ.get("WORKOUT_DAILY_MINUTE", "0"))
