"""Utility helpers bridging the Streamlit UI and the workout engine.

Pure functions for formatting, table construction and timer-preset
persistence. Nothing here imports streamlit, so it is unit-testable.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Sequence

import pandas as pd

from workout_engine.constraints.validator import constraint_stats
from workout_engine.models.enums import TimerPhase
from workout_engine.models.exercise import Exercise
from workout_engine.models.timer_config import TimerConfig
from workout_engine.timer.schedule import phase_schedule

# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def format_time(seconds: float) -> str:
    """Countdown display. e.g. 75.2 -> '1:16' (rounds up, never negative)."""
    if seconds <= 0:
        return "0:00"
    whole = int(-(-seconds // 1))
    return f"{whole // 60}:{whole % 60:02d}"


def format_duration(seconds: int) -> str:
    """Total length display. e.g. 3725 -> '1h 2m 5s', 90 -> '1m 30s'."""
    if seconds <= 0:
        return "0s"
    h, rem = divmod(int(seconds), 3600)
    m, s = divmod(rem, 60)
    parts = []
    if h:
        parts.append(f"{h}h")
    if m:
        parts.append(f"{m}m")
    if s or not parts:
        parts.append(f"{s}s")
    return " ".join(parts)


# ---------------------------------------------------------------------------
# Color maps
# ---------------------------------------------------------------------------

PHASE_COLORS: dict[TimerPhase, str] = {
    TimerPhase.IDLE: "#D5DBDB",        # grey
    TimerPhase.PREPARING: "#F9E79F",   # yellow
    TimerPhase.WORKING: "#E74C3C",     # red
    TimerPhase.RESTING: "#82E0AA",     # green
    TimerPhase.COMPLETED: "#4A90D9",   # blue
}

MUSCLE_GROUP_COLORS: dict[str, str] = {
    "chest": "#F5B041",
    "back": "#3498DB",
    "legs": "#8E44AD",
    "shoulders": "#1ABC9C",
    "arms": "#E74C3C",
    "core": "#2ECC71",
}


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------


def workout_to_frame(workout: Sequence[Exercise]) -> pd.DataFrame:
    """One row per exercise, flagging any slot that repeats its predecessor."""
    stats = constraint_stats(workout)
    flagged = set(stats.violation_positions)
    return pd.DataFrame(
        [
            {
                "#": i + 1,
                "exercise": ex.name,
                "muscle_group": ex.muscle_group,
                "id": ex.id,
                "adjacent_repeat": i in flagged,
            }
            for i, ex in enumerate(workout)
        ],
        columns=["#", "exercise", "muscle_group", "id", "adjacent_repeat"],
    )


def schedule_to_frame(config: TimerConfig) -> pd.DataFrame:
    """The phase plan of one exercise as a table."""
    return pd.DataFrame(
        [
            {
                "phase": step.phase.label,
                "set": step.set_number,
                "cycle": step.cycle_number,
                "starts_at": format_time(step.offset),
                "duration_s": step.duration,
            }
            for step in phase_schedule(config)
        ],
        columns=["phase", "set", "cycle", "starts_at", "duration_s"],
    )


# ---------------------------------------------------------------------------
# Timer preset persistence
# ---------------------------------------------------------------------------

_PRESETS_DIR = Path(__file__).parent / "presets"


def _ensure_presets_dir() -> Path:
    _PRESETS_DIR.mkdir(parents=True, exist_ok=True)
    return _PRESETS_DIR


def save_preset(name: str, config: TimerConfig) -> Path:
    """Save a timer config as JSON. Returns the file path."""
    d = _ensure_presets_dir()
    # Sanitise filename
    safe = "".join(c if c.isalnum() or c in "-_ " else "" for c in name).strip()
    if not safe:
        safe = "preset"
    path = d / f"{safe}.json"
    with open(path, "w") as f:
        json.dump(config.to_dict(), f, indent=2)
    return path


def load_preset(name: str) -> TimerConfig:
    """Load a timer config from JSON; missing keys fall back to defaults.

    Raises:
        ValueError: the stored values do not form a usable config.
    """
    path = _PRESETS_DIR / f"{name}.json"
    with open(path) as f:
        data = json.load(f)
    config = TimerConfig.from_mapping(data)
    errors = config.validate()
    if errors:
        raise ValueError(f"Preset '{name}' is invalid: {'; '.join(errors)}")
    return config


def list_presets() -> list[str]:
    """List available preset names (without .json extension)."""
    d = _ensure_presets_dir()
    return sorted(p.stem for p in d.glob("*.json"))
