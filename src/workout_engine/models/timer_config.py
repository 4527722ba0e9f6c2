"""Timer configuration — durations and counts for one exercise's session."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Mapping

from workout_engine.models.enums import (
    DEFAULT_CYCLES_PER_SET,
    DEFAULT_PREPARE_S,
    DEFAULT_REST_BETWEEN_SETS_S,
    DEFAULT_REST_S,
    DEFAULT_SETS,
    DEFAULT_WORK_S,
    SETTINGS_RANGES,
)

# camelCase spellings accepted by from_mapping()
_KEY_ALIASES: dict[str, str] = {
    "cyclesPerSet": "cycles_per_set",
    "restBetweenSets": "rest_between_sets",
    "autoAdvance": "auto_advance",
    "soundEnabled": "sound_enabled",
    "voiceEnabled": "voice_enabled",
}

_DURATION_FIELDS = ("prepare", "work", "rest", "rest_between_sets")
_COUNT_FIELDS = ("cycles_per_set", "sets")
_FLAG_FIELDS = ("auto_advance", "sound_enabled", "voice_enabled")


@dataclass(frozen=True)
class TimerConfig:
    """Durations are whole seconds; counts are >= 1.

    The engine copies the config when an exercise starts, so a config
    pushed mid-run only takes effect from the next exercise.
    """

    prepare: int = DEFAULT_PREPARE_S
    work: int = DEFAULT_WORK_S
    rest: int = DEFAULT_REST_S
    cycles_per_set: int = DEFAULT_CYCLES_PER_SET
    sets: int = DEFAULT_SETS
    rest_between_sets: int = DEFAULT_REST_BETWEEN_SETS_S
    auto_advance: bool = True
    sound_enabled: bool = True
    voice_enabled: bool = False

    @classmethod
    def from_mapping(
        cls, data: Mapping[str, Any], base: TimerConfig | None = None
    ) -> TimerConfig:
        """Merge a partial mapping over *base* (defaults when None).

        Unknown keys are ignored. Values are not validated here; call
        ``validate()`` on the result.
        """
        known = {f.name for f in dataclasses.fields(cls)}
        updates: dict[str, Any] = {}
        for key, value in data.items():
            name = _KEY_ALIASES.get(key, key)
            if name in known:
                updates[name] = value
        return dataclasses.replace(base or cls(), **updates)

    def validate(self) -> list[str]:
        """Return a list of problems; empty when the config is usable."""
        errors: list[str] = []
        for name in _DURATION_FIELDS + _COUNT_FIELDS:
            value = getattr(self, name)
            # bool is an int subclass; reject it explicitly
            if isinstance(value, bool) or not isinstance(value, int):
                errors.append(f"{name} must be a whole number of seconds or a count")
                continue
            if name in _COUNT_FIELDS and value < 1:
                errors.append(f"{name} must be at least 1")
            elif name == "work" and value < 1:
                errors.append("work must be at least 1 second")
            elif value < 0:
                errors.append(f"{name} must not be negative")
        for name in _FLAG_FIELDS:
            if not isinstance(getattr(self, name), bool):
                errors.append(f"{name} must be a boolean")
        return errors

    def validate_settings_ranges(self) -> list[str]:
        """Check the narrower ranges offered to users in settings screens."""
        errors = self.validate()
        if errors:
            return errors
        for name, (low, high, label, unit) in SETTINGS_RANGES.items():
            value = getattr(self, name)
            if value < low or value > high:
                errors.append(f"{label} must be between {low} and {high} {unit}")
        return errors

    @property
    def total_cycles(self) -> int:
        return self.cycles_per_set * self.sets

    def to_dict(self) -> dict[str, Any]:
        return dataclasses.asdict(self)
