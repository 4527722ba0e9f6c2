"""ExerciseCatalog — read-only muscle-group → exercise lookup.

The catalog is validated once, at construction. Invalid entries are logged
and dropped; construction only fails when too few muscle groups survive to
build useful workouts.
"""

from __future__ import annotations

import logging
import re
from typing import Mapping, Sequence

from workout_engine.catalog.exercises import DEFAULT_EXERCISES, MUSCLE_GROUP_LABELS
from workout_engine.exceptions import CatalogError, UnknownMuscleGroup
from workout_engine.models.enums import MIN_EXERCISES_PER_GROUP, MIN_HEALTHY_GROUPS
from workout_engine.models.exercise import Exercise
from workout_engine.models.results import CatalogHealth

logger = logging.getLogger(__name__)


def normalize_group(group: str) -> str:
    """Canonical spelling of a muscle-group tag."""
    return group.strip().lower()


def _entry_problem(entry: object, group: str) -> str | None:
    """Describe what is wrong with one bucket entry, or None if it is fine."""
    if not isinstance(entry, Exercise):
        return f"Invalid exercise in {group}: {entry!r}"
    for attr in ("id", "name", "muscle_group"):
        value = getattr(entry, attr)
        if not isinstance(value, str) or not value:
            return f"Invalid exercise in {group}: missing {attr} on {entry!r}"
    if entry.muscle_group != group:
        return (
            f"Muscle group mismatch: {entry.id} has muscle group "
            f"'{entry.muscle_group}' but is in '{group}'"
        )
    if not re.fullmatch(rf"{re.escape(group)}_\d{{3}}", entry.id):
        return f"Invalid ID format: {entry.id} (expected: {group}_###)"
    return None


class ExerciseCatalog:
    """Validated, read-only exercise lookup keyed by muscle group.

    Usage::

        catalog = ExerciseCatalog.default()
        chest = catalog.get_exercises_by_muscle_group("chest")
    """

    def __init__(
        self,
        exercises_by_group: Mapping[str, Sequence[Exercise]] | None = None,
        labels: Mapping[str, str] | None = None,
        *,
        min_exercises_per_group: int = MIN_EXERCISES_PER_GROUP,
        min_healthy_groups: int = MIN_HEALTHY_GROUPS,
    ) -> None:
        source = DEFAULT_EXERCISES if exercises_by_group is None else exercises_by_group
        self._labels = {
            normalize_group(k): v
            for k, v in (MUSCLE_GROUP_LABELS if labels is None else labels).items()
        }
        self._min_per_group = min_exercises_per_group
        self._exercises: dict[str, tuple[Exercise, ...]] = {}
        self._by_id: dict[str, Exercise] = {}
        self._warnings: list[str] = []

        self._load(source)

        healthy = [
            g for g, entries in self._exercises.items()
            if len(entries) >= self._min_per_group
        ]
        if self._warnings:
            for warning in self._warnings:
                logger.warning("Catalog validation: %s", warning)
            if len(healthy) < min_healthy_groups:
                raise CatalogError(
                    f"Catalog unusable: {len(healthy)} muscle groups meet the "
                    f"minimum of {self._min_per_group} exercises "
                    f"(need {min_healthy_groups})",
                    code="INIT_FAILED",
                )
            logger.warning(
                "Catalog recovered with %d warnings; %d healthy muscle groups",
                len(self._warnings),
                len(healthy),
            )
        logger.debug(
            "Catalog ready with %d exercises across %d muscle groups",
            len(self._by_id),
            len(self.get_all_muscle_groups()),
        )

    @classmethod
    def default(cls) -> ExerciseCatalog:
        """The built-in six-group catalog."""
        return cls()

    def _load(self, source: Mapping[str, Sequence[Exercise]]) -> None:
        """Copy valid entries into the lookup tables, recording problems."""
        for raw_group, entries in source.items():
            group = normalize_group(raw_group)
            kept: list[Exercise] = []
            for entry in entries:
                problem = _entry_problem(entry, group)
                if problem is None and entry.id in self._by_id:
                    problem = f"Duplicate exercise ID: {entry.id}"
                if problem is not None:
                    self._warnings.append(problem)
                    continue
                kept.append(entry)
                self._by_id[entry.id] = entry
            if len(kept) < self._min_per_group:
                self._warnings.append(
                    f"{group} has only {len(kept)} exercises "
                    f"(minimum {self._min_per_group} required)"
                )
            self._exercises[group] = tuple(kept)

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get_exercises_by_muscle_group(self, group: str) -> list[Exercise]:
        """All exercises for *group*, as a new list.

        Raises:
            UnknownMuscleGroup: *group* is not a string, is unknown, or has
                no exercises.
        """
        if not isinstance(group, str):
            raise UnknownMuscleGroup(
                f"Invalid muscle group parameter: expected str, got {type(group).__name__}"
            )
        key = normalize_group(group)
        entries = self._exercises.get(key)
        if not entries:
            available = ", ".join(self.get_all_muscle_groups())
            raise UnknownMuscleGroup(
                f"Unknown muscle group: '{group}'. Available groups: {available}"
            )
        return list(entries)

    def get_all_muscle_groups(self) -> list[str]:
        """Muscle groups that hold at least one exercise, in catalog order."""
        return [g for g, entries in self._exercises.items() if entries]

    def get_exercise_by_id(self, exercise_id: str) -> Exercise | None:
        if not isinstance(exercise_id, str):
            return None
        return self._by_id.get(exercise_id)

    def get_all_exercises(self) -> list[Exercise]:
        return [ex for entries in self._exercises.values() for ex in entries]

    def get_exercise_counts(self) -> dict[str, int]:
        return {g: len(entries) for g, entries in self._exercises.items()}

    def is_valid_muscle_group(self, group: str) -> bool:
        return isinstance(group, str) and bool(self._exercises.get(normalize_group(group)))

    def label_for(self, group: str) -> str:
        """Human-readable label, falling back to a title-cased tag."""
        key = normalize_group(group)
        return self._labels.get(key, key.title())

    def health(self) -> CatalogHealth:
        return CatalogHealth(
            is_healthy=not self._warnings,
            total_exercises=len(self._by_id),
            muscle_group_counts=self.get_exercise_counts(),
            warnings=tuple(self._warnings),
        )

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, exercise_id: object) -> bool:
        return exercise_id in self._by_id
