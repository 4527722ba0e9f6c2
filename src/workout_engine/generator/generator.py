"""WorkoutGenerator — builds, reorders and edits constrained workouts.

A workout is a list of exercises in which no two neighbours share a
muscle group and no exercise appears twice. Every operation returns a new
list; inputs are never mutated.
"""

from __future__ import annotations

import logging
import random
import time
from typing import Any, Iterable, Sequence

from workout_engine.catalog.catalog import ExerciseCatalog, normalize_group
from workout_engine.constraints.validator import (
    exercise_id_of,
    is_valid_workout,
    muscle_group_of,
    validate_exercise_insertion,
)
from workout_engine.exceptions import (
    ConstraintUnsatisfiable,
    ConstraintViolation,
    GenerationFailed,
    IndexOutOfBounds,
    InsufficientExercises,
    InvalidInput,
    ReplacementError,
)
from workout_engine.generator.history import ReplacementHistory
from workout_engine.generator.shuffle import interleave_by_group, shuffle_array
from workout_engine.models.enums import (
    MAX_GENERATION_ATTEMPTS,
    MAX_SHUFFLE_ATTEMPTS,
    MAX_WORKOUT_LENGTH,
    MIN_WORKOUT_LENGTH,
    ReplacementFailure,
)
from workout_engine.models.exercise import Exercise
from workout_engine.models.results import GenerationResult

logger = logging.getLogger(__name__)


class WorkoutGenerator:
    """Generates workouts from an explicitly supplied catalog.

    Usage::

        generator = WorkoutGenerator(ExerciseCatalog.default())
        workout = generator.generate_random_workout(8, ["chest", "back", "legs"])

    Pass a seeded ``random.Random`` as *rng* for reproducible output.
    """

    def __init__(
        self,
        catalog: ExerciseCatalog,
        rng: random.Random | None = None,
        *,
        max_attempts: int = MAX_GENERATION_ATTEMPTS,
        max_shuffle_attempts: int = MAX_SHUFFLE_ATTEMPTS,
    ) -> None:
        self.catalog = catalog
        self.rng = rng or random.Random()
        self.max_attempts = max_attempts
        self.max_shuffle_attempts = max_shuffle_attempts

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    def generate_random_workout(
        self, length: int, enabled_groups: Iterable[str]
    ) -> list[Exercise]:
        """Build a new *length*-exercise workout from *enabled_groups*."""
        return list(self.generate(length, enabled_groups).workout)

    def generate(self, length: int, enabled_groups: Iterable[str]) -> GenerationResult:
        """Build a workout and report how many attempts it took.

        Raises:
            InvalidInput: bad length type/range or unknown/empty groups.
            ConstraintUnsatisfiable: one group with length > 1.
            InsufficientExercises: fewer distinct exercises than *length*.
            GenerationFailed: every attempt dead-ended.
            ConstraintViolation: the finished workout broke an invariant.
        """
        started = time.perf_counter()
        groups = self._check_generation_params(length, enabled_groups)

        for attempt in range(1, self.max_attempts + 1):
            workout = self._build_once(length, groups)
            if workout is not None:
                self._verify(workout)
                elapsed_ms = (time.perf_counter() - started) * 1000.0
                used = tuple(dict.fromkeys(ex.muscle_group for ex in workout))
                logger.info(
                    "Generated %d-exercise workout in %d attempt(s) (%.1f ms)",
                    length,
                    attempt,
                    elapsed_ms,
                )
                return GenerationResult(
                    workout=tuple(workout),
                    attempts=attempt,
                    generation_time_ms=round(elapsed_ms, 3),
                    muscle_groups_used=used,
                )
            logger.debug("Generation attempt %d dead-ended, retrying", attempt)

        raise GenerationFailed(
            f"Failed to generate a valid {length}-exercise workout after "
            f"{self.max_attempts} attempts",
            attempts=self.max_attempts,
        )

    def _check_generation_params(
        self, length: Any, enabled_groups: Iterable[str]
    ) -> list[str]:
        """Validate inputs and return the normalised, de-duplicated groups."""
        if isinstance(length, bool) or not isinstance(length, int):
            raise InvalidInput(f"Workout length must be an integer, got {length!r}")
        if isinstance(enabled_groups, str):
            raise InvalidInput("enabled_groups must be a collection of group names")

        groups: list[str] = []
        for group in enabled_groups:
            if not isinstance(group, str) or not group.strip():
                raise InvalidInput(f"Invalid muscle group: {group!r}")
            key = normalize_group(group)
            if not self.catalog.is_valid_muscle_group(key):
                available = ", ".join(self.catalog.get_all_muscle_groups())
                raise InvalidInput(
                    f"Unknown muscle group: '{group}'. Available groups: {available}"
                )
            if key not in groups:
                groups.append(key)
        if not groups:
            raise InvalidInput("At least one muscle group must be enabled")

        if len(groups) == 1 and length > 1:
            raise ConstraintUnsatisfiable(
                f"Cannot build a {length}-exercise workout from the single "
                f"muscle group '{groups[0]}' without repeating it back to back"
            )
        if length < MIN_WORKOUT_LENGTH or length > MAX_WORKOUT_LENGTH:
            raise InvalidInput(
                f"Workout length must be between {MIN_WORKOUT_LENGTH} and "
                f"{MAX_WORKOUT_LENGTH}, got {length}"
            )

        available_count = sum(
            len(self.catalog.get_exercises_by_muscle_group(g)) for g in groups
        )
        if available_count < length:
            raise InsufficientExercises(
                f"Only {available_count} exercises available across "
                f"{', '.join(groups)}; {length} requested"
            )
        return groups

    def _build_once(self, length: int, groups: list[str]) -> list[Exercise] | None:
        """One greedy build over fresh shuffles; None when it dead-ends."""
        pools = {
            g: shuffle_array(self.catalog.get_exercises_by_muscle_group(g), self.rng)
            for g in groups
        }
        used: set[str] = set()
        workout: list[Exercise] = []

        while len(workout) < length:
            previous = workout[-1].muscle_group if workout else None
            candidates = [g for g in groups if g != previous]
            if not candidates:
                raise ConstraintViolation(
                    f"No muscle group differs from '{previous}' among {groups}"
                )
            picked: Exercise | None = None
            for group in shuffle_array(candidates, self.rng):
                picked = next((ex for ex in pools[group] if ex.id not in used), None)
                if picked is not None:
                    break
            if picked is None:
                return None
            workout.append(picked)
            used.add(picked.id)
        return workout

    @staticmethod
    def _verify(workout: Sequence[Exercise]) -> None:
        if not is_valid_workout(workout):
            raise ConstraintViolation("Generated workout breaks the adjacency constraint")
        ids = [ex.id for ex in workout]
        if len(set(ids)) != len(ids):
            raise ConstraintViolation("Generated workout repeats an exercise")

    # ------------------------------------------------------------------
    # Shuffling
    # ------------------------------------------------------------------

    def shuffle_array(self, items: Sequence[Any]) -> list[Any]:
        """Fisher–Yates copy using this generator's RNG."""
        return shuffle_array(items, self.rng)

    def shuffle_workout(self, sequence: Sequence[Exercise]) -> list[Exercise]:
        """Reorder *sequence* randomly while keeping the adjacency rule.

        Tries ``max_shuffle_attempts`` plain shuffles first, then falls
        back to a group-interleaving reorder. When no valid order exists
        the original order is returned unchanged.
        """
        if len(sequence) <= 1:
            return list(sequence)
        for attempt in range(1, self.max_shuffle_attempts + 1):
            candidate = self.shuffle_array(sequence)
            if is_valid_workout(candidate):
                logger.debug("Shuffle accepted on attempt %d", attempt)
                return candidate

        logger.info(
            "No valid random shuffle in %d attempts; interleaving by muscle group",
            self.max_shuffle_attempts,
        )
        interleaved = interleave_by_group(sequence, self.rng)
        if interleaved is None or not is_valid_workout(interleaved):
            logger.warning("Workout cannot be reordered without adjacent repeats")
            return list(sequence)
        return interleaved

    # ------------------------------------------------------------------
    # Replacement
    # ------------------------------------------------------------------

    def get_replacement_options(
        self, position: int, sequence: Sequence[Exercise]
    ) -> list[Exercise]:
        """Catalog exercises that may take the place of ``sequence[position]``.

        Options come from the same muscle group, exclude the current
        exercise and anything used elsewhere in the workout, and must not
        match a neighbour's muscle group.
        """
        self._check_position(position, sequence)
        current = sequence[position]
        group = muscle_group_of(current, f"exercise at index {position}")
        current_id = exercise_id_of(current, f"exercise at index {position}")
        used_elsewhere = {
            exercise_id_of(ex, f"exercise at index {i}")
            for i, ex in enumerate(sequence)
            if i != position
        }

        options: list[Exercise] = []
        for candidate in self.catalog.get_exercises_by_muscle_group(group):
            if candidate.id == current_id or candidate.id in used_elsewhere:
                continue
            if not validate_exercise_insertion(sequence, position, candidate).is_valid:
                continue
            options.append(candidate)
        return options

    def get_random_replacement(
        self,
        position: int,
        sequence: Sequence[Exercise],
        exclude_ids: Iterable[str] = (),
    ) -> Exercise | None:
        """A random replacement option, or None when there is none."""
        excluded = set(exclude_ids)
        options = [
            ex for ex in self.get_replacement_options(position, sequence)
            if ex.id not in excluded
        ]
        if not options:
            return None
        return self.rng.choice(options)

    def replace_exercise(
        self,
        sequence: Sequence[Exercise],
        index: int,
        new_exercise: Exercise,
        history: ReplacementHistory | None = None,
    ) -> list[Exercise]:
        """Return a copy of *sequence* with position *index* swapped.

        Raises:
            IndexOutOfBounds / InvalidInput: bad index or malformed sequence.
            ReplacementError: with ``reason`` naming the rule that failed.
        """
        self._check_position(index, sequence)
        old = sequence[index]
        old_group = muscle_group_of(old, f"exercise at index {index}")

        if not all(
            isinstance(getattr(new_exercise, attr, None), str)
            and getattr(new_exercise, attr)
            for attr in ("id", "name", "muscle_group")
        ):
            raise ReplacementError(
                "New exercise must have an id, a name and a muscle group",
                ReplacementFailure.INVALID_EXERCISE,
            )
        if new_exercise.id == old.id:
            return list(sequence)

        canonical = self.catalog.get_exercise_by_id(new_exercise.id)
        if canonical is None:
            raise ReplacementError(
                f"Exercise '{new_exercise.id}' is not in the catalog",
                ReplacementFailure.NOT_IN_CATALOG,
            )
        new_group = normalize_group(new_exercise.muscle_group)
        if new_group != old_group or canonical.muscle_group != old_group:
            raise ReplacementError(
                f"Muscle group mismatch: cannot replace {old_group} exercise "
                f"with {new_group} exercise",
                ReplacementFailure.MUSCLE_GROUP_MISMATCH,
            )
        if any(ex.id == canonical.id for i, ex in enumerate(sequence) if i != index):
            raise ReplacementError(
                f"Exercise '{canonical.id}' is already in the workout",
                ReplacementFailure.DUPLICATE_IN_WORKOUT,
            )

        check = validate_exercise_insertion(sequence, index, canonical)
        replaced = list(sequence)
        replaced[index] = canonical
        if not check.is_valid or not is_valid_workout(replaced):
            detail = "; ".join(check.errors) or "workout would break the adjacency rule"
            raise ReplacementError(
                f"Replacement would violate constraints: {detail}",
                ReplacementFailure.WOULD_VIOLATE_ADJACENCY,
            )

        if history is not None:
            history.record(index, old, canonical)
        logger.info("Replaced '%s' with '%s' at position %d", old.name, canonical.name, index)
        return replaced

    @staticmethod
    def _check_position(position: Any, sequence: Sequence[Exercise]) -> None:
        if isinstance(sequence, (str, bytes)) or not isinstance(sequence, Sequence):
            raise InvalidInput("Workout must be a sequence of exercises")
        if isinstance(position, bool) or not isinstance(position, int):
            raise InvalidInput(f"Position must be an integer, got {position!r}")
        if position < 0 or position >= len(sequence):
            raise IndexOutOfBounds(
                f"Invalid position {position} (workout length: {len(sequence)})"
            )
