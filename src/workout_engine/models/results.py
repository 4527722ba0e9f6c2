"""Result records returned by the catalog, validator and generator."""

from __future__ import annotations

from dataclasses import dataclass, field

from workout_engine.models.exercise import Exercise


@dataclass(frozen=True)
class ConstraintStats:
    """Diagnostic summary of a sequence against the adjacency constraint.

    ``violation_positions`` holds the index of the later element of each
    adjacent pair that shares a muscle group.
    """

    total_exercises: int
    violations: int
    violation_positions: tuple[int, ...]
    is_valid: bool
    muscle_group_distribution: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class InsertionCheck:
    """Outcome of placing one candidate at a position in a sequence."""

    is_valid: bool
    errors: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class GenerationResult:
    """A generated workout plus how it was obtained."""

    workout: tuple[Exercise, ...]
    attempts: int
    generation_time_ms: float
    muscle_groups_used: tuple[str, ...]


@dataclass(frozen=True)
class CatalogHealth:
    """Catalog status after construction-time validation and recovery."""

    is_healthy: bool
    total_exercises: int
    muscle_group_counts: dict[str, int]
    warnings: tuple[str, ...] = field(default_factory=tuple)
