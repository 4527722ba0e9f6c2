"""Tests for ExerciseCatalog — lookups, defensive copies, validation and recovery."""

from __future__ import annotations

import logging

import pytest

from workout_engine.catalog import DEFAULT_EXERCISES, ExerciseCatalog, normalize_group
from workout_engine.exceptions import CatalogError, InvalidInput, UnknownMuscleGroup
from workout_engine.models.exercise import Exercise


def _healthy(*groups: str, size: int = 8) -> dict[str, list[Exercise]]:
    return {
        g: [Exercise(id=f"{g}_{i:03d}", name=f"{g} {i}", muscle_group=g) for i in range(1, size + 1)]
        for g in groups
    }


class TestDefaultCatalog:
    def test_six_groups(self, catalog: ExerciseCatalog) -> None:
        assert catalog.get_all_muscle_groups() == [
            "chest", "back", "legs", "shoulders", "arms", "core",
        ]

    def test_total_exercises(self, catalog: ExerciseCatalog) -> None:
        assert len(catalog) == sum(len(v) for v in DEFAULT_EXERCISES.values())

    def test_every_group_meets_minimum(self, catalog: ExerciseCatalog) -> None:
        assert all(count >= 8 for count in catalog.get_exercise_counts().values())

    def test_default_is_healthy(self, catalog: ExerciseCatalog) -> None:
        health = catalog.health()
        assert health.is_healthy
        assert health.warnings == ()

    def test_ids_unique(self, catalog: ExerciseCatalog) -> None:
        ids = [ex.id for ex in catalog.get_all_exercises()]
        assert len(ids) == len(set(ids))


class TestLookups:
    def test_group_lookup_returns_group_members(self, catalog: ExerciseCatalog) -> None:
        chest = catalog.get_exercises_by_muscle_group("chest")
        assert chest
        assert all(ex.muscle_group == "chest" for ex in chest)

    def test_group_lookup_is_case_insensitive(self, catalog: ExerciseCatalog) -> None:
        assert catalog.get_exercises_by_muscle_group(" Chest ") == catalog.get_exercises_by_muscle_group("chest")

    def test_group_lookup_returns_new_list(self, catalog: ExerciseCatalog) -> None:
        first = catalog.get_exercises_by_muscle_group("back")
        first.clear()
        assert catalog.get_exercises_by_muscle_group("back")

    def test_unknown_group_raises(self, catalog: ExerciseCatalog) -> None:
        with pytest.raises(UnknownMuscleGroup) as exc_info:
            catalog.get_exercises_by_muscle_group("glutes")
        assert exc_info.value.code == "UNKNOWN_MUSCLE_GROUP"
        assert "Available groups" in str(exc_info.value)

    def test_unknown_group_is_invalid_input(self, catalog: ExerciseCatalog) -> None:
        with pytest.raises(InvalidInput):
            catalog.get_exercises_by_muscle_group("glutes")

    def test_non_string_group_raises(self, catalog: ExerciseCatalog) -> None:
        with pytest.raises(UnknownMuscleGroup):
            catalog.get_exercises_by_muscle_group(42)  # type: ignore[arg-type]

    def test_get_by_id(self, catalog: ExerciseCatalog) -> None:
        ex = catalog.get_exercise_by_id("legs_001")
        assert ex is not None
        assert ex.muscle_group == "legs"

    def test_get_by_missing_id_returns_none(self, catalog: ExerciseCatalog) -> None:
        assert catalog.get_exercise_by_id("legs_999") is None
        assert catalog.get_exercise_by_id(None) is None  # type: ignore[arg-type]

    def test_contains(self, catalog: ExerciseCatalog) -> None:
        assert "core_001" in catalog
        assert "core_999" not in catalog

    def test_is_valid_muscle_group(self, catalog: ExerciseCatalog) -> None:
        assert catalog.is_valid_muscle_group("ARMS")
        assert not catalog.is_valid_muscle_group("glutes")
        assert not catalog.is_valid_muscle_group(None)  # type: ignore[arg-type]

    def test_label_for(self, catalog: ExerciseCatalog) -> None:
        assert catalog.label_for("shoulders") == "Shoulders"
        assert catalog.label_for("calves") == "Calves"

    def test_normalize_group(self) -> None:
        assert normalize_group("  LEGS ") == "legs"


class TestValidationAndRecovery:
    def test_custom_catalog(self, small_catalog: ExerciseCatalog) -> None:
        assert small_catalog.get_all_muscle_groups() == ["chest", "back", "legs"]
        assert len(small_catalog) == 24

    def test_bad_id_format_dropped(self, caplog) -> None:
        data = _healthy("chest", "back", "legs")
        data["chest"].append(Exercise(id="chest-9", name="Bad", muscle_group="chest"))
        with caplog.at_level(logging.WARNING):
            cat = ExerciseCatalog(data)
        assert "chest-9" not in cat
        assert any("Invalid ID format" in w for w in cat.health().warnings)
        assert "Invalid ID format" in caplog.text

    def test_group_mismatch_dropped(self) -> None:
        data = _healthy("chest", "back", "legs")
        data["back"].append(Exercise(id="back_050", name="Squat", muscle_group="legs"))
        cat = ExerciseCatalog(data)
        assert cat.get_exercise_by_id("back_050") is None
        assert not cat.health().is_healthy

    def test_duplicate_id_dropped(self) -> None:
        data = _healthy("chest", "back", "legs")
        data["chest"].append(Exercise(id="chest_001", name="Again", muscle_group="chest"))
        cat = ExerciseCatalog(data)
        assert cat.get_exercise_by_id("chest_001").name == "chest 1"
        assert any("Duplicate" in w for w in cat.health().warnings)

    def test_non_exercise_entry_dropped(self) -> None:
        data = _healthy("chest", "back", "legs")
        data["legs"].append({"id": "legs_010"})  # type: ignore[arg-type]
        cat = ExerciseCatalog(data)
        assert "legs_010" not in cat

    def test_small_group_kept_with_warning(self) -> None:
        data = _healthy("chest", "back", "legs")
        data.update(_healthy("core", size=3))
        cat = ExerciseCatalog(data)
        assert cat.get_exercise_counts()["core"] == 3
        assert any("core has only 3" in w for w in cat.health().warnings)

    def test_empty_group_not_listed(self) -> None:
        data = _healthy("chest", "back", "legs")
        data["arms"] = []
        cat = ExerciseCatalog(data)
        assert "arms" not in cat.get_all_muscle_groups()
        with pytest.raises(UnknownMuscleGroup):
            cat.get_exercises_by_muscle_group("arms")

    def test_too_few_healthy_groups_raises(self) -> None:
        data = _healthy("chest", "back")
        data.update(_healthy("legs", size=2))
        with pytest.raises(CatalogError) as exc_info:
            ExerciseCatalog(data)
        assert exc_info.value.code == "INIT_FAILED"

    def test_healthy_group_threshold_configurable(self) -> None:
        data = _healthy("chest", "back")
        data.update(_healthy("legs", size=2))
        cat = ExerciseCatalog(data, min_healthy_groups=2)
        assert cat.get_all_muscle_groups() == ["chest", "back", "legs"]
