"""Tests for TimerConfig merging and validation."""

from __future__ import annotations

from workout_engine.models.enums import (
    DEFAULT_CYCLES_PER_SET,
    DEFAULT_PREPARE_S,
    DEFAULT_REST_BETWEEN_SETS_S,
    DEFAULT_REST_S,
    DEFAULT_SETS,
    DEFAULT_WORK_S,
)
from workout_engine.models.timer_config import TimerConfig


class TestDefaults:
    def test_default_values(self) -> None:
        config = TimerConfig()
        assert config.prepare == DEFAULT_PREPARE_S
        assert config.work == DEFAULT_WORK_S
        assert config.rest == DEFAULT_REST_S
        assert config.cycles_per_set == DEFAULT_CYCLES_PER_SET
        assert config.sets == DEFAULT_SETS
        assert config.rest_between_sets == DEFAULT_REST_BETWEEN_SETS_S
        assert config.auto_advance is True

    def test_defaults_are_valid(self) -> None:
        assert TimerConfig().validate() == []
        assert TimerConfig().validate_settings_ranges() == []

    def test_total_cycles(self) -> None:
        assert TimerConfig(cycles_per_set=4, sets=3).total_cycles == 12


class TestFromMapping:
    def test_partial_mapping_keeps_base_values(self) -> None:
        base = TimerConfig(work=30, rest=10)
        merged = TimerConfig.from_mapping({"rest": 20}, base=base)
        assert merged.work == 30
        assert merged.rest == 20

    def test_camel_case_aliases(self) -> None:
        merged = TimerConfig.from_mapping(
            {"cyclesPerSet": 5, "restBetweenSets": 90, "autoAdvance": False}
        )
        assert merged.cycles_per_set == 5
        assert merged.rest_between_sets == 90
        assert merged.auto_advance is False

    def test_unknown_keys_ignored(self) -> None:
        merged = TimerConfig.from_mapping({"volume": 11, "work": 20})
        assert merged.work == 20
        assert not hasattr(merged, "volume")

    def test_base_is_not_modified(self) -> None:
        base = TimerConfig()
        TimerConfig.from_mapping({"work": 99}, base=base)
        assert base.work == DEFAULT_WORK_S


class TestValidate:
    def test_zero_work_rejected(self) -> None:
        errors = TimerConfig(work=0).validate()
        assert any("work" in e for e in errors)

    def test_zero_rest_allowed(self) -> None:
        assert TimerConfig(prepare=0, rest=0, rest_between_sets=0).validate() == []

    def test_negative_duration_rejected(self) -> None:
        assert TimerConfig(rest=-1).validate()

    def test_zero_counts_rejected(self) -> None:
        errors = TimerConfig(cycles_per_set=0, sets=0).validate()
        assert len(errors) == 2

    def test_non_integer_rejected(self) -> None:
        assert TimerConfig(work=2.5).validate()  # type: ignore[arg-type]
        assert TimerConfig(work="30").validate()  # type: ignore[arg-type]

    def test_bool_rejected_as_number(self) -> None:
        assert TimerConfig(sets=True).validate()  # type: ignore[arg-type]

    def test_non_bool_flag_rejected(self) -> None:
        assert TimerConfig(auto_advance="yes").validate()  # type: ignore[arg-type]

    def test_short_work_valid_but_outside_settings_range(self) -> None:
        config = TimerConfig(work=3)
        assert config.validate() == []
        errors = config.validate_settings_ranges()
        assert errors == ["Work time must be between 5 and 600 seconds"]
