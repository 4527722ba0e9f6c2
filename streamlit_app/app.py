"""Circuit Workout — Streamlit dashboard.

Run with:
    streamlit run streamlit_app/app.py

Generate an adjacency-safe workout, swap or reshuffle exercises, preview
the timer plan and run the interval timer in the browser.
"""

from __future__ import annotations

import time

import streamlit as st

from workout_engine.catalog import ExerciseCatalog
from workout_engine.exceptions import ReplacementError, WorkoutEngineError
from workout_engine.generator import ReplacementHistory, WorkoutGenerator
from workout_engine.generator.capabilities import (
    probe_generation_capabilities,
    summarize_capabilities,
)
from workout_engine.models.enums import (
    MAX_WORKOUT_LENGTH,
    MIN_WORKOUT_LENGTH,
    SETTINGS_RANGES,
    TICK_INTERVAL_S,
    TimerEvent,
)
from workout_engine.models.timer_config import TimerConfig
from workout_engine.timer import TimerEngine, WorkoutSequencer, exercise_duration, workout_duration

from helpers import (
    MUSCLE_GROUP_COLORS,
    PHASE_COLORS,
    format_duration,
    format_time,
    list_presets,
    load_preset,
    save_preset,
    schedule_to_frame,
    workout_to_frame,
)

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------

st.set_page_config(
    page_title="Circuit Workout",
    page_icon="💪",
    layout="wide",
)


# ---------------------------------------------------------------------------
# Cached catalog / generator
# ---------------------------------------------------------------------------


@st.cache_resource
def get_catalog() -> ExerciseCatalog:
    return ExerciseCatalog.default()


def get_generator() -> WorkoutGenerator:
    return WorkoutGenerator(get_catalog())


def _history() -> ReplacementHistory:
    if "history" not in st.session_state:
        st.session_state["history"] = ReplacementHistory()
    return st.session_state["history"]


def _render_workout(workout) -> None:
    """Render the workout as color-coded rows."""
    catalog = get_catalog()
    for i, ex in enumerate(workout):
        color = MUSCLE_GROUP_COLORS.get(ex.muscle_group, "#CCCCCC")
        st.markdown(
            f'<div style="background:{color};padding:6px 12px;'
            f'border-radius:4px;margin:2px 0;width:100%;">'
            f"<strong>{i + 1}. {ex.name}</strong> | {catalog.label_for(ex.muscle_group)}</div>",
            unsafe_allow_html=True,
        )


# ---------------------------------------------------------------------------
# Sidebar: Workout & Timer settings
# ---------------------------------------------------------------------------

st.sidebar.title("Workout Settings")

catalog = get_catalog()
all_groups = catalog.get_all_muscle_groups()

with st.sidebar.expander("Workout", expanded=True):
    length = st.number_input(
        "Exercises", MIN_WORKOUT_LENGTH, MAX_WORKOUT_LENGTH, 8, key="length",
    )
    enabled_groups = st.multiselect(
        "Muscle groups",
        all_groups,
        default=all_groups[:3],
        format_func=catalog.label_for,
    )

preset_config = st.session_state.get("preset_config", TimerConfig())

with st.sidebar.expander("Timer", expanded=True):
    timer_values: dict[str, int] = {}
    for field_name, (low, high, label, unit) in SETTINGS_RANGES.items():
        timer_values[field_name] = st.number_input(
            f"{label} ({unit})", low, high,
            int(min(max(getattr(preset_config, field_name), low), high)),
            key=f"timer_{field_name}",
        )
    auto_advance = st.checkbox("Auto-advance", value=preset_config.auto_advance)

timer_config = TimerConfig.from_mapping({**timer_values, "auto_advance": auto_advance})
config_errors = timer_config.validate_settings_ranges()
if config_errors:
    for err in config_errors:
        st.sidebar.error(err)

# --- Presets ---
with st.sidebar.expander("Timer Presets"):
    presets = list_presets()
    selected_preset = st.selectbox("Load preset", ["(none)"] + presets)
    if st.button("Load") and selected_preset != "(none)":
        try:
            st.session_state["preset_config"] = load_preset(selected_preset)
            st.rerun()
        except (OSError, ValueError) as e:
            st.error(f"Could not load preset: {e}")
    preset_name = st.text_input("Save as", value="my_timer")
    if st.button("Save Preset"):
        save_preset(preset_name, timer_config)
        st.success(f"Saved as '{preset_name}'")


# ---------------------------------------------------------------------------
# Tabs
# ---------------------------------------------------------------------------

tab_workout, tab_timer, tab_catalog = st.tabs(["Workout", "Timer", "Catalog"])

# ===== Workout =====
with tab_workout:
    col_gen, col_shuffle, col_undo, col_redo = st.columns(4)
    with col_gen:
        if st.button("Generate Workout", type="primary"):
            try:
                result = get_generator().generate(int(length), enabled_groups)
                st.session_state["workout"] = list(result.workout)
                _history().clear()
                st.caption(
                    f"Built in {result.attempts} attempt(s), "
                    f"{result.generation_time_ms:.1f} ms"
                )
            except WorkoutEngineError as e:
                st.error(str(e))
    workout = st.session_state.get("workout", [])
    with col_shuffle:
        if st.button("Shuffle", disabled=not workout):
            st.session_state["workout"] = get_generator().shuffle_workout(workout)
            _history().clear()
    with col_undo:
        if st.button("Undo swap", disabled=not _history().can_undo()):
            restored = _history().undo(workout)
            if restored is not None:
                st.session_state["workout"] = restored
            else:
                st.warning("The workout changed since that swap; nothing to undo.")
    with col_redo:
        if st.button("Redo swap", disabled=not _history().can_redo()):
            restored = _history().redo(workout)
            if restored is not None:
                st.session_state["workout"] = restored
            else:
                st.warning("The workout changed since that swap; nothing to redo.")

    workout = st.session_state.get("workout", [])
    if not workout:
        st.info("Pick muscle groups and generate a workout.")
    else:
        _render_workout(workout)
        st.dataframe(workout_to_frame(workout), hide_index=True, use_container_width=True)

        st.subheader("Swap an exercise")
        position = st.selectbox(
            "Position",
            list(range(len(workout))),
            format_func=lambda i: f"{i + 1}. {workout[i].name}",
        )
        generator = get_generator()
        options = generator.get_replacement_options(position, workout)
        if not options:
            st.caption("No alternatives available for this slot.")
        else:
            choice = st.selectbox("Replace with", options, format_func=lambda ex: ex.name)
            if st.button("Swap"):
                try:
                    st.session_state["workout"] = generator.replace_exercise(
                        workout, position, choice, history=_history()
                    )
                    st.rerun()
                except ReplacementError as e:
                    st.error(f"{e.reason.name}: {e}")

# ===== Timer =====
with tab_timer:
    workout = st.session_state.get("workout", [])
    if config_errors:
        st.warning("Fix the timer settings in the sidebar first.")
    else:
        per_exercise = exercise_duration(timer_config)
        c1, c2, c3 = st.columns(3)
        c1.metric("Per exercise", format_duration(per_exercise))
        c2.metric("Work cycles", timer_config.total_cycles)
        c3.metric("Whole workout", format_duration(workout_duration(timer_config, len(workout))))

        with st.expander("Phase plan"):
            st.dataframe(schedule_to_frame(timer_config), hide_index=True, use_container_width=True)

        time_scale = st.slider("Speed-up (for demo)", 1, 20, 1)
        if st.button("Run Timer", type="primary", disabled=not workout):
            started = time.monotonic()
            engine = TimerEngine(
                timer_config,
                clock=lambda: started + (time.monotonic() - started) * time_scale,
            )
            sequencer = WorkoutSequencer(engine)
            sequencer.set_workout(workout)
            done: list[int] = []
            engine.subscribe(
                TimerEvent.WORKOUT_COMPLETED,
                lambda n: done.append(n.data["total_exercises"]),
            )
            placeholder = st.empty()
            progress = st.progress(0.0)
            sequencer.start()
            while engine.is_running():
                remaining = engine.tick()
                state = engine.get_timer_state()
                color = PHASE_COLORS.get(state.phase, "#CCCCCC")
                exercise_name = state.exercise.name if state.exercise else ""
                placeholder.markdown(
                    f'<div style="background:{color};padding:18px;border-radius:6px;">'
                    f"<h3>{exercise_name} ({state.exercise_index + 1}/{state.total_exercises})</h3>"
                    f"<h1>{format_time(remaining)}</h1>"
                    f"{state.phase.label.title()} | set {state.current_set} | "
                    f"cycle {state.current_cycle}</div>",
                    unsafe_allow_html=True,
                )
                progress.progress(min(engine.get_progress() / 100.0, 1.0))
                time.sleep(TICK_INTERVAL_S)
            sequencer.close()
            if done:
                st.success(f"Workout complete: {done[0]} exercises")

# ===== Catalog =====
with tab_catalog:
    health = catalog.health()
    st.metric("Exercises", health.total_exercises)
    st.bar_chart(health.muscle_group_counts)
    for warning in health.warnings:
        st.warning(warning)

    st.subheader("Generation capabilities")
    trials = st.slider("Trials per combination", 1, 10, 3)
    if st.button("Run probe"):
        frame = probe_generation_capabilities(get_generator(), trials=trials)
        st.dataframe(summarize_capabilities(frame), hide_index=True, use_container_width=True)
