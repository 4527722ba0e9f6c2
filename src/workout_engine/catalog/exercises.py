"""Built-in exercise library, bucketed by muscle group.

Ids follow ``<group>_<3 digits>``; the catalog rejects entries that do not.
"""

from __future__ import annotations

from workout_engine.models.exercise import Exercise

MUSCLE_GROUP_LABELS: dict[str, str] = {
    "chest": "Chest",
    "back": "Back",
    "legs": "Legs",
    "shoulders": "Shoulders",
    "arms": "Arms",
    "core": "Core",
}


def _bucket(group: str, *names: str) -> tuple[Exercise, ...]:
    return tuple(
        Exercise(id=f"{group}_{i:03d}", name=name, muscle_group=group)
        for i, name in enumerate(names, start=1)
    )


DEFAULT_EXERCISES: dict[str, tuple[Exercise, ...]] = {
    "chest": _bucket(
        "chest",
        "Push-ups",
        "Bench Press",
        "Incline Push-ups",
        "Dips",
        "Incline Bench Press",
        "Decline Push-ups",
        "Chest Flyes",
        "Diamond Push-ups",
        "Wide-Grip Push-ups",
        "Chest Press Machine",
    ),
    "back": _bucket(
        "back",
        "Pull-ups",
        "Bent-over Rows",
        "Lat Pulldowns",
        "Deadlifts",
        "T-Bar Rows",
        "Seated Cable Rows",
        "Chin-ups",
        "One-Arm Dumbbell Rows",
        "Inverted Rows",
        "Romanian Deadlifts",
        "Reverse Flyes",
    ),
    "legs": _bucket(
        "legs",
        "Squats",
        "Lunges",
        "Leg Press",
        "Calf Raises",
        "Bulgarian Split Squats",
        "Leg Curls",
        "Leg Extensions",
        "Step-ups",
        "Wall Sits",
        "Jump Squats",
        "Single-Leg Glute Bridges",
        "Walking Lunges",
    ),
    "shoulders": _bucket(
        "shoulders",
        "Overhead Press",
        "Lateral Raises",
        "Front Raises",
        "Rear Delt Flyes",
        "Arnold Press",
        "Pike Push-ups",
        "Upright Rows",
        "Handstand Push-ups",
        "Shoulder Shrugs",
        "Face Pulls",
    ),
    "arms": _bucket(
        "arms",
        "Bicep Curls",
        "Tricep Dips",
        "Hammer Curls",
        "Tricep Extensions",
        "Close-Grip Push-ups",
        "Concentration Curls",
        "Tricep Kickbacks",
        "Preacher Curls",
        "Overhead Tricep Extension",
        "Cable Curls",
        "Tricep Pushdowns",
    ),
    "core": _bucket(
        "core",
        "Planks",
        "Crunches",
        "Mountain Climbers",
        "Russian Twists",
        "Bicycle Crunches",
        "Dead Bug",
        "Leg Raises",
        "Side Planks",
        "Flutter Kicks",
        "Hollow Body Hold",
        "V-ups",
        "Bear Crawl",
    ),
}
