"""
Converters: Supabase rows <-> domain models.

Reads come either from PostgREST selects with embedded relations, e.g.

    exercise_entries:  *, exercise_entry_sets(*), exercises(name)
    workout_presets:   *, workout_preset_exercises(*, exercises(name))
    workout_plan_templates:
        *, workout_plan_template_assignments(*, exercises(name), workout_presets(name))

or from the plpgsql RPCs, which return the same shapes with children under
plain keys ("sets", "exercises", "assignments") and joined names flattened
(exercise_name, workout_preset_name). Both shapes are accepted.
"""

from typing import Any, Dict, List, Optional

from domain.converters.json_arrays import normalize_json_arrays
from domain.models import (
    Assignment,
    Exercise,
    ExerciseEntry,
    ExerciseEntrySet,
    PresetExercise,
    WorkoutPlanTemplate,
    WorkoutPreset,
)


def _children(row: Dict[str, Any], *keys: str) -> List[Dict[str, Any]]:
    """First non-empty child list under any of the given keys."""
    for key in keys:
        value = row.get(key)
        if value:
            return list(value)
    return []


def _joined_name(row: Dict[str, Any], relation: str, flat_key: str) -> Optional[str]:
    """Name from an embedded relation ({"exercises": {"name": ...}}) or a flat column."""
    embedded = row.get(relation)
    if isinstance(embedded, dict) and embedded.get("name"):
        return embedded["name"]
    return row.get(flat_key)


def _sorted(rows: List[Dict[str, Any]], key: str) -> List[Dict[str, Any]]:
    return sorted(rows, key=lambda r: (r.get(key) is None, r.get(key) or 0))


# =============================================================================
# Exercises
# =============================================================================


def db_row_to_exercise(row: Dict[str, Any]) -> Exercise:
    """Convert an exercises row, parsing JSON-array columns."""
    data = normalize_json_arrays(row)
    return Exercise(
        id=str(data["id"]),
        name=data["name"],
        source=data.get("source"),
        source_id=data.get("source_id"),
        force=data.get("force"),
        level=data.get("level"),
        mechanic=data.get("mechanic"),
        category=data.get("category"),
        equipment=data["equipment"],
        primary_muscles=data["primary_muscles"],
        secondary_muscles=data["secondary_muscles"],
        instructions=data["instructions"],
        images=data["images"],
        calories_per_hour=data.get("calories_per_hour"),
        description=data.get("description"),
        user_id=data.get("user_id"),
        is_custom=bool(data.get("is_custom", False)),
        shared_with_public=bool(data.get("shared_with_public", False)),
    )


def exercise_to_db_row(exercise: Exercise) -> Dict[str, Any]:
    """Exercise as an insert/update payload. JSON-array columns stay lists (jsonb)."""
    return exercise.model_dump(mode="json")


# =============================================================================
# Exercise entries
# =============================================================================


def db_row_to_entry_set(row: Dict[str, Any]) -> ExerciseEntrySet:
    return ExerciseEntrySet(
        set_number=row.get("set_number") or 1,
        set_type=row.get("set_type") or "Working Set",
        reps=row.get("reps"),
        weight=row.get("weight"),
        duration=row.get("duration"),
        rest_time=row.get("rest_time"),
        notes=row.get("notes"),
    )


def db_row_to_exercise_entry(row: Dict[str, Any]) -> ExerciseEntry:
    """
    Convert an exercise_entries row with its sets.

    Sets are ordered by set_number regardless of how they came back.
    """
    set_rows = _sorted(_children(row, "exercise_entry_sets", "sets"), "set_number")
    return ExerciseEntry(
        id=str(row["id"]),
        user_id=str(row["user_id"]),
        exercise_id=str(row["exercise_id"]),
        entry_date=row["entry_date"],
        duration_minutes=row.get("duration_minutes") or 0,
        calories_burned=row.get("calories_burned") or 0,
        notes=row.get("notes"),
        image_url=row.get("image_url"),
        workout_plan_assignment_id=row.get("workout_plan_assignment_id"),
        sets=[db_row_to_entry_set(s) for s in set_rows],
        exercise_name=_joined_name(row, "exercises", "exercise_name"),
    )


def entry_sets_to_db_rows(sets: List[ExerciseEntrySet]) -> List[Dict[str, Any]]:
    return [s.model_dump(mode="json") for s in sets]


# =============================================================================
# Workout presets
# =============================================================================


def db_row_to_preset_exercise(row: Dict[str, Any]) -> PresetExercise:
    return PresetExercise(
        id=str(row["id"]) if row.get("id") else None,
        exercise_id=str(row["exercise_id"]),
        sets=row.get("sets"),
        reps=row.get("reps"),
        weight=row.get("weight"),
        duration=row.get("duration"),
        notes=row.get("notes"),
        image_url=row.get("image_url"),
        exercise_name=_joined_name(row, "exercises", "exercise_name"),
    )


def db_row_to_workout_preset(row: Dict[str, Any]) -> WorkoutPreset:
    exercise_rows = _sorted(
        _children(row, "workout_preset_exercises", "exercises"), "sort_order"
    )
    return WorkoutPreset(
        id=str(row["id"]),
        user_id=str(row["user_id"]),
        name=row["name"],
        description=row.get("description"),
        is_public=bool(row.get("is_public", False)),
        exercises=[db_row_to_preset_exercise(r) for r in exercise_rows],
    )


def preset_exercises_to_db_rows(exercises: List[PresetExercise]) -> List[Dict[str, Any]]:
    """Ordered payload for the preset RPCs; display names are never stored."""
    return [
        {
            **pe.model_dump(mode="json", exclude={"id", "exercise_name"}),
            "sort_order": position,
        }
        for position, pe in enumerate(exercises)
    ]


# =============================================================================
# Workout plan templates
# =============================================================================


def db_row_to_assignment(row: Dict[str, Any]) -> Assignment:
    return Assignment(
        id=str(row["id"]) if row.get("id") else None,
        template_id=str(row["template_id"]) if row.get("template_id") else None,
        day_of_week=row["day_of_week"],
        workout_preset_id=row.get("workout_preset_id"),
        exercise_id=row.get("exercise_id"),
        sets=row.get("sets"),
        reps=row.get("reps"),
        weight=row.get("weight"),
        duration=row.get("duration"),
        notes=row.get("notes"),
        workout_preset_name=_joined_name(row, "workout_presets", "workout_preset_name"),
        exercise_name=_joined_name(row, "exercises", "exercise_name"),
    )


def db_row_to_workout_plan(row: Dict[str, Any]) -> WorkoutPlanTemplate:
    """Convert a workout_plan_templates row with its assignments."""
    assignment_rows = _sorted(
        _children(row, "workout_plan_template_assignments", "assignments"),
        "sort_order",
    )
    return WorkoutPlanTemplate(
        id=str(row["id"]),
        user_id=str(row["user_id"]),
        plan_name=row["plan_name"],
        description=row.get("description"),
        start_date=row["start_date"],
        end_date=row.get("end_date"),
        is_active=bool(row.get("is_active", True)),
        assignments=[db_row_to_assignment(r) for r in assignment_rows],
    )


def workout_plan_to_db_row(template: WorkoutPlanTemplate) -> Dict[str, Any]:
    return template.model_dump(mode="json", exclude={"assignments"})


def assignments_to_db_rows(template: WorkoutPlanTemplate) -> List[Dict[str, Any]]:
    """Assignment payloads in template order; joined names are dropped."""
    return [
        {
            **a.model_dump(
                mode="json", exclude={"workout_preset_name", "exercise_name"}
            ),
            "template_id": template.id,
            "sort_order": position,
        }
        for position, a in enumerate(template.assignments)
    ]
