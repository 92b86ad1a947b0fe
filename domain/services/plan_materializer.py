"""
Plan materialization: expanding a weekly template into dated diary entries.

This module only plans. It turns a WorkoutPlanTemplate plus its resolved
exercises and presets into an ordered list of PlannedEntry values; the
use case in application.use_cases.materialize_workout_plan persists them
in one transaction.

Rules:
- The window runs from start to end inclusive, one calendar day at a time.
- An assignment fires on a day when weekday_index(day) == day_of_week.
- A direct exercise assignment yields one entry per firing day.
- A preset assignment yields one entry per preset exercise, in preset order.
- Entries are ordered by day, then assignment order, then preset order.
"""
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Dict, Iterator, List, Mapping, Optional

from domain.models.exercise import Exercise
from domain.models.exercise_entry import ExerciseEntrySet
from domain.models.workout_plan import Assignment, WorkoutPlanTemplate
from domain.models.workout_preset import WorkoutPreset
from domain.services.calendar import add_one_year, iter_days, weekday_index
from domain.services.calorie_estimation import calories_for_duration
from domain.services.set_list import expand_target_sets

DEFAULT_SESSION_MINUTES = 30


@dataclass(frozen=True)
class MaterializationWindow:
    """Inclusive range of calendar days to materialize."""

    start: date
    end: date

    @property
    def is_empty(self) -> bool:
        return self.start > self.end

    def days(self) -> Iterator[date]:
        return iter_days(self.start, self.end)


@dataclass
class EntryTarget:
    """What one assignment logs each time it fires."""

    assignment_id: str
    exercise: Exercise
    sets: List[ExerciseEntrySet] = field(default_factory=list)
    notes: Optional[str] = None


@dataclass
class PlannedEntry:
    """A diary entry the materializer will create."""

    entry_date: date
    exercise_id: str
    workout_plan_assignment_id: str
    duration_minutes: float
    calories_burned: float
    notes: Optional[str] = None
    sets: List[ExerciseEntrySet] = field(default_factory=list)

    def to_row(self, user_id: str) -> Dict:
        """Row payload for the entry-creation RPCs."""
        return {
            "user_id": user_id,
            "exercise_id": self.exercise_id,
            "entry_date": self.entry_date.isoformat(),
            "duration_minutes": self.duration_minutes,
            "calories_burned": self.calories_burned,
            "notes": self.notes,
            "workout_plan_assignment_id": self.workout_plan_assignment_id,
            "sets": [s.model_dump(mode="json") for s in self.sets],
        }


def resolve_window(
    template: WorkoutPlanTemplate,
    client_today: Optional[date] = None,
    rematerialize: bool = False,
) -> MaterializationWindow:
    """
    Work out which days to materialize.

    The end is the template's end_date, or one calendar year after
    start_date for open-ended templates. On a re-save the start moves up to
    client_today so days whose entries were kept are not duplicated.
    """
    end = template.end_date or add_one_year(template.start_date)
    start = template.start_date
    if rematerialize and client_today is not None and client_today > start:
        start = client_today
    return MaterializationWindow(start=start, end=end)


def session_minutes(
    sets: List[ExerciseEntrySet], default_minutes: float = DEFAULT_SESSION_MINUTES
) -> float:
    """Sum of set durations, or the default when that sum is zero."""
    total = sum(s.duration or 0 for s in sets)
    return total if total > 0 else default_minutes


def resolve_targets(
    assignment: Assignment,
    exercises: Mapping[str, Exercise],
    presets: Mapping[str, WorkoutPreset],
) -> List[EntryTarget]:
    """
    Expand one assignment into its entry targets.

    Raises:
        KeyError: If a referenced exercise or preset is missing from the maps
    """
    if assignment.targets_preset:
        preset = presets[assignment.workout_preset_id]
        return [
            EntryTarget(
                assignment_id=assignment.id,
                exercise=exercises[pe.exercise_id],
                sets=expand_target_sets(pe.sets, pe.reps, pe.weight, pe.duration),
                notes=pe.notes,
            )
            for pe in preset.exercises
        ]

    return [
        EntryTarget(
            assignment_id=assignment.id,
            exercise=exercises[assignment.exercise_id],
            sets=expand_target_sets(
                assignment.sets, assignment.reps, assignment.weight, assignment.duration
            ),
            notes=assignment.notes,
        )
    ]


def plan_entries(
    template: WorkoutPlanTemplate,
    window: MaterializationWindow,
    exercises: Mapping[str, Exercise],
    presets: Mapping[str, WorkoutPreset],
    calories_per_hour: Callable[[Exercise], float],
    default_minutes: float = DEFAULT_SESSION_MINUTES,
) -> List[PlannedEntry]:
    """
    Plan every entry for a template over a window.

    Args:
        template: Template with assignments that already carry IDs
        window: Days to cover
        exercises: Every exercise referenced directly or through a preset
        presets: Every preset referenced by an assignment
        calories_per_hour: Burn rate for an exercise; called once per exercise
        default_minutes: Duration used when targets carry no set durations

    Returns:
        Entries ordered by day, assignment, then preset position
    """
    if not template.assignments or window.is_empty:
        return []

    by_weekday: Dict[int, List[EntryTarget]] = {}
    for assignment in template.assignments:
        by_weekday.setdefault(assignment.day_of_week, []).extend(
            resolve_targets(assignment, exercises, presets)
        )

    rates: Dict[str, float] = {}
    planned: List[PlannedEntry] = []
    for day in window.days():
        for target in by_weekday.get(weekday_index(day), []):
            exercise = target.exercise
            if exercise.id not in rates:
                rates[exercise.id] = calories_per_hour(exercise)
            minutes = session_minutes(target.sets, default_minutes)
            planned.append(
                PlannedEntry(
                    entry_date=day,
                    exercise_id=exercise.id,
                    workout_plan_assignment_id=target.assignment_id,
                    duration_minutes=minutes,
                    calories_burned=calories_for_duration(rates[exercise.id], minutes),
                    notes=target.notes,
                    sets=[s.model_copy() for s in target.sets],
                )
            )
    return planned
