"""
LogExerciseEntry Use Case.

The manual (non-materialized) diary write path: logging a new exercise
entry and editing an existing one.

Calorie rules:
- duration_minutes falls back to the sum of set durations
- calories_burned, when omitted and a duration is known, is the exercise's
  calories per hour (stored or estimated) prorated over the duration
"""

import logging
from datetime import date
from typing import Any, Dict, List, Optional

from application.context import RequestContext
from application.exceptions import ForbiddenError, NotFoundError, ValidationError
from application.ports import ExerciseEntryRepository, ExerciseRepository
from application.use_cases.estimate_calories import EstimateCaloriesUseCase
from domain.converters.db_converters import entry_sets_to_db_rows
from domain.models import Exercise, ExerciseEntry, ExerciseEntrySet
from domain.services.calorie_estimation import calories_for_duration
from domain.services.set_list import renumber_sets

logger = logging.getLogger(__name__)

# Columns an update may change but never clear
REQUIRED_FIELDS = ("exercise_id", "entry_date", "duration_minutes", "calories_burned")


def get_entry_for_user(
    entry_repo: ExerciseEntryRepository,
    entry_id: str,
    user_id: str,
    *,
    mutating: bool = False,
) -> ExerciseEntry:
    """
    Load an entry the user owns.

    Raises:
        NotFoundError: Entry missing, or owned by someone else on a read
        ForbiddenError: Entry owned by someone else on a write
    """
    entry = entry_repo.get(entry_id)
    if entry is None:
        raise NotFoundError("Exercise entry", entry_id)
    if entry.user_id != user_id:
        if mutating:
            raise ForbiddenError("Exercise entry", entry_id)
        raise NotFoundError("Exercise entry", entry_id)
    return entry


def get_visible_exercise(
    exercise_repo: ExerciseRepository, exercise_id: str, user_id: str
) -> Exercise:
    exercise = exercise_repo.get(exercise_id)
    if exercise is None or not exercise.is_visible_to(user_id):
        raise NotFoundError("Exercise", exercise_id)
    return exercise


class LogExerciseEntryUseCase:
    """
    Use case for manual exercise logging.

    Usage:
        >>> use_case = LogExerciseEntryUseCase(entry_repo, exercise_repo, estimator)
        >>> entry = use_case.create(ctx, exercise_id="e1",
        ...                         entry_date=date(2024, 1, 1), duration_minutes=45)
    """

    def __init__(
        self,
        entry_repo: ExerciseEntryRepository,
        exercise_repo: ExerciseRepository,
        calorie_estimator: EstimateCaloriesUseCase,
    ) -> None:
        self._entry_repo = entry_repo
        self._exercise_repo = exercise_repo
        self._calorie_estimator = calorie_estimator

    def _calories(
        self, exercise: Exercise, user_id: str, duration_minutes: float
    ) -> float:
        if not duration_minutes:
            return 0.0
        rate = self._calorie_estimator.calories_per_hour(exercise, user_id)
        return calories_for_duration(rate, duration_minutes)

    def create(
        self,
        ctx: RequestContext,
        *,
        exercise_id: str,
        entry_date: date,
        duration_minutes: Optional[float] = None,
        calories_burned: Optional[float] = None,
        sets: Optional[List[ExerciseEntrySet]] = None,
        notes: Optional[str] = None,
        image_url: Optional[str] = None,
    ) -> ExerciseEntry:
        """
        Log an exercise for a day.

        Raises:
            NotFoundError: Exercise missing or not visible to the user
        """
        exercise = get_visible_exercise(self._exercise_repo, exercise_id, ctx.user_id)
        numbered = renumber_sets(sets or [])

        if duration_minutes is None:
            duration_minutes = sum(s.duration or 0 for s in numbered)
        if calories_burned is None:
            calories_burned = self._calories(exercise, ctx.user_id, duration_minutes)

        entry = self._entry_repo.create(
            {
                "user_id": ctx.user_id,
                "exercise_id": exercise_id,
                "entry_date": entry_date.isoformat(),
                "duration_minutes": duration_minutes,
                "calories_burned": calories_burned,
                "notes": notes,
                "image_url": image_url,
                "workout_plan_assignment_id": None,
            },
            entry_sets_to_db_rows(numbered),
        )
        ctx.logger.info(f"Logged exercise {exercise_id} on {entry_date} ({entry.id})")
        return entry

    def update(
        self, entry_id: str, ctx: RequestContext, updates: Dict[str, Any]
    ) -> ExerciseEntry:
        """
        Apply a partial update.

        When duration_minutes or exercise_id changes and calories_burned is
        not given, calories are recomputed. A "sets" key replaces the set
        list (renumbered).

        Raises:
            ValidationError: A required field is explicitly null
            NotFoundError: Entry or new exercise missing
            ForbiddenError: Entry owned by another user
        """
        entry = get_entry_for_user(self._entry_repo, entry_id, ctx.user_id, mutating=True)
        updates = dict(updates)
        cleared = [f for f in REQUIRED_FIELDS if f in updates and updates[f] is None]
        if cleared:
            raise ValidationError(
                "Invalid exercise entry update",
                [f"{f}: may not be null" for f in cleared],
            )
        sets = updates.pop("sets", None)

        exercise_id = updates.get("exercise_id", entry.exercise_id)
        exercise = get_visible_exercise(self._exercise_repo, exercise_id, ctx.user_id)

        if "entry_date" in updates and isinstance(updates["entry_date"], date):
            updates["entry_date"] = updates["entry_date"].isoformat()

        if sets is not None:
            numbered = renumber_sets(sets)
            if "duration_minutes" not in updates:
                set_minutes = sum(s.duration or 0 for s in numbered)
                if set_minutes:
                    updates["duration_minutes"] = set_minutes
            entry = self._entry_repo.replace_sets(entry_id, entry_sets_to_db_rows(numbered))

        recompute = "duration_minutes" in updates or "exercise_id" in updates
        if recompute and updates.get("calories_burned") is None:
            duration = updates.get("duration_minutes", entry.duration_minutes) or 0
            updates["calories_burned"] = self._calories(exercise, ctx.user_id, duration)

        if updates:
            entry = self._entry_repo.update(entry_id, updates)
        return entry

    def delete(self, entry_id: str, ctx: RequestContext) -> None:
        get_entry_for_user(self._entry_repo, entry_id, ctx.user_id, mutating=True)
        self._entry_repo.delete(entry_id)
        ctx.logger.info(f"Deleted exercise entry {entry_id}")
