"""
SyncActiveCalories Use Case.

Used by the companion mobile app to push a day's active calories from the
phone's health store. Each user gets one custom "Active Calories" exercise
(created on first use) and at most one entry for it per day, which is
updated in place on later syncs.
"""

import logging
from dataclasses import dataclass
from datetime import date

from application.context import RequestContext
from application.ports import ExerciseEntryRepository, ExerciseRepository
from domain.models import Exercise, ExerciseEntry

logger = logging.getLogger(__name__)

ACTIVE_CALORIES_EXERCISE_NAME = "Active Calories"
ACTIVE_CALORIES_CATEGORY = "Cardio"
ACTIVE_CALORIES_PER_HOUR = 600
ACTIVE_CALORIES_DESCRIPTION = (
    "Automatically logged active calories from a health tracking shortcut."
)
ACTIVE_CALORIES_NOTES = "Active calories logged from Apple Health."


@dataclass
class SyncActiveCaloriesResult:
    entry: ExerciseEntry
    created: bool


class SyncActiveCaloriesUseCase:
    """
    Upsert the "Active Calories" entry for a day.

    Usage:
        >>> use_case = SyncActiveCaloriesUseCase(exercise_repo, entry_repo)
        >>> use_case.execute(ctx, entry_date=date(2024, 1, 1), calories=412.5)
    """

    def __init__(
        self,
        exercise_repo: ExerciseRepository,
        entry_repo: ExerciseEntryRepository,
    ) -> None:
        self._exercise_repo = exercise_repo
        self._entry_repo = entry_repo

    def get_or_create_exercise(self, user_id: str) -> Exercise:
        exercise = self._exercise_repo.find_by_name(user_id, ACTIVE_CALORIES_EXERCISE_NAME)
        if exercise is not None:
            return exercise

        logger.info(f"Creating Active Calories exercise for user {user_id}")
        return self._exercise_repo.create(
            {
                "name": ACTIVE_CALORIES_EXERCISE_NAME,
                "category": ACTIVE_CALORIES_CATEGORY,
                "calories_per_hour": ACTIVE_CALORIES_PER_HOUR,
                "description": ACTIVE_CALORIES_DESCRIPTION,
                "user_id": user_id,
                "is_custom": True,
                "shared_with_public": False,
            }
        )

    def execute(
        self, ctx: RequestContext, *, entry_date: date, calories: float
    ) -> SyncActiveCaloriesResult:
        exercise = self.get_or_create_exercise(ctx.user_id)
        existing = self._entry_repo.find_for_exercise_on_date(
            ctx.user_id, exercise.id, entry_date
        )

        if existing is not None:
            entry = self._entry_repo.update(existing.id, {"calories_burned": calories})
            ctx.logger.info(f"Updated active calories for {entry_date}: {calories}")
            return SyncActiveCaloriesResult(entry=entry, created=False)

        entry = self._entry_repo.create(
            {
                "user_id": ctx.user_id,
                "exercise_id": exercise.id,
                "entry_date": entry_date.isoformat(),
                "duration_minutes": 0,
                "calories_burned": calories,
                "notes": ACTIVE_CALORIES_NOTES,
                "image_url": None,
                "workout_plan_assignment_id": None,
            },
            [],
        )
        ctx.logger.info(f"Logged active calories for {entry_date}: {calories}")
        return SyncActiveCaloriesResult(entry=entry, created=True)
