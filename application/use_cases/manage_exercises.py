"""
ManageExercises Use Case.

Catalog operations: search, custom exercise CRUD, suggestions, deletion
impact and calorie estimates. Global exercises (no owner) are read-only.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from application.context import RequestContext
from application.exceptions import ForbiddenError, NotFoundError, ValidationError
from application.ports import ExerciseEntryRepository, ExerciseRepository
from application.use_cases.estimate_calories import EstimateCaloriesUseCase
from domain.models import Exercise
from domain.services.calorie_estimation import estimate_calories_per_hour

logger = logging.getLogger(__name__)

OWNERSHIP_FILTERS = ("all", "own", "public")


@dataclass
class ExercisePage:
    items: List[Exercise]
    total: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        if self.page_size <= 0:
            return 0
        return (self.total + self.page_size - 1) // self.page_size


@dataclass
class SuggestedExercises:
    recent: List[Exercise] = field(default_factory=list)
    top: List[Exercise] = field(default_factory=list)


class ManageExercisesUseCase:
    def __init__(
        self,
        exercise_repo: ExerciseRepository,
        entry_repo: ExerciseEntryRepository,
        calorie_estimator: EstimateCaloriesUseCase,
    ) -> None:
        self._exercise_repo = exercise_repo
        self._entry_repo = entry_repo
        self._calorie_estimator = calorie_estimator

    def search(
        self,
        ctx: RequestContext,
        *,
        query: Optional[str] = None,
        category: Optional[str] = None,
        ownership: str = "all",
        page: int = 1,
        page_size: int = 20,
    ) -> ExercisePage:
        if ownership not in OWNERSHIP_FILTERS:
            raise ValidationError(f"ownership must be one of {', '.join(OWNERSHIP_FILTERS)}")
        items, total = self._exercise_repo.search(
            ctx.user_id,
            query=query,
            category=category,
            ownership=ownership,
            limit=page_size,
            offset=(page - 1) * page_size,
        )
        return ExercisePage(items=items, total=total, page=page, page_size=page_size)

    def get(self, exercise_id: str, ctx: RequestContext) -> Exercise:
        exercise = self._exercise_repo.get(exercise_id)
        if exercise is None or not exercise.is_visible_to(ctx.user_id):
            raise NotFoundError("Exercise", exercise_id)
        return exercise

    def _get_owned(self, exercise_id: str, ctx: RequestContext) -> Exercise:
        exercise = self.get(exercise_id, ctx)
        if not exercise.is_owned_by(ctx.user_id):
            raise ForbiddenError("Exercise", exercise_id)
        return exercise

    def create(self, ctx: RequestContext, data: Dict[str, Any]) -> Exercise:
        """
        Create a custom exercise owned by the caller.

        calories_per_hour is estimated from category, level and the
        caller's weight when not given.
        """
        payload = {**data, "user_id": ctx.user_id, "is_custom": True}
        if not payload.get("calories_per_hour"):
            payload["calories_per_hour"] = estimate_calories_per_hour(
                payload.get("category"),
                payload.get("level"),
                self._calorie_estimator.body_weight(ctx.user_id),
            )

        exercise = self._exercise_repo.create(payload)
        ctx.logger.info(f"Created custom exercise {exercise.id} ({exercise.name})")
        return exercise

    def update(
        self, exercise_id: str, ctx: RequestContext, updates: Dict[str, Any]
    ) -> Exercise:
        self._get_owned(exercise_id, ctx)
        updates = {k: v for k, v in updates.items() if k not in ("id", "user_id")}
        if not updates:
            return self.get(exercise_id, ctx)
        return self._exercise_repo.update(exercise_id, updates)

    def delete(self, exercise_id: str, ctx: RequestContext) -> None:
        self._get_owned(exercise_id, ctx)
        self._exercise_repo.delete(exercise_id)
        ctx.logger.info(f"Deleted exercise {exercise_id}")

    def deletion_impact(self, exercise_id: str, ctx: RequestContext) -> int:
        """Number of diary entries that reference the exercise."""
        self.get(exercise_id, ctx)
        return self._entry_repo.count_for_exercise(exercise_id)

    def suggested(self, ctx: RequestContext, limit: int = 5) -> SuggestedExercises:
        """The user's most recently logged and most often logged exercises."""
        recent_ids = self._entry_repo.recent_exercise_ids(ctx.user_id, limit)
        top_ids = self._entry_repo.top_exercise_ids(ctx.user_id, limit)
        found = self._exercise_repo.get_many(set(recent_ids) | set(top_ids))
        return SuggestedExercises(
            recent=[found[i] for i in recent_ids if i in found],
            top=[found[i] for i in top_ids if i in found],
        )

    def estimate_calories(self, exercise_id: str, ctx: RequestContext) -> Dict[str, Any]:
        exercise = self.get(exercise_id, ctx)
        weight = self._calorie_estimator.body_weight(ctx.user_id)
        return {
            "exercise_id": exercise.id,
            "weight_kg": weight,
            "estimated_calories_per_hour": self._calorie_estimator.estimate(
                exercise, ctx.user_id, weight_kg=weight
            ),
            "stored_calories_per_hour": exercise.calories_per_hour,
        }
