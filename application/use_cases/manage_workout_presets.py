"""
ManageWorkoutPresets Use Case.

Preset CRUD with visibility rules:
- owners see their presets; everyone sees public ones
- a private preset of another user reads as not found
- only the owner can change or delete a preset
"""

import logging
from typing import Any, Dict, List, Optional

from application.context import RequestContext
from application.exceptions import ForbiddenError, NotFoundError
from application.ports import ExerciseRepository, WorkoutPresetRepository
from domain.converters.db_converters import preset_exercises_to_db_rows
from domain.models import PresetExercise, WorkoutPreset

logger = logging.getLogger(__name__)


class ManageWorkoutPresetsUseCase:
    def __init__(
        self,
        preset_repo: WorkoutPresetRepository,
        exercise_repo: ExerciseRepository,
    ) -> None:
        self._preset_repo = preset_repo
        self._exercise_repo = exercise_repo

    def list_visible(
        self,
        ctx: RequestContext,
        *,
        query: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[WorkoutPreset]:
        return self._preset_repo.list_visible(
            ctx.user_id, query=query, limit=limit, offset=offset
        )

    def get(self, preset_id: str, ctx: RequestContext) -> WorkoutPreset:
        preset = self._preset_repo.get(preset_id)
        if preset is None or not preset.is_visible_to(ctx.user_id):
            raise NotFoundError("Workout preset", preset_id)
        return preset

    def _get_owned(self, preset_id: str, ctx: RequestContext) -> WorkoutPreset:
        preset = self._preset_repo.get(preset_id)
        if preset is None:
            raise NotFoundError("Workout preset", preset_id)
        if preset.user_id != ctx.user_id:
            raise ForbiddenError("Workout preset", preset_id)
        return preset

    def _check_exercises(self, exercises: List[PresetExercise], ctx: RequestContext) -> None:
        ids = {pe.exercise_id for pe in exercises}
        found = self._exercise_repo.get_many(ids) if ids else {}
        for exercise_id in ids:
            exercise = found.get(exercise_id)
            if exercise is None or not exercise.is_visible_to(ctx.user_id):
                raise NotFoundError("Exercise", exercise_id)

    def create(
        self,
        ctx: RequestContext,
        preset: Dict[str, Any],
        exercises: List[PresetExercise],
    ) -> WorkoutPreset:
        """
        Create a preset with its ordered exercises.

        Raises:
            NotFoundError: A listed exercise is missing or not visible
        """
        self._check_exercises(exercises, ctx)
        created = self._preset_repo.create(
            ctx.user_id, preset, preset_exercises_to_db_rows(exercises)
        )
        ctx.logger.info(f"Created workout preset {created.id} ({created.name})")
        return created

    def update(
        self,
        preset_id: str,
        ctx: RequestContext,
        preset: Dict[str, Any],
        exercises: Optional[List[PresetExercise]] = None,
    ) -> WorkoutPreset:
        self._get_owned(preset_id, ctx)
        rows = None
        if exercises is not None:
            self._check_exercises(exercises, ctx)
            rows = preset_exercises_to_db_rows(exercises)
        return self._preset_repo.update(preset_id, preset, rows)

    def delete(self, preset_id: str, ctx: RequestContext) -> None:
        self._get_owned(preset_id, ctx)
        self._preset_repo.delete(preset_id)
        ctx.logger.info(f"Deleted workout preset {preset_id}")
