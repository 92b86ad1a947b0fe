"""
SaveWorkoutPlan Use Case.

Creates or updates a workout plan template. Every save replaces the full
assignment list and, in the same transaction:
- on update, reverses entries the old assignments produced from the
  client's today onward
- when the template is active, materializes the new assignments

Either the plan is saved and its entries regenerated, or nothing changes.
"""

import logging
import uuid
from dataclasses import dataclass
from typing import Any, Dict

import pydantic

from application.context import RequestContext
from application.exceptions import (
    ForbiddenError,
    NotFoundError,
    TransientInfrastructureError,
    ValidationError,
)
from application.ports import WorkoutPlanRepository
from application.use_cases.materialize_workout_plan import MaterializeWorkoutPlanUseCase
from domain.models import WorkoutPlanTemplate

logger = logging.getLogger(__name__)


@dataclass
class SaveWorkoutPlanResult:
    """Result of the SaveWorkoutPlan use case execution."""

    template: WorkoutPlanTemplate
    is_update: bool = False
    entries_created: int = 0
    entries_removed: int = 0


def _validation_messages(error: pydantic.ValidationError) -> list:
    messages = []
    for err in error.errors():
        location = ".".join(str(part) for part in err.get("loc", ()))
        messages.append(f"{location}: {err['msg']}" if location else err["msg"])
    return messages


class SaveWorkoutPlanUseCase:
    """
    Use case for saving workout plan templates.

    Orchestrates the following workflow:
    1. Validate the template and its assignments (before any write)
    2. Generate assignment IDs so planned entries can reference them
    3. Plan entries when the template is active (targets must exist)
    4. Persist template, reversal and entries in one atomic repository call

    Usage:
        >>> use_case = SaveWorkoutPlanUseCase(plan_repo, materializer)
        >>> result = use_case.create(ctx, {"plan_name": "PPL", ...})
        >>> result.entries_created
        104
    """

    def __init__(
        self,
        plan_repo: WorkoutPlanRepository,
        materializer: MaterializeWorkoutPlanUseCase,
    ) -> None:
        self._plan_repo = plan_repo
        self._materializer = materializer

    def create(self, ctx: RequestContext, data: Dict[str, Any]) -> SaveWorkoutPlanResult:
        """
        Create a template and materialize it from its start_date.

        Args:
            ctx: Acting user and client date
            data: plan_name, description, start_date, end_date, is_active, assignments

        Raises:
            ValidationError: Malformed template or assignments
            NotFoundError: An assignment references a missing exercise or preset
            TransientInfrastructureError: Database failure; nothing was written
        """
        template = self._build_template(str(uuid.uuid4()), ctx.user_id, data)
        return self._save(template, ctx, is_update=False)

    def update(
        self, template_id: str, ctx: RequestContext, data: Dict[str, Any]
    ) -> SaveWorkoutPlanResult:
        """
        Replace a template, reversing its future entries and rematerializing.

        Raises:
            NotFoundError: Template does not exist
            ForbiddenError: Template belongs to another user
        """
        existing = self._plan_repo.get(template_id)
        if existing is None:
            raise NotFoundError("Workout plan template", template_id)
        if existing.user_id != ctx.user_id:
            raise ForbiddenError("Workout plan template", template_id)

        template = self._build_template(template_id, ctx.user_id, data)
        return self._save(template, ctx, is_update=True)

    def _build_template(
        self, template_id: str, user_id: str, data: Dict[str, Any]
    ) -> WorkoutPlanTemplate:
        payload = dict(data)
        payload["assignments"] = [
            {**dict(a), "id": str(uuid.uuid4()), "template_id": template_id}
            for a in (data.get("assignments") or [])
        ]
        try:
            return WorkoutPlanTemplate.model_validate(
                {**payload, "id": template_id, "user_id": user_id}
            )
        except pydantic.ValidationError as e:
            messages = _validation_messages(e)
            logger.warning(f"Workout plan validation failed: {messages}")
            raise ValidationError("Invalid workout plan", messages) from e

    def _save(
        self, template: WorkoutPlanTemplate, ctx: RequestContext, *, is_update: bool
    ) -> SaveWorkoutPlanResult:
        planned = self._materializer.plan(template, ctx, rematerialize=is_update)
        reverse_from = ctx.client_today if is_update else None

        try:
            saved = self._plan_repo.save_atomic(
                template,
                [p.to_row(ctx.user_id) for p in planned],
                reverse_from=reverse_from,
            )
        except TransientInfrastructureError as e:
            logger.error(
                f"Saving workout plan failed for template {template.id} "
                f"user {ctx.user_id}: {e}"
            )
            raise

        ctx.logger.info(
            f"{'Updated' if is_update else 'Created'} workout plan {template.id}: "
            f"{saved.entries_created} entries created, "
            f"{saved.entries_removed} removed"
        )
        return SaveWorkoutPlanResult(
            template=saved.template,
            is_update=is_update,
            entries_created=saved.entries_created,
            entries_removed=saved.entries_removed,
        )