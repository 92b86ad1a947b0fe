"""
DeleteWorkoutPlan Use Case.

Removes a template and its assignments after reversing the entries it
produced from the client's today onward. Past entries stay in the diary
with their back-reference cleared.
"""

import logging
from dataclasses import dataclass

from application.context import RequestContext
from application.exceptions import (
    ForbiddenError,
    NotFoundError,
    TransientInfrastructureError,
)
from application.ports import WorkoutPlanRepository

logger = logging.getLogger(__name__)


@dataclass
class DeleteWorkoutPlanResult:
    """Result of deleting a template: how many future entries went with it."""

    template_id: str
    entries_removed: int = 0


class DeleteWorkoutPlanUseCase:
    """
    Use case for deleting a workout plan template.

    Reversal and deletion run as one atomic repository call, so a failure
    leaves the template and its entries as they were.

    Usage:
        >>> use_case = DeleteWorkoutPlanUseCase(plan_repo)
        >>> result = use_case.execute("template-id", ctx)
        >>> result.entries_removed
        12
    """

    def __init__(self, plan_repo: WorkoutPlanRepository) -> None:
        self._plan_repo = plan_repo

    def execute(self, template_id: str, ctx: RequestContext) -> DeleteWorkoutPlanResult:
        """
        Delete a template the user owns.

        Raises:
            NotFoundError: Template does not exist
            ForbiddenError: Template belongs to another user
            TransientInfrastructureError: Database failure; nothing was deleted
        """
        template = self._plan_repo.get(template_id)
        if template is None:
            raise NotFoundError("Workout plan template", template_id)
        if template.user_id != ctx.user_id:
            raise ForbiddenError("Workout plan template", template_id)

        try:
            removed = self._plan_repo.delete_atomic(
                template_id, ctx.user_id, ctx.client_today
            )
        except TransientInfrastructureError:
            logger.error(
                f"Deleting workout plan failed for template {template_id} user {ctx.user_id}"
            )
            raise

        ctx.logger.info(f"Deleted workout plan {template_id}, reversed {removed} entries")
        return DeleteWorkoutPlanResult(template_id=template_id, entries_removed=removed)
