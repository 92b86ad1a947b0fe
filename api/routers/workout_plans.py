"""
Workout plan templates router.

Saving a template replaces its assignments and regenerates its diary
entries in the same transaction:
- POST creates and materializes from start_date
- PUT reverses entries from the client's today, then rematerializes
- DELETE reverses entries from the client's today, then deletes

The client's "today" comes from current_client_date (query or body), else
the X-Client-Timezone / X-Client-UTC-Offset headers.
"""

import logging
from dataclasses import replace
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from api.deps import (
    get_delete_workout_plan_use_case,
    get_materialize_use_case,
    get_plan_repo,
    get_request_context,
    get_save_workout_plan_use_case,
)
from api.schemas.workout_plans import (
    MaterializationResponse,
    SaveWorkoutPlanResponse,
    WorkoutPlanTemplateInput,
    WorkoutPlanTemplateResponse,
)
from application.context import RequestContext
from application.exceptions import NotFoundError
from application.ports import WorkoutPlanRepository
from application.use_cases import (
    DeleteWorkoutPlanUseCase,
    MaterializeWorkoutPlanUseCase,
    SaveWorkoutPlanResult,
    SaveWorkoutPlanUseCase,
)
from application.use_cases.materialize_workout_plan import get_template_for_user

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/workout-plan-templates",
    tags=["Workout Plans"],
)


def _with_client_date(ctx: RequestContext, body: WorkoutPlanTemplateInput) -> RequestContext:
    if body.current_client_date:
        return replace(ctx, client_today=body.current_client_date)
    return ctx


def _save_response(result: SaveWorkoutPlanResult) -> SaveWorkoutPlanResponse:
    base = WorkoutPlanTemplateResponse.from_domain(result.template)
    return SaveWorkoutPlanResponse(
        **base.model_dump(),
        entries_created=result.entries_created,
        entries_removed=result.entries_removed,
    )


# =============================================================================
# Reads
# =============================================================================


@router.get("", response_model=List[WorkoutPlanTemplateResponse])
def list_workout_plans(
    ctx: RequestContext = Depends(get_request_context),
    plan_repo: WorkoutPlanRepository = Depends(get_plan_repo),
):
    """List the user's templates, newest start date first."""
    return [
        WorkoutPlanTemplateResponse.from_domain(t)
        for t in plan_repo.list_by_user(ctx.user_id)
    ]


@router.get("/active", response_model=WorkoutPlanTemplateResponse)
def get_active_workout_plan(
    day: Optional[date] = Query(None, alias="date"),
    ctx: RequestContext = Depends(get_request_context),
    plan_repo: WorkoutPlanRepository = Depends(get_plan_repo),
):
    """
    The active template covering a date (default: the client's today).

    When active templates overlap, the one that started last wins.
    """
    template = plan_repo.get_active_for_date(ctx.user_id, day or ctx.client_today)
    if template is None:
        raise NotFoundError("Active workout plan")
    return WorkoutPlanTemplateResponse.from_domain(template)


@router.get("/{template_id}", response_model=WorkoutPlanTemplateResponse)
def get_workout_plan(
    template_id: str,
    ctx: RequestContext = Depends(get_request_context),
    plan_repo: WorkoutPlanRepository = Depends(get_plan_repo),
):
    template = get_template_for_user(plan_repo, template_id, ctx.user_id)
    return WorkoutPlanTemplateResponse.from_domain(template)


# =============================================================================
# Writes
# =============================================================================


@router.post(
    "",
    response_model=SaveWorkoutPlanResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_workout_plan(
    body: WorkoutPlanTemplateInput,
    ctx: RequestContext = Depends(get_request_context),
    use_case: SaveWorkoutPlanUseCase = Depends(get_save_workout_plan_use_case),
):
    result = use_case.create(_with_client_date(ctx, body), body.to_template_data())
    return _save_response(result)


@router.put("/{template_id}", response_model=SaveWorkoutPlanResponse)
def update_workout_plan(
    template_id: str,
    body: WorkoutPlanTemplateInput,
    ctx: RequestContext = Depends(get_request_context),
    use_case: SaveWorkoutPlanUseCase = Depends(get_save_workout_plan_use_case),
):
    result = use_case.update(
        template_id, _with_client_date(ctx, body), body.to_template_data()
    )
    return _save_response(result)


@router.delete("/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_workout_plan(
    template_id: str,
    ctx: RequestContext = Depends(get_request_context),
    use_case: DeleteWorkoutPlanUseCase = Depends(get_delete_workout_plan_use_case),
):
    use_case.execute(template_id, ctx)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{template_id}/materialize", response_model=MaterializationResponse)
def materialize_workout_plan(
    template_id: str,
    ctx: RequestContext = Depends(get_request_context),
    use_case: MaterializeWorkoutPlanUseCase = Depends(get_materialize_use_case),
):
    """
    Run a forward pass from the client's today.

    Not idempotent: call /reverse first when entries may already exist.
    """
    result = use_case.execute(template_id, ctx)
    return MaterializationResponse(**vars(result))


@router.post("/{template_id}/reverse", response_model=MaterializationResponse)
def reverse_workout_plan(
    template_id: str,
    ctx: RequestContext = Depends(get_request_context),
    use_case: MaterializeWorkoutPlanUseCase = Depends(get_materialize_use_case),
):
    """Delete this template's entries dated the client's today or later."""
    result = use_case.reverse(template_id, ctx)
    return MaterializationResponse(**vars(result))
