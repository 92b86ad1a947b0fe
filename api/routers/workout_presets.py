"""
Workout presets router.

Presets are reusable exercise bundles. Anyone can read public presets;
only owners can change them.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from api.deps import get_manage_presets_use_case, get_request_context
from api.schemas.catalog import (
    WorkoutPresetCreate,
    WorkoutPresetResponse,
    WorkoutPresetUpdate,
)
from application.context import RequestContext
from application.use_cases import ManageWorkoutPresetsUseCase

router = APIRouter(
    prefix="/workout-presets",
    tags=["Workout Presets"],
)


@router.get("", response_model=List[WorkoutPresetResponse])
def list_workout_presets(
    q: Optional[str] = Query(None, description="Case-insensitive name search"),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    ctx: RequestContext = Depends(get_request_context),
    use_case: ManageWorkoutPresetsUseCase = Depends(get_manage_presets_use_case),
):
    """List the user's own and public presets."""
    presets = use_case.list_visible(ctx, query=q, limit=limit, offset=offset)
    return [WorkoutPresetResponse.from_domain(p) for p in presets]


@router.get("/{preset_id}", response_model=WorkoutPresetResponse)
def get_workout_preset(
    preset_id: str,
    ctx: RequestContext = Depends(get_request_context),
    use_case: ManageWorkoutPresetsUseCase = Depends(get_manage_presets_use_case),
):
    return WorkoutPresetResponse.from_domain(use_case.get(preset_id, ctx))


@router.post("", response_model=WorkoutPresetResponse, status_code=status.HTTP_201_CREATED)
def create_workout_preset(
    body: WorkoutPresetCreate,
    ctx: RequestContext = Depends(get_request_context),
    use_case: ManageWorkoutPresetsUseCase = Depends(get_manage_presets_use_case),
):
    preset = use_case.create(
        ctx,
        body.model_dump(exclude={"exercises"}),
        [e.to_domain() for e in body.exercises],
    )
    return WorkoutPresetResponse.from_domain(preset)


@router.put("/{preset_id}", response_model=WorkoutPresetResponse)
def update_workout_preset(
    preset_id: str,
    body: WorkoutPresetUpdate,
    ctx: RequestContext = Depends(get_request_context),
    use_case: ManageWorkoutPresetsUseCase = Depends(get_manage_presets_use_case),
):
    exercises = None
    if body.exercises is not None:
        exercises = [e.to_domain() for e in body.exercises]
    preset = use_case.update(
        preset_id,
        ctx,
        body.model_dump(exclude={"exercises"}, exclude_unset=True),
        exercises,
    )
    return WorkoutPresetResponse.from_domain(preset)


@router.delete("/{preset_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_workout_preset(
    preset_id: str,
    ctx: RequestContext = Depends(get_request_context),
    use_case: ManageWorkoutPresetsUseCase = Depends(get_manage_presets_use_case),
):
    use_case.delete(preset_id, ctx)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
