"""
Exercises router.

Catalog search and custom exercise management:
- search/list with category and ownership filters (paginated)
- custom exercise CRUD (owner only; global exercises are read-only)
- suggestions, deletion impact and calorie estimates
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from api.deps import get_manage_exercises_use_case, get_request_context
from api.schemas.catalog import (
    CalorieEstimateResponse,
    DeletionImpactResponse,
    ExerciseCreate,
    ExerciseListResponse,
    ExerciseUpdate,
    SuggestedExercisesResponse,
)
from application.context import RequestContext
from application.use_cases import ManageExercisesUseCase
from domain.models import Exercise

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/exercises",
    tags=["Exercises"],
)


@router.get("", response_model=ExerciseListResponse)
def list_exercises(
    q: Optional[str] = Query(None, description="Case-insensitive name search"),
    category: Optional[str] = Query(None),
    ownership: str = Query("all", description="all, own or public"),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    ctx: RequestContext = Depends(get_request_context),
    use_case: ManageExercisesUseCase = Depends(get_manage_exercises_use_case),
):
    result = use_case.search(
        ctx,
        query=q,
        category=category,
        ownership=ownership,
        page=page,
        page_size=page_size,
    )
    return ExerciseListResponse(
        exercises=result.items,
        total=result.total,
        page=result.page,
        page_size=result.page_size,
        total_pages=result.total_pages,
    )


@router.get("/suggested", response_model=SuggestedExercisesResponse)
def get_suggested_exercises(
    limit: int = Query(5, ge=1, le=50),
    ctx: RequestContext = Depends(get_request_context),
    use_case: ManageExercisesUseCase = Depends(get_manage_exercises_use_case),
):
    """Recently and frequently logged exercises."""
    suggested = use_case.suggested(ctx, limit=limit)
    return SuggestedExercisesResponse(
        recent_exercises=suggested.recent, top_exercises=suggested.top
    )


@router.get("/{exercise_id}", response_model=Exercise)
def get_exercise(
    exercise_id: str,
    ctx: RequestContext = Depends(get_request_context),
    use_case: ManageExercisesUseCase = Depends(get_manage_exercises_use_case),
):
    return use_case.get(exercise_id, ctx)


@router.post("", response_model=Exercise, status_code=status.HTTP_201_CREATED)
def create_exercise(
    body: ExerciseCreate,
    ctx: RequestContext = Depends(get_request_context),
    use_case: ManageExercisesUseCase = Depends(get_manage_exercises_use_case),
):
    return use_case.create(ctx, body.model_dump())


@router.put("/{exercise_id}", response_model=Exercise)
def update_exercise(
    exercise_id: str,
    body: ExerciseUpdate,
    ctx: RequestContext = Depends(get_request_context),
    use_case: ManageExercisesUseCase = Depends(get_manage_exercises_use_case),
):
    return use_case.update(exercise_id, ctx, body.model_dump(exclude_unset=True))


@router.delete("/{exercise_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_exercise(
    exercise_id: str,
    ctx: RequestContext = Depends(get_request_context),
    use_case: ManageExercisesUseCase = Depends(get_manage_exercises_use_case),
):
    use_case.delete(exercise_id, ctx)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{exercise_id}/deletion-impact", response_model=DeletionImpactResponse)
def get_deletion_impact(
    exercise_id: str,
    ctx: RequestContext = Depends(get_request_context),
    use_case: ManageExercisesUseCase = Depends(get_manage_exercises_use_case),
):
    return DeletionImpactResponse(
        exercise_id=exercise_id,
        exercise_entries_count=use_case.deletion_impact(exercise_id, ctx),
    )


@router.post("/{exercise_id}/estimate-calories", response_model=CalorieEstimateResponse)
def estimate_exercise_calories(
    exercise_id: str,
    ctx: RequestContext = Depends(get_request_context),
    use_case: ManageExercisesUseCase = Depends(get_manage_exercises_use_case),
):
    """MET-based calories per hour for the caller's latest body weight."""
    return CalorieEstimateResponse(**use_case.estimate_calories(exercise_id, ctx))
