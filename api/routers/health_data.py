"""
Health data router for the companion mobile app.

The app authenticates with an API key bound to a user and pushes the day's
active calories from the phone's health store.
"""

from fastapi import APIRouter, Depends

from api.deps import get_request_context, get_sync_active_calories_use_case
from api.schemas.exercise_entries import (
    ActiveCaloriesRequest,
    ActiveCaloriesResponse,
    ExerciseEntryResponse,
)
from application.context import RequestContext
from application.use_cases import SyncActiveCaloriesUseCase

router = APIRouter(
    prefix="/health-data",
    tags=["Health Data"],
)


@router.post("/active-calories", response_model=ActiveCaloriesResponse)
def sync_active_calories(
    body: ActiveCaloriesRequest,
    ctx: RequestContext = Depends(get_request_context),
    use_case: SyncActiveCaloriesUseCase = Depends(get_sync_active_calories_use_case),
):
    """Create or update the day's "Active Calories" entry."""
    result = use_case.execute(ctx, entry_date=body.entry_date, calories=body.calories)
    return ActiveCaloriesResponse(
        created=result.created,
        entry=ExerciseEntryResponse.from_domain(result.entry),
    )
