"""
Exercise entries router.

The exercise diary: manual logging, edits, set-list operations and
per-exercise progress. Set numbers in every response are 1..N.
"""

import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Query, Response, status

from api.deps import (
    get_edit_sets_use_case,
    get_entry_repo,
    get_log_entry_use_case,
    get_request_context,
)
from api.schemas.exercise_entries import (
    ExerciseEntryCreate,
    ExerciseEntryResponse,
    ExerciseEntryUpdate,
    SetReorderRequest,
)
from application.context import RequestContext
from application.exceptions import ValidationError
from application.ports import ExerciseEntryRepository
from application.use_cases import EditEntrySetsUseCase, LogExerciseEntryUseCase
from application.use_cases.log_exercise_entry import get_entry_for_user
from domain.models import ExerciseEntrySet

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/exercise-entries",
    tags=["Exercise Entries"],
)


# =============================================================================
# Reads
# =============================================================================


@router.get("", response_model=List[ExerciseEntryResponse])
def list_exercise_entries(
    day: Optional[date] = Query(None, alias="date"),
    ctx: RequestContext = Depends(get_request_context),
    entry_repo: ExerciseEntryRepository = Depends(get_entry_repo),
):
    """Entries for a day (default: the client's today)."""
    entries = entry_repo.list_by_date(ctx.user_id, day or ctx.client_today)
    return [ExerciseEntryResponse.from_domain(e) for e in entries]


@router.get("/progress/{exercise_id}", response_model=List[ExerciseEntryResponse])
def get_exercise_progress(
    exercise_id: str,
    start_date: date = Query(...),
    end_date: date = Query(...),
    ctx: RequestContext = Depends(get_request_context),
    entry_repo: ExerciseEntryRepository = Depends(get_entry_repo),
):
    if end_date < start_date:
        raise ValidationError("end_date must not be before start_date")
    entries = entry_repo.get_progress(ctx.user_id, exercise_id, start_date, end_date)
    return [ExerciseEntryResponse.from_domain(e) for e in entries]


@router.get("/{entry_id}", response_model=ExerciseEntryResponse)
def get_exercise_entry(
    entry_id: str,
    ctx: RequestContext = Depends(get_request_context),
    entry_repo: ExerciseEntryRepository = Depends(get_entry_repo),
):
    entry = get_entry_for_user(entry_repo, entry_id, ctx.user_id)
    return ExerciseEntryResponse.from_domain(entry)


# =============================================================================
# Writes
# =============================================================================


@router.post("", response_model=ExerciseEntryResponse, status_code=status.HTTP_201_CREATED)
def log_exercise_entry(
    body: ExerciseEntryCreate,
    ctx: RequestContext = Depends(get_request_context),
    use_case: LogExerciseEntryUseCase = Depends(get_log_entry_use_case),
):
    """
    Log an exercise.

    calories_burned is computed when omitted and a duration is known;
    duration falls back to the sum of set durations.
    """
    entry = use_case.create(
        ctx,
        exercise_id=body.exercise_id,
        entry_date=body.entry_date,
        duration_minutes=body.duration_minutes,
        calories_burned=body.calories_burned,
        sets=body.sets,
        notes=body.notes,
        image_url=body.image_url,
    )
    return ExerciseEntryResponse.from_domain(entry)


@router.put("/{entry_id}", response_model=ExerciseEntryResponse)
def update_exercise_entry(
    entry_id: str,
    body: ExerciseEntryUpdate,
    ctx: RequestContext = Depends(get_request_context),
    use_case: LogExerciseEntryUseCase = Depends(get_log_entry_use_case),
):
    updates = body.model_dump(exclude_unset=True, exclude={"sets"})
    if body.sets is not None:
        updates["sets"] = body.sets
    entry = use_case.update(entry_id, ctx, updates)
    return ExerciseEntryResponse.from_domain(entry)


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_exercise_entry(
    entry_id: str,
    ctx: RequestContext = Depends(get_request_context),
    use_case: LogExerciseEntryUseCase = Depends(get_log_entry_use_case),
):
    use_case.delete(entry_id, ctx)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# =============================================================================
# Set operations
# =============================================================================


@router.post("/{entry_id}/sets", response_model=ExerciseEntryResponse)
def append_set(
    entry_id: str,
    new_set: Optional[ExerciseEntrySet] = Body(None),
    ctx: RequestContext = Depends(get_request_context),
    use_case: EditEntrySetsUseCase = Depends(get_edit_sets_use_case),
):
    """Append a set; with no body the last set is repeated."""
    return ExerciseEntryResponse.from_domain(use_case.append(entry_id, ctx, new_set))


@router.post("/{entry_id}/sets/{set_number}/duplicate", response_model=ExerciseEntryResponse)
def duplicate_set(
    entry_id: str,
    set_number: int,
    ctx: RequestContext = Depends(get_request_context),
    use_case: EditEntrySetsUseCase = Depends(get_edit_sets_use_case),
):
    return ExerciseEntryResponse.from_domain(use_case.duplicate(entry_id, ctx, set_number))


@router.delete("/{entry_id}/sets/{set_number}", response_model=ExerciseEntryResponse)
def remove_set(
    entry_id: str,
    set_number: int,
    ctx: RequestContext = Depends(get_request_context),
    use_case: EditEntrySetsUseCase = Depends(get_edit_sets_use_case),
):
    return ExerciseEntryResponse.from_domain(use_case.remove(entry_id, ctx, set_number))


@router.post("/{entry_id}/sets/reorder", response_model=ExerciseEntryResponse)
def reorder_sets(
    entry_id: str,
    body: SetReorderRequest,
    ctx: RequestContext = Depends(get_request_context),
    use_case: EditEntrySetsUseCase = Depends(get_edit_sets_use_case),
):
    entry = use_case.reorder(entry_id, ctx, body.from_index, body.to_index)
    return ExerciseEntryResponse.from_domain(entry)
