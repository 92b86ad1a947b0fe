"""
Request/response schemas for exercise diary endpoints.
"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field

from domain.models import ExerciseEntry, ExerciseEntrySet


class ExerciseEntryCreate(BaseModel):
    """Manual Log Exercise body. set_number values are reassigned 1..N."""

    exercise_id: str
    entry_date: date
    duration_minutes: Optional[float] = Field(default=None, ge=0)
    calories_burned: Optional[float] = Field(default=None, ge=0)
    sets: Optional[List[ExerciseEntrySet]] = None
    notes: Optional[str] = None
    image_url: Optional[str] = None


class ExerciseEntryUpdate(BaseModel):
    exercise_id: Optional[str] = None
    entry_date: Optional[date] = None
    duration_minutes: Optional[float] = Field(default=None, ge=0)
    calories_burned: Optional[float] = Field(default=None, ge=0)
    sets: Optional[List[ExerciseEntrySet]] = None
    notes: Optional[str] = None
    image_url: Optional[str] = None


class SetReorderRequest(BaseModel):
    from_index: int = Field(..., ge=0)
    to_index: int = Field(..., ge=0)


class ExerciseEntryResponse(BaseModel):
    id: str
    exercise_id: str
    exercise_name: Optional[str] = None
    entry_date: date
    duration_minutes: float
    calories_burned: float
    notes: Optional[str] = None
    image_url: Optional[str] = None
    workout_plan_assignment_id: Optional[str] = None
    sets: List[ExerciseEntrySet] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, entry: ExerciseEntry) -> "ExerciseEntryResponse":
        return cls(**entry.model_dump(exclude={"user_id"}))


class ActiveCaloriesRequest(BaseModel):
    """Body sent by the mobile health-sync app."""

    entry_date: date = Field(..., alias="date")
    calories: float = Field(..., ge=0)

    model_config = {"populate_by_name": True}


class ActiveCaloriesResponse(BaseModel):
    created: bool
    entry: ExerciseEntryResponse
