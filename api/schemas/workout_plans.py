"""
Request/response schemas for workout plan template endpoints.
"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from domain.models import Assignment, WorkoutPlanTemplate


class AssignmentInput(BaseModel):
    """One weekday rule as submitted by the client."""

    day_of_week: int = Field(..., ge=0, le=6, description="0=Sunday .. 6=Saturday")
    workout_preset_id: Optional[str] = None
    exercise_id: Optional[str] = None
    sets: Optional[int] = Field(default=None, ge=1)
    reps: Optional[int] = Field(default=None, ge=0)
    weight: Optional[float] = Field(default=None, ge=0)
    duration: Optional[float] = Field(default=None, ge=0)
    notes: Optional[str] = None

    @model_validator(mode="after")
    def validate_target(self) -> "AssignmentInput":
        if bool(self.workout_preset_id) == bool(self.exercise_id):
            raise ValueError(
                "assignment must target exactly one of workout_preset_id or exercise_id"
            )
        return self


class WorkoutPlanTemplateInput(BaseModel):
    """
    Body for create and update.

    Updates are full replacements: the assignment list always replaces the
    stored one.
    """

    plan_name: str = Field(..., min_length=1)
    description: Optional[str] = None
    start_date: date
    end_date: Optional[date] = None
    is_active: bool = True
    assignments: List[AssignmentInput] = Field(default_factory=list)
    current_client_date: Optional[date] = Field(
        default=None, description="Overrides the client day derived from headers"
    )

    @model_validator(mode="after")
    def validate_range(self) -> "WorkoutPlanTemplateInput":
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self

    def to_template_data(self) -> dict:
        return self.model_dump(exclude={"current_client_date"})


class AssignmentResponse(BaseModel):
    id: Optional[str] = None
    day_of_week: int
    workout_preset_id: Optional[str] = None
    workout_preset_name: Optional[str] = None
    exercise_id: Optional[str] = None
    exercise_name: Optional[str] = None
    sets: Optional[int] = None
    reps: Optional[int] = None
    weight: Optional[float] = None
    duration: Optional[float] = None
    notes: Optional[str] = None

    @classmethod
    def from_domain(cls, a: Assignment) -> "AssignmentResponse":
        return cls(**a.model_dump(exclude={"template_id"}))


class WorkoutPlanTemplateResponse(BaseModel):
    id: str
    user_id: str
    plan_name: str
    description: Optional[str] = None
    start_date: date
    end_date: Optional[date] = None
    is_active: bool
    assignments: List[AssignmentResponse] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, t: WorkoutPlanTemplate) -> "WorkoutPlanTemplateResponse":
        return cls(
            **t.model_dump(exclude={"assignments"}),
            assignments=[AssignmentResponse.from_domain(a) for a in t.assignments],
        )


class SaveWorkoutPlanResponse(WorkoutPlanTemplateResponse):
    """Saved template plus the materialization side effects."""

    entries_created: int = 0
    entries_removed: int = 0


class MaterializationResponse(BaseModel):
    template_id: str
    entries_created: int = 0
    entries_removed: int = 0
