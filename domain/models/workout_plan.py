"""
Recurring workout plan templates.

A WorkoutPlanTemplate covers a date range and holds weekday assignments.
Each Assignment fires on one weekday (0=Sunday..6=Saturday) and targets
either a preset or a single exercise, never both.

Assignments are always replaced as a whole when the template is saved;
there is no API to edit one assignment in place.
"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator


class Assignment(BaseModel):
    """
    One weekday rule in a plan template.

    Target values (sets, reps, weight, duration, notes) only apply to
    direct exercise assignments. Preset assignments use the targets stored
    on the preset's exercises.

    Examples:
        >>> Assignment(day_of_week=1, exercise_id="e1", sets=3, reps=10)
        >>> Assignment(day_of_week=3, workout_preset_id="p1")
    """

    id: Optional[str] = None
    template_id: Optional[str] = None
    day_of_week: int = Field(..., ge=0, le=6, description="0=Sunday .. 6=Saturday")

    workout_preset_id: Optional[str] = None
    exercise_id: Optional[str] = None

    sets: Optional[int] = Field(default=None, ge=1)
    reps: Optional[int] = Field(default=None, ge=0)
    weight: Optional[float] = Field(default=None, ge=0)
    duration: Optional[float] = Field(default=None, ge=0, description="Minutes per set")
    notes: Optional[str] = None

    # Display only, resolved by join when read
    workout_preset_name: Optional[str] = None
    exercise_name: Optional[str] = None

    @model_validator(mode="after")
    def validate_target(self) -> "Assignment":
        """Exactly one of workout_preset_id and exercise_id must be set."""
        has_preset = bool(self.workout_preset_id)
        has_exercise = bool(self.exercise_id)
        if has_preset == has_exercise:
            raise ValueError(
                "assignment must target exactly one of workout_preset_id or exercise_id"
            )
        return self

    @property
    def targets_preset(self) -> bool:
        return bool(self.workout_preset_id)


class WorkoutPlanTemplate(BaseModel):
    """A user's recurring workout plan."""

    id: str
    user_id: str
    plan_name: str = Field(..., min_length=1)
    description: Optional[str] = None
    start_date: date
    end_date: Optional[date] = Field(default=None, description="None = open-ended")
    is_active: bool = True
    assignments: List[Assignment] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_range(self) -> "WorkoutPlanTemplate":
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self

    @property
    def assignment_ids(self) -> List[str]:
        return [a.id for a in self.assignments if a.id]

    def covers(self, day: date) -> bool:
        """True when the template's range includes the given day."""
        if day < self.start_date:
            return False
        return self.end_date is None or day <= self.end_date
