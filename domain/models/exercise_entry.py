"""
Exercise diary entries and their ordered sets.

An ExerciseEntry is one dated, logged occurrence of an exercise. It is
created by the user directly or by plan materialization, in which case it
carries a back-reference to the plan assignment that produced it.
"""

from datetime import date
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class SetType(str, Enum):
    """Kinds of sets a lifter can log."""

    WORKING = "Working Set"
    WARM_UP = "Warm-up"
    DROP = "Drop Set"
    FAILURE = "Failure"
    AMRAP = "AMRAP"
    BACK_OFF = "Back-off"
    REST_PAUSE = "Rest-Pause"
    CLUSTER = "Cluster"
    TECHNIQUE = "Technique"


class ExerciseEntrySet(BaseModel):
    """
    One set within an entry.

    set_number is 1-based and contiguous within its entry. Any edit to the
    set list renumbers it (see domain.services.set_list).
    """

    set_number: int = Field(default=1, ge=1)
    set_type: SetType = SetType.WORKING
    reps: Optional[int] = Field(default=None, ge=0)
    weight: Optional[float] = Field(default=None, ge=0)
    duration: Optional[float] = Field(
        default=None, ge=0, description="Set duration in minutes"
    )
    rest_time: Optional[int] = Field(
        default=None, ge=0, description="Rest after the set in seconds"
    )
    notes: Optional[str] = None


class ExerciseEntry(BaseModel):
    """A dated diary row for one exercise."""

    id: str
    user_id: str
    exercise_id: str
    entry_date: date
    duration_minutes: float = Field(default=0, ge=0)
    calories_burned: float = Field(default=0, ge=0)
    notes: Optional[str] = None
    image_url: Optional[str] = None
    workout_plan_assignment_id: Optional[str] = Field(
        default=None,
        description="Assignment that materialized this entry, if any",
    )
    sets: List[ExerciseEntrySet] = Field(default_factory=list)

    # Resolved at read time from the exercise catalog
    exercise_name: Optional[str] = None

    @property
    def is_planned(self) -> bool:
        return self.workout_plan_assignment_id is not None

    @property
    def total_set_duration(self) -> float:
        return sum(s.duration or 0 for s in self.sets)
