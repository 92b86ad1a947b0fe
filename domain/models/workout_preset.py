"""
Workout presets: named, reusable bundles of exercises with target values.

Presets are independent of dates. A plan assignment can point at a preset,
in which case each preset exercise becomes its own diary entry.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class PresetExercise(BaseModel):
    """An exercise inside a preset, with its targets."""

    id: Optional[str] = None
    exercise_id: str
    sets: Optional[int] = Field(default=None, ge=1, description="Target set count")
    reps: Optional[int] = Field(default=None, ge=0)
    weight: Optional[float] = Field(default=None, ge=0)
    duration: Optional[float] = Field(
        default=None, ge=0, description="Minutes per set"
    )
    notes: Optional[str] = None
    image_url: Optional[str] = None

    # Display only, resolved by join when read
    exercise_name: Optional[str] = None


class WorkoutPreset(BaseModel):
    """
    A user's reusable workout.

    Exercises keep the order the user gave them. Public presets can be read
    by anyone; only the owner can change them.
    """

    id: str
    user_id: str
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    is_public: bool = False
    exercises: List[PresetExercise] = Field(default_factory=list)

    def is_visible_to(self, user_id: str) -> bool:
        return self.is_public or self.user_id == user_id
