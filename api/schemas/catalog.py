"""
Request/response schemas for exercises and workout presets.

Exercise JSON-array fields are always lists of strings on the wire.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from domain.models import Exercise, PresetExercise, WorkoutPreset


# =============================================================================
# Exercises
# =============================================================================


class ExerciseCreate(BaseModel):
    name: str = Field(..., min_length=1)
    category: Optional[str] = None
    level: Optional[str] = None
    force: Optional[str] = None
    mechanic: Optional[str] = None
    equipment: List[str] = Field(default_factory=list)
    primary_muscles: List[str] = Field(default_factory=list)
    secondary_muscles: List[str] = Field(default_factory=list)
    instructions: List[str] = Field(default_factory=list)
    images: List[str] = Field(default_factory=list)
    calories_per_hour: Optional[float] = Field(
        default=None, ge=0, description="Estimated from category and level when omitted"
    )
    description: Optional[str] = None
    shared_with_public: bool = False


class ExerciseUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    category: Optional[str] = None
    level: Optional[str] = None
    force: Optional[str] = None
    mechanic: Optional[str] = None
    equipment: Optional[List[str]] = None
    primary_muscles: Optional[List[str]] = None
    secondary_muscles: Optional[List[str]] = None
    instructions: Optional[List[str]] = None
    images: Optional[List[str]] = None
    calories_per_hour: Optional[float] = Field(default=None, ge=0)
    description: Optional[str] = None
    shared_with_public: Optional[bool] = None


class ExerciseListResponse(BaseModel):
    exercises: List[Exercise]
    total: int
    page: int
    page_size: int
    total_pages: int


class SuggestedExercisesResponse(BaseModel):
    recent_exercises: List[Exercise] = Field(default_factory=list)
    top_exercises: List[Exercise] = Field(default_factory=list)


class DeletionImpactResponse(BaseModel):
    exercise_id: str
    exercise_entries_count: int


class CalorieEstimateResponse(BaseModel):
    exercise_id: str
    weight_kg: float
    estimated_calories_per_hour: int
    stored_calories_per_hour: Optional[float] = None


# =============================================================================
# Workout presets
# =============================================================================


class PresetExerciseInput(BaseModel):
    exercise_id: str
    sets: Optional[int] = Field(default=None, ge=1)
    reps: Optional[int] = Field(default=None, ge=0)
    weight: Optional[float] = Field(default=None, ge=0)
    duration: Optional[float] = Field(default=None, ge=0)
    notes: Optional[str] = None
    image_url: Optional[str] = None

    def to_domain(self) -> PresetExercise:
        return PresetExercise(**self.model_dump())


class WorkoutPresetCreate(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    is_public: bool = False
    exercises: List[PresetExerciseInput] = Field(default_factory=list)


class WorkoutPresetUpdate(BaseModel):
    """Partial update; an exercises list replaces the stored one."""

    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    is_public: Optional[bool] = None
    exercises: Optional[List[PresetExerciseInput]] = None


class WorkoutPresetResponse(BaseModel):
    id: str
    user_id: str
    name: str
    description: Optional[str] = None
    is_public: bool
    exercises: List[PresetExercise] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, preset: WorkoutPreset) -> "WorkoutPresetResponse":
        return cls(**preset.model_dump())
