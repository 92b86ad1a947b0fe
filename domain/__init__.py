"""
Domain layer for the Sparky Fitness API.

This package contains pure domain models and services that are independent
of infrastructure concerns (database, API, external services).
"""

from domain.models import (
    Assignment,
    Exercise,
    ExerciseEntry,
    ExerciseEntrySet,
    PresetExercise,
    SetType,
    WorkoutPlanTemplate,
    WorkoutPreset,
)

__all__ = [
    "Assignment",
    "Exercise",
    "ExerciseEntry",
    "ExerciseEntrySet",
    "PresetExercise",
    "SetType",
    "WorkoutPlanTemplate",
    "WorkoutPreset",
]
