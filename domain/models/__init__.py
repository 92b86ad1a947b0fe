"""
Domain models for the Sparky Fitness API.

These models are independent of infrastructure concerns:
- Exercise: a catalog entry (global or user-owned)
- ExerciseEntry / ExerciseEntrySet: the dated exercise diary
- WorkoutPreset / PresetExercise: reusable exercise bundles
- WorkoutPlanTemplate / Assignment: recurring weekly plans
"""

from domain.models.exercise import Exercise
from domain.models.exercise_entry import ExerciseEntry, ExerciseEntrySet, SetType
from domain.models.workout_plan import Assignment, WorkoutPlanTemplate
from domain.models.workout_preset import PresetExercise, WorkoutPreset

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
