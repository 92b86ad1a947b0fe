"""
Infrastructure Layer for the Sparky Fitness API.

This package contains concrete implementations of repository interfaces:
- db/: Supabase database implementations
"""

from infrastructure.db import (
    SupabaseExerciseEntryRepository,
    SupabaseExerciseRepository,
    SupabaseMeasurementRepository,
    SupabaseWorkoutPlanRepository,
    SupabaseWorkoutPresetRepository,
)

__all__ = [
    "SupabaseExerciseEntryRepository",
    "SupabaseExerciseRepository",
    "SupabaseMeasurementRepository",
    "SupabaseWorkoutPlanRepository",
    "SupabaseWorkoutPresetRepository",
]
