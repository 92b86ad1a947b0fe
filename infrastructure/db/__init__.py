"""
Infrastructure Database Layer.

This package provides Supabase-backed implementations of the repository
interfaces defined in application.ports. They are constructed in
api/deps.py and injected into use cases.

Usage:
    from supabase import create_client
    from infrastructure.db import SupabaseWorkoutPlanRepository

    client = create_client(url, key)
    plan_repo = SupabaseWorkoutPlanRepository(client)
"""

from infrastructure.db.exercise_entry_repository import SupabaseExerciseEntryRepository
from infrastructure.db.exercise_repository import SupabaseExerciseRepository
from infrastructure.db.measurement_repository import SupabaseMeasurementRepository
from infrastructure.db.workout_plan_repository import SupabaseWorkoutPlanRepository
from infrastructure.db.workout_preset_repository import SupabaseWorkoutPresetRepository

__all__ = [
    "SupabaseExerciseEntryRepository",
    "SupabaseExerciseRepository",
    "SupabaseMeasurementRepository",
    "SupabaseWorkoutPlanRepository",
    "SupabaseWorkoutPresetRepository",
]
