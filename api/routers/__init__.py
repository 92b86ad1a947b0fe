"""
Router package for the Sparky Fitness API.

This package contains all API routers organized by domain:
- health: Liveness check
- exercises: Exercise catalog search and custom exercises
- exercise_entries: Exercise diary and set-list operations
- workout_presets: Reusable exercise bundles
- workout_plans: Recurring plan templates and their materialization
- health_data: Mobile health-data sync
"""

from api.routers.health import router as health_router
from api.routers.exercises import router as exercises_router
from api.routers.exercise_entries import router as exercise_entries_router
from api.routers.workout_presets import router as workout_presets_router
from api.routers.workout_plans import router as workout_plans_router
from api.routers.health_data import router as health_data_router

__all__ = [
    "health_router",
    "exercises_router",
    "exercise_entries_router",
    "workout_presets_router",
    "workout_plans_router",
    "health_data_router",
]
