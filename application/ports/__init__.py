"""
Repository Interfaces (Ports) for the Sparky Fitness API.

This package defines abstract interfaces that decouple use cases from
infrastructure (database). Implementations are provided in the
infrastructure layer; in-memory fakes live in tests/fakes.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the use cases need)
- Adapters: Concrete implementations in infrastructure/ (how it's provided)

Usage:
    from application.ports import WorkoutPlanRepository

    class SaveWorkoutPlanUseCase:
        def __init__(self, plan_repo: WorkoutPlanRepository):
            self._plan_repo = plan_repo
"""

from application.ports.exercise_entry_repository import ExerciseEntryRepository
from application.ports.exercise_repository import ExerciseRepository
from application.ports.measurement_repository import MeasurementRepository
from application.ports.workout_plan_repository import SavedPlan, WorkoutPlanRepository
from application.ports.workout_preset_repository import WorkoutPresetRepository

__all__ = [
    "ExerciseEntryRepository",
    "ExerciseRepository",
    "MeasurementRepository",
    "SavedPlan",
    "WorkoutPlanRepository",
    "WorkoutPresetRepository",
]
