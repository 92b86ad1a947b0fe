"""
Use Cases for the Sparky Fitness API.

Each use case takes its repositories through the constructor and receives a
RequestContext (acting user, client date, logger) per call.
"""

from application.use_cases.delete_workout_plan import (
    DeleteWorkoutPlanResult,
    DeleteWorkoutPlanUseCase,
)
from application.use_cases.edit_entry_sets import EditEntrySetsUseCase
from application.use_cases.estimate_calories import EstimateCaloriesUseCase
from application.use_cases.log_exercise_entry import LogExerciseEntryUseCase
from application.use_cases.manage_exercises import (
    ExercisePage,
    ManageExercisesUseCase,
    SuggestedExercises,
)
from application.use_cases.manage_workout_presets import ManageWorkoutPresetsUseCase
from application.use_cases.materialize_workout_plan import (
    MaterializationResult,
    MaterializeWorkoutPlanUseCase,
)
from application.use_cases.save_workout_plan import (
    SaveWorkoutPlanResult,
    SaveWorkoutPlanUseCase,
)
from application.use_cases.sync_active_calories import (
    SyncActiveCaloriesResult,
    SyncActiveCaloriesUseCase,
)

__all__ = [
    "DeleteWorkoutPlanResult",
    "DeleteWorkoutPlanUseCase",
    "EditEntrySetsUseCase",
    "EstimateCaloriesUseCase",
    "ExercisePage",
    "LogExerciseEntryUseCase",
    "ManageExercisesUseCase",
    "ManageWorkoutPresetsUseCase",
    "MaterializationResult",
    "MaterializeWorkoutPlanUseCase",
    "SaveWorkoutPlanResult",
    "SaveWorkoutPlanUseCase",
    "SuggestedExercises",
    "SyncActiveCaloriesResult",
    "SyncActiveCaloriesUseCase",
]
