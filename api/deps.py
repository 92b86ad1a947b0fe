"""
FastAPI Dependency Providers for the Sparky Fitness API.

This module provides FastAPI dependency injection functions that return
interface types (Protocols) rather than concrete implementations. This
enables clean separation of concerns and easy testing with fakes.

Architecture:
- Settings and Supabase client are cached per-process (lru_cache)
- Repository and use case providers create new instances per-request
- get_request_context builds the explicit per-request RequestContext

Usage in routers:
    from api.deps import get_request_context, get_save_workout_plan_use_case

    @router.post("/workout-plan-templates")
    def create_plan(
        body: WorkoutPlanTemplateCreate,
        ctx: RequestContext = Depends(get_request_context),
        use_case: SaveWorkoutPlanUseCase = Depends(get_save_workout_plan_use_case),
    ):
        return use_case.create(ctx, body.model_dump())

Testing:
    # Override dependencies in tests
    app.dependency_overrides[get_plan_repo] = lambda: FakeWorkoutPlanRepository()
"""

from datetime import date
from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header, HTTPException, Query
from supabase import Client, create_client

from application.context import RequestContext

# Protocol types (interfaces)
from application.ports import (
    ExerciseEntryRepository,
    ExerciseRepository,
    MeasurementRepository,
    WorkoutPlanRepository,
    WorkoutPresetRepository,
)
from application.use_cases import (
    DeleteWorkoutPlanUseCase,
    EditEntrySetsUseCase,
    EstimateCaloriesUseCase,
    LogExerciseEntryUseCase,
    ManageExercisesUseCase,
    ManageWorkoutPresetsUseCase,
    MaterializeWorkoutPlanUseCase,
    SaveWorkoutPlanUseCase,
    SyncActiveCaloriesUseCase,
)

# Concrete implementations
from infrastructure import (
    SupabaseExerciseEntryRepository,
    SupabaseExerciseRepository,
    SupabaseMeasurementRepository,
    SupabaseWorkoutPlanRepository,
    SupabaseWorkoutPresetRepository,
)

from backend.settings import Settings, get_settings as _get_settings
from backend.auth import get_current_user as _get_current_user
from domain.services.calendar import client_calendar_day


# =============================================================================
# Settings Provider
# =============================================================================


def get_settings() -> Settings:
    """
    Get application settings.

    Returns cached Settings instance from backend.settings.
    Use this as a FastAPI dependency for settings access.
    """
    return _get_settings()


# =============================================================================
# Supabase Client Provider
# =============================================================================


@lru_cache
def get_supabase_client() -> Optional[Client]:
    """
    Get Supabase client instance (cached).

    Returns None if credentials are not configured.
    """
    settings = _get_settings()

    if not settings.supabase_url or not settings.supabase_key:
        return None

    return create_client(settings.supabase_url, settings.supabase_key)


def get_supabase_client_required() -> Client:
    """
    Get Supabase client instance, raising if not configured.

    Raises:
        HTTPException: 503 if Supabase is not configured
    """
    client = get_supabase_client()
    if client is None:
        raise HTTPException(
            status_code=503,
            detail="Database not available. Supabase credentials not configured.",
        )
    return client


# =============================================================================
# Repository Providers
# =============================================================================


def get_exercise_repo(
    client: Client = Depends(get_supabase_client_required),
) -> ExerciseRepository:
    return SupabaseExerciseRepository(client)


def get_entry_repo(
    client: Client = Depends(get_supabase_client_required),
) -> ExerciseEntryRepository:
    return SupabaseExerciseEntryRepository(client)


def get_preset_repo(
    client: Client = Depends(get_supabase_client_required),
) -> WorkoutPresetRepository:
    return SupabaseWorkoutPresetRepository(client)


def get_plan_repo(
    client: Client = Depends(get_supabase_client_required),
) -> WorkoutPlanRepository:
    """
    Get WorkoutPlanRepository implementation.

    The return type is the Protocol to enable easy faking.
    """
    return SupabaseWorkoutPlanRepository(client)


def get_measurement_repo(
    client: Client = Depends(get_supabase_client_required),
) -> MeasurementRepository:
    return SupabaseMeasurementRepository(client)


# =============================================================================
# Use Case Providers
# =============================================================================


def get_calorie_estimator(
    measurement_repo: MeasurementRepository = Depends(get_measurement_repo),
    settings: Settings = Depends(get_settings),
) -> EstimateCaloriesUseCase:
    return EstimateCaloriesUseCase(
        measurement_repo, default_weight_kg=settings.default_body_weight_kg
    )


def get_materialize_use_case(
    plan_repo: WorkoutPlanRepository = Depends(get_plan_repo),
    entry_repo: ExerciseEntryRepository = Depends(get_entry_repo),
    exercise_repo: ExerciseRepository = Depends(get_exercise_repo),
    preset_repo: WorkoutPresetRepository = Depends(get_preset_repo),
    estimator: EstimateCaloriesUseCase = Depends(get_calorie_estimator),
    settings: Settings = Depends(get_settings),
) -> MaterializeWorkoutPlanUseCase:
    return MaterializeWorkoutPlanUseCase(
        plan_repo,
        entry_repo,
        exercise_repo,
        preset_repo,
        estimator,
        default_session_minutes=settings.default_session_minutes,
    )


def get_save_workout_plan_use_case(
    plan_repo: WorkoutPlanRepository = Depends(get_plan_repo),
    materializer: MaterializeWorkoutPlanUseCase = Depends(get_materialize_use_case),
) -> SaveWorkoutPlanUseCase:
    return SaveWorkoutPlanUseCase(plan_repo, materializer)


def get_delete_workout_plan_use_case(
    plan_repo: WorkoutPlanRepository = Depends(get_plan_repo),
) -> DeleteWorkoutPlanUseCase:
    return DeleteWorkoutPlanUseCase(plan_repo)


def get_log_entry_use_case(
    entry_repo: ExerciseEntryRepository = Depends(get_entry_repo),
    exercise_repo: ExerciseRepository = Depends(get_exercise_repo),
    estimator: EstimateCaloriesUseCase = Depends(get_calorie_estimator),
) -> LogExerciseEntryUseCase:
    return LogExerciseEntryUseCase(entry_repo, exercise_repo, estimator)


def get_edit_sets_use_case(
    entry_repo: ExerciseEntryRepository = Depends(get_entry_repo),
) -> EditEntrySetsUseCase:
    return EditEntrySetsUseCase(entry_repo)


def get_manage_exercises_use_case(
    exercise_repo: ExerciseRepository = Depends(get_exercise_repo),
    entry_repo: ExerciseEntryRepository = Depends(get_entry_repo),
    estimator: EstimateCaloriesUseCase = Depends(get_calorie_estimator),
) -> ManageExercisesUseCase:
    return ManageExercisesUseCase(exercise_repo, entry_repo, estimator)


def get_manage_presets_use_case(
    preset_repo: WorkoutPresetRepository = Depends(get_preset_repo),
    exercise_repo: ExerciseRepository = Depends(get_exercise_repo),
) -> ManageWorkoutPresetsUseCase:
    return ManageWorkoutPresetsUseCase(preset_repo, exercise_repo)


def get_sync_active_calories_use_case(
    exercise_repo: ExerciseRepository = Depends(get_exercise_repo),
    entry_repo: ExerciseEntryRepository = Depends(get_entry_repo),
) -> SyncActiveCaloriesUseCase:
    return SyncActiveCaloriesUseCase(exercise_repo, entry_repo)


# =============================================================================
# Authentication Providers
# =============================================================================


async def get_current_user(
    authorization: Optional[str] = Header(None),
    x_api_key: Optional[str] = Header(None, alias="X-API-Key"),
    settings: Settings = Depends(get_settings),
) -> str:
    """
    Get the current authenticated user ID.

    Wraps backend.auth.get_current_user for dependency injection.

    Raises:
        HTTPException: 401 if authentication fails
    """
    return await _get_current_user(
        authorization=authorization,
        x_api_key=x_api_key,
        settings=settings,
    )


# =============================================================================
# Request Context
# =============================================================================


def get_request_context(
    user_id: str = Depends(get_current_user),
    current_client_date: Optional[date] = Query(
        None, description="The calendar day the client considers today"
    ),
    x_client_timezone: Optional[str] = Header(None, alias="X-Client-Timezone"),
    x_client_utc_offset: Optional[int] = Header(
        None, alias="X-Client-UTC-Offset", description="Minutes east of UTC"
    ),
) -> RequestContext:
    """
    Build the per-request context.

    client_today is, in order of preference: the explicit current_client_date,
    today in the client's IANA zone, today at the client's UTC offset, or the
    server's UTC date.
    """
    client_today = current_client_date or client_calendar_day(
        tz_name=x_client_timezone, utc_offset_minutes=x_client_utc_offset
    )
    return RequestContext(user_id=user_id, client_today=client_today)


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    # Settings
    "get_settings",
    # Database
    "get_supabase_client",
    "get_supabase_client_required",
    # Repositories
    "get_exercise_repo",
    "get_entry_repo",
    "get_preset_repo",
    "get_plan_repo",
    "get_measurement_repo",
    # Use cases
    "get_calorie_estimator",
    "get_materialize_use_case",
    "get_save_workout_plan_use_case",
    "get_delete_workout_plan_use_case",
    "get_log_entry_use_case",
    "get_edit_sets_use_case",
    "get_manage_exercises_use_case",
    "get_manage_presets_use_case",
    "get_sync_active_calories_use_case",
    # Auth
    "get_current_user",
    "get_request_context",
]
