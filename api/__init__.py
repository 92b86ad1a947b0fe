"""
API package for the Sparky Fitness API.

This package contains:
- deps.py: FastAPI dependency providers for DI
- routers/: API route handlers
- schemas/: request/response models
"""

# Re-export dependency providers for convenient access
from api.deps import (
    get_current_user,
    get_entry_repo,
    get_exercise_repo,
    get_measurement_repo,
    get_plan_repo,
    get_preset_repo,
    get_request_context,
    get_settings,
    get_supabase_client,
    get_supabase_client_required,
)

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
    # Authentication and request context
    "get_current_user",
    "get_request_context",
]
