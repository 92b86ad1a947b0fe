"""
Application factory for the Sparky Fitness API.

create_app() wires logging, Sentry, CORS, the FitnessError handlers and
the routers. Tests build their own instance with explicit settings:

    app = create_app(settings=Settings(environment="test", _env_file=None))

uvicorn serves the module-level instance: uvicorn backend.main:app --reload
"""

import logging
from typing import Optional

import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from application.exceptions import FitnessError
from backend.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure a FastAPI application instance.

    Args:
        settings: Optional Settings instance. If not provided, uses get_settings()
                  which loads from environment variables.

    Returns:
        Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    _configure_logging(settings)

    # Initialize Sentry for error tracking
    _init_sentry(settings)

    app = FastAPI(
        title="Sparky Fitness API",
        description="Exercise diary, workout presets and recurring workout plans",
        version="1.0.0",
    )

    _configure_cors(app, settings)
    _register_exception_handlers(app)
    _include_routers(app)

    logger.info(f"Sparky Fitness API created (environment={settings.environment})")
    return app


def _configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _init_sentry(settings: Settings) -> None:
    """Initialize Sentry SDK if DSN is configured."""
    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            environment=settings.environment,
            traces_sample_rate=0.1,
            profiles_sample_rate=0.1,
        )
        logger.info("Sentry initialized for sparky-fitness-api")


def _configure_cors(app: FastAPI, settings: Settings) -> None:
    """Configure CORS middleware for the application."""
    trusted_origins = [
        "http://localhost:3000",
        "http://localhost:3001",
    ]
    trusted_origins.extend(settings.cors_origins_list)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=trusted_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def _register_exception_handlers(app: FastAPI) -> None:
    """Map application errors onto HTTP responses."""

    @app.exception_handler(FitnessError)
    async def fitness_error_handler(request: Request, exc: FitnessError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.to_detail()},
        )


def _include_routers(app: FastAPI) -> None:
    """Include all API routers in the application."""
    from api.routers import (
        exercise_entries_router,
        exercises_router,
        health_data_router,
        health_router,
        workout_plans_router,
        workout_presets_router,
    )

    # Health router (no prefix - /health at root)
    app.include_router(health_router)

    app.include_router(exercises_router)
    app.include_router(exercise_entries_router)
    app.include_router(workout_presets_router)
    app.include_router(workout_plans_router)
    app.include_router(health_data_router)


app = create_app()
