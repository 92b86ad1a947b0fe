"""
Pytest fixtures for Sparky Fitness API tests.

Use cases are built on top of the in-memory fakes in tests/fakes; API tests
run the real app with every repository dependency overridden by a fake.
"""

from typing import Generator

import pytest
from fastapi.testclient import TestClient

from api.deps import (
    get_current_user,
    get_entry_repo,
    get_exercise_repo,
    get_measurement_repo,
    get_plan_repo,
    get_preset_repo,
)
from application.context import RequestContext
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
from backend.main import create_app
from backend.settings import Settings
from tests.fakes import FakeRepos, create_fake_repos
from tests.fakes.seed_data import (
    BENCH,
    PRIVATE_CURL,
    RUN,
    SQUAT,
    TEST_USER_ID,
    make_ctx,
)


# ---------------------------------------------------------------------------
# Fakes and use cases
# ---------------------------------------------------------------------------


@pytest.fixture
def repos() -> FakeRepos:
    """Fresh fakes seeded with a small catalog."""
    repos = create_fake_repos()
    repos.exercises.seed(SQUAT, BENCH, RUN, PRIVATE_CURL)
    return repos


@pytest.fixture
def ctx() -> RequestContext:
    return make_ctx()


@pytest.fixture
def estimator(repos) -> EstimateCaloriesUseCase:
    return EstimateCaloriesUseCase(repos.measurements)


@pytest.fixture
def materializer(repos, estimator) -> MaterializeWorkoutPlanUseCase:
    return MaterializeWorkoutPlanUseCase(
        repos.plans, repos.entries, repos.exercises, repos.presets, estimator
    )


@pytest.fixture
def save_plan(repos, materializer) -> SaveWorkoutPlanUseCase:
    return SaveWorkoutPlanUseCase(repos.plans, materializer)


@pytest.fixture
def delete_plan(repos) -> DeleteWorkoutPlanUseCase:
    return DeleteWorkoutPlanUseCase(repos.plans)


@pytest.fixture
def log_entry(repos, estimator) -> LogExerciseEntryUseCase:
    return LogExerciseEntryUseCase(repos.entries, repos.exercises, estimator)


@pytest.fixture
def edit_sets(repos) -> EditEntrySetsUseCase:
    return EditEntrySetsUseCase(repos.entries)


@pytest.fixture
def manage_exercises(repos, estimator) -> ManageExercisesUseCase:
    return ManageExercisesUseCase(repos.exercises, repos.entries, estimator)


@pytest.fixture
def manage_presets(repos) -> ManageWorkoutPresetsUseCase:
    return ManageWorkoutPresetsUseCase(repos.presets, repos.exercises)


@pytest.fixture
def sync_calories(repos) -> SyncActiveCaloriesUseCase:
    return SyncActiveCaloriesUseCase(repos.exercises, repos.entries)


# ---------------------------------------------------------------------------
# Test App and Client
# ---------------------------------------------------------------------------


async def mock_get_current_user() -> str:
    """Mock auth dependency that returns a test user."""
    return TEST_USER_ID


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Test settings with minimal configuration."""
    return Settings(
        environment="test",
        supabase_url="https://test.supabase.co",
        supabase_service_role_key="test-key",
        _env_file=None,
    )


@pytest.fixture(scope="session")
def app(test_settings):
    """Create test application instance."""
    return create_app(settings=test_settings)


@pytest.fixture
def client(app, repos) -> Generator[TestClient, None, None]:
    """
    Per-test TestClient whose repositories are the `repos` fakes.
    Properly cleans up dependency overrides after each test.
    """
    app.dependency_overrides[get_current_user] = mock_get_current_user
    app.dependency_overrides[get_exercise_repo] = lambda: repos.exercises
    app.dependency_overrides[get_entry_repo] = lambda: repos.entries
    app.dependency_overrides[get_preset_repo] = lambda: repos.presets
    app.dependency_overrides[get_plan_repo] = lambda: repos.plans
    app.dependency_overrides[get_measurement_repo] = lambda: repos.measurements
    yield TestClient(app)
    app.dependency_overrides.clear()
