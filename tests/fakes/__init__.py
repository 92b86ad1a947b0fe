"""
Fake Repository Implementations for Testing.

This package provides in-memory fake implementations of the repository
ports for fast, isolated testing. No database or external dependencies
required.

Features:
- All fakes implement the same Protocol interfaces as the Supabase adapters
- The fakes share one FakeDatabase, so atomic saves can touch entries
- Atomic operations roll back on simulated failures

Usage:
    from tests.fakes import create_fake_repos

    repos = create_fake_repos()
    repos.exercises.seed({"id": "e1", "name": "Squat", "category": "strength"})
    repos.db.simulate_failure("save_workout_plan.insert_entries")
"""
from dataclasses import dataclass

from tests.fakes.database import FakeDatabase
from tests.fakes.exercise_entry_repository import FakeExerciseEntryRepository
from tests.fakes.exercise_repository import FakeExerciseRepository
from tests.fakes.measurement_repository import FakeMeasurementRepository
from tests.fakes.workout_plan_repository import FakeWorkoutPlanRepository
from tests.fakes.workout_preset_repository import FakeWorkoutPresetRepository


@dataclass
class FakeRepos:
    db: FakeDatabase
    exercises: FakeExerciseRepository
    entries: FakeExerciseEntryRepository
    presets: FakeWorkoutPresetRepository
    plans: FakeWorkoutPlanRepository
    measurements: FakeMeasurementRepository


def create_fake_repos() -> FakeRepos:
    """All fake repositories wired to one fresh FakeDatabase."""
    db = FakeDatabase()
    return FakeRepos(
        db=db,
        exercises=FakeExerciseRepository(db),
        entries=FakeExerciseEntryRepository(db),
        presets=FakeWorkoutPresetRepository(db),
        plans=FakeWorkoutPlanRepository(db),
        measurements=FakeMeasurementRepository(db),
    )


__all__ = [
    "FakeDatabase",
    "FakeExerciseEntryRepository",
    "FakeExerciseRepository",
    "FakeMeasurementRepository",
    "FakeRepos",
    "FakeWorkoutPlanRepository",
    "FakeWorkoutPresetRepository",
    "create_fake_repos",
]
