"""Pytest configuration and fixtures."""

import asyncio
import tempfile
from datetime import datetime
from pathlib import Path

import pytest

from weekfit.config import Settings
from weekfit.db import Backend, init_db, seed_exercises
from weekfit.models.workout import (
    ExerciseAssignment,
    ExerciseSet,
    ScheduledWorkout,
    WorkoutLevel,
    WorkoutType,
)
from weekfit.session import UserSession


@pytest.fixture
def temp_dir():
    """Create a temporary data directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_db_path(temp_dir):
    """Create an initialized, seeded temporary database."""
    db_path = temp_dir / "test.db"
    asyncio.run(init_db(db_path))
    asyncio.run(seed_exercises(db_path))
    return db_path


@pytest.fixture
def settings(temp_dir):
    """Settings pointing at the temporary data directory."""
    return Settings(
        data_dir=temp_dir,
        db_filename="test.db",
        default_user_id="test-user",
        log_level="WARNING",
    )


@pytest.fixture
def backend(settings, temp_db_path):
    """Backend wired to the seeded temporary database."""
    return Backend.from_settings(settings)


@pytest.fixture
def session():
    return UserSession(user_id="test-user")


@pytest.fixture
def exercise_ids(backend):
    """Library ids by exercise name."""
    library = asyncio.run(backend.exercises.list_all())
    return {ex.name: ex.id for ex in library}


@pytest.fixture
def make_workout(exercise_ids):
    """Factory for unsaved workouts with one or two exercises."""

    def _make(
        scheduled_date: datetime,
        name: str = "Push Day",
        completed: bool = False,
        user_id: str = "test-user",
        weights: tuple = (),
    ) -> ScheduledWorkout:
        return ScheduledWorkout(
            user_id=user_id,
            name=name,
            scheduled_date=scheduled_date,
            workout_type=WorkoutType.PUSH,
            level=WorkoutLevel.INTERMEDIATE,
            completed=completed,
            exercises=[
                ExerciseAssignment(
                    exercise_id=exercise_ids["Bench Press, Barbell"],
                    exercise_name="Bench Press, Barbell",
                    position=1,
                    sets=4,
                    reps="8-10",
                    logged_sets=[
                        ExerciseSet(set_number=i, reps=8, weight_lbs=w)
                        for i, w in enumerate(weights, start=1)
                    ],
                ),
                ExerciseAssignment(
                    exercise_id=exercise_ids["Push Up, Bodyweight"],
                    exercise_name="Push Up, Bodyweight",
                    position=2,
                    sets=4,
                    reps="8-10",
                ),
            ],
        )

    return _make
