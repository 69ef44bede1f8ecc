"""Database engine setup and initialization."""

import json
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

import aiosqlite
import structlog

from ..config import get_settings
from ..errors import BackendError

logger = structlog.get_logger(__name__)


def get_db_path(data_dir: Path | None = None) -> Path:
    """Get the database file path."""
    settings = get_settings()
    if data_dir is None:
        data_dir = settings.data_dir
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir / settings.db_filename


@asynccontextmanager
async def connect(db_path: Path) -> AsyncIterator[aiosqlite.Connection]:
    """Open a connection with row access by name and foreign keys enforced.

    Any sqlite failure inside the block surfaces as ``BackendError``.
    """
    try:
        async with aiosqlite.connect(db_path) as db:
            db.row_factory = aiosqlite.Row
            await db.execute("PRAGMA foreign_keys = ON")
            yield db
    except aiosqlite.Error as e:
        logger.warning("backend_query_failed", db_path=str(db_path), error=str(e))
        raise BackendError(str(e)) from e


async def init_db(db_path: Path | None = None) -> None:
    """Initialize the database schema."""
    if db_path is None:
        db_path = get_db_path()

    async with aiosqlite.connect(db_path) as db:
        # User profiles, keyed by the auth user id
        await db.execute("""
            CREATE TABLE IF NOT EXISTS profiles (
                id TEXT PRIMARY KEY,
                first_name TEXT NOT NULL DEFAULT '',
                last_name TEXT NOT NULL DEFAULT '',
                date_of_birth TEXT,
                height_inches INTEGER,
                weight_lbs REAL,
                default_level TEXT,
                default_equipment TEXT NOT NULL DEFAULT '[]',
                avatar_url TEXT,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        # Exercise library
        await db.execute("""
            CREATE TABLE IF NOT EXISTS exercises (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT UNIQUE NOT NULL,
                muscle_groups TEXT NOT NULL,
                equipment TEXT NOT NULL,
                movement_pattern TEXT NOT NULL,
                is_compound INTEGER DEFAULT 0
            )
        """)

        # Scheduled workouts
        await db.execute("""
            CREATE TABLE IF NOT EXISTS user_workouts (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id TEXT NOT NULL,
                name TEXT NOT NULL,
                custom_name TEXT,
                workout_type TEXT,
                level TEXT,
                scheduled_date TEXT NOT NULL,
                completed INTEGER NOT NULL DEFAULT 0,
                is_favorite INTEGER NOT NULL DEFAULT 0,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        # Exercises prescribed within a workout
        await db.execute("""
            CREATE TABLE IF NOT EXISTS workout_exercises (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                workout_id INTEGER NOT NULL,
                exercise_id INTEGER NOT NULL,
                position INTEGER NOT NULL,
                sets INTEGER NOT NULL,
                reps TEXT NOT NULL,
                rest_seconds INTEGER NOT NULL DEFAULT 90,
                FOREIGN KEY (workout_id) REFERENCES user_workouts(id) ON DELETE CASCADE,
                FOREIGN KEY (exercise_id) REFERENCES exercises(id)
            )
        """)

        # Sets logged against a workout exercise
        await db.execute("""
            CREATE TABLE IF NOT EXISTS exercise_sets (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                workout_exercise_id INTEGER NOT NULL,
                set_number INTEGER NOT NULL,
                reps INTEGER NOT NULL,
                weight_lbs REAL,
                completed INTEGER NOT NULL DEFAULT 1,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                FOREIGN KEY (workout_exercise_id) REFERENCES workout_exercises(id) ON DELETE CASCADE
            )
        """)

        # Create indexes for common queries
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_user_workouts_user_date
            ON user_workouts(user_id, scheduled_date)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_workout_exercises_workout
            ON workout_exercises(workout_id)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_exercise_sets_workout_exercise
            ON exercise_sets(workout_exercise_id)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_exercise_sets_weight
            ON exercise_sets(weight_lbs)
        """)

        await db.commit()

    logger.info("database_initialized", db_path=str(db_path))


async def seed_exercises(db_path: Path | None = None) -> int:
    """Seed the database with the built-in exercise library.

    Returns the number of exercises newly inserted.
    """
    from ..models.exercises import COMMON_EXERCISES

    if db_path is None:
        db_path = get_db_path()

    inserted = 0
    async with aiosqlite.connect(db_path) as db:
        for exercise in COMMON_EXERCISES:
            cursor = await db.execute(
                """
                INSERT OR IGNORE INTO exercises
                (name, muscle_groups, equipment, movement_pattern, is_compound)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    exercise.name,
                    json.dumps([mg.value for mg in exercise.muscle_groups]),
                    json.dumps([eq.value for eq in exercise.equipment]),
                    exercise.movement_pattern.value,
                    int(exercise.is_compound),
                ),
            )
            inserted += cursor.rowcount

        await db.commit()

    logger.info("exercises_seeded", inserted=inserted)
    return inserted
