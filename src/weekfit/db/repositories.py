"""Data access layer for weekfit."""

import json
from datetime import datetime
from pathlib import Path

import aiosqlite

from ..errors import RecordNotFoundError
from ..models.exercises import EquipmentType, Exercise, MovementPattern, MuscleGroup
from ..models.stats import PersonalRecord
from ..models.user_profile import Preferences, UserProfile
from ..models.workout import (
    ExerciseAssignment,
    ExerciseSet,
    ScheduledWorkout,
    WorkoutLevel,
    WorkoutType,
)
from ..utils.dates import parse_timestamp
from .engine import connect, get_db_path

# Columns the profile editor may write
PROFILE_FIELDS = (
    "first_name",
    "last_name",
    "date_of_birth",
    "height_inches",
    "weight_lbs",
    "default_level",
    "default_equipment",
    "avatar_url",
)


def to_storage_timestamp(value: datetime) -> str:
    """Serialize a timestamp as naive local ISO text so range queries compare correctly."""
    if value.tzinfo is not None:
        value = value.astimezone().replace(tzinfo=None)
    return value.isoformat()


def _parse_optional(value: str | None) -> datetime | None:
    return parse_timestamp(value) if value else None


class ProfileRepository:
    """Repository for user profiles."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, profile: UserProfile) -> None:
        """Create a profile row for a user."""
        data = profile.to_dict()
        async with connect(self.db_path) as db:
            await db.execute(
                """
                INSERT INTO profiles
                (id, first_name, last_name, date_of_birth, height_inches, weight_lbs,
                 default_level, default_equipment, avatar_url)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    profile.id,
                    data["first_name"],
                    data["last_name"],
                    data["date_of_birth"],
                    data["height_inches"],
                    data["weight_lbs"],
                    data["default_level"],
                    json.dumps(data["default_equipment"]),
                    data["avatar_url"],
                ),
            )
            await db.commit()

    async def ensure(self, user_id: str) -> UserProfile:
        """Return the user's profile, creating an empty one if needed."""
        profile = await self.get(user_id)
        if profile is None:
            await self.create(UserProfile(id=user_id))
            profile = await self.get(user_id)
        return profile

    async def get(self, user_id: str) -> UserProfile | None:
        """Get a profile by user id."""
        async with connect(self.db_path) as db:
            cursor = await db.execute("SELECT * FROM profiles WHERE id = ?", (user_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_profile(row)

    async def get_preferences(self, user_id: str) -> Preferences:
        """Load only the saved workout defaults."""
        return Preferences.from_profile(await self.get(user_id))

    async def update(self, user_id: str, fields: dict) -> UserProfile:
        """Write the given profile fields in a single UPDATE."""
        unknown = set(fields) - set(PROFILE_FIELDS)
        if unknown:
            raise ValueError(f"Unknown profile fields: {', '.join(sorted(unknown))}")
        if not fields:
            raise ValueError("No profile fields to update")

        values = dict(fields)
        if "default_equipment" in values:
            values["default_equipment"] = json.dumps(list(values["default_equipment"] or []))
        if isinstance(values.get("default_level"), WorkoutLevel):
            values["default_level"] = values["default_level"].value
        if values.get("date_of_birth") is not None and not isinstance(values["date_of_birth"], str):
            values["date_of_birth"] = values["date_of_birth"].isoformat()

        assignments = ", ".join(f"{name} = ?" for name in values)
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                f"""
                UPDATE profiles SET {assignments}, updated_at = CURRENT_TIMESTAMP
                WHERE id = ?
                """,
                (*values.values(), user_id),
            )
            await db.commit()
            if cursor.rowcount == 0:
                raise RecordNotFoundError("profiles", user_id)

        return await self.get(user_id)

    def _row_to_profile(self, row: aiosqlite.Row) -> UserProfile:
        """Convert a database row to a UserProfile."""
        data = {field: row[field] for field in PROFILE_FIELDS}
        data["default_equipment"] = json.loads(row["default_equipment"] or "[]")
        return UserProfile.from_dict(
            data,
            id=row["id"],
            created_at=_parse_optional(row["created_at"]),
            updated_at=_parse_optional(row["updated_at"]),
        )


class ExerciseRepository:
    """Repository for the exercise library."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def list_all(self) -> list[Exercise]:
        """List all exercises."""
        async with connect(self.db_path) as db:
            cursor = await db.execute("SELECT * FROM exercises ORDER BY name")
            rows = await cursor.fetchall()
            return [self._row_to_exercise(row) for row in rows]

    async def get_by_equipment(self, equipment: set[str] | frozenset[str]) -> list[Exercise]:
        """Get exercises that can be performed with the given equipment."""
        all_exercises = await self.list_all()
        return [ex for ex in all_exercises if ex.usable_with(equipment)]

    async def distinct_equipment(self) -> list[str]:
        """Every equipment value referenced by the library, sorted."""
        async with connect(self.db_path) as db:
            cursor = await db.execute("SELECT equipment FROM exercises")
            rows = await cursor.fetchall()
        found: set[str] = set()
        for row in rows:
            found.update(json.loads(row["equipment"]))
        return sorted(found)

    def _row_to_exercise(self, row: aiosqlite.Row) -> Exercise:
        """Convert a database row to an Exercise."""
        return Exercise(
            id=row["id"],
            name=row["name"],
            muscle_groups=[MuscleGroup(mg) for mg in json.loads(row["muscle_groups"])],
            equipment=[EquipmentType(eq) for eq in json.loads(row["equipment"])],
            movement_pattern=MovementPattern(row["movement_pattern"]),
            is_compound=bool(row["is_compound"]),
        )


class WorkoutRepository:
    """Repository for scheduled workouts and their nested exercises and sets."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, workout: ScheduledWorkout) -> int:
        """Insert a workout with its exercises and any logged sets."""
        async with connect(self.db_path) as db:
            workout_id = await self._insert(db, workout)
            await db.commit()
            return workout_id

    async def create_many(self, workouts: list[ScheduledWorkout]) -> list[int]:
        """Insert several workouts in one transaction."""
        async with connect(self.db_path) as db:
            ids = [await self._insert(db, workout) for workout in workouts]
            await db.commit()
            return ids

    async def get(self, user_id: str, workout_id: int) -> ScheduledWorkout | None:
        """Get a workout by ID, with exercises and sets."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT * FROM user_workouts WHERE id = ? AND user_id = ?",
                (workout_id, user_id),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            workouts = await self._load_nested(db, [row])
            return workouts[0]

    async def list_between(
        self,
        user_id: str,
        start: datetime,
        end: datetime,
        newest_first: bool = False,
    ) -> list[ScheduledWorkout]:
        """List a user's workouts scheduled within ``[start, end]``."""
        order = "DESC" if newest_first else "ASC"
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                f"""
                SELECT * FROM user_workouts
                WHERE user_id = ? AND scheduled_date >= ? AND scheduled_date <= ?
                ORDER BY scheduled_date {order}, id {order}
                """,
                (user_id, to_storage_timestamp(start), to_storage_timestamp(end)),
            )
            rows = await cursor.fetchall()
            return await self._load_nested(db, rows)

    async def list_favorites(self, user_id: str) -> list[ScheduledWorkout]:
        """List a user's favorite workouts, most recently scheduled first."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                """
                SELECT * FROM user_workouts
                WHERE user_id = ? AND is_favorite = 1
                ORDER BY scheduled_date DESC
                """,
                (user_id,),
            )
            rows = await cursor.fetchall()
            return await self._load_nested(db, rows)

    async def update_fields(self, user_id: str, workout_id: int, **fields) -> None:
        """Update columns of one workout by primary key."""
        allowed = {"custom_name", "completed", "is_favorite", "scheduled_date"}
        unknown = set(fields) - allowed
        if unknown:
            raise ValueError(f"Unknown workout fields: {', '.join(sorted(unknown))}")

        values = dict(fields)
        for flag in ("completed", "is_favorite"):
            if flag in values:
                values[flag] = int(bool(values[flag]))
        if isinstance(values.get("scheduled_date"), datetime):
            values["scheduled_date"] = to_storage_timestamp(values["scheduled_date"])

        assignments = ", ".join(f"{name} = ?" for name in values)
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                f"UPDATE user_workouts SET {assignments} WHERE id = ? AND user_id = ?",
                (*values.values(), workout_id, user_id),
            )
            await db.commit()
            if cursor.rowcount == 0:
                raise RecordNotFoundError("user_workouts", workout_id)

    async def rename(self, user_id: str, workout_id: int, name: str) -> None:
        await self.update_fields(user_id, workout_id, custom_name=name.strip() or None)

    async def set_favorite(self, user_id: str, workout_id: int, is_favorite: bool) -> None:
        await self.update_fields(user_id, workout_id, is_favorite=is_favorite)

    async def set_completed(self, user_id: str, workout_id: int, completed: bool) -> None:
        await self.update_fields(user_id, workout_id, completed=completed)

    async def delete(self, user_id: str, workout_id: int) -> None:
        """Delete a workout; its exercises and sets cascade."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "DELETE FROM user_workouts WHERE id = ? AND user_id = ?",
                (workout_id, user_id),
            )
            await db.commit()
            if cursor.rowcount == 0:
                raise RecordNotFoundError("user_workouts", workout_id)

    async def add_set(
        self,
        user_id: str,
        workout_exercise_id: int,
        reps: int,
        weight_lbs: float | None = None,
    ) -> int:
        """Log a set against one of the user's workout exercises."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                """
                SELECT we.id, COUNT(es.id) AS logged
                FROM workout_exercises we
                JOIN user_workouts w ON w.id = we.workout_id
                LEFT JOIN exercise_sets es ON es.workout_exercise_id = we.id
                WHERE we.id = ? AND w.user_id = ?
                GROUP BY we.id
                """,
                (workout_exercise_id, user_id),
            )
            row = await cursor.fetchone()
            if row is None:
                raise RecordNotFoundError("workout_exercises", workout_exercise_id)

            cursor = await db.execute(
                """
                INSERT INTO exercise_sets (workout_exercise_id, set_number, reps, weight_lbs)
                VALUES (?, ?, ?, ?)
                """,
                (workout_exercise_id, row["logged"] + 1, reps, weight_lbs),
            )
            await db.commit()
            return cursor.lastrowid

    async def personal_records(self, user_id: str, limit: int = 5) -> list[PersonalRecord]:
        """Heaviest logged set per exercise, heaviest first."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                """
                SELECT e.name AS exercise, MAX(es.weight_lbs) AS weight_lbs,
                       MIN(es.created_at) AS achieved_at
                FROM exercise_sets es
                JOIN workout_exercises we ON we.id = es.workout_exercise_id
                JOIN user_workouts w ON w.id = we.workout_id
                JOIN exercises e ON e.id = we.exercise_id
                WHERE w.user_id = ? AND es.weight_lbs IS NOT NULL AND es.weight_lbs > 0
                  AND es.weight_lbs = (
                      SELECT MAX(es2.weight_lbs)
                      FROM exercise_sets es2
                      JOIN workout_exercises we2 ON we2.id = es2.workout_exercise_id
                      JOIN user_workouts w2 ON w2.id = we2.workout_id
                      WHERE w2.user_id = w.user_id AND we2.exercise_id = we.exercise_id
                  )
                GROUP BY e.id
                ORDER BY weight_lbs DESC, e.name
                LIMIT ?
                """,
                (user_id, limit),
            )
            rows = await cursor.fetchall()
            return [
                PersonalRecord(
                    exercise=row["exercise"],
                    weight_lbs=row["weight_lbs"],
                    achieved_at=_parse_optional(row["achieved_at"]),
                )
                for row in rows
            ]

    async def _insert(self, db: aiosqlite.Connection, workout: ScheduledWorkout) -> int:
        cursor = await db.execute(
            """
            INSERT INTO user_workouts
            (user_id, name, custom_name, workout_type, level, scheduled_date,
             completed, is_favorite)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                workout.user_id,
                workout.name,
                workout.custom_name,
                workout.workout_type.value if workout.workout_type else None,
                workout.level.value if workout.level else None,
                to_storage_timestamp(workout.scheduled_date),
                int(workout.completed),
                int(workout.is_favorite),
            ),
        )
        workout_id = cursor.lastrowid

        for assignment in workout.exercises:
            cursor = await db.execute(
                """
                INSERT INTO workout_exercises
                (workout_id, exercise_id, position, sets, reps, rest_seconds)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    workout_id,
                    assignment.exercise_id,
                    assignment.position,
                    assignment.sets,
                    assignment.reps,
                    assignment.rest_seconds,
                ),
            )
            assignment_id = cursor.lastrowid
            for logged in assignment.logged_sets:
                await db.execute(
                    """
                    INSERT INTO exercise_sets
                    (workout_exercise_id, set_number, reps, weight_lbs, completed)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    (
                        assignment_id,
                        logged.set_number,
                        logged.reps,
                        logged.weight_lbs,
                        int(logged.completed),
                    ),
                )

        return workout_id

    async def _load_nested(
        self, db: aiosqlite.Connection, rows: list[aiosqlite.Row]
    ) -> list[ScheduledWorkout]:
        """Attach exercises and their sets to workout rows."""
        workouts = [self._row_to_workout(row) for row in rows]
        if not workouts:
            return workouts

        by_id = {w.id: w for w in workouts}
        placeholders = ", ".join("?" for _ in by_id)
        cursor = await db.execute(
            f"""
            SELECT we.*, e.name AS exercise_name
            FROM workout_exercises we
            JOIN exercises e ON e.id = we.exercise_id
            WHERE we.workout_id IN ({placeholders})
            ORDER BY we.workout_id, we.position
            """,
            tuple(by_id),
        )
        assignments: dict[int, ExerciseAssignment] = {}
        for row in await cursor.fetchall():
            assignment = ExerciseAssignment(
                id=row["id"],
                exercise_id=row["exercise_id"],
                exercise_name=row["exercise_name"],
                position=row["position"],
                sets=row["sets"],
                reps=row["reps"],
                rest_seconds=row["rest_seconds"],
            )
            assignments[assignment.id] = assignment
            by_id[row["workout_id"]].exercises.append(assignment)

        if assignments:
            placeholders = ", ".join("?" for _ in assignments)
            cursor = await db.execute(
                f"""
                SELECT * FROM exercise_sets
                WHERE workout_exercise_id IN ({placeholders})
                ORDER BY workout_exercise_id, set_number
                """,
                tuple(assignments),
            )
            for row in await cursor.fetchall():
                assignments[row["workout_exercise_id"]].logged_sets.append(
                    ExerciseSet(
                        id=row["id"],
                        set_number=row["set_number"],
                        reps=row["reps"],
                        weight_lbs=row["weight_lbs"],
                        completed=bool(row["completed"]),
                        created_at=_parse_optional(row["created_at"]),
                    )
                )

        return workouts

    def _row_to_workout(self, row: aiosqlite.Row) -> ScheduledWorkout:
        """Convert a database row to a ScheduledWorkout (without exercises)."""
        return ScheduledWorkout(
            id=row["id"],
            user_id=row["user_id"],
            name=row["name"],
            custom_name=row["custom_name"],
            workout_type=WorkoutType(row["workout_type"]) if row["workout_type"] else None,
            level=WorkoutLevel(row["level"]) if row["level"] else None,
            scheduled_date=parse_timestamp(row["scheduled_date"]),
            completed=bool(row["completed"]),
            is_favorite=bool(row["is_favorite"]),
            created_at=_parse_optional(row["created_at"]),
        )
