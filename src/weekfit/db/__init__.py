"""Database layer for weekfit."""

from dataclasses import dataclass

from ..config import Settings
from .engine import connect, get_db_path, init_db, seed_exercises
from .repositories import ExerciseRepository, ProfileRepository, WorkoutRepository
from .storage import AvatarStorage


@dataclass
class Backend:
    """Every data-store collaborator the UI layer talks to."""

    profiles: ProfileRepository
    workouts: WorkoutRepository
    exercises: ExerciseRepository
    avatars: AvatarStorage

    @classmethod
    def from_settings(cls, settings: Settings) -> "Backend":
        settings.data_dir.mkdir(parents=True, exist_ok=True)
        db_path = settings.db_path
        return cls(
            profiles=ProfileRepository(db_path),
            workouts=WorkoutRepository(db_path),
            exercises=ExerciseRepository(db_path),
            avatars=AvatarStorage(settings.avatar_path, settings.avatar_url_prefix),
        )


__all__ = [
    "AvatarStorage",
    "Backend",
    "connect",
    "ExerciseRepository",
    "get_db_path",
    "init_db",
    "ProfileRepository",
    "seed_exercises",
    "WorkoutRepository",
]
