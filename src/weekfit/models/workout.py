"""Workout data models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from .exercises import MuscleGroup


class WorkoutLevel(str, Enum):
    """Training level a workout is built for."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"

    @property
    def label(self) -> str:
        return self.value.capitalize()


@dataclass(frozen=True)
class LevelConfig:
    """Volume parameters for a workout level."""

    description: str
    sets: int
    reps: str
    rest_seconds: int
    exercises_per_workout: int


WORKOUT_LEVEL_CONFIGS: dict[WorkoutLevel, LevelConfig] = {
    WorkoutLevel.BEGINNER: LevelConfig(
        description="New to training or returning after a long break",
        sets=3,
        reps="10-12",
        rest_seconds=90,
        exercises_per_workout=4,
    ),
    WorkoutLevel.INTERMEDIATE: LevelConfig(
        description="Training consistently for six months or more",
        sets=4,
        reps="8-10",
        rest_seconds=75,
        exercises_per_workout=5,
    ),
    WorkoutLevel.ADVANCED: LevelConfig(
        description="Years of structured training and good technique",
        sets=5,
        reps="6-8",
        rest_seconds=120,
        exercises_per_workout=6,
    ),
}


class WorkoutType(str, Enum):
    """Single-day workout focus."""

    PUSH = "push"
    PULL = "pull"
    LEGS = "legs"
    UPPER = "upper"
    LOWER = "lower"

    @property
    def label(self) -> str:
        return WORKOUT_TYPE_INFO[self][0]

    @property
    def description(self) -> str:
        return WORKOUT_TYPE_INFO[self][1]

    @property
    def muscle_groups(self) -> list[MuscleGroup]:
        return WORKOUT_TYPE_INFO[self][2]


WORKOUT_TYPE_INFO: dict[WorkoutType, tuple[str, str, list[MuscleGroup]]] = {
    WorkoutType.PUSH: (
        "Push Day",
        "Chest, shoulders, and triceps focused workout",
        [MuscleGroup.CHEST, MuscleGroup.SHOULDERS, MuscleGroup.TRICEPS],
    ),
    WorkoutType.PULL: (
        "Pull Day",
        "Back and biceps focused workout",
        [MuscleGroup.BACK, MuscleGroup.LATS, MuscleGroup.BICEPS],
    ),
    WorkoutType.LEGS: (
        "Legs Day",
        "Lower body focused workout",
        [MuscleGroup.QUADS, MuscleGroup.HAMSTRINGS, MuscleGroup.GLUTES, MuscleGroup.CALVES],
    ),
    WorkoutType.UPPER: (
        "Upper Body",
        "Complete upper body workout targeting all major muscle groups",
        [
            MuscleGroup.CHEST,
            MuscleGroup.BACK,
            MuscleGroup.SHOULDERS,
            MuscleGroup.LATS,
            MuscleGroup.BICEPS,
            MuscleGroup.TRICEPS,
        ],
    ),
    WorkoutType.LOWER: (
        "Lower Body",
        "Complete lower body workout targeting legs, glutes, and core",
        [
            MuscleGroup.QUADS,
            MuscleGroup.HAMSTRINGS,
            MuscleGroup.GLUTES,
            MuscleGroup.CALVES,
            MuscleGroup.ABS,
        ],
    ),
}

# Day rotations for multi-day splits, keyed by days per week
SPLIT_ROTATIONS: dict[int, list[WorkoutType]] = {
    3: [WorkoutType.PUSH, WorkoutType.PULL, WorkoutType.LEGS],
    4: [WorkoutType.UPPER, WorkoutType.LOWER, WorkoutType.UPPER, WorkoutType.LOWER],
    5: [
        WorkoutType.PUSH,
        WorkoutType.PULL,
        WorkoutType.LEGS,
        WorkoutType.UPPER,
        WorkoutType.LOWER,
    ],
}

SPLIT_DESCRIPTIONS: dict[int, str] = {
    3: "Great for beginners or those with limited time",
    4: "Balanced approach for most fitness goals",
    5: "Ideal for dedicated training and faster progress",
}


class WorkoutFlow(str, Enum):
    """Whether the wizard builds one workout or a weekly split."""

    SINGLE = "single"
    MULTI = "multi"


@dataclass(frozen=True)
class WorkoutDraft:
    """In-progress workout choices assembled by the guided wizard."""

    workout_type: WorkoutType | None = None
    days_per_week: int | None = None
    level: WorkoutLevel | None = None
    equipment: frozenset[str] = frozenset()

    def is_submittable(self) -> bool:
        return (
            self.level is not None
            and len(self.equipment) > 0
            and (self.days_per_week is not None or self.workout_type is not None)
        )


@dataclass(frozen=True)
class GuidedWorkoutRequest:
    """Validated wizard output handed to the workout generator."""

    level: WorkoutLevel
    equipment: tuple[str, ...]
    days_per_week: int
    workout_type: WorkoutType | None = None

    def to_dict(self) -> dict:
        return {
            "level": self.level.value,
            "equipment": list(self.equipment),
            "days_per_week": self.days_per_week,
            "workout_type": self.workout_type.value if self.workout_type else None,
        }


@dataclass
class ExerciseSet:
    """A logged set of an exercise."""

    set_number: int
    reps: int
    weight_lbs: float | None = None
    completed: bool = True
    created_at: datetime | None = None
    id: int | None = None


@dataclass
class ExerciseAssignment:
    """An exercise prescribed within a scheduled workout."""

    exercise_id: int
    exercise_name: str
    position: int
    sets: int
    reps: str
    rest_seconds: int = 90
    logged_sets: list[ExerciseSet] = field(default_factory=list)
    id: int | None = None

    @property
    def best_weight(self) -> float | None:
        weights = [s.weight_lbs for s in self.logged_sets if s.weight_lbs]
        return max(weights) if weights else None


@dataclass
class ScheduledWorkout:
    """A persisted workout bound to a calendar date."""

    user_id: str
    name: str
    scheduled_date: datetime
    custom_name: str | None = None
    workout_type: WorkoutType | None = None
    level: WorkoutLevel | None = None
    completed: bool = False
    is_favorite: bool = False
    exercises: list[ExerciseAssignment] = field(default_factory=list)
    id: int | None = None
    created_at: datetime | None = None

    @property
    def display_name(self) -> str:
        return self.custom_name or self.name

    @property
    def exercise_count(self) -> int:
        return len(self.exercises)

    def to_dict(self) -> dict:
        """Convert to a JSON-friendly dictionary."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "name": self.name,
            "custom_name": self.custom_name,
            "workout_type": self.workout_type.value if self.workout_type else None,
            "level": self.level.value if self.level else None,
            "scheduled_date": self.scheduled_date.isoformat(),
            "completed": self.completed,
            "is_favorite": self.is_favorite,
            "exercises": [
                {
                    "id": ex.id,
                    "exercise_id": ex.exercise_id,
                    "name": ex.exercise_name,
                    "position": ex.position,
                    "sets": ex.sets,
                    "reps": ex.reps,
                    "rest_seconds": ex.rest_seconds,
                    "logged_sets": [
                        {"set_number": s.set_number, "reps": s.reps, "weight_lbs": s.weight_lbs}
                        for s in ex.logged_sets
                    ],
                }
                for ex in self.exercises
            ],
        }
