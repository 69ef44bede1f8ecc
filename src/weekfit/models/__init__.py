"""Data models for weekfit."""

from .exercises import EquipmentType, Exercise, MovementPattern, MuscleGroup
from .stats import PersonalRecord, RecentWorkout, WeeklyStatsSnapshot
from .user_profile import Preferences, UserProfile
from .workout import (
    ExerciseAssignment,
    ExerciseSet,
    GuidedWorkoutRequest,
    ScheduledWorkout,
    WorkoutDraft,
    WorkoutFlow,
    WorkoutLevel,
    WorkoutType,
)

__all__ = [
    "EquipmentType",
    "Exercise",
    "ExerciseAssignment",
    "ExerciseSet",
    "GuidedWorkoutRequest",
    "MovementPattern",
    "MuscleGroup",
    "PersonalRecord",
    "Preferences",
    "RecentWorkout",
    "ScheduledWorkout",
    "UserProfile",
    "WeeklyStatsSnapshot",
    "WorkoutDraft",
    "WorkoutFlow",
    "WorkoutLevel",
    "WorkoutType",
]
