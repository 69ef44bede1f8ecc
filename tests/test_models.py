"""Tests for data models."""

from datetime import date, datetime

import pytest

from weekfit.models.exercises import (
    COMMON_EXERCISES,
    EquipmentType,
    Exercise,
    MovementPattern,
    MuscleGroup,
)
from weekfit.models.stats import PersonalRecord, RecentWorkout, WeeklyStatsSnapshot
from weekfit.models.user_profile import Preferences, UserProfile
from weekfit.models.workout import (
    SPLIT_ROTATIONS,
    WORKOUT_LEVEL_CONFIGS,
    ExerciseAssignment,
    ExerciseSet,
    GuidedWorkoutRequest,
    ScheduledWorkout,
    WorkoutDraft,
    WorkoutLevel,
    WorkoutType,
)


class TestExercise:
    """Tests for Exercise model."""

    def test_exercise_to_dict(self):
        """Test exercise serialization."""
        exercise = Exercise(
            name="Bench Press, Barbell",
            muscle_groups=[MuscleGroup.CHEST, MuscleGroup.TRICEPS],
            movement_pattern=MovementPattern.PUSH_HORIZONTAL,
            equipment=[EquipmentType.BARBELL],
            is_compound=True,
        )
        data = exercise.to_dict()

        assert data["name"] == "Bench Press, Barbell"
        assert data["muscle_groups"] == ["chest", "triceps"]
        assert data["movement_pattern"] == "push_horizontal"
        assert data["equipment"] == ["barbell"]
        assert data["is_compound"] is True

    def test_exercise_from_dict(self):
        """Test exercise deserialization."""
        data = {
            "name": "Goblet Squat, Kettlebell",
            "muscle_groups": ["quads", "glutes"],
            "movement_pattern": "squat",
            "equipment": ["kettlebell", "dumbbell"],
        }
        exercise = Exercise.from_dict(data, id=7)

        assert exercise.id == 7
        assert MuscleGroup.QUADS in exercise.muscle_groups
        assert exercise.movement_pattern == MovementPattern.SQUAT
        assert exercise.usable_with({"dumbbell"})
        assert not exercise.usable_with({"barbell"})

    def test_common_exercises_unique_names(self):
        names = [e.name for e in COMMON_EXERCISES]
        assert len(names) == len(set(names))

    def test_every_workout_type_has_exercises(self):
        """Test that each focus can be filled from the library."""
        for workout_type in WorkoutType:
            primaries = {e.muscle_groups[0] for e in COMMON_EXERCISES}
            assert primaries & set(workout_type.muscle_groups)


class TestWorkoutModels:
    """Tests for workout models."""

    def test_level_configs_cover_all_levels(self):
        assert set(WORKOUT_LEVEL_CONFIGS) == set(WorkoutLevel)
        assert WORKOUT_LEVEL_CONFIGS[WorkoutLevel.BEGINNER].sets == 3

    def test_split_rotations_match_days(self):
        for days, rotation in SPLIT_ROTATIONS.items():
            assert len(rotation) == days

    def test_draft_defaults_not_submittable(self):
        assert not WorkoutDraft().is_submittable()

    def test_draft_submittable(self):
        draft = WorkoutDraft(
            workout_type=WorkoutType.PUSH,
            days_per_week=1,
            level=WorkoutLevel.BEGINNER,
            equipment=frozenset({"barbell"}),
        )
        assert draft.is_submittable()

    def test_request_to_dict(self):
        request = GuidedWorkoutRequest(
            level=WorkoutLevel.ADVANCED,
            equipment=("barbell",),
            days_per_week=4,
        )
        assert request.to_dict() == {
            "level": "advanced",
            "equipment": ["barbell"],
            "days_per_week": 4,
            "workout_type": None,
        }

    def test_display_name_prefers_custom(self):
        workout = ScheduledWorkout(user_id="u", name="Push Day", scheduled_date=datetime(2024, 3, 14))
        assert workout.display_name == "Push Day"
        workout.custom_name = "Chest day"
        assert workout.display_name == "Chest day"

    def test_workout_to_dict(self):
        workout = ScheduledWorkout(
            id=3,
            user_id="u",
            name="Push Day",
            scheduled_date=datetime(2024, 3, 14, 9),
            workout_type=WorkoutType.PUSH,
            exercises=[
                ExerciseAssignment(
                    exercise_id=1,
                    exercise_name="Bench Press, Barbell",
                    position=1,
                    sets=3,
                    reps="10-12",
                    logged_sets=[ExerciseSet(set_number=1, reps=10, weight_lbs=95)],
                )
            ],
        )
        data = workout.to_dict()

        assert data["scheduled_date"] == "2024-03-14T09:00:00"
        assert data["workout_type"] == "push"
        assert data["exercises"][0]["logged_sets"][0]["weight_lbs"] == 95

    def test_best_weight(self):
        assignment = ExerciseAssignment(
            exercise_id=1,
            exercise_name="Squat, Barbell",
            position=1,
            sets=3,
            reps="5",
            logged_sets=[
                ExerciseSet(set_number=1, reps=5, weight_lbs=185),
                ExerciseSet(set_number=2, reps=5, weight_lbs=205),
                ExerciseSet(set_number=3, reps=12, weight_lbs=None),
            ],
        )
        assert assignment.best_weight == 205


class TestUserProfile:
    """Tests for UserProfile model."""

    def test_profile_round_trip(self):
        profile = UserProfile(
            id="u1",
            first_name="Ada",
            last_name="Lovelace",
            date_of_birth=date(1990, 12, 10),
            default_level=WorkoutLevel.INTERMEDIATE,
            default_equipment=["barbell"],
        )
        restored = UserProfile.from_dict(profile.to_dict(), id="u1")

        assert restored.full_name == "Ada Lovelace"
        assert restored.date_of_birth == date(1990, 12, 10)
        assert restored.default_level == WorkoutLevel.INTERMEDIATE

    @pytest.mark.parametrize(
        "profile,expected",
        [
            (None, Preferences()),
            (UserProfile(id="u"), Preferences()),
            (
                UserProfile(id="u", default_level=WorkoutLevel.BEGINNER, default_equipment=["bands"]),
                Preferences(level=WorkoutLevel.BEGINNER, equipment=frozenset({"bands"})),
            ),
        ],
    )
    def test_preferences_from_profile(self, profile, expected):
        assert Preferences.from_profile(profile) == expected


class TestStatsSnapshot:
    def test_to_dict(self):
        snapshot = WeeklyStatsSnapshot(
            total_workouts=3,
            completed_workouts=2,
            personal_records=[PersonalRecord("Squat, Barbell", 225.0)],
            recent_workouts=[RecentWorkout(1, "Legs", True, datetime(2024, 3, 14, 9))],
        )
        data = snapshot.to_dict()

        assert data["completion_rate"] == 67
        assert data["personal_records"][0]["achieved_at"] is None
        assert data["recent_workouts"][0]["scheduled_date"] == "2024-03-14T09:00:00"
