"""Builds scheduled workouts from a finished wizard."""

from datetime import date, datetime, time, timedelta

import structlog

from ..db.repositories import ExerciseRepository, WorkoutRepository
from ..errors import ActionResult, BackendError
from ..models.exercises import Exercise
from ..models.workout import (
    SPLIT_ROTATIONS,
    WORKOUT_LEVEL_CONFIGS,
    ExerciseAssignment,
    GuidedWorkoutRequest,
    ScheduledWorkout,
    WorkoutType,
)
from ..session import UserSession

logger = structlog.get_logger(__name__)

# Default time of day for generated workouts
DEFAULT_WORKOUT_TIME = time(hour=9)


def select_exercises(
    library: list[Exercise],
    workout_type: WorkoutType,
    equipment: set[str] | frozenset[str],
    count: int,
) -> list[Exercise]:
    """Pick exercises for a workout focus.

    Compound movements come first, then isolation work. Targets are cycled so
    every muscle group of the focus gets a primary exercise before any gets a
    second one.
    """
    targets = workout_type.muscle_groups
    usable = [ex for ex in library if ex.usable_with(equipment)]

    # Primary muscle group (first listed) decides which target an exercise serves
    by_target: dict = {mg: [] for mg in targets}
    for exercise in sorted(usable, key=lambda ex: (not ex.is_compound, ex.name)):
        primary = exercise.muscle_groups[0]
        if primary in by_target:
            by_target[primary].append(exercise)

    selected: list[Exercise] = []
    while len(selected) < count and any(by_target.values()):
        for target in targets:
            if by_target[target] and len(selected) < count:
                selected.append(by_target[target].pop(0))

    return selected


def training_dates(start: date, days_per_week: int) -> list[date]:
    """Spread training days across the week starting at ``start``."""
    if days_per_week <= 1:
        return [start]
    # Leave rest days between sessions where the week allows it
    step = 7 / days_per_week
    return [start + timedelta(days=int(i * step)) for i in range(days_per_week)]


class WorkoutGenerator:
    """Turns a ``GuidedWorkoutRequest`` into persisted workouts."""

    def __init__(self, exercises: ExerciseRepository, workouts: WorkoutRepository):
        self.exercises = exercises
        self.workouts = workouts

    def plan(
        self,
        session: UserSession,
        request: GuidedWorkoutRequest,
        library: list[Exercise],
        start: date,
    ) -> list[ScheduledWorkout]:
        """Build (but do not store) the workouts for a request."""
        config = WORKOUT_LEVEL_CONFIGS[request.level]
        if request.workout_type is not None:
            rotation = [request.workout_type]
        else:
            rotation = SPLIT_ROTATIONS[request.days_per_week]

        planned = []
        for day, workout_type in zip(training_dates(start, len(rotation)), rotation):
            chosen = select_exercises(
                library, workout_type, set(request.equipment), config.exercises_per_workout
            )
            planned.append(
                ScheduledWorkout(
                    user_id=session.user_id,
                    name=f"{request.level.label} {workout_type.label}",
                    workout_type=workout_type,
                    level=request.level,
                    scheduled_date=datetime.combine(day, DEFAULT_WORKOUT_TIME),
                    exercises=[
                        ExerciseAssignment(
                            exercise_id=exercise.id,
                            exercise_name=exercise.name,
                            position=position,
                            sets=config.sets,
                            reps=config.reps,
                            rest_seconds=config.rest_seconds,
                        )
                        for position, exercise in enumerate(chosen, start=1)
                    ],
                )
            )
        return planned

    async def generate(
        self,
        session: UserSession,
        request: GuidedWorkoutRequest,
        start: date | None = None,
    ) -> ActionResult:
        """Plan and store workouts. The result value is the list of new workout ids."""
        start = start or date.today()
        try:
            library = await self.exercises.get_by_equipment(frozenset(request.equipment))
            planned = self.plan(session, request, library, start)
            if not any(w.exercises for w in planned):
                return ActionResult.failure(
                    "No exercises match the selected equipment", retryable=False
                )
            ids = await self.workouts.create_many(planned)
        except BackendError as e:
            logger.error("workout_generation_failed", user_id=session.user_id, error=str(e))
            return ActionResult.failure("Could not save the generated workouts. Please try again.")

        logger.info(
            "workouts_generated",
            user_id=session.user_id,
            count=len(ids),
            request=request.to_dict(),
        )
        return ActionResult.success(ids)
