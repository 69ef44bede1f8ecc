"""Weekly calendar and list views over scheduled workouts."""

from dataclasses import dataclass, field, replace
from datetime import date, datetime, timedelta

import structlog

from ..db.repositories import WorkoutRepository
from ..errors import ActionResult, BackendError, RecordNotFoundError
from ..models.workout import ScheduledWorkout
from ..session import UserSession
from ..utils.dates import calendar_day, start_of_week, week_dates, week_range

logger = structlog.get_logger(__name__)


@dataclass
class CalendarDay:
    """One column of the weekly calendar."""

    date: date
    workouts: list[ScheduledWorkout] = field(default_factory=list)

    def is_today(self, today: date | None = None) -> bool:
        return self.date == (today or date.today())


def bucket_by_day(workouts: list[ScheduledWorkout], week_start: date) -> list[CalendarDay]:
    """Group workouts into the seven days of the week by calendar date."""
    days = [CalendarDay(date=d) for d in week_dates(week_start)]
    index = {day.date: day for day in days}
    for workout in workouts:
        day = index.get(calendar_day(workout.scheduled_date))
        if day is not None:
            day.workouts.append(workout)
    return days


def workouts_in_week(workouts: list[ScheduledWorkout], week_start: date) -> list[ScheduledWorkout]:
    """Workouts falling on any day of the week beginning at ``week_start``."""
    first, last = week_range(week_start)
    return [w for w in workouts if first.date() <= calendar_day(w.scheduled_date) <= last.date()]


def favorite_workouts(workouts: list[ScheduledWorkout]) -> list[ScheduledWorkout]:
    return [w for w in workouts if w.is_favorite]


def previous_week(week_start: date) -> date:
    return week_start - timedelta(days=7)


def next_week(week_start: date) -> date:
    return week_start + timedelta(days=7)


def current_week_start(today: date | None = None) -> date:
    return start_of_week(today or date.today())


def _copy_for_date(workout: ScheduledWorkout, new_date: datetime) -> ScheduledWorkout:
    """A fresh, uncompleted copy of a workout with its prescribed exercises."""
    return replace(
        workout,
        id=None,
        created_at=None,
        scheduled_date=new_date,
        completed=False,
        is_favorite=False,
        exercises=[replace(ex, id=None, logged_sets=[]) for ex in workout.exercises],
    )


class WorkoutCalendar:
    """Reads a week of workouts and performs the per-workout actions.

    Every action is a single backend mutation and returns an ``ActionResult``
    so the page can show failures and offer a retry.
    """

    def __init__(self, session: UserSession, workouts: WorkoutRepository):
        self.session = session
        self.workouts = workouts

    async def load_week(self, week_start: date) -> list[ScheduledWorkout]:
        first, last = week_range(week_start)
        try:
            return await self.workouts.list_between(self.session.user_id, first, last)
        except BackendError as e:
            logger.warning(
                "calendar_load_failed",
                user_id=self.session.user_id,
                week_start=week_start.isoformat(),
                error=str(e),
            )
            return []

    async def load_days(self, week_start: date) -> list[CalendarDay]:
        return bucket_by_day(await self.load_week(week_start), week_start)

    async def load_favorites(self) -> list[ScheduledWorkout]:
        try:
            return await self.workouts.list_favorites(self.session.user_id)
        except BackendError as e:
            logger.warning("favorites_load_failed", user_id=self.session.user_id, error=str(e))
            return []

    async def get(self, workout_id: int) -> ScheduledWorkout | None:
        try:
            return await self.workouts.get(self.session.user_id, workout_id)
        except BackendError as e:
            logger.warning(
                "workout_load_failed",
                user_id=self.session.user_id,
                workout_id=workout_id,
                error=str(e),
            )
            return None

    async def delete(self, workout_id: int) -> ActionResult:
        return await self._mutate(
            "delete", workout_id, self.workouts.delete(self.session.user_id, workout_id)
        )

    async def rename(self, workout_id: int, name: str) -> ActionResult:
        if not name.strip():
            return ActionResult.failure("Name cannot be empty", retryable=False)
        return await self._mutate(
            "rename", workout_id, self.workouts.rename(self.session.user_id, workout_id, name)
        )

    async def toggle_favorite(self, workout: ScheduledWorkout) -> ActionResult:
        result = await self._mutate(
            "toggle_favorite",
            workout.id,
            self.workouts.set_favorite(self.session.user_id, workout.id, not workout.is_favorite),
        )
        if result.ok:
            result.value = not workout.is_favorite
        return result

    async def set_completed(self, workout_id: int, completed: bool) -> ActionResult:
        return await self._mutate(
            "set_completed",
            workout_id,
            self.workouts.set_completed(self.session.user_id, workout_id, completed),
        )

    async def log_set(
        self, workout_exercise_id: int, reps: int, weight_lbs: float | None
    ) -> ActionResult:
        if reps <= 0:
            return ActionResult.failure("Reps must be a positive number", retryable=False)
        if weight_lbs is not None and weight_lbs < 0:
            return ActionResult.failure("Weight cannot be negative", retryable=False)
        return await self._mutate(
            "log_set",
            workout_exercise_id,
            self.workouts.add_set(self.session.user_id, workout_exercise_id, reps, weight_lbs),
        )

    async def copy_week(self, week_start: date) -> ActionResult:
        """Copy every workout of a week to the same weekday of the following week."""
        first, last = week_range(week_start)
        try:
            workouts = await self.workouts.list_between(self.session.user_id, first, last)
        except BackendError as e:
            logger.error(
                "copy_week_failed",
                user_id=self.session.user_id,
                target=week_start.isoformat(),
                error=str(e),
            )
            return ActionResult.failure("Could not copy week. Please try again.")
        if not workouts:
            return ActionResult.failure("There are no workouts to copy this week", retryable=False)

        copies = [
            _copy_for_date(w, w.scheduled_date + timedelta(days=7)) for w in workouts
        ]
        return await self._mutate(
            "copy_week", week_start.isoformat(), self.workouts.create_many(copies)
        )

    async def add_to_week(self, workout: ScheduledWorkout, on: date) -> ActionResult:
        """Schedule a copy of a (typically favorite) workout on another day."""
        when = datetime.combine(on, workout.scheduled_date.time())
        return await self._mutate(
            "add_to_week", workout.id, self.workouts.create(_copy_for_date(workout, when))
        )

    async def _mutate(self, action: str, target, operation) -> ActionResult:
        try:
            value = await operation
        except RecordNotFoundError as e:
            logger.warning(action + "_target_missing", user_id=self.session.user_id, target=target)
            return ActionResult.failure(str(e), retryable=False)
        except BackendError as e:
            logger.error(
                action + "_failed", user_id=self.session.user_id, target=target, error=str(e)
            )
            return ActionResult.failure(f"Could not {action.replace('_', ' ')}. Please try again.")
        logger.info(action, user_id=self.session.user_id, target=target)
        return ActionResult.success(value)


class RenameEditor:
    """Inline rename for one workout at a time.

    ``begin`` enters edit mode prefilled with the current display name,
    ``cancel`` leaves it without saving (the blur behaviour), and ``submit``
    commits. A failed commit keeps the editor open with the error so the user
    can retry.
    """

    def __init__(self, calendar: WorkoutCalendar):
        self.calendar = calendar
        self.editing_id: int | None = None
        self.new_name = ""
        self.error: str | None = None

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None

    def begin(self, workout: ScheduledWorkout) -> None:
        self.editing_id = workout.id
        self.new_name = workout.display_name
        self.error = None

    def cancel(self) -> None:
        self.editing_id = None
        self.new_name = ""
        self.error = None

    async def submit(self, name: str | None = None) -> ActionResult:
        if self.editing_id is None:
            return ActionResult.failure("Nothing is being renamed", retryable=False)
        if name is not None:
            self.new_name = name

        result = await self.calendar.rename(self.editing_id, self.new_name)
        if result.ok:
            self.cancel()
        else:
            self.error = result.error
        return result
