"""Dashboard statistics."""

from datetime import date, datetime, time, timedelta

import structlog

from ..db.repositories import WorkoutRepository
from ..errors import BackendError
from ..models.stats import RecentWorkout, WeeklyStatsSnapshot, completion_rate
from ..models.workout import ScheduledWorkout
from ..session import UserSession
from ..utils.dates import calendar_day, start_of_week

logger = structlog.get_logger(__name__)

STREAK_WINDOW_DAYS = 7
TOP_N = 5

__all__ = [
    "StatsAggregator",
    "calculate_streak",
    "completion_rate",
    "summarize",
]


def calculate_streak(workouts: list[ScheduledWorkout], today: date | None = None) -> int:
    """Consecutive days with a completed workout, counting back from today.

    Looks at most seven days back and stops at the first day without a
    completed workout, so a day off today means a streak of 0.
    """
    today = calendar_day(today or date.today())
    completed_days = {calendar_day(w.scheduled_date) for w in workouts if w.completed}

    streak = 0
    for offset in range(STREAK_WINDOW_DAYS):
        if today - timedelta(days=offset) in completed_days:
            streak += 1
        else:
            break
    return streak


def summarize(
    workouts: list[ScheduledWorkout],
    personal_records: list | None = None,
    today: date | None = None,
) -> WeeklyStatsSnapshot:
    """Build a snapshot from a newest-first list of this week's workouts."""
    return WeeklyStatsSnapshot(
        total_workouts=len(workouts),
        completed_workouts=sum(1 for w in workouts if w.completed),
        total_exercises=sum(w.exercise_count for w in workouts),
        streak_days=calculate_streak(workouts, today),
        personal_records=list(personal_records or [])[:TOP_N],
        recent_workouts=[
            RecentWorkout(
                id=w.id,
                name=w.display_name,
                completed=w.completed,
                scheduled_date=w.scheduled_date,
            )
            for w in workouts[:TOP_N]
        ],
    )


class StatsAggregator:
    """Fetches the current week and personal records, then summarizes them."""

    def __init__(self, session: UserSession, workouts: WorkoutRepository):
        self.session = session
        self.workouts = workouts

    async def load(self, now: datetime | None = None) -> WeeklyStatsSnapshot:
        now = now or datetime.now()
        week_start = datetime.combine(start_of_week(now), time.min)

        try:
            workouts = await self.workouts.list_between(
                self.session.user_id, week_start, now, newest_first=True
            )
            records = await self.workouts.personal_records(self.session.user_id, limit=TOP_N)
        except BackendError as e:
            logger.warning("stats_load_failed", user_id=self.session.user_id, error=str(e))
            return WeeklyStatsSnapshot()

        return summarize(workouts, records, today=calendar_day(now))
