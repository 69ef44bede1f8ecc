"""Tests for the weekly calendar and workout actions."""

import asyncio
from datetime import date, datetime, timedelta, timezone

from weekfit.errors import BackendError
from weekfit.models.workout import ScheduledWorkout
from weekfit.services.calendar import (
    RenameEditor,
    WorkoutCalendar,
    bucket_by_day,
    favorite_workouts,
    next_week,
    previous_week,
    workouts_in_week,
)
from weekfit.utils.dates import calendar_day, start_of_week, week_dates

WEEK_START = date(2024, 3, 10)  # Sunday


def _workout(when: datetime, id: int = 1, favorite: bool = False) -> ScheduledWorkout:
    return ScheduledWorkout(
        id=id, user_id="test-user", name="Workout", scheduled_date=when, is_favorite=favorite
    )


class TestWeekHelpers:
    """Tests for week arithmetic."""

    def test_week_starts_on_sunday(self):
        assert start_of_week(date(2024, 3, 14)) == WEEK_START
        assert start_of_week(date(2024, 3, 10)) == WEEK_START
        assert start_of_week(date(2024, 3, 16)) == WEEK_START

    def test_week_dates(self):
        days = week_dates(WEEK_START)
        assert len(days) == 7
        assert days[0] == WEEK_START
        assert days[-1] == date(2024, 3, 16)

    def test_navigation_moves_seven_days(self):
        assert next_week(WEEK_START) == date(2024, 3, 17)
        assert previous_week(WEEK_START) == date(2024, 3, 3)

    def test_aware_timestamp_uses_local_day(self):
        local = datetime(2024, 3, 14, 23, 0).astimezone()
        assert calendar_day(local.astimezone(timezone.utc)) == date(2024, 3, 14)


class TestBucketing:
    """Tests for grouping workouts by calendar day."""

    def test_late_evening_stays_on_its_day(self):
        """A workout at 23:00 belongs to that day, not the next."""
        days = bucket_by_day([_workout(datetime(2024, 3, 14, 23, 0))], WEEK_START)

        assert [d.date for d in days] == week_dates(WEEK_START)
        thursday = days[4]
        assert thursday.date == date(2024, 3, 14)
        assert len(thursday.workouts) == 1
        assert sum(len(d.workouts) for d in days) == 1

    def test_workouts_outside_week_dropped(self):
        workouts = [
            _workout(datetime(2024, 3, 9, 8), id=1),
            _workout(datetime(2024, 3, 10, 0, 0), id=2),
            _workout(datetime(2024, 3, 16, 23, 59), id=3),
            _workout(datetime(2024, 3, 17, 0, 0), id=4),
        ]

        assert [w.id for w in workouts_in_week(workouts, WEEK_START)] == [2, 3]
        assert sum(len(d.workouts) for d in bucket_by_day(workouts, WEEK_START)) == 2

    def test_is_today(self):
        days = bucket_by_day([], WEEK_START)
        assert days[4].is_today(date(2024, 3, 14))
        assert not days[3].is_today(date(2024, 3, 14))

    def test_favorites_filter(self):
        workouts = [_workout(datetime(2024, 3, 11), id=1, favorite=True), _workout(datetime(2024, 3, 12), id=2)]
        assert [w.id for w in favorite_workouts(workouts)] == [1]


class TestWorkoutCalendar:
    """Tests for calendar actions against the database."""

    def test_load_week(self, backend, session, make_workout):
        async def run():
            await backend.workouts.create(make_workout(datetime(2024, 3, 14, 23, 0)))
            await backend.workouts.create(make_workout(datetime(2024, 3, 17, 9, 0)))
            calendar = WorkoutCalendar(session, backend.workouts)
            return await calendar.load_days(WEEK_START)

        days = asyncio.run(run())

        assert len(days[4].workouts) == 1
        assert days[4].workouts[0].exercise_count == 2

    def test_copy_week(self, backend, session, make_workout):
        """Copies land on the same weekday and time one week later, uncompleted."""

        async def run():
            await backend.workouts.create(make_workout(datetime(2024, 3, 11, 7, 30), completed=True, weights=(100,)))
            await backend.workouts.create(make_workout(datetime(2024, 3, 14, 18, 0), name="Legs"))
            calendar = WorkoutCalendar(session, backend.workouts)
            result = await calendar.copy_week(WEEK_START)
            copied = await calendar.load_week(next_week(WEEK_START))
            original = await calendar.load_week(WEEK_START)
            return result, copied, original

        result, copied, original = asyncio.run(run())

        assert result.ok
        assert len(result.value) == 2
        assert [w.scheduled_date for w in copied] == [
            w.scheduled_date + timedelta(days=7) for w in original
        ]
        assert all(not w.completed for w in copied)
        assert [w.exercise_count for w in copied] == [2, 2]
        assert all(not ex.logged_sets for w in copied for ex in w.exercises)

    def test_copy_empty_week_fails(self, backend, session):
        result = asyncio.run(WorkoutCalendar(session, backend.workouts).copy_week(WEEK_START))
        assert not result.ok
        assert not result.retryable

    def test_copy_week_read_failure_is_retryable(self, session):
        """A failed read is reported as a retryable error, not as an empty week."""
        result = asyncio.run(WorkoutCalendar(session, FailingRepository()).copy_week(WEEK_START))

        assert not result.ok
        assert result.retryable
        assert "no workouts" not in result.error

    def test_toggle_favorite_and_add_to_week(self, backend, session, make_workout):
        async def run():
            calendar = WorkoutCalendar(session, backend.workouts)
            workout_id = await backend.workouts.create(make_workout(datetime(2024, 3, 11, 7, 0)))
            workout = await calendar.get(workout_id)
            toggled = await calendar.toggle_favorite(workout)
            favorites = await calendar.load_favorites()
            added = await calendar.add_to_week(favorites[0], date(2024, 3, 20))
            return toggled, favorites, added, await calendar.get(added.value)

        toggled, favorites, added, copy = asyncio.run(run())

        assert toggled.ok and toggled.value is True
        assert len(favorites) == 1
        assert added.ok
        assert copy.scheduled_date == datetime(2024, 3, 20, 7, 0)
        assert not copy.is_favorite

    def test_set_completed_and_log_set(self, backend, session, make_workout):
        async def run():
            calendar = WorkoutCalendar(session, backend.workouts)
            workout_id = await backend.workouts.create(make_workout(datetime(2024, 3, 11, 7, 0)))
            workout = await calendar.get(workout_id)
            exercise_id = workout.exercises[0].id
            await calendar.log_set(exercise_id, 8, 135.0)
            await calendar.log_set(exercise_id, 6, 145.0)
            bad = await calendar.log_set(exercise_id, 0, 145.0)
            await calendar.set_completed(workout_id, True)
            return bad, await calendar.get(workout_id)

        bad, workout = asyncio.run(run())

        assert not bad.ok
        assert workout.completed
        assert [s.set_number for s in workout.exercises[0].logged_sets] == [1, 2]
        assert workout.exercises[0].best_weight == 145.0

    def test_delete_missing_workout(self, backend, session):
        result = asyncio.run(WorkoutCalendar(session, backend.workouts).delete(9999))
        assert not result.ok
        assert not result.retryable

    def test_other_users_workouts_hidden(self, backend, session, make_workout):
        async def run():
            await backend.workouts.create(make_workout(datetime(2024, 3, 12, 8), user_id="someone-else"))
            return await WorkoutCalendar(session, backend.workouts).load_week(WEEK_START)

        assert asyncio.run(run()) == []


class FailingRepository:
    """Workout repository whose reads and writes always fail."""

    async def list_between(self, user_id, start, end, newest_first=False):
        raise BackendError("disk I/O error")

    async def rename(self, user_id, workout_id, name):
        raise BackendError("database is locked")


class TestRenameEditor:
    """Tests for inline renaming."""

    def test_begin_prefills_display_name(self):
        editor = RenameEditor(calendar=None)
        workout = _workout(datetime(2024, 3, 11))
        workout.custom_name = "Morning lift"
        editor.begin(workout)

        assert editor.is_editing
        assert editor.new_name == "Morning lift"

    def test_cancel_discards(self):
        editor = RenameEditor(calendar=None)
        editor.begin(_workout(datetime(2024, 3, 11)))
        editor.new_name = "Changed"
        editor.cancel()

        assert not editor.is_editing
        assert editor.new_name == ""

    def test_failure_keeps_editing_with_error(self, session):
        """A failed rename stays in edit mode so the user can retry."""
        calendar = WorkoutCalendar(session, FailingRepository())
        editor = RenameEditor(calendar)
        editor.begin(_workout(datetime(2024, 3, 11), id=7))

        result = asyncio.run(editor.submit("Heavy day"))

        assert not result.ok
        assert result.retryable
        assert editor.is_editing
        assert editor.editing_id == 7
        assert editor.new_name == "Heavy day"
        assert editor.error

    def test_success_leaves_edit_mode(self, backend, session, make_workout):
        async def run():
            calendar = WorkoutCalendar(session, backend.workouts)
            workout_id = await backend.workouts.create(make_workout(datetime(2024, 3, 11, 7, 0)))
            editor = RenameEditor(calendar)
            editor.begin(await calendar.get(workout_id))
            result = await editor.submit("  Heavy day ")
            return editor, result, await calendar.get(workout_id)

        editor, result, workout = asyncio.run(run())

        assert result.ok
        assert not editor.is_editing
        assert workout.display_name == "Heavy day"
        assert workout.name == "Push Day"

    def test_blank_name_rejected(self, backend, session):
        calendar = WorkoutCalendar(session, backend.workouts)
        editor = RenameEditor(calendar)
        editor.begin(_workout(datetime(2024, 3, 11), id=1))

        result = asyncio.run(editor.submit("   "))

        assert not result.ok
        assert editor.is_editing
