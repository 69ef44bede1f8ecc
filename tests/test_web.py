"""Tests for the web interface."""

import asyncio
from datetime import date, datetime, time

import pytest
from fastapi.testclient import TestClient

from weekfit.utils.dates import start_of_week
from weekfit.web import create_app

WEEK = "2024-03-10"


@pytest.fixture
def client(settings, backend):
    with TestClient(create_app(settings)) as client:
        yield client


@pytest.fixture
def saved_workout(backend, make_workout):
    """A workout on Thursday 2024-03-14 at 23:00."""
    return asyncio.run(backend.workouts.create(make_workout(datetime(2024, 3, 14, 23, 0))))


class TestApp:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_dashboard_empty(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert "0%" in response.text

    def test_stats_api(self, client, backend, make_workout):
        today = datetime.combine(date.today(), time(0, 0))
        asyncio.run(backend.workouts.create(make_workout(today, completed=True, weights=(135,))))

        data = client.get("/api/stats").json()

        assert data["total_workouts"] == 1
        assert data["completion_rate"] == 100
        assert data["streak_days"] == 1
        assert data["personal_records"][0]["weight_lbs"] == 135


class TestWizardPages:
    """Tests for the wizard routes."""

    def test_first_step(self, client):
        response = client.get("/wizard")
        assert "Step 1 of 4" in response.text
        assert "Choose Your Workout Plan" in response.text

    def test_weekly_plan_end_to_end(self, client):
        client.post("/wizard/flow", data={"flow": "multi"})
        response = client.post("/wizard/days", data={"days": "3"})
        assert "Step 3 of 4" in response.text

        response = client.post("/wizard/level", data={"level": "beginner"})
        assert "Step 4 of 4" in response.text
        assert "Barbell" in response.text

        client.post("/wizard/equipment/toggle", data={"item": "barbell"})
        client.post("/wizard/equipment/toggle", data={"item": "dumbbell"})
        response = client.post("/wizard/submit")

        assert response.url.path == "/calendar"
        assert "Created 3 workouts" in response.text

        # The wizard starts over afterwards
        assert "Step 1 of 4" in client.get("/wizard").text

    def test_invalid_days_shows_error(self, client):
        client.post("/wizard/flow", data={"flow": "multi"})
        response = client.post("/wizard/days", data={"days": "7"})

        assert "Step 2 of 4" in response.text
        assert "Days per week must be one of 3, 4, 5" in response.text

    def test_submit_without_equipment_stays(self, client):
        client.post("/wizard/flow", data={"flow": "single"})
        client.post("/wizard/type", data={"workout_type": "push"})
        client.post("/wizard/level", data={"level": "advanced"})
        response = client.post("/wizard/submit")

        assert response.url.path == "/wizard"
        assert "Step 4 of 4" in response.text

    def test_saved_level_is_default(self, client, backend):
        async def save_defaults():
            await backend.profiles.ensure("test-user")
            await backend.profiles.update(
                "test-user", {"default_level": "advanced", "default_equipment": ["dumbbell"]}
            )

        asyncio.run(save_defaults())

        client.post("/wizard/reset")
        client.post("/wizard/flow", data={"flow": "single"})
        client.post("/wizard/type", data={"workout_type": "legs"})
        response = client.post("/wizard/level", data={"level": ""})

        assert "Step 4 of 4" in response.text
        assert 'aria-pressed="true"' in response.text

    def test_back(self, client):
        client.post("/wizard/flow", data={"flow": "single"})
        response = client.post("/wizard/back")
        assert "Step 1 of 4" in response.text


class TestCalendarPages:
    """Tests for the calendar and workout routes."""

    def test_calendar_shows_workout_on_its_day(self, client, saved_workout):
        response = client.get("/calendar", params={"week": WEEK})
        assert response.status_code == 200
        assert "Week of March 10, 2024" in response.text
        assert f'/workouts/{saved_workout}"' in response.text

    def test_week_param_snaps_to_sunday(self, client, saved_workout):
        response = client.get("/calendar", params={"week": "2024-03-14"})
        assert "Week of March 10, 2024" in response.text

    def test_other_user_sees_nothing(self, client, saved_workout):
        client.cookies.set("weekfit_user", "someone-else")
        response = client.get("/calendar", params={"week": WEEK, "view": "list"})
        assert "No workouts scheduled this week" in response.text

    def test_rename(self, client, saved_workout):
        response = client.post(f"/workouts/{saved_workout}/rename", data={"name": "Late session"})
        assert "Late session" in response.text

    def test_rename_blank_keeps_editor_open(self, client, saved_workout):
        response = client.post(f"/workouts/{saved_workout}/rename", data={"name": "  "})

        assert "Name cannot be empty" in response.text
        assert 'name="name"' in response.text

    def test_favorite_and_add_to_week(self, client, backend, saved_workout):
        client.post(f"/workouts/{saved_workout}/favorite", data={"view": "list"})
        response = client.post(f"/workouts/{saved_workout}/add-to-week", data={"day": "2024-03-19"})

        assert response.url.params["week"] == "2024-03-17"
        workouts = asyncio.run(
            backend.workouts.list_between("test-user", datetime(2024, 3, 17), datetime(2024, 3, 24))
        )
        assert [w.scheduled_date for w in workouts] == [datetime(2024, 3, 19, 23, 0)]

    def test_copy_week(self, client, saved_workout):
        response = client.post("/calendar/copy-week", data={"week": WEEK, "view": "list"})

        assert response.url.params["week"] == "2024-03-17"
        assert "Push Day" in response.text

    def test_copy_empty_week_shows_error(self, client):
        response = client.post("/calendar/copy-week", data={"week": WEEK})
        assert "There are no workouts to copy this week" in response.text

    def test_detail_complete_and_log_set(self, client, backend, saved_workout):
        response = client.get(f"/workouts/{saved_workout}")
        assert "Bench Press, Barbell" in response.text

        workout = asyncio.run(backend.workouts.get("test-user", saved_workout))
        exercise_id = workout.exercises[0].id
        client.post(f"/workouts/{saved_workout}/complete", data={"completed": "true"})
        response = client.post(
            f"/workouts/{saved_workout}/sets",
            data={"workout_exercise_id": exercise_id, "reps": "8", "weight_lbs": "135"},
        )

        assert "Set 1: 8 reps @ 135.0 lbs" in response.text
        assert "best 135.0 lbs" in response.text
        assert "Mark incomplete" in response.text

    def test_delete(self, client, backend, saved_workout):
        client.post(f"/workouts/{saved_workout}/delete", data={"view": "calendar"})
        assert asyncio.run(backend.workouts.get("test-user", saved_workout)) is None

    def test_missing_workout_redirects(self, client):
        response = client.get("/workouts/9999")
        assert response.url.path == "/calendar"
        assert "Workout not found" in response.text


class TestProfilePages:
    """Tests for the profile routes."""

    def test_view_new_profile(self, client):
        response = client.get("/profile")
        assert response.status_code == 200
        assert "Set a default level and equipment" in response.text

    def test_edit_and_save(self, client):
        assert 'name="first_name"' in client.get("/profile/edit").text

        response = client.post(
            "/profile/save",
            data={
                "first_name": "Ada",
                "last_name": "Lovelace",
                "height_inches": "",
                "weight_lbs": "140",
                "default_level": "beginner",
                "default_equipment": ["barbell", "dumbbell"],
            },
        )

        assert response.url.path == "/profile"
        assert "Profile saved." in response.text
        assert "Ada Lovelace" in response.text
        assert "Barbell, Dumbbell" in response.text

    def test_invalid_save_keeps_form(self, client):
        response = client.post(
            "/profile/save",
            data={"first_name": "Ada", "last_name": "Lovelace", "height_inches": "tall"},
        )

        assert response.status_code == 400
        assert "Height must be a number" in response.text
        assert 'value="tall"' in response.text

    def test_avatar_upload(self, client):
        response = client.post(
            "/profile/avatar", files={"avatar": ("me.png", b"\x89PNG fake", "image/png")}
        )
        assert response.status_code == 200

        profile_page = response.text
        start = profile_page.index('src="/avatars/') + len('src="')
        url = profile_page[start:profile_page.index('"', start)]
        assert client.get(url).content == b"\x89PNG fake"

    def test_avatar_rejects_text_file(self, client):
        response = client.post(
            "/profile/avatar", files={"avatar": ("notes.txt", b"hello", "text/plain")}
        )
        assert "Unsupported image type" in response.text


def test_generated_week_lands_on_calendar(client):
    """Generated workouts start today and show up in the current week's list."""
    client.post("/wizard/flow", data={"flow": "single"})
    client.post("/wizard/type", data={"workout_type": "pull"})
    client.post("/wizard/level", data={"level": "intermediate"})
    client.post("/wizard/equipment/toggle", data={"item": "cable"})
    client.post("/wizard/submit")

    week = start_of_week(date.today())
    response = client.get("/calendar", params={"week": week.isoformat(), "view": "list"})
    assert "Intermediate Pull Day" in response.text
