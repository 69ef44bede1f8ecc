"""Per-workout detail and action routes."""

from datetime import date

from fastapi import APIRouter, Form, Request
from fastapi.responses import HTMLResponse

from ...services.calendar import RenameEditor
from ...utils.dates import calendar_day, start_of_week
from ..dependencies import get_templates, redirect
from .calendar import get_calendar

router = APIRouter(prefix="/workouts", tags=["workouts"])


def _back_to_week(workout, view: str = "calendar", **params):
    week = start_of_week(calendar_day(workout.scheduled_date)).isoformat()
    return redirect("/calendar", week=week, view=view, **params)


@router.get("/{workout_id}", response_class=HTMLResponse)
async def workout_detail(request: Request, workout_id: int, error: str | None = None):
    """Workout detail with its exercises and logged sets."""
    templates = get_templates(request)
    workout = await get_calendar(request).get(workout_id)

    if not workout:
        return redirect("/calendar", error="Workout not found")

    return templates.TemplateResponse(
        request,
        "workout.html",
        {"workout": workout, "error": error, "today": date.today()},
    )


@router.post("/{workout_id}/delete")
async def delete_workout(request: Request, workout_id: int, view: str = Form("calendar")):
    calendar = get_calendar(request)
    workout = await calendar.get(workout_id)
    if not workout:
        return redirect("/calendar", error="Workout not found")

    result = await calendar.delete(workout_id)
    return _back_to_week(workout, view, error=result.error)


@router.post("/{workout_id}/rename")
async def rename_workout(
    request: Request,
    workout_id: int,
    name: str = Form(...),
    view: str = Form("list"),
):
    """Commit an inline rename; on failure the editor reopens with the error."""
    calendar = get_calendar(request)
    workout = await calendar.get(workout_id)
    if not workout:
        return redirect("/calendar", error="Workout not found")

    editor = RenameEditor(calendar)
    editor.begin(workout)
    result = await editor.submit(name)
    if not result.ok:
        return _back_to_week(workout, view, edit=workout_id, error=editor.error)
    return _back_to_week(workout, view)


@router.post("/{workout_id}/favorite")
async def toggle_favorite(request: Request, workout_id: int, view: str = Form("list")):
    calendar = get_calendar(request)
    workout = await calendar.get(workout_id)
    if not workout:
        return redirect("/calendar", error="Workout not found")

    result = await calendar.toggle_favorite(workout)
    return _back_to_week(workout, view, error=result.error)


@router.post("/{workout_id}/complete")
async def set_completed(
    request: Request,
    workout_id: int,
    completed: bool = Form(True),
):
    result = await get_calendar(request).set_completed(workout_id, completed)
    return redirect(f"/workouts/{workout_id}", error=result.error)


@router.post("/{workout_id}/add-to-week")
async def add_to_week(request: Request, workout_id: int, day: str = Form(...)):
    """Schedule a copy of a favorite workout on the chosen day."""
    calendar = get_calendar(request)
    workout = await calendar.get(workout_id)
    if not workout:
        return redirect("/calendar", error="Workout not found")

    try:
        on = date.fromisoformat(day)
    except ValueError:
        return redirect("/calendar", error="Choose a valid day")

    result = await calendar.add_to_week(workout, on)
    return redirect("/calendar", week=start_of_week(on).isoformat(), error=result.error)


@router.post("/{workout_id}/sets")
async def log_set(
    request: Request,
    workout_id: int,
    workout_exercise_id: int = Form(...),
    reps: int = Form(...),
    weight_lbs: str = Form(""),
):
    """Log a set against one of the workout's exercises."""
    try:
        weight = float(weight_lbs) if weight_lbs.strip() else None
    except ValueError:
        return redirect(f"/workouts/{workout_id}", error="Weight must be a number")

    result = await get_calendar(request).log_set(workout_exercise_id, reps, weight)
    return redirect(f"/workouts/{workout_id}", error=result.error)
