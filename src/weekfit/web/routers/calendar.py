"""Weekly calendar routes."""

from datetime import date

from fastapi import APIRouter, Form, Request
from fastapi.responses import HTMLResponse

from ...services.calendar import (
    RenameEditor,
    WorkoutCalendar,
    bucket_by_day,
    current_week_start,
    next_week,
    previous_week,
    workouts_in_week,
)
from ...utils.dates import start_of_week
from ..dependencies import get_backend, get_session, get_templates, redirect

router = APIRouter(prefix="/calendar", tags=["calendar"])


def _parse_week(week: str | None) -> date:
    """Week start from a ``YYYY-MM-DD`` query value, snapped to its Sunday."""
    if week:
        try:
            return start_of_week(date.fromisoformat(week))
        except ValueError:
            pass
    return current_week_start()


def get_calendar(request: Request) -> WorkoutCalendar:
    return WorkoutCalendar(get_session(request), get_backend(request).workouts)


@router.get("", response_class=HTMLResponse)
async def calendar_page(
    request: Request,
    week: str | None = None,
    view: str = "calendar",
    edit: int | None = None,
    error: str | None = None,
    generated: int | None = None,
):
    """Week of scheduled workouts as day columns or as a list."""
    templates = get_templates(request)
    calendar = get_calendar(request)
    week_start = _parse_week(week)

    workouts = await calendar.load_week(week_start)
    days = bucket_by_day(workouts, week_start) if view == "calendar" else []
    favorites = await calendar.load_favorites()

    editor = RenameEditor(calendar)
    if edit is not None:
        target = next((w for w in workouts if w.id == edit), None)
        if target is not None:
            editor.begin(target)
            editor.error = error

    return templates.TemplateResponse(
        request,
        "calendar.html",
        {
            "view": view,
            "week_start": week_start,
            "previous_week": previous_week(week_start),
            "next_week": next_week(week_start),
            "days": days,
            "workouts": workouts_in_week(workouts, week_start),
            "favorites": favorites,
            "editor": editor,
            "today": date.today(),
            "error": None if editor.is_editing else error,
            "generated": generated,
        },
    )


@router.post("/copy-week")
async def copy_week(request: Request, week: str = Form(...), view: str = Form("calendar")):
    """Copy this week's workouts into the following week."""
    week_start = _parse_week(week)
    result = await get_calendar(request).copy_week(week_start)
    if not result.ok:
        return redirect("/calendar", week=week_start.isoformat(), view=view, error=result.error)
    return redirect("/calendar", week=next_week(week_start).isoformat(), view=view)
