"""Guided workout wizard routes."""

from fastapi import APIRouter, Form, Request
from fastapi.responses import HTMLResponse

from ...data.equipment_catalog import equipment_label
from ...errors import WizardError
from ...models.workout import (
    SPLIT_DESCRIPTIONS,
    WORKOUT_LEVEL_CONFIGS,
    WorkoutFlow,
    WorkoutType,
)
from ...services.generator import WorkoutGenerator
from ...services.wizard import MULTI_DAY_OPTIONS, STEP_COUNT, GuidedWizard
from ..dependencies import (
    get_backend,
    get_session,
    get_templates,
    get_wizard_store,
    redirect,
)

router = APIRouter(prefix="/wizard", tags=["wizard"])


async def _wizard(request: Request) -> GuidedWizard:
    return await get_wizard_store(request).get(get_session(request), get_backend(request))


async def _apply(request: Request, action) -> None:
    """Run a transition; an invalid one is reported on the page instead of raising."""
    wizard = await _wizard(request)
    await wizard.settle()
    wizard.error = None
    try:
        action(wizard)
    except (WizardError, ValueError) as e:
        wizard.error = str(e)


@router.get("", response_class=HTMLResponse)
async def wizard_page(request: Request):
    """Render the wizard's current step."""
    templates = get_templates(request)
    wizard = await _wizard(request)
    await wizard.settle()

    return templates.TemplateResponse(
        request,
        "wizard.html",
        {
            "wizard": wizard,
            "step": wizard.step,
            "step_count": STEP_COUNT,
            "draft": wizard.draft,
            "workout_types": list(WorkoutType),
            "day_options": [(d, SPLIT_DESCRIPTIONS[d]) for d in MULTI_DAY_OPTIONS],
            "levels": list(WORKOUT_LEVEL_CONFIGS.items()),
            "equipment_options": wizard.equipment_options or [],
            "equipment_label": equipment_label,
        },
    )


@router.post("/flow")
async def choose_flow(request: Request, flow: str = Form(...)):
    await _apply(request, lambda w: w.choose_flow(WorkoutFlow(flow)))
    return redirect("/wizard")


@router.post("/type")
async def choose_type(request: Request, workout_type: str = Form(...)):
    await _apply(request, lambda w: w.choose_workout_type(WorkoutType(workout_type)))
    return redirect("/wizard")


@router.post("/days")
async def choose_days(request: Request, days: int = Form(...)):
    await _apply(request, lambda w: w.choose_days(days))
    return redirect("/wizard")


@router.post("/level")
async def choose_level(request: Request, level: str = Form("")):
    await _apply(request, lambda w: w.choose_level(level or None))
    return redirect("/wizard")


@router.post("/equipment/toggle")
async def toggle_equipment(request: Request, item: str = Form(...)):
    await _apply(request, lambda w: w.toggle_equipment(item))
    return redirect("/wizard")


@router.post("/back")
async def back(request: Request):
    await _apply(request, lambda w: w.back())
    return redirect("/wizard")


@router.post("/reset")
async def reset(request: Request):
    await _apply(request, lambda w: w.start())
    return redirect("/wizard")


@router.post("/submit")
async def submit(request: Request):
    """Generate workouts from the finished wizard and show them on the calendar."""
    session = get_session(request)
    backend = get_backend(request)
    wizard = await _wizard(request)

    try:
        workout_request = wizard.submit()
    except WizardError as e:
        wizard.error = str(e)
        return redirect("/wizard")

    generator = WorkoutGenerator(backend.exercises, backend.workouts)
    result = await generator.generate(session, workout_request)
    if not result.ok:
        wizard.error = result.error
        return redirect("/wizard")

    await get_wizard_store(request).discard(session)
    return redirect("/calendar", generated=len(result.value))
