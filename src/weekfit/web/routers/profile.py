"""User profile routes."""

from fastapi import APIRouter, File, Form, Request, UploadFile
from fastapi.responses import HTMLResponse

from ...data.equipment_catalog import EquipmentCatalog, equipment_label
from ...models.workout import WORKOUT_LEVEL_CONFIGS
from ...services.profile_editor import ProfileEditor, ProfileForm, ProfileService
from ..dependencies import get_backend, get_session, get_templates, redirect

router = APIRouter(prefix="/profile", tags=["profile"])

UNAVAILABLE = "Your profile could not be loaded. Please refresh."


def get_service(request: Request) -> ProfileService:
    backend = get_backend(request)
    return ProfileService(get_session(request), backend.profiles, backend.avatars)


async def _render(request: Request, editor: ProfileEditor, saved: bool = False, status_code: int = 200):
    templates = get_templates(request)
    equipment = await EquipmentCatalog(get_backend(request).exercises).load()

    return templates.TemplateResponse(
        request,
        "profile.html",
        {
            "editor": editor,
            "profile": editor.profile,
            "form": editor.form,
            "levels": list(WORKOUT_LEVEL_CONFIGS.items()),
            "equipment_options": equipment,
            "equipment_label": equipment_label,
            "saved": saved,
        },
        status_code=status_code,
    )


async def _editor(request: Request) -> ProfileEditor | None:
    service = get_service(request)
    profile = await service.load()
    if profile is None:
        return None
    return ProfileEditor(profile, service.save, service.change_avatar)


@router.get("", response_class=HTMLResponse)
async def profile_page(request: Request, saved: bool = False, error: str | None = None):
    """View the profile."""
    editor = await _editor(request)
    if editor is None:
        return HTMLResponse(UNAVAILABLE, status_code=503)

    editor.error = error
    return await _render(request, editor, saved=saved)


@router.get("/edit", response_class=HTMLResponse)
async def edit_profile(request: Request):
    """Profile form pre-filled with the stored values."""
    editor = await _editor(request)
    if editor is None:
        return HTMLResponse(UNAVAILABLE, status_code=503)

    editor.begin_edit()
    return await _render(request, editor)


@router.post("/save")
async def save_profile(
    request: Request,
    first_name: str = Form(""),
    last_name: str = Form(""),
    date_of_birth: str = Form(""),
    height_inches: str = Form(""),
    weight_lbs: str = Form(""),
    default_level: str = Form("intermediate"),
    default_equipment: list[str] = Form(default=[]),
):
    """Save every editable profile field in one update."""
    editor = await _editor(request)
    if editor is None:
        return redirect("/profile", error="Your profile could not be loaded")

    editor.begin_edit()
    editor.form = ProfileForm(
        first_name=first_name,
        last_name=last_name,
        date_of_birth=date_of_birth,
        height_inches=height_inches,
        weight_lbs=weight_lbs,
        default_level=default_level,
        default_equipment=default_equipment,
    )

    result = await editor.save()
    if not result.ok:
        # Keep what the user typed so they can correct it and resubmit
        return await _render(request, editor, status_code=400 if not result.retryable else 503)

    return redirect("/profile", saved="true")


@router.post("/avatar")
async def change_avatar(request: Request, avatar: UploadFile = File(...)):
    """Pass an uploaded image through to avatar storage."""
    editor = await _editor(request)
    if editor is None:
        return redirect("/profile", error="Your profile could not be loaded")

    content = await avatar.read()
    result = await editor.upload_avatar(avatar.filename or "", content)
    return redirect("/profile", error=result.error)
