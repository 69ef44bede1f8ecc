"""Request-scoped dependencies shared by the routers."""

from urllib.parse import urlencode

from fastapi import Request
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates

from ..config import Settings
from ..db import Backend
from ..session import UserSession
from .wizard_store import WizardStore

# Cookie carrying the signed-in user id
SESSION_COOKIE = "weekfit_user"


def get_templates(request: Request) -> Jinja2Templates:
    """Get templates from app state."""
    return request.app.state.templates


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_backend(request: Request) -> Backend:
    return request.app.state.backend


def get_wizard_store(request: Request) -> WizardStore:
    return request.app.state.wizards


def get_session(request: Request) -> UserSession:
    """Resolve the current user from the session cookie, falling back to the configured user."""
    user_id = request.cookies.get(SESSION_COOKIE) or get_settings(request).default_user_id
    return UserSession(user_id=user_id)


def redirect(url: str, **params) -> RedirectResponse:
    """Redirect after a form post, carrying any non-empty query parameters."""
    query = urlencode({k: v for k, v in params.items() if v is not None and v != ""})
    return RedirectResponse(url=f"{url}?{query}" if query else url, status_code=302)
