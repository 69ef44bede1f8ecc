"""FastAPI application for the weekfit web interface."""

from contextlib import asynccontextmanager
from datetime import date
from pathlib import Path

import structlog
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from .. import __version__
from ..config import Settings, get_settings
from ..data.equipment_catalog import equipment_label
from ..db import Backend, init_db, seed_exercises
from ..logging_config import configure_logging
from ..utils.dates import format_day
from .routers import calendar, dashboard, profile, wizard, workouts
from .wizard_store import WizardStore

logger = structlog.get_logger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the schema and seed the exercise library on startup."""
    settings: Settings = app.state.settings
    await init_db(settings.db_path)
    added = await seed_exercises(settings.db_path)
    logger.info("app_started", db_path=str(settings.db_path), exercises_added=added)
    yield
    logger.info("app_stopped")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.log_json)

    app = FastAPI(
        title="weekfit",
        description="Guided weekly workout planner",
        version=__version__,
        lifespan=lifespan,
    )

    templates = Jinja2Templates(directory=TEMPLATES_DIR)
    templates.env.globals["format_day"] = format_day
    templates.env.globals["equipment_label"] = equipment_label

    app.state.settings = settings
    app.state.backend = Backend.from_settings(settings)
    app.state.templates = templates
    app.state.wizards = WizardStore()

    settings.avatar_path.mkdir(parents=True, exist_ok=True)
    app.mount(
        settings.avatar_url_prefix,
        StaticFiles(directory=settings.avatar_path),
        name="avatars",
    )

    app.include_router(dashboard.router)
    app.include_router(wizard.router)
    app.include_router(calendar.router)
    app.include_router(workouts.router)
    app.include_router(profile.router)

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__, "date": date.today().isoformat()}

    return app
