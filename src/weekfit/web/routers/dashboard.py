"""Dashboard routes."""

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from ...services.stats import StatsAggregator
from ..dependencies import get_backend, get_session, get_templates

router = APIRouter(tags=["dashboard"])


def get_aggregator(request: Request) -> StatsAggregator:
    return StatsAggregator(get_session(request), get_backend(request).workouts)


@router.get("/", response_class=HTMLResponse)
async def home(request: Request):
    """Home page with this week's summary cards."""
    templates = get_templates(request)
    stats = await get_aggregator(request).load()

    return templates.TemplateResponse(request, "home.html", {"stats": stats})


@router.get("/api/stats")
async def stats_json(request: Request):
    """This week's stats as JSON."""
    stats = await get_aggregator(request).load()
    return stats.to_dict()
