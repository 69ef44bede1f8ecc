"""Web routers for weekfit."""

from . import calendar, dashboard, profile, wizard, workouts

__all__ = ["calendar", "dashboard", "profile", "wizard", "workouts"]
