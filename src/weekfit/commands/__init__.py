"""CLI commands for weekfit."""

from .init import init
from .profile import profile
from .serve import serve
from .stats import stats
from .wizard import wizard
from .workouts import workouts

__all__ = [
    "init",
    "profile",
    "serve",
    "stats",
    "wizard",
    "workouts",
]
