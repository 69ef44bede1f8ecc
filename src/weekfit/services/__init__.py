"""UI-facing services for weekfit."""

from .calendar import RenameEditor, WorkoutCalendar
from .generator import WorkoutGenerator
from .preferences import PreferenceLoader
from .profile_editor import ProfileEditor, ProfileService
from .stats import StatsAggregator
from .wizard import GuidedWizard

__all__ = [
    "GuidedWizard",
    "PreferenceLoader",
    "ProfileEditor",
    "ProfileService",
    "RenameEditor",
    "StatsAggregator",
    "WorkoutCalendar",
    "WorkoutGenerator",
]
