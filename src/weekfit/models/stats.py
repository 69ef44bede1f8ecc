"""Dashboard statistics models."""

import math
from dataclasses import dataclass, field
from datetime import datetime


def completion_rate(completed: int, total: int) -> int:
    """Completed share of total as a whole percent, rounded half up.

    Returns 0 when there are no workouts rather than dividing by zero.
    """
    if total <= 0:
        return 0
    return math.floor(completed / total * 100 + 0.5)


@dataclass(frozen=True)
class PersonalRecord:
    """Heaviest logged set for an exercise."""

    exercise: str
    weight_lbs: float
    achieved_at: datetime | None = None


@dataclass(frozen=True)
class RecentWorkout:
    id: int
    name: str
    completed: bool
    scheduled_date: datetime


@dataclass
class WeeklyStatsSnapshot:
    """Aggregates for the current week, recomputed on every load."""

    total_workouts: int = 0
    completed_workouts: int = 0
    total_exercises: int = 0
    streak_days: int = 0
    personal_records: list[PersonalRecord] = field(default_factory=list)
    recent_workouts: list[RecentWorkout] = field(default_factory=list)

    @property
    def completion_rate(self) -> int:
        return completion_rate(self.completed_workouts, self.total_workouts)

    @property
    def completion_label(self) -> str:
        return f"{self.completion_rate}%"

    def to_dict(self) -> dict:
        return {
            "total_workouts": self.total_workouts,
            "completed_workouts": self.completed_workouts,
            "total_exercises": self.total_exercises,
            "streak_days": self.streak_days,
            "completion_rate": self.completion_rate,
            "personal_records": [
                {
                    "exercise": pr.exercise,
                    "weight_lbs": pr.weight_lbs,
                    "achieved_at": pr.achieved_at.isoformat() if pr.achieved_at else None,
                }
                for pr in self.personal_records
            ],
            "recent_workouts": [
                {
                    "id": w.id,
                    "name": w.name,
                    "completed": w.completed,
                    "scheduled_date": w.scheduled_date.isoformat(),
                }
                for w in self.recent_workouts
            ],
        }
