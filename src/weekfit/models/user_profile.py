"""User profile data models."""

from dataclasses import dataclass, field
from datetime import date, datetime

from .workout import WorkoutLevel


@dataclass
class UserProfile:
    """A user's personal details and saved workout defaults."""

    id: str
    first_name: str = ""
    last_name: str = ""
    date_of_birth: date | None = None
    height_inches: int | None = None
    weight_lbs: float | None = None
    default_level: WorkoutLevel | None = None
    default_equipment: list[str] = field(default_factory=list)
    avatar_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "first_name": self.first_name,
            "last_name": self.last_name,
            "date_of_birth": self.date_of_birth.isoformat() if self.date_of_birth else None,
            "height_inches": self.height_inches,
            "weight_lbs": self.weight_lbs,
            "default_level": self.default_level.value if self.default_level else None,
            "default_equipment": list(self.default_equipment),
            "avatar_url": self.avatar_url,
        }

    @classmethod
    def from_dict(
        cls,
        data: dict,
        id: str,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> "UserProfile":
        """Create from dictionary."""
        dob = data.get("date_of_birth")
        level = data.get("default_level")
        return cls(
            id=id,
            first_name=data.get("first_name") or "",
            last_name=data.get("last_name") or "",
            date_of_birth=date.fromisoformat(dob[:10]) if dob else None,
            height_inches=data.get("height_inches"),
            weight_lbs=data.get("weight_lbs"),
            default_level=WorkoutLevel(level) if level else None,
            default_equipment=list(data.get("default_equipment") or []),
            avatar_url=data.get("avatar_url"),
            created_at=created_at,
            updated_at=updated_at,
        )


@dataclass(frozen=True)
class Preferences:
    """Saved defaults that pre-populate the guided wizard."""

    level: WorkoutLevel | None = None
    equipment: frozenset[str] = frozenset()

    @classmethod
    def from_profile(cls, profile: UserProfile | None) -> "Preferences":
        if profile is None:
            return cls()
        return cls(level=profile.default_level, equipment=frozenset(profile.default_equipment))
