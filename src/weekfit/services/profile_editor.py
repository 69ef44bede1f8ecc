"""Profile view/edit component and the save/avatar handlers behind it."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Awaitable, Callable

import structlog

from ..db.repositories import ProfileRepository
from ..db.storage import AvatarStorage
from ..errors import ActionResult, BackendError
from ..models.user_profile import UserProfile
from ..models.workout import WorkoutLevel
from ..session import UserSession

logger = structlog.get_logger(__name__)

SaveHandler = Callable[[dict], Awaitable[UserProfile]]
AvatarHandler = Callable[[str, bytes], Awaitable[UserProfile]]


class EditorMode(str, Enum):
    VIEW = "view"
    EDIT = "edit"


@dataclass
class ProfileForm:
    """Text-field copy of a profile while it is being edited."""

    first_name: str = ""
    last_name: str = ""
    date_of_birth: str = ""
    height_inches: str = ""
    weight_lbs: str = ""
    default_level: str = WorkoutLevel.INTERMEDIATE.value
    default_equipment: list[str] = field(default_factory=list)

    @classmethod
    def from_profile(cls, profile: UserProfile) -> "ProfileForm":
        return cls(
            first_name=profile.first_name,
            last_name=profile.last_name,
            date_of_birth=profile.date_of_birth.isoformat() if profile.date_of_birth else "",
            height_inches=str(profile.height_inches) if profile.height_inches else "",
            weight_lbs=_format_number(profile.weight_lbs),
            default_level=(profile.default_level or WorkoutLevel.INTERMEDIATE).value,
            default_equipment=list(profile.default_equipment),
        )

    def toggle_equipment(self, item: str) -> None:
        if item in self.default_equipment:
            self.default_equipment.remove(item)
        else:
            self.default_equipment.append(item)

    def to_update(self) -> dict:
        """Parse the form into profile fields.

        Blank numeric fields become ``None``, never 0. Raises ``ValueError``
        with a user-facing message on invalid input.
        """
        if not self.first_name.strip() or not self.last_name.strip():
            raise ValueError("First and last name are required")

        return {
            "first_name": self.first_name.strip(),
            "last_name": self.last_name.strip(),
            "date_of_birth": _parse_date(self.date_of_birth),
            "height_inches": _parse_number(self.height_inches, int, "Height", 1, 120),
            "weight_lbs": _parse_number(self.weight_lbs, float, "Weight", 1, 1000),
            "default_level": WorkoutLevel(self.default_level),
            "default_equipment": list(self.default_equipment),
        }


def _format_number(value: float | None) -> str:
    if not value:
        return ""
    return f"{value:g}"


def _parse_date(text: str) -> date | None:
    text = text.strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise ValueError("Date of birth must be YYYY-MM-DD") from None


def _parse_number(text: str, kind: type, label: str, low: float, high: float):
    text = str(text).strip()
    if not text:
        return None
    try:
        value = kind(text)
    except ValueError:
        raise ValueError(f"{label} must be a number") from None
    if not low <= value <= high:
        raise ValueError(f"{label} must be between {low:g} and {high:g}")
    return value


class ProfileService:
    """The save and avatar handlers injected into ``ProfileEditor``."""

    def __init__(self, session: UserSession, profiles: ProfileRepository, avatars: AvatarStorage):
        self.session = session
        self.profiles = profiles
        self.avatars = avatars

    async def load(self) -> UserProfile | None:
        try:
            return await self.profiles.ensure(self.session.user_id)
        except BackendError as e:
            logger.warning("profile_load_failed", user_id=self.session.user_id, error=str(e))
            return None

    async def save(self, fields: dict) -> UserProfile:
        return await self.profiles.update(self.session.user_id, fields)

    async def change_avatar(self, filename: str, content: bytes) -> UserProfile:
        url = await self.avatars.upload(self.session.user_id, filename, content)
        return await self.profiles.update(self.session.user_id, {"avatar_url": url})


class ProfileEditor:
    """Two-mode profile component: viewing the record, or editing a form copy of it."""

    def __init__(self, profile: UserProfile, on_save: SaveHandler, on_avatar_change: AvatarHandler):
        self.profile = profile
        self.on_save = on_save
        self.on_avatar_change = on_avatar_change

        self.mode = EditorMode.VIEW
        self.form: ProfileForm | None = None
        self.loading = False
        self.error: str | None = None

    @property
    def needs_defaults(self) -> bool:
        """Prompt the user to set workout defaults the wizard can reuse."""
        return self.profile.default_level is None or not self.profile.default_equipment

    def begin_edit(self) -> ProfileForm:
        self.form = ProfileForm.from_profile(self.profile)
        self.mode = EditorMode.EDIT
        self.error = None
        return self.form

    def cancel(self) -> None:
        self.form = None
        self.mode = EditorMode.VIEW
        self.error = None

    async def save(self) -> ActionResult:
        """Commit every editable field in one update."""
        if self.mode != EditorMode.EDIT or self.form is None:
            return ActionResult.failure("Profile is not being edited", retryable=False)

        try:
            fields = self.form.to_update()
        except ValueError as e:
            self.error = str(e)
            return ActionResult.failure(str(e), retryable=False)

        self.loading = True
        try:
            self.profile = await self.on_save(fields)
        except BackendError as e:
            logger.error("profile_save_failed", user_id=self.profile.id, error=str(e))
            self.error = "Could not save your profile. Please try again."
            return ActionResult.failure(self.error)
        finally:
            self.loading = False

        logger.info("profile_saved", user_id=self.profile.id)
        self.cancel()
        return ActionResult.success(self.profile)

    async def upload_avatar(self, filename: str, content: bytes) -> ActionResult:
        """Hand the file to the avatar handler, tracking ``loading`` around the call."""
        self.loading = True
        try:
            self.profile = await self.on_avatar_change(filename, content)
        except ValueError as e:
            self.error = str(e)
            return ActionResult.failure(str(e), retryable=False)
        except BackendError as e:
            logger.error("avatar_upload_failed", user_id=self.profile.id, error=str(e))
            self.error = "Could not upload your photo. Please try again."
            return ActionResult.failure(self.error)
        finally:
            self.loading = False

        self.error = None
        return ActionResult.success(self.profile.avatar_url)
