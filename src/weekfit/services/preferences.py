"""Loads a user's saved workout defaults."""

import structlog

from ..db.repositories import ProfileRepository
from ..errors import BackendError
from ..models.user_profile import Preferences
from ..session import UserSession

logger = structlog.get_logger(__name__)


class PreferenceLoader:
    """Reads default level and equipment from the user's profile."""

    def __init__(self, profiles: ProfileRepository):
        self.profiles = profiles

    async def load(self, session: UserSession) -> Preferences:
        """Return the saved defaults, or empty defaults if they cannot be read."""
        try:
            return await self.profiles.get_preferences(session.user_id)
        except BackendError as e:
            logger.warning("preferences_load_failed", user_id=session.user_id, error=str(e))
            return Preferences()
