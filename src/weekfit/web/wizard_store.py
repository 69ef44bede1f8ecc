"""Per-user guided wizard instances for the web UI."""

import asyncio
from dataclasses import dataclass, field
from datetime import datetime

import structlog

from ..data.equipment_catalog import EquipmentCatalog
from ..db import Backend
from ..services.preferences import PreferenceLoader
from ..services.wizard import GuidedWizard
from ..session import UserSession

logger = structlog.get_logger(__name__)


@dataclass
class _Entry:
    wizard: GuidedWizard
    touched_at: datetime = field(default_factory=datetime.now)


class WizardStore:
    """Keeps one wizard per user between requests.

    Each page load or form post reuses the user's wizard; the least recently
    used wizards are dropped once ``max_wizards`` is exceeded.
    """

    def __init__(self, max_wizards: int = 100):
        self._wizards: dict[str, _Entry] = {}
        self._max_wizards = max_wizards
        self._lock = asyncio.Lock()

    async def get(self, session: UserSession, backend: Backend) -> GuidedWizard:
        """Return the user's wizard, starting a new one on first use."""
        async with self._lock:
            entry = self._wizards.get(session.user_id)
            if entry is None:
                wizard = GuidedWizard(
                    session,
                    PreferenceLoader(backend.profiles),
                    EquipmentCatalog(backend.exercises),
                )
                wizard.start()
                entry = _Entry(wizard=wizard)
                self._wizards[session.user_id] = entry
                self._evict_idle()
                logger.debug("wizard_created", user_id=session.user_id)
            entry.touched_at = datetime.now()
            return entry.wizard

    async def discard(self, session: UserSession) -> None:
        """Forget the user's wizard so the next visit starts fresh."""
        async with self._lock:
            entry = self._wizards.pop(session.user_id, None)
            if entry is not None:
                entry.wizard.close()

    def __len__(self) -> int:
        return len(self._wizards)

    def _evict_idle(self) -> None:
        """Remove least recently used wizards if over the limit."""
        if len(self._wizards) <= self._max_wizards:
            return
        by_age = sorted(self._wizards.items(), key=lambda item: item[1].touched_at)
        for user_id, entry in by_age[: len(self._wizards) - self._max_wizards]:
            entry.wizard.close()
            del self._wizards[user_id]
            logger.debug("wizard_evicted", user_id=user_id)
