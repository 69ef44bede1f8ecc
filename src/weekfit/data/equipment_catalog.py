"""Equipment choices offered by the wizard and the profile editor."""

import structlog

from ..db.repositories import ExerciseRepository
from ..errors import BackendError
from ..models.exercises import EquipmentType

logger = structlog.get_logger(__name__)


class EquipmentCatalog:
    """Lists the equipment referenced by the exercise library.

    Falls back to the built-in equipment types when the library is empty or
    cannot be read, so a picker always has something to show.
    """

    def __init__(self, exercises: ExerciseRepository):
        self.exercises = exercises

    async def load(self) -> list[str]:
        try:
            equipment = await self.exercises.distinct_equipment()
        except BackendError as e:
            logger.warning("equipment_catalog_load_failed", error=str(e))
            equipment = []
        return equipment or [eq.value for eq in EquipmentType]


def equipment_label(value: str) -> str:
    """Human-readable name for an equipment value."""
    try:
        return EquipmentType(value).label
    except ValueError:
        return value.replace("_", " ").title()
