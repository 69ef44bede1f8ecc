"""Guided workout wizard.

The wizard walks the user through four fixed steps::

    SelectFlow -> SelectTypeOrDays -> SelectLevel -> SelectEquipment -> submit

Each step is a frozen dataclass holding only the choices that are valid at
that point, so a state such as "equipment chosen but no level" cannot be
built. The module-level functions are the pure transitions; ``GuidedWizard``
wraps them with the asynchronous side effects (preference reloads and the
equipment catalog fetch).
"""

import asyncio
from dataclasses import dataclass, replace
from typing import ClassVar, Union

import structlog

from ..data.equipment_catalog import EquipmentCatalog
from ..errors import WizardError
from ..models.user_profile import Preferences
from ..models.workout import (
    SPLIT_ROTATIONS,
    GuidedWorkoutRequest,
    WorkoutDraft,
    WorkoutFlow,
    WorkoutLevel,
    WorkoutType,
)
from ..session import UserSession
from .preferences import PreferenceLoader

logger = structlog.get_logger(__name__)

MULTI_DAY_OPTIONS = tuple(sorted(SPLIT_ROTATIONS))


@dataclass(frozen=True)
class SelectFlow:
    index: ClassVar[int] = 0
    title: ClassVar[str] = "Choose Your Workout Plan"


@dataclass(frozen=True)
class SelectTypeOrDays:
    flow: WorkoutFlow

    index: ClassVar[int] = 1

    @property
    def title(self) -> str:
        if self.flow == WorkoutFlow.SINGLE:
            return "Select Workout Type"
        return "How Many Days Per Week?"


@dataclass(frozen=True)
class SelectLevel:
    flow: WorkoutFlow
    days_per_week: int
    workout_type: WorkoutType | None = None

    index: ClassVar[int] = 2
    title: ClassVar[str] = "Select Your Level"


@dataclass(frozen=True)
class SelectEquipment:
    flow: WorkoutFlow
    days_per_week: int
    level: WorkoutLevel
    workout_type: WorkoutType | None = None
    equipment: frozenset[str] = frozenset()

    index: ClassVar[int] = 3
    title: ClassVar[str] = "What Equipment Do You Have?"


WizardStep = Union[SelectFlow, SelectTypeOrDays, SelectLevel, SelectEquipment]

STEP_COUNT = 4


def _expect(step: WizardStep, kind: type, action: str) -> None:
    if not isinstance(step, kind):
        raise WizardError(f"Cannot {action} from step {step.index}")


def choose_flow(step: WizardStep, flow: WorkoutFlow | str) -> SelectTypeOrDays:
    _expect(step, SelectFlow, "choose a flow")
    return SelectTypeOrDays(flow=WorkoutFlow(flow))


def choose_workout_type(step: WizardStep, workout_type: WorkoutType | str) -> SelectLevel:
    """Pick a single-day focus. A single workout is always one day per week."""
    _expect(step, SelectTypeOrDays, "choose a workout type")
    if step.flow != WorkoutFlow.SINGLE:
        raise WizardError("Workout types are only offered for a single-day workout")
    return SelectLevel(
        flow=step.flow,
        days_per_week=1,
        workout_type=WorkoutType(workout_type),
    )


def choose_days(step: WizardStep, days: int) -> SelectLevel:
    _expect(step, SelectTypeOrDays, "choose days per week")
    if step.flow != WorkoutFlow.MULTI:
        raise WizardError("Days per week are only offered for a multi-day split")
    if days not in MULTI_DAY_OPTIONS:
        raise WizardError(f"Days per week must be one of {', '.join(map(str, MULTI_DAY_OPTIONS))}")
    return SelectLevel(flow=step.flow, days_per_week=days)


def choose_level(
    step: WizardStep,
    level: WorkoutLevel | str,
    equipment: frozenset[str] = frozenset(),
) -> SelectEquipment:
    """Pick a level; ``equipment`` seeds the selection on the next step."""
    _expect(step, SelectLevel, "choose a level")
    return SelectEquipment(
        flow=step.flow,
        days_per_week=step.days_per_week,
        workout_type=step.workout_type,
        level=WorkoutLevel(level),
        equipment=frozenset(equipment),
    )


def toggle_equipment(step: WizardStep, item: str) -> SelectEquipment:
    _expect(step, SelectEquipment, "toggle equipment")
    return replace(step, equipment=step.equipment ^ {item})


def go_back(step: WizardStep) -> WizardStep:
    """Return to the previous step, discarding the choices made on the one being left."""
    if isinstance(step, SelectEquipment):
        return SelectLevel(
            flow=step.flow,
            days_per_week=step.days_per_week,
            workout_type=step.workout_type,
        )
    if isinstance(step, SelectLevel):
        return SelectTypeOrDays(flow=step.flow)
    if isinstance(step, SelectTypeOrDays):
        return SelectFlow()
    return step


def draft_of(step: WizardStep) -> WorkoutDraft:
    """The choices committed so far."""
    if isinstance(step, SelectEquipment):
        return WorkoutDraft(
            workout_type=step.workout_type,
            days_per_week=step.days_per_week,
            level=step.level,
            equipment=step.equipment,
        )
    if isinstance(step, SelectLevel):
        return WorkoutDraft(workout_type=step.workout_type, days_per_week=step.days_per_week)
    return WorkoutDraft()


def build_request(step: WizardStep) -> GuidedWorkoutRequest:
    """Turn a finished wizard into a generation request."""
    draft = draft_of(step)
    if not isinstance(step, SelectEquipment) or not draft.is_submittable():
        raise WizardError("Choose a level and at least one piece of equipment first")
    return GuidedWorkoutRequest(
        level=step.level,
        equipment=tuple(sorted(step.equipment)),
        days_per_week=step.days_per_week,
        workout_type=step.workout_type,
    )


class GuidedWizard:
    """Stateful wizard for one user.

    Must be driven from inside a running event loop: entering the first step
    schedules a preference reload, and entering the level step schedules the
    equipment catalog fetch. Each preference reload carries a generation
    token; a response whose token is no longer current is discarded.
    """

    def __init__(
        self,
        session: UserSession,
        preferences: PreferenceLoader,
        catalog: EquipmentCatalog,
    ):
        self.session = session
        self.preference_loader = preferences
        self.catalog = catalog

        self.step: WizardStep = SelectFlow()
        self.preferences = Preferences()
        self.equipment_options: list[str] | None = None
        self.error: str | None = None

        self._generation = 0
        self._preference_task: asyncio.Task | None = None
        self._catalog_task: asyncio.Task | None = None

    # -- state -------------------------------------------------------------

    @property
    def draft(self) -> WorkoutDraft:
        return draft_of(self.step)

    @property
    def can_submit(self) -> bool:
        return isinstance(self.step, SelectEquipment) and self.draft.is_submittable()

    @property
    def is_loading(self) -> bool:
        """True while the level step is waiting on the equipment catalog."""
        return isinstance(self.step, SelectLevel) and self.equipment_options is None

    @property
    def suggested_level(self) -> WorkoutLevel | None:
        return self.preferences.level

    # -- transitions -------------------------------------------------------

    def start(self) -> None:
        """(Re)enter the first step and reload saved preferences."""
        self.error = None
        self.step = SelectFlow()
        self._schedule_preference_reload()

    def choose_flow(self, flow: WorkoutFlow | str) -> None:
        self.step = choose_flow(self.step, flow)

    def choose_workout_type(self, workout_type: WorkoutType | str) -> None:
        self.step = choose_workout_type(self.step, workout_type)
        self._schedule_catalog_load()

    def choose_days(self, days: int) -> None:
        self.step = choose_days(self.step, days)
        self._schedule_catalog_load()

    def choose_level(self, level: WorkoutLevel | str | None = None) -> None:
        """Pick a level, or accept the saved default when none is given."""
        if level is None:
            level = self.suggested_level
        if level is None:
            raise WizardError("No level selected and no saved default level")
        self.step = choose_level(self.step, level, self.preferences.equipment)

    def toggle_equipment(self, item: str) -> None:
        self.step = toggle_equipment(self.step, item)

    def back(self) -> None:
        self.error = None
        if isinstance(self.step, SelectFlow):
            return
        self.step = go_back(self.step)
        if isinstance(self.step, SelectFlow):
            self._schedule_preference_reload()

    def submit(self) -> GuidedWorkoutRequest:
        request = build_request(self.step)
        logger.info(
            "wizard_submitted",
            user_id=self.session.user_id,
            days_per_week=request.days_per_week,
            workout_type=request.workout_type.value if request.workout_type else None,
            level=request.level.value,
        )
        return request

    # -- side effects ------------------------------------------------------

    async def settle(self) -> None:
        """Wait for any in-flight preference or catalog load."""
        pending = [t for t in (self._preference_task, self._catalog_task) if t and not t.done()]
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

    def close(self) -> None:
        """Cancel any in-flight preference or catalog load."""
        for task in (self._preference_task, self._catalog_task):
            if task is not None and not task.done():
                task.cancel()

    async def reload_preferences(self) -> bool:
        """Load saved preferences now. Returns False if a newer load superseded this one."""
        self._generation += 1
        return await self._load_preferences(self._generation)

    async def load_catalog(self) -> list[str]:
        if self.equipment_options is None:
            self.equipment_options = await self.catalog.load()
        return self.equipment_options

    def _schedule_preference_reload(self) -> None:
        self._generation += 1
        if self._preference_task is not None and not self._preference_task.done():
            self._preference_task.cancel()
        self._preference_task = asyncio.create_task(self._load_preferences(self._generation))

    def _schedule_catalog_load(self) -> None:
        if self.equipment_options is not None:
            return
        if self._catalog_task is not None and not self._catalog_task.done():
            return
        self._catalog_task = asyncio.create_task(self.load_catalog())

    async def _load_preferences(self, token: int) -> bool:
        preferences = await self.preference_loader.load(self.session)
        if token != self._generation:
            logger.debug(
                "stale_preferences_discarded",
                user_id=self.session.user_id,
                token=token,
                current=self._generation,
            )
            return False
        self.preferences = preferences
        return True
