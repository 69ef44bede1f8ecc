"""Tests for the guided workout wizard."""

import asyncio

import pytest

from weekfit.errors import WizardError
from weekfit.models.user_profile import Preferences
from weekfit.models.workout import WorkoutFlow, WorkoutLevel, WorkoutType
from weekfit.services.wizard import (
    GuidedWizard,
    SelectEquipment,
    SelectFlow,
    SelectLevel,
    SelectTypeOrDays,
    build_request,
    choose_days,
    choose_flow,
    choose_level,
    choose_workout_type,
    draft_of,
    go_back,
    toggle_equipment,
)
from weekfit.session import UserSession


class StaticPreferences:
    """Preference loader returning fixed defaults."""

    def __init__(self, preferences: Preferences):
        self.preferences = preferences
        self.calls = 0

    async def load(self, session):
        self.calls += 1
        return self.preferences


class GatedPreferences:
    """Preference loader whose responses are released by the test, in any order."""

    def __init__(self):
        self.pending: list[list] = []

    async def load(self, session):
        gate = asyncio.Event()
        slot = [gate, Preferences()]
        self.pending.append(slot)
        await gate.wait()
        return slot[1]

    def release(self, index: int, preferences: Preferences) -> None:
        self.pending[index][1] = preferences
        self.pending[index][0].set()


class StaticCatalog:
    def __init__(self, items=("barbell", "dumbbell", "bodyweight")):
        self.items = list(items)

    async def load(self):
        return self.items


def _equipment_step(equipment=frozenset()) -> SelectEquipment:
    step = choose_days(choose_flow(SelectFlow(), WorkoutFlow.MULTI), 3)
    return choose_level(step, WorkoutLevel.BEGINNER, frozenset(equipment))


class TestTransitions:
    """Tests for the pure step transitions."""

    def test_single_flow_fixes_one_day(self):
        """A single workout is one day per week with the chosen focus."""
        step = choose_flow(SelectFlow(), WorkoutFlow.SINGLE)
        step = choose_workout_type(step, WorkoutType.PUSH)

        assert isinstance(step, SelectLevel)
        assert step.days_per_week == 1
        assert step.workout_type == WorkoutType.PUSH

    def test_multi_flow_has_no_workout_type(self):
        step = choose_days(choose_flow(SelectFlow(), "multi"), 4)

        assert step.days_per_week == 4
        assert step.workout_type is None

    def test_days_must_be_offered_option(self):
        step = choose_flow(SelectFlow(), WorkoutFlow.MULTI)
        with pytest.raises(WizardError):
            choose_days(step, 6)

    def test_type_rejected_for_multi_flow(self):
        step = choose_flow(SelectFlow(), WorkoutFlow.MULTI)
        with pytest.raises(WizardError):
            choose_workout_type(step, WorkoutType.LEGS)

    def test_wrong_step_raises(self):
        with pytest.raises(WizardError):
            choose_level(SelectFlow(), WorkoutLevel.ADVANCED)
        with pytest.raises(WizardError):
            toggle_equipment(SelectFlow(), "barbell")

    def test_step_indices_are_sequential(self):
        step0 = SelectFlow()
        step1 = choose_flow(step0, WorkoutFlow.MULTI)
        step2 = choose_days(step1, 5)
        step3 = choose_level(step2, WorkoutLevel.INTERMEDIATE)

        assert [s.index for s in (step0, step1, step2, step3)] == [0, 1, 2, 3]

    def test_toggle_twice_restores_selection(self):
        """Toggling the same item twice leaves the equipment unchanged."""
        step = _equipment_step({"dumbbell"})
        once = toggle_equipment(step, "barbell")
        twice = toggle_equipment(once, "barbell")

        assert once.equipment == {"dumbbell", "barbell"}
        assert twice.equipment == step.equipment

    def test_back_from_equipment_clears_level_and_equipment(self):
        step = _equipment_step({"barbell"})
        back = go_back(step)

        assert isinstance(back, SelectLevel)
        assert back.days_per_week == 3
        assert draft_of(back).level is None
        assert draft_of(back).equipment == frozenset()

    def test_back_from_level_clears_days(self):
        step = choose_days(choose_flow(SelectFlow(), WorkoutFlow.MULTI), 3)
        back = go_back(step)

        assert back == SelectTypeOrDays(flow=WorkoutFlow.MULTI)
        assert draft_of(back).days_per_week is None

    def test_back_chain_reaches_first_step(self):
        step = _equipment_step({"barbell"})
        for _ in range(3):
            step = go_back(step)

        assert step == SelectFlow()
        assert go_back(step) == SelectFlow()

    def test_submittable_only_with_level_and_equipment(self):
        """A draft is submittable iff it has a level, equipment and a type or days."""
        empty = _equipment_step()
        ready = toggle_equipment(empty, "barbell")

        assert not draft_of(empty).is_submittable()
        assert draft_of(ready).is_submittable()
        assert not draft_of(SelectLevel(flow=WorkoutFlow.MULTI, days_per_week=3)).is_submittable()

    def test_build_request(self):
        step = toggle_equipment(_equipment_step({"dumbbell"}), "barbell")
        request = build_request(step)

        assert request.level == WorkoutLevel.BEGINNER
        assert request.equipment == ("barbell", "dumbbell")
        assert request.days_per_week == 3
        assert request.workout_type is None

    def test_build_request_without_equipment_fails(self):
        with pytest.raises(WizardError):
            build_request(_equipment_step())


class TestGuidedWizard:
    """Tests for the stateful wizard controller."""

    def test_start_loads_preferences(self):
        saved = Preferences(level=WorkoutLevel.ADVANCED, equipment=frozenset({"barbell"}))
        loader = StaticPreferences(saved)

        async def run():
            wizard = GuidedWizard(UserSession("u1"), loader, StaticCatalog())
            wizard.start()
            await wizard.settle()
            return wizard

        wizard = asyncio.run(run())

        assert loader.calls == 1
        assert wizard.suggested_level == WorkoutLevel.ADVANCED
        assert wizard.draft.level is None

    def test_saved_defaults_seed_level_and_equipment(self):
        saved = Preferences(level=WorkoutLevel.ADVANCED, equipment=frozenset({"barbell"}))

        async def run():
            wizard = GuidedWizard(UserSession("u1"), StaticPreferences(saved), StaticCatalog())
            wizard.start()
            await wizard.settle()
            wizard.choose_flow(WorkoutFlow.SINGLE)
            wizard.choose_workout_type(WorkoutType.LEGS)
            loading = wizard.is_loading
            await wizard.settle()
            wizard.choose_level()
            return wizard, loading

        wizard, loading = asyncio.run(run())

        assert loading is True
        assert wizard.equipment_options == ["barbell", "dumbbell", "bodyweight"]
        assert wizard.draft.level == WorkoutLevel.ADVANCED
        assert wizard.draft.equipment == {"barbell"}
        assert wizard.can_submit

    def test_choose_level_without_saved_default_fails(self):
        async def run():
            wizard = GuidedWizard(UserSession("u1"), StaticPreferences(Preferences()), StaticCatalog())
            wizard.start()
            await wizard.settle()
            wizard.choose_flow(WorkoutFlow.MULTI)
            wizard.choose_days(3)
            with pytest.raises(WizardError):
                wizard.choose_level()

        asyncio.run(run())

    def test_back_to_first_step_reloads_preferences(self):
        loader = StaticPreferences(Preferences())

        async def run():
            wizard = GuidedWizard(UserSession("u1"), loader, StaticCatalog())
            wizard.start()
            await wizard.settle()
            wizard.choose_flow(WorkoutFlow.MULTI)
            wizard.back()
            await wizard.settle()
            return wizard

        wizard = asyncio.run(run())

        assert isinstance(wizard.step, SelectFlow)
        assert loader.calls == 2

    def test_stale_preference_response_is_discarded(self):
        """An older reload finishing after a newer one never overwrites it."""
        loader = GatedPreferences()
        older = Preferences(level=WorkoutLevel.BEGINNER)
        newer = Preferences(level=WorkoutLevel.ADVANCED)

        async def run():
            wizard = GuidedWizard(UserSession("u1"), loader, StaticCatalog())
            first = asyncio.create_task(wizard.reload_preferences())
            await asyncio.sleep(0)
            second = asyncio.create_task(wizard.reload_preferences())
            await asyncio.sleep(0)

            loader.release(1, newer)
            second_applied = await second
            loader.release(0, older)
            first_applied = await first
            return wizard, first_applied, second_applied

        wizard, first_applied, second_applied = asyncio.run(run())

        assert second_applied is True
        assert first_applied is False
        assert wizard.preferences == newer

    def test_submit_requires_equipment(self):
        async def run():
            wizard = GuidedWizard(UserSession("u1"), StaticPreferences(Preferences()), StaticCatalog())
            wizard.start()
            wizard.choose_flow(WorkoutFlow.MULTI)
            wizard.choose_days(5)
            wizard.choose_level(WorkoutLevel.INTERMEDIATE)
            with pytest.raises(WizardError):
                wizard.submit()
            wizard.toggle_equipment("dumbbell")
            request = wizard.submit()
            await wizard.settle()
            return request

        request = asyncio.run(run())

        assert request.days_per_week == 5
        assert request.equipment == ("dumbbell",)
