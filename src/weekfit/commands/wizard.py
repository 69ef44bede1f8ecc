"""Interactive guided workout wizard."""

import click
import questionary
from questionary import Style

from ..data.equipment_catalog import EquipmentCatalog, equipment_label
from ..errors import WizardError
from ..models.workout import (
    SPLIT_DESCRIPTIONS,
    WORKOUT_LEVEL_CONFIGS,
    WorkoutFlow,
    WorkoutType,
)
from ..services.generator import WorkoutGenerator
from ..services.preferences import PreferenceLoader
from ..services.wizard import (
    MULTI_DAY_OPTIONS,
    STEP_COUNT,
    GuidedWizard,
    SelectEquipment,
    SelectFlow,
    SelectLevel,
    SelectTypeOrDays,
)
from .base import async_command, echo_error, echo_info, echo_success, ensure_initialized, get_state

custom_style = Style(
    [
        ("qmark", "fg:#2563eb bold"),
        ("question", "bold"),
        ("answer", "fg:#16a34a bold"),
        ("pointer", "fg:#2563eb bold"),
        ("highlighted", "fg:#2563eb bold"),
        ("selected", "fg:#16a34a"),
        ("instruction", ""),
        ("text", ""),
    ]
)

BACK = "__back__"


def _with_back(choices: list, step) -> list:
    if isinstance(step, SelectFlow):
        return choices
    return choices + [questionary.Separator(), questionary.Choice("<- Back", BACK)]


async def _ask_step(wizard: GuidedWizard):
    """Prompt for the current step. Returns the answer, ``BACK``, or None if cancelled."""
    step = wizard.step
    click.echo()
    click.echo(click.style(f"Step {step.index + 1} of {STEP_COUNT}: {step.title}", bold=True))

    if isinstance(step, SelectFlow):
        return await questionary.select(
            "What would you like to create?",
            choices=[
                questionary.Choice("Single workout", WorkoutFlow.SINGLE),
                questionary.Choice("Weekly plan", WorkoutFlow.MULTI),
            ],
            style=custom_style,
        ).ask_async()

    if isinstance(step, SelectTypeOrDays) and step.flow == WorkoutFlow.SINGLE:
        choices = [
            questionary.Choice(f"{wt.label} - {wt.description}", wt) for wt in WorkoutType
        ]
        return await questionary.select(
            "Pick a focus:", choices=_with_back(choices, step), style=custom_style
        ).ask_async()

    if isinstance(step, SelectTypeOrDays):
        choices = [
            questionary.Choice(f"{days} days - {SPLIT_DESCRIPTIONS[days]}", days)
            for days in MULTI_DAY_OPTIONS
        ]
        return await questionary.select(
            "How many days per week?", choices=_with_back(choices, step), style=custom_style
        ).ask_async()

    if isinstance(step, SelectLevel):
        await wizard.settle()
        choices = []
        for level, config in WORKOUT_LEVEL_CONFIGS.items():
            saved = " (saved)" if level == wizard.suggested_level else ""
            choices.append(questionary.Choice(f"{level.label}{saved} - {config.description}", level))
        return await questionary.select(
            "Your training level:",
            choices=_with_back(choices, step),
            default=wizard.suggested_level,
            style=custom_style,
        ).ask_async()

    # SelectEquipment
    options = await wizard.load_catalog()
    choices = [
        questionary.Choice(equipment_label(item), item, checked=item in step.equipment)
        for item in options
    ]
    selected = await questionary.checkbox(
        "What equipment do you have? (space to toggle, enter to continue)",
        choices=choices,
        style=custom_style,
    ).ask_async()
    if selected is None:
        return None
    if not selected:
        go_back = await questionary.confirm(
            "No equipment selected. Go back to the level step?",
            default=False,
            style=custom_style,
        ).ask_async()
        return BACK if go_back else frozenset()
    return frozenset(selected)


def _apply(wizard: GuidedWizard, answer) -> None:
    step = wizard.step
    if answer == BACK:
        wizard.back()
    elif isinstance(step, SelectFlow):
        wizard.choose_flow(answer)
    elif isinstance(step, SelectTypeOrDays) and step.flow == WorkoutFlow.SINGLE:
        wizard.choose_workout_type(answer)
    elif isinstance(step, SelectTypeOrDays):
        wizard.choose_days(answer)
    elif isinstance(step, SelectLevel):
        wizard.choose_level(answer)
    else:
        for item in step.equipment.symmetric_difference(answer):
            wizard.toggle_equipment(item)


@click.command()
@click.pass_context
@async_command
async def wizard(ctx: click.Context):
    """Build workouts step by step.

    Choose a single workout or a weekly split, your level and your equipment.
    Saved profile defaults are offered as the starting choices.
    """
    ensure_initialized(ctx)
    state = get_state(ctx)
    backend = state.backend

    guided = GuidedWizard(
        state.session,
        PreferenceLoader(backend.profiles),
        EquipmentCatalog(backend.exercises),
    )
    guided.start()
    await guided.settle()

    while True:
        answer = await _ask_step(guided)
        if answer is None:
            echo_info("Wizard cancelled")
            return
        # Saved equipment only pre-fills the checkbox; submit after it is answered
        answered_equipment = isinstance(guided.step, SelectEquipment) and answer != BACK
        try:
            _apply(guided, answer)
        except WizardError as e:
            echo_error(str(e))
            continue

        if answered_equipment:
            if guided.can_submit:
                break
            echo_error("Select at least one piece of equipment")

    request = guided.submit()
    generator = WorkoutGenerator(backend.exercises, backend.workouts)
    result = await generator.generate(state.session, request)
    if not result.ok:
        echo_error(result.error)
        ctx.exit(1)

    echo_success(f"Created {len(result.value)} workout(s)")
    click.echo("View them with 'weekfit workouts list' or 'weekfit serve'.")
