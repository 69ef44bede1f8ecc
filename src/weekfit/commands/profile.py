"""Profile commands."""

import click
import questionary

from ..data.equipment_catalog import EquipmentCatalog, equipment_label
from ..models.workout import WORKOUT_LEVEL_CONFIGS
from ..services.profile_editor import ProfileEditor, ProfileService
from .base import async_command, echo_error, echo_success, ensure_initialized, get_state
from .wizard import custom_style


def _service(ctx: click.Context) -> ProfileService:
    state = get_state(ctx)
    backend = state.backend
    return ProfileService(state.session, backend.profiles, backend.avatars)


@click.group()
@click.pass_context
def profile(ctx):
    """View and edit your profile."""
    ensure_initialized(ctx)


@profile.command()
@click.pass_context
@async_command
async def show(ctx):
    """Display your profile and workout defaults."""
    user = await _service(ctx).load()
    if user is None:
        echo_error("Your profile could not be loaded")
        ctx.exit(1)

    click.echo()
    click.echo(click.style(user.full_name or "Unnamed athlete", bold=True))
    click.echo("=" * 40)
    click.echo(f"Date of birth:  {user.date_of_birth or '-'}")
    click.echo(f"Height:         {str(user.height_inches) + ' in' if user.height_inches else '-'}")
    click.echo(f"Weight:         {f'{user.weight_lbs:g} lbs' if user.weight_lbs else '-'}")
    click.echo(f"Default level:  {user.default_level.label if user.default_level else 'Not set'}")
    equipment = ", ".join(equipment_label(e) for e in user.default_equipment)
    click.echo(f"Equipment:      {equipment or 'Not set'}")
    if user.avatar_url:
        click.echo(f"Avatar:         {user.avatar_url}")


@profile.command()
@click.option("--avatar", type=click.Path(exists=True, dir_okay=False), help="Upload an avatar image")
@click.pass_context
@async_command
async def edit(ctx, avatar: str | None):
    """Edit your profile interactively."""
    service = _service(ctx)
    user = await service.load()
    if user is None:
        echo_error("Your profile could not be loaded")
        ctx.exit(1)

    editor = ProfileEditor(user, service.save, service.change_avatar)

    if avatar:
        with open(avatar, "rb") as f:
            content = f.read()
        result = await editor.upload_avatar(avatar, content)
        if not result.ok:
            echo_error(result.error)
            ctx.exit(1)
        echo_success(f"Avatar uploaded to {result.value}")
        return

    form = editor.begin_edit()
    options = await EquipmentCatalog(get_state(ctx).backend.exercises).load()

    while True:
        form.first_name = await questionary.text(
            "First name:", default=form.first_name, style=custom_style
        ).ask_async()
        if form.first_name is None:
            editor.cancel()
            return
        form.last_name = await questionary.text(
            "Last name:", default=form.last_name, style=custom_style
        ).ask_async() or ""
        form.date_of_birth = await questionary.text(
            "Date of birth (YYYY-MM-DD, blank to skip):",
            default=form.date_of_birth,
            style=custom_style,
        ).ask_async() or ""
        form.height_inches = await questionary.text(
            "Height in inches (blank to skip):", default=form.height_inches, style=custom_style
        ).ask_async() or ""
        form.weight_lbs = await questionary.text(
            "Weight in lbs (blank to skip):", default=form.weight_lbs, style=custom_style
        ).ask_async() or ""
        form.default_level = await questionary.select(
            "Default training level:",
            choices=[
                questionary.Choice(level.label, level.value) for level in WORKOUT_LEVEL_CONFIGS
            ],
            default=form.default_level,
            style=custom_style,
        ).ask_async() or form.default_level
        chosen = await questionary.checkbox(
            "Default equipment:",
            choices=[
                questionary.Choice(
                    equipment_label(item), item, checked=item in form.default_equipment
                )
                for item in options
            ],
            style=custom_style,
        ).ask_async()
        if chosen is not None:
            form.default_equipment = chosen

        result = await editor.save()
        if result.ok:
            echo_success("Profile saved")
            return

        echo_error(result.error)
        if not await questionary.confirm("Try again?", default=True, style=custom_style).ask_async():
            editor.cancel()
            return
