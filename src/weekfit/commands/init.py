"""Initialize project command."""

import click

from ..db import init_db, seed_exercises
from .base import async_command, echo_info, echo_success, get_state


@click.command()
@click.pass_context
@async_command
async def init(ctx: click.Context):
    """Initialize the weekfit database.

    Creates the data directory, the SQLite schema and the exercise library,
    and a blank profile for the current user.
    """
    state = get_state(ctx)
    settings = state.settings

    echo_info(f"Initializing weekfit in {settings.data_dir}")
    settings.data_dir.mkdir(parents=True, exist_ok=True)

    await init_db(settings.db_path)
    echo_success("Database initialized")

    added = await seed_exercises(settings.db_path)
    echo_success(f"Exercise library populated ({added} new exercises)")

    await state.backend.profiles.ensure(state.session.user_id)
    echo_success(f"Profile ready for '{state.session.user_id}'")

    click.echo()
    click.echo("weekfit is ready to use!")
    click.echo()
    click.echo("Next steps:")
    click.echo("  1. Set your defaults:      weekfit profile edit")
    click.echo("  2. Build some workouts:    weekfit wizard")
    click.echo("  3. Open the web interface: weekfit serve")
