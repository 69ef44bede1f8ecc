"""CLI entry point for weekfit."""

import click

from . import __version__
from .commands import init, profile, serve, stats, wizard, workouts
from .commands.base import CliState
from .config import get_settings
from .logging_config import configure_logging
from .session import UserSession


@click.group()
@click.version_option(version=__version__, prog_name="weekfit")
@click.option("--user", "user_id", default=None, help="User id to act as (default: WEEKFIT_DEFAULT_USER_ID)")
@click.pass_context
def main(ctx: click.Context, user_id: str | None):
    """weekfit: guided weekly workout planner.

    Example usage:

        # Initialize the database
        weekfit init

        # Build a week of workouts
        weekfit wizard

        # Review the week
        weekfit workouts list
        weekfit stats
    """
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_json)
    ctx.obj = CliState(settings, UserSession(user_id or settings.default_user_id))


main.add_command(init)
main.add_command(serve)
main.add_command(wizard)
main.add_command(workouts)
main.add_command(stats)
main.add_command(profile)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()
