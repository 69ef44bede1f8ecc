"""Weekly stats command."""

import json

import click

from ..services.stats import StatsAggregator
from ..utils.dates import format_day
from .base import async_command, ensure_initialized, get_state


@click.command()
@click.option("--json", "as_json", is_flag=True, help="Print the stats as JSON")
@click.pass_context
@async_command
async def stats(ctx: click.Context, as_json: bool):
    """Show this week's workout summary."""
    ensure_initialized(ctx)
    state = get_state(ctx)

    snapshot = await StatsAggregator(state.session, state.backend.workouts).load()

    if as_json:
        click.echo(json.dumps(snapshot.to_dict(), indent=2))
        return

    click.echo()
    click.echo(click.style("This Week", bold=True))
    click.echo("=" * 40)
    click.echo(f"Workouts:    {snapshot.completed_workouts} / {snapshot.total_workouts} completed")
    click.echo(f"Completion:  {snapshot.completion_label}")
    click.echo(f"Exercises:   {snapshot.total_exercises}")
    click.echo(f"Streak:      {snapshot.streak_days} day(s)")

    if snapshot.personal_records:
        click.echo()
        click.echo(click.style("Personal Records", bold=True))
        for pr in snapshot.personal_records:
            click.echo(f"  {pr.exercise}: {pr.weight_lbs:g} lbs")

    if snapshot.recent_workouts:
        click.echo()
        click.echo(click.style("Recent Workouts", bold=True))
        for w in snapshot.recent_workouts:
            mark = "x" if w.completed else " "
            click.echo(f"  [{mark}] {format_day(w.scheduled_date)}  {w.name}")
