"""Scheduled workout commands."""

from datetime import date

import click

from ..services.calendar import WorkoutCalendar, current_week_start, next_week
from ..utils.dates import format_day, start_of_week
from .base import (
    async_command,
    echo_error,
    echo_info,
    echo_success,
    ensure_initialized,
    format_table,
    get_state,
)


def _calendar(ctx: click.Context) -> WorkoutCalendar:
    state = get_state(ctx)
    return WorkoutCalendar(state.session, state.backend.workouts)


def _week_option(value: str | None) -> date:
    if not value:
        return current_week_start()
    try:
        return start_of_week(date.fromisoformat(value))
    except ValueError:
        raise click.BadParameter(f"'{value}' is not a YYYY-MM-DD date", param_hint="--week")


def _report(ctx: click.Context, result, message: str) -> None:
    if not result.ok:
        echo_error(result.error)
        ctx.exit(1)
    echo_success(message)


@click.group()
@click.pass_context
def workouts(ctx):
    """View and manage scheduled workouts."""
    ensure_initialized(ctx)


@workouts.command(name="list")
@click.option("--week", "-w", help="Any date in the week to show (default: this week)")
@click.option("--favorites", "-f", is_flag=True, help="List favorite workouts instead")
@click.pass_context
@async_command
async def list_workouts(ctx, week: str | None, favorites: bool):
    """List a week's workouts, Sunday first."""
    calendar = _calendar(ctx)

    if favorites:
        items = await calendar.load_favorites()
        title = "Favorite workouts"
    else:
        week_start = _week_option(week)
        items = await calendar.load_week(week_start)
        title = f"Week of {format_day(week_start, '%B %d, %Y')}"

    click.echo()
    click.echo(click.style(title, bold=True))

    if not items:
        echo_info("No workouts found. Create some with 'weekfit wizard'")
        return

    headers = ["ID", "Day", "Name", "Exercises", "Done", "Fav"]
    rows = [
        [
            str(w.id),
            format_day(w.scheduled_date),
            w.display_name[:30] + "..." if len(w.display_name) > 30 else w.display_name,
            str(w.exercise_count),
            "yes" if w.completed else "",
            "*" if w.is_favorite else "",
        ]
        for w in items
    ]

    click.echo()
    click.echo(format_table(headers, rows))
    click.echo()
    click.echo(f"Total: {len(items)} workout(s)")


@workouts.command()
@click.argument("workout_id", type=int)
@click.pass_context
@async_command
async def show(ctx, workout_id: int):
    """Show a workout's exercises and logged sets."""
    workout = await _calendar(ctx).get(workout_id)
    if not workout:
        echo_error(f"Workout ID {workout_id} not found")
        ctx.exit(1)

    click.echo()
    click.echo("=" * 50)
    click.echo(f"{workout.display_name} (ID: {workout.id})")
    click.echo("=" * 50)
    click.echo(f"Scheduled: {format_day(workout.scheduled_date, '%A, %B %d')}")
    click.echo(f"Status: {'completed' if workout.completed else 'planned'}")
    click.echo()
    for ex in workout.exercises:
        best = f", best {ex.best_weight} lbs" if ex.best_weight else ""
        click.echo(f"  [{ex.id}] {ex.exercise_name}: {ex.sets} x {ex.reps}, rest {ex.rest_seconds}s{best}")
        for s in ex.logged_sets:
            weight = f" @ {s.weight_lbs} lbs" if s.weight_lbs else ""
            click.echo(f"      set {s.set_number}: {s.reps} reps{weight}")


@workouts.command()
@click.argument("workout_id", type=int)
@click.argument("name")
@click.pass_context
@async_command
async def rename(ctx, workout_id: int, name: str):
    """Give a workout a custom name."""
    result = await _calendar(ctx).rename(workout_id, name)
    _report(ctx, result, f"Workout {workout_id} renamed to '{name.strip()}'")


@workouts.command()
@click.argument("workout_id", type=int)
@click.pass_context
@async_command
async def favorite(ctx, workout_id: int):
    """Toggle a workout's favorite flag."""
    calendar = _calendar(ctx)
    workout = await calendar.get(workout_id)
    if not workout:
        echo_error(f"Workout ID {workout_id} not found")
        ctx.exit(1)

    result = await calendar.toggle_favorite(workout)
    _report(ctx, result, "Added to favorites" if result.value else "Removed from favorites")


@workouts.command()
@click.argument("workout_id", type=int)
@click.option("--undo", is_flag=True, help="Mark the workout as not completed")
@click.pass_context
@async_command
async def complete(ctx, workout_id: int, undo: bool):
    """Mark a workout as completed."""
    result = await _calendar(ctx).set_completed(workout_id, not undo)
    _report(ctx, result, f"Workout {workout_id} marked {'incomplete' if undo else 'complete'}")


@workouts.command()
@click.argument("workout_id", type=int)
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
@click.pass_context
@async_command
async def delete(ctx, workout_id: int, yes: bool):
    """Delete a workout and its logged sets."""
    calendar = _calendar(ctx)
    workout = await calendar.get(workout_id)
    if not workout:
        echo_error(f"Workout ID {workout_id} not found")
        ctx.exit(1)

    if not yes and not click.confirm(f"Delete '{workout.display_name}'?"):
        echo_info("Cancelled")
        return

    result = await calendar.delete(workout_id)
    _report(ctx, result, f"Deleted workout {workout_id}")


@workouts.command("copy-week")
@click.option("--week", "-w", help="Any date in the week to copy (default: this week)")
@click.pass_context
@async_command
async def copy_week(ctx, week: str | None):
    """Copy a week's workouts into the following week."""
    week_start = _week_option(week)
    result = await _calendar(ctx).copy_week(week_start)
    _report(
        ctx,
        result,
        f"Copied {len(result.value or [])} workout(s) to the week of {format_day(next_week(week_start))}",
    )


@workouts.command("log-set")
@click.argument("workout_exercise_id", type=int)
@click.option("--reps", "-r", type=int, required=True, help="Repetitions performed")
@click.option("--weight", "-w", type=float, default=None, help="Weight in lbs")
@click.pass_context
@async_command
async def log_set(ctx, workout_exercise_id: int, reps: int, weight: float | None):
    """Log a set against an exercise in a workout (see 'workouts show' for ids)."""
    result = await _calendar(ctx).log_set(workout_exercise_id, reps, weight)
    _report(ctx, result, f"Logged {reps} reps" + (f" @ {weight} lbs" if weight else ""))
