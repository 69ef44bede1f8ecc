"""Web server command."""

import click

from .base import ensure_initialized, get_state


@click.command()
@click.option("--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)")
@click.option("--port", "-p", default=8000, type=int, help="Port to bind to (default: 8000)")
@click.option("--reload", is_flag=True, help="Restart on code changes (reads settings from the environment)")
@click.pass_context
def serve(ctx: click.Context, host: str, port: int, reload: bool):
    """Serve the calendar, wizard and profile pages.

    Requests without a ``weekfit_user`` cookie act as the --user given to
    the CLI, or WEEKFIT_DEFAULT_USER_ID.

        weekfit --user sam serve --port 3000
    """
    ensure_initialized(ctx)
    state = get_state(ctx)
    settings = state.settings.model_copy(update={"default_user_id": state.session.user_id})

    import uvicorn

    from ..web import create_app

    click.echo()
    click.echo(click.style("Starting weekfit web server...", fg="green"))
    click.echo(f"  Data:    {settings.data_dir}")
    click.echo(f"  User:    {settings.default_user_id}")
    click.echo(f"  Local:   http://{host}:{port}")
    click.echo()
    click.echo("Press Ctrl+C to stop the server.")

    if reload:
        uvicorn.run(
            "weekfit.web:create_app", host=host, port=port, reload=True, factory=True, log_config=None
        )
    else:
        uvicorn.run(create_app(settings), host=host, port=port, log_config=None)
