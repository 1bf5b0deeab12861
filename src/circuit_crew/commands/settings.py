"""Session settings commands."""

import click

from .base import async_command, echo_error, echo_success, ensure_initialized, open_workspace


@click.group()
@click.pass_context
def settings(ctx):
    """Show or change the default session settings."""
    ensure_initialized(ctx)


@settings.command()
@click.pass_context
@async_command
async def show(ctx):
    """Show the current session settings."""
    workspace = await open_workspace(ctx)
    current = workspace.builder.settings

    click.echo()
    click.echo(f"Exercise duration: {current.exercise_duration_sec}s")
    click.echo(f"Rest duration:     {current.rest_duration_sec}s")
    click.echo(f"Extreme duration:  {current.extreme_duration_sec}s")
    click.echo(f"Extreme rounds:    {current.extreme_count}")


@settings.command(name="set")
@click.option("--exercise", "exercise_duration_sec", type=int, help="Exercise duration (10-120 s)")
@click.option("--rest", "rest_duration_sec", type=int, help="Rest duration (3-30 s)")
@click.option("--extreme", "extreme_duration_sec", type=int, help="Extreme round duration (10-180 s)")
@click.option("--extreme-count", "extreme_count", type=int, help="Number of extreme rounds (0-10)")
@click.pass_context
@async_command
async def set_settings(ctx, **options):
    """Change one or more session settings."""
    workspace = await open_workspace(ctx)
    changes = {k: v for k, v in options.items() if v is not None}

    if not changes:
        echo_error("Nothing to change. See 'circuit-crew settings set --help'.")
        ctx.exit(1)

    try:
        workspace.builder.update_settings(**changes)
    except ValueError as e:
        echo_error(str(e))
        ctx.exit(1)

    await workspace.flush()
    echo_success("Settings saved")
