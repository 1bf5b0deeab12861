"""Initialize project command."""

import click

from ..db import init_db
from .base import async_command, echo_info, echo_success, get_config, open_workspace


@click.command()
@click.pass_context
@async_command
async def init(ctx: click.Context):
    """Initialize the circuit-crew database and exercise library.

    Creates the data directory, the SQLite schema and, for a new owner,
    the built-in dumbbell circuit library.
    """
    config = get_config(ctx)
    echo_info(f"Initializing circuit-crew in {config.data_dir}")

    await init_db(config.db_path)
    echo_success("Database initialized")

    workspace = await open_workspace(ctx, seed_defaults=True)
    await workspace.flush()
    echo_success(f"Exercise library ready ({len(workspace.library.list())} exercises)")

    click.echo()
    click.echo("Next steps:")
    click.echo("  1. Add the people who train with you:")
    click.echo('     circuit-crew people add "Alex"')
    click.echo()
    click.echo("  2. Run a session:")
    click.echo("     circuit-crew session start")
