"""Participant commands."""

import click

from .base import (
    async_command,
    echo_error,
    echo_info,
    echo_success,
    ensure_initialized,
    format_table,
    open_workspace,
)


@click.group()
@click.pass_context
def people(ctx):
    """Manage the people who train together."""
    ensure_initialized(ctx)


@people.command(name="list")
@click.pass_context
@async_command
async def list_people(ctx):
    """List all participants."""
    workspace = await open_workspace(ctx)
    roster = workspace.roster.list()

    if not roster:
        echo_info("Nobody here yet. Add someone with 'circuit-crew people add NAME'")
        return

    rows = [
        [p.display_name, p.nickname or "", p.created_at.strftime("%Y-%m-%d"), p.id[:8]]
        for p in roster
    ]
    click.echo()
    click.echo(format_table(["Name", "Nickname", "Added", "ID"], rows))


@people.command()
@click.argument("name")
@click.option("--nickname", "-n", default=None, help="Optional nickname")
@click.pass_context
@async_command
async def add(ctx, name: str, nickname: str | None):
    """Add a participant."""
    workspace = await open_workspace(ctx)
    try:
        person = workspace.roster.add_person(name, nickname)
    except ValueError as e:
        echo_error(str(e))
        ctx.exit(1)

    await workspace.flush()
    echo_success(f"Added {person.label}")


@people.command()
@click.argument("name_or_id")
@click.pass_context
@async_command
async def remove(ctx, name_or_id: str):
    """Remove a participant (their past sessions stay in history)."""
    workspace = await open_workspace(ctx)
    person = workspace.roster.find(name_or_id)

    if not person:
        echo_error(f"Person '{name_or_id}' not found.")
        ctx.exit(1)

    workspace.roster.remove_person(person.id)
    await workspace.flush()
    echo_success(f"Removed {person.display_name}")
