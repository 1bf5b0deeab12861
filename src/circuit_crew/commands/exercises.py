"""Exercise library commands."""

import click

from ..models.exercises import Exercise
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
def exercises(ctx):
    """Manage the exercise library."""
    ensure_initialized(ctx)


@exercises.command(name="list")
@click.pass_context
@async_command
async def list_exercises(ctx):
    """List all exercises in the library."""
    workspace = await open_workspace(ctx)
    library = workspace.library.list()

    if not library:
        echo_info("Library is empty. Add one with 'circuit-crew exercises add'")
        return

    headers = ["Name", "ROM cm", "Reps/40s", "DBs", "Vertical", "Floor", "ID"]
    rows = [
        [
            ex.name,
            f"{ex.rom_cm:g}",
            f"{ex.reps_per_40s:g}",
            str(ex.dumbbells_used),
            f"{ex.vertical_factor:.2f}",
            "yes" if ex.is_floor else "",
            ex.id[:8],
        ]
        for ex in library
    ]

    click.echo()
    click.echo(format_table(headers, rows))
    click.echo()
    click.echo(f"Total: {len(library)} exercise(s)")


@exercises.command()
@click.argument("name")
@click.option("--rom", "rom_cm", type=click.FloatRange(min=0), required=True, help="Range of motion per rep (cm)")
@click.option("--reps", "reps_per_40s", type=click.FloatRange(min=0), required=True, help="Reps in 40 seconds")
@click.option("--dumbbells", type=click.IntRange(1, 2), default=2, show_default=True)
@click.option("--vertical", type=click.FloatRange(0, 1), default=0.5, show_default=True, help="Vertical fraction of the movement")
@click.option("--floor", "is_floor", is_flag=True, help="Performed on the floor")
@click.pass_context
@async_command
async def add(ctx, name: str, rom_cm: float, reps_per_40s: float, dumbbells: int, vertical: float, is_floor: bool):
    """Add an exercise to the library."""
    workspace = await open_workspace(ctx)

    if workspace.library.find(name):
        echo_error(f"Exercise '{name}' already exists.")
        ctx.exit(1)

    exercise = Exercise(
        name=name,
        rom_cm=rom_cm,
        reps_per_40s=reps_per_40s,
        dumbbells_used=dumbbells,
        vertical_factor=vertical,
        is_floor=is_floor,
    )
    workspace.library.add(exercise)
    await workspace.flush()
    echo_success(f"Added '{name}'")


@exercises.command()
@click.argument("name_or_id")
@click.pass_context
@async_command
async def remove(ctx, name_or_id: str):
    """Remove an exercise from the library.

    Sessions already recorded keep their own copy of the exercise.
    """
    workspace = await open_workspace(ctx)
    exercise = workspace.library.find(name_or_id)

    if not exercise:
        echo_error(f"Exercise '{name_or_id}' not found.")
        ctx.exit(1)

    workspace.library.remove(exercise.id)
    await workspace.flush()
    echo_success(f"Removed '{exercise.name}'")
