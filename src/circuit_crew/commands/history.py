"""Session history and statistics commands."""

import click

from ..services.streaks import build_leaderboard, summarize_history
from .base import (
    async_command,
    echo_info,
    ensure_initialized,
    format_duration,
    format_table,
    open_workspace,
)


@click.command()
@click.option("--limit", "-n", type=click.IntRange(min=1), default=10, show_default=True, help="Number of sessions to show")
@click.option("--all", "show_all", is_flag=True, help="Include sessions that were not completed")
@click.pass_context
@async_command
async def history(ctx, limit: int, show_all: bool):
    """Show recent sessions, newest first."""
    ensure_initialized(ctx)
    workspace = await open_workspace(ctx)

    sessions = [s for s in workspace.builder.history if show_all or s.completed]
    if not sessions:
        echo_info("No sessions recorded yet. Run one with 'circuit-crew session start'")
        return

    recent = sorted(sessions, key=lambda s: s.date, reverse=True)[:limit]
    rows = [
        [
            s.date.strftime("%Y-%m-%d %H:%M"),
            ", ".join(s.participant_names),
            str(len(s.exercises)),
            format_duration(s.total_duration_sec),
            f"{s.total_meters:.2f}",
            f"{s.total_work_kj:.3f}",
            s.id[:8],
        ]
        for s in recent
    ]

    click.echo()
    click.echo(format_table(["Date", "People", "Exercises", "Time", "Meters", "kJ", "ID"], rows))
    if len(sessions) > limit:
        click.echo()
        click.echo(f"Showing {limit} of {len(sessions)} sessions")


@click.command()
@click.pass_context
@async_command
async def stats(ctx):
    """Show the streak leaderboard and lifetime totals."""
    ensure_initialized(ctx)
    workspace = await open_workspace(ctx)
    sessions = workspace.builder.history

    summary = summarize_history(sessions)
    click.echo()
    click.echo(click.style("Totals", bold=True))
    click.echo(f"  Sessions:  {summary.sessions}")
    click.echo(f"  Exercises: {summary.exercises}")
    click.echo(f"  Distance:  {summary.meters:.2f} m")
    click.echo(f"  Work:      {summary.work_kj:.3f} kJ")

    people = workspace.roster.list()
    if not people:
        return

    board = build_leaderboard(people, sessions)
    rows = [
        [
            str(rank),
            entry.display_name,
            str(entry.total_points),
            str(entry.total_sessions),
            str(entry.current_streak),
            str(entry.longest_streak),
            entry.last_session_date.strftime("%Y-%m-%d") if entry.last_session_date else "-",
        ]
        for rank, entry in enumerate(board, start=1)
    ]
    click.echo()
    click.echo(click.style("Leaderboard", bold=True))
    click.echo(format_table(["#", "Name", "Points", "Sessions", "Streak", "Best", "Last"], rows))
