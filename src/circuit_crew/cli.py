"""CLI entry point for circuit-crew."""

from pathlib import Path

import click

from .commands import exercises, history, init, people, serve, session, settings, stats
from .commands.base import DEFAULT_OWNER, AppConfig
from .db.engine import DATA_DIR
from .logger import setup_logger


@click.group()
@click.version_option(version="0.1.0", prog_name="circuit-crew")
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=DATA_DIR,
    envvar="CIRCUIT_CREW_DATA_DIR",
    show_default=True,
    help="Directory holding the database",
)
@click.option("--owner", default=DEFAULT_OWNER, envvar="CIRCUIT_CREW_OWNER", help="Whose data to use")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default="WARNING",
    envvar="CIRCUIT_CREW_LOG_LEVEL",
    help="Log level for stderr",
)
@click.option("--log-file", default=None, envvar="CIRCUIT_CREW_LOG_FILE", help="Also write debug logs to this file")
@click.pass_context
def main(ctx: click.Context, data_dir: Path, owner: str, log_level: str, log_file: str | None):
    """circuit-crew: dumbbell circuit sessions for small groups.

    Builds a varied circuit from your exercise library, runs it with a
    spoken countdown and keeps everyone's streaks.

    Example usage:

        # Initialize the project
        circuit-crew init

        # Add the group
        circuit-crew people add "Alex"

        # Preview and run a session
        circuit-crew session compose
        circuit-crew session start

        # See who is on a streak
        circuit-crew stats
    """
    setup_logger(level=log_level, log_file=log_file)
    ctx.obj = AppConfig(data_dir=data_dir, owner_id=owner, log_level=log_level.upper(), log_file=log_file)


# Register commands
main.add_command(init)
main.add_command(exercises)
main.add_command(people)
main.add_command(settings)
main.add_command(session)
main.add_command(history)
main.add_command(stats)
main.add_command(serve)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()
