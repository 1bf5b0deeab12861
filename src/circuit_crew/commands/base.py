"""Shared CLI utilities."""

import asyncio
from dataclasses import dataclass
from functools import wraps
from pathlib import Path

import click

from ..db import get_db_path
from ..db.engine import DATA_DIR
from ..services.workspace import Workspace

DEFAULT_OWNER = "default"


@dataclass
class AppConfig:
    """Options shared by every command (set on the root group)."""

    data_dir: Path = DATA_DIR
    owner_id: str = DEFAULT_OWNER
    log_level: str = "WARNING"
    log_file: str | None = None

    @property
    def db_path(self) -> Path:
        return get_db_path(self.data_dir)


def async_command(f):
    """Decorator to run async Click commands."""

    @wraps(f)
    def wrapper(*args, **kwargs):
        return asyncio.run(f(*args, **kwargs))

    return wrapper


def get_config(ctx: click.Context) -> AppConfig:
    """Get the shared config, falling back to defaults outside the root group."""
    root = ctx.find_root()
    if isinstance(root.obj, AppConfig):
        return root.obj
    return AppConfig()


def ensure_initialized(ctx: click.Context) -> None:
    """Ensure the database is initialized."""
    db_path = get_config(ctx).db_path
    if not db_path.exists():
        click.echo(
            click.style("Error: ", fg="red")
            + "Project not initialized. Run 'circuit-crew init' first."
        )
        ctx.exit(1)


async def open_workspace(ctx: click.Context, seed_defaults: bool = False) -> Workspace:
    """Create and load the workspace for the configured owner."""
    config = get_config(ctx)
    workspace = Workspace.create(config.owner_id, db_path=config.db_path)
    return await workspace.load(seed_defaults=seed_defaults)


def echo_success(message: str) -> None:
    """Print a success message."""
    click.echo(click.style("[OK] ", fg="green") + message)


def echo_error(message: str) -> None:
    """Print an error message."""
    click.echo(click.style("[ERROR] ", fg="red") + message)


def echo_info(message: str) -> None:
    """Print an info message."""
    click.echo(click.style("[INFO] ", fg="blue") + message)


def echo_warning(message: str) -> None:
    """Print a warning message."""
    click.echo(click.style("[WARN] ", fg="yellow") + message)


def format_duration(seconds: int) -> str:
    """Format seconds as M:SS."""
    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes}:{secs:02d}"


def format_table(headers: list[str], rows: list[list[str]], padding: int = 2) -> str:
    """Format data as a simple table."""
    if not rows:
        return ""

    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(str(cell)))

    lines = ["".join(h.ljust(widths[i] + padding) for i, h in enumerate(headers)).rstrip()]
    lines.append("".join("-" * w + " " * padding for w in widths).rstrip())
    for row in rows:
        lines.append(
            "".join(str(cell).ljust(widths[i] + padding) for i, cell in enumerate(row)).rstrip()
        )

    return "\n".join(lines)
