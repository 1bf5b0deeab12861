"""Web server command."""

import os

import click

from .base import ensure_initialized, get_config


@click.command()
@click.option("--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)")
@click.option("--port", "-p", default=8000, type=int, help="Port to bind to (default: 8000)")
@click.option("--reload", is_flag=True, help="Enable auto-reload for development")
@click.pass_context
def serve(ctx: click.Context, host: str, port: int, reload: bool):
    """Start the JSON API server.

    Examples:

        # Start on default port (8000)
        circuit-crew serve

        # Expose to the local network
        circuit-crew serve --host 0.0.0.0

        # Development mode with auto-reload
        circuit-crew serve --reload
    """
    ensure_initialized(ctx)

    import uvicorn

    from ..web import create_app

    config = get_config(ctx)

    click.echo()
    click.echo(click.style("Starting circuit-crew API...", fg="green"))
    click.echo()
    click.echo(f"  Local:   http://{host}:{port}")
    click.echo(f"  Docs:    http://{host}:{port}/docs")
    click.echo()
    click.echo("Press Ctrl+C to stop the server.")
    click.echo()

    if reload:
        # The reloader imports the factory in a fresh process
        os.environ["CIRCUIT_CREW_DATA_DIR"] = str(config.data_dir)
        os.environ["CIRCUIT_CREW_OWNER"] = config.owner_id
        uvicorn.run(
            "circuit_crew.web:create_app",
            host=host,
            port=port,
            reload=True,
            factory=True,
        )
        return

    app = create_app(db_path=config.db_path, owner_id=config.owner_id)
    uvicorn.run(app, host=host, port=port)
